"""Inspect model definitions derived from annotated dataclasses."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Optional

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "orm_schema").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from orm_schema import MySQLDialect, PostgresDialect, SchemaCache, SchemaConfig


@dataclass
class Author:
    __table__ = "authors"

    id: Optional[int] = field(default=None, metadata={"pk": True, "auto": True})
    email: str = field(default="", metadata={"required": True, "unique_index": True})
    display_name: Optional[str] = None


@dataclass
class Book:
    __table__ = "books"
    __schema__ = "catalog"

    # Multi-column index declarations.
    __indexes__ = [("author_id", "title")]

    id: Optional[int] = field(default=None, metadata={"auto": True, "sequence": "book_seq"})
    author_id: int = field(
        default=0,
        metadata={"fk": {"model": Author, "on_delete": "cascade", "name": "fk_book_author"}},
    )
    title: str = field(default="", metadata={"length": 200, "required": True})
    price: Decimal = field(default=Decimal("0"), metadata={"decimal": (10, 2), "default": 0})
    price_with_tax: Decimal = field(default=Decimal("0"), metadata={"compute": "price * 1.2"})
    shelf_code: str = field(default="", metadata={"belongs_to": Author, "alias": "shelf"})
    search_blob: str = field(default="", metadata={"ignore": True})


def describe(cache: SchemaCache) -> None:
    definition = cache.get_definition(Book)
    print(f"\n--- {definition.model_name} ({cache.config.dialect.name}) ---")
    print(definition.sql_select_all_from_table)
    for field_def in definition.field_definitions:
        print(
            f"{field_def.field_name:<16} type={getattr(field_def.field_type, '__name__', field_def.field_type)!s:<8} "
            f"pk={field_def.is_primary_key!s:<5} null={field_def.is_nullable!s:<5} "
            f"len={field_def.field_length} scale={field_def.scale} fk={field_def.foreign_key}"
        )
    print("ignored:", [f.name for f in definition.ignored_field_definitions])
    print("composite indexes:", definition.composite_indexes)


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    describe(SchemaCache(SchemaConfig(dialect=PostgresDialect())))
    describe(SchemaCache(SchemaConfig(dialect=MySQLDialect())))

    cache = SchemaCache()
    first = cache.get_definition(Book)
    print("\ncached instance reused:", cache.get_definition(Book) is first)
    cache.clear()
    print("rebuilt after clear is equal:", cache.get_definition(Book) == first)


if __name__ == "__main__":
    main()
