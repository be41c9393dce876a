"""Concrete SQL dialect implementations used to render model definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.definitions import ModelDefinition


class Dialect:
    """Base dialect that defines SQL identifier quoting."""

    name: str = "generic"
    quote_char: str = '"'

    def q(self, ident: str) -> str:
        """Quote SQL identifier."""

        escaped = ident.replace(self.quote_char, self.quote_char * 2)
        return f"{self.quote_char}{escaped}{self.quote_char}"

    def get_column_names(self, model_def: ModelDefinition) -> str:
        """Return the quoted, comma-separated column list of mapped fields."""

        return ", ".join(self.q(field.field_name) for field in model_def.field_definitions)

    def get_quoted_table_name(self, model_def: ModelDefinition) -> str:
        """Return the quoted table name, schema-qualified when declared."""

        table = self.q(model_def.model_name)
        if model_def.is_in_schema:
            return f"{self.q(model_def.schema)}.{table}"
        return table


class SQLiteDialect(Dialect):
    """SQLite dialect (double-quoted identifiers)."""

    name = "sqlite"
    quote_char = '"'


class PostgresDialect(Dialect):
    """PostgreSQL dialect (double-quoted identifiers)."""

    name = "postgres"
    quote_char = '"'


class MySQLDialect(Dialect):
    """MySQL dialect (backtick-quoted identifiers)."""

    name = "mysql"
    quote_char = "`"


DIALECTS: dict[str, type[Dialect]] = {
    Dialect.name: Dialect,
    SQLiteDialect.name: SQLiteDialect,
    PostgresDialect.name: PostgresDialect,
    MySQLDialect.name: MySQLDialect,
}


def dialect_for_name(name: str) -> Dialect:
    """Instantiate a dialect by its registered name."""

    try:
        return DIALECTS[name.strip().lower()]()
    except KeyError as exc:
        supported = ", ".join(sorted(DIALECTS))
        raise ValueError(f"Unsupported dialect {name!r}. Use one of: {supported}.") from exc
