"""Immutable model and field definitions consumed by SQL generation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from .indexes import IndexSpec
from .types import Getter, ModelType, Setter


class ReferentialAction(str, Enum):
    """Supported `ON DELETE` / `ON UPDATE` foreign-key actions."""

    CASCADE = "CASCADE"
    SET_NULL = "SET NULL"
    SET_DEFAULT = "SET DEFAULT"
    RESTRICT = "RESTRICT"
    NO_ACTION = "NO ACTION"


@dataclass(frozen=True)
class ForeignKeyConstraint:
    """Foreign-key reference from one field to another model's table."""

    reference_type: ModelType
    on_delete: Optional[ReferentialAction] = None
    on_update: Optional[ReferentialAction] = None
    foreign_key_name: Optional[str] = None


@dataclass(frozen=True)
class FieldDefinition:
    """Normalized column description derived from one model field."""

    name: str
    field_type: Any
    alias: Optional[str] = None
    is_nullable: bool = True
    is_primary_key: bool = False
    auto_increment: bool = False
    is_indexed: bool = False
    is_unique: bool = False
    field_length: Optional[int] = None
    scale: Optional[int] = None
    default_value: Any = None
    has_default_value: bool = False
    foreign_key: Optional[ForeignKeyConstraint] = None
    sequence: str = ""
    is_computed: bool = False
    compute_expression: str = ""
    belong_to_model_name: Optional[str] = None
    getter: Optional[Getter] = field(default=None, compare=False, repr=False)
    setter: Optional[Setter] = field(default=None, compare=False, repr=False)

    @property
    def field_name(self) -> str:
        """Column name rendered in SQL (alias when declared)."""

        return self.alias or self.name

    def get_value(self, obj: Any) -> Any:
        if self.getter is None:
            return getattr(obj, self.name)
        return self.getter(obj)

    def set_value(self, obj: Any, value: Any) -> None:
        if self.setter is None:
            setattr(obj, self.name, value)
            return
        self.setter(obj, value)


@dataclass(frozen=True)
class ModelDefinition:
    """Normalized table description derived from a dataclass model.

    Instances are built once per model by `SchemaCache` and never mutated.
    `field_definitions` keeps the model's declaration order, which generated
    column lists rely on.
    """

    model_type: ModelType
    name: str
    alias: Optional[str] = None
    schema: Optional[str] = None
    field_definitions: tuple[FieldDefinition, ...] = ()
    ignored_field_definitions: tuple[FieldDefinition, ...] = ()
    composite_indexes: tuple[IndexSpec, ...] = ()
    sql_select_all_from_table: str = ""

    @property
    def model_name(self) -> str:
        """Table name: alias when declared, otherwise the class name."""

        return self.alias or self.name

    @property
    def is_in_schema(self) -> bool:
        return self.schema is not None

    @property
    def primary_key(self) -> Optional[FieldDefinition]:
        """First mapped primary-key field, if any."""

        return next((f for f in self.field_definitions if f.is_primary_key), None)

    @property
    def all_field_definitions(self) -> tuple[FieldDefinition, ...]:
        return self.field_definitions + self.ignored_field_definitions

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(f.field_name for f in self.field_definitions)

    def get_field_definition(self, name: str) -> Optional[FieldDefinition]:
        """Find a mapped or ignored field by attribute name or column alias."""

        for field_def in self.all_field_definitions:
            if name in (field_def.name, field_def.alias):
                return field_def
        return None
