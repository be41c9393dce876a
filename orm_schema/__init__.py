"""Dataclass-to-table schema mapping for the ORM layer."""

from .core import (
    BelongsToCycleError,
    DecimalLength,
    DialectPort,
    FieldDefinition,
    ForeignKeyConstraint,
    IndexSpec,
    ModelDefinition,
    ModelDefinitionError,
    ModelIntrospectionError,
    ReferentialAction,
    SchemaCache,
    SchemaConfig,
    build_model_definition,
)
from .ports import Dialect, MySQLDialect, PostgresDialect, SQLiteDialect, dialect_for_name

__all__ = [
    "BelongsToCycleError",
    "DecimalLength",
    "Dialect",
    "DialectPort",
    "FieldDefinition",
    "ForeignKeyConstraint",
    "IndexSpec",
    "ModelDefinition",
    "ModelDefinitionError",
    "ModelIntrospectionError",
    "MySQLDialect",
    "PostgresDialect",
    "ReferentialAction",
    "SQLiteDialect",
    "SchemaCache",
    "SchemaConfig",
    "build_model_definition",
    "dialect_for_name",
]
