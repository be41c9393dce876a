"""Public core API for model definitions and the schema cache."""

from .annotations import DecimalLength
from .builder import build_model_definition
from .cache import SchemaCache
from .config import SchemaConfig
from .contracts import DialectPort
from .definitions import (
    FieldDefinition,
    ForeignKeyConstraint,
    ModelDefinition,
    ReferentialAction,
)
from .errors import BelongsToCycleError, ModelDefinitionError, ModelIntrospectionError
from .indexes import IndexSpec

__all__ = [
    "BelongsToCycleError",
    "DecimalLength",
    "DialectPort",
    "FieldDefinition",
    "ForeignKeyConstraint",
    "IndexSpec",
    "ModelDefinition",
    "ModelDefinitionError",
    "ModelIntrospectionError",
    "ReferentialAction",
    "SchemaCache",
    "SchemaConfig",
    "build_model_definition",
]
