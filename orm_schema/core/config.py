"""Schema mapping configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from ..ports.dialects import Dialect, dialect_for_name
from .contracts import DialectPort

DEFAULT_ID_FIELD = "id"

ENV_ID_FIELD = "ORM_SCHEMA_ID_FIELD"
ENV_DIALECT = "ORM_SCHEMA_DIALECT"


@dataclass(frozen=True)
class SchemaConfig:
    """Settings shared by every definition a `SchemaCache` builds.

    Attributes:
        id_field: Reserved field name treated as primary key by convention.
        dialect: Dialect used to render the precomputed select statement.
    """

    id_field: str = DEFAULT_ID_FIELD
    dialect: DialectPort = field(default_factory=Dialect)

    def __post_init__(self) -> None:
        if not isinstance(self.id_field, str) or not self.id_field:
            raise ValueError("id_field must be a non-empty string.")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SchemaConfig":
        """Build config from `ORM_SCHEMA_ID_FIELD` / `ORM_SCHEMA_DIALECT`."""

        env = os.environ if environ is None else environ
        id_field = env.get(ENV_ID_FIELD) or DEFAULT_ID_FIELD
        dialect_name = env.get(ENV_DIALECT)
        dialect = dialect_for_name(dialect_name) if dialect_name else Dialect()
        return cls(id_field=id_field, dialect=dialect)
