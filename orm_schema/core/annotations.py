"""Readers for model-level and field-level mapping annotations.

Models are plain dataclasses. Model-level annotations are dunder class
attributes (`__table__`, `__schema__`, `__indexes__`); field-level annotations
live in `dataclasses.field(metadata={...})` under the keys defined below.
"""

from __future__ import annotations

import types
import uuid
from collections.abc import Mapping, Sequence
from dataclasses import Field, dataclass, fields, is_dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Union, get_args, get_origin, get_type_hints

from .definitions import ForeignKeyConstraint, ReferentialAction
from .errors import ModelIntrospectionError
from .types import ModelType

ALIAS = "alias"
PRIMARY_KEY = "pk"
AUTO_INCREMENT = "auto"
REQUIRED = "required"
INDEX = "index"
UNIQUE_INDEX = "unique_index"
STRING_LENGTH = "length"
DECIMAL_LENGTH = "decimal"
DEFAULT = "default"
REFERENCES = "references"
FOREIGN_KEY = "fk"
SEQUENCE = "sequence"
COMPUTE = "compute"
BELONGS_TO = "belongs_to"
IGNORE = "ignore"

VALUE_TYPES: frozenset[type] = frozenset(
    {int, float, complex, bool, Decimal, datetime, date, time, timedelta, uuid.UUID}
)

_NONE_TYPE = type(None)


@dataclass(frozen=True)
class DecimalLength:
    """Decimal precision/scale annotation value."""

    precision: int = 18
    scale: int = 12


def require_dataclass_model(cls: Any) -> None:
    """Validate that a class is a dataclass model."""

    if not isinstance(cls, type) or not is_dataclass(cls):
        name = getattr(cls, "__name__", repr(cls))
        raise ModelIntrospectionError(f"{name} must be a dataclass.")


def model_alias(cls: ModelType) -> Optional[str]:
    return _optional_name(cls, "__table__")


def model_schema(cls: ModelType) -> Optional[str]:
    return _optional_name(cls, "__schema__")


def model_fields(cls: ModelType) -> list[Field[Any]]:
    """Return public dataclass fields in declaration order."""

    require_dataclass_model(cls)
    return [f for f in fields(cls) if not f.name.startswith("_")]


def resolve_field_types(cls: ModelType) -> dict[str, Any]:
    """Resolve field annotations, including string (postponed) annotations."""

    try:
        return get_type_hints(cls)
    except Exception as exc:
        raise ModelIntrospectionError(
            f"Cannot resolve type hints for {cls.__name__}: {exc}"
        ) from exc


def unwrap_nullable(annotation: Any) -> tuple[Any, bool]:
    """Split `Optional[T]` / `T | None` into `(T, True)`.

    Non-optional annotations are returned unchanged with `False`.
    """

    if get_origin(annotation) not in (Union, types.UnionType):
        return annotation, False

    args = get_args(annotation)
    if _NONE_TYPE not in args:
        return annotation, False

    remaining = tuple(arg for arg in args if arg is not _NONE_TYPE)
    if len(remaining) == 1:
        return remaining[0], True
    return Union[remaining], True


def is_value_type(annotation: Any) -> bool:
    """Return whether a type behaves as a non-nullable scalar column value."""

    if get_origin(annotation) is not None or not isinstance(annotation, type):
        return False
    return annotation in VALUE_TYPES or issubclass(annotation, Enum)


def has_flag(field: Field[Any], key: str) -> bool:
    return bool(field.metadata.get(key))


def parse_index(field: Field[Any]) -> tuple[bool, bool]:
    """Return `(is_indexed, is_unique)` for one field."""

    if has_flag(field, UNIQUE_INDEX):
        return True, True

    raw = field.metadata.get(INDEX)
    if raw is None or raw is False:
        return False, False
    if isinstance(raw, Mapping):
        return True, bool(raw.get("unique", False))
    return True, False


def parse_string_length(field: Field[Any]) -> Optional[int]:
    raw = field.metadata.get(STRING_LENGTH)
    if raw is None:
        return None
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise TypeError(f"Field {field.name!r} metadata 'length' must be an int.")
    return raw


def parse_decimal_length(field: Field[Any]) -> Optional[DecimalLength]:
    raw = field.metadata.get(DECIMAL_LENGTH)
    if raw is None or raw is False:
        return None
    if raw is True:
        return DecimalLength()
    if isinstance(raw, DecimalLength):
        precision, scale = raw.precision, raw.scale
    elif isinstance(raw, Mapping):
        precision = raw.get("precision", DecimalLength.precision)
        scale = raw.get("scale", DecimalLength.scale)
    elif isinstance(raw, Sequence) and not isinstance(raw, (str, bytes)):
        values = tuple(raw)
        if len(values) != 2:
            raise ValueError(
                f"Field {field.name!r} metadata 'decimal' must be (precision, scale)."
            )
        precision, scale = values
    else:
        raise TypeError(
            f"Field {field.name!r} metadata 'decimal' must be DecimalLength, "
            "(precision, scale), a mapping, or True."
        )

    for label, value in (("precision", precision), ("scale", scale)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(
                f"Field {field.name!r} metadata 'decimal' {label} must be an int."
            )
    return DecimalLength(precision=precision, scale=scale)


def parse_foreign_key(field: Field[Any]) -> Optional[ForeignKeyConstraint]:
    """Resolve the field's foreign key; `fk` takes precedence over `references`."""

    context = f"field {field.name!r}"
    raw_fk = field.metadata.get(FOREIGN_KEY)
    if raw_fk is not None:
        return _parse_fk_input(raw_fk, context=context)

    raw_references = field.metadata.get(REFERENCES)
    if raw_references is not None:
        return ForeignKeyConstraint(_require_model_type(raw_references, context=context))

    return None


def parse_referential_action(raw: Any) -> Optional[ReferentialAction]:
    if raw is None:
        return None
    if isinstance(raw, ReferentialAction):
        return raw
    if isinstance(raw, str):
        normalized = " ".join(raw.replace("_", " ").split()).upper()
        try:
            return ReferentialAction(normalized)
        except ValueError as exc:
            raise ValueError(f"Unsupported referential action {raw!r}.") from exc
    raise ValueError(f"Unsupported referential action {raw!r}.")


def parse_compute(field: Field[Any]) -> tuple[bool, str]:
    raw = field.metadata.get(COMPUTE)
    if raw is None or raw is False:
        return False, ""
    if raw is True:
        return True, ""
    if not isinstance(raw, str):
        raise TypeError(f"Field {field.name!r} metadata 'compute' must be a string.")
    return True, raw


def parse_sequence(field: Field[Any]) -> str:
    raw = field.metadata.get(SEQUENCE)
    if raw is None:
        return ""
    if not isinstance(raw, str):
        raise TypeError(f"Field {field.name!r} metadata 'sequence' must be a string.")
    return raw


def parse_belongs_to(field: Field[Any]) -> Optional[ModelType]:
    raw = field.metadata.get(BELONGS_TO)
    if raw is None:
        return None
    return _require_model_type(raw, context=f"field {field.name!r} belongs_to")


def _parse_fk_input(raw: Any, *, context: str) -> ForeignKeyConstraint:
    if isinstance(raw, ForeignKeyConstraint):
        return raw

    if isinstance(raw, type):
        return ForeignKeyConstraint(_require_model_type(raw, context=context))

    if isinstance(raw, Mapping):
        name = raw.get("name")
        if name is not None and (not isinstance(name, str) or not name):
            raise TypeError(f"{context} fk 'name' must be a non-empty string.")
        return ForeignKeyConstraint(
            reference_type=_require_model_type(raw.get("model"), context=context),
            on_delete=parse_referential_action(raw.get("on_delete")),
            on_update=parse_referential_action(raw.get("on_update")),
            foreign_key_name=name,
        )

    raise TypeError(
        f"Unsupported fk format on {context}. Use a model class, "
        "ForeignKeyConstraint, or {'model': Model, 'on_delete': ..., 'name': ...}."
    )


def _require_model_type(raw: Any, *, context: str) -> ModelType:
    if not isinstance(raw, type):
        raise TypeError(f"{context} must reference a dataclass model type.")
    require_dataclass_model(raw)
    return raw


def _optional_name(cls: ModelType, attr: str) -> Optional[str]:
    name = getattr(cls, attr, None)
    return name if isinstance(name, str) and name else None
