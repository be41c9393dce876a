"""Composite index declarations collected from model `__indexes__`."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from .types import ModelType


@dataclass(frozen=True)
class IndexSpec:
    """Represents one multi-column index declaration."""

    columns: tuple[str, ...]
    unique: bool = False
    name: str | None = None


IndexInput = str | Sequence[str] | Mapping[str, Any] | IndexSpec


def collect_composite_indexes(cls: ModelType) -> tuple[IndexSpec, ...]:
    """Collect composite index specs declared on a model class.

    Entries keep declaration order; exact duplicates are dropped.
    """

    raw_indexes = getattr(cls, "__indexes__", None) or ()
    if isinstance(raw_indexes, (str, Mapping, IndexSpec)):
        raw_indexes = (raw_indexes,)
    return tuple(dedupe_index_specs([parse_index_input(raw) for raw in raw_indexes]))


def parse_index_input(raw: IndexInput) -> IndexSpec:
    """Normalize one `__indexes__` entry.

    Mappings take `columns` (or `fields`), an optional `unique` flag, and an
    optional index `name`. Plain strings and sequences are non-unique indexes
    over the given columns.
    """

    if isinstance(raw, IndexSpec):
        return IndexSpec(normalize_columns(raw.columns), raw.unique, raw.name)

    if isinstance(raw, Mapping):
        if "columns" in raw and "fields" in raw:
            raise ValueError("Index mapping takes 'columns' or 'fields', not both.")
        unique = raw.get("unique", False)
        if not isinstance(unique, bool):
            raise TypeError("Index 'unique' must be a bool.")
        name = raw.get("name")
        if name is not None and (not isinstance(name, str) or not name):
            raise TypeError("Index 'name' must be a non-empty string.")
        columns = raw["columns"] if "columns" in raw else raw.get("fields")
        return IndexSpec(normalize_columns(columns), unique, name)

    if isinstance(raw, (str, Sequence)):
        return IndexSpec(normalize_columns(raw))

    raise TypeError(f"Unsupported index definition type: {type(raw)}")


def normalize_columns(raw: Any) -> tuple[str, ...]:
    """Return index columns as a tuple of distinct, non-empty names."""

    if isinstance(raw, str):
        raw = (raw,)
    elif not isinstance(raw, Sequence):
        raise TypeError("Index columns must be a string or sequence of strings.")

    columns = tuple(raw)
    if not columns:
        raise ValueError("Index columns must not be empty.")
    for column in columns:
        if not isinstance(column, str) or not column:
            raise TypeError("All index column names must be non-empty strings.")
    if len(set(columns)) != len(columns):
        raise ValueError(f"Index lists a column more than once: {columns!r}.")
    return columns


def dedupe_index_specs(specs: Sequence[IndexSpec]) -> list[IndexSpec]:
    deduped: list[IndexSpec] = []
    seen: set[IndexSpec] = set()

    for spec in specs:
        if spec in seen:
            continue
        seen.add(spec)
        deduped.append(spec)

    return deduped
