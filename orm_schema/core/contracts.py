"""Core port contracts used by the definition builder."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .definitions import ModelDefinition


class DialectPort(Protocol):
    """Dialect behavior required to render names for a model definition."""

    name: str

    def q(self, ident: str) -> str: ...

    def get_column_names(self, model_def: ModelDefinition) -> str: ...

    def get_quoted_table_name(self, model_def: ModelDefinition) -> str: ...
