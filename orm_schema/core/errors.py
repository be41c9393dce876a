"""Errors raised while deriving model definitions."""

from __future__ import annotations

from typing import Any, Sequence


class ModelDefinitionError(Exception):
    """Base error for model definition failures."""


class ModelIntrospectionError(ModelDefinitionError, TypeError):
    """Raised when a model's fields or type hints cannot be read."""


class BelongsToCycleError(ModelDefinitionError, ValueError):
    """Raised when `belongs_to` annotations form a cycle between models."""

    def __init__(self, chain: Sequence[type[Any]]) -> None:
        self.chain = tuple(chain)
        path = " -> ".join(model.__name__ for model in self.chain)
        super().__init__(f"Cyclic belongs_to relationship: {path}.")
