"""Shared core type aliases used across the builder, cache, and ports."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from .definitions import ModelDefinition

ModelType = type[Any]
Getter = Callable[[Any], Any]
Setter = Callable[[Any, Any], None]
DefinitionResolver = Callable[[ModelType], "ModelDefinition"]
