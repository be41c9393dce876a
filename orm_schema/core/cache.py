"""Process-scoped cache of model definitions."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from .builder import build_model_definition
from .config import SchemaConfig
from .definitions import ModelDefinition
from .errors import BelongsToCycleError
from .types import ModelType

logger = logging.getLogger(__name__)


class SchemaCache:
    """Build-once, read-many mapping from model class to its definition.

    Lookups never take a lock. A miss builds the definition outside of any
    shared state and publishes it with `dict.setdefault`, so concurrent
    callers for the same model all receive the first published instance and
    never observe a partially built one. Callers for different models do not
    contend.

    Usage:
    - Create one cache per process (or per test) and pass it where
      definitions are needed.
    - Call `clear()` to drop cached definitions; instances already handed out
      remain valid.
    """

    def __init__(self, config: Optional[SchemaConfig] = None) -> None:
        self.config = config or SchemaConfig()
        self._definitions: Dict[ModelType, ModelDefinition] = {}

    def get_definition(self, model: ModelType) -> ModelDefinition:
        """Return the cached definition for `model`, building it on first use.

        Raises:
            ModelIntrospectionError: If the model metadata cannot be read.
            BelongsToCycleError: If `belongs_to` annotations form a cycle.
        """

        return self._get_definition(model, ())

    def clear(self) -> None:
        """Drop every cached definition."""

        self._definitions = {}
        logger.debug("Cleared model definition cache")

    def __contains__(self, model: Any) -> bool:
        return model in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    def _get_definition(
        self,
        model: ModelType,
        resolving: tuple[ModelType, ...],
    ) -> ModelDefinition:
        definitions = self._definitions
        cached = definitions.get(model)
        if cached is not None:
            return cached

        if model in resolving:
            raise BelongsToCycleError(resolving + (model,))

        logger.debug("Model definition cache miss for %s", model)
        chain = resolving + (model,)
        built = build_model_definition(
            model,
            self.config,
            lambda owner: self._get_definition(owner, chain),
        )
        return definitions.setdefault(model, built)
