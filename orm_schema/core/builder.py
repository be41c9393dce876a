"""Model definition builder: derive a `ModelDefinition` from a dataclass."""

from __future__ import annotations

import logging
from dataclasses import Field, replace
from operator import attrgetter
from typing import Any, Sequence

from . import annotations as ann
from .config import SchemaConfig
from .definitions import FieldDefinition, ModelDefinition
from .indexes import collect_composite_indexes
from .types import DefinitionResolver, ModelType, Setter

logger = logging.getLogger(__name__)


def build_model_definition(
    model: ModelType,
    config: SchemaConfig,
    resolve: DefinitionResolver,
) -> ModelDefinition:
    """Build the normalized definition for one dataclass model.

    Args:
        model: Dataclass model type.
        config: Identifier field name and dialect used for rendering.
        resolve: Callback returning another model's definition; used for
            `belongs_to` owners.

    Returns:
        Immutable definition. Conflicting annotations are resolved by
        precedence, never rejected.

    Raises:
        ModelIntrospectionError: If the model is not a dataclass or its type
            hints cannot be resolved.
    """

    model_fields = ann.model_fields(model)
    hints = ann.resolve_field_types(model)
    has_primary_key = _has_primary_key(model_fields, config.id_field)

    mapped: list[FieldDefinition] = []
    ignored: list[FieldDefinition] = []
    for position, field in enumerate(model_fields):
        field_def = _build_field_definition(
            field,
            hints.get(field.name, Any),
            is_primary_key=(
                field.name == config.id_field
                or ann.has_flag(field, ann.PRIMARY_KEY)
                or (not has_primary_key and position == 0)
            ),
            resolve=resolve,
        )
        if ann.has_flag(field, ann.IGNORE):
            ignored.append(field_def)
        else:
            mapped.append(field_def)

    model_def = ModelDefinition(
        model_type=model,
        name=model.__name__,
        alias=ann.model_alias(model),
        schema=ann.model_schema(model),
        field_definitions=tuple(mapped),
        ignored_field_definitions=tuple(ignored),
        composite_indexes=collect_composite_indexes(model),
    )
    dialect = config.dialect
    select_sql = (
        f"SELECT {dialect.get_column_names(model_def)} "
        f"FROM {dialect.get_quoted_table_name(model_def)}"
    )
    logger.debug(
        "Built model definition for %s: %d mapped, %d ignored field(s)",
        model.__qualname__,
        len(mapped),
        len(ignored),
    )
    return replace(model_def, sql_select_all_from_table=select_sql)


def _has_primary_key(model_fields: Sequence[Field[Any]], id_field: str) -> bool:
    return any(
        field.name == id_field or ann.has_flag(field, ann.PRIMARY_KEY)
        for field in model_fields
    )


def _build_field_definition(
    field: Field[Any],
    annotation: Any,
    *,
    is_primary_key: bool,
    resolve: DefinitionResolver,
) -> FieldDefinition:
    field_type, is_nullable_wrapper = ann.unwrap_nullable(annotation)
    is_nullable = is_nullable_wrapper or (
        not ann.is_value_type(field_type) and not ann.has_flag(field, ann.REQUIRED)
    )

    is_indexed, is_unique = ann.parse_index(field)

    field_length = ann.parse_string_length(field)
    decimal_length = ann.parse_decimal_length(field)
    if decimal_length is not None and field_length is None:
        field_length = decimal_length.precision

    is_computed, compute_expression = ann.parse_compute(field)

    owner = ann.parse_belongs_to(field)
    belong_to_model_name = resolve(owner).model_name if owner is not None else None

    return FieldDefinition(
        name=field.name,
        alias=field.metadata.get(ann.ALIAS),
        field_type=field_type,
        is_nullable=is_nullable,
        is_primary_key=is_primary_key,
        auto_increment=is_primary_key and ann.has_flag(field, ann.AUTO_INCREMENT),
        is_indexed=is_indexed,
        is_unique=is_unique,
        field_length=field_length,
        scale=decimal_length.scale if decimal_length is not None else None,
        default_value=field.metadata.get(ann.DEFAULT),
        has_default_value=ann.DEFAULT in field.metadata,
        foreign_key=ann.parse_foreign_key(field),
        sequence=ann.parse_sequence(field),
        is_computed=is_computed,
        compute_expression=compute_expression,
        belong_to_model_name=belong_to_model_name,
        getter=attrgetter(field.name),
        setter=_attr_setter(field.name),
    )


def _attr_setter(name: str) -> Setter:
    def set_value(obj: Any, value: Any) -> None:
        setattr(obj, name, value)

    return set_value
