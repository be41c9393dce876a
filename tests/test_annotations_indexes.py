from __future__ import annotations

import unittest
from dataclasses import dataclass, field, fields
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Union
from uuid import UUID

from orm_schema import (
    DecimalLength,
    ForeignKeyConstraint,
    IndexSpec,
    ModelIntrospectionError,
    ReferentialAction,
)
from orm_schema.core import annotations as ann
from orm_schema.core.indexes import collect_composite_indexes, parse_index_input


@dataclass
class Team:
    id: int = 0


class Color(Enum):
    RED = 1


@dataclass
class AnnotatedRow:
    id: int = 0
    fk_mapping: int = field(default=0, metadata={"fk": {"model": Team, "on_delete": "NO_ACTION"}})
    fk_type: int = field(default=0, metadata={"fk": Team})
    fk_constraint: int = field(
        default=0,
        metadata={"fk": ForeignKeyConstraint(Team, on_update=ReferentialAction.RESTRICT)},
    )
    fk_missing_model: int = field(default=0, metadata={"fk": {"on_delete": "cascade"}})
    fk_bad_action: int = field(default=0, metadata={"fk": {"model": Team, "on_delete": "explode"}})
    references_not_type: int = field(default=0, metadata={"references": "team"})
    decimal_mapping: Decimal = field(default=Decimal("0"), metadata={"decimal": {"precision": 12}})
    decimal_bad_length: Decimal = field(default=Decimal("0"), metadata={"decimal": (1, 2, 3)})
    decimal_bad_type: Decimal = field(default=Decimal("0"), metadata={"decimal": "12,2"})
    decimal_bad_precision: Decimal = field(
        default=Decimal("0"), metadata={"decimal": {"precision": "ten", "scale": None}}
    )
    decimal_bad_scale: Decimal = field(default=Decimal("0"), metadata={"decimal": (10, "2")})
    decimal_bool_scale: Decimal = field(
        default=Decimal("0"), metadata={"decimal": DecimalLength(precision=10, scale=True)}
    )
    length_bad_type: str = field(default="", metadata={"length": "20"})
    compute_flag: int = field(default=0, metadata={"compute": True})
    compute_bad_type: int = field(default=0, metadata={"compute": 42})
    index_off: str = field(default="", metadata={"index": False})
    belongs_to_plain: int = field(default=0, metadata={"belongs_to": dict})


def _field(name: str) -> Any:
    return next(f for f in fields(AnnotatedRow) if f.name == name)


class AnnotationReaderTests(unittest.TestCase):
    def test_unwrap_nullable_variants(self) -> None:
        self.assertEqual(ann.unwrap_nullable(Optional[int]), (int, True))
        self.assertEqual(ann.unwrap_nullable(int | None), (int, True))
        self.assertEqual(ann.unwrap_nullable(int), (int, False))
        self.assertEqual(ann.unwrap_nullable(Union[int, str]), (Union[int, str], False))
        self.assertEqual(
            ann.unwrap_nullable(Union[int, str, None]),
            (Union[int, str], True),
        )

    def test_value_and_reference_types(self) -> None:
        for value_type in (int, float, bool, Decimal, date, UUID, Color):
            self.assertTrue(ann.is_value_type(value_type), value_type)
        for reference_type in (str, bytes, list, dict[str, int], Any, Team):
            self.assertFalse(ann.is_value_type(reference_type), reference_type)

    def test_referential_action_parsing(self) -> None:
        self.assertIs(ann.parse_referential_action("cascade"), ReferentialAction.CASCADE)
        self.assertIs(ann.parse_referential_action("set_null"), ReferentialAction.SET_NULL)
        self.assertIs(ann.parse_referential_action("Set  Default"), ReferentialAction.SET_DEFAULT)
        self.assertIs(
            ann.parse_referential_action(ReferentialAction.NO_ACTION),
            ReferentialAction.NO_ACTION,
        )
        self.assertIsNone(ann.parse_referential_action(None))
        with self.assertRaisesRegex(ValueError, r"Unsupported referential action 'explode'"):
            ann.parse_referential_action("explode")
        with self.assertRaises(ValueError):
            ann.parse_referential_action(3)

    def test_foreign_key_inputs(self) -> None:
        self.assertEqual(
            ann.parse_foreign_key(_field("fk_mapping")),
            ForeignKeyConstraint(Team, on_delete=ReferentialAction.NO_ACTION),
        )
        self.assertEqual(ann.parse_foreign_key(_field("fk_type")), ForeignKeyConstraint(Team))
        self.assertEqual(
            ann.parse_foreign_key(_field("fk_constraint")).on_update,
            ReferentialAction.RESTRICT,
        )
        self.assertIsNone(ann.parse_foreign_key(_field("id")))

    def test_malformed_foreign_keys_are_rejected(self) -> None:
        with self.assertRaises(TypeError):
            ann.parse_foreign_key(_field("fk_missing_model"))
        with self.assertRaises(ValueError):
            ann.parse_foreign_key(_field("fk_bad_action"))
        with self.assertRaises(TypeError):
            ann.parse_foreign_key(_field("references_not_type"))

    def test_decimal_length_inputs(self) -> None:
        self.assertEqual(
            ann.parse_decimal_length(_field("decimal_mapping")),
            DecimalLength(precision=12, scale=12),
        )
        self.assertIsNone(ann.parse_decimal_length(_field("id")))
        with self.assertRaises(ValueError):
            ann.parse_decimal_length(_field("decimal_bad_length"))
        with self.assertRaises(TypeError):
            ann.parse_decimal_length(_field("decimal_bad_type"))
        with self.assertRaises(TypeError):
            ann.parse_string_length(_field("length_bad_type"))
        for name in ("decimal_bad_precision", "decimal_bad_scale", "decimal_bool_scale"):
            with self.assertRaises(TypeError, msg=name):
                ann.parse_decimal_length(_field(name))

    def test_compute_and_index_flags(self) -> None:
        self.assertEqual(ann.parse_compute(_field("compute_flag")), (True, ""))
        self.assertEqual(ann.parse_compute(_field("id")), (False, ""))
        with self.assertRaises(TypeError):
            ann.parse_compute(_field("compute_bad_type"))
        self.assertEqual(ann.parse_index(_field("index_off")), (False, False))

    def test_belongs_to_requires_dataclass_model(self) -> None:
        with self.assertRaises(ModelIntrospectionError):
            ann.parse_belongs_to(_field("belongs_to_plain"))
        self.assertIsNone(ann.parse_belongs_to(_field("id")))

    def test_model_level_names(self) -> None:
        @dataclass
        class Named:
            __table__ = "named_rows"
            __schema__ = ""
            id: int = 0

        self.assertEqual(ann.model_alias(Named), "named_rows")
        self.assertIsNone(ann.model_schema(Named))
        self.assertIsNone(ann.model_alias(Team))


class CompositeIndexTests(unittest.TestCase):
    def test_parse_index_inputs(self) -> None:
        self.assertEqual(parse_index_input("email"), IndexSpec(columns=("email",)))
        self.assertEqual(parse_index_input(["a", "b"]), IndexSpec(columns=("a", "b")))
        self.assertEqual(
            parse_index_input({"columns": "a", "unique": True, "name": "uidx_a"}),
            IndexSpec(columns=("a",), unique=True, name="uidx_a"),
        )

    def test_invalid_index_inputs(self) -> None:
        with self.assertRaises(TypeError):
            parse_index_input(123)  # type: ignore[arg-type]
        with self.assertRaises(ValueError):
            parse_index_input({"columns": []})
        with self.assertRaises(TypeError):
            parse_index_input(("a", ""))
        with self.assertRaises(ValueError):
            parse_index_input(IndexSpec(columns=()))

    def test_index_mapping_accepts_fields_key(self) -> None:
        self.assertEqual(
            parse_index_input({"fields": ("a", "b"), "unique": True}),
            IndexSpec(columns=("a", "b"), unique=True),
        )

    def test_index_mapping_rules(self) -> None:
        with self.assertRaises(ValueError):
            parse_index_input({"columns": ("a",), "fields": ("b",)})
        with self.assertRaises(TypeError):
            parse_index_input({"columns": ("a", "b"), "unique": "yes"})
        with self.assertRaises(TypeError):
            parse_index_input({"columns": ("a", "b"), "name": ""})
        with self.assertRaises(TypeError):
            parse_index_input({"unique": True})
        with self.assertRaisesRegex(ValueError, "more than once"):
            parse_index_input(("a", "b", "a"))

    def test_collect_composite_indexes_keeps_order_and_drops_duplicates(self) -> None:
        @dataclass
        class Indexed:
            id: int = 0
            a: str = ""
            b: str = ""

            __indexes__ = [
                ("b", "a"),
                {"columns": ("a", "b"), "unique": True},
                IndexSpec(columns=("b", "a")),
            ]

        self.assertEqual(
            collect_composite_indexes(Indexed),
            (IndexSpec(columns=("b", "a")), IndexSpec(columns=("a", "b"), unique=True)),
        )
        self.assertEqual(collect_composite_indexes(Team), ())


if __name__ == "__main__":
    unittest.main()
