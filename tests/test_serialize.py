"""Tests for definition serialization."""

import pytest
from shapes import CLOVER, CLOVER_CANONICAL, HEXAGON, TRIANGLE, normalized

from shape_morph.serialize import format_number, serialize_definition, serialize_definitions
from shape_morph.types import Definition, Point


class TestFormatNumber:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0, "0"),
            (-0.0, "0"),
            (5.0, "5"),
            (-3, "-3"),
            (9.32, "9.32"),
            (-1.37, "-1.37"),
            (0.5, "0.5"),
            (1e-5, "0.00001"),
            (1e20, "100000000000000000000"),
        ],
    )
    def test_positional_form(self, value: float, expected: str) -> None:
        assert format_number(value) == expected


class TestSerializeDefinition:
    def test_triangle(self) -> None:
        assert (
            serialize_definition(normalized(TRIANGLE))
            == "M0 0C0 0 0 0 1 1 1 1 1 1 2 0 2 0 2 0 0 0z"
        )

    def test_negative_numbers_need_no_separator(self) -> None:
        definition = Definition(
            anchor=Point(x=-1, y=-2),
            points=[Point(x=3, y=-4), Point(x=-5, y=6), Point(x=-1, y=-2)],
        )
        assert serialize_definition(definition) == "M-1-2C3-4-5 6-1-2z"

    def test_anchor_only(self) -> None:
        assert serialize_definition(Definition(anchor=Point(x=1, y=2))) == "M1 2z"

    def test_clover(self) -> None:
        assert serialize_definition(normalized(CLOVER)) == CLOVER_CANONICAL

    def test_batch(self) -> None:
        batch = [normalized(TRIANGLE), Definition(anchor=Point(x=0, y=0))]
        assert serialize_definitions(batch) == [
            "M0 0C0 0 0 0 1 1 1 1 1 1 2 0 2 0 2 0 0 0z",
            "M0 0z",
        ]


class TestRoundTrip:
    @pytest.mark.parametrize("definition", [TRIANGLE, HEXAGON, CLOVER])
    def test_canonical_form_is_stable(self, definition: str) -> None:
        canonical = normalized(definition)
        d = serialize_definition(canonical)
        assert normalized(d) == canonical
        assert serialize_definition(normalized(d)) == d

    def test_canonical_string_round_trips(self) -> None:
        assert serialize_definition(normalized(CLOVER_CANONICAL)) == CLOVER_CANONICAL
