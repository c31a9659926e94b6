"""Serialize canonical definitions back into path data strings."""

from decimal import Decimal

from shape_morph.types import Definition, Point


def format_number(value: float) -> str:
    """Shortest positional form of a number (no exponent, no negative zero)."""
    if value == 0:
        return "0"
    if float(value).is_integer():
        return str(int(value))
    return format(Decimal(repr(float(value))), "f")


def _join(points: list[Point]) -> str:
    text = ""
    for point in points:
        for value in (point.x, point.y):
            number = format_number(value)
            # A minus sign already separates two numbers
            if text and not number.startswith("-"):
                text += " "
            text += number
    return text


def serialize_definition(definition: Definition) -> str:
    """Serialize a definition into a path data string.

    Example: "M0 0C0 0 0 0 1 1 1 1 1 1 2 0 2 0 2 0 0 0z"
    """
    d = f"M{_join([definition.anchor])}"
    if definition.points:
        d += f"C{_join(definition.points)}"
    return f"{d}z"


def serialize_definitions(definitions: list[Definition]) -> list[str]:
    """Serialize a batch of definitions."""
    return [serialize_definition(definition) for definition in definitions]
