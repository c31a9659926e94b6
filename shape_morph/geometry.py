"""Small geometry helpers shared by the converters."""

import math

from shape_morph.types import Point


def round_value(value: float, precision: int) -> float:
    """Round to `precision` decimals, normalizing negative zero."""
    rounded = round(value, precision)
    return 0.0 if rounded == 0 else rounded


def rotate(x: float, y: float, angle: float) -> tuple[float, float]:
    """Rotate (x, y) around the origin by `angle` radians."""
    cos, sin = math.cos(angle), math.sin(angle)
    return x * cos - y * sin, x * sin + y * cos


def reflect(point: Point, center: Point) -> Point:
    """Reflect a point about a center."""
    return Point(x=2 * center.x - point.x, y=2 * center.y - point.y)


def same_position(p1: Point, p2: Point) -> bool:
    """Check whether two points sit at the same coordinates."""
    return p1.x == p2.x and p1.y == p2.y
