"""Elliptical arc to cubic bezier conversion.

Follows the endpoint to center parameterization from the SVG implementation
notes (https://www.w3.org/TR/SVG11/implnote.html#ArcConversionEndpointToCenter),
then approximates the arc with one cubic segment per slice of at most 120°.
"""

import math

from shape_morph.config import settings
from shape_morph.geometry import rotate, round_value
from shape_morph.types import ArcParameters, Point

# Widest slice approximated by a single cubic segment
MAX_SLICE = math.radians(120)

TWO_PI = 2 * math.pi


def kappa(sweep: float) -> float:
    """Control point distance, relative to the radius, for a slice of `sweep` radians.

    kappa(pi / 2) is the well known 0.5523 used to draw quarter circles.
    """
    return 4 / 3 * math.tan(sweep / 4)


def _endpoint_angle(x: float, y: float, cx: float, cy: float, ry: float) -> float:
    """Angle of an endpoint around the center, in [0, 2π)."""
    ratio = max(-1.0, min(1.0, round((y - cy) / ry, 9)))
    angle = math.asin(ratio)
    if x < cx:
        angle = math.pi - angle
    if angle < 0:
        angle += TWO_PI
    return angle


def _slice_points(
    start: tuple[float, float],
    end: tuple[float, float],
    theta1: float,
    theta2: float,
    rx: float,
    ry: float,
) -> list[tuple[float, float]]:
    """Start control, end control and end position of one slice."""
    t = kappa(theta2 - theta1)
    hx, hy = rx * t, ry * t
    x1, y1 = start
    x2, y2 = end
    return [
        (x1 - hx * math.sin(theta1), y1 + hy * math.cos(theta1)),
        (x2 + hx * math.sin(theta2), y2 - hy * math.cos(theta2)),
        (x2, y2),
    ]


def arc_to_cubic(
    start: Point, arc: ArcParameters, precision: int | None = None
) -> list[Point]:
    """Convert an arc into flattened cubic points.

    Args:
        start: Current point the arc is drawn from
        arc: Arc parameters with an absolute end position
        precision: Decimals kept in the output (default: from settings)

    Returns:
        Cubic points in triples (start control, end control, end position).
        Empty when both endpoints coincide. Radii must not be zero.
    """
    precision = precision if precision is not None else settings.precision
    if start.x == arc.x and start.y == arc.y:
        return []

    phi = math.radians(arc.angle)
    rx, ry = abs(arc.rx), abs(arc.ry)

    # Work in the ellipse's own frame
    x1, y1 = rotate(start.x, start.y, -phi)
    x2, y2 = rotate(arc.x, arc.y, -phi)
    hx = (x1 - x2) / 2
    hy = (y1 - y2) / 2

    # Radii too small to join both endpoints are scaled up
    h = (hx * hx) / (rx * rx) + (hy * hy) / (ry * ry)
    if h > 1:
        h = math.sqrt(h)
        rx *= h
        ry *= h

    rx2, ry2 = rx * rx, ry * ry
    sign = -1 if arc.large_arc == arc.sweep else 1
    k = sign * math.sqrt(
        abs((rx2 * ry2 - rx2 * hy * hy - ry2 * hx * hx) / (rx2 * hy * hy + ry2 * hx * hx))
    )
    cx = k * rx * hy / ry + (x1 + x2) / 2
    cy = k * -ry * hx / rx + (y1 + y2) / 2

    theta1 = _endpoint_angle(x1, y1, cx, cy, ry)
    theta2 = _endpoint_angle(x2, y2, cx, cy, ry)
    if arc.sweep and theta1 > theta2:
        theta1 -= TWO_PI
    if not arc.sweep and theta2 > theta1:
        theta2 -= TWO_PI

    # Slice the sweep, carrying the angles and current start along
    flat: list[tuple[float, float]] = []
    slice_start = (x1, y1)
    while True:
        delta = theta2 - theta1
        if abs(delta) > MAX_SLICE + 1e-9:
            slice_theta = theta1 + math.copysign(MAX_SLICE, delta)
            slice_end = (cx + rx * math.cos(slice_theta), cy + ry * math.sin(slice_theta))
            flat.extend(_slice_points(slice_start, slice_end, theta1, slice_theta, rx, ry))
            slice_start, theta1 = slice_end, slice_theta
            continue
        flat.extend(_slice_points(slice_start, (x2, y2), theta1, theta2, rx, ry))
        break

    points = []
    for x, y in flat:
        px, py = rotate(x, y, phi)
        points.append(Point(x=round_value(px, precision), y=round_value(py, precision)))
    return points
