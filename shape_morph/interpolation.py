"""Pure functions for definition interpolation.

This module contains stateless functions blending two equalized definitions
into the intermediate definition of a given time. No side effects or I/O.
"""

from collections.abc import Callable

from shape_morph.config import settings
from shape_morph.geometry import round_value
from shape_morph.timing import TimingFunction, resolve_timing_function, timing_arity
from shape_morph.types import (
    Completed,
    Definition,
    FrameResult,
    FrameWindow,
    InProgress,
    Point,
)

# Type alias for the per-frame step driven by the animation loop
FrameFunction = Callable[[float], FrameResult]


class ShapeMismatchError(ValueError):
    """Raised when interpolating definitions that were not equalized."""

    def __init__(self, from_count: int, to_count: int) -> None:
        self.from_count = from_count
        self.to_count = to_count
        super().__init__(
            f"Cannot interpolate {from_count} points into {to_count} points; "
            "equalize the definitions first"
        )


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between two values."""
    return a + (b - a) * t


def lerp_point(p1: Point, p2: Point, t: float, precision: int | None = None) -> Point:
    """Linearly interpolate between two points, keeping the target's window."""
    x, y = lerp(p1.x, p2.x, t), lerp(p1.y, p2.y, t)
    if precision is not None:
        x, y = round_value(x, precision), round_value(y, precision)
    return p2.model_copy(update={"x": x, "y": y})


def point_window(from_point: Point, to_point: Point, default: FrameWindow) -> tuple[float, float]:
    """Delay and duration of a point: the target's, the origin's, or the default."""
    for point in (to_point, from_point):
        if point.delay is not None and point.duration is not None:
            return point.delay, point.duration
    return default.delay, default.duration


def interpolate(
    from_definition: Definition,
    to_definition: Definition,
    elapsed: float,
    timing: str | TimingFunction | None = None,
    window: FrameWindow | None = None,
    precision: int | None = None,
) -> FrameResult:
    """Compute the intermediate definition at `elapsed` milliseconds.

    Args:
        from_definition: Definition at the start of the transition
        to_definition: Definition at the end, with the same point count
        elapsed: Time since the transition started (ms)
        timing: Timing function or its name (default: from settings)
        window: Window for points without their own delay/duration
        precision: Decimals kept for blended coordinates (default: from settings)

    Returns:
        Completed when every point reached its target, InProgress otherwise

    Raises:
        ShapeMismatchError: When the definitions have different point counts
    """
    if len(from_definition.points) != len(to_definition.points):
        raise ShapeMismatchError(len(from_definition.points), len(to_definition.points))

    precision = precision if precision is not None else settings.precision
    window = window or FrameWindow()
    timing_function = resolve_timing_function(timing)
    vector_aware = timing_arity(timing_function) == 2

    completed = True
    points: list[Point] = []
    for from_point, to_point in zip(
        from_definition.all_points(), to_definition.all_points(), strict=True
    ):
        delay, duration = point_window(from_point, to_point, window)
        finished = elapsed - delay >= duration
        completed = completed and finished

        if finished:
            points.append(to_point)
        elif elapsed <= delay:
            points.append(from_point)
        else:
            relative_time = (elapsed - delay) / duration
            if vector_aware:
                points.append(timing_function(relative_time, (from_point, to_point)))
            else:
                points.append(
                    lerp_point(from_point, to_point, timing_function(relative_time), precision)
                )

    definition = Definition(anchor=points[0], points=points[1:])
    if completed:
        return Completed(definition=definition)
    return InProgress(definition=definition)


def frame_function(
    from_definition: Definition,
    to_definition: Definition,
    timing: str | TimingFunction | None = None,
    window: FrameWindow | None = None,
    precision: int | None = None,
) -> FrameFunction:
    """Bind a transition into the `elapsed -> FrameResult` step of the frame driver."""
    if len(from_definition.points) != len(to_definition.points):
        raise ShapeMismatchError(len(from_definition.points), len(to_definition.points))
    timing_function = resolve_timing_function(timing)

    def step(elapsed: float) -> FrameResult:
        return interpolate(
            from_definition, to_definition, elapsed, timing_function, window, precision
        )

    return step
