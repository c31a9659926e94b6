"""Timing (easing) functions.

A timing function maps the relative time of a point's transition, usually in
[0, 1], to the progress used to blend it. Some of them overshoot [0, 1] to
give a bouncy effect.

Two shapes are accepted where a timing function is expected:
- scalar: (relative_time) -> progress
- vector-aware: (relative_time, (from_point, to_point)) -> Point
"""

import inspect
import math
from collections.abc import Callable
from typing import Any

from shape_morph.config import settings

TimingFunction = Callable[..., Any]


class UnknownTimingFunctionError(ValueError):
    """Raised when a timing function name is not registered."""

    def __init__(self, name: object) -> None:
        self.name = name
        super().__init__(f"Unexpected timing function: {name!r}")


def _bounce(t: float) -> float:
    """Bounce out (https://easings.net/#easeOutBounce)."""
    n1 = 7.5625
    d1 = 2.75
    if t < 1 / d1:
        return n1 * t * t
    if t < 2 / d1:
        t -= 1.5 / d1
        return n1 * t * t + 0.75
    if t < 2.5 / d1:
        t -= 2.25 / d1
        return n1 * t * t + 0.9375
    t -= 2.625 / d1
    return n1 * t * t + 0.984375


def _back(start: float = 0.0, end: float = 0.0) -> Callable[[float], float]:
    """Sine based overshoot at the start and/or the end of the transition."""

    def back(t: float) -> float:
        if start == 0:
            return math.sin(math.pi * t * end) / math.sin(math.pi * end)
        if end == 0:
            return 1 - math.sin(math.pi * (1 - t) * start) / math.sin(math.pi * start)
        return (math.sin(math.pi * (t * (end - start) + start)) - math.sin(math.pi * start)) / (
            math.sin(math.pi * end) - math.sin(math.pi * start)
        )

    return back


def _bounce_back_ease_out(t: float) -> float:
    if t == 0:
        return 0.0
    return (0.04 - 0.04 / t) * math.sin(25 * t) + 1


def linear(t: float) -> float:
    return t


def ease_in_quad(t: float) -> float:
    return t**2


def ease_out_quad(t: float) -> float:
    return t * (2 - t)


def ease_in_out_quad(t: float) -> float:
    return 2 * t**2 if t < 0.5 else 1 - (-2 * t + 2) ** 2 / 2


def ease_in_cubic(t: float) -> float:
    return t**3


def ease_out_cubic(t: float) -> float:
    return (t - 1) ** 3 + 1


def ease_in_out_cubic(t: float) -> float:
    return 4 * t**3 if t < 0.5 else 1 - (-2 * t + 2) ** 3 / 2


_back_in = _back(start=-0.7)
_back_out = _back(end=0.7)
_back_in_out = _back(start=-0.7, end=0.7)

TIMING_FUNCTIONS: dict[str, Callable[[float], float]] = {
    "linear": linear,
    "ease_in_sin": lambda t: 1 + math.sin(math.pi * (t / 2 - 0.5)),
    "ease_out_sin": lambda t: math.sin(math.pi * t / 2),
    "ease_in_out_sin": lambda t: (1 + math.sin(math.pi * (t - 0.5))) / 2,
    "ease_in_quad": ease_in_quad,
    "ease_out_quad": ease_out_quad,
    "ease_in_out_quad": ease_in_out_quad,
    "ease_in_cubic": ease_in_cubic,
    "ease_out_cubic": ease_out_cubic,
    "ease_in_out_cubic": ease_in_out_cubic,
    "ease_in_quart": lambda t: t**4,
    "ease_out_quart": lambda t: 1 - (t - 1) ** 4,
    "ease_in_out_quart": lambda t: 8 * t**4 if t < 0.5 else 1 - (-2 * t + 2) ** 4 / 2,
    "ease_in_quint": lambda t: t**5,
    "ease_out_quint": lambda t: 1 + (t - 1) ** 5,
    "ease_in_out_quint": lambda t: 16 * t**5 if t < 0.5 else 1 - (-2 * t + 2) ** 5 / 2,
    "ease_in_arc": lambda t: 1 - math.sqrt(max(0.0, 1 - t * t)),
    "ease_out_arc": lambda t: math.sqrt(max(0.0, 1 - (1 - t) ** 2)),
    "bounce_in_ease_in": lambda t: 1 - _bounce(1 - t),
    "bounce_in_ease_out": _bounce,
    "bounce_in_ease_in_out": lambda t: (
        (1 - _bounce(1 - 2 * t)) / 2 if t < 0.5 else (1 + _bounce(2 * t - 1)) / 2
    ),
    "bounce_back_in": _back_in,
    "bounce_back_out": _back_out,
    "bounce_back_in_out": _back_in_out,
    "bounce_back_ease_out": _bounce_back_ease_out,
    "bounce_in_back_out": lambda t: abs(_back_in_out(t)),
}


def resolve_timing_function(value: str | TimingFunction | None = None) -> TimingFunction:
    """Resolve a timing function from a name, a callable, or the default."""
    if value is None:
        value = settings.timing_function
    if callable(value):
        return value
    if isinstance(value, str) and value in TIMING_FUNCTIONS:
        return TIMING_FUNCTIONS[value]
    raise UnknownTimingFunctionError(value)


def timing_arity(function: TimingFunction) -> int:
    """Number of required positional arguments (1 scalar, 2 vector-aware)."""
    try:
        signature = inspect.signature(function)
    except (TypeError, ValueError):
        return 1
    positional = [
        parameter
        for parameter in signature.parameters.values()
        if parameter.kind in (parameter.POSITIONAL_ONLY, parameter.POSITIONAL_OR_KEYWORD)
        and parameter.default is parameter.empty
    ]
    return 2 if len(positional) >= 2 else 1
