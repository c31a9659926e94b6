"""Per-point animation windows (delay and duration).

Points sharing a position receive the same window, so the two controls and the
end position of a segment (and any clone of it) move together. The cache that
guarantees this belongs to the caller: create one per normalization session
and never share it between threads.
"""

import logging
import random

from shape_morph.config import settings
from shape_morph.types import Definition, Point, ScheduleOptions

logger = logging.getLogger(__name__)

CacheKey = tuple[int, int, ScheduleOptions]


class ScheduleCache:
    """Windows already picked, keyed by quantized position and options."""

    def __init__(self, precision: int | None = None) -> None:
        self.precision = precision if precision is not None else settings.precision
        self._windows: dict[CacheKey, tuple[float, float]] = {}

    def __len__(self) -> int:
        return len(self._windows)

    def key(self, point: Point, options: ScheduleOptions) -> CacheKey:
        scale = 10**self.precision
        return (round(point.x * scale), round(point.y * scale), options)

    def get(self, point: Point, options: ScheduleOptions) -> tuple[float, float] | None:
        return self._windows.get(self.key(point, options))

    def set(self, point: Point, options: ScheduleOptions, window: tuple[float, float]) -> None:
        self._windows[self.key(point, options)] = window


def _pick(
    explicit: float | None,
    low: float | None,
    high: float | None,
    default_low: float,
    default_high: float,
    rng: random.Random,
) -> float:
    if explicit is not None:
        return explicit
    low = default_low if low is None else low
    high = default_high if high is None else high
    return rng.uniform(low, high)


def pick_window(options: ScheduleOptions, rng: random.Random) -> tuple[float, float]:
    """Choose a (delay, duration) pair within the option bounds."""
    delay = _pick(
        options.delay,
        options.min_delay,
        options.max_delay,
        settings.min_delay,
        settings.max_delay,
        rng,
    )
    duration = _pick(
        options.duration,
        options.min_duration,
        options.max_duration,
        settings.min_duration,
        settings.max_duration,
        rng,
    )
    return delay, duration


def _window_for(
    position: Point, options: ScheduleOptions, cache: ScheduleCache, rng: random.Random
) -> tuple[float, float]:
    window = cache.get(position, options)
    if window is None:
        window = pick_window(options, rng)
        cache.set(position, options, window)
    return window


def _with_window(point: Point, window: tuple[float, float]) -> Point:
    delay, duration = window
    return point.model_copy(update={"delay": delay, "duration": duration})


def set_schedule(
    definition: Definition,
    options: ScheduleOptions,
    cache: ScheduleCache,
    rng: random.Random | None = None,
) -> Definition:
    """Return a copy of the definition with a window on every point.

    The anchor is keyed by its own position. In each segment, the start control
    follows the previous end position while the end control follows its own end
    position.
    """
    rng = rng or random.Random()
    anchor = _with_window(definition.anchor, _window_for(definition.anchor, options, cache, rng))

    points: list[Point] = []
    previous_end = definition.anchor
    for i in range(0, len(definition.points), 3):
        start_control, end_control, end = definition.points[i : i + 3]
        start_window = _window_for(previous_end, options, cache, rng)
        end_window = _window_for(end, options, cache, rng)
        points.extend(
            [
                _with_window(start_control, start_window),
                _with_window(end_control, end_window),
                _with_window(end, end_window),
            ]
        )
        previous_end = end

    return Definition(anchor=anchor, points=points)


def set_schedules(
    definitions: list[Definition],
    options: ScheduleOptions | None = None,
    cache: ScheduleCache | None = None,
    rng: random.Random | None = None,
) -> list[Definition]:
    """Set windows on a batch of definitions, sharing one cache."""
    options = options if options is not None else ScheduleOptions()
    cache = cache if cache is not None else ScheduleCache()
    rng = rng or random.Random()
    scheduled = [set_schedule(definition, options, cache, rng) for definition in definitions]
    logger.debug("Scheduled %d definitions (%d distinct windows)", len(scheduled), len(cache))
    return scheduled
