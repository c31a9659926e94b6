"""Frame driver and morph state.

The driver calls a frame step with the time elapsed since the transition
started, at the configured frame rate, until the step reports completion.
Cancelling the task running it stops the transition; the pure frame step
needs no cleanup.

Morph holds a batch of definitions ready to be interpolated into one another,
the index of the current one, and its current serialized value.
"""

import asyncio
import logging
import random
import time
from collections.abc import Awaitable, Callable

from shape_morph.config import settings
from shape_morph.interpolation import FrameFunction, frame_function
from shape_morph.normalize import normalize_definitions
from shape_morph.parser import parse_definitions
from shape_morph.schedule import ScheduleCache, set_schedules
from shape_morph.serialize import serialize_definition
from shape_morph.timing import TimingFunction
from shape_morph.types import Completed, Definition, FrameResult, ScheduleOptions

logger = logging.getLogger(__name__)


async def run_animation(
    step: FrameFunction,
    fps: int | None = None,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> Completed:
    """Call `step` once per frame until it returns a Completed frame.

    Args:
        step: Frame step receiving the elapsed time in milliseconds
        fps: Frames per second (default: from settings)
        clock: Monotonic clock in seconds
        sleep: Coroutine used to wait between frames

    Returns:
        The completed frame
    """
    fps = fps or settings.frame_rate
    frame_delay = 1.0 / fps
    start = clock()
    elapsed = 0.0
    frames = 0

    while True:
        result = step(elapsed)
        frames += 1
        if isinstance(result, Completed):
            logger.debug("Animation completed after %d frames (%.0f ms)", frames, elapsed)
            return result
        await sleep(frame_delay)
        elapsed = (clock() - start) * 1000


class Morph:
    """A batch of outlines and the transitions between them.

    Definitions are parsed, normalized, equalized and scheduled once. The
    current value is always a serialized path string.
    """

    def __init__(
        self,
        definitions: list[str],
        options: ScheduleOptions | None = None,
        start_index: int = 0,
        precision: int | None = None,
        rng: random.Random | None = None,
    ) -> None:
        if not definitions:
            raise ValueError("Morph needs at least one definition")
        self.precision = precision if precision is not None else settings.precision
        normalized = normalize_definitions(parse_definitions(definitions), self.precision)
        self._definitions = set_schedules(
            normalized, options, ScheduleCache(self.precision), rng
        )
        self._index = self._check_index(start_index)
        self._value = serialize_definition(self._definitions[self._index])

    def _check_index(self, index: int) -> int:
        if not 0 <= index < len(self._definitions):
            raise IndexError(f"No definition at index {index} (have {len(self._definitions)})")
        return index

    @property
    def index(self) -> int:
        return self._index

    @property
    def definition(self) -> str:
        """Current serialized path data."""
        return self._value

    @property
    def definitions(self) -> list[Definition]:
        return list(self._definitions)

    def frame(
        self, to_index: int, timing: str | TimingFunction | None = None
    ) -> FrameFunction:
        """Frame step from the current definition to the one at `to_index`.

        Each call also commits the intermediate serialized value.
        """
        step = frame_function(
            self._definitions[self._index],
            self._definitions[self._check_index(to_index)],
            timing,
            precision=self.precision,
        )

        def commit(elapsed: float) -> FrameResult:
            result = step(elapsed)
            self._value = serialize_definition(result.definition)
            return result

        return commit

    async def transition_to(
        self,
        next_index: int | Callable[[int], int],
        timing: str | TimingFunction | None = None,
        on_frame: Callable[[str], Awaitable[None]] | None = None,
        fps: int | None = None,
    ) -> str:
        """Animate into another definition of the batch.

        Args:
            next_index: Target index, or a function of the current index
            timing: Timing function or its name (default: from settings)
            on_frame: Callback awaited with each intermediate value
            fps: Frames per second (default: from settings)

        Returns:
            The final serialized value
        """
        to_index = next_index(self._index) if callable(next_index) else next_index
        commit = self.frame(to_index, timing)
        pending: list[str] = []

        def step(elapsed: float) -> FrameResult:
            result = commit(elapsed)
            pending.append(self._value)
            return result

        async def sleep(delay: float) -> None:
            if on_frame is not None:
                while pending:
                    await on_frame(pending.pop(0))
            await asyncio.sleep(delay)

        try:
            await run_animation(step, fps=fps, sleep=sleep)
        except asyncio.CancelledError:
            logger.info("Transition %d -> %d cancelled", self._index, to_index)
            raise
        except Exception:
            logger.exception("Transition %d -> %d failed, jumping to target", self._index, to_index)
            self._settle(to_index)
            raise

        self._settle(to_index)
        if on_frame is not None:
            await on_frame(self._value)
        return self._value

    def _settle(self, index: int) -> None:
        self._index = index
        self._value = serialize_definition(self._definitions[index])
