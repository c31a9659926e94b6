"""Tests for the frame driver and morph state."""

import asyncio
import logging

import pytest
from shapes import HEXAGON, TRIANGLE

from shape_morph.animation import Morph, run_animation
from shape_morph.types import Completed, Definition, InProgress, Point, ScheduleOptions

DEFINITION = Definition(anchor=Point(x=0, y=0))


class FakeClock:
    """Clock that only moves forward when the driver sleeps."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, delay: float) -> None:
        self.sleeps.append(delay)
        self.now += delay


def _step_until(done_at: float, seen: list[float]):
    def step(elapsed: float):
        seen.append(elapsed)
        if elapsed >= done_at:
            return Completed(definition=DEFINITION)
        return InProgress(definition=DEFINITION)

    return step


class TestRunAnimation:
    @pytest.mark.asyncio
    async def test_ticks_until_completed(self) -> None:
        clock = FakeClock()
        seen: list[float] = []

        result = await run_animation(
            _step_until(250, seen), fps=10, clock=clock, sleep=clock.sleep
        )

        assert isinstance(result, Completed)
        assert seen == pytest.approx([0, 100, 200, 300])
        assert clock.sleeps == pytest.approx([0.1, 0.1, 0.1])

    @pytest.mark.asyncio
    async def test_first_tick_is_zero(self) -> None:
        clock = FakeClock()
        seen: list[float] = []
        await run_animation(_step_until(0, seen), fps=60, clock=clock, sleep=clock.sleep)
        assert seen == [0]
        assert clock.sleeps == []

    @pytest.mark.asyncio
    async def test_default_frame_rate(self) -> None:
        clock = FakeClock()
        await run_animation(_step_until(1, []), clock=clock, sleep=clock.sleep)
        assert clock.sleeps == [pytest.approx(1 / 60)]

    @pytest.mark.asyncio
    async def test_step_errors_propagate(self) -> None:
        clock = FakeClock()

        def step(elapsed: float):
            raise RuntimeError("broken frame")

        with pytest.raises(RuntimeError, match="broken frame"):
            await run_animation(step, clock=clock, sleep=clock.sleep)

    @pytest.mark.asyncio
    async def test_cancellation(self) -> None:
        task = asyncio.create_task(
            run_animation(lambda elapsed: InProgress(definition=DEFINITION), fps=100)
        )
        await asyncio.sleep(0.03)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task


class TestMorph:
    def _morph(self, duration: float = 40, **kwargs) -> Morph:
        return Morph(
            [TRIANGLE, HEXAGON, "M0 0H5V5z"],
            ScheduleOptions(delay=0, duration=duration),
            **kwargs,
        )

    def test_initial_state(self) -> None:
        morph = self._morph(start_index=1)
        assert morph.index == 1
        assert morph.definition.startswith("M3 10C")
        assert morph.definition.endswith("z")

    def test_definitions_are_equalized(self) -> None:
        morph = self._morph()
        assert {len(d.points) for d in morph.definitions} == {24}
        assert all(p.duration == 40 for d in morph.definitions for p in d.all_points())

    def test_empty_batch(self) -> None:
        with pytest.raises(ValueError):
            Morph([])

    def test_start_index_out_of_range(self) -> None:
        with pytest.raises(IndexError):
            self._morph(start_index=3)

    @pytest.mark.asyncio
    async def test_transition(self) -> None:
        morph = self._morph()
        start = morph.definition
        frames: list[str] = []

        async def on_frame(d: str) -> None:
            frames.append(d)

        final = await morph.transition_to(1, timing="linear", on_frame=on_frame, fps=200)

        assert morph.index == 1
        assert final == morph.definition
        assert final.startswith("M3 10C")
        assert frames[0] == start
        assert frames[-1] == final
        assert len(frames) > 2

    @pytest.mark.asyncio
    async def test_transition_with_function(self) -> None:
        morph = self._morph()
        await morph.transition_to(lambda index: (index + 2) % 3, fps=200)
        assert morph.index == 2
        assert morph.definition.startswith("M0 0C")

    @pytest.mark.asyncio
    async def test_transition_out_of_range(self) -> None:
        morph = self._morph()
        with pytest.raises(IndexError):
            await morph.transition_to(5)
        assert morph.index == 0

    @pytest.mark.asyncio
    async def test_failed_frame_jumps_to_target(self, caplog: pytest.LogCaptureFixture) -> None:
        morph = self._morph()

        def broken(t: float) -> float:
            raise RuntimeError("bad easing")

        with caplog.at_level(logging.ERROR, logger="shape_morph.animation"):
            with pytest.raises(RuntimeError, match="bad easing"):
                await morph.transition_to(2, timing=broken, fps=200)

        assert morph.index == 2
        assert morph.definition == Morph(
            [TRIANGLE, HEXAGON, "M0 0H5V5z"], ScheduleOptions(delay=0, duration=40), start_index=2
        ).definition
        assert "failed" in caplog.text

    @pytest.mark.asyncio
    async def test_cancelled_transition_keeps_index(self) -> None:
        morph = self._morph(duration=10_000)
        task = asyncio.create_task(morph.transition_to(1, fps=100))
        await asyncio.sleep(0.05)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert morph.index == 0
