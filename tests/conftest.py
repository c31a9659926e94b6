"""Shared fixtures for path morphing tests."""

import logging
import random

import pytest

from shape_morph.types import ScheduleOptions


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible schedules."""
    return random.Random(1234)


@pytest.fixture
def fixed_options() -> ScheduleOptions:
    """Every point starts at once and moves for one second."""
    return ScheduleOptions(delay=0, duration=1000)


@pytest.fixture
def restore_logging():
    """Put the root logger back the way it was after reconfiguring it."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
