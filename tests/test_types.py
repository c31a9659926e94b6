"""Tests for data types and settings."""

import pytest
from pydantic import ValidationError

from shape_morph.config import Settings
from shape_morph.types import (
    ArcParameters,
    CommandKind,
    Completed,
    Definition,
    InProgress,
    ParsedCommand,
    Point,
    ScheduleOptions,
)


class TestPoint:
    def test_dump_excludes_unset_window(self) -> None:
        assert Point(x=1, y=2).model_dump() == {"x": 1, "y": 2, "is_clone": False}

    def test_dump_includes_window(self) -> None:
        data = Point(x=1, y=2, delay=3, duration=4).model_dump()
        assert (data["delay"], data["duration"]) == (3, 4)


class TestDefinition:
    def test_points_must_come_in_triples(self) -> None:
        with pytest.raises(ValidationError):
            Definition(anchor=Point(x=0, y=0), points=[Point(x=1, y=1)])

    def test_commands(self) -> None:
        points = [Point(x=0, y=0), Point(x=1, y=1), Point(x=2, y=2)]
        definition = Definition(anchor=Point(x=0, y=0), points=points)
        move, cubic, close = definition.commands
        assert move.type == CommandKind.MOVE
        assert cubic.points == points
        assert close.type == CommandKind.CLOSE
        assert definition.segment_count == 1
        assert len(definition.all_points()) == 4


class TestParsedCommand:
    def test_kind(self) -> None:
        assert ParsedCommand(letter="a").kind == CommandKind.ARC
        assert ParsedCommand(letter="a").is_relative
        assert not ParsedCommand(letter="A").is_relative


class TestArcParameters:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [("1", True), ("0", False), (1, True), (0, False), ("true", True), ("false", False)],
    )
    def test_flags_are_coerced(self, value: object, expected: bool) -> None:
        arc = ArcParameters(rx=1, ry=1, large_arc=value, sweep=value, x=0, y=0)
        assert arc.large_arc is expected
        assert arc.sweep is expected


class TestScheduleOptions:
    def test_hashable(self) -> None:
        assert hash(ScheduleOptions(delay=1)) == hash(ScheduleOptions(delay=1))

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            ScheduleOptions().delay = 5  # type: ignore[misc]


class TestFrameResult:
    def test_tags(self) -> None:
        definition = Definition(anchor=Point(x=0, y=0))
        assert InProgress(definition=definition).type == "in_progress"
        assert Completed(definition=definition).completed


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)
        assert settings.precision == 2
        assert settings.frame_rate == 60
        assert (settings.min_delay, settings.max_delay) == (0, 1000)
        assert (settings.min_duration, settings.max_duration) == (3000, 5000)
        assert settings.timing_function == "ease_out_cubic"
        assert settings.log_file is None
        assert settings.error_log_file is None

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SHAPE_MORPH_PRECISION", "3")
        monkeypatch.setenv("SHAPE_MORPH_LOG_JSON", "true")
        settings = Settings(_env_file=None)
        assert settings.precision == 3
        assert settings.log_json is True
