"""Type definitions for path morphing."""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class CommandKind(str, Enum):
    """Path commands, keyed by their absolute letter."""

    MOVE = "M"
    LINE = "L"
    HORIZONTAL_LINE = "H"
    VERTICAL_LINE = "V"
    CUBIC = "C"
    SMOOTH_CUBIC = "S"
    QUADRATIC = "Q"
    SMOOTH_QUADRATIC = "T"
    ARC = "A"
    CLOSE = "Z"


# Parameter names of one group, per command kind
GROUP_PARAMETERS: dict[CommandKind, tuple[str, ...]] = {
    CommandKind.MOVE: ("x", "y"),
    CommandKind.LINE: ("x", "y"),
    CommandKind.HORIZONTAL_LINE: ("x",),
    CommandKind.VERTICAL_LINE: ("y",),
    CommandKind.CUBIC: ("x", "y"),
    CommandKind.SMOOTH_CUBIC: ("x", "y"),
    CommandKind.QUADRATIC: ("x", "y"),
    CommandKind.SMOOTH_QUADRATIC: ("x", "y"),
    CommandKind.ARC: ("rx", "ry", "angle", "large_arc", "sweep", "x", "y"),
    CommandKind.CLOSE: (),
}

# Groups needed to draw one segment (start control, end control, end position...)
SEGMENT_GROUPS: dict[CommandKind, int] = {
    CommandKind.CUBIC: 3,
    CommandKind.SMOOTH_CUBIC: 2,
    CommandKind.QUADRATIC: 2,
}

# Single-digit boolean parameters
FLAG_PARAMETERS = frozenset({"large_arc", "sweep"})


class ParsedCommand(BaseModel):
    """A command as written, with raw decimal strings for parameters."""

    letter: str
    groups: list[dict[str, str]] = []

    @property
    def kind(self) -> CommandKind:
        return CommandKind(self.letter.upper())

    @property
    def is_relative(self) -> bool:
        return self.letter.islower()


class Point(BaseModel):
    """A 2D point, optionally carrying its animation window."""

    x: float
    y: float
    delay: float | None = None  # ms before the point starts moving
    duration: float | None = None  # ms the point takes to reach its target
    is_clone: bool = False  # synthetic duplicate inserted by the equalizer

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)

    def model_dump(self, **kwargs: Any) -> dict[str, Any]:
        """Serialize point, excluding unset animation values by default."""
        kwargs.setdefault("exclude_none", True)
        return super().model_dump(**kwargs)


class Command(BaseModel):
    """A normalized command."""

    type: CommandKind
    points: list[Point] = []


class Definition(BaseModel):
    """Canonical form of one outline: move, a single cubic command, close.

    `points` is the flattened cubic command: each consecutive triple is the
    start control, end control and end position of one segment.
    """

    anchor: Point
    points: list[Point] = []

    @model_validator(mode="after")
    def _check_triples(self) -> "Definition":
        if len(self.points) % 3:
            raise ValueError(
                f"cubic points must come in triples, got {len(self.points)} points"
            )
        return self

    @property
    def commands(self) -> list[Command]:
        return [
            Command(type=CommandKind.MOVE, points=[self.anchor]),
            Command(type=CommandKind.CUBIC, points=list(self.points)),
            Command(type=CommandKind.CLOSE),
        ]

    @property
    def segment_count(self) -> int:
        return len(self.points) // 3

    def all_points(self) -> list[Point]:
        """Anchor followed by the cubic points, in drawing order."""
        return [self.anchor, *self.points]


class ArcParameters(BaseModel):
    """Numeric parameters of one elliptical arc group."""

    rx: float
    ry: float
    angle: float = 0.0
    large_arc: bool = False
    sweep: bool = False
    x: float
    y: float

    @field_validator("large_arc", "sweep", mode="before")
    @classmethod
    def _coerce_flag(cls, value: Any) -> bool:
        if isinstance(value, str):
            value = value.strip()
            try:
                return float(value) != 0
            except ValueError:
                return value.lower() == "true"
        return bool(value)


class ScheduleOptions(BaseModel):
    """Bounds used to pick per-point delays and durations (milliseconds).

    Explicit `delay`/`duration` apply to every point; otherwise a value is
    drawn between the matching min and max.
    """

    model_config = ConfigDict(frozen=True)

    delay: float | None = None
    duration: float | None = None
    min_delay: float | None = None
    max_delay: float | None = None
    min_duration: float | None = None
    max_duration: float | None = None


class FrameWindow(BaseModel):
    """Default animation window for points without their own."""

    delay: float = 0.0
    duration: float = 1000.0


class InProgress(BaseModel):
    """A frame of a transition that has not finished yet."""

    type: Literal["in_progress"] = "in_progress"
    definition: Definition

    @property
    def completed(self) -> bool:
        return False


class Completed(BaseModel):
    """The final frame of a transition."""

    type: Literal["completed"] = "completed"
    definition: Definition

    @property
    def completed(self) -> bool:
        return True


FrameResult = InProgress | Completed
