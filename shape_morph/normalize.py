"""Normalize parsed commands into a single cubic command.

Every drawing command becomes one or more cubic segments so that any two
definitions can later be interpolated point for point:

    M0 0 H1 V1 z  ->  M0 0 C0 0 0 0 1 0 1 0 1 0 1 1 1 1 1 1 0 0 z
"""

import logging

from shape_morph.arc import arc_to_cubic
from shape_morph.config import settings
from shape_morph.equalize import equalize
from shape_morph.geometry import reflect, same_position
from shape_morph.parser import ArityError, GrammarError
from shape_morph.types import (
    FLAG_PARAMETERS,
    SEGMENT_GROUPS,
    ArcParameters,
    CommandKind,
    Definition,
    ParsedCommand,
    Point,
)

logger = logging.getLogger(__name__)

# Radii below this draw a straight line instead of an arc
MIN_ARC_RADIUS = 1e-9

CUBIC_KINDS = frozenset({CommandKind.CUBIC, CommandKind.SMOOTH_CUBIC})
QUADRATIC_KINDS = frozenset({CommandKind.QUADRATIC, CommandKind.SMOOTH_QUADRATIC})


def elevate_quadratic(start: Point, control: Point, end: Point) -> list[Point]:
    """Express a quadratic segment as an exact cubic segment."""
    return [
        Point(x=start.x + 2 / 3 * (control.x - start.x), y=start.y + 2 / 3 * (control.y - start.y)),
        Point(x=end.x + 2 / 3 * (control.x - end.x), y=end.y + 2 / 3 * (control.y - end.y)),
        end,
    ]


def line_segment(start: Point, end: Point) -> list[Point]:
    """Express a straight line as a cubic segment with controls on its start."""
    return [start, start, end]


class _Normalizer:
    """Walks commands while tracking the pen and the last control points."""

    def __init__(self, anchor: Point, precision: int) -> None:
        self.anchor = anchor
        self.current = anchor
        self.precision = precision
        self.points: list[Point] = []
        self.previous_kind: CommandKind | None = None
        self.cubic_control: Point | None = None  # second control of the last cubic segment
        self.quadratic_control: Point | None = None  # control of the last quadratic segment

    def _position(self, group: dict[str, str], relative: bool) -> Point:
        x, y = float(group["x"]), float(group["y"])
        if relative:
            return Point(x=self.current.x + x, y=self.current.y + y)
        return Point(x=x, y=y)

    def _emit(self, kind: CommandKind, segment: list[Point]) -> None:
        self.points.extend(segment)
        if segment:
            self.current = segment[-1]
        self.previous_kind = kind

    def line_to(self, end: Point, kind: CommandKind = CommandKind.LINE) -> None:
        self._emit(kind, line_segment(self.current, end))

    def close(self) -> None:
        if not same_position(self.current, self.anchor):
            self.line_to(self.anchor)
        self.current = self.anchor
        self.previous_kind = CommandKind.CLOSE

    def apply(self, command: ParsedCommand) -> None:
        kind = command.kind
        relative = command.is_relative
        step = SEGMENT_GROUPS.get(kind, 1)

        if kind == CommandKind.CLOSE:
            self.close()
            return

        for i in range(0, len(command.groups), step):
            groups = command.groups[i : i + step]
            match kind:
                case CommandKind.MOVE | CommandKind.LINE:
                    if kind == CommandKind.MOVE and i == 0:
                        logger.warning("Drawing a line for a move inside the path")
                    self.line_to(self._position(groups[0], relative))

                case CommandKind.HORIZONTAL_LINE:
                    x = float(groups[0]["x"])
                    end_x = self.current.x + x if relative else x
                    self.line_to(Point(x=end_x, y=self.current.y), kind)

                case CommandKind.VERTICAL_LINE:
                    y = float(groups[0]["y"])
                    end_y = self.current.y + y if relative else y
                    self.line_to(Point(x=self.current.x, y=end_y), kind)

                case CommandKind.CUBIC:
                    segment = [self._position(group, relative) for group in groups]
                    self.cubic_control = segment[1]
                    self._emit(kind, segment)

                case CommandKind.SMOOTH_CUBIC:
                    if self.previous_kind in CUBIC_KINDS and self.cubic_control is not None:
                        first = reflect(self.cubic_control, self.current)
                    else:
                        first = self.current
                    second, end = (self._position(group, relative) for group in groups)
                    self.cubic_control = second
                    self._emit(kind, [first, second, end])

                case CommandKind.QUADRATIC:
                    control, end = (self._position(group, relative) for group in groups)
                    self.quadratic_control = control
                    self._emit(kind, elevate_quadratic(self.current, control, end))

                case CommandKind.SMOOTH_QUADRATIC:
                    if self.previous_kind in QUADRATIC_KINDS and self.quadratic_control is not None:
                        control = reflect(self.quadratic_control, self.current)
                    else:
                        control = self.current
                    end = self._position(groups[0], relative)
                    self.quadratic_control = control
                    self._emit(kind, elevate_quadratic(self.current, control, end))

                case CommandKind.ARC:
                    self.arc_to(groups[0], relative)

    def arc_to(self, group: dict[str, str], relative: bool) -> None:
        values = {
            name: value if name in FLAG_PARAMETERS else float(value)
            for name, value in group.items()
        }
        arc = ArcParameters(**values)
        if relative:
            arc = arc.model_copy(update={"x": self.current.x + arc.x, "y": self.current.y + arc.y})
        end = Point(x=arc.x, y=arc.y)

        if abs(arc.rx) < MIN_ARC_RADIUS or abs(arc.ry) < MIN_ARC_RADIUS:
            self.line_to(end, CommandKind.ARC)
            return
        if same_position(self.current, end):
            # Nothing to draw, the arc is omitted
            return
        self._emit(CommandKind.ARC, arc_to_cubic(self.current, arc, self.precision))


def normalize_commands(
    commands: list[ParsedCommand], precision: int | None = None
) -> Definition:
    """Transform parsed commands into a canonical definition.

    Args:
        commands: Parsed commands, starting with a move command
        precision: Decimals kept for converted arcs (default: from settings)

    Returns:
        Definition made of the anchor and a closed single cubic command

    Raises:
        GrammarError: When the path does not start with a move command
        ArityError: When the path has no move to a point
    """
    precision = precision if precision is not None else settings.precision
    if commands and commands[0].kind != CommandKind.MOVE:
        raise GrammarError(commands[0].letter, 0)
    if not commands or not commands[0].groups:
        raise ArityError("M", 2, 0)

    first = commands[0]
    anchor = Point(x=float(first.groups[0]["x"]), y=float(first.groups[0]["y"]))
    normalizer = _Normalizer(anchor, precision)

    # Extra move pairs are implicit line commands
    if len(first.groups) > 1:
        line_letter = "l" if first.is_relative else "L"
        normalizer.apply(ParsedCommand(letter=line_letter, groups=first.groups[1:]))

    for command in commands[1:]:
        normalizer.apply(command)
    normalizer.close()

    return Definition(anchor=anchor, points=normalizer.points)


def normalize_definitions(
    batch: list[list[ParsedCommand]], precision: int | None = None
) -> list[Definition]:
    """Normalize a batch of parsed definitions to the same point count."""
    definitions = [normalize_commands(commands, precision) for commands in batch]
    return equalize(definitions)
