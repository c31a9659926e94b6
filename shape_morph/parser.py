"""Parse path definition strings into commands with raw parameters.

The scanner works character by character so it can honour the compressed
forms found in optimized paths:

- `-` always starts a new number
- a second `.` starts a new number with an implicit leading zero
  ("1.2.3" is "1.2" then "0.3")
- arc flags are single digits and need no separator ("11" is "1 1")
"""

import logging
import re

from shape_morph.types import (
    FLAG_PARAMETERS,
    GROUP_PARAMETERS,
    SEGMENT_GROUPS,
    CommandKind,
    ParsedCommand,
)

logger = logging.getLogger(__name__)

SEPARATORS = frozenset(" ,\t\n\r\f")
SIGNS = frozenset("+-")
# Sign, then digits with an optional fraction or a bare fraction
NUMBER = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)", re.ASCII)
COMMAND_LETTERS = frozenset(kind.value for kind in CommandKind) | frozenset(
    kind.value.lower() for kind in CommandKind
)


class GrammarError(ValueError):
    """Raised when a character cannot start or continue a command."""

    def __init__(self, offending_char: str, position: int) -> None:
        self.offending_char = offending_char
        self.position = position
        super().__init__(f"Unexpected character {offending_char!r} at position {position}")


class ArityError(ValueError):
    """Raised when a command holds an incomplete set of parameters."""

    def __init__(self, command: str, expected: int, received: int) -> None:
        self.command = command
        self.expected = expected
        self.received = received
        if expected:
            detail = f"a multiple of {expected} parameters"
        else:
            detail = "no parameters"
        super().__init__(f"Command {command!r} expects {detail}, got {received}")


def command_arity(kind: CommandKind) -> int:
    """Number of parameters drawing one segment of this kind takes."""
    return len(GROUP_PARAMETERS[kind]) * SEGMENT_GROUPS.get(kind, 1)


class _CommandScanner:
    """Accumulates the raw numbers of a single command."""

    def __init__(self, letter: str) -> None:
        self.letter = letter
        self.parameters = GROUP_PARAMETERS[CommandKind(letter.upper())]
        self.values: list[str] = []
        self.ends: list[int] = []  # position of the last character of each value
        self.open = False  # last value can still grow

    def _current_is_flag(self) -> bool:
        if not self.parameters:
            return False
        name = self.parameters[(len(self.values) - 1) % len(self.parameters)]
        return name in FLAG_PARAMETERS

    def _start(self, text: str, position: int) -> None:
        self.values.append(text)
        self.ends.append(position)
        self.open = True

    def _extend(self, char: str, position: int) -> None:
        self.values[-1] += char
        self.ends[-1] = position

    def close(self) -> None:
        self.open = False

    def feed(self, char: str, position: int) -> None:
        if char in SIGNS:
            self._start(char, position)
        elif char == ".":
            if self.open and "." in self.values[-1]:
                self._start("0.", position)
            elif self.open and not self._current_is_flag():
                self._extend(char, position)
            else:
                self._start(char, position)
        elif self.open and self._current_is_flag() and self.values[-1] not in SIGNS:
            # Flags are one digit long: the next digit belongs to the next parameter
            self._start(char, position)
        elif self.open:
            self._extend(char, position)
        else:
            self._start(char, position)

    def build(self) -> ParsedCommand:
        for value, end in zip(self.values, self.ends, strict=True):
            if not NUMBER.fullmatch(value):
                raise GrammarError(value[-1], end)

        kind = CommandKind(self.letter.upper())
        arity = command_arity(kind)
        received = len(self.values)
        if (arity == 0 and received) or (arity and received % arity):
            raise ArityError(self.letter, arity, received)
        if not self.parameters:
            return ParsedCommand(letter=self.letter)

        size = len(self.parameters)
        groups = [
            dict(zip(self.parameters, self.values[i : i + size], strict=True))
            for i in range(0, received, size)
        ]
        return ParsedCommand(letter=self.letter, groups=groups)


def parse_definition(definition: str) -> list[ParsedCommand]:
    """Parse a path definition string into commands.

    Args:
        definition: Path data (e.g., "M0 0L1 1L2 0z")

    Returns:
        Commands in order, parameters kept as the decimal strings read

    Raises:
        GrammarError: On an unknown command letter, a stray character or an
            incomplete number (a lone sign or dot)
        ArityError: When a command's parameters do not fill whole segments
    """
    commands: list[ParsedCommand] = []
    scanner: _CommandScanner | None = None

    for position, char in enumerate(definition):
        if char in SEPARATORS:
            if scanner is not None:
                scanner.close()
            continue

        if char.isalpha():
            if char not in COMMAND_LETTERS:
                raise GrammarError(char, position)
            if scanner is not None:
                commands.append(scanner.build())
            scanner = _CommandScanner(char)
            continue

        if not (char.isdigit() or char == "." or char in SIGNS) or scanner is None:
            raise GrammarError(char, position)
        scanner.feed(char, position)

    if scanner is not None:
        commands.append(scanner.build())

    logger.debug("Parsed %d commands from %d characters", len(commands), len(definition))
    return commands


def parse_definitions(definitions: list[str]) -> list[list[ParsedCommand]]:
    """Parse a batch of path definition strings."""
    return [parse_definition(d) for d in definitions]
