"""Path morphing core.

Turns path definitions into a canonical cubic form and interpolates between
them:
- parser: path data strings to commands with raw parameters
- normalize: commands to one move, one cubic command and a close
- equalize: same segment count across a batch
- schedule: per-point delay and duration
- interpolation: intermediate definitions over time
- serialize: canonical definitions back to path data
- animation: frame driver and morph state
"""

from shape_morph.animation import Morph, run_animation
from shape_morph.arc import arc_to_cubic, kappa
from shape_morph.equalize import equalize, equalize_definition
from shape_morph.interpolation import (
    FrameFunction,
    ShapeMismatchError,
    frame_function,
    interpolate,
)
from shape_morph.normalize import normalize_commands, normalize_definitions
from shape_morph.parser import ArityError, GrammarError, parse_definition, parse_definitions
from shape_morph.schedule import ScheduleCache, set_schedule, set_schedules
from shape_morph.serialize import format_number, serialize_definition, serialize_definitions
from shape_morph.timing import (
    TIMING_FUNCTIONS,
    UnknownTimingFunctionError,
    resolve_timing_function,
)
from shape_morph.types import (
    ArcParameters,
    Command,
    CommandKind,
    Completed,
    Definition,
    FrameResult,
    FrameWindow,
    InProgress,
    ParsedCommand,
    Point,
    ScheduleOptions,
)

__all__ = [
    # Types
    "ArcParameters",
    "Command",
    "CommandKind",
    "Completed",
    "Definition",
    "FrameResult",
    "FrameWindow",
    "InProgress",
    "ParsedCommand",
    "Point",
    "ScheduleOptions",
    # Errors
    "ArityError",
    "GrammarError",
    "ShapeMismatchError",
    "UnknownTimingFunctionError",
    # Operations
    "FrameFunction",
    "Morph",
    "ScheduleCache",
    "TIMING_FUNCTIONS",
    "arc_to_cubic",
    "equalize",
    "equalize_definition",
    "format_number",
    "frame_function",
    "interpolate",
    "kappa",
    "normalize_commands",
    "normalize_definitions",
    "parse_definition",
    "parse_definitions",
    "resolve_timing_function",
    "run_animation",
    "serialize_definition",
    "serialize_definitions",
    "set_schedule",
    "set_schedules",
]
