"""CLI for shape-morph - inspect path definitions and transitions.

Usage:
    python -m shape_morph.cli parse "M0 0L10 0 10 10z"
    python -m shape_morph.cli normalize "M0 0L10 0 10 10z" "M0 0H10V10H0z"
    python -m shape_morph.cli frames "M0 0L10 0 10 10z" "M0 0H10V10H0z" --steps 4
    python -m shape_morph.cli timings
"""

import logging

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from shape_morph.interpolation import ShapeMismatchError, interpolate
from shape_morph.logging_config import setup_dev_logging
from shape_morph.normalize import normalize_definitions
from shape_morph.parser import ArityError, GrammarError, parse_definition, parse_definitions
from shape_morph.schedule import set_schedules
from shape_morph.serialize import serialize_definition
from shape_morph.timing import TIMING_FUNCTIONS, UnknownTimingFunctionError
from shape_morph.types import ScheduleOptions

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="shape-morph",
    help="Normalize path definitions and preview the transitions between them",
    add_completion=False,
)
console = Console()

# Errors reported to the user instead of a traceback
USER_ERRORS = (GrammarError, ArityError, ShapeMismatchError, UnknownTimingFunctionError)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output"),
) -> None:
    """Configure logging before running a command."""
    setup_dev_logging()
    if verbose:
        logging.getLogger("shape_morph").setLevel(logging.DEBUG)
        logger.debug("Verbose logging enabled")


def _print_path(d: str) -> None:
    console.print(d, soft_wrap=True, highlight=False, markup=False)


@app.command("parse")
def parse(
    definition: str = typer.Argument(..., help="Path data to parse"),
) -> None:
    """Show the commands and raw parameter groups of a definition."""
    try:
        commands = parse_definition(definition)
    except USER_ERRORS as e:
        console.print(f"[red]Invalid definition: {e}[/red]")
        raise typer.Exit(1) from e

    table = Table(title="Commands", box=box.ROUNDED)
    table.add_column("#", style="dim")
    table.add_column("Command", style="cyan")
    table.add_column("Groups", style="green")

    for i, command in enumerate(commands):
        groups = "; ".join(
            " ".join(f"{name}={value}" for name, value in group.items())
            for group in command.groups
        )
        table.add_row(str(i), command.letter, groups or "-")

    console.print(table)


@app.command("normalize")
def normalize(
    definitions: list[str] = typer.Argument(..., help="Path data, one or more"),
) -> None:
    """Print the canonical, equalized form of each definition.

    Examples:
        shape-morph normalize "M0 0L10 0 10 10z" "M0 0H10V10H0z"
    """
    try:
        normalized = normalize_definitions(parse_definitions(definitions))
    except USER_ERRORS as e:
        console.print(f"[red]Invalid definition: {e}[/red]")
        raise typer.Exit(1) from e

    for definition in normalized:
        console.print(f"[dim]{definition.segment_count} segments[/dim]")
        _print_path(serialize_definition(definition))


@app.command("frames")
def frames(
    source: str = typer.Argument(..., help="Path data to start from"),
    target: str = typer.Argument(..., help="Path data to end on"),
    steps: int = typer.Option(4, "--steps", "-n", help="Intervals between the two shapes"),
    timing: str = typer.Option("linear", "--timing", "-t", help="Timing function name"),
    delay: float = typer.Option(0, "--delay", help="Delay of every point (ms)"),
    duration: float = typer.Option(1000, "--duration", help="Duration of every point (ms)"),
) -> None:
    """Print the intermediate definitions at evenly spaced times.

    Every point shares the same delay and duration, so the output is
    deterministic.
    """
    if steps < 1:
        console.print("[red]Steps must be at least 1[/red]")
        raise typer.Exit(1)
    if duration <= 0:
        console.print("[red]Duration must be positive[/red]")
        raise typer.Exit(1)

    try:
        from_definition, to_definition = set_schedules(
            normalize_definitions(parse_definitions([source, target])),
            ScheduleOptions(delay=delay, duration=duration),
        )
        total = delay + duration
        results = [
            (
                elapsed,
                interpolate(from_definition, to_definition, elapsed, timing),
            )
            for elapsed in (total * i / steps for i in range(steps + 1))
        ]
    except USER_ERRORS as e:
        console.print(f"[red]Cannot build frames: {e}[/red]")
        raise typer.Exit(1) from e

    for elapsed, result in results:
        console.print(f"[dim]{elapsed:.0f} ms {result.type}[/dim]")
        _print_path(serialize_definition(result.definition))


@app.command("timings")
def timings() -> None:
    """List the named timing functions."""
    table = Table(title="Timing Functions", box=box.ROUNDED)
    table.add_column("Name", style="cyan")
    table.add_column("0.25", justify="right")
    table.add_column("0.5", justify="right")
    table.add_column("0.75", justify="right")

    for name, function in TIMING_FUNCTIONS.items():
        table.add_row(name, *(f"{function(t):.3f}" for t in (0.25, 0.5, 0.75)))

    console.print(table)


if __name__ == "__main__":
    app()
