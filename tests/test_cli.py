"""Tests for the command line interface."""

import pytest
from shapes import TRIANGLE
from typer.testing import CliRunner

from shape_morph.cli import app

runner = CliRunner()

pytestmark = pytest.mark.usefixtures("restore_logging")


class TestParse:
    def test_shows_commands(self) -> None:
        result = runner.invoke(app, ["parse", "M0 0L1.2.3z"])
        assert result.exit_code == 0
        assert "x=1.2 y=0.3" in result.output

    def test_grammar_error(self) -> None:
        result = runner.invoke(app, ["parse", "M0 0X1 1"])
        assert result.exit_code == 1
        assert "Unexpected character 'X' at position 4" in result.output


class TestNormalize:
    def test_prints_canonical_forms(self) -> None:
        result = runner.invoke(app, ["normalize", TRIANGLE, "M0 0H5V5H0z"])
        assert result.exit_code == 0
        assert "M0 0C0 0 0 0 1 1 1 1 1 1 1 1 1 1 1 1 2 0 2 0 2 0 0 0z" in result.output
        assert result.output.count("4 segments") == 2

    def test_arity_error(self) -> None:
        result = runner.invoke(app, ["normalize", "M0 0L1"])
        assert result.exit_code == 1
        assert "Invalid definition" in result.output


class TestFrames:
    def test_evenly_spaced_frames(self) -> None:
        result = runner.invoke(
            app,
            ["frames", "M0 0L10 0L10 10z", "M0 0L20 0L20 20z", "--steps", "2"],
        )
        assert result.exit_code == 0
        assert "M0 0C0 0 0 0 10 0 10 0 10 0 10 10 10 10 10 10 0 0z" in result.output
        assert "M0 0C0 0 0 0 15 0 15 0 15 0 15 15 15 15 15 15 0 0z" in result.output
        assert "M0 0C0 0 0 0 20 0 20 0 20 0 20 20 20 20 20 20 0 0z" in result.output
        assert "1000 ms completed" in result.output

    def test_delay_and_timing(self) -> None:
        result = runner.invoke(
            app,
            [
                "frames",
                "M0 0L10 0L10 10z",
                "M0 0L20 0L20 20z",
                "--steps",
                "1",
                "--delay",
                "500",
                "--duration",
                "500",
                "--timing",
                "ease_in_quad",
            ],
        )
        assert result.exit_code == 0
        assert "0 ms in_progress" in result.output
        assert "1000 ms completed" in result.output

    def test_unknown_timing(self) -> None:
        result = runner.invoke(
            app, ["frames", TRIANGLE, TRIANGLE, "--steps", "2", "--timing", "wobble"]
        )
        assert result.exit_code == 1
        assert "wobble" in result.output

    def test_invalid_steps(self) -> None:
        result = runner.invoke(app, ["frames", TRIANGLE, TRIANGLE, "--steps", "0"])
        assert result.exit_code == 1


class TestTimings:
    def test_lists_timing_functions(self) -> None:
        result = runner.invoke(app, ["timings"])
        assert result.exit_code == 0
        assert "ease_out_cubic" in result.output
        assert "linear" in result.output
