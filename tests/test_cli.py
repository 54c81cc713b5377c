"""Tests for the command-line interface."""

import json
import logging

import pytest
from rich.logging import RichHandler
from typer.testing import CliRunner

from rootfinding_lab import __version__
from rootfinding_lab.cli import app

runner = CliRunner()


@pytest.fixture
def restore_logging():
    """Undo the root logger changes made by --verbose."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestGlobalOptions:
    """Tests for app-level options."""

    def test_version(self) -> None:
        """--version should print the version and exit cleanly."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_verbose_enables_debug_logging(self, restore_logging) -> None:
        """--verbose should lower the root log level to DEBUG."""
        result = runner.invoke(app, ["--verbose", "solve", "--json"])
        assert result.exit_code == 0
        assert logging.getLogger().level == logging.DEBUG

    def test_verbose_twice_keeps_one_handler(self, restore_logging) -> None:
        """Repeated --verbose runs in one process share a single handler."""
        for _ in range(2):
            result = runner.invoke(app, ["--verbose", "solve", "--json"])
            assert result.exit_code == 0
        handlers = [
            h for h in logging.getLogger().handlers if isinstance(h, RichHandler)
        ]
        assert len(handlers) == 1


class TestMethodsCommand:
    """Tests for `rootfinding-lab methods`."""

    def test_lists_all_methods(self) -> None:
        """All three methods should be listed."""
        result = runner.invoke(app, ["methods"])
        assert result.exit_code == 0
        for name in ("Bisection", "Newton", "Fixed point"):
            assert name in result.output


class TestSolveCommand:
    """Tests for `rootfinding-lab solve`."""

    def test_default_run(self) -> None:
        """Default inputs should print the summary and the error series."""
        result = runner.invoke(app, ["solve"])
        assert result.exit_code == 0
        assert "Bisection" in result.output
        assert "Error per iteration" in result.output

    def test_json_output(self) -> None:
        """--json should print a machine-readable run."""
        result = runner.invoke(app, ["solve", "--json"])
        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload["results"]["bisection"]["iterations"] == 10
        assert payload["parameters"]["tolerance"] == 0.001

    def test_custom_inputs(self) -> None:
        """Function, interval and tolerance options should be honoured."""
        result = runner.invoke(
            app,
            ["solve", "x^2 - 2", "--start", "0", "--end", "2", "--tol", "1e-6", "--json"],
        )
        assert result.exit_code == 0
        payload = json.loads(result.output)
        root = payload["results"]["bisection"]["root"]
        assert root == pytest.approx(2**0.5, abs=1e-6)

    def test_fixed_point_options(self) -> None:
        """--fixed-point-map and --fixed-point-iter should reach the solver."""
        result = runner.invoke(
            app,
            [
                "solve",
                "--fixed-point-map",
                "x / 2",
                "--fixed-point-iter",
                "3",
                "--tol",
                "1e-9",
                "--json",
            ],
        )
        assert result.exit_code == 0
        fixed_point = json.loads(result.output)["results"]["fixed_point"]
        assert fixed_point["iterations"] == 3
        assert fixed_point["errors"][0]["error"] == 0.25

    def test_max_iterations_option(self) -> None:
        """--max-iter should stop an otherwise endless run."""
        result = runner.invoke(
            app, ["solve", "x^2 + 1", "--tol", "0", "--max-iter", "15", "--json"]
        )
        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload["results"]["bisection"]["stop_reason"] == "iteration_cap"
        assert payload["results"]["newton"]["iterations"] == 15

    def test_output_file(self, tmp_path) -> None:
        """--output should write the run as JSON."""
        target = tmp_path / "trace.json"
        result = runner.invoke(app, ["solve", "--output", str(target)])
        assert result.exit_code == 0
        payload = json.loads(target.read_text())
        assert set(payload["results"]) == {"bisection", "newton", "fixed_point"}

    def test_parse_error_exits_nonzero(self) -> None:
        """Invalid function text should fail with exit code 1."""
        result = runner.invoke(app, ["solve", "x +* 2"])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_derivative_error_exits_nonzero(self) -> None:
        """A derivative outside the math module should exit 1, not crash."""
        result = runner.invoke(app, ["solve", "gamma(x) - 2", "--start", "0.5"])
        assert result.exit_code == 1
        assert "polygamma" in result.output

    def test_solver_failure_reported(self) -> None:
        """A failing solver should be shown without aborting the command."""
        result = runner.invoke(
            app, ["solve", "log(x)", "--start=-1", "--end=3", "--json"]
        )
        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload["results"]["bisection"] is None
        assert "bisection" in payload["failures"]
