"""
Command-line interface for Rootfinding Lab.

Usage:
    rootfinding-lab methods      Show the available root-finding methods
    rootfinding-lab solve        Run all methods on a function and show errors
"""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from rootfinding_lab import __version__
from rootfinding_lab.algorithms.orchestrator import METHODS, RunResult, calculate
from rootfinding_lab.data import (
    DEFAULT_FIXED_POINT_MAX_ITER,
    DEFAULT_FUNCTION,
    DEFAULT_INTERVAL_END,
    DEFAULT_INTERVAL_START,
    DEFAULT_TOLERANCE,
    DERIVATIVE_THRESHOLD,
    RunParameters,
    SolverSettings,
)
from rootfinding_lab.errors import DifferentiationError, ParseError

app = typer.Typer(
    name="rootfinding-lab",
    help="Watching bisection, Newton and fixed-point iteration converge",
    add_completion=False,
)
console = Console()

_LABELS = {
    "bisection": "Bisection",
    "newton": "Newton",
    "fixed_point": "Fixed point",
}


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"rootfinding-lab version {__version__}")
        raise typer.Exit()


def verbose_callback(value: bool) -> None:
    """Route library debug logs to stderr."""
    if value:
        root = logging.getLogger()
        if not any(isinstance(h, RichHandler) for h in root.handlers):
            root.addHandler(
                RichHandler(console=Console(stderr=True), show_path=False)
            )
        root.setLevel(logging.DEBUG)


@app.callback()  # type: ignore[misc]
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            help="Log solver progress to stderr.",
            callback=verbose_callback,
        ),
    ] = False,
) -> None:
    """Rootfinding Lab - Root-finding convergence experiments."""
    pass


@app.command()  # type: ignore[misc]
def methods() -> None:
    """Display the available root-finding methods."""
    table = Table(title="Root-Finding Methods")

    table.add_column("Method", style="cyan", no_wrap=True)
    table.add_column("Update")
    table.add_column("Recorded error")
    table.add_column("Stops when")
    table.add_column("Cap", justify="right")

    table.add_row(
        "Bisection",
        "mid = (a + b) / 2",
        "|b - a|",
        "|b - a| ≤ tol",
        "none",
    )
    table.add_row(
        "Newton",
        "x - f(x) / f'(x)",
        "|x_next - x|",
        f"error < tol or |f'(x)| < {DERIVATIVE_THRESHOLD:.0e}",
        "none",
    )
    table.add_row(
        "Fixed point",
        "g(x) = x² - 2",
        "|g(x) - x|",
        "error < tol",
        str(DEFAULT_FIXED_POINT_MAX_ITER),
    )

    console.print(table)
    console.print(
        "\n[yellow]Note:[/] the fixed-point map ignores the function being solved. "
        "Pass [bold]--fixed-point-map[/] to iterate a different g(x)."
    )


@app.command()  # type: ignore[misc]
def solve(
    function: Annotated[
        str,
        typer.Argument(help="Function of x (e.g. 'x^2 - 2')"),
    ] = DEFAULT_FUNCTION,
    start: Annotated[
        str,
        typer.Option("--start", "-a", help="Interval start"),
    ] = str(DEFAULT_INTERVAL_START),
    end: Annotated[
        str,
        typer.Option("--end", "-b", help="Interval end"),
    ] = str(DEFAULT_INTERVAL_END),
    tolerance: Annotated[
        str,
        typer.Option("--tol", "-t", help="Convergence tolerance"),
    ] = str(DEFAULT_TOLERANCE),
    max_iterations: Annotated[
        int | None,
        typer.Option(
            "--max-iter",
            "-i",
            help="Iteration guard for bisection and Newton (default: none)",
        ),
    ] = None,
    fixed_point_iterations: Annotated[
        int,
        typer.Option("--fixed-point-iter", help="Fixed-point iteration cap"),
    ] = DEFAULT_FIXED_POINT_MAX_ITER,
    fixed_point_map: Annotated[
        str | None,
        typer.Option("--fixed-point-map", "-g", help="Custom fixed-point map g(x)"),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the full run as JSON"),
    ] = False,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the full run as JSON to a file"),
    ] = None,
) -> None:
    """Find roots with bisection, Newton and fixed-point iteration."""
    params = RunParameters.from_form(
        function, start, end, tolerance, fixed_point_map=fixed_point_map
    )
    settings = SolverSettings(
        max_iterations=max_iterations,
        fixed_point_max_iter=fixed_point_iterations,
    )

    try:
        run = calculate(params, settings)
    except (ParseError, DifferentiationError) as exc:
        console.print(f"[red]Error:[/] {exc}")
        raise typer.Exit(code=1) from exc

    payload = run.to_dict()
    if output is not None:
        output.write_text(json.dumps(payload, indent=2))

    if as_json:
        typer.echo(json.dumps(payload, indent=2))
        return

    _print_summary(run)
    _print_series(run)
    if output is not None:
        console.print(f"\nTrace written to [bold]{output}[/]")


def _format_number(value: float | None) -> str:
    return "undefined" if value is None else f"{value:.10g}"


def _print_summary(run: RunResult) -> None:
    params = run.parameters
    table = Table(
        title=(
            f"f(x) = {params.expression_text} on "
            f"[{params.interval_start:g}, {params.interval_end:g}], "
            f"tol = {params.tolerance:g}"
        )
    )

    table.add_column("Method", style="cyan", no_wrap=True)
    table.add_column("Root", justify="right")
    table.add_column("Iterations", justify="right")
    table.add_column("Final error", justify="right")
    table.add_column("Status")

    for name, result in run.results().items():
        if result is None:
            table.add_row(
                _LABELS[name], "-", "-", "-", f"[red]failed[/]: {run.failures[name]}"
            )
            continue

        final_error = result.final_error
        table.add_row(
            _LABELS[name],
            _format_number(result.root),
            str(result.iterations),
            "-" if final_error is None else f"{final_error:.3e}",
            result.stop_reason.value,
        )

    console.print(table)


def _print_series(run: RunResult) -> None:
    """Print the error series side by side, one row per iteration."""
    results = run.results()
    length = max(
        (result.iterations for result in results.values() if result is not None),
        default=0,
    )
    if length == 0:
        return

    table = Table(title="Error per iteration")
    table.add_column("Iteration", justify="right")
    for name in METHODS:
        table.add_column(_LABELS[name], justify="right")

    for i in range(length):
        row = [str(i + 1)]
        for name in METHODS:
            result = results[name]
            if result is None or i >= result.iterations:
                row.append("")
            else:
                row.append(f"{result.errors[i].error:.3e}")
        table.add_row(*row)

    console.print(table)


if __name__ == "__main__":
    app()
