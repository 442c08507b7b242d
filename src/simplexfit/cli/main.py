"""Main CLI application for simplexfit."""

import typer
from pathlib import Path
from typing import Optional
from enum import Enum

app = typer.Typer(
    name="simplexfit",
    help="Derivative-free parameter fitting with the Nelder-Mead simplex method",
    no_args_is_help=True,
)


class Objective(str, Enum):
    """Built-in objective function."""
    QUADRATIC = "quadratic"
    ROSENBROCK = "rosenbrock"
    HIMMELBLAU = "himmelblau"


class OutputFormat(str, Enum):
    """Output format."""
    TEXT = "text"
    JSON = "json"


@app.command()
def minimize(
    function: Objective = typer.Option(
        ...,
        "--function", "-f",
        help="Objective function to minimize",
    ),
    x0: str = typer.Option(
        ...,
        "--x0",
        help="Comma-separated initial guess, e.g. '0,0'",
    ),
    center: Optional[str] = typer.Option(
        None,
        "--center",
        help="Comma-separated minimum location for the quadratic objective",
    ),
    tolx: float = typer.Option(
        1e-6,
        "--tolx",
        help="Convergence tolerance on simplex coordinate spread",
    ),
    tolf: float = typer.Option(
        1e-6,
        "--tolf",
        help="Convergence tolerance on simplex score spread",
    ),
    maxiter: int = typer.Option(
        10000,
        "--maxiter",
        help="Maximum optimization iterations",
        min=0,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output", "-o",
        help="Output file (default: stdout)",
        file_okay=True,
        dir_okay=False,
    ),
    format: OutputFormat = typer.Option(
        OutputFormat.TEXT,
        "--format",
        help="Output format",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Show optimization progress",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet", "-q",
        help="Minimal output",
    ),
):
    """
    Minimize a built-in objective function.

    Example:
        simplexfit minimize -f rosenbrock --x0 "-1.2,1"
        simplexfit minimize -f quadratic --x0 "0,0" --center "3,-1" --format json
    """
    from .commands.minimize import run_minimize

    run_minimize(
        function=function.value,
        x0=x0,
        center=center,
        tolx=tolx,
        tolf=tolf,
        maxiter=maxiter,
        output=output,
        format=format.value,
        verbose=verbose,
        quiet=quiet,
    )


@app.command(name="list-functions")
def list_functions():
    """
    List the built-in objective functions.
    """
    from ..functions import OBJECTIVES

    for name, func in OBJECTIVES.items():
        doc = (func.__doc__ or "").strip().splitlines()
        typer.echo(f"{name:12s} {doc[0] if doc else ''}")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
