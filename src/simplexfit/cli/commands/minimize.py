"""Minimize command implementation."""

import sys
import warnings
from contextlib import redirect_stdout
from functools import partial
from pathlib import Path
from typing import List, Optional

from simplexfit import fit
from simplexfit.functions import OBJECTIVES


def parse_vector(text: str) -> List[float]:
    """Parse a comma-separated list of numbers."""
    values = [v.strip() for v in text.split(',')]
    if not values or any(v == '' for v in values):
        raise ValueError(f"Empty entry in vector '{text}'")
    return [float(v) for v in values]


def run_minimize(
    function: str,
    x0: str,
    center: Optional[str],
    tolx: float,
    tolf: float,
    maxiter: int,
    output: Optional[Path],
    format: str,
    verbose: bool,
    quiet: bool,
):
    """Minimize a built-in objective."""
    if function not in OBJECTIVES:
        print(f"Error: Unknown function '{function}'", file=sys.stderr)
        print(f"Valid functions: {', '.join(OBJECTIVES)}", file=sys.stderr)
        sys.exit(1)

    try:
        x0_values = parse_vector(x0)
    except ValueError as e:
        print(f"Error: Could not parse --x0 '{x0}'", file=sys.stderr)
        print(f"Details: {e}", file=sys.stderr)
        sys.exit(1)

    objective = OBJECTIVES[function]
    if center is not None:
        if function != 'quadratic':
            print("Error: --center only applies to the quadratic function", file=sys.stderr)
            sys.exit(1)
        try:
            center_values = parse_vector(center)
        except ValueError as e:
            print(f"Error: Could not parse --center '{center}'", file=sys.stderr)
            print(f"Details: {e}", file=sys.stderr)
            sys.exit(1)
        if len(center_values) != len(x0_values):
            print("Error: --center and --x0 must have the same length", file=sys.stderr)
            sys.exit(1)
        objective = partial(objective, center=center_values)

    if not quiet:
        print(f"Minimizing: {function}", file=sys.stderr)
        print("=" * 80, file=sys.stderr)
        print(f"Initial guess: {x0_values}", file=sys.stderr)
        print(file=sys.stderr)

    try:
        # Progress goes to stderr so stdout carries only the result
        with warnings.catch_warnings(record=True) as caught, redirect_stdout(sys.stderr):
            warnings.simplefilter("always")
            result = fit(
                objective,
                x0_values,
                tolx=tolx,
                tolf=tolf,
                maxiters=maxiter,
                verbose=verbose,
            )
    except ValueError as e:
        print("Error: Optimization failed", file=sys.stderr)
        print(f"Details: {e}", file=sys.stderr)
        sys.exit(1)

    if not quiet:
        for w in caught:
            print(f"Warning: {w.message}", file=sys.stderr)

    # Format output
    if format == "json":
        output_text = result.to_json()
    else:  # text
        output_text = result.summary()

    # Write output
    if output:
        if format == "json":
            result.to_json(str(output))
        else:
            with open(output, 'w') as f:
                f.write(output_text)
        if not quiet:
            print(f"\nResults written to {output}", file=sys.stderr)
    else:
        print(output_text)
