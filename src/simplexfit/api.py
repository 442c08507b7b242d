"""
High-level API for fitting parameters with the downhill-simplex optimizer.

This module wraps objective functions in the scorer machinery, runs one
optimizer per starting point and returns a single result object.
"""

from typing import Any, Callable, Iterable, Optional, Tuple
import warnings

import numpy as np

from .optimize.results import SimplexResult
from .optimize.scorer import FunctionScorer, MemoizedScorer, ScoreMonitor
from .optimize.simplex import SimplexOptimizer, SimplexOptions


def fit(
    func: Callable[..., float],
    x0,
    args: Tuple = (),
    restarts: Optional[Iterable[Any]] = None,
    memoize: bool = False,
    callback: Optional[Callable[[SimplexOptimizer], None]] = None,
    verbose: bool = False,
    **options,
) -> SimplexResult:
    """
    Minimize ``func`` with Nelder-Mead from one or more starting points.

    Parameters
    ----------
    func : callable
        Objective ``func(x, *args) -> float``; smaller is better. Return
        ``inf`` for infeasible points.
    x0 : array_like
        Initial guess
    args : tuple, optional
        Extra positional arguments for ``func``
    restarts : iterable of array_like, optional
        Additional starting points. Each one gets its own optimizer.
    memoize : bool, default=False
        Cache scores of previously evaluated points
    callback : callable, optional
        Called as ``callback(optimizer)`` after every iteration
    verbose : bool, default=False
        Print optimization progress
    **options
        Fields of :class:`SimplexOptions` (rho, chi, psi, sigma, tolx,
        tolf, delta, zero_delta, maxiters, print_every)

    Returns
    -------
    SimplexResult
        Best result over all starting points. ``n_evaluations`` counts
        scorer calls across all starts.

    Warns
    -----
    UserWarning
        If the best result stopped at the iteration cap

    Examples
    --------
    >>> from simplexfit import fit
    >>> result = fit(lambda x: (x[0] - 3) ** 2 + (x[1] + 1) ** 2, [0.0, 0.0])
    >>> print(result.summary())

    >>> # Try several starting points and keep the best
    >>> result = fit(himmelblau, [0.0, 0.0], restarts=[[-4.0, 4.0], [4.0, -4.0]])
    """
    opts = SimplexOptions(verbose=verbose, **options)

    x0 = np.asarray(x0, dtype=float)
    if x0.ndim != 1 or x0.size == 0:
        raise ValueError(f"Initial guess must be a non-empty 1-D vector, got shape {x0.shape}")
    n_params = x0.size

    scorer = FunctionScorer(func, args)
    if memoize:
        scorer = MemoizedScorer(scorer)
    monitor = ScoreMonitor(scorer, catch_errors=False)

    starts = [x0] + [np.asarray(s, dtype=float) for s in (restarts or [])]

    best = None
    for k, start in enumerate(starts):
        if verbose and len(starts) > 1:
            print(f"\nStart {k + 1}/{len(starts)}: x0={np.array2string(start, precision=4)}")

        optimizer = SimplexOptimizer(monitor, n_params, options=opts, callback=callback)
        result = optimizer.minimize(start)

        if best is None or result.score < best.score:
            best = result

    best.n_evaluations = monitor.attempts
    best.n_starts = len(starts)

    if verbose:
        print()
        print(monitor.summarize())

    if best.hit_max_iterations:
        warnings.warn(
            f"Optimization stopped at the iteration cap (maxiters={opts.maxiters}) "
            f"with tolx={opts.tolx} and tolf={opts.tolf}. "
            "Consider a larger maxiters or a different starting point.",
            UserWarning
        )

    return best
