"""
Downhill-simplex optimization for maximum likelihood parameter estimation.

This module provides:

- **SimplexOptimizer**: Nelder-Mead minimizer over a black-box scorer
- **SimplexOptions**: coefficients, tolerances and iteration cap
- **Scorers**: adapters, caching and monitoring around objective functions

The optimizer never uses derivatives; infeasible points are signalled by
the scorer returning an infinite score.
"""

from simplexfit.optimize.simplex import SimplexOptimizer, SimplexOptions
from simplexfit.optimize.results import SimplexResult
from simplexfit.optimize.scorer import (
    OptimizerScorer,
    FunctionScorer,
    MemoizedScorer,
    ScoreMonitor,
    as_scorer,
)

__all__ = [
    "SimplexOptimizer",
    "SimplexOptions",
    "SimplexResult",
    "OptimizerScorer",
    "FunctionScorer",
    "MemoizedScorer",
    "ScoreMonitor",
    "as_scorer",
]
