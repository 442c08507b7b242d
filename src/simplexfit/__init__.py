"""
simplexfit: derivative-free maximum likelihood parameter fitting.

Fits real-valued model parameters by minimizing a black-box score, such as
a negative log-likelihood, with the downhill-simplex (Nelder-Mead) method.

Quick Start
-----------
Minimize a function:

>>> from simplexfit import fit
>>> result = fit(lambda x: (x[0] - 3) ** 2 + (x[1] + 1) ** 2, [0.0, 0.0])
>>> print(result.summary())
>>> print(result.x, result.score)

Use the optimizer directly:

>>> from simplexfit import SimplexOptimizer, SimplexOptions
>>> optimizer = SimplexOptimizer(score, 2, SimplexOptions(tolx=1e-8, maxiters=500))
>>> best_x, best_score, iterations, hit_cap = optimizer.run([0.0, 0.0])
"""

__version__ = "0.1.0"

from .api import fit

from .optimize import (
    SimplexOptimizer,
    SimplexOptions,
    SimplexResult,
    OptimizerScorer,
    FunctionScorer,
    MemoizedScorer,
    ScoreMonitor,
)

__all__ = [
    # Simple API - Start here!
    "fit",

    # Optimizer
    "SimplexOptimizer",
    "SimplexOptions",
    "SimplexResult",

    # Scorers
    "OptimizerScorer",
    "FunctionScorer",
    "MemoizedScorer",
    "ScoreMonitor",

    # Version
    "__version__",
]
