"""
Scorer interfaces consumed by the simplex optimizer.

A scorer maps a parameter vector to a single real score, smaller being
better. Infeasible or numerically unstable points are reported as an
infinite score rather than an exception.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional, Tuple
import warnings

import numpy as np


class OptimizerScorer(ABC):
    """
    Abstract base class for objective functions minimized by the optimizer.

    Subclasses implement :meth:`calculate_score`. Instances are callable, so
    they can be passed anywhere a plain function is accepted.
    """

    @abstractmethod
    def calculate_score(self, values: np.ndarray) -> float:
        """
        Score a parameter vector.

        Parameters
        ----------
        values : np.ndarray
            Parameter vector

        Returns
        -------
        float
            Score to minimize; ``inf`` for infeasible points
        """
        pass

    def __call__(self, values: np.ndarray) -> float:
        return self.calculate_score(values)


class FunctionScorer(OptimizerScorer):
    """
    Adapt a plain callable ``func(x, *args)`` to the scorer interface.

    Parameters
    ----------
    func : callable
        Objective function returning a scalar
    args : tuple, optional
        Extra positional arguments passed after the parameter vector
    """

    def __init__(self, func: Callable[..., float], args: Tuple = ()):
        if not callable(func):
            raise TypeError(f"Objective must be callable, got {type(func).__name__}")
        self.func = func
        self.args = tuple(args)

    def calculate_score(self, values: np.ndarray) -> float:
        return float(self.func(values, *self.args))


class MemoizedScorer(OptimizerScorer):
    """
    Cache scores of an underlying scorer by exact parameter values.

    Useful when the objective is expensive (e.g. a likelihood over many
    families) and the optimizer revisits identical points.

    The cache is unbounded: every scored point is kept until :meth:`clear`
    is called or the scorer is discarded. Create one per fit rather than
    sharing it across long-lived searches.

    Parameters
    ----------
    scorer : OptimizerScorer or callable
        Scorer to cache
    """

    def __init__(self, scorer):
        self.scorer = as_scorer(scorer)
        self._cache = {}
        self.hits = 0
        self.misses = 0

    def calculate_score(self, values: np.ndarray) -> float:
        key = np.ascontiguousarray(values, dtype=float).tobytes()
        if key in self._cache:
            self.hits += 1
            return self._cache[key]

        self.misses += 1
        score = self.scorer(values)
        self._cache[key] = score
        return score

    def __len__(self) -> int:
        return len(self._cache)

    def clear(self):
        """Forget all cached scores and reset hit/miss counts."""
        self._cache.clear()
        self.hits = 0
        self.misses = 0


class ScoreMonitor(OptimizerScorer):
    """
    Track scorer calls: attempts, invalid scores, failures and best score.

    Parameters
    ----------
    scorer : OptimizerScorer or callable
        Scorer to monitor
    catch_errors : bool, default=True
        If True, an exception raised by the scorer is recorded and the point
        is scored as ``inf``. If False the exception propagates.

    Attributes
    ----------
    attempts : int
        Number of scorer calls
    rejects : int
        Number of calls that returned a non-finite score (including failures)
    failures : int
        Number of calls that raised an exception
    best_score : float
        Best finite score seen so far (``inf`` if none)
    best_values : np.ndarray or None
        Parameter vector that produced ``best_score``
    """

    def __init__(self, scorer, catch_errors: bool = True):
        self.scorer = as_scorer(scorer)
        self.catch_errors = catch_errors
        self.reset()

    def reset(self):
        """Clear all counters."""
        self.attempts = 0
        self.rejects = 0
        self.failures = 0
        self.best_score = np.inf
        self.best_values: Optional[np.ndarray] = None
        self.last_error: Optional[Exception] = None

    def calculate_score(self, values: np.ndarray) -> float:
        self.attempts += 1
        try:
            score = float(self.scorer(values))
        except Exception as e:
            if not self.catch_errors:
                raise
            self.failures += 1
            self.last_error = e
            warnings.warn(
                f"Scorer failed ({type(e).__name__}: {e}); treating point as infeasible",
                RuntimeWarning
            )
            score = np.inf

        if not np.isfinite(score):
            self.rejects += 1
        elif score < self.best_score:
            self.best_score = score
            self.best_values = np.array(values, dtype=float, copy=True)

        return score

    def summarize(self) -> str:
        """
        Format the monitor counters as a short report.

        Returns
        -------
        str
            Multi-line summary
        """
        lines = []
        lines.append(f"Score evaluations:  {self.attempts}")
        lines.append(f"Invalid scores:     {self.rejects}")
        lines.append(f"Scorer failures:    {self.failures}")
        if self.attempts:
            lines.append(f"Invalid fraction:   {self.rejects / self.attempts:.4f}")
        if np.isfinite(self.best_score):
            lines.append(f"Best finite score:  {self.best_score:.6f}")
        else:
            lines.append("Best finite score:  none")
        return "\n".join(lines)


def as_scorer(scorer) -> OptimizerScorer:
    """
    Return ``scorer`` as an :class:`OptimizerScorer`, wrapping plain callables.

    Raises
    ------
    TypeError
        If ``scorer`` is neither an OptimizerScorer nor callable
    """
    if isinstance(scorer, OptimizerScorer):
        return scorer
    if callable(scorer):
        return FunctionScorer(scorer)
    raise TypeError(f"Scorer must be callable, got {type(scorer).__name__}")
