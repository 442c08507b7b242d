"""
Unit tests for scorer adapters, caching and monitoring.
"""

import numpy as np
import pytest

from simplexfit.optimize.scorer import (
    OptimizerScorer,
    FunctionScorer,
    MemoizedScorer,
    ScoreMonitor,
    as_scorer,
)
from simplexfit.optimize.simplex import SimplexOptimizer


class CountingLikelihood(OptimizerScorer):
    """Negative log-likelihood of a normal mean with unit variance."""

    def __init__(self, data):
        self.data = np.asarray(data, dtype=float)
        self.calls = 0

    def calculate_score(self, values):
        self.calls += 1
        mu = values[0]
        return 0.5 * float(np.sum((self.data - mu) ** 2))


class TestFunctionScorer:
    """Test the callable adapter."""

    def test_extra_args(self):
        scorer = FunctionScorer(lambda x, a, b: a * x[0] + b, args=(2.0, 1.0))
        assert scorer(np.array([3.0])) == 7.0

    def test_returns_float(self):
        scorer = FunctionScorer(lambda x: np.float32(1.5))
        assert isinstance(scorer(np.zeros(1)), float)

    def test_rejects_non_callable(self):
        with pytest.raises(TypeError, match="callable"):
            FunctionScorer("not a function")


class TestAsScorer:
    """Test scorer coercion."""

    def test_passes_scorer_through(self):
        scorer = CountingLikelihood([1.0])
        assert as_scorer(scorer) is scorer

    def test_wraps_callable(self):
        scorer = as_scorer(lambda x: 0.0)
        assert isinstance(scorer, FunctionScorer)

    def test_rejects_other_objects(self):
        with pytest.raises(TypeError):
            as_scorer(None)


class TestMemoizedScorer:
    """Test score caching."""

    def test_hits_and_misses(self):
        base = CountingLikelihood([1.0, 2.0, 3.0])
        scorer = MemoizedScorer(base)

        first = scorer(np.array([1.5]))
        second = scorer(np.array([1.5]))
        scorer(np.array([2.5]))

        assert first == second
        assert base.calls == 2
        assert scorer.hits == 1
        assert scorer.misses == 2
        assert len(scorer) == 2

    def test_clear(self):
        scorer = MemoizedScorer(lambda x: float(x[0]))
        scorer(np.array([1.0]))
        scorer.clear()

        assert len(scorer) == 0
        assert scorer.hits == 0
        assert scorer.misses == 0

    def test_same_result_as_uncached(self):
        data = [0.5, 1.5, 2.0, 4.0]
        plain = SimplexOptimizer(CountingLikelihood(data), 1).minimize([0.0])

        base = CountingLikelihood(data)
        cached = SimplexOptimizer(MemoizedScorer(base), 1).minimize([0.0])

        assert np.array_equal(plain.x, cached.x)
        assert plain.score == cached.score
        assert base.calls <= cached.n_evaluations
        assert np.isclose(cached.x[0], np.mean(data), atol=1e-4)


class TestScoreMonitor:
    """Test evaluation accounting."""

    def test_counts_invalid_scores(self):
        def score(x):
            return np.inf if x[0] < 0 else float(x[0])

        monitor = ScoreMonitor(score)
        monitor(np.array([1.0]))
        monitor(np.array([-1.0]))
        monitor(np.array([0.5]))

        assert monitor.attempts == 3
        assert monitor.rejects == 1
        assert monitor.failures == 0
        assert monitor.best_score == 0.5
        assert np.array_equal(monitor.best_values, [0.5])

    def test_nan_counts_as_invalid(self):
        monitor = ScoreMonitor(lambda x: np.nan)
        assert np.isnan(monitor(np.zeros(2)))
        assert monitor.rejects == 1
        assert monitor.best_values is None

    def test_failure_becomes_infinite(self):
        def score(x):
            raise ArithmeticError("matrix exponential did not converge")

        monitor = ScoreMonitor(score)
        with pytest.warns(RuntimeWarning, match="infeasible"):
            value = monitor(np.zeros(1))

        assert np.isinf(value)
        assert monitor.failures == 1
        assert monitor.rejects == 1
        assert isinstance(monitor.last_error, ArithmeticError)

    def test_failure_propagates_when_not_caught(self):
        def score(x):
            raise KeyError("missing family")

        monitor = ScoreMonitor(score, catch_errors=False)
        with pytest.raises(KeyError):
            monitor(np.zeros(1))
        assert monitor.attempts == 1

    def test_best_values_not_aliased(self):
        monitor = ScoreMonitor(lambda x: float(np.sum(x)))
        values = np.array([1.0, 2.0])
        monitor(values)
        values[0] = 100.0
        assert np.array_equal(monitor.best_values, [1.0, 2.0])

    def test_summarize(self):
        monitor = ScoreMonitor(lambda x: np.inf if x[0] < 0 else 2.0)
        monitor(np.array([1.0]))
        monitor(np.array([-1.0]))

        text = monitor.summarize()
        assert "Score evaluations:  2" in text
        assert "Invalid scores:     1" in text
        assert "Invalid fraction:   0.5000" in text
        assert "2.000000" in text

    def test_reset(self):
        monitor = ScoreMonitor(lambda x: 1.0)
        monitor(np.zeros(1))
        monitor.reset()
        assert monitor.attempts == 0
        assert np.isinf(monitor.best_score)
        assert "none" in monitor.summarize()

    def test_monitor_matches_optimizer_count(self):
        monitor = ScoreMonitor(CountingLikelihood([1.0, 3.0]))
        result = SimplexOptimizer(monitor, 1).minimize([0.0])
        assert monitor.attempts == result.n_evaluations
