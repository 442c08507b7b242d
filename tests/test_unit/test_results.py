"""
Unit tests for SimplexResult.
"""

import json

import numpy as np
import pandas as pd
import pytest

from simplexfit.optimize.results import SimplexResult
from simplexfit.optimize.simplex import SimplexOptimizer


@pytest.fixture
def result(shifted_quadratic):
    return SimplexOptimizer(shifted_quadratic, 2).minimize([0.0, 0.0])


class TestSimplexResult:
    """Test result accessors and export."""

    def test_converged_flag(self):
        capped = SimplexResult(x=np.zeros(2), score=1.0, iterations=5,
                               hit_max_iterations=True, n_evaluations=12)
        assert not capped.converged
        assert capped.n_params == 2

    def test_to_dict(self, result):
        data = result.to_dict()

        assert set(data) == {
            'x', 'score', 'iterations', 'hit_max_iterations',
            'converged', 'n_evaluations', 'n_starts',
        }
        assert isinstance(data['x'], list)
        assert data['converged'] is True
        assert data['n_starts'] == 1
        assert np.allclose(data['x'], [3.0, -1.0], atol=1e-4)

    def test_to_json_round_trip(self, result, tmp_path):
        path = tmp_path / "result.json"
        text = result.to_json(str(path))

        assert path.exists()
        loaded = json.loads(path.read_text())
        assert loaded == json.loads(text)
        assert loaded['iterations'] == result.iterations

    def test_summary(self, result):
        text = result.summary()
        assert "NELDER-MEAD SIMPLEX OPTIMIZATION" in text
        assert "Best score:" in text
        assert "Status:               converged" in text
        assert "x[0] = 3.0000" in text
        assert "Starting points" not in text

    def test_summary_reports_cap(self):
        capped = SimplexResult(x=np.array([1.0]), score=2.0, iterations=3,
                               hit_max_iterations=True, n_evaluations=8, n_starts=2)
        text = capped.summary()
        assert "stopped at iteration cap" in text
        assert "Starting points:      2" in text

    def test_history_frame(self, result):
        frame = result.history_frame()

        assert isinstance(frame, pd.DataFrame)
        assert list(frame.columns) == ['iteration', 'move', 'best_score', 'worst_score']
        assert len(frame) == result.iterations
        assert frame['best_score'].is_monotonic_decreasing

    def test_empty_history_frame(self):
        empty = SimplexResult(x=np.zeros(1), score=0.0, iterations=0,
                              hit_max_iterations=True, n_evaluations=2)
        frame = empty.history_frame()
        assert len(frame) == 0
        assert 'move' in frame.columns
