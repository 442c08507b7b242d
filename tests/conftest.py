"""
Pytest configuration and shared fixtures.
"""

import numpy as np
import pytest
from typer.testing import CliRunner


class RecordingScorer:
    """Callable that records every point it is asked to score."""

    def __init__(self, func):
        self.func = func
        self.calls = []

    def __call__(self, x):
        self.calls.append(np.array(x, dtype=float))
        return self.func(x)


@pytest.fixture
def shifted_quadratic():
    """f(x, y) = (x - 3)^2 + (y + 1)^2, minimum 0 at (3, -1)."""
    def score(x):
        return (x[0] - 3.0) ** 2 + (x[1] + 1.0) ** 2
    return score


@pytest.fixture
def recording_scorer():
    """Factory wrapping a function so that evaluated points are recorded."""
    return RecordingScorer


@pytest.fixture
def cli_runner():
    """CLI test runner for Typer apps."""
    return CliRunner()
