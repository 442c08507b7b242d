"""
Standard test objectives for derivative-free minimization.
"""

from typing import Callable, Dict, Optional

import numpy as np
from scipy.optimize import rosen


def quadratic(x: np.ndarray, center: Optional[np.ndarray] = None) -> float:
    """
    Convex quadratic bowl: sum((x - center)^2).

    Parameters
    ----------
    x : np.ndarray
        Parameter vector
    center : np.ndarray, optional
        Location of the minimum (default: origin)

    Returns
    -------
    float
        Squared distance from ``center``
    """
    x = np.asarray(x, dtype=float)
    if center is None:
        center = np.zeros_like(x)
    diff = x - np.asarray(center, dtype=float)
    return float(np.dot(diff, diff))


def rosenbrock(x: np.ndarray) -> float:
    """
    Rosenbrock banana function, minimum 0 at (1, ..., 1).

    Requires at least two parameters.
    """
    x = np.asarray(x, dtype=float)
    if x.size < 2:
        raise ValueError("Rosenbrock function needs at least 2 parameters")
    return float(rosen(x))


def himmelblau(x: np.ndarray) -> float:
    """
    Himmelblau's function of two variables.

    Four minima with value 0, one of them at (3, 2).
    """
    x = np.asarray(x, dtype=float)
    if x.size != 2:
        raise ValueError("Himmelblau function takes exactly 2 parameters")
    a, b = x
    return float((a**2 + b - 11) ** 2 + (a + b**2 - 7) ** 2)


# Objectives available from the command line
OBJECTIVES: Dict[str, Callable[[np.ndarray], float]] = {
    'quadratic': quadratic,
    'rosenbrock': rosenbrock,
    'himmelblau': himmelblau,
}
