"""
Result object for simplex optimization runs.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import json

import numpy as np
import pandas as pd


@dataclass
class SimplexResult:
    """
    Outcome of a downhill-simplex run.

    Attributes
    ----------
    x : np.ndarray
        Best parameter vector (vertex 0 of the final simplex)
    score : float
        Score of the best vertex
    iterations : int
        Iterations executed
    hit_max_iterations : bool
        True if the run stopped at the iteration cap rather than converging
    n_evaluations : int
        Number of scorer evaluations
    history : list of dict
        Per-iteration record with keys 'iteration', 'move', 'best_score'
        and 'worst_score'
    n_starts : int
        Number of starting points tried (see :func:`simplexfit.fit`)

    Examples
    --------
    >>> result = SimplexOptimizer(score, 2).minimize([0.0, 0.0])
    >>> print(result.summary())
    >>> result.to_json("fit.json")
    """

    x: np.ndarray
    score: float
    iterations: int
    hit_max_iterations: bool
    n_evaluations: int
    history: List[Dict[str, Any]] = field(default_factory=list)
    n_starts: int = 1

    @property
    def converged(self) -> bool:
        """True if the run stopped on the convergence test rather than the iteration cap."""
        return not self.hit_max_iterations

    @property
    def n_params(self) -> int:
        return len(self.x)

    def summary(self) -> str:
        """
        Generate human-readable summary of the optimization run.

        Returns
        -------
        str
            Formatted multi-line summary
        """
        lines = []
        lines.append("=" * 70)
        lines.append("NELDER-MEAD SIMPLEX OPTIMIZATION")
        lines.append("=" * 70)
        lines.append("")
        lines.append(f"Best score:           {self.score:.6f}")
        lines.append(f"Number of parameters: {self.n_params}")
        lines.append(f"Iterations:           {self.iterations}")
        lines.append(f"Score evaluations:    {self.n_evaluations}")
        if self.n_starts > 1:
            lines.append(f"Starting points:      {self.n_starts}")
        status = "converged" if self.converged else "stopped at iteration cap"
        lines.append(f"Status:               {status}")
        lines.append("")
        lines.append("PARAMETERS:")
        for i, value in enumerate(self.x):
            lines.append(f"  x[{i}] = {value:.6f}")
        lines.append("")
        lines.append("=" * 70)
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """
        Export results as a dictionary.

        The per-iteration history is not included; use
        :meth:`history_frame` for it.

        Returns
        -------
        dict
            Best point, score, iteration count and convergence flags
        """
        return {
            'x': [float(v) for v in self.x],
            'score': float(self.score),
            'iterations': int(self.iterations),
            'hit_max_iterations': bool(self.hit_max_iterations),
            'converged': self.converged,
            'n_evaluations': int(self.n_evaluations),
            'n_starts': int(self.n_starts),
        }

    def to_json(self, filepath: Optional[str] = None, indent: int = 2) -> str:
        """
        Export results as JSON.

        Parameters
        ----------
        filepath : str, optional
            If provided, write JSON to this file
        indent : int, default=2
            Indentation level for pretty printing

        Returns
        -------
        str
            JSON string representation
        """
        json_str = json.dumps(self.to_dict(), indent=indent)

        if filepath:
            with open(filepath, 'w') as f:
                f.write(json_str)

        return json_str

    def history_frame(self) -> pd.DataFrame:
        """
        Per-iteration history as a DataFrame.

        Returns
        -------
        pd.DataFrame
            One row per iteration with columns iteration, move,
            best_score, worst_score
        """
        return pd.DataFrame(
            self.history,
            columns=['iteration', 'move', 'best_score', 'worst_score'],
        )
