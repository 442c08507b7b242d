"""
Downhill-simplex (Nelder-Mead) minimization of black-box score functions.

The optimizer keeps N+1 trial points in an N-dimensional parameter space,
sorted by score, and replaces the worst point each iteration with a
reflected, expanded or contracted trial point. When none of those improve
on the worst vertex the whole simplex shrinks toward the best vertex.

No derivatives are used. Infeasible or numerically unstable points are
expected to be reported by the scorer as an infinite score.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np

from .results import SimplexResult
from .scorer import as_scorer


@dataclass
class SimplexOptions:
    """
    Coefficients and tolerances for a downhill-simplex run.

    Parameters
    ----------
    rho : float, default=1.0
        Reflection coefficient (> 0)
    chi : float, default=2.0
        Expansion coefficient (> 1)
    psi : float, default=0.5
        Contraction coefficient, in (0, 1)
    sigma : float, default=0.5
        Shrink coefficient, in (0, 1)
    tolx : float, default=1e-6
        Convergence tolerance on the coordinate spread of the simplex
    tolf : float, default=1e-6
        Convergence tolerance on the score spread of the simplex
    delta : float, default=0.05
        Relative perturbation used to build the initial simplex
    zero_delta : float, default=0.00025
        Value used for a perturbed coordinate whose initial guess is exactly 0
    maxiters : int, default=10000
        Maximum number of iterations
    verbose : bool, default=False
        Print optimization progress
    print_every : int, default=100
        Iterations between progress lines when verbose
    """

    rho: float = 1.0
    chi: float = 2.0
    psi: float = 0.5
    sigma: float = 0.5
    tolx: float = 1e-6
    tolf: float = 1e-6
    delta: float = 0.05
    zero_delta: float = 0.00025
    maxiters: int = 10000
    verbose: bool = False
    print_every: int = 100

    def __post_init__(self):
        self.validate()

    def validate(self):
        """Raise ValueError if any coefficient or tolerance is out of range."""
        for name in ('rho', 'chi', 'psi', 'sigma', 'tolx', 'tolf', 'delta', 'zero_delta'):
            value = getattr(self, name)
            if not np.isfinite(value):
                raise ValueError(f"{name} must be finite, got {value}")

        if self.rho <= 0:
            raise ValueError(f"rho must be positive, got {self.rho}")
        if self.chi <= 1:
            raise ValueError(f"chi must be greater than 1, got {self.chi}")
        if not 0 < self.psi < 1:
            raise ValueError(f"psi must be in (0, 1), got {self.psi}")
        if not 0 < self.sigma < 1:
            raise ValueError(f"sigma must be in (0, 1), got {self.sigma}")
        if self.tolx <= 0:
            raise ValueError(f"tolx must be positive, got {self.tolx}")
        if self.tolf <= 0:
            raise ValueError(f"tolf must be positive, got {self.tolf}")
        if self.delta <= 0:
            raise ValueError(f"delta must be positive, got {self.delta}")
        if self.zero_delta == 0:
            raise ValueError("zero_delta must be non-zero")
        if not float(self.maxiters).is_integer() or self.maxiters < 0:
            raise ValueError(f"maxiters must be a non-negative integer, got {self.maxiters}")
        if self.print_every < 1:
            raise ValueError(f"print_every must be at least 1, got {self.print_every}")


class SimplexOptimizer:
    """
    Nelder-Mead minimizer over a fixed number of real parameters.

    Parameters
    ----------
    scorer : OptimizerScorer or callable
        Objective mapping a parameter vector of length ``n_params`` to a
        score (smaller is better). NaN scores are treated as +inf.
    n_params : int
        Number of parameters (N >= 1)
    options : SimplexOptions, optional
        Coefficients and tolerances. Defaults to ``SimplexOptions()``.
    callback : callable, optional
        Called as ``callback(optimizer)`` after every iteration.

    Examples
    --------
    >>> def score(x):
    ...     return (x[0] - 3.0) ** 2 + (x[1] + 1.0) ** 2
    >>> optimizer = SimplexOptimizer(score, 2)
    >>> best_x, best_score, iterations, hit_cap = optimizer.run([0.0, 0.0])
    """

    def __init__(
        self,
        scorer,
        n_params: int,
        options: Optional[SimplexOptions] = None,
        callback: Optional[Callable[['SimplexOptimizer'], None]] = None,
    ):
        self.options = options if options is not None else SimplexOptions()
        self.callback = callback
        self.scorer = None
        self.n_params = 0
        self.set_scorer(scorer, n_params)

        self.history = []
        self.n_evaluations = 0
        self._iterations = 0
        self._hit_max_iterations = False
        self._has_run = False

    def set_scorer(self, scorer, n_params: int):
        """
        Attach a scorer, reallocating the simplex if the dimension changes.

        Parameters
        ----------
        scorer : OptimizerScorer or callable
            Objective function
        n_params : int
            Number of parameters the scorer expects
        """
        if isinstance(n_params, bool) or int(n_params) != n_params:
            raise ValueError(f"n_params must be an integer, got {n_params!r}")
        n_params = int(n_params)
        if n_params < 1:
            raise ValueError(f"n_params must be at least 1, got {n_params}")

        if n_params != self.n_params:
            # (N+1) vertices x N coordinates, plus a scratch copy for reordering
            self._v = np.zeros((n_params + 1, n_params))
            self._v_sorted = np.zeros((n_params + 1, n_params))
            self._fv = np.zeros(n_params + 1)
            self._x_mean = np.zeros(n_params)
            self._x_r = np.zeros(n_params)
            self._x_tmp = np.zeros(n_params)
            self._has_run = False

        self.scorer = as_scorer(scorer)
        self.n_params = n_params

    # ------------------------------------------------------------------
    # Result access
    # ------------------------------------------------------------------

    def _require_run(self):
        if not self._has_run:
            raise RuntimeError("minimize() has not been run yet")

    @property
    def best_x(self) -> np.ndarray:
        """Best vertex found by the last run."""
        self._require_run()
        return self._v[0].copy()

    @property
    def best_score(self) -> float:
        """Score of the best vertex found by the last run."""
        self._require_run()
        return float(self._fv[0])

    @property
    def iterations(self) -> int:
        """Iterations executed by the last (or current) run."""
        return self._iterations

    @property
    def hit_max_iterations(self) -> bool:
        """True if the last run stopped at the iteration cap instead of converging."""
        return self._hit_max_iterations

    @property
    def vertices(self) -> np.ndarray:
        """Copy of the current simplex, best vertex first."""
        return self._v.copy()

    @property
    def scores(self) -> np.ndarray:
        """Copy of the current vertex scores, ascending."""
        return self._fv.copy()

    # ------------------------------------------------------------------
    # Simplex maintenance
    # ------------------------------------------------------------------

    def _evaluate(self, x: np.ndarray) -> float:
        score = float(self.scorer(x.copy()))
        self.n_evaluations += 1
        # NaN sorts as the worst possible score
        if np.isnan(score):
            score = np.inf
        return score

    def _sort(self):
        order = np.argsort(self._fv, kind='stable')
        self._fv[:] = self._fv[order]
        np.take(self._v, order, axis=0, out=self._v_sorted)
        self._v[:] = self._v_sorted

    def _init_simplex(self, x0: np.ndarray):
        opts = self.options
        for i in range(self.n_params + 1):
            self._v[i] = x0
            if i > 0:
                j = i - 1
                # Jump further when the previous vertex landed on an invalid score
                if i > 1 and np.isinf(self._fv[i - 1]):
                    step = opts.delta * 100
                else:
                    step = opts.delta
                self._v[i, j] = (1 + step) * x0[j] if x0[j] != 0 else opts.zero_delta
            self._fv[i] = self._evaluate(self._v[i])
        self._sort()

    def _converged(self) -> bool:
        opts = self.options
        with np.errstate(invalid='ignore'):
            x_spread = np.abs(np.diff(self._v, axis=0))
            f_spread = np.abs(self._fv[1:] - self._fv[0])
        # inf - inf: two equally infeasible vertices have no score spread
        f_spread[np.isnan(f_spread)] = 0.0
        return bool(np.max(x_spread) <= opts.tolx and np.max(f_spread) <= opts.tolf)

    def _set_worst(self, x: np.ndarray, score: float):
        self._v[self.n_params] = x
        self._fv[self.n_params] = score
        self._sort()

    def _shrink(self):
        sigma = self.options.sigma
        best = self._v[0]
        for i in range(1, self.n_params + 1):
            self._v[i] = best + sigma * (self._v[i] - best)
            self._fv[i] = self._evaluate(self._v[i])
        self._sort()

    def _step(self) -> str:
        """Perform one Nelder-Mead iteration and return the move taken."""
        opts = self.options
        n = self.n_params
        worst = self._v[n]

        self._x_mean[:] = self._v[:n].mean(axis=0)
        x_mean = self._x_mean

        self._x_r[:] = x_mean + opts.rho * (x_mean - worst)
        f_r = self._evaluate(self._x_r)

        if f_r < self._fv[0]:
            self._x_tmp[:] = x_mean + opts.chi * (self._x_r - x_mean)
            f_e = self._evaluate(self._x_tmp)
            if f_e < f_r:
                self._set_worst(self._x_tmp, f_e)
                return 'expand'
            self._set_worst(self._x_r, f_r)
            return 'reflect'

        if f_r >= self._fv[n]:
            if f_r > self._fv[n]:
                self._x_tmp[:] = x_mean + opts.psi * (x_mean - worst)
                f_cc = self._evaluate(self._x_tmp)
                if f_cc < self._fv[n]:
                    self._set_worst(self._x_tmp, f_cc)
                    return 'contract_inside'
            else:
                self._x_tmp[:] = x_mean + opts.psi * (self._x_r - x_mean)
                f_c = self._evaluate(self._x_tmp)
                if f_c <= f_r:
                    self._set_worst(self._x_tmp, f_c)
                    return 'contract_outside'
            self._shrink()
            return 'shrink'

        self._set_worst(self._x_r, f_r)
        return 'reflect'

    # ------------------------------------------------------------------
    # Running
    # ------------------------------------------------------------------

    def minimize(self, x0) -> SimplexResult:
        """
        Minimize the scorer starting from an initial guess.

        Parameters
        ----------
        x0 : array_like
            Initial guess of length ``n_params``

        Returns
        -------
        SimplexResult
            Best point, best score, iterations and cap flag
        """
        opts = self.options
        opts.validate()

        x0 = np.asarray(x0, dtype=float)
        if x0.ndim != 1 or x0.shape[0] != self.n_params:
            raise ValueError(
                f"Initial guess must have shape ({self.n_params},), got {x0.shape}"
            )

        self.history = []
        self.n_evaluations = 0
        self._iterations = 0
        self._hit_max_iterations = False

        if opts.verbose:
            print(f"Starting Nelder-Mead optimization with {self.n_params} parameters, "
                  f"maxiters={opts.maxiters}")

        self._init_simplex(x0)
        self._has_run = True

        if opts.verbose:
            print(f"Initial: best score={self._fv[0]:.6f}, worst score={self._fv[-1]:.6f}")

        while not self._converged():
            # Only reachable with maxiters == 0; a start that already meets
            # both tolerances is reported as converged
            if opts.maxiters == 0:
                self._hit_max_iterations = True
                break

            move = self._step()
            self._iterations += 1
            self.history.append({
                'iteration': self._iterations,
                'move': move,
                'best_score': float(self._fv[0]),
                'worst_score': float(self._fv[-1]),
            })

            if opts.verbose and self._iterations % opts.print_every == 0:
                print(f"  iter {self._iterations}: best={self._fv[0]:.6f} "
                      f"worst={self._fv[-1]:.6f} ({move})")

            if self.callback is not None:
                self.callback(self)

            # The cap wins even if this last step converged the simplex
            if self._iterations >= opts.maxiters:
                self._hit_max_iterations = True
                break

        if opts.verbose:
            print("\nOptimization complete!")
            print(f"Best score: {self._fv[0]:.6f}")
            print(f"Iterations: {self._iterations}")
            print(f"Evaluations: {self.n_evaluations}")
            if self._hit_max_iterations:
                print("Stopped at iteration cap")

        return SimplexResult(
            x=self._v[0].copy(),
            score=float(self._fv[0]),
            iterations=self._iterations,
            hit_max_iterations=self._hit_max_iterations,
            n_evaluations=self.n_evaluations,
            history=list(self.history),
        )

    def run(self, x0) -> Tuple[np.ndarray, float, int, bool]:
        """
        Minimize and return ``(best_x, best_score, iterations, hit_max_iterations)``.
        """
        result = self.minimize(x0)
        return result.x, result.score, result.iterations, result.hit_max_iterations
