"""
Base class for single-objective, bound-constrained minimization problems.
"""

from __future__ import annotations

import math
import sys
from typing import TYPE_CHECKING, Sequence

import numpy as np

from swarmtune.foundation.exceptions import BoundsError, ProblemDimensionError

if TYPE_CHECKING:
    from swarmtune.foundation.core.run_condition import RunCondition


def _as_bounds(values: Sequence[float] | np.ndarray | float, n: int | None = None) -> np.ndarray:
    arr = np.asarray(values, dtype=float)
    if arr.ndim == 0:
        if n is None:
            raise BoundsError("Scalar bounds need an explicit dimensionality.")
        arr = np.full(n, float(arr))
    return arr


class Problem:
    """Base class for problems optimized by swarmtune.

    A problem exposes its search bounds, initialization bounds, a scalar
    fitness to minimize and, optionally, the run condition used when an
    optimizer has none of its own.

    **Required:** pass ``lower_bound``/``upper_bound`` to ``__init__`` (or
    override the properties) and implement :meth:`fitness`.
    **Optional:** ``lower_init``/``upper_init`` (default to the bounds),
    ``min_fitness``, ``acceptable_fitness``, ``parameter_names``.

    Example::

        import numpy as np
        from swarmtune import Problem, RunConditionIterations

        class Quadratic(Problem):
            name = "Quadratic"

            def __init__(self):
                super().__init__(
                    lower_bound=np.full(3, -5.0),
                    upper_bound=np.full(3, 5.0),
                    run_condition=RunConditionIterations(2000),
                )

            def fitness(self, x, fitness_limit=float("inf")):
                return float(np.sum((x - 1.0) ** 2))
    """

    name: str = "Problem"
    min_fitness: float = 0.0
    """Lowest possible fitness, used to shift meta-fitness sums to be non-negative."""

    def __init__(
        self,
        lower_bound: Sequence[float] | np.ndarray | None = None,
        upper_bound: Sequence[float] | np.ndarray | None = None,
        lower_init: Sequence[float] | np.ndarray | None = None,
        upper_init: Sequence[float] | np.ndarray | None = None,
        run_condition: "RunCondition | None" = None,
    ) -> None:
        self._lower_bound = None if lower_bound is None else _as_bounds(lower_bound)
        self._upper_bound = None if upper_bound is None else _as_bounds(upper_bound)
        self._lower_init = None if lower_init is None else _as_bounds(lower_init)
        self._upper_init = None if upper_init is None else _as_bounds(upper_init)
        self._run_condition = run_condition

    # ------------------------------------------------------------------
    # Search space
    # ------------------------------------------------------------------

    @property
    def lower_bound(self) -> np.ndarray:
        if self._lower_bound is None:
            raise NotImplementedError(f"{type(self).__name__} does not define lower_bound.")
        return self._lower_bound

    @property
    def upper_bound(self) -> np.ndarray:
        if self._upper_bound is None:
            raise NotImplementedError(f"{type(self).__name__} does not define upper_bound.")
        return self._upper_bound

    @property
    def lower_init(self) -> np.ndarray:
        return self.lower_bound if self._lower_init is None else self._lower_init

    @property
    def upper_init(self) -> np.ndarray:
        return self.upper_bound if self._upper_init is None else self._upper_init

    @property
    def dimensionality(self) -> int:
        return int(self.lower_bound.shape[0])

    @property
    def parameter_names(self) -> list[str] | None:
        return None

    # ------------------------------------------------------------------
    # Fitness
    # ------------------------------------------------------------------

    @property
    def max_fitness(self) -> float:
        """Worst possible fitness; the starting value of every best-so-far."""
        return sys.float_info.max

    @property
    def acceptable_fitness(self) -> float:
        """A run reaching this fitness counts as successful."""
        return self.min_fitness

    @property
    def run_condition(self) -> "RunCondition | None":
        return self._run_condition

    @run_condition.setter
    def run_condition(self, value: "RunCondition | None") -> None:
        self._run_condition = value

    def fitness(self, x: np.ndarray, fitness_limit: float = math.inf) -> float:
        """Evaluate ``x``.

        Implementations may return early with any value above ``fitness_limit``
        once they can prove the true fitness exceeds it. When they do not exit
        early the value must equal the unlimited computation.
        """
        raise NotImplementedError

    def is_feasible(self, x: np.ndarray) -> bool:
        """Problem-defined validity predicate; default is bound membership."""
        x = np.asarray(x, dtype=float)
        return bool(np.all(x >= self.lower_bound) and np.all(x <= self.upper_bound))

    def validate(self) -> None:
        """Check bound arrays for consistent shape and ordering."""
        n = self.dimensionality
        if n <= 0:
            raise ProblemDimensionError(f"{self.name} must have positive dimensionality.", n)
        for label, arr in (
            ("upper_bound", self.upper_bound),
            ("lower_init", self.lower_init),
            ("upper_init", self.upper_init),
        ):
            if arr.shape != (n,):
                raise BoundsError(f"{self.name}.{label} has shape {arr.shape}, expected ({n},).")
        if np.any(self.lower_bound > self.upper_bound):
            raise BoundsError(f"{self.name} has lower_bound > upper_bound.")
        if np.any(self.lower_init > self.upper_init):
            raise BoundsError(f"{self.name} has lower_init > upper_init.")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class ProblemWrapper(Problem):
    """Decorator that forwards everything to an inner problem.

    Subclasses override :meth:`fitness` to observe or alter evaluations.
    """

    def __init__(self, problem: Problem) -> None:
        super().__init__()
        self.problem = problem

    @property
    def name(self) -> str:  # type: ignore[override]
        return self.problem.name

    @property
    def lower_bound(self) -> np.ndarray:
        return self.problem.lower_bound

    @property
    def upper_bound(self) -> np.ndarray:
        return self.problem.upper_bound

    @property
    def lower_init(self) -> np.ndarray:
        return self.problem.lower_init

    @property
    def upper_init(self) -> np.ndarray:
        return self.problem.upper_init

    @property
    def dimensionality(self) -> int:
        return self.problem.dimensionality

    @property
    def parameter_names(self) -> list[str] | None:
        return self.problem.parameter_names

    @property
    def min_fitness(self) -> float:  # type: ignore[override]
        return self.problem.min_fitness

    @property
    def max_fitness(self) -> float:
        return self.problem.max_fitness

    @property
    def acceptable_fitness(self) -> float:
        return self.problem.acceptable_fitness

    @property
    def run_condition(self) -> "RunCondition | None":
        return self.problem.run_condition

    @run_condition.setter
    def run_condition(self, value: "RunCondition | None") -> None:
        self.problem.run_condition = value

    def fitness(self, x: np.ndarray, fitness_limit: float = math.inf) -> float:
        return self.problem.fitness(x, fitness_limit)

    def is_feasible(self, x: np.ndarray) -> bool:
        return self.problem.is_feasible(x)


__all__ = ["Problem", "ProblemWrapper"]
