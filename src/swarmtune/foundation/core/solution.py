from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
from numpy.typing import NDArray


def _frozen_copy(values: Sequence[float] | np.ndarray) -> NDArray[np.float64]:
    # Optimizers mutate their working buffers in place; callers get an owned, read-only copy.
    arr = np.array(values, dtype=float, copy=True)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class Solution:
    """A candidate retained by a log, e.g. one of the top-k meta-fitness evaluations."""

    parameters: NDArray[np.float64]
    fitness: float
    feasible: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", _frozen_copy(self.parameters))
        object.__setattr__(self, "fitness", float(self.fitness))


@dataclass(frozen=True, eq=False)
class Result:
    """
    Outcome of one optimization run.

    Attributes:
        parameters: Best-found position (owned copy).
        fitness: Fitness of ``parameters`` exactly as the problem evaluated it.
        iterations: Number of iterations (fitness evaluations) the run used.
        feasible: Whether ``parameters`` satisfies the problem's feasibility predicate.
    """

    parameters: NDArray[np.float64]
    fitness: float
    iterations: int
    feasible: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", _frozen_copy(self.parameters))
        object.__setattr__(self, "fitness", float(self.fitness))
        object.__setattr__(self, "iterations", int(self.iterations))

    def __repr__(self) -> str:
        return f"Result(fitness={self.fitness!r}, iterations={self.iterations}, n={self.parameters.size})"

    def same_as(self, other: "Result") -> bool:
        """Exact equality of parameters, fitness and iteration count."""
        return (
            self.fitness == other.fitness
            and self.iterations == other.iterations
            and np.array_equal(self.parameters, other.parameters)
        )


__all__ = ["Solution", "Result"]
