"""Sum a Repeat combinator over several problems."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from swarmtune.engine.algorithm.base import OptimizerProblem
from swarmtune.foundation.problem.base import Problem
from .meta_fitness import ProblemIndex
from .repeat import Repeat


class Multi(OptimizerProblem):
    """Unweighted sum of ``repeat.fitness`` over ``problems``.

    Each problem's contribution is shifted by ``repeat.min_fitness`` so it is
    non-negative, which lets the loop stop once the sum reaches the fitness
    limit. Problems are visited worst first, as in :class:`MetaFitness`.
    The repeat's optimizer is rebound to each problem in turn.
    """

    min_fitness = 0.0

    def __init__(self, problems: Sequence[Problem], repeat: Repeat) -> None:
        super().__init__(repeat.optimizer, run_condition=repeat.run_condition)
        self.repeat = repeat
        self.problem_index = ProblemIndex(problems)

    @property
    def name(self) -> str:  # type: ignore[override]
        return f"Multi({self.repeat.name})"

    def fitness(self, x: np.ndarray, fitness_limit: float = math.inf) -> float:
        index = self.problem_index
        total = 0.0
        for i in range(len(index)):
            if total >= fitness_limit:
                break
            self.repeat.optimizer.problem = index.problem(i)
            value = self.repeat.fitness(x, fitness_limit - total) - self.repeat.min_fitness
            index.set_fitness(i, value)
            total += value
        index.sort()
        return total


__all__ = ["Multi"]
