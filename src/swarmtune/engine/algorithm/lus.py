"""Local Unimodal Sampling.

Reference:
    Pedersen, M.E.H. (2010). Tuning & Simplifying Heuristical Optimization.
    PhD thesis, University of Southampton.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from swarmtune.foundation.core.solution import Result
from swarmtune.foundation.core.tools import sample_bounded
from .base import Optimizer

if TYPE_CHECKING:
    from swarmtune.foundation.core.run_condition import RunCondition
    from swarmtune.foundation.problem.base import Problem


class LUS(Optimizer):
    """Single-agent local search with an exponentially shrinking sampling range.

    The range starts at the full search space and is multiplied by
    ``q = 2 ** (-1 / (n * gamma))`` after every sample that failed to improve.
    Cheap per iteration, which makes it the usual meta-optimizer.
    """

    name = "LUS"
    parameter_names = ("gamma",)
    default_parameters = (3.0,)
    parameter_lower = (0.5,)
    parameter_upper = (100.0,)

    @staticmethod
    def decrease_factor(gamma: float, dimensionality: int) -> float:
        return 2.0 ** (-1.0 / (dimensionality * gamma))

    def _optimize(self, parameters: np.ndarray, problem: "Problem", run_condition: "RunCondition") -> Result:
        rng = self.rng
        lower, upper = problem.lower_bound, problem.upper_bound
        n = problem.dimensionality
        q = self.decrease_factor(float(parameters[0]), n)

        x = rng.uniform_vector(problem.lower_init, problem.upper_init)
        d = upper - lower
        fx = float(problem.fitness(x))
        self.trace(0, fx)

        i = 1
        while run_condition.continue_run(i, fx):
            y = sample_bounded(x, d, lower, upper, rng)
            fy = float(problem.fitness(y, fx))
            if fy < fx:
                x = y
                fx = fy
            else:
                d = q * d
            self.trace(i, fx)
            i += 1

        return self._result(problem, x, fx, i)


__all__ = ["LUS"]
