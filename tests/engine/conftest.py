import numpy as np
import pytest

from swarmtune.engine.algorithm.base import Optimizer
from swarmtune.foundation.core.run_condition import RunConditionIterations


class ScriptedOptimizer(Optimizer):
    """Returns a scripted sequence of fitness values, one per run.

    The iterator and the call log are shared with clones, so combinators that
    clone the optimizer still consume a single script.
    """

    name = "Scripted"
    parameter_names = ("a",)
    default_parameters = (1.0,)
    parameter_lower = (0.0,)
    parameter_upper = (2.0,)

    def __init__(self, values, problem=None, **kwargs):
        kwargs.setdefault("run_condition", RunConditionIterations(1))
        super().__init__(problem, **kwargs)
        self._values = iter(values)
        self.calls = []

    def _optimize(self, parameters, problem, run_condition):
        self.calls.append((problem.name, run_condition))
        return self._result(problem, np.asarray(problem.lower_bound), next(self._values), 1)


@pytest.fixture
def scripted():
    return ScriptedOptimizer
