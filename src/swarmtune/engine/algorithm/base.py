"""Optimizer contract shared by all algorithms.

An optimizer has two faces. As an algorithm it runs on a bound problem and
returns a :class:`Result`. As a parameter schema (names, defaults, bounds of
its own control parameters) it defines the search space that a
meta-optimizer explores; :class:`OptimizerProblem` exposes that space as a
:class:`Problem`.
"""

from __future__ import annotations

import copy
import logging
import math
from typing import TYPE_CHECKING, Any, ClassVar, Sequence

import numpy as np

from swarmtune.foundation.core.solution import Result
from swarmtune.foundation.core.tools import round_away
from swarmtune.foundation.exceptions import (
    ConfigurationError,
    MissingProblemError,
    MissingRunConditionError,
    ParameterDimensionError,
)
from swarmtune.foundation.problem.base import Problem
from swarmtune.foundation.random import Random, as_random

if TYPE_CHECKING:
    from swarmtune.foundation.core.run_condition import RunCondition
    from swarmtune.ux.analysis.fitness_trace import FitnessTrace


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


def adjust_population_size(requested: float, multiple: int = 1) -> int:
    """Round ``requested`` half away from zero, then lift it to a positive multiple of ``multiple``.

    >>> adjust_population_size(30, 32)
    32
    >>> adjust_population_size(64.4, 32)
    64
    """
    if multiple < 1:
        raise ConfigurationError(f"Population multiple must be >= 1, got {multiple}.")
    n = round_away(requested)
    if n <= 0:
        raise ConfigurationError(f"Population size must be positive, got {requested}.")
    return multiple * math.ceil(n / multiple)


class Optimizer:
    """Base class for optimizers.

    Parameters
    ----------
    problem : Problem, optional
        Problem to optimize. May be bound later via ``optimizer.problem = ...``.
    run_condition : RunCondition, optional
        Overrides ``problem.run_condition`` when given.
    fitness_trace : FitnessTrace, optional
        Receives ``(iteration, best_fitness)`` after every iteration.
    rng : Random or int, optional
        Random handle (or seed). Each optimizer owns its handle.

    Subclasses declare the class-level schema (``name``, ``parameter_names``,
    ``default_parameters``, ``parameter_lower``, ``parameter_upper``) and
    implement :meth:`_optimize`.
    """

    name: ClassVar[str] = "Optimizer"
    parameter_names: ClassVar[tuple[str, ...]] = ()
    default_parameters: ClassVar[tuple[float, ...]] = ()
    parameter_lower: ClassVar[tuple[float, ...]] = ()
    parameter_upper: ClassVar[tuple[float, ...]] = ()
    parameter_sets: ClassVar[dict[str, tuple[float, ...]]] = {}

    def __init__(
        self,
        problem: Problem | None = None,
        *,
        run_condition: "RunCondition | None" = None,
        fitness_trace: "FitnessTrace | None" = None,
        rng: Random | int | None = None,
    ) -> None:
        self.problem = problem
        self.run_condition = run_condition
        self.fitness_trace = fitness_trace
        self.rng = as_random(rng)

    # ------------------------------------------------------------------
    # Control-parameter schema
    # ------------------------------------------------------------------

    @property
    def dimensionality(self) -> int:
        return len(self.parameter_names)

    @property
    def lower_bound(self) -> np.ndarray:
        return np.asarray(self.parameter_lower, dtype=float)

    @property
    def upper_bound(self) -> np.ndarray:
        return np.asarray(self.parameter_upper, dtype=float)

    @property
    def lower_init(self) -> np.ndarray:
        return self.lower_bound

    @property
    def upper_init(self) -> np.ndarray:
        return self.upper_bound

    def describe_parameters(self, parameters: Sequence[float] | None = None) -> dict[str, float]:
        """Map parameter names to values (defaults when ``parameters`` is None)."""
        values = self.default_parameters if parameters is None else parameters
        return {name: float(v) for name, v in zip(self.parameter_names, values)}

    # ------------------------------------------------------------------
    # Running
    # ------------------------------------------------------------------

    def optimize(self, parameters: Sequence[float] | np.ndarray | None = None) -> Result:
        """Run one optimization with the given control parameters.

        Raises
        ------
        ParameterDimensionError
            If ``len(parameters)`` differs from :attr:`dimensionality`.
        MissingProblemError, MissingRunConditionError
            If the optimizer is not fully bound.
        BoundsError, ProblemDimensionError
            If the problem's bound arrays are malformed.
        """
        params = self._check_parameters(parameters)
        problem = self._require_problem()
        problem.validate()
        run_condition = self._resolve_run_condition(problem)
        run_condition.reset()
        result = self._optimize(params, problem, run_condition)
        _logger().debug(
            "%s on %s: fitness=%g after %d iterations",
            self.name,
            problem.name,
            result.fitness,
            result.iterations,
        )
        return result

    def _optimize(self, parameters: np.ndarray, problem: Problem, run_condition: "RunCondition") -> Result:
        raise NotImplementedError

    def trace(self, iteration: int, fitness: float) -> None:
        if self.fitness_trace is not None:
            self.fitness_trace.trace(iteration, fitness)

    def clone(self, **overrides: Any) -> "Optimizer":
        """Shallow copy with some attributes replaced (``problem``, ``rng``, ``run_condition``...)."""
        other = copy.copy(self)
        for key, value in overrides.items():
            if not hasattr(other, key):
                raise ConfigurationError(f"{self.name} has no attribute '{key}'.")
            setattr(other, key, as_random(value) if key == "rng" else value)
        return other

    def _check_parameters(self, parameters: Sequence[float] | np.ndarray | None) -> np.ndarray:
        if parameters is None:
            parameters = self.default_parameters
        params = np.asarray(parameters, dtype=float)
        if params.ndim != 1 or params.shape[0] != self.dimensionality:
            raise ParameterDimensionError(self.name, self.dimensionality, int(params.size))
        return params

    def _require_problem(self) -> Problem:
        if self.problem is None:
            raise MissingProblemError(self.name)
        return self.problem

    def _resolve_run_condition(self, problem: Problem) -> "RunCondition":
        rc = self.run_condition if self.run_condition is not None else problem.run_condition
        if rc is None:
            raise MissingRunConditionError(self.name)
        return rc

    def _result(self, problem: Problem, best: np.ndarray, fitness: float, iterations: int) -> Result:
        return Result(best, fitness, iterations, feasible=problem.is_feasible(best))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class OptimizerProblem(Problem):
    """Expose an optimizer's control-parameter space as a problem.

    Subclasses define what "fitness of a control-parameter vector" means,
    e.g. the summed result of several runs (:class:`Repeat`) or a weighted
    benchmark score (:class:`MetaFitness`).
    """

    def __init__(self, optimizer: Optimizer, run_condition: "RunCondition | None" = None) -> None:
        super().__init__(run_condition=run_condition)
        self.optimizer = optimizer

    @property
    def lower_bound(self) -> np.ndarray:
        return self.optimizer.lower_bound

    @property
    def upper_bound(self) -> np.ndarray:
        return self.optimizer.upper_bound

    @property
    def lower_init(self) -> np.ndarray:
        return self.optimizer.lower_init

    @property
    def upper_init(self) -> np.ndarray:
        return self.optimizer.upper_init

    @property
    def dimensionality(self) -> int:
        return self.optimizer.dimensionality

    @property
    def parameter_names(self) -> list[str] | None:
        return list(self.optimizer.parameter_names)


__all__ = ["Optimizer", "OptimizerProblem", "adjust_population_size"]
