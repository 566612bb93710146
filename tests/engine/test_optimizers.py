import numpy as np
import pytest

from swarmtune.engine.algorithm import DE, LUS, PSO, ParallelDE, ParallelPSO, adjust_population_size
from swarmtune.foundation.core.run_condition import RunConditionFitness, RunConditionIterations
from swarmtune.foundation.eval import ThreadPoolEvalBackend
from swarmtune.foundation.exceptions import (
    BoundsError,
    ConfigurationError,
    MissingProblemError,
    MissingRunConditionError,
    ParameterDimensionError,
)
from swarmtune.foundation.problem.base import Problem
from swarmtune.foundation.problem.benchmarks import Ackley, Griewank, Rastrigin, Sphere
from swarmtune.foundation.random import Random


class RecordingTrace:
    def __init__(self):
        self.calls = []

    def trace(self, iteration, fitness):
        self.calls.append((iteration, fitness))


@pytest.mark.parametrize(
    "cls,parameters,expected_iterations",
    [
        (DE, DE.parameter_sets["hand_tuned"], 500),
        (DE, None, 518),
        (PSO, PSO.parameter_sets["hand_tuned"], 500),
        (LUS, None, 500),
    ],
)
def test_iteration_accounting(cls, parameters, expected_iterations):
    problem = Sphere(5)
    opt = cls(problem, run_condition=RunConditionIterations(500), rng=0)
    result = opt.optimize(parameters)
    assert result.iterations == expected_iterations


@pytest.mark.parametrize("cls", [DE, PSO, LUS])
def test_result_fitness_matches_problem(cls):
    problem = Rastrigin(4)
    opt = cls(problem, run_condition=RunConditionIterations(2000), rng=3)
    result = opt.optimize(opt.parameter_sets.get("hand_tuned"))
    assert result.fitness == problem.fitness(result.parameters)
    assert np.all(result.parameters >= problem.lower_bound)
    assert np.all(result.parameters <= problem.upper_bound)
    assert result.feasible


@pytest.mark.parametrize("cls", [DE, PSO, LUS])
def test_improves_on_asymmetric_start(cls):
    problem = Sphere(5)
    opt = cls(problem, run_condition=RunConditionIterations(5000), rng=11)
    result = opt.optimize(opt.parameter_sets.get("hand_tuned"))
    # Every initial agent has all coordinates >= 50.
    assert result.fitness < 5 * 50.0**2


def test_acceptable_fitness_stops_early():
    problem = Sphere(3)
    de = DE(problem, run_condition=RunConditionFitness(50000, problem.acceptable_fitness), rng=5)
    result = de.optimize(DE.parameter_sets["hand_tuned"])
    assert result.fitness <= problem.acceptable_fitness
    assert result.iterations < 50000


@pytest.mark.parametrize("cls", [DE, PSO, LUS])
def test_trace_is_contiguous_and_monotone(cls):
    trace = RecordingTrace()
    opt = cls(Sphere(3), run_condition=RunConditionIterations(300), fitness_trace=trace, rng=2)
    result = opt.optimize(opt.parameter_sets.get("hand_tuned"))
    iterations = [it for it, _ in trace.calls]
    values = [f for _, f in trace.calls]
    assert iterations == list(range(result.iterations))
    assert all(b <= a for a, b in zip(values, values[1:]))
    assert values[-1] == result.fitness


def test_problem_run_condition_used_as_fallback():
    problem = Sphere(2, run_condition=RunConditionIterations(100))
    assert LUS(problem, rng=0).optimize().iterations == 100


def test_optimizer_run_condition_overrides_problem():
    problem = Sphere(2, run_condition=RunConditionIterations(100))
    lus = LUS(problem, run_condition=RunConditionIterations(40), rng=0)
    assert lus.optimize().iterations == 40


def test_missing_problem():
    with pytest.raises(MissingProblemError):
        DE(run_condition=RunConditionIterations(10)).optimize()


def test_missing_run_condition():
    with pytest.raises(MissingRunConditionError):
        DE(Sphere(2)).optimize()


def test_wrong_parameter_count():
    de = DE(Sphere(2), run_condition=RunConditionIterations(10))
    with pytest.raises(ParameterDimensionError):
        de.optimize([50.0, 0.9])


class Box(Problem):
    name = "Box"

    def fitness(self, x, fitness_limit=float("inf")):
        return float(np.sum(x**2))


@pytest.mark.parametrize(
    "lower,upper",
    [
        ([5.0, 5.0], [-5.0, -5.0]),
        ([-5.0, -5.0], [5.0, 5.0, 5.0]),
    ],
)
def test_malformed_bounds_fail_before_running(lower, upper):
    trace = RecordingTrace()
    de = DE(Box(lower, upper), run_condition=RunConditionIterations(100), fitness_trace=trace, rng=0)
    with pytest.raises(BoundsError):
        de.optimize(DE.parameter_sets["hand_tuned"])
    assert trace.calls == []


@pytest.mark.parametrize("cls", [DE, PSO, LUS])
@pytest.mark.parametrize("problem", [Sphere(3), Rastrigin(3), Ackley(3), Griewank(3)], ids=lambda p: p.name)
def test_result_fitness_within_max_fitness(cls, problem):
    opt = cls(problem, run_condition=RunConditionIterations(300), rng=5)
    result = opt.optimize(opt.parameter_sets.get("hand_tuned"))
    assert result.fitness <= problem.max_fitness


@pytest.mark.parametrize(
    "requested,multiple,expected",
    [(30, 32, 32), (64.4, 32, 64), (2.5, 1, 3), (37, 1, 37), (1, 4, 4)],
)
def test_adjust_population_size(requested, multiple, expected):
    assert adjust_population_size(requested, multiple) == expected


def test_adjust_population_size_rejects_bad_input():
    with pytest.raises(ConfigurationError):
        adjust_population_size(0.4)
    with pytest.raises(ConfigurationError):
        adjust_population_size(10, 0)


def test_population_multiple_applies_to_de_and_pso():
    assert DE(num_agents_multiple=32).num_agents([37.0, 0.5, 0.5]) == 64
    assert PSO(num_agents_multiple=8).num_agents([9.0, 0.0, 1.0, 1.0]) == 16


def test_parallel_variants():
    de = ParallelDE()
    pso = ParallelPSO(num_agents_multiple=16, n_workers=2)
    assert de.name == "DE-Par32"
    assert pso.name == "PSO-Par16"
    assert de.default_parameters == (32.0, 0.3176, 0.5543)
    assert pso.default_parameters == (64.0, -0.2063, -2.7449, 2.3198)
    assert isinstance(pso.eval_backend, ThreadPoolEvalBackend)
    assert pso.eval_backend.n_workers == 2


def test_lus_decrease_factor():
    assert LUS.decrease_factor(2.0, 5) == pytest.approx(2.0**-0.1)


def test_schema_and_describe():
    de = DE()
    assert de.dimensionality == 3
    np.testing.assert_array_equal(de.lower_bound, [3.0, 0.0, 0.0])
    assert de.describe_parameters() == {"NP": 37.0, "CR": 0.496, "F": 0.5313}


def test_clone_overrides():
    de = DE(Sphere(2), rng=1)
    other = de.clone(problem=Rastrigin(2), rng=9)
    assert other.problem.name == "Rastrigin"
    assert de.problem.name == "Sphere"
    assert isinstance(other.rng, Random)
    assert other.rng is not de.rng
    with pytest.raises(ConfigurationError):
        de.clone(population=3)
