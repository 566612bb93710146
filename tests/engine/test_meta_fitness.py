import logging
import math

import numpy as np
import pytest

from swarmtune.engine.algorithm import DE, LUS
from swarmtune.engine.tuning import (
    MetaFitness,
    Multi,
    ParallelMetaFitness,
    ProblemIndex,
    RepeatSum,
    WeightedProblem,
)
from swarmtune.foundation.core.run_condition import RunConditionIterations
from swarmtune.foundation.exceptions import ConfigurationError, MissingRunConditionError
from swarmtune.foundation.problem.benchmarks import Rastrigin, RosenbrockF6, Sphere


X = np.array([1.0])


class TestProblemIndex:
    def test_plain_problems_get_unit_weight(self):
        index = ProblemIndex([Sphere(1), WeightedProblem(2.5, Rastrigin(1))])
        assert len(index) == 2
        assert index.weight(0) == 1.0
        assert index.weight(1) == 2.5

    def test_sort_is_worst_first_and_stable(self):
        index = ProblemIndex([Sphere(1), Rastrigin(1), RosenbrockF6()])
        for i, value in enumerate([1.0, 3.0, 1.0]):
            index.set_fitness(i, value)
        index.sort()
        assert [p.name for p in index.problems] == ["Rastrigin", "Sphere", "RosenbrockF6"]
        assert [index.fitness(i) for i in range(3)] == [3.0, 1.0, 1.0]

    def test_empty(self):
        with pytest.raises(ConfigurationError):
            ProblemIndex([])

    def test_weight_must_be_positive(self):
        with pytest.raises(ConfigurationError):
            WeightedProblem(0.0, Sphere(1))


class TestMetaFitness:
    def test_weighted_sum_shifted_by_min_fitness(self, scripted):
        opt = scripted([1.0, 2.0, 391.0, 392.0])
        meta = MetaFitness(opt, [WeightedProblem(2.0, Sphere(1)), RosenbrockF6()], num_runs=2)
        assert meta.fitness(X) == 2.0 * (1.0 + 2.0) + (1.0 + 2.0)
        assert [name for name, _ in opt.calls] == ["Sphere", "Sphere", "RosenbrockF6", "RosenbrockF6"]

    def test_worst_problem_runs_first_next_time(self, scripted):
        opt = scripted([1.0, 5.0, 0.0, 0.0])
        meta = MetaFitness(opt, [Sphere(1), Rastrigin(1)], num_runs=1)
        meta.fitness(X)
        meta.fitness(X)
        assert [name for name, _ in opt.calls] == ["Sphere", "Rastrigin", "Rastrigin", "Sphere"]

    def test_stops_at_fitness_limit(self, scripted):
        opt = scripted([10.0, 10.0, 10.0, 10.0])
        meta = MetaFitness(opt, [Sphere(1), Rastrigin(1)], num_runs=2)
        assert meta.fitness(X, fitness_limit=5.0) == 10.0
        assert len(opt.calls) == 1

    def test_each_run_gets_a_fresh_run_condition(self, scripted):
        problem = Sphere(1, run_condition=RunConditionIterations(7))
        opt = scripted([0.0, 0.0])
        MetaFitness(opt, [problem], num_runs=2).fitness(X)
        conditions = [rc for _, rc in opt.calls]
        assert all(rc.max_iterations == 7 for rc in conditions)
        assert all(rc is not problem.run_condition for rc in conditions)
        assert conditions[0] is not conditions[1]

    def test_falls_back_to_optimizer_run_condition(self, scripted):
        opt = scripted([0.0], run_condition=RunConditionIterations(3))
        MetaFitness(opt, [Sphere(1)], num_runs=1).fitness(X)
        assert opt.calls[0][1].max_iterations == 3

    def test_missing_run_condition(self):
        meta = MetaFitness(DE(), [Sphere(2)], num_runs=1)
        with pytest.raises(MissingRunConditionError):
            meta.fitness(DE.default_parameters)

    def test_logs_each_evaluation(self, scripted, caplog):
        opt = scripted([0.5])
        with caplog.at_level(logging.INFO, logger="swarmtune"):
            MetaFitness(opt, [Sphere(1)], num_runs=1).fitness(X)
        assert any(r.name == "swarmtune.foundation.problem.wrappers" for r in caplog.records)

    def test_num_runs_must_be_positive(self, scripted):
        with pytest.raises(ConfigurationError):
            MetaFitness(scripted([]), [Sphere(1)], num_runs=0)

    def test_matches_manual_runs(self):
        rc = RunConditionIterations(300)
        problems = [Sphere(3, run_condition=rc), Rastrigin(3, run_condition=rc)]
        params = DE.parameter_sets["hand_tuned"]
        meta = MetaFitness(DE(rng=1), problems, num_runs=2)

        manual = DE(rng=1)
        expected = 0.0
        for problem in problems:
            for _ in range(2):
                expected += manual.clone(problem=problem, run_condition=rc.spawn()).optimize(params).fitness

        assert meta.fitness(params) == pytest.approx(expected)

    def test_tune_de_with_lus(self):
        rc = RunConditionIterations(200)
        inner = DE(rng=1)
        meta = MetaFitness(inner, [Sphere(2, run_condition=rc), Rastrigin(2, run_condition=rc)], num_runs=2)
        result = LUS(meta, run_condition=RunConditionIterations(4), rng=2).optimize()
        assert result.iterations == 4
        assert np.all(result.parameters >= inner.lower_bound)
        assert np.all(result.parameters <= inner.upper_bound)
        assert math.isfinite(result.fitness)


class TestParallelMetaFitness:
    def _problems(self):
        rc = RunConditionIterations(300)
        return [Sphere(3, run_condition=rc), Rastrigin(3, run_condition=rc)]

    def test_independent_of_job_count(self):
        params = DE.parameter_sets["hand_tuned"]
        threaded = ParallelMetaFitness(DE(), self._problems(), num_runs=3, n_jobs=2, rng=5)
        single = ParallelMetaFitness(DE(), self._problems(), num_runs=3, n_jobs=1, rng=5)
        assert threaded.fitness(params) == single.fitness(params)

    def test_sorts_problems_like_serial(self):
        meta = ParallelMetaFitness(DE(), self._problems(), num_runs=1, n_jobs=2, rng=0)
        meta.fitness(DE.parameter_sets["hand_tuned"])
        index = meta.problem_index
        assert index.fitness(0) >= index.fitness(1)

    def test_n_jobs_zero(self):
        with pytest.raises(ConfigurationError):
            ParallelMetaFitness(DE(), self._problems(), num_runs=1, n_jobs=0)


class TestMulti:
    def test_sums_repeat_over_problems(self, scripted):
        opt = scripted([1.0, 2.0, 3.0, 4.0])
        multi = Multi([Sphere(1), Rastrigin(1)], RepeatSum(opt, 2))
        assert multi.fitness(X) == 10.0
        assert [name for name, _ in opt.calls] == ["Sphere", "Sphere", "Rastrigin", "Rastrigin"]
        assert [p.name for p in multi.problem_index.problems] == ["Rastrigin", "Sphere"]
        assert multi.name == "Multi(RepeatSum(Scripted))"

    def test_subtracts_repeat_min_fitness(self, scripted):
        opt = scripted([391.0, 392.0])
        multi = Multi([RosenbrockF6()], RepeatSum(opt, 2))
        assert multi.fitness(X) == 3.0

    def test_stops_at_fitness_limit(self, scripted):
        opt = scripted([5.0, 5.0, 5.0, 5.0])
        multi = Multi([Sphere(1), Rastrigin(1)], RepeatSum(opt, 2))
        assert multi.fitness(X, fitness_limit=2.0) == 5.0
        assert len(opt.calls) == 1
