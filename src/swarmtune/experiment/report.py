"""
Benchmark runs and their plain-text reports.

Two files are produced per optimizer:

- ``<problem>-trace.txt``: one line per trace bucket with the bucket's first
  iteration and the mean/stddev/min/max of the best fitness across runs.
- ``ResultSummary.txt``: one line per benchmark problem with the optimizer
  name and the percentage of runs that reached the acceptable fitness.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

from swarmtune.engine.algorithm.base import Optimizer
from swarmtune.engine.algorithm.registry import make_optimizer
from swarmtune.engine.tuning.repeat import RepeatCount
from swarmtune.foundation.core.run_condition import RunConditionFitness
from swarmtune.foundation.core.settings import ExperimentConfig
from swarmtune.foundation.core.tools import format_number
from swarmtune.foundation.eval import resolve_eval_backend
from swarmtune.foundation.exceptions import ConfigurationError
from swarmtune.foundation.problem.base import Problem
from swarmtune.foundation.problem.benchmarks import make_benchmark
from swarmtune.ux.analysis.fitness_trace import FitnessTrace, FitnessTraceMean


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


@dataclass(frozen=True)
class BenchmarkRow:
    problem: str
    optimizer: str
    success: float
    """Fraction of runs in [0, 1] that reached the acceptable fitness."""

    @property
    def success_percent(self) -> float:
        return 100.0 * self.success


def write_fitness_trace(trace: FitnessTrace, path: str | Path) -> Path:
    return trace.write_to_file(path)


def write_result_summary(rows: Iterable[BenchmarkRow], path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        fh.write("# Problem\tOptimizer\tSuccess %\n")
        for row in rows:
            fh.write(f"{row.problem} {row.optimizer} {format_number(row.success_percent)}\n")
    return path


def run_benchmarks(
    optimizer: Optimizer,
    problems: Sequence[Problem],
    num_runs: int,
    max_iterations: int,
    parameters: Sequence[float] | None = None,
    traces: dict[str, FitnessTrace] | None = None,
) -> list[BenchmarkRow]:
    """Success rate of ``optimizer`` on each problem over ``num_runs`` runs.

    Each run stops at ``max_iterations`` or as soon as the problem's
    acceptable fitness is reached. When ``traces`` maps a problem name to a
    trace, that problem's runs are traced into it.
    """
    params = optimizer.default_parameters if parameters is None else parameters
    rows = []
    for problem in problems:
        runner = optimizer.clone(
            problem=problem,
            run_condition=RunConditionFitness(max_iterations, problem.acceptable_fitness),
            fitness_trace=(traces or {}).get(problem.name),
        )
        success = RepeatCount(runner, num_runs).fitness(params)
        _logger().info("%s & %s", problem.name, format_number(100.0 * success))
        rows.append(BenchmarkRow(problem.name, optimizer.name, success))
    return rows


def run_experiment(config: ExperimentConfig) -> list[BenchmarkRow]:
    """Run the configured optimizer on the configured benchmarks and write both reports."""
    kwargs = {"rng": config.seed}
    if config.eval_strategy != "serial":
        if config.optimizer.lower() == "lus":
            raise ConfigurationError("LUS evaluates one candidate at a time.", "Use eval_strategy='serial'")
        kwargs["eval_backend"] = resolve_eval_backend(config.eval_strategy, n_workers=config.n_workers)
    optimizer = make_optimizer(config.optimizer, **kwargs)

    problems = [make_benchmark(name, config.dimensionality) for name in config.benchmarks]
    traces = {p.name: FitnessTraceMean(config.max_iterations, config.trace_intervals) for p in problems}
    _logger().info(
        "%s: %s on %d problems, %d runs each", config.title, optimizer.name, len(problems), config.num_runs
    )
    rows = run_benchmarks(optimizer, problems, config.num_runs, config.max_iterations, traces=traces)

    out_dir = config.output_dir(optimizer.name)
    for name, trace in traces.items():
        write_fitness_trace(trace, out_dir / f"{name}-trace.txt")
    write_result_summary(rows, out_dir / "ResultSummary.txt")
    return rows


__all__ = ["BenchmarkRow", "write_fitness_trace", "write_result_summary", "run_benchmarks", "run_experiment"]
