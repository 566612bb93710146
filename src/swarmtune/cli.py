"""Command-line benchmark runner: ``swarmtune --optimizer pso --runs 20``."""

from __future__ import annotations

import argparse
import logging
from typing import Sequence

from swarmtune.engine.algorithm.registry import get_optimizers_registry
from swarmtune.experiment.report import run_experiment
from swarmtune.foundation.core.settings import EVAL_STRATEGIES, ExperimentConfig
from swarmtune.foundation.logging import CONSOLE_FORMAT, DETAILED_FORMAT, configure_swarmtune_logging
from swarmtune.foundation.problem.benchmarks import BENCHMARKS


def _positive_int(raw: str) -> int:
    value = int(raw)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {raw}")
    return value


def parse_args(default_config: ExperimentConfig, argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="swarmtune",
        description="Run an optimizer on benchmark problems and write success rates and fitness traces.",
    )
    parser.add_argument(
        "--optimizer",
        choices=get_optimizers_registry().list(),
        default=default_config.optimizer,
        help=f"Optimizer to benchmark (default: {default_config.optimizer}).",
    )
    parser.add_argument(
        "--problem",
        dest="problems",
        action="append",
        choices=BENCHMARKS.list(),
        help="Benchmark problem; repeat the flag for several (default: the standard six).",
    )
    parser.add_argument("--dimensionality", type=_positive_int, default=default_config.dimensionality)
    parser.add_argument(
        "--max-iterations",
        type=_positive_int,
        default=default_config.max_iterations,
        help="Fitness evaluations per run.",
    )
    parser.add_argument("--runs", type=_positive_int, default=default_config.num_runs, help="Runs per problem.")
    parser.add_argument(
        "--trace-intervals",
        type=_positive_int,
        default=default_config.trace_intervals,
        help="Number of fitness-trace buckets.",
    )
    parser.add_argument("--seed", type=int, default=default_config.seed)
    parser.add_argument(
        "--output-root",
        default=default_config.output_root,
        help="Directory where reports are stored (default: SWARMTUNE_OUTPUT_ROOT or 'results').",
    )
    parser.add_argument(
        "--eval-backend",
        choices=EVAL_STRATEGIES,
        default=default_config.eval_strategy,
        help="Evaluation backend for population methods (default: serial).",
    )
    parser.add_argument("--n-workers", type=_positive_int, default=default_config.n_workers)
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every run.")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    default_config = ExperimentConfig()
    args = parse_args(default_config, argv)
    if args.verbose:
        configure_swarmtune_logging(level=logging.DEBUG, fmt=DETAILED_FORMAT)
    else:
        configure_swarmtune_logging(level=logging.INFO, fmt=CONSOLE_FORMAT)
    config = ExperimentConfig(
        title=default_config.title,
        output_root=args.output_root,
        optimizer=args.optimizer,
        benchmarks=tuple(args.problems) if args.problems else default_config.benchmarks,
        dimensionality=args.dimensionality,
        max_iterations=args.max_iterations,
        num_runs=args.runs,
        trace_intervals=args.trace_intervals,
        seed=args.seed,
        eval_strategy=args.eval_backend,
        n_workers=args.n_workers,
    )
    run_experiment(config)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
