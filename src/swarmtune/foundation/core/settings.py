from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from swarmtune.foundation.exceptions import ConfigurationError

TITLE = "swarmtune benchmark runner"
DEFAULT_OPTIMIZER = "de"
DEFAULT_BENCHMARKS = ("sphere", "rosenbrock", "rastrigin", "griewank", "ackley", "step")
EVAL_STRATEGIES = ("serial", "threads")


@dataclass
class ExperimentConfig:
    title: str = TITLE
    # Read at instantiation so tests that set SWARMTUNE_OUTPUT_ROOT take effect
    # after import.
    output_root: str = field(default_factory=lambda: os.environ.get("SWARMTUNE_OUTPUT_ROOT", "results"))
    optimizer: str = DEFAULT_OPTIMIZER
    benchmarks: tuple[str, ...] = DEFAULT_BENCHMARKS
    dimensionality: int = 30
    max_iterations: int = 60000
    num_runs: int = 50
    trace_intervals: int = 100
    seed: int | None = 42
    eval_strategy: str = "serial"
    n_workers: int | None = None

    def __post_init__(self) -> None:
        if self.eval_strategy not in EVAL_STRATEGIES:
            raise ConfigurationError(
                f"Unknown eval_strategy '{self.eval_strategy}'.",
                f"Use one of: {', '.join(EVAL_STRATEGIES)}",
            )
        for name in ("dimensionality", "max_iterations", "num_runs", "trace_intervals"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"ExperimentConfig.{name} must be positive, got {getattr(self, name)}.")

    def output_dir(self, *parts: str) -> Path:
        return Path(self.output_root, *parts)


__all__ = ["ExperimentConfig", "TITLE", "DEFAULT_OPTIMIZER", "DEFAULT_BENCHMARKS", "EVAL_STRATEGIES"]
