"""Single-objective optimizers and their configuration."""

from .base import Optimizer, OptimizerProblem, adjust_population_size
from .de import DE, ParallelDE
from .pso import PSO, ParallelPSO
from .lus import LUS
from .registry import get_optimizers_registry, make_optimizer, optimizer_from_config, resolve_optimizer

__all__ = [
    "Optimizer",
    "OptimizerProblem",
    "adjust_population_size",
    "DE",
    "ParallelDE",
    "PSO",
    "ParallelPSO",
    "LUS",
    "get_optimizers_registry",
    "make_optimizer",
    "optimizer_from_config",
    "resolve_optimizer",
]
