"""Optimizer configuration module.

This package provides frozen configuration dataclasses and fluent builders
for the optimizers.

Examples:
    from swarmtune.engine.algorithm.config import DEConfig

    cfg = DEConfig().parameter_set("hand_tuned").num_agents_multiple(32).fixed()
    optimizer, parameters = optimizer_from_config(cfg, problem)
"""

from .de import DEConfig, DEConfigData
from .pso import PSOConfig, PSOConfigData
from .lus import LUSConfig, LUSConfigData

__all__ = [
    "DEConfig",
    "DEConfigData",
    "PSOConfig",
    "PSOConfigData",
    "LUSConfig",
    "LUSConfigData",
]
