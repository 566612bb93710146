"""
Optimizer registry.

Maps optimizer names to factories so harness code avoids hard-coded
conditionals. Factories accept the problem plus keyword arguments forwarded
to the optimizer's constructor.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import TYPE_CHECKING, Any, Callable

from swarmtune.foundation.eval import resolve_eval_backend
from swarmtune.foundation.exceptions import InvalidAlgorithmError
from swarmtune.foundation.registry import Registry

from .base import Optimizer
from .de import DE, ParallelDE
from .lus import LUS
from .pso import PSO, ParallelPSO

if TYPE_CHECKING:
    from swarmtune.foundation.problem.base import Problem

OptimizerFactory = Callable[..., Optimizer]

_OPTIMIZERS: Registry[OptimizerFactory] | None = None


def _suggest_names(name: str, options: list[str]) -> list[str]:
    if not name or not options:
        return []
    return get_close_matches(name.lower(), options, n=3, cutoff=0.6)


def _register_optimizers(registry: Registry[OptimizerFactory]) -> None:
    registry.register("de", DE)
    registry.register("de-par", ParallelDE)
    registry.register("pso", PSO)
    registry.register("pso-par", ParallelPSO)
    registry.register("lus", LUS)


def get_optimizers_registry() -> Registry[OptimizerFactory]:
    global _OPTIMIZERS
    if _OPTIMIZERS is None:
        registry: Registry[OptimizerFactory] = Registry("Optimizers")
        _register_optimizers(registry)
        _OPTIMIZERS = registry
    return _OPTIMIZERS


def resolve_optimizer(name: str) -> OptimizerFactory:
    registry = get_optimizers_registry()
    try:
        return registry.get(name)
    except KeyError as exc:
        available = registry.list()
        suggestions = _suggest_names(name, available)
        raise InvalidAlgorithmError(name, available, suggestions[0] if suggestions else None) from exc


def make_optimizer(name: str, problem: "Problem | None" = None, **kwargs: Any) -> Optimizer:
    """Instantiate a registered optimizer.

    >>> make_optimizer("de-par", num_agents_multiple=16).name
    'DE-Par16'
    """
    return resolve_optimizer(name)(problem, **kwargs)


def optimizer_from_config(cfg: Any, problem: "Problem | None" = None, **kwargs: Any) -> tuple[Optimizer, list[float]]:
    """Build an optimizer and its control vector from a fixed config.

    DE and PSO configs select their evaluation backend from
    ``cfg.eval_backend``; ``kwargs`` (``rng``, ``run_condition``...) go to
    the constructor.
    """
    if hasattr(cfg, "eval_backend"):
        kwargs.setdefault("num_agents_multiple", cfg.num_agents_multiple)
        kwargs.setdefault("eval_backend", resolve_eval_backend(cfg.eval_backend, n_workers=cfg.n_workers))
    return make_optimizer(cfg.algorithm, problem, **kwargs), cfg.to_vector()


__all__ = [
    "OptimizerFactory",
    "get_optimizers_registry",
    "resolve_optimizer",
    "make_optimizer",
    "optimizer_from_config",
]
