"""swarmtune: metaheuristic optimizers and meta-optimization of their control parameters."""

from .foundation.core.run_condition import (
    RunCondition,
    RunConditionFitness,
    RunConditionFitnessStagnation,
    RunConditionIterations,
)
from .foundation.core.solution import Result, Solution
from .foundation.core.settings import ExperimentConfig
from .foundation.exceptions import (
    ConfigurationError,
    ProblemError,
    SwarmTuneError,
)
from .foundation.logging import configure_swarmtune_logging
from .foundation.problem.base import Problem, ProblemWrapper
from .foundation.problem.wrappers import FitnessPrint, LogSolutions
from .foundation.problem.benchmarks import (
    Ackley,
    GearTrain,
    Griewank,
    Rastrigin,
    Rosenbrock,
    RosenbrockF6,
    Schwefel12,
    Schwefel222,
    Sphere,
    Step,
    make_benchmark,
)
from .foundation.random import Random
from .engine.algorithm import (
    DE,
    LUS,
    PSO,
    Optimizer,
    ParallelDE,
    ParallelPSO,
    make_optimizer,
)
from .engine.algorithm.config import DEConfig, LUSConfig, PSOConfig
from .engine.tuning import (
    MetaFitness,
    Multi,
    ParallelMetaFitness,
    RepeatCount,
    RepeatMin,
    RepeatSum,
    WeightedProblem,
)
from .ux.analysis import FitnessTraceMean, FitnessTraceQuartiles, Statistics
from .experiment import run_benchmarks, run_experiment

__all__ = [
    "RunCondition",
    "RunConditionIterations",
    "RunConditionFitness",
    "RunConditionFitnessStagnation",
    "Result",
    "Solution",
    "ExperimentConfig",
    "SwarmTuneError",
    "ConfigurationError",
    "ProblemError",
    "configure_swarmtune_logging",
    "Problem",
    "ProblemWrapper",
    "FitnessPrint",
    "LogSolutions",
    "Sphere",
    "Rosenbrock",
    "Rastrigin",
    "Griewank",
    "Ackley",
    "Step",
    "Schwefel12",
    "Schwefel222",
    "RosenbrockF6",
    "GearTrain",
    "make_benchmark",
    "Random",
    "Optimizer",
    "DE",
    "ParallelDE",
    "PSO",
    "ParallelPSO",
    "LUS",
    "make_optimizer",
    "DEConfig",
    "PSOConfig",
    "LUSConfig",
    "RepeatSum",
    "RepeatMin",
    "RepeatCount",
    "Multi",
    "WeightedProblem",
    "MetaFitness",
    "ParallelMetaFitness",
    "Statistics",
    "FitnessTraceMean",
    "FitnessTraceQuartiles",
    "run_benchmarks",
    "run_experiment",
]
