"""Meta-optimization utilities.

Repeat combinators turn several runs of an optimizer into one scalar;
MetaFitness scores control parameters over a weighted set of problems so an
outer optimizer can tune an inner one.
"""

from .repeat import Repeat, RepeatCount, RepeatMin, RepeatSum
from .meta_fitness import MetaFitness, ParallelMetaFitness, ProblemIndex, WeightedProblem
from .multi import Multi

__all__ = [
    "Repeat",
    "RepeatSum",
    "RepeatMin",
    "RepeatCount",
    "Multi",
    "WeightedProblem",
    "ProblemIndex",
    "MetaFitness",
    "ParallelMetaFitness",
]
