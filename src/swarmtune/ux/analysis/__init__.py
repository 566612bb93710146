from .statistics import Quartiles, RunStatistics, Statistics, StatisticsAccumulator
from .fitness_trace import FitnessTrace, FitnessTraceMean, FitnessTraceQuartiles

__all__ = [
    "StatisticsAccumulator",
    "Quartiles",
    "RunStatistics",
    "Statistics",
    "FitnessTrace",
    "FitnessTraceMean",
    "FitnessTraceQuartiles",
]
