from .report import BenchmarkRow, run_benchmarks, run_experiment, write_fitness_trace, write_result_summary

__all__ = ["BenchmarkRow", "run_benchmarks", "run_experiment", "write_fitness_trace", "write_result_summary"]
