"""Models for benchmark data structures."""

from .criterion_data import Benchmark, BenchmarkInfo, ConfidenceInterval, Estimate, Estimates, Throughput
from .plot_params import PlotParams
from .trace import MeasurementDisplay, Trace, Traces

__all__ = [
    "Benchmark",
    "BenchmarkInfo",
    "ConfidenceInterval",
    "Estimate",
    "Estimates",
    "Throughput",
    "PlotParams",
    "MeasurementDisplay",
    "Trace",
    "Traces",
]
