"""Benchmark traces suitable for plotting."""

import math
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from benchplot.consts.ThroughputType import ThroughputType
from benchplot.errors import TraceError
from benchplot.models.criterion_data import Estimate

NANOSECONDS_PER_SECOND = 1e9

# Horizontal coordinate of a Criterion benchmark
ProblemSize = int


@dataclass(frozen=True)
class MeasurementDisplay:
    """Summary of a Criterion measurement for display: estimate and 95% bounds."""
    point_estimate: float
    lower_bound: float
    upper_bound: float

    @classmethod
    def from_estimate(cls, estimate: Estimate) -> 'MeasurementDisplay':
        """Convert a Criterion timing estimate (ns) into seconds."""
        interval = estimate.confidence_interval
        if not math.isclose(interval.confidence_level, 0.95):
            raise TraceError(
                f"Expecting standard 95% confidence intervals from Criterion, "
                f"got {interval.confidence_level}"
            )
        return cls(
            point_estimate=estimate.point_estimate / NANOSECONDS_PER_SECOND,
            lower_bound=interval.lower_bound / NANOSECONDS_PER_SECOND,
            upper_bound=interval.upper_bound / NANOSECONDS_PER_SECOND,
        )

    def time_to_throughput(self, amount: int) -> 'MeasurementDisplay':
        """
        Turn a timing measurement into a throughput measurement.

        The source must be a timing measurement in seconds. The slowest time
        bounds the lowest throughput, so the bounds swap.
        """
        if min(self.point_estimate, self.lower_bound, self.upper_bound) <= 0:
            raise TraceError(f"Cannot compute throughput from non-positive timing {self}")
        return MeasurementDisplay(
            point_estimate=amount / self.point_estimate,
            lower_bound=amount / self.upper_bound,
            upper_bound=amount / self.lower_bound,
        )


@dataclass(frozen=True)
class Trace:
    """One line of the plot: a benchmark group and its measurements."""
    name: str
    data: Tuple[Tuple[ProblemSize, MeasurementDisplay], ...]

    @property
    def segments(self) -> List[str]:
        """Name segments, from most general to most specific."""
        return self.name.split("/")

    @property
    def sizes(self) -> List[ProblemSize]:
        return [size for size, _ in self.data]

    @property
    def measurements(self) -> List[MeasurementDisplay]:
        return [measurement for _, measurement in self.data]


@dataclass(frozen=True)
class Traces:
    """
    Set of traces to be plotted.

    ``throughput_type`` is None when the benchmarks only measured time, in
    which case measurements are in seconds rather than per-second rates.
    """
    throughput_type: Optional[ThroughputType] = None
    traces: Tuple[Trace, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.traces)

    def __iter__(self) -> Iterator[Trace]:
        return iter(self.traces)

    def xy_range(self) -> Tuple[Tuple[float, float], Tuple[float, float]]:
        """Horizontal and vertical extent of all traces, error bars included."""
        if not self.traces:
            raise TraceError("Cannot compute the plotting range of an empty set of traces")
        sizes = [size for trace in self.traces for size in trace.sizes]
        measurements = [m for trace in self.traces for m in trace.measurements]
        return (
            (float(min(sizes)), float(max(sizes))),
            (min(m.lower_bound for m in measurements), max(m.upper_bound for m in measurements)),
        )

    def common_prefix(self) -> List[str]:
        """Leading name segments shared by every trace."""
        if not self.traces:
            return []
        prefix = self.traces[0].segments
        for trace in self.traces[1:]:
            segments = trace.segments
            n = 0
            while n < min(len(prefix), len(segments)) and prefix[n] == segments[n]:
                n += 1
            prefix = prefix[:n]
        return prefix

    def short_label(self, trace: Trace) -> str:
        prefix_len = len(self.common_prefix())
        remainder = trace.segments[prefix_len:]
        return "/".join(remainder) if remainder else trace.name

    def axis_unit(self, element_unit: str) -> str:
        if self.throughput_type is None:
            return "s"
        return self.throughput_type.axis_unit(element_unit)
