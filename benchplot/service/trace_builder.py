from typing import Dict, Iterable, Optional

from benchplot.consts.ThroughputType import ThroughputType
from benchplot.errors import TraceError
from benchplot.models.criterion_data import BenchmarkInfo
from benchplot.models.trace import MeasurementDisplay, ProblemSize, Trace, Traces
from benchplot.util.log_config import setup_logger

logger = setup_logger(__name__)

_UNSET = object()


def build_traces(data: Iterable[BenchmarkInfo]) -> Traces:
    """
    Shuffle Criterion benchmarks into one sorted trace per benchmark group.

    Args:
        data: Benchmarks as returned by CriterionReader.read_all()

    Returns:
        Traces: sorted by name, each with points sorted by problem size

    Raises:
        TraceError: On mixed throughput types, duplicate problem sizes,
                    non-integer benchmark values or unusable estimates
    """
    name_to_trace: Dict[str, Dict[ProblemSize, MeasurementDisplay]] = {}
    common_type: object = _UNSET

    for info in data:
        benchmark = info.benchmark
        value = benchmark.value_as_int()

        throughput = benchmark.throughput
        throughput_type: Optional[ThroughputType] = throughput.kind if throughput else None
        if common_type is _UNSET:
            common_type = throughput_type
        elif throughput_type != common_type:
            raise TraceError(
                f"expected all traces to use throughput type {_describe(common_type)}, "
                f"but found {_describe(throughput_type)} in group '{benchmark.group_id}'"
            )

        measurement = MeasurementDisplay.from_estimate(info.estimates.median)
        if throughput is not None:
            measurement = measurement.time_to_throughput(throughput.amount)

        trace = name_to_trace.setdefault(benchmark.group_id, {})
        if value in trace:
            raise TraceError(
                f"there should be only one data point associated with value {value} "
                f"in group '{benchmark.group_id}'"
            )
        trace[value] = measurement

    traces = tuple(
        Trace(name=name, data=tuple(sorted(points.items())))
        for name, points in sorted(name_to_trace.items())
    )
    logger.debug(f"Built {len(traces)} traces: {', '.join(t.name for t in traces)}")
    return Traces(
        throughput_type=None if common_type is _UNSET else common_type,
        traces=traces,
    )


def _describe(throughput_type: object) -> str:
    if isinstance(throughput_type, ThroughputType):
        return throughput_type.value
    return "none (timing only)"
