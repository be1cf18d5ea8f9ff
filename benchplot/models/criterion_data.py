"""Raw Criterion data models."""

import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

from benchplot.consts.ThroughputType import ThroughputType
from benchplot.errors import CriterionDataError, TraceError

# Plain unsigned decimal, no sign other than "+", no separators or padding
_UNSIGNED_INT = re.compile(r"\+?[0-9]+")


def _require(data: Dict[str, Any], key: str, what: str) -> Any:
    if not isinstance(data, dict):
        raise CriterionDataError(f"Expected a JSON object for {what}, got {type(data).__name__}")
    if key not in data:
        raise CriterionDataError(f"Missing '{key}' in {what}")
    return data[key]


def _number(value: Any, what: str) -> float:
    # bool is an int subclass, but never a valid measurement
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise CriterionDataError(f"Expected a number for {what}, got {value!r}")
    return float(value)


@dataclass
class ConfidenceInterval:
    confidence_level: float
    lower_bound: float
    upper_bound: float

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ConfidenceInterval':
        return cls(
            confidence_level=_number(_require(data, "confidence_level", "confidence interval"), "confidence_level"),
            lower_bound=_number(_require(data, "lower_bound", "confidence interval"), "lower_bound"),
            upper_bound=_number(_require(data, "upper_bound", "confidence interval"), "upper_bound"),
        )


@dataclass
class Estimate:
    """
    Single Criterion estimate.

    All times are in nanoseconds, as Criterion writes them.
    """
    confidence_interval: ConfidenceInterval
    point_estimate: float
    standard_error: float

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Estimate':
        return cls(
            confidence_interval=ConfidenceInterval.from_dict(
                _require(data, "confidence_interval", "estimate")
            ),
            point_estimate=_number(_require(data, "point_estimate", "estimate"), "point_estimate"),
            standard_error=_number(_require(data, "standard_error", "estimate"), "standard_error"),
        )


@dataclass
class Estimates:
    """Criterion estimates. Only the median execution time is used."""
    median: Estimate

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Estimates':
        return cls(median=Estimate.from_dict(_require(data, "median", "estimates")))


@dataclass(frozen=True)
class Throughput:
    """Throughput configuration of a benchmark: amount of work per iteration."""
    kind: ThroughputType
    amount: int

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional['Throughput']:
        """
        Decode Criterion's externally tagged throughput, e.g. ``{"Bytes": 1024}``.

        Args:
            data: Decoded ``throughput`` field, ``None`` for pure timing benchmarks

        Returns:
            Throughput or None

        Raises:
            CriterionDataError: For shapes this tool does not understand
        """
        if data is None:
            return None
        if not isinstance(data, dict) or len(data) != 1:
            raise CriterionDataError(f"Unsupported throughput configuration: {data!r}")

        (tag, amount), = data.items()
        try:
            kind = ThroughputType(tag)
        except ValueError as e:
            raise CriterionDataError(f"No support for throughput type '{tag}' yet") from e

        if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
            raise CriterionDataError(f"Expected a non-negative integer {tag} throughput, got {amount!r}")
        return cls(kind=kind, amount=amount)


@dataclass
class Benchmark:
    """Criterion benchmark metadata, as stored in ``benchmark.json``."""
    group_id: str
    value_str: Optional[str]
    throughput: Optional[Throughput]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Benchmark':
        group_id = _require(data, "group_id", "benchmark metadata")
        if not isinstance(group_id, str):
            raise CriterionDataError(f"Expected a string group_id, got {group_id!r}")
        return cls(
            group_id=group_id,
            value_str=data.get("value_str"),
            throughput=Throughput.from_dict(data.get("throughput")),
        )

    def value_as_int(self) -> int:
        """
        Decode the benchmark value as an integer.

        Criterion allows any string here, but this tool expects it to record
        the input size or iteration count, which is needed as a number for the
        x axis anyway.
        """
        if not isinstance(self.value_str, str) or not _UNSIGNED_INT.fullmatch(self.value_str):
            raise TraceError(
                f"expected an integer Criterion benchmark value in group "
                f"'{self.group_id}', got {self.value_str!r}"
            )
        return int(self.value_str)


@dataclass
class BenchmarkInfo:
    """What we eventually know about a single Criterion benchmark."""
    benchmark: Benchmark
    estimates: Estimates
