"""
Shared pytest fixtures for benchplot tests.

Most tests need a fake Rust project with a target/criterion directory laid out
the way Criterion writes it. The `criterion_project` fixture builds one in a
temp directory and hands back a small helper to add benchmarks to it.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import pytest

os.environ.setdefault("MPLBACKEND", "Agg")

from benchplot.consts.ThroughputType import ThroughputType  # noqa: E402
from benchplot.models.trace import MeasurementDisplay, Trace, Traces  # noqa: E402


def make_estimates(median_ns: float, spread_ns: float = 1.0, level: float = 0.95) -> Dict[str, Any]:
    """An estimates.json payload with the given median execution time."""
    def estimate(point: float) -> Dict[str, Any]:
        return {
            "confidence_interval": {
                "confidence_level": level,
                "lower_bound": point - spread_ns,
                "upper_bound": point + spread_ns,
            },
            "point_estimate": point,
            "standard_error": spread_ns / 2,
        }

    return {
        "mean": estimate(median_ns * 1.01),
        "median": estimate(median_ns),
        "median_abs_dev": estimate(spread_ns),
        "slope": None,
        "std_dev": estimate(spread_ns),
    }


class CriterionProject:
    """Writes benchmark data the way Criterion lays it out on disk."""

    def __init__(self, root: Path):
        self.root = root
        self.criterion_dir = root / "target" / "criterion"
        self.criterion_dir.mkdir(parents=True)
        (self.criterion_dir / "report").mkdir()
        (self.criterion_dir / "report" / "index.html").write_text("<html></html>", encoding="utf-8")

    def add(
        self,
        group_id: str,
        value: Any,
        median_ns: float = 100.0,
        throughput: Optional[Dict[str, int]] = None,
        spread_ns: float = 1.0,
        level: float = 0.95,
        with_benchmark: bool = True,
        with_estimates: bool = True,
        dataset: str = "new",
    ) -> Path:
        """Add one benchmark, returning its data directory."""
        group_dir = self.criterion_dir / group_id.replace("/", "_")
        data_dir = group_dir / str(value) / dataset
        data_dir.mkdir(parents=True, exist_ok=True)
        (group_dir / "report").mkdir(exist_ok=True)
        (group_dir / str(value) / "report").mkdir(exist_ok=True)

        if with_benchmark:
            benchmark = {
                "group_id": group_id,
                "function_id": None,
                "value_str": None if value is None else str(value),
                "throughput": throughput,
                "full_id": f"{group_id}/{value}",
                "directory_name": f"{group_id.replace('/', '_')}/{value}",
                "title": f"{group_id}/{value}",
            }
            self.write_json(data_dir / "benchmark.json", benchmark)
        if with_estimates:
            self.write_json(data_dir / "estimates.json", make_estimates(median_ns, spread_ns, level))
        # Files Criterion writes but the plotter never needs
        self.write_json(data_dir / "sample.json", {"iters": [1.0], "times": [median_ns]})
        self.write_json(data_dir / "tukey.json", [0.0, 0.0, 0.0, 0.0])
        return data_dir

    @staticmethod
    def write_json(path: Path, data: Any) -> None:
        path.write_text(json.dumps(data), encoding="utf-8")


@pytest.fixture()
def criterion_project(tmp_path: Path) -> CriterionProject:
    return CriterionProject(tmp_path / "project")


@pytest.fixture()
def sample_traces() -> Traces:
    """Two element-throughput traces sharing the 'matmul' prefix."""
    def point(value: float) -> MeasurementDisplay:
        return MeasurementDisplay(point_estimate=value, lower_bound=value * 0.9, upper_bound=value * 1.1)

    return Traces(
        throughput_type=ThroughputType.ELEMENTS,
        traces=(
            Trace(name="matmul/blocked", data=((16, point(2e9)), (64, point(5e9)), (256, point(8e9)))),
            Trace(name="matmul/naive", data=((16, point(1e9)), (64, point(1.5e9)))),
        ),
    )
