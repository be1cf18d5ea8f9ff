from dataclasses import dataclass
from pathlib import Path
import re
from typing import Dict, List, Optional

from benchplot.errors import CriterionDataError
from benchplot.models.criterion_data import Benchmark, BenchmarkInfo, Estimates
from benchplot.util.file_utils import load_json
from benchplot.util.log_config import setup_logger

logger = setup_logger(__name__)

CRITERION_SUBDIR = Path("target") / "criterion"
REPORT_DIR = "report"
NEWEST_DATA_DIR = "new"
BENCHMARK_FILE = "benchmark.json"
ESTIMATES_FILE = "estimates.json"


def guess_benchmark_name(group_dir_name: str) -> str:
    """Reverse-engineer a benchmark group name from its directory name."""
    return group_dir_name.replace("_", "/")


@dataclass
class _BenchmarkInfoBuilder:
    """What we know about a single Criterion benchmark during file parsing."""
    group_dir_name: str
    benchmark: Optional[Benchmark] = None
    estimates: Optional[Estimates] = None


class CriterionReader:
    """
    Collect Criterion results for every benchmark group matching a regex.

    Criterion stores its data as
    ``target/criterion/<group>/<value>/new/{benchmark,estimates}.json``,
    next to HTML reports and older datasets that are skipped here.
    """

    def __init__(self, input_path: Path, regex: re.Pattern):
        self.input_path = Path(input_path)
        self.regex = regex
        self.criterion_path = self.input_path / CRITERION_SUBDIR

    def read_all(self) -> List[BenchmarkInfo]:
        """
        Read and validate all matching benchmarks.

        Returns:
            List[BenchmarkInfo]: One entry per benchmark, in directory order

        Raises:
            FileNotFoundError: If no Criterion data directory exists
            CriterionDataError: If the data is incomplete or malformed
        """
        if not self.criterion_path.is_dir():
            raise FileNotFoundError(
                f"No criterion data found in {self.criterion_path}. Have you run the benchmark yet?"
            )

        builders: Dict[Path, _BenchmarkInfoBuilder] = {}
        for data_file in self._iter_data_files():
            data_dir = data_file.parent
            builder = builders.setdefault(
                data_dir,
                _BenchmarkInfoBuilder(group_dir_name=data_dir.parent.parent.name),
            )
            self._decode_into(builder, data_file)

        result = [self._finish(data_dir, builder) for data_dir, builder in builders.items()]
        logger.info(f"Loaded {len(result)} benchmarks from {self.criterion_path}")
        return result

    def _iter_data_files(self):
        """Yield the data files worth decoding, pruning everything else early."""
        for group_dir in sorted(self.criterion_path.iterdir()):
            if not group_dir.is_dir() or group_dir.name == REPORT_DIR:
                continue

            group_name = guess_benchmark_name(group_dir.name)
            if not self.regex.search(group_name):
                logger.debug(f"Skipping group {group_name}: does not match {self.regex.pattern!r}")
                continue

            for value_dir in sorted(group_dir.iterdir()):
                if not value_dir.is_dir() or value_dir.name == REPORT_DIR:
                    continue

                data_dir = value_dir / NEWEST_DATA_DIR
                if not data_dir.is_dir():
                    logger.debug(f"Skipping {value_dir}: no '{NEWEST_DATA_DIR}' dataset")
                    continue

                for name in (BENCHMARK_FILE, ESTIMATES_FILE):
                    data_file = data_dir / name
                    if data_file.is_file():
                        yield data_file

    def _decode_into(self, builder: _BenchmarkInfoBuilder, data_file: Path) -> None:
        try:
            data = load_json(data_file)
        except (OSError, ValueError) as e:
            raise CriterionDataError(f"Failed to read Criterion data file {data_file}: {e}") from e

        try:
            if data_file.name == BENCHMARK_FILE:
                benchmark = Benchmark.from_dict(data)
                if not self.regex.search(benchmark.group_id):
                    raise CriterionDataError(
                        f"Benchmark group ID '{benchmark.group_id}' should match "
                        f"{self.regex.pattern!r} if its directory name does"
                    )
                builder.benchmark = benchmark
            else:
                builder.estimates = Estimates.from_dict(data)
        except CriterionDataError as e:
            raise CriterionDataError(f"{data_file}: {e}") from e
        logger.debug(f"Decoded {data_file.relative_to(self.criterion_path)}")

    def _finish(self, data_dir: Path, builder: _BenchmarkInfoBuilder) -> BenchmarkInfo:
        if builder.benchmark is None or builder.estimates is None:
            raise CriterionDataError(
                f"Did not get all expected data for one benchmark in {data_dir}"
            )

        expected_name = guess_benchmark_name(builder.group_dir_name)
        if expected_name != builder.benchmark.group_id:
            raise CriterionDataError(
                f"Benchmark group directory '{builder.group_dir_name}' does not follow the "
                f"expected naming convention for group '{builder.benchmark.group_id}'"
            )
        return BenchmarkInfo(benchmark=builder.benchmark, estimates=builder.estimates)
