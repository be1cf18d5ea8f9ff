"""
CLI tests: argument parsing, and main() run end to end against a fake
Criterion project, checking exit codes and written files.
"""

import subprocess
import sys
import textwrap
from pathlib import Path

import pytest

from benchplot.cli.cli import parse_plot_args, plot_overrides
from benchplot.consts.ExitCode import ExitCode
from benchplot.plot_results import main


class TestParseArgs:
    def test_defaults(self) -> None:
        args = parse_plot_args(["sum"])
        assert args.regex.pattern == "sum"
        assert args.input_path == Path(".")
        assert all(value is None for value in plot_overrides(args).values())

    def test_plot_flags_become_overrides(self) -> None:
        args = parse_plot_args([
            "-o", "out.png", "-t", "ops", "--width", "800", "--short-labels", "sum",
        ])
        overrides = plot_overrides(args)
        assert overrides["output_path"] == Path("out.png")
        assert overrides["element_throughput_unit"] == "ops"
        assert overrides["width"] == 800
        assert overrides["short_labels"] is True

    def test_invalid_regex_is_rejected(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            parse_plot_args(["sum("])
        assert exc_info.value.code == 2

    @pytest.mark.parametrize("size", ["0", "-1", "big"])
    def test_non_positive_size_is_rejected(self, size: str) -> None:
        with pytest.raises(SystemExit):
            parse_plot_args(["--height", size, "sum"])


class TestMain:
    def test_plots_matching_groups(self, criterion_project, tmp_path: Path) -> None:
        for size in (16, 64, 256):
            criterion_project.add("sum/f32", size, median_ns=size * 2.0, throughput={"Elements": size})
            criterion_project.add("sum/f64", size, median_ns=size * 4.0, throughput={"Elements": size})
        output = tmp_path / "plot.svg"
        csv = tmp_path / "data.csv"
        summary = tmp_path / "summary.txt"

        code = main([
            "-i", str(criterion_project.root),
            "-o", str(output),
            "--csv", str(csv),
            "--summary", str(summary),
            "--title", "Sums",
            "sum/",
        ])

        assert code == ExitCode.SUCCESS
        assert output.exists()
        assert len(csv.read_text(encoding="utf-8").splitlines()) == 1 + 6
        assert "FLOP/s" in summary.read_text(encoding="utf-8")

    def test_config_dir_and_env(self, criterion_project, tmp_path: Path) -> None:
        criterion_project.add("copy", 1024, throughput={"Bytes": 1024})
        config_dir = tmp_path / "config_yaml"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("width: 640\nheight: 480\n", encoding="utf-8")
        output = tmp_path / "env.png"
        (config_dir / "config_small.yaml").write_text(
            textwrap.dedent(f"""\
                output_path: "{output.as_posix()}"
            """),
            encoding="utf-8",
        )

        code = main([
            "-i", str(criterion_project.root),
            "--config-dir", str(config_dir),
            "--env", "small",
            "copy",
        ])

        assert code == ExitCode.SUCCESS
        assert output.exists()

    def test_invalid_config_value(self, criterion_project, tmp_path: Path) -> None:
        criterion_project.add("sum", 16, throughput={"Elements": 16})
        config_dir = tmp_path / "config_yaml"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("output_path: null\n", encoding="utf-8")
        code = main(["-i", str(criterion_project.root), "--config-dir", str(config_dir), "sum"])
        assert code == ExitCode.INVALID_DATA

    def test_missing_criterion_data(self, tmp_path: Path) -> None:
        code = main(["-i", str(tmp_path), "-o", str(tmp_path / "plot.svg"), "sum"])
        assert code == ExitCode.MISSING_DATA

    def test_nothing_matches(self, criterion_project, tmp_path: Path) -> None:
        criterion_project.add("sum", 16, throughput={"Elements": 16})
        code = main(["-i", str(criterion_project.root), "-o", str(tmp_path / "plot.svg"), "product"])
        assert code == ExitCode.MISSING_DATA
        assert not (tmp_path / "plot.svg").exists()

    def test_inconsistent_data(self, criterion_project, tmp_path: Path) -> None:
        criterion_project.add("copy", 16, throughput={"Bytes": 16})
        criterion_project.add("sum", 16, throughput={"Elements": 16})
        code = main(["-i", str(criterion_project.root), "-o", str(tmp_path / "plot.svg"), ".*"])
        assert code == ExitCode.INVALID_DATA

    def test_plot_failure(self, criterion_project, tmp_path: Path) -> None:
        criterion_project.add("sum", 16, throughput={"Elements": 16})
        code = main(["-i", str(criterion_project.root), "-o", str(tmp_path / "plot"), "sum"])
        assert code == ExitCode.PLOT_FAILED

    def test_csv_export_failure(self, criterion_project, tmp_path: Path) -> None:
        criterion_project.add("sum", 16, throughput={"Elements": 16})
        csv_dir = tmp_path / "csvdir"
        csv_dir.mkdir()
        code = main([
            "-i", str(criterion_project.root),
            "-o", str(tmp_path / "plot.svg"),
            "--csv", str(csv_dir),
            "sum",
        ])
        assert code == ExitCode.EXPORT_FAILED

    def test_unwritable_output_directory(self, criterion_project, tmp_path: Path) -> None:
        criterion_project.add("sum", 16, throughput={"Elements": 16})
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        code = main(["-i", str(criterion_project.root), "-o", str(blocker / "plot.svg"), "sum"])
        assert code == ExitCode.PLOT_FAILED

    def test_verbose_with_log_file(self, criterion_project, tmp_path: Path) -> None:
        criterion_project.add("sum", 16, throughput={"Elements": 16})
        log_file = tmp_path / "logs" / "benchplot.log"
        code = main([
            "-i", str(criterion_project.root),
            "-o", str(tmp_path / "plot.png"),
            "-v",
            "--log-file", str(log_file),
            "sum",
        ])
        assert code == ExitCode.SUCCESS
        assert "Loaded 1 benchmarks" in log_file.read_text(encoding="utf-8")


class TestModuleEntrypoint:
    def test_help_exits_zero(self) -> None:
        result = subprocess.run(
            [sys.executable, "-m", "benchplot", "--help"],
            capture_output=True,
            text=True,
            timeout=60,
        )
        assert result.returncode == 0
        assert "usage" in result.stdout.lower()
