#!/usr/bin/env python3
"""
Bulk plotter for Criterion benchmark results.

This script reads the raw data Criterion leaves in target/criterion and draws
one throughput vs. input size trace per matching benchmark group.
"""
import logging
import sys
from typing import Optional, Sequence

from benchplot.cli.cli import parse_plot_args, plot_overrides
from benchplot.config.config_loader import ConfigLoader
from benchplot.consts.ExitCode import ExitCode
from benchplot.errors import ConfigError, CriterionDataError, ExportError, PlotError, TraceError
from benchplot.service.criterion_reader import CriterionReader
from benchplot.service.exporter import export_csv, write_summary
from benchplot.service.plotter import draw
from benchplot.service.trace_builder import build_traces
from benchplot.util.log_config import configure_logging, setup_logger

logger = setup_logger(__name__)


def run(args) -> None:
    """
    Load the data, shape it into traces and write every requested output.

    Raises whatever the individual steps raise; main() maps it to exit codes.
    """
    config = ConfigLoader(args.config_dir, env=args.env)
    if args.env:
        logger.info(f"Loaded configuration with environment override: {args.env}")
    params = config.merged(plot_overrides(args))

    logger.info(f"Loading Criterion data from {args.input_path}...")
    data = CriterionReader(args.input_path, args.regex).read_all()
    if not data:
        raise FileNotFoundError(
            f"No benchmark group matches {args.regex.pattern!r} in {args.input_path}"
        )

    traces = build_traces(data)
    logger.info(f"Plotting {len(traces)} traces...")
    draw(traces, params)

    unit = traces.axis_unit(params.element_throughput_unit)
    if args.csv:
        export_csv(traces, args.csv)
    if args.summary:
        write_summary(traces, unit, args.summary)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main function: parse arguments, plot, and report failures as exit codes."""
    args = parse_plot_args(argv)
    configure_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_file=args.log_file,
    )

    try:
        run(args)
    except FileNotFoundError as e:
        logger.error(f"❌ {e}")
        return ExitCode.MISSING_DATA
    except PermissionError as e:
        logger.error(f"❌ {e}")
        return ExitCode.PERMISSION_DENIED
    except (ConfigError, CriterionDataError, TraceError) as e:
        logger.error(f"❌ {e}")
        return ExitCode.INVALID_DATA
    except PlotError as e:
        logger.error(f"❌ {e}")
        return ExitCode.PLOT_FAILED
    except ExportError as e:
        logger.error(f"❌ {e}")
        return ExitCode.EXPORT_FAILED

    logger.info("✅ Done")
    return ExitCode.SUCCESS


if __name__ == "__main__":
    sys.exit(main())
