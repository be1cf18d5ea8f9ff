"""
Command-line interface of the bulk plotter.
"""
import argparse
import re
from pathlib import Path
from typing import Optional, Sequence


def _regex(value: str) -> re.Pattern:
    try:
        return re.compile(value)
    except re.error as e:
        raise argparse.ArgumentTypeError(f"invalid regex {value!r}: {e}") from e


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from e
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {number}")
    return number


def build_plot_parser(description: Optional[str] = None) -> argparse.ArgumentParser:
    """
    Create the ArgumentParser of the plotter.

    Plot settings default to None so that values from the config files are
    only overridden by flags the user actually passed.

    Args:
        description: Optional parser description shown in CLI help.

    Returns:
        argparse.ArgumentParser: the configured parser
    """
    parser = argparse.ArgumentParser(
        prog="benchplot",
        description=description or "Simple bulk plotter from Criterion benchmark data",
    )
    parser.add_argument(
        "regex",
        type=_regex,
        help="Regex matching the benchmark groups (traces) to be plotted",
    )
    parser.add_argument(
        "-i", "--input-path",
        type=Path,
        default=Path("."),
        help="Path to root of Rust project where criterion data was acquired (default: .)",
    )

    plot = parser.add_argument_group("plot settings (override the config files)")
    plot.add_argument("-o", "--output-path", type=Path, default=None,
                      help="Name of output image; the extension picks the format (default: ./output.svg)")
    plot.add_argument("-t", "--element-throughput-unit", type=str, default=None,
                      help="Base label for element throughput (default: FLOP)")
    plot.add_argument("--title", type=str, default=None,
                      help="Chart title (default: none)")
    plot.add_argument("--x-label", type=str, default=None,
                      help="Horizontal axis label (default: 'Problem size')")
    plot.add_argument("--width", type=_positive_int, default=None,
                      help="Image width in pixels (default: 1920)")
    plot.add_argument("--height", type=_positive_int, default=None,
                      help="Image height in pixels (default: 1080)")
    plot.add_argument("--dpi", type=_positive_int, default=None,
                      help="Image resolution (default: 100)")
    plot.add_argument("--colormap", type=str, default=None,
                      help="Matplotlib colormap the trace colors are picked from (default: hsv)")
    plot.add_argument("--legend-position", type=str, default=None,
                      help="Matplotlib legend location (default: 'lower right')")
    plot.add_argument("--short-labels", action="store_true", default=None,
                      help="Strip the name segments shared by all traces from legend labels")

    output = parser.add_argument_group("extra outputs")
    output.add_argument("--csv", type=Path, default=None,
                        help="Also export the plotted data as CSV to this path")
    output.add_argument("--summary", type=Path, default=None,
                        help="Also write a text summary table to this path")

    config = parser.add_argument_group("configuration")
    config.add_argument(
        "--config-dir",
        type=Path,
        default=None,
        help="Directory holding a config.yaml with plot setting defaults",
    )
    config.add_argument(
        "--env",
        type=str,
        default=None,
        help=(
            "Environment name for configuration override (e.g., 'paper', 'slides'). "
            "Loads config_<env>.yaml in addition to the base config.yaml."
        ),
    )

    logging_group = parser.add_argument_group("logging")
    logging_group.add_argument("-v", "--verbose", action="store_true",
                               help="Enable debug logging")
    logging_group.add_argument("--log-file", type=Path, default=None,
                               help="Also write detailed logs to this file")
    return parser


def parse_plot_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments of the plotter.

    Args:
        argv: Arguments to parse, defaults to sys.argv[1:].

    Returns:
        argparse.Namespace: parsed arguments
    """
    parser = build_plot_parser()
    return parser.parse_args(argv)


PLOT_SETTINGS = (
    "output_path",
    "element_throughput_unit",
    "title",
    "x_label",
    "width",
    "height",
    "dpi",
    "colormap",
    "legend_position",
    "short_labels",
)


def plot_overrides(args: argparse.Namespace) -> dict:
    """Plot settings given on the command line, None where not given."""
    return {name: getattr(args, name) for name in PLOT_SETTINGS}
