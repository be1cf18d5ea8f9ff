"""
Where traces get drawn into a plot.

One log-log line chart, one colored line with 95% error bars per trace.
"""
from pathlib import Path
from typing import List, Tuple

import matplotlib
import matplotlib.pyplot as plt
import numpy as np
from matplotlib.ticker import EngFormatter, LogLocator, NullFormatter

from benchplot.errors import PlotError
from benchplot.models.plot_params import PlotParams
from benchplot.models.trace import Traces
from benchplot.util.file_utils import ensure_parent_dir, file_format
from benchplot.util.log_config import setup_logger

logger = setup_logger(__name__)

Color = Tuple[float, float, float, float]

TITLE_FONT_PERCENT = 5.0
LABEL_FONT_PERCENT = 2.0
IDEAL_LEGEND_FONT_PERCENT = 2.25
LEGEND_HEIGHT_PERCENT = 50.0
ERROR_BAR_CAP_PERCENT = 0.8


def get_trace_colors(n: int, colormap: str = "hsv") -> List[Color]:
    """
    Pick one color per trace from regularly spaced points on a colormap.

    Positions are idx / n rather than spanning [0, 1], so that cyclic maps
    such as hsv never give the first and last trace the same color.
    """
    try:
        cmap = matplotlib.colormaps[colormap]
    except KeyError as e:
        raise PlotError(f"Unknown matplotlib colormap '{colormap}'") from e
    if n <= 0:
        return []
    return [tuple(cmap(pos)) for pos in np.arange(n) / n]


def legend_font_percent(num_traces: int) -> float:
    """Legend font size as a percentage of the plot height."""
    return min(IDEAL_LEGEND_FONT_PERCENT, LEGEND_HEIGHT_PERCENT / max(1, num_traces))


def _check_output_format(fig, output_path: Path) -> str:
    fmt = file_format(output_path)
    if fmt is None:
        raise PlotError(f"need file extension to pick backend: {output_path}")
    supported = fig.canvas.get_supported_filetypes()
    if fmt not in supported:
        raise PlotError(
            f"Unsupported output format '.{fmt}', expected one of: {', '.join(sorted(supported))}"
        )
    return fmt


def draw(traces: Traces, params: PlotParams) -> Path:
    """
    Draw the traces and write the plot to params.output_path.

    Args:
        traces: Data to be plotted, must not be empty
        params: Output path and chart styling

    Returns:
        Path: The written image

    Raises:
        PlotError: If there is nothing to plot or the image cannot be written
    """
    if len(traces) == 0:
        raise PlotError("No traces to plot")

    output_path = Path(params.output_path)
    colors = get_trace_colors(len(traces), params.colormap)

    fig, ax = plt.subplots(figsize=params.figsize, dpi=params.dpi)
    try:
        fmt = _check_output_format(fig, output_path)
        fig.patch.set_facecolor("white")

        # Determine the plotting range
        (x_min, x_max), (y_min, y_max) = traces.xy_range()
        ax.set_xscale("log")
        ax.set_yscale("log")
        if x_min < x_max:
            ax.set_xlim(x_min, x_max)
        if y_min < y_max:
            ax.set_ylim(y_min, y_max)

        ax.yaxis.set_major_locator(LogLocator(base=10.0, subs=(1.0, 2.0, 5.0)))
        ax.yaxis.set_major_formatter(EngFormatter(sep=""))
        ax.yaxis.set_minor_formatter(NullFormatter())

        if params.title:
            ax.set_title(params.title, fontsize=params.percent_height_pt(TITLE_FONT_PERCENT))

        label_size = params.percent_height_pt(LABEL_FONT_PERCENT)
        ax.set_xlabel(params.x_label, fontsize=label_size)
        ax.set_ylabel(traces.axis_unit(params.element_throughput_unit), fontsize=label_size)
        ax.tick_params(axis="both", which="both", labelsize=label_size)
        ax.grid(True, which="both", ls=":", alpha=0.3)

        cap_size = ERROR_BAR_CAP_PERCENT / 100 * params.height * 72 / params.dpi
        for trace, color in zip(traces, colors):
            x = np.asarray(trace.sizes, dtype=float)
            y = np.array([m.point_estimate for m in trace.measurements])
            lower = np.array([m.lower_bound for m in trace.measurements])
            upper = np.array([m.upper_bound for m in trace.measurements])
            label = traces.short_label(trace) if params.short_labels else trace.name
            ax.errorbar(
                x,
                y,
                yerr=np.clip(np.vstack([y - lower, upper - y]), 0.0, None),
                color=color,
                capsize=cap_size,
                label=label,
            )

        try:
            legend = ax.legend(
                loc=params.legend_position,
                fontsize=params.percent_height_pt(legend_font_percent(len(traces))),
                frameon=True,
                facecolor="white",
                edgecolor="black",
                framealpha=1.0,
            )
        except ValueError as e:
            raise PlotError(f"Invalid legend position '{params.legend_position}': {e}") from e
        legend.get_frame().set_linewidth(1.0)

        fig.tight_layout()
        try:
            ensure_parent_dir(output_path)
            fig.savefig(output_path, format=fmt, dpi=params.dpi, facecolor="white")
        except (OSError, ValueError) as e:
            raise PlotError(f"failed to write the plot to {output_path}: {e}") from e
    finally:
        plt.close(fig)

    logger.info(f"✓ Saved: {output_path}")
    return output_path
