"""Tabular side outputs: the plotted data as CSV and as a text summary."""
from pathlib import Path

import pandas as pd
from tabulate import tabulate

from benchplot.errors import ExportError
from benchplot.models.trace import Traces
from benchplot.util.file_utils import ensure_parent_dir
from benchplot.util.log_config import setup_logger

logger = setup_logger(__name__)

CSV_COLUMNS = ["trace", "size", "point_estimate", "lower_bound", "upper_bound"]


def traces_to_frame(traces: Traces) -> pd.DataFrame:
    """One row per plotted point."""
    rows = [
        {
            "trace": trace.name,
            "size": size,
            "point_estimate": m.point_estimate,
            "lower_bound": m.lower_bound,
            "upper_bound": m.upper_bound,
        }
        for trace in traces
        for size, m in trace.data
    ]
    return pd.DataFrame(rows, columns=CSV_COLUMNS)


def export_csv(traces: Traces, output_path: Path) -> Path:
    output_path = Path(output_path)
    try:
        ensure_parent_dir(output_path)
        traces_to_frame(traces).to_csv(output_path, index=False)
    except OSError as e:
        raise ExportError(f"failed to export data to {output_path}: {e}") from e
    logger.info(f"✓ Exported data: {output_path}")
    return output_path


def format_summary_table(traces: Traces, unit: str) -> str:
    """
    Format the plotted points as a github-style table.

    Args:
        traces: Plotted data
        unit: Unit of the measurements, e.g. 'FLOP/s' or 's'

    Returns:
        str: The table, one row per point
    """
    records = [
        [
            trace.name,
            size,
            f"{m.point_estimate:.4g}",
            f"[{m.lower_bound:.4g}, {m.upper_bound:.4g}]",
            unit,
        ]
        for trace in traces
        for size, m in trace.data
    ]
    headers = ["trace", "size", "estimate", "95% interval", "unit"]
    return tabulate(records, headers=headers, tablefmt="github", stralign="left", numalign="right")


def write_summary(traces: Traces, unit: str, output_path: Path) -> Path:
    output_path = Path(output_path)
    try:
        ensure_parent_dir(output_path)
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(format_summary_table(traces, unit) + "\n")
    except OSError as e:
        raise ExportError(f"failed to write the summary to {output_path}: {e}") from e
    logger.info(f"✓ Generated: {output_path}")
    return output_path
