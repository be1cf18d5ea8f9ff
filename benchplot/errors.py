"""
Exceptions raised by benchplot.

Kept in one place so that the CLI can map failures to exit codes without
importing the reader, trace or plotting machinery.
"""


class ConfigError(ValueError):
    """Raised when a config file cannot be parsed or holds unknown settings."""


class CriterionDataError(ValueError):
    """Raised when Criterion output is missing pieces or cannot be decoded."""


class TraceError(ValueError):
    """Raised when benchmark data cannot be shaped into consistent traces."""


class PlotError(RuntimeError):
    """Raised when the chart cannot be drawn or written."""


class ExportError(RuntimeError):
    """Raised when the CSV or summary side output cannot be written."""
