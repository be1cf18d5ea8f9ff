"""Bulk plotter for Criterion benchmark results."""

__version__ = "0.1.0"
