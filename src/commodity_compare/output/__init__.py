"""Visualization and formatting utilities for comparison reports."""

from .plots import ComparisonPlotConfig, PlotReport, generate_comparison_plot
from .utils import ensure_directory, format_percent, format_price

__all__ = [
    "ComparisonPlotConfig",
    "PlotReport",
    "ensure_directory",
    "format_percent",
    "format_price",
    "generate_comparison_plot",
]
