"""Plotting tools for ledger versus market comparisons."""

from dataclasses import dataclass
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.ticker import FuncFormatter

from ..data.models import ComparisonReport
from ..series.summary import ComparisonSummary, summarize
from .utils import ensure_directory, format_price, to_numpy


def _axis_limits(values: np.ndarray, *, padding: float = 0.08) -> tuple[float, float]:
    """Return y-axis limits around the finite values with a little headroom."""
    finite = values[np.isfinite(values)]
    if finite.size == 0:
        return (0.0, 1.0)
    lower = float(finite.min())
    upper = float(finite.max())
    span = upper - lower
    if span <= 0:
        span = max(abs(lower), 1.0)
    margin = span * padding
    return lower - margin, upper + margin


@dataclass(frozen=True)
class ComparisonPlotConfig:
    """Styling options for ledger versus market line charts."""

    title: str | None = None
    xlabel: str = "Month"
    ylabel: str | None = None
    ledger_color: str = "#2563eb"
    market_color: str = "#d08300"
    line_width: float = 2.5
    marker_size: float = 6.0
    annotate_differences: bool = True


@dataclass(frozen=True)
class PlotReport:
    """Metadata describing a saved plot and the summary it shows."""

    path: Path
    summary: ComparisonSummary


def generate_comparison_plot(
    report: ComparisonReport,
    *,
    output_dir: str | Path = "out",
    filename: str | None = None,
    config: ComparisonPlotConfig | None = None,
) -> PlotReport:
    """Render ledger and market prices per month.

    Months without a market value appear as gaps in the market line.
    """
    config = config or ComparisonPlotConfig()
    out_dir = ensure_directory(output_dir)
    filename = filename or f"{report.commodity}-comparison.png"

    labels = [record.month_display for record in report.records]
    positions = np.arange(len(labels))
    ledger = to_numpy(record.ledger_value for record in report.records)
    market = to_numpy(record.market_value for record in report.records)
    summary = summarize(report.records)

    fig, ax = plt.subplots(figsize=(11, 6))
    ax.plot(
        positions,
        ledger,
        color=config.ledger_color,
        linewidth=config.line_width,
        marker="o",
        markersize=config.marker_size,
        label="Purchase price",
    )
    provenance = report.market_provenance.value if report.market_provenance else "none"
    ax.plot(
        positions,
        market,
        color=config.market_color,
        linewidth=config.line_width,
        linestyle="--",
        marker="s",
        markersize=config.marker_size,
        label=f"Market price ({provenance})",
    )

    if config.annotate_differences:
        for position, record in zip(positions, report.records):
            if record.percent_difference is None or record.ledger_value is None:
                continue
            ax.annotate(
                f"{record.percent_difference:+.1f}%",
                (position, record.ledger_value),
                textcoords="offset points",
                xytext=(0, 8),
                ha="center",
                fontsize=8,
                color=config.ledger_color,
            )

    title = config.title or f"{report.commodity.replace('_', ' ').title()}: purchase vs market"
    ax.set_title(title)
    ax.set_xlabel(config.xlabel)
    ax.set_ylabel(config.ylabel or report.unit)
    ax.set_xticks(positions)
    ax.set_xticklabels(labels, rotation=45, ha="right")
    ax.yaxis.set_major_formatter(
        FuncFormatter(lambda value, _pos: format_price(value, report.decimals))
    )
    ymin, ymax = _axis_limits(np.concatenate([ledger, market]))
    ax.set_ylim(ymin, ymax)

    ax.legend(loc="upper right")
    ax.grid(True, linestyle="--", linewidth=0.5, alpha=0.6)
    fig.tight_layout()

    output_path = out_dir / filename
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    return PlotReport(path=output_path, summary=summary)


__all__ = ["ComparisonPlotConfig", "PlotReport", "generate_comparison_plot"]
