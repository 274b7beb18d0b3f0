"""Monthly series construction and comparison."""

from .aggregate import aggregate_monthly, fixed_price_series
from .live import HORIZONS, PriceSnapshot, build_price_snapshot
from .reconcile import percent_difference, reconcile
from .summary import ComparisonSummary, has_variation, percentage_change, summarize

__all__ = [
    "HORIZONS",
    "ComparisonSummary",
    "PriceSnapshot",
    "aggregate_monthly",
    "build_price_snapshot",
    "fixed_price_series",
    "has_variation",
    "percent_difference",
    "percentage_change",
    "reconcile",
    "summarize",
]
