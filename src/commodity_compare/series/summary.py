"""Headline statistics over a reconciled comparison."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np

from ..data.models import ComparisonRecord


def percentage_change(current: float | None, previous: float | None) -> float | None:
    """Return ``(current - previous) / previous * 100``.

    None when either side is missing or zero.
    """
    if not current or not previous:
        return None
    return (current - previous) / previous * 100


def has_variation(values: Iterable[float | None], decimals: int = 2) -> bool:
    """True when the values hold more than one distinct number at ``decimals`` precision."""
    distinct = {round(value, decimals) for value in values if value is not None}
    return len(distinct) > 1


@dataclass(frozen=True)
class ComparisonSummary:
    """Counts and averages describing how purchases tracked the market."""

    months: int
    matched_months: int
    cheaper_months: int
    premium_months: int
    mean_difference: float | None
    mean_ratio: float | None
    mean_percent_difference: float | None

    @property
    def coverage(self) -> float:
        """Share of ledger months that have a market value."""
        if self.months == 0:
            return 0.0
        return self.matched_months / self.months


def _mean(values: Sequence[float]) -> float | None:
    if not values:
        return None
    return float(np.mean(np.asarray(values, dtype=float)))


def summarize(records: Sequence[ComparisonRecord]) -> ComparisonSummary:
    """Summarize a list of comparison records."""
    matched = [record for record in records if record.has_market_value()]
    differences = [record.difference for record in matched if record.difference is not None]
    ratios = [record.ratio for record in matched if record.ratio is not None]
    percents = [
        record.percent_difference for record in matched if record.percent_difference is not None
    ]
    cheaper = int(np.sum(np.asarray(differences, dtype=float) <= 0)) if differences else 0
    return ComparisonSummary(
        months=len(records),
        matched_months=len(matched),
        cheaper_months=cheaper,
        premium_months=len(differences) - cheaper,
        mean_difference=_mean(differences),
        mean_ratio=_mean(ratios),
        mean_percent_difference=_mean(percents),
    )


__all__ = ["ComparisonSummary", "has_variation", "percentage_change", "summarize"]
