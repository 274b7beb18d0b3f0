"""Bucket dated price records into calendar months."""

import math
from collections.abc import Callable, Iterable
from typing import Any

import structlog

from ..data.models import MonthlyAggregate, Provenance, to_number
from ..data.months import YearWindow, normalize_month

logger = structlog.get_logger(__name__)

Converter = Callable[[Any], float | None]


def aggregate_monthly(
    records: Iterable[tuple[object, Any]],
    *,
    convert: Converter | None = None,
    decimals: int = 2,
    window: YearWindow | None = None,
    provenance: Provenance = Provenance.LIVE,
    current_year: int | None = None,
) -> list[MonthlyAggregate]:
    """Average ``(date, value)`` records per month.

    Records whose date cannot be normalized, whose month falls outside
    ``window``, or whose value ``convert`` rejects are dropped and logged.
    Without an explicit ``window`` the default recency window around
    ``current_year`` applies.
    Each remaining month yields the mean of its values rounded to ``decimals``;
    duplicate dates are averaged together. Output is sorted by month key.
    """
    convert = convert or to_number
    if window is None:
        window = YearWindow.from_years_back(current_year=current_year)
    buckets: dict[str, list[float]] = {}
    dropped = 0
    for raw_date, raw_value in records:
        month_key = normalize_month(raw_date, current_year=current_year)
        if month_key is None:
            logger.debug("aggregate.record_dropped", reason="bad_date", date=str(raw_date))
            dropped += 1
            continue
        if not window.contains(month_key):
            logger.debug("aggregate.record_dropped", reason="out_of_window", month=month_key)
            dropped += 1
            continue
        value = convert(raw_value)
        if value is None or math.isnan(value) or math.isinf(value):
            logger.debug("aggregate.record_dropped", reason="bad_value", month=month_key)
            dropped += 1
            continue
        buckets.setdefault(month_key, []).append(value)

    aggregates = [
        MonthlyAggregate(
            month_key=month_key,
            value=round(math.fsum(values) / len(values), decimals),
            sample_count=len(values),
            provenance=provenance,
        )
        for month_key, values in sorted(buckets.items())
    ]
    if dropped:
        logger.debug("aggregate.summary", months=len(aggregates), dropped=dropped)
    return aggregates


def fixed_price_series(
    month_keys: Iterable[str],
    value: float,
    *,
    decimals: int = 2,
    provenance: Provenance = Provenance.LIVE,
) -> list[MonthlyAggregate]:
    """Constant monthly series, one sample per month, for a negotiated price."""
    rounded = round(value, decimals)
    keys = sorted({key for key in (normalize_month(item) for item in month_keys) if key})
    return [
        MonthlyAggregate(month_key=key, value=rounded, sample_count=1, provenance=provenance)
        for key in keys
    ]


__all__ = ["aggregate_monthly", "fixed_price_series"]
