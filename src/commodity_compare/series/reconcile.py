"""Left-join ledger and market monthly series into comparison records."""

from collections.abc import Iterable

from ..data.models import ComparisonRecord, MonthlyAggregate


def percent_difference(ledger: float | None, market: float | None) -> float | None:
    """``(ledger - market) / |market| * 100`` rounded to two decimals."""
    if ledger is None or market is None or market == 0:
        return None
    return round((ledger - market) / abs(market) * 100, 2)


def _index(series: Iterable[MonthlyAggregate]) -> dict[str, MonthlyAggregate]:
    # Later duplicates win; aggregated series never carry duplicates.
    return {aggregate.month_key: aggregate for aggregate in series}


def reconcile(
    ledger_series: Iterable[MonthlyAggregate],
    market_series: Iterable[MonthlyAggregate],
    *,
    decimals: int = 2,
) -> list[ComparisonRecord]:
    """Pair every ledger month with the market value for the same month.

    Months present only in the market series are dropped. Ledger months with no
    market counterpart keep ``market_value=None`` and no derived fields.
    ``difference`` is rounded to ``decimals`` and ``ratio`` to four places.
    """
    ledger = _index(ledger_series)
    market = _index(market_series)
    records: list[ComparisonRecord] = []
    for month_key in sorted(ledger):
        own = ledger[month_key]
        other = market.get(month_key)
        if other is None:
            records.append(
                ComparisonRecord(
                    month_key=month_key,
                    ledger_value=own.value,
                    market_value=None,
                    ledger_samples=own.sample_count,
                )
            )
            continue
        ratio = round(own.value / other.value, 4) if other.value != 0 else None
        records.append(
            ComparisonRecord(
                month_key=month_key,
                ledger_value=own.value,
                market_value=other.value,
                difference=round(own.value - other.value, decimals),
                ratio=ratio,
                percent_difference=percent_difference(own.value, other.value),
                ledger_samples=own.sample_count,
                market_samples=other.sample_count,
                market_provenance=other.provenance,
            )
        )
    return records


__all__ = ["percent_difference", "reconcile"]
