"""Current price and recent changes from a run of daily quotes."""

from collections.abc import Callable, Sequence
from typing import Any

from attrs import define

from ..data.models import MarketQuote
from .summary import percentage_change

# Offsets from the latest quote, counted in trading-day rows.
HORIZONS: dict[str, int] = {"day": 1, "week": 7, "month": 30, "year": 365}


@define(slots=True, frozen=True)
class PriceSnapshot:
    """Latest converted price with reference prices for each horizon."""

    date: str
    current: float | None
    previous: float | None
    week_ago: float | None
    month_ago: float | None
    year_ago: float | None
    raw_close: float | None = None

    def change(self, horizon: str) -> float | None:
        """Percentage change from the reference price of ``horizon``."""
        reference = {
            "day": self.previous,
            "week": self.week_ago,
            "month": self.month_ago,
            "year": self.year_ago,
        }[horizon]
        return percentage_change(self.current, reference)

    def changes(self) -> dict[str, float | None]:
        return {horizon: self.change(horizon) for horizon in HORIZONS}


def build_price_snapshot(
    quotes: Sequence[MarketQuote],
    convert: Callable[[Any], float | None],
) -> PriceSnapshot | None:
    """Build a snapshot from quotes sorted ascending by date.

    Reference rows are clamped to the earliest quote when the history is
    shorter than the horizon, except the previous close, which is None for a
    single quote.
    """
    usable = [quote for quote in quotes if quote.value is not None]
    if not usable:
        return None
    last = len(usable) - 1

    def at(offset: int) -> float | None:
        return convert(usable[max(0, last - offset)].value)

    latest = usable[last]
    return PriceSnapshot(
        date=latest.date,
        current=convert(latest.value),
        previous=at(HORIZONS["day"]) if last >= 1 else None,
        week_ago=at(HORIZONS["week"]),
        month_ago=at(HORIZONS["month"]),
        year_ago=at(HORIZONS["year"]),
        raw_close=latest.value,
    )


__all__ = ["HORIZONS", "PriceSnapshot", "build_price_snapshot"]
