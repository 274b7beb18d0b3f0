"""Sequential, rate-limited collection of vendor market quotes."""

import json
import time
from collections.abc import Callable, Iterable, Mapping
from datetime import date, timedelta
from pathlib import Path

import requests
import structlog
from attrs import define, field

from . import parser
from .client import VendorHttpClient
from .models import MarketQuote, Provenance
from .months import month_bounds, normalize_month

logger = structlog.get_logger(__name__)

DEFAULT_PACING_SECONDS = 0.15
VARIATION_LOOKBACK_YEARS = 2


def _monthly_means(grouped: Mapping[str, list[MarketQuote]]) -> list[float]:
    means = []
    for quotes in grouped.values():
        values = [quote.value for quote in quotes if quote.value is not None]
        if values:
            means.append(sum(values) / len(values))
    return means


def _group_by_month(quotes: Iterable[MarketQuote]) -> dict[str, list[MarketQuote]]:
    grouped: dict[str, list[MarketQuote]] = {}
    for quote in quotes:
        month_key = normalize_month(quote.date)
        if month_key is not None:
            grouped.setdefault(month_key, []).append(quote)
    return grouped


@define(slots=True)
class MarketFetch:
    """Quotes gathered for a set of months and how they were obtained."""

    quotes: list[MarketQuote] = field(factory=list)
    provenance: Provenance = Provenance.LIVE
    months: list[str] = field(factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.quotes


@define(slots=True)
class MarketDataCollector:
    """Fetch vendor quotes one calendar month at a time.

    Requests are serialized with ``pacing`` seconds between them. A failed
    month is logged and skipped; the remaining months are still collected.
    """

    client: VendorHttpClient = field(factory=VendorHttpClient)
    pacing: float = DEFAULT_PACING_SECONDS
    sleep: Callable[[float], None] = time.sleep
    today: Callable[[], date] = date.today

    def _fetch_range(self, symbol: str, start: date, end: date) -> list[MarketQuote] | None:
        try:
            text = self.client.get_history(symbol, start, end)
        except requests.RequestException:
            logger.warning(
                "collector.fetch_failed",
                symbol=symbol,
                start=start.isoformat(),
                end=end.isoformat(),
                exc_info=True,
            )
            return None
        return parser.parse_history_text(text)

    def collect_monthly(self, symbol: str, month_keys: Iterable[str]) -> MarketFetch:
        """Fetch daily quotes for each requested month.

        Quotes dated outside the month they were requested for are dropped.
        When every month averages to the same price at two decimals, a wider
        window is fetched and used to re-derive those months.
        """
        months = sorted({key for key in (normalize_month(item) for item in month_keys) if key})
        log = logger.bind(symbol=symbol, months=len(months))
        log.info("collector.monthly_start")
        grouped: dict[str, list[MarketQuote]] = {}
        for month_key in months:
            start, end = month_bounds(month_key)
            log.debug("collector.month_fetch", month=month_key)
            quotes = self._fetch_range(symbol, start, end)
            if quotes is not None:
                in_month = [quote for quote in quotes if normalize_month(quote.date) == month_key]
                if in_month:
                    grouped[month_key] = in_month
                else:
                    log.debug("collector.month_empty", month=month_key)
            self.sleep(self.pacing)

        if not grouped:
            log.warning("collector.no_data")
            return MarketFetch(months=months)

        provenance = Provenance.LIVE
        means = _monthly_means(grouped)
        if len({round(mean, 2) for mean in means}) == 1:
            log.warning("collector.constant_prices", price=round(means[0], 2))
            provenance = self._rederive(symbol, grouped)

        quotes = [quote for month_key in sorted(grouped) for quote in grouped[month_key]]
        log.info("collector.monthly_complete", quotes=len(quotes), provenance=provenance.value)
        return MarketFetch(quotes=quotes, provenance=provenance, months=months)

    def _rederive(self, symbol: str, grouped: dict[str, list[MarketQuote]]) -> Provenance:
        """Replace constant months with quotes from a wider window, in place."""
        end = self.today()
        start = end.replace(year=end.year - VARIATION_LOOKBACK_YEARS, day=min(end.day, 28))
        wider = self._fetch_range(symbol, start, end)
        if not wider:
            return Provenance.LIVE
        replacements = _group_by_month(wider)
        updated = [month_key for month_key in grouped if month_key in replacements]
        for month_key in updated:
            grouped[month_key] = replacements[month_key]
        logger.info("collector.rederived", symbol=symbol, months=updated)
        return Provenance.ADJUSTED if updated else Provenance.LIVE

    def collect_daily(self, symbol: str, days: int = 365) -> list[MarketQuote]:
        """Daily quotes for the last ``days`` days, sorted by date."""
        end = self.today()
        start = end - timedelta(days=days)
        quotes = self._fetch_range(symbol, start, end) or []
        logger.debug("collector.daily_complete", symbol=symbol, quotes=len(quotes))
        return sorted(quotes, key=lambda quote: quote.date)

    def download_minutes(
        self,
        symbols: Mapping[str, str],
        start: date | str,
        end: date | str,
        output_dir: str | Path,
        *,
        prefix: str = "minutes",
    ) -> dict[str, Path]:
        """Write raw minute-bar payloads to ``<output_dir>/<prefix>-<name>.json``.

        Returns the written path per name. Names whose download fails are
        logged and left out.
        """
        directory = Path(output_dir)
        directory.mkdir(parents=True, exist_ok=True)
        written: dict[str, Path] = {}
        for name, symbol in symbols.items():
            log = logger.bind(name=name, symbol=symbol)
            try:
                payload = self.client.get_minutes(symbol, start, end)
            except (requests.RequestException, ValueError):
                log.warning("collector.download_failed", exc_info=True)
                continue
            path = directory / f"{prefix}-{name}.json"
            path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
            count = len(payload.get("results") or []) if isinstance(payload, dict) else 0
            log.info("collector.download_saved", path=str(path), records=count)
            written[name] = path
            self.sleep(self.pacing)
        return written

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self.client.close()
        logger.debug("collector.client_closed")


__all__ = ["DEFAULT_PACING_SECONDS", "MarketDataCollector", "MarketFetch"]
