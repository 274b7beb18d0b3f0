"""High level orchestration: ledger and market series in, comparison report out."""

from collections.abc import Iterable, Sequence

import structlog

from ..config import NEGOTIATED_SINCE, PipelineConfig
from ..conversion import Commodity, Converter, SourceKind
from ..series.aggregate import aggregate_monthly, fixed_price_series
from ..series.live import PriceSnapshot, build_price_snapshot
from ..series.reconcile import reconcile
from .client import VendorHttpClient
from .fallback import fallback_quotes
from .ingest import MarketDataCollector
from .ledger import ledger_entries
from .models import ComparisonReport, LedgerEntry, MarketQuote, MonthlyAggregate, Provenance
from .months import YearWindow, month_range

logger = structlog.get_logger(__name__)


def build_ledger_series(
    commodity: Commodity | str,
    entries: Iterable[LedgerEntry],
    *,
    converter: Converter,
    window: YearWindow | None = None,
    current_year: int | None = None,
) -> list[MonthlyAggregate]:
    """Monthly means of the ledger entries in the common unit."""
    profile = converter.profile(commodity)

    def convert(entry: LedgerEntry) -> float | None:
        return converter.to_common_unit(
            profile.commodity,
            entry.amount,
            SourceKind.LEDGER,
            currency=entry.currency,
        )

    return aggregate_monthly(
        ((entry.date, entry) for entry in entries),
        convert=convert,
        decimals=profile.decimals,
        window=window,
        current_year=current_year,
    )


def build_market_series(
    commodity: Commodity | str,
    quotes: Iterable[MarketQuote],
    *,
    converter: Converter,
    window: YearWindow | None = None,
    provenance: Provenance = Provenance.LIVE,
    current_year: int | None = None,
) -> list[MonthlyAggregate]:
    """Monthly means of vendor quotes in the common unit."""
    profile = converter.profile(commodity)
    return aggregate_monthly(
        ((quote.date, quote.value) for quote in quotes),
        convert=lambda raw: converter.to_common_unit(profile.commodity, raw, SourceKind.MARKET),
        decimals=profile.decimals,
        window=window,
        provenance=provenance,
        current_year=current_year,
    )


def _default_collector(config: PipelineConfig) -> MarketDataCollector:
    client = VendorHttpClient(username=config.vendor_username, password=config.vendor_password)
    return MarketDataCollector(client=client)


def _negotiated_series(
    commodity: Commodity,
    *,
    config: PipelineConfig,
    converter: Converter,
    window: YearWindow,
) -> list[MonthlyAggregate]:
    value = converter.negotiated_value(commodity)
    if value is None:
        return []
    months = [
        key
        for key in month_range(NEGOTIATED_SINCE, config.current_month())
        if window.contains(key)
    ]
    return fixed_price_series(months, value, decimals=converter.profile(commodity).decimals)


def _market_series(
    commodity: Commodity,
    month_keys: Sequence[str],
    *,
    config: PipelineConfig,
    converter: Converter,
    collector: MarketDataCollector | None,
    window: YearWindow,
) -> tuple[list[MonthlyAggregate], Provenance | None]:
    log = logger.bind(commodity=commodity.value)
    if not config.offline:
        owns_collector = collector is None
        active = collector or _default_collector(config)
        try:
            fetch = active.collect_monthly(converter.symbol(commodity), month_keys)
        finally:
            if owns_collector:
                active.close()
        series = build_market_series(
            commodity,
            fetch.quotes,
            converter=converter,
            window=window,
            provenance=fetch.provenance,
            current_year=config.year,
        )
        if series:
            return series, fetch.provenance
        log.warning("pipeline.market_empty", months=len(month_keys))

    if config.allow_synthetic:
        series = build_market_series(
            commodity,
            fallback_quotes(commodity, converter.wheat_variant),
            converter=converter,
            window=window,
            provenance=Provenance.SYNTHETIC,
            current_year=config.year,
        )
        if series:
            log.warning("pipeline.synthetic_fallback", months=len(series))
            return series, Provenance.SYNTHETIC
    return [], None


def compare_commodity(
    commodity: Commodity | str,
    *,
    config: PipelineConfig | None = None,
    converter: Converter | None = None,
    collector: MarketDataCollector | None = None,
    ledger: Iterable[LedgerEntry] | None = None,
) -> ComparisonReport:
    """Build the month-by-month comparison report for one commodity.

    Ledger rows default to the bundled purchase table. A commodity without
    ledger rows but with a negotiated price is compared against that price.
    Market data is fetched only for ledger months; when none can be obtained
    the bundled reference prices are used if ``config.allow_synthetic`` is set.
    """
    config = config or PipelineConfig()
    key = Commodity.parse(commodity)
    converter = converter or Converter(rates=config.rates, wheat_variant=config.wheat_variant)
    profile = converter.profile(key)
    window = config.window()
    entries = list(ledger) if ledger is not None else list(ledger_entries(key))

    log = logger.bind(commodity=key.value, window=(window.min_year, window.max_year))
    log.info("pipeline.compare_start", entries=len(entries), offline=config.offline)

    ledger_series = build_ledger_series(
        key, entries, converter=converter, window=window, current_year=config.year
    )
    if not ledger_series and profile.negotiated is not None:
        ledger_series = _negotiated_series(key, config=config, converter=converter, window=window)
        log.info("pipeline.negotiated_ledger", months=len(ledger_series))

    report = ComparisonReport(
        commodity=key.value,
        unit=profile.unit_label,
        decimals=profile.decimals,
        wheat_variant=converter.wheat_variant.value if key is Commodity.WHEAT else None,
    )
    if not ledger_series:
        log.warning("pipeline.ledger_empty")
        return report

    market_series, provenance = _market_series(
        key,
        [aggregate.month_key for aggregate in ledger_series],
        config=config,
        converter=converter,
        collector=collector,
        window=window,
    )
    report.records = reconcile(ledger_series, market_series, decimals=profile.decimals)
    report.market_provenance = provenance
    log.info(
        "pipeline.compare_complete",
        months=len(report.records),
        matched=sum(1 for record in report.records if record.has_market_value()),
        provenance=provenance.value if provenance else None,
    )
    return report


def live_snapshot(
    commodity: Commodity | str,
    *,
    config: PipelineConfig | None = None,
    converter: Converter | None = None,
    collector: MarketDataCollector | None = None,
    days: int = 365,
) -> PriceSnapshot | None:
    """Latest market price for a commodity with day, week, month and year changes."""
    config = config or PipelineConfig()
    key = Commodity.parse(commodity)
    converter = converter or Converter(rates=config.rates, wheat_variant=config.wheat_variant)
    owns_collector = collector is None
    active = collector or _default_collector(config)
    try:
        quotes = active.collect_daily(converter.symbol(key), days=days)
    finally:
        if owns_collector:
            active.close()
    return build_price_snapshot(
        quotes,
        lambda raw: converter.to_common_unit(key, raw, SourceKind.MARKET),
    )


__all__ = [
    "PipelineConfig",
    "build_ledger_series",
    "build_market_series",
    "compare_commodity",
    "live_snapshot",
]
