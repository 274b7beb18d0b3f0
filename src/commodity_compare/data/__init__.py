"""Ledger and market data: models, parsing, vendor access, and bundled tables.

The orchestration helpers live in :mod:`commodity_compare.data.pipeline`,
which depends on the series package and is imported directly.
"""

from .client import VendorHttpClient
from .fallback import FALLBACK_QUOTES, fallback_quotes
from .ingest import MarketDataCollector, MarketFetch
from .ledger import LEDGER_TABLE, ledger_entries
from .models import (
    ComparisonRecord,
    ComparisonReport,
    LedgerEntry,
    MarketQuote,
    MonthlyAggregate,
    Provenance,
)
from .months import YearWindow, in_window, month_display, normalize_month

__all__ = [
    "ComparisonRecord",
    "ComparisonReport",
    "FALLBACK_QUOTES",
    "LEDGER_TABLE",
    "LedgerEntry",
    "MarketDataCollector",
    "MarketFetch",
    "MarketQuote",
    "MonthlyAggregate",
    "Provenance",
    "VendorHttpClient",
    "YearWindow",
    "fallback_quotes",
    "in_window",
    "ledger_entries",
    "month_display",
    "normalize_month",
]
