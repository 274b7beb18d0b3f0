"""Parsers for vendor payloads and loosely shaped ledger rows."""

import csv
import io
from collections.abc import Iterable, Mapping
from typing import Any

import marshmallow as ma
import structlog

from .models import LedgerEntry, LedgerEntrySchema, MarketQuote, to_number

logger = structlog.get_logger(__name__)

# Symbol,Date,Open,High,Low,Close,Volume,OpenInterest
SYMBOL_COLUMN = 0
DATE_COLUMN = 1
CLOSE_COLUMN = 5
VOLUME_COLUMN = 6

_LEDGER_DATE_KEYS = ("poDate", "po_date", "month", "date")
_LEDGER_AMOUNT_KEYS = ("rate", "cost", "avgPricePerUnit", "avg_price_per_unit", "amount")
_LEDGER_QUANTITY_KEYS = ("orderQuantity", "order_quantity", "quantity")
_LEDGER_DESCRIPTION_KEYS = ("shortText", "short_text", "description")


def _first(row: Mapping[str, Any], keys: Iterable[str]) -> Any:
    """Return the first non-empty value among ``keys``."""
    for key in keys:
        value = row.get(key)
        if value is not None and str(value).strip() != "":
            return value
    return None


def _positive_close(value: object) -> float | None:
    number = to_number(value)
    if number is None or number <= 0:
        return None
    return number


def parse_history_text(text: str) -> list[MarketQuote]:
    """Parse an end-of-day CSV payload into quotes.

    Blank lines, lines mentioning ``error``, rows with fewer than six columns,
    and rows whose close is not a positive number are skipped. The header row
    falls out naturally because its close column is not numeric.
    """
    if not text or "No data" in text:
        return []
    lines = [line for line in text.strip().splitlines() if line.strip() and "error" not in line]
    quotes: list[MarketQuote] = []
    for parts in csv.reader(io.StringIO("\n".join(lines))):
        if len(parts) <= CLOSE_COLUMN:
            continue
        parts = [part.strip() for part in parts]
        close = _positive_close(parts[CLOSE_COLUMN])
        if close is None:
            continue
        quotes.append(
            MarketQuote(
                date=parts[DATE_COLUMN],
                value=close,
                symbol=parts[SYMBOL_COLUMN],
                volume=parts[VOLUME_COLUMN] if len(parts) > VOLUME_COLUMN else 0,
            )
        )
    return quotes


class ResultRowSchema(ma.Schema):
    """One row of a minute-bar ``results`` array."""

    class Meta:
        unknown = ma.EXCLUDE

    trading_day = ma.fields.Raw(data_key="tradingDay", load_default=None, allow_none=True)
    timestamp = ma.fields.Raw(load_default=None, allow_none=True)
    date = ma.fields.Raw(load_default=None, allow_none=True)
    symbol = ma.fields.Raw(load_default="", allow_none=True)
    close = ma.fields.Raw(load_default=None, allow_none=True)
    volume = ma.fields.Raw(load_default=0, allow_none=True)

    @ma.post_load
    def make_quote(self, data: dict[str, Any], **kwargs: object) -> MarketQuote | None:
        """Return a quote, or ``None`` for rows without a date or a positive close."""
        when = _first(data, ("trading_day", "timestamp", "date"))
        close = _positive_close(data.get("close"))
        if when is None or close is None:
            return None
        return MarketQuote(
            date=str(when),
            value=close,
            symbol=data.get("symbol") or "",
            volume=data.get("volume") or 0,
        )


def parse_results_payload(payload: Mapping[str, Any] | None) -> list[MarketQuote]:
    """Parse the JSON payload of the minute-bar endpoint."""
    if not payload:
        return []
    results = payload.get("results") or []
    loaded = ResultRowSchema(many=True).load(list(results))
    return [quote for quote in loaded if quote is not None]


def parse_ledger_rows(rows: Iterable[Mapping[str, Any]]) -> list[LedgerEntry]:
    """Map ledger rows of varying shape onto :class:`LedgerEntry`.

    Rows without a date are skipped; unusable amounts are kept as ``None`` and
    dropped later during aggregation.
    """
    schema = LedgerEntrySchema()
    entries: list[LedgerEntry] = []
    for index, row in enumerate(rows):
        date = _first(row, _LEDGER_DATE_KEYS)
        if date is None:
            logger.debug("parser.ledger_row_skipped", index=index, reason="missing_date")
            continue
        description = _first(row, _LEDGER_DESCRIPTION_KEYS)
        entries.append(
            schema.load(
                {
                    "date": str(date),
                    "amount": _first(row, _LEDGER_AMOUNT_KEYS),
                    "currency": row.get("currency"),
                    "quantity": _first(row, _LEDGER_QUANTITY_KEYS),
                    "description": str(description) if description is not None else "",
                }
            )
        )
    return entries


__all__ = [
    "ResultRowSchema",
    "parse_history_text",
    "parse_ledger_rows",
    "parse_results_payload",
]
