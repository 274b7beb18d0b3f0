"""Domain models for ledger purchases, market quotes, and monthly comparisons."""

import enum
from datetime import datetime, timezone
from typing import Any

import marshmallow as ma
from attrs import define, field, validators

from ..coerce import to_number
from .months import month_display


class Provenance(str, enum.Enum):
    """Where a market value came from."""

    LIVE = "live"
    ADJUSTED = "adjusted"
    SYNTHETIC = "synthetic"


def _optional_currency(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip().upper()
    return text or None


def _strip(value: object) -> str:
    return "" if value is None else str(value).strip()


def _to_volume(value: object) -> int:
    number = to_number(value)
    return int(number) if number is not None else 0


@define(slots=True, frozen=True)
class LedgerEntry:
    """One internal purchase transaction."""

    date: str = field(converter=_strip)
    amount: float | None = field(converter=to_number)
    currency: str | None = field(converter=_optional_currency, default=None)
    quantity: float | None = field(converter=to_number, default=None)
    description: str = field(converter=_strip, default="")


class LedgerEntrySchema(ma.Schema):
    """Marshmallow schema for :class:`LedgerEntry` rows."""

    class Meta:
        unknown = ma.EXCLUDE

    date = ma.fields.Str(required=True)
    amount = ma.fields.Raw(required=True, allow_none=True)
    currency = ma.fields.Str(load_default=None, allow_none=True)
    quantity = ma.fields.Raw(load_default=None, allow_none=True)
    description = ma.fields.Str(load_default="", allow_none=True)

    @ma.post_load
    def make_entry(self, data: dict[str, Any], **kwargs: object) -> LedgerEntry:
        """Convert validated rows into :class:`LedgerEntry` objects."""
        return LedgerEntry(**data)


@define(slots=True, frozen=True)
class MarketQuote:
    """One external market observation in vendor-native units."""

    date: str = field(converter=_strip)
    value: float | None = field(converter=to_number)
    symbol: str = field(converter=_strip, default="")
    volume: int = field(converter=_to_volume, default=0)


class MarketQuoteSchema(ma.Schema):
    """Marshmallow schema for :class:`MarketQuote`."""

    date = ma.fields.Str(required=True)
    value = ma.fields.Float(required=True, allow_none=True)
    symbol = ma.fields.Str(load_default="")
    volume = ma.fields.Int(load_default=0)

    @ma.post_load
    def make_quote(self, data: dict[str, Any], **kwargs: object) -> MarketQuote:
        """Instantiate :class:`MarketQuote` from validated payloads."""
        return MarketQuote(**data)


@define(slots=True, frozen=True)
class MonthlyAggregate:
    """Mean of all normalized values that fell into one calendar month."""

    month_key: str
    value: float
    sample_count: int = field(validator=validators.ge(1))
    provenance: Provenance = Provenance.LIVE

    @property
    def month_display(self) -> str:
        return month_display(self.month_key)


class MonthlyAggregateSchema(ma.Schema):
    """Marshmallow schema for :class:`MonthlyAggregate`."""

    month_key = ma.fields.Str(required=True)
    value = ma.fields.Float(required=True)
    sample_count = ma.fields.Int(required=True, validate=ma.validate.Range(min=1))
    provenance = ma.fields.Enum(Provenance, by_value=True, load_default=Provenance.LIVE)

    @ma.post_load
    def make_aggregate(self, data: dict[str, Any], **kwargs: object) -> MonthlyAggregate:
        """Instantiate :class:`MonthlyAggregate` objects."""
        return MonthlyAggregate(**data)


@define(slots=True, frozen=True, kw_only=True)
class ComparisonRecord:
    """Ledger and market values for one month, with derived comparison fields."""

    month_key: str
    ledger_value: float | None
    market_value: float | None
    difference: float | None = None
    ratio: float | None = None
    percent_difference: float | None = None
    ledger_samples: int = 0
    market_samples: int = 0
    market_provenance: Provenance | None = None

    @property
    def month_display(self) -> str:
        return month_display(self.month_key)

    def has_market_value(self) -> bool:
        """Return True when the month has a market counterpart."""
        return self.market_value is not None

    def is_premium(self) -> bool | None:
        """True when the purchase price exceeded the market price."""
        if self.difference is None:
            return None
        return self.difference > 0


class ComparisonRecordSchema(ma.Schema):
    """Marshmallow schema for :class:`ComparisonRecord`."""

    class Meta:
        unknown = ma.EXCLUDE

    month_key = ma.fields.Str(required=True)
    month_display = ma.fields.Str(dump_only=True)
    ledger_value = ma.fields.Float(allow_none=True)
    market_value = ma.fields.Float(allow_none=True)
    difference = ma.fields.Float(allow_none=True)
    ratio = ma.fields.Float(allow_none=True)
    percent_difference = ma.fields.Float(allow_none=True)
    ledger_samples = ma.fields.Int()
    market_samples = ma.fields.Int()
    market_provenance = ma.fields.Enum(Provenance, by_value=True, allow_none=True)

    @ma.post_load
    def make_record(self, data: dict[str, Any], **kwargs: object) -> ComparisonRecord:
        """Instantiate :class:`ComparisonRecord` objects."""
        return ComparisonRecord(**data)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@define(slots=True)
class ComparisonReport:
    """Reconciled series for one commodity, ready for rendering."""

    commodity: str
    unit: str
    decimals: int
    records: list[ComparisonRecord] = field(factory=list)
    market_provenance: Provenance | None = None
    wheat_variant: str | None = None
    generated_at: datetime = field(factory=_utcnow)

    @property
    def is_empty(self) -> bool:
        return not self.records

    def month_keys(self) -> list[str]:
        return [record.month_key for record in self.records]

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly representation of the report."""
        return ComparisonReportSchema().dump(self)


class ComparisonReportSchema(ma.Schema):
    """Marshmallow schema for serializing :class:`ComparisonReport`."""

    class Meta:
        unknown = ma.EXCLUDE

    commodity = ma.fields.Str(required=True)
    unit = ma.fields.Str(required=True)
    decimals = ma.fields.Int(required=True)
    records = ma.fields.List(ma.fields.Nested(ComparisonRecordSchema), required=True)
    market_provenance = ma.fields.Enum(Provenance, by_value=True, allow_none=True)
    wheat_variant = ma.fields.Str(allow_none=True)
    generated_at = ma.fields.DateTime()

    @ma.post_load
    def make_report(self, data: dict[str, Any], **kwargs: object) -> ComparisonReport:
        """Instantiate :class:`ComparisonReport` objects from validated payloads."""
        return ComparisonReport(**data)


__all__ = [
    "ComparisonRecord",
    "ComparisonRecordSchema",
    "ComparisonReport",
    "ComparisonReportSchema",
    "LedgerEntry",
    "LedgerEntrySchema",
    "MarketQuote",
    "MarketQuoteSchema",
    "MonthlyAggregate",
    "MonthlyAggregateSchema",
    "Provenance",
    "to_number",
]
