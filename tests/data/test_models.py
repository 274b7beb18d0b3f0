"""Unit tests for the data models."""

import attrs
import pytest

from commodity_compare.data.models import (
    ComparisonRecord,
    ComparisonRecordSchema,
    ComparisonReportSchema,
    LedgerEntry,
    LedgerEntrySchema,
    MarketQuote,
    MarketQuoteSchema,
    MonthlyAggregate,
    MonthlyAggregateSchema,
    Provenance,
)


def test_ledger_entry_coerces_fields():
    entry = LedgerEntry(" 2025-01-04 ", "7.12", currency="ghs", quantity="1,000")
    assert entry.date == "2025-01-04"
    assert entry.amount == pytest.approx(7.12)
    assert entry.currency == "GHS"
    assert entry.quantity == 1000.0
    assert entry.description == ""


def test_ledger_entry_keeps_unusable_amount_as_none():
    entry = LedgerEntry("2025-01-04", "n/a")
    assert entry.amount is None
    assert entry.currency is None


def test_ledger_entry_is_immutable():
    entry = LedgerEntry("2025-01-04", 7.12)
    with pytest.raises(attrs.exceptions.FrozenInstanceError):
        entry.amount = 8.0  # type: ignore[misc]


def test_ledger_entry_schema_ignores_unknown_keys():
    entry = LedgerEntrySchema().load(
        {"date": "Dec-25", "amount": 1283.72, "currency": "NGN", "material": "x"}
    )
    assert isinstance(entry, LedgerEntry)
    assert entry.amount == pytest.approx(1283.72)


def test_market_quote_schema_roundtrip():
    quote = MarketQuoteSchema().load({"date": "2025-01-02", "value": 617.0, "symbol": "ZW*1"})
    assert quote == MarketQuote("2025-01-02", 617.0, symbol="ZW*1")
    assert MarketQuote("2025-01-02", "617", volume="").volume == 0


def test_monthly_aggregate_requires_samples():
    with pytest.raises(ValueError):
        MonthlyAggregate("2025-01", 10.0, 0)
    aggregate = MonthlyAggregateSchema().load(
        {"month_key": "2025-01", "value": 10.0, "sample_count": 2, "provenance": "adjusted"}
    )
    assert aggregate.provenance is Provenance.ADJUSTED
    assert aggregate.month_display == "Jan 2025"


def test_comparison_record_helpers():
    record = ComparisonRecord(
        month_key="2025-03", ledger_value=110.0, market_value=100.0, difference=10.0
    )
    assert record.has_market_value()
    assert record.is_premium() is True
    missing = ComparisonRecord(month_key="2025-04", ledger_value=90.0, market_value=None)
    assert not missing.has_market_value()
    assert missing.is_premium() is None


def test_comparison_record_schema_dumps_display_and_loads_back():
    record = ComparisonRecord(
        month_key="2025-03",
        ledger_value=110.0,
        market_value=100.0,
        difference=10.0,
        market_provenance=Provenance.SYNTHETIC,
    )
    dumped = ComparisonRecordSchema().dump(record)
    assert dumped["month_display"] == "Mar 2025"
    assert dumped["market_provenance"] == "synthetic"
    assert ComparisonRecordSchema().load(dumped) == record


def test_report_to_dict(sample_report):
    payload = sample_report.to_dict()
    assert payload["commodity"] == "wheat"
    assert payload["market_provenance"] == "live"
    assert [row["month_key"] for row in payload["records"]] == ["2025-01", "2025-02"]
    assert payload["records"][1]["market_value"] is None
    assert not sample_report.is_empty
    assert sample_report.month_keys() == ["2025-01", "2025-02"]

    loaded = ComparisonReportSchema().load(payload)
    assert loaded.records == sample_report.records
