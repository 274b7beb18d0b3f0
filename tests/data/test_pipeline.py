"""Unit tests for the comparison orchestrator."""

from datetime import date

import pytest

from commodity_compare.config import PipelineConfig
from commodity_compare.conversion import UnknownCommodityError
from commodity_compare.data.ingest import MarketDataCollector, MarketFetch
from commodity_compare.data.models import LedgerEntry, MarketQuote, Provenance
from commodity_compare.data.pipeline import (
    build_ledger_series,
    build_market_series,
    compare_commodity,
    live_snapshot,
)

WHEAT_ZW_617 = round(6.17 / 27.2155 * 1650, 2)


@pytest.fixture
def mock_collector(mocker):
    """A MarketDataCollector double returning an empty fetch."""
    collector = mocker.MagicMock(spec=MarketDataCollector)
    collector.collect_monthly.return_value = MarketFetch()
    return collector


@pytest.fixture
def live_config(rates):
    return PipelineConfig(rates=rates, current_year=2026, as_of=date(2026, 10, 17))


def test_build_ledger_series_converts_per_entry_currency(converter):
    entries = [
        LedgerEntry("2025-01-04", 7.12, currency="GHS"),
        LedgerEntry("2025-01-20", 0.62, currency="USD"),
        LedgerEntry("2025-02-01", 1.0, currency="XYZ"),
    ]
    series = build_ledger_series("wheat", entries, converter=converter, current_year=2026)
    assert [(item.month_key, item.value, item.sample_count) for item in series] == [
        ("2025-01", round((1022.076 + 1023.0) / 2, 2), 2)
    ]


def test_build_market_series_labels_provenance(converter):
    quotes = [MarketQuote("2025-01-02", 4000), MarketQuote("2025-01-03", 4000)]
    series = build_market_series(
        "palm", quotes, converter=converter, provenance=Provenance.ADJUSTED, current_year=2026
    )
    assert series[0].value == pytest.approx(1386.0)
    assert series[0].sample_count == 2
    assert series[0].provenance is Provenance.ADJUSTED


def test_compare_offline_without_synthetic(rates, mock_collector):
    config = PipelineConfig(offline=True, allow_synthetic=False, current_year=2026, rates=rates)
    report = compare_commodity(
        "wheat",
        config=config,
        collector=mock_collector,
        ledger=[LedgerEntry("2025-01-04", 7.12, currency="GHS")],
    )

    assert report.commodity == "wheat"
    assert report.unit == "NGN/kg"
    assert report.wheat_variant == "zw"
    assert report.market_provenance is None
    assert len(report.records) == 1
    record = report.records[0]
    assert record.month_key == "2025-01"
    assert record.ledger_value == pytest.approx(1022.08)
    assert record.market_value is None
    mock_collector.collect_monthly.assert_not_called()


def test_compare_with_live_market(live_config, mock_collector):
    mock_collector.collect_monthly.return_value = MarketFetch(
        quotes=[MarketQuote("2025-01-02", 617), MarketQuote("2025-01-03", 617)],
        months=["2025-01"],
    )
    report = compare_commodity(
        "wheat",
        config=live_config,
        collector=mock_collector,
        ledger=[
            LedgerEntry("2025-01-04", 7.12, currency="GHS"),
            LedgerEntry("2025-03-04", 7.12, currency="GHS"),
        ],
    )

    mock_collector.collect_monthly.assert_called_once_with("ZW*1", ["2025-01", "2025-03"])
    mock_collector.close.assert_not_called()
    assert report.market_provenance is Provenance.LIVE
    january, march = report.records
    assert january.market_value == pytest.approx(WHEAT_ZW_617)
    assert january.market_samples == 2
    assert january.percent_difference == pytest.approx(
        round((1022.08 - WHEAT_ZW_617) / WHEAT_ZW_617 * 100, 2)
    )
    assert march.market_value is None


def test_compare_falls_back_to_synthetic_quotes(live_config, mock_collector):
    report = compare_commodity(
        "palm",
        config=live_config,
        collector=mock_collector,
        ledger=[LedgerEntry("2025-01-10", 15.15, currency="GHS")],
    )

    assert report.market_provenance is Provenance.SYNTHETIC
    record = report.records[0]
    assert record.ledger_value == pytest.approx(2174.78)
    assert record.market_value == pytest.approx(1420.65)
    assert record.market_provenance is Provenance.SYNTHETIC
    assert report.wheat_variant is None


def test_compare_offline_uses_synthetic_without_collector(live_config, mock_collector, mocker):
    default_collector = mocker.patch("commodity_compare.data.pipeline._default_collector")
    config = PipelineConfig(
        offline=True, rates=live_config.rates, current_year=2026, as_of=date(2026, 10, 17)
    )
    report = compare_commodity("sugar", config=config, collector=mock_collector)

    default_collector.assert_not_called()
    mock_collector.collect_monthly.assert_not_called()
    assert report.market_provenance is Provenance.SYNTHETIC
    december = next(record for record in report.records if record.month_key == "2025-12")
    assert december.ledger_value == pytest.approx(1283.72)
    assert december.market_value == pytest.approx(round(0.1467 / 0.45359237 * 1650, 2))


def test_compare_closes_collector_it_creates(live_config, mock_collector, mocker):
    mocker.patch(
        "commodity_compare.data.pipeline._default_collector", return_value=mock_collector
    )
    compare_commodity(
        "sugar",
        config=live_config,
        ledger=[LedgerEntry("Dec-25", 1283.72, currency="NGN")],
    )
    mock_collector.collect_monthly.assert_called_once_with("SB*1", ["2025-12"])
    mock_collector.close.assert_called_once()


def test_compare_negotiated_aluminum_when_ledger_empty(rates):
    config = PipelineConfig(
        offline=True, allow_synthetic=False, rates=rates, as_of=date(2020, 3, 15)
    )
    report = compare_commodity("aluminum", config=config, ledger=[])

    assert [record.month_key for record in report.records] == ["2020-01", "2020-02", "2020-03"]
    assert {record.ledger_value for record in report.records} == {3960.0}
    assert report.market_provenance is None


def test_compare_returns_empty_report_when_ledger_outside_window(live_config, mock_collector):
    report = compare_commodity(
        "sugar",
        config=live_config,
        collector=mock_collector,
        ledger=[LedgerEntry("2010-01-01", 100.0, currency="NGN")],
    )
    assert report.is_empty
    assert report.commodity == "sugar"
    mock_collector.collect_monthly.assert_not_called()


def test_compare_unknown_commodity():
    with pytest.raises(UnknownCommodityError):
        compare_commodity("cocoa", config=PipelineConfig(offline=True))


def test_live_snapshot(converter, mocker):
    collector = mocker.MagicMock(spec=MarketDataCollector)
    collector.collect_daily.return_value = [
        MarketQuote("2026-10-15", 18.0),
        MarketQuote("2026-10-16", 19.8),
    ]
    snapshot = live_snapshot("sugar", converter=converter, collector=collector, days=30)

    collector.collect_daily.assert_called_once_with("SB*1", days=30)
    assert snapshot.date == "2026-10-16"
    assert snapshot.raw_close == 19.8
    assert snapshot.current == pytest.approx(0.198 / 0.45359237 * 1650)
    assert snapshot.change("day") == pytest.approx(10.0)
    collector.close.assert_not_called()


def test_live_snapshot_without_quotes(converter, mocker):
    collector = mocker.MagicMock(spec=MarketDataCollector)
    collector.collect_daily.return_value = []
    assert live_snapshot("palm", converter=converter, collector=collector) is None


def test_compare_is_idempotent(rates):
    config = PipelineConfig(offline=True, rates=rates, as_of=date(2026, 10, 17))
    first = compare_commodity("palm", config=config)
    second = compare_commodity("palm", config=config)

    assert first.market_provenance is Provenance.SYNTHETIC
    assert any(record.has_market_value() for record in first.records)
    assert first.records == second.records
