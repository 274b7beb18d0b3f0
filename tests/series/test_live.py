"""Unit tests for live price snapshots."""

import pytest

from commodity_compare.data.models import MarketQuote
from commodity_compare.series import HORIZONS, build_price_snapshot


def _quotes(count):
    return [MarketQuote(date=f"day-{index:03d}", value=100.0 + index) for index in range(count)]


def _identity(raw):
    return raw


def test_snapshot_offsets_and_changes():
    snapshot = build_price_snapshot(_quotes(400), _identity)
    assert snapshot.date == "day-399"
    assert snapshot.current == 499.0
    assert snapshot.raw_close == 499.0
    assert snapshot.previous == 498.0
    assert snapshot.week_ago == 492.0
    assert snapshot.month_ago == 469.0
    assert snapshot.year_ago == 134.0
    changes = snapshot.changes()
    assert list(changes) == list(HORIZONS)
    assert changes["day"] == pytest.approx(1 / 498 * 100)
    assert changes["year"] == pytest.approx((499 - 134) / 134 * 100)


def test_snapshot_clamps_short_history():
    snapshot = build_price_snapshot(_quotes(3), _identity)
    assert snapshot.previous == 101.0
    assert snapshot.week_ago == 100.0
    assert snapshot.month_ago == 100.0
    assert snapshot.year_ago == 100.0


def test_snapshot_single_quote():
    snapshot = build_price_snapshot(_quotes(1), _identity)
    assert snapshot.current == 100.0
    assert snapshot.previous is None
    assert snapshot.change("day") is None
    assert snapshot.change("week") == 0.0


def test_snapshot_converts_values():
    snapshot = build_price_snapshot(_quotes(2), lambda raw: raw * 2)
    assert snapshot.current == 202.0
    assert snapshot.previous == 200.0
    assert snapshot.raw_close == 101.0


def test_snapshot_without_quotes():
    assert build_price_snapshot([], _identity) is None
    assert build_price_snapshot([MarketQuote(date="2025-01-02", value=None)], _identity) is None
