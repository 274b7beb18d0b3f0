"""Unit tests for the market data collector."""

import json
from datetime import date
from unittest.mock import MagicMock

import requests

from commodity_compare.data.client import VendorHttpClient
from commodity_compare.data.ingest import MarketDataCollector
from commodity_compare.data.models import Provenance
from tests.conftest import CannedResponse, history_csv

TODAY = date(2026, 10, 17)


def _collector(client, sleeps):
    return MarketDataCollector(client=client, sleep=sleeps.append, today=lambda: TODAY)


def test_collect_monthly_fetches_each_month_with_pacing(mock_vendor_client):
    client = mock_vendor_client(
        {
            "2025-01-01": CannedResponse(
                history_csv("ZW*1", [("2025-01-02", 600.0), ("2025-01-03", 610.0)])
            ),
            # Quotes from neighbouring months are dropped.
            "2025-02-01": CannedResponse(
                history_csv("ZW*1", [("2025-01-31", 1.0), ("2025-02-03", 620.0)])
            ),
        }
    )
    sleeps: list[float] = []
    fetch = _collector(client, sleeps).collect_monthly("ZW*1", ["Feb-25", "2025-01", "2025-01"])

    assert fetch.provenance is Provenance.LIVE
    assert fetch.months == ["2025-01", "2025-02"]
    assert [(quote.date, quote.value) for quote in fetch.quotes] == [
        ("2025-01-02", 600.0),
        ("2025-01-03", 610.0),
        ("2025-02-03", 620.0),
    ]
    assert sleeps == [0.15, 0.15]
    assert client.get_history.call_count == 2


def test_collect_monthly_continues_past_request_errors(mock_vendor_client):
    client = mock_vendor_client(
        {
            "2025-01-01": CannedResponse("", exception=requests.ConnectionError("boom")),
            "2025-02-01": CannedResponse(history_csv("SB*1", [("2025-02-03", 18.5)])),
            "2025-03-01": CannedResponse(history_csv("SB*1", [("2025-03-03", 19.2)])),
        }
    )
    fetch = _collector(client, []).collect_monthly("SB*1", ["2025-01", "2025-02", "2025-03"])

    assert [quote.date for quote in fetch.quotes] == ["2025-02-03", "2025-03-03"]
    assert fetch.provenance is Provenance.LIVE


def test_collect_monthly_rederives_constant_months(mock_vendor_client):
    client = mock_vendor_client(
        {
            "2025-01-01": CannedResponse(history_csv("KO*1", [("2025-01-02", 4000.0)])),
            "2025-02-01": CannedResponse(history_csv("KO*1", [("2025-02-03", 4000.0)])),
            # Two-year window ending today.
            "2024-10-17": CannedResponse(
                history_csv(
                    "KO*1",
                    [
                        ("2025-01-02", 4100.0),
                        ("2025-01-03", 4120.0),
                        ("2025-02-03", 4300.0),
                        ("2025-05-05", 3900.0),
                    ],
                )
            ),
        }
    )
    fetch = _collector(client, []).collect_monthly("KO*1", ["2025-01", "2025-02"])

    assert fetch.provenance is Provenance.ADJUSTED
    assert [(quote.date, quote.value) for quote in fetch.quotes] == [
        ("2025-01-02", 4100.0),
        ("2025-01-03", 4120.0),
        ("2025-02-03", 4300.0),
    ]


def test_collect_monthly_keeps_constant_months_when_wider_fetch_is_empty(mock_vendor_client):
    client = mock_vendor_client(
        {"2025-01-01": CannedResponse(history_csv("AL*1", [("2025-01-02", 2500.0)]))}
    )
    fetch = _collector(client, []).collect_monthly("AL*1", ["2025-01"])

    assert fetch.provenance is Provenance.LIVE
    assert [quote.value for quote in fetch.quotes] == [2500.0]


def test_collect_monthly_without_data(mock_vendor_client):
    client = mock_vendor_client({})
    fetch = _collector(client, []).collect_monthly("ZW*1", ["2025-01", "garbage"])
    assert fetch.is_empty
    assert fetch.months == ["2025-01"]


def test_collect_daily_sorts_and_spans_days(mock_vendor_client):
    client = mock_vendor_client(
        {
            "2026-10-10": CannedResponse(
                history_csv("ZW*1", [("2026-10-16", 530.0), ("2026-10-14", 520.0)])
            )
        }
    )
    quotes = _collector(client, []).collect_daily("ZW*1", days=7)
    assert [quote.date for quote in quotes] == ["2026-10-14", "2026-10-16"]
    _, start, end = client.get_history.call_args.args
    assert (start, end) == (date(2026, 10, 10), TODAY)


def test_collect_daily_swallows_request_errors(mock_vendor_client):
    client = mock_vendor_client(
        {"2025-10-17": CannedResponse("", exception=requests.Timeout("slow"))}
    )
    assert _collector(client, []).collect_daily("ZW*1", days=365) == []


def test_download_minutes_writes_payloads(tmp_path):
    client = MagicMock(spec=VendorHttpClient)

    def get_minutes(symbol, start, end):
        if symbol == "BAD":
            raise requests.HTTPError("nope")
        return {"results": [{"symbol": symbol, "close": 1.0}]}

    client.get_minutes.side_effect = get_minutes
    sleeps: list[float] = []
    written = _collector(client, sleeps).download_minutes(
        {"wheat": "ZWZ25", "broken": "BAD"},
        date(2025, 1, 1),
        date(2025, 11, 30),
        tmp_path / "raw",
    )

    assert list(written) == ["wheat"]
    assert written["wheat"] == tmp_path / "raw" / "minutes-wheat.json"
    payload = json.loads(written["wheat"].read_text())
    assert payload["results"][0]["symbol"] == "ZWZ25"
    assert sleeps == [0.15]


def test_close_closes_client():
    client = MagicMock(spec=VendorHttpClient)
    MarketDataCollector(client=client).close()
    client.close.assert_called_once()
