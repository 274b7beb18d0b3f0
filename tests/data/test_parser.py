"""Unit tests for vendor and ledger parsers."""

import pytest

from commodity_compare.data import parser
from tests.conftest import history_csv


def test_parse_history_text_reads_date_and_close():
    text = history_csv("ZW*1", [("2025-01-02", 617.0), ("2025-01-03", 612.5)])
    quotes = parser.parse_history_text(text)
    assert [(quote.date, quote.value) for quote in quotes] == [
        ("2025-01-02", 617.0),
        ("2025-01-03", 612.5),
    ]
    assert quotes[0].symbol == "ZW*1"
    assert quotes[0].volume == 100


def test_parse_history_text_skips_bad_rows():
    text = "\n".join(
        [
            "Symbol,Date,Open,High,Low,Close,Volume,OpenInterest",
            "",
            "error: rate limited",
            "ZW*1,2025-01-02,1,1,1,0,5,5",
            "ZW*1,2025-01-03,1,1,1,-4,5,5",
            "ZW*1,2025-01-06,1,1,1,abc,5,5",
            "ZW*1,2025-01-07,1,1",
            "ZW*1,2025-01-08,1,1,1,600.25",
        ]
    )
    quotes = parser.parse_history_text(text)
    assert [(quote.date, quote.value, quote.volume) for quote in quotes] == [
        ("2025-01-08", 600.25, 0)
    ]


@pytest.mark.parametrize("text", ["", "No data for symbol"])
def test_parse_history_text_empty(text):
    assert parser.parse_history_text(text) == []


def test_parse_results_payload():
    payload = {
        "results": [
            {"symbol": "ZWZ25", "tradingDay": "2025-01-02", "close": 617.0, "volume": 12},
            {"symbol": "ZWZ25", "timestamp": "2025-01-03T14:00:00", "close": "612.5"},
            {"symbol": "ZWZ25", "close": 600},
            {"symbol": "ZWZ25", "tradingDay": "2025-01-06", "close": 0},
        ]
    }
    quotes = parser.parse_results_payload(payload)
    assert [(quote.date, quote.value) for quote in quotes] == [
        ("2025-01-02", 617.0),
        ("2025-01-03T14:00:00", 612.5),
    ]
    assert quotes[0].volume == 12
    assert parser.parse_results_payload({}) == []
    assert parser.parse_results_payload({"results": None}) == []


def test_parse_ledger_rows_handles_each_shape():
    rows = [
        {"poDate": "2025-01-04", "rate": 7.12, "currency": "GHS"},
        {"month": "Dec-25", "cost": 1283.72},
        {"month": "Nov-25", "avgPricePerUnit": 139.5, "currency": "NGN"},
        {
            "poDate": "2024-10-01",
            "rate": 1.53,
            "currency": "USD",
            "orderQuantity": 130000.0,
            "shortText": "PP_RESIN_FC9413P",
        },
        {"rate": 1.0},
    ]
    entries = parser.parse_ledger_rows(rows)
    assert [entry.date for entry in entries] == ["2025-01-04", "Dec-25", "Nov-25", "2024-10-01"]
    assert entries[0].currency == "GHS"
    assert entries[1].amount == pytest.approx(1283.72)
    assert entries[1].currency is None
    assert entries[2].amount == pytest.approx(139.5)
    assert entries[3].quantity == 130000.0
    assert entries[3].description == "PP_RESIN_FC9413P"
