"""Global test configuration and fixtures."""

from dataclasses import dataclass
from unittest.mock import MagicMock

import pytest
import requests

from commodity_compare.conversion import Converter, RateTable
from commodity_compare.data.client import VendorHttpClient
from commodity_compare.data.models import ComparisonRecord, ComparisonReport, Provenance


@dataclass(slots=True)
class CannedResponse:
    """A canned vendor response for testing."""

    text: str
    exception: requests.RequestException | None = None


def history_csv(symbol: str, rows: list[tuple[str, float]]) -> str:
    """Render end-of-day rows in the vendor's CSV layout."""
    lines = ["Symbol,Date,Open,High,Low,Close,Volume,OpenInterest"]
    for day, close in rows:
        lines.append(f"{symbol},{day},{close},{close},{close},{close},100,10")
    return "\n".join(lines) + "\n"


@pytest.fixture
def rates():
    """Rate table with round numbers for hand-checkable conversions."""
    return RateTable(to_usd={"GHS": 0.087, "MYR": 0.21, "EUR": 1.1637}, usd_to_target=1650)


@pytest.fixture
def converter(rates):
    return Converter(rates=rates)


@pytest.fixture
def mock_vendor_client():
    """A VendorHttpClient double primed with canned responses keyed by start date."""
    client = MagicMock(spec=VendorHttpClient)

    def prime(responses: dict[str, CannedResponse], default: str = ""):
        def get_history_side_effect(symbol, start, end):
            key = start.isoformat() if hasattr(start, "isoformat") else str(start)
            canned = responses.get(key)
            if canned is None:
                return default
            if canned.exception:
                raise canned.exception
            return canned.text

        client.get_history.side_effect = get_history_side_effect
        return client

    return prime


@pytest.fixture
def sample_report():
    records = [
        ComparisonRecord(
            month_key="2025-01",
            ledger_value=1022.08,
            market_value=1000.0,
            difference=22.08,
            ratio=1.02208,
            percent_difference=2.21,
            ledger_samples=1,
            market_samples=20,
            market_provenance=Provenance.LIVE,
        ),
        ComparisonRecord(
            month_key="2025-02",
            ledger_value=900.0,
            market_value=None,
            ledger_samples=2,
        ),
    ]
    return ComparisonReport(
        commodity="wheat",
        unit="NGN/kg",
        decimals=2,
        records=records,
        market_provenance=Provenance.LIVE,
        wheat_variant="zw",
    )
