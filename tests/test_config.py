"""Unit tests for the pipeline configuration."""

from datetime import date

import pytest

from commodity_compare.config import PipelineConfig
from commodity_compare.conversion import RateTable, WheatVariant


def test_defaults():
    config = PipelineConfig(as_of=date(2026, 10, 17))
    assert config.years_back == 5
    assert config.wheat_variant is WheatVariant.ZW
    assert config.allow_synthetic is True
    assert config.offline is False
    assert isinstance(config.rates, RateTable)
    assert config.year == 2026
    assert config.current_month() == "2026-10"
    window = config.window()
    assert (window.min_year, window.max_year) == (2021, 2027)


def test_current_year_and_min_year_override_window():
    config = PipelineConfig(current_year="2025", min_year="2019", years_back=1)
    window = config.window()
    assert (window.min_year, window.max_year) == (2019, 2026)
    assert config.year == 2025


def test_wheat_variant_is_parsed():
    assert PipelineConfig(wheat_variant="ML").wheat_variant is WheatVariant.ML
    with pytest.raises(ValueError):
        PipelineConfig(wheat_variant="xx")


def test_negative_years_back_rejected():
    with pytest.raises(ValueError):
        PipelineConfig(years_back=-1)


def test_password_hidden_from_repr():
    config = PipelineConfig(vendor_username="user", vendor_password="secret")
    assert "secret" not in repr(config)
    assert "user" in repr(config)
