"""Unit and currency conversion for commodity prices."""

from .converter import Converter
from .pipelines import ConversionPipeline, FixedPrice
from .profiles import (
    COMMON_UNIT,
    DECIMALS,
    PROFILES,
    UNIT_LABELS,
    VENDOR_SYMBOLS,
    Commodity,
    CommodityProfile,
    MarketSource,
    SourceKind,
    UnknownCommodityError,
    WheatVariant,
    build_profiles,
)
from .rates import RateTable

__all__ = [
    "COMMON_UNIT",
    "DECIMALS",
    "PROFILES",
    "UNIT_LABELS",
    "VENDOR_SYMBOLS",
    "Commodity",
    "CommodityProfile",
    "ConversionPipeline",
    "Converter",
    "FixedPrice",
    "MarketSource",
    "RateTable",
    "SourceKind",
    "UnknownCommodityError",
    "WheatVariant",
    "build_profiles",
]
