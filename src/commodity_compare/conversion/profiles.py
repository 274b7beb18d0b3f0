"""Per-commodity conversion profiles and the lookup tables derived from them."""

import enum

from attrs import define, field

from .pipelines import (
    ALUMINUM_CAN_WEIGHT_KG,
    BARREL_TO_KG,
    BUSHEL_TO_KG_WHEAT,
    CENTS,
    KILOGRAM,
    LB_TO_KG,
    TONNE_TO_KG,
    ConversionPipeline,
    FixedPrice,
)

COMMON_UNIT = "NGN/kg"
NEGOTIATED_ALUMINUM_USD_PER_TONNE = 2400.0


class UnknownCommodityError(ValueError):
    """Raised when a commodity identifier has no conversion profile."""

    def __init__(self, commodity: object) -> None:
        valid = ", ".join(item.value for item in Commodity)
        super().__init__(f"Unknown commodity {commodity!r}. Choose one of: {valid}.")
        self.commodity = commodity


class Commodity(str, enum.Enum):
    """Commodities tracked by the comparison pipeline."""

    WHEAT = "wheat"
    PALM = "palm"
    CRUDE_PALM = "crude_palm"
    SUGAR = "sugar"
    ALUMINUM = "aluminum"

    @classmethod
    def parse(cls, value: object) -> "Commodity":
        """Resolve an identifier, failing loudly for anything unrecognized."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise UnknownCommodityError(value) from exc


class SourceKind(str, enum.Enum):
    """Which side of the comparison a raw value came from."""

    LEDGER = "ledger"
    MARKET = "market"


class WheatVariant(str, enum.Enum):
    """Wheat contract used for the market side."""

    ZW = "zw"  # CBOT wheat, US cents per bushel
    ML = "ml"  # Euronext milling wheat, EUR per tonne

    @classmethod
    def parse(cls, value: object) -> "WheatVariant":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            valid = ", ".join(item.value for item in cls)
            raise ValueError(f"Unknown wheat variant {value!r}. Choose one of: {valid}.") from exc


@define(slots=True, frozen=True)
class MarketSource:
    """Vendor symbol and pipeline for one market contract."""

    symbol: str
    pipeline: ConversionPipeline


@define(slots=True, frozen=True, kw_only=True)
class CommodityProfile:
    """Everything needed to put one commodity's ledger and market prices side by side."""

    commodity: Commodity
    name: str
    category: str
    ledger: ConversionPipeline
    market: MarketSource
    variants: dict[WheatVariant, MarketSource] = field(factory=dict)
    unit_label: str = COMMON_UNIT
    decimals: int = 2
    negotiated: FixedPrice | None = None

    def market_source(self, variant: WheatVariant | str | None = None) -> MarketSource:
        """Return the market contract, honouring a variant only where one exists."""
        if not self.variants or variant is None:
            return self.market
        return self.variants[WheatVariant.parse(variant)]

    def symbol(self, variant: WheatVariant | str | None = None) -> str:
        return self.market_source(variant).symbol


def build_profiles() -> dict[Commodity, CommodityProfile]:
    """Return the ``commodity -> profile`` table.

    Adding a commodity means adding one entry here; every lookup table in this
    module is derived from it.
    """
    wheat_zw = MarketSource(
        symbol="ZW*1",
        pipeline=ConversionPipeline(
            "USD",
            price_scale=CENTS,
            kg_per_unit=BUSHEL_TO_KG_WHEAT,
            description="US cents per bushel",
        ),
    )
    wheat_ml = MarketSource(
        symbol="ML*1",
        pipeline=ConversionPipeline("EUR", kg_per_unit=TONNE_TO_KG, description="EUR per tonne"),
    )
    profiles = [
        CommodityProfile(
            commodity=Commodity.WHEAT,
            name="Wheat Flour",
            category="Grains",
            # Currency comes from each ledger row (USD or GHS).
            ledger=ConversionPipeline(None, kg_per_unit=KILOGRAM, description="currency per kg"),
            market=wheat_zw,
            variants={WheatVariant.ZW: wheat_zw, WheatVariant.ML: wheat_ml},
        ),
        CommodityProfile(
            commodity=Commodity.PALM,
            name="Palm Oil",
            category="Oils",
            ledger=ConversionPipeline("GHS", description="GHS per kg"),
            market=MarketSource(
                symbol="KO*1",
                pipeline=ConversionPipeline(
                    "MYR", kg_per_unit=TONNE_TO_KG, description="MYR per tonne"
                ),
            ),
        ),
        CommodityProfile(
            commodity=Commodity.CRUDE_PALM,
            name="Crude Palm Oil",
            category="Oils",
            ledger=ConversionPipeline("USD", description="USD per kg"),
            market=MarketSource(
                symbol="CB*1",
                pipeline=ConversionPipeline(
                    "USD", kg_per_unit=BARREL_TO_KG, description="USD per barrel"
                ),
            ),
        ),
        CommodityProfile(
            commodity=Commodity.SUGAR,
            name="Sugar",
            category="Softs",
            ledger=ConversionPipeline("NGN", description="NGN per kg"),
            market=MarketSource(
                symbol="SB*1",
                pipeline=ConversionPipeline(
                    "USD",
                    price_scale=CENTS,
                    kg_per_unit=LB_TO_KG,
                    description="US cents per pound",
                ),
            ),
        ),
        CommodityProfile(
            commodity=Commodity.ALUMINUM,
            name="Aluminum (Raw Material)",
            category="Metals",
            ledger=ConversionPipeline(
                "NGN", kg_per_unit=ALUMINUM_CAN_WEIGHT_KG, description="NGN per can"
            ),
            market=MarketSource(
                symbol="AL*1",
                pipeline=ConversionPipeline(
                    "USD", kg_per_unit=TONNE_TO_KG, description="USD per tonne"
                ),
            ),
            negotiated=FixedPrice(
                NEGOTIATED_ALUMINUM_USD_PER_TONNE,
                ConversionPipeline("USD", kg_per_unit=TONNE_TO_KG, description="USD per tonne"),
                label="Negotiated contract price",
            ),
        ),
    ]
    return {profile.commodity: profile for profile in profiles}


PROFILES = build_profiles()

UNIT_LABELS: dict[str, str] = {key.value: profile.unit_label for key, profile in PROFILES.items()}
DECIMALS: dict[str, int] = {key.value: profile.decimals for key, profile in PROFILES.items()}
VENDOR_SYMBOLS: dict[str, str] = {key.value: profile.symbol() for key, profile in PROFILES.items()}


__all__ = [
    "COMMON_UNIT",
    "DECIMALS",
    "PROFILES",
    "UNIT_LABELS",
    "VENDOR_SYMBOLS",
    "Commodity",
    "CommodityProfile",
    "MarketSource",
    "SourceKind",
    "UnknownCommodityError",
    "WheatVariant",
    "build_profiles",
]
