"""Dispatch raw prices through the conversion pipeline of their commodity."""

import structlog
from attrs import define, field

from .pipelines import ConversionPipeline
from .profiles import (
    Commodity,
    CommodityProfile,
    SourceKind,
    UnknownCommodityError,
    WheatVariant,
    build_profiles,
)
from .rates import RateTable

logger = structlog.get_logger(__name__)


@define(slots=True)
class Converter:
    """Convert ledger and market prices into the common unit.

    The profile table and rate table are injected so each commodity can be
    exercised in isolation and rates can change without code edits.
    """

    profiles: dict[Commodity, CommodityProfile] = field(factory=build_profiles)
    rates: RateTable = field(factory=RateTable)
    wheat_variant: WheatVariant = field(default=WheatVariant.ZW, converter=WheatVariant.parse)

    def profile(self, commodity: Commodity | str) -> CommodityProfile:
        """Return the profile for a commodity, raising for unknown identifiers."""
        key = Commodity.parse(commodity)
        try:
            return self.profiles[key]
        except KeyError as exc:
            raise UnknownCommodityError(commodity) from exc

    def pipeline(
        self,
        commodity: Commodity | str,
        source_kind: SourceKind | str,
    ) -> ConversionPipeline:
        """Select the directional pipeline for one side of the comparison."""
        profile = self.profile(commodity)
        if SourceKind(source_kind) is SourceKind.LEDGER:
            return profile.ledger
        return profile.market_source(self.wheat_variant).pipeline

    def symbol(self, commodity: Commodity | str) -> str:
        """Vendor symbol for the commodity's market contract."""
        return self.profile(commodity).symbol(self.wheat_variant)

    def to_common_unit(
        self,
        commodity: Commodity | str,
        raw_value: object,
        source_kind: SourceKind | str,
        *,
        currency: str | None = None,
    ) -> float | None:
        """Convert a raw price into the common unit, or return None if it is unusable."""
        pipeline = self.pipeline(commodity, source_kind)
        code = pipeline.resolve_currency(currency)
        if code is not None and not self.rates.knows(code):
            logger.warning(
                "conversion.unknown_currency",
                commodity=Commodity.parse(commodity).value,
                currency=code,
            )
            return None
        return pipeline.apply(raw_value, self.rates, currency=currency)

    def from_common_unit(
        self,
        commodity: Commodity | str,
        value: object,
        source_kind: SourceKind | str,
        *,
        currency: str | None = None,
    ) -> float | None:
        """Inverse of :meth:`to_common_unit`."""
        pipeline = self.pipeline(commodity, source_kind)
        return pipeline.invert(value, self.rates, currency=currency)

    def negotiated_value(self, commodity: Commodity | str) -> float | None:
        """Common-unit value of the commodity's negotiated price, if it has one."""
        negotiated = self.profile(commodity).negotiated
        if negotiated is None:
            return None
        return negotiated.common_value(self.rates)


__all__ = ["Converter"]
