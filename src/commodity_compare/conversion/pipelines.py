"""Unit-of-quantity and currency conversion steps for a single price source."""

from attrs import define, field

from ..coerce import to_number
from .rates import RateTable

CENTS = 0.01
KILOGRAM = 1.0
TONNE_TO_KG = 1000.0
BUSHEL_TO_KG_WHEAT = 27.2155
LB_TO_KG = 0.45359237
BARREL_TO_KG = 136.4
ALUMINUM_CAN_WEIGHT_KG = 0.013


def _positive(instance: object, attribute: object, value: float) -> None:
    if value <= 0:
        raise ValueError(f"{attribute.name} must be positive, got {value}.")  # type: ignore[attr-defined]


def _optional_code(value: object) -> str | None:
    if value is None:
        return None
    return str(value).strip().upper() or None


@define(slots=True, frozen=True)
class ConversionPipeline:
    """Map a raw price onto the common unit (target currency per kilogram).

    The steps are applied in a fixed order::

        raw * price_scale / kg_per_unit * fx(currency -> target) * basis

    ``kg_per_unit`` is the mass of the unit the price is quoted in: a bushel,
    a tonne, a pound, a barrel, or a single discrete item such as one can.
    ``basis`` is a multiplicative markup approximating a landed price.
    """

    currency: str | None = field(converter=_optional_code)
    price_scale: float = field(default=1.0, converter=float, validator=_positive)
    kg_per_unit: float = field(default=KILOGRAM, converter=float, validator=_positive)
    basis: float = field(default=1.0, converter=float, validator=_positive)
    description: str = ""

    def resolve_currency(self, currency: str | None = None) -> str | None:
        """The currency a value is quoted in: the record's own, else the pipeline default."""
        return _optional_code(currency) or self.currency

    def apply(
        self,
        raw: object,
        rates: RateTable,
        *,
        currency: str | None = None,
    ) -> float | None:
        """Convert a raw price into the common unit, or None when it cannot be."""
        value = to_number(raw)
        if value is None:
            return None
        code = self.resolve_currency(currency)
        if code is None:
            return None
        fx = rates.rate(code)
        if fx is None:
            return None
        return value * self.price_scale / self.kg_per_unit * fx * self.basis

    def invert(
        self,
        value: object,
        rates: RateTable,
        *,
        currency: str | None = None,
    ) -> float | None:
        """Map a common-unit value back into the raw source unit."""
        number = to_number(value)
        if number is None:
            return None
        code = self.resolve_currency(currency)
        if code is None:
            return None
        fx = rates.rate(code)
        if fx is None:
            return None
        return number / self.basis / fx * self.kg_per_unit / self.price_scale


@define(slots=True, frozen=True)
class FixedPrice:
    """A negotiated contract price expressed in some source unit."""

    amount: float = field(converter=float)
    pipeline: ConversionPipeline
    label: str = ""

    def common_value(self, rates: RateTable) -> float | None:
        return self.pipeline.apply(self.amount, rates)


__all__ = [
    "ALUMINUM_CAN_WEIGHT_KG",
    "BARREL_TO_KG",
    "BUSHEL_TO_KG_WHEAT",
    "CENTS",
    "ConversionPipeline",
    "FixedPrice",
    "KILOGRAM",
    "LB_TO_KG",
    "TONNE_TO_KG",
]
