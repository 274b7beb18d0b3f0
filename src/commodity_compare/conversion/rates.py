"""Fixed exchange-rate table used to bring every price into one currency."""

from attrs import define, field

DEFAULT_TARGET_CURRENCY = "NGN"
DEFAULT_USD_TO_TARGET = 1460.0

# Units of USD per one unit of the listed currency.
DEFAULT_TO_USD: dict[str, float] = {
    "GHS": 0.087,
    "MYR": 0.21,
    "EUR": 1.1637,
}


def _normalize_rates(rates: dict[str, float]) -> dict[str, float]:
    normalized = {str(code).strip().upper(): float(rate) for code, rate in rates.items()}
    for code, rate in normalized.items():
        if rate <= 0:
            raise ValueError(f"Exchange rate for {code} must be positive, got {rate}.")
    return normalized


def _positive(instance: object, attribute: object, value: float) -> None:
    if value <= 0:
        raise ValueError(f"{attribute.name} must be positive, got {value}.")  # type: ignore[attr-defined]


@define(slots=True, frozen=True)
class RateTable:
    """Constant conversion rates into the ``target`` currency.

    Rates never vary by date: one table applies to a whole dataset. Currencies
    convert through USD, so ``GHS -> NGN`` is ``to_usd["GHS"] * usd_to_target``.
    """

    to_usd: dict[str, float] = field(
        factory=lambda: dict(DEFAULT_TO_USD),
        converter=_normalize_rates,
    )
    usd_to_target: float = field(default=DEFAULT_USD_TO_TARGET, converter=float, validator=_positive)
    target: str = field(default=DEFAULT_TARGET_CURRENCY, converter=lambda value: str(value).upper())

    def rate(self, currency: str) -> float | None:
        """Multiplier from ``currency`` into the target currency, or None if unknown."""
        code = currency.strip().upper()
        if code == self.target:
            return 1.0
        if code == "USD":
            return self.usd_to_target
        usd = self.to_usd.get(code)
        if usd is None:
            return None
        return usd * self.usd_to_target

    def convert(self, amount: float, currency: str) -> float | None:
        """Convert an amount into the target currency."""
        multiplier = self.rate(currency)
        if multiplier is None:
            return None
        return amount * multiplier

    def knows(self, currency: str) -> bool:
        return self.rate(currency) is not None

    def currencies(self) -> list[str]:
        """All currency codes this table can convert."""
        return sorted({self.target, "USD", *self.to_usd})


__all__ = ["DEFAULT_TO_USD", "DEFAULT_USD_TO_TARGET", "RateTable"]
