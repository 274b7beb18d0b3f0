"""Reference monthly vendor prices used when live market data is unavailable.

Values are raw vendor quotes in each contract's native unit and pass through
the same conversion pipeline as live quotes. Series built from them are
labelled :attr:`~commodity_compare.data.models.Provenance.SYNTHETIC`.
"""

from types import MappingProxyType

from ..conversion.profiles import Commodity, WheatVariant
from .models import MarketQuote

_FALLBACK_ROWS: dict[tuple[Commodity, WheatVariant | None], tuple[tuple[str, float], ...]] = {
    (Commodity.WHEAT, WheatVariant.ZW): (
        ("2024-11", 593),
        ("2024-12", 598.5),
        ("2025-01", 617),
        ("2025-02", 604.5),
        ("2025-03", 589.25),
        ("2025-04", 568.25),
        ("2025-05", 571),
        ("2025-06", 560),
        ("2025-07", 542.5),
        ("2025-08", 534.25),
        ("2025-09", 508),
        ("2025-10", 534),
        ("2025-11", 531),
        ("2025-12", 536.25),
    ),
    (Commodity.WHEAT, WheatVariant.ML): (
        ("2024-09", 234.75),
        ("2024-10", 232),
        ("2024-11", 222.25),
        ("2024-12", 233.75),
        ("2025-01", 232.75),
        ("2025-02", 236.75),
        ("2025-03", 226),
        ("2025-04", 214.75),
        ("2025-05", 212.25),
        ("2025-06", 206.5),
        ("2025-07", 202.5),
        ("2025-08", 194),
        ("2025-09", 186.25),
        ("2025-10", 193),
        ("2025-11", 187.25),
        ("2025-12", 190),
    ),
    (Commodity.PALM, None): (
        ("2024-12", 4112),
        ("2025-01", 4100),
        ("2025-02", 4310),
        ("2025-03", 4196),
        ("2025-04", 3920),
        ("2025-05", 3888),
        ("2025-06", 4009),
        ("2025-07", 4260),
        ("2025-08", 4408),
        ("2025-09", 4352),
        ("2025-10", 4193),
        ("2025-11", 4077),
        ("2025-12", 4031),
    ),
    (Commodity.SUGAR, None): (
        ("2024-10", 19.82),
        ("2024-11", 19.06),
        ("2024-12", 17.7),
        ("2025-01", 18.02),
        ("2025-02", 18.59),
        ("2025-03", 19.2),
        ("2025-04", 17.82),
        ("2025-05", 17.69),
        ("2025-06", 16.94),
        ("2025-07", 16.97),
        ("2025-08", 17.01),
        ("2025-09", 16.6),
        ("2025-10", 14.43),
        ("2025-11", 15.21),
        ("2025-12", 14.67),
    ),
}

FALLBACK_QUOTES = MappingProxyType(_FALLBACK_ROWS)


def fallback_quotes(
    commodity: Commodity | str,
    variant: WheatVariant | str | None = None,
) -> list[MarketQuote]:
    """Return the reference quotes for a commodity, empty when none are on file."""
    key = Commodity.parse(commodity)
    resolved = WheatVariant.parse(variant or WheatVariant.ZW) if key is Commodity.WHEAT else None
    return [MarketQuote(month, raw) for month, raw in FALLBACK_QUOTES.get((key, resolved), ())]


__all__ = ["FALLBACK_QUOTES", "fallback_quotes"]
