"""Runtime configuration for a comparison run."""

from datetime import date

from attrs import define, field, validators

from .conversion import RateTable, WheatVariant
from .data.months import YearWindow

DEFAULT_YEARS_BACK = 5
NEGOTIATED_SINCE = "2020-01"


def _optional_int(value: object) -> int | None:
    if value is None or value == "":
        return None
    return int(value)  # type: ignore[arg-type]


@define(slots=True, frozen=True, kw_only=True)
class PipelineConfig:
    """Options that shape how ledger and market series are built.

    ``min_year`` replaces the lower bound of the recency window. ``offline``
    skips the vendor entirely, and ``allow_synthetic`` permits the bundled
    reference prices when no live market data is available.
    """

    years_back: int = field(default=DEFAULT_YEARS_BACK, converter=int, validator=validators.ge(0))
    min_year: int | None = field(default=None, converter=_optional_int)
    wheat_variant: WheatVariant = field(default=WheatVariant.ZW, converter=WheatVariant.parse)
    allow_synthetic: bool = True
    offline: bool = False
    current_year: int | None = field(default=None, converter=_optional_int)
    as_of: date | None = None
    rates: RateTable = field(factory=RateTable)
    vendor_username: str | None = None
    vendor_password: str | None = field(default=None, repr=False)

    def today(self) -> date:
        """Reference date for the run."""
        return self.as_of or date.today()

    @property
    def year(self) -> int:
        return self.current_year if self.current_year is not None else self.today().year

    def window(self) -> YearWindow:
        """Recency window applied to both series."""
        return YearWindow.from_years_back(
            self.years_back,
            current_year=self.year,
            min_year=self.min_year,
        )

    def current_month(self) -> str:
        today = self.today()
        return f"{today.year:04d}-{today.month:02d}"


__all__ = ["DEFAULT_YEARS_BACK", "NEGOTIATED_SINCE", "PipelineConfig"]
