"""Month-key normalization and recency windows for dated price records."""

import re
from datetime import date, datetime

from attrs import define, field
from dateutil import parser as date_parser

MONTH_KEY_RE = re.compile(r"^(\d{4})-(\d{2})$")
NAMED_MONTH_RE = re.compile(r"^([A-Za-z]{3,})-(\d{2}|\d{4})$")
ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})(?:[T ].*)?$")
NUMERIC_DATE_RE = re.compile(r"^(\d{1,2})[/-](\d{1,2})[/-](\d{4})$")

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# calendar.month_name is locale dependent; vendor and ledger data are English.
MONTH_NUMBERS: dict[str, int] = {}
for _index, _name in enumerate(MONTH_NAMES, start=1):
    MONTH_NUMBERS[_name.lower()] = _index
    MONTH_NUMBERS[_name[:3].lower()] = _index


def _current_year(override: int | None) -> int:
    return override if override is not None else date.today().year


def _format_key(year: int, month: int) -> str | None:
    """Return ``YYYY-MM`` for a valid year/month pair."""
    if not 1 <= month <= 12 or not 1 <= year <= 9999:
        return None
    return f"{year:04d}-{month:02d}"


def expand_two_digit_year(short_year: int, *, current_year: int | None = None) -> int:
    """Expand a two-digit year: 2000s up to the current short year, 1900s after it."""
    pivot = _current_year(current_year) % 100
    return short_year + (2000 if short_year <= pivot else 1900)


def _parse_loose(text: str) -> str | None:
    """Generic date parsing that only accepts inputs naming both year and month."""
    try:
        # Two different defaults expose fields that dateutil filled in itself.
        first = date_parser.parse(text, default=datetime(2000, 1, 1))
        second = date_parser.parse(text, default=datetime(2001, 2, 1))
    except (ValueError, OverflowError):
        return None
    if (first.year, first.month) != (second.year, second.month):
        return None
    return _format_key(first.year, first.month)


def normalize_month(
    value: str | date | None,
    *,
    current_year: int | None = None,
) -> str | None:
    """Normalize a heterogeneous date or month value into a ``YYYY-MM`` key.

    Accepted grammars, first match wins:

    1. ``YYYY-MM`` (already canonical)
    2. ``Apr-24`` / ``April-2024`` (case-insensitive English month names)
    3. ``YYYY-MM-DD`` with an optional time component
    4. ``M/D/YYYY`` or ``M-D-YYYY``
    5. anything ``dateutil`` can parse into a year and a month

    Unparseable input yields ``None``; this function never raises.
    """
    if value is None:
        return None
    if isinstance(value, date):
        return _format_key(value.year, value.month)

    text = str(value).strip()
    if not text:
        return None

    match = MONTH_KEY_RE.match(text)
    if match:
        return _format_key(int(match.group(1)), int(match.group(2)))

    match = NAMED_MONTH_RE.match(text)
    if match:
        month = MONTH_NUMBERS.get(match.group(1).lower())
        if month is None:
            return None
        year_text = match.group(2)
        year = int(year_text)
        if len(year_text) == 2:
            year = expand_two_digit_year(year, current_year=current_year)
        return _format_key(year, month)

    match = ISO_DATE_RE.match(text)
    if match:
        return _format_key(int(match.group(1)), int(match.group(2)))

    match = NUMERIC_DATE_RE.match(text)
    if match:
        return _format_key(int(match.group(3)), int(match.group(1)))

    return _parse_loose(text)


def month_year(month_key: str | None) -> int | None:
    """Return the year component of a month key, or ``None`` if it is malformed."""
    if not month_key:
        return None
    match = MONTH_KEY_RE.match(month_key)
    if not match:
        return None
    return int(match.group(1))


def month_display(month_key: str | None) -> str:
    """Render ``2025-01`` as ``Jan 2025``."""
    if not month_key:
        return ""
    match = MONTH_KEY_RE.match(month_key)
    if not match or not 1 <= int(match.group(2)) <= 12:
        return ""
    return f"{MONTH_NAMES[int(match.group(2)) - 1][:3]} {match.group(1)}"


def month_bounds(month_key: str) -> tuple[date, date]:
    """Return the first and last calendar day of a month."""
    match = MONTH_KEY_RE.match(month_key)
    if not match:
        raise ValueError(f"Invalid month key {month_key!r}. Expected format YYYY-MM.")
    year, month = int(match.group(1)), int(match.group(2))
    start = date(year, month, 1)
    if month == 12:
        following = date(year + 1, 1, 1)
    else:
        following = date(year, month + 1, 1)
    return start, date.fromordinal(following.toordinal() - 1)


def month_range(start_key: str, end_key: str) -> list[str]:
    """Return the inclusive ascending list of month keys between two months."""
    start, _ = month_bounds(start_key)
    end, _ = month_bounds(end_key)
    if start > end:
        raise ValueError("start month must not be after end month.")
    keys: list[str] = []
    year, month = start.year, start.month
    while (year, month) <= (end.year, end.month):
        keys.append(f"{year:04d}-{month:02d}")
        if month == 12:
            year, month = year + 1, 1
        else:
            month += 1
    return keys


@define(slots=True, frozen=True)
class YearWindow:
    """Inclusive range of accepted years for monthly buckets."""

    min_year: int = field(converter=int)
    max_year: int = field(converter=int)

    @classmethod
    def from_years_back(
        cls,
        years_back: int = 5,
        *,
        current_year: int | None = None,
        min_year: int | None = None,
    ) -> "YearWindow":
        """Window ``[current_year - years_back, current_year + 1]``.

        ``min_year`` overrides the lower bound when a fixed floor is wanted.
        """
        year = _current_year(current_year)
        lower = min_year if min_year is not None else year - years_back
        return cls(min_year=lower, max_year=year + 1)

    def contains(self, month_key: str | None) -> bool:
        year = month_year(month_key)
        return year is not None and self.min_year <= year <= self.max_year


def in_window(
    month_key: str | None,
    max_years_back: int = 5,
    *,
    current_year: int | None = None,
) -> bool:
    """Return True when the month falls inside the recency window."""
    window = YearWindow.from_years_back(max_years_back, current_year=current_year)
    return window.contains(month_key)


__all__ = [
    "MONTH_NAMES",
    "YearWindow",
    "expand_two_digit_year",
    "in_window",
    "month_bounds",
    "month_display",
    "month_range",
    "month_year",
    "normalize_month",
]
