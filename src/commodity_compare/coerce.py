"""Lenient coercion of raw numeric input."""

import math
from numbers import Real


def to_number(value: object) -> float | None:
    """Coerce raw numeric input into a float, or ``None`` when it is not a number.

    Booleans, blanks, NaN and infinities are rejected. Thousands separators in
    strings are ignored.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Real):
        number = float(value)
    else:
        text = str(value).strip().replace(",", "")
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


__all__ = ["to_number"]
