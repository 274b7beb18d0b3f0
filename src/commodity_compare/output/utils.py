"""Shared formatting helpers for reports and charts."""

from collections.abc import Iterable
from pathlib import Path

import numpy as np

MISSING = "—"


def to_numpy(values: Iterable[float | None]) -> np.ndarray:
    """Return the values as a 1D float array with ``None`` mapped to NaN."""
    if isinstance(values, np.ndarray):
        return values
    return np.asarray([np.nan if value is None else value for value in values], dtype=float)


def ensure_directory(path: str | Path) -> Path:
    """Create the directory at ``path`` if needed and return its Path."""
    directory = Path(path)
    if not directory.exists():
        directory.mkdir(parents=True, exist_ok=True)
    return directory


def format_price(value: float | None, decimals: int = 2) -> str:
    """Format a price with thousands separators, or a dash when missing."""
    if value is None:
        return MISSING
    return f"{value:,.{decimals}f}"


def format_percent(value: float | None, decimals: int = 2, *, signed: bool = True) -> str:
    """Format a value already expressed in percent (``12.5`` -> ``+12.50%``)."""
    if value is None:
        return MISSING
    sign = "+" if signed else ""
    return f"{value:{sign}.{decimals}f}%"


__all__ = ["MISSING", "ensure_directory", "format_percent", "format_price", "to_numpy"]
