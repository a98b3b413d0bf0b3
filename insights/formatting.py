from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Optional

import pandas as pd

Formatter = Callable[[float], str]


def round_half_up(value: object, ndigits: int = 0) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    q = Decimal(10) ** -ndigits
    return float(Decimal(str(value)).quantize(q, rounding=ROUND_HALF_UP))


def format_currency(value: object, decimals: int = 0) -> str:
    if value is None or pd.isna(value):
        return "N/A"
    return f"${float(value):,.{decimals}f}"


def format_currency_thousands(value: object) -> str:
    """Compact currency label used on weekly axes, e.g. 12500 -> "$13k"."""
    if value is None or pd.isna(value):
        return "N/A"
    return f"${float(value) / 1000:.0f}k"


def format_count(value: object) -> str:
    if value is None or pd.isna(value):
        return "N/A"
    number = float(value)
    if number.is_integer():
        return f"{int(number):,}"
    return f"{number:,.2f}"


def format_percent(ratio: float, decimals: int = 2) -> str:
    """Format a 0..1 ratio as a percentage string ("0.1" -> "10.00%")."""
    return f"{ratio * 100:.{decimals}f}%"


def format_ratio(ratio: float, decimals: int = 2) -> str:
    return f"{ratio:.{decimals}f}x"


def format_week_label(value: object) -> str:
    """Short month/day label for an ISO week start ("2024-01-05" -> "Jan 5")."""
    ts = pd.to_datetime(value, errors="coerce")
    if ts is None or pd.isna(ts):
        return str(value)
    return f"{ts:%b} {ts.day}"
