"""Rate metrics derived from grouped totals.

Rates are only defined for a positive denominator; every other case yields a
zero rate, so the formatted value is "0.00%" or "0.00x" rather than NaN.
"""

from __future__ import annotations

from typing import Dict, Iterable

from insights.formatting import format_percent, format_ratio
from insights.models import GroupTotals

RATE_METRICS = ("ctr", "conversion_rate", "roas")


def safe_ratio(numerator: float, denominator: float) -> float:
    if denominator > 0:
        return numerator / denominator
    return 0.0


def ctr(totals: GroupTotals) -> float:
    return safe_ratio(totals.clicks, totals.impressions)


def conversion_rate(totals: GroupTotals) -> float:
    return safe_ratio(totals.conversions, totals.clicks)


def roas(totals: GroupTotals) -> float:
    return safe_ratio(totals.revenue, totals.spend)


def derive_rates(totals: GroupTotals, metrics: Iterable[str] = RATE_METRICS) -> Dict[str, str]:
    """Return the requested rate metrics as display strings."""
    out: Dict[str, str] = {}
    for metric in metrics:
        if metric == "ctr":
            out[metric] = format_percent(ctr(totals))
        elif metric == "conversion_rate":
            out[metric] = format_percent(conversion_rate(totals))
        elif metric == "roas":
            out[metric] = format_ratio(roas(totals))
        else:
            raise ValueError(f"unknown rate metric: {metric!r}")
    return out
