"""Domain -> range mappings used by the chart builders.

All scales are stateless: each factory reads the domain from a series once and
returns a plain callable. A degenerate domain (max == min) never divides by
zero; each scale documents the constant it falls back to.
"""

from __future__ import annotations

from typing import Callable, Iterable, List, Literal, Tuple

import numpy as np

from insights.formatting import round_half_up

Domain = Tuple[float, float]
Degenerate = Literal["midpoint", "min"]

DEFAULT_BASE_RADIUS = 3.0
DEFAULT_RADIUS_FACTOR = 20.0
DEFAULT_FALLBACK_RADIUS = 8.0
DEFAULT_MARKER_RADIUS = 10.0
DEFAULT_MARKER_FACTOR = 20.0


def _values(series: Iterable[float]) -> List[float]:
    values = [float(v) for v in series]
    if not values:
        raise ValueError("scale requires a non-empty series")
    return values


def series_domain(series: Iterable[float], *, zero_baseline: bool = False) -> Domain:
    values = _values(series)
    lo = 0.0 if zero_baseline else min(values)
    return lo, max(values)


def linear_scale(domain: Domain, output: Tuple[float, float], *, degenerate: Degenerate = "midpoint") -> Callable[[float], float]:
    d_min, d_max = domain
    r_min, r_max = output
    span = d_max - d_min
    if span == 0:
        fallback = (r_min + r_max) / 2 if degenerate == "midpoint" else r_min
        return lambda _v: fallback
    return lambda v: r_min + (v - d_min) / span * (r_max - r_min)


def index_scale(n: int, left: float, right: float) -> Callable[[int], float]:
    """Spread ordinal positions 0..n-1 evenly across [left, right]."""
    if n < 2:
        raise ValueError("index scale requires at least 2 points")
    step = (right - left) / (n - 1)
    return lambda i: left + i * step


def radius_scale(
    series: Iterable[float],
    *,
    base_radius: float = DEFAULT_BASE_RADIUS,
    scale_factor: float = DEFAULT_RADIUS_FACTOR,
    fallback_radius: float = DEFAULT_FALLBACK_RADIUS,
) -> Callable[[float], float]:
    """Log-compressed bubble radius: ``base + log1p(v / max) * factor``."""
    d_min, d_max = series_domain(series)
    if d_max == d_min or d_max == 0:
        return lambda _v: fallback_radius

    def radius(v: float) -> float:
        with np.errstate(invalid="ignore", divide="ignore"):
            return float(base_radius + np.log1p(v / d_max) * scale_factor)

    return radius


def parse_hex_color(color: str) -> Tuple[int, int, int]:
    text = color.strip().lstrip("#")
    if len(text) != 6:
        raise ValueError(f"expected a #RRGGBB color, got {color!r}")
    return int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16)


def to_hex_color(rgb: Tuple[int, int, int]) -> str:
    return "#" + "".join(f"{max(0, min(255, c)):02X}" for c in rgb)


def blend_channel(low: int, high: int, ratio: float) -> int:
    return int(round_half_up(low * (1 - ratio) + high * ratio))


def color_scale(series: Iterable[float], low_color: str, high_color: str) -> Callable[[float], str]:
    """Blend low_color -> high_color by the value's position in the series range.

    The series min and max (and values clamped onto them) return the configured
    strings unchanged; blended colors in between are upper-case ``#RRGGBB``. A
    degenerate series maps everything to ``high_color``.
    """
    d_min, d_max = series_domain(series)
    if d_max == d_min:
        return lambda _v: high_color
    low = parse_hex_color(low_color)
    high = parse_hex_color(high_color)
    span = d_max - d_min

    def color(v: float) -> str:
        ratio = min(1.0, max(0.0, (v - d_min) / span))
        if ratio == 0.0:
            return low_color
        if ratio == 1.0:
            return high_color
        return to_hex_color(tuple(blend_channel(lo, hi, ratio) for lo, hi in zip(low, high)))  # type: ignore[arg-type]

    return color


def marker_radius_scale(
    series: Iterable[float],
    *,
    base_radius: float = DEFAULT_MARKER_RADIUS,
    scale_factor: float = DEFAULT_MARKER_FACTOR,
) -> Callable[[float], float]:
    """Linear marker radius: ``base + v / max * factor``; a zero max keeps every marker at ``base``."""
    _, d_max = series_domain(series)
    if d_max == 0:
        return lambda _v: base_radius
    return lambda v: base_radius + v / d_max * scale_factor


def threshold_color_scale(
    series: Iterable[float], low_color: str, high_color: str, *, threshold: float = 0.5
) -> Callable[[float], str]:
    """Two-tone scale: ``high_color`` when the value's range ratio is above ``threshold``."""
    d_min, d_max = series_domain(series)
    span = (d_max - d_min) or 1.0
    return lambda v: high_color if (v - d_min) / span > threshold else low_color
