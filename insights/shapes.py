"""Drawable geometry built from scaled series.

Builders return frozen dataclasses that a rendering surface can draw as-is.
Charts without enough input come back with a non-"ok" ``status`` and a
display ``message`` instead of raising.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, List, Literal, Mapping, Optional, Sequence, Tuple, Union

from insights.formatting import Formatter, format_count
from insights.geo import CITY_COORDINATES, MAP_POSITIONS
from insights.scales import (
    Domain,
    color_scale,
    index_scale,
    linear_scale,
    marker_radius_scale,
    radius_scale,
    series_domain,
    threshold_color_scale,
)
from insights.settings import BarChartSettings, BubbleMapSettings, LineChartSettings, RegionMarkerSettings

ChartStatus = Literal["ok", "insufficient_data", "no_data"]

NOT_ENOUGH_DATA = "Not enough data to display chart"
NO_DATA = "No data available"
MAP_NOTE = "City locations are approximate for visualization purposes."


@dataclass(frozen=True)
class ChartPoint:
    x: Union[str, float]
    y: float


@dataclass(frozen=True)
class PathSegment:
    command: Literal["M", "L"]
    x: float
    y: float


@dataclass(frozen=True)
class AxisTick:
    value: Union[str, float]
    label: str
    position: float


@dataclass(frozen=True)
class Marker:
    x: float
    y: float
    radius: float
    tooltip: str


@dataclass(frozen=True)
class LineChart:
    status: ChartStatus
    title: str = ""
    message: Optional[str] = None
    width: float = 0.0
    height: float = 0.0
    color: str = ""
    segments: Tuple[PathSegment, ...] = ()
    path: str = ""
    markers: Tuple[Marker, ...] = ()
    y_ticks: Tuple[AxisTick, ...] = ()
    x_ticks: Tuple[AxisTick, ...] = ()


@dataclass(frozen=True)
class Bar:
    label: str
    value: float
    x: float
    y: float
    width: float
    height: float
    value_label: str
    color: str


@dataclass(frozen=True)
class BarChart:
    status: ChartStatus
    title: str = ""
    message: Optional[str] = None
    width: float = 0.0
    height: float = 0.0
    bars: Tuple[Bar, ...] = ()


@dataclass(frozen=True)
class Bubble:
    region: str
    value: float
    x: float
    y: float
    lat: Optional[float]
    lng: Optional[float]
    radius: float
    color: str
    label: str


@dataclass(frozen=True)
class BubbleMap:
    status: ChartStatus
    title: str = ""
    message: Optional[str] = None
    width: float = 0.0
    height: float = 0.0
    low_color: str = ""
    high_color: str = ""
    bubbles: Tuple[Bubble, ...] = ()
    excluded: Tuple[str, ...] = ()
    note: str = MAP_NOTE


@dataclass(frozen=True)
class RegionMarker:
    region: str
    value: float
    lat: float
    lng: float
    radius: float
    color: str
    label: str


@dataclass(frozen=True)
class RegionMarkers:
    status: ChartStatus
    title: str = ""
    message: Optional[str] = None
    low_color: str = ""
    high_color: str = ""
    center: Tuple[float, float] = (25.0, 45.0)
    zoom: int = 4
    markers: Tuple[RegionMarker, ...] = ()
    excluded: Tuple[str, ...] = ()


# ---------------- Lines & axes ----------------
def _coord(value: float) -> str:
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def line_path(coords: Sequence[Tuple[float, float]]) -> Tuple[PathSegment, ...]:
    """Move to the first point, then draw straight lines through the rest in order."""
    return tuple(PathSegment("M" if i == 0 else "L", x, y) for i, (x, y) in enumerate(coords))


def path_to_svg(segments: Sequence[PathSegment]) -> str:
    return " ".join(f"{s.command} {_coord(s.x)},{_coord(s.y)}" for s in segments)


def y_axis_ticks(domain: Domain, y_scale: Callable[[float], float], format_y: Formatter, count: int = 5) -> Tuple[AxisTick, ...]:
    d_min, d_max = domain
    ticks = []
    for i in range(count):
        value = d_min + (d_max - d_min) * (i / (count - 1))
        ticks.append(AxisTick(value=value, label=format_y(value), position=y_scale(value)))
    return tuple(ticks)


def x_tick_indices(n: int, max_labels: int = 6) -> List[int]:
    """Indices that get an x label: every ceil(n/max_labels)-th point plus the last one."""
    if n <= 0:
        return []
    stride = math.ceil(n / max_labels)
    return [i for i in range(n) if i % stride == 0 or i == n - 1]


def x_axis_ticks(
    points: Sequence[ChartPoint], x_scale: Callable[[int], float], format_x: Callable[[Union[str, float]], str], max_labels: int = 6
) -> Tuple[AxisTick, ...]:
    return tuple(
        AxisTick(value=points[i].x, label=format_x(points[i].x), position=x_scale(i))
        for i in x_tick_indices(len(points), max_labels)
    )


def build_line_chart(
    points: Sequence[ChartPoint],
    settings: LineChartSettings = LineChartSettings(),
    *,
    title: str = "",
    color: str = "#3B82F6",
    format_x: Callable[[Union[str, float]], str] = str,
    format_y: Formatter = format_count,
) -> LineChart:
    if len(points) < 2:
        return LineChart(status="insufficient_data", title=title, message=NOT_ENOUGH_DATA, width=settings.width, height=settings.height, color=color)

    pad = settings.padding
    domain = series_domain((p.y for p in points), zero_baseline=True)
    x_scale = index_scale(len(points), pad.left, settings.width - pad.right)
    y_scale = linear_scale(domain, (settings.height - pad.bottom, pad.top))

    coords = [(x_scale(i), y_scale(p.y)) for i, p in enumerate(points)]
    segments = line_path(coords)
    markers = tuple(
        Marker(x=x, y=y, radius=settings.marker_radius, tooltip=f"{format_x(p.x)}: {format_y(p.y)}")
        for (x, y), p in zip(coords, points)
    )
    return LineChart(
        status="ok",
        title=title,
        width=settings.width,
        height=settings.height,
        color=color,
        segments=segments,
        path=path_to_svg(segments),
        markers=markers,
        y_ticks=y_axis_ticks(domain, y_scale, format_y, settings.y_tick_count),
        x_ticks=x_axis_ticks(points, x_scale, format_x, settings.max_x_labels),
    )


# ---------------- Bars ----------------
def build_bar_chart(
    points: Sequence[ChartPoint],
    settings: BarChartSettings = BarChartSettings(),
    *,
    title: str = "",
    color: str = "#3B82F6",
    colors: Optional[Mapping[str, str]] = None,
    format_value: Formatter = format_count,
) -> BarChart:
    if not points:
        return BarChart(status="no_data", title=title, message=NO_DATA, width=settings.width, height=settings.height)

    pad = settings.padding
    inner_width = settings.width - pad.left - pad.right
    inner_height = settings.height - pad.top - pad.bottom
    baseline = settings.height - pad.bottom
    slot = inner_width / len(points)
    bar_width = slot * (1 - settings.bar_gap)

    domain = series_domain((p.y for p in points), zero_baseline=True)
    height_scale = linear_scale(domain, (0.0, inner_height), degenerate="min")

    bars = []
    for i, p in enumerate(points):
        h = max(0.0, height_scale(p.y))
        bars.append(
            Bar(
                label=str(p.x),
                value=p.y,
                x=pad.left + i * slot + (slot - bar_width) / 2,
                y=baseline - h,
                width=bar_width,
                height=h,
                value_label=format_value(p.y),
                color=(colors or {}).get(str(p.x), color),
            )
        )
    return BarChart(status="ok", title=title, width=settings.width, height=settings.height, bars=tuple(bars))


# ---------------- Bubbles ----------------
def build_bubble_map(
    values: Sequence[Tuple[str, float]],
    settings: BubbleMapSettings = BubbleMapSettings(),
    *,
    title: str = "",
    low_color: str = "#3B82F6",
    high_color: str = "#10B981",
    format_value: Formatter = format_count,
    positions: Mapping[str, Tuple[float, float]] = MAP_POSITIONS,
    coordinates: Mapping[str, Tuple[float, float]] = CITY_COORDINATES,
) -> BubbleMap:
    """Place one bubble per located region, largest value first.

    Regions missing from ``positions`` are skipped and listed in ``excluded``.
    Drawing in the returned order puts smaller bubbles on top.
    """
    located = [(region, value) for region, value in values if region in positions]
    excluded = tuple(str(region) for region, _ in values if region not in positions)
    if not values:
        return BubbleMap(
            status="no_data",
            title=title,
            message=NO_DATA,
            width=settings.width,
            height=settings.height,
            low_color=low_color,
            high_color=high_color,
        )

    bubbles = []
    if located:
        series = [value for _, value in located]
        radius = radius_scale(
            series,
            base_radius=settings.base_radius,
            scale_factor=settings.scale_factor,
            fallback_radius=settings.fallback_radius,
        )
        color = color_scale(series, low_color, high_color)
        for region, value in located:
            x, y = positions[region]
            lat, lng = coordinates.get(region, (None, None))
            bubbles.append(
                Bubble(
                    region=region,
                    value=value,
                    x=x,
                    y=y,
                    lat=lat,
                    lng=lng,
                    radius=radius(value),
                    color=color(value),
                    label=f"{region}: {format_value(value)}",
                )
            )
        bubbles.sort(key=lambda b: b.value, reverse=True)
    return BubbleMap(
        status="ok",
        title=title,
        width=settings.width,
        height=settings.height,
        low_color=low_color,
        high_color=high_color,
        bubbles=tuple(bubbles),
        excluded=excluded,
    )


# ---------------- Region markers ----------------
def build_region_markers(
    values: Sequence[Tuple[str, float]],
    settings: RegionMarkerSettings = RegionMarkerSettings(),
    *,
    title: str = "",
    low_color: str = "#3B82F6",
    high_color: str = "#10B981",
    format_value: Formatter = format_count,
    coordinates: Mapping[str, Tuple[float, float]] = CITY_COORDINATES,
) -> RegionMarkers:
    """Lat/lng circle markers for a tiled map, in input order.

    Radius grows linearly with the value; color is two-tone, switching to
    ``high_color`` above the middle of the value range.
    """
    located = [(region, value) for region, value in values if region in coordinates]
    excluded = tuple(str(region) for region, _ in values if region not in coordinates)
    common = dict(
        title=title,
        low_color=low_color,
        high_color=high_color,
        center=settings.center,
        zoom=settings.zoom,
    )
    if not values:
        return RegionMarkers(status="no_data", message=NO_DATA, **common)

    markers = []
    if located:
        series = [value for _, value in located]
        radius = marker_radius_scale(series, base_radius=settings.base_radius, scale_factor=settings.scale_factor)
        color = threshold_color_scale(series, low_color, high_color, threshold=settings.threshold)
        for region, value in located:
            lat, lng = coordinates[region]
            markers.append(
                RegionMarker(
                    region=region,
                    value=value,
                    lat=lat,
                    lng=lng,
                    radius=radius(value),
                    color=color(value),
                    label=f"{region}: {format_value(value)}",
                )
            )
    return RegionMarkers(status="ok", markers=tuple(markers), excluded=excluded, **common)
