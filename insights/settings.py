from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple


@dataclass(frozen=True)
class Padding:
    top: float = 40.0
    right: float = 30.0
    bottom: float = 40.0
    left: float = 60.0


@dataclass(frozen=True)
class LineChartSettings:
    width: float = 500.0
    height: float = 300.0
    padding: Padding = field(default_factory=Padding)
    y_tick_count: int = 5
    max_x_labels: int = 6
    marker_radius: float = 3.0


@dataclass(frozen=True)
class BarChartSettings:
    width: float = 500.0
    height: float = 300.0
    padding: Padding = field(default_factory=lambda: Padding(top=20.0, right=20.0, bottom=40.0, left=20.0))
    bar_gap: float = 0.2


@dataclass(frozen=True)
class BubbleMapSettings:
    width: float = 1000.0
    height: float = 500.0
    base_radius: float = 3.0
    scale_factor: float = 20.0
    fallback_radius: float = 8.0


@dataclass(frozen=True)
class RegionMarkerSettings:
    base_radius: float = 10.0
    scale_factor: float = 20.0
    threshold: float = 0.5
    center: Tuple[float, float] = (25.0, 45.0)
    zoom: int = 4


@dataclass(frozen=True)
class ViewSettings:
    line: LineChartSettings = field(default_factory=LineChartSettings)
    bar: BarChartSettings = field(default_factory=BarChartSettings)
    bubble: BubbleMapSettings = field(default_factory=BubbleMapSettings)
    markers: RegionMarkerSettings = field(default_factory=RegionMarkerSettings)


def _float(raw: Mapping[str, Any], key: str, default: float, *, minimum: float = 0.0) -> float:
    try:
        value = float(raw.get(key, default))
    except Exception:
        return default
    return max(minimum, value)


def _padding(raw: Optional[Mapping[str, Any]], default: Padding) -> Padding:
    raw = raw or {}
    return Padding(
        top=_float(raw, "top", default.top),
        right=_float(raw, "right", default.right),
        bottom=_float(raw, "bottom", default.bottom),
        left=_float(raw, "left", default.left),
    )


def normalize_settings(raw: Optional[Mapping[str, Any]] = None) -> ViewSettings:
    raw = raw or {}
    base = ViewSettings()

    line_raw = raw.get("line") or {}
    max_x_labels = line_raw.get("max_x_labels", base.line.max_x_labels)
    try:
        max_x_labels = int(max_x_labels)
    except Exception:
        max_x_labels = base.line.max_x_labels
    line = LineChartSettings(
        width=_float(line_raw, "width", base.line.width, minimum=1.0),
        height=_float(line_raw, "height", base.line.height, minimum=1.0),
        padding=_padding(line_raw.get("padding"), base.line.padding),
        max_x_labels=max(1, min(50, max_x_labels)),
        marker_radius=_float(line_raw, "marker_radius", base.line.marker_radius),
    )

    bar_raw = raw.get("bar") or {}
    bar = BarChartSettings(
        width=_float(bar_raw, "width", base.bar.width, minimum=1.0),
        height=_float(bar_raw, "height", base.bar.height, minimum=1.0),
        padding=_padding(bar_raw.get("padding"), base.bar.padding),
        bar_gap=min(0.9, _float(bar_raw, "bar_gap", base.bar.bar_gap)),
    )

    bubble_raw = raw.get("bubble") or {}
    bubble = BubbleMapSettings(
        width=_float(bubble_raw, "width", base.bubble.width, minimum=1.0),
        height=_float(bubble_raw, "height", base.bubble.height, minimum=1.0),
        base_radius=_float(bubble_raw, "base_radius", base.bubble.base_radius),
        scale_factor=_float(bubble_raw, "scale_factor", base.bubble.scale_factor),
        fallback_radius=_float(bubble_raw, "fallback_radius", base.bubble.fallback_radius),
    )
    markers_raw = raw.get("markers") or {}
    markers = RegionMarkerSettings(
        base_radius=_float(markers_raw, "base_radius", base.markers.base_radius),
        scale_factor=_float(markers_raw, "scale_factor", base.markers.scale_factor),
        threshold=min(1.0, _float(markers_raw, "threshold", base.markers.threshold)),
    )
    return ViewSettings(line=line, bar=bar, bubble=bubble, markers=markers)
