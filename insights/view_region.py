from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Mapping, Optional, Tuple

from insights.aggregation import REGION, aggregate, totals_frame
from insights.formatting import format_currency
from insights.models import MarketingData
from insights.settings import ViewSettings
from insights.shapes import build_bubble_map, build_region_markers

REVENUE_COLORS = {"low": "#F59E0B", "high": "#10B981"}
SPEND_COLORS = {"low": "#EC4899", "high": "#3B82F6"}

MAPS = {
    "revenue": ("Revenue by Region", REVENUE_COLORS),
    "spend": ("Spend by Region", SPEND_COLORS),
}


def _values(regions: List[Mapping[str, Any]], metric: str) -> List[Tuple[str, float]]:
    return [(r["region"], float(r[metric])) for r in regions]


def compute_region_view(data: MarketingData, settings: Optional[ViewSettings] = None) -> Dict[str, Any]:
    """Region totals drawn two ways: plane bubbles and lat/lng markers."""
    settings = settings or ViewSettings()
    regions_df = totals_frame(aggregate(data.campaigns, REGION), "region")
    regions = regions_df[["region", "revenue", "spend"]].to_dict(orient="records")

    maps: Dict[str, Any] = {}
    markers: Dict[str, Any] = {}
    excluded: Tuple[str, ...] = ()
    for metric, (title, colors) in MAPS.items():
        bubble_map = build_bubble_map(
            _values(regions, metric),
            settings.bubble,
            title=title,
            low_color=colors["low"],
            high_color=colors["high"],
            format_value=format_currency,
        )
        region_markers = build_region_markers(
            _values(regions, metric),
            settings.markers,
            title=title,
            low_color=colors["low"],
            high_color=colors["high"],
            format_value=format_currency,
        )
        maps[metric] = asdict(bubble_map)
        markers[metric] = asdict(region_markers)
        excluded = bubble_map.excluded

    return {
        "settings": asdict(settings),
        "regions": regions,
        "maps": maps,
        "region_markers": markers,
        "excluded_regions": list(excluded),
    }
