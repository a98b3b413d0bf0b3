from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Optional

from insights.aggregation import DEVICE, aggregate
from insights.charts import bar_chart_spec
from insights.formatting import format_count, format_currency
from insights.models import MarketingData
from insights.rates import derive_rates
from insights.settings import ViewSettings
from insights.shapes import ChartPoint, build_bar_chart

DEVICE_COLORS = {"Mobile": "#3B82F6", "Desktop": "#10B981"}


def compute_device_view(data: MarketingData, settings: Optional[ViewSettings] = None) -> Dict[str, Any]:
    """Mobile vs Desktop totals; other device values are not counted."""
    settings = settings or ViewSettings()
    totals = aggregate(data.campaigns, DEVICE)

    table = []
    for device, t in totals.items():
        table.append(
            {
                "device": device,
                "total_revenue": t.revenue,
                "total_spend": t.spend,
                "impressions": t.impressions,
                "clicks": t.clicks,
                "conversions": t.conversions,
                **derive_rates(t),
            }
        )

    revenue_points = [ChartPoint(x=r["device"], y=r["total_revenue"]) for r in table]
    conversion_points = [ChartPoint(x=r["device"], y=r["conversions"]) for r in table]
    bars = {
        "revenue": build_bar_chart(
            revenue_points, settings.bar, title="Revenue: Mobile vs Desktop", colors=DEVICE_COLORS, format_value=format_currency
        ),
        "conversions": build_bar_chart(
            conversion_points, settings.bar, title="Conversions: Mobile vs Desktop", colors=DEVICE_COLORS, format_value=format_count
        ),
    }

    charts = {
        "revenue": bar_chart_spec(
            table,
            label_field="device",
            value_field="total_revenue",
            title="Revenue: Mobile vs Desktop",
            color=DEVICE_COLORS["Mobile"],
            label_title="Device",
            colors=DEVICE_COLORS,
        ),
        "conversions": bar_chart_spec(
            table,
            label_field="device",
            value_field="conversions",
            title="Conversions: Mobile vs Desktop",
            color=DEVICE_COLORS["Mobile"],
            value_format=",.0f",
            label_title="Device",
            colors=DEVICE_COLORS,
        ),
    }

    return {
        "settings": asdict(settings),
        "devices": {row["device"]: {k: v for k, v in row.items() if k != "device"} for row in table},
        "table": table,
        "bars": {name: asdict(chart) for name, chart in bars.items()},
        "charts": charts,
    }
