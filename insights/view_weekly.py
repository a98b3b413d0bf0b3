from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Optional

import pandas as pd

from insights.aggregation import WEEK, aggregate, totals_frame
from insights.formatting import format_currency_thousands, format_week_label
from insights.models import MarketingData
from insights.settings import ViewSettings
from insights.shapes import ChartPoint, build_line_chart

REVENUE_COLOR = "#10B981"
SPEND_COLOR = "#3B82F6"


def weekly_frame(data: MarketingData) -> pd.DataFrame:
    """Weekly revenue/spend totals in chronological order (unparseable dates last)."""
    df = totals_frame(aggregate(data.campaigns, WEEK), "week_start")
    df["week_date"] = pd.to_datetime(df["week_start"], errors="coerce")
    df = df.sort_values("week_date", kind="stable", na_position="last").reset_index(drop=True)
    return df[["week_start", "revenue", "spend"]]


def compute_weekly_view(data: MarketingData, settings: Optional[ViewSettings] = None) -> Dict[str, Any]:
    settings = settings or ViewSettings()
    weeks = weekly_frame(data).to_dict(orient="records")

    revenue_points = [ChartPoint(x=str(w["week_start"]), y=float(w["revenue"])) for w in weeks]
    spend_points = [ChartPoint(x=str(w["week_start"]), y=float(w["spend"])) for w in weeks]
    charts = {
        "revenue": build_line_chart(
            revenue_points,
            settings.line,
            title="Revenue by Week",
            color=REVENUE_COLOR,
            format_x=format_week_label,
            format_y=format_currency_thousands,
        ),
        "spend": build_line_chart(
            spend_points,
            settings.line,
            title="Spend by Week",
            color=SPEND_COLOR,
            format_x=format_week_label,
            format_y=format_currency_thousands,
        ),
    }
    return {
        "settings": asdict(settings),
        "weeks": weeks,
        "charts": {name: asdict(chart) for name, chart in charts.items()},
    }
