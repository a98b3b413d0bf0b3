from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Optional

import pandas as pd

from insights.aggregation import AGE_GROUP, GENDER, aggregate, demographic_dimension, totals_frame
from insights.charts import bar_chart_spec
from insights.formatting import format_currency
from insights.models import Campaign, GroupTotals, MarketingData
from insights.rates import derive_rates
from insights.settings import ViewSettings
from insights.shapes import ChartPoint, build_bar_chart

GENDERS = ("Male", "Female")
SPEND_COLOR = "#3B82F6"
REVENUE_COLOR = "#10B981"


def _age_table(campaigns: tuple[Campaign, ...], gender: str) -> List[Dict[str, Any]]:
    totals = aggregate(campaigns, demographic_dimension("age_group", gender=gender))
    rows = []
    for age_group, t in totals.items():
        rates = derive_rates(t, ("ctr", "conversion_rate"))
        rows.append(
            {
                "age_group": age_group,
                "impressions": t.impressions,
                "clicks": t.clicks,
                "conversions": t.conversions,
                **rates,
            }
        )
    if not rows:
        return []
    table = pd.DataFrame(rows).sort_values("impressions", ascending=False, kind="stable")
    return table.to_dict(orient="records")


def compute_demographic_view(data: MarketingData, settings: Optional[ViewSettings] = None) -> Dict[str, Any]:
    settings = settings or ViewSettings()
    campaigns = data.campaigns

    by_gender = aggregate(campaigns, GENDER)
    for gender in GENDERS:
        by_gender.setdefault(gender, GroupTotals())
    ordered = list(GENDERS) + [g for g in by_gender if g not in GENDERS]
    gender_totals = [
        {
            "gender": g,
            "clicks": by_gender[g].clicks,
            "spend": by_gender[g].spend,
            "revenue": by_gender[g].revenue,
        }
        for g in ordered
    ]

    age_df = totals_frame(aggregate(campaigns, AGE_GROUP), "age_group")
    age_groups = age_df[["age_group", "spend", "revenue"]].to_dict(orient="records")

    spend_points = [ChartPoint(x=str(r["age_group"]), y=float(r["spend"])) for r in age_groups]
    revenue_points = [ChartPoint(x=str(r["age_group"]), y=float(r["revenue"])) for r in age_groups]
    bars = {
        "spend_by_age": build_bar_chart(
            spend_points, settings.bar, title="Total Spend by Age Group", color=SPEND_COLOR, format_value=format_currency
        ),
        "revenue_by_age": build_bar_chart(
            revenue_points, settings.bar, title="Total Revenue by Age Group", color=REVENUE_COLOR, format_value=format_currency
        ),
    }

    charts: Dict[str, Any] = {}
    if age_groups:
        charts = {
            "spend_by_age": bar_chart_spec(
                age_groups, label_field="age_group", value_field="spend", title="Total Spend by Age Group", color=SPEND_COLOR, label_title="Age Group"
            ),
            "revenue_by_age": bar_chart_spec(
                age_groups, label_field="age_group", value_field="revenue", title="Total Revenue by Age Group", color=REVENUE_COLOR, label_title="Age Group"
            ),
        }

    return {
        "settings": asdict(settings),
        "gender_totals": gender_totals,
        "age_groups": age_groups,
        "male_age_table": _age_table(campaigns, "Male"),
        "female_age_table": _age_table(campaigns, "Female"),
        "bars": {name: asdict(chart) for name, chart in bars.items()},
        "charts": charts,
    }
