"""Fold campaigns into per-key totals along a chosen dimension.

Every dimension shares one fold: a campaign is turned into ``Contribution``
rows, money amounts are multiplied by the row weight and count metrics are
added as reported. Demographic rows carry ``percentage_of_audience / 100`` as
their weight and the campaign-level spend/revenue as base amounts; the other
dimensions carry weight 1 and their own already apportioned amounts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from insights.models import Campaign, GroupTotals

COUNT_METRICS = ["impressions", "clicks", "conversions"]
MONEY_METRICS = ["spend", "revenue"]
METRICS = COUNT_METRICS + MONEY_METRICS

DEVICE_BUCKETS: Tuple[str, ...] = ("Mobile", "Desktop")


@dataclass(frozen=True)
class Contribution:
    key: Optional[str]
    weight: float = 1.0
    impressions: float = 0.0
    clicks: float = 0.0
    conversions: float = 0.0
    spend: float = 0.0
    revenue: float = 0.0


Extractor = Callable[[Campaign], Iterable[Contribution]]


@dataclass(frozen=True)
class Dimension:
    name: str
    extract: Extractor
    fixed_keys: Optional[Tuple[str, ...]] = None


def demographic_dimension(key_field: str, gender: Optional[str] = None) -> Dimension:
    """Demographic dimension keyed by ``gender`` or ``age_group``.

    With ``gender`` set, only breakdown entries of that gender contribute.
    """

    def extract(campaign: Campaign) -> Iterable[Contribution]:
        for breakdown in campaign.demographic_breakdown:
            if gender is not None and breakdown.gender != gender:
                continue
            perf = breakdown.performance
            yield Contribution(
                key=getattr(breakdown, key_field),
                weight=breakdown.percentage_of_audience / 100,
                impressions=perf.impressions,
                clicks=perf.clicks,
                conversions=perf.conversions,
                spend=campaign.spend,
                revenue=campaign.revenue,
            )

    name = key_field if gender is None else f"{key_field}:{gender}"
    return Dimension(name=name, extract=extract)


def _device_rows(campaign: Campaign) -> Iterable[Contribution]:
    for perf in campaign.device_performance:
        yield Contribution(
            key=perf.device,
            impressions=perf.impressions,
            clicks=perf.clicks,
            conversions=perf.conversions,
            spend=perf.spend,
            revenue=perf.revenue,
        )


def _region_rows(campaign: Campaign) -> Iterable[Contribution]:
    for perf in campaign.regional_performance:
        yield Contribution(key=perf.region, spend=perf.spend, revenue=perf.revenue)


def _week_rows(campaign: Campaign) -> Iterable[Contribution]:
    for perf in campaign.weekly_performance:
        yield Contribution(key=perf.week_start, spend=perf.spend, revenue=perf.revenue)


GENDER = demographic_dimension("gender")
AGE_GROUP = demographic_dimension("age_group")
DEVICE = Dimension(name="device", extract=_device_rows, fixed_keys=DEVICE_BUCKETS)
REGION = Dimension(name="region", extract=_region_rows)
WEEK = Dimension(name="week", extract=_week_rows)

DIMENSIONS: Dict[str, Dimension] = {d.name: d for d in [GENDER, AGE_GROUP, DEVICE, REGION, WEEK]}


def _sum_keep_nan(values: pd.Series) -> float:
    return float(values.sum(skipna=False))


def contributions_frame(campaigns: Sequence[Campaign], dimension: Dimension) -> pd.DataFrame:
    rows: List[Dict[str, object]] = []
    for campaign in campaigns:
        for c in dimension.extract(campaign):
            rows.append(
                {
                    "key": c.key,
                    "impressions": c.impressions,
                    "clicks": c.clicks,
                    "conversions": c.conversions,
                    "spend": c.spend * c.weight,
                    "revenue": c.revenue * c.weight,
                }
            )
    return pd.DataFrame(rows, columns=["key"] + METRICS)


def aggregate(campaigns: Sequence[Campaign], dimension: Dimension) -> Dict[Optional[str], GroupTotals]:
    """Group contributions by key and sum them.

    Keys come back in first-encounter order, or in ``fixed_keys`` order when
    the dimension declares a fixed bucket set (values outside it are ignored).
    """
    df = contributions_frame(campaigns, dimension)
    fixed = dimension.fixed_keys
    if fixed is not None:
        df = df[df["key"].isin(fixed)]

    totals: Dict[Optional[str], GroupTotals] = {k: GroupTotals() for k in fixed} if fixed is not None else {}
    if df.empty:
        return totals

    grouped = df.groupby("key", sort=False, dropna=False)[METRICS].agg(_sum_keep_nan)
    for key, row in grouped.iterrows():
        key = None if pd.isna(key) else key
        totals[key] = GroupTotals(**{m: float(row[m]) for m in METRICS})
    return totals


def aggregate_by(campaigns: Sequence[Campaign], dimension_name: str) -> Dict[Optional[str], GroupTotals]:
    try:
        dimension = DIMENSIONS[dimension_name]
    except KeyError:
        raise ValueError(f"unknown dimension: {dimension_name!r}") from None
    return aggregate(campaigns, dimension)


def totals_frame(totals: Dict[Optional[str], GroupTotals], key_name: str) -> pd.DataFrame:
    """One row per key, in the mapping's order."""
    rows = [{key_name: key, **{m: getattr(t, m) for m in METRICS}} for key, t in totals.items()]
    return pd.DataFrame(rows, columns=[key_name] + METRICS)
