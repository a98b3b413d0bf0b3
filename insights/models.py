from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional, Tuple

import pandas as pd


@dataclass(frozen=True)
class Performance:
    impressions: float = 0.0
    clicks: float = 0.0
    conversions: float = 0.0


@dataclass(frozen=True)
class DemographicBreakdown:
    gender: Optional[str]
    age_group: Optional[str]
    percentage_of_audience: float = 0.0
    performance: Performance = field(default_factory=Performance)


@dataclass(frozen=True)
class DevicePerformance:
    device: Optional[str]
    impressions: float = 0.0
    clicks: float = 0.0
    conversions: float = 0.0
    spend: float = 0.0
    revenue: float = 0.0


@dataclass(frozen=True)
class RegionalPerformance:
    region: Optional[str]
    revenue: float = 0.0
    spend: float = 0.0


@dataclass(frozen=True)
class WeeklyPerformance:
    week_start: Optional[str]
    revenue: float = 0.0
    spend: float = 0.0


@dataclass(frozen=True)
class Campaign:
    spend: float = 0.0
    revenue: float = 0.0
    demographic_breakdown: Tuple[DemographicBreakdown, ...] = ()
    device_performance: Tuple[DevicePerformance, ...] = ()
    regional_performance: Tuple[RegionalPerformance, ...] = ()
    weekly_performance: Tuple[WeeklyPerformance, ...] = ()
    campaign_id: Optional[str] = None
    name: Optional[str] = None


@dataclass(frozen=True)
class MarketingData:
    campaigns: Tuple[Campaign, ...] = ()


@dataclass
class GroupTotals:
    impressions: float = 0.0
    clicks: float = 0.0
    conversions: float = 0.0
    spend: float = 0.0
    revenue: float = 0.0


# ---------------- Parsing ----------------
def _num(raw: Mapping[str, Any], key: str) -> float:
    # Missing fields count as zero; malformed ones become NaN and propagate.
    value = raw.get(key)
    if value is None:
        return 0.0
    try:
        number = pd.to_numeric(value, errors="coerce")
    except (TypeError, ValueError):
        return float("nan")
    if not pd.api.types.is_scalar(number):
        return float("nan")
    return float(number)


def _key(raw: Mapping[str, Any], key: str) -> Optional[str]:
    value = raw.get(key)
    return None if value is None else str(value)


def _records(raw: Mapping[str, Any], key: str) -> List[Mapping[str, Any]]:
    values = raw.get(key)
    if not isinstance(values, list):
        return []
    return [v for v in values if isinstance(v, Mapping)]


def _section(raw: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = raw.get(key)
    return value if isinstance(value, Mapping) else {}


def parse_performance(raw: Mapping[str, Any]) -> Performance:
    return Performance(
        impressions=_num(raw, "impressions"),
        clicks=_num(raw, "clicks"),
        conversions=_num(raw, "conversions"),
    )


def parse_campaign(raw: Mapping[str, Any]) -> Campaign:
    demographics = tuple(
        DemographicBreakdown(
            gender=_key(d, "gender"),
            age_group=_key(d, "age_group"),
            percentage_of_audience=_num(d, "percentage_of_audience"),
            performance=parse_performance(_section(d, "performance")),
        )
        for d in _records(raw, "demographic_breakdown")
    )
    devices = tuple(
        DevicePerformance(
            device=_key(d, "device"),
            impressions=_num(d, "impressions"),
            clicks=_num(d, "clicks"),
            conversions=_num(d, "conversions"),
            spend=_num(d, "spend"),
            revenue=_num(d, "revenue"),
        )
        for d in _records(raw, "device_performance")
    )
    regions = tuple(
        RegionalPerformance(region=_key(d, "region"), revenue=_num(d, "revenue"), spend=_num(d, "spend"))
        for d in _records(raw, "regional_performance")
    )
    weeks = tuple(
        WeeklyPerformance(week_start=_key(d, "week_start"), revenue=_num(d, "revenue"), spend=_num(d, "spend"))
        for d in _records(raw, "weekly_performance")
    )
    return Campaign(
        spend=_num(raw, "spend"),
        revenue=_num(raw, "revenue"),
        demographic_breakdown=demographics,
        device_performance=devices,
        regional_performance=regions,
        weekly_performance=weeks,
        campaign_id=_key(raw, "id"),
        name=_key(raw, "name"),
    )


def parse_campaigns(raw_campaigns: Iterable[Mapping[str, Any]]) -> Tuple[Campaign, ...]:
    return tuple(parse_campaign(c) for c in raw_campaigns if isinstance(c, Mapping))


def parse_dataset(raw: object) -> MarketingData:
    """Build a MarketingData from a decoded JSON document.

    Raises ValueError when the document has no ``campaigns`` list.
    """
    if not isinstance(raw, Mapping) or not isinstance(raw.get("campaigns"), list):
        raise ValueError("dataset must be an object with a 'campaigns' list")
    return MarketingData(campaigns=parse_campaigns(raw["campaigns"]))
