"""Pytest fixtures shared across the insights tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterator

import pytest

from insights import data as data_module
from insights.models import Campaign, MarketingData, parse_campaign


def make_campaign(**raw) -> Campaign:
    """Build a Campaign from keyword fields shaped like the JSON dataset."""

    return parse_campaign(raw)


def demographic(gender: str, age_group: str, pct: float, impressions: float = 1000, clicks: float = 100, conversions: float = 10) -> dict:
    """Return one demographic breakdown entry."""

    return {
        "gender": gender,
        "age_group": age_group,
        "percentage_of_audience": pct,
        "performance": {"impressions": impressions, "clicks": clicks, "conversions": conversions},
    }


@pytest.fixture
def two_campaigns() -> MarketingData:
    """Return the male/female two-campaign scenario."""

    campaign_a = make_campaign(spend=200, revenue=400, demographic_breakdown=[demographic("Male", "18-24", 50)])
    campaign_b = make_campaign(spend=100, revenue=50, demographic_breakdown=[demographic("Female", "18-24", 100)])
    return MarketingData(campaigns=(campaign_a, campaign_b))


@pytest.fixture
def dataset_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Write a small dataset to disk and point the loader at it."""

    payload = {
        "campaigns": [
            {
                "id": "A",
                "name": "Alpha",
                "spend": 200,
                "revenue": 400,
                "demographic_breakdown": [demographic("Male", "18-24", 50)],
                "device_performance": [
                    {"device": "Mobile", "impressions": 800, "clicks": 80, "conversions": 8, "spend": 150, "revenue": 300},
                    {"device": "Desktop", "impressions": 200, "clicks": 20, "conversions": 2, "spend": 50, "revenue": 100},
                ],
                "regional_performance": [
                    {"region": "Dubai", "revenue": 300, "spend": 120},
                    {"region": "Cairo", "revenue": 100, "spend": 80},
                ],
                "weekly_performance": [
                    {"week_start": "2024-01-08", "revenue": 250, "spend": 120},
                    {"week_start": "2024-01-01", "revenue": 150, "spend": 80},
                ],
            }
        ]
    }
    path = tmp_path / "marketing_data.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    monkeypatch.setattr(data_module, "DATA_PATH", path)
    data_module.clear_cache()
    yield path
    data_module.clear_cache()
