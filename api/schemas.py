from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class PaddingModel(BaseModel):
    top: float = 40.0
    right: float = 30.0
    bottom: float = 40.0
    left: float = 60.0


class LineChartModel(BaseModel):
    width: float = Field(default=500.0, gt=0)
    height: float = Field(default=300.0, gt=0)
    padding: PaddingModel = Field(default_factory=PaddingModel)
    max_x_labels: int = Field(default=6, ge=1, le=50)
    marker_radius: float = Field(default=3.0, ge=0)


class BarChartModel(BaseModel):
    width: float = Field(default=500.0, gt=0)
    height: float = Field(default=300.0, gt=0)
    padding: PaddingModel = Field(default_factory=lambda: PaddingModel(top=20.0, right=20.0, bottom=40.0, left=20.0))
    bar_gap: float = Field(default=0.2, ge=0, le=0.9)


class BubbleMapModel(BaseModel):
    width: float = Field(default=1000.0, gt=0)
    height: float = Field(default=500.0, gt=0)
    base_radius: float = Field(default=3.0, ge=0)
    scale_factor: float = Field(default=20.0, ge=0)
    fallback_radius: float = Field(default=8.0, ge=0)


class RegionMarkerModel(BaseModel):
    base_radius: float = Field(default=10.0, ge=0)
    scale_factor: float = Field(default=20.0, ge=0)
    threshold: float = Field(default=0.5, ge=0, le=1)


class ViewSettingsModel(BaseModel):
    line: LineChartModel = Field(default_factory=LineChartModel)
    bar: BarChartModel = Field(default_factory=BarChartModel)
    bubble: BubbleMapModel = Field(default_factory=BubbleMapModel)
    markers: RegionMarkerModel = Field(default_factory=RegionMarkerModel)


class MetaCampaignsResponse(BaseModel):
    campaigns: int
    names: List[str]
