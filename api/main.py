from __future__ import annotations

import logging
import math
from typing import Any, Callable, Dict

import numpy as np
import pandas as pd
from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from api.schemas import MetaCampaignsResponse, ViewSettingsModel
from insights.data import DataSourceError, load_marketing_data
from insights.models import MarketingData
from insights.settings import ViewSettings, normalize_settings
from insights.view_demographic import compute_demographic_view
from insights.view_device import compute_device_view
from insights.view_region import compute_region_view
from insights.view_weekly import compute_weekly_view

app = FastAPI(title="Marketing Insights API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

ViewFn = Callable[[MarketingData, ViewSettings], Dict[str, Any]]

VIEWS: Dict[str, ViewFn] = {
    "demographic": compute_demographic_view,
    "device": compute_device_view,
    "region": compute_region_view,
    "weekly": compute_weekly_view,
}

# Which table of each payload the CSV export writes out.
EXPORT_TABLES = {
    "demographic": "age_groups",
    "device": "table",
    "region": "regions",
    "weekly": "weeks",
}


def _settings_from_model(model: ViewSettingsModel) -> ViewSettings:
    return normalize_settings(model.model_dump())


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
                pd.Timestamp: lambda ts: ts.isoformat(),
            },
        )
    )


def _error(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": str(exc), "type": type(exc).__name__})


def _render_view(name: str, settings: ViewSettingsModel) -> JSONResponse:
    try:
        data = load_marketing_data()
        return _json(VIEWS[name](data, _settings_from_model(settings)))
    except DataSourceError as exc:
        logger.warning("%s view: data source unavailable: %s", name, exc)
        return _error(503, exc)
    except Exception as exc:
        logger.exception("%s view failed", name)
        return _error(500, exc)


@app.get("/meta/campaigns", response_model=MetaCampaignsResponse)
def meta_campaigns():
    try:
        data = load_marketing_data()
        names = [c.name or c.campaign_id or "" for c in data.campaigns]
        return _json({"campaigns": len(data.campaigns), "names": names})
    except DataSourceError as exc:
        return _error(503, exc)
    except Exception as exc:
        logger.exception("meta_campaigns failed")
        return _error(500, exc)


@app.post("/demographic")
def demographic(settings: ViewSettingsModel):
    return _render_view("demographic", settings)


@app.post("/device")
def device(settings: ViewSettingsModel):
    return _render_view("device", settings)


@app.post("/region")
def region(settings: ViewSettingsModel):
    return _render_view("region", settings)


@app.post("/weekly")
def weekly(settings: ViewSettingsModel):
    return _render_view("weekly", settings)


@app.post("/export/{page}")
def export_page(page: str, settings: ViewSettingsModel):
    if page not in VIEWS:
        return JSONResponse(status_code=404, content={"error": f"unknown page: {page}", "type": "NotFound"})
    try:
        data = load_marketing_data()
        payload = VIEWS[page](data, _settings_from_model(settings))
        export_df = pd.DataFrame(payload.get(EXPORT_TABLES[page]) or [])
        csv_bytes = export_df.to_csv(index=False).encode("utf-8")
    except DataSourceError as exc:
        logger.warning("%s export: data source unavailable: %s", page, exc)
        return _error(503, exc)
    except Exception as exc:
        logger.exception("%s export failed", page)
        return _error(500, exc)
    return Response(content=csv_bytes, media_type="text/csv", headers={"Content-Disposition": f"attachment; filename={page}.csv"})
