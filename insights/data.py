from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple

from insights.models import MarketingData, parse_dataset

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parents[1]
DATA_FILE_NAME = "marketing_data.json"
DATA_PATH = DATA_DIR / DATA_FILE_NAME


class DataSourceError(RuntimeError):
    """The marketing dataset could not be read or decoded."""


def file_signature(path: Path) -> Tuple[str, float]:
    return str(path), path.stat().st_mtime


@lru_cache(maxsize=4)
def _load_marketing_data_cached(file_sig: Tuple[str, float]) -> MarketingData:
    path = Path(file_sig[0])
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise DataSourceError(f"{path.name} is not valid JSON: {exc}") from exc
    except OSError as exc:
        raise DataSourceError(f"Failed to read {path}: {exc}") from exc
    try:
        data = parse_dataset(raw)
    except ValueError as exc:
        raise DataSourceError(f"{path.name}: {exc}") from exc
    logger.info("Loaded %d campaigns from %s", len(data.campaigns), path)
    return data


def load_marketing_data(path: Optional[Path] = None) -> MarketingData:
    """Read the campaign dataset, reusing the parsed result while the file is unchanged."""
    path = Path(path) if path is not None else DATA_PATH
    if not path.is_file():
        raise DataSourceError(f"Marketing data not found at {path}")
    return _load_marketing_data_cached(file_signature(path))


def clear_cache() -> None:
    _load_marketing_data_cached.cache_clear()
