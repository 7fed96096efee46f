"""Load raw hospital features from the static GeoJSON export."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from pydantic import ValidationError

from src.shared.errors import DatasetLoadError
from src.shared.models import RawFacilityRecord

logger = logging.getLogger(__name__)


def load_json(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        raise DatasetLoadError(f"Cannot read hospital dataset {path}: {exc}") from exc


def load_facility_records(path: Path) -> List[RawFacilityRecord]:
    payload = load_json(path)
    records = parse_feature_collection(payload)
    logger.info("Loaded %s hospital features from %s", len(records), path)
    return records


def parse_feature_collection(payload: Dict[str, Any]) -> List[RawFacilityRecord]:
    """
    Convert a FeatureCollection into raw facility records in file order.

    Features without an OBJECTID or with unreadable fields are skipped with a
    warning rather than failing the whole dataset.
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("features"), list):
        raise DatasetLoadError("Hospital dataset is not a GeoJSON FeatureCollection")

    records: List[RawFacilityRecord] = []
    for idx, feature in enumerate(payload["features"]):
        if not isinstance(feature, dict):
            logger.warning("Skipping feature %s: not an object", idx)
            continue
        try:
            records.append(RawFacilityRecord.from_feature(feature))
        except (ValidationError, TypeError, IndexError, ValueError) as exc:
            logger.warning("Skipping feature %s: %s", idx, exc)
    return records
