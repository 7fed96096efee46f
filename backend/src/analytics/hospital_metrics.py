from __future__ import annotations

import logging
import math
from datetime import date, datetime, timezone
from typing import Any, Optional

from src.analytics.fragility_scoring import fragility_score, risk_level
from src.analytics.seeded_values import SeedField, field_value
from src.shared.models import MetricsRecord, RawFacilityRecord

logger = logging.getLogger(__name__)

ID_PREFIX = "wa-"
STATE = "Washington"
COUNTRY = "United States"
ISO3 = "USA"
FALLBACK_ASSESSMENT_DATE = "2025-05-05"

_DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
    "%m/%d/%Y",
)


def hospital_id(object_id: int) -> str:
    return f"{ID_PREFIX}{object_id:03d}"


def object_id_from_hospital_id(value: str) -> Optional[int]:
    text = (value or "").strip()
    if text.startswith(ID_PREFIX):
        text = text[len(ID_PREFIX):]
    try:
        return int(text)
    except ValueError:
        return None


def project_metrics(raw: RawFacilityRecord) -> MetricsRecord:
    seed = raw.object_id
    score = fragility_score(raw)

    base_staffing = 0.75 if raw.has_acute_care else 0.65
    base_equipment = 0.8 if raw.has_icu else 0.7
    base_supply_chain = 0.8 if raw.total_beds > 200 else 0.7
    if raw.has_helipad:
        disaster_readiness = 0.7 + field_value(seed, SeedField.DISASTER_READINESS) * 0.25
    else:
        disaster_readiness = 0.5 + field_value(seed, SeedField.DISASTER_READINESS) * 0.3

    return MetricsRecord(
        id=hospital_id(raw.object_id),
        name=raw.name.strip(),
        latitude=raw.latitude,
        longitude=raw.longitude,
        city=raw.city,
        state=STATE,
        country=COUNTRY,
        iso3=ISO3,
        fragility_score=score,
        capacity_utilization=0.7 + field_value(seed, SeedField.CAPACITY_UTILIZATION) * 0.25,
        staffing_level=min(
            0.98, base_staffing + field_value(seed, SeedField.STAFFING_LEVEL) * 0.2
        ),
        equipment_condition=min(
            0.98, base_equipment + field_value(seed, SeedField.EQUIPMENT_CONDITION) * 0.15
        ),
        supply_chain_resilience=min(
            0.95,
            base_supply_chain + field_value(seed, SeedField.SUPPLY_CHAIN_RESILIENCE) * 0.15,
        ),
        infrastructure_age=0.2 + field_value(seed, SeedField.INFRASTRUCTURE_AGE) * 0.4,
        total_beds=raw.total_beds,
        icu_beds=raw.icu_beds,
        occupancy_rate=0.65 + field_value(seed, SeedField.OCCUPANCY_RATE) * 0.25,
        emergency_capacity=max(10, math.floor(raw.total_beds * 0.15)),
        risk_level=risk_level(score),
        vulnerability_index=score
        + (field_value(seed, SeedField.VULNERABILITY_JITTER) * 0.1 - 0.05),
        disaster_readiness=disaster_readiness,
        last_assessment=assessment_date(raw.updated, object_id=raw.object_id),
    )


def assessment_date(value: Any, object_id: Optional[int] = None) -> str:
    """Reformat a dataset update stamp to ``YYYY-MM-DD``.

    Accepts ISO strings, slash-separated dates and epoch milliseconds (the
    ArcGIS export format). Missing or unreadable values map to a fixed date.
    """
    if value is None or value == "":
        return FALLBACK_ASSESSMENT_DATE
    parsed = _parse_date(value)
    if parsed is None:
        logger.warning(
            "Unparseable update date %r for object %s; using %s",
            value,
            object_id,
            FALLBACK_ASSESSMENT_DATE,
        )
        return FALLBACK_ASSESSMENT_DATE
    return parsed.isoformat()


def _parse_date(value: Any) -> Optional[date]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc).date()
        except (OverflowError, OSError, ValueError):
            return None

    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        parsed = None
    if parsed is not None:
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc)
        return parsed.date()

    # Drop a trailing "+00" style offset that strptime cannot read.
    candidate = text.split("+")[0].strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(candidate, fmt).date()
        except ValueError:
            continue
    return None
