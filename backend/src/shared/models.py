from __future__ import annotations

import math
from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

_FLAG_VALUES = {"Yes": True, "No": False}


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def severity(self) -> int:
        return _RISK_SEVERITY[self]


_RISK_SEVERITY = {
    RiskLevel.LOW: 0,
    RiskLevel.MEDIUM: 1,
    RiskLevel.HIGH: 2,
    RiskLevel.CRITICAL: 3,
}


class _Record(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class RawFacilityRecord(BaseModel):
    """One hospital feature from the WA_Hospitals GeoJSON export."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    object_id: int = Field(alias="OBJECTID")
    name: str = Field(default="", alias="NAME")
    address: str = Field(default="", alias="ADDRESS")
    city: str = Field(default="", alias="CITY")
    zip_code: str = Field(default="", alias="ZIP")
    phone: str = Field(default="", alias="PHONE")
    longitude: float = 0.0
    latitude: float = 0.0
    has_acute_care: Optional[bool] = Field(default=None, alias="ACUTE")
    has_icu: Optional[bool] = Field(default=None, alias="ICU")
    is_critical_access: Optional[bool] = Field(default=None, alias="CAH")
    has_helipad: Optional[bool] = Field(default=None, alias="Heli")
    weblink: str = Field(default="", alias="Weblink")
    total_beds: int = Field(default=0, ge=0, alias="Beds_Total")
    icu_beds: int = Field(default=0, ge=0, alias="Beds_Total_ICU")
    psychiatric_beds: int = Field(default=0, ge=0, alias="Beds_Psychiatric")
    updated: Optional[Any] = Field(default=None, alias="Updated")

    @field_validator(
        "has_acute_care", "has_icu", "is_critical_access", "has_helipad", mode="before"
    )
    @classmethod
    def _coerce_flag(cls, value: Any) -> Optional[bool]:
        # Only the export's literal "Yes"/"No" are known; anything else stays unknown.
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return _FLAG_VALUES.get(value.strip())
        return None

    @field_validator("total_beds", "icu_beds", "psychiatric_beds", mode="before")
    @classmethod
    def _coerce_beds(cls, value: Any) -> int:
        if value is None or (isinstance(value, str) and not value.strip()):
            return 0
        count = float(value)
        if not math.isfinite(count):
            raise ValueError(f"bed count must be finite, got {value!r}")
        return int(count)

    @field_validator("name", "address", "city", "zip_code", "phone", "weblink", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    @classmethod
    def from_feature(cls, feature: Dict[str, Any]) -> "RawFacilityRecord":
        properties = dict(feature.get("properties") or {})
        if properties.get("OBJECTID") is None and feature.get("id") is not None:
            properties["OBJECTID"] = feature["id"]
        coordinates = (feature.get("geometry") or {}).get("coordinates")
        if not coordinates:
            raise ValueError("feature has no point coordinates")
        longitude, latitude = coordinates[0], coordinates[1]
        return cls.model_validate(
            {**properties, "longitude": longitude, "latitude": latitude}
        )


class MetricsRecord(_Record):
    id: str
    name: str
    latitude: float
    longitude: float
    city: str
    state: str
    country: str
    iso3: str

    fragility_score: float = Field(ge=0.1, le=0.8)
    capacity_utilization: float
    staffing_level: float
    equipment_condition: float
    supply_chain_resilience: float
    infrastructure_age: float

    total_beds: int = Field(ge=0)
    icu_beds: int = Field(ge=0)
    occupancy_rate: float
    emergency_capacity: int = Field(ge=10)

    risk_level: RiskLevel
    vulnerability_index: float
    disaster_readiness: float
    last_assessment: str


class TrendPoint(_Record):
    date: str
    fragility_score: float
    occupancy_rate: float


class DetailRecord(MetricsRecord):
    address: str
    phone: str
    facility_type: Literal["general", "specialized", "teaching", "community"] = Field(
        alias="type"
    )
    ownership: Literal["public", "private", "nonprofit"]
    accreditation: str
    year_established: int

    staff_count: int
    doctor_count: int
    nurse_count: int

    trends: List[TrendPoint] = Field(min_length=5, max_length=5)
    risk_factors: List[str] = Field(min_length=1, max_length=5)
    recommendations: List[str] = Field(min_length=1, max_length=5)


class SummaryRecord(_Record):
    total_hospitals: int = 0
    average_fragility_score: float = 0.0
    critical_hospitals: int = 0
    high_risk_hospitals: int = 0
    total_bed_capacity: int = 0
    average_occupancy: float = 0.0


class RegionSummary(_Record):
    region: str
    hospital_count: int
    average_fragility_score: float
    average_occupancy: float
    total_beds: int


class RiskDistributionEntry(_Record):
    risk_level: RiskLevel
    count: int
    share: float = Field(ge=0, le=1)


class MapPoint(_Record):
    id: str
    name: str
    latitude: float
    longitude: float
    color: str
    radius: int
    risk_level: RiskLevel
