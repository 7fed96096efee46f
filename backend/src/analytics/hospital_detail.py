from __future__ import annotations

import math
from typing import Callable, List, Optional, Tuple

from src.analytics.hospital_metrics import object_id_from_hospital_id
from src.analytics.seeded_values import SeedField, field_value
from src.shared.models import DetailRecord, MetricsRecord, RawFacilityRecord, TrendPoint

FALLBACK_PHONE = "+1-360-555-0000"
MAX_LISTED = 5
NO_RISK_FACTORS = "No critical risk factors identified"
NO_RECOMMENDATIONS = "Continue current operational excellence"

# (month, fragility offset, occupancy offset); the last point is the current state.
TREND_OFFSETS: Tuple[Tuple[str, float, float], ...] = (
    ("2025-01", 0.05, -0.03),
    ("2025-02", 0.03, -0.02),
    ("2025-03", 0.01, 0.0),
    ("2025-04", 0.0, 0.01),
    ("2025-05", 0.0, 0.0),
)

Rule = Tuple[Callable[[MetricsRecord, Optional[RawFacilityRecord]], bool], str]

# ICU and helipad rules only apply when the source record says "No".
RISK_FACTOR_RULES: Tuple[Rule, ...] = (
    (lambda m, raw: m.staffing_level < 0.75, "Staffing levels below optimal"),
    (lambda m, raw: m.equipment_condition < 0.7, "Equipment requires updates"),
    (lambda m, raw: m.supply_chain_resilience < 0.7, "Supply chain vulnerability"),
    (lambda m, raw: m.infrastructure_age > 0.5, "Aging infrastructure"),
    (lambda m, raw: m.occupancy_rate > 0.85, "High capacity utilization"),
    (lambda m, raw: m.disaster_readiness < 0.6, "Limited disaster preparedness"),
    (lambda m, raw: raw is not None and raw.has_icu is False, "No ICU capability"),
    (
        lambda m, raw: raw is not None and raw.has_helipad is False,
        "No helipad for emergency transport",
    ),
    (lambda m, raw: m.total_beds < 50, "Limited bed capacity"),
)

RECOMMENDATION_RULES: Tuple[Rule, ...] = (
    (
        lambda m, raw: m.staffing_level < 0.8,
        "Implement staff recruitment and retention programs",
    ),
    (lambda m, raw: m.equipment_condition < 0.75, "Prioritize medical equipment upgrades"),
    (lambda m, raw: m.supply_chain_resilience < 0.75, "Diversify supply chain sources"),
    (lambda m, raw: m.infrastructure_age > 0.45, "Plan infrastructure modernization"),
    (
        lambda m, raw: m.occupancy_rate > 0.8,
        "Expand bed capacity or improve patient flow",
    ),
    (lambda m, raw: m.disaster_readiness < 0.7, "Enhance emergency preparedness training"),
    (
        lambda m, raw: raw is not None and raw.has_icu is False and m.total_beds > 50,
        "Consider adding ICU capability",
    ),
    (
        lambda m, raw: (
            raw is not None and raw.has_helipad is False and m.total_beds > 100
        ),
        "Evaluate helipad installation feasibility",
    ),
)


def project_detail(
    metrics: MetricsRecord, raw: Optional[RawFacilityRecord] = None
) -> DetailRecord:
    """
    Expand a metrics record into the facility detail view.

    Without the source record, address and phone fall back to coarse
    defaults and the ICU/helipad rules are skipped.
    """
    seed = object_id_from_hospital_id(metrics.id)
    if seed is None:
        seed = raw.object_id if raw is not None else 0
    beds = metrics.total_beds

    return DetailRecord(
        **metrics.model_dump(),
        address=_address(metrics, raw),
        phone=(raw.phone if raw is not None else "") or FALLBACK_PHONE,
        facility_type=facility_type(metrics, raw),
        ownership=ownership(seed),
        accreditation="JCI Accredited" if beds > 100 else "State Licensed",
        year_established=1950 + math.floor(field_value(seed, SeedField.YEAR_ESTABLISHED) * 70),
        staff_count=beds * 3 + math.floor(field_value(seed, SeedField.STAFF_COUNT) * 200),
        doctor_count=math.floor(beds * 0.3 + field_value(seed, SeedField.DOCTOR_COUNT) * 50),
        nurse_count=math.floor(beds * 1.5 + field_value(seed, SeedField.NURSE_COUNT) * 100),
        trends=build_trends(metrics),
        risk_factors=risk_factors(metrics, raw),
        recommendations=recommendations(metrics, raw),
    )


def facility_type(metrics: MetricsRecord, raw: Optional[RawFacilityRecord]) -> str:
    if raw is not None and raw.has_acute_care:
        return "teaching" if metrics.total_beds > 300 else "general"
    if raw is not None and raw.psychiatric_beds > 0:
        return "specialized"
    return "community"


def ownership(seed: int) -> str:
    if field_value(seed, SeedField.OWNERSHIP_NONPROFIT) > 0.6:
        return "nonprofit"
    if field_value(seed, SeedField.OWNERSHIP_PUBLIC) > 0.5:
        return "public"
    return "private"


def build_trends(metrics: MetricsRecord) -> List[TrendPoint]:
    return [
        TrendPoint(
            date=month,
            fragility_score=metrics.fragility_score + fragility_offset,
            occupancy_rate=metrics.occupancy_rate + occupancy_offset,
        )
        for month, fragility_offset, occupancy_offset in TREND_OFFSETS
    ]


def risk_factors(metrics: MetricsRecord, raw: Optional[RawFacilityRecord]) -> List[str]:
    return _apply_rules(RISK_FACTOR_RULES, metrics, raw, NO_RISK_FACTORS)


def recommendations(metrics: MetricsRecord, raw: Optional[RawFacilityRecord]) -> List[str]:
    return _apply_rules(RECOMMENDATION_RULES, metrics, raw, NO_RECOMMENDATIONS)


def _apply_rules(
    rules: Tuple[Rule, ...],
    metrics: MetricsRecord,
    raw: Optional[RawFacilityRecord],
    sentinel: str,
) -> List[str]:
    matched = [message for predicate, message in rules if predicate(metrics, raw)]
    if not matched:
        return [sentinel]
    return matched[:MAX_LISTED]


def _address(metrics: MetricsRecord, raw: Optional[RawFacilityRecord]) -> str:
    if raw is None:
        return f"{metrics.city}, Washington"
    return f"{raw.address}, {raw.city}, WA {raw.zip_code}"
