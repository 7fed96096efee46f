from __future__ import annotations

from src.shared.models import RawFacilityRecord, RiskLevel

BASE_SCORE = 0.3
MIN_SCORE = 0.1
MAX_SCORE = 0.8

# Evaluated highest-first; each bound is inclusive.
RISK_THRESHOLDS = (
    (0.7, RiskLevel.CRITICAL),
    (0.5, RiskLevel.HIGH),
    (0.35, RiskLevel.MEDIUM),
)


def fragility_score(record: RawFacilityRecord) -> float:
    """
    Weighted rule score for a facility, clamped to [0.1, 0.8].

    Larger, ICU-equipped acute hospitals with a helipad score lower; small,
    non-acute, critical-access or psychiatric-only facilities score higher.
    """
    score = BASE_SCORE

    if record.total_beds >= 400:
        score -= 0.1
    elif record.total_beds >= 200:
        score -= 0.05
    elif record.total_beds < 50:
        score += 0.1

    if record.has_icu:
        score -= 0.05
    if record.icu_beds > 30:
        score -= 0.05

    if record.has_acute_care is False:
        score += 0.15

    if record.has_helipad:
        score -= 0.03

    if record.is_critical_access:
        score += 0.08

    if record.psychiatric_beds > 0 and record.total_beds == record.psychiatric_beds:
        score += 0.05

    return max(MIN_SCORE, min(MAX_SCORE, score))


def risk_level(score: float) -> RiskLevel:
    for threshold, level in RISK_THRESHOLDS:
        if score >= threshold:
            return level
    return RiskLevel.LOW
