from __future__ import annotations

from typing import Iterable, List

from src.shared.errors import InvalidColorModeError
from src.shared.models import MapPoint, MetricsRecord, RiskLevel

GREEN = "#22c55e"
YELLOW = "#eab308"
ORANGE = "#f97316"
RED = "#ef4444"
DARK_RED = "#7f1d1d"

COLOR_MODES = ("fragilityScore", "occupancyRate", "riskLevel")
DEFAULT_COLOR_MODE = "fragilityScore"

RISK_COLORS = {
    RiskLevel.CRITICAL: DARK_RED,
    RiskLevel.HIGH: RED,
    RiskLevel.MEDIUM: ORANGE,
    RiskLevel.LOW: GREEN,
}


def fragility_color(score: float) -> str:
    if score >= 0.6:
        return RED
    if score >= 0.4:
        return ORANGE
    return GREEN


def occupancy_color(rate: float) -> str:
    if rate >= 0.95:
        return DARK_RED
    if rate >= 0.9:
        return RED
    if rate >= 0.85:
        return ORANGE
    if rate >= 0.8:
        return YELLOW
    return GREEN


def marker_radius(beds: int) -> int:
    if beds >= 500:
        return 16
    if beds >= 200:
        return 12
    if beds >= 100:
        return 9
    return 7


def marker_color(record: MetricsRecord, color_by: str) -> str:
    if color_by == "fragilityScore":
        return fragility_color(record.fragility_score)
    if color_by == "occupancyRate":
        return occupancy_color(record.occupancy_rate)
    if color_by == "riskLevel":
        return RISK_COLORS[record.risk_level]
    raise InvalidColorModeError(
        f"Invalid color mode: {color_by!r}; expected one of {list(COLOR_MODES)}"
    )


def build_map_points(
    records: Iterable[MetricsRecord], color_by: str = DEFAULT_COLOR_MODE
) -> List[MapPoint]:
    if color_by not in COLOR_MODES:
        raise InvalidColorModeError(
            f"Invalid color mode: {color_by!r}; expected one of {list(COLOR_MODES)}"
        )
    return [
        MapPoint(
            id=record.id,
            name=record.name,
            latitude=record.latitude,
            longitude=record.longitude,
            color=marker_color(record, color_by),
            radius=marker_radius(record.total_beds),
            risk_level=record.risk_level,
        )
        for record in records
    ]
