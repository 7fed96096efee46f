from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from src.shared.models import MetricsRecord, RegionSummary, RiskDistributionEntry, RiskLevel

REGION_CITIES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    (
        "Seattle Metro",
        (
            "Seattle", "Bellevue", "Kirkland", "Renton", "Burien", "Issaquah",
            "Edmonds", "Snoqualmie", "Covington", "Monroe",
        ),
    ),
    (
        "South Puget Sound",
        (
            "Tacoma", "Federal Way", "Auburn", "Olympia", "Lakewood", "Puyallup",
            "Gig Harbor", "Lacey", "Enumclaw",
        ),
    ),
    (
        "Eastern Washington",
        (
            "Spokane", "Spokane Valley", "Richland", "Kennewick", "Pasco", "Yakima",
            "Wenatchee", "Walla Walla", "Pullman", "Moses Lake", "Ellensburg",
            "Sunnyside", "Toppenish", "Clarkston", "Colfax", "Medical Lake",
            "Ephrata", "Quincy", "Othello", "Ritzville", "Odessa", "Davenport",
            "Dayton", "Pomeroy", "Colville", "Chewelah", "Newport", "Republic",
            "Grand Coulee", "Chelan", "Brewster", "Omak", "Tonasket", "Leavenworth",
            "Prosser", "Goldendale", "White Salmon",
        ),
    ),
    (
        "Southwest Washington",
        (
            "Vancouver", "Longview", "Centralia", "Shelton", "Aberdeen", "Elma",
            "South Bend", "Ilwaco", "Morton",
        ),
    ),
    (
        "North Sound & Peninsula",
        (
            "Bellingham", "Everett", "Bremerton", "Silverdale", "Port Angeles",
            "Port Townsend", "Coupeville", "Oak Harbor", "Anacortes", "Mount Vernon",
            "Sedro-Woolley", "Arlington", "Marysville", "Friday Harbor", "Forks",
        ),
    ),
)

_CITY_TO_REGION: Dict[str, str] = {
    city.lower(): region for region, cities in REGION_CITIES for city in cities
}

# Highest tier first, matching the dashboard's badge order.
DISTRIBUTION_ORDER = (RiskLevel.CRITICAL, RiskLevel.HIGH, RiskLevel.MEDIUM, RiskLevel.LOW)


def region_for_city(city: str) -> Optional[str]:
    return _CITY_TO_REGION.get((city or "").strip().lower())


def regional_summaries(records: Iterable[MetricsRecord]) -> List[RegionSummary]:
    grouped: Dict[str, List[MetricsRecord]] = {region: [] for region, _ in REGION_CITIES}
    for record in records:
        region = region_for_city(record.city)
        if region is not None:
            grouped[region].append(record)

    summaries: List[RegionSummary] = []
    for region, _ in REGION_CITIES:
        members = grouped[region]
        if not members:
            continue
        count = len(members)
        summaries.append(
            RegionSummary(
                region=region,
                hospital_count=count,
                average_fragility_score=sum(m.fragility_score for m in members) / count,
                average_occupancy=sum(m.occupancy_rate for m in members) / count,
                total_beds=sum(m.total_beds for m in members),
            )
        )
    return summaries


def risk_distribution(records: Sequence[MetricsRecord]) -> List[RiskDistributionEntry]:
    total = len(records)
    entries = []
    for level in DISTRIBUTION_ORDER:
        count = sum(1 for record in records if record.risk_level is level)
        entries.append(
            RiskDistributionEntry(
                risk_level=level,
                count=count,
                share=count / total if total else 0.0,
            )
        )
    return entries


def attention_list(
    records: Iterable[MetricsRecord], limit: Optional[int] = None
) -> List[MetricsRecord]:
    """Hospitals above low risk, most fragile first."""
    flagged = [record for record in records if record.risk_level is not RiskLevel.LOW]
    flagged.sort(key=lambda record: record.fragility_score, reverse=True)
    if limit is not None:
        return flagged[:limit]
    return flagged
