from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from src.analytics.hospital_detail import project_detail
from src.analytics.hospital_metrics import project_metrics
from src.shared.errors import (
    HospitalNotFoundError,
    InvalidRiskLevelError,
    InvalidSortKeyError,
    MissingParameterError,
)
from src.shared.models import (
    DetailRecord,
    MetricsRecord,
    RawFacilityRecord,
    RiskLevel,
    SummaryRecord,
)

logger = logging.getLogger(__name__)

SORT_KEYS = {
    "name": lambda record: record.name.lower(),
    "fragilityScore": lambda record: record.fragility_score,
    "totalBeds": lambda record: record.total_beds,
    "occupancyRate": lambda record: record.occupancy_rate,
    "riskLevel": lambda record: record.risk_level.severity,
}
DEFAULT_SORT_KEY = "fragilityScore"


class HospitalRegistry:
    """Immutable in-memory collection of projected hospital metrics.

    Built once from the raw dataset with :meth:`build`; all queries are reads
    and return fresh lists.
    """

    def __init__(
        self,
        records: Sequence[MetricsRecord],
        raw_records: Optional[Dict[str, RawFacilityRecord]] = None,
    ) -> None:
        self._records: Tuple[MetricsRecord, ...] = tuple(records)
        self._by_id: Dict[str, MetricsRecord] = {record.id: record for record in self._records}
        self._raw_by_id: Dict[str, RawFacilityRecord] = dict(raw_records or {})

    @classmethod
    def build(cls, raw_records: Iterable[RawFacilityRecord]) -> "HospitalRegistry":
        records: List[MetricsRecord] = []
        raw_by_id: Dict[str, RawFacilityRecord] = {}
        for raw in raw_records:
            metrics = project_metrics(raw)
            if metrics.id in raw_by_id:
                logger.warning("Duplicate hospital id %s skipped (%s)", metrics.id, raw.name)
                continue
            raw_by_id[metrics.id] = raw
            records.append(metrics)
        logger.info("Hospital registry built with %s records", len(records))
        return cls(records, raw_by_id)

    def __len__(self) -> int:
        return len(self._records)

    def get_all(self) -> List[MetricsRecord]:
        return list(self._records)

    def get_by_id(self, hospital_id: str) -> Optional[MetricsRecord]:
        return self._by_id.get(hospital_id)

    def get_by_country_code(self, code: str) -> List[MetricsRecord]:
        wanted = (code or "").strip().upper()
        return [record for record in self._records if record.iso3.upper() == wanted]

    def get_by_risk_level(self, level: Union[RiskLevel, str]) -> List[MetricsRecord]:
        tier = parse_risk_level(level)
        return [record for record in self._records if record.risk_level is tier]

    def get_summary(self) -> SummaryRecord:
        return summarize(self._records)

    def get_detail(self, hospital_id: Optional[str]) -> DetailRecord:
        if not hospital_id or not hospital_id.strip():
            raise MissingParameterError("Hospital ID is required")
        metrics = self.get_by_id(hospital_id)
        if metrics is None:
            raise HospitalNotFoundError(hospital_id)
        return project_detail(metrics, self._raw_by_id.get(hospital_id))


def parse_risk_level(level: Union[RiskLevel, str]) -> RiskLevel:
    if isinstance(level, RiskLevel):
        return level
    try:
        return RiskLevel(str(level))
    except ValueError as exc:
        raise InvalidRiskLevelError(f"Invalid risk level: {level!r}") from exc


def summarize(records: Sequence[MetricsRecord]) -> SummaryRecord:
    total = len(records)
    if total == 0:
        return SummaryRecord()
    return SummaryRecord(
        total_hospitals=total,
        average_fragility_score=sum(r.fragility_score for r in records) / total,
        critical_hospitals=sum(1 for r in records if r.risk_level is RiskLevel.CRITICAL),
        high_risk_hospitals=sum(1 for r in records if r.risk_level is RiskLevel.HIGH),
        total_bed_capacity=sum(r.total_beds for r in records),
        average_occupancy=sum(r.occupancy_rate for r in records) / total,
    )


def sort_hospitals(
    records: Iterable[MetricsRecord],
    key: str = DEFAULT_SORT_KEY,
    ascending: bool = False,
) -> List[MetricsRecord]:
    if key not in SORT_KEYS:
        raise InvalidSortKeyError(
            f"Invalid sort key: {key!r}; expected one of {sorted(SORT_KEYS)}"
        )
    return sorted(records, key=SORT_KEYS[key], reverse=not ascending)
