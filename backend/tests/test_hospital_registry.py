import pytest

from src.analytics.hospital_metrics import project_metrics
from src.intelligence.hospital_registry import HospitalRegistry, sort_hospitals, summarize
from src.shared.errors import (
    BadRequestError,
    HospitalNotFoundError,
    InvalidRiskLevelError,
    InvalidSortKeyError,
    MissingParameterError,
)
from src.shared.models import RiskLevel, SummaryRecord


@pytest.fixture
def registry(raw_dataset):
    return HospitalRegistry.build(raw_dataset)


def test_get_all_preserves_dataset_order(registry, raw_dataset):
    assert [record.id for record in registry.get_all()] == [
        f"wa-{raw.object_id:03d}" for raw in raw_dataset
    ]


def test_get_all_returns_a_copy(registry):
    records = registry.get_all()
    records.clear()
    assert len(registry.get_all()) == 5


def test_records_are_immutable(registry):
    record = registry.get_all()[0]
    with pytest.raises(Exception):
        record.fragility_score = 0.5


def test_get_by_id_round_trip(registry, raw_dataset):
    for raw in raw_dataset:
        projected = project_metrics(raw)
        assert registry.get_by_id(projected.id) == projected


def test_get_by_id_unknown_returns_none(registry):
    assert registry.get_by_id("wa-999") is None


def test_get_by_country_code(registry):
    assert len(registry.get_by_country_code("USA")) == 5
    assert len(registry.get_by_country_code("usa")) == 5
    assert registry.get_by_country_code("CAN") == []


def test_get_by_risk_level(registry):
    critical = registry.get_by_risk_level("critical")
    assert all(record.fragility_score >= 0.7 for record in critical)
    high = registry.get_by_risk_level(RiskLevel.HIGH)
    assert [record.id for record in high] == ["wa-002", "wa-005"]
    low = registry.get_by_risk_level("low")
    assert "wa-001" in [record.id for record in low]
    total = sum(len(registry.get_by_risk_level(level)) for level in RiskLevel)
    assert total == len(registry)


def test_get_by_risk_level_rejects_unknown(registry):
    with pytest.raises(InvalidRiskLevelError):
        registry.get_by_risk_level("bogus")
    with pytest.raises(BadRequestError):
        registry.get_by_risk_level("CRITICAL")


def test_summary_matches_external_aggregation(registry):
    records = registry.get_all()
    summary = registry.get_summary()
    assert summary.total_hospitals == len(records)
    assert summary.average_fragility_score == sum(r.fragility_score for r in records) / len(records)
    assert summary.average_occupancy == sum(r.occupancy_rate for r in records) / len(records)
    assert summary.total_bed_capacity == sum(r.total_beds for r in records)
    assert summary.critical_hospitals == len(registry.get_by_risk_level("critical"))
    assert summary.high_risk_hospitals == len(registry.get_by_risk_level("high"))
    assert summarize(records) == summary


def test_empty_registry_summary_is_zero():
    summary = HospitalRegistry.build([]).get_summary()
    assert summary == SummaryRecord()
    assert summary.average_fragility_score == 0.0
    assert summary.average_occupancy == 0.0


def test_duplicate_ids_keep_first(make_raw):
    registry = HospitalRegistry.build([make_raw(1, NAME="First"), make_raw(1, NAME="Second")])
    assert len(registry) == 1
    assert registry.get_by_id("wa-001").name == "First"


def test_rebuild_is_identical(raw_dataset):
    first = HospitalRegistry.build(raw_dataset).get_all()
    second = HospitalRegistry.build(raw_dataset).get_all()
    assert [r.model_dump_json() for r in first] == [r.model_dump_json() for r in second]


def test_get_detail(registry):
    detail = registry.get_detail("wa-003")
    assert detail.id == "wa-003"
    assert detail.address == "3 Main St, Tacoma, WA 98101"


def test_get_detail_errors(registry):
    with pytest.raises(MissingParameterError):
        registry.get_detail(None)
    with pytest.raises(MissingParameterError):
        registry.get_detail("  ")
    with pytest.raises(HospitalNotFoundError):
        registry.get_detail("wa-999")


def test_detail_is_computed_fresh(registry):
    assert registry.get_detail("wa-001") is not registry.get_detail("wa-001")
    assert registry.get_detail("wa-001") == registry.get_detail("wa-001")


def test_sort_hospitals(registry):
    records = registry.get_all()
    by_fragility = sort_hospitals(records)
    scores = [r.fragility_score for r in by_fragility]
    assert scores == sorted(scores, reverse=True)

    by_beds = sort_hospitals(records, key="totalBeds", ascending=True)
    assert [r.total_beds for r in by_beds] == [20, 30, 90, 250, 550]

    by_name = sort_hospitals(records, key="name", ascending=True)
    assert by_name[0].name == "Clinic Annex"

    by_risk = sort_hospitals(records, key="riskLevel")
    assert by_risk[0].risk_level.severity >= by_risk[-1].risk_level.severity

    with pytest.raises(InvalidSortKeyError):
        sort_hospitals(records, key="bogus")
