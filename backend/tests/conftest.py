"""Pytest fixtures for hospital fragility tests (scoring, projection, queries, api)."""
import sys
from pathlib import Path

import pytest

# Ensure backend is on path
backend_dir = Path(__file__).resolve().parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

from src.shared.models import RawFacilityRecord  # noqa: E402

SAMPLE_DATA_PATH = backend_dir / "data" / "wa_hospitals_sample.geojson"


def _feature(object_id=1, longitude=-122.33, latitude=47.61, **properties):
    base = {
        "OBJECTID": object_id,
        "NAME": f"Hospital {object_id}",
        "ADDRESS": f"{object_id} Main St",
        "CITY": "Seattle",
        "ZIP": "98101",
        "PHONE": "206-555-0100",
        "ACUTE": "Yes",
        "ICU": "Yes",
        "CAH": "No",
        "Heli": "No",
        "Weblink": "",
        "Beds_Total": 120,
        "Beds_Total_ICU": 10,
        "Beds_Psychiatric": 0,
        "Updated": "2024-02-01",
    }
    base.update(properties)
    return {
        "type": "Feature",
        "id": object_id,
        "geometry": {"type": "Point", "coordinates": [longitude, latitude]},
        "properties": base,
    }


@pytest.fixture
def make_feature():
    return _feature


@pytest.fixture
def make_raw():
    def factory(object_id=1, **properties):
        return RawFacilityRecord.from_feature(_feature(object_id, **properties))

    return factory


@pytest.fixture
def raw_dataset(make_raw):
    return [
        make_raw(1, NAME="Large Trauma Center", Beds_Total=550, Beds_Total_ICU=40, Heli="Yes"),
        make_raw(2, NAME="Rural Psych Unit", CITY="Spokane", Beds_Total=30, Beds_Total_ICU=0,
                 ACUTE="No", ICU="No", CAH="Yes", Beds_Psychiatric=30),
        make_raw(3, NAME="Community Hospital", CITY="Tacoma", Beds_Total=90, Beds_Total_ICU=4),
        make_raw(4, NAME="Regional Medical", CITY="Yakima", Beds_Total=250, Beds_Total_ICU=20),
        make_raw(5, NAME="Clinic Annex", CITY="Forks", Beds_Total=20, Beds_Total_ICU=0,
                 ACUTE="No", ICU="No", CAH="Yes"),
    ]


@pytest.fixture
def sample_data_path():
    return SAMPLE_DATA_PATH
