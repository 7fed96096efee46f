import pytest

from src.geo.map_layers import (
    DARK_RED,
    GREEN,
    ORANGE,
    RED,
    YELLOW,
    build_map_points,
    fragility_color,
    marker_radius,
    occupancy_color,
)
from src.intelligence.hospital_registry import HospitalRegistry
from src.shared.errors import InvalidColorModeError
from src.shared.formatting import format_number, format_percent


@pytest.mark.parametrize(
    "score, color", [(0.1, GREEN), (0.39, GREEN), (0.4, ORANGE), (0.59, ORANGE), (0.6, RED), (0.8, RED)]
)
def test_fragility_color(score, color):
    assert fragility_color(score) == color


@pytest.mark.parametrize(
    "rate, color",
    [(0.7, GREEN), (0.8, YELLOW), (0.85, ORANGE), (0.9, RED), (0.95, DARK_RED)],
)
def test_occupancy_color(rate, color):
    assert occupancy_color(rate) == color


@pytest.mark.parametrize("beds, radius", [(0, 7), (99, 7), (100, 9), (200, 12), (499, 12), (500, 16)])
def test_marker_radius(beds, radius):
    assert marker_radius(beds) == radius


def test_build_map_points_by_risk(raw_dataset):
    records = HospitalRegistry.build(raw_dataset).get_all()
    points = build_map_points(records, color_by="riskLevel")
    by_id = {point.id: point for point in points}
    assert len(points) == len(records)
    assert by_id["wa-001"].color == GREEN
    assert by_id["wa-001"].radius == 16
    assert by_id["wa-002"].color == RED
    assert by_id["wa-002"].radius == 7


def test_build_map_points_rejects_unknown_mode(raw_dataset):
    records = HospitalRegistry.build(raw_dataset).get_all()
    with pytest.raises(InvalidColorModeError):
        build_map_points(records, color_by="beds")


def test_formatting_helpers():
    assert format_number(1_240_000) == "1.2M"
    assert format_number(3_400) == "3.4K"
    assert format_number(12) == "12"
    assert format_percent(0.456) == "46%"
    assert format_percent(0.1) == "10%"
