"""Reproducible pseudo-random draws for synthesizing demo sub-metrics.

Not a statistical PRNG: the sine-hash formula is kept so that values match
the demo dataset published with the dashboard.
"""

from __future__ import annotations

import math
from enum import IntEnum


class SeedField(IntEnum):
    """Seed multiplier per synthesized field.

    Each field draws from ``object_id * multiplier``; two fields sharing a
    multiplier would be perfectly correlated, so new fields take the next
    unused value.
    """

    CAPACITY_UTILIZATION = 1
    STAFFING_LEVEL = 2
    EQUIPMENT_CONDITION = 3
    SUPPLY_CHAIN_RESILIENCE = 4
    INFRASTRUCTURE_AGE = 5
    OCCUPANCY_RATE = 6
    VULNERABILITY_JITTER = 7
    DISASTER_READINESS = 8
    OWNERSHIP_NONPROFIT = 10
    OWNERSHIP_PUBLIC = 11
    YEAR_ESTABLISHED = 12
    STAFF_COUNT = 13
    DOCTOR_COUNT = 14
    NURSE_COUNT = 15


def seeded_value(seed: int) -> float:
    x = math.sin(seed * 9999) * 10000
    return x - math.floor(x)


def field_value(object_id: int, field: SeedField) -> float:
    return seeded_value(object_id * int(field))
