from __future__ import annotations

import os
import sys
import traceback


def _bootstrap_path() -> None:
    base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    if base_dir not in sys.path:
        sys.path.insert(0, base_dir)


def main() -> int:
    _bootstrap_path()
    try:
        from src.geo.map_layers import build_map_points
        from src.intelligence.hospital_registry import HospitalRegistry
        from src.intelligence.regional_breakdown import regional_summaries, risk_distribution
        from src.shared.models import RawFacilityRecord

        raw = RawFacilityRecord.from_feature(
            {
                "id": 1,
                "geometry": {"type": "Point", "coordinates": [-122.33, 47.61]},
                "properties": {
                    "OBJECTID": 1,
                    "NAME": "Health Check Hospital",
                    "CITY": "Seattle",
                    "ACUTE": "Yes",
                    "ICU": "Yes",
                    "CAH": "No",
                    "Heli": "No",
                    "Beds_Total": 120,
                    "Beds_Total_ICU": 10,
                    "Beds_Psychiatric": 0,
                },
            }
        )
        registry = HospitalRegistry.build([raw])
        record = registry.get_by_id("wa-001")
        if record is None:
            raise RuntimeError("Projected hospital not found by id.")
        registry.get_summary()
        registry.get_by_risk_level(record.risk_level)
        registry.get_by_country_code("USA")
        registry.get_detail(record.id)
        regional_summaries(registry.get_all())
        risk_distribution(registry.get_all())
        build_map_points(registry.get_all())
    except Exception:
        traceback.print_exc()
        return 1
    print("health_check: ok")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
