#!/usr/bin/env python3
"""Print a plain-text fragility report for a hospital GeoJSON dataset."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

root = Path(__file__).resolve().parent.parent
if str(root) not in sys.path:
    sys.path.insert(0, str(root))

from config.settings import configure_logging, get_settings  # noqa: E402
from src.intelligence.hospital_registry import HospitalRegistry  # noqa: E402
from src.intelligence.regional_breakdown import (  # noqa: E402
    attention_list,
    regional_summaries,
    risk_distribution,
)
from src.shared.formatting import format_number, format_percent  # noqa: E402
from src.supply.facility_loader import load_facility_records  # noqa: E402


def build_report(registry: HospitalRegistry, attention_limit: int = 10) -> str:
    records = registry.get_all()
    summary = registry.get_summary()
    lines: List[str] = [
        "Hospital Fragility Report",
        "=========================",
        f"Total hospitals:   {summary.total_hospitals}",
        f"Avg fragility:     {format_percent(summary.average_fragility_score)}",
        f"Critical risk:     {summary.critical_hospitals}",
        f"High risk:         {summary.high_risk_hospitals}",
        f"Total beds:        {format_number(summary.total_bed_capacity)}",
        f"Avg occupancy:     {format_percent(summary.average_occupancy)}",
        "",
        "Risk distribution",
    ]
    for entry in risk_distribution(records):
        lines.append(
            f"  {entry.risk_level.value:<9} {entry.count:>4}  ({format_percent(entry.share)})"
        )

    lines += ["", "Regions"]
    for region in regional_summaries(records):
        lines.append(
            f"  {region.region:<26} hospitals={region.hospital_count:<4} "
            f"fragility={format_percent(region.average_fragility_score):<5} "
            f"occupancy={format_percent(region.average_occupancy):<5} "
            f"beds={format_number(region.total_beds)}"
        )

    lines += ["", "Hospitals requiring attention"]
    flagged = attention_list(records, limit=attention_limit)
    if not flagged:
        lines.append("  none")
    for record in flagged:
        lines.append(
            f"  {record.id}  {record.name} ({record.city}) "
            f"{record.risk_level.value} {format_percent(record.fragility_score)}"
        )
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--data",
        type=Path,
        default=None,
        help="GeoJSON dataset (defaults to HOSPITAL_DATA_PATH or the bundled sample)",
    )
    parser.add_argument("--limit", type=int, default=10, help="Attention list length")
    args = parser.parse_args(argv)

    configure_logging()
    data_path = args.data or get_settings().data_path
    registry = HospitalRegistry.build(load_facility_records(data_path))
    print(build_report(registry, attention_limit=args.limit))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
