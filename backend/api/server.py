from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterable, List, Optional

from flask import Flask, current_app, jsonify, request
from flask_cors import CORS
from pydantic import BaseModel
from werkzeug.exceptions import HTTPException

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))

from config.settings import configure_logging, get_settings
from src.geo.map_layers import DEFAULT_COLOR_MODE, build_map_points
from src.intelligence.hospital_registry import DEFAULT_SORT_KEY, HospitalRegistry, sort_hospitals
from src.intelligence.regional_breakdown import attention_list, regional_summaries, risk_distribution
from src.shared.errors import BadRequestError, HospitalNotFoundError
from src.supply.facility_loader import load_facility_records

logger = logging.getLogger(__name__)

REGISTRY_KEY = "HOSPITAL_REGISTRY"
SERVICE_NAME = "Hospital Fragility API"


def _dump(items: Iterable[BaseModel]) -> List[dict]:
    return [item.model_dump(mode="json", by_alias=True) for item in items]


def _registry() -> HospitalRegistry:
    return current_app.config[REGISTRY_KEY]


def _parse_limit(raw: Optional[str]) -> Optional[int]:
    if raw is None or raw == "":
        return None
    try:
        limit = int(raw)
    except ValueError as exc:
        raise BadRequestError(f"Invalid limit: {raw!r}") from exc
    if limit < 0:
        raise BadRequestError(f"Invalid limit: {raw!r}")
    return limit


def _parse_order(raw: Optional[str]) -> bool:
    order = (raw or "desc").lower()
    if order not in ("asc", "desc"):
        raise BadRequestError(f"Invalid sort order: {raw!r}")
    return order == "asc"


def create_app(registry: Optional[HospitalRegistry] = None) -> Flask:
    """
    Build the Flask app around a hospital registry.

    When no registry is passed the configured dataset is loaded and projected
    once here; it stays read-only for the life of the process.
    """
    settings = get_settings()
    if registry is None:
        registry = HospitalRegistry.build(load_facility_records(settings.data_path))

    app = Flask(__name__)
    app.config[REGISTRY_KEY] = registry
    CORS(app, origins=list(settings.cors_origins))

    @app.errorhandler(BadRequestError)
    def handle_bad_request(exc: BadRequestError):
        return jsonify({"error": str(exc)}), 400

    @app.errorhandler(HospitalNotFoundError)
    def handle_not_found(exc: HospitalNotFoundError):
        return jsonify({"error": "Hospital not found"}), 404

    @app.errorhandler(Exception)
    def handle_internal_error(exc: Exception):
        if isinstance(exc, HTTPException):
            return jsonify({"error": exc.description}), exc.code
        logger.exception("Unhandled error serving %s", request.path)
        return jsonify({"error": "Internal server error"}), 500

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify(
            {"status": "healthy", "service": SERVICE_NAME, "hospitals": len(_registry())}
        )

    @app.route("/api/hospitals", methods=["GET"])
    def hospitals():
        hospitals_registry = _registry()
        query_type = request.args.get("type")
        iso3 = request.args.get("iso3")
        risk = request.args.get("riskLevel")

        if query_type == "summary":
            return jsonify(hospitals_registry.get_summary().model_dump(mode="json", by_alias=True))
        if query_type == "regions":
            return jsonify(_dump(regional_summaries(hospitals_registry.get_all())))
        if query_type == "distribution":
            return jsonify(_dump(risk_distribution(hospitals_registry.get_all())))
        if query_type == "attention":
            limit = _parse_limit(request.args.get("limit"))
            return jsonify(_dump(attention_list(hospitals_registry.get_all(), limit=limit)))
        if query_type:
            raise BadRequestError(f"Invalid query type: {query_type!r}")

        if iso3:
            records = hospitals_registry.get_by_country_code(iso3)
        elif risk:
            records = hospitals_registry.get_by_risk_level(risk)
        else:
            records = hospitals_registry.get_all()

        sort_key = request.args.get("sort")
        if sort_key or request.args.get("order"):
            records = sort_hospitals(
                records,
                key=sort_key or DEFAULT_SORT_KEY,
                ascending=_parse_order(request.args.get("order")),
            )
        return jsonify(_dump(records))

    @app.route("/api/hospital-detail", methods=["GET"])
    def hospital_detail():
        detail = _registry().get_detail(request.args.get("id"))
        return jsonify(detail.model_dump(mode="json", by_alias=True))

    @app.route("/api/map", methods=["GET"])
    def map_points():
        color_by = request.args.get("colorBy") or DEFAULT_COLOR_MODE
        return jsonify(_dump(build_map_points(_registry().get_all(), color_by=color_by)))

    return app


def main() -> None:
    configure_logging()
    settings = get_settings()
    app = create_app()
    app.run(host=settings.api_host, port=settings.api_port, debug=False)


if __name__ == "__main__":
    main()
