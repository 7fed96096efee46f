from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

BACKEND_DIR = Path(__file__).resolve().parents[1]
DEFAULT_DATA_PATH = BACKEND_DIR / "data" / "wa_hospitals_sample.geojson"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_settings: Optional["Settings"] = None
_logging_configured = False


@dataclass(frozen=True)
class Settings:
    data_path: Path
    api_host: str
    api_port: int
    log_level: str
    cors_origins: Tuple[str, ...]


def _resolve_data_path() -> Tuple[Path, bool]:
    env_value = os.getenv("HOSPITAL_DATA_PATH", "").strip()
    if env_value:
        return Path(env_value), True
    return DEFAULT_DATA_PATH, False


def _parse_origins(raw: str) -> Tuple[str, ...]:
    origins = tuple(part.strip() for part in raw.split(",") if part.strip())
    return origins or ("*",)


def load_settings(env_file: Optional[Path] = None) -> Settings:
    load_dotenv(env_file or BACKEND_DIR / ".env", override=False)
    data_path, env_set = _resolve_data_path()
    settings = Settings(
        data_path=data_path,
        api_host=os.getenv("API_HOST", "0.0.0.0").strip() or "0.0.0.0",
        api_port=int(os.getenv("API_PORT", "5000")),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        cors_origins=_parse_origins(os.getenv("CORS_ORIGINS", "*")),
    )
    logger.info(
        "Settings: data_path=%s data_path_env_set=%s",
        settings.data_path,
        "true" if env_set else "false",
    )
    return settings


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def configure_logging(level: Optional[str] = None) -> None:
    global _logging_configured
    if _logging_configured:
        return
    _logging_configured = True
    logging.basicConfig(level=(level or get_settings().log_level), format=LOG_FORMAT)
