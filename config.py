from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from appdirs import user_log_dir
from dotenv import load_dotenv

DEFAULT_API_URL = "http://localhost:3001/api"


def _as_bool(value: str | None) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


def _as_int(value: str | None, default: int) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


def _as_float(value: str | None, default: float) -> float:
    try:
        return float(str(value).strip())
    except (TypeError, ValueError):
        return default


@dataclass
class Settings:
    api_url: str = DEFAULT_API_URL
    log_dir: str = field(default_factory=lambda: user_log_dir("clinic_crm"))
    log_level: str = "INFO"
    detailed_logging: bool = False
    http_timeout: float = 30.0
    search_debounce_ms: int = 300
    default_language: str = "pt-BR"


@lru_cache()
def get_settings() -> Settings:
    dotenv_path = Path(__file__).resolve().parent / ".env"
    load_dotenv(dotenv_path)

    api_url = (
        os.getenv("CRM_API_URL")
        or os.getenv("NEXT_PUBLIC_API_URL")
        or DEFAULT_API_URL
    )
    language = os.getenv("CRM_LANGUAGE", "pt-BR")
    return Settings(
        api_url=api_url.rstrip("/"),
        log_dir=os.getenv("LOG_DIR") or user_log_dir("clinic_crm"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        detailed_logging=_as_bool(os.getenv("DETAILED_LOGGING", "0")),
        http_timeout=_as_float(os.getenv("HTTP_TIMEOUT"), 30.0),
        search_debounce_ms=_as_int(os.getenv("SEARCH_DEBOUNCE_MS"), 300),
        default_language="es" if language == "es" else "pt-BR",
    )
