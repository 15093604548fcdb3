# src/prioritask/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is contacted at import time; the API base URL is only read.
- Components receive settings by injection, get_settings() is the default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "PRIORITASK"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_decimal(name: str, default: Decimal) -> Decimal:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return Decimal(raw.strip())
    except InvalidOperation:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path

    # ---- Remote task API ----
    api_base_url: str
    tasks_path: str
    connect_timeout_seconds: float
    read_timeout_seconds: float

    # ---- Presentation ----
    high_cost_threshold: Decimal

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "prioritask").strip() or "prioritask"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/prioritask"))

        # Trailing slash is stripped so paths can always start with "/".
        api_base_url = _env(_k("API_BASE_URL"), "http://localhost:3000").strip().rstrip("/")
        tasks_path = "/" + _env(_k("TASKS_PATH"), "/api/tarefas").strip().strip("/")

        connect_timeout_seconds = _env_float(_k("CONNECT_TIMEOUT_SECONDS"), 5.0)
        read_timeout_seconds = _env_float(_k("READ_TIMEOUT_SECONDS"), 15.0)

        high_cost_threshold = _env_decimal(_k("HIGH_COST_THRESHOLD"), Decimal("1000"))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            api_base_url=api_base_url,
            tasks_path=tasks_path,
            connect_timeout_seconds=connect_timeout_seconds,
            read_timeout_seconds=read_timeout_seconds,
            high_cost_threshold=high_cost_threshold,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
