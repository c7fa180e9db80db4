# src/todo_browser/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is read from the network or disk at import time except .env.
- Malformed values fall back to defaults instead of crashing the CLI.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ENV_PREFIX = "TODO_BROWSER"

DEFAULT_API_BASE_URL = "https://jsonplaceholder.typicode.com"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
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

    # ---- Upstream API ----
    api_base_url: str
    http_timeout_seconds: float
    use_cache: bool

    # ---- Console ----
    list_limit: int

    # ---- Demo data ----
    demo_seed: Optional[int]

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "todo-browser").strip() or "todo-browser"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/todo_browser"))

        api_base_url = _env(_k("API_BASE_URL"), DEFAULT_API_BASE_URL).strip().rstrip("/")
        if not api_base_url:
            api_base_url = DEFAULT_API_BASE_URL

        http_timeout_seconds = _env_float(_k("HTTP_TIMEOUT_SECONDS"), 10.0)
        if http_timeout_seconds <= 0:
            http_timeout_seconds = 10.0

        use_cache = _env_bool(_k("USE_CACHE"), True)

        list_limit = _env_int(_k("LIST_LIMIT"), 50)
        if list_limit <= 0:
            list_limit = 50

        demo_seed = _env_optional_int(_k("DEMO_SEED"))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            api_base_url=api_base_url,
            http_timeout_seconds=http_timeout_seconds,
            use_cache=use_cache,
            list_limit=list_limit,
            demo_seed=demo_seed,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, reading .env and the environment on first use."""
    global _SETTINGS
    if _SETTINGS is None:
        load_dotenv(override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS
