# src/todo_client/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing required at import time: every value has a local default.
- Service URLs also accept the unprefixed names used by the deployment
  manifests (NEXT_PUBLIC_*_SERVICE_URL, *_SERVICE_URL).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TODO"

DEFAULT_USER_SERVICE_URL = "http://localhost:8001"
DEFAULT_TODO_SERVICE_URL = "http://localhost:8002"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


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


def _normalize_url(url: str) -> str:
    return url.strip().rstrip("/")


def _normalize_path(path: str) -> str:
    path = path.strip()
    if path and not path.startswith("/"):
        path = "/" + path
    return path


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Remote services ----
    user_service_url: str
    todo_service_url: str
    user_me_path: str
    http_timeout_seconds: float | None

    # ---- Console ----
    confirm_alerts: bool

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    session_db_path: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "DevOps Todo App").strip() or "DevOps Todo App"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        user_service_url = _first_env(
            _k("USER_SERVICE_URL"),
            "NEXT_PUBLIC_USER_SERVICE_URL",
            "USER_SERVICE_URL",
            default=DEFAULT_USER_SERVICE_URL,
        ) or DEFAULT_USER_SERVICE_URL
        todo_service_url = _first_env(
            _k("TODO_SERVICE_URL"),
            "NEXT_PUBLIC_TODO_SERVICE_URL",
            "TODO_SERVICE_URL",
            default=DEFAULT_TODO_SERVICE_URL,
        ) or DEFAULT_TODO_SERVICE_URL

        # Empty => the identity service has no "current user" endpoint.
        user_me_path = _normalize_path(_env(_k("USER_ME_PATH"), ""))

        # 0 (or negative) disables the client-side timeout entirely.
        timeout = _env_float(_k("HTTP_TIMEOUT_SECONDS"), 30.0)
        http_timeout_seconds = timeout if timeout > 0 else None

        confirm_alerts = _env_bool(_k("CONFIRM_ALERTS"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/todo"))
        session_db_path = _env_path(_k("SESSION_DB_PATH"), data_dir / "session.sqlite3")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            user_service_url=_normalize_url(user_service_url),
            todo_service_url=_normalize_url(todo_service_url),
            user_me_path=user_me_path,
            http_timeout_seconds=http_timeout_seconds,
            confirm_alerts=confirm_alerts,
            data_dir=data_dir,
            session_db_path=session_db_path,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, reading the environment on first use."""
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
