# src/deskmate/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time (the offline LLM client covers that case).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

ENV_PREFIX = "DESKMATE"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except Exception:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


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


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [p.strip() for p in raw.replace(",", " ").split() if p.strip()]


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

    # ---- Connector flags ----
    console_enabled: bool

    # ---- LLM (OpenAI-compatible endpoint, Groq by default) ----
    llm_api_key: Optional[str]
    llm_base_url: str
    llm_models: List[str]
    llm_temperature: float

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    tasks_db_path: Path

    # ---- OS notifications ----
    notify_enabled: bool
    notify_timeout_seconds: int
    notify_title: str

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "deskmate") or "deskmate"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        # GROQ_API_KEY is what the hosted endpoint's own docs tell people to export.
        llm_api_key = _first_env(_k("LLM_API_KEY"), "GROQ_API_KEY", default=None)
        llm_base_url = _env(_k("LLM_BASE_URL"), "https://api.groq.com/openai/v1")
        llm_models = _env_list(_k("LLM_MODELS"), ["openai/gpt-oss-20b"])
        llm_temperature = _env_float(_k("LLM_TEMPERATURE"), 0.1)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/deskmate"))
        tasks_db_path = _env_path(_k("TASKS_DB_PATH"), data_dir / "tasks.sqlite3")

        notify_enabled = _env_bool(_k("NOTIFY_ENABLED"), True)
        notify_timeout_seconds = _env_int(_k("NOTIFY_TIMEOUT_SECONDS"), 10)
        notify_title = _env(_k("NOTIFY_TITLE"), "Desktop Agent Reminder")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            llm_api_key=llm_api_key,
            llm_base_url=llm_base_url,
            llm_models=llm_models,
            llm_temperature=llm_temperature,
            data_dir=data_dir,
            tasks_db_path=tasks_db_path,
            notify_enabled=notify_enabled,
            notify_timeout_seconds=notify_timeout_seconds,
            notify_title=notify_title,
        )


SETTINGS = Settings.from_env()

# ---- Optional local overrides (never committed) ----
# Prefer .env for secrets; use config_local.py only for safe overrides.
try:
    import config_local as _config_local  # type: ignore

    if hasattr(_config_local, "CONSOLE_ENABLED"):
        object.__setattr__(SETTINGS, "console_enabled", bool(_config_local.CONSOLE_ENABLED))  # type: ignore[misc]
    if hasattr(_config_local, "NOTIFY_ENABLED"):
        object.__setattr__(SETTINGS, "notify_enabled", bool(_config_local.NOTIFY_ENABLED))  # type: ignore[misc]
    if hasattr(_config_local, "LLM_MODELS"):
        object.__setattr__(SETTINGS, "llm_models", list(_config_local.LLM_MODELS))  # type: ignore[misc]
except Exception:
    pass


def get_settings() -> Settings:
    return SETTINGS
