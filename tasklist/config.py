"""Settings loaded from environment variables (+ optional .env).

One Settings object for the whole app. Command-line flags override
individual fields via ``Settings.with_overrides``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKLIST"

DEFAULT_API_BASE_URL = "https://api-tasks-list.onrender.com"
DEFAULT_REQUEST_TIMEOUT = 30.0


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v.strip()


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
    api_base_url: str
    request_timeout: float
    log_level: str
    log_dir: Path

    @staticmethod
    def from_env(load_env_file: bool = True) -> "Settings":
        if load_env_file:
            load_dotenv(override=False)

        timeout = _env_float(_k("REQUEST_TIMEOUT"), DEFAULT_REQUEST_TIMEOUT)
        if timeout <= 0:
            timeout = DEFAULT_REQUEST_TIMEOUT

        return Settings(
            api_base_url=_env(_k("API_BASE_URL"), DEFAULT_API_BASE_URL).rstrip("/"),
            request_timeout=timeout,
            log_level=_env(_k("LOG_LEVEL"), "INFO").upper(),
            log_dir=_env_path(_k("LOG_DIR"), Path(".local/tasklist")),
        )

    def with_overrides(self, **values) -> "Settings":
        """Return a copy with every non-None value applied."""
        changes = {k: v for k, v in values.items() if v is not None}
        return replace(self, **changes)
