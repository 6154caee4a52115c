from __future__ import annotations

import os
from pathlib import Path

from dotenv import dotenv_values

# Variables this service reads. Anything else in a `.env` file is ignored.
SERVICE_ENV_KEYS: tuple[str, ...] = (
    "OMDB_API_KEY",
    "OMDB_API_BASE_URL",
    "SUPABASE_URL",
    "SUPABASE_SERVICE_ROLE_KEY",
    "PORT",
    "CORS_ALLOW_ORIGINS",
)


def find_env_file() -> Path | None:
    repo_root = Path(__file__).resolve().parents[2]
    for path in (repo_root / ".env", Path.cwd() / ".env"):
        if path.is_file():
            return path
    return None


def load_env(*, override: bool = False, path: Path | None = None) -> dict[str, str]:
    """
    Copy the service's settings from a `.env` file into `os.environ`.

    Only `SERVICE_ENV_KEYS` are applied, and empty values are skipped so a
    blank template line never masks a real environment variable. Returns the
    values that were applied.
    """

    env_path = path or find_env_file()
    if env_path is None:
        return {}
    values = dotenv_values(env_path)
    applied: dict[str, str] = {}
    for key in SERVICE_ENV_KEYS:
        value = values.get(key)
        if not value:
            continue
        if override or key not in os.environ:
            os.environ[key] = value
            applied[key] = value
    return applied


def env_str(name: str, default: str | None = None) -> str | None:
    value = (os.getenv(name) or "").strip()
    return value or default
