"""
Process configuration read from environment variables.

A local `.env` is loaded first (without overriding real env vars), then each
helper reads its variable on demand. Values are read once at startup by
`api/main.py`; there is no hot-reload.
"""

from __future__ import annotations

import os
from pathlib import Path
from urllib.parse import quote

from dotenv import load_dotenv

from . import db

REPO_ROOT = Path(__file__).resolve().parents[2]

DEFAULT_PORT = 8000


def load_env() -> None:
    load_dotenv(override=False)


def _getenv(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def database_url() -> str:
    """
    DSN for the store.

    `DATABASE_URL` wins when set; otherwise it is composed from
    DB_HOST / DB_PORT / DB_USER / DB_PASSWORD / DB_NAME.
    """
    url = os.environ.get("DATABASE_URL", "").strip()
    if url:
        return db.sanitize_database_url(url)

    host = _getenv("DB_HOST", "localhost")
    port = _env_int("DB_PORT", 5432)
    user = quote(_getenv("DB_USER"), safe="")
    password = quote(_getenv("DB_PASSWORD"), safe="")
    name = quote(_getenv("DB_NAME"), safe="")

    credentials = user
    if password:
        credentials = f"{user}:{password}"
    if credentials:
        credentials += "@"
    return f"postgresql://{credentials}{host}:{port}/{name}"


def db_pool_max_size() -> int:
    return max(1, _env_int("DB_POOL_MAX_SIZE", 5))


def db_command_timeout() -> float:
    # asyncpg rejects non-positive timeouts when the pool is created.
    value = _env_float("DB_COMMAND_TIMEOUT", 30.0)
    return value if value > 0 else 30.0


def host() -> str:
    return _getenv("HOST", "0.0.0.0")


def port() -> int:
    return _env_int("PORT", DEFAULT_PORT)


def public_dir() -> Path:
    raw = os.environ.get("PUBLIC_DIR", "").strip()
    if not raw:
        return REPO_ROOT / "public"
    return Path(raw)


def cors_allow_origins() -> list[str]:
    raw = _getenv("CORS_ALLOW_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def log_level() -> str:
    return _getenv("LOG_LEVEL", "INFO").upper()
