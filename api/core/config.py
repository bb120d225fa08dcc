"""
Application settings read from environment variables.

A `.env` file next to the project root is loaded first (python-dotenv), so
local development only needs that file.

Database connection:
- DATABASE_URL wins when set.
- Otherwise DB_HOST / DB_PORT / DB_NAME / DB_USER / DB_PASS are combined.
  None of these has a default; missing ones fail at startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

from dotenv import load_dotenv
from fastapi import Request

PROJECT_ROOT = Path(__file__).resolve().parents[2]

DEFAULT_PORT = 3000


def _env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "y", "on"}


def _sanitize_database_url(url: str) -> str:
    # asyncpg rejects libpq's `sslmode`; SSL is passed separately.
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


@dataclass(frozen=True)
class Settings:
    database_url: str
    db_ssl: str = "require"
    db_pool_min: int = 1
    db_pool_max: int = 5
    db_command_timeout: float = 30.0
    db_sync_schema: bool = True
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    strict_validation: bool = False
    cors_origins: tuple[str, ...] = ("*",)

    @property
    def ssl(self) -> str | bool:
        """
        Value for asyncpg's `ssl` argument.

        "require" encrypts without verifying the server certificate.
        """
        return False if self.db_ssl == "disable" else self.db_ssl


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if url:
        return _sanitize_database_url(url)

    required = ("DB_HOST", "DB_PORT", "DB_NAME", "DB_USER", "DB_PASS")
    values = {name: os.environ.get(name, "").strip() for name in required}
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise RuntimeError(f"Database is not configured. Missing: {', '.join(missing)}.")

    user = quote(values["DB_USER"], safe="")
    password = quote(values["DB_PASS"], safe="")
    return (
        f"postgresql://{user}:{password}@{values['DB_HOST']}:{values['DB_PORT']}"
        f"/{values['DB_NAME']}"
    )


def _cors_origins() -> tuple[str, ...]:
    raw = os.environ.get("CORS_ORIGINS", "").strip()
    if not raw:
        return ("*",)
    return tuple(origin.strip() for origin in raw.split(",") if origin.strip())


def load_settings(*, env_file: Path | None = None) -> Settings:
    load_dotenv(env_file or PROJECT_ROOT / ".env")

    db_ssl = _env_str("DB_SSL", "require").lower()
    if db_ssl not in {"require", "disable"}:
        raise RuntimeError("DB_SSL must be 'require' or 'disable'.")

    return Settings(
        database_url=database_url(),
        db_ssl=db_ssl,
        db_pool_min=_env_int("DB_POOL_MIN", 1),
        db_pool_max=_env_int("DB_POOL_MAX", 5),
        db_command_timeout=float(_env_int("DB_COMMAND_TIMEOUT", 30)),
        db_sync_schema=_env_bool("DB_SYNC_SCHEMA", True),
        host=_env_str("HOST", "0.0.0.0"),
        port=_env_int("PORT", DEFAULT_PORT),
        log_level=_env_str("LOG_LEVEL", "INFO").upper(),
        strict_validation=_env_bool("STRICT_VALIDATION", False),
        cors_origins=_cors_origins(),
    )


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
