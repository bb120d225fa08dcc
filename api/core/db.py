"""
Async database access (raw SQL) using asyncpg.

`Database` owns the connection pool. `main.py` creates one per application,
opens it in the lifespan handler and stores it on `app.state.db`; routes get
it through the `get_db` dependency.

Every asyncpg / connection failure is re-raised as `StorageError` so routes
can answer with a uniform 500 body.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import asyncpg
from fastapi import Request

from .errors import StorageError

logger = logging.getLogger(__name__)

# gen_random_uuid() is built in from PostgreSQL 13.
SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS users (
  id uuid PRIMARY KEY DEFAULT gen_random_uuid(),
  username text NOT NULL,
  created_at timestamptz NOT NULL DEFAULT now(),
  updated_at timestamptz NOT NULL DEFAULT now()
);

CREATE TABLE IF NOT EXISTS exercises (
  id uuid PRIMARY KEY DEFAULT gen_random_uuid(),
  user_id uuid NOT NULL REFERENCES users (id),
  description text NOT NULL,
  duration integer NOT NULL,
  date timestamptz NOT NULL DEFAULT now(),
  created_at timestamptz NOT NULL DEFAULT now(),
  updated_at timestamptz NOT NULL DEFAULT now()
);

CREATE INDEX IF NOT EXISTS exercises_user_id_date_idx ON exercises (user_id, date);
"""

_STORAGE_ERRORS = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)


class Database:
    def __init__(
        self,
        dsn: str,
        *,
        ssl: str | bool = "require",
        min_size: int = 1,
        max_size: int = 5,
        command_timeout: float = 30.0,
    ) -> None:
        self._dsn = dsn
        self._ssl = ssl
        self._min_size = min_size
        self._max_size = max_size
        self._command_timeout = command_timeout
        self._pool: asyncpg.Pool | None = None

    @property
    def is_connected(self) -> bool:
        return self._pool is not None

    async def init_pool(self) -> None:
        if self._pool is not None:
            return None
        try:
            self._pool = await asyncpg.create_pool(
                dsn=self._dsn,
                ssl=self._ssl,
                min_size=self._min_size,
                max_size=self._max_size,
                command_timeout=self._command_timeout,
            )
        except _STORAGE_ERRORS as exc:
            logger.exception("database_connect_failed")
            raise StorageError(str(exc)) from exc
        logger.info("Database connected")

    async def close_pool(self) -> None:
        if self._pool is None:
            return None
        await self._pool.close()
        self._pool = None

    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise StorageError("DB pool is not initialized. Call init_pool() on startup.")
        return self._pool

    async def ensure_schema(self) -> None:
        """
        Create tables and indexes if they are missing. Safe to run on every start.
        """
        await self.execute(SCHEMA_SQL)
        logger.info("Database schema ensured")

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        try:
            row = await self.pool().fetchrow(sql, *args)
        except _STORAGE_ERRORS as exc:
            logger.exception("query_failed")
            raise StorageError(str(exc)) from exc
        return dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        try:
            rows = await self.pool().fetch(sql, *args)
        except _STORAGE_ERRORS as exc:
            logger.exception("query_failed")
            raise StorageError(str(exc)) from exc
        return [dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> None:
        """
        Run a statement (INSERT/UPDATE/DELETE/DDL). No result returned.
        """
        try:
            await self.pool().execute(sql, *args)
        except _STORAGE_ERRORS as exc:
            logger.exception("statement_failed")
            raise StorageError(str(exc)) from exc


def get_db(request: Request) -> Database:
    return request.app.state.db
