"""
Exercise persistence (raw SQL).

The log query is assembled from optional filters; see `build_log_query`.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from core.db import Database
from core.errors import StorageError


def build_log_query(
    user_id: str,
    *,
    date_from: datetime | None = None,
    date_to: datetime | None = None,
    limit: int | None = None,
) -> tuple[str, list[Any]]:
    """
    Build the SELECT for a user's exercise log.

    Both date bounds are inclusive. No ORDER BY: rows come back in storage order,
    and `limit` keeps the first N of them.
    """
    args: list[Any] = [user_id]
    conditions = ["user_id = $1"]

    if date_from is not None:
        args.append(date_from)
        conditions.append(f"date >= ${len(args)}")
    if date_to is not None:
        args.append(date_to)
        conditions.append(f"date <= ${len(args)}")

    sql = (
        "SELECT id, user_id, description, duration, date\n"
        "FROM exercises\n"
        "WHERE " + "\n  AND ".join(conditions)
    )
    if limit is not None:
        args.append(limit)
        sql += f"\nLIMIT ${len(args)}"
    return sql, args


async def create_exercise(
    db: Database,
    *,
    user_id: str,
    description: str | None,
    duration: int | None,
    date: datetime,
) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO exercises (user_id, description, duration, date)
        VALUES ($1, $2, $3, $4)
        RETURNING id, user_id, description, duration, date
        """,
        user_id,
        description,
        duration,
        date,
    )
    if row is None:
        raise StorageError("Failed to create exercise.")
    return row


async def list_exercises(
    db: Database,
    user_id: str,
    *,
    date_from: datetime | None = None,
    date_to: datetime | None = None,
    limit: int | None = None,
) -> list[dict]:
    sql, args = build_log_query(user_id, date_from=date_from, date_to=date_to, limit=limit)
    return await db.fetch_all(sql, *args)
