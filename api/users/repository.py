"""
User persistence (raw SQL).
"""

from __future__ import annotations

from core.db import Database
from core.errors import StorageError


async def create_user(db: Database, *, username: str | None) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO users (username)
        VALUES ($1)
        RETURNING id, username
        """,
        username,
    )
    if row is None:
        raise StorageError("Failed to create user.")
    return row


async def list_users(db: Database) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT id, username
        FROM users
        """
    )


async def get_user_by_id(db: Database, user_id: str) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, username
        FROM users
        WHERE id = $1
        """,
        user_id,
    )
