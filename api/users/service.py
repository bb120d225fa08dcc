"""
User business logic.
"""

from __future__ import annotations

import logging
import uuid

from core.db import Database
from core.errors import NotFoundError, ValidationError

from . import repository, schemas

logger = logging.getLogger(__name__)


def _to_user_response(user_row: dict) -> schemas.UserResponse:
    return schemas.UserResponse(
        id=str(user_row["id"]),
        username=str(user_row["username"]),
    )


def is_valid_user_id(user_id: str) -> bool:
    try:
        uuid.UUID(str(user_id))
    except ValueError:
        return False
    return True


async def create_user(
    db: Database,
    payload: schemas.CreateUserRequest,
    *,
    strict: bool = False,
) -> schemas.UserResponse:
    if strict and not (payload.username or "").strip():
        raise ValidationError("username is required.")

    # Lenient mode hands a missing username to storage; NOT NULL rejects it.
    user_row = await repository.create_user(db, username=payload.username)
    logger.info("user_created id=%s", user_row["id"])
    return _to_user_response(user_row)


async def list_users(db: Database) -> list[schemas.UserResponse]:
    rows = await repository.list_users(db)
    return [_to_user_response(row) for row in rows]


async def get_user(db: Database, user_id: str) -> dict:
    """
    Return the user row or raise NotFoundError.

    A malformed id cannot match any row, so it is reported the same way.
    """
    if not is_valid_user_id(user_id):
        raise NotFoundError("User not found")

    user_row = await repository.get_user_by_id(db, user_id)
    if user_row is None:
        raise NotFoundError("User not found")
    return user_row
