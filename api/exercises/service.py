"""
Exercise business logic.

Scope:
- add an exercise to an existing user
- read a user's log with optional date range and limit
"""

from __future__ import annotations

import logging
from datetime import datetime

from core import dates
from core.db import Database
from core.errors import StorageError, ValidationError
from users import service as user_service

from . import repository, schemas

logger = logging.getLogger(__name__)


def _parse_date(raw: str | None, *, field: str, strict: bool) -> datetime | None:
    if raw is None or not raw.strip():
        return None
    try:
        return dates.parse_date(raw)
    except ValueError as exc:
        # Lenient mode mirrors storage rejecting an invalid timestamp.
        error_cls = ValidationError if strict else StorageError
        raise error_cls(f"{field}: invalid date {raw!r}.") from exc


def _to_log_entry(row: dict) -> schemas.LogEntry:
    return schemas.LogEntry(
        description=str(row["description"]),
        duration=int(row["duration"]),
        date=dates.format_date(row["date"]),
    )


async def add_exercise(
    db: Database,
    user_id: str,
    payload: schemas.CreateExerciseRequest,
    *,
    strict: bool = False,
) -> schemas.ExerciseResponse:
    user_row = await user_service.get_user(db, user_id)

    if strict:
        if not (payload.description or "").strip():
            raise ValidationError("description is required.")
        if payload.duration is None:
            raise ValidationError("duration is required.")

    date = _parse_date(payload.date, field="date", strict=strict) or dates.utc_now()

    row = await repository.create_exercise(
        db,
        user_id=str(user_row["id"]),
        description=payload.description,
        duration=payload.duration,
        date=date,
    )
    logger.info("exercise_created id=%s user_id=%s", row["id"], user_row["id"])

    return schemas.ExerciseResponse(
        id=str(user_row["id"]),
        username=str(user_row["username"]),
        description=str(row["description"]),
        duration=int(row["duration"]),
        date=dates.format_date(row["date"]),
    )


async def exercise_log(
    db: Database,
    user_id: str,
    *,
    date_from: str | None = None,
    date_to: str | None = None,
    limit: str | None = None,
    strict: bool = False,
) -> schemas.ExerciseLogResponse:
    user_row = await user_service.get_user(db, user_id)

    rows = await repository.list_exercises(
        db,
        str(user_row["id"]),
        date_from=_parse_date(date_from, field="from", strict=strict),
        date_to=_parse_date(date_to, field="to", strict=strict),
        limit=dates.parse_limit(limit),
    )
    log = [_to_log_entry(row) for row in rows]
    return schemas.ExerciseLogResponse(
        id=str(user_row["id"]),
        username=str(user_row["username"]),
        count=len(log),
        log=log,
    )
