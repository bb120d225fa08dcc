"""
Exercise API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request

from core.config import Settings, get_settings
from core.db import Database, get_db
from core.payload import read_payload

from . import schemas, service

router = APIRouter(prefix="/api/users/{user_id}")


@router.post("/exercises")
async def add_exercise(
    user_id: str,
    request: Request,
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> schemas.ExerciseResponse:
    payload = await read_payload(request, schemas.CreateExerciseRequest)
    return await service.add_exercise(db, user_id, payload, strict=settings.strict_validation)


@router.get("/logs")
async def exercise_log(
    user_id: str,
    date_from: str | None = Query(default=None, alias="from"),
    date_to: str | None = Query(default=None, alias="to"),
    limit: str | None = None,
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> schemas.ExerciseLogResponse:
    """
    A user's exercises, optionally within [from, to] and capped at `limit`.
    """
    return await service.exercise_log(
        db,
        user_id,
        date_from=date_from,
        date_to=date_to,
        limit=limit,
        strict=settings.strict_validation,
    )
