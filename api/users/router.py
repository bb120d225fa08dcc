"""
User API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from core.config import Settings, get_settings
from core.db import Database, get_db
from core.payload import read_payload

from . import schemas, service

router = APIRouter(prefix="/api/users")


@router.post("")
async def create_user(
    request: Request,
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> schemas.UserResponse:
    payload = await read_payload(request, schemas.CreateUserRequest)
    return await service.create_user(db, payload, strict=settings.strict_validation)


@router.get("")
async def list_users(db: Database = Depends(get_db)) -> list[schemas.UserResponse]:
    return await service.list_users(db)
