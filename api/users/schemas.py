"""
User API schemas (request/response models).
"""

from __future__ import annotations

from pydantic import BaseModel


class CreateUserRequest(BaseModel):
    # Optional on purpose: presence is checked only in strict mode.
    username: str | None = None


class UserResponse(BaseModel):
    id: str
    username: str
