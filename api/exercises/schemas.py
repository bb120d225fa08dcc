"""
Exercise API schemas (request/response models).
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator


class CreateExerciseRequest(BaseModel):
    description: str | None = None
    duration: int | None = None
    date: str | None = None

    @field_validator("duration", "date", mode="before")
    @classmethod
    def _blank_is_missing(cls, value):
        # HTML forms send empty inputs as "".
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ExerciseResponse(BaseModel):
    # `id` is the owning user's id, not the exercise's.
    id: str
    username: str
    description: str
    duration: int
    date: str


class LogEntry(BaseModel):
    description: str
    duration: int
    date: str


class ExerciseLogResponse(BaseModel):
    id: str
    username: str
    count: int
    log: list[LogEntry]
