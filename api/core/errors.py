"""
Error types shared by every feature package.

Each error knows its HTTP status; `main.py` renders all of them as
`{"error": message}`. They are kept apart from `HTTPException` because
that one renders as `{"detail": ...}`, and storage code has no HTTP context.
"""

from __future__ import annotations


class AppError(RuntimeError):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    status_code = 400


class NotFoundError(AppError):
    status_code = 404


# Raised by the Database wrapper for any asyncpg / connection failure.
class StorageError(AppError):
    status_code = 500
