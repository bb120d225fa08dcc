"""
Request body loading.

Endpoints accept both HTML form posts (urlencoded or multipart) and JSON, so
the body is read manually and validated into a pydantic model.
"""

from __future__ import annotations

import json
from typing import Any, TypeVar

import pydantic
from fastapi import Request

from .errors import ValidationError

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


def _first_error(exc: pydantic.ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request body."
    err = errors[0]
    field = ".".join(str(part) for part in err.get("loc", ())) or "body"
    return f"{field}: {err.get('msg', 'invalid value')}"


async def _raw_body(request: Request) -> dict[str, Any]:
    content_type = request.headers.get("content-type", "").lower()
    if "application/json" in content_type:
        raw = await request.body()
        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except ValueError as exc:
            raise ValidationError("Request body is not valid JSON.") from exc
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object.")
        return data

    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


async def read_payload(request: Request, model: type[ModelT]) -> ModelT:
    data = await _raw_body(request)
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as exc:
        raise ValidationError(_first_error(exc)) from exc
