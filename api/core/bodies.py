"""
Hand-parsed JSON request bodies.

Routes that must answer a missing, malformed or wrongly typed body with their
own error shape (instead of FastAPI's 422) read the body through here.
"""

from __future__ import annotations

from typing import TypeVar

import pydantic
from fastapi import Request

from .errors import ValidationError

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


async def parse_json_object(request: Request, model: type[ModelT], *, message: str) -> ModelT:
    # Empty bodies, form posts and broken JSON all fail json() with ValueError.
    try:
        data = await request.json()
    except ValueError as exc:
        raise ValidationError(message) from exc
    if not isinstance(data, dict):
        raise ValidationError(message)
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as exc:
        raise ValidationError(message) from exc
