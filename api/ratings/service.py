"""
Rating business logic.
"""

from __future__ import annotations

from core.db import Executor
from core.errors import ValidationError

from . import repository, schemas

INCOMPLETE_MESSAGE = "Todos os campos são obrigatórios."


def validate_rating(payload: schemas.CreateRatingRequest) -> None:
    # Zero ids, zero stars and empty comments all count as missing.
    required = (payload.stars, payload.comment, payload.product_id, payload.user_id)
    if not all(required):
        raise ValidationError(INCOMPLETE_MESSAGE)


async def create_rating(db: Executor, payload: schemas.CreateRatingRequest) -> None:
    validate_rating(payload)
    await repository.insert_rating(
        db,
        stars=int(payload.stars),
        comment=str(payload.comment),
        product_id=int(payload.product_id),
        user_id=int(payload.user_id),
    )


async def product_ratings(db: Executor, product_id: int) -> list[schemas.RatingResponse]:
    rows = await repository.list_ratings(db, product_id)
    return [
        schemas.RatingResponse(stars=int(row["stars"]), comment=str(row["comment"]))
        for row in rows
    ]


async def remove_rating(db: Executor, rating_id: int) -> bool:
    return await repository.delete_rating(db, rating_id) > 0
