"""
Favoriting business logic.

Toggle flow (one transaction):
- take an advisory lock on the (product, user) pair
- if a favorite row exists, delete it -> not favorited
- otherwise insert it -> favorited
"""

from __future__ import annotations

from core.db import Database
from core.errors import ValidationError

from . import repository, schemas

INCOMPLETE_MESSAGE = "Produto e usuário são obrigatórios."


def validate_toggle(payload: schemas.ToggleFavoriteRequest) -> tuple[int, int]:
    if not payload.product_id or not payload.user_id:
        raise ValidationError(INCOMPLETE_MESSAGE)
    return int(payload.product_id), int(payload.user_id)


async def toggle_favorite(db: Database, payload: schemas.ToggleFavoriteRequest) -> bool:
    """
    Flip the favorite state of the pair and return the new state.
    """
    product_id, user_id = validate_toggle(payload)

    async with db.transaction() as tx:
        await repository.lock_favorite_pair(tx, product_id=product_id, user_id=user_id)
        existing = await repository.find_favorite(tx, product_id=product_id, user_id=user_id)
        if existing:
            await repository.delete_favorite(tx, product_id=product_id, user_id=user_id)
            return False

        await repository.insert_favorite(tx, product_id=product_id, user_id=user_id)
        return True
