"""
Rating persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core.db import Executor

INSERT_RATING = """
    INSERT INTO avaliacao (estrelas, comentario, produto_id, usuario_id, data_criacao)
    VALUES ($1, $2, $3, $4, now())
"""

SELECT_RATINGS_BY_PRODUCT = """
    SELECT estrelas AS stars, comentario AS comment
    FROM avaliacao
    WHERE produto_id = $1
    ORDER BY data_criacao DESC, id DESC
"""

DELETE_RATING = """
    DELETE FROM avaliacao
    WHERE id = $1
"""


async def insert_rating(
    db: Executor,
    *,
    stars: int,
    comment: str,
    product_id: int,
    user_id: int,
) -> None:
    await db.execute(INSERT_RATING, stars, comment, product_id, user_id)


async def list_ratings(db: Executor, product_id: int) -> list[dict[str, Any]]:
    """
    Ratings for one product, most recent first.
    """
    return await db.fetch_all(SELECT_RATINGS_BY_PRODUCT, product_id)


async def delete_rating(db: Executor, rating_id: int) -> int:
    """
    Delete a rating by id. Returns how many rows were removed (0 or 1).
    """
    return await db.execute(DELETE_RATING, rating_id)
