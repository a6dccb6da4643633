"""
Favorite persistence (raw SQL).

A row in `favorito` means the user favorited the product; there is at most
one row per (produto_id, usuario_id).
"""

from __future__ import annotations

from typing import Any

from core.db import Executor

# Serializes toggles of the same pair until the surrounding transaction ends.
LOCK_FAVORITE_PAIR = "SELECT pg_advisory_xact_lock($1::int, $2::int)"

SELECT_FAVORITE = """
    SELECT produto_id, usuario_id
    FROM favorito
    WHERE produto_id = $1
      AND usuario_id = $2
"""

DELETE_FAVORITE = """
    DELETE FROM favorito
    WHERE produto_id = $1
      AND usuario_id = $2
"""

INSERT_FAVORITE = """
    INSERT INTO favorito (produto_id, usuario_id)
    VALUES ($1, $2)
    ON CONFLICT (produto_id, usuario_id) DO NOTHING
"""


async def lock_favorite_pair(db: Executor, *, product_id: int, user_id: int) -> None:
    await db.fetch_one(LOCK_FAVORITE_PAIR, product_id, user_id)


async def find_favorite(db: Executor, *, product_id: int, user_id: int) -> list[dict[str, Any]]:
    return await db.fetch_all(SELECT_FAVORITE, product_id, user_id)


async def delete_favorite(db: Executor, *, product_id: int, user_id: int) -> None:
    await db.execute(DELETE_FAVORITE, product_id, user_id)


async def insert_favorite(db: Executor, *, product_id: int, user_id: int) -> None:
    await db.execute(INSERT_FAVORITE, product_id, user_id)
