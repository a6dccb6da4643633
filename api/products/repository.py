"""
Product catalog persistence (raw SQL).

Products are owned outside this API; every query here is read-only and rows
are passed through as-is.
"""

from __future__ import annotations

from typing import Any

from core.db import Executor

ALL_CATEGORIES = "all"

SELECT_PRODUCTS = """
    SELECT *
    FROM produto
"""

SELECT_PRODUCTS_BY_CATEGORY = """
    SELECT *
    FROM produto
    WHERE categoria = $1
"""

PING = "SELECT 1 AS ok"


async def ping(db: Executor) -> None:
    await db.fetch_one(PING)


async def list_products(db: Executor) -> list[dict[str, Any]]:
    return await db.fetch_all(SELECT_PRODUCTS)


async def list_products_by_category(db: Executor, category: str) -> list[dict[str, Any]]:
    """
    Products whose category equals `category` exactly.

    The sentinel "all" returns the whole catalog.
    """
    if category == ALL_CATEGORIES:
        return await list_products(db)
    return await db.fetch_all(SELECT_PRODUCTS_BY_CATEGORY, category)
