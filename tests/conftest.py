"""
Shared fixtures: an in-memory store double and a TestClient wired to it.

The double answers the exact SQL statements the repositories send and
records every `(sql, args)` call so tests can check that untrusted values
travel as bound arguments.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, AsyncIterator

import pytest
from fastapi.testclient import TestClient

from core.db import StoreError
from core.dependencies import get_db
from favorites import repository as favorites_repository
from main import app
from products import repository as products_repository
from ratings import repository as ratings_repository


@dataclass
class InMemoryDatabase:
    products: list[dict[str, Any]] = field(default_factory=list)
    ratings: list[dict[str, Any]] = field(default_factory=list)
    favorites: set[tuple[int, int]] = field(default_factory=set)
    calls: list[tuple[str, tuple[Any, ...]]] = field(default_factory=list)
    fail: bool = False
    transactions: int = 0
    _clock: datetime = field(default_factory=lambda: datetime(2024, 1, 1, tzinfo=timezone.utc))

    def _record(self, sql: str, args: tuple[Any, ...]) -> None:
        self.calls.append((sql, args))
        if self.fail:
            raise StoreError("connection refused")

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        rows = await self.fetch_all(sql, *args)
        return rows[0] if rows else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        self._record(sql, args)
        if sql == products_repository.PING:
            return [{"ok": 1}]
        if sql == products_repository.SELECT_PRODUCTS:
            return [dict(p) for p in self.products]
        if sql == products_repository.SELECT_PRODUCTS_BY_CATEGORY:
            return [dict(p) for p in self.products if p["categoria"] == args[0]]
        if sql == ratings_repository.SELECT_RATINGS_BY_PRODUCT:
            rows = [r for r in self.ratings if r["produto_id"] == args[0]]
            rows.sort(key=lambda r: (r["data_criacao"], r["id"]), reverse=True)
            return [{"stars": r["estrelas"], "comment": r["comentario"]} for r in rows]
        if sql == favorites_repository.LOCK_FAVORITE_PAIR:
            return [{"pg_advisory_xact_lock": None}]
        if sql == favorites_repository.SELECT_FAVORITE:
            pair = (args[0], args[1])
            return [{"produto_id": pair[0], "usuario_id": pair[1]}] if pair in self.favorites else []
        raise AssertionError(f"unexpected query: {sql}")

    async def execute(self, sql: str, *args: Any) -> int:
        self._record(sql, args)
        if sql == ratings_repository.INSERT_RATING:
            stars, comment, product_id, user_id = args
            self._clock += timedelta(seconds=1)
            self.ratings.append(
                {
                    "id": len(self.ratings) + 1,
                    "estrelas": stars,
                    "comentario": comment,
                    "produto_id": product_id,
                    "usuario_id": user_id,
                    "data_criacao": self._clock,
                }
            )
            return 1
        if sql == ratings_repository.DELETE_RATING:
            before = len(self.ratings)
            self.ratings = [r for r in self.ratings if r["id"] != args[0]]
            return before - len(self.ratings)
        if sql == favorites_repository.DELETE_FAVORITE:
            pair = (args[0], args[1])
            if pair in self.favorites:
                self.favorites.discard(pair)
                return 1
            return 0
        if sql == favorites_repository.INSERT_FAVORITE:
            pair = (args[0], args[1])
            if pair in self.favorites:
                return 0
            self.favorites.add(pair)
            return 1
        raise AssertionError(f"unexpected statement: {sql}")

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["InMemoryDatabase"]:
        if self.fail:
            raise StoreError("connection refused")
        self.transactions += 1
        yield self


@pytest.fixture
def products() -> list[dict[str, Any]]:
    return [
        {"id": 1, "nome": "Camiseta", "categoria": "roupas", "preco": "49.90"},
        {"id": 2, "nome": "Caneca", "categoria": "casa", "preco": "29.90"},
        {"id": 3, "nome": "Moletom", "categoria": "roupas", "preco": "129.90"},
    ]


@pytest.fixture
def db(products: list[dict[str, Any]]) -> InMemoryDatabase:
    return InMemoryDatabase(products=products)


@pytest.fixture
def client(db: InMemoryDatabase):
    app.dependency_overrides[get_db] = lambda: db
    try:
        # No `with`: the lifespan (real pool) is not started.
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
