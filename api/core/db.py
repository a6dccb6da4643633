"""
Async database access helpers (raw SQL) using asyncpg.

`Database` owns the connection pool. FastAPI creates one on startup, keeps it
on `app.state.db` and closes it on shutdown (see `api/main.py`). Handlers get
it through `core.dependencies.get_db`, never from a module global.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

logger = logging.getLogger(__name__)


# Store failures are explicit and separable from other runtime errors.
class StoreError(RuntimeError):
    pass


# Ids are int4 (SERIAL) columns; larger values overflow in the driver.
MAX_INT_ID = 2**31 - 1

_DRIVER_ERRORS = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)


def sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def affected_rows(status: str) -> int:
    """
    Parse an asyncpg command status tag into a row count.

    "DELETE 1" -> 1, "INSERT 0 1" -> 1, "SELECT 3" -> 3.
    """
    last = (status or "").rsplit(" ", 1)[-1]
    return int(last) if last.isdigit() else 0


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


class Executor:
    """
    Query helpers shared by the pool-backed client and a transaction.
    """

    def _target(self) -> Any:
        raise NotImplementedError

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        try:
            row = await self._target().fetchrow(sql, *args)
        except _DRIVER_ERRORS as exc:
            raise StoreError(str(exc)) from exc
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        try:
            rows = await self._target().fetch(sql, *args)
        except _DRIVER_ERRORS as exc:
            raise StoreError(str(exc)) from exc
        return [_record_to_dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> int:
        """
        Run a statement (INSERT/UPDATE/DELETE). Returns the affected-row count.
        """
        try:
            status = await self._target().execute(sql, *args)
        except _DRIVER_ERRORS as exc:
            raise StoreError(str(exc)) from exc
        return affected_rows(status)


class Transaction(Executor):
    def __init__(self, connection: asyncpg.Connection) -> None:
        self._connection = connection

    def _target(self) -> asyncpg.Connection:
        return self._connection


class Database(Executor):
    def __init__(
        self,
        dsn: str,
        *,
        min_size: int = 1,
        max_size: int = 5,
        command_timeout: float = 30.0,
    ) -> None:
        self._dsn = dsn
        self._min_size = min_size
        self._max_size = max_size
        self._command_timeout = command_timeout
        self._pool: asyncpg.Pool | None = None

    @property
    def is_connected(self) -> bool:
        return self._pool is not None

    async def connect(self) -> None:
        if self._pool is not None:
            return None
        try:
            self._pool = await asyncpg.create_pool(
                dsn=self._dsn,
                min_size=self._min_size,
                max_size=self._max_size,
                command_timeout=self._command_timeout,
            )
        except _DRIVER_ERRORS as exc:
            raise StoreError(str(exc)) from exc
        logger.info("db_pool_ready min_size=%s max_size=%s", self._min_size, self._max_size)

    async def close(self) -> None:
        if self._pool is None:
            return None
        await self._pool.close()
        self._pool = None

    def _target(self) -> asyncpg.Pool:
        if self._pool is None:
            raise StoreError("DB pool is not initialized.")
        return self._pool

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[Transaction]:
        """
        Hold one pooled connection inside a transaction for the block.

        Commits on normal exit, rolls back when the block raises.
        """
        pool = self._target()
        try:
            connection = await pool.acquire()
        except _DRIVER_ERRORS as exc:
            raise StoreError(str(exc)) from exc
        try:
            tx = connection.transaction()
            try:
                await tx.start()
            except _DRIVER_ERRORS as exc:
                raise StoreError(str(exc)) from exc
            try:
                yield Transaction(connection)
            except BaseException:
                try:
                    await tx.rollback()
                except _DRIVER_ERRORS:
                    # The original error is the one worth surfacing.
                    logger.warning("transaction_rollback_failed", exc_info=True)
                raise
            try:
                await tx.commit()
            except _DRIVER_ERRORS as exc:
                raise StoreError(str(exc)) from exc
        finally:
            await pool.release(connection)
