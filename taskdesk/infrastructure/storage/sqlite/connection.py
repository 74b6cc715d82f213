"""
Async SQLite connection pool with aiosqlite.

Connections are opened on demand, up to ``pool_size`` at once, and
reused afterwards. Every connection runs in WAL mode with foreign keys
on and rows exposed as ``aiosqlite.Row``.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from taskdesk.config import get_logger, get_settings

logger = get_logger(__name__)

_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA synchronous=NORMAL",
    "PRAGMA foreign_keys=ON",
)


class ConnectionPool:
    """Bounded set of reusable aiosqlite connections to one database file."""

    def __init__(self, db_path: Path, pool_size: int = 5, busy_timeout: int = 30000):
        self.db_path = db_path
        self.pool_size = pool_size
        self.busy_timeout = busy_timeout

        self._slots = asyncio.Semaphore(pool_size)
        self._idle: list[aiosqlite.Connection] = []
        self._open: list[aiosqlite.Connection] = []

    @property
    def open_connections(self) -> int:
        return len(self._open)

    async def initialize(self) -> None:
        """Open a first connection so a bad path fails at startup."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        async with self.acquire():
            pass
        logger.info("connection_pool_ready", db_path=str(self.db_path), pool_size=self.pool_size)

    async def _connect(self) -> aiosqlite.Connection:
        conn = await aiosqlite.connect(self.db_path)
        for pragma in _PRAGMAS:
            await conn.execute(pragma)
        await conn.execute(f"PRAGMA busy_timeout={self.busy_timeout}")
        conn.row_factory = aiosqlite.Row
        self._open.append(conn)
        return conn

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Borrow a connection, waiting while all ``pool_size`` are in use.

        Usage:
            async with pool.acquire() as conn:
                await conn.execute(...)
        """
        async with self._slots:
            conn = self._idle.pop() if self._idle else await self._connect()
            try:
                yield conn
            finally:
                if conn in self._open:
                    self._idle.append(conn)

    @asynccontextmanager
    async def transaction(self, immediate: bool = False) -> AsyncIterator[aiosqlite.Connection]:
        """
        Borrow a connection inside a transaction.

        Commits when the block exits normally and rolls back otherwise.
        ``immediate=True`` starts with ``BEGIN IMMEDIATE`` so the write
        lock is held from the first read, for read-then-write units
        that must not interleave with writers on other connections.
        """
        async with self.acquire() as conn:
            if immediate:
                await conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except BaseException:
                await conn.rollback()
                raise
            await conn.commit()

    async def close(self) -> None:
        """Close every opened connection; the pool reopens lazily if used again."""
        connections, self._open, self._idle = self._open, [], []
        for conn in connections:
            await conn.close()
        logger.info("connection_pool_closed", closed=len(connections))


_pool: ConnectionPool | None = None


async def get_pool() -> ConnectionPool:
    """Process-wide pool built from ``settings.storage``."""
    global _pool
    if _pool is None:
        storage = get_settings().storage
        _pool = ConnectionPool(
            db_path=storage.db_path,
            pool_size=storage.pool_size,
            busy_timeout=storage.busy_timeout,
        )
        await _pool.initialize()
    return _pool


async def close_pool() -> None:
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None


class PooledStore:
    """
    Base for SQLite stores.

    Uses the injected pool when given and the process-wide one otherwise.
    """

    def __init__(self, pool: ConnectionPool | None = None):
        self._pool = pool

    async def _get_pool(self) -> ConnectionPool:
        return self._pool if self._pool is not None else await get_pool()

    @asynccontextmanager
    async def _connection(self) -> AsyncIterator[aiosqlite.Connection]:
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            yield conn

    @asynccontextmanager
    async def _transaction(self, immediate: bool = False) -> AsyncIterator[aiosqlite.Connection]:
        pool = await self._get_pool()
        async with pool.transaction(immediate=immediate) as conn:
            yield conn
