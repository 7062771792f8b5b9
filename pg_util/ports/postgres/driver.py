"""asyncpg pool driver: the default PostgreSQL backend."""

from __future__ import annotations

import asyncio
import functools
import re
from typing import Any, Mapping, Optional, Tuple

import asyncpg

from ...core.logging import get_logger
from ...core.types import QueryParams, ReleaseFn, Rows
from ..db_api.dialects import AsyncpgDialect

logger = get_logger(__name__)

_DOLLAR_QUOTE = re.compile(r"\$(?:[A-Za-z_][A-Za-z_0-9]*)?\$")


def has_multiple_statements(sql: str) -> bool:
    """Return whether `sql` holds more than one statement.

    Semicolons inside quotes, comments and dollar-quoted bodies are skipped,
    as are trailing ones. Unterminated quotes stop the scan and are left for
    the server to report.
    """

    i, n = 0, len(sql)
    terminated = False
    while i < n:
        ch = sql[i]
        if sql.startswith("--", i):
            end = sql.find("\n", i)
            if end == -1:
                return False
            i = end + 1
            continue
        if sql.startswith("/*", i):
            end = sql.find("*/", i + 2)
            if end == -1:
                return False
            i = end + 2
            continue
        if ch.isspace():
            i += 1
            continue
        if ch == ";":
            terminated = True
            i += 1
            continue
        if terminated:
            return True
        if ch in "'\"":
            end = sql.find(ch, i + 1)
            if end == -1:
                return False
            i = end + 1
            continue
        match = _DOLLAR_QUOTE.match(sql, i) if ch == "$" else None
        if match:
            tag = match.group()
            end = sql.find(tag, match.end())
            if end == -1:
                return False
            i = end + len(tag)
            continue
        i += 1
    return False


class AsyncpgConnection:
    """`query()` over one acquired `asyncpg.Connection`."""

    def __init__(self, conn: asyncpg.Connection):
        self.conn = conn

    async def query(self, sql: str, params: QueryParams = None) -> Rows:
        """Run SQL with `$n` positional parameters and return rows as dicts.

        Parameterless SQL holding several statements goes through the simple
        query protocol, which accepts scripts but returns no rows.
        """

        if params is None:
            if has_multiple_statements(sql):
                await self.conn.execute(sql)
                return []
            args: Tuple[Any, ...] = ()
        elif isinstance(params, (Mapping, str, bytes)):
            raise TypeError("asyncpg only supports positional ($1, $2, ...) parameters.")
        else:
            args = tuple(params)
        records = await self.conn.fetch(sql, *args)
        return [dict(record) for record in records]

    def __repr__(self) -> str:
        return f"AsyncpgConnection({self.conn!r})"


class AsyncpgDriver:
    """Lazily creates one `asyncpg.Pool` and leases connections from it.

    `dsn=None` leaves connection parameters to asyncpg, which reads the
    libpq `PG*` environment variables. Extra keyword arguments go to
    `asyncpg.create_pool` unchanged.
    """

    dialect = AsyncpgDialect()

    def __init__(self, dsn: Optional[str] = None, **pool_kwargs: Any):
        self.dsn = dsn
        self._pool_kwargs = pool_kwargs
        self._pool: Optional[asyncpg.Pool] = None
        self._lock = asyncio.Lock()

    async def get_pool(self) -> asyncpg.Pool:
        """Get or create the connection pool."""

        if self._pool is not None:
            return self._pool
        async with self._lock:
            if self._pool is None:
                self._pool = await asyncpg.create_pool(self.dsn, **self._pool_kwargs)
                logger.info("connection_pool_created")
        return self._pool

    async def connect(self) -> Tuple[AsyncpgConnection, ReleaseFn]:
        pool = await self.get_pool()
        conn = await pool.acquire()
        return AsyncpgConnection(conn), functools.partial(pool.release, conn)

    async def close(self) -> None:
        """Close the pool if it was ever created."""

        async with self._lock:
            pool, self._pool = self._pool, None
        if pool is not None:
            await pool.close()
            logger.info("connection_pool_closed")
