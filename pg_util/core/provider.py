"""Connection acquisition and release on top of a pool driver."""

from __future__ import annotations

import asyncio
import contextlib
from typing import Any, AsyncIterator, Optional

from ._async_utils import _maybe_await
from .contracts import ConnectionPort, DialectPort, DriverPort
from .errors import ConnectionReleasedError
from .logging import get_logger
from .types import QueryParams, ReleaseFn, Rows

logger = get_logger(__name__)


class Connection:
    """One pooled database session together with its release handle.

    Whoever acquired the connection owns it until `release()` is called. The
    driver's release handle runs at most once; repeated calls are ignored.
    """

    def __init__(self, raw: ConnectionPort, release: ReleaseFn):
        self.raw = raw
        self._release = release
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    async def query(self, sql: str, params: QueryParams = None) -> Rows:
        """Execute SQL on this session and return its rows."""

        if self._released:
            raise ConnectionReleasedError("connection has already been released")
        return await self.raw.query(sql, params)

    async def release(self) -> None:
        """Hand the session back to the pool."""

        if self._released:
            logger.warning("connection_double_release", connection=repr(self.raw))
            return
        self._released = True
        await _maybe_await(self._release())
        logger.debug("connection_released")

    async def __aenter__(self) -> Connection:
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        await self.release()


class ConnectionProvider:
    """The only component that talks to the pool driver."""

    def __init__(self, driver: DriverPort):
        self.driver = driver

    @property
    def dialect(self) -> DialectPort:
        return self.driver.dialect

    async def acquire(self) -> Connection:
        """Borrow one connection; the caller becomes responsible for releasing it.

        Driver errors propagate unchanged.
        """

        raw, release = await self.driver.connect()
        logger.debug("connection_acquired")
        return Connection(raw, release)

    @contextlib.asynccontextmanager
    async def connection(self) -> AsyncIterator[Connection]:
        """Borrow and auto-release one connection with a context manager."""

        conn = await self.acquire()
        try:
            yield conn
        finally:
            # Release still completes when the surrounding task is cancelled.
            await asyncio.shield(conn.release())

    @contextlib.asynccontextmanager
    async def using(self, connection: Optional[ConnectionPort]) -> AsyncIterator[ConnectionPort]:
        """Yield `connection` untouched, or a fresh one released on exit when it is None."""

        if connection is not None:
            yield connection
            return
        async with self.connection() as conn:
            yield conn
