"""Public facade wiring the execution engine to a driver and a query-file root."""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from pathlib import Path
from typing import Any, Optional, TypeVar, Union, overload

from .core.contracts import ConnectionPort, DriverPort, QueryRegistryPort
from .core.errors import NamedQueriesDisabledError
from .core.executor import QueryExecutor
from .core.named_queries import NamedQueryResolver
from .core.provider import Connection, ConnectionProvider
from .core.settings import Settings, get_settings
from .core.transaction import TransactionContext, TransactionCoordinator, Work
from .core.types import MaybeRow, QueryParams, Rows
from .ports.postgres.driver import AsyncpgDriver
from .ports.sql_files.registry import QueryFileRegistry

T = TypeVar("T")


class Database:
    """Run raw SQL, named SQL files and transactions without managing connections.

    Every query method takes an optional connection as its first argument.
    Without one, a connection is acquired for the call and released before it
    returns; with one, the caller keeps ownership and releases it themselves.
    """

    def __init__(
        self,
        driver: DriverPort,
        sql_path: Union[str, Path, None] = None,
        *,
        registry: Optional[QueryRegistryPort] = None,
    ):
        """Create database facade.

        Args:
            driver: Pool collaborator handing out connections.
            sql_path: Root directory of `.sql` files for `run()`/`first()`.
                Loaded eagerly; `RegistryLoadError` if unreadable.
            registry: Prebuilt registry, used instead of `sql_path`.
        """

        if registry is None and sql_path is not None:
            registry = QueryFileRegistry(sql_path)
        self.provider = ConnectionProvider(driver)
        self.executor = QueryExecutor(self.provider)
        self.resolver = (
            NamedQueryResolver(self.provider, registry) if registry is not None else None
        )
        self.transactions = TransactionCoordinator(self.provider, self.executor, self.resolver)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **pool_kwargs: Any) -> Database:
        """Build an asyncpg-backed facade from `PG_UTIL_*` settings."""

        settings = settings if settings is not None else get_settings()
        return create_database(settings.database_url, settings.sql_path, **pool_kwargs)

    @property
    def driver(self) -> DriverPort:
        return self.provider.driver

    @property
    def named_queries_enabled(self) -> bool:
        return self.resolver is not None

    def _require_resolver(self) -> NamedQueryResolver:
        if self.resolver is None:
            raise NamedQueriesDisabledError()
        return self.resolver

    async def get_connection(self) -> Connection:
        """Acquire a connection owned by the caller, who must `await conn.release()`."""

        return await self.provider.acquire()

    def connection(self) -> AbstractAsyncContextManager[Connection]:
        """Acquire a connection for the duration of an `async with` block."""

        return self.provider.connection()

    @overload
    async def execute(self, sql: str, params: QueryParams = None, /) -> Rows: ...

    @overload
    async def execute(
        self, conn: ConnectionPort, sql: str, params: QueryParams = None, /
    ) -> Rows: ...

    async def execute(self, *args: Any) -> Rows:
        """Execute `([conn,] sql, params?)` and return all rows."""

        return await self.executor.execute(*args)

    @overload
    async def fetch_first(self, sql: str, params: QueryParams = None, /) -> MaybeRow: ...

    @overload
    async def fetch_first(
        self, conn: ConnectionPort, sql: str, params: QueryParams = None, /
    ) -> MaybeRow: ...

    async def fetch_first(self, *args: Any) -> MaybeRow:
        """Execute `([conn,] sql, params?)` and return the first row or None."""

        return await self.executor.fetch_first(*args)

    @overload
    async def run(self, name: str, params: QueryParams = None, /) -> Rows: ...

    @overload
    async def run(self, conn: ConnectionPort, name: str, params: QueryParams = None, /) -> Rows: ...

    async def run(self, *args: Any) -> Rows:
        """Execute the SQL file registered as `name` and return all rows."""

        return await self._require_resolver().run(*args)

    @overload
    async def first(self, name: str, params: QueryParams = None, /) -> MaybeRow: ...

    @overload
    async def first(
        self, conn: ConnectionPort, name: str, params: QueryParams = None, /
    ) -> MaybeRow: ...

    async def first(self, *args: Any) -> MaybeRow:
        """Execute the SQL file registered as `name` and return the first row or None."""

        return await self._require_resolver().first(*args)

    def transaction(self) -> AbstractAsyncContextManager[TransactionContext]:
        """Run an `async with` block inside BEGIN ... COMMIT/ABORT on one connection."""

        return self.transactions.transaction()

    async def run_in_transaction(self, work: Work[T]) -> T:
        """Call `work(tx)` inside one transaction and return its result."""

        return await self.transactions.run_in_transaction(work)

    async def close(self) -> None:
        """Shut down the underlying driver."""

        await self.driver.close()

    async def __aenter__(self) -> Database:
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        await self.close()


def create_database(
    dsn: Optional[str] = None,
    sql_path: Union[str, Path, None] = None,
    **pool_kwargs: Any,
) -> Database:
    """Build an asyncpg-backed `Database`.

    Args:
        dsn: PostgreSQL DSN; None uses the libpq `PG*` environment variables.
        sql_path: Optional root directory of `.sql` files.
        pool_kwargs: Passed to `asyncpg.create_pool` unchanged.
    """

    return Database(AsyncpgDriver(dsn, **pool_kwargs), sql_path)
