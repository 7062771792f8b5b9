"""Transaction scope bound to a single pooled connection."""

from __future__ import annotations

import contextlib
from typing import AsyncIterator, Awaitable, Callable, Optional, TypeVar, Union

from ._async_utils import _maybe_await
from .contracts import ConnectionPort
from .errors import NamedQueriesDisabledError, TransactionClosedError
from .executor import QueryExecutor
from .logging import get_logger
from .named_queries import NamedQueryResolver
from .provider import Connection, ConnectionProvider
from .types import MaybeRow, QueryParams, Rows

logger = get_logger(__name__)

T = TypeVar("T")

Work = Callable[["TransactionContext"], Union[T, Awaitable[T]]]


class TransactionContext:
    """Executor-shaped surface whose every call runs on the transaction's connection.

    Valid only inside the transaction that created it; any call after COMMIT
    or ABORT raises `TransactionClosedError`.
    """

    def __init__(
        self,
        connection: Connection,
        executor: QueryExecutor,
        resolver: Optional[NamedQueryResolver] = None,
    ):
        self._connection = connection
        self._executor = executor
        self._resolver = resolver
        self._closed = False

    def _require_open(self) -> Connection:
        if self._closed:
            raise TransactionClosedError("transaction has already ended")
        return self._connection

    def _require_resolver(self) -> NamedQueryResolver:
        if self._resolver is None:
            raise NamedQueriesDisabledError()
        return self._resolver

    def _close(self) -> None:
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def connection(self) -> ConnectionPort:
        """The bound connection, for passing to `Database` calls explicitly."""

        return self._require_open()

    async def execute(self, sql: str, params: QueryParams = None) -> Rows:
        return await self._executor.execute(self._require_open(), sql, params)

    async def fetch_first(self, sql: str, params: QueryParams = None) -> MaybeRow:
        return await self._executor.fetch_first(self._require_open(), sql, params)

    async def run(self, name: str, params: QueryParams = None) -> Rows:
        resolver = self._require_resolver()
        return await resolver.run(self._require_open(), name, params)

    async def first(self, name: str, params: QueryParams = None) -> MaybeRow:
        resolver = self._require_resolver()
        return await resolver.first(self._require_open(), name, params)


class TransactionCoordinator:
    """Runs caller logic between BEGIN and COMMIT/ABORT on one connection."""

    def __init__(
        self,
        provider: ConnectionProvider,
        executor: QueryExecutor,
        resolver: Optional[NamedQueryResolver] = None,
    ):
        self._provider = provider
        self._executor = executor
        self._resolver = resolver

    @contextlib.asynccontextmanager
    async def transaction(self) -> AsyncIterator[TransactionContext]:
        """Provide a BEGIN ... COMMIT/ABORT scope on a freshly acquired connection.

        The block's own error is always the one that propagates, even if ABORT
        fails. A failed COMMIT propagates as the transaction's error. The
        connection is released on every path.
        """

        dialect = self._provider.dialect
        async with self._provider.connection() as conn:
            await conn.query(dialect.begin_sql)
            logger.debug("transaction_begin", dialect=dialect.name)
            tx = TransactionContext(conn, self._executor, self._resolver)
            try:
                yield tx
            except BaseException as exc:
                tx._close()
                await self._abort(conn, exc)
                raise
            tx._close()
            await conn.query(dialect.commit_sql)
            logger.debug("transaction_commit", dialect=dialect.name)

    async def _abort(self, conn: Connection, error: BaseException) -> None:
        try:
            await conn.query(self._provider.dialect.abort_sql)
        except Exception as abort_error:
            logger.warning(
                "transaction_abort_failed",
                error=repr(abort_error),
                cause=repr(error),
            )
        else:
            logger.debug("transaction_abort", cause=type(error).__name__)

    async def run_in_transaction(self, work: Work[T]) -> T:
        """Call `work(tx)` inside `transaction()` and return its result.

        `work` may be a coroutine function or a plain function.
        """

        async with self.transaction() as tx:
            return await _maybe_await(work(tx))
