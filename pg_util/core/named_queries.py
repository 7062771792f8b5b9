"""Execution of SQL stored under logical names."""

from __future__ import annotations

from typing import Any, overload

from .arguments import QueryCall, parse_call
from .contracts import ConnectionPort, QueryRegistryPort
from .executor import first_row
from .provider import ConnectionProvider
from .types import MaybeRow, QueryParams, Rows


class NamedQueryResolver:
    """Runs registry queries by name with the same connection rules as `QueryExecutor`."""

    def __init__(self, provider: ConnectionProvider, registry: QueryRegistryPort):
        self._provider = provider
        self.registry = registry

    async def _run(self, call: QueryCall) -> Rows:
        async with self._provider.using(call.connection) as conn:
            return await self.registry.run(conn.query, call.text, call.params)

    @overload
    async def run(self, name: str, params: QueryParams = None, /) -> Rows: ...

    @overload
    async def run(self, conn: ConnectionPort, name: str, params: QueryParams = None, /) -> Rows: ...

    async def run(self, *args: Any) -> Rows:
        """Execute the query registered as `name` and return all rows.

        Raises:
            UnknownQueryError: No query is registered under `name`. An implicitly
                acquired connection is still released.
        """

        return await self._run(parse_call("run", args))

    @overload
    async def first(self, name: str, params: QueryParams = None, /) -> MaybeRow: ...

    @overload
    async def first(
        self, conn: ConnectionPort, name: str, params: QueryParams = None, /
    ) -> MaybeRow: ...

    async def first(self, *args: Any) -> MaybeRow:
        return first_row(await self._run(parse_call("first", args)))
