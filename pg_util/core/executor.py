"""Raw SQL execution with implicit or caller-supplied connections."""

from __future__ import annotations

from typing import Any, Sequence, overload

from .arguments import QueryCall, parse_call
from .contracts import ConnectionPort
from .provider import ConnectionProvider
from .types import MaybeRow, QueryParams, Rows


def first_row(rows: Sequence[Any]) -> MaybeRow:
    """Return the first row, or None for an empty result."""

    if not rows:
        return None
    return rows[0]


class QueryExecutor:
    """Runs literal SQL text, acquiring a connection only when none is given."""

    def __init__(self, provider: ConnectionProvider):
        self._provider = provider

    async def _execute(self, call: QueryCall) -> Rows:
        async with self._provider.using(call.connection) as conn:
            return await conn.query(call.text, call.params)

    @overload
    async def execute(self, sql: str, params: QueryParams = None, /) -> Rows: ...

    @overload
    async def execute(
        self, conn: ConnectionPort, sql: str, params: QueryParams = None, /
    ) -> Rows: ...

    async def execute(self, *args: Any) -> Rows:
        """Execute `([conn,] sql, params?)` and return all rows.

        A connection acquired here is released before this returns or raises;
        a connection passed in is left for the caller to release.
        """

        return await self._execute(parse_call("execute", args))

    @overload
    async def fetch_first(self, sql: str, params: QueryParams = None, /) -> MaybeRow: ...

    @overload
    async def fetch_first(
        self, conn: ConnectionPort, sql: str, params: QueryParams = None, /
    ) -> MaybeRow: ...

    async def fetch_first(self, *args: Any) -> MaybeRow:
        """Like `execute`, but return only the first row (None when empty)."""

        return first_row(await self._execute(parse_call("fetch_first", args)))
