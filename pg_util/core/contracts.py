"""Core port contracts used by the engine and its collaborators."""

from __future__ import annotations

from typing import Protocol, Tuple

from .types import QueryFn, QueryParams, ReleaseFn, Rows


class DialectPort(Protocol):
    """Transaction-control statements issued by the transaction coordinator."""

    name: str
    begin_sql: str
    commit_sql: str
    abort_sql: str


class ConnectionPort(Protocol):
    """Anything exposing a callable `query` is treated as a live connection."""

    async def query(self, sql: str, params: QueryParams = None) -> Rows: ...


class DriverPort(Protocol):
    """Pool collaborator: hands out connections together with their release handle."""

    dialect: DialectPort

    async def connect(self) -> Tuple[ConnectionPort, ReleaseFn]: ...

    async def close(self) -> None: ...


class QueryRegistryPort(Protocol):
    """File collaborator: resolves logical query names to SQL text."""

    def get(self, name: str) -> str: ...

    async def run(self, query: QueryFn, name: str, params: QueryParams = None) -> Rows: ...
