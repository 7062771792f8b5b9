"""DB-API 2.0 driver adapter for the core connection provider."""

from __future__ import annotations

import functools
from typing import Any, Callable, Mapping, Optional, Tuple

from ...core._async_utils import _maybe_await, _maybe_close
from ...core.types import QueryParams, ReleaseFn, RowMapping, Rows
from .dialects import Dialect


class DbApiConnection:
    """Async `query()` over a sync or async DB-API connection object."""

    def __init__(self, conn: Any):
        self.conn = conn

    async def query(self, sql: str, params: QueryParams = None) -> Rows:
        """Execute SQL and return all rows as normalized mappings.

        Statements without a result set (DDL, plain DML) return an empty list.
        """

        cur = await _maybe_await(self.conn.cursor())
        try:
            if params is None:
                await _maybe_await(cur.execute(sql))
            else:
                await _maybe_await(cur.execute(sql, params))
            if not getattr(cur, "description", None):
                return []
            rows = await _maybe_await(cur.fetchall())
            return [self._row_to_mapping(cur, r) for r in rows]
        finally:
            await _maybe_close(cur)

    def _row_to_mapping(self, cursor: Any, row: Any) -> RowMapping:
        """Normalize row object to mapping.

        Supports mapping rows directly and tuple/list rows via
        `cursor.description`.
        """

        if isinstance(row, Mapping):
            return row

        if isinstance(row, (tuple, list)):
            desc = getattr(cursor, "description", None)
            if not desc:
                raise TypeError(
                    "Cursor has no description; cannot map tuple rows to dict."
                )
            cols = [d[0] for d in desc]
            return dict(zip(cols, row, strict=True))

        try:
            return dict(row)
        except (TypeError, ValueError):
            pass

        raise TypeError(f"Unsupported row type: {type(row)}")

    def __repr__(self) -> str:
        return f"DbApiConnection({self.conn!r})"


class DbApiDriver:
    """Opens one DB-API connection per acquisition and closes it on release.

    Connections must be in autocommit mode (sqlite3 `isolation_level=None`,
    psycopg `autocommit=True`) so explicit BEGIN/COMMIT statements control
    transactions.
    """

    def __init__(
        self,
        connect: Callable[..., Any],
        *connect_args: Any,
        dialect: Optional[Dialect] = None,
        **connect_kwargs: Any,
    ):
        """Create driver.

        Args:
            connect: DB-API `connect` callable; may return an awaitable.
            connect_args: Positional arguments passed to `connect` on every acquisition.
            dialect: Concrete SQL dialect instance. Defaults to the generic dialect.
            connect_kwargs: Keyword arguments passed to `connect` on every acquisition.
        """

        self._connect = connect
        self._connect_args = connect_args
        self._connect_kwargs = connect_kwargs
        self.dialect = dialect if dialect is not None else Dialect()

    async def connect(self) -> Tuple[DbApiConnection, ReleaseFn]:
        conn = await _maybe_await(self._connect(*self._connect_args, **self._connect_kwargs))
        return DbApiConnection(conn), functools.partial(_maybe_close, conn)

    async def close(self) -> None:
        """Nothing is pooled, so there is nothing to shut down."""

        return None
