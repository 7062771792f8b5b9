"""Leading-argument disambiguation shared by every executor-shaped call.

`execute`, `fetch_first`, `run` and `first` all accept an optional connection
as their first positional argument::

    await db.execute("SELECT 1")
    await db.execute(conn, "SELECT $1::int", [1])

A leading argument counts as a connection exactly when it has a callable
`query` attribute. A leading `None` is accepted as an explicit "no
connection" so `db.execute(maybe_conn, sql)` works with or without one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple

from .contracts import ConnectionPort
from .types import QueryParams


@dataclass(frozen=True)
class QueryCall:
    """Normalized arguments of one executor-shaped call."""

    connection: Optional[ConnectionPort]
    text: str
    params: QueryParams = None

    @property
    def owns_release(self) -> bool:
        """True when the callee must acquire (and therefore release) a connection."""

        return self.connection is None


def is_connection(value: Any) -> bool:
    """Return whether `value` can be used as an explicit connection."""

    return callable(getattr(value, "query", None))


def split_connection(args: Sequence[Any]) -> Tuple[Optional[ConnectionPort], Tuple[Any, ...]]:
    """Separate an explicit leading connection from the remaining arguments.

    A leading `None` followed by more arguments also means "no connection",
    so `execute(maybe_conn, sql)` works when `maybe_conn` is unset.
    """

    if not args:
        return None, ()
    head = args[0]
    if is_connection(head):
        return head, tuple(args[1:])
    if head is None and len(args) > 1:
        return None, tuple(args[1:])
    return None, tuple(args)


def parse_call(operation: str, args: Sequence[Any]) -> QueryCall:
    """Parse `([connection,] text, params?)` into a `QueryCall`.

    Raises:
        TypeError: Text is missing or not a string, or too many arguments were given.
    """

    connection, rest = split_connection(args)
    if not rest:
        raise TypeError(f"{operation}() missing required SQL text or query name.")
    if len(rest) > 2:
        raise TypeError(
            f"{operation}() takes an optional connection, a text and optional params "
            f"({len(args)} positional arguments given)."
        )
    text = rest[0]
    if not isinstance(text, str):
        raise TypeError(
            f"{operation}() expected str SQL text or query name, got {type(text).__name__}."
        )
    params = rest[1] if len(rest) == 2 else None
    return QueryCall(connection, text, params)
