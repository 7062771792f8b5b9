"""Exceptions raised by pg_util itself.

Driver errors (failed acquisition, malformed SQL, constraint violations) are
never wrapped; callers see exactly what the driver raised.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union


class PgUtilError(Exception):
    """Base class for errors raised by pg_util."""


class UnknownQueryError(PgUtilError, LookupError):
    """No SQL file is registered under the requested logical name."""

    def __init__(self, name: str):
        super().__init__(f"Unknown query name: {name!r}")
        self.name = name


class RegistryLoadError(PgUtilError):
    """The query-file root could not be read."""

    def __init__(self, message: str, path: Union[str, Path]):
        super().__init__(message)
        self.path = Path(path)


class NamedQueriesDisabledError(PgUtilError):
    """Named queries were requested but no query-file root was configured."""

    def __init__(self) -> None:
        super().__init__(
            "Named queries are unavailable: no SQL file path was configured."
        )


class ConnectionReleasedError(PgUtilError):
    """A connection was used after it had been released back to the pool."""


class TransactionClosedError(PgUtilError):
    """A transaction context was used after its transaction ended."""
