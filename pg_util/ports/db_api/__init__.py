"""DB-API driver and dialect exports."""

from .dialects import AsyncpgDialect, Dialect, MySQLDialect, PostgresDialect, SQLiteDialect
from .driver import DbApiConnection, DbApiDriver

__all__ = [
    "AsyncpgDialect",
    "DbApiConnection",
    "DbApiDriver",
    "Dialect",
    "MySQLDialect",
    "PostgresDialect",
    "SQLiteDialect",
]
