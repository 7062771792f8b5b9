"""Public port exports for concrete driver and registry implementations."""

from .db_api import DbApiDriver, Dialect, MySQLDialect, PostgresDialect, SQLiteDialect
from .postgres import AsyncpgDialect, AsyncpgDriver
from .sql_files import QueryFileRegistry

__all__ = [
    "AsyncpgDriver",
    "AsyncpgDialect",
    "DbApiDriver",
    "Dialect",
    "SQLiteDialect",
    "PostgresDialect",
    "MySQLDialect",
    "QueryFileRegistry",
]
