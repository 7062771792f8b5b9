"""pg_util: run SQL text, named SQL files and transactions over a connection pool."""

from .core import (
    Connection,
    ConnectionProvider,
    ConnectionReleasedError,
    NamedQueriesDisabledError,
    NamedQueryResolver,
    PgUtilError,
    QueryCall,
    QueryExecutor,
    RegistryLoadError,
    Settings,
    TransactionClosedError,
    TransactionContext,
    TransactionCoordinator,
    UnknownQueryError,
    configure_logging,
    get_settings,
    is_connection,
)
from .database import Database, create_database
from .ports import (
    AsyncpgDialect,
    AsyncpgDriver,
    DbApiDriver,
    Dialect,
    MySQLDialect,
    PostgresDialect,
    QueryFileRegistry,
    SQLiteDialect,
)

__all__ = [
    "Database",
    "create_database",
    "Connection",
    "ConnectionProvider",
    "QueryExecutor",
    "NamedQueryResolver",
    "TransactionCoordinator",
    "TransactionContext",
    "QueryCall",
    "is_connection",
    "PgUtilError",
    "UnknownQueryError",
    "RegistryLoadError",
    "NamedQueriesDisabledError",
    "ConnectionReleasedError",
    "TransactionClosedError",
    "Settings",
    "get_settings",
    "configure_logging",
    "AsyncpgDriver",
    "DbApiDriver",
    "QueryFileRegistry",
    "Dialect",
    "SQLiteDialect",
    "PostgresDialect",
    "AsyncpgDialect",
    "MySQLDialect",
]
