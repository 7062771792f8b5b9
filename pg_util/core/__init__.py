"""Public core API: argument handling, execution, named queries, and transactions."""

from .arguments import QueryCall, is_connection, parse_call, split_connection
from .errors import (
    ConnectionReleasedError,
    NamedQueriesDisabledError,
    PgUtilError,
    RegistryLoadError,
    TransactionClosedError,
    UnknownQueryError,
)
from .executor import QueryExecutor, first_row
from .logging import configure_logging, get_logger
from .named_queries import NamedQueryResolver
from .provider import Connection, ConnectionProvider
from .settings import Settings, get_settings, reset_settings
from .transaction import TransactionContext, TransactionCoordinator

__all__ = [
    "QueryCall",
    "is_connection",
    "parse_call",
    "split_connection",
    "PgUtilError",
    "UnknownQueryError",
    "RegistryLoadError",
    "NamedQueriesDisabledError",
    "ConnectionReleasedError",
    "TransactionClosedError",
    "QueryExecutor",
    "first_row",
    "NamedQueryResolver",
    "Connection",
    "ConnectionProvider",
    "TransactionContext",
    "TransactionCoordinator",
    "Settings",
    "get_settings",
    "reset_settings",
    "configure_logging",
    "get_logger",
]
