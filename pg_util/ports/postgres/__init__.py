"""asyncpg-backed PostgreSQL driver."""

from ..db_api.dialects import AsyncpgDialect
from .driver import AsyncpgConnection, AsyncpgDriver

__all__ = ["AsyncpgConnection", "AsyncpgDialect", "AsyncpgDriver"]
