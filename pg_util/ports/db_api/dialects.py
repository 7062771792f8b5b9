"""Concrete SQL dialects: transaction-control statements and parameter style."""

from __future__ import annotations


class Dialect:
    """Base dialect with ANSI transaction statements."""

    name: str = "generic"
    paramstyle: str = "qmark"
    begin_sql: str = "BEGIN"
    commit_sql: str = "COMMIT"
    abort_sql: str = "ROLLBACK"

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class SQLiteDialect(Dialect):
    """SQLite dialect (`?` positional parameters)."""

    name = "sqlite"
    paramstyle = "qmark"


class PostgresDialect(Dialect):
    """PostgreSQL dialect (`%s` for DB-API modules, `$n` for asyncpg)."""

    name = "postgres"
    paramstyle = "format"
    abort_sql = "ABORT"


class AsyncpgDialect(PostgresDialect):
    """PostgreSQL through asyncpg (`$1`, `$2`, ... parameters)."""

    paramstyle = "numeric"


class MySQLDialect(Dialect):
    """MySQL dialect (`%s` positional parameters)."""

    name = "mysql"
    paramstyle = "format"
    begin_sql = "START TRANSACTION"
