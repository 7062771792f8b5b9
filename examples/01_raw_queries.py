"""Raw SQL example: implicit and explicit connections over SQLite."""

from __future__ import annotations

import asyncio
import os
import sqlite3
import sys
import tempfile
from pathlib import Path

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "pg_util").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pg_util import Database, DbApiDriver, SQLiteDialect


async def main() -> None:
    fd, path = tempfile.mkstemp(prefix="pg_util_example_", suffix=".db")
    os.close(fd)
    db = Database(DbApiDriver(sqlite3.connect, path, isolation_level=None, dialect=SQLiteDialect()))
    try:
        # Each call borrows a connection and gives it back before returning.
        print(await db.execute("SELECT 'John Doe' AS name"))
        print(await db.fetch_first("SELECT ? AS name", ["John Doe"]))
        print(await db.fetch_first("SELECT 1 WHERE 1 = 0"))

        # An explicit connection stays open until the caller releases it.
        conn = await db.get_connection()
        try:
            await db.execute(conn, 'CREATE TABLE "t" ("n" INTEGER)')
            await db.execute(conn, 'INSERT INTO "t" VALUES (?), (?)', [1, 2])
            print(await db.execute(conn, 'SELECT "n" FROM "t" ORDER BY "n"'))
        finally:
            await conn.release()

        async with db.connection() as conn:
            print(await db.fetch_first(conn, 'SELECT SUM("n") AS "total" FROM "t"'))
    finally:
        await db.close()
        os.remove(path)


if __name__ == "__main__":
    asyncio.run(main())
