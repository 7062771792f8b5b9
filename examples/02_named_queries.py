"""Named query example: SQL files under examples/queries keyed by relative path."""

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

from pg_util import Database, DbApiDriver, SQLiteDialect, UnknownQueryError

QUERIES = Path(__file__).resolve().parent / "queries"


async def main() -> None:
    fd, path = tempfile.mkstemp(prefix="pg_util_example_", suffix=".db")
    os.close(fd)
    driver = DbApiDriver(sqlite3.connect, path, isolation_level=None, dialect=SQLiteDialect())
    async with Database(driver, QUERIES) as db:
        print("Registered:", db.resolver.registry.names())

        await db.run("people/create-table")
        await db.run("people/insert", ["Alice", 25])
        await db.run("people/insert", ["Bob", 31])

        print(await db.first("people/by-name", ["Bob"]))
        print(await db.first("people/count"))

        try:
            await db.run("people/missing")
        except UnknownQueryError as exc:
            print("Unknown query:", exc.name)
    os.remove(path)


if __name__ == "__main__":
    asyncio.run(main())
