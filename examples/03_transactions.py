"""Transaction example: commit on success, abort on error, one connection throughout."""

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

from pg_util import Database, DbApiDriver, SQLiteDialect, TransactionContext, configure_logging

QUERIES = Path(__file__).resolve().parent / "queries"


async def transfer(tx: TransactionContext) -> int:
    await tx.run("people/insert", ["Carol", 40])
    await tx.run("people/insert", ["Dave", 22])
    row = await tx.first("people/count")
    return row["total"]


async def main() -> None:
    configure_logging("DEBUG")
    fd, path = tempfile.mkstemp(prefix="pg_util_example_", suffix=".db")
    os.close(fd)
    driver = DbApiDriver(sqlite3.connect, path, isolation_level=None, dialect=SQLiteDialect())
    async with Database(driver, QUERIES) as db:
        await db.run("people/create-table")

        print("Inside committed transaction:", await db.run_in_transaction(transfer))

        try:
            async with db.transaction() as tx:
                await tx.run("people/insert", ["Mallory", 99])
                raise RuntimeError("force abort")
        except RuntimeError:
            print("Aborted transaction executed as expected.")

        print("After abort:", await db.first("people/count"))
    os.remove(path)


if __name__ == "__main__":
    asyncio.run(main())
