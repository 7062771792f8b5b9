"""PostgreSQL example (running server; PG_UTIL_DATABASE_URL or PG* env vars)."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "pg_util").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import asyncpg

from pg_util import Database, TransactionContext, configure_logging, get_settings


async def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    db = Database.from_settings(settings, min_size=1, max_size=2, timeout=5)

    try:
        print(await db.execute("SELECT 'John Doe'::text AS name"))
        print(await db.fetch_first("SELECT $1::text AS name", ["John Doe"]))
    except OSError as exc:
        print("Postgres example skipped:", exc)
        await db.close()
        return

    async def work(tx: TransactionContext) -> None:
        await tx.execute("CREATE TABLE pg_util_example (name text)")
        await tx.execute("INSERT INTO pg_util_example VALUES ($1)", ["John Doe"])
        print("Inside:", await tx.fetch_first("SELECT name FROM pg_util_example"))
        raise RuntimeError("force abort")

    try:
        await db.run_in_transaction(work)
    except RuntimeError:
        pass

    try:
        await db.execute("SELECT * FROM pg_util_example")
    except asyncpg.exceptions.UndefinedTableError as exc:
        print("Outside after abort:", exc.sqlstate, exc)
    finally:
        await db.close()


if __name__ == "__main__":
    asyncio.run(main())
