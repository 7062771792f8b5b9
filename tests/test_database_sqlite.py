from __future__ import annotations

import os
import sqlite3
import tempfile
import unittest
from pathlib import Path

from pg_util import (
    Connection,
    Database,
    DbApiDriver,
    NamedQueriesDisabledError,
    SQLiteDialect,
    TransactionContext,
    UnknownQueryError,
)

SQL_DIR = Path(__file__).parent / "sql" / "sqlite"

Q = "SELECT 'John Doe' AS name"
Q_PARAM = "SELECT ? AS name"
PARAM = "John Doe"


class _CountingConnect:
    def __init__(self, path: str):
        self.path = path
        self.opened: list[sqlite3.Connection] = []

    def __call__(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.path, isolation_level=None)
        self.opened.append(conn)
        return conn


class DatabaseSQLiteTests(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        fd, self.path = tempfile.mkstemp(prefix="pg_util_", suffix=".db")
        os.close(fd)
        self.connect = _CountingConnect(self.path)
        self.db = Database(DbApiDriver(self.connect, dialect=SQLiteDialect()), SQL_DIR)

    async def asyncTearDown(self) -> None:
        await self.db.close()
        for conn in self.connect.opened:
            conn.close()
        os.remove(self.path)

    async def test_get_connection(self) -> None:
        conn = await self.db.get_connection()
        try:
            self.assertIsInstance(conn, Connection)
            self.assertTrue(callable(conn.query))
        finally:
            await conn.release()

    async def test_execute(self) -> None:
        rows = await self.db.execute(Q)
        self.assertEqual(rows[0]["name"], PARAM)

    async def test_execute_parameterized(self) -> None:
        rows = await self.db.execute(Q_PARAM, [PARAM])
        self.assertEqual(rows[0]["name"], PARAM)

    async def test_execute_with_connection(self) -> None:
        conn = await self.db.get_connection()
        try:
            rows = await self.db.execute(conn, Q)
            self.assertEqual(rows[0]["name"], PARAM)
            rows = await self.db.execute(conn, Q_PARAM, [PARAM])
            self.assertEqual(rows[0]["name"], PARAM)
            self.assertFalse(conn.released)
        finally:
            await conn.release()
        self.assertEqual(len(self.connect.opened), 1)

    async def test_fetch_first(self) -> None:
        self.assertEqual((await self.db.fetch_first(Q))["name"], PARAM)
        self.assertEqual((await self.db.fetch_first(Q_PARAM, [PARAM]))["name"], PARAM)

    async def test_fetch_first_empty_result_is_none(self) -> None:
        self.assertIsNone(await self.db.fetch_first("SELECT 1 AS one WHERE 1 = 0"))

    async def test_fetch_first_with_connection(self) -> None:
        async with self.db.connection() as conn:
            row = await self.db.fetch_first(conn, Q_PARAM, [PARAM])
            self.assertEqual(row["name"], PARAM)

    async def test_run(self) -> None:
        rows = await self.db.run("select")
        self.assertEqual(rows[0]["name"], PARAM)

    async def test_run_parameterized(self) -> None:
        rows = await self.db.run("select-param", [PARAM])
        self.assertEqual(rows[0]["name"], PARAM)

    async def test_run_with_connection(self) -> None:
        async with self.db.connection() as conn:
            self.assertEqual((await self.db.run(conn, "select"))[0]["name"], PARAM)
            rows = await self.db.run(conn, "select-param", [PARAM])
            self.assertEqual(rows[0]["name"], PARAM)

    async def test_first(self) -> None:
        self.assertEqual((await self.db.first("select"))["name"], PARAM)
        self.assertEqual((await self.db.first("select-param", [PARAM]))["name"], PARAM)

    async def test_first_with_connection(self) -> None:
        async with self.db.connection() as conn:
            row = await self.db.first(conn, "select-param", [PARAM])
            self.assertEqual(row["name"], PARAM)

    async def test_run_unknown_name(self) -> None:
        with self.assertRaises(UnknownQueryError):
            await self.db.run("unknown-name")

    async def test_named_queries_disabled_without_sql_path(self) -> None:
        db = Database(DbApiDriver(self.connect, dialect=SQLiteDialect()))
        self.assertFalse(db.named_queries_enabled)
        with self.assertRaises(NamedQueriesDisabledError):
            await db.run("select")
        with self.assertRaises(NamedQueriesDisabledError):
            await db.first("select")
        self.assertEqual((await db.execute(Q))[0]["name"], PARAM)

    async def test_transaction_commit_is_visible_only_after_commit(self) -> None:
        await self.db.execute('CREATE TABLE "people" ("name" TEXT)')
        count_sql = 'SELECT COUNT(*) AS "count" FROM "people"'

        async def work(tx: TransactionContext) -> int:
            await tx.execute('INSERT INTO "people" VALUES (?)', [PARAM])
            inside = await tx.fetch_first(count_sql)
            outside = await self.db.fetch_first(count_sql)
            self.assertEqual(outside["count"], 0)
            return inside["count"]

        self.assertEqual(await self.db.run_in_transaction(work), 1)
        self.assertEqual((await self.db.fetch_first(count_sql))["count"], 1)

    async def test_transaction_abort_rolls_back_created_table(self) -> None:
        class Boom(Exception):
            pass

        async def work(tx: TransactionContext) -> None:
            await tx.execute('CREATE TABLE "scratch" ("name" TEXT)')
            await tx.execute('INSERT INTO "scratch" VALUES (?)', [PARAM])
            row = await tx.fetch_first('SELECT "name" FROM "scratch"')
            self.assertEqual(row["name"], PARAM)
            raise Boom()

        with self.assertRaises(Boom):
            await self.db.run_in_transaction(work)

        with self.assertRaisesRegex(sqlite3.OperationalError, "no such table"):
            await self.db.execute('SELECT * FROM "scratch"')

    async def test_transaction_context_manager_and_named_queries(self) -> None:
        async with self.db.transaction() as tx:
            self.assertEqual((await tx.run("select"))[0]["name"], PARAM)
            self.assertEqual((await tx.first("select-param", [PARAM]))["name"], PARAM)
            rows = await self.db.execute(tx.connection, Q_PARAM, [PARAM])
            self.assertEqual(rows[0]["name"], PARAM)
        self.assertEqual(len(self.connect.opened), 1)

    async def test_async_context_manager_closes_driver(self) -> None:
        async with Database(DbApiDriver(self.connect, dialect=SQLiteDialect())) as db:
            self.assertEqual((await db.execute(Q))[0]["name"], PARAM)


if __name__ == "__main__":
    unittest.main()
