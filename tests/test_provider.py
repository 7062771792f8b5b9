from __future__ import annotations

import unittest

from pg_util import Connection, ConnectionProvider, ConnectionReleasedError
from tests._fakes import FakeDriver, FakeDriverError


class ConnectionProviderTests(unittest.IsolatedAsyncioTestCase):
    async def test_acquire_returns_caller_owned_connection(self) -> None:
        driver = FakeDriver(results={"SELECT 1 AS one": [{"one": 1}]})
        provider = ConnectionProvider(driver)

        conn = await provider.acquire()
        self.assertIsInstance(conn, Connection)
        self.assertEqual(driver.acquired, 1)
        self.assertEqual(driver.released, 0)

        rows = await conn.query("SELECT 1 AS one")
        self.assertEqual(rows, [{"one": 1}])

        await conn.release()
        self.assertTrue(conn.released)
        self.assertEqual(driver.released, 1)

    async def test_second_release_does_not_reach_driver(self) -> None:
        driver = FakeDriver()
        conn = await ConnectionProvider(driver).acquire()

        await conn.release()
        await conn.release()

        self.assertEqual(driver.released, 1)

    async def test_query_after_release_raises(self) -> None:
        driver = FakeDriver()
        conn = await ConnectionProvider(driver).acquire()
        await conn.release()

        with self.assertRaises(ConnectionReleasedError):
            await conn.query("SELECT 1")
        self.assertEqual(driver.statements, [])

    async def test_async_release_handle_is_awaited(self) -> None:
        driver = FakeDriver(async_release=True)
        conn = await ConnectionProvider(driver).acquire()
        await conn.release()
        self.assertEqual(driver.released, 1)

    async def test_connection_is_an_async_context_manager(self) -> None:
        driver = FakeDriver()
        async with await ConnectionProvider(driver).acquire() as conn:
            await conn.query("SELECT 1")
        self.assertEqual(driver.released, 1)

    async def test_acquisition_error_propagates_unchanged(self) -> None:
        error = FakeDriverError("too many clients", sqlstate="53300")
        provider = ConnectionProvider(FakeDriver(connect_error=error))

        with self.assertRaises(FakeDriverError) as ctx:
            await provider.acquire()
        self.assertIs(ctx.exception, error)

    async def test_connection_scope_releases_on_error(self) -> None:
        driver = FakeDriver()
        provider = ConnectionProvider(driver)

        with self.assertRaises(RuntimeError):
            async with provider.connection():
                raise RuntimeError("boom")

        self.assertEqual(driver.acquired, 1)
        self.assertEqual(driver.released, 1)

    async def test_using_leaves_explicit_connection_alone(self) -> None:
        driver = FakeDriver()
        provider = ConnectionProvider(driver)
        conn = await provider.acquire()

        async with provider.using(conn) as bound:
            self.assertIs(bound, conn)

        self.assertEqual(driver.acquired, 1)
        self.assertEqual(driver.released, 0)
        self.assertFalse(conn.released)
        await conn.release()

    async def test_using_without_connection_acquires_and_releases(self) -> None:
        driver = FakeDriver()
        provider = ConnectionProvider(driver)

        async with provider.using(None) as bound:
            self.assertIsInstance(bound, Connection)
            self.assertEqual(driver.released, 0)

        self.assertEqual(driver.acquired, 1)
        self.assertEqual(driver.released, 1)


if __name__ == "__main__":
    unittest.main()
