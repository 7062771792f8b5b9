from __future__ import annotations

import unittest

from pg_util import QueryCall, is_connection
from pg_util.core.arguments import parse_call, split_connection
from tests._fakes import FakeConnection, FakeDriver


class _NotCallableQuery:
    query = "SELECT 1"


class IsConnectionTests(unittest.TestCase):
    def test_object_with_callable_query_is_a_connection(self) -> None:
        conn = FakeConnection(FakeDriver(), 1)
        self.assertTrue(is_connection(conn))

    def test_query_data_is_not_a_connection(self) -> None:
        for value in ("SELECT 1", ["John Doe"], {"name": "x"}, None, 42):
            with self.subTest(value=value):
                self.assertFalse(is_connection(value))

    def test_non_callable_query_attribute_is_not_a_connection(self) -> None:
        self.assertFalse(is_connection(_NotCallableQuery()))


class SplitConnectionTests(unittest.TestCase):
    def test_leading_connection_is_split_off(self) -> None:
        conn = FakeConnection(FakeDriver(), 1)
        head, rest = split_connection((conn, "SELECT 1", [1]))
        self.assertIs(head, conn)
        self.assertEqual(rest, ("SELECT 1", [1]))

    def test_without_connection_all_args_are_query_data(self) -> None:
        head, rest = split_connection(("SELECT 1", [1]))
        self.assertIsNone(head)
        self.assertEqual(rest, ("SELECT 1", [1]))

    def test_leading_none_means_no_connection(self) -> None:
        head, rest = split_connection((None, "SELECT 1"))
        self.assertIsNone(head)
        self.assertEqual(rest, ("SELECT 1",))


class ParseCallTests(unittest.TestCase):
    def test_text_only(self) -> None:
        call = parse_call("execute", ("SELECT 1",))
        self.assertEqual(call, QueryCall(None, "SELECT 1", None))
        self.assertTrue(call.owns_release)

    def test_text_and_params(self) -> None:
        call = parse_call("execute", ("SELECT $1::text AS name", ["John Doe"]))
        self.assertEqual(call.text, "SELECT $1::text AS name")
        self.assertEqual(call.params, ["John Doe"])

    def test_explicit_connection_is_not_owned(self) -> None:
        conn = FakeConnection(FakeDriver(), 1)
        call = parse_call("run", (conn, "select", ["John Doe"]))
        self.assertIs(call.connection, conn)
        self.assertEqual(call.text, "select")
        self.assertFalse(call.owns_release)

    def test_missing_text_raises(self) -> None:
        with self.assertRaises(TypeError):
            parse_call("execute", ())
        with self.assertRaises(TypeError):
            parse_call("execute", (FakeConnection(FakeDriver(), 1),))

    def test_non_string_text_raises(self) -> None:
        with self.assertRaisesRegex(TypeError, "fetch_first"):
            parse_call("fetch_first", (123,))

    def test_too_many_arguments_raises(self) -> None:
        with self.assertRaises(TypeError):
            parse_call("execute", ("SELECT 1", [], "extra"))


if __name__ == "__main__":
    unittest.main()
