"""Tests for the field_scanner module."""

import unittest

from field_scanner import FieldScanner


class TestFieldScanner(unittest.TestCase):
    def test_hex_field_width(self):
        s = FieldScanner("  0001:00401000")
        self.assertEqual(1, s.hex_field(4))
        self.assertTrue(s.literal(":"))
        self.assertEqual(0x401000, s.hex_field(8))
        self.assertTrue(s.at_end())

    def test_hex_field_stops_at_width(self):
        s = FieldScanner("123456789")
        self.assertEqual(0x1234, s.hex_field(4))
        self.assertEqual(0x5678, s.hex_field(4))
        self.assertEqual(9, s.hex_field(4))

    def test_hex_field_case(self):
        self.assertEqual(0xABCDEF, FieldScanner("aBcDeF").hex_field(8))

    def test_hex_field_missing(self):
        s = FieldScanner("  xyz")
        self.assertIsNone(s.hex_field(4))
        # Whitespace was consumed, like scanf does
        self.assertEqual(2, s.pos)

    def test_hex_field_does_not_backtrack(self):
        """A following field never gets digits back from a greedy one."""
        s = FieldScanner("0001:00001000")
        s.hex_field(4)
        s.literal(":")
        self.assertEqual(0x1000, s.hex_field(8))
        self.assertFalse(s.any_char())

    def test_literal(self):
        s = FieldScanner("  0x1F")
        self.assertTrue(s.literal("0x"))
        self.assertEqual(0x1f, s.hex_field(16))

    def test_literal_mismatch(self):
        s = FieldScanner("0X1F")
        self.assertFalse(s.literal("0x"))
        self.assertEqual(0, s.pos)

    def test_any_char(self):
        s = FieldScanner("+ name")
        self.assertTrue(s.any_char())
        self.assertEqual(1, s.pos)
        self.assertTrue(s.any_char())
        self.assertEqual("name", s.token(" "))
        self.assertFalse(s.any_char())

    def test_token(self):
        s = FieldScanner("   _main   rest")
        self.assertEqual("_main", s.token(" \t;"))
        self.assertEqual("rest", s.token(" \t;"))
        self.assertIsNone(s.token(" \t;"))

    def test_token_stops_at_stop_char(self):
        s = FieldScanner("abc;def")
        self.assertEqual("abc", s.token(";"))
        self.assertIsNone(s.token(";"))
        self.assertEqual(3, s.pos)


if __name__ == '__main__':
    unittest.main()
