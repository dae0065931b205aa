"""
Unit tests for SPIR-V binary helpers.
"""
from __future__ import annotations

import struct
import unittest

from shaderbake.spirv import SPIRV_MAGIC, words_from_bytes, words_to_bytes


class TestWords(unittest.TestCase):
    def test_little_endian(self) -> None:
        data = struct.pack("<3I", SPIRV_MAGIC, 0x00010000, 7)
        self.assertEqual(words_from_bytes(data), (SPIRV_MAGIC, 0x00010000, 7))

    def test_big_endian_keeps_word_values(self) -> None:
        data = struct.pack(">2I", SPIRV_MAGIC, 5)
        self.assertEqual(words_from_bytes(data), (SPIRV_MAGIC, 5))

    def test_to_bytes_is_little_endian(self) -> None:
        self.assertEqual(words_to_bytes([SPIRV_MAGIC]), b"\x03\x02\x23\x07")

    def test_rejects_partial_word(self) -> None:
        with self.assertRaises(ValueError):
            words_from_bytes(b"\x03\x02\x23")

    def test_rejects_empty(self) -> None:
        with self.assertRaises(ValueError):
            words_from_bytes(b"")

    def test_rejects_bad_magic(self) -> None:
        with self.assertRaises(ValueError) as ctx:
            words_from_bytes(b"\xde\xad\xbe\xef")
        self.assertIn("deadbeef", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
