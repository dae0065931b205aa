"""SPIR-V binary helpers: bytes ↔ 32-bit word sequences."""
from __future__ import annotations

import struct
from collections.abc import Sequence

SPIRV_MAGIC = 0x07230203


def words_from_bytes(data: bytes) -> tuple[int, ...]:
    """Decode a SPIR-V module into words.

    The module's own magic number decides the byte order, so the returned
    words are exactly the ones the backend wrote.

    Raises:
        ValueError: If the data is not a whole number of words or does not
            start with the SPIR-V magic number.
    """
    if len(data) % 4 != 0:
        raise ValueError(f"SPIR-V binary size {len(data)} is not a multiple of 4")
    if len(data) < 4:
        raise ValueError("SPIR-V binary is empty")
    count = len(data) // 4
    for order in ("<", ">"):
        (magic,) = struct.unpack_from(f"{order}I", data)
        if magic == SPIRV_MAGIC:
            return struct.unpack(f"{order}{count}I", data)
    raise ValueError(f"not a SPIR-V binary (magic {data[:4].hex()})")


def words_to_bytes(words: Sequence[int]) -> bytes:
    """Encode words as a little-endian SPIR-V binary."""
    return struct.pack(f"<{len(words)}I", *words)
