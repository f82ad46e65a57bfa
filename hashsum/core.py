from __future__ import annotations

from typing import List, Sequence

MASK32 = 0xFFFFFFFF
MASK64 = 0xFFFFFFFFFFFFFFFF

BLOCK_SIZE = 64
# the 64-bit message length occupies the last 8 bytes of the final block
LENGTH_OFFSET = BLOCK_SIZE - 8


def u32(x: int) -> int:
    return x & MASK32


def rl(x: int, s: int) -> int:
    x &= MASK32
    return ((x << s) | (x >> (32 - s))) & MASK32


def add32(*xs: int) -> int:
    s = 0
    for v in xs:
        s = (s + (v & MASK32)) & MASK32
    return s


def bytes_to_words(block: bytes, byteorder: str) -> List[int]:
    if len(block) != BLOCK_SIZE:
        raise ValueError("block must be 64 bytes")
    return [int.from_bytes(block[i : i + 4], byteorder) for i in range(0, BLOCK_SIZE, 4)]


def bytes_to_words_le(block: bytes) -> List[int]:
    return bytes_to_words(block, "little")


def bytes_to_words_be(block: bytes) -> List[int]:
    return bytes_to_words(block, "big")


def words_to_bytes(words: Sequence[int], byteorder: str) -> bytes:
    return b"".join(u32(w).to_bytes(4, byteorder) for w in words)
