"""
Round tables for MD5 (RFC 1321) and SHA-1 (FIPS 180-1).

Everything here is immutable and indexed by round number so the compression
loops never re-derive the range boundaries (16/32/48 for MD5, 20/40/60 for
SHA-1) on their own.
"""

from __future__ import annotations

import math
from typing import Tuple

from .core import MASK32

MD5_ROUNDS = 64
SHA1_ROUNDS = 80

MD5_IV: Tuple[int, int, int, int] = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476)
SHA1_IV: Tuple[int, int, int, int, int] = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476, 0xC3D2E1F0)


def _mk_ac() -> Tuple[int, ...]:
    # AC_t = floor(2^32 * abs(sin(t+1)))
    return tuple(int(abs(math.sin(i + 1)) * (1 << 32)) & MASK32 for i in range(MD5_ROUNDS))


# Rotation amounts per step
MD5_RC: Tuple[int, ...] = tuple(
    [7, 12, 17, 22] * 4
    + [5, 9, 14, 20] * 4
    + [4, 11, 16, 23] * 4
    + [6, 10, 15, 21] * 4
)

MD5_AC: Tuple[int, ...] = _mk_ac()

# Boolean function per step: 0=F, 1=G, 2=H, 3=I
MD5_FUNC: Tuple[int, ...] = tuple(t // 16 for t in range(MD5_ROUNDS))


def _md5_g(t: int) -> int:
    stage = MD5_FUNC[t]
    if stage == 0:
        return t
    if stage == 1:
        return (5 * t + 1) % 16
    if stage == 2:
        return (3 * t + 5) % 16
    return (7 * t) % 16


# Message word index consumed at each step
MD5_G: Tuple[int, ...] = tuple(_md5_g(t) for t in range(MD5_ROUNDS))


# One constant per 20-step stage: Ch, parity, majority, parity
SHA1_K: Tuple[int, int, int, int] = (0x5A827999, 0x6ED9EBA1, 0x8F1BBCDC, 0xCA62C1D6)
SHA1_STAGE_BOUNDS: Tuple[int, int, int, int] = (20, 40, 60, 80)

# Stage per step: 0=Ch, 1=parity, 2=majority, 3=parity
SHA1_FUNC: Tuple[int, ...] = tuple(
    next(s for s, bound in enumerate(SHA1_STAGE_BOUNDS) if t < bound) for t in range(SHA1_ROUNDS)
)
SHA1_ROUND_K: Tuple[int, ...] = tuple(SHA1_K[s] for s in SHA1_FUNC)
