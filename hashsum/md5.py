from __future__ import annotations

from typing import List, Sequence, Tuple

from .core import add32, bytes_to_words_le, rl, u32
from .engine import Algorithm, DigestEngine
from .tables import MD5_AC, MD5_FUNC, MD5_G, MD5_IV, MD5_RC, MD5_ROUNDS


def _ff(b: int, c: int, d: int) -> int:
    return (b & c) | (~b & d)


def _gg(b: int, c: int, d: int) -> int:
    return (d & b) | (~d & c)


def _hh(b: int, c: int, d: int) -> int:
    return b ^ c ^ d


def _ii(b: int, c: int, d: int) -> int:
    return u32(c ^ (b | ~d))


_ROUND_FUNCS = (_ff, _gg, _hh, _ii)


def compress_block(ihv: Sequence[int], m: Sequence[int]) -> Tuple[int, int, int, int]:
    """
    One MD5 compression.
      - ihv: (A, B, C, D)
      - m: 16 little-endian 32-bit words
    Returns the chained (A, B, C, D).
    """
    if len(m) != 16:
        raise ValueError("m must have 16 words")
    a, b, c, d = ihv
    for t in range(MD5_ROUNDS):
        f = add32(_ROUND_FUNCS[MD5_FUNC[t]](b, c, d), a, MD5_AC[t], m[MD5_G[t]])
        a, b, c, d = d, add32(b, rl(f, MD5_RC[t])), b, c
    return (add32(ihv[0], a), add32(ihv[1], b), add32(ihv[2], c), add32(ihv[3], d))


class MD5Engine(DigestEngine):
    algorithm = Algorithm.MD5
    iv = MD5_IV

    def _compress_python(self, block: bytes) -> List[int]:
        return list(compress_block(self._regs, bytes_to_words_le(block)))

    def _compress_numba(self, block: bytes) -> List[int]:
        return self._numba_kernels().md5_compress_block(self._regs, block)


def md5_bytes(data: bytes, engine: str | None = None) -> bytes:
    from .drivers import hash_slice

    return hash_slice(Algorithm.MD5, data, engine=engine)


def md5_hex(data: bytes, engine: str | None = None) -> str:
    return md5_bytes(data, engine).hex()
