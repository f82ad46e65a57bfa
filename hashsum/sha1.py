from __future__ import annotations

from typing import List, Sequence, Tuple

from .core import add32, bytes_to_words_be, rl
from .engine import Algorithm, DigestEngine
from .tables import SHA1_FUNC, SHA1_IV, SHA1_ROUND_K, SHA1_ROUNDS


def _ch(b: int, c: int, d: int) -> int:
    return (b & c) | (~b & d)


def _parity(b: int, c: int, d: int) -> int:
    return b ^ c ^ d


def _maj(b: int, c: int, d: int) -> int:
    return (b & c) | (b & d) | (c & d)


_ROUND_FUNCS = (_ch, _parity, _maj, _parity)


def expand_schedule(m: Sequence[int]) -> List[int]:
    """Extend 16 big-endian words to the 80-word message schedule."""
    if len(m) != 16:
        raise ValueError("m must have 16 words")
    w = list(m) + [0] * (SHA1_ROUNDS - 16)
    for i in range(16, SHA1_ROUNDS):
        w[i] = rl(w[i - 3] ^ w[i - 8] ^ w[i - 14] ^ w[i - 16], 1)
    return w


def compress_block(ihv: Sequence[int], m: Sequence[int]) -> Tuple[int, int, int, int, int]:
    w = expand_schedule(m)
    a, b, c, d, e = ihv
    for t in range(SHA1_ROUNDS):
        temp = add32(rl(a, 5), _ROUND_FUNCS[SHA1_FUNC[t]](b, c, d), e, SHA1_ROUND_K[t], w[t])
        a, b, c, d, e = temp, a, rl(b, 30), c, d
    return (
        add32(ihv[0], a),
        add32(ihv[1], b),
        add32(ihv[2], c),
        add32(ihv[3], d),
        add32(ihv[4], e),
    )


class SHA1Engine(DigestEngine):
    algorithm = Algorithm.SHA1
    iv = SHA1_IV

    def _compress_python(self, block: bytes) -> List[int]:
        return list(compress_block(self._regs, bytes_to_words_be(block)))

    def _compress_numba(self, block: bytes) -> List[int]:
        return self._numba_kernels().sha1_compress_block(self._regs, block)


def sha1_bytes(data: bytes, engine: str | None = None) -> bytes:
    from .drivers import hash_slice

    return hash_slice(Algorithm.SHA1, data, engine=engine)


def sha1_hex(data: bytes, engine: str | None = None) -> str:
    return sha1_bytes(data, engine).hex()
