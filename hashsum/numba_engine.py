"""
Numba JIT compression kernels for MD5 and SHA-1.

Selected with `--engine numba` or HASHSUM_ENGINE=numba. Registers and words
travel as int64 numpy arrays and every sum is masked back to 32 bits, so the
kernels never depend on numba's unsigned promotion rules.
"""

from __future__ import annotations

from typing import List, Sequence

import numpy as np
from numba import njit

from .tables import MD5_AC, MD5_FUNC, MD5_G, MD5_RC, SHA1_FUNC, SHA1_ROUND_K

MASK32_I64 = 0xFFFFFFFF

# Numba types global tuples deterministically; keep the tables in that form.
_MD5_AC_T = tuple(int(x) for x in MD5_AC)
_MD5_RC_T = tuple(int(x) for x in MD5_RC)
_MD5_G_T = tuple(int(x) for x in MD5_G)
_MD5_FUNC_T = tuple(int(x) for x in MD5_FUNC)
_SHA1_FUNC_T = tuple(int(x) for x in SHA1_FUNC)
_SHA1_K_T = tuple(int(x) for x in SHA1_ROUND_K)


@njit(cache=True, inline="always")
def _rol32(x: np.int64, n: int) -> np.int64:
    return ((x << n) | (x >> (32 - n))) & MASK32_I64


@njit(cache=True)
def md5_compress_i64(state: np.ndarray, words: np.ndarray) -> None:
    a = state[0]
    b = state[1]
    c = state[2]
    d = state[3]
    for i in range(64):
        stage = _MD5_FUNC_T[i]
        if stage == 0:
            f = (b & c) | (~b & d)
        elif stage == 1:
            f = (d & b) | (~d & c)
        elif stage == 2:
            f = b ^ c ^ d
        else:
            f = c ^ (b | ~d)
        f = (f + a + _MD5_AC_T[i] + words[_MD5_G_T[i]]) & MASK32_I64
        a, b, c, d = d, (b + _rol32(f, _MD5_RC_T[i])) & MASK32_I64, b, c
    state[0] = (state[0] + a) & MASK32_I64
    state[1] = (state[1] + b) & MASK32_I64
    state[2] = (state[2] + c) & MASK32_I64
    state[3] = (state[3] + d) & MASK32_I64


@njit(cache=True)
def sha1_compress_i64(state: np.ndarray, words: np.ndarray) -> None:
    w = np.empty(80, dtype=np.int64)
    for i in range(16):
        w[i] = words[i]
    for i in range(16, 80):
        w[i] = _rol32(w[i - 3] ^ w[i - 8] ^ w[i - 14] ^ w[i - 16], 1)

    a = state[0]
    b = state[1]
    c = state[2]
    d = state[3]
    e = state[4]
    for i in range(80):
        stage = _SHA1_FUNC_T[i]
        if stage == 0:
            f = (b & c) | (~b & d)
        elif stage == 2:
            f = (b & c) | (b & d) | (c & d)
        else:
            f = b ^ c ^ d
        temp = (_rol32(a, 5) + (f & MASK32_I64) + e + _SHA1_K_T[i] + w[i]) & MASK32_I64
        a, b, c, d, e = temp, a, _rol32(b, 30), c, d
    state[0] = (state[0] + a) & MASK32_I64
    state[1] = (state[1] + b) & MASK32_I64
    state[2] = (state[2] + c) & MASK32_I64
    state[3] = (state[3] + d) & MASK32_I64
    state[4] = (state[4] + e) & MASK32_I64


def _run(kernel, regs: Sequence[int], block: bytes, dtype: str) -> List[int]:
    state = np.array([r & MASK32_I64 for r in regs], dtype=np.int64)
    words = np.frombuffer(block, dtype=dtype).astype(np.int64)
    kernel(state, words)
    return [int(x) for x in state.tolist()]


def md5_compress_block(regs: Sequence[int], block: bytes) -> List[int]:
    return _run(md5_compress_i64, regs, block, "<u4")


def sha1_compress_block(regs: Sequence[int], block: bytes) -> List[int]:
    return _run(sha1_compress_i64, regs, block, ">u4")
