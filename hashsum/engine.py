"""
Streaming digest engine shared by MD5 and SHA-1.

An engine absorbs the message one block (at most 64 bytes) at a time. A full
64-byte block is compressed as is; any shorter block is the end of the
message and gets padded: 0x80, zeros, then the 64-bit bit length in the
algorithm's byte order. When the short block leaves fewer than 8 spare bytes
the length does not fit, the engine compresses an all-padding block and waits
for one more (empty) absorb call to emit the length-bearing block.

Padding progress is a three-state machine:

    AWAITING_DATA --short block, length fits--------------> DONE
    AWAITING_DATA --short block, length does not fit------> AWAITING_LENGTH_BLOCK
    AWAITING_LENGTH_BLOCK --empty block-------------------> DONE
"""

from __future__ import annotations

import enum
import importlib
from typing import List, Optional, Tuple

from .config import resolve_engine
from .core import BLOCK_SIZE, LENGTH_OFFSET, MASK64
from .formatting import registers_to_digest, to_hex


class BlockSizeError(ValueError):
    """A caller broke the chunking contract (block over 64 bytes, or data after the final block)."""


class EngineFinishedError(RuntimeError):
    """absorb() was called on an engine that already produced its digest."""


class DigestNotReadyError(RuntimeError):
    """The digest was requested before the final block was absorbed."""


class Algorithm(enum.Enum):
    MD5 = ("md5", 16, 4, "little")
    SHA1 = ("sha1", 20, 5, "big")

    def __init__(self, label: str, digest_size: int, register_count: int, byteorder: str) -> None:
        self.label = label
        self.digest_size = digest_size
        self.register_count = register_count
        self.byteorder = byteorder

    @property
    def hex_length(self) -> int:
        return 2 * self.digest_size

    @classmethod
    def from_name(cls, name: "str | Algorithm") -> "Algorithm":
        if isinstance(name, Algorithm):
            return name
        key = name.strip().lower().replace("-", "")
        for alg in cls:
            if alg.label == key:
                return alg
        raise ValueError(f"unknown algorithm {name!r} (expected md5 or sha1)")


class PadState(enum.Enum):
    AWAITING_DATA = "awaiting-data"
    AWAITING_LENGTH_BLOCK = "awaiting-length-block"
    DONE = "done"


class DigestEngine:
    algorithm: Algorithm
    iv: Tuple[int, ...]

    def __init__(self, engine: Optional[str] = None) -> None:
        self.backend = resolve_engine(engine)
        self._regs: List[int] = list(self.iv)
        self._total_bits = 0
        self._state = PadState.AWAITING_DATA
        self._digest: Optional[bytes] = None
        self.blocks_compressed = 0

    @property
    def state(self) -> PadState:
        return self._state

    @property
    def finished(self) -> bool:
        return self._state is PadState.DONE

    @property
    def total_bits(self) -> int:
        return self._total_bits

    def registers(self) -> Tuple[int, ...]:
        return tuple(self._regs)

    def absorb(self, block: bytes) -> bool:
        """Consume one block of at most 64 bytes; returns True once the digest is ready."""
        if self._state is PadState.DONE:
            raise EngineFinishedError(f"{self.algorithm.label} engine already produced its digest")
        n = len(block)
        if n > BLOCK_SIZE:
            raise BlockSizeError(f"block of {n} bytes passed to absorb; must be {BLOCK_SIZE} bytes or less")
        if self._state is PadState.AWAITING_LENGTH_BLOCK and n:
            raise BlockSizeError("only an empty block may follow the final data block")

        self._total_bits = (self._total_bits + 8 * n) & MASK64

        if n == BLOCK_SIZE:
            self._process(bytes(block))
            return False

        self._process(self._pad(bytes(block)))
        if self._state is PadState.DONE:
            self._digest = registers_to_digest(self._regs, self.algorithm.byteorder)
        return self.finished

    def _pad(self, block: bytes) -> bytes:
        buf = bytearray(block)
        if self._state is PadState.AWAITING_DATA:
            buf.append(0x80)
        if BLOCK_SIZE - len(buf) >= 8:
            buf.extend(bytes(LENGTH_OFFSET - len(buf)))
            buf.extend(self._total_bits.to_bytes(8, self.algorithm.byteorder))
            self._state = PadState.DONE
        else:
            buf.extend(bytes(BLOCK_SIZE - len(buf)))
            self._state = PadState.AWAITING_LENGTH_BLOCK
        return bytes(buf)

    def _process(self, block: bytes) -> None:
        if self.backend == "numba":
            self._regs = self._compress_numba(block)
        else:
            self._regs = self._compress_python(block)
        self.blocks_compressed += 1

    def _compress_python(self, block: bytes) -> List[int]:
        raise NotImplementedError

    def _compress_numba(self, block: bytes) -> List[int]:
        raise NotImplementedError

    @staticmethod
    def _numba_kernels():
        try:
            return importlib.import_module(".numba_engine", __package__)
        except ImportError as e:
            raise RuntimeError("numba is not available (pip install numba); use --engine python") from e

    def digest(self) -> bytes:
        if self._digest is None:
            raise DigestNotReadyError(f"{self.algorithm.label} digest requested before the final block")
        return self._digest

    def hexdigest(self) -> str:
        return to_hex(self.digest())
