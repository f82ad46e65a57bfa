"""
Drivers that split a message into blocks and feed a DigestEngine.

All of them finish with an empty absorb when the engine has not produced its
digest after the last block (message length a multiple of 64, or a final
block too full for the length field), so a digest is always returned.
"""

from __future__ import annotations

import os
from typing import BinaryIO, Iterable, Optional, Union

from .core import BLOCK_SIZE
from .engine import Algorithm, DigestEngine
from .md5 import MD5Engine
from .sha1 import SHA1Engine

AlgorithmLike = Union[str, Algorithm]

_ENGINES = {
    Algorithm.MD5: MD5Engine,
    Algorithm.SHA1: SHA1Engine,
}


class DigestReadError(OSError):
    """Reading the message failed; the computation was abandoned and no digest exists."""


def new(algorithm: AlgorithmLike, *, engine: Optional[str] = None) -> DigestEngine:
    return _ENGINES[Algorithm.from_name(algorithm)](engine)


def _finish(ctx: DigestEngine) -> bytes:
    if not ctx.finished:
        ctx.absorb(b"")
    return ctx.digest()


def hash_slice(algorithm: AlgorithmLike, data: bytes, *, engine: Optional[str] = None) -> bytes:
    ctx = new(algorithm, engine=engine)
    view = memoryview(data)
    for off in range(0, len(view), BLOCK_SIZE):
        ctx.absorb(view[off : off + BLOCK_SIZE])
    return _finish(ctx)


def _read_block(stream: BinaryIO) -> bytes:
    # raw streams may return short reads before EOF; only EOF may end a block early
    block = b""
    while len(block) < BLOCK_SIZE:
        chunk = stream.read(BLOCK_SIZE - len(block))
        if chunk is None:
            raise BlockingIOError("non-blocking stream has no data available")
        if not chunk:
            break
        block += chunk
    return block


def hash_stream(algorithm: AlgorithmLike, stream: BinaryIO, *, engine: Optional[str] = None) -> bytes:
    ctx = new(algorithm, engine=engine)
    while True:
        try:
            block = _read_block(stream)
        except (OSError, ValueError) as e:
            # ValueError: the stream was closed
            raise DigestReadError(f"read failed: {getattr(e, 'strerror', None) or e}") from e
        ctx.absorb(block)
        if len(block) < BLOCK_SIZE:
            break
    return _finish(ctx)


def hash_chunks(algorithm: AlgorithmLike, chunks: Iterable[bytes], *, engine: Optional[str] = None) -> bytes:
    """Hash chunks of any size, keeping at most one partial block buffered."""
    ctx = new(algorithm, engine=engine)
    pending = bytearray()
    for chunk in chunks:
        pending += chunk
        full = len(pending) - len(pending) % BLOCK_SIZE
        for off in range(0, full, BLOCK_SIZE):
            ctx.absorb(bytes(pending[off : off + BLOCK_SIZE]))
        del pending[:full]
    ctx.absorb(bytes(pending))
    return _finish(ctx)


def hash_file(algorithm: AlgorithmLike, path: Union[str, os.PathLike], *, engine: Optional[str] = None) -> bytes:
    try:
        fh = open(path, "rb")
    except OSError as e:
        raise DigestReadError(f"cannot open: {e.strerror or e}") from e
    with fh:
        return hash_stream(algorithm, fh, engine=engine)
