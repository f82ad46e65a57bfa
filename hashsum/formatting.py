from __future__ import annotations

import base64
from typing import Sequence

from .core import words_to_bytes


def registers_to_digest(registers: Sequence[int], byteorder: str) -> bytes:
    # MD5 serializes each register little-endian, SHA-1 big-endian
    return words_to_bytes(registers, byteorder)


def to_hex(digest: bytes) -> str:
    return digest.hex()


def to_base64(digest: bytes) -> str:
    return base64.b64encode(digest).decode("ascii")


def format_line(
    label: str,
    digest: bytes,
    name: str,
    *,
    use_base64: bool = False,
    untagged: bool = False,
) -> str:
    """
    Render one output line for `name`.
      - tagged (default, BSD style): "MD5 (name) = <digest>"
      - untagged: "<digest>  name"
    """
    rendered = to_base64(digest) if use_base64 else to_hex(digest)
    if untagged:
        return f"{rendered}  {name}"
    return f"{label.upper()} ({name}) = {rendered}"
