from __future__ import annotations

import os
from typing import Optional

ENGINE_ENV = "HASHSUM_ENGINE"
ENGINES = ("python", "numba")
DEFAULT_ENGINE = "python"


def resolve_engine(name: Optional[str] = None) -> str:
    """Pick the compression backend: explicit name, then $HASHSUM_ENGINE, then python."""
    if name is None:
        name = os.getenv(ENGINE_ENV) or DEFAULT_ENGINE
    key = name.strip().lower()
    if key not in ENGINES:
        raise ValueError(f"unknown engine {name!r} (expected one of: {', '.join(ENGINES)})")
    return key
