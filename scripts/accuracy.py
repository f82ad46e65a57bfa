#!/usr/bin/env python3
"""Accuracy checks for the streaming MD5/SHA-1 engines against hashlib."""
from __future__ import annotations

import argparse
import hashlib
import io
import random
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from hashsum.drivers import hash_chunks, hash_slice, hash_stream
from hashsum.engine import Algorithm


def check_vectors(engine: str) -> bool:
    vectors = [
        b"",
        b"a",
        b"abc",
        b"message digest",
        b"abcdefghijklmnopqrstuvwxyz",
        b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789",
    ]
    ok = True
    for alg in Algorithm:
        for msg in vectors:
            ours = hash_slice(alg, msg, engine=engine).hex()
            ref = hashlib.new(alg.label, msg).hexdigest()
            if ours != ref:
                print(f"{alg.label} mismatch: {msg!r} ours={ours} ref={ref}")
                ok = False
    print(f"vectors[{engine}]: {'PASS' if ok else 'FAIL'}")
    return ok


def check_boundaries(engine: str) -> bool:
    # every length around one and two block boundaries
    ok = True
    for alg in Algorithm:
        for n in range(0, 3 * 64 + 1):
            msg = bytes((i * 7 + n) & 0xFF for i in range(n))
            if hash_slice(alg, msg, engine=engine) != hashlib.new(alg.label, msg).digest():
                print(f"{alg.label} boundary mismatch at length {n}")
                ok = False
    print(f"boundaries[{engine}]: {'PASS' if ok else 'FAIL'}")
    return ok


def _random_split(rng: random.Random, msg: bytes) -> list:
    parts = []
    off = 0
    while off < len(msg):
        step = rng.randint(1, 200)
        parts.append(msg[off : off + step])
        off += step
    return parts


def check_random(trials: int, seed: int, engine: str) -> bool:
    rng = random.Random(seed)
    ok = True
    for _ in range(trials):
        msg = rng.randbytes(rng.randint(0, 4096))
        for alg in Algorithm:
            ref = hashlib.new(alg.label, msg).digest()
            results = (
                hash_slice(alg, msg, engine=engine),
                hash_stream(alg, io.BytesIO(msg), engine=engine),
                hash_chunks(alg, _random_split(rng, msg), engine=engine),
            )
            if any(r != ref for r in results):
                print(f"{alg.label} random mismatch: len={len(msg)}")
                ok = False
    print(f"random[{engine}]: {'PASS' if ok else 'FAIL'} trials={trials}")
    return ok


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--trials", type=int, default=50)
    ap.add_argument("--seed", type=int, default=123)
    ap.add_argument("--engine", choices=["python", "numba"], default="python")
    args = ap.parse_args()

    ok = True
    ok &= check_vectors(args.engine)
    ok &= check_boundaries(args.engine)
    ok &= check_random(args.trials, args.seed, args.engine)

    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
