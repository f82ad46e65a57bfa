#!/usr/bin/env python3
"""Throughput micro-benchmarks for the python and numba compression backends."""
from __future__ import annotations

import argparse
import io
import random
import time
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from hashsum.drivers import hash_slice, hash_stream
from hashsum.engine import Algorithm


def bench(alg: Algorithm, engine: str, data: bytes, repeat: int) -> None:
    # warm-up pays the numba JIT cost outside the timed region
    hash_slice(alg, data[:64], engine=engine)
    start = time.time()
    for _ in range(repeat):
        hash_stream(alg, io.BytesIO(data), engine=engine)
    elapsed = time.time() - start
    total = len(data) * repeat
    rate = total / elapsed / 1024 if elapsed else 0.0
    print(f"{alg.label}[{engine}]: bytes={total} time={elapsed:.3f}s rate={rate:.1f} KiB/s")


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--size", type=int, default=64 * 1024)
    ap.add_argument("--repeat", type=int, default=3)
    ap.add_argument("--seed", type=int, default=1)
    ap.add_argument("--engines", nargs="+", choices=["python", "numba"], default=["python", "numba"])
    args = ap.parse_args()

    data = random.Random(args.seed).randbytes(args.size)
    for alg in Algorithm:
        for engine in args.engines:
            bench(alg, engine, data, args.repeat)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
