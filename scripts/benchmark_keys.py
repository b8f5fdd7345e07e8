"""
Benchmark block key derivation for a keyed hash tree.

Times :meth:`KeyedHashTree.key` for a zero root key over HMAC-SHA256 with a
1 KiB block size, a 4 GiB maximum size and a branching factor of 8 unless
told otherwise:

    uv run scripts/benchmark_keys.py --iterations 100000 --factor 1024
"""

from __future__ import annotations

import argparse
import logging
import time
from typing import List, Optional

from kht import KeyedHashTree, TreeParams, hmac_hash
from kht.logging_config import configure_logging

logger = logging.getLogger(__name__)


def benchmark(tree: KeyedHashTree, iterations: int, offset: int = 0) -> float:
    """Return mean seconds per derived key over ``iterations`` calls."""
    if iterations <= 0:
        raise ValueError("iterations must be positive")
    start = time.perf_counter()
    for _ in range(iterations):
        tree.key(offset)
    return (time.perf_counter() - start) / iterations


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Benchmark keyed hash tree key derivation."
    )
    parser.add_argument(
        "--block-size",
        type=int,
        default=1024,
        help="Leaf block size in bytes (default: 1024)",
    )
    parser.add_argument(
        "--max-size",
        type=int,
        default=1 << 32,
        help="Maximum addressable size in bytes (default: 4294967296)",
    )
    parser.add_argument(
        "--factor",
        type=float,
        default=8.0,
        help="Branching factor (default: 8)",
    )
    parser.add_argument(
        "--digest",
        default="sha256",
        help="hashlib algorithm used under HMAC (default: sha256)",
    )
    parser.add_argument(
        "--offset",
        type=int,
        default=0,
        help="Offset to derive on every iteration (default: 0)",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        default=10_000,
        help="Number of derivations to time (default: 10000)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    params = TreeParams(args.block_size, args.max_size, args.factor)
    tree = KeyedHashTree.from_params(bytes(32), hmac_hash(args.digest), params)
    logger.info("benchmarking %r over %d iterations", tree, args.iterations)

    mean = benchmark(tree, args.iterations, offset=args.offset)
    print(f"{mean * 1e6:.2f} us/key (depth {tree.depth}, {args.iterations} iterations)")


if __name__ == "__main__":  # pragma: no cover - CLI entry
    main()
