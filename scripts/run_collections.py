#!/usr/bin/env python3
"""
Convenience wrapper to run the collection emptiness checks.

Usage:
    python scripts/run_collections.py [--config config/harness.json]
    python scripts/run_collections.py --iterations 100000 --warmup-ms 0
"""

import argparse
from datetime import datetime
from pathlib import Path

from perfharness.config import build_stabilizer, load_config
from perfharness.harness import PerformanceHarness
from perfharness.scenarios import run_collection_checks


def main() -> None:
    parser = argparse.ArgumentParser(description="Run collection emptiness-check measurements")
    parser.add_argument(
        "--config",
        default=str(Path("config") / "harness.json"),
        help="Path to harness configuration JSON",
    )
    parser.add_argument("--iterations", type=int, help="Override timed iterations per case")
    parser.add_argument("--warmup-ms", type=float, help="Override warm-up duration in milliseconds")
    parser.add_argument(
        "--no-stabilize",
        action="store_true",
        help="Skip garbage collection, pinning and priority changes",
    )
    args = parser.parse_args()

    config = load_config(args.config)
    if args.iterations is not None:
        config.iterations = args.iterations
    if args.warmup_ms is not None:
        config.warmup_ms = args.warmup_ms
    if args.no_stabilize:
        config.stabilizer.enabled = False

    stabilizer = build_stabilizer(config, logger=lambda msg: print(f"[affinity] {msg}"))
    harness = PerformanceHarness(stabilizer=stabilizer)

    print("=" * 80)
    print("COLLECTION CHECKS")
    print("=" * 80)
    print(f"Started at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print(f"Iterations per case: {config.iterations} | Warm-up: {config.warmup_ms:g} ms")
    print()

    run_collection_checks(harness, config.iterations, config.warmup_ms, config.list_size)

    print("=" * 80)


if __name__ == "__main__":
    main()
