#!/usr/bin/env python3
"""
DTO Style Benchmark Script
Compares record (immutable) and bean (mutable) user events on creation,
serialization and deserialization cost, and prints a summary.

Usage: python scripts/benchmark_dto_styles.py [iterations] [warmup]
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

load_dotenv()

from user_events.services.benchmark_service import ITERATIONS, WARMUP_ITERATIONS, run_all


def main(argv):
    iterations = int(argv[1]) if len(argv) > 1 else ITERATIONS
    warmup = int(argv[2]) if len(argv) > 2 else WARMUP_ITERATIONS

    print("\n" + "=" * 60)
    print(f"RECORD vs BEAN ({iterations} iterations, {warmup} warmup)")
    print("=" * 60)

    for result in run_all(iterations, warmup):
        print(f"\n{result.operation}:")
        print(f"   Record: {result.record_avg_ns:,.2f} ns")
        print(f"   Bean:   {result.bean_avg_ns:,.2f} ns")
        print(f"   Diff:   {result.difference_pct:.2f}% ({result.faster} faster)")

    print("\n" + "=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
