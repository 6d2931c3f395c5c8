"""
HyperLogLog Example for tiny-hll.

This example demonstrates how to use the HyperLogLog estimator
for distinct counting on data streams.
"""

import logging
import random

from tiny_hll import HyperLogLog


def demonstrate_basic_hyperloglog():
    """Count distinct integers in a simulated stream."""
    print("\n=== Basic HyperLogLog Demo ===")

    hll = HyperLogLog(4096)

    print(f"Using m={hll.m} registers (error ~{hll.error_estimate():.2%})")
    print(f"Memory usage: ~{hll.estimate_size()} bytes")

    print("\nProcessing 100,000 integers...")
    for i in range(100000):
        hll.add(i)

        if i % 20000 == 0:
            print(f"  Processed {i} items, current estimate: {hll.count():.0f}")

    final_estimate = hll.count()
    print(f"\nFinal cardinality estimate: {final_estimate:.0f} (true: 100000)")
    print(f"Relative error: {abs(final_estimate - 100000) / 100000:.2%}")

    stats = hll.get_stats()
    print("\nEstimator statistics:")
    print(f"  Number of registers: {stats['num_registers']}")
    print(f"  Empty registers: {stats['empty_registers']}")
    print(f"  Maximum register value: {stats['max_register_value']}")
    print(f"  95% confidence band: +/-{stats['confidence_95pct']:.2%}")


def demonstrate_sharded_counting():
    """Count unique visitors across several web servers and merge the shards."""
    print("\n=== Sharded Unique Visitors Demo ===")

    rng = random.Random(42)
    shards = [HyperLogLog.create_from_error_rate(0.02) for _ in range(4)]
    seen = set()

    for _ in range(200000):
        visitor = f"visitor-{rng.randint(0, 50000)}"
        seen.add(visitor)
        rng.choice(shards).add(visitor)

    merged = shards[0]
    for shard in shards[1:]:
        merged = merged.merge(shard)

    print(f"Registers per shard: {merged.m}")
    for idx, shard in enumerate(shards):
        print(f"  Shard {idx}: ~{shard.count():.0f} unique visitors")
    print(f"Merged estimate: {merged.count():.0f} (true: {len(seen)})")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    demonstrate_basic_hyperloglog()
    demonstrate_sharded_counting()
