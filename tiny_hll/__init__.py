"""
tiny-hll - Lightweight Distinct Counting for Data Streams

tiny-hll estimates the number of distinct items in a stream with a fixed,
small amount of memory using the HyperLogLog algorithm.
"""

__version__ = "0.1.0"

# Import main classes to make them available at the top level
from tiny_hll.algorithms.hyperloglog import HyperLogLog
from tiny_hll.core.base import CardinalityEstimator, StreamSummary
from tiny_hll.core.hash import HashableInput, fnv1a_64, murmurhash3_64

__all__ = [
    # Core base classes
    "StreamSummary",
    "CardinalityEstimator",
    # Hashing
    "HashableInput",
    "murmurhash3_64",
    "fnv1a_64",
    # Algorithm implementations
    "HyperLogLog",
]
