"""
Core functionality for tiny-hll.
"""

from tiny_hll.core.base import CardinalityEstimator, StreamSummary
from tiny_hll.core.hash import HashableInput, fnv1a_64, murmurhash3_64, to_bytes

__all__ = [
    # Base classes
    "StreamSummary",
    "CardinalityEstimator",
    # Utility functions
    "HashableInput",
    "to_bytes",
    "murmurhash3_64",
    "fnv1a_64",
]
