"""
HyperLogLog cardinality estimator.

Registers are addressed by the hash value modulo the register count, and each
register keeps the largest count of leading zero bits seen among the 64-bit
hashes of the items routed to it. The estimate is the bias-corrected harmonic
mean of those registers, with linear counting taking over while the estimate
is still small and empty registers remain.
"""

import array
import logging
import math
import sys
from typing import Any, Callable, Dict, List, TypeVar

from tiny_hll.core.base import CardinalityEstimator
from tiny_hll.core.hash import murmurhash3_64

T = TypeVar("T")  # Type for the items being processed

logger = logging.getLogger(__name__)

HASH_BITS = 64


def _count_leading_zeros(x: int, bits: int = HASH_BITS) -> int:
    """
    Count the number of leading zeros in the binary representation of x.

    Args:
        x: The integer to analyze
        bits: The total number of bits to consider (default: 64 for 64-bit hashes)

    Returns:
        The number of leading zeros
    """
    if x == 0:
        return bits

    return bits - x.bit_length()


class HyperLogLog(CardinalityEstimator[T]):
    """
    HyperLogLog for cardinality estimation in data streams.

    The register count (m) determines both the accuracy and the memory usage:
    - Memory usage is m one-byte registers
    - The standard error is 1.04/sqrt(m)

    For common use cases:
    - m=256: ~6.5% error
    - m=1024: ~3.25% error
    - m=4096: ~1.62% error

    Any m >= 1 works; the bias constants for m in {16, 32, 64} come from a
    fixed table and every other m uses the asymptotic formula.

    Adding the same item any number of times leaves the estimate unchanged.
    The estimator is not safe for concurrent writers; give each writer its
    own estimator and combine them with ``merge``.

    References:
        - Flajolet, P., Fusy, E., Gandouet, O., & Meunier, F. (2007).
          HyperLogLog: the analysis of a near-optimal cardinality estimation algorithm.
    """

    _ALPHA_TABLE = {16: 0.673, 32: 0.697, 64: 0.709}

    # Raw estimates above this multiple of m need no small-range correction
    _THRESHOLD_SMALL = 2.5

    def __init__(
        self,
        m: int,
        hash_func: Callable[[Any], int] = murmurhash3_64,
    ):
        """
        Initialize a new HyperLogLog estimator.

        Args:
            m: Number of registers. Must be a positive integer.
            hash_func: Function mapping an item to an unsigned 64-bit integer.
                       It must be deterministic and well mixed in every bit,
                       since the register index and the rank come from the
                       same hash value.

        Raises:
            TypeError: If m is not an integer.
            ValueError: If m is smaller than 1.
        """
        super().__init__()

        if isinstance(m, bool) or not isinstance(m, int):
            raise TypeError(f"Register count must be an integer, got {type(m).__name__}")
        if m < 1:
            raise ValueError(f"Register count must be at least 1, got {m}")

        self._m = m
        self._alpha = self.alpha(m)
        self._hash_func = hash_func

        # 'B' typecode gives unsigned char (0 to 255); ranks never exceed 64
        self._registers = array.array("B", [0] * m)

    @staticmethod
    def alpha(m: int) -> float:
        """
        Bias-correction constant for a given register count.

        Args:
            m: Number of registers.

        Returns:
            0.673, 0.697 or 0.709 for m of 16, 32 or 64, otherwise 0.7213 / (1 + 1.079 / m).
        """
        if m in HyperLogLog._ALPHA_TABLE:
            return HyperLogLog._ALPHA_TABLE[m]
        return 0.7213 / (1.0 + 1.079 / m)

    @property
    def m(self) -> int:
        """Number of registers."""
        return self._m

    def __len__(self) -> int:
        return self._m

    def add(self, item: T) -> None:
        """
        Add an item to the estimator.

        This method:
        1. Hashes the item to a 64-bit value
        2. Selects the register at hash modulo m
        3. Counts the leading zeros of the full 64-bit hash
        4. Raises the register to that count if it is currently lower

        Args:
            item: The item to add. Strings, bytes, HashableInput objects and
                  anything with a stable repr() are accepted.
        """
        super().add(item)

        hash_value = self._hash_func(item) & 0xFFFFFFFFFFFFFFFF

        register_index = hash_value % self._m
        rank = _count_leading_zeros(hash_value)

        if rank > self._registers[register_index]:
            self._registers[register_index] = rank

    def raw_estimate(self) -> float:
        """
        Bias-corrected harmonic-mean estimate, before small-range correction.

        Registers hold 0-based leading-zero counts, whereas the published
        estimator is defined over 1-based ranks; the factor of 2 converts
        between the two, since sum(2^-(v+1)) == sum(2^-v) / 2.

        Returns:
            alpha(m) * m^2 * 2 / sum(2^-register).
        """
        m = self._m
        harmonic_sum = sum(math.pow(2.0, -value) for value in self._registers)
        z = 1.0 / harmonic_sum
        estimate = self._alpha * m * m * 2.0 * z
        logger.debug("harmonic sum: %s; z: %s; raw estimate: %s", harmonic_sum, z, estimate)
        return estimate

    def linear_count(self, zero_count: int) -> float:
        """
        Linear counting estimate for a given number of zero registers.

        Args:
            zero_count: Number of registers still at 0. Must be positive.

        Returns:
            m * ln(m / zero_count).

        Raises:
            ValueError: If zero_count is not between 1 and m.
        """
        if not 1 <= zero_count <= self._m:
            raise ValueError(
                f"zero_count must be between 1 and {self._m}, got {zero_count}"
            )
        m = float(self._m)
        return m * math.log(m / zero_count)

    def count(self) -> float:
        """
        Estimate the number of distinct items added so far.

        Uses the raw harmonic-mean estimate when it exceeds 2.5 * m, and
        linear counting otherwise. If no register is zero, linear counting is
        undefined and the raw estimate is returned as is.

        Returns:
            The estimated cardinality. An empty estimator returns exactly 0.0.
        """
        estimate = self.raw_estimate()
        if estimate > self._THRESHOLD_SMALL * self._m:
            return estimate

        zero_count = self._registers.count(0)
        if zero_count == 0:
            logger.debug("small range with no empty registers, keeping raw estimate")
            return estimate

        logger.debug("small range, linear counting over %d empty registers", zero_count)
        return self.linear_count(zero_count)

    def error_estimate(self) -> float:
        """
        Theoretical relative standard error, 1.04 / sqrt(m).
        """
        return 1.04 / math.sqrt(self._m)

    def merge(self, other: "HyperLogLog[T]") -> "HyperLogLog[T]":
        """
        Merge this HyperLogLog with another one.

        The merged estimator holds the register-wise maximum of both inputs,
        which is the state a single estimator would reach after seeing both
        streams. Neither input is modified.

        Args:
            other: Another HyperLogLog estimator.

        Returns:
            A new merged HyperLogLog estimator.

        Raises:
            TypeError: If other is not a HyperLogLog.
            ValueError: If estimators have a different number of registers or
                        use different hash functions.
        """
        self._check_same_type(other)

        if self._m != other._m:
            raise ValueError(
                f"Cannot merge HyperLogLog estimators with different register counts: "
                f"{self._m} and {other._m}"
            )

        # Registers are only comparable when items were routed by the same hash
        if self._hash_func is not other._hash_func:
            raise ValueError(
                f"Cannot merge HyperLogLog estimators with different hash functions: "
                f"{getattr(self._hash_func, '__name__', self._hash_func)!s} and "
                f"{getattr(other._hash_func, '__name__', other._hash_func)!s}"
            )

        result = type(self)(self._m, hash_func=self._hash_func)

        for i in range(self._m):
            result._registers[i] = max(self._registers[i], other._registers[i])

        result._items_processed = self._combine_items_processed(other)

        logger.debug("merged two estimators with %d registers", self._m)
        return result

    @classmethod
    def create_from_error_rate(
        cls,
        relative_error: float,
        hash_func: Callable[[Any], int] = murmurhash3_64,
    ) -> "HyperLogLog[T]":
        """
        Create a HyperLogLog estimator with the desired error guarantees.

        Args:
            relative_error: The target relative standard error, e.g. 0.01 for 1%
            hash_func: Hash function passed through to the constructor

        Returns:
            The smallest estimator whose error_estimate() does not exceed relative_error

        Raises:
            ValueError: If relative_error is not between 0 and 1
        """
        if not (0 < relative_error < 1):
            raise ValueError("Relative error must be between 0 and 1")

        # 1.04 / sqrt(m) <= e  =>  m >= (1.04 / e)^2
        m = max(1, math.ceil((1.04 / relative_error) ** 2))

        return cls(m, hash_func=hash_func)

    def get_register_values(self) -> List[int]:
        """
        Get the current values of all registers.

        Returns:
            A list containing the current register values.
        """
        return list(self._registers)

    def get_stats(self) -> Dict[str, Any]:
        """
        Get detailed statistics about the current state of the HyperLogLog estimator.

        Returns:
            A dictionary containing register distribution, bias constant,
            error bounds and the current estimate.
        """
        stats = super().get_stats()

        register_values = list(self._registers)
        max_register = max(register_values)

        register_distribution = {}
        for value in range(max_register + 1):
            count = register_values.count(value)
            if count > 0:
                # String keys keep the dict JSON compatible
                register_distribution[str(value)] = count

        stats.update(
            {
                "num_registers": self._m,
                "alpha_value": self._alpha,
                "empty_registers": register_values.count(0),
                "max_register_value": max_register,
                "avg_register_value": sum(register_values) / self._m,
                "register_value_distribution": register_distribution,
            }
        )

        return stats

    def estimate_size(self) -> int:
        """
        Estimate the current memory usage of the HyperLogLog in bytes.

        Returns:
            Estimated size in bytes.
        """
        size = super().estimate_size()

        size += sys.getsizeof(self._m)
        size += sys.getsizeof(self._alpha)

        # getsizeof on array.array already includes its buffer
        size += sys.getsizeof(self._registers)

        return size
