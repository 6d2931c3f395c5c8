"""
Base classes and interfaces for tiny-hll stream summaries.

This module defines the abstract base classes that streaming estimators
implement to provide a consistent interface: adding items, querying the
current result, merging with another summary of the same shape, and
reporting size and error statistics.
"""

import abc
import sys
from typing import Any, Dict, Generic, TypeVar

T = TypeVar("T")  # Type for the items being processed
R = TypeVar("R")  # Type for the result of queries


class StreamSummary(Generic[T, R], abc.ABC):
    """
    Abstract base class for all streaming data structures.

    A summary is fed items one at a time through ``add`` and can be queried at
    any point. Summaries are single-writer: concurrent producers should each
    own a summary and combine them with ``merge``.
    """

    def __init__(self) -> None:
        """Initialize a new stream summary."""
        self._items_processed = 0

    @abc.abstractmethod
    def add(self, item: T) -> None:
        """
        Update the summary with a new item from the stream.

        Derived classes call ``super().add(item)`` to keep the processed
        item counter current.

        Args:
            item: The new item to process.
        """
        self._items_processed += 1

    @abc.abstractmethod
    def query(self, *args: Any, **kwargs: Any) -> R:
        """
        Query the current state of the summary.

        The parameters and return value depend on the specific algorithm.

        Returns:
            The result of the query, which depends on the specific algorithm.
        """
        pass

    @abc.abstractmethod
    def merge(self, other: "StreamSummary[T, R]") -> "StreamSummary[T, R]":
        """
        Merge this summary with another of the same type.

        Args:
            other: Another stream summary of the same type.

        Returns:
            A new merged stream summary.

        Raises:
            TypeError: If other is not of the same type.
        """
        pass

    def _check_same_type(self, other: "StreamSummary[T, R]") -> None:
        """
        Helper method to check if another summary is of the same type.

        Args:
            other: Another stream summary to check.

        Raises:
            TypeError: If other is not of the same type.
        """
        if not isinstance(other, self.__class__):
            raise TypeError(f"Cannot merge with {other.__class__.__name__}")

    def _combine_items_processed(self, other: "StreamSummary[T, R]") -> int:
        """Combined processed-item count of two summaries being merged."""
        return self._items_processed + other._items_processed

    def estimate_size(self) -> int:
        """
        Estimate the current memory usage of this summary in bytes.

        This is a rough estimate based on sys.getsizeof; derived classes add
        the size of their own data structures.

        Returns:
            Estimated memory usage in bytes.
        """
        size = sys.getsizeof(self)

        if hasattr(self, "__dict__"):
            size += sys.getsizeof(self.__dict__)

        return size

    def get_stats(self) -> Dict[str, Any]:
        """
        Get detailed statistics about the current state of the summary.

        Derived classes should override this method to include their specific
        statistics while calling super().get_stats() to include base metrics.

        Returns:
            A dictionary containing various statistics about the summary state.
        """
        stats: Dict[str, Any] = {
            "type": self.__class__.__name__,
            "items_processed": self._items_processed,
            "memory_bytes": self.estimate_size(),
        }

        error_bounds = self.error_bounds()
        if error_bounds:
            stats.update(error_bounds)

        return stats

    def error_bounds(self) -> Dict[str, float]:
        """
        Get the theoretical error bounds for this summary.

        The base implementation returns an empty dictionary.

        Returns:
            A dictionary containing error bound information specific to the algorithm.
        """
        return {}

    @property
    def items_processed(self) -> int:
        """Get the total number of items processed by this summary."""
        return self._items_processed


class CardinalityEstimator(StreamSummary[T, float], abc.ABC):
    """
    Abstract base class for cardinality estimation algorithms.

    Examples include HyperLogLog and its variants.
    """

    @abc.abstractmethod
    def count(self) -> float:
        """
        Estimate the number of distinct items seen in the stream.

        Returns:
            The estimated cardinality, never negative.
        """
        pass

    @abc.abstractmethod
    def error_estimate(self) -> float:
        """
        Theoretical relative standard error of ``count()``.

        Returns:
            The relative standard error as a fraction (0.05 means 5%).
        """
        pass

    def query(self, *args: Any, **kwargs: Any) -> float:
        """Convenience alias for ``count()``."""
        return self.count()

    def error_bounds(self) -> Dict[str, float]:
        """
        Error bands derived from the relative standard error.

        Returns:
            A dictionary with the error bounds:
            - relative_error: The relative standard error
            - confidence_68pct: Error range for 68% confidence (1 sigma)
            - confidence_95pct: Error range for 95% confidence (1.96 sigma)
            - confidence_99pct: Error range for 99% confidence (2.58 sigma)
        """
        bounds = super().error_bounds()

        std_error = self.error_estimate()
        bounds.update(
            {
                "relative_error": std_error,
                "confidence_68pct": std_error,
                "confidence_95pct": std_error * 1.96,
                "confidence_99pct": std_error * 2.58,
            }
        )

        return bounds

    def get_stats(self) -> Dict[str, Any]:
        """
        Get statistics about the current state of the cardinality estimator.

        Returns:
            A dictionary with cardinality estimation specific statistics.
        """
        stats = super().get_stats()

        stats["estimated_cardinality"] = self.count()

        return stats
