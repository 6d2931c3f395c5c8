"""
Unit tests for hashing functions.
"""

import unittest
from collections import Counter

from tiny_hll.core.hash import HashableInput, fnv1a_64, murmurhash3_64, to_bytes


class Point:
    """Item type exposing its own canonical bytes."""

    def __init__(self, x: int, y: int):
        self.x = x
        self.y = y

    def digest(self) -> bytes:
        return f"{self.x},{self.y}".encode("ascii")


class TestToBytes(unittest.TestCase):
    """Test cases for canonical byte conversion."""

    def test_strings_and_bytes(self):
        self.assertEqual(to_bytes("héllo"), "héllo".encode("utf-8"))
        self.assertEqual(to_bytes(b"raw"), b"raw")
        self.assertEqual(to_bytes(bytearray(b"raw")), b"raw")

    def test_other_types_use_repr(self):
        self.assertEqual(to_bytes(123), b"123")
        self.assertEqual(to_bytes((1, 2)), b"(1, 2)")
        self.assertNotEqual(to_bytes(123), to_bytes(123.0))

    def test_hashable_input(self):
        """Objects with digest() are hashed through their own bytes."""
        point = Point(3, 4)
        self.assertIsInstance(point, HashableInput)
        self.assertEqual(to_bytes(point), b"3,4")

        # Two distinct objects with the same digest hash identically
        self.assertEqual(murmurhash3_64(Point(1, 2)), murmurhash3_64(Point(1, 2)))
        self.assertEqual(murmurhash3_64(Point(1, 2)), murmurhash3_64(b"1,2"))


class TestHashFunctions(unittest.TestCase):
    """Test cases for hash functions in tiny_hll.core.hash."""

    def test_known_values(self):
        # MurmurHash3 of empty input with seed 0 finalizes an all-zero state
        self.assertEqual(murmurhash3_64(""), 0)
        self.assertNotEqual(murmurhash3_64("", seed=1), 0)

        # FNV-1a reference vectors
        self.assertEqual(fnv1a_64(""), 0xCBF29CE484222325)
        self.assertEqual(fnv1a_64("a"), 0xAF63DC4C8601EC8C)

    def test_reproducibility(self):
        """Both hashes return the same value for the same input."""
        test_cases = [
            "hello world",
            "",
            "a" * 100,  # Long string, several 16-byte blocks
            "exactly16bytes!!",
            123,
            3.14,
            (1, 2, 3),
            {"key": "value"},
        ]

        for func in (murmurhash3_64, fnv1a_64):
            for input_value in test_cases:
                self.assertEqual(
                    func(input_value),
                    func(input_value),
                    f"{func.__name__} gave different results for {input_value!r}",
                )

    def test_range(self):
        for func in (murmurhash3_64, fnv1a_64):
            for i in range(1000):
                value = func(f"item-{i}")
                self.assertGreaterEqual(value, 0)
                self.assertLess(value, 2**64)

    def test_different_inputs(self):
        """Test that different inputs produce different hashes."""
        inputs = [
            "hello",
            "Hello",  # Case sensitive
            "hello ",  # Extra space
            "world",
            123,
            123.0,  # Different type but same value
            (1, 2),
            (2, 1),  # Different order
        ]

        for func in (murmurhash3_64, fnv1a_64):
            hashes = [func(x) for x in inputs]
            self.assertEqual(
                len(set(hashes)), len(inputs), f"{func.__name__} produced a collision"
            )

    def test_tail_lengths(self):
        """Every tail length from 0 to 15 bytes hashes to a distinct value."""
        base = "abcdefghijklmnopqrstuvwxyz0123456789"
        hashes = {murmurhash3_64(base[:n]) for n in range(len(base) + 1)}
        self.assertEqual(len(hashes), len(base) + 1)

    def test_seed(self):
        """Test that different seeds produce different outputs."""
        input_value = "test seed"

        for func in (murmurhash3_64, fnv1a_64):
            hashes = {func(input_value, seed=s) for s in (0, 1, 42)}
            self.assertEqual(
                len(hashes), 3, f"{func.__name__} produced same hash for different seeds"
            )

    def test_murmurhash3_low_bit_distribution(self):
        """Sequential integers spread evenly over buckets taken from the low bits."""
        num_samples = 10000
        num_buckets = 16

        counter = Counter(murmurhash3_64(i) % num_buckets for i in range(num_samples))
        expected = num_samples / num_buckets

        self.assertEqual(len(counter), num_buckets)
        for bucket, count in counter.items():
            self.assertGreaterEqual(
                count, expected * 0.8, f"MurmurHash3 bucket {bucket} has too few items"
            )
            self.assertLessEqual(
                count, expected * 1.2, f"MurmurHash3 bucket {bucket} has too many items"
            )

    def test_murmurhash3_high_bit_distribution(self):
        """The top bit is set for about half of all hashes."""
        num_samples = 10000
        top_bit_set = sum(1 for i in range(num_samples) if murmurhash3_64(i) >> 63)

        self.assertGreater(top_bit_set, num_samples * 0.45)
        self.assertLess(top_bit_set, num_samples * 0.55)


if __name__ == "__main__":
    unittest.main()
