"""
Hashing functions for tiny-hll.

This module provides 64-bit hash implementations that require no external dependencies.
These functions are chosen for distribution quality and determinism across processes,
not cryptographic security. Python's built-in hash() is salted per process, so it is
never used here.
"""

from typing import Any, Protocol, runtime_checkable

_MASK_64 = 0xFFFFFFFFFFFFFFFF


@runtime_checkable
class HashableInput(Protocol):
    """
    Capability for items that know their own canonical byte representation.

    Any object exposing a ``digest()`` method returning bytes can be fed to the
    hash functions in this module; the returned bytes are hashed instead of the
    object's repr().
    """

    def digest(self) -> bytes:
        """Return a deterministic byte representation of the object."""
        ...


def to_bytes(key: Any) -> bytes:
    """
    Convert an arbitrary item into the bytes that get hashed.

    Args:
        key: The item to convert.

    Returns:
        The canonical byte representation of the item.
    """
    if isinstance(key, HashableInput):
        return bytes(key.digest())
    if isinstance(key, (bytes, bytearray)):
        return bytes(key)
    if isinstance(key, str):
        return key.encode("utf-8")
    # Use repr() to get a more unique string for various objects
    return repr(key).encode("utf-8")


def _rotl64(x: int, r: int) -> int:
    return ((x << r) | (x >> (64 - r))) & _MASK_64


def _fmix64(k: int) -> int:
    """MurmurHash3 64-bit finalizer (avalanche step)."""
    k ^= k >> 33
    k = (k * 0xFF51AFD7ED558CCD) & _MASK_64
    k ^= k >> 33
    k = (k * 0xC4CEB3A185EC34FB) & _MASK_64
    k ^= k >> 33
    return k


def murmurhash3_64(key: Any, seed: int = 0) -> int:
    """
    Pure Python implementation of MurmurHash3 (x64, 128-bit variant), truncated to 64 bits.

    The full 128-bit state is computed and the low 64 bits (h1) are returned, which is
    what most 64-bit bindings of MurmurHash3 expose.

    Args:
        key: The key to hash (will be converted to bytes if not already)
        seed: Optional seed for the hash (only the low 32 bits are used)

    Returns:
        Unsigned 64-bit hash value
    """
    data = to_bytes(key)
    length = len(data)

    c1 = 0x87C37B91114253D5
    c2 = 0x4CF5AD432745937F

    h1 = seed & 0xFFFFFFFF
    h2 = seed & 0xFFFFFFFF

    # Body: 16-byte blocks, two little-endian 64-bit lanes each
    nblocks = length // 16
    for i in range(nblocks):
        offset = i * 16
        k1 = int.from_bytes(data[offset : offset + 8], "little")
        k2 = int.from_bytes(data[offset + 8 : offset + 16], "little")

        k1 = (k1 * c1) & _MASK_64
        k1 = _rotl64(k1, 31)
        k1 = (k1 * c2) & _MASK_64
        h1 ^= k1

        h1 = _rotl64(h1, 27)
        h1 = (h1 + h2) & _MASK_64
        h1 = (h1 * 5 + 0x52DCE729) & _MASK_64

        k2 = (k2 * c2) & _MASK_64
        k2 = _rotl64(k2, 33)
        k2 = (k2 * c1) & _MASK_64
        h2 ^= k2

        h2 = _rotl64(h2, 31)
        h2 = (h2 + h1) & _MASK_64
        h2 = (h2 * 5 + 0x38495AB5) & _MASK_64

    # Tail: up to 15 remaining bytes
    tail = data[nblocks * 16 :]
    if len(tail) > 8:
        k2 = int.from_bytes(tail[8:], "little")
        k2 = (k2 * c2) & _MASK_64
        k2 = _rotl64(k2, 33)
        k2 = (k2 * c1) & _MASK_64
        h2 ^= k2
    if len(tail) > 0:
        k1 = int.from_bytes(tail[:8], "little")
        k1 = (k1 * c1) & _MASK_64
        k1 = _rotl64(k1, 31)
        k1 = (k1 * c2) & _MASK_64
        h1 ^= k1

    # Finalization
    h1 ^= length
    h2 ^= length

    h1 = (h1 + h2) & _MASK_64
    h2 = (h2 + h1) & _MASK_64

    h1 = _fmix64(h1)
    h2 = _fmix64(h2)

    h1 = (h1 + h2) & _MASK_64

    return h1


def fnv1a_64(key: Any, seed: int = 0) -> int:
    """
    Pure Python implementation of FNV-1a hash (64-bit variant).

    FNV-1a is simpler and faster than MurmurHash3 but mixes the high bits less
    thoroughly, so it is a weaker choice for rank-based estimators.

    Args:
        key: The key to hash (will be converted to bytes if not already)
        seed: Optional seed value (modifies the initial hash value)

    Returns:
        Unsigned 64-bit hash value
    """
    data = to_bytes(key)

    FNV_PRIME = 0x100000001B3
    FNV_OFFSET_BASIS = 0xCBF29CE484222325

    h = (FNV_OFFSET_BASIS ^ seed) & _MASK_64

    for byte in data:
        h ^= byte
        h = (h * FNV_PRIME) & _MASK_64

    return h
