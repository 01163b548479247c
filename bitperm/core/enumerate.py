"""Ascending enumeration of values with a fixed number of set bits.

Uses the "next bit permutation" step from Sean Eron Anderson's Bit
Twiddling Hacks: given v, the next larger value with the same popcount is

    t = v | (v - 1)
    next = (t + 1) | (((~t & (t + 1)) - 1) >> (trailing_zeros(v) + 1))

This is independent of Pascal's triangle and serves as the ground truth
when checking the codec.
"""

from __future__ import annotations

from collections.abc import Iterator

import numpy as np

from bitperm.core.errors import ConfigurationError
from bitperm.core.table import MAX_SUPPORTED_BITS

# Width reported for trailing_zeros(0)
WORD_BITS = 64


def trailing_zeros(v: int, width: int = WORD_BITS) -> int:
    """Count trailing zero bits of v; zero returns width."""
    if v == 0:
        return width
    return (v & -v).bit_length() - 1


def next_permutation(v: int) -> int:
    """Return the next larger value with the same number of set bits as v."""
    t = v | (v - 1)
    return (t + 1) | (((~t & (t + 1)) - 1) >> (trailing_zeros(v) + 1))


def iter_permutations(n: int, k: int) -> Iterator[int]:
    """Yield every n-bit value with exactly k set bits in ascending order.

    The sequence starts at the k low bits set and ends at the k high bits
    set. Each call returns a fresh generator.

    Args:
        n: Total bit width
        k: Number of set bits

    Raises:
        ConfigurationError: If k > n or n is outside 0..MAX_SUPPORTED_BITS
    """
    if not 0 <= n <= MAX_SUPPORTED_BITS:
        raise ConfigurationError(
            f"n must be in [0, {MAX_SUPPORTED_BITS}], got {n}"
        )
    if not 0 <= k <= n:
        raise ConfigurationError(f"k must be in [0, n], got n={n}, k={k}")
    return _generate(n, k)


def _generate(n: int, k: int) -> Iterator[int]:
    value = (1 << k) - 1
    if k == 0:
        yield 0
        return
    last = value << (n - k)
    while True:
        yield value
        if value == last:
            return
        value = next_permutation(value)


def permutations_array(n: int, k: int) -> np.ndarray:
    """Return the full ascending (n, k) sequence as a uint64 array."""
    return np.fromiter(iter_permutations(n, k), dtype=np.uint64)
