"""Rank and unrank bit permutations using Pascal's triangle.

All n-bit values with exactly k set bits, arranged in ascending numeric order,
form a list of C(n, k) entries. ``rank_of`` returns the position of a value in
that list and ``unrank`` returns the value at a position. Both walk the
binomial table from row n, column n - k, one bit at a time starting at the most
significant bit:

- the row counts bit positions still to be examined
- the column counts unset bits still to be placed

Whenever a set bit is met, every value that has this bit unset (and the same
higher bits) precedes it, which is C(row - 1, col - 1) values.

Example:
    >>> table = build_table(8)
    >>> unrank(2, 8, 5, table)
    55
    >>> rank_of(0b00110111, 8, 5, table)
    2

The batch functions ``rank_many`` and ``unrank_many`` run the same walks over
numpy arrays, one pass per bit position.
"""

from __future__ import annotations

import operator
from collections.abc import Iterator
from typing import Any

import numpy as np

from bitperm.core.errors import (
    ConfigurationError,
    InvalidBitmapError,
    RankOutOfRangeError,
)
from bitperm.core.table import BinomialTable, default_table


def _check_params(n: int, k: int, table: BinomialTable) -> None:
    """Reject (n, k) pairs the table cannot serve."""
    if n < 0 or k < 0:
        raise ConfigurationError(f"n and k must be non-negative, got n={n}, k={k}")
    if k > n:
        raise ConfigurationError(f"k must not exceed n, got n={n}, k={k}")
    if not table.covers(n):
        raise ConfigurationError(
            f"n={n} exceeds the table width of {table.max_bits} bits"
        )


def _check_bitmap(bitmap: int, n: int, k: int) -> None:
    if bitmap < 0:
        raise InvalidBitmapError(f"Bitmap must be non-negative, got {bitmap}")
    if bitmap >> n:
        raise InvalidBitmapError(
            f"Bitmap {bitmap:#x} has bits set above the low {n} bits"
        )
    popcount = bin(bitmap).count("1")
    if popcount != k:
        raise InvalidBitmapError(
            f"Bitmap {bitmap:#x} has {popcount} set bits, expected {k}"
        )


def rank_of(bitmap: int, n: int, k: int, table: BinomialTable) -> int:
    """Return the 0-based rank of bitmap among all (n, k) bit permutations.

    Args:
        bitmap: Value with exactly k of its low n bits set
        n: Total bit width
        k: Number of set bits
        table: Coefficient table covering n

    Returns:
        Rank in [0, C(n, k))

    Raises:
        ConfigurationError: If k > n, n exceeds the table, or either is negative
        InvalidBitmapError: If bitmap is inconsistent with (n, k)
    """
    bitmap, n, k = operator.index(bitmap), operator.index(n), operator.index(k)
    _check_params(n, k, table)
    _check_bitmap(bitmap, n, k)

    coefficients = table.array
    total = 0
    row = n
    col = n - k
    for position in range(n - 1, -1, -1):
        # A single arrangement remains; lower bits add nothing
        if coefficients[row, col] == 1:
            break
        row -= 1
        if bitmap >> position & 1:
            total += int(coefficients[row, col - 1])
        else:
            col -= 1
    return total


def unrank(rank: int, n: int, k: int, table: BinomialTable) -> int:
    """Return the (n, k) bit permutation occupying the given rank.

    Args:
        rank: Position in [0, C(n, k))
        n: Total bit width
        k: Number of set bits
        table: Coefficient table covering n

    Returns:
        Bitmap with exactly k of its low n bits set

    Raises:
        ConfigurationError: If k > n, n exceeds the table, or either is negative
        RankOutOfRangeError: If rank is outside [0, C(n, k))
    """
    rank, n, k = operator.index(rank), operator.index(n), operator.index(k)
    _check_params(n, k, table)
    size = table.coefficient(n, k)
    if not 0 <= rank < size:
        raise RankOutOfRangeError(
            f"Rank {rank} is outside [0, {size}) for n={n}, k={k}"
        )

    coefficients = table.array
    result = 0
    col = n - k
    # After the decrement, row is also the bit position being decided
    for row in range(n - 1, -1, -1):
        below = int(coefficients[row, col - 1]) if col > 0 else 0
        if col > 0 and rank < below:
            col -= 1
        else:
            rank -= below
            result |= 1 << row
    return result


def _as_uint64(values: Any, what: str, limit: int) -> np.ndarray:
    """Convert to a uint64 array, rejecting negatives and Python ints >= limit.

    Raises:
        TypeError: If the elements are not integers
        ValueError: If an element is negative, or too wide for a uint64 lane
    """
    arr = np.asarray(values)
    if arr.size == 0:
        return np.zeros(arr.shape, dtype=np.uint64)
    if arr.dtype.kind == "O":
        # Python ints that do not fit int64/uint64
        flat = [operator.index(v) for v in arr.ravel()]
        for position, value in enumerate(flat):
            if not 0 <= value < limit:
                index = tuple(int(i) for i in np.unravel_index(position, arr.shape))
                raise ValueError(
                    f"{what.capitalize()} element {value} at index {index} is "
                    f"outside [0, {limit})"
                )
        return np.array(flat, dtype=np.uint64).reshape(arr.shape)
    if arr.dtype.kind not in "iu":
        raise TypeError(f"Expected integer {what}, got dtype {arr.dtype}")
    if arr.dtype.kind == "i" and arr.min() < 0:
        index = int(np.argmax(arr < 0))
        raise ValueError(f"{what.capitalize()} must be non-negative (index {index})")
    return arr.astype(np.uint64)


def _popcount(values: np.ndarray, width: int) -> np.ndarray:
    counts = np.zeros(values.shape, dtype=np.int64)
    for position in range(width):
        counts += ((values >> np.uint64(position)) & np.uint64(1)).astype(np.int64)
    return counts


def rank_many(bitmaps: Any, n: int, k: int, table: BinomialTable) -> np.ndarray:
    """Vectorized ``rank_of`` over an integer array.

    Args:
        bitmaps: Integer array-like of (n, k) bitmaps
        n: Total bit width
        k: Number of set bits
        table: Coefficient table covering n

    Returns:
        uint64 array of ranks with the same shape as bitmaps

    Raises:
        ConfigurationError: If (n, k) is invalid for the table
        InvalidBitmapError: If any element is inconsistent with (n, k)
    """
    n, k = operator.index(n), operator.index(k)
    _check_params(n, k, table)
    try:
        values = _as_uint64(bitmaps, "bitmaps", 1 << n)
    except ValueError as e:
        raise InvalidBitmapError(str(e)) from e

    bad = (values >> np.uint64(n)) != 0
    bad |= _popcount(values, n) != k
    if bad.any():
        index = tuple(int(i) for i in np.unravel_index(int(np.argmax(bad)), values.shape))
        raise InvalidBitmapError(
            f"Bitmap {int(values[index]):#x} at index {index} is not a "
            f"{k}-of-{n} bit permutation"
        )

    coefficients = table.array
    total = np.zeros(values.shape, dtype=np.uint64)
    col = np.full(values.shape, n - k, dtype=np.int64)
    active = np.ones(values.shape, dtype=bool)
    row = n
    for position in range(n - 1, -1, -1):
        active &= coefficients[row, col] != 1
        if not active.any():
            break
        row -= 1
        bit = ((values >> np.uint64(position)) & np.uint64(1)).astype(bool)
        below = coefficients[row, np.maximum(col - 1, 0)]
        total += np.where(active & bit, below, np.uint64(0))
        col = np.where(active & ~bit, col - 1, col)
    return total


def unrank_many(ranks: Any, n: int, k: int, table: BinomialTable) -> np.ndarray:
    """Vectorized ``unrank`` over an integer array.

    Args:
        ranks: Integer array-like of ranks in [0, C(n, k))
        n: Total bit width
        k: Number of set bits
        table: Coefficient table covering n

    Returns:
        uint64 array of bitmaps with the same shape as ranks

    Raises:
        ConfigurationError: If (n, k) is invalid for the table
        RankOutOfRangeError: If any rank is outside [0, C(n, k))
    """
    n, k = operator.index(n), operator.index(k)
    _check_params(n, k, table)
    try:
        remaining = _as_uint64(ranks, "ranks", table.coefficient(n, k)).copy()
    except ValueError as e:
        raise RankOutOfRangeError(str(e)) from e

    size = table.array[n, k]
    bad = remaining >= size
    if bad.any():
        index = tuple(int(i) for i in np.unravel_index(int(np.argmax(bad)), remaining.shape))
        raise RankOutOfRangeError(
            f"Rank {int(remaining[index])} at index {index} is outside "
            f"[0, {int(size)}) for n={n}, k={k}"
        )

    coefficients = table.array
    result = np.zeros(remaining.shape, dtype=np.uint64)
    col = np.full(remaining.shape, n - k, dtype=np.int64)
    for row in range(n - 1, -1, -1):
        has_col = col > 0
        below = np.where(has_col, coefficients[row, np.maximum(col - 1, 0)], np.uint64(0))
        unset = has_col & (remaining < below)
        remaining -= np.where(unset, np.uint64(0), below)
        result |= np.where(unset, np.uint64(0), np.uint64(1) << np.uint64(row))
        col = np.where(unset, col - 1, col)
    return result


class PermutationCodec:
    """Rank/unrank bit permutations against a bound coefficient table.

    Attributes:
        table: Shared read-only binomial table

    Example:
        >>> codec = PermutationCodec()
        >>> codec.unrank(0, 8, 5)
        31
        >>> codec.rank_of(47, 8, 5)
        1
    """

    def __init__(self, table: BinomialTable | None = None) -> None:
        """Bind a table (the shared default table if None)."""
        self.table = table if table is not None else default_table()

    @property
    def max_bits(self) -> int:
        return self.table.max_bits

    def rank_of(self, bitmap: int, n: int, k: int) -> int:
        """Return the rank of bitmap (see module-level ``rank_of``)."""
        return rank_of(bitmap, n, k, self.table)

    def unrank(self, rank: int, n: int, k: int) -> int:
        """Return the bitmap at rank (see module-level ``unrank``)."""
        return unrank(rank, n, k, self.table)

    def rank_many(self, bitmaps: Any, n: int, k: int) -> np.ndarray:
        return rank_many(bitmaps, n, k, self.table)

    def unrank_many(self, ranks: Any, n: int, k: int) -> np.ndarray:
        return unrank_many(ranks, n, k, self.table)

    def size(self, n: int, k: int) -> int:
        """Return C(n, k), the number of (n, k) bit permutations."""
        _check_params(n, k, self.table)
        return self.table.coefficient(n, k)

    def iter_space(self, n: int, k: int) -> Iterator[tuple[int, int]]:
        """Yield (rank, bitmap) pairs for every (n, k) bit permutation."""
        for rank in range(self.size(n, k)):
            yield rank, self.unrank(rank, n, k)

    def __repr__(self) -> str:
        return f"PermutationCodec(max_bits={self.max_bits})"
