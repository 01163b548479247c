"""Pascal's triangle lookup table for bit permutation indexing.

The table holds C(i, j) for 0 <= j <= i <= max_bits in a square
``numpy.uint64`` array (entries with j > i are zero). It is built once,
frozen, and shared read-only by every codec call, so concurrent readers need
no locking.

Example:
    >>> table = build_table(8)
    >>> table.coefficient(8, 5)
    56
    >>> table.row(4)
    (1, 4, 6, 4, 1)
"""

from __future__ import annotations

import functools
import logging

import numpy as np

from bitperm.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

# Default width of the shared table
MAXBITS = 32

# C(63, 31) and every 63-bit bitmap still fit an unsigned 64-bit lane
MAX_SUPPORTED_BITS = 63


class BinomialTable:
    """Immutable triangular table of binomial coefficients.

    Attributes:
        max_bits: Largest row index (total bit width) covered by the table
    """

    def __init__(self, coefficients: np.ndarray) -> None:
        """Wrap a prebuilt coefficient array.

        Args:
            coefficients: Square (max_bits + 1, max_bits + 1) uint64 array

        The array is copied, so later writes to it do not reach the table.

        Raises:
            ValueError: If the array is not square, not uint64, or not
                Pascal's triangle
        """
        if (
            coefficients.ndim != 2
            or coefficients.shape[0] != coefficients.shape[1]
            or coefficients.shape[0] == 0
        ):
            raise ValueError(
                f"Expected square coefficient array, got shape {coefficients.shape}"
            )
        if coefficients.dtype != np.uint64:
            raise ValueError(f"Expected dtype uint64, got {coefficients.dtype}")

        t = np.array(coefficients, dtype=np.uint64, copy=True)
        # Row 0 is [1, 0, ...], column 0 is all ones, and every other entry
        # (zeros above the diagonal included) is the sum of the two above
        if (
            t[0, 0] != 1
            or t[0, 1:].any()
            or not bool(np.all(t[:, 0] == 1))
            or not np.array_equal(t[1:, 1:], t[:-1, :-1] + t[:-1, 1:])
        ):
            raise ValueError("Coefficient array is not Pascal's triangle")

        t.setflags(write=False)
        self._coefficients = t
        self.max_bits = t.shape[0] - 1

    @classmethod
    def build(cls, max_bits: int = MAXBITS) -> BinomialTable:
        """Construct the table for rows 0..max_bits.

        Each row copies its first and last entries from the row above; every
        interior entry is the sum of the two entries above it.

        Args:
            max_bits: Largest total bit width the table must serve

        Returns:
            Fully populated, read-only table

        Raises:
            ConfigurationError: If max_bits is outside 0..MAX_SUPPORTED_BITS
        """
        if not 0 <= max_bits <= MAX_SUPPORTED_BITS:
            raise ConfigurationError(
                f"max_bits must be in [0, {MAX_SUPPORTED_BITS}], got {max_bits}"
            )

        coefficients = np.zeros((max_bits + 1, max_bits + 1), dtype=np.uint64)
        coefficients[0, 0] = 1
        for i in range(1, max_bits + 1):
            above = coefficients[i - 1]
            coefficients[i, 0] = above[0]
            coefficients[i, 1:i] = above[: i - 1] + above[1:i]
            coefficients[i, i] = above[i - 1]

        logger.debug("Built binomial table for %d bits", max_bits)
        return cls(coefficients)

    @property
    def array(self) -> np.ndarray:
        """Read-only view of the underlying coefficient array."""
        return self._coefficients

    def covers(self, n: int) -> bool:
        """Return True if rows up to n are available."""
        return 0 <= n <= self.max_bits

    def coefficient(self, i: int, j: int) -> int:
        """Return C(i, j) as a Python int.

        Raises:
            IndexError: If (i, j) lies outside the triangle
        """
        if not (0 <= j <= i <= self.max_bits):
            raise IndexError(
                f"C({i}, {j}) is outside a table of {self.max_bits} bits"
            )
        return int(self._coefficients[i, j])

    def row(self, i: int) -> tuple[int, ...]:
        """Return row i of Pascal's triangle."""
        if not 0 <= i <= self.max_bits:
            raise IndexError(f"Row {i} is outside a table of {self.max_bits} bits")
        return tuple(int(c) for c in self._coefficients[i, : i + 1])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BinomialTable):
            return NotImplemented
        return bool(np.array_equal(self._coefficients, other._coefficients))

    def __hash__(self) -> int:
        return hash((self.max_bits, self._coefficients.tobytes()))

    def __repr__(self) -> str:
        return f"BinomialTable(max_bits={self.max_bits})"


def build_table(max_bits: int = MAXBITS) -> BinomialTable:
    """Construct a coefficient table for bit widths up to max_bits."""
    return BinomialTable.build(max_bits)


@functools.lru_cache(maxsize=None)
def default_table() -> BinomialTable:
    """Return the shared MAXBITS-wide table, building it on first use."""
    return BinomialTable.build(MAXBITS)
