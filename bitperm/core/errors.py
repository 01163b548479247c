"""Error types raised by the bit permutation codec.

Codec callers receive ``ValueError`` subclasses for bad input, so the usual
``except ValueError`` keeps working. ``ConsistencyError`` is reserved for the
self-test harness and signals a logic defect rather than bad input.
"""

from __future__ import annotations


class BitPermError(Exception):
    """Base class for all bitperm errors."""


class ConfigurationError(BitPermError, ValueError):
    """Parameters (n, k, table width, config values) are out of range."""


class InvalidBitmapError(BitPermError, ValueError):
    """Bitmap does not have exactly k set bits within an n-bit field."""


class RankOutOfRangeError(BitPermError, ValueError):
    """Rank lies outside [0, C(n, k))."""


class ConsistencyError(BitPermError, RuntimeError):
    """Self-test cross-check failed.

    Attributes:
        check: Name of the failed check ('generate', 'rank_of', 'unrank',
            'cardinality', 'rank_many', 'unrank_many')
        n: Total bit width
        k: Number of set bits
        value: Bitmap under test
        expected: Expected result
        actual: Computed result
    """

    def __init__(
        self,
        check: str,
        n: int,
        k: int,
        value: int,
        expected: int,
        actual: int,
    ) -> None:
        self.check = check
        self.n = n
        self.k = k
        self.value = value
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{check} mismatch for n={n}, k={k}, value={value:#x}: "
            f"expected {expected}, got {actual}"
        )
