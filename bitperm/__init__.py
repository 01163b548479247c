"""Rank and unrank fixed-popcount bit patterns.

All n-bit values with exactly k set bits, in ascending numeric order, are in
one-to-one correspondence with the integers 0..C(n, k)-1. This package maps
between the two using a precomputed Pascal's triangle:
- rank_of(): bitmap -> position
- unrank(): position -> bitmap
- iter_permutations(): independent ascending enumeration for verification

Quick Start:
    >>> from bitperm import build_table, rank_of, unrank
    >>>
    >>> table = build_table(32)
    >>> unrank(1, 8, 5, table)
    47
    >>> rank_of(0b00110111, 8, 5, table)
    2

For repeated use with the shared default table:
    >>> from bitperm import PermutationCodec
    >>>
    >>> codec = PermutationCodec()
    >>> codec.unrank_many([0, 1, 2], 8, 5)
    array([31, 47, 55], dtype=uint64)
"""

__version__ = "0.1.0"

from bitperm.components.space import PermutationSpace
from bitperm.core.codec import (
    PermutationCodec,
    rank_many,
    rank_of,
    unrank,
    unrank_many,
)
from bitperm.core.enumerate import iter_permutations, next_permutation, trailing_zeros
from bitperm.core.errors import (
    BitPermError,
    ConfigurationError,
    ConsistencyError,
    InvalidBitmapError,
    RankOutOfRangeError,
)
from bitperm.core.table import (
    MAX_SUPPORTED_BITS,
    MAXBITS,
    BinomialTable,
    build_table,
    default_table,
)

__all__ = [
    "__version__",
    "MAXBITS",
    "MAX_SUPPORTED_BITS",
    "BinomialTable",
    "build_table",
    "default_table",
    "PermutationCodec",
    "rank_of",
    "unrank",
    "rank_many",
    "unrank_many",
    "iter_permutations",
    "next_permutation",
    "trailing_zeros",
    "PermutationSpace",
    "BitPermError",
    "ConfigurationError",
    "InvalidBitmapError",
    "RankOutOfRangeError",
    "ConsistencyError",
]
