"""High-level API bound to the shared coefficient table.

Provides rank_of() and unrank() without passing a table around, plus helpers
used by the demo command.
"""

from __future__ import annotations

from bitperm.components.space import PermutationSpace
from bitperm.core import codec
from bitperm.core.table import BinomialTable, default_table


def rank_of(bitmap: int, n: int, k: int, table: BinomialTable | None = None) -> int:
    """Return the rank of bitmap among all (n, k) bit permutations.

    Args:
        bitmap: Value with exactly k of its low n bits set
        n: Total bit width
        k: Number of set bits
        table: Coefficient table (shared default if None)

    Returns:
        Rank in [0, C(n, k))

    Raises:
        ConfigurationError: If (n, k) is invalid for the table
        InvalidBitmapError: If bitmap is inconsistent with (n, k)

    Example:
        >>> rank_of(0b00101111, 8, 5)
        1
    """
    return codec.rank_of(bitmap, n, k, table or default_table())


def unrank(rank: int, n: int, k: int, table: BinomialTable | None = None) -> int:
    """Return the (n, k) bit permutation at rank.

    Raises:
        ConfigurationError: If (n, k) is invalid for the table
        RankOutOfRangeError: If rank is outside [0, C(n, k))

    Example:
        >>> unrank(0, 8, 5)
        31
    """
    return codec.unrank(rank, n, k, table or default_table())


def first_permutations(
    n: int,
    k: int,
    count: int,
    table: BinomialTable | None = None,
) -> list[int]:
    """Return the first count (n, k) bit permutations, clipped to C(n, k)."""
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    bound = codec.PermutationCodec(table)
    return [bound.unrank(i, n, k) for i in range(min(count, bound.size(n, k)))]


def format_permutations(n: int, k: int, count: int, table: BinomialTable | None = None) -> list[str]:
    """Render the first count permutations as '    i: bbbb' lines (1-based)."""
    bitmaps = first_permutations(n, k, count, table)
    space = PermutationSpace(n=n, k=k)
    return [f"{i + 1:5d}: {space.to_binary(bitmap)}" for i, bitmap in enumerate(bitmaps)]
