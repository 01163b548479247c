"""Exhaustive cross-check of the codec against independent enumerations.

For every (n, k) with k <= n <= max_bits, the n-bit strings with k ones are
listed in lexicographic order straight from ``itertools.combinations``. Each
one must match the bit-twiddling enumerator, rank to its position, and unrank
back to itself. The first mismatch raises ``ConsistencyError``.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterator

import numpy as np
from pydantic import BaseModel, Field

from bitperm.core.codec import rank_many, rank_of, unrank, unrank_many
from bitperm.core.enumerate import iter_permutations
from bitperm.core.errors import ConfigurationError, ConsistencyError
from bitperm.core.table import BinomialTable, build_table

logger = logging.getLogger(__name__)

# Widest sweep run by default; a full 32-bit sweep takes hours
DEFAULT_SELFTEST_BITS = 16


class SpaceResult(BaseModel):
    """Outcome for a single (n, k) space."""

    n: int = Field(ge=0)
    k: int = Field(ge=0)
    count: int = Field(ge=0)


class SelfTestReport(BaseModel):
    """Summary of a self-test run.

    Attributes:
        max_bits: Largest bit width checked
        spaces: Per-(n, k) results that passed
        passed: False if a cross-check failed
        failure: Message of the failing check, if any
    """

    max_bits: int = Field(ge=0)
    spaces: list[SpaceResult] = Field(default_factory=list)
    passed: bool = True
    failure: str | None = None

    @property
    def values_checked(self) -> int:
        return sum(space.count for space in self.spaces)


def lexicographic_bitmaps(n: int, k: int) -> Iterator[int]:
    """Yield (n, k) bitmaps by lexicographic order of their bit strings.

    Zero positions (index 0 is the most significant bit) are chosen in
    lexicographic order, which orders the strings the same way.
    """
    full = (1 << n) - 1
    for zeros in itertools.combinations(range(n), n - k):
        cleared = 0
        for index in zeros:
            cleared |= 1 << (n - 1 - index)
        yield full & ~cleared


def check_space(n: int, k: int, table: BinomialTable, batch: bool = False) -> SpaceResult:
    """Cross-check generation, rank_of and unrank for one (n, k).

    Args:
        n: Total bit width
        k: Number of set bits
        table: Coefficient table covering n
        batch: Also check rank_many/unrank_many over the whole space

    Returns:
        Result with the number of values checked

    Raises:
        ConsistencyError: On the first mismatch
    """
    generated = iter_permutations(n, k)
    count = 0
    for bits in lexicographic_bitmaps(n, k):
        candidate = next(generated, None)
        if candidate is None:
            raise ConsistencyError("generate", n, k, bits, count + 1, count)
        if candidate != bits:
            raise ConsistencyError("generate", n, k, bits, bits, candidate)
        rank = rank_of(bits, n, k, table)
        if rank != count:
            raise ConsistencyError("rank_of", n, k, bits, count, rank)
        recovered = unrank(count, n, k, table)
        if recovered != bits:
            raise ConsistencyError("unrank", n, k, bits, bits, recovered)
        count += 1

    leftover = next(generated, None)
    if leftover is not None:
        raise ConsistencyError("generate", n, k, leftover, count, count + 1)
    expected = table.coefficient(n, k)
    if count != expected:
        raise ConsistencyError("cardinality", n, k, 0, expected, count)

    if batch:
        ranks = np.arange(count, dtype=np.uint64)
        bitmaps = unrank_many(ranks, n, k, table)
        reranked = rank_many(bitmaps, n, k, table)
        mismatch = np.flatnonzero(reranked != ranks)
        if mismatch.size:
            first = int(mismatch[0])
            raise ConsistencyError(
                "rank_many", n, k, int(bitmaps[first]), first, int(reranked[first])
            )
        unordered = np.flatnonzero(bitmaps[1:] <= bitmaps[:-1])
        if unordered.size:
            first = int(unordered[0]) + 1
            value = int(bitmaps[first])
            raise ConsistencyError(
                "unrank_many", n, k, value, first, rank_of(value, n, k, table)
            )

    return SpaceResult(n=n, k=k, count=count)


def _resolve_table(max_bits: int, table: BinomialTable | None) -> BinomialTable:
    if table is None:
        table = build_table(max(max_bits, 0))
    if not table.covers(max_bits):
        raise ConfigurationError(
            f"max_bits={max_bits} exceeds the table width of {table.max_bits} bits"
        )
    return table


def _sweep(
    report: SelfTestReport, table: BinomialTable, batch: bool
) -> SelfTestReport:
    # Spaces are appended as they pass, so a mismatch leaves the earlier ones
    for n in range(report.max_bits + 1):
        for k in range(n + 1):
            logger.debug("Checking %d:%d bits", n, k)
            report.spaces.append(check_space(n, k, table, batch=batch))
    logger.info(
        "Self-test passed: %d spaces, %d values",
        len(report.spaces),
        report.values_checked,
    )
    return report


def self_test(
    max_bits: int = DEFAULT_SELFTEST_BITS,
    table: BinomialTable | None = None,
    batch: bool = False,
) -> SelfTestReport:
    """Check every (n, k) with k <= n <= max_bits, halting on first mismatch.

    Raises:
        ConfigurationError: If the table does not cover max_bits
        ConsistencyError: On the first mismatch
    """
    table = _resolve_table(max_bits, table)
    return _sweep(SelfTestReport(max_bits=max_bits), table, batch)


def run_self_test(
    max_bits: int = DEFAULT_SELFTEST_BITS,
    table: BinomialTable | None = None,
    batch: bool = False,
) -> SelfTestReport:
    """Like ``self_test`` but records a mismatch in the report instead of raising.

    The returned report keeps every space that passed before the mismatch.
    """
    table = _resolve_table(max_bits, table)
    report = SelfTestReport(max_bits=max_bits)
    try:
        return _sweep(report, table, batch)
    except ConsistencyError as e:
        logger.error(
            "Self-test failed after %d spaces: %s", len(report.spaces), e
        )
        report.passed = False
        report.failure = str(e)
        return report
