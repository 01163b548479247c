"""Tests for the binomial coefficient table."""

from math import comb

import numpy as np
import pytest

from bitperm.core.errors import ConfigurationError
from bitperm.core.table import (
    MAX_SUPPORTED_BITS,
    MAXBITS,
    BinomialTable,
    build_table,
    default_table,
)


class TestBuild:
    """Tests for table construction."""

    def test_default_width(self) -> None:
        """Test build_table defaults to MAXBITS rows."""
        table = build_table()
        assert table.max_bits == MAXBITS == 32
        assert table.array.shape == (33, 33)
        assert table.array.dtype == np.uint64

    def test_small_rows(self) -> None:
        """Test the first rows of Pascal's triangle."""
        table = build_table(4)
        assert table.row(0) == (1,)
        assert table.row(1) == (1, 1)
        assert table.row(2) == (1, 2, 1)
        assert table.row(3) == (1, 3, 3, 1)
        assert table.row(4) == (1, 4, 6, 4, 1)

    def test_matches_math_comb(self) -> None:
        """Test every entry equals math.comb."""
        table = build_table(MAXBITS)
        for i in range(MAXBITS + 1):
            for j in range(i + 1):
                assert table.coefficient(i, j) == comb(i, j)

    def test_pascal_recurrence(self) -> None:
        """Test interior entries are the sum of the two above."""
        t = build_table(20).array
        for i in range(2, 21):
            for j in range(1, i):
                assert t[i, j] == t[i - 1, j - 1] + t[i - 1, j]
            assert t[i, 0] == t[i, i] == 1

    def test_upper_triangle_zero(self) -> None:
        """Test entries above the diagonal stay zero."""
        t = build_table(6).array
        assert not np.triu(t, k=1).any()

    def test_central_coefficient_32(self) -> None:
        """Test C(32, 16) is stored exactly."""
        assert build_table(32).coefficient(32, 16) == 601080390

    def test_widest_table_exact(self) -> None:
        """Test the widest supported table stays exact in uint64."""
        table = build_table(MAX_SUPPORTED_BITS)
        assert table.coefficient(63, 31) == comb(63, 31)

    def test_zero_width(self) -> None:
        """Test a table with only row 0."""
        table = build_table(0)
        assert table.max_bits == 0
        assert table.row(0) == (1,)

    @pytest.mark.parametrize("max_bits", [-1, MAX_SUPPORTED_BITS + 1])
    def test_width_out_of_range(self, max_bits: int) -> None:
        """Test widths outside the supported range are rejected."""
        with pytest.raises(ConfigurationError, match="max_bits must be in"):
            build_table(max_bits)


class TestImmutability:
    """Tests that the table cannot be changed after construction."""

    def test_array_read_only(self) -> None:
        """Test writing to the coefficient array fails."""
        table = build_table(8)
        with pytest.raises(ValueError):
            table.array[2, 1] = 99

    def test_wrap_copies_source(self) -> None:
        """Test later writes to the wrapped array do not reach the table."""
        source = build_table(8).array.copy()
        table = BinomialTable(source)
        source[4, 2] = 99
        assert table.coefficient(4, 2) == 6
        assert table.row(4) == (1, 4, 6, 4, 1)
        assert not table.array.flags.writeable

    def test_default_table_memoized(self) -> None:
        """Test default_table returns the same instance."""
        assert default_table() is default_table()
        assert default_table().max_bits == MAXBITS


class TestAccessors:
    """Tests for lookup helpers."""

    def test_covers(self) -> None:
        table = build_table(8)
        assert table.covers(0)
        assert table.covers(8)
        assert not table.covers(9)
        assert not table.covers(-1)

    def test_coefficient_outside_triangle(self) -> None:
        """Test out-of-triangle lookups raise IndexError."""
        table = build_table(8)
        with pytest.raises(IndexError):
            table.coefficient(3, 4)
        with pytest.raises(IndexError):
            table.coefficient(9, 0)
        with pytest.raises(IndexError):
            table.row(9)

    def test_equality(self) -> None:
        assert build_table(5) == build_table(5)
        assert build_table(5) != build_table(6)
        assert hash(build_table(5)) == hash(build_table(5))

    def test_wrap_rejects_bad_array(self) -> None:
        """Test BinomialTable validates the wrapped array."""
        with pytest.raises(ValueError, match="square"):
            BinomialTable(np.zeros((3, 4), dtype=np.uint64))
        with pytest.raises(ValueError, match="uint64"):
            BinomialTable(np.zeros((3, 3), dtype=np.int64))
        with pytest.raises(ValueError, match="square"):
            BinomialTable(np.zeros((0, 0), dtype=np.uint64))

    def test_wrap_rejects_non_pascal(self) -> None:
        """Test a uint64 square array with wrong entries is refused."""
        with pytest.raises(ValueError, match="Pascal"):
            BinomialTable(np.zeros((3, 3), dtype=np.uint64))
        bad = build_table(8).array.copy()
        bad[5, 3] += np.uint64(1)
        with pytest.raises(ValueError, match="Pascal"):
            BinomialTable(bad)
        upper = build_table(4).array.copy()
        upper[1, 3] = 7
        with pytest.raises(ValueError, match="Pascal"):
            BinomialTable(upper)

    def test_repr(self) -> None:
        assert repr(build_table(8)) == "BinomialTable(max_bits=8)"
