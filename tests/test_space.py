"""Tests for the PermutationSpace component."""

import pytest

from bitperm.components.space import PermutationSpace


class TestPermutationSpace:
    """Tests for PermutationSpace."""

    def test_creation(self) -> None:
        space = PermutationSpace(n=8, k=5)
        assert space.n == 8
        assert space.k == 5
        assert space.size == 56

    def test_first_last(self) -> None:
        space = PermutationSpace(n=8, k=5)
        assert space.first == 0b00011111
        assert space.last == 0b11111000

    def test_empty_space(self) -> None:
        space = PermutationSpace(n=0, k=0)
        assert space.size == 1
        assert space.first == 0
        assert space.last == 0
        assert space.to_binary(0) == ""

    def test_to_binary(self) -> None:
        space = PermutationSpace(n=8, k=5)
        assert space.to_binary(47) == "00101111"

    def test_k_exceeds_n(self) -> None:
        with pytest.raises(ValueError, match="k must not exceed n"):
            PermutationSpace(n=3, k=4)

    @pytest.mark.parametrize("n,k", [(-1, 0), (0, -1), (64, 1)])
    def test_out_of_range(self, n: int, k: int) -> None:
        with pytest.raises(ValueError):  # Pydantic validation
            PermutationSpace(n=n, k=k)

    def test_frozen(self) -> None:
        space = PermutationSpace(n=8, k=5)
        with pytest.raises(ValueError):
            space.k = 3
