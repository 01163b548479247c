"""Permutation space component: a validated (n, k) pair."""

from math import comb

from pydantic import BaseModel, Field, model_validator

from bitperm.core.table import MAX_SUPPORTED_BITS


class Component(BaseModel):
    """Base class for bitperm value components."""

    model_config = {"frozen": True}


class PermutationSpace(Component):
    """All n-bit values with exactly k set bits.

    Attributes:
        n: Total bit width
        k: Number of set bits (k <= n)
    """

    n: int = Field(ge=0, le=MAX_SUPPORTED_BITS)
    k: int = Field(ge=0)

    @model_validator(mode="after")
    def _k_within_n(self) -> "PermutationSpace":
        if self.k > self.n:
            raise ValueError(f"k must not exceed n, got n={self.n}, k={self.k}")
        return self

    @property
    def size(self) -> int:
        """Number of bit permutations, C(n, k)."""
        return comb(self.n, self.k)

    @property
    def first(self) -> int:
        """Smallest member: the k low bits set."""
        return (1 << self.k) - 1

    @property
    def last(self) -> int:
        """Largest member: the k high bits set."""
        return self.first << (self.n - self.k)

    def to_binary(self, bitmap: int) -> str:
        """Render bitmap as an n-character binary string."""
        return format(bitmap, f"0{self.n}b") if self.n else ""
