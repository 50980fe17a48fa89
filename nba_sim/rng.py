"""Random number sources for the simulator.

Two generator roles are kept strictly apart:

- ``CosmeticRng``: unseeded by default, backed by a numpy ``Generator``.
  Drives anything allowed to vary run to run (league sampling, stat noise,
  tournament byes, candidate draws). Pass a seed to make a run repeatable.
- ``ReproducibleRng``: xorshift32 seeded from a stable key via a 32-bit
  FNV-1a hash. Drives matchups, so the same pair of names always produces
  the same game.

Generators are explicit instances handed to each simulation call; nothing in
the engine reads module-level random state.

Example:
    >>> from nba_sim.rng import ReproducibleRng, fnv1a_32
    >>> rng = ReproducibleRng.from_key("Alice::Bob")
    >>> 0.0 <= rng.random() < 1.0
    True
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

import numpy as np

T = TypeVar("T")

# =============================================================================
# Constants
# =============================================================================

MASK_32: int = 0xFFFFFFFF
FNV_OFFSET_BASIS: int = 0x811C9DC5
FNV_PRIME: int = 0x01000193

# xorshift has an all-zero fixed point
ZERO_SEED_REPLACEMENT: int = 0x9E3779B9


def fnv1a_32(text: str) -> int:
    """Hash a string with 32-bit FNV-1a over its UTF-8 bytes."""
    h = FNV_OFFSET_BASIS
    for byte in text.encode("utf-8"):
        h ^= byte
        h = (h * FNV_PRIME) & MASK_32
    return h


class _RngBase:
    """Derived draws shared by both generator roles."""

    def random(self) -> float:
        """Return a float in [0, 1)."""
        raise NotImplementedError

    def uniform(self, lo: float, hi: float) -> float:
        """Return a float in [lo, hi)."""
        return lo + (hi - lo) * self.random()

    def randn(self) -> float:
        """Rough gaussian: centred sum of four uniforms, range [-1, 1]."""
        total = self.random() + self.random() + self.random() + self.random()
        return (total - 2.0) / 2.0

    def randrange(self, n: int) -> int:
        """Return an integer in [0, n)."""
        if n <= 0:
            raise ValueError("randrange() requires a positive bound")
        return min(int(self.random() * n), n - 1)

    def choice(self, seq: Sequence[T]) -> T:
        """Return one element of a non-empty sequence."""
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        return seq[self.randrange(len(seq))]


class CosmeticRng(_RngBase):
    """Run-to-run variable generator for noise and sampling.

    Args:
        seed: Optional seed; None draws fresh OS entropy.
    """

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self._generator = np.random.default_rng(seed)

    def random(self) -> float:
        return float(self._generator.random())

    def shuffled(self, seq: Sequence[T]) -> list[T]:
        """Return a shuffled copy of seq."""
        order = self._generator.permutation(len(seq))
        return [seq[int(i)] for i in order]

    def sample(self, seq: Sequence[T], k: int) -> list[T]:
        """Return up to k distinct elements in random order."""
        return self.shuffled(seq)[: max(0, k)]


class ReproducibleRng(_RngBase):
    """xorshift32 generator whose sequence is fixed by its seed.

    Args:
        seed: 32-bit seed; zero is replaced by a fixed non-zero constant.
    """

    def __init__(self, seed: int) -> None:
        self.seed = seed & MASK_32
        self._state = self.seed or ZERO_SEED_REPLACEMENT

    @classmethod
    def from_key(cls, key: str) -> ReproducibleRng:
        """Create a generator seeded by the FNV-1a hash of key."""
        return cls(fnv1a_32(key))

    def next_uint32(self) -> int:
        """Advance the state and return it."""
        x = self._state
        x ^= (x << 13) & MASK_32
        x ^= x >> 17
        x ^= (x << 5) & MASK_32
        self._state = x
        return x

    def random(self) -> float:
        return self.next_uint32() / 4294967296.0


__all__ = [
    "CosmeticRng",
    "ReproducibleRng",
    "fnv1a_32",
]
