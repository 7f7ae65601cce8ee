"""
Seedable random source used by dice.
"""
import random
from typing import Protocol, runtime_checkable

from dicelib.shared.errors import InvalidSizeError


@runtime_checkable
class RandomSource(Protocol):
    """Anything that can draw a uniform integer in [0, bound)."""

    def next_in_range(self, bound: int) -> int:
        ...


class Rng:
    """Uniform integer source backed by ``random.Random``."""

    def __init__(self, seed: int | None = None):
        """
        Initialize the generator.

        Args:
            seed: Optional seed for reproducible draws. ``None`` seeds from
                system entropy.
        """
        self._seed = seed
        self._random = random.Random(seed)

    @property
    def seed(self) -> int | None:
        """Seed this generator was created with."""
        return self._seed

    def next_in_range(self, bound: int) -> int:
        """
        Draw an integer uniformly from [0, bound).

        Args:
            bound: Exclusive upper bound, at least 1

        Returns:
            The drawn integer
        """
        if bound < 1:
            raise InvalidSizeError(f"Cannot draw from an empty range (bound={bound})")
        return self._random.randrange(bound)

    def __repr__(self) -> str:
        return f"Rng(seed={self._seed!r})"
