#!/usr/bin/env python3
"""
Random Source
=============
A single randomness source owned by one invocation.

By default draws come from secrets.SystemRandom (the OS entropy pool).
Tests wrap a seeded random.Random so that every generator is reproducible:

    rng = RandomSource.seeded(42)
    rng.below(10)
    rng.weighted_index([3, 1, 1])
"""

import random
import secrets
from typing import Any, List, Optional, Sequence


class RandomSource:
    """
    Integer-first random draws over a random.Random compatible source.

    All selection is done with integer draws so results are exact and
    reproducible for a given stream.
    """

    def __init__(self, source: Optional[random.Random] = None):
        self._rng = source if source is not None else secrets.SystemRandom()

    @classmethod
    def system(cls) -> 'RandomSource':
        """Cryptographically secure source seeded by the OS."""
        return cls(secrets.SystemRandom())

    @classmethod
    def seeded(cls, seed: int) -> 'RandomSource':
        """Deterministic source for tests. Not for real passwords."""
        return cls(random.Random(seed))

    def below(self, n: int) -> int:
        """Return a uniform integer in [0, n)."""
        if n <= 0:
            raise ValueError(f"Upper bound must be positive, got {n}")
        return self._rng.randrange(n)

    def between(self, a: int, b: int) -> int:
        """Return a uniform integer N such that a <= N <= b."""
        return a + self.below(b - a + 1)

    def chance(self, probability: float) -> bool:
        """True with the given probability."""
        return self._rng.random() < probability

    def choice(self, seq: Sequence[Any]) -> Any:
        """Return a uniformly chosen element from a non-empty sequence."""
        if not seq:
            raise IndexError("Cannot choose from empty sequence")
        return seq[self.below(len(seq))]

    def weighted_index(self, weights: List[int]) -> int:
        """
        Choose an index with probability proportional to its integer weight.

        Draws r uniformly in [0, total) and walks the running total until
        the bucket containing r is found.
        """
        total = sum(weights)
        if total <= 0:
            raise ValueError("Cannot choose from weights summing to zero")

        r = self.below(total)
        cumulative = 0
        for index, weight in enumerate(weights):
            cumulative += weight
            if r < cumulative:
                return index

        return len(weights) - 1


__all__ = ["RandomSource"]
