"""
Random source used by the decision policy.

Players never touch the ``random`` module directly, so tests can pass a
scripted source and assert exact outcomes.
"""

import random
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


class RandomSource:
    """Interface for the two draws a policy needs."""

    def randint(self, a: int, b: int) -> int:
        """Uniform integer in the inclusive range [a, b]."""
        raise NotImplementedError

    def choice(self, options: Sequence[T]) -> T:
        """Uniform draw from a non-empty sequence."""
        raise NotImplementedError


class SystemRandomSource(RandomSource):
    """RandomSource backed by ``random.Random``; seeded sources are reproducible."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)

    def choice(self, options: Sequence[T]) -> T:
        return self._rng.choice(options)
