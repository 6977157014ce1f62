"""
Snake entity as described by a tick snapshot.
"""

from dataclasses import dataclass
from typing import Tuple

from .constants import Action
from .entities import Position
from .errors import EmptyBodyAccess


@dataclass(frozen=True)
class Snake:
    """
    Represents a snake on the board.

    Attributes:
        id: engine identity of the owner (matched against the configured agent id)
        length: declared body length
        score: current score
        direction: current heading (LEFT/UP/RIGHT/DOWN)
        shield_cooldown: ticks until the shield can be used again
        shield_duration: ticks of shield protection left
        body: positions from head at index 0 to tail at the end
        has_key: whether the snake carries a key (extended protocol only)
    """

    id: int
    length: int
    score: int
    direction: Action
    shield_cooldown: int
    shield_duration: int
    body: Tuple[Position, ...]
    has_key: bool = False

    @property
    def head(self) -> Position:
        """Return the head position (first element)."""
        if not self.body:
            raise EmptyBodyAccess(f"snake {self.id} has no body segments")
        return self.body[0]

    @property
    def has_shield(self) -> bool:
        return self.shield_duration > 0

    def can_use_shield(self, threshold: int) -> bool:
        """A shield is available when it is off cooldown and the snake can pay for it."""
        return self.shield_cooldown == 0 and self.score >= threshold
