"""
WorldState entity - everything the engine told us about the current tick.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .constants import DEFAULT_BOARD_HEIGHT, DEFAULT_BOARD_WIDTH
from .entities import Chest, Item, Key, Position, SafeZoneSchedule
from .snake import Snake


@dataclass(frozen=True)
class WorldState:
    """
    A read-only snapshot of one tick.

    Attributes:
        remaining_ticks: ticks left in the match
        items: food, growth beans, traps, walls and marker items
        snakes: every live snake, in stream order
        chests: unopened chests (extended protocol only)
        keys: keys on the ground or held (extended protocol only)
        safe_zone: shrinking playable area (extended protocol only)
        width, height: board bounds, ``0 <= x < width`` and ``0 <= y < height``
        my_snake_index: index into ``snakes`` of the agent's own snake, if any
    """

    remaining_ticks: int
    items: Tuple[Item, ...] = ()
    snakes: Tuple[Snake, ...] = ()
    chests: Tuple[Chest, ...] = ()
    keys: Tuple[Key, ...] = ()
    safe_zone: Optional[SafeZoneSchedule] = None
    width: int = DEFAULT_BOARD_WIDTH
    height: int = DEFAULT_BOARD_HEIGHT
    my_snake_index: Optional[int] = None

    @property
    def my_snake(self) -> Optional[Snake]:
        if self.my_snake_index is None:
            return None
        return self.snakes[self.my_snake_index]

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def object_at(self, pos: Position) -> Optional[Item]:
        """Return the item lying on ``pos``, or None."""
        for item in self.items:
            if item.position == pos:
                return item
        return None

    def has_body_at(self, pos: Position) -> bool:
        """True if any snake has a non-head segment on ``pos`` (own snake included)."""
        for snake in self.snakes:
            if pos in snake.body[1:]:
                return True
        return False

    def has_head_at(self, pos: Position) -> bool:
        for snake in self.snakes:
            if snake.body and snake.body[0] == pos:
                return True
        return False

    def is_safe_position(self, pos: Position) -> bool:
        """
        Whether moving onto ``pos`` is safe in this snapshot.

        Off-board cells, walls and snake bodies are unsafe. Other snakes'
        heads and their possible next moves are deliberately not considered.
        """
        if not self.in_bounds(pos):
            return False

        obj = self.object_at(pos)
        if obj is not None and obj.is_wall:
            return False

        if self.has_body_at(pos):
            return False

        return True

    def food_items(self) -> List[Item]:
        return [item for item in self.items if item.is_food or item.is_growth_bean]

    def traps(self) -> List[Item]:
        return [item for item in self.items if item.is_trap]

    def other_heads(self) -> List[Position]:
        """Heads of every snake except the agent's own."""
        return [
            snake.body[0]
            for index, snake in enumerate(self.snakes)
            if index != self.my_snake_index and snake.body
        ]

    def __repr__(self):
        return (
            f"<WorldState remaining={self.remaining_ticks}, items={len(self.items)}, "
            f"snakes={len(self.snakes)}, mine={self.my_snake_index}>"
        )
