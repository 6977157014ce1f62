"""
Position-safety checks for the agent's possible moves.
"""

from typing import List

from .constants import DIRECTION_OFFSETS, DIRECTIONS, Action
from .entities import Position
from .snake import Snake
from .world_state import WorldState


def next_position(pos: Position, direction: Action) -> Position:
    """Cell reached from ``pos`` by one step in ``direction``."""
    dx, dy = DIRECTION_OFFSETS[direction]
    return pos.offset(dx, dy)


def safe_directions(world: WorldState, snake: Snake) -> List[Action]:
    """
    Directions whose target cell is currently safe for ``snake``.

    Returned in LEFT, UP, RIGHT, DOWN order.

    Raises:
        EmptyBodyAccess: If the snake has no head.
    """
    head = snake.head
    return [
        direction
        for direction in DIRECTIONS
        if world.is_safe_position(next_position(head, direction))
    ]


def can_use_shield(snake: Snake, threshold: int) -> bool:
    # Independent of whether any neighbouring cell is safe
    return snake.can_use_shield(threshold)
