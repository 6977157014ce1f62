"""
Board entities: positions, items, chests, keys and the safe-zone schedule.
"""

from dataclasses import dataclass

from .constants import (
    CHEST_MARKER,
    GROWTH_BEAN,
    KEY_MARKER,
    NO_LIFETIME,
    NO_SHRINK,
    TRAP,
    WALL,
)


@dataclass(frozen=True)
class Position:
    """Grid coordinate; ``x`` is the first coordinate of a stream record."""

    x: int
    y: int

    def manhattan_distance(self, other: "Position") -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def offset(self, dx: int, dy: int) -> "Position":
        return Position(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Rect:
    """Inclusive rectangle of grid cells."""

    x_min: int
    y_min: int
    x_max: int
    y_max: int

    def contains(self, pos: Position) -> bool:
        return self.x_min <= pos.x <= self.x_max and self.y_min <= pos.y <= self.y_max


@dataclass(frozen=True)
class Item:
    """
    An item lying on the board.

    Attributes:
        position: cell the item occupies
        value: positive = food worth that many points, otherwise one of the
            negative type codes (growth bean, trap, key, wall, chest)
        lifetime: remaining ticks before the item disappears, -1 if unknown
    """

    position: Position
    value: int
    lifetime: int = NO_LIFETIME

    @property
    def is_food(self) -> bool:
        return self.value > 0

    @property
    def is_growth_bean(self) -> bool:
        return self.value == GROWTH_BEAN

    @property
    def is_trap(self) -> bool:
        return self.value == TRAP

    @property
    def is_key(self) -> bool:
        return self.value == KEY_MARKER

    @property
    def is_wall(self) -> bool:
        return self.value == WALL

    @property
    def is_chest(self) -> bool:
        return self.value == CHEST_MARKER

    @property
    def expires(self) -> bool:
        return self.lifetime >= 0


@dataclass(frozen=True)
class Chest:
    position: Position
    score: int


@dataclass(frozen=True)
class Key:
    """A key on the ground (``holder_id <= 0``) or carried by a snake."""

    position: Position
    holder_id: int
    remaining_time: int

    @property
    def is_held(self) -> bool:
        return self.holder_id > 0


@dataclass(frozen=True)
class SafeZoneSchedule:
    """
    Current playable rectangle plus the next and final scheduled shrinks.

    A shrink tick of -1 means no such shrink is scheduled; the engine then
    repeats the current bounds.
    """

    current: Rect
    next_tick: int
    next_bounds: Rect
    final_tick: int
    final_bounds: Rect

    @property
    def has_next_shrink(self) -> bool:
        return self.next_tick != NO_SHRINK

    @property
    def has_final_shrink(self) -> bool:
        return self.final_tick != NO_SHRINK

    def contains(self, pos: Position) -> bool:
        return self.current.contains(pos)
