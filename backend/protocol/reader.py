"""
Protocol reader: turns one tick's integer token stream into a WorldState.

Schema, in order:

    remainingTicks
    itemCount,  then itemCount x (x y value [lifetime])
    snakeCount, then per snake (id length score direction cooldown duration [hasKey])
                followed by length x (x y), head first
    [chestCount, then chestCount x (x y score)]
    [keyCount,   then keyCount x (x y holderId remainingTime)]
    [xMin yMin xMax yMax
     nextTick xMin yMin xMax yMax
     finalTick xMin yMin xMax yMax]

Bracketed parts depend on the ProtocolVariant.
"""

import logging
from typing import Iterable, List, Optional

from domain.constants import DEFAULT_BOARD_HEIGHT, DEFAULT_BOARD_WIDTH, DIRECTIONS, Action
from domain.entities import Chest, Item, Key, Position, Rect, SafeZoneSchedule
from domain.errors import MalformedInput
from domain.snake import Snake
from domain.world_state import WorldState

from .variants import BASIC, ProtocolVariant

logger = logging.getLogger(__name__)


class TokenStream:
    """Sequential integer reader over whitespace-separated tokens."""

    def __init__(self, tokens: Iterable[str]):
        self.tokens = list(tokens)
        self.index = 0

    @classmethod
    def from_text(cls, text: str) -> "TokenStream":
        return cls(text.split())

    @property
    def remaining(self) -> int:
        return len(self.tokens) - self.index

    def next_int(self, field: str) -> int:
        if self.index >= len(self.tokens):
            raise MalformedInput(f"input ended while reading {field}")
        token = self.tokens[self.index]
        try:
            value = int(token)
        except ValueError:
            raise MalformedInput(
                f"expected an integer for {field} at token {self.index}, got {token!r}"
            ) from None
        self.index += 1
        return value

    def next_count(self, field: str) -> int:
        count = self.next_int(field)
        if count < 0:
            raise MalformedInput(f"negative {field}: {count}")
        return count

    def next_position(self, field: str) -> Position:
        x = self.next_int(f"{field}.x")
        y = self.next_int(f"{field}.y")
        return Position(x, y)

    def next_rect(self, field: str) -> Rect:
        return Rect(
            self.next_int(f"{field}.x_min"),
            self.next_int(f"{field}.y_min"),
            self.next_int(f"{field}.x_max"),
            self.next_int(f"{field}.y_max"),
        )


class ProtocolReader:
    """
    Parses tick snapshots for one protocol variant.

    Every snake whose id equals ``agent_id`` is recorded as the agent's own
    snake (the last one wins). No match is a normal outcome.
    """

    def __init__(
        self,
        variant: ProtocolVariant = BASIC,
        agent_id: Optional[int] = None,
        width: int = DEFAULT_BOARD_WIDTH,
        height: int = DEFAULT_BOARD_HEIGHT,
    ):
        self.variant = variant
        self.agent_id = agent_id
        self.width = width
        self.height = height

    def read(self, text: str) -> WorldState:
        """
        Parse a complete snapshot.

        Raises:
            MalformedInput: If a token is not an integer, a count is negative,
                a direction is out of range, or the stream ends early.
        """
        stream = TokenStream.from_text(text)
        world = self.read_stream(stream)
        if stream.remaining:
            logger.warning(
                "Ignoring %d trailing tokens after the %s snapshot",
                stream.remaining, self.variant.name,
            )
        return world

    def read_stream(self, stream: TokenStream) -> WorldState:
        remaining_ticks = stream.next_int("remainingTicks")
        items = self._read_items(stream)
        snakes, my_index = self._read_snakes(stream)

        chests: List[Chest] = []
        keys: List[Key] = []
        safe_zone = None
        if self.variant.chests:
            chests = self._read_chests(stream)
        if self.variant.keys:
            keys = self._read_keys(stream)
        if self.variant.safe_zone:
            safe_zone = self._read_safe_zone(stream)

        return WorldState(
            remaining_ticks=remaining_ticks,
            items=tuple(items),
            snakes=tuple(snakes),
            chests=tuple(chests),
            keys=tuple(keys),
            safe_zone=safe_zone,
            width=self.width,
            height=self.height,
            my_snake_index=my_index,
        )

    def _read_items(self, stream: TokenStream) -> List[Item]:
        items = []
        for i in range(stream.next_count("itemCount")):
            position = stream.next_position(f"item[{i}]")
            value = stream.next_int(f"item[{i}].value")
            if self.variant.item_lifetime:
                items.append(Item(position, value, stream.next_int(f"item[{i}].lifetime")))
            else:
                items.append(Item(position, value))
        return items

    def _read_snakes(self, stream: TokenStream):
        snakes = []
        my_index = None
        for i in range(stream.next_count("snakeCount")):
            snake = self._read_snake(stream, i)
            if self.agent_id is not None and snake.id == self.agent_id:
                my_index = i
            snakes.append(snake)
        return snakes, my_index

    def _read_snake(self, stream: TokenStream, i: int) -> Snake:
        field = f"snake[{i}]"
        snake_id = stream.next_int(f"{field}.id")
        length = stream.next_count(f"{field}.length")
        score = stream.next_int(f"{field}.score")
        direction = stream.next_int(f"{field}.direction")
        if direction not in DIRECTIONS:
            raise MalformedInput(f"{field}.direction out of range: {direction}")
        shield_cooldown = stream.next_int(f"{field}.shieldCooldown")
        shield_duration = stream.next_int(f"{field}.shieldDuration")
        has_key = False
        if self.variant.snake_has_key:
            has_key = stream.next_int(f"{field}.hasKey") != 0

        body = tuple(stream.next_position(f"{field}.body[{j}]") for j in range(length))

        return Snake(
            id=snake_id,
            length=length,
            score=score,
            direction=Action(direction),
            shield_cooldown=shield_cooldown,
            shield_duration=shield_duration,
            body=body,
            has_key=has_key,
        )

    def _read_chests(self, stream: TokenStream) -> List[Chest]:
        chests = []
        for i in range(stream.next_count("chestCount")):
            position = stream.next_position(f"chest[{i}]")
            chests.append(Chest(position, stream.next_int(f"chest[{i}].score")))
        return chests

    def _read_keys(self, stream: TokenStream) -> List[Key]:
        keys = []
        for i in range(stream.next_count("keyCount")):
            position = stream.next_position(f"key[{i}]")
            holder_id = stream.next_int(f"key[{i}].holderId")
            remaining_time = stream.next_int(f"key[{i}].remainingTime")
            keys.append(Key(position, holder_id, remaining_time))
        return keys

    def _read_safe_zone(self, stream: TokenStream) -> SafeZoneSchedule:
        current = stream.next_rect("safeZone.current")
        next_tick = stream.next_int("safeZone.nextTick")
        next_bounds = stream.next_rect("safeZone.next")
        final_tick = stream.next_int("safeZone.finalTick")
        final_bounds = stream.next_rect("safeZone.final")
        return SafeZoneSchedule(current, next_tick, next_bounds, final_tick, final_bounds)


def parse_world(
    text: str,
    variant: ProtocolVariant = BASIC,
    agent_id: Optional[int] = None,
    width: int = DEFAULT_BOARD_WIDTH,
    height: int = DEFAULT_BOARD_HEIGHT,
) -> WorldState:
    """Convenience wrapper around ProtocolReader.read."""
    return ProtocolReader(variant, agent_id, width, height).read(text)
