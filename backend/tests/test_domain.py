"""
Tests for the domain package - entities, snake, world state queries and safety.
"""

import os
import sys

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain import (  # noqa: E402
    Action,
    EmptyBodyAccess,
    Item,
    Key,
    Position,
    Rect,
    SafeZoneSchedule,
    Snake,
    WorldState,
    parse_action,
)
from domain.constants import GROWTH_BEAN, TRAP, WALL  # noqa: E402
from domain.safety import can_use_shield, next_position, safe_directions  # noqa: E402


def make_snake(snake_id=1, body=((5, 5),), score=0, cooldown=0, duration=0, has_key=False):
    return Snake(
        id=snake_id,
        length=len(body),
        score=score,
        direction=Action.RIGHT,
        shield_cooldown=cooldown,
        shield_duration=duration,
        body=tuple(Position(x, y) for x, y in body),
        has_key=has_key,
    )


def make_world(items=(), snakes=(), my_index=None, width=40, height=30, **kwargs):
    return WorldState(
        remaining_ticks=100,
        items=tuple(items),
        snakes=tuple(snakes),
        width=width,
        height=height,
        my_snake_index=my_index,
        **kwargs,
    )


class TestEntities:
    """Tests for Position, Item, Key and the safe-zone schedule."""

    def test_manhattan_distance(self):
        assert Position(1, 2).manhattan_distance(Position(4, -2)) == 7
        assert Position(3, 3).manhattan_distance(Position(3, 3)) == 0

    def test_item_type_predicates(self):
        assert Item(Position(0, 0), 3).is_food
        assert Item(Position(0, 0), GROWTH_BEAN).is_growth_bean
        assert Item(Position(0, 0), TRAP).is_trap
        assert Item(Position(0, 0), WALL).is_wall
        assert not Item(Position(0, 0), WALL).is_food

    def test_item_lifetime_defaults_to_no_expiry(self):
        assert not Item(Position(0, 0), 1).expires
        assert Item(Position(0, 0), 1, lifetime=12).expires

    def test_key_holder(self):
        assert not Key(Position(1, 1), -1, 0).is_held
        assert not Key(Position(1, 1), 0, 0).is_held
        assert Key(Position(1, 1), 2023000000, 30).is_held

    def test_safe_zone_schedule(self):
        current = Rect(0, 0, 39, 29)
        zone = SafeZoneSchedule(current, -1, current, 180, Rect(10, 10, 29, 19))
        assert not zone.has_next_shrink
        assert zone.has_final_shrink
        assert zone.contains(Position(39, 29))
        assert not zone.contains(Position(40, 0))


class TestSnake:
    """Tests for the Snake entity."""

    def test_head_is_first_segment(self):
        snake = make_snake(body=((5, 5), (5, 6), (5, 7)))
        assert snake.head == Position(5, 5)

    def test_empty_body_head_raises(self):
        snake = make_snake(body=())
        with pytest.raises(EmptyBodyAccess):
            snake.head

    def test_can_use_shield_needs_cooldown_and_score(self):
        assert make_snake(score=20).can_use_shield(20)
        assert not make_snake(score=19).can_use_shield(20)
        assert not make_snake(score=50, cooldown=3).can_use_shield(20)

    def test_has_shield(self):
        assert make_snake(duration=2).has_shield
        assert not make_snake().has_shield


class TestWorldStateQueries:
    """Tests for object_at, has_body_at, has_head_at and is_safe_position."""

    def test_object_at(self):
        food = Item(Position(2, 3), 5)
        world = make_world(items=[food, Item(Position(4, 4), WALL)])
        assert world.object_at(Position(2, 3)) == food
        assert world.object_at(Position(9, 9)) is None

    def test_has_body_at_excludes_heads(self):
        snake = make_snake(body=((5, 5), (5, 6), (5, 7)))
        world = make_world(snakes=[snake])
        assert not world.has_body_at(Position(5, 5))
        assert world.has_body_at(Position(5, 6))
        assert world.has_body_at(Position(5, 7))

    def test_has_head_at(self):
        world = make_world(snakes=[make_snake(body=((5, 5), (5, 6))), make_snake(2, body=())])
        assert world.has_head_at(Position(5, 5))
        assert not world.has_head_at(Position(5, 6))

    def test_my_snake(self):
        mine = make_snake(7)
        world = make_world(snakes=[make_snake(1), mine], my_index=1)
        assert world.my_snake == mine
        assert make_world(snakes=[mine]).my_snake is None

    @pytest.mark.parametrize("pos", [Position(-1, 0), Position(0, -1), Position(40, 0), Position(0, 30)])
    def test_out_of_bounds_is_unsafe(self, pos):
        assert not make_world().is_safe_position(pos)

    def test_board_edges_are_safe(self):
        world = make_world()
        assert world.is_safe_position(Position(0, 0))
        assert world.is_safe_position(Position(39, 29))

    def test_walls_are_never_safe(self):
        walls = [Position(0, 0), Position(12, 7), Position(39, 29)]
        world = make_world(items=[Item(p, WALL) for p in walls])
        for pos in walls:
            assert world.is_safe_position(pos) is False

    def test_body_segments_are_never_safe_including_own(self):
        mine = make_snake(7, body=((5, 5), (5, 6), (6, 6)))
        other = make_snake(8, body=((10, 10), (10, 11)))
        world = make_world(snakes=[mine, other], my_index=0)
        for pos in [Position(5, 6), Position(6, 6), Position(10, 11)]:
            assert world.is_safe_position(pos) is False

    def test_food_traps_and_heads_are_safe(self):
        other = make_snake(8, body=((10, 10), (10, 11)))
        world = make_world(
            items=[Item(Position(1, 1), 3), Item(Position(2, 2), TRAP)],
            snakes=[other],
        )
        assert world.is_safe_position(Position(1, 1))
        assert world.is_safe_position(Position(2, 2))
        assert world.is_safe_position(Position(10, 10))

    def test_other_heads_skips_own_snake(self):
        world = make_world(
            snakes=[make_snake(7, body=((5, 5),)), make_snake(8, body=((9, 9),))],
            my_index=0,
        )
        assert world.other_heads() == [Position(9, 9)]


class TestSafety:
    """Tests for the safety evaluator."""

    def test_direction_offsets(self):
        head = Position(5, 5)
        assert next_position(head, Action.LEFT) == Position(5, 4)
        assert next_position(head, Action.UP) == Position(4, 5)
        assert next_position(head, Action.RIGHT) == Position(5, 6)
        assert next_position(head, Action.DOWN) == Position(6, 5)

    def test_safe_directions_all_open(self):
        me = make_snake(7, body=((5, 5),))
        world = make_world(snakes=[me], my_index=0)
        assert safe_directions(world, me) == [Action.LEFT, Action.UP, Action.RIGHT, Action.DOWN]

    def test_safe_directions_excludes_wall_and_body(self):
        me = make_snake(7, body=((5, 5), (6, 5)))
        world = make_world(items=[Item(Position(5, 4), WALL)], snakes=[me], my_index=0)
        assert safe_directions(world, me) == [Action.UP, Action.RIGHT]

    def test_safe_directions_at_corner(self):
        me = make_snake(7, body=((0, 0),))
        world = make_world(snakes=[me], my_index=0)
        assert safe_directions(world, me) == [Action.RIGHT, Action.DOWN]

    def test_safe_directions_empty_body_raises(self):
        me = make_snake(7, body=())
        world = make_world(snakes=[me], my_index=0)
        with pytest.raises(EmptyBodyAccess):
            safe_directions(world, me)

    def test_shield_independent_of_surroundings(self):
        me = make_snake(7, body=((5, 5),), score=25)
        assert can_use_shield(me, 20)
        assert not can_use_shield(me, 30)


class TestParseAction:
    def test_names_and_codes(self):
        assert parse_action("right") == Action.RIGHT
        assert parse_action("SHIELD") == Action.SHIELD
        assert parse_action(3) == Action.DOWN
        assert parse_action("0") == Action.LEFT

    @pytest.mark.parametrize("value", ["5", 7, "north", True])
    def test_unknown_actions(self, value):
        with pytest.raises(ValueError):
            parse_action(value)
