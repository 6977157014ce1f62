"""
Game constants for the snake tick agent.
"""

from enum import IntEnum


class Action(IntEnum):
    """Action codes understood by the match engine."""

    LEFT = 0
    UP = 1
    RIGHT = 2
    DOWN = 3
    SHIELD = 4


# Movement directions
LEFT = Action.LEFT
UP = Action.UP
RIGHT = Action.RIGHT
DOWN = Action.DOWN
SHIELD = Action.SHIELD
DIRECTIONS = (LEFT, UP, RIGHT, DOWN)
VALID_ACTIONS = frozenset(Action)

# (dx, dy) applied to the head for each direction; x is the first stream coordinate
DIRECTION_OFFSETS = {
    LEFT: (0, -1),
    UP: (-1, 0),
    RIGHT: (0, 1),
    DOWN: (1, 0),
}

# Item values (positive values are normal food worth that many points)
GROWTH_BEAN = -1
TRAP = -2
KEY_MARKER = -3
WALL = -4
CHEST_MARKER = -5

NO_LIFETIME = -1
NO_SHRINK = -1

# Game settings
DEFAULT_BOARD_WIDTH = 40
DEFAULT_BOARD_HEIGHT = 30
SHIELD_SCORE_THRESHOLD = 20
SHIELD_PROBABILITY = 0.1
DEFAULT_ACTION = RIGHT


def parse_action(value) -> Action:
    """
    Resolve an action from a code (``2``), a numeric string (``"2"``) or a name (``"right"``).

    Raises:
        ValueError: If the value does not name a known action.
    """
    if isinstance(value, Action):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Unknown action: {value!r}")
    if isinstance(value, int):
        try:
            return Action(value)
        except ValueError:
            raise ValueError(f"Unknown action code: {value}") from None
    text = str(value).strip()
    if text.lstrip("-").isdigit():
        return parse_action(int(text))
    try:
        return Action[text.upper()]
    except KeyError:
        raise ValueError(f"Unknown action: {value!r}") from None
