"""
Domain entities for the snake tick agent.

This module contains the per-tick world model and the safety checks over
it, independent of the input protocol and of any decision policy.
"""

from .constants import (
    Action, LEFT, UP, RIGHT, DOWN, SHIELD, DIRECTIONS, VALID_ACTIONS, parse_action,
)
from .entities import Position, Rect, Item, Chest, Key, SafeZoneSchedule
from .errors import AgentError, MalformedInput, EmptyBodyAccess
from .snake import Snake
from .world_state import WorldState

__all__ = [
    'Action', 'LEFT', 'UP', 'RIGHT', 'DOWN', 'SHIELD', 'DIRECTIONS', 'VALID_ACTIONS',
    'parse_action',
    'Position', 'Rect', 'Item', 'Chest', 'Key', 'SafeZoneSchedule',
    'AgentError', 'MalformedInput', 'EmptyBodyAccess',
    'Snake',
    'WorldState',
]
