"""
Player implementations for the tick agent.

This module contains the decision policies that turn a WorldState into
exactly one action, plus the random source they draw from.
"""

from .base import Decision, LadderState, Player
from .random_source import RandomSource, SystemRandomSource
from .baseline_player import BaselinePlayer
from .heuristic_player import HeuristicPlayer
from .variant_registry import get_player_class, list_variants, AVAILABLE_VARIANTS

__all__ = [
    'Decision',
    'LadderState',
    'Player',
    'RandomSource',
    'SystemRandomSource',
    'BaselinePlayer',
    'HeuristicPlayer',
    'get_player_class',
    'list_variants',
    'AVAILABLE_VARIANTS',
]
