"""
Base player interface for the tick agent.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from domain.constants import SHIELD_PROBABILITY, SHIELD_SCORE_THRESHOLD, Action
from domain.world_state import WorldState
from .random_source import RandomSource, SystemRandomSource


class LadderState(Enum):
    """Terminal state of the fallback ladder that produced a decision."""

    NO_SELF = "no_self"
    SHIELD_ROLL = "shield_roll"
    SAFE_MOVE = "safe_move"
    FORCED_SHIELD = "forced_shield"
    FORCED_RANDOM = "forced_random"


@dataclass(frozen=True)
class Decision:
    action: Action
    state: LadderState
    safe_directions: Tuple[Action, ...] = ()


class Player:
    """
    Base class/interface for decision logic.

    Each player is responsible for returning exactly one decision for the
    agent's snake given the current world state.
    """

    def __init__(
        self,
        rng: Optional[RandomSource] = None,
        shield_threshold: int = SHIELD_SCORE_THRESHOLD,
        shield_probability: float = SHIELD_PROBABILITY,
    ):
        self.rng = rng or SystemRandomSource()
        self.shield_threshold = shield_threshold
        self.shield_probability = shield_probability

    def get_move(self, world: WorldState) -> Decision:
        """
        Return a decision given the current world state.

        Args:
            world: Snapshot of the current tick

        Returns:
            Decision whose action is one of LEFT, UP, RIGHT, DOWN, SHIELD
        """
        raise NotImplementedError
