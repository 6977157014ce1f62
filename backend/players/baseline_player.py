"""
Baseline player - the fallback ladder that always ends in a legal action.
"""

import logging
from typing import List

from domain.constants import DIRECTIONS, SHIELD, Action
from domain.safety import can_use_shield, safe_directions
from domain.snake import Snake
from domain.world_state import WorldState
from .base import Decision, LadderState, Player

logger = logging.getLogger(__name__)

# Resolution of the shield roll
ROLL_SCALE = 10000


class BaselinePlayer(Player):
    """
    Walks the ladder NO_SELF -> SHIELD_ROLL -> SAFE_MOVE -> FORCED_SHIELD ->
    FORCED_RANDOM, stopping at the first state that produces an action.

    Subclasses change how a safe direction is picked by overriding
    ``choose_direction``; the ladder itself stays fixed.
    """

    def get_move(self, world: WorldState) -> Decision:
        me = world.my_snake
        if me is None:
            return Decision(self.random_direction(), LadderState.NO_SELF)

        shield_ready = can_use_shield(me, self.shield_threshold)
        if shield_ready and self.roll_shield():
            return Decision(SHIELD, LadderState.SHIELD_ROLL)

        safe = safe_directions(world, me)
        if safe:
            direction = self.choose_direction(world, me, safe)
            return Decision(direction, LadderState.SAFE_MOVE, tuple(safe))

        if shield_ready:
            return Decision(SHIELD, LadderState.FORCED_SHIELD)

        logger.debug("No safe direction and no shield for snake %s", me.id)
        return Decision(self.random_direction(), LadderState.FORCED_RANDOM)

    def roll_shield(self) -> bool:
        threshold = round(self.shield_probability * ROLL_SCALE)
        return self.rng.randint(0, ROLL_SCALE - 1) < threshold

    def choose_direction(self, world: WorldState, me: Snake, safe: List[Action]) -> Action:
        """Pick one of the safe directions; uniform at random in the baseline."""
        return self.rng.choice(safe)

    def random_direction(self) -> Action:
        return self.rng.choice(list(DIRECTIONS))
