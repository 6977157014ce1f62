"""
Heuristic player - the baseline ladder with a scored choice among safe moves.

Only the SAFE_MOVE step differs from BaselinePlayer: each safe direction is
scored from the cell it leads to and the best one wins, ties broken at random.
"""

# Author: snake-tick-agent maintainers
# Date: 2026-10-19
# PURPOSE: Policy variant that keeps the fallback ladder and replaces only the safe-move pick with a scored choice
# SRP/DRY check: Pass - Extends BaselinePlayer, reuses its ladder and random source, adds only cell scoring
# Integration points: domain.safety, domain.world_state, players.baseline_player
# Dependencies: logging, typing

import logging
from typing import Dict, List

from domain.constants import Action
from domain.entities import Position
from domain.safety import next_position
from domain.snake import Snake
from domain.world_state import WorldState
from .baseline_player import BaselinePlayer

logger = logging.getLogger(__name__)

GROWTH_BEAN_VALUE = 1.0
CHEST_WEIGHT = 1.0
TRAP_PENALTY = 10.0
TRAP_NEARBY_PENALTY = 1.0
HEAD_CONTACT_PENALTY = 5.0
OUTSIDE_SAFE_ZONE_PENALTY = 20.0


class HeuristicPlayer(BaselinePlayer):
    """
    Scores a target cell by:
      - attraction to the best food (value / (distance + 1)),
        and to chests while carrying a key
      - a penalty for stepping on or next to a trap
      - a penalty for ending next to another snake's head
      - a penalty for leaving the current safe zone
    """

    def choose_direction(self, world: WorldState, me: Snake, safe: List[Action]) -> Action:
        scores: Dict[Action, float] = {
            direction: self.score_cell(world, me, next_position(me.head, direction))
            for direction in safe
        }
        best = max(scores.values())
        candidates = [direction for direction in safe if scores[direction] == best]
        logger.debug("Heuristic scores: %s", {d.name: round(s, 3) for d, s in scores.items()})
        return self.rng.choice(candidates)

    def score_cell(self, world: WorldState, me: Snake, cell: Position) -> float:
        score = self._attraction(world, me, cell)

        for trap in world.traps():
            distance = trap.position.manhattan_distance(cell)
            if distance == 0:
                score -= TRAP_PENALTY
            elif distance == 1:
                score -= TRAP_NEARBY_PENALTY

        if any(head.manhattan_distance(cell) <= 1 for head in world.other_heads()):
            score -= HEAD_CONTACT_PENALTY

        if world.safe_zone is not None and not world.safe_zone.contains(cell):
            score -= OUTSIDE_SAFE_ZONE_PENALTY

        return score

    def _attraction(self, world: WorldState, me: Snake, cell: Position) -> float:
        best = 0.0
        for item in world.food_items():
            value = item.value if item.is_food else GROWTH_BEAN_VALUE
            best = max(best, value / (item.position.manhattan_distance(cell) + 1))
        if me.has_key:
            for chest in world.chests:
                reward = CHEST_WEIGHT * chest.score
                best = max(best, reward / (chest.position.manhattan_distance(cell) + 1))
        return best
