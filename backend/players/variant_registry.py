"""
Author: snake-tick-agent maintainers
Date: 2026-10-19
PURPOSE: Registry for decision policies.
         Maps policy keys (e.g., 'baseline', 'heuristic') to player classes.
         Extensible: to add a policy, subclass BaselinePlayer (or Player), then add a
         loader and a description entry here.

SRP/DRY check: Pass - single responsibility is mapping policy keys to player classes.
"""

from typing import Callable, Dict, Optional, Type

from .base import Player


# Lazy imports keep the registry importable without loading every policy
def _get_baseline_player() -> Type[Player]:
    from .baseline_player import BaselinePlayer
    return BaselinePlayer


def _get_heuristic_player() -> Type[Player]:
    from .heuristic_player import HeuristicPlayer
    return HeuristicPlayer


PLAYER_VARIANT_LOADERS: Dict[str, Callable[[], Type[Player]]] = {
    "baseline": _get_baseline_player,
    "heuristic": _get_heuristic_player,
}

AVAILABLE_VARIANTS = list(PLAYER_VARIANT_LOADERS.keys())


def get_player_class(variant_key: Optional[str] = None) -> Type[Player]:
    """
    Get the player class for a given policy key.

    Args:
        variant_key: One of 'baseline', 'heuristic'. If None or empty, returns baseline.

    Returns:
        The player class (subclass of Player).

    Raises:
        ValueError: If variant_key is not recognized.
    """
    if not variant_key or variant_key.strip() == "":
        variant_key = "baseline"

    variant_key = variant_key.strip().lower()

    if variant_key not in PLAYER_VARIANT_LOADERS:
        available = ", ".join(AVAILABLE_VARIANTS)
        raise ValueError(
            f"Unknown player policy '{variant_key}'. Available policies: {available}"
        )

    return PLAYER_VARIANT_LOADERS[variant_key]()


def list_variants() -> list:
    """
    Return metadata about all available policies.

    Returns:
        List of dicts with 'key' and 'description' for each policy.
    """
    return [
        {"key": "baseline", "description": "Fallback ladder, uniform choice among safe moves"},
        {"key": "heuristic", "description": "Fallback ladder, safe moves scored by food, traps, heads and safe zone"},
    ]
