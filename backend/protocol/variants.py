"""
Protocol variants for the tick snapshot.

Both variants produce the same WorldState; they only differ in which
optional fields and blocks appear in the stream. To support a new engine
build, add a preset to PROTOCOL_VARIANTS.
"""

from dataclasses import dataclass, replace
from typing import Dict, Optional


@dataclass(frozen=True)
class ProtocolVariant:
    name: str
    item_lifetime: bool = False
    snake_has_key: bool = False
    chests: bool = False
    keys: bool = False
    safe_zone: bool = False


BASIC = ProtocolVariant(name="basic")
EXTENDED = ProtocolVariant(
    name="extended",
    item_lifetime=True,
    snake_has_key=True,
    chests=True,
    keys=True,
    safe_zone=True,
)

PROTOCOL_VARIANTS: Dict[str, ProtocolVariant] = {
    BASIC.name: BASIC,
    EXTENDED.name: EXTENDED,
}

AVAILABLE_PROTOCOLS = list(PROTOCOL_VARIANTS.keys())


def get_protocol_variant(name: Optional[str] = None, snake_has_key: Optional[bool] = None) -> ProtocolVariant:
    """
    Get the protocol variant for a given key.

    Args:
        name: One of 'basic', 'extended'. If None or empty, returns basic.
        snake_has_key: Overrides whether snake records carry a hasKey field.

    Raises:
        ValueError: If name is not recognized.
    """
    if not name or name.strip() == "":
        name = BASIC.name

    name = name.strip().lower()

    if name not in PROTOCOL_VARIANTS:
        available = ", ".join(AVAILABLE_PROTOCOLS)
        raise ValueError(
            f"Unknown protocol variant '{name}'. Available variants: {available}"
        )

    variant = PROTOCOL_VARIANTS[name]
    if snake_has_key is not None and snake_has_key != variant.snake_has_key:
        variant = replace(variant, snake_has_key=snake_has_key)
    return variant
