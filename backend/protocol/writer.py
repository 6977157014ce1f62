"""
Protocol writer: serializes a WorldState back into the engine's line format.

Used to build fixtures and to replay logged snapshots; the output parses back
to an equal WorldState under the same variant.
"""

from typing import List

from domain.entities import Rect
from domain.world_state import WorldState

from .variants import BASIC, ProtocolVariant


def _rect_fields(rect: Rect) -> str:
    return f"{rect.x_min} {rect.y_min} {rect.x_max} {rect.y_max}"


def format_world(world: WorldState, variant: ProtocolVariant = BASIC) -> str:
    """
    Render ``world`` as newline-separated integer records.

    Raises:
        ValueError: If the variant expects a safe-zone block and the world has none.
    """
    lines: List[str] = [str(world.remaining_ticks), str(len(world.items))]

    for item in world.items:
        record = f"{item.position.x} {item.position.y} {item.value}"
        if variant.item_lifetime:
            record += f" {item.lifetime}"
        lines.append(record)

    lines.append(str(len(world.snakes)))
    for snake in world.snakes:
        record = (
            f"{snake.id} {len(snake.body)} {snake.score} {int(snake.direction)} "
            f"{snake.shield_cooldown} {snake.shield_duration}"
        )
        if variant.snake_has_key:
            record += f" {int(snake.has_key)}"
        lines.append(record)
        lines.extend(f"{segment.x} {segment.y}" for segment in snake.body)

    if variant.chests:
        lines.append(str(len(world.chests)))
        lines.extend(
            f"{chest.position.x} {chest.position.y} {chest.score}" for chest in world.chests
        )

    if variant.keys:
        lines.append(str(len(world.keys)))
        lines.extend(
            f"{key.position.x} {key.position.y} {key.holder_id} {key.remaining_time}"
            for key in world.keys
        )

    if variant.safe_zone:
        zone = world.safe_zone
        if zone is None:
            raise ValueError(f"protocol '{variant.name}' requires a safe-zone schedule")
        lines.append(_rect_fields(zone.current))
        lines.append(f"{zone.next_tick} {_rect_fields(zone.next_bounds)}")
        lines.append(f"{zone.final_tick} {_rect_fields(zone.final_bounds)}")

    return "\n".join(lines) + "\n"
