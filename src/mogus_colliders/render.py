from __future__ import annotations

from typing import Iterable

import pygame
from pygame import surface

from .colliders import ColliderDescriptor

COLLIDER_OUTLINE_COLOR = (80, 220, 120)


def collider_screen_rect(
    collider: ColliderDescriptor,
    *,
    origin: tuple[int, int],
    scale: float = 1.0,
) -> pygame.Rect:
    """Map a y-up collider to a y-down screen rect.

    ``origin`` is the screen position of the region's bottom-left corner.
    """
    left, bottom, right, top = collider.bounds
    return pygame.Rect(
        round(origin[0] + left * scale),
        round(origin[1] - top * scale),
        round((right - left) * scale),
        round((top - bottom) * scale),
    )


def draw_colliders(
    target: surface.Surface,
    colliders: Iterable[ColliderDescriptor],
    *,
    origin: tuple[int, int] | None = None,
    color: tuple[int, int, int] = COLLIDER_OUTLINE_COLOR,
    scale: float = 1.0,
    width: int = 1,
) -> int:
    """Outline colliders on ``target`` and return how many were drawn."""
    if origin is None:
        origin = (0, target.get_height())
    drawn = 0
    for collider in colliders:
        pygame.draw.rect(
            target, color, collider_screen_rect(collider, origin=origin, scale=scale), width
        )
        drawn += 1
    return drawn
