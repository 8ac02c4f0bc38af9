"""Static wall colliders derived from merged tile rectangles."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Hashable, Iterable

import pygame

try:
    from typing import Self
except ImportError:  # pragma: no cover - Python 3.10 fallback
    from typing_extensions import Self

from .grid import Region
from .plates import TileRect, build_wall_rects

DEFAULT_WALL_FRICTION = 0.1
FIXED_BODY = "fixed"


@dataclass(frozen=True)
class ColliderDescriptor:
    """Axis-aligned box collider in the owning region's local space.

    ``center`` and ``half_extents`` are in world units (tile size already
    applied), with y pointing up like the tile grid.
    """

    region_id: Hashable
    center: tuple[float, float]
    half_extents: tuple[float, float]
    source: TileRect
    friction: float = DEFAULT_WALL_FRICTION
    body: str = FIXED_BODY

    @property
    def size(self) -> tuple[float, float]:
        return self.half_extents[0] * 2, self.half_extents[1] * 2

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """Return ``(left, bottom, right, top)``."""
        cx, cy = self.center
        hx, hy = self.half_extents
        return cx - hx, cy - hy, cx + hx, cy + hy

    def to_rect(self) -> pygame.Rect:
        # y is up here, so rect.y is the bottom edge, not the top.
        left, bottom, right, top = self.bounds
        return pygame.Rect(
            round(left), round(bottom), round(right - left), round(top - bottom)
        )

    def scaled(self: Self, factor: float) -> Self:
        """Return a copy with position and size multiplied by ``factor``."""
        return replace(
            self,
            center=(self.center[0] * factor, self.center[1] * factor),
            half_extents=(self.half_extents[0] * factor, self.half_extents[1] * factor),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "region_id": self.region_id,
            "center": list(self.center),
            "half_extents": list(self.half_extents),
            "friction": self.friction,
            "body": self.body,
        }


def collider_for_rect(
    rect: TileRect,
    tile_size: float,
    region_id: Hashable,
    *,
    friction: float = DEFAULT_WALL_FRICTION,
) -> ColliderDescriptor:
    half_extents = (
        rect.width * tile_size / 2,
        rect.height * tile_size / 2,
    )
    center = (
        (rect.left + rect.right + 1) * tile_size / 2,
        (rect.bottom + rect.top + 1) * tile_size / 2,
    )
    return ColliderDescriptor(
        region_id=region_id,
        center=center,
        half_extents=half_extents,
        source=rect,
        friction=friction,
    )


def emit_colliders(
    rects: Iterable[TileRect],
    tile_size: float,
    region_id: Hashable,
    *,
    friction: float = DEFAULT_WALL_FRICTION,
) -> list[ColliderDescriptor]:
    return [
        collider_for_rect(rect, tile_size, region_id, friction=friction)
        for rect in rects
    ]


def generate_region_colliders(
    region: Region, *, friction: float = DEFAULT_WALL_FRICTION
) -> list[ColliderDescriptor]:
    """Run the whole wall pipeline for one region."""
    return emit_colliders(
        build_wall_rects(region),
        region.tile_size,
        region.region_id,
        friction=friction,
    )
