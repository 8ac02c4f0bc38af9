from __future__ import annotations

from typing import Callable, Hashable, Iterable, Mapping

from .colliders import DEFAULT_WALL_FRICTION, ColliderDescriptor, generate_region_colliders
from .grid import Region, TileCoord

ColliderCallback = Callable[[ColliderDescriptor], None]


class RegionAlreadyLoadedError(RuntimeError):
    """Raised when a region's colliders are generated twice without a reset."""


def group_tiles_by_region(
    tiles: Iterable[tuple[TileCoord, Hashable]],
    layer_parents: Mapping[Hashable, Hashable],
) -> dict[Hashable, set[TileCoord]]:
    """Collect wall tiles into one occupancy set per owning region.

    Each tile is ``(coords, layer)``; the layer's parent is the region. Tiles
    on a layer without a known parent are not attached to any level yet and
    are skipped.
    """
    region_walls: dict[Hashable, set[TileCoord]] = {}
    for coords, layer in tiles:
        region_id = layer_parents.get(layer)
        if region_id is None:
            continue
        region_walls.setdefault(region_id, set()).add(coords)
    return region_walls


class ColliderRegistry:
    """Tracks which colliders each loaded region owns.

    Colliders live exactly as long as their region: they are produced when
    the region loads and dropped together when it unloads.
    """

    def __init__(
        self,
        *,
        friction: float = DEFAULT_WALL_FRICTION,
        on_spawn: ColliderCallback | None = None,
        on_despawn: ColliderCallback | None = None,
        log_rectangles: bool = False,
    ) -> None:
        self.friction = friction
        self.on_spawn = on_spawn
        self.on_despawn = on_despawn
        self.log_rectangles = log_rectangles
        self._owned: dict[Hashable, list[ColliderDescriptor]] = {}

    def load_region(
        self, region: Region, *, regenerate: bool = False
    ) -> list[ColliderDescriptor]:
        if region.region_id in self._owned:
            if not regenerate:
                raise RegionAlreadyLoadedError(
                    f"Region {region.region_id!r} already has wall colliders"
                )
            self.unload_region(region.region_id)

        colliders = generate_region_colliders(region, friction=self.friction)
        self._owned[region.region_id] = colliders
        if self.log_rectangles:
            print(
                f"region {region.region_id!r}: {len(region.occupancy)} wall tiles"
                f" -> {len(colliders)} colliders"
            )
        if self.on_spawn:
            for collider in colliders:
                self.on_spawn(collider)
        return list(colliders)

    def unload_region(self, region_id: Hashable) -> int:
        colliders = self._owned.pop(region_id, [])
        if self.on_despawn:
            for collider in colliders:
                self.on_despawn(collider)
        return len(colliders)

    def load_regions(self, regions: Iterable[Region]) -> int:
        return sum(len(self.load_region(region)) for region in regions)

    def is_loaded(self, region_id: Hashable) -> bool:
        return region_id in self._owned

    def loaded_regions(self) -> list[Hashable]:
        return list(self._owned)

    def colliders_for(self, region_id: Hashable) -> list[ColliderDescriptor]:
        return list(self._owned.get(region_id, []))

    def all_colliders(self) -> list[ColliderDescriptor]:
        return [collider for owned in self._owned.values() for collider in owned]

    def clear(self) -> None:
        for region_id in list(self._owned):
            self.unload_region(region_id)
