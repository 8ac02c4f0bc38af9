"""Read wall tiles out of LDtk project files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

from .grid import Region, TileCoord

# IntGrid values the game registers as walls.
DEFAULT_WALL_VALUES: tuple[int, ...] = (1, 4)

INT_GRID_LAYER = "IntGrid"


class LevelDataError(ValueError):
    """Raised for level files the collider generator cannot use."""


def _int_grid_layer(level: dict[str, Any]) -> dict[str, Any]:
    layers = level.get("layerInstances")
    if not layers:
        raise LevelDataError(
            f"Level {level.get('identifier', level.get('uid'))!r} has no layers"
        )
    for layer in layers:
        if layer.get("__type") == INT_GRID_LAYER:
            return layer
    raise LevelDataError(
        f"Level {level.get('identifier', level.get('uid'))!r} has no IntGrid layer"
    )


def wall_cells_from_csv(
    csv: list[int], width: int, height: int, wall_values: Iterable[int]
) -> set[TileCoord]:
    """Return y-up coordinates of wall cells in a top-row-first IntGrid CSV."""
    if len(csv) != width * height:
        raise LevelDataError(
            f"intGridCsv has {len(csv)} cells, expected {width}x{height}"
        )
    walls = set(wall_values)
    cells: set[TileCoord] = set()
    for idx, value in enumerate(csv):
        if value not in walls:
            continue
        row, x = divmod(idx, width)
        cells.add((x, height - 1 - row))
    return cells


def region_from_level(
    level: dict[str, Any], *, wall_values: Iterable[int] = DEFAULT_WALL_VALUES
) -> Region:
    layer = _int_grid_layer(level)
    try:
        width = int(layer["__cWid"])
        height = int(layer["__cHei"])
        grid_size = int(layer["__gridSize"])
        csv = list(layer.get("intGridCsv", []))
    except (KeyError, TypeError, ValueError) as exc:
        raise LevelDataError(f"Malformed IntGrid layer: {exc}") from exc
    uid = level.get("uid")
    if uid is None:
        raise LevelDataError(
            f"Level {level.get('identifier')!r} has no uid to own its colliders"
        )
    return Region(
        region_id=uid,
        width=width,
        height=height,
        tile_size=grid_size,
        occupancy=frozenset(wall_cells_from_csv(csv, width, height, wall_values)),
    )


def regions_from_ldtk(
    payload: dict[str, Any], *, wall_values: Iterable[int] = DEFAULT_WALL_VALUES
) -> list[Region]:
    levels = payload.get("levels")
    if not isinstance(levels, list):
        raise LevelDataError("LDtk project has no levels list")
    values = tuple(wall_values)
    return [region_from_level(level, wall_values=values) for level in levels]


def load_ldtk(
    path: Path, *, wall_values: Iterable[int] = DEFAULT_WALL_VALUES
) -> list[Region]:
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise LevelDataError(f"Cannot read LDtk project ({path}): {exc}") from exc
    except json.JSONDecodeError as exc:
        raise LevelDataError(f"Invalid LDtk JSON ({path}): {exc}") from exc
    if not isinstance(payload, dict):
        raise LevelDataError(f"Invalid LDtk JSON ({path}): expected an object")
    return regions_from_ldtk(payload, wall_values=wall_values)
