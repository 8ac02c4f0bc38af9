"""Tile occupancy model and row extraction for wall collider generation."""

from __future__ import annotations

from dataclasses import dataclass, field
from numbers import Integral
from typing import Hashable, Iterable, Iterator

import numpy as np  # type: ignore

TileCoord = tuple[int, int]
Occupancy = frozenset[TileCoord]

SOLID_CHAR = "#"


class TileBoundsError(ValueError):
    """Raised when tile data does not fit the region it claims to belong to."""


def _check_dimensions(width: int, height: int) -> None:
    if width < 0 or height < 0:
        raise TileBoundsError(f"Region size must be non-negative, got {width}x{height}")


def check_occupancy(width: int, height: int, occupancy: Iterable[TileCoord]) -> None:
    """Fail fast on any solid cell outside ``[0, width) x [0, height)``."""
    _check_dimensions(width, height)
    for cell in occupancy:
        if len(cell) != 2 or not all(isinstance(v, Integral) for v in cell):
            raise TileBoundsError(f"Solid tile {cell!r} is not an integer (x, y) pair")
        x, y = cell
        if not (0 <= x < width and 0 <= y < height):
            raise TileBoundsError(
                f"Solid tile ({x}, {y}) is outside the {width}x{height} region"
            )


@dataclass(frozen=True)
class Region:
    """One level's solid tiles, sized in tiles and scaled by ``tile_size``."""

    region_id: Hashable
    width: int
    height: int
    tile_size: float
    occupancy: Occupancy = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not isinstance(self.occupancy, frozenset):
            object.__setattr__(self, "occupancy", frozenset(self.occupancy))
        if self.tile_size <= 0:
            raise TileBoundsError(f"tile_size must be positive, got {self.tile_size}")
        check_occupancy(self.width, self.height, self.occupancy)

    def is_solid(self, x: int, y: int) -> bool:
        return (x, y) in self.occupancy

    @property
    def pixel_size(self) -> tuple[float, float]:
        return self.width * self.tile_size, self.height * self.tile_size


def solid_rows(
    width: int, height: int, occupancy: Occupancy | set[TileCoord]
) -> Iterator[tuple[int, list[int]]]:
    """Yield ``(y, xs)`` for every row bottom to top, including empty rows."""
    check_occupancy(width, height, occupancy)
    for y in range(height):
        yield y, [x for x in range(width) if (x, y) in occupancy]


def occupancy_from_ascii(
    lines: Iterable[str], *, solid: str = SOLID_CHAR
) -> tuple[int, int, Occupancy]:
    """Parse ASCII art into ``(width, height, occupancy)``.

    The first line is the top row of the level, so rows are flipped into the
    y-up grid. Short lines are treated as padded with empty cells.
    """
    rows = [line.rstrip("\n") for line in lines]
    height = len(rows)
    width = max((len(row) for row in rows), default=0)
    cells: set[TileCoord] = set()
    for row_idx, row in enumerate(rows):
        y = height - 1 - row_idx
        for x, ch in enumerate(row):
            if ch == solid:
                cells.add((x, y))
    return width, height, frozenset(cells)


def occupancy_from_mask(mask: np.ndarray) -> tuple[int, int, Occupancy]:
    """Convert a 2D boolean array indexed ``[y, x]`` (row 0 at the bottom)."""
    grid = np.asarray(mask, dtype=bool)
    if grid.ndim != 2:
        raise TileBoundsError("mask must be 2D")
    height, width = grid.shape
    ys, xs = np.nonzero(grid)
    cells = frozenset((int(x), int(y)) for x, y in zip(xs, ys))
    return int(width), int(height), cells
