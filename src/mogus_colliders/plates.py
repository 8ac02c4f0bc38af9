from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence

from .grid import Region, TileCoord, solid_rows


@dataclass(frozen=True)
class Plate:
    """A wall run one tile tall, inclusive on both ends."""

    left: int
    right: int


@dataclass(frozen=True)
class TileRect:
    """A block of solid tiles with inclusive grid bounds."""

    left: int
    right: int
    bottom: int
    top: int

    @property
    def width(self) -> int:
        return self.right - self.left + 1

    @property
    def height(self) -> int:
        return self.top - self.bottom + 1

    @property
    def shape(self) -> Plate:
        return Plate(self.left, self.right)

    def cells(self) -> Iterator[TileCoord]:
        for y in range(self.bottom, self.top + 1):
            for x in range(self.left, self.right + 1):
                yield x, y


def row_plates(xs: Iterable[int], width: int) -> list[Plate]:
    """Combine the solid cells of one row into plates.

    ``xs`` holds the solid x coordinates of the row. The scan runs one column
    past the right edge so that plates touching it are still closed.
    """
    solid = set(xs)
    plates: list[Plate] = []
    plate_start: int | None = None
    for x in range(width + 1):
        is_solid = x < width and x in solid
        if plate_start is not None and not is_solid:
            plates.append(Plate(plate_start, x - 1))
            plate_start = None
        elif plate_start is None and is_solid:
            plate_start = x
    return plates


def merge_plates(plate_rows: Sequence[Sequence[Plate]]) -> list[TileRect]:
    """Stack same-shaped plates from consecutive rows into rectangles.

    Row index ``i`` of ``plate_rows`` is grid row ``y == i``. A plate only
    extends the rectangle below it when its ``(left, right)`` span matches
    exactly; any other overlap starts a new rectangle.
    """
    wall_rects: list[TileRect] = []
    previous_rects: dict[Plate, TileRect] = {}

    # Trailing empty row flushes rectangles that touch the top edge.
    for y, row in enumerate([*plate_rows, []]):
        current_rects: dict[Plate, TileRect] = {}
        for plate in row:
            previous = previous_rects.pop(plate, None)
            if previous is not None:
                current_rects[plate] = TileRect(
                    previous.left, previous.right, previous.bottom, previous.top + 1
                )
            else:
                current_rects[plate] = TileRect(plate.left, plate.right, y, y)

        # Anything not continued by this row has terminated.
        wall_rects.extend(previous_rects.values())
        previous_rects = current_rects

    return wall_rects


def build_wall_rects(region: Region) -> list[TileRect]:
    plate_rows = [
        row_plates(xs, region.width)
        for _, xs in solid_rows(region.width, region.height, region.occupancy)
    ]
    return merge_plates(plate_rows)
