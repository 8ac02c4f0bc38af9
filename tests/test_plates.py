from __future__ import annotations

import random

from mogus_colliders.grid import Region, occupancy_from_ascii
from mogus_colliders.plates import (
    Plate,
    TileRect,
    build_wall_rects,
    merge_plates,
    row_plates,
)


def _region(width: int, height: int, cells: set[tuple[int, int]]) -> Region:
    return Region("level", width, height, 16, frozenset(cells))


def _ascii_region(*lines: str) -> Region:
    width, height, occupancy = occupancy_from_ascii(lines)
    return Region("level", width, height, 16, occupancy)


def _random_region(seed: int, width: int, height: int, density: float) -> Region:
    rng = random.Random(seed)
    cells = {
        (x, y)
        for y in range(height)
        for x in range(width)
        if rng.random() < density
    }
    return _region(width, height, cells)


def test_row_plates_splits_on_gaps() -> None:
    assert row_plates([0, 1, 3, 5, 6, 7], 9) == [
        Plate(0, 1),
        Plate(3, 3),
        Plate(5, 7),
    ]


def test_row_plates_closes_run_touching_right_edge() -> None:
    assert row_plates([2, 3, 4], 5) == [Plate(2, 4)]
    assert row_plates([0, 1, 2, 3, 4], 5) == [Plate(0, 4)]


def test_row_plates_empty_row() -> None:
    assert row_plates([], 4) == []
    assert row_plates([], 0) == []


def test_merge_plates_requires_identical_span() -> None:
    rows = [[Plate(0, 3)], [Plate(0, 3)], [Plate(1, 3)], [Plate(1, 3)]]
    assert merge_plates(rows) == [TileRect(0, 3, 0, 1), TileRect(1, 3, 2, 3)]


def test_merge_plates_empty_row_breaks_stack() -> None:
    rows = [[Plate(2, 2)], [], [Plate(2, 2)]]
    assert merge_plates(rows) == [TileRect(2, 2, 0, 0), TileRect(2, 2, 2, 2)]


def test_full_row_is_one_rectangle() -> None:
    region = _region(3, 1, {(0, 0), (1, 0), (2, 0)})
    assert build_wall_rects(region) == [TileRect(left=0, right=2, bottom=0, top=0)]


def test_full_square_is_one_rectangle() -> None:
    region = _region(2, 2, {(0, 0), (1, 0), (0, 1), (1, 1)})
    assert build_wall_rects(region) == [TileRect(left=0, right=1, bottom=0, top=1)]


def test_checkerboard_does_not_merge() -> None:
    region = _region(2, 2, {(0, 0), (1, 1)})
    rects = build_wall_rects(region)
    assert sorted(rects, key=lambda r: (r.bottom, r.left)) == [
        TileRect(0, 0, 0, 0),
        TileRect(1, 1, 1, 1),
    ]


def test_l_shape_keeps_row_plate_whole() -> None:
    # Row 0 is one plate spanning x=0..2; row 1 only has x=0, a different
    # shape, so nothing stacks.
    region = _region(3, 2, {(0, 0), (1, 0), (2, 0), (0, 1)})
    rects = build_wall_rects(region)
    assert set(rects) == {TileRect(0, 2, 0, 0), TileRect(0, 0, 1, 1)}


def test_l_shape_with_matching_column_stacks() -> None:
    region = _ascii_region(
        "#..",
        "#..",
        "###",
    )
    assert set(build_wall_rects(region)) == {
        TileRect(0, 0, 1, 2),
        TileRect(0, 2, 0, 0),
    }


def test_empty_grid_yields_nothing() -> None:
    assert build_wall_rects(_region(4, 3, set())) == []
    assert build_wall_rects(_region(0, 0, set())) == []


def test_rectangles_touching_top_and_right_edges_are_flushed() -> None:
    region = _ascii_region(
        "..##",
        "..##",
        "....",
    )
    assert build_wall_rects(region) == [TileRect(2, 3, 1, 2)]


def test_greedy_merge_is_not_a_minimal_cover() -> None:
    # Two columns plus a bridge could be three rectangles; the bridge row has
    # a different shape, so the columns are cut into five pieces.
    region = _ascii_region(
        "#.#",
        "###",
        "#.#",
    )
    rects = build_wall_rects(region)
    assert rects == [
        TileRect(0, 0, 0, 0),
        TileRect(2, 2, 0, 0),
        TileRect(0, 2, 1, 1),
        TileRect(0, 0, 2, 2),
        TileRect(2, 2, 2, 2),
    ]


def test_output_order_follows_flush_row() -> None:
    region = _ascii_region(
        "#...",
        "#.##",
        "#.##",
    )
    assert build_wall_rects(region) == [
        TileRect(2, 3, 0, 1),
        TileRect(0, 0, 0, 2),
    ]


def test_coverage_and_disjointness_on_random_grids() -> None:
    for seed in range(25):
        region = _random_region(seed, width=9, height=7, density=0.55)
        covered: list[tuple[int, int]] = []
        for rect in build_wall_rects(region):
            assert rect.left <= rect.right
            assert rect.bottom <= rect.top
            covered.extend(rect.cells())
        assert len(covered) == len(set(covered))
        assert set(covered) == region.occupancy


def test_rectangles_cannot_be_extended_vertically() -> None:
    for seed in range(25):
        region = _random_region(seed + 100, width=8, height=8, density=0.6)
        rects = build_wall_rects(region)
        for rect in rects:
            for y in (rect.bottom - 1, rect.top + 1):
                if not 0 <= y < region.height:
                    continue
                xs = [x for x in range(region.width) if region.is_solid(x, y)]
                assert rect.shape not in row_plates(xs, region.width)


def test_same_input_gives_same_rectangles() -> None:
    region = _random_region(7, width=12, height=10, density=0.5)
    again = _region(region.width, region.height, set(region.occupancy))
    assert build_wall_rects(region) == build_wall_rects(again)


def test_tile_rect_size_and_cells() -> None:
    rect = TileRect(left=1, right=3, bottom=2, top=3)
    assert (rect.width, rect.height) == (3, 2)
    assert rect.shape == Plate(1, 3)
    assert len(list(rect.cells())) == rect.width * rect.height
