#!/usr/bin/env python3
"""Generate wall colliders from ASCII art or an LDtk project."""

# ruff: noqa: E402

from __future__ import annotations

import argparse
import json
import sys
import unicodedata
from pathlib import Path

import pygame

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from mogus_colliders.config import (
    load_config,
    registry_options,
    save_config,
    wall_values,
)
from mogus_colliders.grid import SOLID_CHAR, Region, occupancy_from_ascii
from mogus_colliders.level_data import load_ldtk
from mogus_colliders.regions import ColliderRegistry, RegionAlreadyLoadedError
from mogus_colliders.render import draw_colliders

DEFAULT_TILE_SIZE = 16
PREVIEW_BACKGROUND = (24, 24, 32)


def _read_ascii(path: str | None) -> list[str]:
    if path:
        with open(path, encoding="utf-8") as handle:
            lines = handle.read().splitlines()
    else:
        lines = sys.stdin.read().splitlines()
    lines = [unicodedata.normalize("NFKC", line) for line in lines]
    if not lines:
        raise ValueError("No ASCII input provided.")
    return lines


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Merge solid tiles into box colliders and print them as JSON."
    )
    parser.add_argument(
        "path",
        nargs="?",
        help="ASCII art input file (reads stdin if omitted).",
    )
    parser.add_argument(
        "--ldtk",
        type=Path,
        help="Read every level of an LDtk project instead of ASCII art.",
    )
    parser.add_argument("--tile-size", type=int, default=DEFAULT_TILE_SIZE)
    parser.add_argument(
        "--solid",
        default=SOLID_CHAR,
        help=f"Character marking a solid tile (default: {SOLID_CHAR!r}).",
    )
    parser.add_argument(
        "--colliders",
        action="store_true",
        help="Print collider centers/half extents instead of tile rectangles.",
    )
    parser.add_argument(
        "--meters",
        action="store_true",
        help="Scale colliders by physics.pixels_per_meter from the config.",
    )
    parser.add_argument("--config", type=Path, help="Config file to use.")
    parser.add_argument(
        "--write-config",
        action="store_true",
        help="Write the effective config (defaults filled in) and exit.",
    )
    parser.add_argument(
        "--preview",
        type=Path,
        help="Save a PNG with collider outlines for the first region.",
    )
    return parser.parse_args()


def _load_regions(args: argparse.Namespace, config: dict) -> list[Region]:
    if args.ldtk:
        return load_ldtk(args.ldtk, wall_values=wall_values(config))
    if len(args.solid) != 1:
        raise ValueError("--solid must be a single character.")
    width, height, occupancy = occupancy_from_ascii(
        _read_ascii(args.path), solid=args.solid
    )
    return [Region("ascii", width, height, args.tile_size, occupancy)]


def _save_preview(region: Region, registry: ColliderRegistry, out: Path) -> None:
    width, height = region.pixel_size
    surface = pygame.Surface((max(1, int(width)), max(1, int(height))))
    surface.fill(PREVIEW_BACKGROUND)
    draw_colliders(surface, registry.colliders_for(region.region_id))
    out.parent.mkdir(parents=True, exist_ok=True)
    pygame.image.save(surface, out.as_posix())
    print(f"Saved collider preview: {out}", file=sys.stderr)


def main() -> int:
    args = parse_args()
    config, config_path = load_config(args.config)
    if args.write_config:
        save_config(config, config_path)
        print(f"Saved config: {config_path}", file=sys.stderr)
        return 0

    try:
        regions = _load_regions(args, config)
        registry = ColliderRegistry(**registry_options(config))
        registry.load_regions(regions)
    except (ValueError, RegionAlreadyLoadedError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    pixels_per_meter = float(config["physics"]["pixels_per_meter"])
    payload: dict[str, list[dict[str, object]]] = {}
    for region in regions:
        colliders = registry.colliders_for(region.region_id)
        if args.colliders:
            if args.meters:
                colliders = [c.scaled(1.0 / pixels_per_meter) for c in colliders]
            entries = [c.to_dict() for c in colliders]
        else:
            entries = [
                {
                    "left": c.source.left,
                    "right": c.source.right,
                    "bottom": c.source.bottom,
                    "top": c.source.top,
                }
                for c in colliders
            ]
        payload[str(region.region_id)] = entries

    if args.preview and regions:
        _save_preview(regions[0], registry, args.preview)

    sys.stdout.write(json.dumps(payload, indent=2) + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
