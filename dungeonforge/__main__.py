"""Command-line entry point: generate a dungeon and print it as text."""

from __future__ import annotations

import argparse
import logging
import sys

from . import config
from .environment.generators import (
    DungeonParameters,
    InvalidConfigurationError,
    RoomParameters,
    create_dungeon_pipeline,
)
from .environment.layout import DungeonLayout
from .types import RandomSeed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dungeonforge",
        description="Generate a dungeon tile layout and print it as ASCII.",
    )
    parser.add_argument("--width", type=int, default=config.DEFAULT_DUNGEON_WIDTH)
    parser.add_argument("--length", type=int, default=config.DEFAULT_DUNGEON_LENGTH)
    parser.add_argument("--min-size", type=int, default=config.DEFAULT_ROOM_MIN_SIZE)
    parser.add_argument(
        "--max-size",
        type=int,
        default=config.DEFAULT_ROOM_MAX_SIZE,
        help="Exclusive upper bound on room sides",
    )
    parser.add_argument(
        "--rooms",
        type=int,
        default=None,
        help=f"Room candidates to attempt (default: area / {config.TILES_PER_ROOM})",
    )
    parser.add_argument(
        "--min-distance",
        type=int,
        default=config.DEFAULT_MIN_DISTANCE_BETWEEN_ROOMS,
    )
    parser.add_argument("--passes", type=int, default=config.SMOOTHING_PASSES)
    parser.add_argument("--seed", type=str, default=None)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def format_summary(layout: DungeonLayout) -> str:
    lines = [
        f"{layout.width}x{layout.length} dungeon, seed={layout.seed!r}",
        f"rooms: {len(layout.accepted_rooms)} accepted "
        f"of {len(layout.rooms)} attempted",
    ]
    for index, room in enumerate(layout.rooms):
        status = "accepted" if room.accepted else "rejected"
        lines.append(
            f"  #{index}: {room.width}x{room.length} at ({room.x}, {room.z}) {status}"
        )
    lines.append(
        f"doors: {len(layout.door_positions())}  "
        f"pillars: {len(layout.pillar_positions())}  "
        f"props: {len(layout.prop_positions())}"
    )
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    seed: RandomSeed = args.seed
    if isinstance(seed, str) and seed.isdigit():
        seed = int(seed)
    params = DungeonParameters(
        width=args.width,
        length=args.length,
        room_params=RoomParameters(min_size=args.min_size, max_size=args.max_size),
        number_of_rooms=args.rooms,
        min_distance_between_rooms=args.min_distance,
        smoothing_passes=args.passes,
        seed=seed,
    )

    try:
        generator = create_dungeon_pipeline(params)
    except InvalidConfigurationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    layout = generator.generate()
    print(layout.to_ascii())
    print()
    print(format_summary(layout))
    return 0


if __name__ == "__main__":
    sys.exit(main())
