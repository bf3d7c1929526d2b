"""Cellular automaton smoothing layer.

Turns the raw room stamps into a connected dungeon. Each pass reads a frozen
snapshot of the previous generation and writes every decision into a fresh
buffer, so the result of a pass never depends on scan order. The rules:

- Border cells and empty cells become STANDARD floor (the corridors).
- STANDARD cells with at most one STANDARD neighbour are absorbed into rooms,
  and STANDARD cells fully enclosed by ROOM become ROOM.
- STANDARD cells fully enclosed by STANDARD become ENVIRO blocks.
- ROOM cells with at most one ROOM neighbour, or fully enclosed by STANDARD,
  revert to STANDARD.
- ROOM cells fully enclosed by ROOM may get a pillar, with a cooldown so open
  room interiors are not packed with them.
"""

from __future__ import annotations

import logging

import numpy as np

from dungeonforge.environment.generators.pipeline.context import GenerationContext
from dungeonforge.environment.generators.pipeline.layer import GenerationLayer
from dungeonforge.environment.grid import Grid
from dungeonforge.environment.layout import CARDINAL_DIRECTIONS, DIAGONAL_DIRECTIONS
from dungeonforge.environment.tile_types import TileType

logger = logging.getLogger(__name__)


def count_adjacent(grid: Grid, x: int, z: int, tile_type: TileType) -> int:
    """Number of the 4 axis neighbours of (x, z) holding tile_type.

    Out-of-range neighbours never match. Reads grid only.
    """
    return sum(
        1 for dx, dz in CARDINAL_DIRECTIONS if grid.matches(x + dx, z + dz, tile_type)
    )


def count_diagonal(grid: Grid, x: int, z: int, tile_type: TileType) -> int:
    """Number of the 4 diagonal neighbours of (x, z) holding tile_type.

    Out-of-range neighbours never match. Reads grid only.
    """
    return sum(
        1 for dx, dz in DIAGONAL_DIRECTIONS if grid.matches(x + dx, z + dz, tile_type)
    )


def is_enclosed_by(grid: Grid, x: int, z: int, tile_type: TileType) -> bool:
    """True if all 8 neighbours of (x, z) hold tile_type."""
    return (
        count_adjacent(grid, x, z, tile_type) == 4
        and count_diagonal(grid, x, z, tile_type) == 4
    )


class SmoothingLayer(GenerationLayer):
    """Runs the smoothing automaton over ctx.floor.

    Pillars are written straight into ctx.features; they never change the floor
    classification.
    """

    def __init__(
        self, passes: int | None = None, pillar_cooldown: int | None = None
    ) -> None:
        """Initialize the smoothing layer.

        Args:
            passes: Number of passes. Defaults to params.smoothing_passes.
            pillar_cooldown: Eligible cells skipped after each pillar.
                Defaults to params.pillar_cooldown.
        """
        self.passes = passes
        self.pillar_cooldown = pillar_cooldown

    def apply(self, ctx: GenerationContext) -> None:
        passes = ctx.params.smoothing_passes if self.passes is None else self.passes
        cooldown = (
            ctx.params.pillar_cooldown
            if self.pillar_cooldown is None
            else self.pillar_cooldown
        )

        for pass_index in range(passes):
            snapshot = ctx.floor.clone()
            ctx.floor, pillars = self.run_pass(snapshot, ctx.features, cooldown)
            changed = int(np.count_nonzero(snapshot.tiles != ctx.floor.tiles))
            logger.debug(
                f"Smoothing pass {pass_index + 1}/{passes}: "
                f"{changed} cells changed, {pillars} pillars placed"
            )

        leftover = ctx.floor.count(TileType.EMPTY)
        if leftover:
            ctx.floor.tiles[ctx.floor.tiles == TileType.EMPTY] = TileType.STANDARD
            logger.debug(f"Cleanup converted {leftover} empty cells to STANDARD")

    @staticmethod
    def run_pass(old: Grid, features: Grid, cooldown: int) -> tuple[Grid, int]:
        """Compute one generation of the automaton.

        Args:
            old: Snapshot to read every neighbour count from. Not modified.
            features: Feature grid that receives pillar markers.
            cooldown: Eligible cells to skip after each pillar placement.

        Returns:
            The new floor grid and the number of pillars placed in this pass.
        """
        new = old.clone()
        skip = 0
        pillars = 0

        for x, z, current in old.cells():
            if old.is_border(x, z):
                new.set(x, z, TileType.STANDARD)
                continue

            match current:
                case TileType.EMPTY:
                    # Next to a room this is the corridor ring around it; anywhere
                    # else it is open floor. Both end up STANDARD.
                    new.set(x, z, TileType.STANDARD)

                case TileType.STANDARD:
                    if count_adjacent(old, x, z, TileType.STANDARD) <= 1:
                        new.set(x, z, TileType.ROOM)
                    elif is_enclosed_by(old, x, z, TileType.ROOM):
                        new.set(x, z, TileType.ROOM)
                    elif is_enclosed_by(old, x, z, TileType.STANDARD):
                        new.set(x, z, TileType.ENVIRO)

                case TileType.ROOM:
                    if count_adjacent(old, x, z, TileType.ROOM) <= 1:
                        new.set(x, z, TileType.STANDARD)
                    elif is_enclosed_by(old, x, z, TileType.STANDARD):
                        new.set(x, z, TileType.STANDARD)
                    elif is_enclosed_by(old, x, z, TileType.ROOM):
                        if skip == 0:
                            features.set(x, z, TileType.PILLAR)
                            pillars += 1
                            skip = cooldown
                        else:
                            skip -= 1

        return new, pillars
