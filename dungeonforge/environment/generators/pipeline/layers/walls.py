"""Wall and door derivation layer.

Builds the final wall grid from the smoothed floor grid and the door markers
room placement left behind:

1. Boundary walls: every outer row/column cell is a STANDARD wall.
2. Room walls: every ROOM cell with a non-ROOM axis neighbour (out-of-range
   counts as non-ROOM) gets a wall on that edge. A door marker on the cell
   turns those edges into door openings.
3. Enviro walls: ENVIRO blocks get walls on edges facing other floor types.
   These exist only as segments; the wall grid does not record them.

Walls are recorded from the room side, so a wall between a room cell and a
corridor cell belongs to the room cell.
"""

from __future__ import annotations

import logging

from dungeonforge.environment.generators.pipeline.context import GenerationContext
from dungeonforge.environment.generators.pipeline.layer import GenerationLayer
from dungeonforge.environment.grid import Grid
from dungeonforge.environment.layout import CARDINAL_DIRECTIONS, WallSegment
from dungeonforge.environment.tile_types import WALKABLE_TILE_TYPES, TileType

logger = logging.getLogger(__name__)


class WallDerivationLayer(GenerationLayer):
    """Replaces ctx.walls with the derived wall grid and fills ctx.wall_segments."""

    def __init__(self, enviro_walls: bool = True) -> None:
        """Initialize the wall layer.

        Args:
            enviro_walls: Also emit segments around ENVIRO blocks.
        """
        self.enviro_walls = enviro_walls

    def apply(self, ctx: GenerationContext) -> None:
        floor = ctx.floor
        door_marks = ctx.walls
        walls = Grid(ctx.width, ctx.length, fill=TileType.EMPTY)
        segments: list[WallSegment] = []

        self._add_boundary_walls(walls, segments)
        self._add_room_walls(floor, door_marks, walls, segments)
        self._keep_walkable_doors(floor, door_marks, walls)
        if self.enviro_walls:
            self._add_enviro_walls(floor, segments)

        ctx.walls = walls
        ctx.wall_segments.extend(segments)
        logger.debug(
            f"Derived {len(segments)} wall segments, "
            f"{walls.count(TileType.DOOR)} doors"
        )

    @staticmethod
    def _add_boundary_walls(walls: Grid, segments: list[WallSegment]) -> None:
        for x, z, _ in walls.cells():
            if not walls.is_border(x, z):
                continue
            walls.set(x, z, TileType.STANDARD)
            for dx, dz in CARDINAL_DIRECTIONS:
                if not walls.in_bounds(x + dx, z + dz):
                    segments.append(WallSegment(x, z, (dx, dz), TileType.STANDARD))

    @staticmethod
    def _add_room_walls(
        floor: Grid, door_marks: Grid, walls: Grid, segments: list[WallSegment]
    ) -> None:
        for x, z, tile in floor.cells():
            if tile != TileType.ROOM:
                continue
            exposed = [
                (dx, dz)
                for dx, dz in CARDINAL_DIRECTIONS
                if not floor.matches(x + dx, z + dz, TileType.ROOM)
            ]
            if not exposed:
                continue

            is_door = door_marks.get(x, z) == TileType.DOOR
            kind = TileType.DOOR if is_door else TileType.ROOM
            segments.extend(WallSegment(x, z, side, kind) for side in exposed)

            # The boundary wall always wins on the outer ring
            if not walls.is_border(x, z):
                walls.set(x, z, kind)

    @staticmethod
    def _keep_walkable_doors(floor: Grid, door_marks: Grid, walls: Grid) -> None:
        """Carry door markers that did not become room walls, if still walkable.

        A door whose cell is no longer walkable is dropped so a door never sits
        inside an enviro block.
        """
        for x, z in door_marks.positions_of(TileType.DOOR):
            if walls.is_border(x, z) or walls.get(x, z) == TileType.DOOR:
                continue
            if floor.get(x, z) in WALKABLE_TILE_TYPES:
                walls.set(x, z, TileType.DOOR)
            else:
                logger.debug(
                    f"Dropping door at ({x}, {z}): floor is "
                    f"{floor.get(x, z).name}, not walkable"
                )

    @staticmethod
    def _add_enviro_walls(floor: Grid, segments: list[WallSegment]) -> None:
        for x, z, tile in floor.cells():
            if tile != TileType.ENVIRO:
                continue
            for dx, dz in CARDINAL_DIRECTIONS:
                nx, nz = x + dx, z + dz
                if floor.in_bounds(nx, nz) and not floor.matches(
                    nx, nz, TileType.ENVIRO
                ):
                    segments.append(WallSegment(x, z, (dx, dz), TileType.ENVIRO))
