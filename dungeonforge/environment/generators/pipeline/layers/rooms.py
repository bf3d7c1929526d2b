"""Room placement layer.

Draws a fixed number of rectangular room candidates and stamps each one onto
the floor grid. Candidates that overlap an accepted room (or leave the grid
interior) are still stamped, but only accepted rooms get a door. The stamped
overlap pattern is what the smoothing automaton later carves corridors from.
"""

from __future__ import annotations

import logging

from dungeonforge import config
from dungeonforge.environment.generators.pipeline.context import GenerationContext
from dungeonforge.environment.generators.pipeline.layer import GenerationLayer
from dungeonforge.environment.layout import Room
from dungeonforge.environment.tile_types import TileType
from dungeonforge.util.rng import DOORS_DOMAIN, RNG, ROOMS_DOMAIN

logger = logging.getLogger(__name__)


class RoomPlacementLayer(GenerationLayer):
    """Places room candidates and their doors.

    Every candidate is appended to ``ctx.rooms`` in draw order, with
    ``accepted`` recording whether it passed is_room_position_valid().
    """

    def apply(self, ctx: GenerationContext) -> None:
        rooms_rng = ctx.rng.get(ROOMS_DOMAIN)
        room_params = ctx.params.room_params
        margin = config.ROOM_BORDER_MARGIN

        for _ in range(ctx.params.room_count):
            width = rooms_rng.randrange(room_params.min_size, room_params.max_size)
            length = rooms_rng.randrange(room_params.min_size, room_params.max_size)

            # Keep one tile clear of the outer boundary. When the room only
            # just fits, the range collapses and the room starts at the margin.
            x = self._draw_origin(rooms_rng, ctx.width, width, margin)
            z = self._draw_origin(rooms_rng, ctx.length, length, margin)

            accepted = self.is_room_position_valid(ctx, x, z, width, length)
            room = Room(x, z, width, length, accepted=accepted)
            ctx.rooms.append(room)
            self.generate_room(ctx, room, add_doors=accepted)

            logger.debug(
                f"Room candidate {room.width}x{room.length} at ({room.x}, {room.z}) "
                f"{'accepted' if accepted else 'rejected'}"
            )

        accepted_count = sum(1 for room in ctx.rooms if room.accepted)
        logger.debug(
            f"Placed {len(ctx.rooms)} room candidates, {accepted_count} accepted"
        )

    @staticmethod
    def _draw_origin(rng: RNG, grid_size: int, room_size: int, margin: int) -> int:
        upper = grid_size - room_size - margin
        if upper <= margin:
            return margin
        return rng.randrange(margin, upper)

    @staticmethod
    def is_room_position_valid(
        ctx: GenerationContext, x: int, z: int, width: int, length: int
    ) -> bool:
        """Check a candidate against accepted rooms and the grid interior.

        Rejected if its rectangle, grown by min_distance_between_rooms on every
        side, overlaps any previously accepted room, or if it touches the outer
        boundary row/column.
        """
        margin = config.ROOM_BORDER_MARGIN
        if x < margin or z < margin:
            return False
        if x + width > ctx.width - margin or z + length > ctx.length - margin:
            return False

        candidate = Room(x, z, width, length)
        distance = ctx.params.min_distance_between_rooms
        return not any(
            candidate.intersects(existing, margin=distance)
            for existing in ctx.rooms
            if existing.accepted
        )

    @staticmethod
    def generate_room(ctx: GenerationContext, room: Room, add_doors: bool) -> None:
        """Stamp room tiles, and optionally a single door, for one room.

        Floor cells become ROOM. Wall markers become ROOM unless a door is
        already there; doors are never overwritten. With add_doors, one
        non-corner boundary cell is chosen uniformly as the door.
        """
        for x, z in room.cells():
            ctx.floor.set(x, z, TileType.ROOM)
            if ctx.walls.get(x, z) != TileType.DOOR:
                ctx.walls.set(x, z, TileType.ROOM)

        if not add_doors:
            return

        candidates = room.door_candidates()
        if not candidates:
            return

        door_x, door_z = ctx.rng.get(DOORS_DOMAIN).choice(candidates)
        ctx.walls.set(door_x, door_z, TileType.DOOR)
