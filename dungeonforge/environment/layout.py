from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple

import numpy as np

from dungeonforge.environment.grid import OutOfRangeError
from dungeonforge.environment.tile_types import TileType, glyph_for

if TYPE_CHECKING:
    from dungeonforge.environment.grid import Grid
    from dungeonforge.types import (
        Direction,
        GridTileCoord,
        GridTilePos,
        RandomSeed,
        TileCoord,
    )

# Axis-aligned neighbour offsets, in the order walls are checked:
# towards x=0, towards x=width-1, towards z=0, towards z=length-1.
CARDINAL_DIRECTIONS: tuple[Direction, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
DIAGONAL_DIRECTIONS: tuple[Direction, ...] = ((-1, 1), (1, 1), (-1, -1), (1, -1))


@dataclass(frozen=True)
class Room:
    """A rectangular room candidate in grid cells.

    ``accepted`` records whether the candidate passed position validation.
    Rejected candidates still stamp room tiles but never receive a door.
    """

    x: TileCoord
    z: TileCoord
    width: TileCoord
    length: TileCoord
    accepted: bool = True

    @property
    def x2(self) -> TileCoord:
        """One past the last x cell."""
        return self.x + self.width

    @property
    def z2(self) -> TileCoord:
        """One past the last z cell."""
        return self.z + self.length

    @property
    def center(self) -> GridTilePos:
        return (self.x + self.width // 2, self.z + self.length // 2)

    def cells(self) -> Iterator[GridTilePos]:
        for x in range(self.x, self.x2):
            for z in range(self.z, self.z2):
                yield x, z

    def is_corner(self, x: GridTileCoord, z: GridTileCoord) -> bool:
        return x in (self.x, self.x2 - 1) and z in (self.z, self.z2 - 1)

    def is_boundary(self, x: GridTileCoord, z: GridTileCoord) -> bool:
        return x in (self.x, self.x2 - 1) or z in (self.z, self.z2 - 1)

    def boundary_cells(self) -> list[GridTilePos]:
        return [(x, z) for x, z in self.cells() if self.is_boundary(x, z)]

    def door_candidates(self) -> list[GridTilePos]:
        """Boundary cells that are not one of the four corners, in scan order."""
        return [(x, z) for x, z in self.boundary_cells() if not self.is_corner(x, z)]

    def intersects(self, other: Room, margin: int = 0) -> bool:
        """True if this room, grown by ``margin`` on every side, overlaps other."""
        return (
            self.x - margin < other.x2
            and self.x2 + margin > other.x
            and self.z - margin < other.z2
            and self.z2 + margin > other.z
        )


@dataclass(frozen=True)
class WallSegment:
    """One wall edge on the ``side`` of cell (x, z).

    Attributes:
        x, z: The cell that owns the edge (the room side for room walls).
        side: Offset towards the neighbouring cell across the edge.
        kind: STANDARD for the outer boundary, ROOM for a plain room wall,
            DOOR for a door opening, ENVIRO for a wall around an enviro block.
    """

    x: GridTileCoord
    z: GridTileCoord
    side: Direction
    kind: TileType


class CellInfo(NamedTuple):
    """The three classifications of one cell."""

    floor: TileType
    wall: TileType
    feature: TileType


@dataclass(frozen=True, eq=False)
class DungeonLayout:
    """A finished, read-only dungeon layout.

    Each generation returns a fresh instance; nothing here is mutated after the
    pipeline finishes, and the grid arrays are non-writeable views.

    Attributes:
        floor: Per-cell walkability/room classification.
        walls: Per-cell wall/door presence (EMPTY, STANDARD, ROOM or DOOR).
        features: Per-cell decoration (EMPTY, FLOOR_PROP or PILLAR).
        rooms: Every attempted room, in placement order, accepted or not.
        wall_segments: Every emitted wall edge.
        seed: The master seed used, if any.
    """

    floor: np.ndarray
    walls: np.ndarray
    features: np.ndarray
    rooms: tuple[Room, ...] = ()
    wall_segments: tuple[WallSegment, ...] = ()
    seed: RandomSeed = None

    @classmethod
    def from_grids(
        cls,
        floor: Grid,
        walls: Grid,
        features: Grid,
        rooms: list[Room],
        wall_segments: list[WallSegment],
        seed: RandomSeed = None,
    ) -> DungeonLayout:
        """Freeze the working grids of a finished generation."""
        return cls(
            floor=floor.clone().read_only(),
            walls=walls.clone().read_only(),
            features=features.clone().read_only(),
            rooms=tuple(rooms),
            wall_segments=tuple(wall_segments),
            seed=seed,
        )

    @property
    def width(self) -> TileCoord:
        return self.floor.shape[0]

    @property
    def length(self) -> TileCoord:
        return self.floor.shape[1]

    @property
    def accepted_rooms(self) -> tuple[Room, ...]:
        return tuple(room for room in self.rooms if room.accepted)

    # -------------------------------------------------------------------------
    # Cell queries
    # -------------------------------------------------------------------------

    def _check(self, x: GridTileCoord, z: GridTileCoord) -> None:
        if not (0 <= x < self.width and 0 <= z < self.length):
            raise OutOfRangeError(x, z, self.width, self.length)

    def floor_at(self, x: GridTileCoord, z: GridTileCoord) -> TileType:
        self._check(x, z)
        return TileType(int(self.floor[x, z]))

    def wall_at(self, x: GridTileCoord, z: GridTileCoord) -> TileType:
        self._check(x, z)
        return TileType(int(self.walls[x, z]))

    def feature_at(self, x: GridTileCoord, z: GridTileCoord) -> TileType:
        self._check(x, z)
        return TileType(int(self.features[x, z]))

    def cell(self, x: GridTileCoord, z: GridTileCoord) -> CellInfo:
        return CellInfo(self.floor_at(x, z), self.wall_at(x, z), self.feature_at(x, z))

    def cells(self) -> Iterator[tuple[GridTileCoord, GridTileCoord, CellInfo]]:
        """Iterate every cell in scan order (x-major, then z)."""
        for x in range(self.width):
            for z in range(self.length):
                yield (
                    x,
                    z,
                    CellInfo(
                        TileType(int(self.floor[x, z])),
                        TileType(int(self.walls[x, z])),
                        TileType(int(self.features[x, z])),
                    ),
                )

    def _positions(self, array: np.ndarray, tile_type: TileType) -> list[GridTilePos]:
        xs, zs = np.nonzero(array == tile_type)
        return sorted(zip(xs.tolist(), zs.tolist(), strict=True))

    def door_positions(self) -> list[GridTilePos]:
        return self._positions(self.walls, TileType.DOOR)

    def pillar_positions(self) -> list[GridTilePos]:
        return self._positions(self.features, TileType.PILLAR)

    def prop_positions(self) -> list[GridTilePos]:
        return self._positions(self.features, TileType.FLOOR_PROP)

    def ceiling_positions(self) -> list[GridTilePos]:
        """Enviro tiles, which are solid blocks capped with a ceiling."""
        return self._positions(self.floor, TileType.ENVIRO)

    def segments_for(self, x: GridTileCoord, z: GridTileCoord) -> list[WallSegment]:
        return [s for s in self.wall_segments if s.x == x and s.z == z]

    def to_ascii(self) -> str:
        """Render the layout as text, highest z on the top line.

        Features draw over doors, doors over the floor classification.
        """
        rows = []
        for z in reversed(range(self.length)):
            line = []
            for x in range(self.width):
                if self.features[x, z] != TileType.EMPTY:
                    line.append(glyph_for(self.features[x, z]))
                elif self.walls[x, z] == TileType.DOOR:
                    line.append(glyph_for(TileType.DOOR))
                else:
                    line.append(glyph_for(self.floor[x, z]))
            rows.append("".join(line))
        return "\n".join(rows)
