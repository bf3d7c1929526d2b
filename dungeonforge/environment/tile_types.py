"""
Tile type classification for generated dungeon layouts.

This module defines:
- `TileType`: the closed set of classifications a cell can hold in the floor,
  wall and feature grids. Grids store these as small integers in NumPy arrays;
  the numeric values carry no meaning beyond identity.
- Subsets describing which values each grid is allowed to contain.
- A glyph table used for plain-text rendering of a layout.
"""

from enum import IntEnum

import numpy as np


class TileType(IntEnum):
    """Classification of a single dungeon grid cell."""

    EMPTY = 0
    STANDARD = 1
    ROOM = 2
    DOOR = 3
    ENVIRO = 4
    FLOOR_PROP = 5
    PILLAR = 6


# Storage type for every grid. Seven values fit comfortably in a byte.
TILE_DTYPE = np.uint8

# What each grid may hold once generation is complete.
FLOOR_TILE_TYPES = frozenset({TileType.STANDARD, TileType.ROOM, TileType.ENVIRO})
WALL_TILE_TYPES = frozenset(
    {TileType.EMPTY, TileType.STANDARD, TileType.ROOM, TileType.DOOR}
)
FEATURE_TILE_TYPES = frozenset({TileType.EMPTY, TileType.FLOOR_PROP, TileType.PILLAR})

# Floor types a door may sit on
WALKABLE_TILE_TYPES = frozenset({TileType.STANDARD, TileType.ROOM})

# Plain-text appearance used by Grid.to_ascii() and DungeonLayout.to_ascii()
TILE_GLYPHS: dict[TileType, str] = {
    TileType.EMPTY: " ",
    TileType.STANDARD: ".",
    TileType.ROOM: ",",
    TileType.DOOR: "+",
    TileType.ENVIRO: "#",
    TileType.FLOOR_PROP: "*",
    TileType.PILLAR: "O",
}


def glyph_for(tile_type: int) -> str:
    """Return the display character for a tile type value."""
    return TILE_GLYPHS[TileType(tile_type)]
