"""Fixed-size 2D classification buffer used by every generation stage."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

import numpy as np

from dungeonforge.environment.tile_types import TILE_DTYPE, TileType, glyph_for

if TYPE_CHECKING:
    from dungeonforge.types import GridTileCoord, GridTilePos, TileCoord


class OutOfRangeError(IndexError):
    """Raised when a grid cell outside [0, width) x [0, length) is accessed.

    Generation code bounds-checks before every neighbour lookup, so seeing this
    means a stage has a bug rather than that the input was bad.
    """

    def __init__(self, x: int, z: int, width: int, length: int) -> None:
        super().__init__(
            f"Cell ({x}, {z}) is outside the {width}x{length} grid"
        )
        self.x = x
        self.z = z


class Grid:
    """A width x length array of TileType values with checked accessors.

    Cells are stored in a NumPy array indexed ``[x, z]`` in Fortran order, the
    same layout the renderer iterates in. Accessors never clamp or wrap: an
    out-of-range coordinate raises OutOfRangeError.
    """

    def __init__(
        self,
        width: TileCoord,
        length: TileCoord,
        fill: TileType = TileType.EMPTY,
    ) -> None:
        if width <= 0 or length <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{length}")
        self.width = width
        self.length = length
        self.tiles = np.full(
            (width, length), fill_value=fill, dtype=TILE_DTYPE, order="F"
        )

    @classmethod
    def from_array(cls, tiles: np.ndarray) -> Grid:
        """Wrap a copy of an existing 2D array of tile values."""
        if tiles.ndim != 2:
            raise ValueError(f"Expected a 2D array, got shape {tiles.shape}")
        width, length = tiles.shape
        grid = cls(width, length)
        grid.tiles[:, :] = tiles
        return grid

    # -------------------------------------------------------------------------
    # Bounds
    # -------------------------------------------------------------------------

    def in_bounds(self, x: GridTileCoord, z: GridTileCoord) -> bool:
        return 0 <= x < self.width and 0 <= z < self.length

    def is_border(self, x: GridTileCoord, z: GridTileCoord) -> bool:
        """True for cells on the outermost row or column."""
        return x in (0, self.width - 1) or z in (0, self.length - 1)

    def _check(self, x: GridTileCoord, z: GridTileCoord) -> None:
        if not self.in_bounds(x, z):
            raise OutOfRangeError(x, z, self.width, self.length)

    # -------------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------------

    def get(self, x: GridTileCoord, z: GridTileCoord) -> TileType:
        self._check(x, z)
        return TileType(int(self.tiles[x, z]))

    def set(self, x: GridTileCoord, z: GridTileCoord, value: TileType) -> None:
        self._check(x, z)
        self.tiles[x, z] = value

    def __getitem__(self, pos: GridTilePos) -> TileType:
        x, z = pos
        return self.get(x, z)

    def __setitem__(self, pos: GridTilePos, value: TileType) -> None:
        x, z = pos
        self.set(x, z, value)

    def matches(self, x: GridTileCoord, z: GridTileCoord, tile_type: TileType) -> bool:
        """True if (x, z) is inside the grid and holds tile_type.

        Out-of-range cells match nothing, which is what neighbour counting needs.
        """
        return self.in_bounds(x, z) and self.tiles[x, z] == tile_type

    def cells(self) -> Iterator[tuple[GridTileCoord, GridTileCoord, TileType]]:
        """Iterate (x, z, tile_type) in scan order: x-major, then z."""
        for x in range(self.width):
            for z in range(self.length):
                yield x, z, TileType(int(self.tiles[x, z]))

    def positions_of(self, tile_type: TileType) -> list[GridTilePos]:
        """All cells holding tile_type, in scan order."""
        return [(x, z) for x, z, value in self.cells() if value == tile_type]

    def count(self, tile_type: TileType) -> int:
        return int(np.count_nonzero(self.tiles == tile_type))

    # -------------------------------------------------------------------------
    # Copies and views
    # -------------------------------------------------------------------------

    def clone(self) -> Grid:
        """Independent copy, used to read one generation while writing the next."""
        copy = Grid(self.width, self.length)
        copy.tiles[:, :] = self.tiles
        return copy

    def read_only(self) -> np.ndarray:
        """A non-writeable view of the underlying array."""
        view = self.tiles.view()
        view.flags.writeable = False
        return view

    def to_ascii(self) -> str:
        """Render rows of z (top = highest z) with one glyph per x."""
        rows = []
        for z in reversed(range(self.length)):
            rows.append("".join(glyph_for(self.tiles[x, z]) for x in range(self.width)))
        return "\n".join(rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return np.array_equal(self.tiles, other.tiles)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, length={self.length})"
