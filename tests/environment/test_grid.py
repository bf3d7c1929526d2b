from __future__ import annotations

import numpy as np
import pytest

from dungeonforge.environment.grid import Grid, OutOfRangeError
from dungeonforge.environment.tile_types import TileType


class TestGridConstruction:
    def test_new_grid_is_empty(self) -> None:
        grid = Grid(6, 4)

        assert grid.tiles.shape == (6, 4)
        assert grid.tiles.dtype == np.uint8
        assert np.all(grid.tiles == TileType.EMPTY)

    def test_custom_fill(self) -> None:
        grid = Grid(3, 3, fill=TileType.STANDARD)
        assert grid.count(TileType.STANDARD) == 9

    @pytest.mark.parametrize(("width", "length"), [(0, 4), (4, 0), (-1, 3)])
    def test_rejects_non_positive_dimensions(self, width: int, length: int) -> None:
        with pytest.raises(ValueError):
            Grid(width, length)

    def test_from_array_copies(self) -> None:
        source = np.full((2, 3), TileType.ROOM, dtype=np.uint8)
        grid = Grid.from_array(source)
        source[0, 0] = TileType.ENVIRO

        assert grid.width == 2
        assert grid.length == 3
        assert grid.get(0, 0) == TileType.ROOM


class TestGridAccess:
    def test_get_and_set(self) -> None:
        grid = Grid(5, 5)
        grid.set(2, 3, TileType.ROOM)

        assert grid.get(2, 3) == TileType.ROOM
        assert isinstance(grid.get(2, 3), TileType)
        assert grid[2, 3] == TileType.ROOM

    def test_item_assignment(self) -> None:
        grid = Grid(5, 5)
        grid[4, 0] = TileType.DOOR
        assert grid.get(4, 0) == TileType.DOOR

    @pytest.mark.parametrize(("x", "z"), [(-1, 0), (0, -1), (5, 0), (0, 5)])
    def test_out_of_range_raises(self, x: int, z: int) -> None:
        grid = Grid(5, 5)

        with pytest.raises(OutOfRangeError):
            grid.get(x, z)
        with pytest.raises(OutOfRangeError):
            grid.set(x, z, TileType.ROOM)

    def test_out_of_range_is_an_index_error(self) -> None:
        with pytest.raises(IndexError, match=r"\(7, 1\)"):
            Grid(3, 3)[7, 1]

    def test_matches_treats_out_of_range_as_absent(self) -> None:
        grid = Grid(3, 3, fill=TileType.ROOM)

        assert grid.matches(1, 1, TileType.ROOM)
        assert not grid.matches(-1, 1, TileType.ROOM)
        assert not grid.matches(1, 3, TileType.ROOM)
        assert not grid.matches(1, 1, TileType.STANDARD)

    def test_is_border(self) -> None:
        grid = Grid(4, 3)
        border = {(x, z) for x, z, _ in grid.cells() if grid.is_border(x, z)}

        assert (0, 1) in border
        assert (3, 1) in border
        assert (1, 0) in border
        assert (2, 2) in border
        assert (1, 1) not in border
        assert len(border) == 4 * 3 - 2

    def test_cells_scan_order(self) -> None:
        grid = Grid(2, 2)
        assert [(x, z) for x, z, _ in grid.cells()] == [(0, 0), (0, 1), (1, 0), (1, 1)]

    def test_positions_of(self) -> None:
        grid = Grid(3, 3)
        grid.set(2, 0, TileType.DOOR)
        grid.set(0, 2, TileType.DOOR)

        assert grid.positions_of(TileType.DOOR) == [(0, 2), (2, 0)]


class TestGridCopies:
    def test_clone_is_independent(self) -> None:
        grid = Grid(4, 4)
        copy = grid.clone()
        copy.set(1, 1, TileType.ROOM)

        assert grid.get(1, 1) == TileType.EMPTY
        assert copy != grid

    def test_clone_equals_original(self) -> None:
        grid = Grid(4, 4)
        grid.set(0, 3, TileType.ENVIRO)
        assert grid.clone() == grid

    def test_read_only_view(self) -> None:
        grid = Grid(3, 3)
        view = grid.read_only()

        with pytest.raises(ValueError):
            view[0, 0] = TileType.ROOM

        # The grid itself stays writable and the view tracks it
        grid.set(0, 0, TileType.ROOM)
        assert view[0, 0] == TileType.ROOM

    def test_to_ascii_puts_highest_z_first(self) -> None:
        grid = Grid(3, 2, fill=TileType.STANDARD)
        grid.set(0, 1, TileType.ROOM)
        grid.set(2, 0, TileType.ENVIRO)

        assert grid.to_ascii() == ",..\n..#"
