"""Tests for tile storage."""

import numpy as np
import pytest

from hexterrain.exceptions import OutOfRangeCoordinateError
from hexterrain.hexgrid import (
    Direction,
    Grid,
    GridExtent,
    HexCoordinate,
    Tile,
    is_coastal,
    iter_tiles,
)


class TestGridExtent:
    """Test extent bookkeeping."""

    def test_index_round_trip(self):
        extent = GridExtent(4, 3)
        assert extent.size == 12
        for index in range(extent.size):
            assert extent.index_of(extent.coordinate_of(index)) == index

    def test_row_major_order(self):
        extent = GridExtent(4, 3)
        assert extent.coordinate_of(5) == HexCoordinate(1, 0, 1)
        assert extent.coordinate_of(5, elevation=2) == HexCoordinate(1, 2, 1)

    def test_contains(self):
        extent = GridExtent(2, 1)
        assert extent.contains(HexCoordinate(1, 9, 0))
        assert not extent.contains(HexCoordinate(2, 0, 0))
        assert not extent.contains(HexCoordinate(0, 0, -1))

    def test_negative_size(self):
        with pytest.raises(ValueError, match="must not be negative"):
            GridExtent(-1, 2)


class TestGrid:
    """Test Grid access and mutation."""

    def test_empty_by_default(self):
        grid = Grid(3, 2)
        assert len(grid) == 0
        assert grid.at(HexCoordinate(1, 0, 1)) is None
        assert list(iter_tiles(grid)) == []

    def test_filled(self, flat_grid):
        assert len(flat_grid) == 25
        tile = flat_grid.at(HexCoordinate(4, 0, 4))
        assert tile.coordinate == HexCoordinate(4, 0, 4)
        assert tile.elevation == 0
        assert not tile.is_water

    def test_at_ignores_elevation(self, flat_grid):
        assert flat_grid.at(HexCoordinate(2, 7, 2)) is flat_grid.at(HexCoordinate(2, 0, 2))

    def test_at_outside_returns_none(self, flat_grid):
        assert flat_grid.at(HexCoordinate(5, 0, 0)) is None
        assert flat_grid.at(HexCoordinate(-1, 0, 0)) is None
        assert flat_grid[HexCoordinate(0, 0, 5)] is None

    def test_set_elevation(self, flat_grid):
        tile = flat_grid.at(HexCoordinate(1, 0, 1))
        tile.elevation = 3
        assert flat_grid.at(HexCoordinate(1, 0, 1)).coordinate == HexCoordinate(1, 3, 1)

    def test_place_and_remove(self):
        grid = Grid(2, 2)
        tile = Tile(HexCoordinate(1, 2, 0), is_water=True)
        grid.place(tile)
        assert grid.at(HexCoordinate(1, 0, 0)) is tile
        assert len(grid) == 1

        grid.remove(HexCoordinate(1, 0, 0))
        assert grid.at(HexCoordinate(1, 0, 0)) is None

    def test_setitem(self):
        grid = Grid(2, 2)
        grid[HexCoordinate(0, 0, 1)] = Tile(HexCoordinate(0, 1, 1))
        assert grid[HexCoordinate(0, 0, 1)].elevation == 1

        grid[HexCoordinate(0, 0, 1)] = None
        assert grid[HexCoordinate(0, 0, 1)] is None

    def test_setitem_rejects_mismatched_tile(self):
        grid = Grid(2, 2)
        with pytest.raises(ValueError):
            grid[HexCoordinate(0, 0, 0)] = Tile(HexCoordinate(1, 0, 0))

    def test_place_out_of_range(self):
        grid = Grid(2, 2)
        with pytest.raises(OutOfRangeCoordinateError):
            grid.place(Tile(HexCoordinate(2, 0, 0)))
        with pytest.raises(OutOfRangeCoordinateError):
            grid.remove(HexCoordinate(0, 0, -1))

    def test_tile_at_index(self, flat_grid):
        assert flat_grid.tile_at_index(7).coordinate == HexCoordinate(2, 0, 1)
        with pytest.raises(IndexError):
            flat_grid.tile_at_index(25)

    def test_reinitialize(self, flat_grid):
        flat_grid.reinitialize()
        assert len(flat_grid) == 0
        flat_grid.reinitialize(fill=True)
        assert len(flat_grid) == 25

    def test_resize(self, flat_grid):
        flat_grid.resize(3, 4)
        assert (flat_grid.width, flat_grid.length) == (3, 4)
        assert len(flat_grid) == 0
        flat_grid.resize(2, 2, fill=True)
        assert len(flat_grid) == 4

    def test_iteration_order(self):
        grid = Grid.filled(3, 2)
        order = [(t.coordinate.x, t.coordinate.z) for t in grid]
        assert order == [(0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1)]

    def test_neighbors(self, flat_grid):
        tile = flat_grid.at(HexCoordinate(0, 0, 0))
        found = dict(flat_grid.neighbors(tile))
        assert found[Direction.RIGHT] is flat_grid.at(HexCoordinate(1, 0, 0))
        assert found[Direction.LEFT] is None
        assert found[Direction.BOTTOM_RIGHT] is None


class TestCoastal:
    """Test the coastal predicate."""

    def test_border_tiles_are_coastal(self):
        grid = Grid.filled(4, 4)
        coastal = {
            (t.coordinate.x, t.coordinate.z) for t in grid if grid.is_coastal(t)
        }
        assert coastal.isdisjoint({(1, 1), (2, 1), (1, 2), (2, 2)})
        assert len(coastal) == 12

    def test_water_neighbor_makes_coastal(self):
        grid = Grid.filled(4, 4)
        grid.at(HexCoordinate(1, 0, 1)).is_water = True
        assert is_coastal(grid, grid.at(HexCoordinate(2, 0, 1)))
        assert is_coastal(grid, grid.at(HexCoordinate(2, 0, 2)))
        assert not is_coastal(grid, grid.at(HexCoordinate(1, 0, 1)))

    def test_empty_neighbor_makes_coastal(self):
        grid = Grid.filled(4, 4)
        grid.remove(HexCoordinate(2, 0, 2))
        assert is_coastal(grid, grid.at(HexCoordinate(1, 0, 2)))


class TestFromHeightmap:
    """Test grid construction from raw heights."""

    def test_elevations(self):
        heights = np.array([[10, 25], [0, 40]])
        grid = Grid.from_heightmap(heights, height_factor=10, sea_level=1)
        assert (grid.width, grid.length) == (2, 2)
        assert grid.at(HexCoordinate(0, 0, 0)).elevation == 0
        assert grid.at(HexCoordinate(1, 0, 0)).elevation == 1
        assert grid.at(HexCoordinate(0, 0, 1)).elevation == -1
        assert grid.at(HexCoordinate(1, 0, 1)).elevation == 3

    def test_water_level(self):
        heights = np.array([[10, 25], [0, 40]])
        grid = Grid.from_heightmap(heights, height_factor=10, sea_level=1, water_level=0)
        water = {(t.coordinate.x, t.coordinate.z) for t in grid if t.is_water}
        assert water == {(0, 0), (0, 1)}

    def test_invalid_input(self):
        with pytest.raises(ValueError):
            Grid.from_heightmap(np.zeros(4))
        with pytest.raises(ValueError):
            Grid.from_heightmap(np.zeros((2, 2)), height_factor=0)
