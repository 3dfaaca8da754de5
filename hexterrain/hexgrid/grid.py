"""Tile storage for a rectangular hexagon grid."""

from __future__ import annotations

import logging
from typing import Iterator, Protocol

import numpy as np

from hexterrain.exceptions import OutOfRangeCoordinateError
from hexterrain.hexgrid.coordinate import Direction, HexCoordinate
from hexterrain.hexgrid.extent import GridExtent

logger = logging.getLogger(__name__)


class Tile:
    """One hexagon cell with an elevation and a land/water flag.

    Args:
        coordinate: Position of the tile. The y component is its elevation.
        is_water: True if the tile is covered by water.
    """

    def __init__(self, coordinate: HexCoordinate, is_water: bool = False):
        self._coordinate = coordinate
        self.is_water = is_water

    @property
    def coordinate(self) -> HexCoordinate:
        """Position of the tile including its elevation."""
        return self._coordinate

    @property
    def elevation(self) -> int:
        """Integer elevation of the tile."""
        return self._coordinate.y

    @elevation.setter
    def elevation(self, value: int) -> None:
        self._coordinate = self._coordinate.with_elevation(int(value))

    def __repr__(self) -> str:
        c = self._coordinate
        return f"Tile(x={c.x}, y={c.y}, z={c.z}, is_water={self.is_water})"


class TileSource(Protocol):
    """Read access to a tile grid, as required by the surface generators."""

    @property
    def extent(self) -> GridExtent: ...

    def tile_at(self, coordinate: HexCoordinate) -> Tile | None: ...


class Grid:
    """Owning container mapping grid coordinates to optional tiles.

    Cells without a tile are empty. Empty cells are valid and are treated
    by the generators as if they had the elevation of the tile looking at
    them.

    The backing store is only reallocated by :meth:`resize` and
    :meth:`reinitialize`.

    Args:
        width: Number of tiles along x.
        length: Number of tiles along z.
        fill: If True, every cell receives a land tile at elevation 0.

    Example:
        >>> grid = Grid(4, 3, fill=True)
        >>> grid.at(HexCoordinate(1, 0, 2)).elevation
        0
        >>> grid.at(HexCoordinate(1, 0, 2)).elevation = 3
    """

    def __init__(self, width: int = 0, length: int = 0, fill: bool = False):
        self._extent = GridExtent(width, length)
        self._tiles: list[Tile | None] = []
        self.reinitialize(fill)

    @classmethod
    def filled(cls, width: int, length: int) -> Grid:
        """Create a grid with a land tile at elevation 0 in every cell."""
        return cls(width, length, fill=True)

    @classmethod
    def from_heightmap(
        cls,
        heights: np.ndarray,
        height_factor: int = 1,
        sea_level: int = 0,
        water_level: int | None = None,
    ) -> Grid:
        """Create a grid from a 2D array of raw height values.

        Row ``heights[z]`` holds the tiles of grid row z.

        Args:
            heights: Array of shape (length, width) with non-negative raw
                heights (e.g. the red channel of a topography image).
            height_factor: Divisor turning raw heights into elevation levels.
            sea_level: Elevation subtracted from every tile.
            water_level: Tiles at or below this elevation are flagged as
                water. If None, no tile is flagged.

        Returns:
            New fully populated Grid.
        """
        heights = np.asarray(heights)
        if heights.ndim != 2:
            raise ValueError("heights must be a 2D array of shape (length, width)")
        if height_factor <= 0:
            raise ValueError("height_factor must be positive")

        elevations = heights.astype(np.int64) // height_factor - sea_level
        length, width = elevations.shape

        grid = cls(width, length)
        for z in range(length):
            for x in range(width):
                elevation = int(elevations[z, x])
                is_water = water_level is not None and elevation <= water_level
                grid.place(Tile(HexCoordinate(x, elevation, z), is_water=is_water))

        logger.debug(f"Grid created from heightmap ({width} x {length})")
        return grid

    @property
    def extent(self) -> GridExtent:
        """Extent of the grid."""
        return self._extent

    @property
    def width(self) -> int:
        return self._extent.width

    @property
    def length(self) -> int:
        return self._extent.length

    def reinitialize(self, fill: bool = False) -> None:
        """Replace the backing store with one sized to the extent.

        Args:
            fill: If True, every cell receives a land tile at elevation 0.
                Otherwise the grid starts empty.
        """
        extent = self._extent
        if fill:
            self._tiles = [Tile(extent.coordinate_of(i)) for i in range(extent.size)]
        else:
            self._tiles = [None] * extent.size

    def resize(self, width: int, length: int, fill: bool = False) -> None:
        """Change the extent and reallocate the backing store.

        Existing tiles are discarded.
        """
        self._extent = GridExtent(width, length)
        self.reinitialize(fill)

    def contains(self, coordinate: HexCoordinate) -> bool:
        """Return True if the coordinate lies within the grid."""
        return self._extent.contains(coordinate)

    def at(self, coordinate: HexCoordinate) -> Tile | None:
        """Return the tile at a coordinate.

        The elevation of the coordinate is ignored.

        Returns:
            The stored tile, or None if the cell is empty or the coordinate
            lies outside the grid.
        """
        if not self._extent.contains(coordinate):
            return None
        return self._tiles[self._extent.index_of(coordinate)]

    tile_at = at

    def tile_at_index(self, index: int) -> Tile | None:
        """Return the tile at a storage index."""
        if not 0 <= index < self._extent.size:
            raise IndexError(
                f"Tile index {index} out of range for grid of size {self._extent.size}"
            )
        return self._tiles[index]

    def place(self, tile: Tile) -> None:
        """Store a tile at its own coordinate, replacing any previous tile.

        Raises:
            OutOfRangeCoordinateError: If the coordinate lies outside the grid.
        """
        self._tiles[self._checked_index(tile.coordinate)] = tile

    def remove(self, coordinate: HexCoordinate) -> None:
        """Empty the cell at a coordinate.

        Raises:
            OutOfRangeCoordinateError: If the coordinate lies outside the grid.
        """
        self._tiles[self._checked_index(coordinate)] = None

    def _checked_index(self, coordinate: HexCoordinate) -> int:
        if not self._extent.contains(coordinate):
            raise OutOfRangeCoordinateError(
                f"Coordinate ({coordinate.x}, {coordinate.z}) outside grid of "
                f"{self._extent.width} x {self._extent.length}"
            )
        return self._extent.index_of(coordinate)

    def __getitem__(self, coordinate: HexCoordinate) -> Tile | None:
        return self.at(coordinate)

    def __setitem__(self, coordinate: HexCoordinate, tile: Tile | None) -> None:
        if tile is None:
            self.remove(coordinate)
            return
        if (tile.coordinate.x, tile.coordinate.z) != (coordinate.x, coordinate.z):
            raise ValueError(
                f"Tile at ({tile.coordinate.x}, {tile.coordinate.z}) cannot be "
                f"stored at ({coordinate.x}, {coordinate.z})"
            )
        self.place(tile)

    def __len__(self) -> int:
        """Number of occupied cells."""
        return sum(1 for tile in self._tiles if tile is not None)

    def __iter__(self) -> Iterator[Tile]:
        return self.tiles()

    def tiles(self) -> Iterator[Tile]:
        """Iterate over the occupied cells in storage order."""
        return (tile for tile in self._tiles if tile is not None)

    def neighbors(self, tile: Tile) -> list[tuple[Direction, Tile | None]]:
        """Return the neighbour in each of the six directions."""
        return neighbors(self, tile)

    def is_coastal(self, tile: Tile) -> bool:
        """Return True for a land tile touching water, an empty cell or the edge."""
        return is_coastal(self, tile)

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, length={self.length}, tiles={len(self)})"


def iter_tiles(source: TileSource) -> Iterator[Tile]:
    """Iterate over the occupied cells of any tile source in row-major order."""
    extent = source.extent
    for index in range(extent.size):
        tile = source.tile_at(extent.coordinate_of(index))
        if tile is not None:
            yield tile


def neighbors(source: TileSource, tile: Tile) -> list[tuple[Direction, Tile | None]]:
    """Return the neighbour of a tile in each of the six directions."""
    return [
        (direction, source.tile_at(tile.coordinate + direction))
        for direction in Direction
    ]


def is_coastal(source: TileSource, tile: Tile) -> bool:
    """Return True for a land tile touching water, an empty cell or the edge."""
    if tile.is_water:
        return False
    return any(other is None or other.is_water for _, other in neighbors(source, tile))
