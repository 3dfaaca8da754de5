"""Rectangular extent of a tile grid."""

from __future__ import annotations

from dataclasses import dataclass

from hexterrain.hexgrid.coordinate import HexCoordinate


@dataclass(frozen=True)
class GridExtent:
    """Size of a terrain counted in hex tiles.

    Valid coordinates satisfy ``0 <= x < width`` and ``0 <= z < length``.
    Tiles are stored row by row, so ``index = x + z * width``.
    """

    width: int
    length: int

    def __post_init__(self):
        if self.width < 0 or self.length < 0:
            raise ValueError(
                f"Grid extent must not be negative, got {self.width} x {self.length}"
            )

    @property
    def size(self) -> int:
        """Number of cells covered by the extent."""
        return self.width * self.length

    def contains(self, coordinate: HexCoordinate) -> bool:
        """Return True if the coordinate lies within the extent."""
        return 0 <= coordinate.x < self.width and 0 <= coordinate.z < self.length

    def index_of(self, coordinate: HexCoordinate) -> int:
        """Return the storage index of a coordinate."""
        return coordinate.x + coordinate.z * self.width

    def coordinate_of(self, index: int, elevation: int = 0) -> HexCoordinate:
        """Return the coordinate stored at an index.

        Args:
            index: Storage index.
            elevation: Elevation to assign to the coordinate. Default: 0.
        """
        z = index // self.width
        x = index - z * self.width
        return HexCoordinate(x, elevation, z)
