"""Hexagon grid coordinates and tile storage."""

from hexterrain.hexgrid.coordinate import (
    HEIGHT_UNIT,
    HEX_HALF_WIDTH,
    HEX_WIDTH,
    LEVEL_HEIGHT,
    ROW_SPACING,
    Direction,
    HexCoordinate,
    center,
    neighbor,
    opposite,
    world_to_hex,
)
from hexterrain.hexgrid.extent import GridExtent
from hexterrain.hexgrid.grid import (
    Grid,
    Tile,
    TileSource,
    is_coastal,
    iter_tiles,
    neighbors,
)

__all__ = [
    "HEIGHT_UNIT",
    "HEX_HALF_WIDTH",
    "HEX_WIDTH",
    "LEVEL_HEIGHT",
    "ROW_SPACING",
    "Direction",
    "HexCoordinate",
    "center",
    "neighbor",
    "opposite",
    "world_to_hex",
    "GridExtent",
    "Grid",
    "Tile",
    "TileSource",
    "is_coastal",
    "iter_tiles",
    "neighbors",
]
