"""Hexagon coordinates, directions and world-space mapping.

Tiles are pointy-top hexagons laid out in rows along the z axis. Odd rows are
shifted half a tile width towards +x. The y component of a coordinate is the
integer elevation of the tile.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Sequence

from hexterrain.exceptions import InvalidDirectionError

# Width of a hexagon (distance between two opposite edges).
HEX_WIDTH = math.sqrt(3.0) / 2.0
HEX_HALF_WIDTH = HEX_WIDTH / 2.0

# Distance between the centres of two adjacent rows.
ROW_SPACING = 0.75

# Quarter of an elevation level. Template heights are expressed in this unit.
HEIGHT_UNIT = 0.05
LEVEL_HEIGHT = 4.0 * HEIGHT_UNIT


class Direction(IntEnum):
    """The six edge directions of a hexagon, clockwise from the top right."""

    TOP_RIGHT = 0
    RIGHT = 1
    BOTTOM_RIGHT = 2
    BOTTOM_LEFT = 3
    LEFT = 4
    TOP_LEFT = 5

    @property
    def opposite(self) -> Direction:
        """Direction pointing back across the same edge."""
        return Direction((self + 3) % 6)

    @property
    def previous(self) -> Direction:
        """Direction of the neighbour on the left flank of this edge."""
        return Direction((self - 1) % 6)

    @property
    def next(self) -> Direction:
        """Direction of the neighbour on the right flank of this edge."""
        return Direction((self + 1) % 6)


def as_direction(value: Direction | int) -> Direction:
    """Validate and convert a direction value.

    Raises:
        InvalidDirectionError: If the value is not one of the six directions.
    """
    if isinstance(value, Direction):
        return value
    try:
        return Direction(value)
    except ValueError as e:
        raise InvalidDirectionError(f"Invalid hexagon direction: {value!r}") from e


@dataclass(frozen=True)
class HexCoordinate:
    """Position of a hexagon tile.

    Args:
        x: Column within the row (odd rows are offset by half a tile).
        y: Integer elevation.
        z: Row.

    Example:
        >>> c = HexCoordinate(2, 0, 3)
        >>> c + Direction.TOP_RIGHT
        HexCoordinate(x=3, y=0, z=4)
        >>> c + 2
        HexCoordinate(x=2, y=2, z=3)
    """

    x: int
    y: int
    z: int

    def __add__(self, other: Direction | int) -> HexCoordinate:
        # Direction is an IntEnum, so it has to be checked first.
        if isinstance(other, Direction):
            return neighbor(self, other)
        if isinstance(other, int):
            return HexCoordinate(self.x, self.y + other, self.z)
        return NotImplemented

    @property
    def center(self) -> tuple[float, float, float]:
        """World-space centre of the hexagon."""
        return center(self)

    def with_elevation(self, elevation: int) -> HexCoordinate:
        """Return the same cell at another elevation."""
        return HexCoordinate(self.x, elevation, self.z)


def center(coordinate: HexCoordinate) -> tuple[float, float, float]:
    """Return the world-space centre of a hexagon as (x, y, z)."""
    x = coordinate.x * HEX_WIDTH
    if coordinate.z & 1:
        x += HEX_HALF_WIDTH
    return (x, coordinate.y * LEVEL_HEIGHT, coordinate.z * ROW_SPACING)


def neighbor(coordinate: HexCoordinate, direction: Direction | int) -> HexCoordinate:
    """Return the adjacent coordinate in the given direction.

    The elevation of the coordinate is carried over unchanged.

    Args:
        coordinate: Origin coordinate.
        direction: One of the six directions.

    Returns:
        Coordinate of the neighbouring cell.

    Raises:
        InvalidDirectionError: If direction is not a valid direction value.
    """
    direction = as_direction(direction)
    x, y, z = coordinate.x, coordinate.y, coordinate.z
    even = (z & 1) == 0

    if direction is Direction.TOP_RIGHT:
        return HexCoordinate(x if even else x + 1, y, z + 1)
    if direction is Direction.RIGHT:
        return HexCoordinate(x + 1, y, z)
    if direction is Direction.BOTTOM_RIGHT:
        return HexCoordinate(x if even else x + 1, y, z - 1)
    if direction is Direction.BOTTOM_LEFT:
        return HexCoordinate(x - 1 if even else x, y, z - 1)
    if direction is Direction.LEFT:
        return HexCoordinate(x - 1, y, z)
    return HexCoordinate(x - 1 if even else x, y, z + 1)


def opposite(direction: Direction | int) -> Direction:
    """Return the direction pointing back across the same edge."""
    return as_direction(direction).opposite


def world_to_hex(point: Sequence[float]) -> HexCoordinate:
    """Find the hexagon containing a world-space point.

    The planar position is converted to fractional cube coordinates
    (q, r, s) and rounded so that q + r + s stays 0. The elevation is
    rounded independently from the vertical component.

    Args:
        point: World-space (x, y, z) position.

    Returns:
        Coordinate of the hexagon containing the point.
    """
    px, py, pz = float(point[0]), float(point[1]), float(point[2])

    q = (math.sqrt(3.0) / 3.0 * px - pz / 3.0) / 0.5
    r = 2.0 / 3.0 * pz / 0.5
    s = -q - r

    rounded_q = round(q)
    rounded_r = round(r)
    rounded_s = round(s)

    diff_q = abs(rounded_q - q)
    diff_r = abs(rounded_r - r)
    diff_s = abs(rounded_s - s)

    if diff_q > diff_r and diff_q > diff_s:
        rounded_q = -rounded_r - rounded_s
    elif diff_r > diff_s:
        rounded_r = -rounded_q - rounded_s

    z = int(rounded_r)
    x = int(rounded_q) + (z - (z & 1)) // 2
    y = int(round(py / LEVEL_HEIGHT))

    return HexCoordinate(x, y, z)
