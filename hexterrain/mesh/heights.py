"""Height rules for the edge regions of a tile.

All heights are in quarter-level units relative to the base of the tile, so
a flat tile surface sits at 1 and one elevation level spans 4 units. Every
rule is a pure function of the elevation of the tile (``tile``), the
neighbour across the edge (``center``) and a neighbour flanking the edge
(``side``).
"""

from __future__ import annotations

from enum import Enum

from hexterrain.hexgrid.coordinate import Direction

WALL_EDGE_WIDTH = 0.5

SURFACE_HEIGHT = 1.0


class Relation(Enum):
    """Elevation of a tile relative to one of its neighbours."""

    HIGHER = 1
    LOWER = -1
    EQUAL = 0


def compare(elevation: int, other: int) -> Relation:
    """Compare a tile elevation with a neighbour elevation."""
    if elevation > other:
        return Relation.HIGHER
    if elevation < other:
        return Relation.LOWER
    return Relation.EQUAL


def inner_edge_heights(tile: int, center: int) -> tuple[float, float]:
    """Heights of the middle and outer row of the inner edge skirt."""
    relation = compare(tile, center)
    if relation is Relation.HIGHER:
        return (0.5, 0.0)
    if relation is Relation.LOWER:
        return (1.5, 2.0)
    return (SURFACE_HEIGHT, SURFACE_HEIGHT)


def inner_corner_heights(
    tile: int, center: int, side: int
) -> tuple[float, float, float, float]:
    """Heights of the four points of an inner corner."""
    to_center = compare(tile, center)
    if to_center is Relation.LOWER:
        return (1.0, 2.0, 1.5, 2.0)
    if to_center is Relation.HIGHER:
        return (1.0, 0.0, 0.5, 0.0)

    to_side = compare(tile, side)
    if to_side is Relation.LOWER:
        return (1.0, 1.0, 1.5, 2.0)
    if to_side is Relation.HIGHER:
        return (1.0, 1.0, 0.5, 0.0)
    return (1.0, 1.0, 1.0, 1.0)


def outer_edge_heights(tile: int, center: int) -> tuple[float, float, float]:
    """Heights of the three rows of the outer edge strip."""
    relation = compare(tile, center)
    if relation is Relation.HIGHER:
        drop = (center - tile) * 4.0
        return (drop + 4.0, drop + 3.5, drop + 3.0)
    if relation is Relation.LOWER:
        return (2.0, 2.5, 3.0)
    return (SURFACE_HEIGHT, SURFACE_HEIGHT, SURFACE_HEIGHT)


def outer_edge_end_heights(
    tile: int, center: int, side: int
) -> tuple[float, float, float]:
    """Heights of the first or last column of the outer edge strip.

    The end columns only follow the flanking neighbour when the tile and the
    neighbour across the edge are level.
    """
    heights = outer_edge_heights(tile, center)
    if compare(tile, center) is not Relation.EQUAL:
        return heights

    to_side = compare(tile, side)
    if to_side is Relation.HIGHER:
        return (0.0, 0.5, 0.0)
    if to_side is Relation.LOWER:
        return (2.0, 1.5, 2.0)
    return heights


def outer_corner_heights(
    tile: int, center: int, side: int
) -> tuple[float, float, float, float]:
    """Heights of the four points of an outer corner."""
    to_center = compare(tile, center)
    to_side = compare(tile, side)
    center_to_side = compare(center, side)

    if to_center is Relation.LOWER and to_side is not Relation.HIGHER:
        return (2.0, 3.0, 2.5, 3.0)
    if to_center is Relation.EQUAL and to_side is Relation.LOWER:
        return (2.0, 2.0, 2.5, 3.0)
    if to_side is Relation.HIGHER and center_to_side is Relation.HIGHER:
        drop = (side - tile) * 4.0
        return (drop + 4.0, drop + 4.0, drop + 3.5, drop + 3.0)
    if to_center is Relation.HIGHER and center_to_side is not Relation.HIGHER:
        drop = (center - tile) * 4.0
        return (drop + 4.0, drop + 3.0, drop + 3.5, drop + 3.0)
    return (1.0, 1.0, 1.0, 1.0)


def center_wall_rings(tile: int, center: int) -> int:
    """Number of wall rings below the edge towards a lower neighbour."""
    return max(tile - center - 1, 0)


def side_wall_rings(tile: int, center: int, side: int) -> int:
    """Number of wall rings below the seam towards a lower flanking tile."""
    return max(min(tile, center) - side - 1, 0)


def side_wall_top(tile: int, center: int) -> float:
    """Height of the top of the first side wall ring."""
    return (center - tile) * 4.0 if tile > center else 0.0


def has_steep_corner_wall(tile: int, center: int, side: int) -> bool:
    """True if the corner needs a cap between a centre wall and a side wall."""
    return tile > center and tile - 1 > side and center > side


def has_ledge_corner_wall(tile: int, center: int, side: int) -> bool:
    """True if the corner sits on a ledge between a higher and a lower tile."""
    return tile < center and tile > side


def ring_profile(top: float, wall_edge_width: float = WALL_EDGE_WIDTH) -> tuple[float, ...]:
    """Heights of one beveled wall ring, from its top down to its bottom."""
    return (
        top,
        top - wall_edge_width,
        top - 2.0,
        top - (4.0 - wall_edge_width),
        top - 4.0,
    )


def steep_corner_profile(
    tile: int, center: int, wall_edge_width: float = WALL_EDGE_WIDTH
) -> tuple[float, ...]:
    """Heights used by the steep corner wall cap."""
    top = (tile - center - 1) * -4.0
    return (
        top,
        top - wall_edge_width,
        top - 1.0,
        top - 2.0,
        top - (4.0 - wall_edge_width),
        top - 4.0,
    )


def ledge_corner_profile(wall_edge_width: float = WALL_EDGE_WIDTH) -> tuple[float, ...]:
    """Heights used by the ledge corner wall fill."""
    return (1.0, 0.5, 1.5, 2.0, 0.0, 3.0, wall_edge_width)


def flank_directions(direction: Direction) -> tuple[Direction, Direction]:
    """Directions of the left and right neighbours flanking an edge."""
    return (direction.previous, direction.next)
