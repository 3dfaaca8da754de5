"""Land surface generation.

Every tile is rendered from the shared template: a flat centre plus, for
each of the six directions, an edge region whose heights follow the
neighbour across the edge (``center``) and the two neighbours flanking it
(``left`` and ``right``). Where elevations differ by more than one level,
beveled wall rings fill the gap. A missing neighbour counts as level with
the tile, which closes the map borders without walls.
"""

from __future__ import annotations

import logging
from typing import Sequence

from hexterrain.hexgrid.coordinate import HEIGHT_UNIT, Direction, center
from hexterrain.hexgrid.grid import Tile, TileSource, iter_tiles
from hexterrain.mesh import heights as rules
from hexterrain.mesh.accumulator import MeshAccumulator, MeshBuffers, SurfacePart
from hexterrain.mesh.distortion import DistortionConfig, Warp, value_noise_warp
from hexterrain.mesh.template import CENTER_TRIANGLES, EDGE_POINTS, TEMPLATE_OFFSETS

logger = logging.getLogger(__name__)

_OFFSETS = TEMPLATE_OFFSETS.tolist()

# A layout lists triangles as ((slot, height_index), ...) triples. Slots
# index EDGE_POINTS[direction], height indices index a heights tuple.
Layout = Sequence[tuple[tuple[int, int], tuple[int, int], tuple[int, int]]]

INNER_LEFT_CORNER: Layout = (
    ((0, 0), (5, 2), (12, 1)),
    ((5, 2), (11, 3), (12, 1)),
)
INNER_RIGHT_CORNER: Layout = (
    ((4, 0), (16, 1), (10, 2)),
    ((10, 2), (16, 1), (17, 3)),
)
OUTER_LEFT_CORNER: Layout = (
    ((11, 0), (18, 2), (27, 1)),
    ((18, 2), (26, 3), (27, 1)),
)
OUTER_RIGHT_CORNER: Layout = (
    ((17, 0), (33, 1), (25, 2)),
    ((25, 2), (33, 1), (34, 3)),
)

# Height indices refer to heights.steep_corner_profile.
STEEP_LEFT_CORNER_WALL: Layout = (
    ((11, 0), (11, 1), (27, 2)),
    ((11, 1), (27, 3), (27, 2)),
    ((11, 1), (11, 3), (27, 3)),
    ((11, 3), (27, 4), (27, 3)),
    ((11, 3), (11, 4), (27, 4)),
    ((11, 4), (27, 5), (27, 4)),
    ((11, 4), (11, 5), (27, 5)),
)
STEEP_RIGHT_CORNER_WALL: Layout = (
    ((17, 0), (33, 2), (17, 1)),
    ((17, 1), (33, 2), (33, 3)),
    ((17, 1), (33, 3), (17, 3)),
    ((17, 3), (33, 3), (33, 4)),
    ((17, 3), (33, 4), (17, 4)),
    ((17, 4), (33, 4), (33, 5)),
    ((17, 4), (33, 5), (17, 5)),
)

# Height indices refer to heights.ledge_corner_profile.
LEDGE_LEFT_CORNER_WALL: Layout = (
    ((0, 0), (5, 1), (5, 2)),
    ((11, 3), (5, 2), (11, 1)),
    ((11, 1), (5, 2), (5, 1)),
    ((11, 1), (5, 1), (11, 4)),
    ((27, 5), (11, 3), (27, 3)),
    ((27, 3), (11, 3), (11, 1)),
    ((27, 3), (11, 1), (27, 6)),
    ((27, 6), (11, 1), (11, 4)),
    ((27, 6), (11, 4), (27, 4)),
)
LEDGE_RIGHT_CORNER_WALL: Layout = (
    ((4, 0), (10, 2), (10, 1)),
    ((17, 3), (17, 1), (10, 2)),
    ((10, 2), (17, 1), (10, 1)),
    ((10, 1), (17, 1), (17, 4)),
    ((17, 3), (33, 5), (33, 3)),
    ((17, 3), (33, 3), (33, 6)),
    ((17, 3), (33, 6), (17, 1)),
    ((17, 1), (33, 6), (33, 4)),
    ((17, 1), (33, 4), (17, 4)),
)

# Seam columns of the side walls: (upper slot, lower slot).
LEFT_WALL_SLOTS = (27, 11)
RIGHT_WALL_SLOTS = (17, 33)


def ring_layout(upper: int, lower: int) -> Layout:
    """Eight triangles of one wall ring between two template slots.

    Height indices refer to heights.ring_profile.
    """
    layout = []
    for k in range(4):
        layout.append(((upper, k), (lower, k), (lower, k + 1)))
        layout.append(((upper, k), (lower, k + 1), (upper, k + 1)))
    return tuple(layout)


def strip_layout(
    top: int, middle: int, bottom: int, columns: int, end_heights: bool = False
) -> Layout:
    """Four triangles per column of an edge strip spanning three slot rows.

    The top and bottom rows hold ``columns + 1`` slots starting at ``top``
    and ``bottom``, the middle row one slot per column starting at
    ``middle``. Height indices are 0, 1 and 2 for the top, middle and
    bottom row.

    With ``end_heights``, the first column uses indices 0-2, the last
    column 6-8 and all others 3-5, so both ends can follow the flanking
    tiles.
    """

    def height(row: int, first: bool, last: bool) -> int:
        if not end_heights or first:
            return row
        return row + 6 if last else row + 3

    layout = []
    for col in range(columns):
        left = col == 0
        right = col == columns - 1
        t0 = (top + col, height(0, left, False))
        t1 = (top + col + 1, height(0, False, right))
        m = (middle + col, height(1, left, right))
        b0 = (bottom + col, height(2, left, False))
        b1 = (bottom + col + 1, height(2, False, right))
        layout.extend([(t0, m, t1), (t0, b0, m), (t1, m, b1), (m, b0, b1)])
    return tuple(layout)


# Height indices refer to (surface, *heights.inner_edge_heights).
INNER_EDGE_STRIP = strip_layout(0, 6, 12, 4)
# Height indices refer to (*left_end, *centre, *right_end) outer edge heights.
OUTER_EDGE_STRIP = strip_layout(11, 19, 27, 6, end_heights=True)

CENTER_WALL_RING: Layout = tuple(
    triangle for col in range(6) for triangle in ring_layout(col + 12, col + 11)
)
LEFT_WALL_RING = ring_layout(*LEFT_WALL_SLOTS)
RIGHT_WALL_RING = ring_layout(*RIGHT_WALL_SLOTS)


class _TileEmitter:
    """Emits template triangles for one tile."""

    def __init__(self, accumulator: MeshAccumulator, tile: Tile):
        self._accumulator = accumulator
        self._cx, self._cy, self._cz = center(tile.coordinate)

    def point(self, index: int, height: float) -> tuple[float, float, float]:
        dx, dz = _OFFSETS[index]
        return (self._cx + dx, self._cy + height * HEIGHT_UNIT, self._cz + dz)

    def triangle(self, part: SurfacePart, *corners: tuple[int, float]) -> None:
        p0, p1, p2 = (self.point(index, height) for index, height in corners)
        self._accumulator.add_triangle(p0, p1, p2, part)

    def layout(
        self,
        part: SurfacePart,
        direction: Direction,
        layout: Layout,
        heights: Sequence[float],
    ) -> None:
        points = EDGE_POINTS[direction]
        for corners in layout:
            self.triangle(
                part, *((points[slot], heights[h]) for slot, h in corners)
            )


def _neighbor_elevation(source: TileSource, tile: Tile, direction: Direction) -> int:
    other = source.tile_at(tile.coordinate + direction)
    return other.elevation if other is not None else tile.elevation


def edge_elevations(
    source: TileSource, tile: Tile, direction: Direction
) -> tuple[int, int, int]:
    """Elevations of the left, centre and right neighbours of an edge.

    Missing neighbours take the elevation of the tile itself.
    """
    left, right = rules.flank_directions(direction)
    return (
        _neighbor_elevation(source, tile, left),
        _neighbor_elevation(source, tile, direction),
        _neighbor_elevation(source, tile, right),
    )


def _emit_center(emitter: _TileEmitter) -> None:
    height = rules.SURFACE_HEIGHT
    for a, b, c in CENTER_TRIANGLES:
        emitter.triangle(SurfacePart.CENTER, (a, height), (b, height), (c, height))


def _emit_inner_edge(
    emitter: _TileEmitter, direction: Direction, tile_y: int, center_y: int
) -> None:
    heights = (rules.SURFACE_HEIGHT, *rules.inner_edge_heights(tile_y, center_y))
    emitter.layout(SurfacePart.INNER_EDGE, direction, INNER_EDGE_STRIP, heights)


def _emit_outer_edge(
    emitter: _TileEmitter,
    direction: Direction,
    tile_y: int,
    left_y: int,
    center_y: int,
    right_y: int,
) -> None:
    heights = (
        *rules.outer_edge_end_heights(tile_y, center_y, left_y),
        *rules.outer_edge_heights(tile_y, center_y),
        *rules.outer_edge_end_heights(tile_y, center_y, right_y),
    )
    emitter.layout(SurfacePart.OUTER_EDGE, direction, OUTER_EDGE_STRIP, heights)


def _emit_center_wall(
    emitter: _TileEmitter,
    direction: Direction,
    tile_y: int,
    center_y: int,
    wall_edge_width: float,
) -> None:
    for level in range(rules.center_wall_rings(tile_y, center_y)):
        profile = rules.ring_profile(level * -4.0, wall_edge_width)
        emitter.layout(SurfacePart.CENTER_WALL, direction, CENTER_WALL_RING, profile)


def _emit_side_wall(
    emitter: _TileEmitter,
    direction: Direction,
    ring: Layout,
    tile_y: int,
    center_y: int,
    side_y: int,
    wall_edge_width: float,
) -> None:
    top = rules.side_wall_top(tile_y, center_y)
    for row in range(rules.side_wall_rings(tile_y, center_y, side_y)):
        profile = rules.ring_profile(top - row * 4.0, wall_edge_width)
        emitter.layout(SurfacePart.SIDE_WALL, direction, ring, profile)


def _emit_corner_wall(
    emitter: _TileEmitter,
    direction: Direction,
    steep: Layout,
    ledge: Layout,
    tile_y: int,
    center_y: int,
    side_y: int,
    wall_edge_width: float,
) -> None:
    if rules.has_steep_corner_wall(tile_y, center_y, side_y):
        profile = rules.steep_corner_profile(tile_y, center_y, wall_edge_width)
        emitter.layout(SurfacePart.CORNER_WALL, direction, steep, profile)

    if rules.has_ledge_corner_wall(tile_y, center_y, side_y):
        profile = rules.ledge_corner_profile(wall_edge_width)
        emitter.layout(SurfacePart.CORNER_WALL, direction, ledge, profile)


def emit_tile(
    accumulator: MeshAccumulator,
    source: TileSource,
    tile: Tile,
    wall_edge_width: float = rules.WALL_EDGE_WIDTH,
) -> None:
    """Emit the full surface of one tile into an accumulator."""
    emitter = _TileEmitter(accumulator, tile)
    tile_y = tile.elevation

    _emit_center(emitter)

    for direction in Direction:
        left_y, center_y, right_y = edge_elevations(source, tile, direction)

        _emit_inner_edge(emitter, direction, tile_y, center_y)
        emitter.layout(
            SurfacePart.INNER_CORNER,
            direction,
            INNER_LEFT_CORNER,
            rules.inner_corner_heights(tile_y, center_y, left_y),
        )
        emitter.layout(
            SurfacePart.INNER_CORNER,
            direction,
            INNER_RIGHT_CORNER,
            rules.inner_corner_heights(tile_y, center_y, right_y),
        )

        _emit_outer_edge(emitter, direction, tile_y, left_y, center_y, right_y)
        emitter.layout(
            SurfacePart.OUTER_CORNER,
            direction,
            OUTER_LEFT_CORNER,
            rules.outer_corner_heights(tile_y, center_y, left_y),
        )
        emitter.layout(
            SurfacePart.OUTER_CORNER,
            direction,
            OUTER_RIGHT_CORNER,
            rules.outer_corner_heights(tile_y, center_y, right_y),
        )

        _emit_center_wall(emitter, direction, tile_y, center_y, wall_edge_width)
        _emit_side_wall(
            emitter, direction, LEFT_WALL_RING, tile_y, center_y, left_y, wall_edge_width
        )
        _emit_side_wall(
            emitter, direction, RIGHT_WALL_RING, tile_y, center_y, right_y, wall_edge_width
        )
        _emit_corner_wall(
            emitter,
            direction,
            STEEP_LEFT_CORNER_WALL,
            LEDGE_LEFT_CORNER_WALL,
            tile_y,
            center_y,
            left_y,
            wall_edge_width,
        )
        _emit_corner_wall(
            emitter,
            direction,
            STEEP_RIGHT_CORNER_WALL,
            LEDGE_RIGHT_CORNER_WALL,
            tile_y,
            center_y,
            right_y,
            wall_edge_width,
        )


def generate_land_surface(
    source: TileSource,
    distortion: DistortionConfig | None = None,
    warp: Warp = value_noise_warp,
    wall_edge_width: float = rules.WALL_EDGE_WIDTH,
) -> MeshBuffers:
    """Generate the land surface of every tile in a grid.

    Args:
        source: Tile grid to render. Must not be modified during the pass.
        distortion: Warp parameters. If None, vertices are not displaced.
        warp: Function displacing an (n, 3) array of vertex positions.
        wall_edge_width: Bevel height of wall rings in quarter-level units,
            between 0 and 2.

    Returns:
        Welded mesh buffers with one SurfacePart tag per triangle.
    """
    if not 0.0 <= wall_edge_width <= 2.0:
        raise ValueError("wall_edge_width must be between 0 and 2")

    transform = None
    if distortion is not None and not distortion.is_identity:

        def transform(points):
            return warp(points, distortion)

    extent = source.extent
    logger.debug(f"Generating land surface ({extent.width} x {extent.length})")

    accumulator = MeshAccumulator(transform=transform)
    n_tiles = 0
    for tile in iter_tiles(source):
        emit_tile(accumulator, source, tile, wall_edge_width)
        n_tiles += 1

    buffers = accumulator.build()
    logger.info(
        f"Land surface generated ({n_tiles} tiles, Vertices: {buffers.n_vertices}, "
        f"Triangles: {buffers.n_triangles}, Walls: {buffers.wall_triangle_count})"
    )
    return buffers
