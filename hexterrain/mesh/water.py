"""Water surface generation."""

from __future__ import annotations

import logging

from hexterrain.hexgrid.coordinate import center
from hexterrain.hexgrid.grid import Tile, TileSource, is_coastal, iter_tiles
from hexterrain.mesh.accumulator import MeshAccumulator, MeshBuffers, SurfacePart
from hexterrain.mesh.template import FACE_TRIANGLES, template_offset

logger = logging.getLogger(__name__)

# Between the surfaces of elevation -1 (-0.15) and elevation 0 (0.05).
DEFAULT_WATER_HEIGHT = 0.0


def has_water_surface(source: TileSource, tile: Tile) -> bool:
    """Return True for water tiles and coastal land tiles."""
    return tile.is_water or is_coastal(source, tile)


def generate_water_surface(
    source: TileSource, water_height: float = DEFAULT_WATER_HEIGHT
) -> MeshBuffers:
    """Generate a flat water face under every water or coastal tile.

    Args:
        source: Tile grid to render.
        water_height: Absolute world height of the water surface.

    Returns:
        Welded mesh buffers, four triangles per covered tile. Water
        vertices are never distorted.
    """
    logger.debug(f"Generating water surface at height {water_height}")

    offsets = {
        index: template_offset(index)
        for triangle in FACE_TRIANGLES
        for index in triangle
    }

    accumulator = MeshAccumulator()
    n_tiles = 0
    for tile in iter_tiles(source):
        if not has_water_surface(source, tile):
            continue

        cx, _, cz = center(tile.coordinate)
        for triangle in FACE_TRIANGLES:
            p0, p1, p2 = (
                (cx + offsets[i][0], water_height, cz + offsets[i][1])
                for i in triangle
            )
            accumulator.add_triangle(p0, p1, p2, SurfacePart.WATER, distort=False)
        n_tiles += 1

    buffers = accumulator.build()
    logger.info(
        f"Water surface generated ({n_tiles} tiles, Vertices: {buffers.n_vertices}, "
        f"Triangles: {buffers.n_triangles})"
    )
    return buffers
