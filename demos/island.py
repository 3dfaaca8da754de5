"""
Island Terrain Demo

This script demonstrates using hexterrain to generate the land and water
meshes of a small procedural island.

Usage:
    python island.py

The script will:
1. Build a radial heightmap with a central peak
2. Turn it into a tile grid with a sea level
3. Generate the warped land surface and the water surface
4. Save the buffers to an .npz archive for later use
"""

import logging
from pathlib import Path

import numpy as np

from hexterrain import DistortionConfig, Grid, TerrainBuilder


def island_heightmap(width: int, length: int, peak: float = 60.0) -> np.ndarray:
    """Raw heights falling off with the distance from the map centre."""
    z, x = np.mgrid[0:length, 0:width]
    dx = (x - (width - 1) / 2) / (width / 2)
    dz = (z - (length - 1) / 2) / (length / 2)
    falloff = np.clip(1.0 - np.hypot(dx, dz), 0.0, None)
    return (peak * falloff**1.5).astype(np.int64)


def main():
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    # Map parameters
    width, length = 24, 20
    height_factor = 10
    sea_level = 1

    print("Building island terrain...")
    print(f"  Grid: {width} x {length} tiles")

    heights = island_heightmap(width, length)
    grid = Grid.from_heightmap(
        heights,
        height_factor=height_factor,
        sea_level=sea_level,
        water_level=-1,
    )

    distortion = DistortionConfig(
        x_offset=(13.1, 7.4),
        z_offset=(-3.2, 21.9),
        horizontal_frequency=1.2,
        horizontal_amplitude=0.06,
        vertical_frequency=0.8,
        vertical_amplitude=0.015,
    )

    builder = (
        TerrainBuilder(grid)
        .set_distortion(distortion)
        .set_water_height(-0.05)
    )
    meshes = builder.build()

    # Print mesh statistics
    info = builder.get_mesh_info()
    print("\nMeshes generated successfully:")
    print(f"  Tiles: {info['n_tiles']} ({info['n_water_tiles']} water, "
          f"{info['n_coastal_tiles']} coastal)")
    print(f"  Land: {info['land_vertices']} vertices, "
          f"{info['land_triangles']} triangles ({info['wall_triangles']} in walls)")
    print(f"  Water: {info['water_vertices']} vertices, "
          f"{info['water_triangles']} triangles")

    low, high = meshes.land.bounds
    print(f"  Height range: [{low[1]:.2f}, {high[1]:.2f}]")

    # Save buffers for later use
    output_path = Path(__file__).parent / "island_mesh.npz"
    np.savez(
        output_path,
        land_vertices=meshes.land.vertices,
        land_triangles=meshes.land.triangles,
        land_normals=meshes.land.vertex_normals(),
        land_uvs=meshes.land.uv_coordinates(),
        water_vertices=meshes.water.vertices,
        water_triangles=meshes.water.triangles,
    )
    print(f"\nMeshes saved to: {output_path}")

    return meshes


if __name__ == "__main__":
    main()
