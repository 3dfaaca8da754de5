"""High-level TerrainBuilder API for hexagon terrain generation."""

from __future__ import annotations

import logging
from typing import NamedTuple

import numpy as np

from hexterrain.exceptions import MeshGenerationError
from hexterrain.hexgrid.grid import TileSource, is_coastal, iter_tiles
from hexterrain.mesh.accumulator import MeshBuffers
from hexterrain.mesh.distortion import DistortionConfig, Warp, value_noise_warp
from hexterrain.mesh.heights import WALL_EDGE_WIDTH
from hexterrain.mesh.land import generate_land_surface
from hexterrain.mesh.water import DEFAULT_WATER_HEIGHT, generate_water_surface

logger = logging.getLogger(__name__)


class TerrainMeshes(NamedTuple):
    """Land and water buffers produced by one build."""

    land: MeshBuffers
    water: MeshBuffers


class TerrainBuilder:
    """High-level API for building the land and water meshes of a tile grid.

    Orchestrates one generation run:
    1. Attach the tile grid
    2. Configure the vertex warp and wall bevel
    3. Generate the land surface
    4. Generate the water surface

    Args:
        grid: Optional tile grid. Can also be set with :meth:`set_grid`.

    Example:
        >>> from hexterrain import Grid, TerrainBuilder, DistortionConfig
        >>> meshes = (
        ...     TerrainBuilder()
        ...     .set_grid(Grid.filled(8, 8))
        ...     .set_distortion(DistortionConfig(horizontal_frequency=1.5,
        ...                                      horizontal_amplitude=0.05))
        ...     .set_water_height(0.1)
        ...     .build()
        ... )
        >>> meshes.land.n_triangles
        24576
    """

    def __init__(self, grid: TileSource | None = None):
        self._grid = grid

        self._distortion = DistortionConfig.none()
        self._warp: Warp = value_noise_warp
        self._water_height = DEFAULT_WATER_HEIGHT
        self._wall_edge_width = WALL_EDGE_WIDTH

        self._meshes: TerrainMeshes | None = None

    @property
    def grid(self) -> TileSource | None:
        """Return the tile grid."""
        return self._grid

    @property
    def distortion(self) -> DistortionConfig:
        """Return the warp parameters."""
        return self._distortion

    @property
    def water_height(self) -> float:
        return self._water_height

    @property
    def wall_edge_width(self) -> float:
        return self._wall_edge_width

    @property
    def is_configured(self) -> bool:
        """Return True if a grid is attached."""
        return self._grid is not None

    def set_grid(self, grid: TileSource) -> TerrainBuilder:
        """Attach the tile grid to render.

        Args:
            grid: Any object with an ``extent`` and ``tile_at``.

        Returns:
            Self for method chaining.
        """
        self._grid = grid
        return self

    def set_distortion(self, config: DistortionConfig | None) -> TerrainBuilder:
        """Set the warp parameters. None disables the warp.

        Returns:
            Self for method chaining.
        """
        self._distortion = config if config is not None else DistortionConfig.none()
        return self

    def set_warp(self, warp: Warp) -> TerrainBuilder:
        """Replace the function that displaces land vertices.

        Args:
            warp: Callable mapping an (n, 3) array and a DistortionConfig to
                an (n, 3) array.

        Returns:
            Self for method chaining.
        """
        if not callable(warp):
            raise ValueError("warp must be callable")
        self._warp = warp
        return self

    def set_water_height(self, height: float) -> TerrainBuilder:
        """Set the absolute world height of the water surface.

        Returns:
            Self for method chaining.
        """
        if not np.isfinite(height):
            raise ValueError("Water height must be finite")
        self._water_height = float(height)
        return self

    def set_wall_edge_width(self, width: float) -> TerrainBuilder:
        """Set the bevel height of wall rings in quarter-level units.

        Returns:
            Self for method chaining.
        """
        if not 0.0 <= width <= 2.0:
            raise ValueError("Wall edge width must be between 0 and 2")
        self._wall_edge_width = float(width)
        return self

    def _validate_configuration(self) -> None:
        """Validate that all required parameters are set."""
        if self._grid is None:
            raise MeshGenerationError("Tile grid not set. Call set_grid() first.")

    def build(self) -> TerrainMeshes:
        """Generate the land and water meshes.

        Returns:
            TerrainMeshes with the land and water buffers.

        Raises:
            MeshGenerationError: If no grid is set.
        """
        self._validate_configuration()

        extent = self._grid.extent
        logger.info(
            f"Building terrain ({extent.width} x {extent.length}, "
            f"{self._distortion}, water height {self._water_height})"
        )

        land = generate_land_surface(
            self._grid,
            distortion=self._distortion,
            warp=self._warp,
            wall_edge_width=self._wall_edge_width,
        )
        water = generate_water_surface(self._grid, self._water_height)

        self._meshes = TerrainMeshes(land, water)
        return self._meshes

    def get_meshes(self) -> TerrainMeshes | None:
        """Return the meshes of the last build, if any."""
        return self._meshes

    def get_mesh_info(self) -> dict:
        """Return information about the grid and the built meshes.

        Returns:
            Dictionary with grid configuration and mesh statistics.
        """
        info = {
            "distortion": repr(self._distortion),
            "water_height": self._water_height,
            "wall_edge_width": self._wall_edge_width,
        }

        if self._grid is not None:
            tiles = list(iter_tiles(self._grid))
            info["grid_width"] = self._grid.extent.width
            info["grid_length"] = self._grid.extent.length
            info["n_tiles"] = len(tiles)
            info["n_water_tiles"] = sum(tile.is_water for tile in tiles)
            info["n_coastal_tiles"] = sum(
                is_coastal(self._grid, tile) for tile in tiles
            )

        if self._meshes is not None:
            info["land_vertices"] = self._meshes.land.n_vertices
            info["land_triangles"] = self._meshes.land.n_triangles
            info["wall_triangles"] = self._meshes.land.wall_triangle_count
            info["water_vertices"] = self._meshes.water.n_vertices
            info["water_triangles"] = self._meshes.water.n_triangles

        return info
