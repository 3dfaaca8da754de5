"""hexterrain - procedural meshes for hexagon tile terrain.

Turns a grid of integer tile elevations with land/water flags into a
welded, seamless land surface (with step walls between tiles more than one
level apart) and a flat water surface.

Example:
    >>> from hexterrain import Grid, HexCoordinate, TerrainBuilder
    >>> grid = Grid.filled(6, 6)
    >>> grid.at(HexCoordinate(2, 0, 2)).elevation = 3
    >>> meshes = TerrainBuilder(grid).set_water_height(0.1).build()
    >>> meshes.land.wall_triangle_count > 0
    True
"""

from hexterrain.exceptions import (
    HexTerrainError,
    InvalidDirectionError,
    MeshGenerationError,
    OutOfRangeCoordinateError,
)
from hexterrain.hexgrid import (
    Direction,
    Grid,
    GridExtent,
    HexCoordinate,
    Tile,
    TileSource,
    center,
    neighbor,
    opposite,
    world_to_hex,
)
from hexterrain.mesh import (
    DistortionConfig,
    MeshBuffers,
    SurfacePart,
    TerrainBuilder,
    TerrainMeshes,
    generate_land_surface,
    generate_water_surface,
    value_noise_warp,
)

__version__ = "0.1.0"

__all__ = [
    # Main API
    "TerrainBuilder",
    "TerrainMeshes",
    "Grid",
    "Tile",
    "TileSource",
    "GridExtent",
    "HexCoordinate",
    "Direction",
    "DistortionConfig",
    "MeshBuffers",
    "SurfacePart",
    # Functions
    "center",
    "neighbor",
    "opposite",
    "world_to_hex",
    "generate_land_surface",
    "generate_water_surface",
    "value_noise_warp",
    # Exceptions
    "HexTerrainError",
    "InvalidDirectionError",
    "OutOfRangeCoordinateError",
    "MeshGenerationError",
]
