"""Mesh generation utilities."""

from hexterrain.mesh.accumulator import (
    KEY_FACTOR,
    WALL_PARTS,
    MeshAccumulator,
    MeshBuffers,
    SurfacePart,
)
from hexterrain.mesh.builder import TerrainBuilder, TerrainMeshes
from hexterrain.mesh.distortion import (
    DistortionConfig,
    Warp,
    value_noise,
    value_noise_warp,
)
from hexterrain.mesh.heights import WALL_EDGE_WIDTH, Relation
from hexterrain.mesh.land import emit_tile, generate_land_surface
from hexterrain.mesh.water import DEFAULT_WATER_HEIGHT, generate_water_surface

__all__ = [
    "KEY_FACTOR",
    "WALL_PARTS",
    "MeshAccumulator",
    "MeshBuffers",
    "SurfacePart",
    "TerrainBuilder",
    "TerrainMeshes",
    "DistortionConfig",
    "Warp",
    "value_noise",
    "value_noise_warp",
    "WALL_EDGE_WIDTH",
    "Relation",
    "emit_tile",
    "generate_land_surface",
    "DEFAULT_WATER_HEIGHT",
    "generate_water_surface",
]
