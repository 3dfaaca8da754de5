"""Custom exceptions for the hexterrain package."""


class HexTerrainError(Exception):
    """Base exception for hexterrain package."""

    pass


class InvalidDirectionError(HexTerrainError):
    """Unknown hexagon direction value."""

    pass


class OutOfRangeCoordinateError(HexTerrainError):
    """Coordinate lies outside the grid extent."""

    pass


class MeshGenerationError(HexTerrainError):
    """Mesh generation failed."""

    pass
