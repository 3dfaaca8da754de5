"""Shared fixtures for hexterrain tests."""

import pytest

from hexterrain.hexgrid import Grid, HexCoordinate


def raise_tiles(grid: Grid, elevations: dict) -> Grid:
    """Set the elevation of the tiles at the given (x, z) cells."""
    for (x, z), elevation in elevations.items():
        grid.at(HexCoordinate(x, 0, z)).elevation = elevation
    return grid


@pytest.fixture
def flat_grid():
    """5 x 5 grid of land tiles at elevation 0."""
    return Grid.filled(5, 5)


@pytest.fixture
def make_grid():
    """Factory for filled grids with selected tiles raised."""

    def _make(width: int, length: int, elevations: dict | None = None) -> Grid:
        return raise_tiles(Grid.filled(width, length), elevations or {})

    return _make
