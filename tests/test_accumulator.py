"""Tests for mesh accumulation and buffers."""

import numpy as np
import pytest

from hexterrain.exceptions import MeshGenerationError
from hexterrain.mesh.accumulator import MeshAccumulator, MeshBuffers, SurfacePart


class TestMeshAccumulator:
    """Test point welding and triangle assembly."""

    def test_shared_points_are_welded(self):
        acc = MeshAccumulator()
        acc.add_triangle((0, 0, 0), (0, 0, 1), (1, 0, 0), SurfacePart.CENTER)
        acc.add_triangle((1, 0, 0), (0, 0, 1), (1, 0, 1), SurfacePart.CENTER)
        mesh = acc.build()

        assert mesh.n_vertices == 4
        np.testing.assert_array_equal(
            mesh.vertices, [[0, 0, 0], [0, 0, 1], [1, 0, 0], [1, 0, 1]]
        )
        np.testing.assert_array_equal(mesh.triangles, [[0, 1, 2], [2, 1, 3]])

    def test_first_emission_order(self):
        acc = MeshAccumulator()
        acc.add_triangle((1, 0, 0), (0, 0, 0), (0, 0, 1), SurfacePart.CENTER)
        mesh = acc.build()

        np.testing.assert_array_equal(mesh.vertices, [[1, 0, 0], [0, 0, 0], [0, 0, 1]])
        np.testing.assert_array_equal(mesh.triangles, [[0, 1, 2]])

    def test_nearly_equal_points_are_welded(self):
        acc = MeshAccumulator()
        acc.add_triangle((0, 0, 0), (0, 0, 1), (1, 0, 0), SurfacePart.CENTER)
        acc.add_triangle((1e-8, 0, 0), (0, 0, 1), (0, 1, 0), SurfacePart.CENTER)
        assert acc.build().n_vertices == 4

    def test_empty(self):
        mesh = MeshAccumulator().build()
        assert mesh.is_empty
        assert mesh.vertices.shape == (0, 3)
        assert mesh.triangles.shape == (0, 3)

    def test_incomplete_triangle(self):
        acc = MeshAccumulator()
        acc.add_point((0, 0, 0))
        acc.add_point((1, 0, 0))
        with pytest.raises(MeshGenerationError):
            acc.close_triangle(SurfacePart.CENTER)
        with pytest.raises(MeshGenerationError):
            acc.build()

    def test_transform_applied_after_welding(self):
        def lift(points):
            return points + np.array([0.0, 1.0, 0.0])

        acc = MeshAccumulator(transform=lift)
        acc.add_triangle((0, 0, 0), (0, 0, 1), (1, 0, 0), SurfacePart.CENTER)
        acc.add_triangle((0, 0, 0), (1, 0, 0), (1, 0, -1), SurfacePart.WATER, distort=False)
        mesh = acc.build()

        assert mesh.n_vertices == 4
        np.testing.assert_allclose(mesh.vertices[:, 1], [1.0, 1.0, 1.0, 0.0])

    def test_counts(self):
        acc = MeshAccumulator()
        acc.add_triangle((0, 0, 0), (0, 0, 1), (1, 0, 0), SurfacePart.CENTER)
        acc.add_triangle((0, 0, 0), (0, 1, 0), (0, 0, 1), SurfacePart.SIDE_WALL)
        assert acc.n_points == 6
        assert acc.n_triangles == 2

        mesh = acc.build()
        assert mesh.count(SurfacePart.CENTER) == 1
        assert mesh.count(SurfacePart.SIDE_WALL) == 1
        assert mesh.count(SurfacePart.WATER) == 0
        assert mesh.wall_triangle_count == 1


class TestMeshBuffers:
    """Test derived mesh data."""

    @pytest.fixture
    def quad(self):
        acc = MeshAccumulator()
        acc.add_triangle((0, 0, 0), (0, 0, 2), (1, 0, 0), SurfacePart.CENTER)
        acc.add_triangle((1, 0, 0), (0, 0, 2), (1, 0, 2), SurfacePart.CENTER)
        return acc.build()

    def test_read_only(self, quad):
        with pytest.raises(ValueError):
            quad.vertices[0, 0] = 5.0
        with pytest.raises(ValueError):
            quad.triangles[0, 0] = 1

    def test_bounds(self, quad):
        low, high = quad.bounds
        np.testing.assert_array_equal(low, [0, 0, 0])
        np.testing.assert_array_equal(high, [1, 0, 2])

    def test_empty_bounds(self):
        with pytest.raises(MeshGenerationError):
            MeshBuffers.empty().bounds

    def test_normals_point_up(self, quad):
        np.testing.assert_allclose(quad.vertex_normals(), np.tile([0.0, 1.0, 0.0], (4, 1)))

    def test_uv_coordinates(self, quad):
        np.testing.assert_allclose(
            quad.uv_coordinates(), [[0, 0], [0, 1], [1, 0], [1, 1]]
        )

    def test_validation(self):
        with pytest.raises(ValueError, match="parts length"):
            MeshBuffers(np.zeros((3, 3)), [[0, 1, 2]], [0, 0])
        with pytest.raises(ValueError, match="out of range"):
            MeshBuffers(np.zeros((3, 3)), [[0, 1, 3]], [0])
