"""Per-pass collection of emitted triangles and the finished mesh buffers."""

from __future__ import annotations

from enum import IntEnum
from typing import Callable, Sequence

import numpy as np

from hexterrain.exceptions import MeshGenerationError

# Emitted points closer than 1/KEY_FACTOR on every axis share a vertex.
KEY_FACTOR = 1_000_000.0

Point = Sequence[float]
VertexTransform = Callable[[np.ndarray], np.ndarray]


class SurfacePart(IntEnum):
    """Region of the tile surface a triangle belongs to."""

    CENTER = 0
    INNER_EDGE = 1
    INNER_CORNER = 2
    OUTER_EDGE = 3
    OUTER_CORNER = 4
    CENTER_WALL = 5
    SIDE_WALL = 6
    CORNER_WALL = 7
    WATER = 8


WALL_PARTS = (SurfacePart.CENTER_WALL, SurfacePart.SIDE_WALL, SurfacePart.CORNER_WALL)


class MeshBuffers:
    """Immutable vertex and triangle buffers produced by one generation pass.

    Args:
        vertices: Vertex positions, shape (n, 3).
        triangles: Vertex indices of each triangle, shape (m, 3).
        parts: SurfacePart of each triangle, shape (m,).
    """

    def __init__(
        self,
        vertices: np.ndarray,
        triangles: np.ndarray,
        parts: np.ndarray,
    ):
        self._vertices = np.array(vertices, dtype=np.float64).reshape(-1, 3)
        self._triangles = np.array(triangles, dtype=np.int64).reshape(-1, 3)
        self._parts = np.array(parts, dtype=np.int8).reshape(-1)

        if len(self._parts) != len(self._triangles):
            raise ValueError(
                f"parts length ({len(self._parts)}) must match "
                f"number of triangles ({len(self._triangles)})"
            )
        if len(self._triangles) and (
            self._triangles.min() < 0 or self._triangles.max() >= len(self._vertices)
        ):
            raise ValueError("triangle indices out of range")

        for array in (self._vertices, self._triangles, self._parts):
            array.setflags(write=False)

    @classmethod
    def empty(cls) -> MeshBuffers:
        """Buffers without any geometry."""
        return cls(np.zeros((0, 3)), np.zeros((0, 3)), np.zeros(0))

    @property
    def vertices(self) -> np.ndarray:
        """Vertex positions, shape (n, 3). Read-only."""
        return self._vertices

    @property
    def triangles(self) -> np.ndarray:
        """Vertex indices of each triangle, shape (m, 3). Read-only."""
        return self._triangles

    @property
    def parts(self) -> np.ndarray:
        """SurfacePart value of each triangle, shape (m,). Read-only."""
        return self._parts

    @property
    def n_vertices(self) -> int:
        return len(self._vertices)

    @property
    def n_triangles(self) -> int:
        return len(self._triangles)

    @property
    def is_empty(self) -> bool:
        return self.n_triangles == 0

    @property
    def bounds(self) -> tuple[np.ndarray, np.ndarray]:
        """Return (minimum, maximum) corner of the vertex bounding box."""
        if self.n_vertices == 0:
            raise MeshGenerationError("Empty mesh has no bounds")
        return self._vertices.min(axis=0), self._vertices.max(axis=0)

    def count(self, part: SurfacePart) -> int:
        """Number of triangles belonging to a surface part."""
        return int(np.count_nonzero(self._parts == int(part)))

    @property
    def wall_triangle_count(self) -> int:
        """Number of triangles in vertical step walls."""
        return sum(self.count(part) for part in WALL_PARTS)

    def triangle_points(self) -> np.ndarray:
        """Corner positions of every triangle, shape (m, 3, 3)."""
        return self._vertices[self._triangles]

    def face_normals(self) -> np.ndarray:
        """Unnormalised face normals, length proportional to twice the area."""
        points = self.triangle_points()
        return np.cross(points[:, 1] - points[:, 0], points[:, 2] - points[:, 0])

    def vertex_normals(self) -> np.ndarray:
        """Area-weighted unit normal at every vertex, shape (n, 3).

        Upward facing triangles produce normals with a positive y component.
        """
        normals = np.zeros_like(self._vertices)
        face_normals = self.face_normals()
        for corner in range(3):
            np.add.at(normals, self._triangles[:, corner], face_normals)

        lengths = np.linalg.norm(normals, axis=1, keepdims=True)
        return np.divide(normals, lengths, out=np.zeros_like(normals), where=lengths > 0)

    def uv_coordinates(self) -> np.ndarray:
        """Planar texture coordinates spanning the mesh bounds, shape (n, 2)."""
        if self.n_vertices == 0:
            return np.zeros((0, 2))
        planar = self._vertices[:, [0, 2]]
        low = planar.min(axis=0)
        span = planar.max(axis=0) - low
        span[span == 0] = 1.0
        return (planar - low) / span

    def __repr__(self) -> str:
        return (
            f"MeshBuffers(n_vertices={self.n_vertices}, "
            f"n_triangles={self.n_triangles})"
        )


class MeshAccumulator:
    """Receives emitted world points and assembles mesh buffers.

    Every three consecutive emissions form one triangle. Points with the same
    position (to 1/KEY_FACTOR) are welded into one vertex in order of first
    emission. Welding uses the emitted position; the optional transform is
    applied to the welded vertices afterwards, so neighbouring tiles always
    share their seam vertices.

    Args:
        transform: Optional function mapping an (n, 3) array of positions to
            displaced positions. Only applied to points emitted with
            ``distort=True``.
        key_factor: Welding precision.

    Example:
        >>> acc = MeshAccumulator()
        >>> acc.add_triangle((0, 0, 0), (0, 0, 1), (1, 0, 0), SurfacePart.CENTER)
        >>> acc.build().n_triangles
        1
    """

    def __init__(
        self,
        transform: VertexTransform | None = None,
        key_factor: float = KEY_FACTOR,
    ):
        self._transform = transform
        self._key_factor = key_factor
        self._points: list[float] = []
        self._distort: list[bool] = []
        self._parts: list[int] = []

    @property
    def n_points(self) -> int:
        """Number of points emitted so far."""
        return len(self._distort)

    @property
    def n_triangles(self) -> int:
        """Number of complete triangles emitted so far."""
        return len(self._parts)

    def add_point(self, point: Point, distort: bool = True) -> None:
        """Emit a single world point.

        Call :meth:`close_triangle` after every third point to tag it.
        """
        self._points.extend((float(point[0]), float(point[1]), float(point[2])))
        self._distort.append(distort)

    def close_triangle(self, part: SurfacePart) -> None:
        """Tag the last three emitted points as one triangle."""
        if self.n_points != 3 * (self.n_triangles + 1):
            raise MeshGenerationError(
                f"Cannot close triangle after {self.n_points} points "
                f"and {self.n_triangles} triangles"
            )
        self._parts.append(int(part))

    def add_triangle(
        self,
        p0: Point,
        p1: Point,
        p2: Point,
        part: SurfacePart,
        distort: bool = True,
    ) -> None:
        """Emit one triangle."""
        self.add_point(p0, distort)
        self.add_point(p1, distort)
        self.add_point(p2, distort)
        self.close_triangle(part)

    def build(self) -> MeshBuffers:
        """Weld the emitted points and return the finished buffers.

        Raises:
            MeshGenerationError: If the emitted points do not form whole,
                tagged triangles.
        """
        if self.n_points != 3 * self.n_triangles:
            raise MeshGenerationError(
                f"{self.n_points} points emitted for {self.n_triangles} triangles"
            )
        if self.n_points == 0:
            return MeshBuffers.empty()

        raw = np.asarray(self._points, dtype=np.float64).reshape(-1, 3)
        keys = np.rint(raw * self._key_factor).astype(np.int64)

        _, first, inverse = np.unique(
            keys, axis=0, return_index=True, return_inverse=True
        )
        inverse = inverse.reshape(-1)

        # np.unique sorts by key; restore first-emission order.
        order = np.argsort(first)
        rank = np.empty_like(order)
        rank[order] = np.arange(len(order))

        sources = first[order]
        vertices = raw[sources].copy()
        distort = np.asarray(self._distort, dtype=bool)[sources]

        if self._transform is not None and distort.any():
            vertices[distort] = self._transform(vertices[distort])

        triangles = rank[inverse].reshape(-1, 3)
        return MeshBuffers(vertices, triangles, np.asarray(self._parts))
