"""Positional warp applied to terrain vertices."""

from __future__ import annotations

from typing import Callable, Sequence

import numpy as np


class DistortionConfig:
    """Parameters of the positional warp applied to land vertices.

    The horizontal warp shifts vertices along x and z, the vertical warp
    along y. Both are sampled at the planar (x, z) position of a vertex,
    so vertices stacked on top of each other move together and walls stay
    vertical.

    Args:
        x_offset: Noise-space offset of the x displacement field.
        z_offset: Noise-space offset of the z displacement field.
        horizontal_frequency: Frequency of the horizontal warp.
        horizontal_amplitude: Maximum horizontal displacement in world units.
        vertical_frequency: Frequency of the vertical warp.
        vertical_amplitude: Maximum vertical displacement in world units.

    Example:
        >>> config = DistortionConfig(
        ...     horizontal_frequency=1.5, horizontal_amplitude=0.08,
        ...     vertical_frequency=0.7, vertical_amplitude=0.02,
        ... )
        >>> config.is_identity
        False
    """

    def __init__(
        self,
        x_offset: Sequence[float] = (0.0, 0.0),
        z_offset: Sequence[float] = (0.0, 0.0),
        horizontal_frequency: float = 0.0,
        horizontal_amplitude: float = 0.0,
        vertical_frequency: float = 0.0,
        vertical_amplitude: float = 0.0,
    ):
        self._x_offset = self._as_offset(x_offset, "x_offset")
        self._z_offset = self._as_offset(z_offset, "z_offset")

        values = (
            horizontal_frequency,
            horizontal_amplitude,
            vertical_frequency,
            vertical_amplitude,
        )
        if not np.all(np.isfinite(values)):
            raise ValueError("Distortion parameters must be finite")
        if horizontal_frequency < 0 or vertical_frequency < 0:
            raise ValueError("Distortion frequencies must not be negative")

        self._horizontal_frequency = float(horizontal_frequency)
        self._horizontal_amplitude = float(horizontal_amplitude)
        self._vertical_frequency = float(vertical_frequency)
        self._vertical_amplitude = float(vertical_amplitude)

    @staticmethod
    def _as_offset(value: Sequence[float], name: str) -> tuple[float, float]:
        offset = np.asarray(value, dtype=float)
        if offset.shape != (2,):
            raise ValueError(f"{name} must be a 2D vector")
        if not np.all(np.isfinite(offset)):
            raise ValueError(f"{name} must be finite")
        return (float(offset[0]), float(offset[1]))

    @classmethod
    def none(cls) -> DistortionConfig:
        """Configuration that leaves every vertex in place."""
        return cls()

    @property
    def x_offset(self) -> tuple[float, float]:
        return self._x_offset

    @property
    def z_offset(self) -> tuple[float, float]:
        return self._z_offset

    @property
    def horizontal_frequency(self) -> float:
        return self._horizontal_frequency

    @property
    def horizontal_amplitude(self) -> float:
        return self._horizontal_amplitude

    @property
    def vertical_frequency(self) -> float:
        return self._vertical_frequency

    @property
    def vertical_amplitude(self) -> float:
        return self._vertical_amplitude

    @property
    def is_identity(self) -> bool:
        """Return True if the warp moves no vertex."""
        return self._horizontal_amplitude == 0.0 and self._vertical_amplitude == 0.0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DistortionConfig):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def _key(self) -> tuple:
        return (
            self._x_offset,
            self._z_offset,
            self._horizontal_frequency,
            self._horizontal_amplitude,
            self._vertical_frequency,
            self._vertical_amplitude,
        )

    def __repr__(self) -> str:
        return (
            f"DistortionConfig(horizontal={self._horizontal_amplitude:.3f}"
            f"@{self._horizontal_frequency:.3f}, "
            f"vertical={self._vertical_amplitude:.3f}"
            f"@{self._vertical_frequency:.3f})"
        )


Warp = Callable[[np.ndarray, DistortionConfig], np.ndarray]

_X_SEED = 1
_Z_SEED = 2
_Y_SEED = 3


def _hash2(ix: np.ndarray, iy: np.ndarray, seed: int) -> np.ndarray:
    n = ix * 374761393 + iy * 668265263 + seed * 73856093
    n = (n ^ (n >> 13)) & 0xFFFFFFFF
    n = (n * 1274126177) & 0xFFFFFFFF
    n = n ^ (n >> 16)
    return (n & 0xFFFFFFFF) / 4294967295.0


def _smoothstep(t: np.ndarray) -> np.ndarray:
    return t * t * (3.0 - 2.0 * t)


def value_noise(x: np.ndarray, y: np.ndarray, seed: int) -> np.ndarray:
    """Smooth lattice value noise in [-1, 1].

    Args:
        x: Sample x positions.
        y: Sample y positions, same shape as x.
        seed: Integer selecting an independent noise field.

    Returns:
        Noise values with the shape of x.
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)

    fx = np.floor(x)
    fy = np.floor(y)
    ix = fx.astype(np.int64)
    iy = fy.astype(np.int64)
    sx = _smoothstep(x - fx)
    sy = _smoothstep(y - fy)

    v00 = _hash2(ix, iy, seed)
    v10 = _hash2(ix + 1, iy, seed)
    v01 = _hash2(ix, iy + 1, seed)
    v11 = _hash2(ix + 1, iy + 1, seed)

    i0 = v00 + (v10 - v00) * sx
    i1 = v01 + (v11 - v01) * sx
    return (i0 + (i1 - i0) * sy) * 2.0 - 1.0


def value_noise_warp(points: np.ndarray, config: DistortionConfig) -> np.ndarray:
    """Displace points by value noise sampled at their planar position.

    Args:
        points: World positions, shape (n, 3).
        config: Warp parameters.

    Returns:
        Displaced positions, shape (n, 3). Identical to the input when both
        amplitudes are zero.
    """
    points = np.asarray(points, dtype=float).reshape(-1, 3)
    warped = points.copy()
    x = points[:, 0]
    z = points[:, 2]

    if config.horizontal_amplitude != 0.0:
        f = config.horizontal_frequency
        ox, oz = config.x_offset, config.z_offset
        warped[:, 0] += config.horizontal_amplitude * value_noise(
            x * f + ox[0], z * f + ox[1], _X_SEED
        )
        warped[:, 2] += config.horizontal_amplitude * value_noise(
            x * f + oz[0], z * f + oz[1], _Z_SEED
        )

    if config.vertical_amplitude != 0.0:
        f = config.vertical_frequency
        warped[:, 1] += config.vertical_amplitude * value_noise(x * f, z * f, _Y_SEED)

    return warped
