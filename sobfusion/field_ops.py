"""Element-wise helpers for TSDF volumes and vector fields.

Volumes and fields are numpy arrays laid out as ``[z, y, x, channel]``, so a
voxel ``(x, y, z)`` sits at flat position ``x + y * dim_x + z * dim_x * dim_y``.
A TSDF volume has two channels (signed distance, weight); a vector field has
at least three (x, y, z displacement, optionally a fourth unused component).
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

Vector3 = tuple[float, float, float]
Vector4 = tuple[float, float, float, float]
Matrix3 = tuple[Vector3, Vector3, Vector3]

_NORMALISE_EPSILON = 1e-5
_RMS_EPSILON = 1e-5


def global_index(x: int, y: int, z: int, dim_x: int, dim_y: int) -> int:
    """Return the flat index of voxel ``(x, y, z)`` in an x-fastest layout."""
    return z * dim_x * dim_y + y * dim_x + x


def lerp(v0, v1, t):
    """Blend two values, giving ``v0`` at ``t == 1`` and ``v1`` at ``t == 0``."""
    return t * v0 + (v1 - t * v1)


def lerp3(v0: Sequence[float], v1: Sequence[float], t: float) -> Vector3:
    """Blend the first three components of two vectors."""
    return (lerp(v0[0], v1[0], t), lerp(v0[1], v1[1], t), lerp(v0[2], v1[2], t))


def lerp4(v0: Sequence[float], v1: Sequence[float], t: float) -> Vector4:
    """Blend the first three components of two vectors; the fourth is zero."""
    return (*lerp3(v0, v1, t), 0.0)


def _check_grid(array: np.ndarray, min_channels: int, what: str) -> np.ndarray:
    grid = np.asarray(array, dtype=np.float64)
    if grid.ndim != 4 or grid.shape[3] < min_channels:
        raise ValueError(
            f"{what} must have shape (dim_z, dim_y, dim_x, >= {min_channels}), "
            f"got {grid.shape}"
        )
    if min(grid.shape[:3]) < 1:
        raise ValueError(f"{what} must hold at least one voxel")
    return grid


def _cell(p: Sequence[float], dims: Sequence[int]):
    """Return base indices, upper indices and fractions per axis (x, y, z)."""
    base, upper, frac = [], [], []
    for coord, dim in zip(p[:3], dims):
        last = float(dim - 1)
        cf = min(max(0.0, float(coord)), last)
        g = math.floor(cf)
        g1 = g if cf == 0.0 or cf == last else g + 1
        base.append(g)
        upper.append(g1)
        frac.append(cf - g)
    return base, upper, frac


def _trilinear(grid: np.ndarray, p: Sequence[float]):
    dims = (grid.shape[2], grid.shape[1], grid.shape[0])
    (gx, gy, gz), (x1, y1, z1), (a, b, c) = _cell(p, dims)

    def at(x: int, y: int, z: int) -> np.ndarray:
        return grid[z, y, x]

    high_x = lerp(
        lerp(at(x1, y1, z1), at(x1, y1, gz), c),
        lerp(at(x1, gy, z1), at(x1, gy, gz), c),
        b,
    )
    low_x = lerp(
        lerp(at(gx, y1, z1), at(gx, y1, gz), c),
        lerp(at(gx, gy, z1), at(gx, gy, gz), c),
        b,
    )
    return lerp(high_x, low_x, a), (gx, gy, gz)


def interpolate_tsdf(volume: np.ndarray, p: Sequence[float]) -> tuple[float, float]:
    """Trilinearly sample the signed distance at a point given in voxel units.

    The point is clamped to the volume. The weight is that of the voxel at the
    floor of the point, not interpolated.
    """
    grid = _check_grid(volume, 2, "volume")
    values, (gx, gy, gz) = _trilinear(grid[..., :1], p)
    return float(values[0]), float(grid[gz, gy, gx, 1])


def interpolate_field(field: np.ndarray, p: Sequence[float]) -> Vector4:
    """Trilinearly sample a vector field at a point given in voxel units.

    The point is clamped to the field; the fourth component of the result is zero.
    """
    grid = _check_grid(field, 3, "field")
    values, _ = _trilinear(grid[..., :3], p)
    return (float(values[0]), float(values[1]), float(values[2]), 0.0)


def norm(v: Sequence[float]) -> float:
    """Euclidean length of a 2-vector, or of the first three components otherwise."""
    if len(v) == 2:
        return math.sqrt(v[0] * v[0] + v[1] * v[1])
    return math.sqrt(norm_sq(v))


def norm_sq(v: Sequence[float]) -> float:
    """Squared length of the first three components."""
    return v[0] * v[0] + v[1] * v[1] + v[2] * v[2]


def normalised(v: Sequence[float]) -> tuple[float, ...]:
    """Scale the first three components to unit length, zeroing the fourth.

    Vectors shorter than a small epsilon are returned unchanged.
    """
    length = norm(v)
    if length > _NORMALISE_EPSILON:
        return (v[0] / length, v[1] / length, v[2] / length, 0.0)
    return tuple(v)


def rms_epsilon(v: Sequence[float]) -> float:
    """Square root of the sum of the first three components plus a small epsilon."""
    return math.sqrt(v[0] + v[1] + v[2] + _RMS_EPSILON)


def mat_vec(m: Sequence[Sequence[float]], v: Sequence[float]) -> Vector4:
    """Multiply the upper 3x3 block of ``m`` by the first three components of ``v``."""
    rows = tuple(
        m[i][0] * v[0] + m[i][1] * v[1] + m[i][2] * v[2] for i in range(3)
    )
    return (*rows, 0.0)


def det(m: Sequence[Sequence[float]]) -> float:
    """Determinant of the upper 3x3 block of ``m``."""
    (a, b, c), (d, e, f), (g, h, i) = (tuple(row[:3]) for row in m[:3])
    return (a * e * i + d * h * c + g * b * f) - (c * e * g + f * h * a + i * b * d)


def transpose(m: Sequence[Sequence[float]]) -> Matrix3:
    """Transpose of the upper 3x3 block of ``m``."""
    rows = [tuple(row[:3]) for row in m[:3]]
    return tuple(zip(*rows))  # type: ignore[return-value]


def vec(m: Sequence[Sequence[float]]) -> tuple[float, ...]:
    """Stack the columns of a 3x3 matrix into a 9-vector."""
    return tuple(value for column in transpose(m) for value in column)


def sign(a: float) -> float:
    """Return 1.0, -1.0 or 0.0 according to the sign of ``a``."""
    if a > 0.0:
        return 1.0
    if a < 0.0:
        return -1.0
    return 0.0


def is_truncated(tsdf: float) -> bool:
    """Whether a normalised signed distance lies at or beyond the truncation band."""
    return abs(tsdf) >= 1.0


def heaviside_smooth(phi: float, epsilon: float) -> float:
    """Smoothed Dirac delta, the derivative of a smoothed Heaviside step."""
    return 1.0 / math.pi * (epsilon / (epsilon * epsilon + phi * phi))