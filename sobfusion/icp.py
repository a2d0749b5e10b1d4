"""Host side of the projective ICP pose estimation."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

MAX_PYRAMID_LEVELS = 4
DEFAULT_ITERATIONS = (10, 5, 4, 0)

_NORMAL_EQUATION_VALUES = 27


class IcpLevelHelper:
    """Thresholds and per-level intrinsics used when matching correspondences."""

    def __init__(self, dist_thres: float, angle_thres: float) -> None:
        self.min_cosine = math.cos(angle_thres)
        self.dist2_thres = dist_thres * dist_thres
        self.rows = 0.0
        self.cols = 0.0
        self.aff = np.eye(4)
        self.f = (0.0, 0.0)
        self.c = (0.0, 0.0)
        self.finv = (0.0, 0.0)

    def set_level_intrinsics(
        self, level_index: int, fx: float, fy: float, cx: float, cy: float
    ) -> None:
        """Scale the intrinsics down to a pyramid level."""
        if level_index < 0:
            raise ValueError("level_index must be non-negative")
        div = 1 << level_index
        self.f = (fx / div, fy / div)
        self.c = (cx / div, cy / div)
        self.finv = (1.0 / self.f[0], 1.0 / self.f[1])


class ProjectiveICP:
    """Distance and angle thresholds plus the iteration schedule per pyramid level."""

    def __init__(self) -> None:
        self.angle_thres = math.radians(20.0)
        self.dist_thres = 0.1
        self.iterations: tuple[int, ...] = ()
        self.set_iterations(DEFAULT_ITERATIONS)

    def set_iterations(self, iters: Sequence[int]) -> None:
        """Set iterations per level, truncating or zero-padding to the level count."""
        given = [int(i) for i in iters][:MAX_PYRAMID_LEVELS]
        given.extend([0] * (MAX_PYRAMID_LEVELS - len(given)))
        self.iterations = tuple(given)

    def used_levels(self) -> int:
        """Number of levels up to and including the coarsest one with iterations."""
        for index in reversed(range(MAX_PYRAMID_LEVELS)):
            if self.iterations[index]:
                return index + 1
        return 0


def unpack_normal_equations(data: Sequence[float]) -> tuple[np.ndarray, np.ndarray]:
    """Expand the packed upper triangle of ``[A | b]`` into a symmetric 6x6 ``A`` and ``b``."""
    values = list(data)
    if len(values) < _NORMAL_EQUATION_VALUES:
        raise ValueError(
            f"need {_NORMAL_EQUATION_VALUES} packed values, got {len(values)}"
        )
    a = np.zeros((6, 6))
    b = np.zeros(6)
    stream = iter(values)
    for i in range(6):
        for j in range(i, 7):
            value = next(stream)
            if j == 6:
                b[i] = value
            else:
                a[i, j] = a[j, i] = value
    return a, b


def affine_from_rvec(rvec: Sequence[float], tvec: Sequence[float]) -> np.ndarray:
    """Build a 4x4 rigid transform from a rotation vector and a translation."""
    r = np.asarray(rvec, dtype=np.float64)[:3]
    theta = float(np.linalg.norm(r))
    rotation = np.eye(3)
    if theta >= np.finfo(np.float64).eps:
        axis = r / theta
        cos_t, sin_t = math.cos(theta), math.sin(theta)
        cross = np.array(
            [
                [0.0, -axis[2], axis[1]],
                [axis[2], 0.0, -axis[0]],
                [-axis[1], axis[0], 0.0],
            ]
        )
        rotation = cos_t * np.eye(3) + (1.0 - cos_t) * np.outer(axis, axis) + sin_t * cross
    affine = np.eye(4)
    affine[:3, :3] = rotation
    affine[:3, 3] = np.asarray(tvec, dtype=np.float64)[:3]
    return affine


def apply_increment(affine, r: Sequence[float]) -> np.ndarray:
    """Left-compose the increment given by a 6-vector (rotation, translation)."""
    values = np.asarray(r, dtype=np.float64)
    if values.shape != (6,):
        raise ValueError(f"increment must have six components, got shape {values.shape}")
    return affine_from_rvec(values[:3], values[3:]) @ np.asarray(affine)