"""Configuration of the fusion pipeline and its solver."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from sobfusion.camera import Intrinsics


def _identity_pose() -> np.ndarray:
    return np.eye(4, dtype=np.float32)


@dataclass(kw_only=True)
class Params:
    """Frame, volume, filtering and solver settings."""

    cols: int = 640
    rows: int = 480

    volume_dims: tuple[int, int, int] = (0, 0, 0)
    volume_size: tuple[float, float, float] = (0.0, 0.0, 0.0)

    volume_pose: np.ndarray = field(default_factory=_identity_pose)
    intr: Intrinsics = field(default_factory=Intrinsics)

    icp_truncate_depth_dist: float = 0.0

    bilateral_sigma_depth: float = 0.0
    bilateral_sigma_spatial: float = 0.0
    bilateral_kernel_size: int = 0

    tsdf_trunc_dist: float = 0.0
    eta: float = 0.0
    tsdf_max_weight: float = 0.0

    gradient_delta_factor: float = 0.0

    start_frame: int = 0
    verbosity: int = 0

    s: int = 0
    max_iter: int = 0
    max_update_norm: float = 0.0
    lambda_: float = 0.0
    alpha: float = 0.0
    w_reg: float = 0.0

    def voxel_sizes(self) -> tuple[float, float, float]:
        """Return the edge length of one voxel along each axis, in metres."""
        return tuple(
            float(size) / dim for size, dim in zip(self.volume_size, self.volume_dims)
        )