"""Truncated signed distance volume held in host memory."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from sobfusion.params import Params


def _identity_pose() -> np.ndarray:
    return np.eye(4, dtype=np.float32)


def _empty_grid() -> np.ndarray:
    return np.zeros((0, 0, 0, 2), dtype=np.float32)


@dataclass(kw_only=True)
class TsdfVolume:
    """A voxel grid of (signed distance, weight) pairs with its metric setup.

    The data array is laid out as ``[z, y, x, 2]``: voxel ``(x, y, z)`` sits at
    flat position ``x + y * dim_x + z * dim_x * dim_y``.
    """

    dims: tuple[int, int, int] = (0, 0, 0)
    size: tuple[float, float, float] = (0.0, 0.0, 0.0)
    pose: np.ndarray = field(default_factory=_identity_pose)
    trunc_dist: float = 0.0
    eta: float = 0.0
    max_weight: float = 0.0
    gradient_delta_factor: float = 0.0
    raycast_step_factor: float = 0.0
    data: np.ndarray = field(default_factory=_empty_grid, init=False, repr=False)

    def __post_init__(self) -> None:
        self.create(self.dims)

    @classmethod
    def from_params(cls, params: Params) -> TsdfVolume:
        """Build a cleared volume from the pipeline settings."""
        return cls(
            dims=tuple(params.volume_dims),
            size=tuple(params.volume_size),
            pose=np.array(params.volume_pose, copy=True),
            trunc_dist=params.tsdf_trunc_dist,
            eta=params.eta,
            max_weight=params.tsdf_max_weight,
            gradient_delta_factor=params.gradient_delta_factor,
        )

    def create(self, dims) -> None:
        """Allocate storage for ``dims`` voxels, every entry cleared to zero."""
        dim_x, dim_y, dim_z = (int(d) for d in dims)
        if min(dim_x, dim_y, dim_z) < 0:
            raise ValueError(f"volume dimensions must be non-negative, got {dims}")
        self.dims = (dim_x, dim_y, dim_z)
        self.data = np.zeros((dim_z, dim_y, dim_x, 2), dtype=np.float32)

    def voxel_size(self) -> tuple[float, float, float]:
        """Edge length of one voxel along each axis, in metres."""
        return tuple(float(s) / d for s, d in zip(self.size, self.dims))

    def swap(self, data: np.ndarray) -> np.ndarray:
        """Install ``data`` as the volume's storage and return the previous storage."""
        previous = self.data
        self.data = data
        return previous

    def apply_affine(self, affine) -> None:
        """Compose ``affine`` on the left of the volume pose."""
        self.pose = np.asarray(affine) @ self.pose

    def nonzero_sdf_values(self) -> list[float]:
        """Signed distances that are not zero, x slowest and z fastest."""
        sdf = self.data[..., 0].transpose(2, 1, 0).ravel()
        return [float(value) for value in sdf if value != 0.0]