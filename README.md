# sobfusion

Building blocks for volumetric depth fusion, written in plain Python and NumPy.

## What is inside

- `sobfusion.camera`
  - `Intrinsics(fx, fy, cx, cy)` is a frozen dataclass of pinhole camera parameters.
  - `Intrinsics.at_level(level_index)` divides all four values by `2 ** level_index`.
  - `Projector` maps a camera-space point `(x, y, z)` to pixel coordinates.
  - `Reprojector` maps a pixel `(u, v)` and a depth `z` back to a camera-space point.
  - `div_up(total, grain)` is integer division that rounds up. It raises `ZeroDivisionError` when `grain` is zero.
- `sobfusion.params`
  - `Params` is a keyword-only dataclass of frame, volume, filtering and solver settings.
  - `Params.voxel_sizes()` returns the metric edge length of one voxel along each axis.
- `sobfusion.triangle_table`
  - `TRIANGLE_TABLE` is the marching cubes triangle table.
  - `cube_triangles(cube_index)` returns the triangles of one cube configuration. Each triangle is a triple of edge indices.
- `sobfusion.marching_cubes`
  - `EDGE_TABLE` and `VERTEX_COUNT_TABLE` are the edge and vertex-count lookup tables.
  - `edge_mask(cube_index)` returns the 12-bit mask of the edges the surface crosses.
  - `cube_edges(cube_index)` returns those edge indices in ascending order.
  - `cube_vertex_count(cube_index)` returns how many triangle vertices the configuration produces.
  - Cube indices outside `0..255` raise `ValueError`.
- `sobfusion.field_ops`
  - `global_index` converts voxel coordinates to a flat index.
  - `lerp`, `lerp3` and `lerp4` interpolate linearly between values or vectors.
  - `interpolate_tsdf` and `interpolate_field` do clamped trilinear sampling of NumPy arrays laid out as `[z, y, x, channel]`.
  - `norm`, `norm_sq`, `normalised` and `rms_epsilon` work on vectors.
  - `mat_vec`, `det`, `transpose` and `vec` work on 3×3 matrices.
  - `sign`, `is_truncated` and `heaviside_smooth` are scalar helpers.
- `sobfusion.tsdf_volume`
  - `TsdfVolume` is a dense `float32` grid of (signed distance, weight) pairs with a size, a 4×4 pose and truncation settings.
  - `TsdfVolume.from_params` builds a cleared volume from a `Params`.
  - `create` reallocates the grid, set to zero.
  - `voxel_size` gives the metric voxel size.
  - `swap` installs a new data array and returns the old one.
  - `apply_affine` left-multiplies the pose.
  - `nonzero_sdf_values` lists the signed distances that are not zero.
- `sobfusion.icp`
  - `IcpLevelHelper` holds the correspondence thresholds and the intrinsics for one pyramid level.
  - `ProjectiveICP` holds the distance threshold, the angle threshold and the iteration schedule for each level. The defaults are 0.1, 20° and `(10, 5, 4, 0)`. `used_levels()` returns how many levels are in use.
  - `unpack_normal_equations` rebuilds the symmetric 6×6 `A` and the vector `b` from their 27 packed values.
  - `affine_from_rvec` builds a rigid 4×4 transform from a rotation vector and a translation.
  - `apply_increment` composes a 6-vector increment onto a pose.

## What it does not do

This package holds data structures, lookup tables and numerical helpers. It does not provide:

- a processing pipeline;
- depth-image filtering;
- integration of depth frames into a volume;
- surface extraction over a whole volume;
- the correspondence search and reduction that fill the ICP normal equations;
- the deformation-field solver;
- any command-line tool or mesh output.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install .[test]
pytest
```

## Example

```python
from sobfusion.camera import Intrinsics, Projector
from sobfusion.marching_cubes import cube_edges, cube_vertex_count
from sobfusion.params import Params
from sobfusion.triangle_table import cube_triangles
from sobfusion.tsdf_volume import TsdfVolume

params = Params(volume_dims=(64, 64, 64), volume_size=(1.0, 1.0, 1.0))
print(params.voxel_sizes())

volume = TsdfVolume.from_params(params)
print(volume.voxel_size(), volume.data.shape)

intr = Intrinsics(525.0, 525.0, 319.5, 239.5)
half = intr.at_level(1)
proj = Projector(half.fx, half.fy, half.cx, half.cy)
print(proj((0.1, 0.2, 1.0)))

print(cube_edges(1), cube_vertex_count(1), cube_triangles(1))
```