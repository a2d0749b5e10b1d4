import math

import numpy as np
import pytest

from sobfusion.field_ops import (
    det,
    global_index,
    heaviside_smooth,
    interpolate_field,
    interpolate_tsdf,
    is_truncated,
    lerp,
    lerp3,
    lerp4,
    mat_vec,
    norm,
    norm_sq,
    normalised,
    rms_epsilon,
    sign,
    transpose,
    vec,
)

DIMS = (4, 5, 6)  # x, y, z


def _linear(x, y, z):
    return 1.0 + 2.0 * x - 0.5 * y + 3.0 * z


def _linear_volume():
    dx, dy, dz = DIMS
    z, y, x = np.meshgrid(np.arange(dz), np.arange(dy), np.arange(dx), indexing="ij")
    volume = np.zeros((dz, dy, dx, 2))
    volume[..., 0] = _linear(x, y, z)
    volume[..., 1] = x + 10 * y + 100 * z
    return volume


def _linear_field():
    dx, dy, dz = DIMS
    z, y, x = np.meshgrid(np.arange(dz), np.arange(dy), np.arange(dx), indexing="ij")
    field = np.zeros((dz, dy, dx, 4))
    field[..., 0] = x
    field[..., 1] = y
    field[..., 2] = z
    field[..., 3] = 7.0
    return field


@pytest.mark.parametrize("x,y,z", [(0, 0, 0), (3, 4, 5), (1, 2, 3), (2, 0, 4)])
def test_global_index_matches_c_order(x, y, z):
    dx, dy, dz = DIMS
    assert global_index(x, y, z, dx, dy) == np.ravel_multi_index((z, y, x), (dz, dy, dx))


def test_lerp_endpoints():
    assert lerp(2.0, 5.0, 1.0) == 2.0
    assert lerp(2.0, 5.0, 0.0) == 5.0


def test_lerp3_and_lerp4():
    v0, v1 = (1.0, 2.0, 3.0, 9.0), (4.0, 5.0, 6.0, 8.0)
    assert lerp3(v0, v1, 1.0) == (1.0, 2.0, 3.0)
    assert lerp4(v0, v1, 0.0) == (4.0, 5.0, 6.0, 0.0)


@pytest.mark.parametrize("x,y,z", [(0, 0, 0), (2, 3, 1), (3, 4, 5)])
def test_interpolate_tsdf_at_voxels(x, y, z):
    volume = _linear_volume()
    tsdf, weight = interpolate_tsdf(volume, (x, y, z))
    assert tsdf == pytest.approx(volume[z, y, x, 0])
    assert weight == volume[z, y, x, 1]


@pytest.mark.parametrize("p", [(0.5, 1.25, 2.75), (2.9, 3.1, 4.6), (1.0, 0.3, 0.0)])
def test_interpolate_tsdf_exact_for_linear(p):
    volume = _linear_volume()
    tsdf, weight = interpolate_tsdf(volume, p)
    assert tsdf == pytest.approx(_linear(*p))
    gx, gy, gz = (math.floor(c) for c in p)
    assert weight == volume[gz, gy, gx, 1]


def test_interpolate_tsdf_clamps():
    volume = _linear_volume()
    assert interpolate_tsdf(volume, (-3.0, -1.0, -7.0)) == interpolate_tsdf(volume, (0, 0, 0))
    far = interpolate_tsdf(volume, (40.0, 50.0, 60.0))
    assert far[0] == pytest.approx(volume[-1, -1, -1, 0])


def test_interpolate_tsdf_rejects_bad_shape():
    with pytest.raises(ValueError):
        interpolate_tsdf(np.zeros((3, 3, 3)), (0, 0, 0))


def test_interpolate_field_reproduces_position():
    field = _linear_field()
    p = (1.5, 2.25, 3.75)
    result = interpolate_field(field, p)
    assert result[:3] == pytest.approx(p)
    assert result[3] == 0.0


def test_interpolate_field_clamps():
    field = _linear_field()
    result = interpolate_field(field, (10.0, -2.0, 100.0))
    assert result == pytest.approx((DIMS[0] - 1, 0.0, DIMS[2] - 1, 0.0))


def test_interpolate_field_rejects_two_channels():
    with pytest.raises(ValueError):
        interpolate_field(np.zeros((2, 2, 2, 2)), (0, 0, 0))


def test_norm_two_and_four_components():
    assert norm((3.0, 4.0)) == pytest.approx(5.0)
    assert norm((3.0, 4.0, 0.0, 99.0)) == pytest.approx(5.0)


def test_norm_sq_consistent_with_norm():
    v = (1.5, -2.0, 0.25, 4.0)
    assert norm(v) ** 2 == pytest.approx(norm_sq(v))


def test_normalised_unit_length_and_small_unchanged():
    result = normalised((2.0, -3.0, 6.0, 5.0))
    assert norm(result) == pytest.approx(1.0)
    assert result[3] == 0.0
    tiny = (1e-7, 0.0, 0.0, 2.0)
    assert normalised(tiny) == tiny


def test_rms_epsilon_of_zero():
    assert rms_epsilon((0.0, 0.0, 0.0, 0.0)) == pytest.approx(math.sqrt(1e-5))


def test_mat_vec_identity():
    identity = ((1, 0, 0, 0), (0, 1, 0, 0), (0, 0, 1, 0), (0, 0, 0, 1))
    assert mat_vec(identity, (1.0, 2.0, 3.0, 4.0)) == (1.0, 2.0, 3.0, 0.0)


def test_det_identity_and_invariants():
    assert det(((1, 0, 0), (0, 1, 0), (0, 0, 1))) == 1
    m = ((2.0, 1.0, -1.0), (0.5, 3.0, 2.0), (1.0, -2.0, 4.0))
    assert det(transpose(m)) == pytest.approx(det(m))
    swapped = (m[1], m[0], m[2])
    assert det(swapped) == pytest.approx(-det(m))


def test_det_matches_numpy():
    m = ((2.0, 1.0, -1.0), (0.5, 3.0, 2.0), (1.0, -2.0, 4.0))
    assert det(m) == pytest.approx(np.linalg.det(np.array(m)))


def test_transpose_involution():
    m = ((1, 2, 3), (4, 5, 6), (7, 8, 9))
    assert transpose(transpose(m)) == m
    assert transpose(m)[0] == (1, 4, 7)


def test_vec_stacks_columns():
    m = ((1, 2, 3), (4, 5, 6), (7, 8, 9))
    assert vec(m) == (1, 4, 7, 2, 5, 8, 3, 6, 9)


@pytest.mark.parametrize("a,expected", [(2.5, 1.0), (-0.1, -1.0), (0.0, 0.0)])
def test_sign(a, expected):
    assert sign(a) == expected


@pytest.mark.parametrize("tsdf,expected", [(1.0, True), (-1.0, True), (0.99, False), (-0.5, False)])
def test_is_truncated(tsdf, expected):
    assert is_truncated(tsdf) is expected


def test_heaviside_smooth_peak_and_symmetry():
    eps = 0.2
    assert heaviside_smooth(0.0, eps) == pytest.approx(1.0 / (math.pi * eps))
    assert heaviside_smooth(0.7, eps) == pytest.approx(heaviside_smooth(-0.7, eps))
    assert heaviside_smooth(0.7, eps) < heaviside_smooth(0.0, eps)