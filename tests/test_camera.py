import pytest

from sobfusion.camera import Intrinsics, Projector, Reprojector, div_up


def test_at_level_zero_is_identity():
    intr = Intrinsics(525.0, 520.0, 319.5, 239.5)
    assert intr.at_level(0) == intr


@pytest.mark.parametrize("level", [1, 2, 3])
def test_at_level_scales_by_power_of_two(level):
    intr = Intrinsics(525.0, 520.0, 319.5, 239.5)
    scaled = intr.at_level(level)
    factor = 2**level
    assert scaled.fx * factor == pytest.approx(intr.fx)
    assert scaled.fy * factor == pytest.approx(intr.fy)
    assert scaled.cx * factor == pytest.approx(intr.cx)
    assert scaled.cy * factor == pytest.approx(intr.cy)


def test_at_level_is_composable():
    intr = Intrinsics(400.0, 300.0, 200.0, 100.0)
    assert intr.at_level(1).at_level(1) == intr.at_level(2)


def test_at_level_rejects_negative():
    with pytest.raises(ValueError):
        Intrinsics(1.0, 1.0, 1.0, 1.0).at_level(-1)


def test_intrinsics_str_format():
    assert str(Intrinsics(525.0, 520.0, 319.5, 239.5)) == "([f = 525, 520] [cp = 319.5, 239.5])"


def test_projector_maps_optical_axis_to_principal_point():
    proj = Projector(525.0, 520.0, 319.5, 239.5)
    assert proj((0.0, 0.0, 2.0)) == pytest.approx((319.5, 239.5))


def test_reprojector_principal_point_lies_on_axis():
    reproj = Reprojector(525.0, 520.0, 319.5, 239.5)
    assert reproj(319.5, 239.5, 1.5) == pytest.approx((0.0, 0.0, 1.5))


@pytest.mark.parametrize("u,v,z", [(10.0, 20.0, 1.0), (600.0, 400.0, 3.5), (0.0, 479.0, 0.25)])
def test_reproject_then_project_round_trip(u, v, z):
    args = (525.0, 520.0, 319.5, 239.5)
    point = Reprojector(*args)(u, v, z)
    assert point[2] == z
    assert Projector(*args)(point) == pytest.approx((u, v))


def test_reprojector_finv_inverts_focal():
    reproj = Reprojector(500.0, 250.0, 0.0, 0.0)
    finv = reproj.finv
    assert finv[0] * 500.0 == pytest.approx(1.0)
    assert finv[1] * 250.0 == pytest.approx(1.0)


@pytest.mark.parametrize("total,grain", [(1, 32), (31, 32), (32, 32), (33, 32), (640, 8), (481, 16)])
def test_div_up_covers_total_minimally(total, grain):
    blocks = div_up(total, grain)
    assert blocks * grain >= total
    assert (blocks - 1) * grain < total


def test_div_up_exact_multiple():
    assert div_up(640, 32) * 32 == 640


def test_div_up_zero_total():
    assert div_up(0, 16) == 0


def test_div_up_zero_grain():
    with pytest.raises(ZeroDivisionError):
        div_up(10, 0)