"""Tests for mechsdf.cams: flat flank and three arc cam profiles."""

import math

import numpy as np
import numpy.testing as npt
import pytest

from mechsdf import (
    Box2,
    CamDesignNotImplementedError,
    CamProfile1,
    CamProfile2,
    ProfileParameterError,
    make_cam,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _p(*xy) -> np.ndarray:
    """Single 2-D point as shape ``(1, 2)``."""
    return np.array([list(xy)], dtype=float)


def _grid(n: int = 21, lo: float = -30.0, hi: float = 30.0) -> np.ndarray:
    lin = np.linspace(lo, hi, n)
    Y, X = np.meshgrid(lin, lin, indexing="ij")
    return np.stack([X, Y], axis=-1)


def _mirror_x(p: np.ndarray) -> np.ndarray:
    return p * np.array([-1.0, 1.0])


# ===========================================================================
# Flat flank cam
# ===========================================================================

class TestCamProfile1:
    D, RB, RN = 10.0, 15.0, 10.0

    @pytest.fixture
    def cam(self):
        return CamProfile1(self.D, self.RB, self.RN)

    def test_flank_endpoints_on_circles(self, cam):
        npt.assert_allclose(np.linalg.norm(cam.a), self.RB)
        npt.assert_allclose(np.linalg.norm(cam.b - np.array([0.0, self.D])), self.RN)

    def test_flank_tangent_to_both_circles(self, cam):
        npt.assert_allclose(np.dot(cam.a, cam.u), 0.0, atol=1e-12)
        npt.assert_allclose(np.dot(cam.b - np.array([0.0, self.D]), cam.u), 0.0, atol=1e-12)

    def test_flank_length(self, cam):
        npt.assert_allclose(cam.flank_length, np.linalg.norm(cam.b - cam.a))
        npt.assert_allclose(np.linalg.norm(cam.u), 1.0)

    def test_base_circle_is_zero(self, cam):
        for angle in (-np.pi / 2, -np.pi / 4, 0.0):
            p = _p(self.RB * np.cos(angle), self.RB * np.sin(angle))
            npt.assert_allclose(cam.sdf(p), [0.0], atol=1e-10)

    def test_nose_tip_is_zero(self, cam):
        npt.assert_allclose(cam.sdf(_p(0.0, self.D + self.RN)), [0.0], atol=1e-10)

    def test_inside_and_outside(self, cam):
        assert cam.sdf(_p(0.0, 0.0))[0] < 0
        assert cam.sdf(_p(0.0, self.D))[0] < 0
        npt.assert_allclose(cam.sdf(_p(0.0, -self.RB - 2.0)), [2.0], atol=1e-10)

    def test_flank_midpoint_offset(self, cam):
        n = np.array([cam.u[1], -cam.u[0]])
        mid = 0.5 * (cam.a + cam.b)
        for s in (-1.5, 0.0, 2.0):
            npt.assert_allclose(cam.sdf((mid + s * n)[None]), [s], atol=1e-10)

    @pytest.mark.parametrize("s", [-3.0, -0.5, 0.0, 0.5, 4.0])
    def test_continuous_at_base_end(self, cam, s):
        n = np.array([cam.u[1], -cam.u[0]])
        q = cam.a + s * n
        before = cam.sdf((q - 1e-9 * cam.u)[None])[0]
        after = cam.sdf((q + 1e-9 * cam.u)[None])[0]
        npt.assert_allclose(before, after, atol=1e-8)
        npt.assert_allclose(after, s, atol=1e-8)

    @pytest.mark.parametrize("s", [-3.0, -0.5, 0.0, 0.5, 4.0])
    def test_continuous_at_nose_end(self, cam, s):
        n = np.array([cam.u[1], -cam.u[0]])
        q = cam.b + s * n
        before = cam.sdf((q - 1e-9 * cam.u)[None])[0]
        after = cam.sdf((q + 1e-9 * cam.u)[None])[0]
        npt.assert_allclose(before, after, atol=1e-8)
        npt.assert_allclose(before, s, atol=1e-8)

    def test_mirror_symmetry(self, cam):
        p = _grid()
        npt.assert_allclose(cam.sdf(p), cam.sdf(_mirror_x(p)))

    def test_grid_shape(self, cam):
        assert cam.sdf(_grid()).shape == (21, 21)

    def test_bounding_box(self, cam):
        assert cam.bounding_box() == Box2((-self.RB, -self.RB), (self.RB, self.D + self.RN))

    def test_inside_points_within_bbox(self, cam):
        p = _grid(41)
        inside = p[cam.sdf(p) < 0]
        assert cam.bounding_box().contains(inside).all()

    def test_equal_radii_is_stadium(self):
        cam = CamProfile1(10.0, 5.0, 5.0)
        npt.assert_allclose(cam.sdf(_p(7.0, 5.0)), [2.0], atol=1e-12)
        npt.assert_allclose(cam.sdf(_p(-7.0, 5.0)), [2.0], atol=1e-12)

    def test_rejects_nonpositive(self):
        with pytest.raises(ProfileParameterError) as exc:
            CamProfile1(10.0, 0.0, 5.0)
        assert exc.value.parameter == "base_radius"

    def test_rejects_contained_circles(self):
        with pytest.raises(ProfileParameterError) as exc:
            CamProfile1(2.0, 15.0, 10.0)
        assert exc.value.parameter == "distance"


# ===========================================================================
# Three arc cam
# ===========================================================================

class TestCamProfile2:
    D, RB, RN, RF = 10.0, 15.0, 10.0, 40.0

    @pytest.fixture
    def cam(self):
        return CamProfile2(self.D, self.RB, self.RN, self.RF)

    def test_flank_center_left_of_axis(self, cam):
        assert cam.flank_center[0] < 0

    def test_flank_center_distances(self, cam):
        c = cam.flank_center
        npt.assert_allclose(np.linalg.norm(c), self.RF - self.RB)
        npt.assert_allclose(np.linalg.norm(c - np.array([0.0, self.D])), self.RF - self.RN)

    def test_theta_order(self, cam):
        assert -np.pi / 2 < cam.theta_base < cam.theta_nose < np.pi / 2

    def test_base_circle_is_zero(self, cam):
        npt.assert_allclose(cam.sdf(_p(0.0, -self.RB)), [0.0], atol=1e-10)

    def test_nose_tip_is_zero(self, cam):
        npt.assert_allclose(cam.sdf(_p(0.0, self.D + self.RN)), [0.0], atol=1e-10)

    def test_flank_arc_is_zero(self, cam):
        t = 0.5 * (cam.theta_base + cam.theta_nose)
        q = cam.flank_center + self.RF * np.array([np.cos(t), np.sin(t)])
        npt.assert_allclose(cam.sdf(q[None]), [0.0], atol=1e-10)

    @pytest.mark.parametrize("attr", ["theta_base", "theta_nose"])
    @pytest.mark.parametrize("s", [-2.0, 0.0, 1.5])
    def test_continuous_at_tangent_points(self, cam, attr, s):
        theta = getattr(cam, attr)
        values = []
        for t in (theta - 1e-9, theta + 1e-9):
            q = cam.flank_center + (self.RF + s) * np.array([np.cos(t), np.sin(t)])
            values.append(cam.sdf(q[None])[0])
        npt.assert_allclose(values[0], values[1], atol=1e-6)
        npt.assert_allclose(values[0], s, atol=1e-6)

    def test_inside_and_outside(self, cam):
        assert cam.sdf(_p(0.0, 0.0))[0] < 0
        assert cam.sdf(_p(20.0, 20.0))[0] > 0

    def test_mirror_symmetry(self, cam):
        p = _grid()
        npt.assert_allclose(cam.sdf(p), cam.sdf(_mirror_x(p)))

    def test_bounding_box(self, cam):
        assert cam.bounding_box() == Box2((-self.RB, -self.RB), (self.RB, self.D + self.RN))

    def test_rejects_small_flank_radius(self):
        with pytest.raises(ProfileParameterError) as exc:
            CamProfile2(self.D, self.RB, self.RN, 12.0)
        assert exc.value.parameter == "flank_radius"

    def test_rejects_untangentable_circles(self):
        with pytest.raises(ProfileParameterError) as exc:
            CamProfile2(2.0, self.RB, self.RN, self.RF)
        assert exc.value.parameter == "flank_radius"


# ===========================================================================
# make_cam
# ===========================================================================

class TestMakeCam:
    def test_flat_flank(self):
        cam = make_cam("flat_flank", lift=5.0, duration=2.0 * np.pi / 3.0, max_diameter=40.0)
        assert isinstance(cam, CamProfile1)
        npt.assert_allclose(cam.base_radius, 15.0)
        npt.assert_allclose(cam.nose_radius, 10.0)
        npt.assert_allclose(cam.distance, 10.0)

    def test_flat_flank_lift_and_diameter(self):
        cam = make_cam("flat_flank", lift=4.0, duration=2.5, max_diameter=30.0)
        npt.assert_allclose(cam.distance + cam.nose_radius - cam.base_radius, 4.0)
        npt.assert_allclose(cam.distance + cam.nose_radius, 15.0)
        # the follower leaves the base circle duration / 2 from the nose axis
        angle_from_axis = math.pi / 2 - math.atan2(cam.a[1], cam.a[0])
        npt.assert_allclose(angle_from_axis, 2.5 / 2)

    def test_short_duration_gives_no_nose(self):
        with pytest.raises(ProfileParameterError) as exc:
            make_cam("flat_flank", lift=5.0, duration=np.pi / 3.0, max_diameter=40.0)
        assert exc.value.parameter == "nose_radius"

    @pytest.mark.parametrize("lift", [20.0, 25.0])
    def test_lift_too_large(self, lift):
        with pytest.raises(ProfileParameterError) as exc:
            make_cam("flat_flank", lift=lift, duration=2.0, max_diameter=40.0)
        assert exc.value.parameter == "base_radius"

    @pytest.mark.parametrize(
        "kwargs, parameter",
        [
            (dict(lift=5.0, duration=2.0, max_diameter=0.0), "max_diameter"),
            (dict(lift=0.0, duration=2.0, max_diameter=40.0), "lift"),
            (dict(lift=-1.0, duration=2.0, max_diameter=40.0), "lift"),
            (dict(lift=5.0, duration=0.0, max_diameter=40.0), "duration"),
            (dict(lift=5.0, duration=np.pi, max_diameter=40.0), "duration"),
            (dict(lift=5.0, duration=4.0, max_diameter=40.0), "duration"),
        ],
    )
    def test_invalid_inputs(self, kwargs, parameter):
        with pytest.raises(ProfileParameterError) as exc:
            make_cam("flat_flank", **kwargs)
        assert exc.value.parameter == parameter

    def test_three_arc_not_implemented(self):
        with pytest.raises(CamDesignNotImplementedError) as exc:
            make_cam("three_arc", lift=5.0, duration=2.0, max_diameter=40.0)
        assert exc.value.parameter == "cam_type"
        assert isinstance(exc.value, NotImplementedError)
        assert isinstance(exc.value, ProfileParameterError)

    def test_unknown_cam_type(self):
        with pytest.raises(ProfileParameterError) as exc:
            make_cam("eccentric", lift=5.0, duration=2.0, max_diameter=40.0)
        assert exc.value.parameter == "cam_type"

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            make_cam("flat_flank", lift=5.0, duration=2.0, max_diameter=-1.0)
