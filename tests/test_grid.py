"""Tests for mechsdf grid utilities."""

import os
import tempfile

import numpy as np
import numpy.testing as npt

from mechsdf import (
    Circle2D,
    GearRackProfile,
    make_cam,
    profile_bounds,
    sample_levelset_2d,
    save_npy,
)


class TestSampleLevelset2D:
    def test_output_shape(self):
        phi = sample_levelset_2d(Circle2D(0.3), ((-1, 1), (-1, 1)), (32, 32))
        assert phi.shape == (32, 32)

    def test_non_square(self):
        phi = sample_levelset_2d(Circle2D(0.3), ((-1, 1), (-1, 1)), (16, 32))
        assert phi.shape == (32, 16)

    def test_cell_centred_at_origin(self):
        # With odd resolution, the centre cell is very close to (0, 0)
        n = 65
        phi = sample_levelset_2d(Circle2D(0.3), ((-1, 1), (-1, 1)), (n, n))
        npt.assert_allclose(phi[32, 32], -0.3, atol=0.02)

    def test_inside_negative_outside_positive(self):
        phi = sample_levelset_2d(Circle2D(0.3), ((-1, 1), (-1, 1)), (64, 64))
        assert (phi < 0).any()
        assert (phi > 0).any()

    def test_default_bounds_from_bounding_box(self):
        cam = make_cam("flat_flank", lift=5.0, duration=2.0, max_diameter=40.0)
        phi = sample_levelset_2d(cam, resolution=(48, 40))
        assert phi.shape == (40, 48)
        # the padded box leaves a positive rim all round
        assert (phi[0, :] > 0).all() and (phi[-1, :] > 0).all()
        assert (phi[:, 0] > 0).all() and (phi[:, -1] > 0).all()
        assert (phi < 0).any()

    def test_rack_rows(self):
        rack = GearRackProfile(6.0, 2.0, base_height=3.0)
        phi = sample_levelset_2d(rack, resolution=(120, 60))
        assert np.isfinite(phi).all()
        assert (phi < 0).any()


class TestProfileBounds:
    def test_pads_circle(self):
        (x0, x1), (y0, y1) = profile_bounds(Circle2D(1.0), margin=0.1)
        npt.assert_allclose([x0, x1, y0, y1], [-1.2, 1.2, -1.2, 1.2])

    def test_zero_margin_is_box(self):
        cam = make_cam("flat_flank", lift=5.0, duration=2.0, max_diameter=40.0)
        box = cam.bounding_box()
        assert profile_bounds(cam, margin=0.0) == ((box.min[0], box.max[0]), (box.min[1], box.max[1]))


class TestSaveNpy:
    def test_roundtrip(self):
        phi = sample_levelset_2d(Circle2D(0.3), ((-1, 1), (-1, 1)), (8, 8))
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "nested", "phi.npy")
            save_npy(path, phi)
            npt.assert_array_equal(np.load(path), phi)
