"""Unit tests for angle normalization."""

import numpy as np
import pytest

from geodesic.angles import (
    PoleCase,
    canonicalize_pole,
    classify_pole,
    normalize,
    round_angle,
    sincosd,
)


class TestNormalize:
    """Test suite for normalize."""

    def test_range_is_half_open(self):
        """Test -180 maps to +180 and 180 stays."""
        np.testing.assert_array_equal(normalize([-180.0, 180.0]), [180.0, 180.0])

    def test_wraps_large_angles(self):
        """Test angles outside one turn are reduced exactly."""
        result = normalize([190.0, -190.0, 540.0, 725.5, -725.5, 360.0])
        np.testing.assert_array_equal(result, [-170.0, 170.0, 180.0, 5.5, -5.5, 0.0])

    def test_in_range_unchanged(self):
        """Test values already in range are untouched."""
        values = np.array([-179.5, -45.0, 0.0, 33.3, 179.999])
        np.testing.assert_array_equal(normalize(values), values)

    def test_preserves_shape(self):
        """Test element-wise behavior on 2-d input."""
        values = np.array([[370.0, -370.0], [0.0, 90.0]])
        assert normalize(values).shape == (2, 2)


class TestRoundAngle:
    """Test suite for round_angle."""

    def test_snaps_near_cardinal(self):
        """Test values within round-off of a multiple of 90 snap to it."""
        result = round_angle([90.0 + 1e-14, -90.0 - 1e-14, 180.0 - 1e-14])
        np.testing.assert_array_equal(result, [90.0, -90.0, 180.0])

    def test_tiny_values_become_zero(self):
        """Test underflowing angles become exactly zero."""
        result = round_angle([1e-20, -1e-20])
        np.testing.assert_array_equal(result, [0.0, 0.0])

    def test_regular_values_unchanged(self):
        """Test ordinary azimuths pass through."""
        values = np.array([30.0, -123.456, 89.9])
        np.testing.assert_array_equal(round_angle(values), values)


class TestSinCosD:
    """Test suite for sincosd."""

    def test_exact_at_cardinals(self):
        """Test multiples of 90 give exact zeros and ones."""
        s, c = sincosd([0.0, 90.0, 180.0, 270.0, -90.0, -180.0, 360.0])
        np.testing.assert_array_equal(s, [0.0, 1.0, 0.0, -1.0, -1.0, 0.0, 0.0])
        np.testing.assert_array_equal(c, [1.0, 0.0, -1.0, 0.0, 0.0, -1.0, 1.0])

    def test_matches_numpy(self):
        """Test general angles agree with numpy trig."""
        angles = np.linspace(-400.0, 400.0, 101)
        s, c = sincosd(angles)
        np.testing.assert_allclose(s, np.sin(np.radians(angles)), atol=1e-15)
        np.testing.assert_allclose(c, np.cos(np.radians(angles)), atol=1e-15)

    def test_unit_norm(self):
        """Test sin² + cos² = 1."""
        s, c = sincosd(np.array([12.3, 45.0, 135.0, -77.7]))
        np.testing.assert_allclose(s ** 2 + c ** 2, 1.0, rtol=1e-15)


class TestPoleHandling:
    """Test suite for pole classification and canonicalization."""

    def test_classify_masks_are_disjoint(self):
        """Test every element falls in exactly one case."""
        lat = np.array([90.0, -90.0, 0.0, 45.0, 89.999])
        masks = classify_pole(lat)
        total = sum(mask.astype(int) for mask in masks.values())
        np.testing.assert_array_equal(total, 1)
        np.testing.assert_array_equal(masks[PoleCase.NORTH], [True, False, False, False, False])
        np.testing.assert_array_equal(masks[PoleCase.SOUTH], [False, True, False, False, False])

    def test_north_pole(self):
        """Test the azimuth is folded into the longitude at the north pole."""
        lon1, azi1 = canonicalize_pole(np.array([90.0, 90.0]),
                                       np.array([0.0, 10.0]),
                                       np.array([90.0, 90.0]))
        np.testing.assert_array_equal(lon1, [90.0, 100.0])
        np.testing.assert_array_equal(azi1, [-180.0, -180.0])

    def test_south_pole(self):
        """Test the azimuth is folded into the longitude at the south pole."""
        lon1, azi1 = canonicalize_pole(np.array([-90.0]), np.array([10.0]), np.array([30.0]))
        np.testing.assert_array_equal(lon1, [40.0])
        np.testing.assert_array_equal(azi1, [0.0])

    def test_regular_points_unchanged(self):
        """Test points away from the poles keep their longitude and azimuth."""
        lat = np.array([0.0, 45.0, -89.0])
        lon = np.array([10.0, -20.0, 170.0])
        azi = np.array([30.0, -150.0, 90.0])
        lon1, azi1 = canonicalize_pole(lat, lon, azi)
        np.testing.assert_array_equal(lon1, lon)
        np.testing.assert_array_equal(azi1, azi)

    def test_inputs_not_modified(self):
        """Test the caller's arrays are left alone."""
        lon = np.array([0.0])
        azi = np.array([90.0])
        canonicalize_pole(np.array([90.0]), lon, azi)
        assert lon[0] == pytest.approx(0.0)
        assert azi[0] == pytest.approx(90.0)
