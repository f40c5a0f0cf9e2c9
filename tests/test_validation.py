"""Tests for the geodesic consistency checker."""

import numpy as np
import pytest

from geodesic.ellipsoid import Ellipsoid
from validation.geodesic_checks import (
    GeodesicConsistencyChecker,
    GeodesicConsistencyError,
    ValidationResult,
)


class TestGeodesicConsistencyChecker:
    """Test suite for GeodesicConsistencyChecker."""

    def test_check_all_passes(self, random_geodesics):
        checker = GeodesicConsistencyChecker()
        results = checker.check_all(*random_geodesics)
        assert [r.test_name for r in results] == [
            "round_trip", "clairaut_invariant", "arc_distance_consistency", "reference_agreement",
        ]
        for result in results:
            assert isinstance(result, ValidationResult)
            assert result.passed, f"{result.test_name}: {result.message}"

    def test_reference_includes_poles(self):
        """Test pole starts are compared on latitude only."""
        checker = GeodesicConsistencyChecker()
        result = checker.check_against_reference([90.0, -90.0, 45.0], 0.0, 90.0, 1e6)
        assert result.passed, result.message
        assert result.details['max_lon_error_deg'] < 1e-9

    def test_failure_is_reported(self):
        checker = GeodesicConsistencyChecker(log_violations=False)
        result = checker.check_round_trip(10.0, 20.0, 30.0, 1e6, tolerance_deg=-1.0)
        assert not result.passed
        assert result.details['tolerance_deg'] == -1.0

    def test_strict_mode_raises(self):
        checker = GeodesicConsistencyChecker(strict_mode=True, log_violations=False)
        with pytest.raises(GeodesicConsistencyError, match="round_trip"):
            checker.check_round_trip(10.0, 20.0, 30.0, 1e6, tolerance_deg=-1.0)

    def test_clairaut_on_sphere(self, sphere):
        checker = GeodesicConsistencyChecker(ellipsoid=sphere)
        result = checker.check_clairaut_invariant(-45.0, 10.0, 120.0, np.linspace(0.0, 2e7, 9))
        assert result.passed, result.message
        assert result.details['sin_alpha0'] == pytest.approx(np.sin(np.radians(120.0)) * np.cos(np.radians(45.0)))

    def test_prolate_consistency(self, random_geodesics):
        ellipsoid = Ellipsoid.from_flattening(6378137.0, -0.005)
        checker = GeodesicConsistencyChecker(ellipsoid=ellipsoid)
        assert checker.check_round_trip(*random_geodesics).passed
        assert checker.check_arc_distance_consistency(*random_geodesics).passed

    def test_clairaut_on_batch(self, random_geodesics):
        """Test the invariant is checked per element for independent geodesics."""
        lat1, lon1, azi1, s12 = random_geodesics
        result = GeodesicConsistencyChecker().check_clairaut_invariant(lat1, lon1, azi1, s12)
        assert result.passed, result.message
        assert len(result.details['sin_alpha0']) == len(lat1)

    def test_clairaut_detects_wrong_azimuth(self):
        """Test a mismatched start azimuth is reported per element."""
        checker = GeodesicConsistencyChecker(log_violations=False)
        result = checker.check_clairaut_invariant([10.0, 20.0], 0.0, [30.0, 40.0], 1e6, tolerance=-1.0)
        assert not result.passed
