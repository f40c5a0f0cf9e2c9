"""Tests for the radians and coordinate wrappers."""

import numpy as np
import pytest

from common.types import GeoCoordinate
from common.units import Q_
from geodesic.api import destination, geodesic_direct, points_along_geodesic
from geodesic.direct import solve


class TestGeodesicDirect:
    """Test suite for geodesic_direct."""

    def test_east_along_equator(self):
        lat, lon, back = geodesic_direct(0.0, 0.0, np.pi / 2, 1_000_000.0)
        assert float(lat) == 0.0
        assert np.degrees(float(lon)) == pytest.approx(8.983152841195214, rel=1e-12)
        assert float(back) == pytest.approx(3 * np.pi / 2, abs=1e-12)

    def test_matches_solver(self):
        lat, lon, back = geodesic_direct(np.radians(40.0), 0.0, np.radians(30.0), 1e7)
        result = solve(40.0, 0.0, 1e7, 30.0)
        assert np.degrees(float(lat)) == pytest.approx(float(result.lat2), abs=1e-12)
        assert np.degrees(float(lon)) == pytest.approx(float(result.lon2), abs=1e-12)
        assert np.degrees(float(back)) == pytest.approx(float(result.azi2) + 180.0, abs=1e-10)

    def test_back_azimuth_range(self):
        azimuths = np.linspace(-np.pi, np.pi, 17)
        _, _, back = geodesic_direct(0.3, 0.0, azimuths, 5e5)
        assert np.all(back >= 0.0)
        assert np.all(back < 2 * np.pi)

    def test_quantities(self):
        lat, lon, _ = geodesic_direct(Q_(40.0, 'degree'), Q_(0.0, 'degree'),
                                      Q_(30.0, 'degree'), Q_(10_000, 'km'))
        assert np.degrees(float(lat)) == pytest.approx(41.79331020506, abs=1e-10)

    def test_incompatible_units(self):
        with pytest.raises(ValueError, match="distance_m"):
            geodesic_direct(0.0, 0.0, 0.0, Q_(1.0, 'degree'))


class TestPointsAlongGeodesic:
    """Test suite for points_along_geodesic."""

    def test_shape_and_start(self):
        distances = np.linspace(0.0, 2e6, 11)
        lats, lons, azis = points_along_geodesic(25.0, -80.0, 45.0, distances)
        assert lats.shape == lons.shape == azis.shape == (11,)
        assert float(lats[0]) == pytest.approx(25.0, abs=1e-12)
        assert float(lons[0]) == pytest.approx(-80.0, abs=1e-12)

    def test_latitude_increases_heading_north_east(self):
        lats, _, _ = points_along_geodesic(0.0, 0.0, 45.0, np.linspace(0.0, 3e6, 7))
        assert np.all(np.diff(lats) > 0)


class TestDestination:
    """Test suite for destination."""

    def test_returns_coordinate(self):
        origin = GeoCoordinate.from_degrees(25.7617, -80.1918)
        end = destination(origin, np.radians(90.0), 100_000.0)
        assert isinstance(end, GeoCoordinate)
        lat_deg, lon_deg = end.to_degrees()
        result = solve(25.7617, -80.1918, 100_000.0, 90.0)
        assert lat_deg == pytest.approx(float(result.lat2), abs=1e-10)
        assert lon_deg == pytest.approx(float(result.lon2), abs=1e-10)

    def test_zero_distance(self):
        origin = GeoCoordinate.from_degrees(-10.0, 120.0)
        end = destination(origin, 1.0, 0.0)
        assert end.latitude == pytest.approx(origin.latitude, abs=1e-14)
        assert end.longitude == pytest.approx(origin.longitude, abs=1e-14)
