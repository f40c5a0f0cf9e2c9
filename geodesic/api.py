"""
Convenience Wrappers Around the Direct Solver.

`geodesic.direct.solve` works in degrees and returns every output. The
helpers here cover the common narrower uses: a radians interface that
returns the back azimuth, points spaced along one geodesic, and stepping
a `GeoCoordinate`.
"""

from typing import Tuple

import numpy as np
from numpy.typing import ArrayLike, NDArray

from common.types import GeoCoordinate
from common.units import validate_units
from geodesic.angles import normalize
from geodesic.direct import DirectConfig, solve
from geodesic.ellipsoid import WGS84, Ellipsoid
from geodesic.outputs import OutputMask


@validate_units({'lat1_rad': 'radian', 'lon1_rad': 'radian',
                 'azimuth_rad': 'radian', 'distance_m': 'meter'})
def geodesic_direct(
    lat1_rad: ArrayLike,
    lon1_rad: ArrayLike,
    azimuth_rad: ArrayLike,
    distance_m: ArrayLike,
    ellipsoid: Ellipsoid = WGS84
) -> Tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]]:
    """Solve the direct geodesic problem in radians.

    Parameters
    ----------
    lat1_rad, lon1_rad : array_like
        Starting point in radians.
    azimuth_rad : array_like
        Forward azimuth in radians (clockwise from north).
    distance_m : array_like
        Distance to travel in meters.
    ellipsoid : Ellipsoid
        Reference ellipsoid (default: WGS84).

    Returns
    -------
    Tuple[ndarray, ndarray, ndarray]
        (lat2_rad, lon2_rad, back_azimuth_rad), the back azimuth in
        [0, 2π).

    Examples
    --------
    >>> # Travel 1000 km due east from the equator
    >>> import numpy as np
    >>> lat, lon, az = geodesic_direct(0.0, 0.0, np.pi/2, 1_000_000)
    >>> print(f"{np.degrees(lat):.4f} {np.degrees(lon):.4f}")
    0.0000 8.9832
    """
    config = DirectConfig(ellipsoid=ellipsoid, outputs=OutputMask.STANDARD)
    result = solve(np.degrees(lat1_rad), np.degrees(lon1_rad), distance_m,
                   np.degrees(azimuth_rad), config)

    back_azimuth_rad = np.radians(normalize(result.azi2 + 180.0)) % (2 * np.pi)
    return np.radians(result.lat2), np.radians(result.lon2), back_azimuth_rad


def points_along_geodesic(
    lat1: float,
    lon1: float,
    azi1: float,
    distances: ArrayLike,
    ellipsoid: Ellipsoid = WGS84
) -> Tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]]:
    """Positions at several distances along a single geodesic.

    Parameters
    ----------
    lat1, lon1 : float
        Starting point in degrees.
    azi1 : float
        Azimuth at the start in degrees.
    distances : array_like
        Distances from the start in meters.
    ellipsoid : Ellipsoid
        Reference ellipsoid (default: WGS84).

    Returns
    -------
    Tuple[ndarray, ndarray, ndarray]
        (lats, lons, azimuths) in degrees, shaped like `distances`.
    """
    config = DirectConfig(ellipsoid=ellipsoid, outputs=OutputMask.STANDARD)
    result = solve(lat1, lon1, distances, azi1, config)
    return result.lat2, result.lon2, result.azi2


def destination(
    origin: GeoCoordinate,
    azimuth_rad: float,
    distance_m: float,
    ellipsoid: Ellipsoid = WGS84
) -> GeoCoordinate:
    """Point reached from `origin` after `distance_m` along `azimuth_rad`."""
    lat2, lon2, _ = geodesic_direct(origin.latitude, origin.longitude,
                                    azimuth_rad, distance_m, ellipsoid)
    return GeoCoordinate(latitude=float(lat2), longitude=float(lon2))
