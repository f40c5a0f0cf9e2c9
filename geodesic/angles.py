"""
Angle Normalization for the Direct Geodesic Solver.

Every function here is element-wise over numpy arrays and works in
degrees. Downstream branch decisions (equatorial geodesics, meridians,
poles) test trigonometric values for exact zero, so the helpers in this
module are careful to produce exact 0 and ±1 at multiples of 90°.
"""

from enum import Enum, auto
from typing import Callable, Dict, Tuple

import numpy as np
from numpy.typing import ArrayLike, NDArray

from common.constants import PhysicalConstants


# Angles closer than this to a multiple of 90° are snapped onto it
_CARDINAL_TOLERANCE = 180.0 * PhysicalConstants.MACHINE_EPSILON


def normalize(angle: ArrayLike) -> NDArray[np.float64]:
    """Reduce angles to the range (-180, 180].

    Parameters
    ----------
    angle : array_like
        Angles in degrees, any real value.

    Returns
    -------
    ndarray
        Equivalent angles in (-180, 180]. The reduction is exact.

    Examples
    --------
    >>> normalize([-180.0, 190.0, 540.0])
    array([ 180., -170.,  180.])
    """
    x = np.asarray(angle, dtype=np.float64)
    with np.errstate(invalid='ignore'):
        y = np.fmod(x, 360.0)
    return np.where(y <= -180.0, y + 360.0, np.where(y > 180.0, y - 360.0, y))


def round_angle(angle: ArrayLike) -> NDArray[np.float64]:
    """Remove round-off noise from angles before they are used in trigonometry.

    Values within 180·eps of a multiple of 90° are snapped onto it. Small
    values are coarsened to a granularity of about 1e-17 so that
    underflowing bits vanish and tiny angles become exactly zero.

    Parameters
    ----------
    angle : array_like
        Angles in degrees, already normalized.

    Returns
    -------
    ndarray
        Rounded angles in degrees.
    """
    x = np.asarray(angle, dtype=np.float64)
    z = 1.0 / 16.0
    y = np.abs(x)
    y = np.where(y < z, z - (z - y), y)
    y = np.where(x == 0, x, np.copysign(y, x))

    cardinal = 90.0 * np.round(x / 90.0)
    return np.where(np.abs(x - cardinal) <= _CARDINAL_TOLERANCE, cardinal, y)


def sincosd(angle: ArrayLike) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Sine and cosine of angles given in degrees.

    The argument is reduced to [-45, 45] before converting to radians, so
    multiples of 90° give exact 0 and ±1 rather than a residual of order
    1e-16.

    Parameters
    ----------
    angle : array_like
        Angles in degrees.

    Returns
    -------
    Tuple[ndarray, ndarray]
        (sin, cos) of the angles.
    """
    x = np.asarray(angle, dtype=np.float64)
    with np.errstate(invalid='ignore'):
        r = np.fmod(x, 360.0)
    q = np.where(np.isnan(r), 0.0, np.round(r / 90.0))
    r = np.radians(r - 90.0 * q)
    s = np.sin(r)
    c = np.cos(r)

    quadrant = q.astype(np.int64) % 4
    sinx = np.select([quadrant == 1, quadrant == 2, quadrant == 3], [c, -s, -c], s)
    cosx = np.select([quadrant == 1, quadrant == 2, quadrant == 3], [-s, -c, s], c)
    # Keep the sign of an input zero, otherwise return +0 for exact zeros
    sinx = np.where(x == 0, x, sinx + 0.0)
    return sinx, cosx + 0.0


def atan2d(y: ArrayLike, x: ArrayLike) -> NDArray[np.float64]:
    """Two-argument arctangent in degrees."""
    return np.degrees(np.arctan2(y, x))


class PoleCase(Enum):
    """Where a start point sits with respect to the poles."""
    REGULAR = auto()
    NORTH = auto()
    SOUTH = auto()


def classify_pole(lat1: ArrayLike) -> Dict[PoleCase, NDArray[np.bool_]]:
    """Partition start latitudes by pole case.

    Returns
    -------
    dict
        Boolean mask per PoleCase. The masks are disjoint and cover every
        element.
    """
    lat1 = np.asarray(lat1, dtype=np.float64)
    north = lat1 == 90.0
    south = lat1 == -90.0
    return {
        PoleCase.REGULAR: ~(north | south),
        PoleCase.NORTH: north,
        PoleCase.SOUTH: south,
    }


def _north_pole(lon1: NDArray[np.float64], azi1: NDArray[np.float64]):
    # A pole has no longitude of its own; fold the azimuth into it
    lon1 = lon1 + np.where(lon1 < 1.0, 180.0, -180.0)
    lon1 = normalize(lon1 - azi1)
    return lon1, np.full_like(azi1, -180.0)


def _south_pole(lon1: NDArray[np.float64], azi1: NDArray[np.float64]):
    lon1 = normalize(lon1 + azi1)
    return lon1, np.zeros_like(azi1)


def _regular(lon1: NDArray[np.float64], azi1: NDArray[np.float64]):
    return lon1, azi1


_POLE_HANDLERS: Dict[PoleCase, Callable] = {
    PoleCase.REGULAR: _regular,
    PoleCase.NORTH: _north_pole,
    PoleCase.SOUTH: _south_pole,
}


def canonicalize_pole(
    lat1: ArrayLike,
    lon1: ArrayLike,
    azi1: ArrayLike
) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Redefine longitude and azimuth for start points at a pole.

    At the north pole the outgoing azimuth is absorbed into the longitude
    and the azimuth becomes -180 (due south along that meridian). At the
    south pole the azimuth becomes 0. Other points are unchanged.

    Parameters
    ----------
    lat1, lon1, azi1 : array_like
        Equal-shaped 1-d arrays in degrees; lon1 and azi1 normalized.

    Returns
    -------
    Tuple[ndarray, ndarray]
        (lon1, azi1) after canonicalization.
    """
    lon1 = np.array(lon1, dtype=np.float64)
    azi1 = np.array(azi1, dtype=np.float64)
    for case, mask in classify_pole(lat1).items():
        if np.any(mask):
            lon1[mask], azi1[mask] = _POLE_HANDLERS[case](lon1[mask], azi1[mask])
    return lon1, azi1
