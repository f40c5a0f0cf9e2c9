"""
Mapping Between the Ellipsoid and the Auxiliary Sphere.

A geodesic on the ellipsoid corresponds to a great circle on a unit
sphere when latitudes are replaced by reduced latitudes β,
tan β = (1 - f) tan φ. On that sphere the geodesic is parametrised by the
arc length σ from its northward equator crossing and the spherical
longitude ω; the azimuth α0 at the crossing is the same everywhere along
the geodesic (Clairaut's relation, sin α0 = sin α cos β).

Angles are carried as (sin, cos) pairs rather than as angles so that the
exact zeros produced by `geodesic.angles.sincosd` survive.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np
from numpy.typing import NDArray

from common.constants import PhysicalConstants
from geodesic.angles import atan2d, normalize, sincosd
from geodesic.clenshaw import sin_cos_series
from geodesic.ellipsoid import Ellipsoid
from geodesic.series import expansion_parameter

TINY = PhysicalConstants.TINY


def normalize_sincos(
    sinx: NDArray[np.float64],
    cosx: NDArray[np.float64]
) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Scale (sin, cos) pairs to unit length."""
    r = np.hypot(sinx, cosx)
    return sinx / r, cosx / r


@dataclass
class AuxiliaryPoint:
    """Start of a geodesic on the auxiliary sphere.

    Attributes
    ----------
    salp1, calp1 : ndarray
        Azimuth at the start point.
    salp0, calp0 : ndarray
        Azimuth at the equator crossing; constant along the geodesic.
    sbet1, cbet1 : ndarray
        Reduced latitude of the start point.
    ssig1, csig1 : ndarray
        Arc length from the equator crossing to the start point.
    somg1, comg1 : ndarray
        Spherical longitude of the start point (not normalized; only
        used through atan2).
    dn1 : ndarray
        sqrt(1 + e'² sin²β1).
    k2 : ndarray
        e'² cos²α0.
    eps : ndarray
        Expansion parameter ε derived from k2.
    """
    salp1: NDArray[np.float64]
    calp1: NDArray[np.float64]
    salp0: NDArray[np.float64]
    calp0: NDArray[np.float64]
    sbet1: NDArray[np.float64]
    cbet1: NDArray[np.float64]
    ssig1: NDArray[np.float64]
    csig1: NDArray[np.float64]
    somg1: NDArray[np.float64]
    comg1: NDArray[np.float64]
    dn1: NDArray[np.float64]
    k2: NDArray[np.float64]
    eps: NDArray[np.float64]


@dataclass
class EndPoint:
    """End of a geodesic mapped back to the ellipsoid.

    Attributes
    ----------
    lat2 : ndarray
        Latitude in degrees.
    lon12 : ndarray
        Longitude difference from the start point in degrees, (-180, 180].
    azi2 : ndarray
        Forward azimuth in degrees.
    salp2, calp2 : ndarray
        Forward azimuth as a (sin, cos) pair.
    """
    lat2: NDArray[np.float64]
    lon12: NDArray[np.float64]
    azi2: NDArray[np.float64]
    salp2: NDArray[np.float64]
    calp2: NDArray[np.float64]


def to_sphere(
    lat1: NDArray[np.float64],
    azi1: NDArray[np.float64],
    ellipsoid: Ellipsoid
) -> AuxiliaryPoint:
    """Map a start point and azimuth onto the auxiliary sphere.

    Parameters
    ----------
    lat1 : ndarray
        Latitude in degrees, [-90, 90].
    azi1 : ndarray
        Azimuth in degrees, normalized, pole-canonicalized and rounded.
    ellipsoid : Ellipsoid
        The ellipsoid.

    Returns
    -------
    AuxiliaryPoint
        Start state on the sphere.

    Notes
    -----
    At a pole cos β1 is replaced by a tiny positive number so the azimuth
    stays meaningful. For a start point on the equator heading due north
    or south both sin σ1 and cos σ1 would vanish; σ1 is then taken as 0.
    """
    salp1, calp1 = sincosd(azi1)

    sbet1, cbet1 = sincosd(lat1)
    sbet1 = ellipsoid.f1 * sbet1
    cbet1 = np.where(np.abs(lat1) == 90.0, TINY, cbet1)
    sbet1, cbet1 = normalize_sincos(sbet1, cbet1)
    dn1 = np.sqrt(1 + ellipsoid.ep2 * sbet1 ** 2)

    # Clairaut's invariant
    salp0 = salp1 * cbet1
    calp0 = np.hypot(calp1, salp1 * sbet1)

    ssig1 = sbet1
    somg1 = salp0 * sbet1
    csig1 = np.where((sbet1 == 0) & (calp1 == 0), 1.0, cbet1 * calp1)
    comg1 = csig1
    ssig1, csig1 = normalize_sincos(ssig1, csig1)

    k2 = calp0 ** 2 * ellipsoid.ep2
    return AuxiliaryPoint(
        salp1=salp1, calp1=calp1,
        salp0=salp0, calp0=calp0,
        sbet1=sbet1, cbet1=cbet1,
        ssig1=ssig1, csig1=csig1,
        somg1=somg1, comg1=comg1,
        dn1=dn1, k2=k2,
        eps=expansion_parameter(k2),
    )


def to_ellipsoid(
    start: AuxiliaryPoint,
    ssig2: NDArray[np.float64],
    csig2: NDArray[np.float64],
    sig12: NDArray[np.float64],
    A3c: NDArray[np.float64],
    C3a: NDArray[np.float64],
    B31: NDArray[np.float64],
    ellipsoid: Ellipsoid
) -> EndPoint:
    """Map the end of the arc back to the ellipsoid.

    Parameters
    ----------
    start : AuxiliaryPoint
        Start state.
    ssig2, csig2 : ndarray
        Arc length from the equator crossing to the end point.
    sig12 : ndarray
        Arc length between the points in radians.
    A3c : ndarray
        -f sin α0 A3(ε), scale of the longitude correction.
    C3a : ndarray
        C3 coefficients for each element.
    B31 : ndarray
        C3 series evaluated at the start point.
    ellipsoid : Ellipsoid
        The ellipsoid.

    Returns
    -------
    EndPoint
        Latitude, longitude difference and azimuth at the end point.
    """
    sbet2 = start.calp0 * ssig2
    cbet2 = np.hypot(start.salp0, start.calp0 * csig2)
    # Geodesic ends at a pole
    cbet2 = np.where(cbet2 == 0, TINY, cbet2)

    somg2 = start.salp0 * ssig2
    comg2 = csig2
    salp2 = start.salp0
    calp2 = start.calp0 * csig2

    omg12 = np.arctan2(somg2 * start.comg1 - comg2 * start.somg1,
                       comg2 * start.comg1 + somg2 * start.somg1)
    # First-order ellipsoidal correction to the spherical longitude
    lam12 = omg12 + A3c * (sig12 + (sin_cos_series(True, ssig2, csig2, C3a) - B31))
    lon12 = normalize(np.degrees(lam12))

    lat2 = atan2d(sbet2, ellipsoid.f1 * cbet2)
    azi2 = 0 - atan2d(-salp2, calp2)

    return EndPoint(lat2=lat2, lon12=lon12, azi2=azi2, salp2=salp2, calp2=calp2)
