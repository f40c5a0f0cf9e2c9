"""
Arc Length / Distance Solver.

The distance along a geodesic is related to the arc length σ on the
auxiliary sphere by

    s / b = (1 + A1) (σ + B1(σ)),   B1(σ) = Σ C1[l] sin 2lσ.

Given an arc (ARC_GIVEN) the end point follows directly. Given a distance
(DISTANCE_GIVEN) the relation is inverted with the reverted series C1'
and, for strongly flattened ellipsoids, polished with one Newton step.
Neither path iterates: the amount of work per element is fixed.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Dict

import numpy as np
from numpy.typing import NDArray

from common.constants import PhysicalConstants
from geodesic.angles import sincosd
from geodesic.auxiliary_sphere import AuxiliaryPoint
from geodesic.clenshaw import sin_cos_series
from geodesic.ellipsoid import Ellipsoid
from geodesic.series import SeriesTables, a1m1f, a3f, c1f, c1pf, c3f

NEWTON_FLATTENING_THRESHOLD = PhysicalConstants.NEWTON_FLATTENING_THRESHOLD


class SolveMode(Enum):
    """How the solver interprets its length input."""
    ARC_GIVEN = auto()
    DISTANCE_GIVEN = auto()


@dataclass
class SeriesState:
    """Series evaluations shared by every point of a geodesic.

    Attributes
    ----------
    A1m1 : ndarray
        A1 - 1.
    C1a, C1pa : ndarray
        C1 and C1' coefficients, shape (7, N).
    B11 : ndarray
        B1 at the start point.
    stau1, ctau1 : ndarray
        τ1 = σ1 + B11, the start point's scaled distance.
    C3a : ndarray
        C3 coefficients, shape (6, N).
    A3c : ndarray
        -f sin α0 A3(ε).
    B31 : ndarray
        C3 series at the start point.
    """
    A1m1: NDArray[np.float64]
    C1a: NDArray[np.float64]
    C1pa: NDArray[np.float64]
    B11: NDArray[np.float64]
    stau1: NDArray[np.float64]
    ctau1: NDArray[np.float64]
    C3a: NDArray[np.float64]
    A3c: NDArray[np.float64]
    B31: NDArray[np.float64]


@dataclass
class ArcState:
    """Arc on the auxiliary sphere between the start and end points.

    Attributes
    ----------
    sig12 : ndarray
        Arc length in radians.
    ssig12, csig12 : ndarray
        sin and cos of sig12.
    ssig2, csig2 : ndarray
        Arc length from the equator crossing to the end point.
    dn2 : ndarray
        sqrt(1 + k² sin²σ2).
    B12 : ndarray
        B1 at the end point.
    """
    sig12: NDArray[np.float64]
    ssig12: NDArray[np.float64]
    csig12: NDArray[np.float64]
    ssig2: NDArray[np.float64]
    csig2: NDArray[np.float64]
    dn2: NDArray[np.float64]
    B12: NDArray[np.float64]


def prepare_series(
    start: AuxiliaryPoint,
    ellipsoid: Ellipsoid,
    tables: SeriesTables
) -> SeriesState:
    """Evaluate the series quantities that depend only on the start state."""
    A1m1 = a1m1f(start.eps)
    C1a = c1f(start.eps)
    B11 = sin_cos_series(True, start.ssig1, start.csig1, C1a)
    s = np.sin(B11)
    c = np.cos(B11)
    # tau1 = sig1 + B11
    stau1 = start.ssig1 * c + start.csig1 * s
    ctau1 = start.csig1 * c - start.ssig1 * s

    C1pa = c1pf(start.eps)
    C3a = c3f(start.eps, tables)
    A3c = -ellipsoid.f * start.salp0 * a3f(start.eps, tables)
    B31 = sin_cos_series(True, start.ssig1, start.csig1, C3a)

    return SeriesState(
        A1m1=A1m1, C1a=C1a, C1pa=C1pa, B11=B11,
        stau1=stau1, ctau1=ctau1,
        C3a=C3a, A3c=A3c, B31=B31,
    )


def _advance(start: AuxiliaryPoint, ssig12, csig12):
    # sig2 = sig1 + sig12
    ssig2 = start.ssig1 * csig12 + start.csig1 * ssig12
    csig2 = start.csig1 * csig12 - start.ssig1 * ssig12
    return ssig2, csig2


def solve_arc(
    a12: NDArray[np.float64],
    start: AuxiliaryPoint,
    series: SeriesState,
    ellipsoid: Ellipsoid
) -> ArcState:
    """End of the arc when the arc length a12 (degrees) is given.

    sin and cos of the arc are exact at multiples of 90°, so an arc of
    0 or 180 degrees ends exactly on the meridian or the antipodal point
    of the auxiliary sphere.
    """
    sig12 = np.radians(a12)
    ssig12, csig12 = sincosd(a12)
    ssig2, csig2 = _advance(start, ssig12, csig12)
    B12 = sin_cos_series(True, ssig2, csig2, series.C1a)
    return ArcState(
        sig12=sig12, ssig12=ssig12, csig12=csig12,
        ssig2=ssig2, csig2=csig2,
        dn2=np.sqrt(1 + start.k2 * ssig2 ** 2),
        B12=B12,
    )


def solve_distance(
    s12: NDArray[np.float64],
    start: AuxiliaryPoint,
    series: SeriesState,
    ellipsoid: Ellipsoid
) -> ArcState:
    """End of the arc when the distance s12 (meters) is given.

    Parameters
    ----------
    s12 : ndarray
        Distance in meters; zero and negative values are valid (a negative
        distance walks the geodesic backwards).
    start : AuxiliaryPoint
        Start state.
    series : SeriesState
        Start-point series evaluations.
    ellipsoid : Ellipsoid
        The ellipsoid.

    Returns
    -------
    ArcState
        The arc whose length on the ellipsoid is s12.

    Notes
    -----
    τ12 = s12 / (b (1 + A1)) is converted to σ12 with the reverted series
    C1'. The reversion is exact to the series order only when ε is small;
    for |f| > 0.01 the implied distance is recomputed from C1 and the
    residual removed with a single Newton step, ds/dσ = b (1 + A1) dn2.
    """
    b = ellipsoid.b
    tau12 = s12 / (b * (1 + series.A1m1))
    s = np.sin(tau12)
    c = np.cos(tau12)
    # tau2 = tau1 + tau12
    B12 = -sin_cos_series(True,
                          series.stau1 * c + series.ctau1 * s,
                          series.ctau1 * c - series.stau1 * s,
                          series.C1pa)
    sig12 = tau12 - (B12 - series.B11)
    ssig12 = np.sin(sig12)
    csig12 = np.cos(sig12)

    if abs(ellipsoid.f) > NEWTON_FLATTENING_THRESHOLD:
        ssig2, csig2 = _advance(start, ssig12, csig12)
        B12 = sin_cos_series(True, ssig2, csig2, series.C1a)
        serr = (1 + series.A1m1) * (sig12 + (B12 - series.B11)) - s12 / b
        sig12 = sig12 - serr / np.sqrt(1 + start.k2 * ssig2 ** 2)
        ssig12 = np.sin(sig12)
        csig12 = np.cos(sig12)

    ssig2, csig2 = _advance(start, ssig12, csig12)
    if abs(ellipsoid.f) > NEWTON_FLATTENING_THRESHOLD:
        B12 = sin_cos_series(True, ssig2, csig2, series.C1a)

    return ArcState(
        sig12=sig12, ssig12=ssig12, csig12=csig12,
        ssig2=ssig2, csig2=csig2,
        dn2=np.sqrt(1 + start.k2 * ssig2 ** 2),
        B12=B12,
    )


_SOLVERS: Dict[SolveMode, Callable[..., ArcState]] = {
    SolveMode.ARC_GIVEN: solve_arc,
    SolveMode.DISTANCE_GIVEN: solve_distance,
}


def determine_arc(
    mode: SolveMode,
    value: NDArray[np.float64],
    start: AuxiliaryPoint,
    series: SeriesState,
    ellipsoid: Ellipsoid
) -> ArcState:
    """Dispatch to the arc- or distance-mode solver."""
    return _SOLVERS[mode](value, start, series, ellipsoid)


def arc_counterpart(
    mode: SolveMode,
    arc: ArcState,
    series: SeriesState,
    ellipsoid: Ellipsoid
) -> NDArray[np.float64]:
    """The length not given as input.

    The arc length in degrees for DISTANCE_GIVEN; the distance in meters
    for ARC_GIVEN.
    """
    if mode is SolveMode.ARC_GIVEN:
        AB1 = distance_scaled_B1(arc, series)
        return ellipsoid.b * ((1 + series.A1m1) * arc.sig12 + AB1)
    return np.degrees(arc.sig12)


def distance_scaled_B1(arc: ArcState, series: SeriesState) -> NDArray[np.float64]:
    """(1 + A1) (B12 - B11), shared by the distance and reduced length."""
    return (1 + series.A1m1) * (arc.B12 - series.B11)
