"""
Auxiliary Outputs of the Direct Problem.

Besides the end point the solver can report

* the reduced length m12 and the geodesic scales M12, M21, which describe
  how neighbouring geodesics separate, and
* the area S12 between the geodesic, the equator and the meridians
  through its end points.

Each costs extra series evaluations, so the caller selects them with an
`OutputMask`. Nothing here is computed unless requested.
"""

from dataclasses import dataclass
from enum import Enum, IntFlag, auto
from typing import Callable, Dict, Tuple

import numpy as np
from numpy.typing import NDArray

from common.constants import PhysicalConstants
from geodesic.auxiliary_sphere import AuxiliaryPoint, EndPoint
from geodesic.clenshaw import sin_cos_series
from geodesic.ellipsoid import Ellipsoid
from geodesic.series import SeriesTables, a2m1f, c2f, c4f
from geodesic.solver import ArcState, SeriesState, distance_scaled_B1

TINY = PhysicalConstants.TINY


class OutputMask(IntFlag):
    """Optional outputs to compute in addition to lat2, lon2, azi2, a12."""
    STANDARD = 0
    AREA = 1
    REDUCED_LENGTH = 2
    GEODESIC_SCALE = 4
    ALL = AREA | REDUCED_LENGTH | GEODESIC_SCALE


def mask_for_arity(nout: int) -> OutputMask:
    """Outputs needed when a caller unpacks `nout` results.

    Results are ordered (lat2, lon2, azi2, S12, m12, M12, M21, a12), so
    asking for 4 or more needs the area, 5 or more the reduced length and
    6 or more the scales.
    """
    mask = OutputMask.STANDARD
    if nout >= 4:
        mask |= OutputMask.AREA
    if nout >= 5:
        mask |= OutputMask.REDUCED_LENGTH
    if nout >= 6:
        mask |= OutputMask.GEODESIC_SCALE
    return mask


@dataclass
class ReducedLengthResult:
    """Reduced length and geodesic scales.

    Attributes
    ----------
    m12 : ndarray
        Reduced length in meters.
    M12, M21 : ndarray
        Geodesic scales.
    """
    m12: NDArray[np.float64]
    M12: NDArray[np.float64]
    M21: NDArray[np.float64]


def reduced_length_and_scales(
    start: AuxiliaryPoint,
    series: SeriesState,
    arc: ArcState,
    ellipsoid: Ellipsoid
) -> ReducedLengthResult:
    """Compute m12, M12 and M21.

    J12 is the difference of the distance integral (A1, C1) and the
    reduced-length integral (A2, C2) between the two points; the C1 terms
    are reused from the distance solution.
    """
    A2m1 = a2m1f(start.eps)
    C2a = c2f(start.eps)
    B21 = sin_cos_series(True, start.ssig1, start.csig1, C2a)
    B22 = sin_cos_series(True, arc.ssig2, arc.csig2, C2a)
    AB1 = distance_scaled_B1(arc, series)
    AB2 = (1 + A2m1) * (B22 - B21)
    J12 = (series.A1m1 - A2m1) * arc.sig12 + (AB1 - AB2)

    ssig1, csig1, dn1 = start.ssig1, start.csig1, start.dn1
    ssig2, csig2, dn2 = arc.ssig2, arc.csig2, arc.dn2

    m12 = ellipsoid.b * ((dn2 * (csig1 * ssig2) - dn1 * (ssig1 * csig2))
                         - csig1 * csig2 * J12)

    t = start.k2 * (ssig2 - ssig1) * (ssig2 + ssig1) / (dn1 + dn2)
    M12 = arc.csig12 + (t * ssig2 - csig2 * J12) * ssig1 / dn1
    M21 = arc.csig12 - (t * ssig1 - csig1 * J12) * ssig2 / dn2
    return ReducedLengthResult(m12=m12, M12=M12, M21=M21)


class ClairautCase(Enum):
    """How the azimuth change along a geodesic is obtained.

    GENERAL geodesics cross the equator obliquely and the change follows
    from the Clairaut invariants. DEGENERATE ones run along the equator
    (cos α0 = 0) or along a meridian (sin α0 = 0), where those formulas
    lose the information and the end azimuths are used directly.
    """
    GENERAL = auto()
    DEGENERATE = auto()


def classify_clairaut(
    salp0: NDArray[np.float64],
    calp0: NDArray[np.float64]
) -> Dict[ClairautCase, NDArray[np.bool_]]:
    """Partition geodesics by ClairautCase."""
    degenerate = (calp0 == 0) | (salp0 == 0)
    return {
        ClairautCase.GENERAL: ~degenerate,
        ClairautCase.DEGENERATE: degenerate,
    }


def _general_alp12(start: AuxiliaryPoint, end: EndPoint, arc: ArcState):
    ssig1, csig1 = start.ssig1, start.csig1
    ssig12, csig12 = arc.ssig12, arc.csig12
    # Both forms are evaluated; the one not selected may divide by zero
    with np.errstate(divide='ignore', invalid='ignore'):
        salp12 = start.calp0 * start.salp0 * np.where(
            csig12 <= 0,
            csig1 * (1 - csig12) + ssig12 * ssig1,
            ssig12 * (csig1 * ssig12 / (1 + csig12) + ssig1))
    calp12 = start.salp0 ** 2 + start.calp0 ** 2 * csig1 * arc.csig2
    return salp12, calp12


def _degenerate_alp12(start: AuxiliaryPoint, end: EndPoint, arc: ArcState):
    salp12 = end.salp2 * start.calp1 - end.calp2 * start.salp1
    calp12 = end.calp2 * start.calp1 + end.salp2 * start.salp1
    # alp12 = -180 would be taken as +180; nudge it to the correct side
    flip = (salp12 == 0) & (calp12 < 0)
    salp12 = np.where(flip, TINY * start.calp1, salp12)
    calp12 = np.where(flip, -1.0, calp12)
    return salp12, calp12


_ALP12_HANDLERS: Dict[ClairautCase, Callable] = {
    ClairautCase.GENERAL: _general_alp12,
    ClairautCase.DEGENERATE: _degenerate_alp12,
}


def azimuth_change(
    start: AuxiliaryPoint,
    end: EndPoint,
    arc: ArcState
) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
    """sin and cos (unnormalized) of alp2 - alp1."""
    salp12 = np.empty_like(arc.sig12)
    calp12 = np.empty_like(arc.sig12)
    for case, mask in classify_clairaut(start.salp0, start.calp0).items():
        if np.any(mask):
            s, c = _ALP12_HANDLERS[case](start, end, arc)
            salp12[mask] = s[mask]
            calp12[mask] = c[mask]
    return salp12, calp12


def area(
    start: AuxiliaryPoint,
    end: EndPoint,
    arc: ArcState,
    ellipsoid: Ellipsoid,
    tables: SeriesTables
) -> NDArray[np.float64]:
    """Area S12 between the geodesic and the equator, in m².

    S12 = c² (alp2 - alp1) + A4 (B42 - B41): a spherical excess on the
    authalic sphere plus an ellipsoidal correction from the C4 series.
    """
    C4a = c4f(start.eps, tables)
    A4 = ellipsoid.a ** 2 * ellipsoid.e2 * start.calp0 * start.salp0
    B41 = sin_cos_series(False, start.ssig1, start.csig1, C4a)
    B42 = sin_cos_series(False, arc.ssig2, arc.csig2, C4a)

    salp12, calp12 = azimuth_change(start, end, arc)
    return ellipsoid.area_constant() * np.arctan2(salp12, calp12) + A4 * (B42 - B41)
