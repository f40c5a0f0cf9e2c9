"""
Physical and Numerical Constants for the Direct Geodesic Solver.

This module provides the reference ellipsoid parameters with their
uncertainty bounds and sources, together with the numerical constants the
series-based solver depends on.

References
----------
- WGS84 parameters: NIMA TR8350.2, Third Edition, 2000
- Karney, C.F.F. (2013). Algorithms for geodesics. J. Geodesy, 87(1), 43-55.
"""

from dataclasses import dataclass
from typing import Final
import sys

import numpy as np


@dataclass(frozen=True)
class Constant:
    """A physical constant with uncertainty and provenance.

    Attributes
    ----------
    value : float
        The nominal value of the constant.
    uncertainty : float
        The standard uncertainty (1-sigma) of the constant.
    unit : str
        The SI unit of the constant.
    source : str
        Reference for the constant value.
    description : str
        Human-readable description of the constant.
    """
    value: float
    uncertainty: float
    unit: str
    source: str
    description: str


class PhysicalConstants:
    """Registry of constants used throughout the solver.

    Earth Geometry (WGS84)
    ----------------------
    These constants define the default reference ellipsoid. WGS84 is
    specified by its equatorial radius and flattening; everything else
    (eccentricity, semi-minor axis) is derived.

    Numerical
    ---------
    Series truncation order and the machine constants used to guard
    degenerate trigonometric branches.
    """

    # =========================================================================
    # WGS84 Ellipsoid Parameters
    # Reference: NIMA TR8350.2, Third Edition, 2000
    # =========================================================================

    EARTH_SEMI_MAJOR_AXIS: Final[Constant] = Constant(
        value=6_378_137.0,
        uncertainty=0.0,  # Defined exactly
        unit="m",
        source="WGS84, NIMA TR8350.2",
        description="Semi-major axis (equatorial radius) of WGS84 ellipsoid"
    )

    EARTH_FLATTENING: Final[Constant] = Constant(
        value=1.0 / 298.257223563,
        uncertainty=0.0,  # Defined exactly
        unit="dimensionless",
        source="WGS84, NIMA TR8350.2",
        description="Flattening of WGS84 ellipsoid: f = (a - b) / a"
    )

    # =========================================================================
    # Numerical Constants
    # =========================================================================

    SERIES_ORDER: Final[int] = 6
    """Truncation order of every series expansion in ε and n."""

    NEWTON_FLATTENING_THRESHOLD: Final[float] = 0.01
    """|f| above which the distance-mode solver applies its Newton step."""

    MACHINE_EPSILON: Final[float] = float(np.finfo(np.float64).eps)

    TINY: Final[float] = float(np.sqrt(sys.float_info.min))
    """Stand-in for zero cosines at the poles, sqrt(realmin)."""
