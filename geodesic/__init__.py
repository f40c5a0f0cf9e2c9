"""
Direct Geodesic Solver on an Ellipsoid of Revolution.

All geodesic calculations in the system originate from this package.
The direct problem is solved without iteration by mapping the geodesic
onto an auxiliary sphere and correcting with sixth-order series in the
flattening.

This package provides:
- The solver entry point and its configuration
- The reference ellipsoid model and its cached series tables
- Radians and single-geodesic convenience wrappers
"""

from geodesic.errors import (
    GeodesicError,
    InvalidEllipsoid,
    IncompatibleShapes,
    InvalidArcModeArgument,
)

from geodesic.ellipsoid import (
    Ellipsoid,
    WGS84,
    series_tables,
)

from geodesic.outputs import OutputMask, mask_for_arity

from geodesic.solver import SolveMode

from geodesic.direct import DirectConfig, solve

from geodesic.api import (
    geodesic_direct,
    points_along_geodesic,
    destination,
)

__all__ = [
    # Errors
    "GeodesicError",
    "InvalidEllipsoid",
    "IncompatibleShapes",
    "InvalidArcModeArgument",
    # Ellipsoid
    "Ellipsoid",
    "WGS84",
    "series_tables",
    # Solver
    "OutputMask",
    "mask_for_arity",
    "SolveMode",
    "DirectConfig",
    "solve",
    # Convenience
    "geodesic_direct",
    "points_along_geodesic",
    "destination",
]
