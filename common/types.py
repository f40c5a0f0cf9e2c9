"""
Type Definitions for the Direct Geodesic Solver.

This module defines the dataclasses exchanged between the solver and its
callers. Field names carry the geodesic notation (lat2, azi2, S12, ...)
and docstrings state the units.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from common.units import Q_, STANDARD_UNITS


@dataclass
class GeoCoordinate:
    """A geographic coordinate on the ellipsoid surface.

    Attributes
    ----------
    latitude : float
        Geodetic latitude in RADIANS (not degrees). Range: [-π/2, π/2].
    longitude : float
        Geodetic longitude in RADIANS (not degrees). Range: [-π, π].

    Examples
    --------
    >>> import numpy as np
    >>> coord = GeoCoordinate.from_degrees(25.7617, -80.1918)
    >>> lat_deg, lon_deg = coord.to_degrees()
    >>> print(f"{lat_deg:.4f}, {lon_deg:.4f}")
    25.7617, -80.1918
    """
    latitude: float  # radians
    longitude: float  # radians

    def __post_init__(self):
        """Validate coordinate ranges."""
        if not -np.pi/2 <= self.latitude <= np.pi/2:
            raise ValueError(
                f"Latitude {self.latitude} rad out of range [-π/2, π/2]. "
                f"Did you pass degrees instead of radians?"
            )
        # Normalize longitude to [-π, π]
        self.longitude = float(np.arctan2(np.sin(self.longitude), np.cos(self.longitude)))

    def to_degrees(self) -> Tuple[float, float]:
        """Convert to degrees.

        Returns
        -------
        Tuple[float, float]
            (latitude_degrees, longitude_degrees)
        """
        return float(np.degrees(self.latitude)), float(np.degrees(self.longitude))

    @classmethod
    def from_degrees(cls, lat_deg: float, lon_deg: float) -> 'GeoCoordinate':
        """Create coordinate from degrees (convenience constructor)."""
        return cls(latitude=float(np.radians(lat_deg)), longitude=float(np.radians(lon_deg)))


@dataclass
class DirectResult:
    """Solution of the direct geodesic problem.

    All arrays share the broadcast shape of the solver inputs. Outputs
    that were not requested are None.

    Attributes
    ----------
    lat2 : ndarray
        Latitude of the end point in degrees.
    lon2 : ndarray
        Longitude of the end point in degrees, in (-180, 180].
    azi2 : ndarray
        Forward azimuth at the end point in degrees.
    S12 : ndarray, optional
        Area between the geodesic and the equator in m².
    m12 : ndarray, optional
        Reduced length in metres.
    M12, M21 : ndarray, optional
        Geodesic scales (dimensionless).
    a12 : ndarray
        Arc length on the auxiliary sphere in degrees when a distance was
        given, or the distance in metres when an arc was given.
    """
    lat2: NDArray[np.float64]
    lon2: NDArray[np.float64]
    azi2: NDArray[np.float64]
    a12: NDArray[np.float64]
    S12: Optional[NDArray[np.float64]] = None
    m12: Optional[NDArray[np.float64]] = None
    M12: Optional[NDArray[np.float64]] = None
    M21: Optional[NDArray[np.float64]] = None

    def as_tuple(self) -> Tuple:
        """Return outputs in the conventional order.

        (lat2, lon2, azi2, S12, m12, M12, M21, a12)
        """
        return (self.lat2, self.lon2, self.azi2,
                self.S12, self.m12, self.M12, self.M21, self.a12)

    def to_quantities(self, arc_mode: bool = False) -> Dict[str, Any]:
        """Return the computed outputs as `pint` quantities.

        Parameters
        ----------
        arc_mode : bool
            Whether the solve was in arc mode, in which case a12 is a
            distance rather than an arc length.

        Returns
        -------
        dict
            Quantity per output name. Outputs that were not requested are
            left out.
        """
        kinds = {
            'lat2': 'latitude',
            'lon2': 'longitude',
            'azi2': 'azimuth',
            'S12': 'area',
            'm12': 'reduced_length',
            'M12': None,
            'M21': None,
            'a12': 'distance' if arc_mode else 'arc_length',
        }
        quantities = {}
        for name, kind in kinds.items():
            value = getattr(self, name)
            if value is not None:
                unit = STANDARD_UNITS[kind] if kind else 'dimensionless'
                quantities[name] = Q_(value, unit)
        return quantities
