"""
Reference Ellipsoid Model.

An ellipsoid of revolution is given by its equatorial radius `a` and its
eccentricity `e`. Prolate ellipsoids are modelled with an imaginary
eccentricity, i.e. a negative e², so everything here is written in terms
of e² and stays real.

Derived Parameters
------------------
f   = e² / (1 + sqrt(1 - e²))    flattening
f1  = 1 - f
b   = a f1                       semi-minor axis
e'² = e² / (1 - e²)              second eccentricity squared
n   = f / (2 - f)                third flattening

The series tables that depend only on the ellipsoid are cached per value
of n (see `series_tables`).
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Dict, Sequence, Tuple, Union
import threading

import numpy as np

from common.constants import PhysicalConstants
from common.logging_config import get_logger
from geodesic.errors import InvalidEllipsoid
from geodesic.series import SeriesTables

logger = get_logger(__name__)


class EccentricityBranch(Enum):
    """Sign of e², which selects the closed forms used for the area."""
    SPHERE = auto()
    OBLATE = auto()
    PROLATE = auto()


@dataclass(frozen=True)
class Ellipsoid:
    """An ellipsoid of revolution.

    Attributes
    ----------
    a : float
        Equatorial radius in meters.
    e2 : float
        Eccentricity squared; negative for a prolate ellipsoid.
    name : str
        Identifier for the ellipsoid.

    Raises
    ------
    InvalidEllipsoid
        If a is not a positive finite number or e² is not finite and < 1.
    """
    a: float
    e2: float
    name: str = ""

    def __post_init__(self):
        """Reject ellipsoids the series cannot describe."""
        if not (np.isfinite(self.a) and self.a > 0):
            raise InvalidEllipsoid(f"Equatorial radius must be positive, got {self.a}")
        if not (np.isfinite(self.e2) and self.e2 < 1):
            raise InvalidEllipsoid(f"Eccentricity squared must be less than 1, got {self.e2}")

    @classmethod
    def from_flattening(cls, a: float, f: float, name: str = "") -> 'Ellipsoid':
        """Create an ellipsoid from equatorial radius and flattening."""
        if not (np.isfinite(f) and f < 1):
            raise InvalidEllipsoid(f"Flattening must be less than 1, got {f}")
        return cls(a=float(a), e2=float(f * (2 - f)), name=name)

    @classmethod
    def from_vector(cls, vector: Sequence[Union[float, complex]], name: str = "") -> 'Ellipsoid':
        """Create an ellipsoid from the vector [a, e].

        `e` may be complex (purely imaginary) to describe a prolate
        ellipsoid.

        Raises
        ------
        InvalidEllipsoid
            If the vector does not have exactly two elements.
        """
        values = np.ravel(np.asarray(vector))
        if values.size != 2:
            raise InvalidEllipsoid(
                f"Ellipsoid must be a vector of size 2 [a, e], got {values.size} elements"
            )
        if np.iscomplexobj(values) and values[0].imag != 0:
            raise InvalidEllipsoid(f"Equatorial radius must be real, got {values[0]}")
        a = float(np.real(values[0]))
        e2 = float(np.real(values[1] ** 2))
        return cls(a=a, e2=e2, name=name)

    def to_vector(self) -> Tuple[float, Union[float, complex]]:
        """Return [a, e], with e imaginary for a prolate ellipsoid."""
        if self.e2 >= 0:
            return self.a, float(np.sqrt(self.e2))
        return self.a, complex(0.0, np.sqrt(-self.e2))

    @property
    def f(self) -> float:
        """Flattening."""
        return self.e2 / (1 + np.sqrt(1 - self.e2))

    @property
    def f1(self) -> float:
        return 1 - self.f

    @property
    def b(self) -> float:
        """Semi-minor axis in meters."""
        return self.a * self.f1

    @property
    def ep2(self) -> float:
        """Second eccentricity squared."""
        return self.e2 / (1 - self.e2)

    @property
    def n(self) -> float:
        """Third flattening."""
        return self.f / (2 - self.f)

    @property
    def branch(self) -> EccentricityBranch:
        if self.e2 == 0:
            return EccentricityBranch.SPHERE
        if self.e2 > 0:
            return EccentricityBranch.OBLATE
        return EccentricityBranch.PROLATE

    def area_constant(self) -> float:
        """Authalic radius squared, c².

        The area of the whole ellipsoid is 4π c².
        """
        return _AREA_CONSTANT[self.branch](self.a, self.b, self.e2)


def _sphere_c2(a: float, b: float, e2: float) -> float:
    return a ** 2


def _oblate_c2(a: float, b: float, e2: float) -> float:
    e = np.sqrt(e2)
    return (a ** 2 + b ** 2 * np.arctanh(e) / e) / 2


def _prolate_c2(a: float, b: float, e2: float) -> float:
    e = np.sqrt(-e2)
    return (a ** 2 + b ** 2 * np.arctan(e) / e) / 2


_AREA_CONSTANT: Dict[EccentricityBranch, Callable[[float, float, float], float]] = {
    EccentricityBranch.SPHERE: _sphere_c2,
    EccentricityBranch.OBLATE: _oblate_c2,
    EccentricityBranch.PROLATE: _prolate_c2,
}


# WGS84 ellipsoid - the default for every solver call
WGS84 = Ellipsoid.from_flattening(
    a=PhysicalConstants.EARTH_SEMI_MAJOR_AXIS.value,
    f=PhysicalConstants.EARTH_FLATTENING.value,
    name="WGS84"
)


_tables_cache: Dict[float, SeriesTables] = {}
_tables_lock = threading.Lock()


def series_tables(ellipsoid: Ellipsoid) -> SeriesTables:
    """Return the ellipsoid's series tables, building them on first use.

    Tables depend only on the third flattening and are cached under it.
    Population is guarded by a lock; readers of an existing entry never
    block.

    Parameters
    ----------
    ellipsoid : Ellipsoid
        The ellipsoid.

    Returns
    -------
    SeriesTables
        Shared, read-only tables.
    """
    n = ellipsoid.n
    tables = _tables_cache.get(n)
    if tables is None:
        with _tables_lock:
            tables = _tables_cache.get(n)
            if tables is None:
                tables = SeriesTables.from_third_flattening(n)
                _tables_cache[n] = tables
                logger.debug(f"Built series tables for {ellipsoid.name or 'ellipsoid'} (n={n:.12g})")
    return tables


def clear_series_cache() -> None:
    """Drop all cached series tables."""
    with _tables_lock:
        _tables_cache.clear()
