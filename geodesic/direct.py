"""
Direct Geodesic Problem: Batch Driver and Entry Point.

Given a start point, an azimuth and a distance (or an arc length on the
auxiliary sphere), find the end point and azimuth there, together with
the optional area, reduced length and geodesic scales.

Inputs may be scalars or arrays of any broadcast-compatible shapes.
Every element is an independent geodesic and the whole batch is solved
with vectorised numpy arithmetic; results have the broadcast shape. A
series of points along one geodesic is obtained by passing scalars for
lat1, lon1 and azi1 and an array for s12.

Examples
--------
>>> from geodesic import solve
>>> result = solve(40.0, 0.0, 10_000_000.0, 30.0)
>>> print(f"{float(result.lat2):.11f} {float(result.lon2):.11f}")
41.79331020506 137.84490004377

References
----------
- Karney, C.F.F. (2013). Algorithms for geodesics. J. Geodesy, 87(1), 43-55.
"""

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional, Sequence, Union

import numpy as np
from numpy.typing import ArrayLike

from common.logging_config import get_logger
from common.types import DirectResult
from common.units import STANDARD_UNITS, as_float_array
from geodesic.angles import canonicalize_pole, normalize, round_angle
from geodesic.auxiliary_sphere import to_ellipsoid, to_sphere
from geodesic.ellipsoid import WGS84, Ellipsoid, series_tables
from geodesic.errors import IncompatibleShapes, InvalidArcModeArgument
from geodesic.outputs import OutputMask, area, reduced_length_and_scales
from geodesic.solver import SolveMode, arc_counterpart, determine_arc, prepare_series

logger = get_logger(__name__)


def _as_arc_mode(value: Any) -> bool:
    """Coerce a single boolean-like value, rejecting collections."""
    arr = np.asarray(value)
    if arr.size != 1 or arr.dtype.kind not in 'biuf':
        raise InvalidArcModeArgument(f"arc_mode must be true or false, got {value!r}")
    return bool(arr.item())


def _as_ellipsoid(value: Union[Ellipsoid, Sequence[float]]) -> Ellipsoid:
    if isinstance(value, Ellipsoid):
        return value
    return Ellipsoid.from_vector(value)


@dataclass(frozen=True)
class DirectConfig:
    """Settings for a direct-problem solve.

    Attributes
    ----------
    ellipsoid : Ellipsoid or sequence
        The ellipsoid, or a vector [a, e]. Default WGS84.
    arc_mode : bool
        If True the length input is the arc length on the auxiliary
        sphere in degrees and a12 returns the distance in meters.
    outputs : OutputMask
        Optional outputs to compute. Default all.

    Raises
    ------
    InvalidEllipsoid
        If the ellipsoid vector is malformed.
    InvalidArcModeArgument
        If arc_mode is not a single boolean-like value.
    """
    ellipsoid: Ellipsoid = WGS84
    arc_mode: bool = False
    outputs: OutputMask = OutputMask.ALL

    def __post_init__(self):
        """Validate and coerce fields."""
        object.__setattr__(self, 'ellipsoid', _as_ellipsoid(self.ellipsoid))
        object.__setattr__(self, 'arc_mode', _as_arc_mode(self.arc_mode))
        object.__setattr__(self, 'outputs', OutputMask(self.outputs))

    @property
    def mode(self) -> SolveMode:
        return SolveMode.ARC_GIVEN if self.arc_mode else SolveMode.DISTANCE_GIVEN

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> 'DirectConfig':
        """Build a config from a mapping, ignoring unknown keys.

        Outputs may be given as an OutputMask, an int, or a list of mask
        names such as ["AREA", "REDUCED_LENGTH"].
        """
        known = {f.name for f in fields(cls)}
        kwargs = {key: value for key, value in mapping.items() if key in known}
        outputs = kwargs.get('outputs')
        if isinstance(outputs, (list, tuple)):
            mask = OutputMask.STANDARD
            for name in outputs:
                mask |= OutputMask[str(name).upper()]
            kwargs['outputs'] = mask
        return cls(**kwargs)

    def replace(self, **changes) -> 'DirectConfig':
        """Return a copy with some fields replaced (None means unchanged)."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values.update({key: value for key, value in changes.items() if value is not None})
        return DirectConfig(**values)


def solve(
    lat1: ArrayLike,
    lon1: ArrayLike,
    s12: ArrayLike,
    azi1: ArrayLike,
    config: Optional[DirectConfig] = None,
    *,
    ellipsoid: Optional[Union[Ellipsoid, Sequence[float]]] = None,
    arc_mode: Optional[bool] = None,
    outputs: Optional[OutputMask] = None
) -> DirectResult:
    """Solve the direct geodesic problem.

    Parameters
    ----------
    lat1 : array_like
        Latitude of the start point in degrees, [-90, 90].
    lon1 : array_like
        Longitude of the start point in degrees.
    s12 : array_like
        Distance in meters, or arc length in degrees in arc mode. May be
        zero or negative.
    azi1 : array_like
        Azimuth at the start point in degrees, clockwise from north.
    config : DirectConfig, optional
        Solver settings. Keyword arguments override its fields.
    ellipsoid : Ellipsoid or [a, e], optional
        Ellipsoid to use (default WGS84).
    arc_mode : bool, optional
        Interpret s12 as an arc length in degrees.
    outputs : OutputMask, optional
        Optional outputs to compute.

    Any of the four positional inputs may be a `pint` quantity.

    Returns
    -------
    DirectResult
        End point and requested outputs, shaped like the broadcast inputs.

    Raises
    ------
    IncompatibleShapes
        If the inputs do not broadcast together.
    InvalidEllipsoid, InvalidArcModeArgument
        If the settings are invalid.
    """
    config = (config or DirectConfig()).replace(
        ellipsoid=ellipsoid, arc_mode=arc_mode, outputs=outputs
    )
    ellipsoid = config.ellipsoid
    mode = config.mode

    lat1 = as_float_array(lat1, STANDARD_UNITS["latitude"])
    lon1 = as_float_array(lon1, STANDARD_UNITS["longitude"])
    s12 = as_float_array(s12, STANDARD_UNITS["arc_length" if config.arc_mode else "distance"])
    azi1 = as_float_array(azi1, STANDARD_UNITS["azimuth"])
    try:
        lat1, lon1, s12, azi1 = np.broadcast_arrays(lat1, lon1, s12, azi1)
    except ValueError as e:
        raise IncompatibleShapes(
            f"lat1, lon1, s12, azi1 have incompatible shapes "
            f"{np.shape(lat1)}, {np.shape(lon1)}, {np.shape(s12)}, {np.shape(azi1)}"
        ) from e

    shape = lat1.shape
    logger.debug(
        f"Solving {lat1.size} geodesic(s) of shape {shape} on "
        f"{ellipsoid.name or ellipsoid.to_vector()} ({mode.name}, outputs={config.outputs!r})"
    )

    tables = series_tables(ellipsoid)

    lat1 = lat1.ravel()
    s12 = s12.ravel()
    lon1 = normalize(lon1.ravel())
    azi1 = normalize(azi1.ravel())
    lon1, azi1 = canonicalize_pole(lat1, lon1, azi1)
    azi1 = round_angle(azi1)

    start = to_sphere(lat1, azi1, ellipsoid)
    series = prepare_series(start, ellipsoid, tables)
    arc = determine_arc(mode, s12, start, series, ellipsoid)
    end = to_ellipsoid(start, arc.ssig2, arc.csig2, arc.sig12,
                       series.A3c, series.C3a, series.B31, ellipsoid)

    result = DirectResult(
        lat2=end.lat2.reshape(shape),
        lon2=normalize(lon1 + end.lon12).reshape(shape),
        azi2=end.azi2.reshape(shape),
        a12=arc_counterpart(mode, arc, series, ellipsoid).reshape(shape),
    )

    if config.outputs & (OutputMask.REDUCED_LENGTH | OutputMask.GEODESIC_SCALE):
        scales = reduced_length_and_scales(start, series, arc, ellipsoid)
        if config.outputs & OutputMask.REDUCED_LENGTH:
            result.m12 = scales.m12.reshape(shape)
        if config.outputs & OutputMask.GEODESIC_SCALE:
            result.M12 = scales.M12.reshape(shape)
            result.M21 = scales.M21.reshape(shape)

    if config.outputs & OutputMask.AREA:
        result.S12 = area(start, end, arc, ellipsoid, tables).reshape(shape)

    return result
