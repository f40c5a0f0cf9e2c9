"""
Consistency Checks for Direct Geodesic Solutions.

This module verifies that solver output obeys properties any correct
solution must have, independently of how it was computed.

Check Categories
----------------
1. Reversibility (walking back from the end point returns to the start)
2. Invariants (Clairaut's relation holds along the geodesic)
3. Internal consistency (arc and distance modes agree)
4. External reference (agreement with GeographicLib through pyproj)
"""

from dataclasses import dataclass
from typing import Any, Dict, List

import numpy as np
from numpy.typing import ArrayLike
from pyproj import Geod

from common.logging_config import get_logger
from geodesic.angles import normalize, sincosd
from geodesic.direct import DirectConfig, solve
from geodesic.ellipsoid import WGS84, Ellipsoid
from geodesic.outputs import OutputMask


class GeodesicConsistencyError(RuntimeError):
    """A consistency check failed in strict mode."""


@dataclass
class ValidationResult:
    """Result of a validation check.

    Attributes
    ----------
    test_name : str
        Name of the test.
    passed : bool
        Whether the test passed.
    message : str
        Description of result.
    details : dict
        Additional details.
    """
    test_name: str
    passed: bool
    message: str
    details: Dict[str, Any]


def _angle_error(a: ArrayLike, b: ArrayLike) -> np.ndarray:
    return np.abs(normalize(np.asarray(a) - np.asarray(b)))


class GeodesicConsistencyChecker:
    """Checker for consistency of direct-problem solutions.

    Parameters
    ----------
    ellipsoid : Ellipsoid
        Ellipsoid the checks solve on (default: WGS84).
    strict_mode : bool
        If True, raise GeodesicConsistencyError on a failed check.
    log_violations : bool
        Whether to log failed checks.
    """

    def __init__(
        self,
        ellipsoid: Ellipsoid = WGS84,
        strict_mode: bool = False,
        log_violations: bool = True
    ):
        self.ellipsoid = ellipsoid
        self.strict_mode = strict_mode
        self.log_violations = log_violations
        self._config = DirectConfig(ellipsoid=ellipsoid, outputs=OutputMask.STANDARD)
        self._logger = get_logger(f"{__name__}.GeodesicConsistencyChecker")

    def _report(self, result: ValidationResult) -> ValidationResult:
        if not result.passed:
            if self.log_violations:
                self._logger.warning(f"{result.test_name} FAILED | {result.message}")
            if self.strict_mode:
                raise GeodesicConsistencyError(f"{result.test_name}: {result.message}")
        else:
            self._logger.debug(f"{result.test_name} passed | {result.message}")
        return result

    def check_all(
        self,
        lat1: ArrayLike,
        lon1: ArrayLike,
        azi1: ArrayLike,
        s12: ArrayLike
    ) -> List[ValidationResult]:
        """Run every check on a batch of geodesics.

        Parameters
        ----------
        lat1, lon1, azi1 : array_like
            Start points and azimuths in degrees.
        s12 : array_like
            Distances in meters.

        Returns
        -------
        List[ValidationResult]
            Results of all checks.
        """
        results = []

        # 1. Reversibility
        results.append(self.check_round_trip(lat1, lon1, azi1, s12))

        # 2. Clairaut invariant at each end point
        results.append(self.check_clairaut_invariant(lat1, lon1, azi1, s12))

        # 3. Arc/distance agreement
        results.append(self.check_arc_distance_consistency(lat1, lon1, azi1, s12))

        # 4. Reference implementation
        results.append(self.check_against_reference(lat1, lon1, azi1, s12))

        return results

    def check_round_trip(
        self,
        lat1: ArrayLike,
        lon1: ArrayLike,
        azi1: ArrayLike,
        s12: ArrayLike,
        tolerance_deg: float = 1e-9
    ) -> ValidationResult:
        """Walk back from the end point along the reversed azimuth."""
        forward = solve(lat1, lon1, s12, azi1, self._config)
        back = solve(forward.lat2, forward.lon2, s12, forward.azi2 + 180.0, self._config)

        lat_err = np.abs(back.lat2 - np.asarray(lat1, dtype=np.float64))
        lon_err = _angle_error(back.lon2, lon1)
        azi_err = _angle_error(back.azi2, np.asarray(azi1, dtype=np.float64) + 180.0)
        max_err = float(np.max([np.max(lat_err), np.max(lon_err), np.max(azi_err)]))

        return self._report(ValidationResult(
            test_name="round_trip",
            passed=max_err <= tolerance_deg,
            message=f"Round trip: max error {max_err:.3e} deg",
            details={
                'max_lat_error_deg': float(np.max(lat_err)),
                'max_lon_error_deg': float(np.max(lon_err)),
                'max_azi_error_deg': float(np.max(azi_err)),
                'tolerance_deg': tolerance_deg,
            }
        ))

    def check_clairaut_invariant(
        self,
        lat1: ArrayLike,
        lon1: ArrayLike,
        azi1: ArrayLike,
        distances: ArrayLike,
        tolerance: float = 1e-12
    ) -> ValidationResult:
        """Check sin α cos β is unchanged between start and end points.

        Inputs broadcast like the solver's, so this checks one geodesic
        sampled at many distances or a batch of independent geodesics.
        """
        result = solve(lat1, lon1, distances, azi1, self._config)
        f1 = self.ellipsoid.f1

        def invariant(lat, azi):
            sphi, cphi = sincosd(lat)
            sbet = f1 * sphi
            salp, _ = sincosd(azi)
            return salp * cphi / np.hypot(sbet, cphi)

        reference = invariant(np.asarray(lat1, dtype=np.float64), np.asarray(azi1, dtype=np.float64))
        spread = np.abs(invariant(result.lat2, result.azi2) - reference)
        max_spread = float(np.max(spread))

        return self._report(ValidationResult(
            test_name="clairaut_invariant",
            passed=max_spread <= tolerance,
            message=f"Clairaut invariant: max deviation {max_spread:.3e}",
            details={
                'sin_alpha0': np.asarray(reference).tolist(),
                'max_deviation': max_spread,
                'tolerance': tolerance,
            }
        ))

    def check_arc_distance_consistency(
        self,
        lat1: ArrayLike,
        lon1: ArrayLike,
        azi1: ArrayLike,
        s12: ArrayLike,
        tolerance_deg: float = 1e-12,
        tolerance_m: float = 1e-6
    ) -> ValidationResult:
        """Re-solve with the returned arc length in arc mode."""
        by_distance = solve(lat1, lon1, s12, azi1, self._config)
        by_arc = solve(lat1, lon1, by_distance.a12, azi1,
                       self._config.replace(arc_mode=True))

        pos_err = max(
            float(np.max(np.abs(by_arc.lat2 - by_distance.lat2))),
            float(np.max(_angle_error(by_arc.lon2, by_distance.lon2))),
            float(np.max(_angle_error(by_arc.azi2, by_distance.azi2))),
        )
        dist_err = float(np.max(np.abs(by_arc.a12 - np.asarray(s12, dtype=np.float64))))

        return self._report(ValidationResult(
            test_name="arc_distance_consistency",
            passed=pos_err <= tolerance_deg and dist_err <= tolerance_m,
            message=f"Arc/distance: position {pos_err:.3e} deg, distance {dist_err:.3e} m",
            details={
                'max_position_error_deg': pos_err,
                'max_distance_error_m': dist_err,
            }
        ))

    def check_against_reference(
        self,
        lat1: ArrayLike,
        lon1: ArrayLike,
        azi1: ArrayLike,
        s12: ArrayLike,
        tolerance_deg: float = 1e-9
    ) -> ValidationResult:
        """Compare with GeographicLib's C implementation as bundled in pyproj.

        Azimuths are compared away from the poles only, where the two
        implementations use different longitude conventions.
        """
        lat1, lon1, azi1, s12 = np.broadcast_arrays(
            *(np.asarray(v, dtype=np.float64) for v in (lat1, lon1, azi1, s12))
        )
        ours = solve(lat1, lon1, s12, azi1, self._config)

        geod = Geod(a=self.ellipsoid.a, f=float(self.ellipsoid.f))
        lon2, lat2, back_azi = geod.fwd(lon1.ravel(), lat1.ravel(), azi1.ravel(), s12.ravel())
        lat2 = np.reshape(lat2, lat1.shape)
        lon2 = np.reshape(lon2, lat1.shape)
        azi2 = normalize(np.reshape(back_azi, lat1.shape) + 180.0)

        regular = np.abs(lat1) != 90.0
        lat_err = np.abs(ours.lat2 - lat2)
        lon_err = np.where(regular, _angle_error(ours.lon2, lon2), 0.0)
        azi_err = np.where(regular, _angle_error(ours.azi2, azi2), 0.0)
        max_err = float(np.max([np.max(lat_err), np.max(lon_err), np.max(azi_err)]))

        return self._report(ValidationResult(
            test_name="reference_agreement",
            passed=max_err <= tolerance_deg,
            message=f"Reference agreement: max error {max_err:.3e} deg",
            details={
                'max_lat_error_deg': float(np.max(lat_err)),
                'max_lon_error_deg': float(np.max(lon_err)),
                'max_azi_error_deg': float(np.max(azi_err)),
                'tolerance_deg': tolerance_deg,
            }
        ))
