"""
Validation Framework for the Direct Geodesic Solver.

This module provides consistency checks for solver output.
"""

from validation.geodesic_checks import (
    GeodesicConsistencyChecker,
    GeodesicConsistencyError,
    ValidationResult,
)

__all__ = [
    "GeodesicConsistencyChecker",
    "GeodesicConsistencyError",
    "ValidationResult",
]
