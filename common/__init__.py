"""
Common utilities and infrastructure for the Direct Geodesic Solver.

This package provides foundational components used across all modules:
- Reference ellipsoid and numerical constants with provenance
- Unit conversion at the API boundary
- Result and coordinate types
- Logging infrastructure
"""

from common.constants import PhysicalConstants
from common.units import ureg, Q_, to_magnitude, validate_units
from common.types import GeoCoordinate, DirectResult
from common.logging_config import get_logger, set_log_level

__all__ = [
    "PhysicalConstants",
    "ureg",
    "Q_",
    "to_magnitude",
    "validate_units",
    "GeoCoordinate",
    "DirectResult",
    "get_logger",
    "set_log_level",
]
