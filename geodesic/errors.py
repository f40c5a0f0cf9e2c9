"""
Exceptions raised by the geodesic solver.

All of them are raised while the inputs are being set up, before any
series work starts. Once inputs pass these checks the numerical core
cannot fail.
"""


class GeodesicError(ValueError):
    """Base class for invalid solver inputs."""


class InvalidEllipsoid(GeodesicError):
    """The ellipsoid specification is malformed or not physical.

    Raised for a vector that is not of the form [a, e], a non-positive or
    non-finite equatorial radius, or e² >= 1.
    """


class IncompatibleShapes(GeodesicError):
    """lat1, lon1, s12 and azi1 cannot be broadcast to a common shape."""


class InvalidArcModeArgument(GeodesicError):
    """arc_mode was given as a collection instead of a single boolean."""
