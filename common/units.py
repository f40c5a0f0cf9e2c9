"""
Unit Handling for the Direct Geodesic Solver.

The solver works on bare IEEE-754 doubles in fixed units: angles in
degrees, lengths in metres, areas in square metres. Callers may instead
pass `pint` quantities; this module converts them at the boundary so that
the numerical core never sees units.

Example Usage
-------------
>>> from common.units import Q_, to_magnitude
>>> to_magnitude(Q_(1.5, 'km'), 'meter')
1500.0
>>> to_magnitude(Q_(3.14159265, 'radian'), 'degree')  # doctest: +ELLIPSIS
179.99...
"""

from functools import wraps
from typing import Any, Callable
import inspect

import numpy as np
import pint
from pint import UnitRegistry as PintUnitRegistry

# Create the global unit registry
ureg = PintUnitRegistry()

# Convenience alias for creating quantities
Q_ = ureg.Quantity


# Units the solver expects for each kind of input
STANDARD_UNITS = {
    "latitude": "degree",
    "longitude": "degree",
    "azimuth": "degree",
    "arc_length": "degree",
    "distance": "meter",
    "reduced_length": "meter",
    "area": "meter**2",
}


def to_magnitude(value: Any, unit: str) -> Any:
    """Strip units from a value, converting to `unit` first.

    Parameters
    ----------
    value : float, array_like or pint.Quantity
        Value to convert. Bare numbers and arrays are assumed to already be
        expressed in `unit` and are returned unchanged.
    unit : str
        Target unit string (e.g. 'degree', 'meter').

    Returns
    -------
    float or ndarray
        The magnitude in `unit`.

    Raises
    ------
    ValueError
        If `value` is a quantity whose dimensionality is incompatible
        with `unit`.
    """
    if isinstance(value, pint.Quantity):
        try:
            return value.to(unit).magnitude
        except pint.DimensionalityError as e:
            raise ValueError(
                f"Incompatible units: expected {unit}, got {value.units}"
            ) from e
    return value


def validate_units(expected_units: dict[str, str]):
    """Decorator converting quantity arguments to the expected units.

    Arguments that are `pint` quantities are checked for compatible
    dimensionality and replaced by their magnitude in the expected unit;
    bare numbers are passed through.

    Parameters
    ----------
    expected_units : dict[str, str]
        Mapping from argument names to expected unit strings.

    Examples
    --------
    >>> @validate_units({'distance': 'm'})
    ... def halve(distance):
    ...     return distance / 2
    >>> halve(Q_(2, 'km'))
    1000.0
    """
    def decorator(func: Callable) -> Callable:
        sig = inspect.signature(func)

        @wraps(func)
        def wrapper(*args, **kwargs):
            bound = sig.bind(*args, **kwargs)
            bound.apply_defaults()

            for param_name, expected_unit in expected_units.items():
                if param_name in bound.arguments:
                    value = bound.arguments[param_name]
                    if isinstance(value, pint.Quantity):
                        try:
                            bound.arguments[param_name] = to_magnitude(value, expected_unit)
                        except ValueError as e:
                            raise ValueError(
                                f"Parameter '{param_name}' has incompatible units. "
                                f"Expected {expected_unit}, got {value.units}"
                            ) from e

            return func(*bound.args, **bound.kwargs)
        return wrapper
    return decorator


def as_float_array(value: Any, unit: str) -> np.ndarray:
    """Convert a possibly unit-tagged value to a float64 array in `unit`."""
    return np.asarray(to_magnitude(value, unit), dtype=np.float64)
