"""
Unit Registry for Projection Parameters.

This module provides a centralized unit system using the `pint` library so
that projection parameters can be given with explicit units. Bare numbers
keep their conventional unit (degrees for angles, kilometers for false
offsets); quantities are converted, and incompatible units raise at
construction time instead of silently producing wrong coordinates.

Example Usage
-------------
>>> from common.units import Q_, as_kilometers
>>> as_kilometers(Q_(500, 'm'))
0.5
>>> as_kilometers(12.0)
12.0
"""

from typing import Union

import pint
from pint import UnitRegistry as PintUnitRegistry

from common.exceptions import ProjectionConfigurationError

# Create the global unit registry
ureg = PintUnitRegistry()

# Convenience alias for creating quantities
Q_ = ureg.Quantity

QuantityLike = Union[float, int, pint.Quantity]


def _convert(value: QuantityLike, unit: str, name: str) -> float:
    if isinstance(value, pint.Quantity):
        try:
            return float(value.to(unit).magnitude)
        except pint.DimensionalityError as e:
            raise ProjectionConfigurationError(
                f"Parameter '{name}' has incompatible units. "
                f"Expected {unit}, got {value.units}"
            ) from e
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ProjectionConfigurationError(
            f"Parameter '{name}' must be a number or a quantity, got {value!r}"
        ) from e


def as_kilometers(value: QuantityLike, name: str = "length") -> float:
    """Return a length in kilometers.

    Parameters
    ----------
    value : float or pint.Quantity
        Bare numbers are taken to be kilometers already.
    name : str
        Parameter name used in error messages.

    Returns
    -------
    float
        The length in kilometers.

    Raises
    ------
    ProjectionConfigurationError
        If a quantity does not have length dimensions.
    """
    return _convert(value, "kilometer", name)


def as_degrees(value: QuantityLike, name: str = "angle") -> float:
    """Return an angle in degrees.

    Parameters
    ----------
    value : float or pint.Quantity
        Bare numbers are taken to be degrees already.
    name : str
        Parameter name used in error messages.

    Returns
    -------
    float
        The angle in degrees.
    """
    return _convert(value, "degree", name)


def as_meters(value: QuantityLike, name: str = "length") -> float:
    """Return a length in meters; bare numbers are meters."""
    return _convert(value, "meter", name)
