"""
Numeric Utilities Shared by the Projections.

Free functions taking explicit parameters (eccentricity, coefficients), so
they can be tested in isolation from any projection.

Contents
--------
- Longitude normalization into (-π, π]
- Meridian distance series (``enfn`` / ``mlfn``) for ellipsoidal cases
- Parallel radius factor (``msfn``)
- A generic bounded Newton / fixed-point iteration that reports
  non-convergence instead of raising

References
----------
- Snyder, J.P. (1987). Map Projections - A Working Manual, eq. 3-21.
- Evenden, G.I. PROJ.4 library, pj_mlfn.c and pj_msfn.c.
"""

import math
from typing import Callable, NamedTuple, Tuple

import numpy as np

from common.exceptions import InvalidCoordinateError, ProjectionConfigurationError
from common.logging_config import get_logger

logger = get_logger(__name__)

TWO_PI = 2.0 * math.pi

# Meridian distance series coefficients (truncated at e⁸)
C00 = 1.0
C02 = 0.25
C04 = 0.046875
C06 = 0.01953125
C08 = 0.01068115234375
C22 = 0.75
C44 = 0.46875
C46 = 0.01302083333333333333
C48 = 0.00712076822916666666
C66 = 0.36458333333333333333
C68 = 0.00569661458333333333
C88 = 0.3076171875


class SolveResult(NamedTuple):
    """Outcome of `iterative_solve`.

    Attributes
    ----------
    value : float
        Last iterate. Meaningless when ``converged`` is False.
    converged : bool
        Whether the last correction met the tolerance.
    iterations : int
        Number of corrections applied.
    """
    value: float
    converged: bool
    iterations: int


def normalize_longitude(angle: float) -> float:
    """Wrap a longitude into (-π, π].

    Parameters
    ----------
    angle : float
        Longitude in radians.

    Returns
    -------
    float
        Equivalent longitude in (-π, π]. NaN is returned unchanged.

    Raises
    ------
    InvalidCoordinateError
        If the longitude is infinite.
    """
    if math.isnan(angle):
        return angle
    if math.isinf(angle):
        raise InvalidCoordinateError("Infinite longitude")
    if -math.pi < angle <= math.pi:
        return angle
    angle = math.fmod(angle, TWO_PI)
    if angle > math.pi:
        angle -= TWO_PI
    elif angle <= -math.pi:
        angle += TWO_PI
    return angle


def normalize_longitude_deg(lon_deg):
    """Vectorised wrap of longitudes in degrees into (-180, 180]."""
    lon = np.asarray(lon_deg, dtype=np.float64)
    wrapped = 180.0 - np.mod(180.0 - lon, 360.0)
    return np.where(np.isnan(lon), lon, wrapped)


def meridian_arc_series(es: float) -> Tuple[float, float, float, float, float]:
    """Precompute the meridian distance series for an eccentricity.

    Parameters
    ----------
    es : float
        First eccentricity squared.

    Returns
    -------
    tuple of float
        The five series coefficients consumed by `meridian_distance`.

    Raises
    ------
    ProjectionConfigurationError
        If ``es`` is outside [0, 1); the series has no meaning there.
    """
    if not math.isfinite(es) or es < 0.0 or es >= 1.0:
        raise ProjectionConfigurationError(
            f"Cannot compute meridian series for eccentricity squared {es}"
        )
    en0 = C00 - es * (C02 + es * (C04 + es * (C06 + es * C08)))
    en1 = es * (C22 - es * (C04 + es * (C06 + es * C08)))
    t = es * es
    en2 = t * (C44 - es * (C46 + es * C48))
    t *= es
    en3 = t * (C66 - es * C68)
    en4 = t * es * C88
    return en0, en1, en2, en3, en4


def meridian_distance(
    phi: float,
    sin_phi: float,
    cos_phi: float,
    en: Tuple[float, ...]
) -> float:
    """Meridian arc length from the equator to ``phi``.

    Parameters
    ----------
    phi : float
        Latitude in radians.
    sin_phi, cos_phi : float
        Precomputed sin and cos of ``phi``.
    en : tuple of float
        Coefficients from `meridian_arc_series`.

    Returns
    -------
    float
        Arc length in units of the semi-major axis.
    """
    cos_phi *= sin_phi
    sin_phi *= sin_phi
    return en[0] * phi - cos_phi * (en[1] + sin_phi * (en[2] + sin_phi * (en[3] + sin_phi * en[4])))


def parallel_radius_factor(sin_phi: float, cos_phi: float, es: float) -> float:
    """Radius of the parallel at ``phi`` in units of the semi-major axis."""
    return cos_phi / np.sqrt(1.0 - es * sin_phi * sin_phi)


def iterative_solve(
    initial_guess: float,
    max_iterations: int,
    tolerance: float,
    step: Callable[[float], float]
) -> SolveResult:
    """Run a bounded Newton-style iteration.

    ``step`` maps the current iterate to a correction; the iterate is
    advanced by that correction until its magnitude is at or below
    ``tolerance`` or ``max_iterations`` corrections have been applied.

    Parameters
    ----------
    initial_guess : float
        Starting iterate.
    max_iterations : int
        Upper bound on the number of corrections.
    tolerance : float
        Absolute convergence threshold on the correction.
    step : callable
        ``step(value) -> correction``. Exceptions it raises propagate.

    Returns
    -------
    SolveResult
        Final iterate and whether it converged. A NaN correction never
        converges.
    """
    value = initial_guess
    for iteration in range(1, max_iterations + 1):
        delta = step(value)
        value += delta
        if abs(delta) <= tolerance:
            return SolveResult(value, True, iteration)
    logger.debug(
        f"Iteration did not converge after {max_iterations} steps "
        f"(last value {value!r})"
    )
    return SolveResult(value, False, max_iterations)
