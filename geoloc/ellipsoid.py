"""
Reference Ellipsoid Model.

This module implements the earth figure consumed by the projections: a
major axis and a first eccentricity squared. A sphere is the special case
of zero eccentricity, and the projections select their spherical code path
from it.

Scientific Context
------------------
Domain: Geodesy, Earth geometry
Model: Oblate ellipsoid of revolution

Ellipsoids are compared by value: two instances with the same major axis
and eccentricity are the same earth, whatever their names. They are frozen
and shared between projections.

References
----------
- NIMA TR8350.2: WGS84 parameters
- Torge, W. (2001). Geodesy (3rd ed.). de Gruyter.
- Snyder, J.P. (1987). Map Projections - A Working Manual. Table 1.
"""

from dataclasses import dataclass, field
import math
from typing import Dict, Optional

import numpy as np

from common.constants import ReferenceConstants
from common.exceptions import ProjectionConfigurationError


@dataclass(frozen=True)
class Ellipsoid:
    """Parameters defining a reference ellipsoid.

    Attributes
    ----------
    major_axis_m : float
        Semi-major axis (equatorial radius) in meters.
    eccentricity_squared : float
        First eccentricity squared: e² = (a² - b²) / a². Zero for a sphere.
    name : str
        Identifier for the ellipsoid. Not part of equality.
    defining_inverse_flattening : float, optional
        The 1/f the ellipsoid was defined from, kept so that exported
        parameters rebuild a bit-identical ellipsoid. Not part of equality.

    Derived Parameters
    ------------------
    minor_axis_m : float
        Semi-minor axis (polar radius) in meters.
    flattening : float
        f = (a - b) / a
    inverse_flattening : float
        1 / f, infinite for a sphere.
    """
    major_axis_m: float
    eccentricity_squared: float
    name: str = field(default="", compare=False)
    defining_inverse_flattening: Optional[float] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        """Validate the defining parameters."""
        if not math.isfinite(self.major_axis_m) or self.major_axis_m <= 0.0:
            raise ProjectionConfigurationError(
                f"Ellipsoid major axis must be positive and finite, got {self.major_axis_m}"
            )
        es = self.eccentricity_squared
        if not math.isfinite(es) or es < 0.0 or es >= 1.0:
            raise ProjectionConfigurationError(
                f"Ellipsoid eccentricity squared must be in [0, 1), got {es}"
            )

    @classmethod
    def from_flattening(
        cls,
        major_axis_m: float,
        inverse_flattening: float,
        name: str = ""
    ) -> 'Ellipsoid':
        """Build an ellipsoid from a and 1/f.

        An inverse flattening of zero or infinity denotes a sphere.

        Raises
        ------
        ProjectionConfigurationError
            If ``inverse_flattening`` is NaN or in (0, 1], which gives a
            flattening of at least 1.
        """
        if inverse_flattening == 0.0 or math.isinf(inverse_flattening):
            return cls.sphere(major_axis_m, name)
        if math.isnan(inverse_flattening) or 0.0 < inverse_flattening <= 1.0:
            raise ProjectionConfigurationError(
                f"Inverse flattening must be greater than 1, got {inverse_flattening}"
            )
        f = 1.0 / inverse_flattening
        return cls(major_axis_m, f * (2.0 - f), name, inverse_flattening)

    @classmethod
    def sphere(cls, radius_m: float, name: str = "") -> 'Ellipsoid':
        return cls(radius_m, 0.0, name)

    @property
    def is_spherical(self) -> bool:
        return self.eccentricity_squared == 0.0

    @property
    def major_axis_km(self) -> float:
        return self.major_axis_m * 0.001

    @property
    def minor_axis_m(self) -> float:
        """Semi-minor axis in meters."""
        return self.major_axis_m * math.sqrt(1.0 - self.eccentricity_squared)

    @property
    def flattening(self) -> float:
        return 1.0 - math.sqrt(1.0 - self.eccentricity_squared)

    @property
    def inverse_flattening(self) -> float:
        if self.defining_inverse_flattening is not None:
            return self.defining_inverse_flattening
        f = self.flattening
        return math.inf if f == 0.0 else 1.0 / f

    @property
    def second_eccentricity_squared(self) -> float:
        """Second eccentricity squared: e'² = e² / (1 - e²)."""
        return self.eccentricity_squared / (1.0 - self.eccentricity_squared)

    def __str__(self) -> str:
        label = self.name or "custom"
        return f"{label}(a={self.major_axis_m}, es={self.eccentricity_squared})"


WGS84 = Ellipsoid.from_flattening(
    ReferenceConstants.WGS84_SEMI_MAJOR_AXIS.value,
    ReferenceConstants.WGS84_INVERSE_FLATTENING.value,
    name="WGS84"
)

GRS80 = Ellipsoid.from_flattening(
    ReferenceConstants.GRS80_SEMI_MAJOR_AXIS.value,
    ReferenceConstants.GRS80_INVERSE_FLATTENING.value,
    name="GRS80"
)

CLARKE_1866 = Ellipsoid.from_flattening(
    ReferenceConstants.CLARKE_1866_SEMI_MAJOR_AXIS.value,
    ReferenceConstants.CLARKE_1866_INVERSE_FLATTENING.value,
    name="Clarke 1866"
)

AIRY_1830 = Ellipsoid.from_flattening(
    ReferenceConstants.AIRY_1830_SEMI_MAJOR_AXIS.value,
    ReferenceConstants.AIRY_1830_INVERSE_FLATTENING.value,
    name="Airy 1830"
)

INTERNATIONAL_1924 = Ellipsoid.from_flattening(
    ReferenceConstants.INTERNATIONAL_1924_SEMI_MAJOR_AXIS.value,
    ReferenceConstants.INTERNATIONAL_1924_INVERSE_FLATTENING.value,
    name="International 1924"
)

# Default earth of the projections
EARTH_SPHERE = Ellipsoid.sphere(
    ReferenceConstants.EARTH_SPHERE_RADIUS.value,
    name="spherical_earth"
)

_NAMED_ELLIPSOIDS: Dict[str, Ellipsoid] = {
    "wgs84": WGS84,
    "grs80": GRS80,
    "clarke1866": CLARKE_1866,
    "airy1830": AIRY_1830,
    "international1924": INTERNATIONAL_1924,
    "sphere": EARTH_SPHERE,
}


def get_ellipsoid(name: str) -> Ellipsoid:
    """Look up a named reference ellipsoid.

    Matching ignores case, spaces, underscores and hyphens, so
    ``"Clarke 1866"`` and ``"clarke_1866"`` are the same.

    Raises
    ------
    ProjectionConfigurationError
        If the name is unknown.
    """
    key = name.lower().replace(" ", "").replace("_", "").replace("-", "")
    try:
        return _NAMED_ELLIPSOIDS[key]
    except KeyError:
        raise ProjectionConfigurationError(
            f"Unknown ellipsoid '{name}'. Known: {sorted(_NAMED_ELLIPSOIDS)}"
        ) from None


def radius_of_curvature_meridian(
    latitude_rad: float,
    ellipsoid: Ellipsoid = WGS84
) -> float:
    """Compute the radius of curvature in the meridian plane.

    Parameters
    ----------
    latitude_rad : float
        Geodetic latitude in radians.
    ellipsoid : Ellipsoid
        Reference ellipsoid (default: WGS84).

    Returns
    -------
    float
        Radius of curvature M in meters.

    Notes
    -----
    M = a(1 - e²) / (1 - e² sin²φ)^(3/2)
    """
    e2 = ellipsoid.eccentricity_squared
    sin_lat = np.sin(latitude_rad)
    denominator = (1 - e2 * sin_lat**2) ** 1.5
    return ellipsoid.major_axis_m * (1 - e2) / denominator


def radius_of_curvature_prime_vertical(
    latitude_rad: float,
    ellipsoid: Ellipsoid = WGS84
) -> float:
    """Compute the radius of curvature in the prime vertical.

    Parameters
    ----------
    latitude_rad : float
        Geodetic latitude in radians.
    ellipsoid : Ellipsoid
        Reference ellipsoid (default: WGS84).

    Returns
    -------
    float
        Radius of curvature N in meters.

    Notes
    -----
    N = a / (1 - e² sin²φ)^(1/2)
    """
    sin_lat = np.sin(latitude_rad)
    denominator = np.sqrt(1 - ellipsoid.eccentricity_squared * sin_lat**2)
    return ellipsoid.major_axis_m / denominator
