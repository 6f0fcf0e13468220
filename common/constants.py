"""
Reference Constants and Solver Settings for the Projection Engine.

This module provides the defining constants of the reference ellipsoids
with their provenance, and the numeric settings (tolerances, iteration caps,
seam threshold) shared by every projection. All constants are defined
with SI units unless stated otherwise and traceable to authoritative sources.

References
----------
- WGS84 parameters: NIMA TR8350.2, Third Edition, 2000
- GRS80 parameters: Moritz, H. (2000). Geodetic Reference System 1980.
- Historical ellipsoids: Snyder, J.P. (1987). Map Projections - A Working
  Manual. USGS Prof. Paper 1395, Table 1.
- Solver settings: USGS PROJ `poly` implementation (Evenden, Warmerdam).
"""

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True)
class Constant:
    """A defining constant with uncertainty and provenance.

    Attributes
    ----------
    value : float
        The nominal value of the constant.
    uncertainty : float
        The standard uncertainty (1-sigma) of the constant.
    unit : str
        The unit of the constant.
    source : str
        Reference for the constant value.
    description : str
        Human-readable description of the constant.
    """
    value: float
    uncertainty: float
    unit: str
    source: str
    description: str


class ReferenceConstants:
    """Registry of reference ellipsoid defining constants.

    Each ellipsoid is defined by its semi-major axis and inverse flattening
    (or a radius for a sphere). Eccentricity and minor axis are derived in
    `geoloc.ellipsoid`.
    """

    # =========================================================================
    # WGS84
    # Reference: NIMA TR8350.2, Third Edition, 2000
    # =========================================================================

    WGS84_SEMI_MAJOR_AXIS: Final[Constant] = Constant(
        value=6_378_137.0,
        uncertainty=0.0,  # Defined exactly
        unit="m",
        source="WGS84, NIMA TR8350.2",
        description="Semi-major axis (equatorial radius) of WGS84 ellipsoid"
    )

    WGS84_INVERSE_FLATTENING: Final[Constant] = Constant(
        value=298.257223563,
        uncertainty=0.0,  # Defined exactly
        unit="dimensionless",
        source="WGS84, NIMA TR8350.2",
        description="Inverse flattening 1/f of WGS84 ellipsoid"
    )

    # =========================================================================
    # GRS80
    # =========================================================================

    GRS80_SEMI_MAJOR_AXIS: Final[Constant] = Constant(
        value=6_378_137.0,
        uncertainty=0.0,
        unit="m",
        source="Moritz (2000), Geodetic Reference System 1980",
        description="Semi-major axis of GRS80 ellipsoid"
    )

    GRS80_INVERSE_FLATTENING: Final[Constant] = Constant(
        value=298.257222101,
        uncertainty=1e-9,  # Derived from J2
        unit="dimensionless",
        source="Moritz (2000), Geodetic Reference System 1980",
        description="Inverse flattening 1/f of GRS80 ellipsoid"
    )

    # =========================================================================
    # Historical ellipsoids
    # =========================================================================

    CLARKE_1866_SEMI_MAJOR_AXIS: Final[Constant] = Constant(
        value=6_378_206.4,
        uncertainty=0.0,
        unit="m",
        source="Snyder (1987), Table 1",
        description="Semi-major axis of Clarke 1866 ellipsoid (NAD27)"
    )

    CLARKE_1866_INVERSE_FLATTENING: Final[Constant] = Constant(
        value=294.978698214,
        uncertainty=0.0,
        unit="dimensionless",
        source="Snyder (1987), Table 1",
        description="Inverse flattening of Clarke 1866 ellipsoid"
    )

    AIRY_1830_SEMI_MAJOR_AXIS: Final[Constant] = Constant(
        value=6_377_563.396,
        uncertainty=0.0,
        unit="m",
        source="Ordnance Survey, A guide to coordinate systems in Great Britain",
        description="Semi-major axis of Airy 1830 ellipsoid (OSGB36)"
    )

    AIRY_1830_INVERSE_FLATTENING: Final[Constant] = Constant(
        value=299.3249646,
        uncertainty=0.0,
        unit="dimensionless",
        source="Ordnance Survey, A guide to coordinate systems in Great Britain",
        description="Inverse flattening of Airy 1830 ellipsoid"
    )

    INTERNATIONAL_1924_SEMI_MAJOR_AXIS: Final[Constant] = Constant(
        value=6_378_388.0,
        uncertainty=0.0,
        unit="m",
        source="Snyder (1987), Table 1",
        description="Semi-major axis of International (Hayford) 1924 ellipsoid"
    )

    INTERNATIONAL_1924_INVERSE_FLATTENING: Final[Constant] = Constant(
        value=297.0,
        uncertainty=0.0,
        unit="dimensionless",
        source="Snyder (1987), Table 1",
        description="Inverse flattening of International 1924 ellipsoid"
    )

    # =========================================================================
    # Spherical earth
    # =========================================================================

    EARTH_SPHERE_RADIUS: Final[Constant] = Constant(
        value=6_371_229.0,
        uncertainty=0.0,  # Conventional
        unit="m",
        source="WMO GRIB edition 1/2 code table (shape of the earth = 6)",
        description="Radius of the spherical earth used by gridded model output"
    )


class SolverSettings:
    """Numeric settings shared by the projection transforms.

    Angles are in radians, linear thresholds in kilometers.
    """

    # Latitudes within this distance of zero take the degenerate shortcut
    LATITUDE_TOLERANCE: Final[float] = 1e-10

    # Spherical polyconic inverse Newton iteration
    SPHERICAL_CONVERGENCE: Final[float] = 1e-10
    SPHERICAL_MAX_ITERATIONS: Final[int] = 10

    # Ellipsoidal polyconic inverse Newton iteration; also the cos(phi)
    # underflow guard
    ELLIPSOIDAL_TOLERANCE: Final[float] = 1e-12
    ELLIPSOIDAL_MAX_ITERATIONS: Final[int] = 20

    # Opposite-signed x values further apart than this cross the seam
    SEAM_THRESHOLD_KM: Final[float] = 20000.0
