"""
Map Projection Engine.

Coordinate transforms between geographic longitude/latitude and a
projected planar space. All projections are immutable values: forward and
inverse are pure functions, copies are equal to their originals, and the
defining parameters can be exported and rebuilt through the registry.

This module provides:
- Reference ellipsoids and radii of curvature
- Numeric solver utilities shared by the projections
- The `Projection` capability with the `RotatedPole` and `Polyconic` variants
- A grid-mapping-name registry
- Tissot distortion analysis
"""

from geoloc.ellipsoid import (
    Ellipsoid,
    WGS84,
    GRS80,
    CLARKE_1866,
    AIRY_1830,
    INTERNATIONAL_1924,
    EARTH_SPHERE,
    get_ellipsoid,
    radius_of_curvature_meridian,
    radius_of_curvature_prime_vertical,
)

from geoloc.mapmath import (
    SolveResult,
    normalize_longitude,
    normalize_longitude_deg,
    meridian_arc_series,
    meridian_distance,
    parallel_radius_factor,
    iterative_solve,
)

from geoloc.parameters import ProjectionParameters
from geoloc.base import Projection
from geoloc.registry import (
    register_projection,
    get_projection_class,
    available_projections,
    projection_from_parameters,
)

# Importing the variants registers them
from geoloc.rotated_pole import RotatedPole, rotate_lonlat
from geoloc.polyconic import Polyconic

from geoloc.distortion import TissotIndicatrix, compute_tissot_indicatrix

__all__ = [
    # Ellipsoids
    "Ellipsoid",
    "WGS84",
    "GRS80",
    "CLARKE_1866",
    "AIRY_1830",
    "INTERNATIONAL_1924",
    "EARTH_SPHERE",
    "get_ellipsoid",
    "radius_of_curvature_meridian",
    "radius_of_curvature_prime_vertical",
    # Numeric utilities
    "SolveResult",
    "normalize_longitude",
    "normalize_longitude_deg",
    "meridian_arc_series",
    "meridian_distance",
    "parallel_radius_factor",
    "iterative_solve",
    # Projections
    "ProjectionParameters",
    "Projection",
    "RotatedPole",
    "rotate_lonlat",
    "Polyconic",
    # Registry
    "register_projection",
    "get_projection_class",
    "available_projections",
    "projection_from_parameters",
    # Distortion
    "TissotIndicatrix",
    "compute_tissot_indicatrix",
]
