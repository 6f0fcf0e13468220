"""
American Polyconic Projection.

Each parallel is projected as an arc of its own cone, true to scale, and
the central meridian is straight and true to scale. Used for large-scale
mapping of areas that extend north-south, and by survey-of-India grids.

Implementation
--------------
Two code paths share one parameter model. The spherical path is chosen
when the ellipsoid's eccentricity squared is zero, the ellipsoidal path
otherwise. Both inverses are Newton iterations run through
`geoloc.mapmath.iterative_solve`:

- spherical: at most 10 corrections, tolerance 1e-10 rad
- ellipsoidal: at most 20 corrections, tolerance 1e-12 rad

Non-convergence returns a NaN point, and so does a root past either pole,
which the iteration can reach for points off the map. A cos(latitude)
underflow inside the ellipsoidal iteration raises `NumericInstabilityError`
instead: the solver has lost precision rather than converging slowly.

Projected coordinates are kilometers: unit-sphere results are scaled by
the major axis in km, then false easting/northing are added.

References
----------
- Snyder, J.P. (1987). Map Projections - A Working Manual, pp. 124-137.
- Evenden, G.I. PROJ.4 library, PJ_poly.c.
"""

import math
from typing import Optional, Tuple, Union

import numpy as np

from common.constants import SolverSettings
from common.exceptions import NumericInstabilityError
from common.logging_config import get_logger
from common.types import GeoPoint, ProjectedPoint
from common.units import Q_, QuantityLike, as_degrees, as_kilometers
from geoloc.base import Projection
from geoloc.ellipsoid import EARTH_SPHERE, Ellipsoid, get_ellipsoid
from geoloc.mapmath import (
    iterative_solve,
    meridian_arc_series,
    meridian_distance,
    normalize_longitude,
    parallel_radius_factor,
)
from geoloc.parameters import (
    ECCENTRICITY_SQUARED,
    FALSE_EASTING,
    FALSE_NORTHING,
    GRID_MAPPING_NAME,
    INVERSE_FLATTENING,
    LATITUDE_OF_PROJECTION_ORIGIN,
    LONGITUDE_OF_CENTRAL_MERIDIAN,
    SEMI_MAJOR_AXIS,
    UNITS,
    ProjectionParameters,
)
from geoloc.registry import register_projection

logger = get_logger(__name__)

TOL = SolverSettings.LATITUDE_TOLERANCE
CONV = SolverSettings.SPHERICAL_CONVERGENCE
N_ITER = SolverSettings.SPHERICAL_MAX_ITERATIONS
I_ITER = SolverSettings.ELLIPSOIDAL_MAX_ITERATIONS
ITOL = SolverSettings.ELLIPSOIDAL_TOLERANCE
HALF_PI = 0.5 * math.pi


@register_projection
class Polyconic(Projection):
    """Polyconic projection on a sphere or an ellipsoid.

    Parameters
    ----------
    origin_lat : float or pint.Quantity
        Latitude of the projection origin, degrees.
    origin_lon : float or pint.Quantity
        Longitude of the central meridian, degrees.
    false_easting : float or pint.Quantity
        Added to x; bare numbers are kilometers.
    false_northing : float or pint.Quantity
        Added to y; bare numbers are kilometers.
    ellipsoid : Ellipsoid or str
        Earth figure, or the name of a reference ellipsoid. Defaults to
        the 6371229 m sphere.

    Raises
    ------
    ProjectionConfigurationError
        If the ellipsoid's meridian series cannot be computed, or a
        parameter has the wrong units.

    Examples
    --------
    >>> from geoloc.ellipsoid import WGS84
    >>> proj = Polyconic(40.0, -96.0, ellipsoid=WGS84)
    >>> pt = proj.forward(GeoPoint(-90.0, 45.0))
    >>> back = proj.inverse(pt)
    """

    grid_mapping_name = "polyconic"

    def __init__(
        self,
        origin_lat: QuantityLike = 23.56,
        origin_lon: QuantityLike = 76.54,
        false_easting: QuantityLike = 0.0,
        false_northing: QuantityLike = 0.0,
        ellipsoid: Union[Ellipsoid, str] = EARTH_SPHERE
    ):
        if isinstance(ellipsoid, str):
            ellipsoid = get_ellipsoid(ellipsoid)

        lat0 = as_degrees(origin_lat, LATITUDE_OF_PROJECTION_ORIGIN)
        lon0 = as_degrees(origin_lon, LONGITUDE_OF_CENTRAL_MERIDIAN)
        self._false_easting = as_kilometers(false_easting, FALSE_EASTING)
        self._false_northing = as_kilometers(false_northing, FALSE_NORTHING)

        self._lat0 = lat0
        self._lon0 = lon0
        self._phi0 = math.radians(lat0)
        self._lam0 = math.radians(lon0)
        self._es = ellipsoid.eccentricity_squared
        self._one_es = 1.0 - self._es
        self._spherical = self._es == 0.0
        self._total_scale = ellipsoid.major_axis_km

        self._en: Optional[Tuple[float, ...]]
        if self._spherical:
            self._en = None
            self._ml0 = -self._phi0
        else:
            self._en = meridian_arc_series(self._es)
            self._ml0 = meridian_distance(
                self._phi0, math.sin(self._phi0), math.cos(self._phi0), self._en
            )

        items = [
            (GRID_MAPPING_NAME, self.grid_mapping_name),
            (LATITUDE_OF_PROJECTION_ORIGIN, lat0),
            (LONGITUDE_OF_CENTRAL_MERIDIAN, lon0),
        ]
        if self._false_easting != 0.0 or self._false_northing != 0.0:
            items += [
                (FALSE_EASTING, self._false_easting),
                (FALSE_NORTHING, self._false_northing),
                (UNITS, "km"),
            ]
        items.append((SEMI_MAJOR_AXIS, ellipsoid.major_axis_m))
        if not self._spherical:
            items.append((INVERSE_FLATTENING, ellipsoid.inverse_flattening))
            if ellipsoid.defining_inverse_flattening is None:
                items.append((ECCENTRICITY_SQUARED, self._es))

        super().__init__("Polyconic", False, ProjectionParameters(items), ellipsoid)
        logger.debug(f"Constructed {self!r}")

    @classmethod
    def from_parameters(cls, parameters) -> 'Polyconic':
        units = parameters.get(UNITS, "km")
        major_axis = parameters.get(SEMI_MAJOR_AXIS, EARTH_SPHERE.major_axis_m)
        if ECCENTRICITY_SQUARED in parameters:
            ellipsoid = Ellipsoid(major_axis, parameters[ECCENTRICITY_SQUARED])
        else:
            ellipsoid = Ellipsoid.from_flattening(
                major_axis, parameters.get(INVERSE_FLATTENING, 0.0)
            )
        return cls(
            parameters.get(LATITUDE_OF_PROJECTION_ORIGIN, 0.0),
            parameters.get(LONGITUDE_OF_CENTRAL_MERIDIAN, 0.0),
            Q_(parameters.get(FALSE_EASTING, 0.0), units),
            Q_(parameters.get(FALSE_NORTHING, 0.0), units),
            ellipsoid,
        )

    # -- accessors ---------------------------------------------------------

    @property
    def origin_lat(self) -> float:
        """Origin latitude in degrees."""
        return self._lat0

    @property
    def origin_lon(self) -> float:
        """Central meridian in degrees."""
        return self._lon0

    @property
    def false_easting(self) -> float:
        """False easting in km."""
        return self._false_easting

    @property
    def false_northing(self) -> float:
        """False northing in km."""
        return self._false_northing

    @property
    def is_spherical(self) -> bool:
        return self._spherical

    @property
    def ml0(self) -> float:
        """Meridian distance of the origin (``-phi0`` on a sphere)."""
        return self._ml0

    @property
    def meridian_coefficients(self) -> Optional[Tuple[float, ...]]:
        return self._en

    @property
    def total_scale(self) -> float:
        """Major axis in km; unit-sphere coordinates are multiplied by it."""
        return self._total_scale

    @property
    def type_label(self) -> str:
        return "Polyconic Projection"

    @property
    def proj4_string(self) -> str:
        earth = self._ellipsoid
        if self._spherical:
            shape = f"+R={earth.major_axis_m!r}"
        elif earth.defining_inverse_flattening is None:
            shape = f"+a={earth.major_axis_m!r} +es={earth.eccentricity_squared!r}"
        else:
            shape = f"+a={earth.major_axis_m!r} +rf={earth.inverse_flattening!r}"
        return (
            f"+proj=poly +lat_0={self.origin_lat!r} +lon_0={self.origin_lon!r} "
            f"+x_0={self._false_easting * 1000.0!r} +y_0={self._false_northing * 1000.0!r} "
            f"{shape} +units=km +no_defs"
        )

    # -- unit-sphere transforms ----------------------------------------------

    def _project(self, lam: float, phi: float) -> Tuple[float, float]:
        if self._spherical:
            if abs(phi) <= TOL:
                return lam, self._ml0
            cot = 1.0 / np.tan(phi)
            e = lam * np.sin(phi)
            return np.sin(e) * cot, phi - self._phi0 + cot * (1.0 - np.cos(e))

        if abs(phi) <= TOL:
            return lam, -self._ml0
        sp = np.sin(phi)
        cp = np.cos(phi)
        ms = parallel_radius_factor(sp, cp, self._es) / sp if abs(cp) > TOL else 0.0
        e = lam * sp
        y = (meridian_distance(phi, sp, cp, self._en) - self._ml0) + ms * (1.0 - np.cos(e))
        return ms * np.sin(e), y

    def _project_inverse(self, x: float, y: float) -> Tuple[float, float]:
        if self._spherical:
            return self._inverse_spherical(x, y)
        return self._inverse_ellipsoidal(x, y)

    def _inverse_spherical(self, x: float, y: float) -> Tuple[float, float]:
        y = self._phi0 + y
        if abs(y) <= TOL:
            return x, 0.0

        b = x * x + y * y

        def step(phi):
            tp = np.tan(phi)
            return -(y * (phi * tp + 1.0) - phi - 0.5 * (phi * phi + b) * tp) / ((phi - y) / tp - 1.0)

        result = iterative_solve(y, N_ITER, CONV, step)
        phi = result.value
        if not result.converged or abs(phi) > HALF_PI + TOL:
            return math.nan, math.nan
        return np.arcsin(x * np.tan(phi)) / np.sin(phi), phi

    def _inverse_ellipsoidal(self, x: float, y: float) -> Tuple[float, float]:
        es = self._es
        en = self._en
        y = y + self._ml0
        if abs(y) <= TOL:
            return x, 0.0

        r = y * y + x * x

        def step(phi):
            sp = np.sin(phi)
            cp = np.cos(phi)
            if abs(cp) < ITOL:
                raise NumericInstabilityError(
                    f"cos(latitude) underflow at phi={phi!r} in polyconic inverse"
                )
            s2ph = sp * cp
            mlp = np.sqrt(1.0 - es * sp * sp)
            c = sp * mlp / cp
            ml = meridian_distance(phi, sp, cp, en)
            mlb = ml * ml + r
            mlp = self._one_es / (mlp * mlp * mlp)
            return (ml + ml + c * mlb - 2.0 * y * (c * ml + 1.0)) / (
                es * s2ph * (mlb - 2.0 * y * ml) / c
                + 2.0 * (y - ml) * (c * mlp - 1.0 / s2ph)
                - mlp - mlp
            )

        result = iterative_solve(y, I_ITER, ITOL, step)
        phi = result.value
        if not result.converged or abs(phi) > HALF_PI + TOL:
            return math.nan, math.nan
        c = np.sin(phi)
        return np.arcsin(x * np.tan(phi) * np.sqrt(1.0 - es * c * c)) / np.sin(phi), phi

    # -- public transforms ---------------------------------------------------

    def forward(self, point: GeoPoint) -> ProjectedPoint:
        phi = np.float64(math.radians(point.latitude))
        lam = normalize_longitude(math.radians(point.longitude) - self._lam0)
        with np.errstate(all='ignore'):
            x, y = self._project(np.float64(lam), phi)
        if math.isnan(x) or math.isnan(y):
            return ProjectedPoint.nan()
        return ProjectedPoint(
            float(self._total_scale * x + self._false_easting),
            float(self._total_scale * y + self._false_northing)
        )

    def inverse(self, point: ProjectedPoint) -> GeoPoint:
        x = np.float64((point.x - self._false_easting) / self._total_scale)
        y = np.float64((point.y - self._false_northing) / self._total_scale)
        with np.errstate(all='ignore'):
            lam, phi = self._project_inverse(x, y)
        if math.isnan(lam) or math.isnan(phi):
            logger.debug(f"No inverse for {point} in {self!r}")
            return GeoPoint.nan()

        if lam < -math.pi:
            lam = -math.pi
        elif lam > math.pi:
            lam = math.pi
        lam = normalize_longitude(float(lam) + self._lam0)
        return GeoPoint.from_radians(lam, float(phi))

    def cross_seam(self, pt1: ProjectedPoint, pt2: ProjectedPoint) -> bool:
        """True when the line between two points crosses the seam at lon0 ± 180.

        Opposite-signed x values further apart than the seam threshold are
        taken to wrap around; points at infinity always cross.
        """
        if pt1.is_infinite() or pt2.is_infinite():
            return True
        return (pt1.x * pt2.x < 0) and (abs(pt1.x - pt2.x) > SolverSettings.SEAM_THRESHOLD_KM)

    def params_to_string(self) -> str:
        return (
            f"origin lat={self.origin_lat:f}, origin lon={self.origin_lon:f} "
            f"earth={self._ellipsoid}"
        )

    def construct_copy(self) -> 'Polyconic':
        return Polyconic(
            self.origin_lat, self.origin_lon,
            self._false_easting, self._false_northing,
            self._ellipsoid
        )

    def _identity(self):
        return (self._phi0, self._lam0, self._ellipsoid)
