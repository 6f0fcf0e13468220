"""
Rotated Latitude/Longitude Grid.

GRIB-1 grid type 10 and GRIB-2 template 3.1. Model output on a rotated grid
is stored in rotated longitude/latitude; this projection converts between
those and true geographic coordinates. The X/Y axes only make sense in the
rotated frame, so projected coordinates are degrees.

Scientific Context
------------------
The grid's south pole sits at (``south_pole_lat``, ``south_pole_lon``) and
the grid is spun by ``south_pole_angle`` about it. A point is rotated as a
unit vector about the y axis by the pole's angular offset from the true
south pole, ``dlat = south_pole_lat - (-90°)``.

The inverse is the same rotation with negated parameters,
``rotate(p, -angle, -lon_pole, -sin(dlat))``. This symmetry is exact, so
forward then inverse returns the original point to floating tolerance.
"""

from typing import Tuple

import numpy as np
from numpy.typing import ArrayLike, NDArray

from common.logging_config import get_logger
from common.types import GeoPoint, ProjectedPoint
from common.units import QuantityLike, as_degrees
from geoloc.base import Projection
from geoloc.mapmath import normalize_longitude_deg
from geoloc.parameters import (
    GRID_MAPPING_NAME,
    GRID_SOUTH_POLE_ANGLE,
    GRID_SOUTH_POLE_LATITUDE,
    GRID_SOUTH_POLE_LONGITUDE,
    ProjectionParameters,
)
from geoloc.registry import register_projection

logger = get_logger(__name__)


def rotate_lonlat(
    lon: ArrayLike,
    lat: ArrayLike,
    rot1: float,
    rot2: float,
    sin_dlat: float,
    cos_dlat: float
) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Rotate longitude/latitude about the y axis.

    Parameters
    ----------
    lon, lat : array_like
        Coordinates in degrees.
    rot1 : float
        Longitude shift applied before the rotation, in degrees.
    rot2 : float
        Longitude shift applied after the rotation, in degrees.
    sin_dlat, cos_dlat : float
        Sine and cosine of the rotation angle.

    Returns
    -------
    Tuple[ndarray, ndarray]
        Rotated (lon, lat) in degrees. A vector on the rotation axis has
        ``atan2(0, 0) == 0`` as its longitude.
    """
    e = np.radians(np.asarray(lon, dtype=np.float64) - rot1)
    n = np.radians(np.asarray(lat, dtype=np.float64))
    cn = np.cos(n)
    x = cn * np.cos(e)
    y = cn * np.sin(e)
    z = np.sin(n)
    x2 = cos_dlat * x + sin_dlat * z
    z2 = -sin_dlat * x + cos_dlat * z
    r = np.sqrt(x2 * x2 + y * y)
    e2 = np.arctan2(y, x2)
    n2 = np.arctan2(z2, r)
    return np.degrees(e2) - rot2, np.degrees(n2)


@register_projection
class RotatedPole(Projection):
    """Rotated latitude/longitude projection.

    Parameters
    ----------
    south_pole_lat : float or pint.Quantity
        Latitude of the grid's south pole, degrees.
    south_pole_lon : float or pint.Quantity
        Longitude of the grid's south pole, degrees.
    south_pole_angle : float or pint.Quantity
        Rotation of the grid about its south pole, degrees.

    Notes
    -----
    `cross_seam` always returns False. Rotated grids are treated as having
    no seam, which undercounts artifacts for lines that cross ±180° of
    rotated longitude.
    """

    grid_mapping_name = "rotated_latlon_grib"

    def __init__(
        self,
        south_pole_lat: QuantityLike = 0.0,
        south_pole_lon: QuantityLike = 0.0,
        south_pole_angle: QuantityLike = 0.0
    ):
        lat_pole = as_degrees(south_pole_lat, GRID_SOUTH_POLE_LATITUDE)
        lon_pole = as_degrees(south_pole_lon, GRID_SOUTH_POLE_LONGITUDE)
        pole_rotate = as_degrees(south_pole_angle, GRID_SOUTH_POLE_ANGLE)

        parameters = ProjectionParameters([
            (GRID_MAPPING_NAME, self.grid_mapping_name),
            (GRID_SOUTH_POLE_LATITUDE, lat_pole),
            (GRID_SOUTH_POLE_LONGITUDE, lon_pole),
            (GRID_SOUTH_POLE_ANGLE, pole_rotate),
        ])
        super().__init__("RotatedLatLon", False, parameters, angular_units=True)

        self._lat_pole = lat_pole
        self._lon_pole = lon_pole
        self._pole_rotate = pole_rotate
        dlat_rad = np.radians(lat_pole - (-90.0))
        self._sin_dlat = float(np.sin(dlat_rad))
        self._cos_dlat = float(np.cos(dlat_rad))

        logger.debug(f"Constructed {self!r}")

    @classmethod
    def from_parameters(cls, parameters) -> 'RotatedPole':
        return cls(
            parameters.get(GRID_SOUTH_POLE_LATITUDE, 0.0),
            parameters.get(GRID_SOUTH_POLE_LONGITUDE, 0.0),
            parameters.get(GRID_SOUTH_POLE_ANGLE, 0.0),
        )

    @property
    def south_pole_lat(self) -> float:
        return self._lat_pole

    @property
    def south_pole_lon(self) -> float:
        return self._lon_pole

    @property
    def south_pole_angle(self) -> float:
        return self._pole_rotate

    @property
    def sin_dlat(self) -> float:
        return self._sin_dlat

    @property
    def cos_dlat(self) -> float:
        return self._cos_dlat

    @property
    def type_label(self) -> str:
        return "Rotated Lat Lon"

    @property
    def proj4_string(self) -> str:
        return (
            f"+proj=ob_tran +o_proj=longlat +o_lat_p={-self._lat_pole!r} "
            f"+o_lon_p={-self._pole_rotate!r} +lon_0={self._lon_pole!r} "
            "+R=6371229.0 +no_defs"
        )

    def rotate(
        self,
        lon: ArrayLike,
        lat: ArrayLike,
        rot1: float,
        rot2: float,
        sin_dlat: float
    ) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
        """`rotate_lonlat` with this grid's cos(dlat)."""
        return rotate_lonlat(lon, lat, rot1, rot2, sin_dlat, self._cos_dlat)

    def forward(self, point: GeoPoint) -> ProjectedPoint:
        rlon, rlat = self.rotate(
            point.longitude, point.latitude,
            self._lon_pole, self._pole_rotate, self._sin_dlat
        )
        return ProjectedPoint(float(rlon), float(rlat))

    def inverse(self, point: ProjectedPoint) -> GeoPoint:
        lon, lat = self.rotate(
            point.x, point.y,
            -self._pole_rotate, -self._lon_pole, -self._sin_dlat
        )
        return GeoPoint(float(normalize_longitude_deg(lon)), float(lat))

    def forward_many(self, lons: ArrayLike, lats: ArrayLike):
        return self.rotate(lons, lats, self._lon_pole, self._pole_rotate, self._sin_dlat)

    def inverse_many(self, xs: ArrayLike, ys: ArrayLike):
        lon, lat = self.rotate(xs, ys, -self._pole_rotate, -self._lon_pole, -self._sin_dlat)
        return normalize_longitude_deg(lon), lat

    def cross_seam(self, pt1: ProjectedPoint, pt2: ProjectedPoint) -> bool:
        return False

    def params_to_string(self) -> str:
        return (
            f"southPoleLat={self._lat_pole} southPoleLon={self._lon_pole}"
            f" southPoleAngle={self._pole_rotate}"
        )

    def construct_copy(self) -> 'RotatedPole':
        return RotatedPole(self._lat_pole, self._lon_pole, self._pole_rotate)

    def _identity(self):
        return (self._lat_pole, self._lon_pole, self._pole_rotate)
