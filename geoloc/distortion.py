"""
Projection Distortion Analysis.

Tissot's indicatrix of any projection with linear projected units,
computed numerically from its forward transform. Used to check that a
projection keeps the scale properties it is known for, e.g. the polyconic's
true scale along every parallel and along the central meridian.

References
----------
- Snyder, J.P. (1987). Map Projections - A Working Manual, pp. 20-26.
- Tissot, N.A. (1881). Mémoire sur la représentation des surfaces.
"""

from dataclasses import dataclass
import math

import numpy as np

from common.exceptions import ProjectionError
from common.logging_config import get_logger
from common.types import GeoPoint
from geoloc.base import Projection
from geoloc.ellipsoid import (
    radius_of_curvature_meridian,
    radius_of_curvature_prime_vertical,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class TissotIndicatrix:
    """Tissot's indicatrix describing local distortion at a point.

    The indicatrix shows how an infinitesimally small circle on the
    ellipsoid is distorted into an ellipse on the map.

    Attributes
    ----------
    semi_major : float
        Maximum scale factor (a).
    semi_minor : float
        Minimum scale factor (b).
    meridian_scale : float
        Scale factor along the meridian (h).
    parallel_scale : float
        Scale factor along the parallel (k).
    orientation_rad : float
        Orientation of the principal direction in radians.
    area_scale : float
        Area distortion factor, h * k * sin(theta') = a * b.
    angular_distortion_rad : float
        Maximum angular distortion (omega) in radians.

    Notes
    -----
    - For a conformal projection: semi_major = semi_minor
    - For an equal-area projection: area_scale = 1.0
    """
    semi_major: float
    semi_minor: float
    meridian_scale: float
    parallel_scale: float
    orientation_rad: float
    area_scale: float
    angular_distortion_rad: float

    @property
    def is_conformal(self) -> bool:
        return abs(self.semi_major - self.semi_minor) < 1e-6

    @property
    def is_equal_area(self) -> bool:
        return abs(self.area_scale - 1.0) < 1e-6


def compute_tissot_indicatrix(
    projection: Projection,
    lon_deg: float,
    lat_deg: float,
    delta: float = 1e-4
) -> TissotIndicatrix:
    """Compute Tissot's indicatrix numerically.

    Partial derivatives of the forward transform are taken by central
    differences and combined with the ellipsoid's radii of curvature.

    Parameters
    ----------
    projection : Projection
        The projection to analyze. Projected units must be kilometers.
    lon_deg, lat_deg : float
        Location in degrees.
    delta : float
        Offset in degrees for numerical differentiation.

    Returns
    -------
    TissotIndicatrix
        Local distortion characteristics.

    Raises
    ------
    ProjectionError
        If the projection has angular projected units or no ellipsoid.
    """
    if projection.angular_units or projection.ellipsoid is None:
        raise ProjectionError(
            f"Distortion is undefined for {projection.type_label}: projected units are not lengths"
        )

    def fwd(lon, lat):
        pt = projection.forward(GeoPoint(lon, lat))
        return pt.x, pt.y

    step = 2.0 * math.radians(delta)

    # ∂x/∂λ, ∂y/∂λ (east-west)
    x_e, y_e = fwd(lon_deg + delta, lat_deg)
    x_w, y_w = fwd(lon_deg - delta, lat_deg)
    dxdl = (x_e - x_w) / step
    dydl = (y_e - y_w) / step

    # ∂x/∂φ, ∂y/∂φ (north-south)
    x_n, y_n = fwd(lon_deg, lat_deg + delta)
    x_s, y_s = fwd(lon_deg, lat_deg - delta)
    dxdp = (x_n - x_s) / step
    dydp = (y_n - y_s) / step

    lat_rad = math.radians(lat_deg)
    ellipsoid = projection.ellipsoid
    M = radius_of_curvature_meridian(lat_rad, ellipsoid) * 0.001
    N = radius_of_curvature_prime_vertical(lat_rad, ellipsoid) * 0.001
    cos_lat = math.cos(lat_rad)

    h = math.hypot(dxdp, dydp) / M
    k = math.hypot(dxdl, dydl) / (N * cos_lat)

    # Snyder eq. 4-9 to 4-12
    sin_theta = abs(dxdp * dydl - dydp * dxdl) / (h * M * k * N * cos_lat)
    sin_theta = float(np.clip(sin_theta, -1.0, 1.0))
    area_scale = h * k * sin_theta
    a_prime = math.sqrt(max(h * h + k * k + 2.0 * area_scale, 0.0))
    b_prime = math.sqrt(max(h * h + k * k - 2.0 * area_scale, 0.0))
    a = 0.5 * (a_prime + b_prime)
    b = 0.5 * (a_prime - b_prime)
    omega = 2.0 * math.asin(min(b_prime / a_prime, 1.0))

    theta = 0.5 * math.atan2(2 * (dxdp * dxdl + dydp * dydl),
                             dxdp**2 + dydp**2 - dxdl**2 - dydl**2)

    logger.debug(f"Tissot at ({lon_deg}, {lat_deg}) in {projection.name}: h={h}, k={k}")
    return TissotIndicatrix(
        semi_major=a,
        semi_minor=b,
        meridian_scale=h,
        parallel_scale=k,
        orientation_rad=theta,
        area_scale=area_scale,
        angular_distortion_rad=omega
    )
