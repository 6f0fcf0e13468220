"""
Point Types for the Projection Engine.

This module defines the immutable value types exchanged with projections.
Transforms return new points instead of filling caller-supplied buffers,
so a point can be shared freely between threads.

Conventions
-----------
- Geographic points are in DEGREES, longitude first.
- Projected points are in the projection's native units: kilometers for
  linear projections, rotated degrees for a rotated pole grid.
- A point whose coordinates are both NaN is the "no result" sentinel
  returned on numeric non-convergence.
"""

from dataclasses import dataclass
import math
from typing import Tuple


@dataclass(frozen=True)
class GeoPoint:
    """A geographic coordinate.

    Attributes
    ----------
    longitude : float
        Longitude in DEGREES, positive east.
    latitude : float
        Latitude in DEGREES, positive north.

    Examples
    --------
    >>> p = GeoPoint(longitude=-80.1918, latitude=25.7617)
    >>> p.to_radians()
    (-1.399611..., 0.449627...)
    """
    longitude: float
    latitude: float

    @classmethod
    def nan(cls) -> 'GeoPoint':
        """The sentinel returned when an inverse transform does not converge."""
        return cls(math.nan, math.nan)

    @classmethod
    def from_radians(cls, lon_rad: float, lat_rad: float) -> 'GeoPoint':
        return cls(math.degrees(lon_rad), math.degrees(lat_rad))

    def to_radians(self) -> Tuple[float, float]:
        """Return (longitude, latitude) in radians."""
        return math.radians(self.longitude), math.radians(self.latitude)

    def is_nan(self) -> bool:
        return math.isnan(self.longitude) or math.isnan(self.latitude)


@dataclass(frozen=True)
class ProjectedPoint:
    """A coordinate in a projection's planar space.

    Attributes
    ----------
    x : float
        Easting in projection units.
    y : float
        Northing in projection units.
    """
    x: float
    y: float

    @classmethod
    def nan(cls) -> 'ProjectedPoint':
        return cls(math.nan, math.nan)

    def is_nan(self) -> bool:
        return math.isnan(self.x) or math.isnan(self.y)

    def is_infinite(self) -> bool:
        """True if either coordinate is at cartographic infinity."""
        return math.isinf(self.x) or math.isinf(self.y)
