"""
Projection Capability.

This module defines the interface every projection implements: forward
and inverse point transforms, batch transforms over numpy arrays, a seam
predicate, a parameter set for metadata export, and a value-equality and
copy contract used by downstream consumers to detect "same projection".

Design
------
A projection is an immutable value. Every field is set in ``__init__``
and never changed, so transforms are pure functions of their inputs and
instances can be shared between threads, hashed, and used as cache keys.
Copies are built by re-running the constructor with the defining inputs;
derived constants are never shared between instances.

The variants form a single level below `Projection`. `geoloc.registry`
maps each variant's ``grid_mapping_name`` tag back to its class.
"""

from abc import ABC, abstractmethod
from typing import ClassVar, Hashable, Optional, Tuple

import numpy as np
from numpy.typing import ArrayLike, NDArray
from pyproj import CRS

from common.exceptions import InvalidCoordinateError, NumericInstabilityError
from common.logging_config import get_logger
from common.types import GeoPoint, ProjectedPoint
from geoloc.ellipsoid import Ellipsoid
from geoloc.parameters import ProjectionParameters

logger = get_logger(__name__)


class Projection(ABC):
    """Abstract base class for map projections.

    Parameters
    ----------
    name : str
        Short name of the projection.
    is_lat_lon : bool
        True if the projection is the identity on geographic coordinates.
    parameters : ProjectionParameters
        Defining parameters, in export order.
    ellipsoid : Ellipsoid, optional
        Earth figure, for projections that use one.
    angular_units : bool
        True if projected coordinates are angles rather than lengths.
    """

    grid_mapping_name: ClassVar[str] = ""

    def __init__(
        self,
        name: str,
        is_lat_lon: bool,
        parameters: ProjectionParameters,
        ellipsoid: Optional[Ellipsoid] = None,
        angular_units: bool = False
    ):
        self._name = name
        self._is_lat_lon = is_lat_lon
        self._angular_units = angular_units
        self._parameters = parameters
        self._ellipsoid = ellipsoid

    @property
    def name(self) -> str:
        """Short name of the projection."""
        return self._name

    @property
    def is_lat_lon(self) -> bool:
        return self._is_lat_lon

    @property
    def angular_units(self) -> bool:
        """True if projected coordinates are degrees rather than kilometers."""
        return self._angular_units

    @property
    def parameters(self) -> ProjectionParameters:
        """Defining parameters with CF-style names."""
        return self._parameters

    @property
    def ellipsoid(self) -> Optional[Ellipsoid]:
        return self._ellipsoid

    @property
    @abstractmethod
    def type_label(self) -> str:
        """Human-readable label of the projection family."""

    @property
    @abstractmethod
    def proj4_string(self) -> str:
        """PROJ.4 definition string."""

    @abstractmethod
    def forward(self, point: GeoPoint) -> ProjectedPoint:
        """Transform a geographic point to projection coordinates.

        Parameters
        ----------
        point : GeoPoint
            Longitude and latitude in degrees.

        Returns
        -------
        ProjectedPoint
            Projected coordinates in projection units.
        """

    @abstractmethod
    def inverse(self, point: ProjectedPoint) -> GeoPoint:
        """Transform projection coordinates to a geographic point.

        Returns
        -------
        GeoPoint
            Longitude and latitude in degrees, or `GeoPoint.nan()` if the
            inverse did not converge.
        """

    @abstractmethod
    def cross_seam(self, pt1: ProjectedPoint, pt2: ProjectedPoint) -> bool:
        """True when the straight line between two projected points crosses a seam."""

    @abstractmethod
    def params_to_string(self) -> str:
        """Constructor parameters as a string."""

    @abstractmethod
    def construct_copy(self) -> 'Projection':
        """A fresh, equal instance built from the same defining inputs."""

    @abstractmethod
    def _identity(self) -> Tuple[Hashable, ...]:
        """Values that decide equality between two instances of a variant."""

    def to_crs(self) -> CRS:
        """The same projection as a `pyproj.CRS`."""
        return CRS.from_proj4(self.proj4_string)

    def forward_many(
        self,
        lons: ArrayLike,
        lats: ArrayLike
    ) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Project arrays of coordinates.

        Parameters
        ----------
        lons, lats : array_like
            Coordinates in degrees; broadcast against each other.

        Returns
        -------
        Tuple[ndarray, ndarray]
            (x, y) arrays. A point that cannot be projected is NaN in both.
        """
        return self._transform_many(lons, lats, forward=True)

    def inverse_many(
        self,
        xs: ArrayLike,
        ys: ArrayLike
    ) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Inverse-project arrays of coordinates.

        Returns
        -------
        Tuple[ndarray, ndarray]
            (lon, lat) arrays in degrees, NaN where the inverse failed.
        """
        return self._transform_many(xs, ys, forward=False)

    def _transform_many(self, a: ArrayLike, b: ArrayLike, forward: bool):
        a, b = np.broadcast_arrays(
            np.asarray(a, dtype=np.float64),
            np.asarray(b, dtype=np.float64)
        )
        out_a = np.full(a.shape, np.nan)
        out_b = np.full(a.shape, np.nan)
        failed = 0

        for idx in np.ndindex(a.shape):
            try:
                if forward:
                    pt = self.forward(GeoPoint(float(a[idx]), float(b[idx])))
                    out_a[idx], out_b[idx] = pt.x, pt.y
                else:
                    geo = self.inverse(ProjectedPoint(float(a[idx]), float(b[idx])))
                    out_a[idx], out_b[idx] = geo.longitude, geo.latitude
            except (NumericInstabilityError, InvalidCoordinateError) as e:
                failed += 1
                logger.warning(f"{self._name}: point {idx} left as NaN: {e}")

        if failed:
            logger.info(f"{self._name}: {failed} of {a.size} points failed")
        return out_a, out_b

    def __eq__(self, other) -> bool:
        if self is other:
            return True
        if type(other) is not type(self):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash((type(self).__name__,) + self._identity())

    def __copy__(self) -> 'Projection':
        return self.construct_copy()

    def __deepcopy__(self, memo) -> 'Projection':
        return self.construct_copy()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.params_to_string().strip()})"

    def __str__(self) -> str:
        return f"{self._name}: {self.params_to_string().strip()}"
