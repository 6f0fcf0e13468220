"""
Projection Parameter Sets.

Every projection carries an ordered, immutable mapping from parameter
name to value. It is used for introspection, for embedding the projection
in a dataset's coordinate-system metadata, and for rebuilding the
projection through `geoloc.registry`. Key names follow the CF conventions
(grid mapping attributes) where CF defines one.

References
----------
- CF Conventions, Appendix F: Grid Mappings.
"""

from collections.abc import Mapping
import numbers
from typing import Iterable, Iterator, Tuple, Union

from common.exceptions import ProjectionConfigurationError

ParameterValue = Union[float, str]

# CF attribute names
GRID_MAPPING_NAME = "grid_mapping_name"
LATITUDE_OF_PROJECTION_ORIGIN = "latitude_of_projection_origin"
LONGITUDE_OF_CENTRAL_MERIDIAN = "longitude_of_central_meridian"
FALSE_EASTING = "false_easting"
FALSE_NORTHING = "false_northing"
SEMI_MAJOR_AXIS = "semi_major_axis"
INVERSE_FLATTENING = "inverse_flattening"
# Exact shape of an ellipsoid not defined by its flattening
ECCENTRICITY_SQUARED = "eccentricity_squared"
UNITS = "units"

# GRIB rotated grid attributes
GRID_SOUTH_POLE_LATITUDE = "grid_south_pole_latitude"
GRID_SOUTH_POLE_LONGITUDE = "grid_south_pole_longitude"
GRID_SOUTH_POLE_ANGLE = "grid_south_pole_angle"


def _check_value(name: str, value) -> ParameterValue:
    if not isinstance(name, str) or not name:
        raise ProjectionConfigurationError(f"Parameter name must be a non-empty string, got {name!r}")
    if isinstance(value, str):
        return value
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        return float(value)
    raise ProjectionConfigurationError(
        f"Parameter '{name}' must be a number or text, got {type(value).__name__}"
    )


class ProjectionParameters(Mapping):
    """Ordered, immutable name to value mapping.

    Parameters
    ----------
    items : iterable of (str, float or str)
        Parameters in display order. A repeated name keeps the position of
        its first occurrence and the value of its last.

    Examples
    --------
    >>> params = ProjectionParameters([("grid_mapping_name", "polyconic"),
    ...                                ("false_easting", 10)])
    >>> params["false_easting"]
    10.0
    >>> list(params)
    ['grid_mapping_name', 'false_easting']
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[Tuple[str, ParameterValue]] = ()):
        if isinstance(items, Mapping):
            items = items.items()
        checked = {}
        for name, value in items:
            checked[name] = _check_value(name, value)
        self._items = checked

    def __getitem__(self, name: str) -> ParameterValue:
        return self._items[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __hash__(self) -> int:
        return hash(tuple(self._items.items()))

    def with_parameter(self, name: str, value: ParameterValue) -> 'ProjectionParameters':
        """Return a copy with ``name`` added, or its value replaced."""
        return ProjectionParameters(list(self._items.items()) + [(name, value)])

    def to_dict(self) -> dict:
        return dict(self._items)

    def format(self) -> str:
        """Human-readable dump, one ``name = value`` per line."""
        return "\n".join(f"{name} = {value}" for name, value in self._items.items())

    def __repr__(self) -> str:
        inner = ", ".join(f"{name}={value!r}" for name, value in self._items.items())
        return f"ProjectionParameters({inner})"
