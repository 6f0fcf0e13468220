"""
Common utilities and infrastructure for the geoloc projection engine.

This package provides foundational components used across all modules:
- Reference ellipsoid constants and solver settings
- Unit registry for projection parameters
- Point types
- Exception hierarchy
- Logging infrastructure
"""

from common.constants import Constant, ReferenceConstants, SolverSettings
from common.exceptions import (
    ProjectionError,
    ProjectionConfigurationError,
    InvalidCoordinateError,
    NumericInstabilityError,
)
from common.units import ureg, Q_, as_kilometers, as_degrees, as_meters
from common.types import GeoPoint, ProjectedPoint
from common.logging_config import get_logger, set_level

__all__ = [
    "Constant",
    "ReferenceConstants",
    "SolverSettings",
    "ProjectionError",
    "ProjectionConfigurationError",
    "InvalidCoordinateError",
    "NumericInstabilityError",
    "ureg",
    "Q_",
    "as_kilometers",
    "as_degrees",
    "as_meters",
    "GeoPoint",
    "ProjectedPoint",
    "get_logger",
    "set_level",
]
