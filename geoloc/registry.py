"""
Projection Registry.

Maps each variant's ``grid_mapping_name`` tag to its class so that a
projection exported as a parameter set (for example into a dataset's
grid-mapping attributes) can be rebuilt into an equal projection.
"""

from collections.abc import Mapping
from typing import Dict, List, Type, TYPE_CHECKING

from common.exceptions import ProjectionConfigurationError
from common.logging_config import get_logger
from geoloc.parameters import GRID_MAPPING_NAME

if TYPE_CHECKING:
    from geoloc.base import Projection

logger = get_logger(__name__)

_REGISTRY: Dict[str, Type['Projection']] = {}


def register_projection(cls: Type['Projection']) -> Type['Projection']:
    """Class decorator adding a projection variant to the registry.

    The class must define a non-empty ``grid_mapping_name`` and a
    ``from_parameters`` classmethod.
    """
    name = getattr(cls, "grid_mapping_name", "")
    if not name:
        raise ProjectionConfigurationError(f"{cls.__name__} has no grid_mapping_name")
    existing = _REGISTRY.get(name)
    if existing is not None and existing is not cls:
        raise ProjectionConfigurationError(
            f"grid_mapping_name '{name}' already registered by {existing.__name__}"
        )
    _REGISTRY[name] = cls
    return cls


def get_projection_class(grid_mapping_name: str) -> Type['Projection']:
    try:
        return _REGISTRY[grid_mapping_name]
    except KeyError:
        raise ProjectionConfigurationError(
            f"Unknown grid_mapping_name '{grid_mapping_name}'. "
            f"Available: {available_projections()}"
        ) from None


def available_projections() -> List[str]:
    return sorted(_REGISTRY)


def projection_from_parameters(parameters: Mapping) -> 'Projection':
    """Rebuild a projection from its exported parameters.

    Parameters
    ----------
    parameters : Mapping
        A `ProjectionParameters` or any mapping with the same keys.

    Returns
    -------
    Projection
        A projection equal to the one that exported ``parameters``.

    Raises
    ------
    ProjectionConfigurationError
        If ``grid_mapping_name`` is missing or unknown.
    """
    if GRID_MAPPING_NAME not in parameters:
        raise ProjectionConfigurationError(f"Parameters have no '{GRID_MAPPING_NAME}'")
    cls = get_projection_class(parameters[GRID_MAPPING_NAME])
    projection = cls.from_parameters(parameters)
    logger.debug(f"Rebuilt {projection!r} from parameters")
    return projection
