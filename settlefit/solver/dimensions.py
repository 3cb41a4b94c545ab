"""Width/length resolution for fixed and variable-size building types."""

import logging

from ..contract.protocols import BuildingTypeCatalog
from ..models.rules import PlacementRules

logger = logging.getLogger(__name__)


def _resolve(
    building_type: str,
    dimension: str,
    catalog_value: float,
    override: float | None,
    default: float,
) -> float:
    value = catalog_value
    if override is not None and override > 0:
        value = override
    if value <= 0:
        logger.info(
            f"{building_type} has no fixed {dimension} ({value}), using default {default}m"
        )
        value = default
    return value


def resolve_dimensions(
    building_type: str,
    catalog: BuildingTypeCatalog,
    rules: PlacementRules,
    width: float | None = None,
    length: float | None = None,
) -> tuple[float, float]:
    """Resolve the footprint dimensions for a building type.

    A positive override wins over the catalog value. Non-positive results
    (variable-size types) fall back to the rules defaults.

    Args:
        building_type: Building type name
        catalog: Building type catalog
        rules: Placement rules with default dimensions
        width: Optional caller-supplied width
        length: Optional caller-supplied length

    Returns:
        Tuple of (width, length), both > 0
    """
    resolved_width = _resolve(
        building_type, "width", catalog.width(building_type), width, rules.default_width
    )
    resolved_length = _resolve(
        building_type, "length", catalog.length(building_type), length, rules.default_length
    )
    return resolved_width, resolved_length


def resolve_connector_width(
    building_type: str,
    catalog: BuildingTypeCatalog,
    rules: PlacementRules,
    width: float | None = None,
) -> float:
    """Resolve the width of a connector building (override > catalog > default)."""
    return _resolve(
        building_type,
        "connector width",
        catalog.connector_width(building_type),
        width,
        rules.default_width,
    )
