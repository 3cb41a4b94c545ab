"""Pydantic models for settlefit."""

from .buildings import (
    Building,
    BuildingSpec,
    BuildingTemplate,
    Capability,
    Obstacle,
    PlacementRequest,
)
from .rules import PlacementRules

__all__ = [
    # Buildings
    "Building",
    "BuildingSpec",
    "BuildingTemplate",
    "Capability",
    "Obstacle",
    "PlacementRequest",
    # Rules
    "PlacementRules",
]
