"""MCP tool definitions for the settlefit server."""

from .placement_tools import (
    PlaceBuildingsRequest,
    PlaceBuildingsResponse,
    PlacedTemplate,
    PlacementConfig,
    SettlementInput,
)

__all__ = [
    "PlaceBuildingsRequest",
    "PlaceBuildingsResponse",
    "PlacedTemplate",
    "PlacementConfig",
    "SettlementInput",
]
