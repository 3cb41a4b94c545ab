"""MCP tool request/response schemas."""

from typing import Any

from pydantic import BaseModel, Field

from ..contract.validator import CONTRACT_VERSION
from ..models.buildings import Building, BuildingSpec, Obstacle, PlacementRequest


class SettlementInput(BaseModel):
    """Current settlement layout."""

    buildings: list[Building] = Field(
        default_factory=list,
        description="Existing buildings with id, type, width, length, x, y, facing, capabilities",
    )
    connections: list[tuple[int, int]] = Field(
        default_factory=list,
        description="Pairs of directly connected building ids",
    )
    obstacles: list[Obstacle] = Field(
        default_factory=list,
        description="Vehicles, construction sites and other non-building footprints",
    )


class PlacementConfig(BaseModel):
    """Configuration for a placement run."""

    ruleset: str = Field(
        default="default",
        description="Ruleset name (see ruleset_list)",
    )
    rules_override: dict[str, Any] | None = Field(
        default=None,
        description="Rule overrides merged into the ruleset",
    )
    seed: int = Field(
        default=42,
        ge=0,
        description="Random seed for reproducibility",
    )
    strict: bool = Field(
        default=True,
        description="Reject templates that violate the template contract",
    )


class PlaceBuildingsRequest(BaseModel):
    """Complete request for placing a batch of delivered buildings."""

    settlement: SettlementInput = Field(
        default_factory=SettlementInput,
        description="Current settlement layout",
    )
    catalog: list[BuildingSpec] = Field(
        ...,
        description="Building type catalog covering every requested type",
    )
    requests: list[PlacementRequest] = Field(
        ...,
        description="Buildings to place, in delivery order",
    )
    config: PlacementConfig = Field(
        default_factory=PlacementConfig,
        description="Placement configuration",
    )


class PlacedTemplate(BaseModel):
    """One placed building in a response."""

    id: int
    type: str
    width: float
    length: float
    x: float
    y: float
    facing: float
    preset: bool = Field(
        default=False,
        description="True when the requested preset position was used",
    )
    contract_version: str = Field(
        default=CONTRACT_VERSION,
        description="Template contract version",
    )


class PlaceBuildingsResponse(BaseModel):
    """Response from a placement run."""

    templates: list[PlacedTemplate] = Field(default_factory=list)
    statistics: dict[str, Any] = Field(default_factory=dict)
