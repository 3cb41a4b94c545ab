"""Building, catalog entry, and placement template models."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..geometry.vectors import normalize_facing


class Capability(str, Enum):
    """Building function flags relevant to placement."""

    LIFE_SUPPORT = "life_support"
    CONNECTION = "connection"
    EVA = "eva"


class Building(BaseModel):
    """An existing settlement structure (read-only to the solver)."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Unique building identifier")
    type: str = Field(..., description="Building type name, e.g. 'Lander Hab'")
    width: float = Field(..., gt=0, description="Width in meters (local x-dimension)")
    length: float = Field(..., gt=0, description="Length in meters (local y-dimension)")
    x: float = Field(default=0.0, description="X coordinate of building center")
    y: float = Field(default=0.0, description="Y coordinate of building center")
    facing: float = Field(default=0.0, description="Facing in degrees [0, 360)")
    capabilities: frozenset[Capability] = Field(
        default_factory=frozenset, description="Building function flags"
    )

    @field_validator("facing")
    @classmethod
    def wrap_facing(cls, v: float) -> float:
        return normalize_facing(v)

    @property
    def center(self) -> tuple[float, float]:
        return self.x, self.y

    @property
    def has_life_support(self) -> bool:
        return Capability.LIFE_SUPPORT in self.capabilities

    @property
    def is_connector(self) -> bool:
        return Capability.CONNECTION in self.capabilities

    @property
    def is_airlock(self) -> bool:
        return Capability.EVA in self.capabilities

    def to_shapely_polygon(self):
        """Rotated rectangle footprint as a Shapely Polygon."""
        from ..geometry.footprints import footprint_polygon

        return footprint_polygon(self.x, self.y, self.width, self.length, self.facing)


class BuildingSpec(BaseModel):
    """Catalog entry for a building type.

    Width or length may be zero or negative for variable-size types such as
    connectors; those are resolved to the rules default at placement time.
    """

    name: str = Field(..., description="Building type name")
    width: float = Field(default=0.0, description="Catalog width in meters (<= 0 = variable)")
    length: float = Field(default=0.0, description="Catalog length in meters (<= 0 = variable)")
    capabilities: frozenset[Capability] = Field(
        default_factory=frozenset, description="Building function flags"
    )


class BuildingTemplate(BaseModel):
    """An accepted placement, handed to the committer to instantiate."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Building id read from the settlement's id source")
    type: str = Field(..., description="Building type name")
    width: float = Field(..., gt=0, description="Width in meters")
    length: float = Field(..., gt=0, description="Length in meters")
    x: float = Field(..., description="X coordinate of template center")
    y: float = Field(..., description="Y coordinate of template center")
    facing: float = Field(..., ge=0.0, lt=360.0, description="Facing in degrees [0, 360)")

    @property
    def center(self) -> tuple[float, float]:
        return self.x, self.y

    def to_shapely_polygon(self):
        """Rotated rectangle footprint as a Shapely Polygon."""
        from ..geometry.footprints import footprint_polygon

        return footprint_polygon(self.x, self.y, self.width, self.length, self.facing)


class PlacementRequest(BaseModel):
    """Request to add one building to a settlement.

    Resupply manifests and settlement templates may carry a preset position;
    it is honored when the footprint there is open.
    """

    building_type: str = Field(..., description="Building type name to place")
    width: float | None = Field(
        default=None, description="Width override in meters (used when > 0)"
    )
    length: float | None = Field(
        default=None, description="Length override in meters (used when > 0)"
    )
    x: float | None = Field(default=None, description="Preset center X")
    y: float | None = Field(default=None, description="Preset center Y")
    facing: float | None = Field(default=None, description="Preset facing in degrees")

    @property
    def has_preset_position(self) -> bool:
        return self.x is not None and self.y is not None


class Obstacle(BaseModel):
    """Non-building footprint that blocks placement (vehicle, construction site)."""

    id: str = Field(..., description="Unique identifier")
    kind: Literal["vehicle", "construction_site", "keepout"] = Field(
        default="construction_site", description="What occupies the footprint"
    )
    width: float = Field(..., gt=0, description="Width in meters")
    length: float = Field(..., gt=0, description="Length in meters")
    x: float = Field(..., description="X coordinate of obstacle center")
    y: float = Field(..., description="Y coordinate of obstacle center")
    facing: float = Field(default=0.0, description="Facing in degrees")

    def to_shapely_polygon(self):
        """Rotated rectangle footprint as a Shapely Polygon."""
        from ..geometry.footprints import footprint_polygon

        return footprint_polygon(self.x, self.y, self.width, self.length, self.facing)
