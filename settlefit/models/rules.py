"""Placement rules and constants for settlement layout."""

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PlacementRules(BaseModel):
    """Complete rule set for automatic building placement.

    Rulesets name a subset of these fields; request-time overrides replace
    individual fields. Unknown field names are rejected.
    """

    model_config = ConfigDict(extra="forbid")

    # Variable-size building defaults
    default_width: float = Field(
        default=10.0, gt=0, description="Width used when catalog/override width is <= 0"
    )
    default_length: float = Field(
        default=10.0, gt=0, description="Length used when catalog/override length is <= 0"
    )

    # Adjacent placement separations
    life_support_separation: float = Field(
        default=5.0, ge=0, description="Gap between a new habitable building and its neighbor"
    )
    same_type_separation: float = Field(
        default=2.0, ge=0, description="Gap between a new plain building and one of its type"
    )

    # Expanding radius fallback
    search_start_distance: float = Field(
        default=10.0, gt=0, description="First separation tried by the expanding search"
    )
    search_step: float = Field(
        default=10.0, gt=0, description="Separation increment per expanding search round"
    )
    max_search_distance: float = Field(
        default=500.0, gt=0, description="Largest separation tried before placement fails"
    )

    # Connector span search
    boundary_offset: float = Field(
        default=0.1, ge=0, description="Outward offset of sampled side points from a building"
    )
    min_span_length: float = Field(
        default=1.0, ge=0, description="Shortest connector span considered"
    )
    min_bridge_distance: float = Field(
        default=1.0, ge=0, description="Closest center distance for a bridging pair"
    )

    @model_validator(mode="after")
    def validate_search_range(self) -> "PlacementRules":
        """Validate the expanding search covers at least one round."""
        if self.max_search_distance < self.search_start_distance:
            raise ValueError(
                f"max_search_distance ({self.max_search_distance}) must be >= "
                f"search_start_distance ({self.search_start_distance})"
            )
        return self

    def search_distances(self) -> list[float]:
        """Separation distances tried by the expanding search, in order.

        Each round is ``search_start_distance + k * search_step``, so a
        fractional step still lands on ``max_search_distance``.
        """
        span = self.max_search_distance - self.search_start_distance
        rounds = math.floor(span / self.search_step + 1e-9) + 1
        return [self.search_start_distance + k * self.search_step for k in range(rounds)]

    def with_overrides(self, overrides: dict[str, Any]) -> "PlacementRules":
        """Copy of these rules with some fields replaced and revalidated."""
        return type(self).model_validate({**self.model_dump(), **overrides})
