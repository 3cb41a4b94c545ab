"""Last-resort placement at growing distances from any building."""

import logging

from ..contract.protocols import RandomSource, SettlementView, shuffled
from ..models.buildings import BuildingTemplate
from ..models.rules import PlacementRules
from .adjacent import AdjacentPlacer

logger = logging.getLogger(__name__)


class ExpandingRadiusSearch:
    """Tries every building at separations start, start+step, ... up to a cap."""

    def __init__(
        self,
        settlement: SettlementView,
        adjacent: AdjacentPlacer,
        rng: RandomSource,
        rules: PlacementRules,
    ):
        self.settlement = settlement
        self.adjacent = adjacent
        self.rng = rng
        self.rules = rules

    def place(
        self,
        building_type: str,
        width: float,
        length: float,
    ) -> BuildingTemplate | None:
        """Search outward until some building has an open side.

        Buildings are reshuffled for every distance.

        Returns:
            First open template, or None once ``rules.max_search_distance``
            is exhausted
        """
        for separation in self.rules.search_distances():
            template = self.adjacent.place_near_any(
                building_type,
                width,
                length,
                shuffled(self.rng, self.settlement.buildings()),
                separation,
            )
            if template is not None:
                logger.info(f"{building_type}: placed {separation:g}m from a building")
                return template

        logger.warning(
            f"{building_type}: no open location within "
            f"{self.rules.max_search_distance:g}m of any building"
        )
        return None
