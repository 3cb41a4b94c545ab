"""Placement strategy selection for a new settlement building.

Strategy chain for one request:

1. Connector types are bridged between habitable buildings.
2. Habitable types go beside a habitable building.
3. Other types go beside a building of the same type.
4. Otherwise an expanding search around every building.
5. An empty settlement places the building at the origin.
"""

import logging
import random

from ..contract.protocols import (
    BuildingTypeCatalog,
    CollisionOracle,
    RandomSource,
    SettlementView,
    shuffled,
)
from ..geometry.vectors import normalize_facing
from ..models.buildings import BuildingTemplate, PlacementRequest
from ..models.rules import PlacementRules
from .adjacent import AdjacentPlacer
from .connector import ConnectorPlacer
from .dimensions import resolve_connector_width, resolve_dimensions
from .errors import PlacementFailed
from .expanding import ExpandingRadiusSearch

logger = logging.getLogger(__name__)


class PlacementDispatcher:
    """Chooses and sequences placement strategies by building capability.

    The dispatcher is stateless between requests; all randomness comes from
    the injected random source.
    """

    def __init__(
        self,
        catalog: BuildingTypeCatalog,
        settlement: SettlementView,
        oracle: CollisionOracle,
        rng: RandomSource | None = None,
        rules: PlacementRules | None = None,
    ):
        """Initialize dispatcher.

        Args:
            catalog: Building type metadata
            settlement: Read-only settlement view
            oracle: Collision oracle
            rng: Random source (defaults to an unseeded random.Random)
            rules: Placement rules (defaults to PlacementRules())
        """
        self.catalog = catalog
        self.settlement = settlement
        self.oracle = oracle
        self.rng = rng or random.Random()
        self.rules = rules or PlacementRules()

        self.adjacent = AdjacentPlacer(settlement, oracle, self.rng)
        self.connector = ConnectorPlacer(
            settlement, oracle, self.rng, self.rules, adjacent=self.adjacent
        )
        self.expanding = ExpandingRadiusSearch(
            settlement, self.adjacent, self.rng, self.rules
        )

    def place(self, request: PlacementRequest | str) -> BuildingTemplate:
        """Compute a position for a new building.

        Args:
            request: Placement request or bare building type name

        Returns:
            Accepted building template

        Raises:
            PlacementFailed: If the capped expanding search finds nothing
        """
        if isinstance(request, str):
            request = PlacementRequest(building_type=request)

        building_type = request.building_type
        width, length = resolve_dimensions(
            building_type, self.catalog, self.rules, request.width, request.length
        )

        template = self._place_by_capability(request, width, length)
        if template is not None:
            return template

        if self.settlement.building_count() == 0:
            # Request overrides do not apply at the origin
            origin_width, origin_length = resolve_dimensions(
                building_type, self.catalog, self.rules
            )
            return self._place_at_origin(building_type, origin_width, origin_length)

        template = self.expanding.place(building_type, width, length)
        if template is None:
            raise PlacementFailed(building_type, self.rules.max_search_distance)
        return template

    def _place_by_capability(
        self,
        request: PlacementRequest,
        width: float,
        length: float,
    ) -> BuildingTemplate | None:
        building_type = request.building_type

        if self.catalog.has_connection(building_type):
            connector_width = resolve_connector_width(
                building_type, self.catalog, self.rules, request.width
            )
            return self.connector.place(building_type, connector_width, length)

        if self.catalog.has_life_support(building_type):
            neighbors = shuffled(self.rng, self.settlement.life_support_buildings())
            separation = self.rules.life_support_separation
        else:
            neighbors = shuffled(self.rng, self.settlement.buildings_of_type(building_type))
            separation = self.rules.same_type_separation

        template = self.adjacent.place_near_any(
            building_type, width, length, neighbors, separation
        )
        if template is not None:
            logger.info(
                f"{building_type}: placed {separation:g}m beside a neighbor "
                f"at ({template.x:.2f}, {template.y:.2f})"
            )
        return template

    def _place_at_origin(
        self,
        building_type: str,
        width: float,
        length: float,
    ) -> BuildingTemplate:
        facing = normalize_facing(self.rng.uniform(0.0, 360.0))
        logger.info(f"{building_type}: first building, placed at origin facing {facing:.1f}")
        return BuildingTemplate(
            id=self.settlement.next_building_id(),
            type=building_type,
            width=width,
            length=length,
            x=0.0,
            y=0.0,
            facing=facing,
        )
