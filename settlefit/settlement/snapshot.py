"""In-memory settlement state with a building connection graph."""

import logging

import networkx as nx
from shapely.geometry import Point as ShapelyPoint

from ..geometry.footprints import connector_endpoints
from ..models.buildings import Building, BuildingTemplate
from .catalog import StaticBuildingCatalog

logger = logging.getLogger(__name__)


class SettlementSnapshot:
    """Settlement buildings plus the graph of which buildings touch.

    Nodes are building ids; an edge means two buildings are directly
    connected (a hatch between them). Walkable airlock access is a graph path
    to any building with the ``eva`` capability.

    Implements the ``SettlementView`` and ``TemplateCommitter`` protocols.
    """

    def __init__(
        self,
        buildings: list[Building] | None = None,
        connections: list[tuple[int, int]] | None = None,
        catalog: StaticBuildingCatalog | None = None,
        link_tolerance: float = 0.5,
    ):
        """Initialize snapshot.

        Args:
            buildings: Existing buildings
            connections: Pairs of directly connected building ids
            catalog: Catalog used to look up capabilities of committed templates
            link_tolerance: Gap in meters still treated as touching when
                linking a committed connector to its neighbors
        """
        self.catalog = catalog
        self.link_tolerance = link_tolerance
        self.graph = nx.Graph()
        self.revision = 0
        self._next_id = 1

        for building in buildings or []:
            self.add_building(building)
        for first_id, second_id in connections or []:
            self.connect(first_id, second_id)

    # ------------------------------------------------------------------
    # SettlementView
    # ------------------------------------------------------------------

    def buildings(self) -> list[Building]:
        return [data["building"] for _, data in self.graph.nodes(data=True)]

    def life_support_buildings(self) -> list[Building]:
        return [b for b in self.buildings() if b.has_life_support]

    def buildings_of_type(self, building_type: str) -> list[Building]:
        return [b for b in self.buildings() if b.type == building_type]

    def building_count(self) -> int:
        return self.graph.number_of_nodes()

    def airlock_buildings(self) -> list[Building]:
        return [b for b in self.buildings() if b.is_airlock]

    def has_airlock(self) -> bool:
        return bool(self.airlock_buildings())

    def has_walkable_airlock_access(self, building: Building) -> bool:
        if building.id not in self.graph:
            return False
        reachable = nx.node_connected_component(self.graph, building.id)
        return any(self.get_building(node_id).is_airlock for node_id in reachable)

    def are_directly_connected(self, first: Building, second: Building) -> bool:
        return self.graph.has_edge(first.id, second.id)

    def next_building_id(self) -> int:
        return self._next_id

    # ------------------------------------------------------------------
    # Mutation (committer side)
    # ------------------------------------------------------------------

    def get_building(self, building_id: int) -> Building:
        return self.graph.nodes[building_id]["building"]

    def add_building(self, building: Building) -> None:
        """Register an existing building."""
        if building.id in self.graph:
            raise ValueError(f"Duplicate building id {building.id}")
        self.graph.add_node(building.id, building=building)
        self._next_id = max(self._next_id, building.id + 1)
        self.revision += 1

    def connect(self, first_id: int, second_id: int) -> None:
        """Record a direct connection between two buildings."""
        for building_id in (first_id, second_id):
            if building_id not in self.graph:
                raise KeyError(f"Unknown building id {building_id}")
        self.graph.add_edge(first_id, second_id)

    def commit(self, template: BuildingTemplate) -> Building:
        """Instantiate a template as a building and register it.

        Connector buildings are linked to every building touching either of
        their two ends.

        Returns:
            The registered building
        """
        capabilities = (
            self.catalog.capabilities(template.type)
            if self.catalog is not None and template.type in self.catalog
            else frozenset()
        )
        building = Building(
            id=template.id,
            type=template.type,
            width=template.width,
            length=template.length,
            x=template.x,
            y=template.y,
            facing=template.facing,
            capabilities=capabilities,
        )
        self.add_building(building)

        if building.is_connector:
            for neighbor_id in self._touching_ends(building):
                self.connect(building.id, neighbor_id)

        logger.info(
            f"Committed {building.type} #{building.id} at "
            f"({building.x:.2f}, {building.y:.2f}) facing {building.facing:.1f}"
        )
        return building

    def _touching_ends(self, connector: Building) -> list[int]:
        """Ids of buildings within reach of either end of a connector."""
        ends = [
            ShapelyPoint(p)
            for p in connector_endpoints(
                connector.x, connector.y, connector.length, connector.facing
            )
        ]
        reach = connector.width / 2 + self.link_tolerance

        touching = []
        for other in self.buildings():
            if other.id == connector.id:
                continue
            footprint = other.to_shapely_polygon()
            if any(footprint.distance(end) <= reach for end in ends):
                touching.append(other.id)
        return touching
