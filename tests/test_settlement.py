"""Tests for the in-memory settlement, catalog and collision oracle."""

import pytest

from conftest import AIRLOCK, CONNECTOR, HAB, make_building
from settlefit.models.buildings import BuildingTemplate, Capability, Obstacle
from settlefit.settlement.catalog import StaticBuildingCatalog
from settlefit.settlement.oracle import FootprintOracle
from settlefit.settlement.snapshot import SettlementSnapshot


CATALOG_YAML = """
building_types:
  Lander Hab:
    width: 10
    length: 10
    capabilities: [life_support]
  Hallway:
    width: 2
    length: 0
    capabilities: [connection]
  Airlock:
    width: 6
    length: 6
    capabilities: [eva]
"""


class TestSettlementSnapshot:
    """Test settlement queries and mutation."""

    @pytest.fixture
    def snapshot(self):
        return SettlementSnapshot(
            buildings=[
                make_building(1),
                make_building(2, x=20.0),
                make_building(3, "Airlock", x=40.0, width=6.0, length=6.0,
                              capabilities=AIRLOCK),
                make_building(5, "Lander Hab", x=-40.0),
                make_building(6, "Workshop", y=30.0, width=8.0, length=8.0,
                              capabilities=frozenset()),
            ],
            connections=[(1, 2), (2, 3)],
        )

    def test_queries(self, snapshot):
        assert snapshot.building_count() == 5
        assert {b.id for b in snapshot.life_support_buildings()} == {1, 2, 5}
        assert [b.id for b in snapshot.buildings_of_type("Workshop")] == [6]
        assert [b.id for b in snapshot.airlock_buildings()] == [3]
        assert snapshot.has_airlock()

    def test_next_id_follows_highest(self, snapshot):
        assert snapshot.next_building_id() == 7
        assert SettlementSnapshot().next_building_id() == 1

    def test_walkable_airlock_access_follows_graph(self, snapshot):
        """Access is any path of direct connections to an airlock."""
        assert snapshot.has_walkable_airlock_access(snapshot.get_building(1))
        assert snapshot.has_walkable_airlock_access(snapshot.get_building(2))
        assert not snapshot.has_walkable_airlock_access(snapshot.get_building(5))
        assert not snapshot.has_walkable_airlock_access(make_building(99))

    def test_direct_connection_is_symmetric(self, snapshot):
        first, second, airlock = (snapshot.get_building(i) for i in (1, 2, 3))

        assert snapshot.are_directly_connected(first, second)
        assert snapshot.are_directly_connected(second, first)
        assert not snapshot.are_directly_connected(first, airlock)

    def test_duplicate_id_rejected(self, snapshot):
        with pytest.raises(ValueError, match="Duplicate building id 1"):
            snapshot.add_building(make_building(1, x=100.0))

    def test_connect_unknown_id(self, snapshot):
        with pytest.raises(KeyError):
            snapshot.connect(1, 42)

    def test_no_airlock(self):
        snapshot = SettlementSnapshot(buildings=[make_building(1)])
        assert not snapshot.has_airlock()


class TestCommit:
    """Test instantiating templates."""

    @pytest.fixture
    def snapshot(self, catalog):
        return SettlementSnapshot(
            buildings=[make_building(1), make_building(2, x=30.0)],
            catalog=catalog,
        )

    def test_connector_links_touching_buildings(self, snapshot):
        template = BuildingTemplate(
            id=3, type="Hallway", width=2.0, length=19.8, x=15.0, y=0.0, facing=270.0
        )

        building = snapshot.commit(template)

        assert building.capabilities == CONNECTOR
        assert snapshot.are_directly_connected(building, snapshot.get_building(1))
        assert snapshot.are_directly_connected(building, snapshot.get_building(2))
        assert not snapshot.are_directly_connected(
            snapshot.get_building(1), snapshot.get_building(2)
        )
        assert snapshot.next_building_id() == 4

    def test_plain_building_is_not_linked(self, snapshot):
        template = BuildingTemplate(
            id=3, type="Lander Hab", width=10.0, length=10.0, x=15.0, y=0.0, facing=0.0
        )

        building = snapshot.commit(template)

        assert building.capabilities == HAB
        assert snapshot.graph.degree(building.id) == 0

    def test_commit_bumps_revision(self, snapshot):
        before = snapshot.revision
        snapshot.commit(BuildingTemplate(
            id=3, type="Workshop", width=8.0, length=8.0, x=0.0, y=40.0, facing=0.0
        ))
        assert snapshot.revision == before + 1

    def test_commit_without_catalog(self):
        snapshot = SettlementSnapshot()
        building = snapshot.commit(BuildingTemplate(
            id=1, type="Mystery", width=3.0, length=3.0, x=0.0, y=0.0, facing=0.0
        ))
        assert building.capabilities == frozenset()


class TestFootprintOracle:
    """Test footprint and line obstruction queries."""

    @pytest.fixture
    def settlement(self):
        return SettlementSnapshot(buildings=[make_building(1)])

    def test_empty_settlement_is_open(self):
        oracle = FootprintOracle(SettlementSnapshot())
        assert oracle.is_location_open(0.0, 0.0, 10.0, 10.0, 0.0)
        assert oracle.is_line_unobstructed((0.0, 0.0), (10.0, 0.0))

    def test_overlap_is_blocked(self, settlement):
        oracle = FootprintOracle(settlement)
        assert not oracle.is_location_open(9.0, 0.0, 10.0, 10.0, 0.0)

    def test_touching_is_open(self, settlement):
        """Shared edges have zero overlap area."""
        oracle = FootprintOracle(settlement)
        assert oracle.is_location_open(10.0, 0.0, 10.0, 10.0, 0.0)

    def test_rotated_corner_overlap(self, settlement):
        """A 45-degree square 12m away dips its corner into the building."""
        oracle = FootprintOracle(settlement)
        assert not oracle.is_location_open(0.0, 12.0, 10.0, 10.0, 45.0)
        assert oracle.is_location_open(0.0, 12.2, 10.0, 10.0, 45.0)

    def test_line_through_building(self, settlement):
        oracle = FootprintOracle(settlement)
        assert not oracle.is_line_unobstructed((-10.0, 0.0), (10.0, 0.0))

    def test_line_clear_of_building(self, settlement):
        oracle = FootprintOracle(settlement)
        assert oracle.is_line_unobstructed((5.1, -10.0), (5.1, 10.0))

    def test_obstacle_blocks(self, settlement):
        rover = Obstacle(id="rover-1", kind="vehicle", width=3.0, length=5.0, x=30.0, y=0.0)
        oracle = FootprintOracle(settlement, obstacles=[rover])

        assert not oracle.is_location_open(30.0, 4.0, 4.0, 4.0, 0.0)
        assert not oracle.is_line_unobstructed((20.0, 0.0), (40.0, 0.0))

    def test_sees_buildings_added_later(self, settlement):
        oracle = FootprintOracle(settlement)
        assert oracle.is_location_open(50.0, 0.0, 4.0, 4.0, 0.0)

        settlement.add_building(make_building(2, x=50.0))

        assert not oracle.is_location_open(50.0, 0.0, 4.0, 4.0, 0.0)


class TestStaticBuildingCatalog:
    """Test building type catalog lookups."""

    def test_from_yaml(self):
        catalog = StaticBuildingCatalog.from_yaml(CATALOG_YAML)

        assert len(catalog) == 3
        assert catalog.types == ["Airlock", "Hallway", "Lander Hab"]
        assert catalog.has_life_support("Lander Hab")
        assert catalog.has_connection("Hallway")
        assert not catalog.has_connection("Airlock")
        assert catalog.capabilities("Airlock") == frozenset({Capability.EVA})
        assert catalog.connector_width("Hallway") == 2.0
        assert catalog.length("Hallway") == 0.0

    def test_from_file(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text(CATALOG_YAML)

        catalog = StaticBuildingCatalog.from_file(path)

        assert "Lander Hab" in catalog
        assert catalog.width("Airlock") == 6.0

    def test_from_dict_without_wrapper(self):
        catalog = StaticBuildingCatalog.from_dict({"Shed": {"width": 4, "length": 4}})
        assert catalog.capabilities("Shed") == frozenset()

    def test_unknown_type(self, catalog):
        with pytest.raises(KeyError, match="Unknown building type 'Rocket'"):
            catalog.width("Rocket")
