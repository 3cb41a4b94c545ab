"""Shared fixtures for placement tests."""

import random

import pytest

from settlefit.models.buildings import Building, BuildingSpec, Capability
from settlefit.models.rules import PlacementRules
from settlefit.settlement.catalog import StaticBuildingCatalog


class RecordingOracle:
    """Collision oracle fake that records every query it answers."""

    def __init__(self, is_open=None, line_clear=None):
        self.is_open = is_open or (lambda x, y, width, length, facing: True)
        self.line_clear = line_clear or (lambda p1, p2: True)
        self.location_queries = []
        self.line_queries = []

    def is_location_open(self, x, y, width, length, facing):
        result = self.is_open(x, y, width, length, facing)
        self.location_queries.append(((x, y, width, length, facing), result))
        return result

    def is_line_unobstructed(self, p1, p2):
        result = self.line_clear(p1, p2)
        self.line_queries.append(((p1, p2), result))
        return result

    def was_reported_open(self, template, tol=1e-9):
        """True if the template's exact footprint was queried and reported open."""
        for (x, y, width, length, facing), result in self.location_queries:
            if (
                result
                and abs(x - template.x) <= tol
                and abs(y - template.y) <= tol
                and abs(width - template.width) <= tol
                and abs(length - template.length) <= tol
                and abs(facing - template.facing) <= tol
            ):
                return True
        return False


class WrappingOracle(RecordingOracle):
    """Records queries while delegating answers to a real oracle."""

    def __init__(self, inner):
        super().__init__(
            is_open=inner.is_location_open,
            line_clear=inner.is_line_unobstructed,
        )


HAB = frozenset({Capability.LIFE_SUPPORT})
AIRLOCK = frozenset({Capability.EVA})
CONNECTOR = frozenset({Capability.CONNECTION})


def make_building(building_id, building_type="Lander Hab", x=0.0, y=0.0,
                  width=10.0, length=10.0, facing=0.0, capabilities=HAB):
    return Building(
        id=building_id,
        type=building_type,
        width=width,
        length=length,
        x=x,
        y=y,
        facing=facing,
        capabilities=capabilities,
    )


@pytest.fixture
def catalog():
    """Small catalog covering each placement strategy."""
    return StaticBuildingCatalog([
        BuildingSpec(name="Lander Hab", width=10.0, length=10.0, capabilities=HAB),
        BuildingSpec(name="Airlock", width=6.0, length=6.0, capabilities=AIRLOCK),
        BuildingSpec(name="Hallway", width=2.0, length=0.0, capabilities=CONNECTOR),
        BuildingSpec(name="Workshop", width=8.0, length=8.0),
        BuildingSpec(name="Greenhouse", width=10.0, length=10.0),
        BuildingSpec(name="Storage Shed", width=4.0, length=4.0),
        BuildingSpec(name="Inflatable Dome", width=0.0, length=-1.0),
    ])


@pytest.fixture
def rules():
    """Default placement rules."""
    return PlacementRules()


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(1234)
