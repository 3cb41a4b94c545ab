"""Collaborator contracts consumed by the placement solver.

The solver only reads through these interfaces. Host simulations provide
their own implementations; ``settlefit.settlement`` ships in-memory ones.
"""

from typing import Any, MutableSequence, Protocol, Sequence

from ..geometry.vectors import Point
from ..models.buildings import Building, BuildingTemplate


class BuildingTypeCatalog(Protocol):
    """Building-type metadata lookup."""

    def width(self, building_type: str) -> float: ...

    def length(self, building_type: str) -> float: ...

    def has_connection(self, building_type: str) -> bool: ...

    def has_life_support(self, building_type: str) -> bool: ...

    def connector_width(self, building_type: str) -> float: ...


class CollisionOracle(Protocol):
    """Obstruction checks against everything already on the ground."""

    def is_location_open(
        self,
        x: float,
        y: float,
        width: float,
        length: float,
        facing: float,
    ) -> bool: ...

    def is_line_unobstructed(self, p1: Point, p2: Point) -> bool: ...


class SettlementView(Protocol):
    """Read-only query surface over a settlement's buildings."""

    def buildings(self) -> list[Building]: ...

    def life_support_buildings(self) -> list[Building]: ...

    def buildings_of_type(self, building_type: str) -> list[Building]: ...

    def building_count(self) -> int: ...

    def has_airlock(self) -> bool: ...

    def has_walkable_airlock_access(self, building: Building) -> bool: ...

    def are_directly_connected(self, first: Building, second: Building) -> bool: ...

    def next_building_id(self) -> int: ...


class RandomSource(Protocol):
    """Seedable randomness; ``random.Random`` satisfies this."""

    def shuffle(self, x: MutableSequence[Any]) -> None: ...

    def uniform(self, a: float, b: float) -> float: ...


class TemplateCommitter(Protocol):
    """Instantiates and registers an accepted template as a real building."""

    def commit(self, template: BuildingTemplate) -> Any: ...


def shuffled(rng: RandomSource, items: Sequence) -> list:
    """Return a shuffled copy of ``items`` using the injected random source."""
    result = list(items)
    rng.shuffle(result)
    return result
