"""Footprint collision oracle backed by a Shapely STRtree."""

from shapely.strtree import STRtree

from ..contract.protocols import SettlementView
from ..geometry.footprints import footprint_polygon, segment
from ..geometry.vectors import Point
from ..models.buildings import Obstacle


class FootprintOracle:
    """Answers footprint and line obstruction queries for a settlement.

    Obstructions are the settlement's building footprints plus any extra
    obstacles (parked vehicles, construction sites). Footprints that only
    touch are not overlapping. The spatial index is rebuilt whenever the
    settlement's ``revision`` changes.

    Implements the ``CollisionOracle`` protocol.
    """

    def __init__(
        self,
        settlement: SettlementView,
        obstacles: list[Obstacle] | None = None,
        tolerance: float = 1e-6,
    ):
        """Initialize oracle.

        Args:
            settlement: Settlement whose buildings are obstructions
            obstacles: Additional non-building obstructions
            tolerance: Intersection area (m^2) below which footprints only touch
        """
        self.settlement = settlement
        self.obstacles = obstacles or []
        self.tolerance = tolerance

        self._revision = None
        self._geometries = []
        self._tree: STRtree | None = None

    def _index(self) -> STRtree | None:
        revision = getattr(self.settlement, "revision", None)
        if self._tree is None or revision is None or revision != self._revision:
            self._geometries = [b.to_shapely_polygon() for b in self.settlement.buildings()]
            self._geometries.extend(o.to_shapely_polygon() for o in self.obstacles)
            self._tree = STRtree(self._geometries) if self._geometries else None
            self._revision = revision
        return self._tree

    def is_location_open(
        self,
        x: float,
        y: float,
        width: float,
        length: float,
        facing: float,
    ) -> bool:
        """Check a proposed footprint overlaps no existing footprint."""
        tree = self._index()
        if tree is None:
            return True

        candidate = footprint_polygon(x, y, width, length, facing)
        for idx in tree.query(candidate, predicate="intersects"):
            overlap = candidate.intersection(self._geometries[idx]).area
            if overlap > self.tolerance:
                return False
        return True

    def is_line_unobstructed(self, p1: Point, p2: Point) -> bool:
        """Check a straight line crosses no existing footprint."""
        tree = self._index()
        if tree is None:
            return True

        hits = tree.query(segment(p1, p2), predicate="intersects")
        return len(hits) == 0
