"""Variable-length connector placement between habitable buildings.

Three passes, each ending at the first candidate pair it finds:

1. Airlock bridging: join a habitable building with no walkable route to an
   airlock to the nearest habitable building that has one.
2. Generic bridging: join a habitable building to the nearest habitable
   building it is not directly connected to.
3. Direct attachment: butt the connector against a habitable building,
   facing away from it.

A bridging pair is spanned by the shortest straight line between points
sampled just outside each building's four sides whose center line is
unobstructed and whose connector footprint is open.
"""

import logging
import math
from dataclasses import dataclass
from typing import Callable, Iterator

import numpy as np

from ..contract.protocols import CollisionOracle, RandomSource, SettlementView, shuffled
from ..geometry.footprints import boundary_points, pairwise_distances
from ..geometry.vectors import Point, direction_of, distance, midpoint, offset_point
from ..models.buildings import Building, BuildingTemplate
from ..models.rules import PlacementRules
from .adjacent import AdjacentPlacer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Span:
    """A straight connector run between two buildings."""

    start: Point  # Attachment point on the first building
    end: Point  # Attachment point on the second building

    @property
    def length(self) -> float:
        return distance(self.start, self.end)

    @property
    def facing(self) -> float:
        return direction_of(self.start, self.end)

    @property
    def center(self) -> Point:
        return midpoint(self.start, self.end)


def side_points(building: Building, distance_from_side: float) -> np.ndarray:
    """Points just outside the four sides of a building (front, back, right, left)."""
    return boundary_points(
        building.center,
        building.width,
        building.length,
        building.facing,
        distance_from_side,
    )


def candidate_spans(
    first: Building,
    second: Building,
    oracle: CollisionOracle,
    rules: PlacementRules,
) -> list[Span]:
    """All unobstructed side-to-side spans between two buildings.

    Forms the 16 pairs of side points, drops pairs closer than
    ``rules.min_span_length``, and keeps those whose straight segment the
    oracle reports unobstructed. Order is first-building-major.
    """
    first_points = side_points(first, rules.boundary_offset)
    second_points = side_points(second, rules.boundary_offset)
    lengths = pairwise_distances(first_points, second_points)

    spans = []
    for i, j in np.ndindex(lengths.shape):
        if lengths[i, j] < rules.min_span_length:
            continue
        start = (float(first_points[i, 0]), float(first_points[i, 1]))
        end = (float(second_points[j, 0]), float(second_points[j, 1]))
        if oracle.is_line_unobstructed(start, end):
            spans.append(Span(start, end))
    return spans


def spans_by_length(
    first: Building,
    second: Building,
    oracle: CollisionOracle,
    rules: PlacementRules,
) -> list[Span]:
    """Unobstructed spans between two buildings, shortest first.

    The sort is stable, so equal lengths keep first-building-major order.
    """
    return sorted(candidate_spans(first, second, oracle, rules), key=lambda s: s.length)


def adjust_end_point(
    point: Point,
    line_facing: float,
    building: Building,
    connector_width: float,
) -> Point:
    """Move a connector end point so the connector's side walls sit flush.

    The point moves away from the building center by
    ``|sin(center_angle - line_facing)| * connector_width / 2``, where
    ``center_angle`` is the direction from the building center to the point.

    Args:
        point: Initial attachment point
        line_facing: Facing of the connector line in degrees
        building: Building the point attaches to
        connector_width: Width of the connector

    Returns:
        Adjusted attachment point
    """
    center_angle = direction_of(building.center, point)
    offset_angle = math.radians(center_angle) - math.radians(line_facing)
    offset_distance = abs(math.sin(offset_angle)) * (connector_width / 2)
    return offset_point(point, center_angle, offset_distance)


def nearest_building(
    start: Building,
    buildings: list[Building],
    min_distance: float,
    accept: Callable[[Building], bool],
) -> Building | None:
    """Nearest other building (by center distance) passing ``accept``.

    Buildings closer than ``min_distance`` are skipped; ties go to the
    earliest building in the list.
    """
    eligible = [
        (distance(start.center, b.center), b)
        for b in buildings
        if b.id != start.id and accept(b)
    ]
    eligible = [(d, b) for d, b in eligible if d >= min_distance]
    if not eligible:
        return None
    return min(eligible, key=lambda item: item[0])[1]


class ConnectorPlacer:
    """Places connector buildings between or beside habitable buildings."""

    def __init__(
        self,
        settlement: SettlementView,
        oracle: CollisionOracle,
        rng: RandomSource,
        rules: PlacementRules,
        adjacent: AdjacentPlacer | None = None,
    ):
        """Initialize placer.

        Args:
            settlement: Settlement view
            oracle: Collision oracle for line and footprint checks
            rng: Random source for candidate ordering
            rules: Placement rules
            adjacent: Placer used for direct attachment (built if omitted)
        """
        self.settlement = settlement
        self.oracle = oracle
        self.rng = rng
        self.rules = rules
        self.adjacent = adjacent or AdjacentPlacer(settlement, oracle, rng)

    def place(
        self,
        building_type: str,
        connector_width: float,
        length: float,
    ) -> BuildingTemplate | None:
        """Place a connector building.

        Args:
            building_type: Connector building type name
            connector_width: Connector width (already resolved, > 0)
            length: Length used only for direct attachment

        Returns:
            Connector template, or None if every pass failed
        """
        habitable = shuffled(self.rng, self.settlement.life_support_buildings())

        template = None
        if self.settlement.has_airlock():
            template = self._bridge(
                building_type, connector_width, self._airlock_pairs(habitable)
            )
            if template is not None:
                logger.info(f"{building_type}: bridging to airlock access")

        if template is None:
            template = self._bridge(
                building_type, connector_width, self._unconnected_pairs(habitable)
            )
            if template is not None:
                logger.info(f"{building_type}: bridging unconnected buildings")

        if template is None:
            template = self.adjacent.place_near_any(
                building_type,
                connector_width,
                length,
                habitable,
                separation=0.0,
                face_away=True,
            )
            if template is not None:
                logger.info(f"{building_type}: attached directly to a building")

        return template

    def _airlock_pairs(
        self, habitable: list[Building]
    ) -> Iterator[tuple[Building, Building]]:
        """Buildings without airlock access paired with their nearest that has it."""
        walkable = self.settlement.has_walkable_airlock_access
        for start in habitable:
            if walkable(start):
                continue
            end = nearest_building(
                start, habitable, self.rules.min_bridge_distance, walkable
            )
            if end is not None:
                yield start, end

    def _unconnected_pairs(
        self, habitable: list[Building]
    ) -> Iterator[tuple[Building, Building]]:
        """Buildings paired with their nearest not-directly-connected neighbor."""
        for start in habitable:
            end = nearest_building(
                start,
                habitable,
                self.rules.min_bridge_distance,
                lambda b, start=start: not self.settlement.are_directly_connected(start, b),
            )
            if end is not None:
                yield start, end

    def _bridge(
        self,
        building_type: str,
        connector_width: float,
        pairs: Iterator[tuple[Building, Building]],
    ) -> BuildingTemplate | None:
        # Only the first pair is attempted; a failed span ends the pass.
        pair = next(pairs, None)
        if pair is None:
            return None
        first, second = pair
        return self.span_between(building_type, connector_width, first, second)

    def span_between(
        self,
        building_type: str,
        connector_width: float,
        first: Building,
        second: Building,
    ) -> BuildingTemplate | None:
        """Connector template spanning two buildings.

        Clear spans are tried shortest first. A span is accepted once the
        oracle reports the full connector footprint open, so a clear center
        line with a blocked side wall moves on to the next span.

        Args:
            building_type: Connector building type name
            connector_width: Connector width
            first: Building at the start of the connector
            second: Building at the end of the connector

        Returns:
            Template whose length is the adjusted span, or None if no span
            yields an open footprint
        """
        spans = spans_by_length(first, second, self.oracle, self.rules)
        if not spans:
            logger.debug(
                f"{building_type}: no clear line between buildings "
                f"{first.id} and {second.id}"
            )
            return None

        for span in spans:
            adjusted = self.adjusted_span(span, first, second, connector_width)
            if adjusted.length <= 0:
                continue
            x, y = adjusted.center
            if self.oracle.is_location_open(
                x, y, connector_width, adjusted.length, adjusted.facing
            ):
                return BuildingTemplate(
                    id=self.settlement.next_building_id(),
                    type=building_type,
                    width=connector_width,
                    length=adjusted.length,
                    x=x,
                    y=y,
                    facing=adjusted.facing,
                )

        logger.debug(
            f"{building_type}: every clear span between buildings {first.id} "
            f"and {second.id} has a blocked footprint"
        )
        return None

    @staticmethod
    def adjusted_span(
        span: Span,
        first: Building,
        second: Building,
        connector_width: float,
    ) -> Span:
        """Span with both ends moved so the connector walls sit flush."""
        line_facing = span.facing
        return Span(
            adjust_end_point(span.start, line_facing, first, connector_width),
            adjust_end_point(span.end, line_facing, second, connector_width),
        )
