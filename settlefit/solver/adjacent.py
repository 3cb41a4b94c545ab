"""Placement of a new building beside one reference building.

Each of the reference's four sides is a candidate. Sides are tried in a
shuffled order and the first footprint the collision oracle reports open is
accepted.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from ..contract.protocols import CollisionOracle, RandomSource, SettlementView, shuffled
from ..geometry.vectors import normalize_facing, offset_point
from ..models.buildings import Building, BuildingTemplate

logger = logging.getLogger(__name__)


class Side(str, Enum):
    """Side of a reference building, relative to its facing."""

    FRONT = "front"
    BACK = "back"
    RIGHT = "right"
    LEFT = "left"


# Angle added to the reference facing for each side
SIDE_ANGLES = {
    Side.FRONT: 0.0,
    Side.BACK: 180.0,
    Side.RIGHT: 90.0,
    Side.LEFT: 270.0,
}


@dataclass(frozen=True)
class SideOffset:
    """Where a candidate goes on one side of a reference building."""

    side: Side
    angle: float  # Direction from reference center, degrees
    distance: float  # Center-to-center distance excluding separation
    rotation: float  # Candidate facing, degrees [0, 360)


def side_offset(
    side: Side,
    reference: Building,
    width: float,
    length: float,
    face_away: bool = False,
) -> SideOffset:
    """Compute the candidate offset for one side of a reference building.

    Front/back sides stack along the reference's length axis; right/left
    sides along its width axis. With ``face_away`` the candidate is turned
    to point away from the reference, so on the right/left sides its length
    (not width) lies along the offset direction.

    Args:
        side: Which side of the reference
        reference: Existing building to place against
        width: Candidate width
        length: Candidate length
        face_away: Turn the candidate to face away from the reference

    Returns:
        Immutable SideOffset for that side
    """
    angle = reference.facing + SIDE_ANGLES[side]

    if side in (Side.FRONT, Side.BACK):
        structure_distance = reference.length / 2 + length / 2
    elif face_away:
        structure_distance = reference.width / 2 + length / 2
    else:
        structure_distance = reference.width / 2 + width / 2

    rotation = angle if face_away else reference.facing

    return SideOffset(
        side=side,
        angle=normalize_facing(angle),
        distance=structure_distance,
        rotation=normalize_facing(rotation),
    )


class AdjacentPlacer:
    """Places buildings directly beside an existing building."""

    def __init__(
        self,
        settlement: SettlementView,
        oracle: CollisionOracle,
        rng: RandomSource,
    ):
        """Initialize placer.

        Args:
            settlement: Settlement view (source of new building ids)
            oracle: Collision oracle for footprint checks
            rng: Random source for side ordering
        """
        self.settlement = settlement
        self.oracle = oracle
        self.rng = rng

    def candidates(
        self,
        building_type: str,
        width: float,
        length: float,
        reference: Building,
        separation: float,
        face_away: bool = False,
    ):
        """Yield open candidate positions around the reference, lazily.

        Yields:
            (x, y, facing) tuples for footprints the oracle reports open
        """
        for side in shuffled(self.rng, list(Side)):
            offset = side_offset(side, reference, width, length, face_away)
            x, y = offset_point(
                reference.center, offset.angle, offset.distance + separation
            )
            if self.oracle.is_location_open(x, y, width, length, offset.rotation):
                logger.debug(
                    f"{building_type}: {side.value} of building {reference.id} "
                    f"open at ({x:.2f}, {y:.2f})"
                )
                yield x, y, offset.rotation

    def place(
        self,
        building_type: str,
        width: float,
        length: float,
        reference: Building,
        separation: float,
        face_away: bool = False,
    ) -> BuildingTemplate | None:
        """Place a building beside the reference building.

        Args:
            building_type: Building type name
            width: Candidate width (already resolved, > 0)
            length: Candidate length (already resolved, > 0)
            reference: Existing building to place against
            separation: Gap in meters between the two footprints
            face_away: Turn the candidate to face away from the reference

        Returns:
            Template at the first open side, or None if all four are blocked
        """
        found = next(
            self.candidates(
                building_type, width, length, reference, separation, face_away
            ),
            None,
        )
        if found is None:
            return None

        x, y, facing = found
        return BuildingTemplate(
            id=self.settlement.next_building_id(),
            type=building_type,
            width=width,
            length=length,
            x=x,
            y=y,
            facing=facing,
        )

    def place_near_any(
        self,
        building_type: str,
        width: float,
        length: float,
        references: list[Building],
        separation: float,
        face_away: bool = False,
    ) -> BuildingTemplate | None:
        """Try each reference building in order until one has an open side."""
        attempts = (
            self.place(building_type, width, length, reference, separation, face_away)
            for reference in references
        )
        return next((t for t in attempts if t is not None), None)
