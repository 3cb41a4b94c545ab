"""Point, vector and angle helpers for settlement coordinates.

Conventions:
- Facing/direction is in degrees; 0 points along +y.
- Moving a distance ``d`` in direction ``a`` offsets a point by
  ``(-d * sin(a), d * cos(a))``.
- Local building coordinates are rotated by the building's facing and
  translated by its center to get world coordinates.
"""

from __future__ import annotations

import math

# Type alias
Point = tuple[float, float]


def normalize_facing(facing: float) -> float:
    """Wrap an angle in degrees into [0, 360).

    Args:
        facing: Angle in degrees (any sign or magnitude)

    Returns:
        Equivalent angle in [0, 360)
    """
    result = math.fmod(facing, 360.0)
    if result < 0:
        result += 360.0
    # -1e-17 + 360.0 rounds to 360.0
    if result >= 360.0:
        result = 0.0
    return result


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(p2[0] - p1[0], p2[1] - p1[1])


def midpoint(p1: Point, p2: Point) -> Point:
    """Midpoint of the segment p1-p2."""
    return (p1[0] + p2[0]) / 2.0, (p1[1] + p2[1]) / 2.0


def direction_of(origin: Point, target: Point) -> float:
    """Facing in degrees [0, 360) of the vector from origin to target.

    Inverse of :func:`offset_point`: ``direction_of(p, offset_point(p, a, d))``
    is ``a`` for any ``d > 0``.
    """
    dx = target[0] - origin[0]
    dy = target[1] - origin[1]
    return normalize_facing(math.degrees(math.atan2(-dx, dy)))


def offset_point(origin: Point, direction_deg: float, dist: float) -> Point:
    """Move a point ``dist`` meters in the given facing direction."""
    rad = math.radians(direction_deg)
    return (
        origin[0] - dist * math.sin(rad),
        origin[1] + dist * math.cos(rad),
    )


def rotate_local(local_x: float, local_y: float, facing_deg: float) -> Point:
    """Rotate a local offset by a facing angle (counter-clockwise)."""
    rad = math.radians(facing_deg)
    cos_f = math.cos(rad)
    sin_f = math.sin(rad)
    return (
        local_x * cos_f - local_y * sin_f,
        local_x * sin_f + local_y * cos_f,
    )


def local_to_world(
    local_x: float,
    local_y: float,
    center: Point,
    facing_deg: float,
) -> Point:
    """Transform a point from a building's local frame into world space.

    Args:
        local_x: X offset in the building frame (width axis)
        local_y: Y offset in the building frame (length axis, +y = front)
        center: Building center in world coordinates
        facing_deg: Building facing in degrees

    Returns:
        World coordinates of the point
    """
    rx, ry = rotate_local(local_x, local_y, facing_deg)
    return rx + center[0], ry + center[1]
