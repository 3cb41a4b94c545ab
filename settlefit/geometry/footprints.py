"""Footprint construction and boundary sampling using Shapely and numpy.

Footprints are rectangles centered on (x, y) with ``width`` along the local
x-axis and ``length`` along the local y-axis, rotated by the facing angle.
"""

from __future__ import annotations

import numpy as np
from shapely import affinity
from shapely.geometry import LineString, Polygon

from .vectors import Point, local_to_world


def footprint_polygon(
    center_x: float,
    center_y: float,
    width: float,
    length: float,
    facing_deg: float = 0.0,
) -> Polygon:
    """Create a rotated rectangle polygon centered at given point.

    Args:
        center_x: X coordinate of center
        center_y: Y coordinate of center
        width: Rectangle width (local x-dimension)
        length: Rectangle length (local y-dimension)
        facing_deg: Rotation in degrees, counter-clockwise

    Returns:
        Rectangle Polygon
    """
    half_w = width / 2
    half_l = length / 2

    coords = [
        (center_x - half_w, center_y - half_l),
        (center_x + half_w, center_y - half_l),
        (center_x + half_w, center_y + half_l),
        (center_x - half_w, center_y + half_l),
        (center_x - half_w, center_y - half_l),  # Close ring
    ]
    rect = Polygon(coords)

    if facing_deg % 360.0 == 0.0:
        return rect
    return affinity.rotate(rect, facing_deg, origin=(center_x, center_y))


def segment(p1: Point, p2: Point) -> LineString:
    """Create a straight line segment between two points."""
    return LineString([p1, p2])


def connector_endpoints(
    center_x: float,
    center_y: float,
    length: float,
    facing_deg: float,
) -> tuple[Point, Point]:
    """Get the two end points of a connector's long axis.

    Returns:
        (back_end, front_end) in world coordinates
    """
    center = (center_x, center_y)
    front = local_to_world(0.0, length / 2, center, facing_deg)
    back = local_to_world(0.0, -length / 2, center, facing_deg)
    return back, front


def boundary_points(
    center: Point,
    width: float,
    length: float,
    facing_deg: float,
    distance_from_side: float,
) -> np.ndarray:
    """Get four points just outside each side of a footprint.

    Points are ordered front, back, right, left in the building frame:
    front (0, L/2 + d), back (0, -L/2 - d), right (-W/2 - d, 0),
    left (W/2 + d, 0).

    Args:
        center: Footprint center in world coordinates
        width: Footprint width
        length: Footprint length
        facing_deg: Footprint facing in degrees
        distance_from_side: Outward offset from each side

    Returns:
        (4, 2) array of world coordinates
    """
    half_w = width / 2 + distance_from_side
    half_l = length / 2 + distance_from_side
    local = np.array([
        [0.0, half_l],
        [0.0, -half_l],
        [-half_w, 0.0],
        [half_w, 0.0],
    ])

    rad = np.radians(facing_deg)
    rotation = np.array([
        [np.cos(rad), -np.sin(rad)],
        [np.sin(rad), np.cos(rad)],
    ])

    return local @ rotation.T + np.asarray(center, dtype=float)


def pairwise_distances(points_a: np.ndarray, points_b: np.ndarray) -> np.ndarray:
    """Distance matrix between two point sets.

    Returns:
        (len(a), len(b)) array where [i, j] is |a[i] - b[j]|
    """
    deltas = points_a[:, np.newaxis, :] - points_b[np.newaxis, :, :]
    return np.linalg.norm(deltas, axis=2)
