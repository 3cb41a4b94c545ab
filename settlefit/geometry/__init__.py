"""Geometry helpers for settlement layout using Shapely and numpy."""

from .footprints import (
    boundary_points,
    connector_endpoints,
    footprint_polygon,
    pairwise_distances,
    segment,
)
from .vectors import (
    Point,
    direction_of,
    distance,
    local_to_world,
    midpoint,
    normalize_facing,
    offset_point,
    rotate_local,
)

__all__ = [
    # Vector and angle math
    "Point",
    "normalize_facing",
    "distance",
    "midpoint",
    "direction_of",
    "offset_point",
    "rotate_local",
    "local_to_world",
    # Footprints
    "footprint_polygon",
    "segment",
    "connector_endpoints",
    "boundary_points",
    "pairwise_distances",
]
