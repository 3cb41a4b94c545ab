"""Heuristic placement solver for new settlement buildings."""

from .adjacent import AdjacentPlacer, Side, SideOffset, side_offset
from .connector import (
    ConnectorPlacer,
    Span,
    adjust_end_point,
    candidate_spans,
    nearest_building,
    spans_by_length,
)
from .dimensions import resolve_connector_width, resolve_dimensions
from .dispatcher import PlacementDispatcher
from .errors import PlacementFailed
from .expanding import ExpandingRadiusSearch

__all__ = [
    # Main solver
    "PlacementDispatcher",
    "PlacementFailed",
    # Strategies
    "AdjacentPlacer",
    "ConnectorPlacer",
    "ExpandingRadiusSearch",
    # Adjacent placement
    "Side",
    "SideOffset",
    "side_offset",
    # Connector spans
    "Span",
    "adjust_end_point",
    "candidate_spans",
    "nearest_building",
    "spans_by_length",
    # Dimensions
    "resolve_dimensions",
    "resolve_connector_width",
]
