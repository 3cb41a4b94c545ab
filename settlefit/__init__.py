"""Settlefit - Automatic building placement for settlement layouts.

This package provides:
- A heuristic placement solver (adjacency, connector bridging, expanding search)
- In-memory settlement, catalog and collision oracle implementations
- A delivery pipeline for resupply arrivals and initial construction
- MCP tools for snapshot-in/templates-out placement

Core functionality can be imported without MCP server dependencies:
    from settlefit.solver import PlacementDispatcher
    from settlefit.pipeline import place_buildings

To get the MCP server instance:
    from settlefit import get_mcp
    mcp = get_mcp()
"""

__version__ = "0.1.0"


def get_mcp():
    """Get the MCP server instance (lazy import to avoid coupling).

    Returns:
        FastMCP: The configured MCP server instance.
    """
    from .server import mcp
    return mcp


# Expose core modules for direct import without MCP dependency
def get_pipeline():
    """Get the pipeline module for direct use."""
    from . import pipeline
    return pipeline


def get_solver():
    """Get the solver module for direct use."""
    from . import solver
    return solver


__all__ = ["get_mcp", "get_pipeline", "get_solver", "__version__"]
