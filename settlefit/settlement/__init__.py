"""In-memory settlement collaborators for the placement solver.

These implement the solver's collaborator protocols so it can run without a
host simulation: a static catalog, a networkx-backed settlement snapshot and
a Shapely footprint oracle.
"""

from .catalog import StaticBuildingCatalog
from .oracle import FootprintOracle
from .snapshot import SettlementSnapshot

__all__ = [
    "StaticBuildingCatalog",
    "FootprintOracle",
    "SettlementSnapshot",
]
