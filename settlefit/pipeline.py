"""Building delivery pipeline for resupply arrivals and initial construction.

Orchestrates a batch of placement requests against one settlement:
1. Build the catalog, settlement snapshot and collision oracle
2. Load placement rules
3. For each delivered building, in order:
   a. Use its preset position if the footprint there is open
   b. Otherwise run the placement dispatcher
   c. Validate the template and commit it before the next request
"""

import logging
import random
import time
import uuid
from typing import Any, Callable, Dict, List, Optional, Tuple

from .contract.protocols import BuildingTypeCatalog, CollisionOracle, TemplateCommitter
from .contract.validator import template_to_dict, validate_template
from .geometry.vectors import normalize_facing
from .models.buildings import BuildingTemplate, PlacementRequest
from .models.rules import PlacementRules
from .rules.loader import load_ruleset
from .settlement.catalog import StaticBuildingCatalog
from .settlement.oracle import FootprintOracle
from .settlement.snapshot import SettlementSnapshot
from .solver.dimensions import resolve_dimensions
from .solver.dispatcher import PlacementDispatcher
from .tools.placement_tools import PlaceBuildingsRequest, PlacedTemplate

logger = logging.getLogger(__name__)


# Progress callback type
ProgressCallback = Callable[[str, float], None]


def preset_template(
    request: PlacementRequest,
    catalog: BuildingTypeCatalog,
    oracle: CollisionOracle,
    next_id: int,
    rules: PlacementRules,
) -> Optional[BuildingTemplate]:
    """Template at the request's preset position, if that footprint is open.

    Args:
        request: Placement request carrying x, y and optional facing
        catalog: Building type catalog
        oracle: Collision oracle
        next_id: Id to give the template
        rules: Placement rules (default dimensions)

    Returns:
        Template at the preset position, or None if absent or blocked
    """
    if not request.has_preset_position:
        return None

    width, length = resolve_dimensions(
        request.building_type, catalog, rules, request.width, request.length
    )
    facing = normalize_facing(request.facing or 0.0)

    if not oracle.is_location_open(request.x, request.y, width, length, facing):
        logger.info(
            f"{request.building_type}: preset position ({request.x}, {request.y}) "
            f"is blocked, repositioning"
        )
        return None

    return BuildingTemplate(
        id=next_id,
        type=request.building_type,
        width=width,
        length=length,
        x=request.x,
        y=request.y,
        facing=facing,
    )


def deliver_buildings(
    requests: List[PlacementRequest],
    dispatcher: PlacementDispatcher,
    committer: TemplateCommitter,
    strict: bool = True,
    progress_callback: Optional[ProgressCallback] = None,
) -> List[Tuple[BuildingTemplate, bool]]:
    """Place and commit delivered buildings one at a time.

    Each template is committed before the next request is solved, so later
    requests see earlier arrivals as obstructions.

    Args:
        requests: Buildings to place, in delivery order
        dispatcher: Placement dispatcher bound to the settlement
        committer: Receives each accepted template
        strict: Raise if a template violates its contract
        progress_callback: Optional callback for progress updates (message, percent)

    Returns:
        List of (template, used_preset_position) in delivery order

    Raises:
        PlacementFailed: If a building cannot be placed anywhere
    """
    delivered = []
    total = max(len(requests), 1)

    for index, request in enumerate(requests):
        template = preset_template(
            request,
            dispatcher.catalog,
            dispatcher.oracle,
            dispatcher.settlement.next_building_id(),
            dispatcher.rules,
        )
        used_preset = template is not None
        if template is None:
            template = dispatcher.place(request)

        validate_template(template, strict=strict)
        committer.commit(template)
        delivered.append((template, used_preset))

        if progress_callback:
            progress_callback(
                f"Placed {template.type} #{template.id}",
                100.0 * (index + 1) / total,
            )

    return delivered


def place_buildings(
    request: PlaceBuildingsRequest,
    progress_callback: Optional[ProgressCallback] = None,
) -> Tuple[List[PlacedTemplate], Dict[str, Any]]:
    """Main pipeline: place a batch of buildings into a settlement snapshot.

    Args:
        request: PlaceBuildingsRequest with settlement, catalog, requests and config
        progress_callback: Optional callback for progress updates (message, percent)

    Returns:
        Tuple of (placed templates, statistics)
    """
    job_id = str(uuid.uuid4())[:8]
    stats: Dict[str, Any] = {"job_id": job_id}
    start_time = time.time()

    def report_progress(message: str, percent: float):
        if progress_callback:
            progress_callback(message, percent)
        logger.info(f"[{job_id}] {message} ({percent:.0f}%)")

    # PHASE 1: Build collaborators
    report_progress("Loading settlement...", 5)

    catalog = StaticBuildingCatalog(request.catalog)
    unknown = sorted({r.building_type for r in request.requests} - set(catalog.types))
    if unknown:
        raise KeyError(f"Requested building types missing from catalog: {unknown}")

    snapshot = SettlementSnapshot(
        buildings=request.settlement.buildings,
        connections=request.settlement.connections,
        catalog=catalog,
    )
    oracle = FootprintOracle(snapshot, obstacles=request.settlement.obstacles)

    stats["num_existing"] = snapshot.building_count()
    stats["num_obstacles"] = len(request.settlement.obstacles)
    stats["num_requests"] = len(request.requests)

    # PHASE 2: Load rules
    report_progress("Loading rules...", 10)

    rules = load_ruleset(request.config.ruleset, request.config.rules_override)
    stats["ruleset"] = request.config.ruleset

    # PHASE 3: Place buildings
    dispatcher = PlacementDispatcher(
        catalog=catalog,
        settlement=snapshot,
        oracle=oracle,
        rng=random.Random(request.config.seed),
        rules=rules,
    )

    def report_placement(message: str, percent: float):
        report_progress(message, 10 + 0.9 * percent)

    delivered = deliver_buildings(
        request.requests,
        dispatcher,
        snapshot,
        strict=request.config.strict,
        progress_callback=report_placement,
    )

    placed = [
        PlacedTemplate(**template_to_dict(template), preset=used_preset)
        for template, used_preset in delivered
    ]

    stats["num_placed"] = len(placed)
    stats["num_preset"] = sum(1 for p in placed if p.preset)
    stats["num_buildings_after"] = snapshot.building_count()
    stats["total_time_seconds"] = time.time() - start_time

    return placed, stats
