"""FastMCP server for settlement building placement.

Exposes MCP tools that place delivered buildings into a settlement snapshot
and inspect the available placement rulesets.
"""

import logging
import sys
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import ValidationError

from .pipeline import place_buildings
from .rules.loader import RulesetError
from .solver.errors import PlacementFailed
from .tools.placement_tools import PlaceBuildingsRequest, PlaceBuildingsResponse

# Configure logging to stderr (required for MCP stdio transport)
# stdio servers must NOT log to stdout as it interferes with JSON-RPC
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

# Create MCP server (following Python naming convention: {service}_mcp)
mcp = FastMCP(
    name="settlefit_mcp",
    instructions="Place new buildings into a settlement layout. "
    "Use settlefit_place_buildings with the current buildings, a building type "
    "catalog and the buildings to deliver; use ruleset_list and ruleset_get to "
    "inspect placement rules.",
)


@mcp.tool(
    annotations={
        "readOnlyHint": True,  # Works on the supplied snapshot only
        "destructiveHint": False,
        "idempotentHint": True,  # Same seed produces same results
        "openWorldHint": False,
    }
)
async def settlefit_place_buildings(
    catalog: list[dict[str, Any]],
    requests: list[dict[str, Any]],
    buildings: list[dict[str, Any]] | None = None,
    connections: list[list[int]] | None = None,
    obstacles: list[dict[str, Any]] | None = None,
    ruleset: str = "default",
    rules_override: dict[str, Any] | None = None,
    seed: int = 42,
) -> dict[str, Any]:
    """Place delivered buildings into a settlement.

    Buildings are placed in order; each placed building is an obstruction for
    the next. Connector types are bridged between habitable buildings,
    habitable types go beside habitable buildings, other types beside their
    own type, with an expanding search as the last resort.

    Args:
        catalog: Building types with name, width, length, capabilities
                 (life_support, connection, eva)
        requests: Buildings to place with building_type and optional
                  width, length, x, y, facing
        buildings: Existing buildings with id, type, width, length, x, y,
                   facing, capabilities
        connections: Pairs of directly connected building ids
        obstacles: Vehicles/construction sites with id, kind, width, length, x, y, facing
        ruleset: Ruleset name (use ruleset_list to see available options)
        rules_override: Optional rule overrides (e.g. {"max_search_distance": 200})
        seed: Random seed for reproducible placement

    Returns:
        Dict with templates (id, type, width, length, x, y, facing, preset)
        and statistics
    """
    try:
        request = PlaceBuildingsRequest(
            settlement={
                "buildings": buildings or [],
                "connections": [tuple(c) for c in connections or []],
                "obstacles": obstacles or [],
            },
            catalog=catalog,
            requests=requests,
            config={
                "ruleset": ruleset,
                "rules_override": rules_override,
                "seed": seed,
            },
        )
    except ValidationError as e:
        return {
            "isError": True,
            "error": f"Invalid request: {e}",
            "suggestion": "Check building fields (width/length > 0) and capability names",
        }

    try:
        templates, stats = place_buildings(request)
    except PlacementFailed as e:
        return {
            "isError": True,
            "error": str(e),
            "suggestion": "Raise max_search_distance via rules_override or remove obstacles",
        }
    except RulesetError as e:
        return {
            "isError": True,
            "error": str(e),
            "suggestion": "Check rules_override field names and keep max_search_distance >= search_start_distance",
        }
    except (KeyError, FileNotFoundError) as e:
        return {
            "isError": True,
            "error": str(e),
            "suggestion": "Use ruleset_list for rulesets and include every requested type in catalog",
        }
    except Exception as e:
        logger.exception("Placement failed")
        return {
            "isError": True,
            "error": f"Placement failed: {str(e)}",
        }

    response = PlaceBuildingsResponse(templates=templates, statistics=stats)
    return response.model_dump()


@mcp.tool(
    annotations={
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    }
)
async def ruleset_list() -> dict[str, Any]:
    """List available placement rulesets.

    Returns:
        Dict with rulesets array containing {name, description} objects
    """
    from .rules.loader import list_rulesets

    try:
        rulesets = list_rulesets()
        return {
            "rulesets": rulesets,
            "count": len(rulesets),
        }
    except Exception as e:
        logger.exception("Failed to list rulesets")
        return {
            "isError": True,
            "error": str(e),
            "rulesets": [],
        }


@mcp.tool(
    annotations={
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    }
)
async def ruleset_get(
    name: str = "default",
) -> dict[str, Any]:
    """Get a placement ruleset and its JSON schema.

    Args:
        name: Ruleset name (use ruleset_list to see available options)

    Returns:
        Dict with name, rules (configuration), and schema (JSON Schema)
    """
    from .rules.loader import load_ruleset

    try:
        rules = load_ruleset(name)
        return {
            "name": name,
            "rules": rules.model_dump(),
            "schema": rules.model_json_schema(),
        }
    except FileNotFoundError:
        return {
            "isError": True,
            "error": f"Ruleset '{name}' not found",
            "suggestion": "Use ruleset_list to see available rulesets",
        }
    except RulesetError as e:
        return {
            "isError": True,
            "error": str(e),
            "suggestion": "Fix the ruleset fields reported in the error",
        }
    except Exception as e:
        logger.exception(f"Failed to load ruleset '{name}'")
        return {
            "isError": True,
            "error": str(e),
            "suggestion": "Check ruleset YAML syntax",
        }


def run_server():
    """Run the MCP server over stdio."""
    mcp.run()


def main():
    """Main entry point."""
    run_server()


if __name__ == "__main__":
    main()
