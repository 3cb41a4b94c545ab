"""Building template contract validation.

Checks the invariants every emitted template must hold before it is handed
to a committer, and renders templates for wire responses.
"""

import math
from typing import Any

import structlog

from ..models.buildings import BuildingTemplate

logger = structlog.get_logger(__name__)

CONTRACT_VERSION = "1.0.0"


def template_issues(template: BuildingTemplate) -> list[str]:
    """List contract violations for a template (empty when valid).

    A model-validated template already has positive sizes and a facing in
    [0, 360). Those checks still catch ``model_construct`` templates, and
    the finiteness checks catch ``inf`` sizes and non-finite positions,
    which the field bounds let through.
    """
    issues = []

    if not (template.width > 0 and math.isfinite(template.width)):
        issues.append(f"width must be positive and finite, got {template.width}")
    if not (template.length > 0 and math.isfinite(template.length)):
        issues.append(f"length must be positive and finite, got {template.length}")
    if not (math.isfinite(template.x) and math.isfinite(template.y)):
        issues.append(f"position must be finite, got ({template.x}, {template.y})")
    if not (0.0 <= template.facing < 360.0):
        issues.append(f"facing must be in [0, 360), got {template.facing}")

    return issues


def validate_template(
    template: BuildingTemplate,
    strict: bool = False,
) -> list[str]:
    """Validate a template before commitment.

    Args:
        template: The template to validate
        strict: If True, raise on any violation

    Returns:
        List of violation messages (empty when valid)

    Raises:
        ValueError: In strict mode, if the template violates its contract
    """
    issues = template_issues(template)

    if not issues:
        logger.debug("template_validated", building_id=template.id, type=template.type)
        return issues

    if strict:
        raise ValueError(
            f"Template {template.id} ({template.type}) violates contract: "
            + "; ".join(issues)
        )

    logger.warning(
        "template_contract_violation",
        building_id=template.id,
        type=template.type,
        issues=issues,
    )
    return issues


def template_to_dict(template: BuildingTemplate) -> dict[str, Any]:
    """Render a template for wire responses.

    Examples:
        >>> t = BuildingTemplate(id=7, type="Hab", width=9, length=9, x=0, y=11, facing=0)
        >>> template_to_dict(t)["contract_version"]
        '1.0.0'
    """
    return {
        "contract_version": CONTRACT_VERSION,
        "id": template.id,
        "type": template.type,
        "width": template.width,
        "length": template.length,
        "x": template.x,
        "y": template.y,
        "facing": template.facing,
    }
