"""Placement rulesets shipped as YAML documents.

A ruleset file holds a one-line ``description`` and a ``rules`` mapping of
``PlacementRules`` fields. Fields left out keep their model defaults.
Request-time overrides replace individual fields, and the merged rules are
validated as a whole, so an override can make a valid ruleset invalid.
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ..models.rules import PlacementRules

logger = logging.getLogger(__name__)

RULESETS_DIR = Path(__file__).parent.parent / "rulesets"


class RulesetError(ValueError):
    """A ruleset, with any overrides applied, does not form valid rules."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Ruleset '{name}' is invalid: {reason}")


def available_rulesets() -> list[str]:
    """Names of the shipped rulesets, sorted."""
    return sorted(path.stem for path in RULESETS_DIR.glob("*.yaml"))


def ruleset_path(name: str) -> Path:
    """Path of a shipped ruleset.

    Raises:
        FileNotFoundError: If no ruleset has that name
    """
    path = RULESETS_DIR / f"{name}.yaml"
    if not path.is_file():
        raise FileNotFoundError(
            f"Ruleset '{name}' not found (available: {', '.join(available_rulesets())})"
        )
    return path


def read_ruleset(name: str) -> dict[str, Any]:
    """Raw ruleset document for a shipped ruleset."""
    with open(ruleset_path(name)) as f:
        document = yaml.safe_load(f)
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise RulesetError(name, "top level must be a mapping")
    return document


def list_rulesets() -> list[dict[str, str]]:
    """Shipped rulesets as ``{name, description}`` entries."""
    return [
        {"name": name, "description": str(read_ruleset(name).get("description", ""))}
        for name in available_rulesets()
    ]


def _describe(error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        field = ".".join(str(part) for part in item["loc"])
        problems.append(f"{field}: {item['msg']}" if field else item["msg"])
    return "; ".join(problems)


def parse_ruleset(
    document: dict[str, Any],
    name: str,
    overrides: dict[str, Any] | None = None,
) -> PlacementRules:
    """Build placement rules from a ruleset document.

    Args:
        document: Parsed ruleset with an optional ``rules`` mapping
        name: Ruleset name used in error messages
        overrides: Fields replaced after the ruleset is read

    Returns:
        Validated placement rules

    Raises:
        RulesetError: If the merged rules fail validation
    """
    fields = document.get("rules") or {}
    if not isinstance(fields, dict):
        raise RulesetError(name, "'rules' must be a mapping")

    try:
        rules = PlacementRules.model_validate(fields)
        if overrides:
            rules = rules.with_overrides(overrides)
    except ValidationError as e:
        raise RulesetError(name, _describe(e)) from e
    return rules


def load_ruleset(
    name: str = "default",
    overrides: dict[str, Any] | None = None,
) -> PlacementRules:
    """Load a shipped ruleset with optional field overrides.

    Raises:
        FileNotFoundError: If no ruleset has that name
        RulesetError: If the ruleset or its overrides fail validation
    """
    rules = parse_ruleset(read_ruleset(name), name, overrides)
    if overrides:
        logger.debug(f"Ruleset '{name}': overrode {', '.join(sorted(overrides))}")
    return rules
