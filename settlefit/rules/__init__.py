"""Placement ruleset loading."""

from .loader import (
    RulesetError,
    available_rulesets,
    list_rulesets,
    load_ruleset,
    parse_ruleset,
    ruleset_path,
)

__all__ = [
    "RulesetError",
    "available_rulesets",
    "list_rulesets",
    "load_ruleset",
    "parse_ruleset",
    "ruleset_path",
]
