"""Collaborator contracts and template validation.

This module defines the interfaces the solver reads through and the
invariant checks applied to every emitted building template.
"""

from .protocols import (
    BuildingTypeCatalog,
    CollisionOracle,
    RandomSource,
    SettlementView,
    TemplateCommitter,
    shuffled,
)
from .validator import (
    CONTRACT_VERSION,
    template_issues,
    template_to_dict,
    validate_template,
)

__all__ = [
    # Protocols
    "BuildingTypeCatalog",
    "CollisionOracle",
    "RandomSource",
    "SettlementView",
    "TemplateCommitter",
    "shuffled",
    # Validation
    "CONTRACT_VERSION",
    "template_issues",
    "template_to_dict",
    "validate_template",
]
