"""Exclusion policies for filtering entries during tree traversal."""

from typing import Optional

from .base_rules import BaseExclusionRules
from .composite_rules import CompositeExclusionRules
from .git_rules import GitIgnoreExclusionRules
from .name_rules import HiddenExclusionRules, NameExclusionRules, NoExclusionRules

# Any policy accepted by the tree walker. None is shorthand for NoExclusionRules.
ExclusionPolicy = Optional[BaseExclusionRules]

__all__ = [
    "BaseExclusionRules",
    "CompositeExclusionRules",
    "ExclusionPolicy",
    "GitIgnoreExclusionRules",
    "HiddenExclusionRules",
    "NameExclusionRules",
    "NoExclusionRules",
]
