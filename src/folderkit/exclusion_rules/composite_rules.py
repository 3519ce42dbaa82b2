"""Composite exclusion policy combining several policies."""

from typing import List, Sequence

from .base_rules import BaseExclusionRules


class CompositeExclusionRules(BaseExclusionRules):
    """Exclusion policy that skips an entry when any constituent policy does.

    This is how hidden-entry skipping and name-based skipping are combined in one walk.

    Attributes:
        rules (List[BaseExclusionRules]): Constituent policies, evaluated in order.

    Example:
        >>> from folderkit.exclusion_rules.name_rules import HiddenExclusionRules, NameExclusionRules
        >>> composite = CompositeExclusionRules([HiddenExclusionRules(), NameExclusionRules({"tmp"})])
        >>> composite.exclude(".git/")
        True
        >>> composite.exclude("build/tmp/")
        True
        >>> composite.exclude("build/out.bin")
        False
    """

    def __init__(self, rules: Sequence[BaseExclusionRules]):
        """Initialize the composite policy.

        Args:
            rules: Policies to combine.

        Raises:
            ValueError: If rules is empty.
            TypeError: If any rule doesn't implement BaseExclusionRules.
        """
        if not rules:
            raise ValueError("At least one exclusion rule must be provided")

        for i, rule in enumerate(rules):
            if not isinstance(rule, BaseExclusionRules):
                raise TypeError(f"Rule at index {i} must implement BaseExclusionRules, got {type(rule)}")

        self.rules: List[BaseExclusionRules] = list(rules)

    def exclude(self, path: str) -> bool:
        # Short-circuits on the first policy that excludes
        return any(rule.exclude(path) for rule in self.rules)

    def add_rule_object(self, rule: BaseExclusionRules) -> None:
        """Add another policy to this composite.

        Raises:
            TypeError: If rule doesn't implement BaseExclusionRules.
        """
        if not isinstance(rule, BaseExclusionRules):
            raise TypeError(f"Rule must implement BaseExclusionRules, got {type(rule)}")
        self.rules.append(rule)

    def get_rules(self) -> List[BaseExclusionRules]:
        """Get a copy of the constituent policies."""
        return list(self.rules)

    def __repr__(self) -> str:
        return f"CompositeExclusionRules({self.rules!r})"
