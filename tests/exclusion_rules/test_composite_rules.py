"""Unit tests for composite exclusion rules."""

from unittest.mock import Mock

import pytest

from folderkit.exclusion_rules.base_rules import BaseExclusionRules
from folderkit.exclusion_rules.composite_rules import CompositeExclusionRules
from folderkit.exclusion_rules.name_rules import HiddenExclusionRules, NameExclusionRules


class MockExclusionRules(BaseExclusionRules):
    """Mock exclusion rules for testing."""

    def __init__(self, exclude_paths=None):
        self.exclude_paths = exclude_paths or []

    def exclude(self, path: str) -> bool:
        return path in self.exclude_paths


def test_init_with_empty_rules():
    with pytest.raises(ValueError, match="At least one exclusion rule must be provided"):
        CompositeExclusionRules([])


def test_init_with_invalid_rule_type():
    with pytest.raises(TypeError, match="Rule at index 1 must implement BaseExclusionRules"):
        CompositeExclusionRules([MockExclusionRules(), "invalid"])


def test_exclude_if_any_rule_excludes():
    composite = CompositeExclusionRules([MockExclusionRules(["f1"]), MockExclusionRules(["f2"])])
    assert composite.exclude("f1")
    assert composite.exclude("f2")
    assert not composite.exclude("f3")


def test_exclude_short_circuit():
    rule2 = Mock(spec=BaseExclusionRules)
    rule2.exclude = Mock(return_value=False)
    composite = CompositeExclusionRules([MockExclusionRules(["f1"]), rule2])

    assert composite.exclude("f1")
    rule2.exclude.assert_not_called()


def test_hidden_and_named_combined():
    composite = CompositeExclusionRules([HiddenExclusionRules(), NameExclusionRules({"tmp"})])
    assert composite.exclude(".git/")
    assert composite.exclude("build/tmp/")
    assert not composite.exclude("build/out.bin")


def test_add_rule_object_and_get_rules():
    first = MockExclusionRules()
    composite = CompositeExclusionRules([first])
    second = MockExclusionRules(["x"])
    composite.add_rule_object(second)

    assert composite.get_rules() == [first, second]
    assert composite.exclude("x")
    composite.get_rules().clear()
    assert len(composite.get_rules()) == 2

    with pytest.raises(TypeError):
        composite.add_rule_object("not a rule")
