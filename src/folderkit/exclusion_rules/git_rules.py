"""Exclusion policy using .gitignore pattern syntax."""

from os import PathLike
from pathlib import Path
from typing import Iterable, Optional, Sequence, Union

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern  # type: ignore

from folderkit.types import PathType

from .base_rules import BaseExclusionRules


class GitIgnoreExclusionRules(BaseExclusionRules):
    """Exclusion policy matching walk paths against .gitignore-style patterns.

    Unlike the name-based policies, patterns may be scoped to a location in the tree
    (``/build``, ``docs/*.tmp``) and may target directories only (``cache/``). Matching is
    done with the pathspec library exactly as Git does it, including negation with ``!``.

    Attributes:
        spec (PathSpec): Compiled pattern matcher.

    Example:
        >>> rules = GitIgnoreExclusionRules(patterns=["*.log", "cache/", "!keep.log"])
        >>> rules.exclude("var/app.log")
        True
        >>> rules.exclude("var/keep.log")
        False
        >>> rules.exclude("var/cache/")
        True
        >>> rules.exclude("var/cache")
        False
    """

    def __init__(
        self,
        rules_files: Optional[Union[PathType, Sequence[PathType]]] = None,
        patterns: Optional[Iterable[str]] = None,
    ):
        """Initialize the policy from pattern files and/or literal patterns.

        Args:
            rules_files: Path(s) to file(s) containing .gitignore patterns.
            patterns: Patterns to add after the files have been loaded.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        self.spec = PathSpec.from_lines(GitWildMatchPattern, [])

        if rules_files is not None:
            self.load_rules(rules_files)
        for pattern in patterns or ():
            self.add_rule(pattern)

    def exclude(self, path: str) -> bool:
        return self.spec.match_file(path)

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Append the patterns of one or more .gitignore-style files.

        Later patterns take precedence over earlier ones, which matters for negations.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        for rules_file in rules_files:
            path = Path(rules_file)
            if not path.exists():
                raise FileNotFoundError(f"Rules file not found: {path}")
            with open(path, "r") as f:
                lines = f.read().splitlines()
            self._extend(PathSpec.from_lines(GitWildMatchPattern, lines).patterns)

    def add_rule(self, rule: str) -> None:
        """Append a single .gitignore pattern.

        Example:
            >>> rules = GitIgnoreExclusionRules()
            >>> rules.add_rule("/build/")
            >>> rules.exclude("build/")
            True
            >>> rules.exclude("src/build/")
            False
        """
        self._extend([GitWildMatchPattern(rule)])

    def has_rules(self) -> bool:
        return bool(self.spec.patterns)

    def _extend(self, patterns: Iterable[GitWildMatchPattern]) -> None:
        # PathSpec may hold its patterns in a tuple
        if not hasattr(self.spec.patterns, "extend"):
            self.spec.patterns = list(self.spec.patterns)
        self.spec.patterns.extend(patterns)
