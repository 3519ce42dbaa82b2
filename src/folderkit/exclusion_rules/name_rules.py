"""Exclusion policies based on entry names."""

from typing import FrozenSet, Iterable, Optional

from .base_rules import BaseExclusionRules


class NoExclusionRules(BaseExclusionRules):
    """Policy that keeps every entry.

    Example:
        >>> NoExclusionRules().exclude(".git/")
        False
    """

    def exclude(self, path: str) -> bool:
        return False

    def __repr__(self) -> str:
        return "NoExclusionRules()"


class HiddenExclusionRules(BaseExclusionRules):
    """Policy that skips hidden entries.

    An entry is hidden when its name starts with a dot or when any segment of its path
    relative to the walk root does. Because excluded directories are not descended, the
    second condition only matters for paths checked outside of a walk.

    Example:
        >>> rules = HiddenExclusionRules()
        >>> rules.exclude(".env")
        True
        >>> rules.exclude("src/.cache/")
        True
        >>> rules.exclude(".git/config")
        True
        >>> rules.exclude("src/main.py")
        False
    """

    def exclude(self, path: str) -> bool:
        return path.startswith(".") or "/." in path

    def __repr__(self) -> str:
        return "HiddenExclusionRules()"


class NameExclusionRules(BaseExclusionRules):
    """Policy that skips entries whose basename is in a set of names.

    Matching uses the basename only, never the full path, so a listed name is excluded at
    any depth, whether it names a file or a directory.

    Attributes:
        names (FrozenSet[str]): Basenames to exclude.

    Example:
        >>> rules = NameExclusionRules({"node_modules", "Thumbs.db"})
        >>> rules.exclude("web/node_modules/")
        True
        >>> rules.exclude("photos/2019/Thumbs.db")
        True
        >>> rules.exclude("web/node_modules.txt")
        False
    """

    def __init__(self, names: Optional[Iterable[str]] = None):
        if isinstance(names, str):
            raise TypeError("names must be an iterable of basenames, not a single string")
        self.names: FrozenSet[str] = frozenset(names or ())

    def exclude(self, path: str) -> bool:
        return self.basename(path) in self.names

    def add_rule(self, rule: str) -> None:
        """Add one more basename to exclude.

        Example:
            >>> rules = NameExclusionRules()
            >>> rules.add_rule("cache")
            >>> rules.exclude("var/cache/")
            True
        """
        self.names = self.names | {rule}

    def has_rules(self) -> bool:
        return bool(self.names)

    def __repr__(self) -> str:
        return f"NameExclusionRules({sorted(self.names)!r})"
