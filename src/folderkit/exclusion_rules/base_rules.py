from abc import ABC, abstractmethod


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for traversal exclusion policies.

    An exclusion policy decides which entries a tree walk must skip. The walker asks the
    policy about every entry before adding it to the result, passing the entry's path
    relative to the walk root with forward slashes as separators. Directory paths carry a
    trailing slash so that pattern-based policies can tell them apart from files. An
    excluded directory is never descended into.

    Example:
        >>> # Define a simple implementation
        >>> class SkipTemporary(BaseExclusionRules):
        ...     def exclude(self, path: str) -> bool:
        ...         return self.basename(path).endswith('.tmp')
        >>> rules = SkipTemporary()
        >>> rules.exclude("build/cache.tmp")
        True
        >>> rules.exclude("src/main.py")
        False
    """

    @abstractmethod
    def exclude(self, path: str) -> bool:
        """
        Determine if an entry should be skipped by the traversal.

        Args:
            path (str): Path of the entry relative to the walk root, using ``/`` as the
                separator. Directories end with ``/``.

        Returns:
            bool: True if the entry should be excluded, False if it should be included.
        """
        pass

    @staticmethod
    def basename(path: str) -> str:
        """
        Return the last segment of a relative walk path.

        Example:
            >>> BaseExclusionRules.basename("a/b/")
            'b'
            >>> BaseExclusionRules.basename("a/b/f2")
            'f2'
        """
        return path.rstrip("/").rsplit("/", 1)[-1]

    def add_rule(self, rule: str) -> None:
        """
        Add a single exclusion rule directly.

        This method may be overridden by policies that support incremental rule addition
        (e.g., name or pattern based policies). Policies without rules use the default
        implementation which raises NotImplementedError.

        Args:
            rule (str): The exclusion rule to add. Its format depends on the policy.

        Raises:
            NotImplementedError: If this policy doesn't support adding individual rules.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support adding individual rules.")
