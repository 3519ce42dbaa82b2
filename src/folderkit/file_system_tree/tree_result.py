"""Result types produced by a tree walk."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class TreeKind(str, Enum):
    """Which half of the directory/file partition a walk returns.

    Values:
        ALL: Both directories and files
        DIRECTORIES: Directories only
        FILES: Files only
    """

    ALL = "all"
    DIRECTORIES = "dirs"
    FILES = "files"


class TreeStatus(str, Enum):
    """How a tree walk ended.

    Values:
        COMPLETE: The whole subtree was enumerated
        NOT_FOUND: The root does not exist
        NOT_A_DIRECTORY: The root exists but is not a directory
        ABORTED: A directory in the subtree could not be listed; the walk stopped there
        CANCELLED: The cancellation signal was set during the walk
    """

    COMPLETE = "complete"
    NOT_FOUND = "not_found"
    NOT_A_DIRECTORY = "not_a_directory"
    ABORTED = "aborted"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class TreeResult:
    """Ordered partition of a subtree into directories and files.

    Directories are in pre-order (the root first, a parent always before its descendants)
    and files in the order they were visited. A walk that did not complete keeps the
    entries collected before it stopped; check ``status`` (or ``ok``) before trusting that
    the lists cover the whole subtree.

    Attributes:
        root: Root path of the walk.
        status: How the walk ended.
        kind: Which half of the partition was requested; the other half is empty.
        directories: Directory paths, root first.
        files: File paths.
        error: Description of the failure for any status other than COMPLETE.
        failed_path: Path at which the walk stopped, if any.

    Example:
        >>> result = TreeResult("/srv/a", TreeStatus.COMPLETE, directories=("/srv/a",), files=("/srv/a/f1",))
        >>> result.ok
        True
        >>> result.paths
        ('/srv/a', '/srv/a/f1')
        >>> TreeResult.not_found("/srv/missing").ok
        False
    """

    root: str
    status: TreeStatus
    kind: TreeKind = TreeKind.ALL
    directories: Tuple[str, ...] = ()
    files: Tuple[str, ...] = ()
    error: Optional[str] = None
    failed_path: Optional[str] = None

    @classmethod
    def not_found(cls, root: str, kind: TreeKind = TreeKind.ALL) -> "TreeResult":
        return cls(root, TreeStatus.NOT_FOUND, kind, error=f"Path does not exist: {root}", failed_path=root)

    @property
    def ok(self) -> bool:
        """True only if the whole subtree was enumerated."""
        return self.status == TreeStatus.COMPLETE

    @property
    def found(self) -> bool:
        """True if the root existed and was a directory, even if the walk stopped early."""
        return self.status not in (TreeStatus.NOT_FOUND, TreeStatus.NOT_A_DIRECTORY)

    @property
    def paths(self) -> Tuple[str, ...]:
        """Directories followed by files."""
        return self.directories + self.files

    @property
    def partition(self) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
        """The ``(directories, files)`` pair."""
        return self.directories, self.files
