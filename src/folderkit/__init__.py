"""Recursive directory tree utilities.

This package provides tools for enumerating directory subtrees and applying
bulk mutations (permission changes, recursive deletion) to them, with
exclusion filtering and a per-instance record of every outcome.

Example:
    >>> from folderkit import Folder, FolderConfig, TreeKind
    >>> folder = Folder(FolderConfig("/srv/www"))  # doctest: +SKIP
    >>> folder.tree("uploads", kind=TreeKind.FILES).files  # doctest: +SKIP
    ('/srv/www/uploads/a.png', '/srv/www/uploads/2024/b.png')
"""

from importlib.metadata import PackageNotFoundError, version

from folderkit.config import FolderConfig
from folderkit.exceptions import FolderError, InvalidRootDirectoryError, TraversalError
from folderkit.file_system_tree.tree_result import TreeKind, TreeResult, TreeStatus
from folderkit.folder import Folder
from folderkit.operations.recursive_deleter import DeletionResult
from folderkit.outcome_log import OperationOutcome, OutcomeLog

try:
    __version__ = version("folderkit")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = [
    "DeletionResult",
    "Folder",
    "FolderConfig",
    "FolderError",
    "InvalidRootDirectoryError",
    "OperationOutcome",
    "OutcomeLog",
    "TraversalError",
    "TreeKind",
    "TreeResult",
    "TreeStatus",
    "__version__",
]
