"""Directory engine combining path normalization, tree walking and bulk mutations.

This module provides the Folder class, the public entry point of folderkit. A Folder is
bound to a configuration (most importantly the root directory that relative paths are
resolved against) and owns the outcome log that every mutating operation appends to.
"""

import logging
import os
import threading
from typing import Iterable, List, Optional

from folderkit.config import FolderConfig
from folderkit.exclusion_rules import ExclusionPolicy
from folderkit.file_system_tree.file_system_tree import FileSystemTree
from folderkit.file_system_tree.tree_result import TreeKind, TreeResult
from folderkit.operations.chmod_applier import ChmodApplier, format_mode
from folderkit.operations.recursive_deleter import DeletionResult, RecursiveDeleter
from folderkit.outcome_log import OutcomeLog
from folderkit.path_normalizer import PathNormalizer
from folderkit.types import PathType

logger = logging.getLogger(__name__)


class Folder:
    """Directory operations bound to one configuration and one outcome log.

    Every path argument is normalized first, so relative paths are resolved against the
    configured root directory. Mutating operations do not raise for filesystem failures;
    they return False (or a falsy DeletionResult) and describe each failure in the outcome
    log, which keeps growing across calls. Their result reflects the whole log, so once
    a failure is recorded, later calls on the same Folder report failure too. Use a
    fresh Folder to inspect one call in isolation.

    Enumeration and mutation are separate passes over the filesystem. Entries created,
    removed or renamed by someone else while an operation runs lead to unspecified
    results. A Folder is not safe to share between threads without external locking.

    Attributes:
        config (FolderConfig): Root directory and defaults.
        log (OutcomeLog): Record of every success and failure.
        cancel_event (Optional[threading.Event]): Signal checked between entries by long
            walks; once set, the running operation stops and reports failure.

    Example:
        >>> folder = Folder(FolderConfig("/srv/www", separator="/"))
        >>> folder.normalize("uploads/../img/./logo")
        '/srv/www/img/logo'
        >>> folder.create("img/thumbs")  # doctest: +SKIP
        True
        >>> folder.set_chmod("img", 0o750, recursive=True, exceptions={".htaccess"})  # doctest: +SKIP
        True
        >>> folder.has_errors()  # doctest: +SKIP
        False
    """

    def __init__(
        self,
        config: FolderConfig,
        log: Optional[OutcomeLog] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        self.config = config
        self.log = log if log is not None else OutcomeLog()
        self.cancel_event = cancel_event
        self._normalizer = PathNormalizer(config.root_directory, separator=config.separator)

    def normalize(self, path: PathType) -> str:
        """Return the canonical absolute form of a path. See PathNormalizer.normalize."""
        return self._normalizer.normalize(path)

    def is_absolute(self, path: PathType) -> bool:
        return self._normalizer.is_absolute(path)

    def exists(self, path: PathType) -> bool:
        return os.path.exists(self.normalize(path))

    def is_writable(self, path: PathType) -> bool:
        """Check that a path exists and the current process may modify it."""
        path = self.normalize(path)
        return os.path.exists(path) and os.access(path, os.W_OK)

    def create(self, path: PathType, mode: Optional[int] = None, recursive: bool = True) -> bool:
        """Create a directory.

        An existing path is left untouched, permissions included, and reported as success.
        The process umask is cleared while the directory is created so the requested mode
        is applied exactly, and restored afterwards.

        Args:
            path: Directory to create.
            mode: Permission mode of the new directories. Defaults to the configured
                default mode.
            recursive: Whether missing parent directories are created too.

        Returns:
            True if the directory exists when the call returns.
        """
        path = self.normalize(path)
        if os.path.exists(path):
            return True

        mode = self.config.default_mode if mode is None else mode
        old_umask = os.umask(0)
        try:
            if recursive:
                os.makedirs(path, mode)
            else:
                os.mkdir(path, mode)
        except OSError as e:
            self.log.record_failure(path, f"{path} not created: {e.strerror or e}")
            return False
        finally:
            os.umask(old_umask)

        self.log.record_success(path, f"{path} created with mode {format_mode(mode)}")
        return True

    def tree(
        self,
        path: PathType,
        exclusions: ExclusionPolicy = None,
        kind: TreeKind = TreeKind.ALL,
    ) -> TreeResult:
        """Enumerate a subtree into pre-ordered directories and files.

        Args:
            path: Root of the walk.
            exclusions: Policy deciding which entries to skip. None keeps everything.
            kind: Which half of the partition to return.

        Returns:
            A TreeResult; check its status to tell a complete walk from a missing root or
            a walk stopped by an unreadable directory or by cancellation. Any status other
            than COMPLETE is also recorded as a failure in the outcome log, with the
            result's error as the message.
        """
        root = self.normalize(path)
        result = FileSystemTree(root, exclusions, cancel_event=self.cancel_event).get_result(kind)
        if not result.ok:
            self.log.record_failure(result.failed_path or root, result.error or f"[{root}] not walked")
        return result

    def set_chmod(
        self,
        path: PathType,
        mode: Optional[int] = None,
        recursive: bool = True,
        exceptions: Iterable[str] = (),
    ) -> bool:
        """Change the permission mode of a path, recursively by default.

        Args:
            path: Path to change.
            mode: Permission mode. Defaults to the configured default mode.
            recursive: Whether to change every entry below the path as well.
            exceptions: Basenames to leave untouched at any depth.

        Returns:
            True if the outcome log holds no error afterwards, counting errors recorded
            by earlier calls.
        """
        mode = self.config.default_mode if mode is None else mode
        applier = ChmodApplier(self.log, self.config.default_mode, self.cancel_event)
        return applier.apply(self.normalize(path), mode, recursive, exceptions)

    def delete(self, path: PathType) -> DeletionResult:
        """Delete a directory and everything below it.

        Returns:
            A DeletionResult, truthy only on complete success. A falsy result means some
            entries may already be gone; see its ``removed`` and ``remaining`` fields and
            the outcome log.
        """
        return RecursiveDeleter(self.log, self.cancel_event).delete(self.normalize(path))

    def has_errors(self) -> bool:
        return self.log.has_errors()

    def get_errors(self) -> List[str]:
        return self.log.get_errors()

    def get_messages(self) -> List[str]:
        return self.log.get_messages()
