"""Recursive, fail-fast deletion of a directory subtree."""

import os
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from folderkit.exceptions import TraversalError
from folderkit.file_system_tree.file_system_tree import FileSystemTree, iterate_child_first
from folderkit.outcome_log import OutcomeLog
from folderkit.types import FileType


@dataclass(frozen=True)
class DeletionResult:
    """Outcome of a recursive deletion.

    Deletion has no rollback: a failed call may have removed part of the subtree. The
    result says what was removed, which entries failed and what is still on disk.

    Attributes:
        root: Directory that was to be deleted.
        succeeded: True if the whole subtree, root included, was removed and the outcome
            log holds no error.
        removed: Paths removed by this call, in removal order.
        failed: Paths whose removal failed (or where the walk stopped).
        remaining: Paths still present below and including the root after a failed call.
    """

    root: str
    succeeded: bool
    removed: Tuple[str, ...] = ()
    failed: Tuple[str, ...] = ()
    remaining: Tuple[str, ...] = ()

    def __bool__(self) -> bool:
        return self.succeeded


class RecursiveDeleter:
    """Deletes a directory and everything below it, children first.

    Files and symbolic links get a single unlink attempt each; a failed unlink is logged
    and the walk goes on. Directories get a single rmdir attempt once their contents have
    been processed, and the first failed rmdir stops the walk. Nothing already removed is
    restored. The root is removed last.

    Attributes:
        log (OutcomeLog): Log receiving one outcome per attempted entry.
        cancel_event (Optional[threading.Event]): Signal checked before every entry. A
            cancelled deletion stops like a failed one.
    """

    def __init__(self, log: OutcomeLog, cancel_event: Optional[threading.Event] = None) -> None:
        self.log = log
        self.cancel_event = cancel_event

    def delete(self, root: str) -> DeletionResult:
        """Delete a directory tree.

        Args:
            root: Canonical path of the directory to delete.

        Returns:
            A DeletionResult, truthy only if the root itself was removed and the outcome log
            holds no failure, including failures recorded by earlier calls on the same log.
        """
        if not os.path.lexists(root):
            self.log.record_failure(root, f"[{root}] does not exist")
            return DeletionResult(root, False)
        if FileType.of(root) != FileType.DIRECTORY:
            self.log.record_failure(root, f"{root} is not a directory")
            return DeletionResult(root, False, remaining=(root,))

        removed: List[str] = []
        failed: List[str] = []
        aborted = False

        try:
            for path, file_type in iterate_child_first(root):
                if self.cancel_event is not None and self.cancel_event.is_set():
                    self.log.record_failure(path, f"Deletion of {root} cancelled before {path}")
                    failed.append(path)
                    aborted = True
                    break
                if file_type == FileType.DIRECTORY:
                    if not self._remove(path, os.rmdir, removed, failed):
                        aborted = True
                        break
                else:
                    self._remove(path, os.unlink, removed, failed)
        except TraversalError as e:
            self.log.record_failure(e.path, f"{e.path} not removed: {e.reason}")
            failed.append(e.path)
            aborted = True

        root_removed = False
        if not aborted:
            root_removed = self._remove(root.rstrip("/\\") or root, os.rmdir, removed, failed)

        succeeded = root_removed and not self.log.has_errors()
        remaining: Tuple[str, ...] = ()
        if not succeeded and os.path.exists(root):
            remaining = FileSystemTree(root).get_result().paths

        return DeletionResult(root, succeeded, tuple(removed), tuple(failed), remaining)

    def _remove(self, path: str, remover: Callable[[str], None], removed: List[str], failed: List[str]) -> bool:
        try:
            remover(path)
        except OSError as e:
            self.log.record_failure(path, f"{path} not removed: {e.strerror or e}")
            failed.append(path)
            return False
        self.log.record_success(path, f"{path} removed")
        removed.append(path)
        return True
