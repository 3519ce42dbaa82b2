"""Recursive permission changes with per-entry outcome logging."""

import os
import threading
from typing import Any, Iterable, List, Optional

from folderkit.config import DEFAULT_MODE
from folderkit.file_system_tree.file_system_tree import FileSystemTree
from folderkit.file_system_tree.tree_result import TreeKind
from folderkit.outcome_log import OutcomeLog


def is_valid_mode(mode: Any) -> bool:
    """Check whether a value is a usable permission mode.

    A mode is valid when it is a non-zero integer no larger than ``0o7777``.

    Example:
        >>> is_valid_mode(0o755)
        True
        >>> is_valid_mode(0)
        False
        >>> is_valid_mode(0o17777)
        False
    """
    if isinstance(mode, bool) or not isinstance(mode, int):
        return False
    return 0 < mode <= 0o7777


def format_mode(mode: int) -> str:
    """Render a mode the way chmod(1) takes it, e.g. ``755``."""
    return format(mode, "o") if mode >= 0 else str(mode)


class ChmodApplier:
    """Applies a permission mode to a path or to a whole subtree.

    A recursive run walks the subtree once (no exclusion policy) and attempts the change on
    every directory, then every file, whose basename is not in the exceptions. A failure
    on one entry never stops the others; each attempt is recorded in the outcome log.

    Mode validation is advisory: an invalid mode is reported as an informational message
    and the caller's mode is still the one applied. The default mode is named in the
    message but never substituted.

    Attributes:
        log (OutcomeLog): Log receiving one outcome per attempted entry.
        default_mode (int): Mode named in the advisory message for invalid modes.
        cancel_event (Optional[threading.Event]): Signal checked before every entry.
    """

    def __init__(
        self,
        log: OutcomeLog,
        default_mode: int = DEFAULT_MODE,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        self.log = log
        self.default_mode = default_mode
        self.cancel_event = cancel_event

    def apply(self, root: str, mode: int, recursive: bool = True, exceptions: Iterable[str] = ()) -> bool:
        """Change the mode of a path and, if recursive, of everything below it.

        Args:
            root: Canonical path to change.
            mode: Permission mode, e.g. ``0o755``.
            recursive: Whether to descend into the subtree. A non-recursive call makes a
                single attempt on the root.
            exceptions: Basenames to leave untouched, matched at any depth. They do not stop
                the walk from descending into a directory of that name.

        Returns:
            True if the outcome log holds no error once the walk is done. The log is
            shared by every call on it, so an error recorded earlier also makes this
            call return False.

        Raises:
            TypeError: If mode is not an integer.
        """
        if isinstance(mode, bool) or not isinstance(mode, int):
            raise TypeError(f"mode must be an integer, got {type(mode).__name__}")

        if not os.path.exists(root):
            self.log.record_failure(root, f"[{root}] does not exist")
            return False

        if not is_valid_mode(mode):
            self.log.record_success(
                root,
                f"Mode {format_mode(mode)} is not a valid chmod value for {root}; "
                f"it is applied as given, not replaced by the default {format_mode(self.default_mode)}",
            )

        if not recursive:
            self._chmod(root, mode)
            return not self.log.has_errors()

        if not os.path.isdir(root):
            if self._basename(root) not in set(exceptions):
                self._chmod(root, mode)
            return not self.log.has_errors()

        excluded = set(exceptions)
        result = FileSystemTree(root, cancel_event=self.cancel_event).get_result(TreeKind.ALL)
        targets: List[str] = list(result.directories) + list(result.files)

        for path in targets:
            if self.cancel_event is not None and self.cancel_event.is_set():
                self.log.record_failure(path, f"Mode change of {root} cancelled before {path}")
                break
            if self._basename(path) in excluded:
                continue
            self._chmod(path, mode)
        else:
            if not result.ok:
                failed_path = result.failed_path or root
                self.log.record_failure(
                    failed_path, f"{failed_path} not changed to {format_mode(mode)}: {result.error}"
                )

        return not self.log.has_errors()

    def _chmod(self, path: str, mode: int) -> None:
        try:
            os.chmod(path, mode)
        except (OSError, OverflowError) as e:
            reason = getattr(e, "strerror", None) or str(e)
            self.log.record_failure(path, f"{path} not changed to {format_mode(mode)}: {reason}")
            return
        self.log.record_success(path, f"{path} changed to {format_mode(mode)}")

    @staticmethod
    def _basename(path: str) -> str:
        return os.path.basename(path.rstrip("/\\"))
