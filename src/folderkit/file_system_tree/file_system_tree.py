"""Depth-first directory walker with configurable exclusion policies.

This module provides the FileSystemTree class, which enumerates a directory subtree into
an ordered partition of directories and files, and the iterate_child_first generator,
which yields the raw contents of a subtree children-before-parent for deletion.
"""

import logging
import os
import threading
from typing import Iterator, List, Optional, Tuple

from folderkit.exceptions import TraversalError
from folderkit.exclusion_rules.base_rules import BaseExclusionRules
from folderkit.file_system_tree.file_system_node import FileSystemNode
from folderkit.file_system_tree.tree_result import TreeKind, TreeResult, TreeStatus
from folderkit.types import FileType, PathType

logger = logging.getLogger(__name__)

# parent node, name, path, is_symlink, relative path with trailing slash
_PendingDirectory = Tuple[FileSystemNode, str, str, bool, str]


class _WalkStopped(Exception):
    """Ends the walk early when it cannot continue."""

    def __init__(self, status: TreeStatus, path: str, reason: str) -> None:
        super().__init__(reason)
        self.status = status
        self.path = path
        self.reason = reason


class FileSystemTree:
    """A pre-order walk of a directory subtree with support for exclusion policies.

    The walk visits a directory, then each of its entries: the directory's files first,
    then its subdirectories, each group sorted by name. Every subdirectory is fully walked
    before the next one is visited, so a parent always precedes its descendants. The
    exclusion policy is consulted for every entry before it is added; excluded directories
    are not descended into.

    The tree is built lazily on first access and can be refreshed to reflect filesystem
    changes.

    Symbolic Link Behavior:
        Symbolic links are never descended. A link to a directory is listed as a directory,
        a link to a file as a file, and a dangling link is skipped, as are sockets, FIFOs
        and other special files.

    Failure Handling:
        If a directory cannot be listed, the walk stops there with status ABORTED and keeps
        the entries collected so far. If the cancellation event is set, the walk stops
        before the next entry with status CANCELLED. Neither case raises.

    Attributes:
        root_path (str): The root directory of the walk.
        exclusion_rules (Optional[BaseExclusionRules]): Policy deciding which entries to skip.
        cancel_event (Optional[threading.Event]): Signal checked before every entry.

    Example:
        >>> tree = FileSystemTree("/srv/a")  # doctest: +SKIP
        >>> result = tree.get_result()  # doctest: +SKIP
        >>> result.directories  # doctest: +SKIP
        ('/srv/a', '/srv/a/b')
        >>> result.files  # doctest: +SKIP
        ('/srv/a/f1', '/srv/a/b/f2')
    """

    def __init__(
        self,
        root_path: PathType,
        exclusion_rules: Optional[BaseExclusionRules] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        """Initialize a FileSystemTree.

        Args:
            root_path: Directory to walk. Entry paths are built by joining names onto it.
            exclusion_rules: Policy deciding which entries to skip. Defaults to None,
                which keeps everything.
            cancel_event: Optional event; once set, the walk stops before the next entry.
        """
        self.root_path = os.fspath(root_path)
        self.exclusion_rules = exclusion_rules
        self.cancel_event = cancel_event
        self._tree: Optional[FileSystemNode] = None
        self._directories: List[str] = []
        self._files: List[str] = []
        self._status: Optional[TreeStatus] = None
        self._error: Optional[str] = None
        self._failed_path: Optional[str] = None

    @property
    def status(self) -> TreeStatus:
        """How the walk ended. Accessing this builds the tree."""
        if self._status is None:
            self._build_tree()
        assert self._status is not None
        return self._status

    def get_tree(self) -> Optional[FileSystemNode]:
        """Get the root node of the walked tree.

        Returns:
            The root node. For an ABORTED or CANCELLED walk the tree holds only the entries
            collected before the walk stopped.

        Raises:
            FileNotFoundError: If the root path doesn't exist.
            NotADirectoryError: If the root path isn't a directory.
        """
        status = self.status
        if status == TreeStatus.NOT_FOUND:
            raise FileNotFoundError(f"Root path does not exist: {self.root_path}")
        if status == TreeStatus.NOT_A_DIRECTORY:
            raise NotADirectoryError(f"Root path is not a directory: {self.root_path}")
        return self._tree

    def get_result(self, kind: TreeKind = TreeKind.ALL) -> TreeResult:
        """Get the ordered directory/file partition of the subtree.

        Args:
            kind: Which half of the partition to return. The other half is left empty.

        Returns:
            A TreeResult. Its status tells a complete walk apart from a missing root, an
            aborted walk and a cancelled one; the same type is returned in every case.
        """
        status = self.status
        if status == TreeStatus.NOT_FOUND:
            return TreeResult.not_found(self.root_path, kind)
        if self._tree is None:
            return TreeResult(self.root_path, status, kind, error=self._error, failed_path=self._failed_path)

        return TreeResult(
            self.root_path,
            status,
            kind,
            directories=tuple(self._directories) if kind != TreeKind.FILES else (),
            files=tuple(self._files) if kind != TreeKind.DIRECTORIES else (),
            error=self._error,
            failed_path=self._failed_path,
        )

    def _build_tree(self) -> None:
        """Walk the subtree from the root path and record how the walk ended.

        The walk keeps its own stack of pending subdirectories, one frame per open
        directory, so its depth is not bounded by the interpreter's recursion limit.
        Nodes are created in pre-order, which is also the order of the recorded paths.
        """
        self._tree = None
        self._directories = []
        self._files = []
        self._error = None
        self._failed_path = None

        if not os.path.exists(self.root_path):
            self._stop(TreeStatus.NOT_FOUND, self.root_path, "Path does not exist")
            return
        if not os.path.isdir(self.root_path):
            self._stop(TreeStatus.NOT_A_DIRECTORY, self.root_path, "Path is not a directory")
            return

        name = os.path.basename(self.root_path.rstrip("/\\")) or self.root_path
        self._tree = FileSystemNode(name, full_path=self.root_path, is_dir=True)
        self._directories.append(self.root_path)
        try:
            stack = [self._expand(self._tree, "")]
            while stack:
                pending = stack[-1]
                if not pending:
                    stack.pop()
                    continue
                parent, name, path, is_symlink, child_relative_path = pending.pop()
                self._check_cancelled(path)
                if self.exclusion_rules and self.exclusion_rules.exclude(child_relative_path):
                    continue
                child = FileSystemNode(name, parent=parent, full_path=path, is_dir=True, is_symlink=is_symlink)
                self._directories.append(path)
                if child.is_traversable:
                    stack.append(self._expand(child, child_relative_path))
        except _WalkStopped as stopped:
            self._stop(stopped.status, stopped.path, stopped.reason)
            return
        self._status = TreeStatus.COMPLETE

    def _stop(self, status: TreeStatus, path: str, reason: str) -> None:
        self._status = status
        self._failed_path = path
        self._error = f"{reason}: {path}"
        logger.debug("Walk of %s ended %s at %s: %s", self.root_path, status.value, path, reason)

    def _check_cancelled(self, path: str) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise _WalkStopped(TreeStatus.CANCELLED, path, "Walk cancelled")

    def _expand(self, node: FileSystemNode, relative_path: str) -> List[_PendingDirectory]:
        """Attach the files of a directory node and return its subdirectories still to visit.

        The returned list is in reverse name order so that popping from it visits the
        subdirectories sorted by name.
        """
        self._check_cancelled(node.full_path)
        try:
            names = sorted(os.listdir(node.full_path))
        except OSError as e:
            raise _WalkStopped(TreeStatus.ABORTED, node.full_path, e.strerror or str(e))

        files: List[Tuple[str, str, bool]] = []
        directories: List[_PendingDirectory] = []
        for name in names:
            path = os.path.join(node.full_path, name)
            is_symlink = os.path.islink(path)
            if os.path.isdir(path):
                directories.append((node, name, path, is_symlink, relative_path + name + "/"))
            elif os.path.isfile(path):
                files.append((name, path, is_symlink))

        for name, path, is_symlink in files:
            self._check_cancelled(path)
            if self.exclusion_rules and self.exclusion_rules.exclude(relative_path + name):
                continue
            FileSystemNode(name, parent=node, full_path=path, is_symlink=is_symlink)
            self._files.append(path)

        directories.reverse()
        return directories

    def get_directory_count(self) -> int:
        """Get the number of directories in the tree, excluding the root."""
        return len(self.get_result(TreeKind.DIRECTORIES).directories[1:])

    def get_file_count(self) -> int:
        """Get the number of files in the tree."""
        return len(self.get_result(TreeKind.FILES).files)

    def stream_tree_representation(self) -> Iterator[str]:
        """Generate a tree representation of the walked subtree one line at a time.

        Generates output similar to the Unix 'tree' command. Entries appear in walk order:
        files before subdirectories, each group sorted by name.

        Yields:
            Lines of the tree representation, including the connecting lines.

        Raises:
            FileNotFoundError: If the root path doesn't exist.
            NotADirectoryError: If the root path isn't a directory.

        Example:
            >>> tree = FileSystemTree("/srv/a")  # doctest: +SKIP
            >>> for line in tree.stream_tree_representation():  # doctest: +SKIP
            ...     print(line)
            a/
            ├── f1
            └── b/
                └── f2
        """
        root = self.get_tree()
        if root is None:
            return

        def pending_children(node: FileSystemNode, prefix: str) -> List[Tuple[FileSystemNode, str, bool]]:
            children = node.children
            last = len(children) - 1
            return [(child, prefix, i == last) for i, child in reversed(list(enumerate(children)))]

        yield f"{root.name}/"
        stack = pending_children(root, "")
        while stack:
            node, prefix, is_last = stack.pop()
            connector = "└── " if is_last else "├── "
            suffix = "/" if node.is_dir else ""
            if node.is_symlink:
                suffix += " [symlink]"
            yield f"{prefix}{connector}{node.name}{suffix}"

            stack.extend(pending_children(node, prefix + ("    " if is_last else "│   ")))

    def get_tree_representation(self) -> str:
        """Get a complete string representation of the walked subtree."""
        return "\n".join(self.stream_tree_representation())

    def refresh(self) -> None:
        """Discard the cached walk so the next access reflects the current filesystem."""
        self._tree = None
        self._directories = []
        self._files = []
        self._status = None
        self._error = None
        self._failed_path = None


def iterate_child_first(root_path: PathType) -> Iterator[Tuple[str, FileType]]:
    """Yield every entry below a directory, children before their parent.

    This is the raw walk used for deletion: no exclusion policy applies and the root itself
    is not yielded. Within a directory, subdirectories come first (each one yielded after
    all of its contents), then the remaining entries, each group sorted by name. Symbolic
    links, including links to directories, are yielded as SYMLINK and never descended.

    The walk is lazy: each directory is listed only when the walk reaches it, so entries
    may be removed while iterating.

    Args:
        root_path: Directory whose contents to yield.

    Yields:
        ``(path, file_type)`` pairs.

    Raises:
        TraversalError: If a directory cannot be listed.

    Example:
        >>> for path, file_type in iterate_child_first("/srv/a"):  # doctest: +SKIP
        ...     print(path, file_type.value)
        /srv/a/b/f2 file
        /srv/a/b directory
        /srv/a/f1 file
    """
    stack = [_open_directory(os.fspath(root_path))]
    while stack:
        directory, subdirectories, others = stack[-1]
        subdirectory = next(subdirectories, None)
        if subdirectory is not None:
            stack.append(_open_directory(subdirectory))
            continue

        # every subdirectory is done: the rest of the entries, then the directory itself
        stack.pop()
        yield from others
        if stack:
            yield directory, FileType.DIRECTORY


def _open_directory(directory: str) -> Tuple[str, Iterator[str], List[Tuple[str, FileType]]]:
    """List a directory into its subdirectories and its remaining entries."""
    try:
        names = sorted(os.listdir(directory))
    except OSError as e:
        raise TraversalError(directory, e.strerror or str(e)) from e

    subdirectories: List[str] = []
    others: List[Tuple[str, FileType]] = []
    for name in names:
        path = os.path.join(directory, name)
        file_type = FileType.of(path)
        if file_type == FileType.DIRECTORY:
            subdirectories.append(path)
        else:
            others.append((path, file_type))
    return directory, iter(subdirectories), others
