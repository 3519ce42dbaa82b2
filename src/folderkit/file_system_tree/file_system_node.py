"""Node representation for entries in a walked tree."""

from typing import Any, Optional

from anytree import Node


class FileSystemNode(Node):  # type: ignore
    """Node class representing a file or directory in the walked tree.

    Extends anytree.Node with the entry's full path and flags describing what kind of
    entry it is. Tree traversal (pre-order, post-order, ancestry) is inherited from
    anytree.

    Attributes:
        name (str): The basename of the entry.
        full_path (str): The full path of the entry, built from the walk root.
        parent (Optional[FileSystemNode]): The parent node in the tree.
        is_dir (bool): True if the entry is a directory or a symlink to one.
        is_symlink (bool): True if the entry is a symbolic link.

    Example:
        >>> root = FileSystemNode("a", full_path="/srv/a", is_dir=True)
        >>> child = FileSystemNode("f1", parent=root, full_path="/srv/a/f1")
        >>> child.full_path
        '/srv/a/f1'
        >>> [node.name for node in root.descendants]
        ['f1']
    """

    def __init__(
        self,
        name: str,
        parent: Optional["FileSystemNode"] = None,
        full_path: str = "",
        is_dir: bool = False,
        is_symlink: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, **kwargs)
        self.full_path = full_path
        self.is_dir = is_dir
        self.is_symlink = is_symlink

    @property
    def is_traversable(self) -> bool:
        """True for real directories; symlinked directories are never descended."""
        return self.is_dir and not self.is_symlink
