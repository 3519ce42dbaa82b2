"""Directory tree walking.

This package provides the pre-order walker that enumerates a subtree into directories
and files under an exclusion policy, and the raw child-first walk used for deletion.
"""

from folderkit.file_system_tree.file_system_tree import FileSystemTree, iterate_child_first
from folderkit.file_system_tree.tree_result import TreeKind, TreeResult, TreeStatus

__all__ = ["FileSystemTree", "TreeKind", "TreeResult", "TreeStatus", "iterate_child_first"]
