"""Bulk mutations over a directory subtree."""

from folderkit.operations.chmod_applier import ChmodApplier, is_valid_mode
from folderkit.operations.recursive_deleter import DeletionResult, RecursiveDeleter

__all__ = ["ChmodApplier", "DeletionResult", "RecursiveDeleter", "is_valid_mode"]
