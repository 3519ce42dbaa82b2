"""Configuration for the folder engine."""

import os
from dataclasses import dataclass

from folderkit.exceptions import InvalidRootDirectoryError
from folderkit.path_normalizer import is_absolute

DEFAULT_MODE = 0o755


@dataclass(frozen=True)
class FolderConfig:
    """Settings shared by every operation of a Folder instance.

    Attributes:
        root_directory: Absolute directory that relative paths are resolved against.
        default_mode: Permission mode used when none is given explicitly.
        separator: Separator used in normalized paths.

    Example:
        >>> FolderConfig("/srv/www").default_mode == 0o755
        True
        >>> FolderConfig("srv/www")
        Traceback (most recent call last):
        ...
        folderkit.exceptions.InvalidRootDirectoryError: Root directory must be an absolute path: srv/www
    """

    root_directory: str
    default_mode: int = DEFAULT_MODE
    separator: str = os.sep

    def __post_init__(self) -> None:
        root = os.fspath(self.root_directory)
        object.__setattr__(self, "root_directory", root)
        if not is_absolute(root):
            raise InvalidRootDirectoryError(root)
        if self.separator not in ("/", "\\"):
            raise ValueError(f"Unsupported path separator: {self.separator!r}")
