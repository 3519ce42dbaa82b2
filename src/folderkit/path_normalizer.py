"""Path canonicalization for the folder engine.

Paths may arrive with either separator, with ``.`` and ``..`` segments and with
doubled separators. Normalization produces a canonical absolute path; relative
inputs are resolved against a configured root directory.
"""

import os
import re
from typing import List, Sequence, Tuple, Union

from folderkit.types import PathType

_DRIVE_PATTERN = re.compile(r"^[A-Za-z]:[\\/]")
_SEPARATORS = ("/", "\\")


def is_windows_path(path: PathType) -> bool:
    """Check whether a path carries a Windows drive or UNC prefix.

    Args:
        path: Path to check.

    Returns:
        True if the path starts with a drive prefix such as ``C:\\`` or with ``\\\\``.

    Example:
        >>> is_windows_path("C:\\\\Users")
        True
        >>> is_windows_path("\\\\\\\\server\\\\share")
        True
        >>> is_windows_path("/home")
        False
    """
    path = os.fspath(path)
    return bool(_DRIVE_PATTERN.match(path)) or path.startswith("\\\\")


def is_absolute(path: PathType) -> bool:
    """Check whether a path is absolute on any supported platform.

    A path is absolute when it starts with a separator, a drive prefix or a UNC prefix.
    The empty path is not absolute.

    Example:
        >>> is_absolute("/foo")
        True
        >>> is_absolute("C:\\\\foo")
        True
        >>> is_absolute("foo/bar")
        False
    """
    path = os.fspath(path)
    if not path:
        return False
    return path[0] in _SEPARATORS or is_windows_path(path)


def add_path_element(path: PathType, element: Union[str, Sequence[str]], separator: str = os.sep) -> str:
    """Append one or more elements to a path with a single separator in between.

    Example:
        >>> add_path_element("/srv/www/", "img", separator="/")
        '/srv/www/img'
        >>> add_path_element("/srv/www", ["img", "logo.png"], separator="/")
        '/srv/www/img/logo.png'
    """
    elements = [element] if isinstance(element, str) else list(element)
    return separator.join([os.fspath(path).rstrip(separator)] + elements)


class PathNormalizer:
    """Canonicalizes path strings against a configured root directory.

    Attributes:
        root_directory (str): Absolute directory that relative paths are resolved against.
        separator (str): Separator used in the produced paths.

    Example:
        >>> normalizer = PathNormalizer("/srv/www", separator="/")
        >>> normalizer.normalize("/a/b/../c")
        '/a/c'
        >>> normalizer.normalize("/a/./b")
        '/a/b'
        >>> normalizer.normalize("x/y")
        '/srv/www/x/y'
    """

    def __init__(self, root_directory: PathType, separator: str = os.sep) -> None:
        self.separator = separator
        anchor, segments = self._split(os.fspath(root_directory))
        self.root_directory = anchor + separator.join(segments)

    def is_absolute(self, path: PathType) -> bool:
        """Check whether a path is absolute. See :func:`is_absolute`."""
        return is_absolute(path)

    def normalize(self, path: PathType) -> str:
        """Produce the canonical absolute form of a path.

        Both ``/`` and ``\\`` are replaced by the configured separator, empty and ``.``
        segments are dropped and each ``..`` removes the preceding segment. A ``..`` with
        nothing left to remove is dropped, so the result never climbs above the path's
        anchor. Relative paths are prefixed with the root directory.

        Args:
            path: Raw path to normalize.

        Returns:
            The canonical absolute path.
        """
        anchor, segments = self._split(os.fspath(path))
        joined = self.separator.join(segments)
        if anchor:
            return anchor + joined
        if not joined:
            return self.root_directory
        return self.root_directory.rstrip(self.separator) + self.separator + joined

    def _split(self, path: str) -> Tuple[str, List[str]]:
        """Split a path into its absolute anchor and its resolved segments."""
        sep = self.separator
        anchor = ""
        rest = path
        if _DRIVE_PATTERN.match(path):
            anchor = path[:2] + sep
            rest = path[3:]
        elif path.startswith("\\\\"):
            anchor = sep + sep
            rest = path[2:]
        elif path[:1] in _SEPARATORS:
            anchor = sep
            rest = path[1:]

        segments: List[str] = []
        for part in re.split(r"[\\/]", rest):
            if part in ("", "."):
                continue
            if part == "..":
                if segments:
                    segments.pop()
                continue
            segments.append(part)
        return anchor, segments
