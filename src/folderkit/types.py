import os
from enum import Enum
from os import PathLike
from typing import Union

# Anything accepted where a path is expected: str or an os.PathLike such as pathlib.Path
PathType = Union[str, PathLike[str]]


class FileType(Enum):
    """Kind of an entry met by the child-first walk, which decides how it is removed.

    Directories are removed with rmdir once their contents are gone. Files and symbolic
    links, including links pointing at directories, are unlinked.

    Attributes:
        FILE: Regular file, or anything else that is neither a directory nor a link
        DIRECTORY: Real directory
        SYMLINK: Symbolic link, whatever it points to
    """

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"

    @classmethod
    def of(cls, path: PathType) -> "FileType":
        """Classify a path without following symbolic links.

        Example:
            >>> import tempfile
            >>> FileType.of(tempfile.gettempdir())
            <FileType.DIRECTORY: 'directory'>
        """
        if os.path.islink(path):
            return cls.SYMLINK
        if os.path.isdir(path):
            return cls.DIRECTORY
        return cls.FILE
