class FolderError(Exception):
    """
    Base class for errors raised by folderkit.

    Example:
        >>> isinstance(InvalidRootDirectoryError("relative"), FolderError)
        True
    """

    pass


class InvalidRootDirectoryError(FolderError, ValueError):
    """
    Exception raised when the configured root directory cannot anchor relative paths.

    Relative paths are resolved against the root directory, so the root itself must be
    an absolute path.

    Attributes:
        root_directory (str): The rejected root directory.

    Example:
        >>> error = InvalidRootDirectoryError("srv/www")
        >>> str(error)
        'Root directory must be an absolute path: srv/www'
    """

    def __init__(self, root_directory: str) -> None:
        """
        Initialize the exception with the rejected root directory.

        Args:
            root_directory (str): The root directory that was rejected.
        """
        self.root_directory = root_directory
        super().__init__(f"Root directory must be an absolute path: {root_directory}")


class TraversalError(FolderError):
    """
    Exception raised when a directory cannot be listed during a raw walk.

    The original OSError is chained as ``__cause__`` and its text is kept in the message.

    Attributes:
        path (str): Directory that could not be listed.

    Example:
        >>> error = TraversalError("/srv/locked", "Permission denied")
        >>> str(error)
        'Cannot list directory /srv/locked: Permission denied'
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot list directory {path}: {reason}")
