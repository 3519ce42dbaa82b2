"""Signal-aware output for the folderkit CLI."""

import errno
import os
import types
from pathlib import Path
from typing import IO, Iterable, Optional, Type, Union

from folderkit.cli.signal_handler import signal_handler


class SafeWriter:
    """Output channel of the CLI that stops quietly once nobody is listening.

    Writes go straight to a file descriptor with ``os.write``, so a reader that went away
    (``folderkit tree big | head``) surfaces as BrokenPipeError on the next write instead
    of an error at interpreter exit. After SIGINT or SIGPIPE every write raises
    BrokenPipeError without touching the descriptor, which lets the caller unwind through
    its normal path.

    Output goes either to an existing descriptor (normally stdout), which is left open, or
    to a file that the writer opens and closes itself.

    Attributes:
        file: File descriptor or path given at construction.
        fd: File descriptor actually written to.
    """

    def __init__(self, file: Union[int, str, os.PathLike]):
        self.file = file
        self._closed = False
        self._file_obj: Optional[IO[str]] = None

        if isinstance(file, int):
            self.fd = file
        elif isinstance(file, (str, os.PathLike)):
            self._file_obj = Path(file).open("w", encoding="utf-8")
            self.fd = self._file_obj.fileno()
        else:
            raise TypeError(f"Expected int, str, or PathLike, got {type(file).__name__}")

    def _ensure_writable(self) -> None:
        if self._closed:
            raise ValueError("Cannot write to closed SafeWriter")
        if signal_handler.interrupted():
            raise BrokenPipeError()

    def write(self, data: str) -> None:
        """Write a string as-is, encoded as UTF-8.

        Raises:
            BrokenPipeError: If SIGPIPE or SIGINT was received, or the reader closed the pipe.
            ValueError: If the writer is closed.
        """
        self._ensure_writable()
        try:
            os.write(self.fd, data.encode("utf-8"))
        except OSError as e:
            if e.errno == errno.EPIPE:
                raise BrokenPipeError() from e
            raise

    def write_lines(self, lines: Iterable[str]) -> None:
        """Write each line followed by a newline, consuming the iterable lazily."""
        for line in lines:
            self.write(line + "\n")

    def close(self) -> None:
        """Close the file opened by the writer. A descriptor passed in stays open."""
        if self._closed:
            return
        self._closed = True
        file_obj, self._file_obj = self._file_obj, None
        if file_obj is None:
            return
        try:
            file_obj.close()
        except OSError as e:
            if e.errno != errno.EPIPE:
                raise

    def __enter__(self) -> "SafeWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        try:
            self.close()
        except OSError:
            # An exception from the with block takes precedence
            if exc_type is None:
                raise
