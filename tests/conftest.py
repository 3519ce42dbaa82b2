"""Test configuration and fixtures for folderkit."""

import errno
import os
import sys

import pytest

from folderkit.config import FolderConfig
from folderkit.folder import Folder


def pytest_addoption(parser):
    """Add custom command-line options for tests."""
    parser.addoption("--run-cli-tests", action="store_true", default=False, help="Run CLI integration tests (slow)")


@pytest.fixture
def sample_tree(tmp_path):
    """Create the tree a/, a/b/, a/f1, a/b/f2 and return the path of a."""
    root = tmp_path / "a"
    (root / "b").mkdir(parents=True)
    (root / "f1").write_text("one")
    (root / "b" / "f2").write_text("two")
    return root


@pytest.fixture
def nested_chain(tmp_path):
    """Create a chain a/d/d/.../d/f nested deeper than the interpreter's recursion limit.

    Yields ``(root, depth, leaf_file)``. Whatever the test leaves behind is removed
    deepest first on teardown, without recursing.
    """
    depth = sys.getrecursionlimit() + 100
    root = str(tmp_path / "a")
    if len(root) + 2 * depth + 2 >= os.pathconf(str(tmp_path), "PC_PATH_MAX"):
        pytest.skip("nested path would exceed PATH_MAX")

    levels = [root]
    os.mkdir(root)
    for _ in range(depth):
        levels.append(os.path.join(levels[-1], "d"))
        os.mkdir(levels[-1])
    leaf_file = os.path.join(levels[-1], "f")
    with open(leaf_file, "w") as f:
        f.write("leaf")

    yield root, depth, leaf_file

    for level in reversed(levels):
        if not os.path.isdir(level):
            continue
        os.chmod(level, 0o755)
        for name in os.listdir(level):
            entry = os.path.join(level, name)
            if os.path.islink(entry) or not os.path.isdir(entry):
                os.unlink(entry)
        os.rmdir(level)


@pytest.fixture
def folder(tmp_path):
    """A Folder whose relative paths resolve against tmp_path."""
    return Folder(FolderConfig(str(tmp_path)))


@pytest.fixture
def deny(monkeypatch):
    """Make an ``os`` function fail with EACCES for the given paths.

    Permission bits alone do not stop a test suite running as root, so failures are
    injected at the ``os`` level instead.

    Example:
        deny("rmdir", sample_tree / "b")
    """

    def _deny(function_name, *paths):
        blocked = {os.fspath(path) for path in paths}
        real_function = getattr(os, function_name)

        def failing(path, *args, **kwargs):
            if os.fspath(path) in blocked:
                raise PermissionError(errno.EACCES, "Permission denied", os.fspath(path))
            return real_function(path, *args, **kwargs)

        monkeypatch.setattr(os, function_name, failing)

    return _deny
