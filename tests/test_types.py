"""Tests for entry classification."""

import os

import pytest

from folderkit.types import FileType


def test_classifies_files_and_directories(sample_tree):
    assert FileType.of(sample_tree) == FileType.DIRECTORY
    assert FileType.of(sample_tree / "f1") == FileType.FILE
    assert FileType.of(str(sample_tree / "b")) == FileType.DIRECTORY


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
def test_symlinks_are_not_followed(sample_tree):
    os.symlink(str(sample_tree / "b"), str(sample_tree / "to_dir"))
    os.symlink(str(sample_tree / "nowhere"), str(sample_tree / "dangling"))

    assert FileType.of(sample_tree / "to_dir") == FileType.SYMLINK
    assert FileType.of(sample_tree / "dangling") == FileType.SYMLINK


def test_missing_path_counts_as_file(tmp_path):
    assert FileType.of(tmp_path / "missing") == FileType.FILE
