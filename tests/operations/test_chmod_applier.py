"""Tests for recursive permission changes."""

import os
import stat
import threading

import pytest

from folderkit.operations.chmod_applier import ChmodApplier, format_mode, is_valid_mode
from folderkit.outcome_log import OutcomeLog


def mode_of(path):
    return stat.S_IMODE(os.stat(path).st_mode)


@pytest.fixture
def applier():
    return ChmodApplier(OutcomeLog())


@pytest.mark.parametrize(
    "mode,expected",
    [
        (0o755, True),
        (0o7777, True),
        (0o1, True),
        (0, False),
        (-1, False),
        (0o10000, False),
        (True, False),
        ("755", False),
        (None, False),
    ],
)
def test_is_valid_mode(mode, expected):
    assert is_valid_mode(mode) == expected


def test_format_mode():
    assert format_mode(0o755) == "755"
    assert format_mode(0o4750) == "4750"


def test_recursive_chmod_changes_every_entry(sample_tree, applier):
    a = str(sample_tree)
    assert applier.apply(a, 0o750)

    for path in (a, os.path.join(a, "b"), os.path.join(a, "f1"), os.path.join(a, "b", "f2")):
        assert mode_of(path) == 0o750
    assert not applier.log.has_errors()
    assert applier.log.get_messages() == [
        f"{a} changed to 750",
        f"{os.path.join(a, 'b')} changed to 750",
        f"{os.path.join(a, 'f1')} changed to 750",
        f"{os.path.join(a, 'b', 'f2')} changed to 750",
    ]


def test_exceptions_match_basenames_at_any_depth(sample_tree, applier):
    a = str(sample_tree)
    os.chmod(os.path.join(a, "f1"), 0o600)
    os.chmod(os.path.join(a, "b", "f2"), 0o600)

    assert applier.apply(a, 0o700, exceptions={"f1", "f2"})

    assert mode_of(a) == 0o700
    assert mode_of(os.path.join(a, "b")) == 0o700
    assert mode_of(os.path.join(a, "f1")) == 0o600
    assert mode_of(os.path.join(a, "b", "f2")) == 0o600


def test_excepted_directory_is_still_descended(sample_tree, applier):
    a = str(sample_tree)
    b = os.path.join(a, "b")
    os.chmod(b, 0o711)

    assert applier.apply(a, 0o750, exceptions=["b"])

    assert mode_of(b) == 0o711
    assert mode_of(os.path.join(b, "f2")) == 0o750


def test_failure_does_not_stop_the_others(sample_tree, applier, deny):
    a = str(sample_tree)
    b = os.path.join(a, "b")
    deny("chmod", b)

    assert not applier.apply(a, 0o750)

    assert mode_of(os.path.join(a, "f1")) == 0o750
    assert mode_of(os.path.join(b, "f2")) == 0o750
    assert applier.log.get_errors() == [f"{b} not changed to 750: Permission denied"]
    assert len(applier.log.get_messages()) == 3


def test_non_recursive_changes_only_the_root(sample_tree, applier):
    a = str(sample_tree)
    os.chmod(os.path.join(a, "f1"), 0o644)

    assert applier.apply(a, 0o700, recursive=False)

    assert mode_of(a) == 0o700
    assert mode_of(os.path.join(a, "f1")) == 0o644
    assert applier.log.get_messages() == [f"{a} changed to 700"]


def test_file_root(sample_tree, applier):
    f1 = os.path.join(str(sample_tree), "f1")
    assert applier.apply(f1, 0o600)
    assert mode_of(f1) == 0o600


def test_excepted_file_root_is_left_alone(sample_tree, applier):
    f1 = os.path.join(str(sample_tree), "f1")
    os.chmod(f1, 0o644)
    assert applier.apply(f1, 0o600, exceptions={"f1"})
    assert mode_of(f1) == 0o644


def test_missing_root(tmp_path, applier):
    missing = str(tmp_path / "missing")
    assert not applier.apply(missing, 0o755)
    assert applier.log.get_errors() == [f"[{missing}] does not exist"]


def test_invalid_mode_is_advisory(sample_tree, applier, monkeypatch):
    a = str(sample_tree)
    applied = []
    monkeypatch.setattr(os, "chmod", lambda path, mode: applied.append((path, mode)))

    assert applier.apply(a, 0o17777, recursive=False)

    messages = applier.log.get_messages()
    assert "17777 is not a valid chmod value" in messages[0]
    assert "default 755" in messages[0]
    assert applied == [(a, 0o17777)]
    assert not applier.log.has_errors()


def test_non_integer_mode_raises(sample_tree, applier):
    with pytest.raises(TypeError):
        applier.apply(str(sample_tree), "755")


def test_unlistable_subtree_is_reported(sample_tree, applier, deny):
    a = str(sample_tree)
    b = os.path.join(a, "b")
    deny("listdir", b)

    assert not applier.apply(a, 0o750)

    assert mode_of(os.path.join(a, "f1")) == 0o750
    errors = applier.log.get_errors()
    assert len(errors) == 1
    assert errors[0].startswith(f"{b} not changed to 750")


def test_cancellation_stops_before_next_entry(sample_tree):
    event = threading.Event()
    applier = ChmodApplier(OutcomeLog(), cancel_event=event)
    a = str(sample_tree)
    os.chmod(a, 0o700)

    event.set()
    assert not applier.apply(a, 0o750)

    assert mode_of(a) == 0o700
    assert len(applier.log.get_errors()) == 1


def test_earlier_errors_in_the_log_fail_later_calls(sample_tree, tmp_path):
    log = OutcomeLog()
    applier = ChmodApplier(log)
    a = str(sample_tree)
    os.chmod(a, 0o700)

    assert not applier.apply(str(tmp_path / "missing"), 0o755)
    assert not applier.apply(a, 0o755)

    # the walk itself went through; only the earlier error is in the log
    assert mode_of(a) == 0o755
    assert len(log.get_errors()) == 1
    assert len(log.get_messages()) == 4


def test_single_change_with_earlier_error_in_the_log(sample_tree, tmp_path):
    log = OutcomeLog()
    log.record_failure("/elsewhere", "[/elsewhere] does not exist")
    applier = ChmodApplier(log)

    assert not applier.apply(str(sample_tree), 0o750, recursive=False)
    assert mode_of(str(sample_tree)) == 0o750
