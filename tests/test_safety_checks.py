import os
from pathlib import Path

import pytest

from tidy_core import (
    InvalidPath,
    PathTraversal,
    SymlinkNotAllowed,
    check_path_length,
    check_writable,
    validate_path_within_base,
    validate_rename_path,
    validate_scan_path,
)
from tidy_core.safety_checks import check_rename_destination, check_rename_op


def test_path_inside_base(tmp_path):
    (tmp_path / "a.txt").write_text("a")
    assert validate_path_within_base(tmp_path / "a.txt", tmp_path) == (tmp_path / "a.txt").resolve()


def test_missing_path_inside_base(tmp_path):
    result = validate_path_within_base(tmp_path / "new" / "deeper" / "a.txt", tmp_path)
    assert result == tmp_path.resolve() / "new" / "deeper" / "a.txt"


def test_parent_component_rejected(tmp_path):
    with pytest.raises(PathTraversal):
        validate_path_within_base(tmp_path / ".." / "a.txt", tmp_path)


def test_double_dot_inside_a_name_is_fine(tmp_path):
    validate_path_within_base(tmp_path / "notes..old.txt", tmp_path)


def test_outside_base_rejected(tmp_path):
    base = tmp_path / "base"
    base.mkdir()
    with pytest.raises(PathTraversal):
        validate_path_within_base(tmp_path / "other" / "a.txt", base)


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_symlink_target_rejected(tmp_path):
    (tmp_path / "real.txt").write_text("x")
    link = tmp_path / "link.txt"
    link.symlink_to(tmp_path / "real.txt")
    with pytest.raises(SymlinkNotAllowed):
        validate_path_within_base(link, tmp_path)


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_symlink_base_rejected(tmp_path):
    real = tmp_path / "real"
    real.mkdir()
    link = tmp_path / "link"
    link.symlink_to(real, target_is_directory=True)
    with pytest.raises(SymlinkNotAllowed):
        validate_path_within_base(link / "a.txt", link)


def test_scan_path(tmp_path):
    assert validate_scan_path(tmp_path) == tmp_path.resolve()
    with pytest.raises(PathTraversal):
        validate_scan_path(str(tmp_path / ".." / "x"))
    (tmp_path / "file.txt").write_text("x")
    with pytest.raises(InvalidPath):
        validate_scan_path(tmp_path / "file.txt")


def test_rename_in_same_folder_only_checks_name(tmp_path):
    original = tmp_path / "a.txt"
    original.write_text("a")
    assert validate_rename_path(original, tmp_path / "b.txt") == tmp_path / "b.txt"


def test_rename_rejects_null_byte(tmp_path):
    with pytest.raises(InvalidPath):
        validate_rename_path(tmp_path / "a.txt", str(tmp_path / "b") + "\0.txt")


def test_move_must_stay_in_original_folder_by_default(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    (src / "a.txt").write_text("a")
    validate_rename_path(src / "a.txt", src / "2024" / "a.txt")
    with pytest.raises(PathTraversal):
        validate_rename_path(src / "a.txt", tmp_path / "out" / "a.txt")
    validate_rename_path(src / "a.txt", tmp_path / "out" / "a.txt", allowed_base=tmp_path)


def test_check_rename_destination_returns_reason(tmp_path):
    ok, reason = check_rename_destination(tmp_path / "a.txt", tmp_path / ".." / "a.txt")
    assert not ok
    assert reason.startswith("Path traversal detected")
    assert check_rename_destination(tmp_path / "a.txt", tmp_path / "b.txt") == (True, None)


def test_check_writable(tmp_path):
    assert check_writable(tmp_path / "new.txt") == (True, None)
    ok, reason = check_writable(tmp_path / "missing" / "new.txt")
    assert not ok
    assert "Parent directory does not exist" in reason


def test_check_path_length():
    assert check_path_length(Path("a" * 10), max_length=20)[0]
    assert not check_path_length(Path("a" * 30), max_length=20)[0]


def test_check_rename_op(tmp_path):
    src = tmp_path / "a.txt"
    assert not check_rename_op(src, tmp_path / "b.txt")[0]
    src.write_text("a")
    assert check_rename_op(src, tmp_path / "b.txt") == (True, None)
    assert not check_rename_op(src, tmp_path / "CON.txt")[0]
