import json
import os

import pytest

from tidy_core import (
    IoError,
    RenameOutcome,
    apply_undo,
    execute_rename,
    generate_preview,
    load_result_log,
    save_result_log,
    undo_operations,
)
from tidy_core.history import list_result_logs, result_log_summary


@pytest.fixture
def executed(make_file, scanned, tmp_path):
    """A batch that renamed two files"""
    files = [scanned(make_file(n)) for n in ("a.txt", "b.txt")]
    preview = generate_preview(files, "{name}_done.{ext}")
    return execute_rename(preview.proposals)


def test_save_and_load(executed, tmp_path):
    log_file = save_result_log(executed, tmp_path / "logs")

    assert log_file.parent == tmp_path / "logs"
    assert log_file.name.startswith("rename_result_")
    with open(log_file, encoding="utf-8") as f:
        assert json.load(f)["summary"]["succeeded"] == 2

    loaded = load_result_log(log_file)
    assert [r.new_name for r in loaded.results] == ["a_done.txt", "b_done.txt"]
    assert loaded.summary.succeeded == 2


def test_list_newest_first(executed, tmp_path):
    first = save_result_log(executed, tmp_path)
    second = save_result_log(executed, tmp_path)
    assert list_result_logs(tmp_path) == [second, first]
    assert list_result_logs(tmp_path / "missing") == []


def test_load_rejects_garbage(tmp_path):
    bad = tmp_path / "rename_result_bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(IoError):
        load_result_log(bad)
    with pytest.raises(IoError):
        load_result_log(tmp_path / "missing.json")
    assert result_log_summary(bad) is None


def test_undo_operations_reverse_successes(executed):
    ops = undo_operations(executed)
    assert [os.path.basename(current) for current, _ in ops] == ["b_done.txt", "a_done.txt"]
    assert [os.path.basename(original) for _, original in ops] == ["b.txt", "a.txt"]


def test_apply_undo_restores_files(executed, tmp_path):
    restored, errors = apply_undo(executed)
    assert (restored, errors) == (2, [])
    assert (tmp_path / "a.txt").exists()
    assert not (tmp_path / "a_done.txt").exists()


def test_apply_undo_reports_problems(executed, tmp_path):
    os.remove(tmp_path / "a_done.txt")
    (tmp_path / "b.txt").write_text("new file in the way")

    restored, errors = apply_undo(executed)

    assert restored == 0
    assert any(e.startswith("Original path is taken:") for e in errors)
    assert any(e.startswith("File not found:") for e in errors)
    assert (tmp_path / "b_done.txt").exists()


def test_skipped_results_are_not_undone(executed):
    executed.results[0].outcome = RenameOutcome.SKIPPED
    assert len(undo_operations(executed)) == 1
