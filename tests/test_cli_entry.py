import json

import pytest

from tidy_cli import main
from tidy_cli.cli_entry import preflight_problems
from tidy_core import generate_preview, scan_folder
from tidy_core import exec_rename


@pytest.fixture
def photos(make_file):
    make_file("vacation.jpg")
    make_file("beach.png")
    make_file("notes.txt")


def test_scan(photos, tmp_path, capsys):
    assert main(["scan", str(tmp_path), "--ext", "jpg,png"]) == 0
    out = capsys.readouterr().out
    assert "Found 2 files" in out
    assert "vacation.jpg" in out
    assert "notes.txt" not in out


def test_scan_json(photos, tmp_path, capsys):
    assert main(["scan", str(tmp_path), "--json"]) == 0
    files = json.loads(capsys.readouterr().out)
    assert [f["fullName"] for f in files] == ["beach.png", "notes.txt", "vacation.jpg"]


def test_preview_does_not_rename(photos, tmp_path, capsys):
    assert main(["preview", str(tmp_path), "-t", "{date}_{name}.{ext}"]) == 0
    out = capsys.readouterr().out
    assert "2024-07-15_vacation.jpg" in out
    assert "Ready: 3" in out
    assert (tmp_path / "vacation.jpg").exists()


def test_apply_then_undo(photos, tmp_path, capsys):
    logs = tmp_path.parent / (tmp_path.name + "_logs")
    code = main([
        "apply", str(tmp_path), "-t", "{date}_{name}.{ext}", "--ext", "jpg",
        "--yes", "--log-dir", str(logs),
    ])
    assert code == 0
    assert (tmp_path / "2024-07-15_vacation.jpg").exists()
    assert "Result log:" in capsys.readouterr().out

    assert main(["undo", "--log-dir", str(logs), "--yes"]) == 0
    assert "Restored: 1" in capsys.readouterr().out
    assert (tmp_path / "vacation.jpg").exists()


def test_apply_organize_into_destination(photos, tmp_path, capsys):
    dest = tmp_path.parent / (tmp_path.name + "_sorted")
    dest.mkdir()
    code = main([
        "apply", str(tmp_path), "-t", "{name}.{ext}", "--ext", "txt",
        "--organize", "{year}", "--dest", str(dest), "--validate-paths", "--yes", "--no-log",
    ])
    assert code == 0
    assert (dest / "2024" / "notes.txt").exists()
    assert not (tmp_path / "notes.txt").exists()


def test_apply_json_requires_yes(photos, tmp_path, capsys):
    assert main(["apply", str(tmp_path), "-t", "x_{name}.{ext}", "--json"]) == 1
    assert (tmp_path / "vacation.jpg").exists()


def test_apply_json(photos, tmp_path, capsys):
    code = main(["apply", str(tmp_path), "-t", "x_{name}.{ext}", "--json", "--yes", "--no-log"])
    assert code == 0
    result = json.loads(capsys.readouterr().out)
    assert result["summary"]["succeeded"] == 3


def test_missing_folder_is_reported(tmp_path, capsys):
    assert main(["scan", str(tmp_path / "nope")]) == 1
    assert "Error: Path does not exist" in capsys.readouterr().out


def test_bad_template_is_reported(photos, tmp_path, capsys):
    assert main(["preview", str(tmp_path), "-t", "   "]) == 1
    assert "Preview generation failed" in capsys.readouterr().out


def test_undo_without_logs(tmp_path, capsys):
    assert main(["undo", "--log-dir", str(tmp_path)]) == 0
    assert "No result logs found" in capsys.readouterr().out


def test_history_lists_logs(photos, tmp_path, capsys):
    logs = tmp_path.parent / (tmp_path.name + "_history")
    main(["apply", str(tmp_path), "-t", "x_{name}.{ext}", "--ext", "txt", "--yes", "--log-dir", str(logs)])
    capsys.readouterr()

    assert main(["history", "--log-dir", str(logs)]) == 0
    assert "renamed: 1" in capsys.readouterr().out

    assert main(["history", "--log-dir", str(logs), "--json"]) == 0
    entries = json.loads(capsys.readouterr().out)
    assert entries[0]["summary"]["succeeded"] == 1


def test_preflight_reports_vanished_source(photos, tmp_path):
    preview = generate_preview(scan_folder(tmp_path), "x_{name}.{ext}")
    (tmp_path / "notes.txt").unlink()

    problems = preflight_problems(preview.proposals)

    notes = next(p for p in preview.proposals if p.original_name == "notes.txt")
    assert list(problems) == [notes.id]
    assert problems[notes.id].startswith("Source file does not exist")


def test_all_or_nothing_failure_is_an_error(photos, tmp_path, capsys, monkeypatch):
    real_apply = exec_rename._apply_one

    def failing_apply(proposal):
        if proposal.original_name == "notes.txt":
            return "disk full"
        return real_apply(proposal)

    monkeypatch.setattr(exec_rename, "_apply_one", failing_apply)
    code = main(["apply", str(tmp_path), "-t", "x_{name}.{ext}", "--all-or-nothing", "--yes", "--no-log"])

    assert code == 1
    assert "Rename operation failed: batch rolled back, 1 files restored" in capsys.readouterr().out
    assert (tmp_path / "beach.png").exists()
    assert (tmp_path / "vacation.jpg").exists()
