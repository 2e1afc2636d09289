from datetime import datetime, timezone

import pytest

from tidy_core import (
    BatchRenameResult,
    CaseStyle,
    ExecuteOptions,
    FileCategory,
    FileDescriptor,
    PreviewFailed,
    PreviewOptions,
    RenameProposal,
    RenameStatus,
    ReorganizationMode,
    ValidationFailed,
)
from tidy_core.models_fs import format_timestamp, parse_timestamp


def test_descriptor_from_path(make_file, tmp_path):
    p = make_file("sub/Holiday.JPG", content=b"12345")
    f = FileDescriptor.from_path(p, tmp_path)
    assert f.name == "Holiday"
    assert f.extension == "JPG"
    assert f.full_name == "Holiday.JPG"
    assert f.size == 5
    assert f.relative_path == "sub/Holiday.JPG"
    assert f.category == FileCategory.IMAGE
    assert f.modified_at == datetime(2024, 7, 15, 10, 30, tzinfo=timezone.utc)


def test_dotfile_has_no_extension(make_file):
    f = FileDescriptor.from_path(make_file(".gitignore"))
    assert f.name == ".gitignore"
    assert f.extension == ""


def test_descriptor_from_minimal_dict():
    f = FileDescriptor.from_dict({
        "path": "/x/report.pdf",
        "name": "report",
        "extension": "pdf",
        "size": 10,
        "modifiedAt": "2024-07-15T10:30:00Z",
    })
    assert f.full_name == "report.pdf"
    assert f.created_at == f.modified_at
    assert f.category == FileCategory.DOCUMENT
    assert f.to_dict()["modifiedAt"] == "2024-07-15T10:30:00Z"


def test_timestamps():
    dt = parse_timestamp("2024-07-15T10:30:00Z")
    assert dt.tzinfo is not None
    assert format_timestamp(dt) == "2024-07-15T10:30:00Z"
    assert parse_timestamp("2024-07-15T10:30:00") == dt


def test_proposal_wire_round_trip():
    data = {
        "id": "p1",
        "originalPath": "/x/a.jpg",
        "originalName": "a.jpg",
        "proposedName": "b.jpg",
        "proposedPath": "/x/b.jpg",
        "status": "conflict",
        "issues": [{"code": "DUPLICATE_NAME", "message": "dup"}],
        "isFolderMove": False,
        "actionType": "conflict",
        "conflict": {"type": "duplicate-name", "message": "dup", "conflictingFileId": "p2"},
    }
    p = RenameProposal.from_dict(data)
    assert p.status == RenameStatus.CONFLICT
    assert p.conflict.conflicting_proposal_id == "p2"
    assert p.to_dict() == data


def test_proposal_omits_empty_optionals():
    p = RenameProposal("p1", "/x/a.jpg", "a.jpg", "b.jpg", "/x/b.jpg")
    data = p.to_dict()
    assert "conflict" not in data
    assert "destinationFolder" not in data
    assert data["issues"] == []


def test_batch_result_from_dict():
    data = {
        "results": [
            {"proposalId": "1", "originalPath": "/x/a", "originalName": "a",
             "newPath": "/x/b", "newName": "b", "outcome": "success"},
            {"proposalId": "2", "originalPath": "/x/c", "originalName": "c",
             "outcome": "failed", "error": "boom"},
        ],
        "summary": {"rolledBack": 0},
        "startedAt": "2024-07-15T10:30:00Z",
        "completedAt": "2024-07-15T10:30:01Z",
        "durationMs": 1000,
    }
    result = BatchRenameResult.from_dict(data)
    assert result.summary.succeeded == 1
    assert result.summary.failed == 1
    assert not result.success
    assert "a: boom" not in result.summary_text()
    assert "c: boom" in result.summary_text()


def test_preview_options_defaults():
    options = PreviewOptions.from_dict(None)
    assert options.date_format == "YYYY-MM-DD"
    assert options.case_style == CaseStyle.NONE
    assert options.effective_reorganization() == (ReorganizationMode.RENAME_ONLY, None)


def test_preview_options_from_dict():
    options = PreviewOptions.from_dict({
        "dateFormat": "YYYYMMDD",
        "caseStyle": "snake_case",
        "stripExistingPatterns": True,
        "reorganizationMode": "organize",
        "organizeOptions": {
            "folderPattern": "{year}",
            "destinationDirectory": "/out",
            "preserveContext": True,
            "contextDepth": 2,
        },
    })
    assert options.case_style == CaseStyle.SNAKE_CASE
    assert options.strip_existing_patterns
    mode, organize = options.effective_reorganization()
    assert mode == ReorganizationMode.ORGANIZE
    assert organize.destination_directory == "/out"
    assert organize.context_depth == 2


def test_preview_options_legacy_pattern():
    options = PreviewOptions.from_dict({"folderPattern": "{year}", "baseDirectory": "/out"})
    mode, organize = options.effective_reorganization()
    assert mode == ReorganizationMode.ORGANIZE
    assert organize.folder_pattern == "{year}"
    assert organize.destination_directory == "/out"


@pytest.mark.parametrize("data", [
    {"caseStyle": "sponge"},
    {"reorganizationMode": "shuffle"},
    {"organizeOptions": {"destinationDirectory": "/out"}},
    {"organizeOptions": {"folderPattern": "{year}", "contextDepth": "deep"}},
])
def test_preview_options_rejects(data):
    with pytest.raises(PreviewFailed):
        PreviewOptions.from_dict(data)


def test_execute_options_from_dict():
    options = ExecuteOptions.from_dict({"proposalIds": ["a", "b"], "allOrNothing": True})
    assert options.proposal_ids == ["a", "b"]
    assert options.all_or_nothing
    assert not options.validate_paths
    assert ExecuteOptions.from_dict(None).proposal_ids is None


def test_execute_options_rejects_bad_ids():
    with pytest.raises(ValidationFailed):
        ExecuteOptions.from_dict({"proposalIds": "a"})
