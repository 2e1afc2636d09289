import errno

from tidy_core import (
    IoError,
    NotADirectory,
    PathNotFound,
    PathTraversal,
    PreviewFailed,
    SecurityError,
    TidyError,
)


def test_message_joins_prefix_and_detail():
    e = PreviewFailed("Template pattern cannot be empty")
    assert e.message == "Preview generation failed: Template pattern cannot be empty"
    assert str(e) == e.message


def test_error_response():
    data = PathNotFound("/nope").to_error_response()
    assert data["code"] == "PATH_NOT_FOUND"
    assert data["message"] == "Path does not exist: /nope"
    assert data["category"] == "filesystem"
    assert data["recoverable"] is True
    assert "suggestion" in data


def test_security_errors_are_not_recoverable():
    e = PathTraversal()
    assert isinstance(e, SecurityError)
    assert isinstance(e, TidyError)
    data = e.to_error_response()
    assert data["recoverable"] is False
    assert data["category"] == "security"
    assert data["message"].startswith("Path traversal detected")


def test_suggestion_override():
    e = NotADirectory("/x/file.txt", suggestion="Pick a folder")
    assert e.to_error_response()["suggestion"] == "Pick a folder"


def test_io_error_from_os_error():
    e = IoError.from_os_error(OSError(errno.EACCES, "Permission denied"))
    assert e.code == "IO_ERROR"
    assert "Permission denied" in e.message
