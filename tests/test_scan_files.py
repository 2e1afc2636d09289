import pytest

from tidy_core import NotADirectory, PathNotFound, list_extensions, scan_folder
from tidy_core.scan_files import total_size


@pytest.fixture
def tree(make_file):
    make_file("b.jpg", content=b"12")
    make_file("a.PNG", content=b"1")
    make_file("notes.txt", content=b"123")
    make_file(".hidden.txt")
    make_file("sub/c.jpg")
    make_file("sub/.git/config")
    make_file(".cache/x.jpg")


def test_top_level_only(tree, tmp_path):
    files = scan_folder(tmp_path)
    assert [f.relative_path for f in files] == ["a.PNG", "b.jpg", "notes.txt"]
    assert total_size(files) == 6


def test_recursive(tree, tmp_path):
    files = scan_folder(tmp_path, recursive=True)
    assert [f.relative_path for f in files] == ["a.PNG", "b.jpg", "notes.txt", "sub/c.jpg"]


def test_include_hidden(tree, tmp_path):
    names = [f.relative_path for f in scan_folder(tmp_path, recursive=True, include_hidden=True)]
    assert ".hidden.txt" in names
    assert ".cache/x.jpg" in names
    assert "sub/.git/config" not in names


def test_extension_filter_is_case_insensitive(tree, tmp_path):
    files = scan_folder(tmp_path, recursive=True, extensions=["png", ".JPG"])
    assert [f.full_name for f in files] == ["a.PNG", "b.jpg", "c.jpg"]


def test_list_extensions(tree, tmp_path):
    assert list_extensions(tmp_path) == ["jpg", "png", "txt"]


def test_progress_callback_can_cancel(tree, tmp_path):
    seen = []

    def progress(count, name):
        seen.append(name)
        if count == 2:
            raise InterruptedError("stop")

    with pytest.raises(InterruptedError):
        scan_folder(tmp_path, progress_callback=progress)
    assert len(seen) == 2


def test_missing_root(tmp_path):
    with pytest.raises(PathNotFound):
        scan_folder(tmp_path / "nope")


def test_root_is_a_file(make_file):
    with pytest.raises(NotADirectory):
        scan_folder(make_file("plain.txt"))
