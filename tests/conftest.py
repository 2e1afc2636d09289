import os
from datetime import datetime, timezone
from pathlib import Path

import pytest

from tidy_core import FileDescriptor
from tidy_core.models_fs import category_for_extension

JULY_15 = datetime(2024, 7, 15, 10, 30, 0, tzinfo=timezone.utc)


def make_descriptor(path, modified=JULY_15, relative_path=None, size=100):
    """Build a descriptor without touching the filesystem"""
    path = str(path)
    full_name = os.path.basename(path)
    stem, dot, ext = full_name.rpartition(".")
    if not dot or not stem:
        stem, ext = full_name, ""
    return FileDescriptor(
        path=path,
        name=stem,
        extension=ext,
        full_name=full_name,
        size=size,
        created_at=modified,
        modified_at=modified,
        relative_path=full_name if relative_path is None else relative_path,
        category=category_for_extension(ext),
    )


@pytest.fixture
def descriptor():
    return make_descriptor


@pytest.fixture
def make_file(tmp_path):
    """Create a file under tmp_path with a fixed modification time"""
    def _make(relative, content=b"data", modified=JULY_15):
        p = tmp_path / relative
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(content)
        ts = modified.timestamp()
        os.utime(p, (ts, ts))
        return p
    return _make


@pytest.fixture
def scanned(tmp_path):
    """Descriptor of a real file, relative to tmp_path"""
    def _scan(p: Path):
        return FileDescriptor.from_path(p, tmp_path)
    return _scan
