"""
folder_pattern.py - Destination Folder Patterns

Placeholders: {year} {month} {day} {category} {extension} / {ext}.
Path segments are not sanitized here.
"""

from pathlib import PurePosixPath
from typing import List, Optional
import re

from .models_fs import FileDescriptor

_MULTI_SLASH_RE = re.compile(r"/{2,}")


def apply_folder_pattern(file: FileDescriptor, pattern: str) -> str:
    """
    Apply a folder pattern to generate a relative destination folder

    Args:
        file: File descriptor
        pattern: Folder pattern (e.g., "{year}/{month}")

    Returns:
        Forward-slash folder path without leading/trailing slashes
    """
    modified = file.modified_at
    result = (
        pattern
        .replace("{year}", modified.strftime("%Y"))
        .replace("{month}", modified.strftime("%m"))
        .replace("{day}", modified.strftime("%d"))
        .replace("{category}", file.category.label)
        .replace("{extension}", file.extension)
        .replace("{ext}", file.extension)
    )

    result = result.replace("\\", "/").strip("/")
    return _MULTI_SLASH_RE.sub("/", result)


def context_folders(file: FileDescriptor, depth: int) -> List[str]:
    """
    Get the parent folder names kept by "preserve context"

    Folders are taken from the path relative to the scan root when the
    descriptor has one, otherwise from the absolute source folder.

    Args:
        file: File descriptor
        depth: Levels to keep (-1 keeps all, 0 keeps none)

    Returns:
        Folder names, outermost first
    """
    if depth == 0:
        return []

    relative = file.relative_path.replace("\\", "/")
    if relative:
        parents = list(PurePosixPath(relative).parent.parts)
    elif depth > 0:
        source = file.source_dir.replace("\\", "/")
        parents = source.split("/")
    else:
        # No scan root known, "all" would mean the whole absolute path
        return []

    parents = [part for part in parents if part not in ("", ".", "..", "/")]
    if depth < 0:
        return parents
    return parents[-depth:]


def scan_root(file: FileDescriptor) -> Optional[str]:
    """
    Folder the file was scanned from (path minus relative path)

    Returns:
        Scan root, or None when the relative path does not end the path
    """
    relative = file.relative_path.replace("\\", "/")
    path = file.path.replace("\\", "/")
    if not relative or not path.endswith("/" + relative):
        return None
    return file.path[:len(path) - len(relative) - 1] or "/"
