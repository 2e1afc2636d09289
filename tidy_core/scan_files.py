"""
scan_files.py - File Scanning Module

Provides recursive and non-recursive folder scanning producing FileDescriptors
"""

from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union
import logging
import os

from .errors import NotADirectory, PathNotFound
from .models_fs import FileDescriptor

logger = logging.getLogger(__name__)

DEFAULT_IGNORE_DIRS = [".git", "__pycache__", "node_modules"]

PathLike = Union[str, Path]


def _normalize_extensions(extensions: Optional[Iterable[str]]) -> Optional[set]:
    if not extensions:
        return None
    return {e.lstrip(".").lower() for e in extensions}


def _check_root(root: PathLike) -> Path:
    root = Path(root).expanduser()
    if not root.exists():
        raise PathNotFound(str(root))
    if not root.is_dir():
        raise NotADirectory(str(root))
    return root.resolve()


def scan_folder(
    root: PathLike,
    recursive: bool = False,
    extensions: Optional[Iterable[str]] = None,
    include_hidden: bool = False,
    ignore_dirs: Optional[List[str]] = None,
    progress_callback: Optional[Callable[[int, str], None]] = None,
) -> List[FileDescriptor]:
    """
    Scan a folder for files

    Args:
        root: Folder to scan
        recursive: Whether to descend into subfolders
        extensions: Extensions to keep (without dot, case-insensitive); None keeps all
        include_hidden: Whether to include hidden files and folders
        ignore_dirs: Folder names never entered when recursive
        progress_callback: Called with (files discovered, filename); may raise
            InterruptedError to cancel the scan

    Returns:
        File descriptors sorted by relative path

    Raises:
        PathNotFound: root does not exist
        NotADirectory: root is not a folder
    """
    root = _check_root(root)
    if ignore_dirs is None:
        ignore_dirs = DEFAULT_IGNORE_DIRS
    wanted = _normalize_extensions(extensions)

    results: List[FileDescriptor] = []
    discovered = 0

    for dirpath, dirnames, filenames in os.walk(root):
        if recursive:
            # Modifying dirnames in place prevents os.walk from entering these directories
            dirnames[:] = sorted(
                d for d in dirnames
                if d not in ignore_dirs and (include_hidden or not d.startswith("."))
            )
        else:
            dirnames[:] = []

        for filename in sorted(filenames):
            if not include_hidden and filename.startswith("."):
                continue

            filepath = Path(dirpath) / filename
            discovered += 1
            if progress_callback:
                progress_callback(discovered, filename)

            if wanted is not None:
                ext = filepath.suffix[1:].lower() if filepath.suffix else ""
                if ext not in wanted:
                    continue

            try:
                results.append(FileDescriptor.from_path(filepath, root))
            except OSError as e:
                # Skip inaccessible files
                logger.warning("Cannot access %s: %s", filepath, e)

    results.sort(key=lambda f: f.relative_path)
    logger.info("Scanned %s: %d files (recursive=%s)", root, len(results), recursive)
    return results


def list_extensions(root: PathLike, recursive: bool = False, include_hidden: bool = False) -> List[str]:
    """
    List all file extensions in the folder

    Args:
        root: Target folder
        recursive: Whether to include subfolders
        include_hidden: Whether to include hidden files

    Returns:
        Extension list without dots (deduplicated, lowercase, sorted)
    """
    files = scan_folder(root, recursive=recursive, include_hidden=include_hidden)
    return sorted({f.extension.lower() for f in files if f.extension})


def total_size(files: List[FileDescriptor]) -> int:
    """Sum of file sizes in bytes"""
    return sum(f.size for f in files)
