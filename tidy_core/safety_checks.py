"""
safety_checks.py - Safety Check Module

Provides path security validation (traversal, symlinks, base directory
containment) and pre-flight checks before file operations.
"""

from pathlib import Path, PurePath
from typing import List, Optional, Tuple, Union
import os

from .errors import (
    CanonicalizationFailed,
    InvalidPath,
    PathTraversal,
    SecurityError,
    SymlinkNotAllowed,
)
from .sanitize_name import is_valid_filename

PathLike = Union[str, Path]


def _has_traversal(path: PathLike) -> bool:
    """Whether any path component is '..'"""
    text = str(path).replace("\\", "/")
    return ".." in text.split("/")


def _is_within(path: Path, base: Path) -> bool:
    try:
        path.relative_to(base)
        return True
    except ValueError:
        return False


def validate_path_within_base(path: PathLike, base_dir: PathLike) -> Path:
    """
    Validate that a path does not escape the allowed base directory

    Args:
        path: Path to validate (may not exist yet)
        base_dir: Directory the path must stay within (must exist)

    Returns:
        Canonical path

    Raises:
        SecurityError: traversal, symlink or unresolvable path
    """
    path = Path(path)
    base_dir = Path(base_dir)

    if _has_traversal(path):
        raise PathTraversal()

    if base_dir.is_symlink():
        raise SymlinkNotAllowed("Base directory cannot be a symlink")

    try:
        canonical_base = base_dir.resolve(strict=True)
    except OSError as e:
        raise CanonicalizationFailed(f"Base directory: {e}")

    if path.exists():
        if path.is_symlink():
            raise SymlinkNotAllowed(f"Target path is a symlink: {path}")
        try:
            canonical = path.resolve(strict=True)
        except OSError as e:
            raise CanonicalizationFailed(f"Target path: {e}")
    else:
        # Walk up to the first existing ancestor, then re-add the missing parts
        current = path
        missing: List[str] = []
        while not current.exists():
            if not current.name or current.parent == current:
                raise InvalidPath("No valid ancestor found")
            missing.append(current.name)
            current = current.parent

        if current.is_symlink():
            raise SymlinkNotAllowed(f"Path ancestor is a symlink: {current}")

        try:
            canonical = current.resolve(strict=True)
        except OSError as e:
            raise CanonicalizationFailed(f"Ancestor path: {e}")

        for component in reversed(missing):
            if component in (".", "..") or "/" in component or "\\" in component:
                raise PathTraversal()
            if "\0" in component:
                raise InvalidPath("Path contains null byte")
            canonical = canonical / component

    if not _is_within(canonical, canonical_base):
        raise PathTraversal()

    return canonical


def validate_scan_path(path: PathLike) -> Path:
    """
    Validate a folder before scanning it

    Args:
        path: Folder path

    Returns:
        Canonical folder path

    Raises:
        SecurityError: traversal, symlink, missing or not a directory
    """
    text = str(path)
    if _has_traversal(text):
        raise PathTraversal()
    if "\0" in text:
        raise InvalidPath("Path contains null byte")

    p = Path(text)
    if p.is_symlink():
        raise SymlinkNotAllowed(f"Scan path is a symlink: {p}")

    try:
        canonical = p.resolve(strict=True)
    except OSError as e:
        raise CanonicalizationFailed(str(e))

    if not canonical.is_dir():
        raise InvalidPath("Not a directory")
    return canonical


def validate_rename_path(
    original_path: PathLike,
    proposed_path: PathLike,
    allowed_base: Optional[PathLike] = None,
) -> Path:
    """
    Validate the destination of a rename/move

    Renames within the same folder only have their new name checked; moves
    must stay within the allowed base (default: the original's folder).

    Args:
        original_path: Current file path
        proposed_path: Destination path
        allowed_base: Explicit base directory

    Returns:
        Validated destination path

    Raises:
        SecurityError: destination is not acceptable
    """
    original_text, proposed_text = str(original_path), str(proposed_path)

    if _has_traversal(proposed_text):
        raise PathTraversal()
    if "\0" in proposed_text or "\0" in original_text:
        raise InvalidPath("Path contains null byte")

    original = Path(original_text)
    proposed = Path(proposed_text)

    if original.is_symlink():
        raise SymlinkNotAllowed(f"Original file is a symlink: {original}")

    base = Path(allowed_base) if allowed_base is not None else original.parent

    if original.parent == proposed.parent:
        name = proposed.name
        if not name or "/" in name or "\\" in name:
            raise InvalidPath("Proposed filename contains invalid characters")
        return proposed

    return validate_path_within_base(proposed, base)


def check_rename_destination(
    original_path: PathLike,
    proposed_path: PathLike,
    allowed_base: Optional[PathLike] = None,
) -> Tuple[bool, Optional[str]]:
    """
    Security check of a single destination

    Returns:
        (is_safe, error_reason)
    """
    try:
        validate_rename_path(original_path, proposed_path, allowed_base)
    except SecurityError as e:
        return False, e.message
    return True, None


def check_writable(path: Path) -> Tuple[bool, Optional[str]]:
    """
    Check if path is writable

    Args:
        path: Path to check

    Returns:
        (is_writable, error_reason)
    """
    if path.exists():
        if not os.access(path, os.W_OK):
            return False, f"File is not writable: {path}"
    else:
        parent = path.parent
        if not parent.exists():
            return False, f"Parent directory does not exist: {parent}"
        if not os.access(parent, os.W_OK):
            return False, f"Directory is not writable: {parent}"

    return True, None


def check_path_length(path: PurePath, max_length: int = 260) -> Tuple[bool, Optional[str]]:
    """
    Check if path length exceeds limit (mainly for Windows)

    Args:
        path: Path to check
        max_length: Maximum length

    Returns:
        (is_valid, error_reason)
    """
    path_str = str(path)
    if len(path_str) > max_length:
        return False, f"Path length ({len(path_str)}) exceeds limit ({max_length}): {path}"
    return True, None


def check_rename_op(src: Path, dst: Path) -> Tuple[bool, Optional[str]]:
    """
    Check if a single rename operation can run

    Args:
        src: Source path
        dst: Destination path

    Returns:
        (is_safe, error_reason)
    """
    if not src.exists():
        return False, f"Source file does not exist: {src}"

    if not src.is_file():
        return False, f"Source path is not a file: {src}"

    valid, error = is_valid_filename(dst.name)
    if not valid:
        return False, error

    if os.name == "nt":
        valid, error = check_path_length(dst)
        if not valid:
            return False, error

    return check_writable(src)
