"""
sanitize_name.py - Filename Validation and Sanitization

Provides:
- is_valid_filename: direct validity check
- sanitize_filename: deterministic cleanup pipeline with an audit trail
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

# Characters that are invalid in filenames on at least one major OS
INVALID_CHARS = frozenset('/\\:*?"<>|\0')

# Windows reserved names
RESERVED_NAMES = frozenset(
    ["CON", "PRN", "AUX", "NUL"]
    + [f"COM{i}" for i in range(1, 10)]
    + [f"LPT{i}" for i in range(1, 10)]
)

# Maximum filename length for most filesystems
MAX_FILENAME_LENGTH = 255

ELLIPSIS = "..."


@dataclass
class SanitizeChange:
    """One recorded sanitization step"""
    change_type: str        # char_replacement / reserved_name / trailing_fix / truncation
    original: str
    replacement: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.change_type,
            "original": self.original,
            "replacement": self.replacement,
            "message": self.message,
        }


@dataclass
class SanitizeResult:
    """Result of sanitizing a filename"""
    sanitized: str
    original: str
    changes: List[SanitizeChange] = field(default_factory=list)

    @property
    def was_modified(self) -> bool:
        return self.sanitized != self.original

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sanitized": self.sanitized,
            "original": self.original,
            "changes": [c.to_dict() for c in self.changes],
            "wasModified": self.was_modified,
        }


def split_filename(filename: str) -> Tuple[str, str]:
    """
    Split a filename into name and extension

    Args:
        filename: Filename

    Returns:
        (name, extension including the dot)
    """
    if not filename:
        return "", ""

    # Dotfiles like .gitignore
    if filename.startswith(".") and "." not in filename[1:]:
        return filename, ""

    pos = filename.rfind(".")
    if pos <= 0:
        return filename, ""
    return filename[:pos], filename[pos:]


def is_valid_filename(name: str) -> Tuple[bool, Optional[str]]:
    """
    Check if filename is valid on all supported platforms

    Args:
        name: Filename

    Returns:
        (is_valid, error_reason)
    """
    if not name:
        return False, "Filename cannot be empty"

    if len(name) > MAX_FILENAME_LENGTH:
        return False, f"Filename exceeds {MAX_FILENAME_LENGTH} characters"

    for char in name:
        if char in INVALID_CHARS:
            return False, f"Filename contains invalid character: {char!r}"

    base_name = name.upper().split(".")[0]
    if base_name in RESERVED_NAMES:
        return False, f"Filename is a Windows reserved name: {base_name}"

    if name.endswith(" ") or name.endswith("."):
        return False, "Filename cannot end with space or dot"

    return True, None


def sanitize_filename(filename: str, replacement: str = "_") -> SanitizeResult:
    """
    Clean a filename so it is valid across operating systems

    Steps:
    1. Replace invalid characters
    2. Collapse consecutive replacement characters
    3. Suffix Windows reserved names with "_file"
    4. Remove trailing spaces and periods
    5. Truncate to MAX_FILENAME_LENGTH, keeping the extension

    Args:
        filename: Original filename
        replacement: Replacement character

    Returns:
        Sanitize result with every applied change
    """
    result = SanitizeResult(sanitized=filename, original=filename)
    if not filename:
        return result

    changes = result.changes
    name = filename

    # Step 1: invalid characters
    found: List[str] = []
    for char in name:
        if char in INVALID_CHARS and char not in found:
            found.append(char)
    if found:
        changes.append(SanitizeChange(
            change_type="char_replacement",
            original="".join(found),
            replacement=replacement * len(found),
            message="Replaced invalid characters: " + ", ".join(f'"{c}"' for c in found),
        ))
        name = "".join(replacement if c in INVALID_CHARS else c for c in name)

    # Step 2: collapse runs of the replacement character
    if replacement:
        doubled = replacement * 2
        while doubled in name:
            name = name.replace(doubled, replacement)

    # Steps 3 and 4 repeat: trimming can expose a reserved name
    while True:
        before = name

        # Step 3: reserved names (the part before the first dot)
        base, dot, rest = name.partition(".")
        if base.upper() in RESERVED_NAMES:
            changes.append(SanitizeChange(
                change_type="reserved_name",
                original=base,
                replacement=f"{base}_file",
                message=f'"{base}" is a reserved name on Windows',
            ))
            name = f"{base}_file{dot}{rest}"

        # Step 4: trailing spaces/periods on the name part, then on the whole string
        name_part, ext_part = split_filename(name)
        trimmed_name = name_part.rstrip(". ")
        if trimmed_name and trimmed_name != name_part:
            changes.append(SanitizeChange(
                change_type="trailing_fix",
                original=name_part[len(trimmed_name):],
                replacement="",
                message="Removed trailing spaces/periods (invalid on Windows)",
            ))
            name = f"{trimmed_name}{ext_part}"

        trimmed_full = name.rstrip(". ")
        if trimmed_full and trimmed_full != name:
            changes.append(SanitizeChange(
                change_type="trailing_fix",
                original=name[len(trimmed_full):],
                replacement="",
                message="Removed trailing spaces/periods (invalid on Windows)",
            ))
            name = trimmed_full

        if name == before:
            break

    # Step 5: length
    if len(name) > MAX_FILENAME_LENGTH:
        name = truncate_filename(name, MAX_FILENAME_LENGTH, changes)

    result.sanitized = name
    return result


def truncate_filename(filename: str, max_length: int, changes: List[SanitizeChange]) -> str:
    """
    Truncate a filename while preserving the extension

    Args:
        filename: Filename to truncate
        max_length: Maximum length
        changes: Change list to record into

    Returns:
        Truncated filename
    """
    name_part, ext_part = split_filename(filename)
    max_name_length = max_length - len(ext_part)

    # Extension alone is too long
    if max_name_length < 1:
        truncated = filename[:max_length]
        changes.append(SanitizeChange(
            change_type="truncation",
            original=filename,
            replacement=truncated,
            message=f"Truncated from {len(filename)} to {max_length} characters (extension too long)",
        ))
        return truncated

    available = max_name_length - len(ELLIPSIS)
    if available > 0:
        truncated_name = name_part[:available] + ELLIPSIS
    else:
        truncated_name = name_part[:max_name_length]

    truncated = f"{truncated_name}{ext_part}"
    changes.append(SanitizeChange(
        change_type="truncation",
        original=filename,
        replacement=truncated,
        message=f"Truncated from {len(filename)} to {len(truncated)} characters",
    ))
    return truncated
