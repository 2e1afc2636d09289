"""
errors.py - Error Types

Contains:
- TidyError: base class with one shared error-response format
- RenameError family: preview/rename/validation/IO failures
- SecurityError family: path validation failures
- ScanError family: folder scanning failures
"""

from typing import Any, Dict, Optional


class ErrorCategory:
    """Error category used for grouping in the UI"""
    FILESYSTEM = "filesystem"
    SECURITY = "security"
    CONFIG = "config"
    VALIDATION = "validation"
    INTERNAL = "internal"


class TidyError(Exception):
    """Base error for the project"""

    code: str = "INTERNAL_ERROR"
    category: str = ErrorCategory.INTERNAL
    recoverable: bool = True
    prefix: str = ""
    suggestion: Optional[str] = None

    def __init__(self, detail: str = "", suggestion: Optional[str] = None):
        self.detail = detail
        if suggestion is not None:
            self.suggestion = suggestion
        super().__init__(self.message)

    @property
    def message(self) -> str:
        """Human-readable message (prefix + detail)"""
        if self.prefix and self.detail:
            return f"{self.prefix}: {self.detail}"
        return self.prefix or self.detail

    def to_error_response(self) -> Dict[str, Any]:
        """Structured error payload for front ends"""
        data: Dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "category": self.category,
            "recoverable": self.recoverable,
        }
        if self.suggestion:
            data["suggestion"] = self.suggestion
        return data


# =============================================================================
# Rename errors
# =============================================================================

class RenameError(TidyError):
    code = "RENAME_ERROR"


class PreviewFailed(RenameError):
    code = "PREVIEW_FAILED"
    category = ErrorCategory.VALIDATION
    prefix = "Preview generation failed"
    suggestion = "Check the template pattern and preview options."


class RenameFailed(RenameError):
    code = "RENAME_FAILED"
    category = ErrorCategory.FILESYSTEM
    prefix = "Rename operation failed"


class ValidationFailed(RenameError):
    code = "VALIDATION_FAILED"
    category = ErrorCategory.VALIDATION
    prefix = "Validation failed"


class IoError(RenameError):
    code = "IO_ERROR"
    category = ErrorCategory.FILESYSTEM
    prefix = "IO error"
    suggestion = "Check file permissions and ensure the disk is accessible."

    @classmethod
    def from_os_error(cls, error: OSError) -> "IoError":
        return cls(str(error))


# =============================================================================
# Security errors
# =============================================================================

class SecurityError(TidyError):
    code = "SECURITY_VIOLATION"
    category = ErrorCategory.SECURITY
    recoverable = False


class PathTraversal(SecurityError):
    code = "PATH_TRAVERSAL"
    prefix = "Path traversal detected: attempted to access path outside allowed directory"


class InvalidPath(SecurityError):
    code = "INVALID_PATH"
    prefix = "Invalid path"


class SymlinkNotAllowed(SecurityError):
    code = "SYMLINK_NOT_ALLOWED"
    prefix = "Symlink not allowed"


class CanonicalizationFailed(SecurityError):
    code = "CANONICALIZATION_FAILED"
    prefix = "Path canonicalization failed"


# =============================================================================
# Scan errors
# =============================================================================

class ScanError(TidyError):
    code = "SCAN_FAILED"
    category = ErrorCategory.FILESYSTEM


class PathNotFound(ScanError):
    code = "PATH_NOT_FOUND"
    prefix = "Path does not exist"
    suggestion = "Please check that the path exists and is accessible."


class NotADirectory(ScanError):
    code = "NOT_A_DIRECTORY"
    prefix = "Not a directory"
    suggestion = "Please select a directory, not a file."
