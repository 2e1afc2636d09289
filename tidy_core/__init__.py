"""
tidy_core - Rename Proposal & Execution Engine

Provides template-based rename previews, conflict detection and batch execution
"""

from .errors import (
    TidyError,
    RenameError,
    PreviewFailed,
    RenameFailed,
    ValidationFailed,
    IoError,
    SecurityError,
    PathTraversal,
    InvalidPath,
    SymlinkNotAllowed,
    CanonicalizationFailed,
    ScanError,
    PathNotFound,
    NotADirectory,
)

from .models_fs import (
    FileCategory,
    FileDescriptor,
)

from .models_rename import (
    RenameStatus,
    FileActionType,
    ReorganizationMode,
    CaseStyle,
    RenameOutcome,
    RenameIssue,
    FileConflict,
    RenameProposal,
    PreviewSummary,
    PreviewActionSummary,
    RenamePreview,
    FileRenameResult,
    BatchRenameSummary,
    BatchRenameResult,
)

from .rename_options import (
    OrganizeOptions,
    PreviewOptions,
    ExecuteOptions,
    Settings,
)

from .case_style import (
    normalize_case,
    normalize_filename,
)

from .sanitize_name import (
    is_valid_filename,
    sanitize_filename,
)

from .strip_patterns import clean_filename

from .template_expand import (
    apply_template,
    format_date,
    validate_template,
)

from .folder_pattern import apply_folder_pattern

from .detect_conflicts import ConflictDetector

from .plan_rename import generate_preview

from .exec_rename import execute_rename

from .scan_files import (
    scan_folder,
    list_extensions,
)

from .history import (
    save_result_log,
    load_result_log,
    undo_operations,
    apply_undo,
)

from .safety_checks import (
    validate_path_within_base,
    validate_scan_path,
    validate_rename_path,
    check_writable,
    check_path_length,
)

from .commands import dispatch

from .log_setup import configure_logging

__version__ = "0.1.0"

__all__ = [
    # Errors
    "TidyError",
    "RenameError",
    "PreviewFailed",
    "RenameFailed",
    "ValidationFailed",
    "IoError",
    "SecurityError",
    "PathTraversal",
    "InvalidPath",
    "SymlinkNotAllowed",
    "CanonicalizationFailed",
    "ScanError",
    "PathNotFound",
    "NotADirectory",

    # Data models
    "FileCategory",
    "FileDescriptor",
    "RenameStatus",
    "FileActionType",
    "ReorganizationMode",
    "CaseStyle",
    "RenameOutcome",
    "RenameIssue",
    "FileConflict",
    "RenameProposal",
    "PreviewSummary",
    "PreviewActionSummary",
    "RenamePreview",
    "FileRenameResult",
    "BatchRenameSummary",
    "BatchRenameResult",

    # Options
    "OrganizeOptions",
    "PreviewOptions",
    "ExecuteOptions",
    "Settings",

    # Name processing
    "normalize_case",
    "normalize_filename",
    "is_valid_filename",
    "sanitize_filename",
    "clean_filename",
    "apply_template",
    "format_date",
    "validate_template",
    "apply_folder_pattern",

    # Preview and execution
    "ConflictDetector",
    "generate_preview",
    "execute_rename",

    # Collaborators
    "scan_folder",
    "list_extensions",
    "save_result_log",
    "load_result_log",
    "undo_operations",
    "apply_undo",
    "validate_path_within_base",
    "validate_scan_path",
    "validate_rename_path",
    "check_writable",
    "check_path_length",
    "dispatch",
    "configure_logging",
]
