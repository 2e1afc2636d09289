"""
cli_display.py - Console output helpers shared by the CLI modes
"""

from typing import List

from tidy_core import (
    BatchRenameResult,
    FileDescriptor,
    RenamePreview,
    RenameStatus,
    TidyError,
)

STATUS_MARKS = {
    RenameStatus.READY: "",
    RenameStatus.NO_CHANGE: " [no change]",
    RenameStatus.CONFLICT: " [conflict]",
    RenameStatus.INVALID_NAME: " [invalid]",
    RenameStatus.MISSING_DATA: " [missing data]",
}


def print_header(title: str):
    """Print header"""
    print()
    print("=" * 60)
    print(f"  {title}")
    print("=" * 60)
    print()


def print_files(files: List[FileDescriptor], limit: int = 50):
    """Print scanned files with their sizes"""
    print("-" * 80)
    for i, f in enumerate(files):
        if i >= limit:
            print(f"  ... and {len(files) - limit} more files")
            break
        size_kb = f.size / 1024
        print(f"  {f.relative_path:<55} {size_kb:>10.1f} KB")
    print("-" * 80)
    print(f"Total: {len(files)} files")


def print_preview(preview: RenamePreview, limit: int = 20):
    """Print proposals and the preview summary"""
    proposals = preview.proposals
    print(f"Template: {preview.template_used} ({preview.reorganization_mode.value})")
    print("-" * 80)
    for p in proposals[:limit]:
        target = p.proposed_name
        if p.is_folder_move and p.destination_folder:
            target = f"{p.destination_folder}/{p.proposed_name}"
        print(f"  {p.original_name:<40} -> {target}{STATUS_MARKS.get(p.status, '')}")
        for issue in p.issues:
            print(f"      ! {issue.message}")
    if len(proposals) > limit:
        print(f"  ... and {len(proposals) - limit} more proposals")
    print("-" * 80)

    s = preview.summary
    print(
        f"Ready: {s.ready}  No change: {s.no_change}  Conflicts: {s.conflicts}  "
        f"Invalid: {s.invalid_name}  Missing data: {s.missing_data}"
    )


def print_result(result: BatchRenameResult):
    print(result.summary_text())
    print(f"Duration: {result.duration_ms} ms")


def print_error(error: TidyError):
    print(f"Error: {error.message}")
    if error.suggestion:
        print(f"  {error.suggestion}")
