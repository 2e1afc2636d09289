"""
plan_rename.py - Rename Preview Generation

Responsibilities:
- Expand the template for every file and normalize the result
- Work out the destination folder (rename-only / organize)
- Run conflict detection and assemble a RenamePreview
"""

from datetime import datetime, timezone
from typing import List, Optional, Tuple
import logging
import uuid

from .case_style import normalize_filename
from .detect_conflicts import ConflictDetector
from .folder_pattern import apply_folder_pattern, context_folders, scan_root
from .models_fs import FileDescriptor
from .models_rename import RenamePreview, RenameProposal
from .rename_options import OrganizeOptions, PreviewOptions
from .template_expand import apply_template, validate_template

logger = logging.getLogger(__name__)


def _join(base: str, folder: str) -> str:
    """Join a base directory and a relative folder with '/'"""
    if not folder:
        return base
    if not base:
        return folder
    base = base.rstrip("/\\")
    return f"{base}/{folder}"


def resolve_destination(
    file: FileDescriptor,
    organize: Optional[OrganizeOptions],
) -> Tuple[str, bool, Optional[str]]:
    """
    Work out where a file ends up

    Args:
        file: File descriptor
        organize: Organize options (None: rename in place)

    Returns:
        (destination directory, is folder move, destination folder relative to the base)
    """
    source_dir = file.source_dir
    if organize is None:
        return source_dir, False, None

    folder = apply_folder_pattern(file, organize.folder_pattern)
    base = organize.destination_directory
    if organize.preserve_context:
        # Without a destination the kept folders are rebuilt under the scan root
        root = base or scan_root(file)
        if root is not None:
            folder = _join("/".join(context_folders(file, organize.context_depth)), folder)
            base = root

    base = base or source_dir
    dest_dir = _join(base, folder)

    is_move = dest_dir != source_dir
    return dest_dir, is_move, folder if is_move else None


def generate_preview(
    files: List[FileDescriptor],
    template_pattern: str,
    options: Optional[PreviewOptions] = None,
    case_insensitive: bool = True,
) -> RenamePreview:
    """
    Generate a rename preview for files using a template

    Args:
        files: Scanned files
        template_pattern: Filename template (e.g., "{date}_{name}.{ext}")
        options: Preview options
        case_insensitive: Whether destinations differing only in case collide

    Returns:
        Rename preview with one proposal per file, in input order

    Raises:
        PreviewFailed: template pattern cannot be expanded
    """
    if options is None:
        options = PreviewOptions()

    validate_template(template_pattern)
    mode, organize = options.effective_reorganization()

    proposals: List[RenameProposal] = []
    for f in files:
        raw_name, sources = apply_template(
            f,
            template_pattern,
            options.date_format,
            options.strip_existing_patterns,
        )
        proposed_name = normalize_filename(raw_name, options.case_style)

        dest_dir, is_move, destination_folder = resolve_destination(f, organize)
        proposed_path = f"{dest_dir.rstrip('/')}/{proposed_name}" if dest_dir else proposed_name

        proposals.append(RenameProposal(
            id=str(uuid.uuid4()),
            original_path=f.path,
            original_name=f.full_name,
            proposed_name=proposed_name,
            proposed_path=proposed_path,
            metadata_sources=sources or None,
            is_folder_move=is_move,
            destination_folder=destination_folder,
        ))

    ConflictDetector(case_insensitive=case_insensitive).run(proposals)

    preview = RenamePreview(
        proposals=proposals,
        generated_at=datetime.now(timezone.utc),
        template_used=template_pattern,
        reorganization_mode=mode,
    )
    summary = preview.summary
    logger.info(
        "Preview generated: template=%r total=%d ready=%d conflicts=%d no_change=%d invalid=%d",
        template_pattern, summary.total, summary.ready, summary.conflicts,
        summary.no_change, summary.invalid_name,
    )
    return preview
