"""
commands.py - Command Surface

Plain synchronous functions taking and returning camelCase wire dicts.
Front ends (GUI workers, CLI --json, embedding applications) call these
from whatever thread or event loop they run on.
"""

from typing import Any, Callable, Dict, List, Optional
import logging

from .errors import TidyError, ValidationFailed
from .exec_rename import execute_rename
from .models_fs import FileDescriptor
from .models_rename import RenameProposal
from .plan_rename import generate_preview
from .rename_options import ExecuteOptions, PreviewOptions
from .scan_files import scan_folder, total_size

logger = logging.getLogger(__name__)


def _parse_list(items: Any, parse: Callable[[Dict[str, Any]], Any], what: str) -> List[Any]:
    if not isinstance(items, list):
        raise ValidationFailed(f"{what} must be a list")
    try:
        return [parse(item) for item in items]
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationFailed(f"Malformed {what}: {e}")


def scan_folder_command(path: str, options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Scan a folder; options: recursive, extensions, includeHidden"""
    options = options or {}
    files = scan_folder(
        path,
        recursive=bool(options.get("recursive", False)),
        extensions=options.get("extensions"),
        include_hidden=bool(options.get("includeHidden", False)),
    )
    return {
        "files": [f.to_dict() for f in files],
        "totalCount": len(files),
        "totalSize": total_size(files),
    }


def generate_preview_command(
    files: List[Dict[str, Any]],
    template_pattern: str,
    options: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Generate a rename preview

    Args:
        files: File descriptors (wire form)
        template_pattern: Filename template
        options: Preview options (wire form)

    Returns:
        RenamePreview (wire form)

    Raises:
        PreviewFailed: bad template or options
        ValidationFailed: malformed file descriptors
    """
    descriptors = _parse_list(files, FileDescriptor.from_dict, "files")
    preview = generate_preview(descriptors, template_pattern, PreviewOptions.from_dict(options))
    return preview.to_dict()


def execute_rename_command(
    proposals: List[Dict[str, Any]],
    options: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Execute proposals

    Args:
        proposals: Rename proposals (wire form, possibly edited by the caller)
        options: Execute options (wire form)

    Returns:
        BatchRenameResult (wire form)
    """
    parsed = _parse_list(proposals, RenameProposal.from_dict, "proposals")
    result = execute_rename(parsed, ExecuteOptions.from_dict(options))
    return result.to_dict()


def _require(payload: Dict[str, Any], key: str) -> Any:
    if key not in payload:
        raise ValidationFailed(f"Missing field: {key}")
    return payload[key]


COMMANDS: Dict[str, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
    "scan_folder": lambda p: scan_folder_command(_require(p, "path"), p.get("options")),
    "generate_preview": lambda p: generate_preview_command(
        _require(p, "files"), _require(p, "templatePattern"), p.get("options")
    ),
    "execute_rename": lambda p: execute_rename_command(_require(p, "proposals"), p.get("options")),
}


def dispatch(command: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Route a command by name

    Errors are returned rather than raised: {"error": {...}}.
    """
    handler = COMMANDS.get(command)
    try:
        if handler is None:
            raise ValidationFailed(f"Unknown command: {command}")
        return handler(payload or {})
    except TidyError as e:
        logger.warning("Command %s failed: %s", command, e.message)
        return {"error": e.to_error_response()}
