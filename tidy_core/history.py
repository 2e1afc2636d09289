"""
history.py - Result Log Module

Responsibilities:
- Persist one JSON log per executed batch
- Read logs back and derive the operations needed to undo a batch
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union
import json
import logging
import os

from .errors import IoError
from .models_fs import format_timestamp
from .models_rename import BatchRenameResult, RenameOutcome

logger = logging.getLogger(__name__)

LOG_PREFIX = "rename_result_"

PathLike = Union[str, Path]


def save_result_log(result: BatchRenameResult, log_dir: PathLike) -> Path:
    """
    Save execution result log

    Args:
        result: Batch result
        log_dir: Log directory (created if missing)

    Returns:
        Path of the written log file
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    log_file = log_dir / f"{LOG_PREFIX}{timestamp}.json"

    with open(log_file, "w", encoding="utf-8") as f:
        json.dump(result.to_dict(), f, ensure_ascii=False, indent=2)

    logger.info("Result log saved: %s", log_file)
    return log_file


def load_result_log(path: PathLike) -> BatchRenameResult:
    """
    Load a result log written by save_result_log

    Raises:
        IoError: file cannot be read or is not a result log
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return BatchRenameResult.from_dict(data)
    except OSError as e:
        raise IoError.from_os_error(e)
    except (ValueError, KeyError, TypeError) as e:
        raise IoError(f"Invalid result log {path}: {e}")


def list_result_logs(log_dir: PathLike) -> List[Path]:
    """Result logs in a directory, newest first"""
    log_dir = Path(log_dir)
    if not log_dir.is_dir():
        return []
    return sorted(log_dir.glob(f"{LOG_PREFIX}*.json"), reverse=True)


def undo_operations(result: BatchRenameResult) -> List[Tuple[str, str]]:
    """
    Operations that reverse a batch

    Args:
        result: Executed batch

    Returns:
        (current path, original path) pairs, last rename first
    """
    ops: List[Tuple[str, str]] = []
    for r in reversed(result.results):
        if r.outcome == RenameOutcome.SUCCESS and r.new_path:
            ops.append((r.new_path, r.original_path))
    return ops


def apply_undo(result: BatchRenameResult) -> Tuple[int, List[str]]:
    """
    Move the files of a batch back to their original paths

    Files that were moved elsewhere since, or whose original path is taken
    again, are reported and left alone.

    Returns:
        (restored count, error messages)
    """
    restored = 0
    errors: List[str] = []
    for current, original in undo_operations(result):
        if not os.path.exists(current):
            errors.append(f"File not found: {current}")
            continue
        if os.path.exists(original):
            errors.append(f"Original path is taken: {original}")
            continue
        try:
            os.makedirs(os.path.dirname(original) or ".", exist_ok=True)
            os.rename(current, original)
        except OSError as e:
            errors.append(f"Failed to restore {current}: {e}")
            continue
        restored += 1

    logger.info("Undo finished: restored=%d errors=%d", restored, len(errors))
    return restored, errors


def result_log_summary(path: PathLike) -> Optional[Dict[str, Any]]:
    """Short description of a log for listings (None if unreadable)"""
    try:
        result = load_result_log(path)
    except IoError as e:
        logger.warning("Skipping unreadable log %s: %s", path, e)
        return None
    return {
        "path": str(path),
        "startedAt": format_timestamp(result.started_at),
        "summary": result.summary.to_dict(),
    }
