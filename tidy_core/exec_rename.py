"""
exec_rename.py - Rename Execution Module

Responsibilities:
- Apply selected proposals to the filesystem, strictly in list order
- Isolate failures to the file that caused them
- Optional security pre-flight and all-or-nothing rollback
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, List, Optional, Set
import logging
import os
import shutil
import time

from .models_rename import (
    BatchRenameResult,
    BatchRenameSummary,
    FileRenameResult,
    RenameOutcome,
    RenameProposal,
)
from .rename_options import ExecuteOptions
from .safety_checks import check_rename_destination

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]


def _result(
    proposal: RenameProposal,
    outcome: RenameOutcome,
    error: Optional[str] = None,
) -> FileRenameResult:
    result = FileRenameResult(
        proposal_id=proposal.id,
        original_path=proposal.original_path,
        original_name=proposal.original_name,
        outcome=outcome,
        error=error,
    )
    if outcome == RenameOutcome.SUCCESS:
        result.new_path = proposal.proposed_path
        result.new_name = proposal.proposed_name
    return result


def _skip_reason(proposal: RenameProposal, selected: Optional[Set[str]]) -> Optional[str]:
    """Why a proposal is not executed (None: it is executed)"""
    if selected is not None and proposal.id not in selected:
        return "Not selected"
    if not proposal.is_ready:
        return f"Status: {proposal.status.value}"
    if not proposal.has_change:
        return "No change needed"
    return None


def _same_file(a: str, b: str) -> bool:
    try:
        return os.path.samefile(a, b)
    except OSError:
        return False


def _apply_one(proposal: RenameProposal) -> Optional[str]:
    """
    Rename/move a single file

    Returns:
        Error message, or None on success
    """
    src, dst = proposal.original_path, proposal.proposed_path

    if proposal.is_folder_move:
        parent = Path(dst).parent
        if not parent.is_dir():
            try:
                parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                return f"Failed to create directory: {e}"

    if os.path.lexists(dst) and dst != src and not _same_file(src, dst):
        return f"Destination already exists: {dst}"

    try:
        if proposal.is_folder_move:
            # Moves may cross filesystems
            shutil.move(src, dst)
        else:
            os.rename(src, dst)
    except OSError as e:
        return str(e)
    return None


def _rollback(
    proposals: List[RenameProposal],
    done: List[int],
    results: List[Optional[FileRenameResult]],
) -> int:
    """Move already renamed files back, newest first (done holds list indices)"""
    rolled_back = 0
    for idx in reversed(done):
        proposal = proposals[idx]
        try:
            if proposal.is_folder_move:
                shutil.move(proposal.proposed_path, proposal.original_path)
            else:
                os.rename(proposal.proposed_path, proposal.original_path)
        except OSError as e:
            logger.error("Rollback failed for %s: %s", proposal.proposed_path, e)
            results[idx].error = f"Rollback failed: {e}"
            continue
        results[idx] = _result(proposal, RenameOutcome.SKIPPED, "Rolled back after batch failure")
        rolled_back += 1
    return rolled_back


def execute_rename(
    proposals: List[RenameProposal],
    options: Optional[ExecuteOptions] = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> BatchRenameResult:
    """
    Execute a batch of rename proposals

    Every proposal appears exactly once in the result, in list order.
    Execution is not transactional unless options.all_or_nothing is set.

    Args:
        proposals: Proposals as returned by generate_preview (possibly edited)
        options: Execution options
        progress_callback: Progress callback (current, total, message)

    Returns:
        Batch result
    """
    if options is None:
        options = ExecuteOptions()

    started_at = datetime.now(timezone.utc)
    clock = time.monotonic()

    selected = set(options.proposal_ids) if options.proposal_ids is not None else None
    results: List[Optional[FileRenameResult]] = [None] * len(proposals)
    to_run: List[int] = []

    for i, p in enumerate(proposals):
        reason = _skip_reason(p, selected)
        if reason is not None:
            logger.debug("Skip %s: %s", p.original_path, reason)
            results[i] = _result(p, RenameOutcome.SKIPPED, reason)
        else:
            to_run.append(i)

    # Security pre-flight, before anything is touched
    if options.validate_paths:
        for i in list(to_run):
            p = proposals[i]
            ok, error = check_rename_destination(p.original_path, p.proposed_path, options.allowed_base)
            if not ok:
                logger.warning("Security check failed for %s: %s", p.original_path, error)
                results[i] = _result(p, RenameOutcome.FAILED, f"Security check failed: {error}")
                to_run.remove(i)

    aborted = options.all_or_nothing and any(
        r is not None and r.outcome == RenameOutcome.FAILED for r in results
    )

    done: List[int] = []
    rolled_back = 0
    total = len(to_run)
    for n, i in enumerate(to_run):
        p = proposals[i]
        if aborted:
            results[i] = _result(p, RenameOutcome.SKIPPED, "Skipped after batch failure")
            continue

        if progress_callback:
            progress_callback(n + 1, total, f"{p.original_name} -> {p.proposed_name}")

        error = _apply_one(p)
        if error is None:
            results[i] = _result(p, RenameOutcome.SUCCESS)
            done.append(i)
            continue

        logger.warning("Rename failed for %s: %s", p.original_path, error)
        results[i] = _result(p, RenameOutcome.FAILED, error)
        if options.all_or_nothing:
            aborted = True
            rolled_back = _rollback(proposals, done, results)

    final: List[FileRenameResult] = [r for r in results if r is not None]
    summary = BatchRenameSummary.from_results(final, rolled_back=rolled_back)
    completed_at = datetime.now(timezone.utc)
    duration_ms = int((time.monotonic() - clock) * 1000)

    logger.info(
        "Batch finished: total=%d succeeded=%d failed=%d skipped=%d rolled_back=%d (%d ms)",
        summary.total, summary.succeeded, summary.failed, summary.skipped,
        summary.rolled_back, duration_ms,
    )

    return BatchRenameResult(
        results=final,
        summary=summary,
        started_at=started_at,
        completed_at=completed_at,
        duration_ms=duration_ms,
    )
