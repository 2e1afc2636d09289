"""
detect_conflicts.py - Proposal Validation and Conflict Detection

Evaluation order for every proposal (initial status: ready):
1. no change               -> no-change
2. invalid proposed name   -> invalid-name
3. batch duplicates        -> conflict (duplicate-name)
4. destination on disk     -> conflict (file-exists)

Steps 3 and 4 only touch proposals that are still ready.
"""

from collections import defaultdict
from pathlib import Path
from typing import Dict, List
import logging
import os

from .models_fs import normalize_for_comparison
from .models_rename import (
    CONFLICT_DUPLICATE_NAME,
    CONFLICT_FILE_EXISTS,
    DUPLICATE_NAME,
    FILE_EXISTS,
    INVALID_NAME,
    FileActionType,
    FileConflict,
    PreviewActionSummary,
    PreviewSummary,
    RenameProposal,
    RenameStatus,
)
from .sanitize_name import is_valid_filename

logger = logging.getLogger(__name__)


def _same_file(a: str, b: str) -> bool:
    """Whether two paths point at the same file (case-only rename)"""
    try:
        return os.path.samefile(a, b)
    except OSError:
        return False


class ConflictDetector:
    """Conflict detector"""

    def __init__(self, case_insensitive: bool = True):
        """
        Initialize conflict detector

        Args:
            case_insensitive: Whether destinations differing only in case collide
        """
        self.case_insensitive = case_insensitive

    def _normalize(self, path: str) -> str:
        return normalize_for_comparison(path, self.case_insensitive)

    def check_no_change(self, proposal: RenameProposal) -> bool:
        """Mark the proposal no-change when neither name nor folder changes"""
        if proposal.proposed_name == proposal.original_name and not proposal.is_folder_move:
            proposal.status = RenameStatus.NO_CHANGE
            proposal.action_type = FileActionType.NO_CHANGE
            return True
        return False

    def check_valid_name(self, proposal: RenameProposal) -> bool:
        """Re-check the proposed name; mark invalid-name on failure"""
        valid, reason = is_valid_filename(proposal.proposed_name)
        if valid:
            return True
        proposal.add_issue(INVALID_NAME, f"Proposed filename is invalid: {reason}")
        proposal.status = RenameStatus.INVALID_NAME
        proposal.action_type = FileActionType.ERROR
        return False

    def evaluate(self, proposal: RenameProposal) -> RenameStatus:
        """Run the per-proposal checks (steps 1 and 2)"""
        proposal.action_type = FileActionType.MOVE if proposal.is_folder_move else FileActionType.RENAME
        proposal.status = RenameStatus.READY
        self.check_no_change(proposal)
        self.check_valid_name(proposal)
        return proposal.status

    def mark_duplicates(self, proposals: List[RenameProposal]) -> int:
        """
        Mark ready proposals that share a destination with another proposal

        Args:
            proposals: All proposals of the batch

        Returns:
            Number of proposals marked
        """
        # key: normalized destination, value: proposals in list order
        groups: Dict[str, List[RenameProposal]] = defaultdict(list)
        for p in proposals:
            groups[self._normalize(p.proposed_path)].append(p)

        marked = 0
        for path_key, members in groups.items():
            if len(members) < 2:
                continue
            for idx, p in enumerate(members):
                if p.status != RenameStatus.READY:
                    continue
                other = members[0] if idx > 0 else members[1]
                p.status = RenameStatus.CONFLICT
                p.action_type = FileActionType.CONFLICT
                p.add_issue(DUPLICATE_NAME, f"Another file would have the same name ({path_key})")
                p.conflict = FileConflict(
                    conflict_type=CONFLICT_DUPLICATE_NAME,
                    message="Another file in this batch would have the same name",
                    conflicting_proposal_id=other.id,
                )
                marked += 1
        return marked

    def mark_existing(self, proposals: List[RenameProposal]) -> int:
        """
        Mark ready proposals whose destination already exists on disk

        Args:
            proposals: All proposals of the batch

        Returns:
            Number of proposals marked
        """
        marked = 0
        for p in proposals:
            if p.status != RenameStatus.READY:
                continue
            if p.proposed_path == p.original_path or not Path(p.proposed_path).exists():
                continue
            if _same_file(p.proposed_path, p.original_path):
                continue
            p.status = RenameStatus.CONFLICT
            p.action_type = FileActionType.CONFLICT
            p.add_issue(FILE_EXISTS, "A file with this name already exists")
            p.conflict = FileConflict(
                conflict_type=CONFLICT_FILE_EXISTS,
                message="A file already exists at the proposed path",
                existing_path=p.proposed_path,
            )
            marked += 1
        return marked

    def run(self, proposals: List[RenameProposal]) -> List[RenameProposal]:
        """Run all checks in order"""
        for p in proposals:
            self.evaluate(p)
        duplicates = self.mark_duplicates(proposals)
        existing = self.mark_existing(proposals)
        if duplicates or existing:
            logger.info("Conflicts detected: %d duplicate-name, %d file-exists", duplicates, existing)
        return proposals


def summarize(proposals: List[RenameProposal]) -> PreviewSummary:
    """Counts per status"""
    return PreviewSummary.from_proposals(proposals)


def summarize_actions(proposals: List[RenameProposal]) -> PreviewActionSummary:
    """Counts per action type"""
    return PreviewActionSummary.from_proposals(proposals)
