"""
models_rename.py - Rename Proposal and Result Structures

Contains:
- RenameProposal: Planned rename/move of a single file
- RenamePreview: All proposals of one preview generation plus summaries
- FileRenameResult / BatchRenameResult: Execution outcomes

All structures serialize to the camelCase wire format with to_dict().
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from .models_fs import format_timestamp, parse_timestamp


class RenameStatus(Enum):
    """Status of a rename proposal"""
    READY = "ready"
    CONFLICT = "conflict"
    MISSING_DATA = "missing-data"  # Reserved for metadata-dependent templates
    NO_CHANGE = "no-change"
    INVALID_NAME = "invalid-name"


class FileActionType(Enum):
    """UI-facing classification of a proposal"""
    RENAME = "rename"
    MOVE = "move"
    NO_CHANGE = "no-change"
    CONFLICT = "conflict"
    ERROR = "error"


class ReorganizationMode(Enum):
    """Whether files stay in place or get relocated"""
    RENAME_ONLY = "rename-only"
    ORGANIZE = "organize"


class CaseStyle(Enum):
    """Case normalization style for filenames"""
    NONE = "none"
    LOWERCASE = "lowercase"
    UPPERCASE = "uppercase"
    CAPITALIZE = "capitalize"
    TITLE_CASE = "title-case"
    KEBAB_CASE = "kebab-case"
    SNAKE_CASE = "snake-case"
    CAMEL_CASE = "camel-case"
    PASCAL_CASE = "pascal-case"

    @classmethod
    def parse(cls, value: str) -> "CaseStyle":
        """Accept wire values as well as the spelled-out style names"""
        try:
            return cls(value)
        except ValueError:
            pass
        aliases = {
            "snake_case": cls.SNAKE_CASE,
            "camelcase": cls.CAMEL_CASE,
            "pascalcase": cls.PASCAL_CASE,
            "titlecase": cls.TITLE_CASE,
        }
        style = aliases.get(value.lower())
        if style is None:
            raise ValueError(f"Unknown case style: {value}")
        return style


class RenameOutcome(Enum):
    """Outcome of a single file rename"""
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"


# Issue codes
INVALID_NAME = "INVALID_NAME"
DUPLICATE_NAME = "DUPLICATE_NAME"
FILE_EXISTS = "FILE_EXISTS"

# Conflict types
CONFLICT_DUPLICATE_NAME = "duplicate-name"
CONFLICT_FILE_EXISTS = "file-exists"


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


@dataclass
class RenameIssue:
    """Issue found with a rename proposal"""
    code: str
    message: str
    field: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({"code": self.code, "message": self.message, "field": self.field})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RenameIssue":
        return cls(code=data["code"], message=data["message"], field=data.get("field"))


@dataclass
class FileConflict:
    """Conflict details of a proposal"""
    conflict_type: str
    message: str
    conflicting_proposal_id: Optional[str] = None   # Lookup key, duplicate-name only
    existing_path: Optional[str] = None             # file-exists only

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "type": self.conflict_type,
            "message": self.message,
            "conflictingFileId": self.conflicting_proposal_id,
            "existingFilePath": self.existing_path,
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FileConflict":
        return cls(
            conflict_type=data["type"],
            message=data["message"],
            conflicting_proposal_id=data.get("conflictingFileId"),
            existing_path=data.get("existingFilePath"),
        )


@dataclass
class RenameProposal:
    """A single file's planned rename/move"""
    id: str
    original_path: str
    original_name: str
    proposed_name: str
    proposed_path: str
    status: RenameStatus = RenameStatus.READY
    issues: List[RenameIssue] = field(default_factory=list)
    metadata_sources: Optional[List[str]] = None
    is_folder_move: bool = False
    destination_folder: Optional[str] = None
    action_type: FileActionType = FileActionType.RENAME
    conflict: Optional[FileConflict] = None

    @property
    def is_ready(self) -> bool:
        return self.status == RenameStatus.READY

    @property
    def has_change(self) -> bool:
        """Whether executing this proposal would touch the filesystem"""
        return self.original_name != self.proposed_name or self.is_folder_move

    def add_issue(self, code: str, message: str, field_name: Optional[str] = None) -> None:
        self.issues.append(RenameIssue(code=code, message=message, field=field_name))

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "id": self.id,
            "originalPath": self.original_path,
            "originalName": self.original_name,
            "proposedName": self.proposed_name,
            "proposedPath": self.proposed_path,
            "status": self.status.value,
            "issues": [issue.to_dict() for issue in self.issues],
            "metadataSources": list(self.metadata_sources) if self.metadata_sources else None,
            "isFolderMove": self.is_folder_move,
            "destinationFolder": self.destination_folder,
            "actionType": self.action_type.value,
            "conflict": self.conflict.to_dict() if self.conflict else None,
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RenameProposal":
        """Rebuild a proposal sent back by a client (possibly edited)"""
        conflict = data.get("conflict")
        return cls(
            id=data["id"],
            original_path=data["originalPath"],
            original_name=data["originalName"],
            proposed_name=data["proposedName"],
            proposed_path=data["proposedPath"],
            status=RenameStatus(data.get("status", RenameStatus.READY.value)),
            issues=[RenameIssue.from_dict(i) for i in data.get("issues", [])],
            metadata_sources=data.get("metadataSources"),
            is_folder_move=bool(data.get("isFolderMove", False)),
            destination_folder=data.get("destinationFolder"),
            action_type=FileActionType(data.get("actionType", FileActionType.RENAME.value)),
            conflict=FileConflict.from_dict(conflict) if conflict else None,
        )


@dataclass
class PreviewSummary:
    """Counts per proposal status"""
    total: int = 0
    ready: int = 0
    conflicts: int = 0
    missing_data: int = 0
    no_change: int = 0
    invalid_name: int = 0

    @classmethod
    def from_proposals(cls, proposals: List[RenameProposal]) -> "PreviewSummary":
        def count(status: RenameStatus) -> int:
            return sum(1 for p in proposals if p.status == status)

        return cls(
            total=len(proposals),
            ready=count(RenameStatus.READY),
            conflicts=count(RenameStatus.CONFLICT),
            missing_data=count(RenameStatus.MISSING_DATA),
            no_change=count(RenameStatus.NO_CHANGE),
            invalid_name=count(RenameStatus.INVALID_NAME),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "ready": self.ready,
            "conflicts": self.conflicts,
            "missingData": self.missing_data,
            "noChange": self.no_change,
            "invalidName": self.invalid_name,
        }


@dataclass
class PreviewActionSummary:
    """Counts per action type"""
    rename_count: int = 0
    move_count: int = 0
    no_change_count: int = 0
    conflict_count: int = 0
    error_count: int = 0

    @classmethod
    def from_proposals(cls, proposals: List[RenameProposal]) -> "PreviewActionSummary":
        def count(action: FileActionType) -> int:
            return sum(1 for p in proposals if p.action_type == action)

        return cls(
            rename_count=count(FileActionType.RENAME),
            move_count=count(FileActionType.MOVE),
            no_change_count=count(FileActionType.NO_CHANGE),
            conflict_count=count(FileActionType.CONFLICT),
            error_count=count(FileActionType.ERROR),
        )

    @property
    def total(self) -> int:
        return (self.rename_count + self.move_count + self.no_change_count
                + self.conflict_count + self.error_count)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "renameCount": self.rename_count,
            "moveCount": self.move_count,
            "noChangeCount": self.no_change_count,
            "conflictCount": self.conflict_count,
            "errorCount": self.error_count,
        }


@dataclass
class RenamePreview:
    """Complete rename preview result"""
    proposals: List[RenameProposal]
    generated_at: datetime
    template_used: str
    reorganization_mode: ReorganizationMode = ReorganizationMode.RENAME_ONLY

    # Summaries are derived from the proposals on every access
    @property
    def summary(self) -> PreviewSummary:
        return PreviewSummary.from_proposals(self.proposals)

    @property
    def action_summary(self) -> PreviewActionSummary:
        return PreviewActionSummary.from_proposals(self.proposals)

    def get(self, proposal_id: str) -> Optional[RenameProposal]:
        for proposal in self.proposals:
            if proposal.id == proposal_id:
                return proposal
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "proposals": [p.to_dict() for p in self.proposals],
            "summary": self.summary.to_dict(),
            "generatedAt": format_timestamp(self.generated_at),
            "templateUsed": self.template_used,
            "actionSummary": self.action_summary.to_dict(),
            "reorganizationMode": self.reorganization_mode.value,
        }


@dataclass
class FileRenameResult:
    """Result of renaming a single file"""
    proposal_id: str
    original_path: str
    original_name: str
    outcome: RenameOutcome
    new_path: Optional[str] = None
    new_name: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "proposalId": self.proposal_id,
            "originalPath": self.original_path,
            "originalName": self.original_name,
            "newPath": self.new_path,
            "newName": self.new_name,
            "outcome": self.outcome.value,
            "error": self.error,
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FileRenameResult":
        return cls(
            proposal_id=data["proposalId"],
            original_path=data["originalPath"],
            original_name=data["originalName"],
            outcome=RenameOutcome(data["outcome"]),
            new_path=data.get("newPath"),
            new_name=data.get("newName"),
            error=data.get("error"),
        )


@dataclass
class BatchRenameSummary:
    """Summary of batch rename results"""
    total: int = 0
    succeeded: int = 0
    failed: int = 0
    skipped: int = 0
    rolled_back: int = 0

    @classmethod
    def from_results(cls, results: List[FileRenameResult], rolled_back: int = 0) -> "BatchRenameSummary":
        def count(outcome: RenameOutcome) -> int:
            return sum(1 for r in results if r.outcome == outcome)

        return cls(
            total=len(results),
            succeeded=count(RenameOutcome.SUCCESS),
            failed=count(RenameOutcome.FAILED),
            skipped=count(RenameOutcome.SKIPPED),
            rolled_back=rolled_back,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "skipped": self.skipped,
            "rolledBack": self.rolled_back,
        }


@dataclass
class BatchRenameResult:
    """Complete result of a batch rename operation"""
    results: List[FileRenameResult]
    summary: BatchRenameSummary
    started_at: datetime
    completed_at: datetime
    duration_ms: int

    @property
    def success(self) -> bool:
        return self.summary.failed == 0

    @property
    def succeeded_results(self) -> List[FileRenameResult]:
        return [r for r in self.results if r.outcome == RenameOutcome.SUCCESS]

    @property
    def failed_results(self) -> List[FileRenameResult]:
        return [r for r in self.results if r.outcome == RenameOutcome.FAILED]

    def summary_text(self) -> str:
        """Generate summary"""
        lines = [
            f"Execution Result:",
            f"  - Success: {self.summary.succeeded}",
            f"  - Failed: {self.summary.failed}",
            f"  - Skipped: {self.summary.skipped}",
        ]
        if self.summary.rolled_back:
            lines.append(f"  - Rolled back: {self.summary.rolled_back}")
        failed = self.failed_results
        if failed:
            lines.append("Failure Details:")
            for r in failed[:10]:  # Show at most 10
                lines.append(f"  - {r.original_name}: {r.error}")
            if len(failed) > 10:
                lines.append(f"  ... and {len(failed) - 10} more failures")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "results": [r.to_dict() for r in self.results],
            "summary": self.summary.to_dict(),
            "startedAt": format_timestamp(self.started_at),
            "completedAt": format_timestamp(self.completed_at),
            "durationMs": self.duration_ms,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BatchRenameResult":
        results = [FileRenameResult.from_dict(r) for r in data.get("results", [])]
        rolled_back = data.get("summary", {}).get("rolledBack", 0)
        return cls(
            results=results,
            summary=BatchRenameSummary.from_results(results, rolled_back=rolled_back),
            started_at=parse_timestamp(data["startedAt"]),
            completed_at=parse_timestamp(data["completedAt"]),
            duration_ms=int(data.get("durationMs", 0)),
        )
