"""
rename_options.py - Preview and Execution Options

Contains:
- OrganizeOptions: settings of the "organize" reorganization mode
- PreviewOptions: options of generate_preview
- ExecuteOptions: options of execute_rename
- Settings: process-level settings read from the environment
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
import os

from .errors import PreviewFailed, ValidationFailed
from .models_rename import CaseStyle, ReorganizationMode
from .template_expand import DEFAULT_DATE_FORMAT


@dataclass
class OrganizeOptions:
    """Options for the organize mode"""
    folder_pattern: str
    destination_directory: Optional[str] = None
    preserve_context: bool = False  # Keep parent folders of the source
    context_depth: int = 1          # Levels kept (-1: all from the scan root)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OrganizeOptions":
        pattern = data.get("folderPattern")
        if not pattern:
            raise PreviewFailed("organizeOptions.folderPattern is required")
        try:
            depth = int(data.get("contextDepth", 1))
        except (TypeError, ValueError):
            raise PreviewFailed(f"Invalid contextDepth: {data.get('contextDepth')!r}")
        return cls(
            folder_pattern=pattern,
            destination_directory=data.get("destinationDirectory") or None,
            preserve_context=bool(data.get("preserveContext", False)),
            context_depth=depth,
        )


@dataclass
class PreviewOptions:
    """Options for generating a preview"""
    date_format: str = DEFAULT_DATE_FORMAT
    reorganization_mode: ReorganizationMode = ReorganizationMode.RENAME_ONLY
    organize_options: Optional[OrganizeOptions] = None
    case_style: CaseStyle = CaseStyle.NONE
    strip_existing_patterns: bool = False

    # Deprecated: equivalent to organize mode
    folder_pattern: Optional[str] = None
    base_directory: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "PreviewOptions":
        """
        Build options from the camelCase wire form

        Raises:
            PreviewFailed: unknown enum value or malformed organize options
        """
        if not data:
            return cls()

        try:
            mode = ReorganizationMode(data.get("reorganizationMode") or ReorganizationMode.RENAME_ONLY.value)
        except ValueError:
            raise PreviewFailed(f"Unknown reorganization mode: {data.get('reorganizationMode')!r}")

        try:
            case_style = CaseStyle.parse(data.get("caseStyle") or CaseStyle.NONE.value)
        except ValueError as e:
            raise PreviewFailed(str(e))

        organize = data.get("organizeOptions")
        return cls(
            date_format=data.get("dateFormat") or DEFAULT_DATE_FORMAT,
            reorganization_mode=mode,
            organize_options=OrganizeOptions.from_dict(organize) if organize else None,
            case_style=case_style,
            strip_existing_patterns=bool(data.get("stripExistingPatterns", False)),
            folder_pattern=data.get("folderPattern") or None,
            base_directory=data.get("baseDirectory") or None,
        )

    def effective_reorganization(self) -> Tuple[ReorganizationMode, Optional[OrganizeOptions]]:
        """
        Resolve the new API and the legacy folderPattern/baseDirectory pair

        Returns:
            (mode actually used, organize options or None for rename-only)
        """
        if self.reorganization_mode == ReorganizationMode.ORGANIZE and self.organize_options:
            return ReorganizationMode.ORGANIZE, self.organize_options

        if self.folder_pattern:
            return ReorganizationMode.ORGANIZE, OrganizeOptions(
                folder_pattern=self.folder_pattern,
                destination_directory=self.base_directory,
            )

        return ReorganizationMode.RENAME_ONLY, None


@dataclass
class ExecuteOptions:
    """Options for executing renames"""
    proposal_ids: Optional[List[str]] = None    # None: process all
    validate_paths: bool = False                # Security check before any rename
    all_or_nothing: bool = False                # Move back earlier renames on failure
    allowed_base: Optional[str] = None          # Base for validate_paths (default: source folder)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ExecuteOptions":
        if not data:
            return cls()
        ids = data.get("proposalIds")
        if ids is not None and not isinstance(ids, (list, tuple, set)):
            raise ValidationFailed("proposalIds must be a list of proposal ids")
        return cls(
            proposal_ids=[str(i) for i in ids] if ids is not None else None,
            validate_paths=bool(data.get("validatePaths", False)),
            all_or_nothing=bool(data.get("allOrNothing", False)),
            allowed_base=data.get("allowedBase") or None,
        )


@dataclass
class Settings:
    """Process-level settings"""
    log_level: str = "WARNING"
    history_dir: Path = field(default_factory=lambda: Path.home() / ".tidy-rename" / "history")

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "Settings":
        """Read TIDY_LOG_LEVEL and TIDY_HISTORY_DIR"""
        env = os.environ if environ is None else environ
        settings = cls()
        if env.get("TIDY_LOG_LEVEL"):
            settings.log_level = env["TIDY_LOG_LEVEL"].upper()
        if env.get("TIDY_HISTORY_DIR"):
            settings.history_dir = Path(env["TIDY_HISTORY_DIR"]).expanduser()
        return settings
