"""
cli_entry.py - CLI Entry Point

Supports:
- Command-line argument mode (scan / preview / apply / undo)
- Interactive mode (no subcommand)
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from tidy_core import (
    CaseStyle,
    ExecuteOptions,
    OrganizeOptions,
    PreviewOptions,
    RenameFailed,
    RenameProposal,
    ReorganizationMode,
    Settings,
    TidyError,
    apply_undo,
    configure_logging,
    execute_rename,
    generate_preview,
    load_result_log,
    save_result_log,
    scan_folder,
)
from tidy_core.history import list_result_logs, result_log_summary
from tidy_core.safety_checks import check_rename_op
from tidy_core.template_expand import DEFAULT_DATE_FORMAT

from .cli_display import print_error, print_files, print_preview, print_result
from .cli_interactive import interactive_mode

logger = logging.getLogger(__name__)


def _add_scan_args(parser: argparse.ArgumentParser):
    parser.add_argument("directory", type=str, help="Folder to scan")
    parser.add_argument("--recursive", "-r", action="store_true", help="Include subfolders")
    parser.add_argument("--ext", "-e", type=str, default="",
                        help="Comma-separated extensions to include (e.g., jpg,png)")
    parser.add_argument("--include-hidden", action="store_true", help="Include hidden files")
    parser.add_argument("--json", action="store_true", help="Print machine-readable JSON")


def _add_preview_args(parser: argparse.ArgumentParser):
    parser.add_argument("--template", "-t", type=str, required=True,
                        help="Filename template (e.g., \"{date}_{name}.{ext}\")")
    parser.add_argument("--date-format", type=str, default=DEFAULT_DATE_FORMAT,
                        help="Format of {date} (YYYY, MM, DD, ...)")
    parser.add_argument("--case", type=str, default=CaseStyle.NONE.value,
                        choices=[s.value for s in CaseStyle], help="Case style")
    parser.add_argument("--strip-patterns", action="store_true",
                        help="Strip existing dates and counters from names first")
    parser.add_argument("--organize", type=str, default=None, metavar="FOLDER_PATTERN",
                        help="Move files into folders (e.g., \"{year}/{month}\")")
    parser.add_argument("--dest", type=str, default=None,
                        help="Destination base folder for --organize")
    parser.add_argument("--preserve-context", action="store_true",
                        help="Keep source parent folders under the organize pattern")
    parser.add_argument("--context-depth", type=int, default=1,
                        help="Parent folder levels kept (-1 for all)")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser"""
    parser = argparse.ArgumentParser(
        prog="tidy-rename",
        description="Template-based batch rename tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode
  tidy-rename --cli

  # List files
  tidy-rename --cli scan ./photos --recursive --ext jpg,png

  # Preview a template rename
  tidy-rename --cli preview ./photos -t "{date}_{name}.{ext}" --strip-patterns

  # Rename and sort into year/month folders
  tidy-rename --cli apply ./photos -t "{name}.{ext}" --organize "{year}/{month}" --yes

  # List result logs
  tidy-rename --cli history

  # Undo the last batch
  tidy-rename --cli undo
"""
    )
    parser.add_argument("--log-level", type=str, default=None,
                        help="Log level (default: TIDY_LOG_LEVEL or WARNING)")

    subparsers = parser.add_subparsers(dest="command", help="Subcommands")

    # scan subcommand
    scan_parser = subparsers.add_parser("scan", help="List files in a folder")
    _add_scan_args(scan_parser)

    # preview subcommand
    preview_parser = subparsers.add_parser("preview", help="Show proposed names without renaming")
    _add_scan_args(preview_parser)
    _add_preview_args(preview_parser)

    # apply subcommand
    apply_parser = subparsers.add_parser("apply", help="Preview, confirm and rename")
    _add_scan_args(apply_parser)
    _add_preview_args(apply_parser)
    apply_parser.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")
    apply_parser.add_argument("--validate-paths", action="store_true",
                              help="Reject destinations escaping the allowed base before renaming")
    apply_parser.add_argument("--all-or-nothing", action="store_true",
                              help="Move renamed files back if any rename fails")
    apply_parser.add_argument("--log-dir", type=str, default=None,
                              help="Result log folder (default: TIDY_HISTORY_DIR)")
    apply_parser.add_argument("--no-log", action="store_true", help="Do not write a result log")

    # undo subcommand
    undo_parser = subparsers.add_parser("undo", help="Reverse a previous batch")
    undo_parser.add_argument("log_file", type=str, nargs="?", default=None,
                             help="Result log to undo (default: latest)")
    undo_parser.add_argument("--log-dir", type=str, default=None,
                             help="Result log folder (default: TIDY_HISTORY_DIR)")
    undo_parser.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")

    # history subcommand
    history_parser = subparsers.add_parser("history", help="List result logs, newest first")
    history_parser.add_argument("--log-dir", type=str, default=None,
                                help="Result log folder (default: TIDY_HISTORY_DIR)")
    history_parser.add_argument("--json", action="store_true", help="Print machine-readable JSON")

    return parser


def _extensions(args) -> Optional[List[str]]:
    exts = [e.strip() for e in args.ext.split(",") if e.strip()]
    return exts or None


def _scan(args):
    return scan_folder(
        args.directory,
        recursive=args.recursive,
        extensions=_extensions(args),
        include_hidden=args.include_hidden,
    )


def build_preview_options(args) -> PreviewOptions:
    """Map parsed arguments to PreviewOptions"""
    options = PreviewOptions(
        date_format=args.date_format,
        case_style=CaseStyle.parse(args.case),
        strip_existing_patterns=args.strip_patterns,
    )
    if args.organize:
        options.reorganization_mode = ReorganizationMode.ORGANIZE
        options.organize_options = OrganizeOptions(
            folder_pattern=args.organize,
            destination_directory=str(Path(args.dest).resolve()) if args.dest else None,
            preserve_context=args.preserve_context,
            context_depth=args.context_depth,
        )
    return options


def _log_dir(args) -> Path:
    if args.log_dir:
        return Path(args.log_dir)
    return Settings.from_env().history_dir


def _dump(data):
    print(json.dumps(data, ensure_ascii=False, indent=2))


def preflight_problems(proposals: List[RenameProposal]) -> Dict[str, str]:
    """
    Check ready proposals against the filesystem right before renaming

    Args:
        proposals: Proposals of a preview

    Returns:
        Proposal id -> reason, for proposals that cannot run
    """
    problems: Dict[str, str] = {}
    for p in proposals:
        if not p.is_ready:
            continue
        ok, reason = check_rename_op(Path(p.original_path), Path(p.proposed_path))
        if not ok:
            problems[p.id] = reason
    return problems


def cmd_scan(args):
    """Handle scan command"""
    files = _scan(args)
    if args.json:
        _dump([f.to_dict() for f in files])
        return 0

    if not files:
        print("No matching files found")
        return 0

    print(f"Found {len(files)} files in {args.directory}:")
    print_files(files)
    return 0


def cmd_preview(args):
    """Handle preview command"""
    files = _scan(args)
    preview = generate_preview(files, args.template, build_preview_options(args))

    if args.json:
        _dump(preview.to_dict())
        return 0

    if not files:
        print("No matching files found")
        return 0

    print_preview(preview)
    return 0


def cmd_apply(args):
    """Handle apply command"""
    files = _scan(args)
    if not files:
        print("No matching files found")
        return 0

    preview = generate_preview(files, args.template, build_preview_options(args))
    if not args.json:
        print_preview(preview)

    if preview.summary.ready == 0:
        if not args.json:
            print("No files need renaming")
        else:
            _dump(preview.to_dict())
        return 0

    problems = preflight_problems(preview.proposals)
    if problems and not args.json:
        print(f"\nPre-flight check: {len(problems)} files will be skipped")
        for p in preview.proposals:
            if p.id in problems:
                print(f"  - {p.original_name}: {problems[p.id]}")

    if not args.yes:
        if args.json:
            print("Error: --json with apply requires --yes", file=sys.stderr)
            return 1
        confirm = input(f"\nRename {preview.summary.ready} files? (y/N): ").strip().lower()
        if confirm != 'y':
            print("Cancelled")
            return 0

    allowed_base = None
    if args.validate_paths and args.organize and args.dest:
        allowed_base = str(Path(args.dest).resolve())

    proposal_ids = None
    if problems:
        proposal_ids = [p.id for p in preview.proposals if p.is_ready and p.id not in problems]

    options = ExecuteOptions(
        proposal_ids=proposal_ids,
        validate_paths=args.validate_paths,
        all_or_nothing=args.all_or_nothing,
        allowed_base=allowed_base,
    )

    if not args.json:
        print("\nExecuting...")
    result = execute_rename(preview.proposals, options)

    if not args.no_log and result.summary.succeeded:
        log_file = save_result_log(result, _log_dir(args))
        if not args.json:
            print(f"Result log: {log_file}")

    if args.json:
        _dump(result.to_dict())
    else:
        print_result(result)

    if options.all_or_nothing and not result.success and not args.json:
        raise RenameFailed(f"batch rolled back, {result.summary.rolled_back} files restored")

    return 0 if result.success else 1


def cmd_undo(args):
    """Handle undo command"""
    if args.log_file:
        log_file = Path(args.log_file)
    else:
        logs = list_result_logs(_log_dir(args))
        if not logs:
            print("No result logs found")
            return 0
        log_file = logs[0]

    result = load_result_log(log_file)
    count = result.summary.succeeded
    print(f"Log: {log_file} ({count} renamed files)")
    if count == 0:
        print("Nothing to undo")
        return 0

    if not args.yes:
        confirm = input("Move these files back? (y/N): ").strip().lower()
        if confirm != 'y':
            print("Cancelled")
            return 0

    restored, errors = apply_undo(result)
    print(f"Restored: {restored}")
    for err in errors:
        print(f"  - {err}")
    return 0 if not errors else 1


def cmd_history(args):
    """Handle history command"""
    summaries = []
    for log_file in list_result_logs(_log_dir(args)):
        summary = result_log_summary(log_file)
        if summary is not None:
            summaries.append(summary)

    if args.json:
        _dump(summaries)
        return 0

    if not summaries:
        print("No result logs found")
        return 0

    for s in summaries:
        counts = s["summary"]
        print(
            f"  {s['startedAt']}  renamed: {counts['succeeded']}  failed: {counts['failed']}  "
            f"skipped: {counts['skipped']}  {s['path']}"
        )
    return 0


COMMANDS = {
    "scan": cmd_scan,
    "preview": cmd_preview,
    "apply": cmd_apply,
    "undo": cmd_undo,
    "history": cmd_history,
}


def main(argv: Optional[List[str]] = None):
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    if args.command is None:
        # No subcommand, enter interactive mode
        return interactive_mode()

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except TidyError as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print_error(e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
