"""
cli_interactive.py - Interactive CLI

Provides a menu-style interactive interface
"""

import os
from pathlib import Path
from typing import List, Optional

from tidy_core import (
    CaseStyle,
    OrganizeOptions,
    PreviewOptions,
    ReorganizationMode,
    Settings,
    TidyError,
    apply_undo,
    execute_rename,
    generate_preview,
    list_extensions,
    load_result_log,
    save_result_log,
    scan_folder,
)
from tidy_core.history import list_result_logs

from .cli_display import print_error, print_files, print_header, print_preview, print_result


def clear_screen():
    """Clear screen"""
    os.system('cls' if os.name == 'nt' else 'clear')


def input_directory(prompt: str = "Please enter directory path") -> Optional[Path]:
    """Input and validate directory"""
    while True:
        path_str = input(f"{prompt} (q to return): ").strip()
        if path_str.lower() == 'q':
            return None

        path = Path(path_str).expanduser().resolve()
        if path.is_dir():
            return path
        else:
            print(f"Error: Directory does not exist: {path}")


def input_choice(prompt: str, choices: List[str], default: Optional[str] = None) -> Optional[str]:
    """Input choice"""
    choices_str = "/".join(choices)
    default_str = f" [{default}]" if default else ""

    while True:
        value = input(f"{prompt} ({choices_str}){default_str}: ").strip()
        if not value and default:
            return default
        if value.lower() == 'q':
            return None
        if value in choices:
            return value
        print(f"Invalid choice, please enter: {choices_str}")


def input_bool(prompt: str, default: bool = False) -> bool:
    """Input boolean value"""
    default_str = "Y/n" if default else "y/N"
    value = input(f"{prompt} ({default_str}): ").strip().lower()
    if not value:
        return default
    return value == 'y'


def input_files(directory: Path):
    """Ask for scan settings and scan"""
    recursive = input_bool("Include subfolders", default=False)

    extensions = list_extensions(directory, recursive=recursive)
    if extensions:
        print(f"\nAvailable extensions: {', '.join(extensions)}")
    ext_str = input("Extensions to include (comma-separated, empty for all): ").strip()
    wanted = [e.strip() for e in ext_str.split(",") if e.strip()] or None

    print(f"\nScanning {directory} ...")
    return scan_folder(directory, recursive=recursive, extensions=wanted)


def input_preview_options() -> Optional[PreviewOptions]:
    """Ask for template-independent preview options"""
    date_format = input("Date format [YYYY-MM-DD]: ").strip() or "YYYY-MM-DD"

    styles = [s.value for s in CaseStyle]
    print(f"\nCase styles: {', '.join(styles)}")
    style = input_choice("Case style", styles, CaseStyle.NONE.value)
    if style is None:
        return None

    strip = input_bool("Strip existing dates and counters", default=False)
    return PreviewOptions(
        date_format=date_format,
        case_style=CaseStyle(style),
        strip_existing_patterns=strip,
    )


def run_preview_and_apply(files, template: str, options: PreviewOptions):
    """Show the preview, confirm, execute and log"""
    print("\nGenerating preview...")
    preview = generate_preview(files, template, options)
    print()
    print_preview(preview, limit=15)

    if preview.summary.ready == 0:
        print("No files need renaming")
        input("Press Enter to return...")
        return

    print()
    if not input_bool(f"Rename {preview.summary.ready} files", default=False):
        print("Cancelled")
        input("Press Enter to return...")
        return

    print("\nExecuting...")
    result = execute_rename(preview.proposals)
    print()
    print_result(result)

    if result.summary.succeeded:
        log_file = save_result_log(result, Settings.from_env().history_dir)
        print(f"Result log: {log_file}")

    input("\nPress Enter to return...")


def menu_template_rename():
    """Template rename menu"""
    print_header("Template Rename")

    directory = input_directory("Please enter target directory")
    if directory is None:
        return

    files = input_files(directory)
    if not files:
        print("No matching files found")
        input("Press Enter to return...")
        return
    print(f"Found {len(files)} files")

    print("\nPlaceholders: {name} {ext} {date} {date:FORMAT} {year} {month} {day}")
    template = input("Template [{date}_{name}.{ext}]: ").strip() or "{date}_{name}.{ext}"

    options = input_preview_options()
    if options is None:
        return

    run_preview_and_apply(files, template, options)


def menu_organize():
    """Organize into folders menu"""
    print_header("Organize Into Folders")

    directory = input_directory("Please enter source directory")
    if directory is None:
        return

    files = input_files(directory)
    if not files:
        print("No matching files found")
        input("Press Enter to return...")
        return
    print(f"Found {len(files)} files")

    print("\nFolder placeholders: {year} {month} {day} {ext} {category}")
    pattern = input("Folder pattern [{year}/{month}]: ").strip() or "{year}/{month}"
    dest = input("Destination folder (empty: next to each file): ").strip()
    template = input("Filename template [{name}.{ext}]: ").strip() or "{name}.{ext}"

    options = input_preview_options()
    if options is None:
        return

    options.reorganization_mode = ReorganizationMode.ORGANIZE
    options.organize_options = OrganizeOptions(
        folder_pattern=pattern,
        destination_directory=str(Path(dest).expanduser().resolve()) if dest else None,
    )
    run_preview_and_apply(files, template, options)


def menu_scan_only():
    """Scan only menu"""
    print_header("Scan Files")

    directory = input_directory("Please enter directory")
    if directory is None:
        return

    files = input_files(directory)
    if not files:
        print("No matching files found")
    else:
        print(f"\nFound {len(files)} files:")
        print_files(files)

    input("\nPress Enter to return...")


def menu_undo():
    """Undo last batch menu"""
    print_header("Undo Last Batch")

    logs = list_result_logs(Settings.from_env().history_dir)
    if not logs:
        print("No result logs found")
        input("Press Enter to return...")
        return

    result = load_result_log(logs[0])
    print(f"Latest log: {logs[0].name}")
    for r in result.succeeded_results[:15]:
        print(f"  {r.new_name:<40} -> {r.original_name}")

    if not result.succeeded_results:
        print("Nothing to undo")
    elif input_bool("Move these files back", default=False):
        restored, errors = apply_undo(result)
        print(f"Restored: {restored}")
        for err in errors:
            print(f"  - {err}")
    else:
        print("Cancelled")

    input("\nPress Enter to return...")


def interactive_mode() -> int:
    """Interactive mode main loop"""
    menus = {
        '1': menu_scan_only,
        '2': menu_template_rename,
        '3': menu_organize,
        '4': menu_undo,
    }
    while True:
        clear_screen()
        print_header("Tidy Rename")

        print("Please select function:")
        print()
        print("  1. Scan files")
        print("  2. Template rename")
        print("  3. Organize into folders")
        print("  4. Undo last batch")
        print()
        print("  q. Exit")
        print()

        choice = input("Please select (1/2/3/4/q): ").strip().lower()

        if choice == 'q':
            print("Goodbye!")
            return 0

        menu = menus.get(choice)
        if menu is None:
            print("Invalid choice")
            input("Press Enter to continue...")
            continue

        try:
            menu()
        except TidyError as e:
            print_error(e)
            input("Press Enter to continue...")
