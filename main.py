#!/usr/bin/env python3
"""
Tidy Rename - Main Entry

Supports:
- GUI mode (default startup)
- CLI mode (--cli or -c parameter)

Usage:
    python main.py                              # GUI mode (default)
    python main.py --cli                        # CLI interactive mode
    python main.py -c scan ./dir                # CLI command mode
    python main.py -c preview ./dir -t "{date}_{name}.{ext}"
    python main.py -c apply ./dir -t "{name}.{ext}" --organize "{year}/{month}"
    python main.py -c undo
"""

import sys
from typing import List, Optional


def main(argv: Optional[List[str]] = None):
    """Main entry point"""
    if argv is None:
        argv = sys.argv[1:]

    # Check if CLI should be started
    if "--cli" in argv or "-c" in argv:
        # Remove --cli parameter
        argv = [arg for arg in argv if arg not in ("--cli", "-c")]

        # CLI mode
        from tidy_cli import main as cli_main
        return cli_main(argv)

    # Default to starting GUI
    try:
        from tidy_gui import main as gui_main
    except ImportError as e:
        print(f"Error: Unable to start GUI, please ensure PySide6 is installed")
        print(f"Detailed error: {e}")
        print("\nInstall command: pip install PySide6")
        print("\nTo use CLI mode, run:")
        print("    python main.py --cli")
        print("or  python main.py -c")
        return 1
    return gui_main()


if __name__ == "__main__":
    sys.exit(main())
