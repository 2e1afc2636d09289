"""
tidy_cli - Command Line Interface for Tidy Rename
"""

from .cli_entry import main
from .cli_interactive import interactive_mode

__all__ = ["main", "interactive_mode"]
