"""
tidy_gui - PySide6 Interface for Tidy Rename
"""

from .gui_entry import main

__all__ = ["main"]
