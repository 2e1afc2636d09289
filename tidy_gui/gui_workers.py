"""
gui_workers.py - GUI Worker Threads

Runs the synchronous engine off the UI thread and reports through signals
"""

from pathlib import Path
from typing import List, Optional

from PySide6.QtCore import QThread, Signal, QObject

from tidy_core import (
    ExecuteOptions,
    FileDescriptor,
    PreviewOptions,
    RenameProposal,
    TidyError,
    execute_rename,
    generate_preview,
    save_result_log,
    scan_folder,
)


class ScanWorker(QThread):
    """Folder scanning worker thread"""

    # Signals
    progress = Signal(str)          # Progress message
    finished = Signal(list)         # Complete, returns FileDescriptor list
    error = Signal(str)             # Error message

    def __init__(
        self,
        directory: Path,
        recursive: bool = False,
        extensions: Optional[List[str]] = None,
        include_hidden: bool = False,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.directory = directory
        self.recursive = recursive
        self.extensions = extensions
        self.include_hidden = include_hidden
        self._cancelled = False

    def cancel(self):
        """Cancel scan"""
        self._cancelled = True

    def run(self):
        try:
            def progress_callback(count: int, name: str):
                if self._cancelled:
                    raise InterruptedError("Scan cancelled")
                self.progress.emit(f"{count}: {name}")

            files = scan_folder(
                self.directory,
                recursive=self.recursive,
                extensions=self.extensions,
                include_hidden=self.include_hidden,
                progress_callback=progress_callback,
            )

            if not self._cancelled:
                self.finished.emit(files)
        except InterruptedError:
            self.finished.emit([])
        except TidyError as e:
            self.error.emit(e.message)
        except Exception as e:
            self.error.emit(str(e))


class PreviewWorker(QThread):
    """Rename preview generation worker thread"""

    # Signals
    progress = Signal(str)              # Progress message
    finished = Signal(object)           # RenamePreview
    error = Signal(str)                 # Error message

    def __init__(
        self,
        files: List[FileDescriptor],
        template_pattern: str,
        options: Optional[PreviewOptions] = None,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.files = files
        self.template_pattern = template_pattern
        self.options = options or PreviewOptions()

    def run(self):
        try:
            self.progress.emit("Generating preview...")
            preview = generate_preview(self.files, self.template_pattern, self.options)
            self.finished.emit(preview)
        except TidyError as e:
            self.error.emit(e.message)
        except Exception as e:
            self.error.emit(str(e))


class RenameWorker(QThread):
    """Rename execution worker thread"""

    # Signals
    progress = Signal(int, int, str)    # current, total, message
    finished = Signal(object)           # BatchRenameResult
    error = Signal(str)                 # Error message

    def __init__(
        self,
        proposals: List[RenameProposal],
        options: Optional[ExecuteOptions] = None,
        log_dir: Optional[Path] = None,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.proposals = proposals
        self.options = options or ExecuteOptions()
        self.log_dir = log_dir
        self.log_file: Optional[Path] = None

    def run(self):
        try:
            def progress_callback(current: int, total: int, msg: str):
                self.progress.emit(current, total, msg)

            result = execute_rename(
                self.proposals,
                self.options,
                progress_callback=progress_callback,
            )

            if self.log_dir is not None and result.summary.succeeded:
                self.log_file = save_result_log(result, self.log_dir)

            self.finished.emit(result)
        except Exception as e:
            self.error.emit(str(e))
