"""
gui_mainwindow.py - GUI Main Window

Single window workflow:
1. Scan a folder
2. Set template, case style and optional folder organization
3. Preview, pick proposals, execute
"""

from pathlib import Path
from typing import Optional, List

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QGridLayout,
    QLabel, QLineEdit, QPushButton, QCheckBox, QComboBox,
    QSpinBox, QTableWidget, QTableWidgetItem, QProgressBar,
    QFileDialog, QMessageBox, QHeaderView, QGroupBox
)
from PySide6.QtCore import Qt, Slot
from PySide6.QtGui import QColor

from tidy_core import (
    BatchRenameResult,
    CaseStyle,
    ExecuteOptions,
    FileDescriptor,
    OrganizeOptions,
    PreviewOptions,
    RenamePreview,
    RenameStatus,
    ReorganizationMode,
    Settings,
    TidyError,
    apply_undo,
    list_extensions,
    load_result_log,
)
from tidy_core.history import list_result_logs
from tidy_core.template_expand import DEFAULT_DATE_FORMAT
from .gui_workers import ScanWorker, PreviewWorker, RenameWorker

ALL_EXTENSIONS = "(All)"

STATUS_DISPLAY = {
    RenameStatus.READY: ("Will Rename", QColor(0, 150, 0)),
    RenameStatus.NO_CHANGE: ("No Change", QColor(150, 150, 150)),
    RenameStatus.CONFLICT: ("Conflict", QColor(200, 150, 0)),
    RenameStatus.INVALID_NAME: ("Invalid Name", QColor(200, 0, 0)),
    RenameStatus.MISSING_DATA: ("Missing Data", QColor(200, 0, 0)),
}

COL_SELECT, COL_ORIGINAL, COL_NEW, COL_STATUS, COL_DEST = range(5)


class RenamePanel(QWidget):
    """Template rename panel"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.settings = Settings.from_env()
        self.files: List[FileDescriptor] = []
        self.preview: Optional[RenamePreview] = None
        self.scan_worker: Optional[ScanWorker] = None
        self.preview_worker: Optional[PreviewWorker] = None
        self.rename_worker: Optional[RenameWorker] = None

        self._init_ui()

    def _init_ui(self):
        layout = QVBoxLayout(self)

        # Folder group
        folder_group = QGroupBox("Folder")
        folder_layout = QGridLayout(folder_group)

        folder_layout.addWidget(QLabel("Directory:"), 0, 0)
        self.dir_edit = QLineEdit()
        self.dir_edit.setPlaceholderText("Select folder...")
        folder_layout.addWidget(self.dir_edit, 0, 1)
        self.browse_btn = QPushButton("Browse...")
        self.browse_btn.clicked.connect(self._browse_directory)
        folder_layout.addWidget(self.browse_btn, 0, 2)

        folder_layout.addWidget(QLabel("Extension:"), 1, 0)
        self.ext_combo = QComboBox()
        self.ext_combo.setEditable(True)
        self.ext_combo.addItem(ALL_EXTENSIONS)
        folder_layout.addWidget(self.ext_combo, 1, 1, 1, 2)

        options_layout = QHBoxLayout()
        self.recursive_check = QCheckBox("Include Subfolders")
        self.hidden_check = QCheckBox("Include Hidden Files")
        options_layout.addWidget(self.recursive_check)
        options_layout.addWidget(self.hidden_check)
        options_layout.addStretch()
        folder_layout.addLayout(options_layout, 2, 0, 1, 3)

        self.scan_btn = QPushButton("Scan")
        self.scan_btn.clicked.connect(self._do_scan)
        folder_layout.addWidget(self.scan_btn, 3, 0, 1, 3)

        layout.addWidget(folder_group)

        # Naming group
        name_group = QGroupBox("Naming")
        name_layout = QGridLayout(name_group)

        name_layout.addWidget(QLabel("Template:"), 0, 0)
        self.template_edit = QLineEdit("{date}_{name}.{ext}")
        self.template_edit.setToolTip("{name} {ext} {date} {date:FORMAT} {year} {month} {day}")
        name_layout.addWidget(self.template_edit, 0, 1, 1, 3)

        name_layout.addWidget(QLabel("Date Format:"), 1, 0)
        self.date_format_edit = QLineEdit(DEFAULT_DATE_FORMAT)
        name_layout.addWidget(self.date_format_edit, 1, 1)

        name_layout.addWidget(QLabel("Case:"), 1, 2)
        self.case_combo = QComboBox()
        for style in CaseStyle:
            self.case_combo.addItem(style.value, style)
        name_layout.addWidget(self.case_combo, 1, 3)

        self.strip_check = QCheckBox("Strip existing dates and counters")
        name_layout.addWidget(self.strip_check, 2, 0, 1, 4)

        layout.addWidget(name_group)

        # Organize group
        self.organize_group = QGroupBox("Organize Into Folders")
        self.organize_group.setCheckable(True)
        self.organize_group.setChecked(False)
        organize_layout = QGridLayout(self.organize_group)

        organize_layout.addWidget(QLabel("Folder Pattern:"), 0, 0)
        self.folder_pattern_edit = QLineEdit("{year}/{month}")
        self.folder_pattern_edit.setToolTip("{year} {month} {day} {ext} {category}")
        organize_layout.addWidget(self.folder_pattern_edit, 0, 1, 1, 2)

        organize_layout.addWidget(QLabel("Destination:"), 1, 0)
        self.dest_edit = QLineEdit()
        self.dest_edit.setPlaceholderText("Empty: next to each file")
        organize_layout.addWidget(self.dest_edit, 1, 1)
        self.dest_btn = QPushButton("Browse...")
        self.dest_btn.clicked.connect(self._browse_destination)
        organize_layout.addWidget(self.dest_btn, 1, 2)

        self.context_check = QCheckBox("Keep source folders")
        organize_layout.addWidget(self.context_check, 2, 0)
        organize_layout.addWidget(QLabel("Levels:"), 2, 1)
        self.depth_spin = QSpinBox()
        self.depth_spin.setRange(-1, 20)
        self.depth_spin.setValue(1)
        self.depth_spin.setSpecialValueText("All")
        organize_layout.addWidget(self.depth_spin, 2, 2)

        layout.addWidget(self.organize_group)

        self.preview_btn = QPushButton("Preview")
        self.preview_btn.clicked.connect(self._do_preview)
        self.preview_btn.setEnabled(False)
        layout.addWidget(self.preview_btn)

        # Results table
        self.table = QTableWidget()
        self.table.setColumnCount(5)
        self.table.setHorizontalHeaderLabels(["", "Original Name", "New Name", "Status", "Destination"])
        header = self.table.horizontalHeader()
        header.setSectionResizeMode(COL_SELECT, QHeaderView.ResizeMode.ResizeToContents)
        header.setSectionResizeMode(COL_ORIGINAL, QHeaderView.ResizeMode.Stretch)
        header.setSectionResizeMode(COL_NEW, QHeaderView.ResizeMode.Stretch)
        header.setSectionResizeMode(COL_STATUS, QHeaderView.ResizeMode.ResizeToContents)
        header.setSectionResizeMode(COL_DEST, QHeaderView.ResizeMode.Stretch)
        self.table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        layout.addWidget(self.table, 1)

        # Progress and execution
        bottom_layout = QHBoxLayout()

        self.progress_bar = QProgressBar()
        self.progress_bar.setVisible(False)
        bottom_layout.addWidget(self.progress_bar, 1)

        self.validate_check = QCheckBox("Validate Paths")
        self.atomic_check = QCheckBox("All or Nothing")
        bottom_layout.addWidget(self.validate_check)
        bottom_layout.addWidget(self.atomic_check)

        self.undo_btn = QPushButton("Undo Last")
        self.undo_btn.clicked.connect(self._do_undo)
        bottom_layout.addWidget(self.undo_btn)

        self.execute_btn = QPushButton("Execute Rename")
        self.execute_btn.clicked.connect(self._do_execute)
        self.execute_btn.setEnabled(False)
        self.execute_btn.setStyleSheet("QPushButton { background-color: #4CAF50; color: white; font-weight: bold; padding: 8px 16px; }")
        bottom_layout.addWidget(self.execute_btn)

        layout.addLayout(bottom_layout)

        # Status label
        self.status_label = QLabel("")
        layout.addWidget(self.status_label)

    def _browse_directory(self):
        """Browse and select directory"""
        directory = QFileDialog.getExistingDirectory(self, "Select Directory")
        if directory:
            self.dir_edit.setText(directory)
            self._update_extension_list(directory)

    def _browse_destination(self):
        directory = QFileDialog.getExistingDirectory(self, "Select Destination")
        if directory:
            self.dest_edit.setText(directory)

    def _update_extension_list(self, directory: str):
        """Update extension dropdown list"""
        try:
            extensions = list_extensions(directory, recursive=self.recursive_check.isChecked())
        except TidyError:
            extensions = []
        self.ext_combo.clear()
        self.ext_combo.addItem(ALL_EXTENSIONS)
        for ext in extensions:
            self.ext_combo.addItem(ext)

    def _set_busy(self, busy: bool):
        self.scan_btn.setEnabled(not busy)
        self.preview_btn.setEnabled(not busy and bool(self.files))
        self.execute_btn.setEnabled(not busy and self._has_ready())
        self.undo_btn.setEnabled(not busy)

    def _has_ready(self) -> bool:
        return self.preview is not None and self.preview.summary.ready > 0

    # ------------------------------------------------------------------
    # Scan
    # ------------------------------------------------------------------

    def _do_scan(self):
        """Execute scan"""
        directory = self.dir_edit.text().strip()
        if not directory:
            QMessageBox.warning(self, "Warning", "Please select a directory first")
            return

        ext = self.ext_combo.currentText().strip()
        extensions = None if not ext or ext == ALL_EXTENSIONS else [ext]

        self.preview = None
        self._set_busy(True)
        self.scan_btn.setText("Scanning...")
        self.progress_bar.setVisible(True)
        self.progress_bar.setRange(0, 0)  # Indeterminate progress

        self.scan_worker = ScanWorker(
            Path(directory),
            recursive=self.recursive_check.isChecked(),
            extensions=extensions,
            include_hidden=self.hidden_check.isChecked(),
        )
        self.scan_worker.progress.connect(self._on_scan_progress)
        self.scan_worker.finished.connect(self._on_scan_finished)
        self.scan_worker.error.connect(self._on_scan_error)
        self.scan_worker.start()

    @Slot(str)
    def _on_scan_progress(self, msg: str):
        self.status_label.setText(msg[-80:] if len(msg) > 80 else msg)

    @Slot(list)
    def _on_scan_finished(self, files: List[FileDescriptor]):
        """Scan complete"""
        self.files = files
        self.scan_btn.setText("Scan")
        self.progress_bar.setVisible(False)
        self._set_busy(False)

        self.table.setRowCount(len(files))
        for i, f in enumerate(files):
            self.table.setItem(i, COL_SELECT, QTableWidgetItem(""))
            self.table.setItem(i, COL_ORIGINAL, QTableWidgetItem(f.relative_path))
            self.table.setItem(i, COL_NEW, QTableWidgetItem(""))
            self.table.setItem(i, COL_STATUS, QTableWidgetItem(""))
            self.table.setItem(i, COL_DEST, QTableWidgetItem(""))

        if files:
            self.status_label.setText(f"Found {len(files)} files")
        else:
            self.status_label.setText("No matching files found")

    @Slot(str)
    def _on_scan_error(self, error: str):
        self.scan_btn.setText("Scan")
        self.progress_bar.setVisible(False)
        self._set_busy(False)
        QMessageBox.critical(self, "Error", f"Scan failed: {error}")

    # ------------------------------------------------------------------
    # Preview
    # ------------------------------------------------------------------

    def build_preview_options(self) -> PreviewOptions:
        """Collect preview options from the form"""
        options = PreviewOptions(
            date_format=self.date_format_edit.text().strip() or DEFAULT_DATE_FORMAT,
            case_style=self.case_combo.currentData(),
            strip_existing_patterns=self.strip_check.isChecked(),
        )
        if self.organize_group.isChecked():
            options.reorganization_mode = ReorganizationMode.ORGANIZE
            options.organize_options = OrganizeOptions(
                folder_pattern=self.folder_pattern_edit.text().strip(),
                destination_directory=self.dest_edit.text().strip() or None,
                preserve_context=self.context_check.isChecked(),
                context_depth=self.depth_spin.value(),
            )
        return options

    def _do_preview(self):
        """Generate preview"""
        template = self.template_edit.text().strip()
        if not template:
            QMessageBox.warning(self, "Warning", "Please enter a template")
            return
        if self.organize_group.isChecked() and not self.folder_pattern_edit.text().strip():
            QMessageBox.warning(self, "Warning", "Please enter a folder pattern")
            return

        self._set_busy(True)
        self.preview_btn.setText("Generating...")

        self.preview_worker = PreviewWorker(self.files, template, self.build_preview_options())
        self.preview_worker.finished.connect(self._on_preview_finished)
        self.preview_worker.error.connect(self._on_preview_error)
        self.preview_worker.start()

    @Slot(object)
    def _on_preview_finished(self, preview: RenamePreview):
        """Preview generation complete"""
        self.preview = preview
        self.preview_btn.setText("Preview")
        self._set_busy(False)
        self._update_table_preview()

        s = preview.summary
        if s.ready:
            self.status_label.setText(
                f"Will rename {s.ready} files (no change: {s.no_change}, "
                f"conflicts: {s.conflicts}, invalid: {s.invalid_name})"
            )
        else:
            self.status_label.setText("No files need renaming")

    @Slot(str)
    def _on_preview_error(self, error: str):
        self.preview_btn.setText("Preview")
        self._set_busy(False)
        QMessageBox.critical(self, "Error", f"Failed to generate preview: {error}")

    def _update_table_preview(self):
        """Update table to display proposals"""
        if not self.preview:
            return

        proposals = self.preview.proposals
        self.table.setRowCount(len(proposals))
        for i, p in enumerate(proposals):
            select_item = QTableWidgetItem("")
            if p.is_ready:
                select_item.setFlags(Qt.ItemFlag.ItemIsUserCheckable | Qt.ItemFlag.ItemIsEnabled)
                select_item.setCheckState(Qt.CheckState.Checked)
            else:
                select_item.setFlags(Qt.ItemFlag.ItemIsEnabled)
            self.table.setItem(i, COL_SELECT, select_item)

            self.table.setItem(i, COL_ORIGINAL, QTableWidgetItem(p.original_name))

            new_item = QTableWidgetItem(p.proposed_name)
            if p.status == RenameStatus.CONFLICT:
                new_item.setBackground(QColor(255, 255, 200))
            self.table.setItem(i, COL_NEW, new_item)

            text, color = STATUS_DISPLAY[p.status]
            status_item = QTableWidgetItem(text)
            status_item.setForeground(color)
            if p.issues:
                status_item.setToolTip("\n".join(issue.message for issue in p.issues))
            self.table.setItem(i, COL_STATUS, status_item)

            self.table.setItem(i, COL_DEST, QTableWidgetItem(p.destination_folder or ""))

    def selected_proposal_ids(self) -> List[str]:
        """Ids of checked rows"""
        if not self.preview:
            return []
        ids = []
        for i, p in enumerate(self.preview.proposals):
            item = self.table.item(i, COL_SELECT)
            if item is not None and item.checkState() == Qt.CheckState.Checked:
                ids.append(p.id)
        return ids

    # ------------------------------------------------------------------
    # Execute
    # ------------------------------------------------------------------

    def _do_execute(self):
        """Execute rename"""
        if not self._has_ready():
            return

        ids = self.selected_proposal_ids()
        if not ids:
            QMessageBox.warning(self, "Warning", "No files selected")
            return

        reply = QMessageBox.question(
            self, "Confirm",
            f"Are you sure you want to rename {len(ids)} files?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No
        )
        if reply != QMessageBox.StandardButton.Yes:
            return

        allowed_base = None
        if self.organize_group.isChecked() and self.dest_edit.text().strip():
            allowed_base = self.dest_edit.text().strip()

        options = ExecuteOptions(
            proposal_ids=ids,
            validate_paths=self.validate_check.isChecked(),
            all_or_nothing=self.atomic_check.isChecked(),
            allowed_base=allowed_base,
        )

        self._set_busy(True)
        self.execute_btn.setText("Executing...")
        self.progress_bar.setVisible(True)
        self.progress_bar.setRange(0, len(ids))

        self.rename_worker = RenameWorker(self.preview.proposals, options, log_dir=self.settings.history_dir)
        self.rename_worker.progress.connect(self._on_rename_progress)
        self.rename_worker.finished.connect(self._on_rename_finished)
        self.rename_worker.error.connect(self._on_rename_error)
        self.rename_worker.start()

    @Slot(int, int, str)
    def _on_rename_progress(self, current: int, total: int, msg: str):
        """Execution progress update"""
        self.progress_bar.setRange(0, total)
        self.progress_bar.setValue(current)
        self.status_label.setText(msg)

    @Slot(object)
    def _on_rename_finished(self, result: BatchRenameResult):
        """Execution complete"""
        self.execute_btn.setText("Execute Rename")
        self.progress_bar.setVisible(False)

        msg = result.summary_text()
        if self.rename_worker is not None and self.rename_worker.log_file:
            msg += f"\n\nLog: {self.rename_worker.log_file}"

        if result.success:
            QMessageBox.information(self, "Complete", msg)
        else:
            QMessageBox.warning(self, "Completed With Errors", msg)

        # Clear state
        self.files = []
        self.preview = None
        self.table.setRowCount(0)
        self._set_busy(False)
        self.status_label.setText("Complete")

    @Slot(str)
    def _on_rename_error(self, error: str):
        self.execute_btn.setText("Execute Rename")
        self.progress_bar.setVisible(False)
        self._set_busy(False)
        QMessageBox.critical(self, "Error", f"Execution failed: {error}")

    def _do_undo(self):
        """Undo the latest logged batch"""
        logs = list_result_logs(self.settings.history_dir)
        if not logs:
            QMessageBox.information(self, "Undo", "No result logs found")
            return

        try:
            result = load_result_log(logs[0])
        except TidyError as e:
            QMessageBox.critical(self, "Error", e.message)
            return

        count = result.summary.succeeded
        reply = QMessageBox.question(
            self, "Confirm",
            f"Move {count} files of the last batch back to their original names?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No
        )
        if reply != QMessageBox.StandardButton.Yes:
            return

        restored, errors = apply_undo(result)
        msg = f"Restored: {restored}"
        if errors:
            msg += "\n\n" + "\n".join(errors[:5])
            if len(errors) > 5:
                msg += f"\n... and {len(errors) - 5} more"
        QMessageBox.information(self, "Undo", msg)


class MainWindow(QMainWindow):
    """Main window"""

    def __init__(self):
        super().__init__()
        self.setWindowTitle("Tidy Rename")
        self.setMinimumSize(900, 700)

        self.panel = RenamePanel()
        self.setCentralWidget(self.panel)

        # Status bar
        self.statusBar().showMessage("Ready")
