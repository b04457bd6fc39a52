# library_window.py
# -*- coding: utf-8 -*-
import os

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QListWidget,
    QListWidgetItem, QDockWidget, QPlainTextEdit, QFileDialog, QInputDialog,
    QMessageBox, QListView
)
from PySide6.QtCore import Qt, QSize, Slot

import config
from gui_utils import WorkerThread
from gui_components import icon_loader
from emulator_utils.emulator_manager import EmulatorKind, get_emulator_display_name

GAME_FILE_FILTER = "Switch games ({});;All files (*)".format(
    " ".join(f"*.{ext}" for ext in sorted(config.ROM_EXTENSIONS))
)


class LibraryWindow(QMainWindow):
    def __init__(self, service, qt_log_handler=None):
        super().__init__()
        self.service = service
        self.worker_thread = None
        self.setWindowTitle(f"{config.APP_NAME} {config.APP_VERSION}")
        self.resize(900, 600)

        # --- Buttons ---
        self.scan_all_button = QPushButton("Scan All")
        self.scan_yuzu_button = QPushButton(f"Scan {get_emulator_display_name(EmulatorKind.YUZU)}")
        self.scan_ryujinx_button = QPushButton(f"Scan {get_emulator_display_name(EmulatorKind.RYUJINX)}")
        self.scan_folder_button = QPushButton("Scan Folder...")
        self.add_button = QPushButton("Add Game...")
        self.launch_button = QPushButton("Launch")
        self.launch_button.setEnabled(False)
        self.busy_buttons = [
            self.scan_all_button, self.scan_yuzu_button, self.scan_ryujinx_button,
            self.scan_folder_button, self.add_button,
        ]

        buttons_layout = QHBoxLayout()
        for button in self.busy_buttons:
            buttons_layout.addWidget(button)
        buttons_layout.addStretch(1)
        buttons_layout.addWidget(self.launch_button)

        # --- Game list ---
        self.game_list = QListWidget()
        self.game_list.setViewMode(QListView.ViewMode.IconMode)
        self.game_list.setIconSize(QSize(icon_loader.DEFAULT_ICON_SIZE, icon_loader.DEFAULT_ICON_SIZE))
        self.game_list.setResizeMode(QListView.ResizeMode.Adjust)
        self.game_list.setWordWrap(True)
        self.game_list.setGridSize(QSize(140, 120))

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.addLayout(buttons_layout)
        layout.addWidget(self.game_list)
        self.setCentralWidget(central)

        # --- Log dock ---
        self.log_output = QPlainTextEdit()
        self.log_output.setReadOnly(True)
        log_dock = QDockWidget("Log", self)
        log_dock.setObjectName("LogDock")
        log_dock.setWidget(self.log_output)
        self.addDockWidget(Qt.DockWidgetArea.BottomDockWidgetArea, log_dock)
        if qt_log_handler is not None:
            qt_log_handler.log_signal.connect(self.log_output.appendHtml)

        # --- Connections ---
        self.scan_all_button.clicked.connect(self.handle_scan_all)
        self.scan_yuzu_button.clicked.connect(lambda: self.handle_scan(EmulatorKind.YUZU))
        self.scan_ryujinx_button.clicked.connect(lambda: self.handle_scan(EmulatorKind.RYUJINX))
        self.scan_folder_button.clicked.connect(self.handle_scan_folder)
        self.add_button.clicked.connect(self.handle_add_game)
        self.launch_button.clicked.connect(self.handle_launch)
        self.game_list.itemSelectionChanged.connect(self.update_launch_button)
        self.game_list.itemDoubleClicked.connect(lambda _item: self.handle_launch())

        self.statusBar().showMessage("Ready.")

    # --- Background operations ---
    def _run_in_background(self, on_finished, function, *args):
        if self.worker_thread and self.worker_thread.isRunning():
            self.statusBar().showMessage("An operation is already running...")
            return
        self.set_busy(True)
        self.worker_thread = WorkerThread(function, *args)
        self.statusBar().showMessage("Working...")
        self.worker_thread.finished.connect(on_finished)
        self.worker_thread.start()

    def set_busy(self, busy):
        for button in self.busy_buttons:
            button.setEnabled(not busy)

    @Slot()
    def handle_scan_all(self):
        icon_loader.clear_icon_cache()
        self._run_in_background(self.on_scan_finished, self.service.scan_all)

    def handle_scan(self, kind):
        self._run_in_background(self.on_scan_finished, self.service.scan, kind)

    @Slot(bool, object)
    def on_scan_finished(self, success, payload):
        self.set_busy(False)
        if not success:
            QMessageBox.warning(self, "Scan failed", str(payload))
            return
        self.populate_game_list(payload)
        self.statusBar().showMessage(f"{len(payload)} games in library.")

    @Slot()
    def handle_scan_folder(self):
        directory = QFileDialog.getExistingDirectory(self, "Select games folder", os.path.expanduser("~"))
        if not directory:
            return
        kind = self.ask_emulator()
        if kind is None:
            return
        self._run_in_background(self.on_scan_finished, self.service.scan_directory, directory, kind)

    @Slot()
    def handle_add_game(self):
        path, _ = QFileDialog.getOpenFileName(self, "Select game file", os.path.expanduser("~"), GAME_FILE_FILTER)
        if not path:
            return
        default_title = os.path.splitext(os.path.basename(path))[0]
        title, ok = QInputDialog.getText(self, "Game title", "Title:", text=default_title)
        if not ok or not title.strip():
            return
        kind = self.ask_emulator()
        if kind is None:
            return
        self._run_in_background(self.on_add_finished, self.service.add_manual_entry, title.strip(), path, kind)

    def ask_emulator(self):
        """Asks which emulator should launch the games. None if cancelled."""
        names = [get_emulator_display_name(kind) for kind in EmulatorKind]
        name, ok = QInputDialog.getItem(self, "Emulator", "Launch with:", names, 0, False)
        if not ok:
            return None
        return list(EmulatorKind)[names.index(name)]

    @Slot(bool, object)
    def on_add_finished(self, success, payload):
        self.set_busy(False)
        if not success:
            QMessageBox.warning(self, "Add game failed", str(payload))
            return
        self.add_game_item(payload)
        self.statusBar().showMessage(f"Added '{payload.title}'.")

    @Slot()
    def handle_launch(self):
        item = self.game_list.currentItem()
        if item is None:
            return
        entry = item.data(Qt.ItemDataRole.UserRole)
        success, message = self.service.launch(entry)
        if success:
            self.statusBar().showMessage(message)
        else:
            QMessageBox.critical(self, "Launch failed", message)

    # --- List helpers ---
    def populate_game_list(self, entries):
        self.game_list.clear()
        for entry in entries:
            self.add_game_item(entry)
        self.update_launch_button()

    def add_game_item(self, entry):
        item = QListWidgetItem(icon_loader.get_game_icon(entry), entry.title)
        item.setToolTip(f"{entry.path}\n{get_emulator_display_name(entry.emulator)}")
        item.setData(Qt.ItemDataRole.UserRole, entry)
        self.game_list.addItem(item)

    @Slot()
    def update_launch_button(self):
        self.launch_button.setEnabled(self.game_list.currentItem() is not None)
