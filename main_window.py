import logging
import os
from pathlib import Path

from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import (
    QMainWindow, QFileDialog, QTableView, QToolBar, QWidget, QVBoxLayout,
    QHBoxLayout, QLineEdit, QMessageBox, QLabel, QHeaderView
)

from config_io import cfg_path_for, load_cfg, save_cfg, reconcile_cfg_with_names
from errors import EquationError
from file_lock import EquationFileSlots
from models import EquationModel
from store import EquationStore

logger = logging.getLogger('swequations.' + __name__)


class MainWindow(QMainWindow):
    def __init__(self, path: Path | None = None):
        super().__init__()
        self.setWindowTitle('SolidWorks Global Variables')
        self.resize(900, 600)

        self.current_path: Path | None = None
        self.cfg: dict | None = None
        self.slots: EquationFileSlots | None = None
        self.model: EquationModel | None = None

        self._build_ui()

        if path is not None:
            self.load_path(Path(path))

    def _build_ui(self):
        container = QWidget()
        root = QVBoxLayout(container)
        root.setContentsMargins(6, 6, 6, 6)
        root.setSpacing(6)

        tb = QToolBar('Main')
        tb.setMovable(False)
        self.addToolBar(tb)

        open_act = QAction('Open', self)
        open_act.triggered.connect(self.open_file)
        tb.addAction(open_act)

        save_act = QAction('Save Comments', self)
        save_act.triggered.connect(self.save_cfg)
        tb.addAction(save_act)

        fb = QWidget()
        fbl = QHBoxLayout(fb)
        fbl.setContentsMargins(0, 0, 0, 0)
        fbl.addWidget(QLabel('Filter:'))
        self.filter_edit = QLineEdit()
        self.filter_edit.setPlaceholderText('Type to filter by variable name...')
        self.filter_edit.textChanged.connect(self.apply_filter)
        fbl.addWidget(self.filter_edit)
        root.addWidget(fb)

        self.view = QTableView()
        self.view.setAlternatingRowColors(True)
        self.view.setSelectionBehavior(QTableView.SelectionBehavior.SelectRows)
        self.view.verticalHeader().setVisible(False)
        root.addWidget(self.view, 1)
        self.setCentralWidget(container)

        self.readonly_banner = QLabel('')
        self.readonly_banner.setStyleSheet('color: yellow;')
        self.statusBar().addPermanentWidget(self.readonly_banner)

    # ------------ File ops ------------
    def open_file(self):
        fn, _ = QFileDialog.getOpenFileName(
            self,
            'Open SolidWorks Equations',
            os.getcwd(),
            'Text Files (*.txt);;All Files (*)'
        )
        if fn:
            self.load_path(Path(fn))

    def close_current(self):
        if self.slots is not None:
            self.save_cfg()
            self.slots.close()
            self.slots = None

    def load_path(self, path: Path):
        self.close_current()
        path = path.resolve()
        if not path.exists():
            QMessageBox.critical(self, 'Error', f'File does not exist: {path}')
            return

        try:
            self.slots = EquationFileSlots(path)
        except OSError as e:
            QMessageBox.critical(self, 'Error', f'Failed to open file: {e}')
            return
        self.current_path = path

        if self.slots.readonly:
            self.readonly_banner.setText('READ-ONLY: Could not acquire lock')
        else:
            self.readonly_banner.setText('')

        store = EquationStore(self.slots)
        try:
            names = set(store.names())
        except EquationError as e:
            QMessageBox.critical(self, 'Error', f'Failed to read equations: {e}')
            self.close_current()
            return

        self.cfg = reconcile_cfg_with_names(load_cfg(cfg_path_for(path)), names)
        self.model = EquationModel(store, self.cfg, self, readonly=self.slots.readonly)
        self.view.setModel(self.model)
        self.view.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Interactive)
        self.view.horizontalHeader().setSectionResizeMode(3, QHeaderView.ResizeMode.Stretch)
        self.apply_filter()
        self.statusBar().showMessage(f'Loaded {path.name}: {len(names)} variables')

    def save_cfg(self):
        if not self.current_path or self.cfg is None:
            return
        try:
            save_cfg(cfg_path_for(self.current_path), self.cfg)
        except OSError as e:
            logger.exception('Failed to write config')
            QMessageBox.warning(self, 'Warning', f'Failed to write CFG: {e}')
            return
        self.statusBar().showMessage('Saved')

    def closeEvent(self, event):
        self.close_current()
        event.accept()

    # ------------ Filtering ------------
    def apply_filter(self, text=None):
        if self.model is None:
            return
        if text is None:
            text = self.filter_edit.text()
        text = text.strip().lower()
        for r, name in enumerate(self.model.names()):
            self.view.setRowHidden(r, bool(text) and text not in name.lower())
