"""Main application window for the block builder."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Optional

from PyQt6 import QtCore, QtGui, QtWidgets
from PyQt6.QtWebEngineWidgets import QWebEngineView

from ..core import generator, storage
from ..core.composer import DragState, EditorSession, palette_drag_id
from ..core.models import ContentBlockNode, Document, Site
from ..core.palette import PALETTE
from ..core.settings import SettingsManager
from ..render.renderer import SectionRenderer

APP_TITLE = "Block Builder"
FILE_FILTER = f"Block Site (*{storage.PROJECT_SUFFIX})"
LAYOUT_FILTER = "Layout JSON (*.json);;All Files (*)"
CANVAS_TARGET = "__canvas__"
ID_ROLE = QtCore.Qt.ItemDataRole.UserRole


class DragListWidget(QtWidgets.QListWidget):
    """List whose drags are reported so the session can track drag state."""

    dragStarted = QtCore.pyqtSignal(str)
    dragFinished = QtCore.pyqtSignal()

    def startDrag(self, supportedActions: QtCore.Qt.DropAction) -> None:  # noqa: N802 (Qt override)
        item = self.currentItem()
        if item is None:
            return
        self.dragStarted.emit(str(item.data(ID_ROLE)))
        super().startDrag(supportedActions)
        self.dragFinished.emit()


class BlockListWidget(DragListWidget):
    """The page canvas: accepts its own items (reorder) and palette items (insert)."""

    dropped = QtCore.pyqtSignal(object)

    def __init__(self, palette: QtWidgets.QListWidget, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)
        self._palette = palette
        self.setDragEnabled(True)
        self.setAcceptDrops(True)
        self.setDropIndicatorShown(True)
        self.setDragDropMode(QtWidgets.QAbstractItemView.DragDropMode.DragDrop)
        self.setDefaultDropAction(QtCore.Qt.DropAction.MoveAction)

    def _accepts(self, event: QtGui.QDropEvent) -> bool:
        return event.source() in (self, self._palette)

    def dragEnterEvent(self, event: QtGui.QDragEnterEvent) -> None:  # noqa: N802
        if self._accepts(event):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragMoveEvent(self, event: QtGui.QDragMoveEvent) -> None:  # noqa: N802
        if self._accepts(event):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dropEvent(self, event: QtGui.QDropEvent) -> None:  # noqa: N802
        if not self._accepts(event):
            event.ignore()
            return
        item = self.itemAt(event.position().toPoint())
        target = str(item.data(ID_ROLE)) if item is not None else CANVAS_TARGET
        # The list is rebuilt from the session; never let Qt move rows itself.
        event.setDropAction(QtCore.Qt.DropAction.IgnoreAction)
        event.accept()
        self.dropped.emit(target)


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self, settings: Optional[SettingsManager] = None) -> None:
        super().__init__()
        self.setWindowTitle(APP_TITLE)
        self.resize(1320, 820)

        self.settings = settings or SettingsManager()
        self.renderer = SectionRenderer()
        self.project_path: Optional[Path] = None
        self.session = EditorSession(
            site=Site(theme=self.settings.theme),
            history_limit=self.settings.history_limit or None,
        )

        self._debounce = QtCore.QTimer(self)
        self._debounce.setInterval(self.settings.preview_debounce_ms)
        self._debounce.setSingleShot(True)
        self._debounce.timeout.connect(self.update_preview)

        self._build_ui()
        self._build_menu()
        self._bind_events()

        self.session.on_document_changed = self._on_document_changed
        self.session.on_selection_changed = self._on_selection_changed
        self.session.on_history_changed = self._on_history_changed

        self._refresh_pages_list()
        self._refresh_blocks_list()
        self._on_history_changed(False, False)
        self._on_selection_changed(None)
        self.update_window_title()
        self.update_preview()

    # ------------------------------------------------------------------ UI --
    def _build_ui(self) -> None:
        splitter = QtWidgets.QSplitter(self)
        splitter.setOrientation(QtCore.Qt.Orientation.Horizontal)
        self.setCentralWidget(splitter)

        # Palette + pages
        left_panel = QtWidgets.QWidget(self)
        left_layout = QtWidgets.QVBoxLayout(left_panel)
        left_layout.setContentsMargins(6, 6, 6, 6)
        left_layout.setSpacing(6)

        self.palette_list = DragListWidget(left_panel)
        self.palette_list.setDragEnabled(True)
        self.palette_list.setDragDropMode(QtWidgets.QAbstractItemView.DragDropMode.DragOnly)
        for entry in PALETTE:
            item = QtWidgets.QListWidgetItem(f"{entry.icon}  {entry.label}", self.palette_list)
            item.setData(ID_ROLE, palette_drag_id(entry.type))
            item.setToolTip("Drag onto the page or double-click to add")

        self.pages_list = QtWidgets.QListWidget(left_panel)
        self.pages_list.setSelectionMode(QtWidgets.QAbstractItemView.SelectionMode.SingleSelection)
        page_btns = QtWidgets.QHBoxLayout()
        self.btn_add_page = QtWidgets.QPushButton("Add", left_panel)
        self.btn_rename_page = QtWidgets.QPushButton("Rename", left_panel)
        self.btn_remove_page = QtWidgets.QPushButton("Remove", left_panel)
        for btn in (self.btn_add_page, self.btn_rename_page, self.btn_remove_page):
            page_btns.addWidget(btn)

        left_layout.addWidget(QtWidgets.QLabel("Blocks", left_panel))
        left_layout.addWidget(self.palette_list, 3)
        left_layout.addWidget(QtWidgets.QLabel("Pages", left_panel))
        left_layout.addWidget(self.pages_list, 1)
        left_layout.addLayout(page_btns)

        # Canvas
        mid_panel = QtWidgets.QWidget(self)
        mid_layout = QtWidgets.QVBoxLayout(mid_panel)
        mid_layout.setContentsMargins(6, 6, 6, 6)
        self.blocks_list = BlockListWidget(self.palette_list, mid_panel)
        block_btns = QtWidgets.QHBoxLayout()
        self.btn_duplicate = QtWidgets.QPushButton("Duplicate", mid_panel)
        self.btn_delete = QtWidgets.QPushButton("Delete", mid_panel)
        block_btns.addWidget(self.btn_duplicate)
        block_btns.addWidget(self.btn_delete)
        mid_layout.addWidget(QtWidgets.QLabel("Page", mid_panel))
        mid_layout.addWidget(self.blocks_list, 1)
        mid_layout.addLayout(block_btns)

        # Properties + preview
        right_tabs = QtWidgets.QTabWidget(self)
        right_tabs.setDocumentMode(True)

        props_panel = QtWidgets.QWidget(right_tabs)
        props_layout = QtWidgets.QVBoxLayout(props_panel)
        self.props_label = QtWidgets.QLabel("No block selected", props_panel)
        self.props_editor = QtWidgets.QPlainTextEdit(props_panel)
        self.props_editor.setPlaceholderText('{\n  "title": "Click a block to edit its properties"\n}')
        self.btn_apply_props = QtWidgets.QPushButton("Apply", props_panel)
        props_layout.addWidget(self.props_label)
        props_layout.addWidget(self.props_editor, 1)
        props_layout.addWidget(self.btn_apply_props)

        self.preview = QWebEngineView(right_tabs)
        right_tabs.addTab(self.preview, "Preview")
        right_tabs.addTab(props_panel, "Properties")
        self.right_tabs = right_tabs

        splitter.addWidget(left_panel)
        splitter.addWidget(mid_panel)
        splitter.addWidget(right_tabs)
        splitter.setSizes([240, 360, 720])

        self.status = self.statusBar()

    def _build_menu(self) -> None:
        bar = self.menuBar()
        if bar is None:
            bar = QtWidgets.QMenuBar(self)
            self.setMenuBar(bar)

        self.act_new = QtGui.QAction("New Site", self)
        self.act_open = QtGui.QAction("Open Site…", self)
        self.act_import = QtGui.QAction("Import Layout…", self)
        self.act_save = QtGui.QAction("Save", self)
        self.act_save_as = QtGui.QAction("Save As…", self)
        self.act_export = QtGui.QAction("Export Site…", self)
        self.act_quit = QtGui.QAction("Quit", self)
        self.act_undo = QtGui.QAction("Undo", self)
        self.act_redo = QtGui.QAction("Redo", self)
        self.act_about = QtGui.QAction("About", self)

        self.act_open.setShortcut(QtGui.QKeySequence.StandardKey.Open)
        self.act_save.setShortcut(QtGui.QKeySequence.StandardKey.Save)
        self.act_undo.setShortcut(QtGui.QKeySequence("Ctrl+Z"))
        self.act_redo.setShortcut(QtGui.QKeySequence("Ctrl+Y"))

        file_menu = bar.addMenu("&File")
        if file_menu is not None:
            file_menu.addActions([self.act_new, self.act_open, self.act_import])
            file_menu.addSeparator()
            file_menu.addActions([self.act_save, self.act_save_as])
            file_menu.addSeparator()
            file_menu.addAction(self.act_export)
            file_menu.addSeparator()
            file_menu.addAction(self.act_quit)

        edit_menu = bar.addMenu("&Edit")
        if edit_menu is not None:
            edit_menu.addActions([self.act_undo, self.act_redo])

        help_menu = bar.addMenu("&Help")
        if help_menu is not None:
            help_menu.addAction(self.act_about)

    def _bind_events(self) -> None:
        self.palette_list.itemDoubleClicked.connect(self._on_palette_double_clicked)
        self.palette_list.dragStarted.connect(self.session.begin_drag)
        self.palette_list.dragFinished.connect(self._on_drag_finished)
        self.blocks_list.dragStarted.connect(self.session.begin_drag)
        self.blocks_list.dragFinished.connect(self._on_drag_finished)
        self.blocks_list.dropped.connect(self.session.drop)
        self.blocks_list.currentItemChanged.connect(self._on_block_current_changed)

        self.pages_list.currentRowChanged.connect(self._on_page_selection_changed)
        self.btn_add_page.clicked.connect(self.add_page)
        self.btn_rename_page.clicked.connect(self.rename_page)
        self.btn_remove_page.clicked.connect(self.remove_page)

        self.btn_duplicate.clicked.connect(self.duplicate_block)
        self.btn_delete.clicked.connect(self.delete_block)
        self.btn_apply_props.clicked.connect(self.apply_props)

        self.act_new.triggered.connect(self.new_site)
        self.act_open.triggered.connect(self.open_site_dialog)
        self.act_import.triggered.connect(self.import_layout_dialog)
        self.act_save.triggered.connect(self.save_site)
        self.act_save_as.triggered.connect(self.save_site_as)
        self.act_export.triggered.connect(self.export_site)
        self.act_quit.triggered.connect(self.close)
        self.act_undo.triggered.connect(self.session.undo)
        self.act_redo.triggered.connect(self.session.redo)
        self.act_about.triggered.connect(self.show_about)

    # ------------------------------------------------------ Session events --
    def _on_document_changed(self, document: Document) -> None:
        self._refresh_blocks_list()
        self.update_window_title()
        self._debounce.start()

    def _on_selection_changed(self, node: Optional[ContentBlockNode]) -> None:
        self.btn_duplicate.setEnabled(node is not None)
        self.btn_delete.setEnabled(node is not None)
        self.btn_apply_props.setEnabled(node is not None)
        self.props_editor.blockSignals(True)
        if node is None:
            self.props_label.setText("No block selected")
            self.props_editor.clear()
        else:
            self.props_label.setText(f"{node.type or 'untyped'} · {node.id}")
            self.props_editor.setPlainText(json.dumps(node.props, indent=2, ensure_ascii=False))
        self.props_editor.blockSignals(False)
        self._sync_block_selection(node.id if node else None)

    def _on_history_changed(self, can_undo: bool, can_redo: bool) -> None:
        self.act_undo.setEnabled(can_undo)
        self.act_redo.setEnabled(can_redo)

    def _on_drag_finished(self) -> None:
        # Dropped outside any target: nothing to commit.
        if self.session.drag_state is DragState.DRAG_IN_PROGRESS:
            self.session.cancel_drag()

    # --------------------------------------------------------------- Blocks --
    def _on_palette_double_clicked(self, item: QtWidgets.QListWidgetItem) -> None:
        self.session.handle_drop(str(item.data(ID_ROLE)), CANVAS_TARGET)

    def _on_block_current_changed(
        self,
        current: Optional[QtWidgets.QListWidgetItem],
        previous: Optional[QtWidgets.QListWidgetItem],
    ) -> None:
        node_id = str(current.data(ID_ROLE)) if current is not None else None
        if node_id != self.session.selected_id:
            self.session.select(node_id)

    def duplicate_block(self) -> None:
        clone = self.session.duplicate_node(self.session.selected_id)
        if clone is not None:
            self.session.select(clone.id)

    def delete_block(self) -> None:
        self.session.delete_node(self.session.selected_id)

    def apply_props(self) -> None:
        node_id = self.session.selected_id
        if node_id is None:
            return
        try:
            data = json.loads(self.props_editor.toPlainText() or "{}")
        except ValueError as exc:
            if self.status is not None:
                self.status.showMessage(f"Invalid JSON: {exc}", 5000)
            return
        if not isinstance(data, dict):
            if self.status is not None:
                self.status.showMessage("Properties must be a JSON object", 5000)
            return
        self.session.update_props(node_id, data)

    def _refresh_blocks_list(self) -> None:
        self.blocks_list.blockSignals(True)
        self.blocks_list.clear()
        for node in self.session.document:
            item = QtWidgets.QListWidgetItem(_block_label(node), self.blocks_list)
            item.setData(ID_ROLE, node.id)
        self.blocks_list.blockSignals(False)
        self._sync_block_selection(self.session.selected_id)

    def _sync_block_selection(self, node_id: Optional[str]) -> None:
        self.blocks_list.blockSignals(True)
        self.blocks_list.setCurrentRow(self.session.document.index_of(node_id))
        self.blocks_list.blockSignals(False)

    # --------------------------------------------------------------- Pages --
    def _refresh_pages_list(self) -> None:
        self.pages_list.blockSignals(True)
        self.pages_list.clear()
        self.pages_list.addItems(self.session.pages)
        self.pages_list.setCurrentRow(self.session.current_page_index)
        self.pages_list.blockSignals(False)
        self.btn_remove_page.setEnabled(len(self.session.pages) > 1)

    def _on_page_selection_changed(self, row: int) -> None:
        if row < 0 or row == self.session.current_page_index:
            return
        self.session.select_page(row)
        self._refresh_pages_list()

    def add_page(self) -> None:
        self.session.add_page()
        self._refresh_pages_list()

    def rename_page(self) -> None:
        row = self.session.current_page_index
        current = self.session.pages[row]
        name, ok = QtWidgets.QInputDialog.getText(self, "Rename Page", "Page name:", text=current)
        if not ok:
            return
        if not self.session.rename_page(row, name):
            QtWidgets.QMessageBox.warning(self, "Rename Page", "Page names must be unique and not empty.")
            return
        self._refresh_pages_list()
        self.update_window_title()

    def remove_page(self) -> None:
        row = self.session.current_page_index
        name = self.session.pages[row]
        answer = QtWidgets.QMessageBox.question(self, "Remove Page", f"Remove the page “{name}” and all its blocks?")
        if answer != QtWidgets.QMessageBox.StandardButton.Yes:
            return
        self.session.delete_page(row)
        self._refresh_pages_list()

    # ----------------------------------------------------------- Site Ops --
    def _confirm_discard(self) -> bool:
        if not self.session.dirty:
            return True
        answer = QtWidgets.QMessageBox.question(
            self, "Unsaved changes", "Discard unsaved changes?"
        )
        return answer == QtWidgets.QMessageBox.StandardButton.Yes

    def new_site(self) -> None:
        if not self._confirm_discard():
            return
        name, ok = QtWidgets.QInputDialog.getText(self, "New Site", "Site name:", text="My Store")
        if not ok or not name.strip():
            return
        self.session.load_site(Site(name=name.strip(), theme=self.settings.theme))
        self.project_path = None
        self._refresh_pages_list()
        self.update_window_title()

    def open_site_dialog(self) -> None:
        if not self._confirm_discard():
            return
        path, _ = QtWidgets.QFileDialog.getOpenFileName(self, "Open Site", "", FILE_FILTER)
        if not path:
            return
        result = self.session.load(path)
        if not result.ok:
            QtWidgets.QMessageBox.warning(self, "Open failed", result.message)
            return
        self.project_path = Path(path)
        self._refresh_pages_list()
        self.update_window_title()
        if self.status is not None:
            self.status.showMessage(result.message, 4000)

    def import_layout_dialog(self) -> None:
        if not self._confirm_discard():
            return
        path, _ = QtWidgets.QFileDialog.getOpenFileName(self, "Import Layout", "", LAYOUT_FILTER)
        if not path:
            return
        result = self.session.import_file(path)
        if not result.ok:
            QtWidgets.QMessageBox.warning(self, "Import failed", result.message)
            return
        self.project_path = None
        self._refresh_pages_list()
        self.update_window_title()
        if self.status is not None:
            self.status.showMessage(result.message, 4000)

    def save_site(self) -> None:
        if not self.project_path:
            self.save_site_as()
            return
        self._save_to(self.project_path)

    def save_site_as(self) -> None:
        path, _ = QtWidgets.QFileDialog.getSaveFileName(self, "Save Site As", "", FILE_FILTER)
        if not path:
            return
        path = path if path.endswith(storage.PROJECT_SUFFIX) else f"{path}{storage.PROJECT_SUFFIX}"
        if self._save_to(Path(path)):
            self.project_path = Path(path)
            self.update_window_title()

    def _save_to(self, path: Path) -> bool:
        result = self.session.save(path)
        if not result.ok:
            QtWidgets.QMessageBox.warning(self, "Save failed", result.message)
            if self.status is not None:
                self.status.showMessage("Save failed", 4000)
            return False
        self.update_window_title()
        if self.status is not None:
            self.status.showMessage(result.message, 2500)
        return True

    def export_site(self) -> None:
        out_dir = QtWidgets.QFileDialog.getExistingDirectory(self, "Export Site To…")
        if not out_dir:
            return
        try:
            generator.render_site(self.session.to_site(), out_dir, renderer=self.renderer)
        except OSError as exc:
            QtWidgets.QMessageBox.warning(self, "Export failed", f"Could not export the site:\n{exc}")
            return
        if self.status is not None:
            self.status.showMessage(f"Exported site to {out_dir}", 5000)
        QtWidgets.QMessageBox.information(self, "Export complete", f"Your site was exported to:\n{out_dir}")

    # ---------------------------------------------------------------- Misc --
    def update_preview(self) -> None:
        page = self.session.pages[self.session.current_page_index]
        html = self.renderer.render_page(
            self.session.document, self.session.theme, title=page, site_name=self.session.site_name
        )
        self.preview.setHtml(html)

    def show_about(self) -> None:
        QtWidgets.QMessageBox.information(
            self,
            "About",
            f"{APP_TITLE}\n\nA drag-and-drop page builder built with PyQt6.",
        )

    def update_window_title(self) -> None:
        suffix = f" — {self.project_path.name}" if self.project_path else ""
        marker = " *" if self.session.dirty else ""
        self.setWindowTitle(f"{APP_TITLE} — {self.session.site_name}{suffix}{marker}")

    def open_path(self, path: str | os.PathLike[str]) -> None:
        result = self.session.load(path)
        if result.ok:
            self.project_path = Path(path)
            self._refresh_pages_list()
            self.update_window_title()
        elif self.status is not None:
            self.status.showMessage(result.message, 6000)

    def closeEvent(self, event: QtGui.QCloseEvent) -> None:  # noqa: N802 (Qt override)
        if not self._confirm_discard():
            event.ignore()
            return
        super().closeEvent(event)


def _block_label(node: ContentBlockNode) -> str:
    props = node.props
    caption = ""
    for key in ("title", "heading", "logo", "companyName", "text", "label"):
        value = props.get(key)
        if isinstance(value, str) and value.strip():
            caption = value.strip()
            break
    kind = node.type or "block"
    return f"{kind}: {caption}" if caption else kind
