"""Editing session: every mutation of a page's blocks goes through here."""

from __future__ import annotations

import copy
import enum
import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from . import storage
from .errors import StorageError
from .history import HistoryLog
from .layout import site_from_layout
from .models import RESERVED_ID_PREFIX, ContentBlockNode, Document, Page, Site
from .palette import default_props

logger = logging.getLogger(__name__)

PALETTE_PREFIX = RESERVED_ID_PREFIX


@dataclass(frozen=True)
class PaletteSource:
    """Drag started on a palette item: drop inserts a new block."""

    block_type: str


@dataclass(frozen=True)
class ReorderSource:
    """Drag started on an existing block: drop moves it."""

    node_id: str


DragSource = Union[PaletteSource, ReorderSource]


def decode_drag_source(raw: Union[str, PaletteSource, ReorderSource]) -> DragSource:
    if isinstance(raw, (PaletteSource, ReorderSource)):
        return raw
    raw = str(raw)
    if raw.startswith(PALETTE_PREFIX):
        return PaletteSource(raw[len(PALETTE_PREFIX):])
    return ReorderSource(raw)


def palette_drag_id(block_type: str) -> str:
    return f"{PALETTE_PREFIX}{block_type}"


class DragState(enum.Enum):
    IDLE = "idle"
    DRAG_IN_PROGRESS = "drag-in-progress"
    COMMITTING = "committing"


@dataclass
class StorageResult:
    ok: bool
    message: str = ""


SelectionCallback = Callable[[Optional[ContentBlockNode]], None]
HistoryCallback = Callable[[bool, bool], None]
DocumentCallback = Callable[[Document], None]


class EditorSession:
    """Holds the live page document, its history, the selection and drag state.

    Operations addressing an id that is not in the document are silent no-ops:
    drag and drop and quick clicking can easily race with stale ids.
    """

    def __init__(
        self,
        site: Optional[Site] = None,
        history_limit: Optional[int] = None,
        on_selection_changed: Optional[SelectionCallback] = None,
        on_history_changed: Optional[HistoryCallback] = None,
        on_document_changed: Optional[DocumentCallback] = None,
    ) -> None:
        self.on_selection_changed = on_selection_changed
        self.on_history_changed = on_history_changed
        self.on_document_changed = on_document_changed
        self.history_limit = history_limit
        self.drag_state = DragState.IDLE
        self._drag_source: Optional[DragSource] = None
        self.dirty = False
        self._selected: Optional[ContentBlockNode] = None
        self._site = site if site is not None else Site()
        self._page_index = 0
        self._document = self._site.pages[0].document.deep_copy()
        self.history = HistoryLog(self._document, max_depth=history_limit)

    # ------------------------------------------------------------ queries --
    @property
    def document(self) -> Document:
        return self._document

    @property
    def selected(self) -> Optional[ContentBlockNode]:
        return self._selected

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected.id if self._selected else None

    @property
    def current_page_index(self) -> int:
        return self._page_index

    @property
    def pages(self) -> List[str]:
        return self._site.page_names()

    @property
    def theme(self) -> Dict[str, Any]:
        return self._site.theme

    @property
    def site_name(self) -> str:
        return self._site.name

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    # ---------------------------------------------------------- block ops --
    def insert_from_palette(self, block_type: str) -> ContentBlockNode:
        node_type, props = default_props(block_type)
        node = ContentBlockNode(id=self._new_id(node_type), type=node_type, props=props)
        self._commit(self._document.nodes + [node])
        logger.debug("Inserted %s block %s", node_type, node.id)
        return node

    def reorder(self, source_id: Optional[str], target_id: Optional[str]) -> bool:
        if source_id is None or target_id is None or source_id == target_id:
            return False
        old_index = self._document.index_of(source_id)
        new_index = self._document.index_of(target_id)
        if old_index < 0 or new_index < 0:
            logger.debug("Ignoring reorder of %s onto %s: unknown id", source_id, target_id)
            return False
        nodes = self._document.nodes
        nodes.insert(new_index, nodes.pop(old_index))
        self._commit(nodes)
        return True

    def update_props(self, node_id: Optional[str], partial_props: Mapping[str, Any]) -> bool:
        node = self._document.get(node_id)
        if node is None:
            logger.debug("Ignoring update of unknown block %s", node_id)
            return False
        merged = dict(node.props)
        merged.update(copy.deepcopy(dict(partial_props)))
        updated = ContentBlockNode(id=node.id, type=node.type, props=merged)
        nodes = self._document.nodes
        nodes[self._document.index_of(node.id)] = updated
        self._commit(nodes)
        return True

    def delete_node(self, node_id: Optional[str]) -> bool:
        if node_id not in self._document:
            logger.debug("Ignoring delete of unknown block %s", node_id)
            return False
        self._commit([node for node in self._document if node.id != node_id])
        return True

    def duplicate_node(self, node_id: Optional[str]) -> Optional[ContentBlockNode]:
        node = self._document.get(node_id)
        if node is None:
            return None
        clone = ContentBlockNode(id=self._new_id(node.type), type=node.type, props=copy.deepcopy(node.props))
        nodes = self._document.nodes
        nodes.insert(self._document.index_of(node.id) + 1, clone)
        self._commit(nodes)
        return clone

    # ---------------------------------------------------------- selection --
    def select(self, node_id: Optional[str]) -> None:
        node = self._document.get(node_id)
        self._selected = node.clone() if node else None
        self._emit_selection()

    def clear_selection(self) -> None:
        self.select(None)

    # ------------------------------------------------------------ history --
    def undo(self) -> bool:
        snapshot = self.history.undo()
        if snapshot is None:
            return False
        self._replace_document(snapshot)
        return True

    def redo(self) -> bool:
        snapshot = self.history.redo()
        if snapshot is None:
            return False
        self._replace_document(snapshot)
        return True

    # --------------------------------------------------------------- drag --
    def begin_drag(self, source: Union[str, DragSource]) -> DragSource:
        self._drag_source = decode_drag_source(source)
        self.drag_state = DragState.DRAG_IN_PROGRESS
        return self._drag_source

    def cancel_drag(self) -> None:
        self._drag_source = None
        self.drag_state = DragState.IDLE

    def drop(self, target_id: Optional[str]) -> bool:
        """Finish the current drag on ``target_id``; ``None`` means no drop target.

        Returns True when the document changed.
        """
        source = self._drag_source
        if self.drag_state is not DragState.DRAG_IN_PROGRESS or source is None:
            return False
        if target_id is None:
            self.cancel_drag()
            return False
        self.drag_state = DragState.COMMITTING
        try:
            if isinstance(source, PaletteSource):
                self.insert_from_palette(source.block_type)
                return True
            return self.reorder(source.node_id, target_id)
        finally:
            self.cancel_drag()

    def handle_drop(self, source: Union[str, DragSource], target_id: Optional[str]) -> bool:
        self.begin_drag(source)
        return self.drop(target_id)

    # -------------------------------------------------------------- pages --
    def select_page(self, index: int) -> None:
        if not 0 <= index < len(self._site.pages):
            return
        self._store_live_page()
        self._activate_page(index)

    def add_page(self, name: Optional[str] = None) -> int:
        existing = set(self._site.page_names())
        if name is None or not name.strip():
            counter = len(self._site.pages) + 1
            name = f"Page {counter}"
            while name in existing:
                counter += 1
                name = f"Page {counter}"
        name = name.strip()
        if name in existing:
            return self._site.find_page(name)
        self._site.pages.append(Page(name=name))
        self.dirty = True
        self.select_page(len(self._site.pages) - 1)
        return len(self._site.pages) - 1

    def rename_page(self, index: int, new_name: str) -> bool:
        new_name = (new_name or "").strip()
        if not 0 <= index < len(self._site.pages) or not new_name:
            return False
        if new_name in self._site.page_names():
            return False
        self._site.pages[index].name = new_name
        self.dirty = True
        return True

    def delete_page(self, index: int) -> bool:
        if len(self._site.pages) <= 1 or not 0 <= index < len(self._site.pages):
            return False
        self._store_live_page()
        del self._site.pages[index]
        self.dirty = True
        self._activate_page(max(0, index - 1))
        return True

    # ---------------------------------------------------------- site / IO --
    def to_site(self) -> Site:
        self._store_live_page()
        return Site(
            name=self._site.name,
            pages=[Page(name=page.name, document=page.document.deep_copy()) for page in self._site.pages],
            theme=copy.deepcopy(self._site.theme),
        )

    def load_site(self, site: Site) -> None:
        self._site = site
        self.dirty = False
        self._activate_page(0)

    def save(self, path: str | Path) -> StorageResult:
        try:
            storage.save_site(path, self.to_site())
        except StorageError as exc:
            logger.warning("Save failed: %s", exc)
            return StorageResult(ok=False, message=str(exc))
        self.dirty = False
        logger.info("Saved site to %s", path)
        return StorageResult(ok=True, message=f"Saved {Path(path).name}")

    def load(self, path: str | Path) -> StorageResult:
        try:
            site = storage.load_site(path)
        except StorageError as exc:
            logger.warning("Load failed: %s", exc)
            return StorageResult(ok=False, message=str(exc))
        self.load_site(site)
        logger.info("Loaded site from %s", path)
        return StorageResult(ok=True, message=f"Opened {Path(path).name}")

    def import_layout(self, payload: Any, name: Optional[str] = None) -> None:
        """Replace the site with a generated layout, normalized to editor block shapes.

        The imported site has no file yet, so it starts out dirty.
        """
        site = site_from_layout(payload, canonical=True, name=name)
        if not site.theme:
            site.theme = copy.deepcopy(self._site.theme)
        self.load_site(site)
        self.dirty = True

    def import_file(self, path: str | Path) -> StorageResult:
        try:
            payload = storage.read_layout(path)
        except StorageError as exc:
            logger.warning("Import failed: %s", exc)
            return StorageResult(ok=False, message=str(exc))
        self.import_layout(payload)
        logger.info("Imported layout from %s", path)
        return StorageResult(ok=True, message=f"Imported {Path(path).name}")

    # ----------------------------------------------------------- internal --
    def _new_id(self, block_type: str) -> str:
        base = block_type or "block"
        if f"{base}-".startswith(PALETTE_PREFIX):
            base = "block"
        while True:
            candidate = f"{base}-{uuid.uuid4().hex[:8]}"
            if candidate not in self._document:
                return candidate

    def _commit(self, nodes: List[ContentBlockNode]) -> None:
        self._document = self._document.with_nodes(nodes)
        self.history.commit(self._document)
        self.dirty = True
        self._revalidate_selection()
        self._notify()

    def _replace_document(self, document: Document) -> None:
        self._document = document
        self.dirty = True
        self._revalidate_selection()
        self._notify()

    def _store_live_page(self) -> None:
        if 0 <= self._page_index < len(self._site.pages):
            self._site.pages[self._page_index].document = self._document.deep_copy()

    def _activate_page(self, index: int) -> None:
        self._page_index = index
        self._document = self._site.pages[index].document.deep_copy()
        self.history = HistoryLog(self._document, max_depth=self.history_limit)
        self._selected = None
        self.cancel_drag()
        self._notify()

    def _revalidate_selection(self) -> None:
        if self._selected is None:
            return
        node = self._document.get(self._selected.id)
        self._selected = node.clone() if node else None

    def _emit_selection(self) -> None:
        if self.on_selection_changed is not None:
            self.on_selection_changed(self._selected)

    def _notify(self) -> None:
        if self.on_document_changed is not None:
            self.on_document_changed(self._document)
        self._emit_selection()
        if self.on_history_changed is not None:
            self.on_history_changed(self.can_undo(), self.can_redo())
