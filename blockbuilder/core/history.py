"""Linear undo/redo history built from deep document snapshots."""

from __future__ import annotations

import logging
from typing import List, Optional

from .models import Document

logger = logging.getLogger(__name__)


class HistoryLog:
    """Snapshots of a document plus a cursor pointing at the current one.

    Snapshots are deep copies on the way in and on the way out, so block props
    that are later edited in place (nested lists of links, features, plans...)
    can never leak into history.

    ``max_depth`` caps the number of stored snapshots; ``None`` or ``0`` keeps
    everything. When the cap is exceeded the oldest snapshots are dropped.
    """

    def __init__(self, initial: Optional[Document] = None, max_depth: Optional[int] = None) -> None:
        if max_depth is not None and max_depth < 0:
            raise ValueError("max_depth must be >= 0")
        self.max_depth = max_depth or None
        self._snapshots: List[Document] = []
        self._cursor = 0
        self.reset(initial if initial is not None else Document())

    def __len__(self) -> int:
        return len(self._snapshots)

    @property
    def cursor(self) -> int:
        return self._cursor

    def reset(self, document: Document) -> None:
        self._snapshots = [document.deep_copy()]
        self._cursor = 0

    def commit(self, document: Document) -> None:
        del self._snapshots[self._cursor + 1:]
        self._snapshots.append(document.deep_copy())
        self._cursor = len(self._snapshots) - 1
        if self.max_depth is not None and len(self._snapshots) > self.max_depth:
            overflow = len(self._snapshots) - self.max_depth
            del self._snapshots[:overflow]
            self._cursor -= overflow
        logger.debug("History commit: %d snapshot(s), cursor at %d", len(self._snapshots), self._cursor)

    def undo(self) -> Optional[Document]:
        """Step back one snapshot; ``None`` means there is nothing to undo."""
        if not self.can_undo():
            return None
        self._cursor -= 1
        return self._snapshots[self._cursor].deep_copy()

    def redo(self) -> Optional[Document]:
        """Step forward one snapshot; ``None`` means there is nothing to redo."""
        if not self.can_redo():
            return None
        self._cursor += 1
        return self._snapshots[self._cursor].deep_copy()

    def can_undo(self) -> bool:
        return self._cursor > 0

    def can_redo(self) -> bool:
        return self._cursor < len(self._snapshots) - 1

    def current(self) -> Document:
        return self._snapshots[self._cursor].deep_copy()
