"""Data models for the block builder."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence

# Drag ids for palette items use this prefix, so block ids never may.
RESERVED_ID_PREFIX = "library-"


@dataclass
class ContentBlockNode:
    """One content block on a page: an id, a free-form type label and its props."""

    id: str
    type: str = ""
    props: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.type is None:
            self.type = ""
        if self.props is None:
            self.props = {}

    def clone(self) -> "ContentBlockNode":
        return ContentBlockNode(id=self.id, type=self.type, props=copy.deepcopy(self.props))


class Document:
    """Ordered sequence of blocks; order is the page's vertical stacking order.

    A document never holds two nodes with the same id, and no id starts with
    :data:`RESERVED_ID_PREFIX`. It is replaced wholesale by the editor session
    rather than edited in place.
    """

    __slots__ = ("_nodes", "_index")

    def __init__(self, nodes: Optional[Sequence[ContentBlockNode]] = None) -> None:
        self._nodes: List[ContentBlockNode] = list(nodes or [])
        self._index: Dict[str, int] = {}
        for position, node in enumerate(self._nodes):
            if node.id in self._index:
                raise ValueError(f"Duplicate block id '{node.id}'")
            if str(node.id).startswith(RESERVED_ID_PREFIX):
                raise ValueError(f"Block id '{node.id}' uses the reserved prefix '{RESERVED_ID_PREFIX}'")
            self._index[node.id] = position

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[ContentBlockNode]:
        return iter(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    def __getitem__(self, position: int) -> ContentBlockNode:
        return self._nodes[position]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return self._nodes == other._nodes

    def __repr__(self) -> str:
        return f"Document({[node.id for node in self._nodes]!r})"

    @property
    def nodes(self) -> List[ContentBlockNode]:
        return list(self._nodes)

    def ids(self) -> List[str]:
        return [node.id for node in self._nodes]

    def get(self, node_id: Optional[str]) -> Optional[ContentBlockNode]:
        if node_id is None:
            return None
        position = self._index.get(node_id)
        return None if position is None else self._nodes[position]

    def index_of(self, node_id: Optional[str]) -> int:
        if node_id is None:
            return -1
        return self._index.get(node_id, -1)

    def with_nodes(self, nodes: Sequence[ContentBlockNode]) -> "Document":
        return Document(nodes)

    def deep_copy(self) -> "Document":
        return Document([node.clone() for node in self._nodes])


@dataclass
class Page:
    name: str
    document: Document = field(default_factory=Document)


@dataclass
class Site:
    """A named collection of pages plus the theme shared by every page."""

    name: str = "My Store"
    pages: List[Page] = field(default_factory=list)
    theme: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.pages:
            self.pages = [Page(name="Home")]

    def page_names(self) -> List[str]:
        return [page.name for page in self.pages]

    def find_page(self, name: str) -> int:
        for idx, page in enumerate(self.pages):
            if page.name == name:
                return idx
        return -1
