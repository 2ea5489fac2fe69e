from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional, Tuple

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from blockbuilder.core.composer import (
    PALETTE_PREFIX,
    DragState,
    EditorSession,
    PaletteSource,
    ReorderSource,
    decode_drag_source,
    palette_drag_id,
)
from blockbuilder.core.models import ContentBlockNode, Document, Page, Site
from blockbuilder.core.palette import DEFAULT_PROPS


def _pairs(session: EditorSession) -> List[Tuple[str, dict]]:
    return [(node.type, node.props) for node in session.document]


def test_concrete_hero_footer_scenario() -> None:
    session = EditorSession()
    hero = session.insert_from_palette("hero")
    footer = session.insert_from_palette("footer")
    assert session.reorder(footer.id, hero.id)
    assert session.document.ids() == [footer.id, hero.id]

    assert session.undo()
    assert session.document.ids() == [hero.id, footer.id]
    assert session.undo()
    assert session.document.ids() == [hero.id]
    assert session.undo()
    assert session.document.ids() == []
    assert not session.undo()


def test_insert_uses_palette_template_and_unique_ids() -> None:
    session = EditorSession()
    first = session.insert_from_palette("pricing")
    second = session.insert_from_palette("pricing")
    assert first.type == "pricing"
    assert first.props == DEFAULT_PROPS["pricing"]
    assert first.id != second.id
    assert not first.id.startswith(PALETTE_PREFIX)
    assert session.can_undo()


def test_insert_unknown_type_falls_back_to_text_block() -> None:
    session = EditorSession()
    node = session.insert_from_palette("hologram")
    assert node.type == "textblock"
    assert node.props == DEFAULT_PROPS["textblock"]


def test_inserted_props_are_independent_of_palette_defaults() -> None:
    session = EditorSession()
    node = session.insert_from_palette("navbar")
    session.document.get(node.id).props["links"].append({"text": "Extra"})
    assert len(DEFAULT_PROPS["navbar"]["links"]) == 4


def test_generated_ids_never_use_palette_prefix() -> None:
    session = EditorSession(site=Site(pages=[Page("Home", Document([ContentBlockNode("library", "library")]))]))
    clone = session.duplicate_node("library")
    assert clone is not None
    assert not clone.id.startswith(PALETTE_PREFIX)


def test_undo_all_commits_restores_initial_document() -> None:
    start = Document([ContentBlockNode("a", "hero", {"title": "A", "subtitle": "S"}), ContentBlockNode("b", "footer")])
    session = EditorSession(site=Site(pages=[Page("Home", start)]))
    before = _pairs(session)

    session.insert_from_palette("gallery")
    session.update_props("a", {"title": "Changed"})
    session.reorder("b", "a")
    session.delete_node("a")
    commits = 4
    assert session.can_undo()

    for _ in range(commits):
        assert session.undo()
    assert session.document.ids() == ["a", "b"]
    assert _pairs(session) == before
    assert not session.can_undo()


def test_redo_restores_and_new_edit_discards_redo() -> None:
    session = EditorSession()
    session.insert_from_palette("hero")
    node = session.insert_from_palette("faq")
    after = session.document.deep_copy()

    session.undo()
    assert session.can_redo()
    assert session.redo()
    assert session.document == after

    session.undo()
    session.insert_from_palette("spacer")
    assert not session.can_redo()
    assert not session.redo()
    assert node.id not in session.document


def test_reorder_is_a_stable_move() -> None:
    nodes = [ContentBlockNode(i, "textblock") for i in "abcd"]
    session = EditorSession(site=Site(pages=[Page("Home", Document(nodes))]))
    assert session.reorder("a", "c")
    assert session.document.ids() == ["b", "c", "a", "d"]
    assert session.reorder("d", "b")
    assert session.document.ids() == ["d", "b", "c", "a"]


def test_reorder_there_and_back_restores_order() -> None:
    nodes = [ContentBlockNode(i, "textblock") for i in "abc"]
    session = EditorSession(site=Site(pages=[Page("Home", Document(nodes))]))
    session.reorder("a", "b")
    session.reorder("b", "a")
    assert session.document.ids() == ["a", "b", "c"]
    assert session.history.cursor == 2


def test_reorder_noops_do_not_commit() -> None:
    nodes = [ContentBlockNode(i, "textblock") for i in "ab"]
    session = EditorSession(site=Site(pages=[Page("Home", Document(nodes))]))
    assert not session.reorder("a", "a")
    assert not session.reorder("a", "missing")
    assert not session.reorder("missing", "a")
    assert not session.reorder("a", None)
    assert not session.can_undo()
    assert not session.dirty


def test_update_props_is_a_shallow_merge() -> None:
    node = ContentBlockNode("n", "features", {"title": "T", "items": [{"title": "x"}, {"title": "y"}], "bg": "#fff"})
    session = EditorSession(site=Site(pages=[Page("Home", Document([node]))]))
    assert session.update_props("n", {"items": [{"title": "z"}], "extra": 1})
    props = session.document.get("n").props
    assert props == {"title": "T", "items": [{"title": "z"}], "bg": "#fff", "extra": 1}
    assert not session.update_props("missing", {"title": "nope"})
    assert len(session.history) == 2


def test_update_props_refreshes_selected_view() -> None:
    seen: List[Optional[ContentBlockNode]] = []
    session = EditorSession(on_selection_changed=seen.append)
    node = session.insert_from_palette("hero")
    session.select(node.id)
    session.update_props(node.id, {"title": "Fresh"})
    assert session.selected is not None
    assert session.selected.props["title"] == "Fresh"
    assert seen[-1] is not None and seen[-1].props["title"] == "Fresh"


def test_delete_clears_selection_of_deleted_node() -> None:
    session = EditorSession()
    keep = session.insert_from_palette("hero")
    drop = session.insert_from_palette("footer")
    session.select(drop.id)
    assert session.delete_node(drop.id)
    assert session.selected is None
    assert session.document.ids() == [keep.id]

    session.select(keep.id)
    assert not session.delete_node("missing")
    assert session.selected_id == keep.id


def test_undo_of_insert_clears_stale_selection() -> None:
    session = EditorSession()
    node = session.insert_from_palette("hero")
    session.select(node.id)
    session.undo()
    assert session.selected is None


def test_duplicate_inserts_deep_copy_after_source() -> None:
    session = EditorSession()
    first = session.insert_from_palette("navbar")
    last = session.insert_from_palette("footer")
    clone = session.duplicate_node(first.id)
    assert clone is not None
    assert session.document.ids() == [first.id, clone.id, last.id]
    assert clone.id != first.id
    assert clone.props == first.props

    session.document.get(clone.id).props["links"].append({"text": "New"})
    assert len(session.document.get(first.id).props["links"]) == 4
    assert session.duplicate_node("missing") is None


def test_decode_drag_source() -> None:
    assert decode_drag_source(palette_drag_id("hero")) == PaletteSource("hero")
    assert decode_drag_source("hero-1234") == ReorderSource("hero-1234")
    source = ReorderSource("x")
    assert decode_drag_source(source) is source


def test_palette_drop_inserts_when_there_is_a_target() -> None:
    session = EditorSession()
    session.begin_drag(palette_drag_id("gallery"))
    assert session.drag_state is DragState.DRAG_IN_PROGRESS
    assert session.drop("__canvas__")
    assert session.drag_state is DragState.IDLE
    assert [node.type for node in session.document] == ["gallery"]


def test_cancelled_drag_leaves_document_and_history_alone() -> None:
    session = EditorSession()
    session.insert_from_palette("hero")
    before = session.document.deep_copy()
    history_len = len(session.history)

    session.begin_drag(palette_drag_id("footer"))
    assert not session.drop(None)
    assert session.drag_state is DragState.IDLE
    assert session.document == before
    assert len(session.history) == history_len


def test_reorder_drop_and_idle_drop() -> None:
    nodes = [ContentBlockNode(i, "textblock") for i in "ab"]
    session = EditorSession(site=Site(pages=[Page("Home", Document(nodes))]))
    assert not session.drop("a")
    assert session.handle_drop("b", "a")
    assert session.document.ids() == ["b", "a"]
    assert not session.handle_drop("b", "b")
    assert len(session.history) == 2


def test_callbacks_report_history_availability() -> None:
    states: List[Tuple[bool, bool]] = []
    documents: List[Document] = []
    session = EditorSession(on_history_changed=lambda u, r: states.append((u, r)), on_document_changed=documents.append)
    session.insert_from_palette("hero")
    session.undo()
    session.redo()
    assert states == [(True, False), (False, True), (True, False)]
    assert len(documents) == 3


def test_pages_keep_their_own_documents() -> None:
    session = EditorSession()
    home_block = session.insert_from_palette("hero")
    index = session.add_page()
    assert session.pages == ["Home", "Page 2"]
    assert session.current_page_index == index
    assert len(session.document) == 0
    assert not session.can_undo()

    session.insert_from_palette("faq")
    session.select_page(0)
    assert session.document.ids() == [home_block.id]
    site = session.to_site()
    assert [len(page.document) for page in site.pages] == [1, 1]


def test_rename_and_delete_pages() -> None:
    session = EditorSession()
    session.add_page("About")
    assert not session.rename_page(1, "Home")
    assert not session.rename_page(1, "   ")
    assert session.rename_page(1, "Team")
    assert session.pages == ["Home", "Team"]

    assert session.delete_page(1)
    assert session.pages == ["Home"]
    assert not session.delete_page(0)


def test_load_site_resets_state() -> None:
    session = EditorSession()
    session.insert_from_palette("hero")
    session.load_site(Site(name="Shop", pages=[Page("Landing", Document([ContentBlockNode("x", "footer")]))]))
    assert session.site_name == "Shop"
    assert session.pages == ["Landing"]
    assert session.document.ids() == ["x"]
    assert not session.can_undo()
    assert not session.dirty


def test_document_rejects_palette_prefixed_ids() -> None:
    with pytest.raises(ValueError):
        Document([ContentBlockNode("library-hero", "hero")])
    with pytest.raises(ValueError):
        Document([ContentBlockNode("a", "hero"), ContentBlockNode("a", "footer")])
