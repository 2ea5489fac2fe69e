from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from blockbuilder.core.composer import EditorSession
from blockbuilder.core.errors import StorageError
from blockbuilder.core.models import ContentBlockNode, Document, Page, Site
from blockbuilder.core import storage
from blockbuilder.core.storage import PROJECT_SUFFIX, SITE_VERSION, load_site, save_site


def _pairs(document: Document) -> list:
    return [(node.type, node.props) for node in document]


def test_save_and_load_site(tmp_path: Path) -> None:
    site = Site(
        name="Corner Shop",
        pages=[
            Page("Home", Document([ContentBlockNode("h", "hero", {"title": "Hi ✨"})])),
            Page("About", Document([ContentBlockNode("t", "textblock", {"content": "Us"})])),
        ],
        theme={"primaryColor": "#111111"},
    )
    target = tmp_path / "shop.blocksite"
    save_site(target, site)

    data = json.loads(target.read_text(encoding="utf-8"))
    assert data["version"] == SITE_VERSION
    assert data["layout"]["pages"][1]["sections"] == [{"type": "textblock", "content": "Us"}]
    assert "Hi ✨" in target.read_text(encoding="utf-8")

    loaded = load_site(target)
    assert loaded.name == "Corner Shop"
    assert loaded.theme == {"primaryColor": "#111111"}
    assert loaded.page_names() == ["Home", "About"]
    assert _pairs(loaded.pages[0].document) == [("hero", {"title": "Hi ✨"})]


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(StorageError) as info:
        load_site(tmp_path / "nope.blocksite")
    assert info.value.path == str(tmp_path / "nope.blocksite")


def test_bad_json(tmp_path: Path) -> None:
    target = tmp_path / "broken.blocksite"
    target.write_text("{not json", encoding="utf-8")
    with pytest.raises(StorageError):
        load_site(target)


def test_unserializable_props(tmp_path: Path) -> None:
    site = Site(pages=[Page("Home", Document([ContentBlockNode("a", "hero", {"when": object()})]))])
    with pytest.raises(StorageError):
        save_site(tmp_path / "x.blocksite", site)


def test_session_save_and_load(tmp_path: Path) -> None:
    session = EditorSession()
    session.insert_from_palette("hero")
    session.insert_from_palette("footer")
    assert session.dirty

    target = tmp_path / "site.blocksite"
    result = session.save(target)
    assert result.ok
    assert not session.dirty

    other = EditorSession()
    assert other.load(target).ok
    assert _pairs(other.document) == _pairs(session.document)
    assert not other.history.can_undo()


def test_failed_save_keeps_state(tmp_path: Path) -> None:
    session = EditorSession()
    session.insert_from_palette("hero")
    before = session.document.deep_copy()

    result = session.save(tmp_path)
    assert not result.ok
    assert result.message
    assert session.dirty
    assert session.document == before
    assert session.history.can_undo()


def test_failed_load_keeps_state(tmp_path: Path) -> None:
    session = EditorSession()
    node = session.insert_from_palette("faq")
    result = session.load(tmp_path / "missing.blocksite")
    assert not result.ok
    assert session.document.ids() == [node.id]
    assert session.dirty


def test_failed_write_keeps_previous_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    target = tmp_path / f"shop{PROJECT_SUFFIX}"
    save_site(target, Site(name="First"))
    before = target.read_text(encoding="utf-8")

    def fail_replace(src: object, dst: object) -> None:
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(storage.os, "replace", fail_replace)
    with pytest.raises(StorageError):
        save_site(target, Site(name="Second"))

    assert target.read_text(encoding="utf-8") == before
    assert [p.name for p in tmp_path.iterdir()] == [target.name]


def test_session_import_normalizes_generated_layout(tmp_path: Path) -> None:
    layout = tmp_path / "generated.json"
    layout.write_text(json.dumps({
        "name": "Bakery",
        "layout": {"sections": [
            {"type": "Hero", "title": "Fresh bread", "imageUrl": "bread.png"},
            {"type": "featuredproducts", "features": [{"title": "Sourdough"}]},
            {"type": "about-us", "text": "Since 1990"},
        ]},
    }), encoding="utf-8")

    session = EditorSession(site=Site(theme={"primaryColor": "#123456"}))
    result = session.import_file(layout)
    assert result.ok
    assert session.site_name == "Bakery"
    assert [node.type for node in session.document] == ["hero", "features", "textblock"]
    assert session.document[0].props["image"] == "bread.png"
    assert session.document[2].props["content"] == "Since 1990"
    assert session.theme == {"primaryColor": "#123456"}
    assert session.dirty
    assert not session.history.can_undo()


def test_session_import_failure_keeps_state(tmp_path: Path) -> None:
    session = EditorSession()
    node = session.insert_from_palette("faq")
    bad = tmp_path / "bad.json"
    bad.write_text("<html>", encoding="utf-8")

    result = session.import_file(bad)
    assert not result.ok
    assert session.document.ids() == [node.id]
