from __future__ import annotations

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from blockbuilder.core.generator import page_filenames, render_site, slugify
from blockbuilder.core.models import ContentBlockNode, Document, Page, Site


def test_slugify() -> None:
    assert slugify("About Us!") == "about-us"
    assert slugify("***") == "page"


def test_page_filenames_are_unique() -> None:
    site = Site(pages=[Page("Home"), Page("About"), Page("about"), Page("Index")])
    assert page_filenames(site) == ["index.html", "about.html", "about-2.html", "index-2.html"]


def test_render_site_writes_pages(tmp_path: Path) -> None:
    site = Site(
        name="Acme",
        pages=[
            Page("Home", Document([ContentBlockNode("h", "hero", {"title": "Welcome", "subtitle": "Hello", "buttonText": "Go"})])),
            Page("Contact", Document([ContentBlockNode("c", "contact", {})])),
        ],
        theme={"primaryColor": "#abcdef"},
    )
    written = render_site(site, tmp_path / "out")
    assert set(written) == {"Home", "Contact"}
    home = written["Home"].read_text(encoding="utf-8")
    assert written["Home"].name == "index.html"
    assert "Welcome" in home
    assert "#abcdef" in home
    assert "Contact us" in written["Contact"].read_text(encoding="utf-8")
