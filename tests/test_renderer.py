from __future__ import annotations

import copy
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from blockbuilder.core.models import ContentBlockNode
from blockbuilder.core.palette import PALETTE, default_props
from blockbuilder.render.renderer import SectionRenderer
from blockbuilder.render.resolver import RenderRegistry


def test_render_escapes_props() -> None:
    renderer = SectionRenderer()
    html = renderer.render(ContentBlockNode("h", "hero", {"title": "<b>Hi</b>", "subtitle": "There"}))
    assert "&lt;b&gt;Hi&lt;/b&gt;" in html
    assert "<b>Hi</b>" not in html
    assert "There" in html


def test_every_palette_block_renders() -> None:
    renderer = SectionRenderer()
    for item in PALETTE:
        block_type, props = default_props(item.type)
        html = renderer.render(ContentBlockNode(f"{block_type}-1", block_type, props))
        assert html.startswith("<"), block_type


def test_blocks_with_missing_or_odd_props_still_render() -> None:
    renderer = SectionRenderer()
    for block_type in ("navbar", "pricing", "testimonials", "gallery", "faq", "footer"):
        assert renderer.render({"type": block_type})
        assert renderer.render({"type": block_type, "items": "oops", "links": 3, "images": None})


def test_unresolvable_block_renders_nothing() -> None:
    renderer = SectionRenderer()
    assert renderer.render({}) == ""
    assert renderer.render({"type": "unknown", "count": 1}) == ""


def test_custom_template_through_registry() -> None:
    renderer = SectionRenderer()
    renderer.add_template("banner", "<div class='banner'>{{ s.get('title') }}</div>")
    assert renderer.register("promo", "banner")
    assert "banner" in renderer.template_ids
    assert renderer.render({"type": "Promo", "title": "Sale"}) == "<div class='banner'>Sale</div>"

    # other renderers are unaffected
    assert SectionRenderer().render({"type": "promo", "title": "Sale"}).startswith("<section class=\"section text\"")


def test_broken_template_renders_nothing() -> None:
    renderer = SectionRenderer(
        registry=RenderRegistry({"fancy": "broken"}),
        templates={"broken": "{{ s.missing.call() }}"},
    )
    assert renderer.render({"type": "fancy"}) == ""


def test_render_page_wraps_sections() -> None:
    renderer = SectionRenderer()
    nodes = [
        ContentBlockNode("h", "hero", {"title": "Welcome", "subtitle": "Shop"}),
        ContentBlockNode("x", "unknown", {}),
        ContentBlockNode("f", "footer", {"companyName": "Acme & Co"}),
    ]
    page = renderer.render_page(nodes, {"primaryColor": "#ff0000"}, title="Home", site_name="Acme")
    assert page.startswith("<!doctype html>")
    assert "<title>Home · Acme</title>" in page
    assert page.index("Welcome") < page.index("Acme &amp; Co")
    assert "<section class=\"section hero\"" in page


def test_theme_tokens_reach_templates() -> None:
    renderer = SectionRenderer()
    html = renderer.render({"type": "hero", "title": "T", "buttonText": "Go"}, {"primaryColor": "#123456"})
    assert "#123456" in html


def test_render_document_keeps_order_and_gaps() -> None:
    renderer = SectionRenderer()
    html = renderer.render_document([{"type": "spacer", "height": 10}, {}, {"type": "divider"}])
    assert len(html) == 3
    assert html[0].startswith("<div class=\"section spacer\"")
    assert html[1] == ""
    assert html[2].startswith("<hr")


def test_render_is_pure() -> None:
    renderer = SectionRenderer()
    props = {
        "title": "Plans",
        "plans": [{"name": "Basic", "price": "$9", "features": ["One", "Two"]}],
    }
    theme = {"primaryColor": "#0f0f0f", "stylePreset": "dark"}
    node = ContentBlockNode("p", "pricing", copy.deepcopy(props))

    first = renderer.render(node, theme)
    second = renderer.render(node, theme)
    assert first == second
    assert node.props == props
    assert theme == {"primaryColor": "#0f0f0f", "stylePreset": "dark"}
