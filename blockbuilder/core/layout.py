"""Conversion between stored/AI-generated layouts and editor documents.

Stored layouts are lists of flat *sections* ``{"type": ..., **props}``. Field
names inside a section are not fixed, so loading is permissive: entries that
are not objects are skipped and nothing here raises on odd shapes.
"""

from __future__ import annotations

import copy
import json
import logging
from typing import Any, Dict, Iterable, List, Optional

from .models import RESERVED_ID_PREFIX, ContentBlockNode, Document, Page, Site
from .palette import FALLBACK_BLOCK_TYPE

logger = logging.getLogger(__name__)


def _unique_id(candidate: str, taken: set[str]) -> str:
    if candidate.startswith(RESERVED_ID_PREFIX):
        candidate = f"section-{candidate}"
    unique = candidate
    counter = 2
    while unique in taken:
        unique = f"{candidate}-{counter}"
        counter += 1
    taken.add(unique)
    return unique


def node_from_section(section: Dict[str, Any], index: int, taken: Optional[set[str]] = None) -> ContentBlockNode:
    raw_type = section.get("type")
    node_type = str(raw_type) if raw_type else FALLBACK_BLOCK_TYPE
    props = {key: copy.deepcopy(value) for key, value in section.items() if key != "type"}
    node_id = _unique_id(f"{str(raw_type or '').lower() or 'section'}-{index}", taken if taken is not None else set())
    return ContentBlockNode(id=node_id, type=node_type, props=props)


def document_from_sections(sections: Any, canonical: bool = False) -> Document:
    if not isinstance(sections, list):
        return Document()
    taken: set[str] = set()
    nodes: List[ContentBlockNode] = []
    for idx, section in enumerate(sections):
        if not isinstance(section, dict):
            logger.debug("Skipping non-object section at index %d", idx)
            continue
        if canonical:
            node = canonical_node(section, idx)
            node.id = _unique_id(node.id, taken)
        else:
            node = node_from_section(section, idx, taken)
        nodes.append(node)
    return Document(nodes)


def section_from_node(node: ContentBlockNode) -> Dict[str, Any]:
    section: Dict[str, Any] = {"type": node.type}
    for key, value in node.props.items():
        if key == "type":
            continue
        section[key] = copy.deepcopy(value)
    return section


def sections_from_document(document: Iterable[ContentBlockNode]) -> List[Dict[str, Any]]:
    return [section_from_node(node) for node in document]


# ---------------------------------------------------------------------------
# Canonical shapes
# ---------------------------------------------------------------------------


def _list_of_dicts(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def canonical_node(section: Dict[str, Any], index: int) -> ContentBlockNode:
    """Map an AI/preview section onto the editor's canonical block shapes."""
    t = str(section.get("type") or "").lower()
    node_id = f"{t or 'section'}-{index}"
    s = section

    if t == "navbar":
        links = s.get("links")
        if isinstance(links, list):
            link_list = [
                {
                    "text": link.get("text") or "Link",
                    "type": link.get("type") or ("page" if link.get("pageName") else "external"),
                    "pageName": link.get("pageName") or "",
                    "url": link.get("url") or ("" if link.get("pageName") else "#"),
                }
                for link in _list_of_dicts(links)
            ]
        else:
            link_list = [
                {"text": "Home", "type": "page", "pageName": "Home"},
                {"text": "Products", "type": "external", "url": "#"},
                {"text": "About", "type": "external", "url": "#"},
            ]
        return ContentBlockNode(node_id, "navbar", {
            "logo": s.get("logo") or "Logo",
            "links": link_list,
            "bgColor": s.get("bgColor") or "#ffffff",
            "textColor": s.get("textColor") or "#1f2937",
        })

    if t == "hero":
        return ContentBlockNode(node_id, "hero", {
            "title": s.get("title") or "New Hero Section",
            "subtitle": s.get("subtitle") or "Add your subtitle here",
            "buttonText": s.get("buttonText") or "Click Me",
            "buttonLink": s.get("buttonLink") or "#",
            "bgColor": s.get("bgColor") or "#3b82f6",
            "textColor": s.get("textColor") or "#ffffff",
            "image": s.get("image") or s.get("imageUrl") or "",
        })

    if t in ("features", "featuredproducts"):
        items = s.get("items") if isinstance(s.get("items"), list) else s.get("features")
        items = _list_of_dicts(items) or [
            {"icon": "⭐", "title": "Feature 1", "description": "Description here"},
            {"icon": "🎯", "title": "Feature 2", "description": "Description here"},
            {"icon": "🚀", "title": "Feature 3", "description": "Description here"},
        ]
        return ContentBlockNode(node_id, "features", {
            "title": s.get("title") or "Features Section",
            "items": [
                {
                    "icon": item.get("icon") or "⭐",
                    "title": item.get("title") or "Feature",
                    "description": item.get("description") or "Description here",
                }
                for item in items
            ],
            "bgColor": s.get("bgColor") or "#f9fafb",
            "textColor": s.get("textColor") or "#111827",
        })

    if t == "footer":
        links = s.get("links")
        link_list = _list_of_dicts(links) if isinstance(links, list) else [
            {"text": "Home", "url": "#"},
            {"text": "About", "url": "#"},
            {"text": "Contact", "url": "#"},
        ]
        return ContentBlockNode(node_id, "footer", {
            "companyName": s.get("companyName") or "Company Name",
            "tagline": s.get("tagline") or "Your company tagline",
            "links": [{"text": link.get("text") or "Link", "url": link.get("url") or "#"} for link in link_list],
            "bgColor": s.get("bgColor") or "#1f2937",
            "textColor": s.get("textColor") or "#f3f4f6",
        })

    return ContentBlockNode(node_id, "textblock", {
        "heading": s.get("heading") or s.get("title") or "Text Block Heading",
        "content": s.get("content") or s.get("text")
        or "Add your content here. This is a flexible text block that you can customize.",
        "bgColor": s.get("bgColor") or "#ffffff",
        "textColor": s.get("textColor") or "#374151",
        "alignment": s.get("alignment") or "left",
    })


# ---------------------------------------------------------------------------
# Whole layouts
# ---------------------------------------------------------------------------


def extract_embedded_json(raw: str) -> Any:
    """Parse JSON that was stored in place of (or wrapped inside) HTML.

    Returns ``None`` when nothing parseable is found.
    """
    trimmed = (raw or "").strip()
    if not trimmed:
        return None
    try:
        if trimmed.startswith("{") or trimmed.startswith("["):
            return json.loads(trimmed)
        starts = [i for i in (trimmed.find("{"), trimmed.find("[")) if i >= 0]
        if not starts:
            return None
        first = min(starts)
        last = max(trimmed.rfind("}"), trimmed.rfind("]"))
        if last <= first:
            return None
        return json.loads(trimmed[first:last + 1])
    except ValueError:
        return None


def _unique_page_name(name: str, taken: set[str]) -> str:
    unique = name
    counter = 2
    while unique in taken:
        unique = f"{name} ({counter})"
        counter += 1
    taken.add(unique)
    return unique


def site_from_layout(payload: Any, canonical: bool = False, name: Optional[str] = None) -> Site:
    """Build a :class:`Site` from a stored payload.

    Accepted shapes: ``{"layout": {"pages": [...]}}``, ``{"layout": {"sections":
    [...]}}``, a bare layout dict, or ``{"htmlContent": "..."}`` holding a JSON
    layout. Anything else gives a site with one empty ``Home`` page.
    """
    site_name = name or "My Store"
    theme: Dict[str, Any] = {}
    if not isinstance(payload, dict):
        return Site(name=site_name)
    if isinstance(payload.get("name"), str) and payload["name"].strip() and name is None:
        site_name = payload["name"].strip()
    if isinstance(payload.get("theme"), dict):
        theme = copy.deepcopy(payload["theme"])

    layout = payload.get("layout") if isinstance(payload.get("layout"), dict) else payload
    pages: List[Page] = []
    taken: set[str] = set()
    if isinstance(layout.get("pages"), list):
        for pidx, page_data in enumerate(layout["pages"]):
            if not isinstance(page_data, dict):
                continue
            page_name = str(page_data.get("name") or f"Page {pidx + 1}")
            pages.append(Page(
                name=_unique_page_name(page_name, taken),
                document=document_from_sections(page_data.get("sections"), canonical=canonical),
            ))
    elif isinstance(layout.get("sections"), list):
        pages.append(Page(name="Home", document=document_from_sections(layout["sections"], canonical=canonical)))
    elif isinstance(payload.get("htmlContent"), str):
        parsed = extract_embedded_json(payload["htmlContent"])
        if isinstance(parsed, dict) and isinstance(parsed.get("sections"), list):
            pages.append(Page(name="Home", document=document_from_sections(parsed["sections"])))
        else:
            logger.debug("htmlContent holds no JSON layout; starting with an empty page")

    return Site(name=site_name, pages=pages, theme=theme)


def layout_from_site(site: Site) -> Dict[str, Any]:
    if len(site.pages) > 1:
        return {
            "pages": [
                {"name": page.name, "sections": sections_from_document(page.document)}
                for page in site.pages
            ]
        }
    document = site.pages[0].document if site.pages else Document()
    return {"sections": sections_from_document(document)}
