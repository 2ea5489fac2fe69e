"""Resolve a block (or a raw section dict) to the template that renders it.

Resolution order:

1. a runtime :class:`RenderRegistry` binding for the normalized type,
2. the static :data:`TYPE_MAP`,
3. the shape heuristics in :data:`HEURISTICS`, first match wins.

Generated layouts do not use a fixed vocabulary for types or field names, so
the map is deliberately many-to-one and the heuristics look at props only.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from ..core.models import ContentBlockNode

logger = logging.getLogger(__name__)

_SEPARATORS_RE = re.compile(r"[-_]")


def normalize_type(value: Any) -> str:
    """Lower-case a type label and strip ``-``/``_`` so spelling variants collide."""
    if value is None:
        return ""
    return _SEPARATORS_RE.sub("", str(value).lower())


TYPE_MAP: Dict[str, str] = {
    "hero": "hero",
    "herominimal": "hero",
    "herosplit": "hero",
    "herooverlay": "hero",
    "herogradient": "hero",
    "herovideo": "hero",
    "heroproduct": "hero",
    "heroheadline": "hero",
    "heroillustration": "hero",

    "features": "features",
    "featuresgrid": "features",
    "featuresalternating": "features",
    "featurestabs": "features",
    "benefitslist": "features",

    "products": "product_grid",
    "productgrid": "product_grid",
    "productfeatured": "product_grid",
    "featuredproducts": "product_grid",
    "services": "product_grid",
    "servicescards": "product_grid",
    "collection": "product_grid",
    "portfolio": "product_grid",
    "portfolioshowcase": "product_grid",
    "casestudy": "product_grid",
    "casestudies": "product_grid",

    "categories": "categories",
    "categoriesvisual": "categories",
    "categorieslist": "categories",

    "testimonials": "testimonials",
    "testimonialscards": "testimonials",
    "testimonialsslider": "testimonials",
    "reviews": "testimonials",
    "reviewsaggregate": "testimonials",
    "clientlogos": "testimonials",
    "successstories": "testimonials",
    "partners": "testimonials",

    "pricing": "pricing",
    "pricingcards": "pricing",
    "pricingtiers": "pricing",
    "pricingtable": "pricing",

    "gallery": "gallery",
    "gallerymasonry": "gallery",
    "gallerygrid": "gallery",
    "gallerycarousel": "gallery",
    "videoembed": "video",
    "video": "video",

    "stats": "stats",
    "statistics": "stats",
    "statsshowcase": "stats",

    "process": "process",
    "processsteps": "process",
    "steps": "process",
    "howitworks": "process",
    "timeline": "process",

    "about": "about",
    "aboutstory": "about",
    "textblock": "about",
    "content": "about",

    "team": "team",
    "teamgrid": "team",
    "teamspotlight": "team",

    "faq": "faq",
    "faqs": "faq",
    "faqaccordion": "faq",

    "cta": "cta",
    "ctabanner": "cta",
    "ctainline": "cta",
    "calltoaction": "cta",
    "newsletter": "newsletter",
    "formnewsletter": "newsletter",
    "waitlist": "newsletter",

    "contact": "contact",
    "contactform": "contact",
    "formcontact": "contact",
    "formbooking": "contact",
    "location": "location",
    "locations": "location",
    "locationmap": "location",
    "hoursinfo": "location",

    "instagramfeed": "social_feed",
    "socialfeed": "social_feed",

    "navbar": "navbar",
    "navigation": "navbar",
    "footer": "footer",

    "signup": "auth_form",
    "login": "auth_form",
    "divider": "divider",
    "spacer": "spacer",
    "image": "image",
    "button": "button",
}


class RenderRegistry:
    """Per-renderer bindings from type keys to template ids.

    Bindings are looked up before :data:`TYPE_MAP`, so embedding code can add
    new types or reroute existing ones without touching the static table.
    """

    def __init__(self, bindings: Optional[Mapping[str, str]] = None) -> None:
        self._bindings: Dict[str, str] = {}
        for key, template_id in (bindings or {}).items():
            self.register(key, template_id)

    def register(self, type_key: str, template_id: str) -> bool:
        key = normalize_type(type_key)
        if not key or not template_id:
            return False
        self._bindings[key] = str(template_id)
        return True

    def unregister(self, type_key: str) -> None:
        self._bindings.pop(normalize_type(type_key), None)

    def get(self, type_key: str) -> Optional[str]:
        return self._bindings.get(normalize_type(type_key))

    def __contains__(self, type_key: object) -> bool:
        return normalize_type(type_key) in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)


# ---------------------------------------------------------------------------
# Shape heuristics
# ---------------------------------------------------------------------------


def _first(value: Any) -> Dict[str, Any]:
    if isinstance(value, list) and value and isinstance(value[0], dict):
        return value[0]
    return {}


def _title(s: Mapping[str, Any]) -> Any:
    return s.get("title") or s.get("heading")


def _subtitle(s: Mapping[str, Any]) -> Any:
    return s.get("subtitle") or s.get("subheading") or s.get("description") or s.get("tagline")


def looks_like_navigation(t: str, s: Mapping[str, Any]) -> bool:
    return isinstance(s.get("links"), list) and bool(s.get("logo") or s.get("brand") or "nav" in t)


def looks_like_hero(t: str, s: Mapping[str, Any]) -> bool:
    return bool(_title(s) and _subtitle(s))


def looks_like_catalog(t: str, s: Mapping[str, Any]) -> bool:
    if isinstance(s.get("products"), list):
        return True
    first = _first(s.get("items"))
    return bool(first.get("image") or first.get("imageUrl") or "price" in first)


def looks_like_pricing(t: str, s: Mapping[str, Any]) -> bool:
    if isinstance(s.get("plans"), list):
        return True
    return isinstance(_first(s.get("items")).get("features"), list)


def looks_like_team(t: str, s: Mapping[str, Any]) -> bool:
    return isinstance(s.get("team"), list)


def looks_like_testimonials(t: str, s: Mapping[str, Any]) -> bool:
    if isinstance(s.get("testimonials"), list):
        return True
    first = _first(s.get("items"))
    return bool(first.get("text") or first.get("quote") or first.get("rating"))


def looks_like_gallery(t: str, s: Mapping[str, Any]) -> bool:
    return isinstance(s.get("images"), list)


def looks_like_newsletter(t: str, s: Mapping[str, Any]) -> bool:
    return "newsletter" in t or bool(s.get("placeholderEmail"))


def looks_like_footer(t: str, s: Mapping[str, Any]) -> bool:
    return "footer" in t or bool(s.get("companyName"))


def looks_like_text(t: str, s: Mapping[str, Any]) -> bool:
    return bool(s.get("content") or s.get("text") or _subtitle(s) or _title(s))


@dataclass(frozen=True)
class Heuristic:
    name: str
    predicate: Callable[[str, Mapping[str, Any]], bool]
    template: str


# The order is the tie-break: a block matching several shapes takes the first.
HEURISTICS: Tuple[Heuristic, ...] = (
    Heuristic("navigation", looks_like_navigation, "navbar"),
    Heuristic("hero", looks_like_hero, "hero"),
    Heuristic("catalog", looks_like_catalog, "product_grid"),
    Heuristic("pricing", looks_like_pricing, "pricing"),
    Heuristic("team", looks_like_team, "team"),
    Heuristic("testimonials", looks_like_testimonials, "testimonials"),
    Heuristic("gallery", looks_like_gallery, "gallery"),
    Heuristic("newsletter", looks_like_newsletter, "newsletter"),
    Heuristic("footer", looks_like_footer, "footer"),
    Heuristic("text", looks_like_text, "text"),
)


def classify_shape(type_label: Any, props: Mapping[str, Any]) -> Optional[Heuristic]:
    t = str(type_label or "").lower()
    for heuristic in HEURISTICS:
        if heuristic.predicate(t, props):
            return heuristic
    return None


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Resolution:
    template: str
    source: str  # 'registry' | 'map' | 'heuristic'
    normalized_type: str


def split_node(node: Any) -> Tuple[str, Dict[str, Any]]:
    """Return ``(type, props)`` for a block, a flat section or a ``{type, props}`` dict."""
    if isinstance(node, ContentBlockNode):
        return node.type or "", dict(node.props or {})
    if not isinstance(node, Mapping):
        return "", {}
    type_label = node.get("type")
    type_label = "" if type_label is None else str(type_label)
    nested = node.get("props")
    if isinstance(nested, Mapping) and set(node.keys()) <= {"id", "type", "props"}:
        return type_label, dict(nested)
    return type_label, {key: value for key, value in node.items() if key != "type"}


def resolve(
    node: Any,
    registry: Optional[RenderRegistry] = None,
    known_templates: Optional[Mapping[str, Any]] = None,
) -> Optional[Resolution]:
    """Pick the template for ``node``; ``None`` when nothing matches."""
    type_label, props = split_node(node)
    key = normalize_type(type_label)

    if registry is not None and key:
        override = registry.get(key)
        if override is not None:
            if known_templates is None or override in known_templates:
                return Resolution(override, "registry", key)
            logger.warning("Registry binds '%s' to unknown template '%s'; ignoring", key, override)

    mapped = TYPE_MAP.get(key)
    if mapped is not None:
        return Resolution(mapped, "map", key)

    heuristic = classify_shape(type_label, props)
    if heuristic is None:
        logger.debug("No template for block type '%s'", type_label)
        return None
    logger.debug("Block type '%s' resolved by %s heuristic", type_label, heuristic.name)
    return Resolution(heuristic.template, "heuristic", key)
