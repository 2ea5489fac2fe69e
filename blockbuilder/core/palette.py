"""Block palette: the draggable block types and their starter props."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

FALLBACK_BLOCK_TYPE = "textblock"


@dataclass(frozen=True)
class PaletteItem:
    type: str
    icon: str
    label: str


PALETTE: List[PaletteItem] = [
    PaletteItem("navbar", "📋", "Navigation"),
    PaletteItem("hero", "🎯", "Hero"),
    PaletteItem("features", "⭐", "Features"),
    PaletteItem("textblock", "📝", "Text Block"),
    PaletteItem("footer", "📄", "Footer"),
    PaletteItem("faq", "❓", "FAQ"),
    PaletteItem("gallery", "🖼️", "Image Gallery"),
    PaletteItem("newsletter", "📬", "Newsletter"),
    PaletteItem("signup", "🧑‍💻", "Sign Up"),
    PaletteItem("login", "🔐", "Login"),
    PaletteItem("waitlist", "⏳", "Waitlist"),
    PaletteItem("contact", "✉️", "Contact"),
    PaletteItem("collection", "🛍️", "Collection Grid"),
    PaletteItem("testimonials", "💬", "Testimonials"),
    PaletteItem("pricing", "💲", "Pricing"),
    PaletteItem("cta", "📣", "Call to Action"),
    PaletteItem("divider", "➖", "Divider"),
    PaletteItem("spacer", "⬜", "Spacer"),
    PaletteItem("image", "🖼️", "Image"),
    PaletteItem("video", "🎞️", "Video"),
    PaletteItem("button", "🔘", "Button"),
]


DEFAULT_PROPS: Dict[str, Dict[str, Any]] = {
    "hero": {
        "title": "New Hero Section",
        "subtitle": "Add your subtitle here",
        "buttonText": "Click Me",
        "buttonLink": "#",
        "bgColor": "#3b82f6",
        "textColor": "#ffffff",
        "image": "https://images.pexels.com/photos/3184291/pexels-photo-3184291.jpeg?auto=compress&cs=tinysrgb&w=1200",
    },
    "features": {
        "title": "Features Section",
        "items": [
            {"icon": "⭐", "title": "Feature 1", "description": "Description here"},
            {"icon": "🎯", "title": "Feature 2", "description": "Description here"},
            {"icon": "🚀", "title": "Feature 3", "description": "Description here"},
        ],
        "bgColor": "#f9fafb",
        "textColor": "#111827",
    },
    "textblock": {
        "heading": "Text Block Heading",
        "content": "Add your content here. This is a flexible text block that you can customize.",
        "bgColor": "#ffffff",
        "textColor": "#374151",
        "alignment": "left",
    },
    "footer": {
        "companyName": "Company Name",
        "tagline": "Your company tagline",
        "links": [
            {"text": "Home", "url": "#"},
            {"text": "About", "url": "#"},
            {"text": "Contact", "url": "#"},
        ],
        "bgColor": "#1f2937",
        "textColor": "#f3f4f6",
    },
    "navbar": {
        "logo": "Logo",
        "links": [
            {"text": "Home", "url": "#"},
            {"text": "Products", "url": "#"},
            {"text": "About", "url": "#"},
            {"text": "Contact", "url": "#"},
        ],
        "bgColor": "#ffffff",
        "textColor": "#1f2937",
    },
    "faq": {
        "title": "Frequently Asked Questions",
        "items": [
            {"question": "What is your return policy?", "answer": "30 days return policy."},
            {"question": "Do you ship internationally?", "answer": "Yes, worldwide."},
        ],
    },
    "gallery": {
        "title": "Image Gallery",
        "columns": 3,
        "images": [
            "https://picsum.photos/seed/1/400/300",
            "https://picsum.photos/seed/2/400/300",
            "https://picsum.photos/seed/3/400/300",
        ],
    },
    "newsletter": {
        "title": "Join our newsletter",
        "description": "Get updates in your inbox.",
        "placeholder": "you@example.com",
        "ctaText": "Subscribe",
    },
    "signup": {
        "title": "Create an account",
        "description": "Sign up to start shopping.",
    },
    "login": {
        "title": "Welcome back",
    },
    "waitlist": {
        "title": "Join the waitlist",
        "description": "Be the first to know.",
        "placeholder": "you@example.com",
        "ctaText": "Notify me",
    },
    "contact": {
        "title": "Contact us",
        "description": "We usually reply within 24 hours.",
    },
    "collection": {
        "title": "Our Collection",
        "items": [
            {"title": "Product 1", "price": "$19", "image": "https://picsum.photos/seed/p1/300/200"},
            {"title": "Product 2", "price": "$29", "image": "https://picsum.photos/seed/p2/300/200"},
            {"title": "Product 3", "price": "$39", "image": "https://picsum.photos/seed/p3/300/200"},
        ],
    },
    "testimonials": {
        "title": "What customers say",
        "items": [
            {"quote": "Amazing products!", "author": "Alex"},
            {"quote": "Great support and fast delivery.", "author": "Sam"},
        ],
    },
    "pricing": {
        "title": "Pricing",
        "plans": [
            {"name": "Basic", "price": "$9", "features": ["Feature A", "Feature B"]},
            {"name": "Pro", "price": "$29", "features": ["Everything in Basic", "Feature C"]},
        ],
    },
    "cta": {
        "heading": "Ready to get started?",
        "subheading": "Join us today",
        "buttonText": "Get started",
        "linkType": "external",
        "buttonLink": "#",
        "pageName": "",
    },
    "divider": {"thickness": 2, "color": "#e5e7eb"},
    "spacer": {"height": 32},
    "image": {"src": "https://picsum.photos/seed/solo/800/400", "alt": "Image"},
    "video": {"url": "https://www.youtube.com/embed/dQw4w9WgXcQ"},
    "button": {"text": "Click me", "linkType": "external", "link": "#", "pageName": "", "variant": "primary"},
}


def default_props(block_type: str) -> Tuple[str, Dict[str, Any]]:
    """Return ``(type, props)`` for a new block.

    Unknown types fall back to the text block template, including its type.
    """
    key = (block_type or "").strip()
    if key not in DEFAULT_PROPS:
        key = FALLBACK_BLOCK_TYPE
    return key, copy.deepcopy(DEFAULT_PROPS[key])
