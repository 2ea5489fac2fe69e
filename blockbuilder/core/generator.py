"""Site export helpers."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from ..render.renderer import SectionRenderer
from .models import Site

logger = logging.getLogger(__name__)


def slugify(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-") or "page"


def page_filenames(site: Site) -> List[str]:
    """``index.html`` for the first page, a unique slug for the rest."""
    names: List[str] = []
    for idx, page in enumerate(site.pages):
        if idx == 0:
            names.append("index.html")
            continue
        slug = slugify(page.name)
        filename = f"{slug}.html"
        counter = 2
        while filename in names:
            filename = f"{slug}-{counter}.html"
            counter += 1
        names.append(filename)
    return names


def render_site(
    site: Site,
    output_dir: str | Path,
    theme: Optional[Mapping[str, Any]] = None,
    renderer: Optional[SectionRenderer] = None,
) -> Dict[str, Path]:
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    renderer = renderer or SectionRenderer()
    theme = theme if theme is not None else site.theme

    written: Dict[str, Path] = {}
    for page, filename in zip(site.pages, page_filenames(site)):
        html = renderer.render_page(page.document, theme, title=page.name, site_name=site.name)
        target = output_dir / filename
        target.write_text(html, encoding="utf-8")
        written[page.name] = target
    logger.info("Exported %d page(s) to %s", len(written), output_dir)
    return written
