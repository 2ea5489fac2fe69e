"""Render blocks to HTML with Jinja templates."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from jinja2 import DictLoader, Environment, TemplateError, select_autoescape
from markupsafe import Markup

from .resolver import RenderRegistry, Resolution, resolve, split_node
from .templates import BASE_TEMPLATE, SECTION_TEMPLATES
from .theme import get_theme_tokens

logger = logging.getLogger(__name__)

BASE_TEMPLATE_NAME = "base.html"


def _listof(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _obj(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _pick(*values: Any) -> Any:
    for value in values:
        if value is not None and value != "":
            return value
    return ""


def _stars(value: Any) -> int:
    try:
        rating = int(value) if value not in (None, "") else 5
    except (TypeError, ValueError):
        rating = 5
    return max(0, min(rating, 5))


class SectionRenderer:
    """Turns blocks into HTML fragments.

    Each renderer owns its template set and its :class:`RenderRegistry`, so two
    editors can register different overrides without affecting each other.
    """

    def __init__(self, registry: Optional[RenderRegistry] = None, templates: Optional[Mapping[str, str]] = None) -> None:
        self.registry = registry if registry is not None else RenderRegistry()
        self._sources: Dict[str, str] = dict(SECTION_TEMPLATES)
        if templates:
            self._sources.update(templates)
        self._env = self._build_env()

    def _build_env(self) -> Environment:
        mapping = {f"{template_id}.html": source for template_id, source in self._sources.items()}
        mapping[BASE_TEMPLATE_NAME] = BASE_TEMPLATE
        env = Environment(
            loader=DictLoader(mapping),
            autoescape=select_autoescape(["html", "xml"]),
        )
        env.filters["listof"] = _listof
        env.filters["obj"] = _obj
        env.globals["pick"] = _pick
        env.globals["stars"] = _stars
        return env

    @property
    def template_ids(self) -> List[str]:
        return sorted(self._sources)

    def add_template(self, template_id: str, source: str) -> None:
        """Add or replace a template; pair it with ``registry.register`` to route types to it."""
        self._sources[template_id] = source
        self._env = self._build_env()

    def register(self, type_key: str, template_id: str) -> bool:
        return self.registry.register(type_key, template_id)

    def resolve(self, node: Any) -> Optional[Resolution]:
        return resolve(node, self.registry, self._sources)

    def render(self, node: Any, theme: Optional[Mapping[str, Any]] = None) -> str:
        """Render one block; unresolvable or broken blocks give ``""``."""
        resolution = self.resolve(node)
        if resolution is None:
            return ""
        _, props = split_node(node)
        tokens = get_theme_tokens(theme)
        try:
            template = self._env.get_template(f"{resolution.template}.html")
            return template.render(s=props, theme=tokens).strip()
        except TemplateError as exc:
            logger.error("Template '%s' failed: %s", resolution.template, exc)
        except (TypeError, ValueError, AttributeError, KeyError) as exc:
            logger.error("Template '%s' failed on block props: %s", resolution.template, exc)
        return ""

    def render_document(self, nodes: Iterable[Any], theme: Optional[Mapping[str, Any]] = None) -> List[str]:
        return [self.render(node, theme) for node in nodes]

    def render_page(
        self,
        nodes: Iterable[Any],
        theme: Optional[Mapping[str, Any]] = None,
        title: str = "",
        site_name: str = "My Store",
    ) -> str:
        sections = [Markup(html) for html in self.render_document(nodes, theme) if html]
        template = self._env.get_template(BASE_TEMPLATE_NAME)
        return template.render(
            sections=sections,
            title=title,
            site_name=site_name,
            theme=get_theme_tokens(theme),
        )
