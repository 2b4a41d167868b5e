from __future__ import annotations

"""Small markup builders for toolbar titles.

Titles are stored as markup strings. Building them through lxml keeps user
supplied text (display names, site names) escaped without ad-hoc string
concatenation.
"""

import html
from typing import Iterable, Optional

from lxml import etree as ET
from lxml import html as LH
from lxml.html import builder as E

__all__ = ["text", "to_markup", "span", "icon", "screen_reader_text", "join", "div", "input_field", "search_form", "img"]


def text(value: str) -> str:
    """Escape plain text so it survives being parsed as a title fragment."""
    return html.escape(value or "", quote=False)


def to_markup(element: ET._Element) -> str:
    """Serialize a single element without its tail."""
    element.tail = None
    return LH.tostring(element, encoding="unicode")


def span(content: str = "", css_class: Optional[str] = None, **attrs: str) -> str:
    if css_class:
        attrs["class"] = css_class
    el = E.SPAN(content, **attrs)
    return to_markup(el)


def icon() -> str:
    """The empty icon placeholder the stylesheet decorates."""
    return span("", "ab-icon", **{"aria-hidden": "true"})


def screen_reader_text(content: str, extra_class: str = "") -> str:
    css = "screen-reader-text" + (f" {extra_class}" if extra_class else "")
    return span(content, css)


def join(parts: Iterable[str]) -> str:
    return "".join(p for p in parts if p)


def div(css_class: str) -> str:
    return to_markup(E.DIV(E.CLASS(css_class)))


def img(src: str, css_class: str, srcset: Optional[str] = None, size: int = 16) -> str:
    attrs = {"class": css_class, "src": src, "alt": "", "width": str(size), "height": str(size)}
    if srcset:
        attrs["srcset"] = srcset
    return to_markup(E.IMG(**attrs))


def input_field(value: str, css_class: str, readonly: bool = True) -> str:
    attrs = {"class": css_class, "type": "text", "value": value}
    if readonly:
        attrs["readonly"] = "readonly"
    return to_markup(E.INPUT(**attrs))


def search_form(action: str, label: str) -> str:
    """Toolbar search form posting ``s`` to *action*."""
    form = E.FORM(
        E.INPUT(**{"class": "adminbar-input", "name": "s", "id": "adminbar-search",
                   "type": "text", "value": "", "maxlength": "150"}),
        E.LABEL(label, **{"for": "adminbar-search", "class": "screen-reader-text"}),
        E.INPUT(**{"type": "submit", "class": "adminbar-button", "value": label}),
        action=action, method="get", id="adminbarsearch",
    )
    return to_markup(form)
