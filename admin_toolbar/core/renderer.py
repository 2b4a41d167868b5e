from __future__ import annotations

"""HTML emission for a resolved toolbar tree.

Builds the markup with ``lxml.html`` element factories. Titles and
``meta.html`` are treated as markup fragments and parsed into the tree, so
contributors must escape plain text they put there (see
:mod:`admin_toolbar.core.markup`).
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from lxml import etree as ET
from lxml import html as LH
from lxml.html import builder as E

from .models import ResolvedNode, ResolvedTree

logger = logging.getLogger(__name__)

__all__ = ["HtmlRenderer"]

# (item, list element it renders into)
_Pending = Tuple[ResolvedNode, ET._Element]


def _append_markup(parent: ET._Element, markup: str) -> None:
    """Parse *markup* as a fragment and append it to *parent*."""
    if not markup:
        return
    fragments = LH.fragments_fromstring(markup)
    for fragment in fragments:
        if isinstance(fragment, str):
            if len(parent):
                last = parent[-1]
                last.tail = (last.tail or "") + fragment
            else:
                parent.text = (parent.text or "") + fragment
        else:
            parent.append(fragment)


def _classes(*names: Optional[str]) -> str:
    return " ".join(n for n in names if n)


class HtmlRenderer:
    """Render a :class:`ResolvedTree` into toolbar markup.

    Args:
        root_id: ``id`` of the outermost element.
        id_prefix: Prefix prepended to every node id in the ``li`` ids.
        toolbar_id: ``id`` of the inner navigation element.
    """

    def __init__(self, root_id: str = "wpadminbar", id_prefix: str = "wp-admin-bar-",
                 toolbar_id: str = "wp-toolbar") -> None:
        self.root_id = root_id
        self.toolbar_id = toolbar_id
        self.id_prefix = id_prefix

    def render(self, tree: ResolvedTree, inline_scripts: Sequence[str] = ()) -> str:
        """Return the toolbar markup as a unicode string."""
        quicklinks = E.DIV(E.CLASS("quicklinks"), id=self.toolbar_id, role="navigation")
        pending: List[_Pending] = []
        for ul in self._top_level(tree.roots, pending):
            quicklinks.append(ul)
        self._fill(pending)

        root = E.DIV(quicklinks, E.CLASS("nojq nojs"), id=self.root_id)
        for source in inline_scripts:
            script = ET.SubElement(root, "script")
            script.text = source

        markup = LH.tostring(root, encoding="unicode")
        logger.debug("Rendered toolbar: %d top-level item(s), %d chars", len(tree.roots), len(markup))
        return markup

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------
    def _fill(self, pending: List[_Pending]) -> None:
        """Render queued items into their lists without recursing."""
        stack = list(reversed(pending))
        while stack:
            node, ul = stack.pop()
            children: List[_Pending] = []
            ul.append(self._item(node, children))
            stack.extend(reversed(children))

    def _top_level(self, roots: Iterable[ResolvedNode], pending: List[_Pending]) -> List[ET._Element]:
        """Root nodes share a default list; root groups get their own."""
        lists: List[ET._Element] = []
        default: Optional[ET._Element] = None
        for item in roots:
            if item.record.is_group:
                if not item.children:
                    continue
                lists.append(self._group_list(item, "ab-top-menu", pending))
                continue
            if default is None:
                default = E.UL(E.CLASS("ab-top-menu"), id=f"{self.id_prefix}root-default")
                lists.append(default)
            pending.append((item, default))
        return lists

    def _group_list(self, group: ResolvedNode, base_class: str, pending: List[_Pending]) -> ET._Element:
        ul = E.UL(E.CLASS(_classes(base_class, group.record.meta.get("class"))),
                  id=f"{self.id_prefix}{group.id}")
        for child in self._flatten(group):
            pending.append((child, ul))
        return ul

    def _flatten(self, group: ResolvedNode) -> List[ResolvedNode]:
        # Nested groups flatten into their parent list.
        nodes: List[ResolvedNode] = []
        stack = list(reversed(group.children))
        while stack:
            child = stack.pop()
            if child.record.is_group:
                stack.extend(reversed(child.children))
            else:
                nodes.append(child)
        return nodes

    def _item(self, node: ResolvedNode, pending: List[_Pending]) -> ET._Element:
        record = node.record
        meta = record.meta
        has_children = any(not c.record.is_group or c.children for c in node.children)

        li = E.LI(id=f"{self.id_prefix}{record.id}")
        css = _classes("menupop" if has_children else None, meta.get("class"))
        if css:
            li.set("class", css)

        if record.href:
            inner = ET.SubElement(li, "a", {"class": "ab-item", "href": record.href})
            if has_children:
                inner.set("aria-haspopup", "true")
            for attr in ("target", "rel", "lang", "dir", "title"):
                if meta.get(attr):
                    inner.set(attr, str(meta[attr]))
        else:
            inner = ET.SubElement(li, "div", {"class": "ab-item ab-empty-item"})
            if meta.get("title"):
                inner.set("title", str(meta["title"]))
        if meta.get("tabindex") is not None:
            inner.set("tabindex", str(meta["tabindex"]))
        _append_markup(inner, record.title)

        if meta.get("html"):
            _append_markup(li, meta["html"])

        if has_children:
            li.append(self._submenu(node, pending))
        return li

    def _submenu(self, node: ResolvedNode, pending: List[_Pending]) -> ET._Element:
        wrapper = E.DIV(E.CLASS("ab-sub-wrapper"))
        default: Optional[ET._Element] = None
        for child in node.children:
            if child.record.is_group:
                if child.children:
                    wrapper.append(self._group_list(child, "ab-submenu", pending))
                continue
            if default is None:
                default = E.UL(E.CLASS("ab-submenu"), id=f"{self.id_prefix}{node.id}-default")
                wrapper.append(default)
            pending.append((child, default))
        return wrapper
