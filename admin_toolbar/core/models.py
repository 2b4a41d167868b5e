from __future__ import annotations

"""Toolbar data structures.

Plain value objects shared by the store, the contributors and the renderer.
They contain no I/O and no host access, so they can be built freely in tests.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Union

__all__ = ["NodeKind", "Node", "Group", "NodeRecord", "ResolvedNode", "ResolvedTree"]


class NodeKind(Enum):
    """Tag distinguishing navigable nodes from container groups."""

    NODE = "node"
    GROUP = "group"


def _validate_ids(node_id: Any, parent: Any) -> None:
    if not isinstance(node_id, str) or not node_id:
        raise ValueError(f"Node id must be a non-empty string, got {node_id!r}")
    if parent is not None and (not isinstance(parent, str) or not parent):
        raise ValueError(f"Parent id must be None or a non-empty string, got {parent!r}")


@dataclass
class Node:
    """A single navigable or informational toolbar entry.

    Attributes
    ----------
    id
        Unique identifier within one render pass.
    parent
        Id of the parent node or group, ``None`` for the root level.
    title
        Markup or plain text shown for the item.
    href
        Link target; ``None`` renders a non-link item.
    meta
        Render hints (``class``, ``target``, ``tabindex``, ``html``, ...).
    """

    id: str
    parent: Optional[str] = None
    title: str = ""
    href: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=dict)

    kind = NodeKind.NODE

    def __post_init__(self) -> None:
        _validate_ids(self.id, self.parent)
        if self.title is None:
            self.title = ""
        if self.href is not None and not isinstance(self.href, str):
            raise ValueError(f"href for '{self.id}' must be a string or None")
        self.meta = dict(self.meta or {})
        tabindex = self.meta.get("tabindex")
        if tabindex is not None and not isinstance(tabindex, int):
            raise ValueError(f"meta.tabindex for '{self.id}' must be an int")

    @property
    def is_group(self) -> bool:
        return False


@dataclass
class Group:
    """A non-navigable container for sibling nodes."""

    id: str
    parent: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=dict)

    kind = NodeKind.GROUP
    title = ""
    href = None

    def __post_init__(self) -> None:
        _validate_ids(self.id, self.parent)
        self.meta = dict(self.meta or {})

    @property
    def is_group(self) -> bool:
        return True


NodeRecord = Union[Node, Group]


@dataclass
class ResolvedNode:
    """A record together with its resolved, ordered children."""

    record: NodeRecord
    children: List["ResolvedNode"] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.record.id

    def has_children(self) -> bool:
        return len(self.children) > 0


@dataclass
class ResolvedTree:
    """Finalized tree handed to the renderer.

    ``dropped`` lists the ids that were left out because their ancestor
    chain never reached the root.
    """

    roots: List[ResolvedNode] = field(default_factory=list)
    dropped: List[str] = field(default_factory=list)

    def walk(self) -> Iterator[ResolvedNode]:
        """Yield every resolved node depth-first, in render order."""
        stack = list(reversed(self.roots))
        while stack:
            item = stack.pop()
            yield item
            stack.extend(reversed(item.children))

    def ids(self) -> List[str]:
        return [item.id for item in self.walk()]

    def find(self, node_id: str) -> Optional[ResolvedNode]:
        for item in self.walk():
            if item.id == node_id:
                return item
        return None
