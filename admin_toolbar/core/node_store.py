from __future__ import annotations

"""In-memory node store backing one toolbar render pass.

The store owns the id -> record mapping and the parent -> children
adjacency. Parents may be referenced before they exist; whether a reference
is dangling, or part of a parent loop, is only decided by
:meth:`NodeStore.resolve` at render time.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .exceptions import DanglingParentError, DuplicateIdError, ParentCycleError
from .models import Group, Node, NodeRecord, ResolvedNode, ResolvedTree

logger = logging.getLogger(__name__)

__all__ = ["NodeStore"]

# Key used in the adjacency map for the root level.
_ROOT: Optional[str] = None


class NodeStore:
    """Ordered store of toolbar nodes and groups.

    Ids are unique across nodes and groups. Children keep insertion order,
    which is also the render order.
    """

    def __init__(self) -> None:
        self._records: Dict[str, NodeRecord] = {}
        self._children: Dict[Optional[str], List[str]] = {_ROOT: []}

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def add_node(self, record: Optional[Node] = None, **fields: Any) -> Node:
        """Insert a :class:`Node`, either prebuilt or from keyword fields.

        Raises:
            DuplicateIdError: If the id is already taken.
            ValueError: If the fields fail record validation.
        """
        if record is None:
            record = Node(**fields)
        elif not isinstance(record, Node):
            raise TypeError(f"add_node expects a Node, got {type(record).__name__}")
        self._insert(record)
        return record

    def add_group(self, record: Optional[Group] = None, **fields: Any) -> Group:
        """Insert a :class:`Group`; same contract as :meth:`add_node`."""
        if record is None:
            record = Group(**fields)
        elif not isinstance(record, Group):
            raise TypeError(f"add_group expects a Group, got {type(record).__name__}")
        self._insert(record)
        return record

    def _insert(self, record: NodeRecord) -> None:
        if record.id in self._records:
            raise DuplicateIdError(record.id)
        self._records[record.id] = record
        self._children.setdefault(record.parent, []).append(record.id)
        logger.debug("Added %s '%s' (parent=%s)", record.kind.value, record.id, record.parent)

    def remove_node(self, node_id: str) -> bool:
        """Detach *node_id* and its whole subtree.

        Returns:
            True if the id was present, False otherwise.
        """
        record = self._records.get(node_id)
        if record is None:
            return False

        siblings = self._children.get(record.parent, [])
        if node_id in siblings:
            siblings.remove(node_id)

        removed = 0
        stack = [node_id]
        while stack:
            current = stack.pop()
            if self._records.pop(current, None) is not None:
                removed += 1
            stack.extend(self._children.pop(current, []))

        logger.debug("Removed '%s' and %d descendant(s)", node_id, removed - 1)
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get_node(self, node_id: str) -> Optional[NodeRecord]:
        return self._records.get(node_id)

    def get_children(self, node_id: Optional[str] = None) -> List[NodeRecord]:
        """Return the direct children of *node_id* in insertion order.

        ``None`` returns the root level.
        """
        return [self._records[child] for child in self._children.get(node_id, [])]

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[NodeRecord]:
        return iter(list(self._records.values()))

    # ------------------------------------------------------------------
    # Render-time resolution
    # ------------------------------------------------------------------
    def resolve(self) -> Tuple[ResolvedTree, List[DanglingParentError]]:
        """Build the finalized tree and report unreachable records.

        Only records reachable from the root level are kept. Every child of a
        parent id that was never created yields one
        :class:`DanglingParentError`; every record on a parent loop yields
        one :class:`ParentCycleError`. Records hanging below either are
        dropped without a report of their own.
        """
        tree = ResolvedTree()
        resolved: Dict[str, ResolvedNode] = {}

        # Iterative walk; pops children in insertion order.
        stack = [(root_id, tree.roots) for root_id in reversed(self._children[_ROOT])]
        while stack:
            node_id, siblings = stack.pop()
            item = ResolvedNode(self._records[node_id])
            resolved[node_id] = item
            siblings.append(item)
            for child_id in reversed(self._children.get(node_id, [])):
                stack.append((child_id, item.children))

        diagnostics: List[DanglingParentError] = []
        for parent_id, child_ids in self._children.items():
            if parent_id is _ROOT or parent_id in self._records or not child_ids:
                continue
            for child_id in child_ids:
                diagnostics.append(DanglingParentError(child_id, parent_id))
                logger.warning("Dropping '%s': parent '%s' was never created", child_id, parent_id)

        tree.dropped = [node_id for node_id in self._records if node_id not in resolved]
        for node_id in tree.dropped:
            if self._on_parent_loop(node_id):
                parent_id = self._records[node_id].parent
                diagnostics.append(ParentCycleError(node_id, parent_id))
                logger.warning("Dropping '%s': parent chain through '%s' loops back", node_id, parent_id)
        return tree, diagnostics

    def _on_parent_loop(self, node_id: str) -> bool:
        seen = set()
        current = self._records[node_id].parent
        while current is not None and current in self._records and current not in seen:
            if current == node_id:
                return True
            seen.add(current)
            current = self._records[current].parent
        return False
