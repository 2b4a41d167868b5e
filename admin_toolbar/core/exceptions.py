from __future__ import annotations

"""Toolbar exception classes.

Structural errors (duplicate ids) are raised to the caller. Everything that
happens while contributors run or while the tree is resolved is captured as
a diagnostic instead, so a broken menu never takes the host page down with
it.
"""

from typing import Optional


class ToolbarError(Exception):
    """Base exception for all toolbar composition errors.

    Carries the offending node id and/or contributor label so log lines
    point at the culprit without extra context.
    """

    def __init__(self, message: str, node_id: Optional[str] = None,
                 label: Optional[str] = None,
                 cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.node_id = node_id
        self.label = label
        self.cause = cause

    def __str__(self) -> str:
        if self.label:
            return f"[Contributor: {self.label}] {super().__str__()}"
        if self.node_id:
            return f"[Node: {self.node_id}] {super().__str__()}"
        return super().__str__()


class DuplicateIdError(ToolbarError):
    """Raised when a node or group id is inserted twice in one pass.

    The insertion is rejected and the store is left untouched.
    """

    def __init__(self, node_id: str, label: Optional[str] = None) -> None:
        super().__init__(f"Node id '{node_id}' already exists", node_id=node_id, label=label)


class DanglingParentError(ToolbarError):
    """Recorded when a node names a parent that never got created.

    The orphan and its subtree are dropped from the rendered output.
    """

    def __init__(self, node_id: str, parent_id: str) -> None:
        super().__init__(
            f"Parent '{parent_id}' was never created; subtree dropped",
            node_id=node_id,
        )
        self.parent_id = parent_id


class ParentCycleError(DanglingParentError):
    """Recorded when a node's parent chain loops back to the node itself.

    Every node on the loop is reported; the loop and whatever hangs off it
    are dropped from the rendered output.
    """

    def __init__(self, node_id: str, parent_id: str) -> None:
        ToolbarError.__init__(
            self,
            f"Parent chain through '{parent_id}' loops back; subtree dropped",
            node_id=node_id,
        )
        self.parent_id = parent_id


class ContributorFault(ToolbarError):
    """Wraps an exception raised by a contributor callback."""

    def __init__(self, label: str, cause: BaseException) -> None:
        super().__init__(
            f"Contributor failed: {type(cause).__name__}: {cause}",
            label=label,
            cause=cause,
        )


class RenderReentryError(ToolbarError):
    """Raised by the render latch when it is acquired a second time.

    ``Toolbar.try_render`` turns this into a silent no-op.
    """

    def __init__(self) -> None:
        super().__init__("Toolbar has already been rendered for this request")


class TenantSwitchError(ToolbarError):
    """Recorded when a tenant scope did not bring back the original tenant."""

    def __init__(self, expected: object, actual: object) -> None:
        super().__init__(
            f"Tenant context not restored: expected {expected!r}, got {actual!r}"
        )
        self.expected = expected
        self.actual = actual
