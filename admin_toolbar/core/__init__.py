"""Toolbar composition engine: node store, pipeline, render latch, renderer."""

from .context import ToolbarContext
from .exceptions import (
    ContributorFault,
    DanglingParentError,
    DuplicateIdError,
    ParentCycleError,
    RenderReentryError,
    TenantSwitchError,
    ToolbarError,
)
from .models import Group, Node, NodeKind, ResolvedTree
from .node_store import NodeStore
from .pipeline import ContributorPipeline, ContributorRegistration
from .tenant import TenantContext
from .toolbar import Toolbar

__all__ = [
    "ToolbarContext",
    "ToolbarError",
    "DuplicateIdError",
    "DanglingParentError",
    "ParentCycleError",
    "ContributorFault",
    "RenderReentryError",
    "TenantSwitchError",
    "Node",
    "Group",
    "NodeKind",
    "ResolvedTree",
    "NodeStore",
    "ContributorPipeline",
    "ContributorRegistration",
    "TenantContext",
    "Toolbar",
]
