from __future__ import annotations

"""Per-request toolbar context.

One :class:`ToolbarContext` is built for every page request and handed to
each contributor. It bundles the node store, the host collaborator, the
tenant guard and the diagnostics collected during the pass. Nothing here is
module-global, so two requests can never see each other's tree.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from admin_toolbar.config import ConfigManager

from .exceptions import ToolbarError
from .interfaces import Principal, ToolbarHost
from .models import Group, Node
from .node_store import NodeStore
from .tenant import TenantContext

logger = logging.getLogger(__name__)

__all__ = ["ToolbarContext"]

RenderCallback = Callable[["ToolbarContext"], None]

_UNSET = object()


class ToolbarContext:
    """Gateway through which contributors reach the tree and the host.

    Args:
        host: Request-scoped host implementing :class:`ToolbarHost`.
        store: Node store to populate; a fresh one by default.
        config: Config manager; the shared singleton by default.
    """

    def __init__(self, host: ToolbarHost, store: Optional[NodeStore] = None,
                 config: Optional[ConfigManager] = None) -> None:
        self.host = host
        self.store = store if store is not None else NodeStore()
        self.config = config if config is not None else ConfigManager()
        self.tenants = TenantContext(host, on_error=self.record)
        self.diagnostics: List[ToolbarError] = []
        self.inline_scripts: List[str] = []
        self._before_render: List[RenderCallback] = []
        self._after_render: List[RenderCallback] = []
        self._principal: Any = _UNSET
        self._logger = logging.getLogger(f"{__name__}.ToolbarContext")

    # -------------------------------------------------------------------------
    # Host shortcuts
    # -------------------------------------------------------------------------

    @property
    def principal(self) -> Optional[Principal]:
        """The signed-in user, looked up once per request."""
        if self._principal is _UNSET:
            self._principal = self.host.current_principal()
        return self._principal

    def can(self, capability: str, resource_id: Optional[int] = None) -> bool:
        return self.host.has_capability(self.principal, capability, resource_id)

    def url(self, kind: str, **params: Any) -> Optional[str]:
        return self.host.resolve_url(kind, **params)

    def t(self, text: str, **params: Any) -> str:
        return self.host.translate(text, **params)

    @property
    def is_admin(self) -> bool:
        return self.host.is_administrative_surface()

    @property
    def is_multi_tenant(self) -> bool:
        return self.host.is_multi_tenant()

    # -------------------------------------------------------------------------
    # Tree shortcuts
    # -------------------------------------------------------------------------

    def add_node(self, record: Optional[Node] = None, **fields: Any) -> Node:
        return self.store.add_node(record, **fields)

    def add_group(self, record: Optional[Group] = None, **fields: Any) -> Group:
        return self.store.add_group(record, **fields)

    # -------------------------------------------------------------------------
    # Settings
    # -------------------------------------------------------------------------

    def render_setting(self, key: str, default: Any = None) -> Any:
        return self.config.get_render_settings().get(key, default)

    def brand(self) -> Dict[str, Any]:
        return self.config.get_brand()

    # -------------------------------------------------------------------------
    # Render phase callbacks
    # -------------------------------------------------------------------------

    def before_render(self, callback: RenderCallback) -> None:
        """Run *callback* once the tree is final, just before it is rendered."""
        if callback not in self._before_render:
            self._before_render.append(callback)

    def after_render(self, callback: RenderCallback) -> None:
        if callback not in self._after_render:
            self._after_render.append(callback)

    def run_callbacks(self, phase: str) -> None:
        """Invoke the ``before`` or ``after`` render callbacks in order."""
        callbacks = self._before_render if phase == "before" else self._after_render
        for callback in list(callbacks):
            try:
                callback(self)
            except Exception as exc:
                self.log_error(getattr(callback, "__name__", repr(callback)), exc, f"{phase}-render")

    def add_inline_script(self, source: str) -> None:
        if source not in self.inline_scripts:
            self.inline_scripts.append(source)

    # -------------------------------------------------------------------------
    # Diagnostics
    # -------------------------------------------------------------------------

    def record(self, error: ToolbarError) -> None:
        """Keep a non-fatal error for the host to inspect after rendering."""
        self.diagnostics.append(error)

    def diagnostics_of(self, error_type: type) -> List[ToolbarError]:
        return [d for d in self.diagnostics if isinstance(d, error_type)]

    def log_error(self, label: str, error: Exception, context: str = "") -> None:
        context_msg = f" ({context})" if context else ""
        self._logger.error("Toolbar %s error%s: %s", label, context_msg, error)

    def get_context_stats(self) -> Dict[str, Any]:
        """Summary for debugging and host-side logging."""
        return {
            'node_count': len(self.store),
            'diagnostic_count': len(self.diagnostics),
            'diagnostic_types': sorted({type(d).__name__ for d in self.diagnostics}),
            'before_render_callbacks': len(self._before_render),
            'after_render_callbacks': len(self._after_render),
            'tenant_scopes_open': self.tenants.depth,
        }
