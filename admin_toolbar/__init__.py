"""Top-level package for the admin toolbar composition engine.

Hosts build one toolbar per request through :func:`init_toolbar` and call
``Toolbar.try_render()`` from as many page hooks as they like; only the first
call renders.
"""

from .core import NodeStore, Toolbar, ToolbarContext
from .core.bootstrap import init_toolbar

__all__: list[str] = [
    "NodeStore",
    "Toolbar",
    "ToolbarContext",
    "init_toolbar",
]
