from __future__ import annotations

"""Per-request toolbar render owner.

Hosts usually try to render the toolbar from more than one place in the
page lifecycle: right after the body opens, and again from the footer in
case the first hook never fired. :class:`Toolbar` makes every call after the
first a no-op through its :class:`RenderLatch`.
"""

import logging
import threading
from typing import Optional

from .context import ToolbarContext
from .exceptions import RenderReentryError, ToolbarError
from .pipeline import ContributorPipeline
from .renderer import HtmlRenderer

logger = logging.getLogger(__name__)

__all__ = ["RenderLatch", "Toolbar"]

_PRINT_STYLE = '<style media="print">#{root_id} {{ display:none; }}</style>'

_OFFSET_STYLE = (
    '<style media="screen">\n'
    '\thtml {{ margin-top: {offset}px !important; }}\n'
    '\t* html body {{ margin-top: {offset}px !important; }}\n'
    '\t@media screen and ( max-width: {breakpoint}px ) {{\n'
    '\t\thtml {{ margin-top: {mobile}px !important; }}\n'
    '\t\t* html body {{ margin-top: {mobile}px !important; }}\n'
    '\t}}\n'
    '</style>'
)


class RenderLatch:
    """At-most-once guard for one request.

    :meth:`acquire` succeeds exactly once; every later call raises
    :class:`RenderReentryError`. A lock makes the check-and-set atomic in
    case a host renders one logical page from several threads.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._acquired = False
        self.has_rendered = False

    def acquire(self) -> None:
        with self._lock:
            if self._acquired:
                raise RenderReentryError()
            self._acquired = True

    def mark_rendered(self) -> None:
        self.has_rendered = True


class Toolbar:
    """Runs the contributor pipeline and renders the result once.

    Args:
        context: Fresh per-request context.
        pipeline: Contributors to run against *context*.
        renderer: Markup renderer; built from the ``render`` config
            section when omitted.
    """

    def __init__(self, context: ToolbarContext, pipeline: ContributorPipeline,
                 renderer: Optional[HtmlRenderer] = None) -> None:
        self.context = context
        self.pipeline = pipeline
        self.renderer = renderer or HtmlRenderer(
            root_id=context.render_setting("root_id", "wpadminbar"),
            id_prefix=context.render_setting("id_prefix", "wp-admin-bar-"),
        )
        self._latch = RenderLatch()
        self._output: Optional[str] = None
        self.tree = None

    @property
    def has_rendered(self) -> bool:
        return self._latch.has_rendered

    @property
    def output(self) -> Optional[str]:
        return self._output

    def try_render(self) -> Optional[str]:
        """Populate and render the toolbar unless that already happened.

        Returns:
            The toolbar markup on the first successful call, ``None`` on
            every later call or when rendering failed.
        """
        try:
            self._latch.acquire()
        except RenderReentryError:
            logger.debug("Toolbar render skipped: already rendered for this request")
            return None

        self.pipeline.run(self.context)
        self.context.run_callbacks("before")

        try:
            tree, dangling = self.context.store.resolve()
            for error in dangling:
                self.context.record(error)
            markup = self.renderer.render(tree, self.context.inline_scripts)
        except Exception as exc:
            logger.error("Toolbar render failed: %s", exc, exc_info=True)
            self.context.record(ToolbarError(f"Render failed: {exc}", cause=exc))
            return None

        self.tree = tree
        self._output = markup
        self.context.run_callbacks("after")
        self._latch.mark_rendered()
        logger.info("Toolbar rendered: %s", self.context.get_context_stats())
        return markup

    def print_style(self) -> str:
        """Stylesheet that hides the toolbar when printing."""
        return _PRINT_STYLE.format(root_id=self.renderer.root_id)

    def page_offset_style(self) -> Optional[str]:
        """Stylesheet pushing page content below the toolbar.

        Only returned once the toolbar has actually rendered.
        """
        if not self.has_rendered:
            return None
        return _OFFSET_STYLE.format(
            offset=self.context.render_setting("offset_px", 32),
            mobile=self.context.render_setting("mobile_offset_px", 46),
            breakpoint=self.context.render_setting("mobile_breakpoint_px", 782),
        )
