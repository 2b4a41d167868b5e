from __future__ import annotations

"""Per-request toolbar set-up."""

import logging
from typing import Iterable, Optional, Tuple

from admin_toolbar.config import ConfigManager
from admin_toolbar.contributors import register_defaults

from .context import ToolbarContext
from .interfaces import ToolbarHost
from .pipeline import Contributor, ContributorPipeline
from .toolbar import Toolbar
from .visibility import ToolbarPreference, is_toolbar_showing

logger = logging.getLogger(__name__)

__all__ = ["init_toolbar"]

# (callback, priority, label)
ExtraContributor = Tuple[Contributor, int, str]


def init_toolbar(host: ToolbarHost,
                 extra: Iterable[ExtraContributor] = (),
                 config: Optional[ConfigManager] = None,
                 include_defaults: bool = True) -> Optional[Toolbar]:
    """Build the toolbar for one request, or ``None`` if it is not showing.

    Args:
        host: The request's host collaborator.
        extra: Host-supplied contributors registered after the built-ins. One
            whose label is already registered is logged and skipped.
        config: Config manager; the shared singleton by default.
        include_defaults: Register the built-in contributors.
    """
    preference = ToolbarPreference(host)
    if not is_toolbar_showing(host, preference):
        logger.debug("Toolbar not showing for this request")
        return None

    config = config if config is not None else ConfigManager()
    pipeline = ContributorPipeline()
    if include_defaults:
        register_defaults(pipeline, config)
    for callback, priority, label in extra:
        try:
            pipeline.register(callback, priority=priority, label=label)
        except ValueError as exc:
            logger.error("Skipping host contributor '%s': %s", label, exc)

    context = ToolbarContext(host, config=config)
    return Toolbar(context, pipeline)
