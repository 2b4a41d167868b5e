"""Built-in toolbar contributors.

Each contributor is a plain function taking the request's
:class:`~admin_toolbar.core.context.ToolbarContext`. :func:`register_defaults`
adds them to a pipeline with the priorities from ``toolbar.yml``.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from admin_toolbar.config import ConfigManager
from admin_toolbar.core.pipeline import ContributorPipeline

from .account import my_account_item, my_account_menu, recovery_mode_menu
from .badges import comments_menu, updates_menu
from .content import edit_menu, new_content_menu, search_menu, shortlink_menu
from .layout import logo_menu, secondary_groups, sidebar_toggle
from .site import customize_menu, my_sites_menu, site_menu

logger = logging.getLogger(__name__)

__all__ = ["BUILTIN_CONTRIBUTORS", "DEFAULT_PRIORITIES", "register_defaults"]

# Registration order doubles as the tie-break between equal priorities.
BUILTIN_CONTRIBUTORS: Dict[str, Callable] = {
    "my_account_menu": my_account_menu,
    "sidebar_toggle": sidebar_toggle,
    "search_menu": search_menu,
    "my_account_item": my_account_item,
    "recovery_mode_menu": recovery_mode_menu,
    "logo_menu": logo_menu,
    "my_sites_menu": my_sites_menu,
    "site_menu": site_menu,
    "customize_menu": customize_menu,
    "updates_menu": updates_menu,
    "comments_menu": comments_menu,
    "new_content_menu": new_content_menu,
    "edit_menu": edit_menu,
    "shortlink_menu": shortlink_menu,
    "secondary_groups": secondary_groups,
}

DEFAULT_PRIORITIES: Dict[str, int] = {
    "my_account_menu": 0,
    "sidebar_toggle": 0,
    "search_menu": 4,
    "my_account_item": 7,
    "recovery_mode_menu": 8,
    "logo_menu": 10,
    "my_sites_menu": 20,
    "site_menu": 30,
    "customize_menu": 40,
    "updates_menu": 50,
    "comments_menu": 60,
    "new_content_menu": 70,
    "edit_menu": 80,
    "shortlink_menu": 90,
    "secondary_groups": 200,
}


def register_defaults(pipeline: ContributorPipeline,
                      config: Optional[ConfigManager] = None) -> ContributorPipeline:
    """Register every enabled built-in contributor on *pipeline*."""
    config = config if config is not None else ConfigManager()
    priorities = dict(DEFAULT_PRIORITIES)
    priorities.update(config.get_contributor_priorities())
    disabled = set(config.get_disabled_contributors())

    for label, callback in BUILTIN_CONTRIBUTORS.items():
        if label in disabled:
            logger.info("Built-in contributor '%s' disabled by config", label)
            continue
        pipeline.register(callback, priority=priorities[label], label=label)
    return pipeline
