from __future__ import annotations

"""Visibility rules shared by the toolbar and its contributors.

Contributors decide for themselves whether to add anything; these helpers
keep the recurring decisions (is the toolbar showing at all, which profile
link to offer, how to label a site without a name) in one place.
"""

import logging
import re
from typing import Any, Optional

from .interfaces import Principal, ToolbarHost

logger = logging.getLogger(__name__)

__all__ = [
    "ToolbarPreference",
    "is_toolbar_showing",
    "profile_link",
    "about_link",
    "title_from_locator",
    "excerpt",
]

_LOCATOR_PREFIX = re.compile(r"^(https?://)?(www\.)?", re.IGNORECASE)


def title_from_locator(url: str) -> str:
    """Derive a display label from a URL by stripping scheme and ``www.``.

    >>> title_from_locator("https://www.example.org/")
    'example.org/'
    """
    return _LOCATOR_PREFIX.sub("", url or "", count=1)


def excerpt(text: str, length: int = 40, more: str = "…") -> str:
    """Shorten *text* to *length* characters, appending *more* if cut."""
    text = (text or "").strip()
    if length <= 0 or len(text) <= length:
        return text
    return text[:length].rstrip() + more


class ToolbarPreference:
    """Per-request cache of the user's "show toolbar" option.

    The stored option is read at most once. A missing option means the
    toolbar is shown; stored strings are compared against ``"true"``.
    """

    def __init__(self, host: ToolbarHost, surface: str = "front") -> None:
        self._host = host
        self._surface = surface
        self._value: Optional[bool] = None

    @property
    def option_name(self) -> str:
        return f"show_toolbar_{self._surface}"

    def is_enabled(self, principal: Optional[Principal] = None) -> bool:
        if self._value is None:
            stored = self._host.get_user_option(principal, self.option_name)
            self._value = self._coerce(stored)
            logger.debug("Toolbar preference %s=%r -> %s", self.option_name, stored, self._value)
        return self._value

    @staticmethod
    def _coerce(stored: Any) -> bool:
        if stored is None:
            return True
        if isinstance(stored, bool):
            return stored
        return str(stored).strip().lower() == "true"


def is_toolbar_showing(host: ToolbarHost, preference: Optional[ToolbarPreference] = None) -> bool:
    """Decide whether the toolbar should appear on this request at all."""
    if host.is_headless_request() or host.is_embed():
        return False

    if host.is_administrative_surface():
        return True

    override = host.show_override()
    if override is not None:
        return bool(override)

    principal = host.current_principal()
    if principal is None or host.is_login_page():
        return False

    preference = preference or ToolbarPreference(host)
    return preference.is_enabled(principal)


def profile_link(host: ToolbarHost, principal: Principal) -> Optional[str]:
    """Profile URL for *principal*, degrading instead of denying.

    Users with ``read`` get their profile on this site. Without it, a
    multi-tenant user still gets the profile on their primary dashboard.
    Otherwise there is no link.
    """
    if host.has_capability(principal, "read"):
        return host.resolve_url("profile", user_id=principal.id)
    if host.is_multi_tenant():
        return host.resolve_url("dashboard", user_id=principal.id, path="profile.php")
    return None


def about_link(host: ToolbarHost, principal: Optional[Principal]) -> Optional[str]:
    """Same degradation as :func:`profile_link`, for the "about" page."""
    if host.has_capability(principal, "read"):
        return host.resolve_url("admin", path="about.php")
    if host.is_multi_tenant() and principal is not None:
        return host.resolve_url("dashboard", user_id=principal.id, path="about.php")
    return None
