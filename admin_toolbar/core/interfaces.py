from __future__ import annotations

"""Host interface definitions.

The toolbar engine never talks to a CMS directly. Everything it needs about
the current user, site, URLs and translations comes through the protocols
below; a host application provides one object implementing
:class:`ToolbarHost` per request.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

__all__ = [
    "Principal",
    "Tenant",
    "PostType",
    "Screen",
    "QueriedObject",
    "CustomizeState",
    "CapabilityProvider",
    "UrlResolver",
    "TenantSwitcher",
    "Translator",
    "ToolbarHost",
]


# -------------------------------------------------------------------------
# Value types
# -------------------------------------------------------------------------

@dataclass
class Tenant:
    """One site of a multi-tenant deployment as seen by the current user."""

    id: int
    name: str = ""


@dataclass
class Principal:
    """The signed-in user."""

    id: int
    login: str
    display_name: str = ""
    tenants: List[Tenant] = field(default_factory=list)
    active_tenant: Optional[Tenant] = None


@dataclass
class PostType:
    """A content type the toolbar can link to.

    ``labels`` holds the display strings used by the toolbar: ``name_admin_bar``,
    ``new_item``, ``edit_item``, ``view_item``, ``view_items``.
    """

    name: str
    labels: Dict[str, str] = field(default_factory=dict)
    create_capability: str = "edit_posts"
    edit_capability: str = "edit_post"
    public: bool = True
    show_in_toolbar: bool = True
    archive_url: Optional[str] = None

    def label(self, key: str) -> str:
        return self.labels.get(key, self.name)


@dataclass
class QueriedObject:
    """What the current public page is about: a post, a term or a user.

    ``kind`` is one of ``"post"``, ``"term"``, ``"user"``.
    """

    kind: str
    id: int
    type_name: Optional[str] = None
    status: str = "publish"
    edit_url: Optional[str] = None
    view_url: Optional[str] = None
    preview_url: Optional[str] = None
    labels: Dict[str, str] = field(default_factory=dict)
    viewable: bool = True


@dataclass
class Screen:
    """The administrative screen being displayed.

    ``base`` follows the usual screen bases: ``post``, ``edit``,
    ``edit-comments``, ``term``, ``user-edit``.
    """

    base: str
    post_type: Optional[str] = None
    action: str = ""
    subject: Optional[QueriedObject] = None


@dataclass
class CustomizeState:
    """Live-preview state of the site customizer."""

    is_preview: bool = False
    changeset_id: Optional[int] = None
    changeset_uuid: Optional[str] = None


# -------------------------------------------------------------------------
# Protocols
# -------------------------------------------------------------------------

@runtime_checkable
class CapabilityProvider(Protocol):
    """Identity and permission checks."""

    def current_principal(self) -> Optional[Principal]:
        ...

    def has_capability(self, principal: Optional[Principal], capability: str,
                       resource_id: Optional[int] = None) -> bool:
        ...


@runtime_checkable
class UrlResolver(Protocol):
    """URL generation.

    Kinds used by the built-in contributors: ``admin``, ``home``,
    ``network_admin``, ``profile``, ``dashboard``, ``logout``, ``login``,
    ``customize``, ``my_sites``, ``about``. ``params`` carries ``path`` and
    kind-specific extras such as ``user_id`` or ``tenant_id``.
    """

    def resolve_url(self, kind: str, **params: Any) -> Optional[str]:
        ...


@runtime_checkable
class TenantSwitcher(Protocol):
    """Paired switch/restore of the active tenant."""

    def switch_tenant(self, tenant_id: int) -> None:
        ...

    def restore_tenant(self) -> None:
        ...

    def current_tenant_id(self) -> Optional[int]:
        ...


@runtime_checkable
class Translator(Protocol):
    def translate(self, text: str, **params: Any) -> str:
        ...


@runtime_checkable
class ToolbarHost(CapabilityProvider, UrlResolver, TenantSwitcher, Translator, Protocol):
    """Everything a request exposes to the toolbar."""

    # Page context
    def is_administrative_surface(self) -> bool:
        ...

    def admin_surface(self) -> str:
        """Return ``"site"``, ``"network"`` or ``"user"``."""
        ...

    def is_multi_tenant(self) -> bool:
        ...

    def is_headless_request(self) -> bool:
        """True for XML-RPC, AJAX, iframe and JSON requests."""
        ...

    def is_embed(self) -> bool:
        ...

    def is_login_page(self) -> bool:
        ...

    def show_override(self) -> Optional[bool]:
        """Explicit show/hide decision made by the host, if any."""
        ...

    def get_user_option(self, principal: Optional[Principal], name: str) -> Any:
        ...

    # Site information (for the active tenant)
    def site_name(self) -> str:
        ...

    def network_name(self) -> str:
        ...

    def home_url(self) -> str:
        ...

    def current_url(self) -> str:
        ...

    def site_icon_url(self, size: int) -> Optional[str]:
        ...

    def is_member(self, principal: Principal) -> bool:
        ...

    def theme_supports(self, feature: str) -> bool:
        ...

    def avatar(self, principal: Principal, size: int) -> str:
        """Avatar markup, empty when avatars are disabled."""
        ...

    # Content
    def post_types(self) -> List[PostType]:
        ...

    def current_screen(self) -> Optional[Screen]:
        ...

    def queried_object(self) -> Optional[QueriedObject]:
        ...

    def shortlink(self) -> Optional[str]:
        ...

    def customize_state(self) -> CustomizeState:
        ...

    # Badges and modes
    def comment_moderation_count(self) -> int:
        ...

    def update_count(self) -> int:
        ...

    def is_recovery_mode(self) -> bool:
        ...
