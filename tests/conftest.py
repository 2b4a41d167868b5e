"""Test configuration and fixtures for the admin toolbar tests.

Provides a configurable in-memory ``FakeHost`` implementing the host
protocol, plus fresh per-test contexts. All test modules should build their
toolbars through these fixtures for consistency.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from admin_toolbar.config import ConfigManager
from admin_toolbar.core.context import ToolbarContext
from admin_toolbar.core.interfaces import (
    CustomizeState,
    PostType,
    Principal,
    QueriedObject,
    Screen,
    Tenant,
)
from admin_toolbar.core.pipeline import ContributorPipeline

# Configure test logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


DEFAULT_POST_TYPES = [
    PostType("post", labels={"name_admin_bar": "Post", "new_item": "New Post",
                             "edit_item": "Edit Post", "view_item": "View Post",
                             "view_items": "View Posts"},
             archive_url="https://example.org/blog/"),
    PostType("attachment", labels={"name_admin_bar": "Media"}, create_capability="upload_files"),
    PostType("page", labels={"name_admin_bar": "Page", "view_item": "View Page",
                             "edit_item": "Edit Page"},
             create_capability="edit_pages"),
]


class FakeHost:
    """In-memory host. Every answer is a plain attribute tests can tweak."""

    def __init__(self) -> None:
        self.principal: Optional[Principal] = Principal(
            id=1, login="admin", display_name="Ada Admin",
        )
        self.capabilities: Set[str] = {"read"}
        self.resource_capabilities: Dict[tuple, bool] = {}
        self.admin = False
        self.surface = "site"
        self.multi_tenant = False
        self.headless = False
        self.embed = False
        self.login_page = False
        self.override: Optional[bool] = None
        self.user_options: Dict[str, Any] = {}
        self.option_reads: List[str] = []

        self.sites: Dict[Optional[int], Dict[str, Any]] = {
            1: {"name": "Example Site", "home": "https://www.example.org/", "icon": None},
        }
        self.tenant_stack: List[Optional[int]] = []
        self.tenant_id: Optional[int] = 1
        self.switch_log: List[int] = []
        self.fail_on_tenant: Optional[int] = None

        self.network = "Example Network"
        self.url_now = "https://www.example.org/hello-world/"
        self.members: Set[int] = {1}
        self.theme_features: Set[str] = set()
        self.avatar_markup = '<img class="avatar" src="https://example.org/a.png">'
        self.types: List[PostType] = list(DEFAULT_POST_TYPES)
        self.screen: Optional[Screen] = None
        self.queried: Optional[QueriedObject] = None
        self.short: Optional[str] = None
        self.customize = CustomizeState()
        self.moderation_count = 0
        self.updates = 0
        self.recovery = False

    # Identity
    def current_principal(self) -> Optional[Principal]:
        return self.principal

    def has_capability(self, principal, capability, resource_id=None) -> bool:
        if principal is None:
            return False
        if resource_id is not None and (capability, resource_id) in self.resource_capabilities:
            return self.resource_capabilities[(capability, resource_id)]
        return capability in self.capabilities

    # URLs and translation
    def resolve_url(self, kind: str, **params: Any) -> Optional[str]:
        path = params.pop("path", "")
        query = "&".join(f"{k}={v}" for k, v in sorted(params.items()))
        tenant = f"/t{self.tenant_id}" if self.tenant_id not in (None, 1) else ""
        url = f"https://example.org{tenant}/{kind}/{path}".rstrip("/")
        return f"{url}?{query}" if query else url

    def translate(self, text: str, **params: Any) -> str:
        return text.format(**params) if params else text

    # Tenants
    def switch_tenant(self, tenant_id: int) -> None:
        self.switch_log.append(tenant_id)
        self.tenant_stack.append(self.tenant_id)
        self.tenant_id = tenant_id

    def restore_tenant(self) -> None:
        self.tenant_id = self.tenant_stack.pop()

    def current_tenant_id(self) -> Optional[int]:
        return self.tenant_id

    # Page context
    def is_administrative_surface(self) -> bool:
        return self.admin

    def admin_surface(self) -> str:
        return self.surface

    def is_multi_tenant(self) -> bool:
        return self.multi_tenant

    def is_headless_request(self) -> bool:
        return self.headless

    def is_embed(self) -> bool:
        return self.embed

    def is_login_page(self) -> bool:
        return self.login_page

    def show_override(self) -> Optional[bool]:
        return self.override

    def get_user_option(self, principal, name: str) -> Any:
        self.option_reads.append(name)
        return self.user_options.get(name)

    # Site information
    def _site(self) -> Dict[str, Any]:
        if self.fail_on_tenant is not None and self.tenant_id == self.fail_on_tenant:
            raise RuntimeError(f"tenant {self.tenant_id} is broken")
        return self.sites.get(self.tenant_id, {"name": "", "home": f"https://site{self.tenant_id}.example.org/"})

    def site_name(self) -> str:
        return self._site()["name"]

    def network_name(self) -> str:
        return self.network

    def home_url(self) -> str:
        return self._site()["home"]

    def current_url(self) -> str:
        return self.url_now

    def site_icon_url(self, size: int) -> Optional[str]:
        icon = self._site().get("icon")
        return f"{icon}?s={size}" if icon else None

    def is_member(self, principal: Principal) -> bool:
        return principal.id in self.members

    def theme_supports(self, feature: str) -> bool:
        return feature in self.theme_features

    def avatar(self, principal: Principal, size: int) -> str:
        return self.avatar_markup

    # Content
    def post_types(self) -> List[PostType]:
        return list(self.types)

    def current_screen(self) -> Optional[Screen]:
        return self.screen

    def queried_object(self) -> Optional[QueriedObject]:
        return self.queried

    def shortlink(self) -> Optional[str]:
        return self.short

    def customize_state(self) -> CustomizeState:
        return self.customize

    def comment_moderation_count(self) -> int:
        return self.moderation_count

    def update_count(self) -> int:
        return self.updates

    def is_recovery_mode(self) -> bool:
        return self.recovery


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point user overrides at an empty directory and reload config per test."""
    monkeypatch.setenv("ADMIN_TOOLBAR_CONFIG_DIR", str(tmp_path / "config"))
    ConfigManager.reset()
    yield
    ConfigManager.reset()


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture
def context(host):
    """Fresh ToolbarContext around the fake host."""
    return ToolbarContext(host)


@pytest.fixture
def pipeline():
    return ContributorPipeline()


@pytest.fixture
def tenants():
    return [Tenant(1, "Main"), Tenant(2, "Second"), Tenant(3, "Third")]
