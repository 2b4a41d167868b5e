import pytest

from admin_toolbar.contributors.site import (
    CUSTOMIZE_SUPPORT_SCRIPT,
    customize_menu,
    my_sites_menu,
    site_menu,
    with_query,
)
from admin_toolbar.core.exceptions import ContributorFault
from admin_toolbar.core.interfaces import CustomizeState, Tenant


class TestSiteMenu:
    """Site name menu on both surfaces."""

    def test_public_surface_links_to_dashboard(self, context):
        site_menu(context)

        node = context.store.get_node("site-name")
        assert node.title == "Example Site"
        assert node.href == "https://example.org/admin"
        assert context.store.get_node("dashboard").parent == "site-name"
        assert context.store.get_node("appearance").is_group

    def test_empty_name_falls_back_to_locator(self, host, context):
        host.sites[1]["name"] = ""
        site_menu(context)
        assert context.store.get_node("site-name").title == "example.org/"

    def test_long_name_shortened(self, host, context):
        host.sites[1]["name"] = "x" * 60
        site_menu(context)
        assert context.store.get_node("site-name").title == "x" * 40 + "…"

    def test_name_is_escaped(self, host, context):
        host.sites[1]["name"] = "Tom & Jerry"
        site_menu(context)
        assert context.store.get_node("site-name").title == "Tom &amp; Jerry"

    def test_admin_surface_links_home(self, host, context):
        host.admin = True
        site_menu(context)

        assert context.store.get_node("site-name").href == "https://example.org/home"
        assert "view-site" in context.store
        assert "edit-site" not in context.store
        assert "dashboard" not in context.store

    def test_edit_site_for_network_managers(self, host, context):
        host.admin = True
        host.multi_tenant = True
        host.capabilities.add("manage_sites")

        site_menu(context)

        assert context.store.get_node("edit-site").href == \
            "https://example.org/network_admin/site-info.php?id=1"

    @pytest.mark.parametrize("surface,prefix", [
        ("network", "Network Admin: "),
        ("user", "User Dashboard: "),
    ])
    def test_network_and_user_surfaces(self, host, context, surface, prefix):
        host.admin = True
        host.surface = surface
        site_menu(context)
        assert context.store.get_node("site-name").title == prefix + "Example Network"

    def test_non_member_sees_nothing(self, host, context):
        host.members = set()
        site_menu(context)
        assert len(context.store) == 0

    def test_appearance_entries(self, host, context):
        host.capabilities |= {"switch_themes", "edit_theme_options"}
        host.theme_features = {"widgets", "custom-header"}

        site_menu(context)

        ids = [r.id for r in context.store.get_children("appearance")]
        assert ids == ["themes", "widgets", "menus", "header"]
        assert context.store.get_node("header").meta["class"] == "hide-if-customize"

    def test_appearance_without_theme_options(self, host, context):
        host.capabilities.add("switch_themes")
        host.theme_features = {"widgets"}

        site_menu(context)

        assert [r.id for r in context.store.get_children("appearance")] == ["themes"]


class TestCustomizeMenu:

    def test_requires_capability_and_public_surface(self, host, context):
        customize_menu(context)
        assert "customize" not in context.store

        host.capabilities.add("customize")
        host.admin = True
        customize_menu(context)
        assert "customize" not in context.store

    def test_link_and_support_script(self, host, context):
        host.capabilities.add("customize")

        customize_menu(context)
        node = context.store.get_node("customize")

        assert node.href.startswith("https://example.org/customize?url=")
        assert "hello-world" in node.href
        assert node.meta["class"] == "hide-if-no-customize"

        context.run_callbacks("before")
        assert context.inline_scripts == [CUSTOMIZE_SUPPORT_SCRIPT]

    def test_preview_carries_changeset(self, host, context):
        host.capabilities.add("customize")
        host.url_now = "https://www.example.org/?customize_changeset_uuid=abc&p=1"
        host.customize = CustomizeState(is_preview=True, changeset_uuid="abc")

        customize_menu(context)
        href = context.store.get_node("customize").href

        assert "customize_changeset_uuid" not in href
        assert href.endswith("&changeset_uuid=abc")

    def test_preview_changeset_needs_edit_permission(self, host, context):
        host.capabilities.add("customize")
        host.customize = CustomizeState(is_preview=True, changeset_id=7, changeset_uuid="abc")
        host.resource_capabilities[("edit_post", 7)] = False

        customize_menu(context)

        assert "customize" not in context.store


class TestWithQuery:

    def test_set_and_remove(self):
        url = with_query("https://e.org/p?a=1&b=2", remove=("a",), c="3")
        assert url == "https://e.org/p?b=2&c=3"

    def test_replaces_existing_key(self):
        assert with_query("https://e.org/?a=1", a="2") == "https://e.org/?a=2"


class TestMySitesMenu:
    """Per-tenant submenus built inside a tenant scope."""

    @pytest.fixture
    def multi(self, host, tenants):
        host.multi_tenant = True
        host.capabilities.add("edit_posts")
        host.principal.tenants = tenants
        return host

    def test_single_tenant_install_skipped(self, host, context, tenants):
        host.principal.tenants = tenants
        my_sites_menu(context)
        assert len(context.store) == 0

    def test_user_without_sites_skipped(self, host, context):
        host.multi_tenant = True
        my_sites_menu(context)
        assert len(context.store) == 0

    def test_one_submenu_per_tenant(self, multi, context):
        my_sites_menu(context)

        listed = [r.id for r in context.store.get_children("my-sites-list")]
        assert listed == ["blog-1", "blog-2", "blog-3"]
        assert [r.id for r in context.store.get_children("blog-2")] == \
            ["blog-2-d", "blog-2-n", "blog-2-c", "blog-2-v"]
        assert context.store.get_node("blog-2").href == "https://example.org/t2/admin"
        assert multi.switch_log == [1, 2, 3]
        assert multi.current_tenant_id() == 1

    def test_failing_tenant_is_dropped_and_others_kept(self, multi, context):
        post_types = multi.post_types

        def flaky_post_types():
            if multi.current_tenant_id() == 2:
                raise RuntimeError("tenant 2 unavailable")
            return post_types()

        multi.post_types = flaky_post_types

        my_sites_menu(context)

        assert "blog-1" in context.store
        assert "blog-2" not in context.store
        assert "blog-2-d" not in context.store
        assert "blog-3-v" in context.store
        assert multi.current_tenant_id() == 1
        assert multi.tenant_stack == []
        faults = context.diagnostics_of(ContributorFault)
        assert [f.label for f in faults] == ["my_sites_menu[blog-2]"]

    def test_failure_before_any_node(self, multi, context):
        multi.fail_on_tenant = 3

        my_sites_menu(context)

        assert [r.id for r in context.store.get_children("my-sites-list")] == ["blog-1", "blog-2"]
        assert multi.current_tenant_id() == 1

    def test_unnamed_tenant_uses_locator(self, multi, context):
        multi.principal.tenants = [Tenant(4, "")]
        my_sites_menu(context)
        assert context.store.get_node("blog-4").title.endswith("site4.example.org/")

    def test_network_admin_links(self, multi, context):
        multi.capabilities |= {"manage_network", "manage_sites"}

        my_sites_menu(context)

        assert context.store.get_node("my-sites-super-admin").parent == "my-sites"
        assert [r.id for r in context.store.get_children("network-admin")] == \
            ["network-admin-d", "network-admin-s"]
        assert context.store.get_node("my-sites-list").meta["class"] == "ab-sub-secondary"

    def test_active_tenant_link(self, multi, context, tenants):
        multi.principal.active_tenant = tenants[1]
        my_sites_menu(context)
        assert "tenant_id=2" in context.store.get_node("my-sites").href
