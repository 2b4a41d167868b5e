from __future__ import annotations

"""Site-level contributors: site name menu, customize link, my-sites menu."""

import logging
from typing import Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from admin_toolbar.core import markup
from admin_toolbar.core.context import ToolbarContext
from admin_toolbar.core.exceptions import ContributorFault
from admin_toolbar.core.interfaces import PostType, Tenant
from admin_toolbar.core.visibility import excerpt, title_from_locator

logger = logging.getLogger(__name__)

__all__ = ["site_menu", "appearance_menu", "customize_menu", "my_sites_menu", "with_query"]

CUSTOMIZE_SUPPORT_SCRIPT = (
    "(function() {"
    "var b = document.body, c = 'className', cs = 'customize-support',"
    " rcs = new RegExp('(^|\\\\s+)(no-)?' + cs + '(\\\\s+|$)');"
    "b[c] = b[c].replace(rcs, ' ');"
    "b[c] += (window.postMessage ? ' ' : ' no-') + cs;"
    "}());"
)

# (capability, node id suffix, label, path) for the network admin submenu.
_NETWORK_ADMIN_LINKS = [
    ("manage_sites", "s", "Sites", "sites.php"),
    ("manage_network_users", "u", "Users", "users.php"),
    ("manage_network_themes", "t", "Themes", "themes.php"),
    ("manage_network_plugins", "p", "Plugins", "plugins.php"),
    ("manage_network_options", "o", "Settings", "settings.php"),
]


def with_query(base_url: str, remove: tuple = (), **params: Optional[str]) -> str:
    """Return *base_url* with *params* set and the *remove* keys dropped."""
    parts = urlsplit(base_url)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True)
             if k not in remove and k not in params]
    query.extend((k, v) for k, v in params.items() if v is not None)
    return urlunsplit(parts._replace(query=urlencode(query)))


def _post_type(ctx: ToolbarContext, name: str) -> Optional[PostType]:
    for post_type in ctx.host.post_types():
        if post_type.name == name:
            return post_type
    return None


# -------------------------------------------------------------------------
# Site name menu
# -------------------------------------------------------------------------

def site_menu(ctx: ToolbarContext) -> None:
    """The "Site Name" menu linking between front end and dashboard.

    Shown to members of the site and to network administrators. An unnamed
    site is labelled with its home URL minus scheme and ``www.``.
    """
    principal = ctx.principal
    if principal is None:
        return
    if not ctx.host.is_member(principal) and not ctx.can("manage_network"):
        return

    blogname = ctx.host.site_name() or title_from_locator(ctx.host.home_url())

    surface = ctx.host.admin_surface() if ctx.is_admin else "site"
    if surface == "network":
        blogname = ctx.t("Network Admin: {name}", name=ctx.host.network_name())
    elif surface == "user":
        blogname = ctx.t("User Dashboard: {name}", name=ctx.host.network_name())

    title = markup.text(excerpt(blogname, ctx.render_setting("title_excerpt_length", 40)))
    home = ctx.url("home", path="/")

    ctx.add_node(
        id="site-name",
        title=title,
        href=home if (ctx.is_admin or not ctx.can("read")) else ctx.url("admin"),
    )

    if ctx.is_admin:
        ctx.add_node(parent="site-name", id="view-site", title=markup.text(ctx.t("Visit Site")), href=home)

        if surface == "site" and ctx.is_multi_tenant and ctx.can("manage_sites"):
            ctx.add_node(
                parent="site-name",
                id="edit-site",
                title=markup.text(ctx.t("Edit Site")),
                href=ctx.url("network_admin", path="site-info.php", id=ctx.host.current_tenant_id()),
            )
    elif ctx.can("read"):
        ctx.add_node(parent="site-name", id="dashboard", title=markup.text(ctx.t("Dashboard")),
                     href=ctx.url("admin"))
        appearance_menu(ctx)


def appearance_menu(ctx: ToolbarContext) -> None:
    """Appearance shortcuts grouped under the site name menu."""
    ctx.add_group(parent="site-name", id="appearance")

    if ctx.can("switch_themes"):
        ctx.add_node(parent="appearance", id="themes", title=markup.text(ctx.t("Themes")),
                     href=ctx.url("admin", path="themes.php"))

    if not ctx.can("edit_theme_options"):
        return

    supports = ctx.host.theme_supports
    if supports("widgets"):
        ctx.add_node(parent="appearance", id="widgets", title=markup.text(ctx.t("Widgets")),
                     href=ctx.url("admin", path="widgets.php"))

    if supports("menus") or supports("widgets"):
        ctx.add_node(parent="appearance", id="menus", title=markup.text(ctx.t("Menus")),
                     href=ctx.url("admin", path="nav-menus.php"))

    if supports("custom-background"):
        ctx.add_node(parent="appearance", id="background", title=markup.text(ctx.t("Background")),
                     href=ctx.url("admin", path="themes.php?page=custom-background"),
                     meta={"class": "hide-if-customize"})

    if supports("custom-header"):
        ctx.add_node(parent="appearance", id="header", title=markup.text(ctx.t("Header")),
                     href=ctx.url("admin", path="themes.php?page=custom-header"),
                     meta={"class": "hide-if-customize"})


# -------------------------------------------------------------------------
# Customize
# -------------------------------------------------------------------------

def _customize_support_script(ctx: ToolbarContext) -> None:
    ctx.add_inline_script(CUSTOMIZE_SUPPORT_SCRIPT)


def customize_menu(ctx: ToolbarContext) -> None:
    """Link into the customizer for the page being viewed (public surface)."""
    if not ctx.can("customize") or ctx.is_admin:
        return

    state = ctx.host.customize_state()
    if state.is_preview and state.changeset_id and not ctx.can("edit_post", state.changeset_id):
        return

    current_url = ctx.host.current_url()
    if state.is_preview and state.changeset_uuid:
        current_url = with_query(current_url, remove=("customize_changeset_uuid",))

    customize_url = with_query(ctx.url("customize") or "", url=current_url)
    if state.is_preview:
        customize_url = with_query(customize_url, changeset_uuid=state.changeset_uuid)

    ctx.add_node(
        id="customize",
        title=markup.text(ctx.t("Customize")),
        href=customize_url,
        meta={"class": "hide-if-no-customize"},
    )
    ctx.before_render(_customize_support_script)


# -------------------------------------------------------------------------
# My Sites
# -------------------------------------------------------------------------

def my_sites_menu(ctx: ToolbarContext) -> None:
    """Tenant switcher: network admin links plus one submenu per site.

    Each site's submenu is computed while that site is the active tenant. A
    site that fails to build is dropped from the menu and recorded; the
    remaining sites are still listed.
    """
    principal = ctx.principal
    if principal is None or not ctx.is_multi_tenant:
        return

    is_network_admin = ctx.can("manage_network")
    if len(principal.tenants) < 1 and not is_network_admin:
        return

    if principal.active_tenant is not None:
        my_sites_url = ctx.url("admin", tenant_id=principal.active_tenant.id, path="my-sites.php")
    else:
        my_sites_url = ctx.url("admin", path="my-sites.php")

    ctx.add_node(id="my-sites", title=markup.text(ctx.t("My Sites")), href=my_sites_url)

    if is_network_admin:
        _network_admin_links(ctx)

    ctx.add_group(
        parent="my-sites",
        id="my-sites-list",
        meta={"class": "ab-sub-secondary" if is_network_admin else ""},
    )

    for tenant in principal.tenants:
        menu_id = f"blog-{tenant.id}"
        taken = menu_id in ctx.store
        try:
            with ctx.tenants.switched(tenant.id):
                _tenant_submenu(ctx, tenant, menu_id)
        except Exception as exc:
            if not taken:
                ctx.store.remove_node(menu_id)
            label = f"my_sites_menu[{menu_id}]"
            logger.error("Could not build site menu for tenant %s: %s", tenant.id, exc, exc_info=True)
            ctx.record(ContributorFault(label, exc))


def _network_admin_links(ctx: ToolbarContext) -> None:
    ctx.add_group(parent="my-sites", id="my-sites-super-admin")

    network_admin = ctx.url("network_admin")
    ctx.add_node(parent="my-sites-super-admin", id="network-admin",
                 title=markup.text(ctx.t("Network Admin")), href=network_admin)
    ctx.add_node(parent="network-admin", id="network-admin-d",
                 title=markup.text(ctx.t("Dashboard")), href=network_admin)

    for capability, suffix, label, path in _NETWORK_ADMIN_LINKS:
        if ctx.can(capability):
            ctx.add_node(parent="network-admin", id=f"network-admin-{suffix}",
                         title=markup.text(ctx.t(label)), href=ctx.url("network_admin", path=path))


def _tenant_submenu(ctx: ToolbarContext, tenant: Tenant, menu_id: str) -> None:
    """Nodes for one site; must run inside that tenant's scope."""
    host = ctx.host
    icon_url = host.site_icon_url(16)
    if icon_url:
        blavatar = markup.img(icon_url, "blavatar", srcset=f"{host.site_icon_url(32)} 2x")
    else:
        blavatar = markup.div("blavatar")

    blogname = tenant.name or title_from_locator(host.home_url())
    title = blavatar + markup.text(blogname)

    if ctx.can("read"):
        ctx.add_node(parent="my-sites-list", id=menu_id, title=title, href=ctx.url("admin"))
        ctx.add_node(parent=menu_id, id=f"{menu_id}-d", title=markup.text(ctx.t("Dashboard")),
                     href=ctx.url("admin"))
    else:
        ctx.add_node(parent="my-sites-list", id=menu_id, title=title, href=ctx.url("home"))

    post_type = _post_type(ctx, "post")
    if post_type is not None and ctx.can(post_type.create_capability):
        ctx.add_node(parent=menu_id, id=f"{menu_id}-n", title=markup.text(post_type.label("new_item")),
                     href=ctx.url("admin", path="post-new.php"))

    if ctx.can("edit_posts"):
        ctx.add_node(parent=menu_id, id=f"{menu_id}-c", title=markup.text(ctx.t("Manage Comments")),
                     href=ctx.url("admin", path="edit-comments.php"))

    ctx.add_node(parent=menu_id, id=f"{menu_id}-v", title=markup.text(ctx.t("Visit Site")),
                 href=ctx.url("home", path="/"))
