from __future__ import annotations

"""Structural contributors: logo menu, sidebar toggle, secondary groups."""

from admin_toolbar.core import markup
from admin_toolbar.core.context import ToolbarContext
from admin_toolbar.core.visibility import about_link

__all__ = ["logo_menu", "sidebar_toggle", "secondary_groups"]


def logo_menu(ctx: ToolbarContext) -> None:
    """Add the logo menu with its "about" entry and external links.

    Without an about link the logo becomes a focusable non-link so its
    submenu stays reachable from the keyboard.
    """
    brand = ctx.brand()
    about_label = ctx.t(brand.get("about_label", "About"))
    about_url = about_link(ctx.host, ctx.principal)

    ctx.add_node(
        id="wp-logo",
        title=markup.join([markup.icon(), markup.screen_reader_text(about_label)]),
        href=about_url,
        meta={} if about_url else {"tabindex": 0},
    )

    if about_url:
        ctx.add_node(parent="wp-logo", id="about", title=markup.text(about_label), href=about_url)

    for link in brand.get("external_links") or []:
        ctx.add_node(
            parent="wp-logo-external",
            id=link["id"],
            title=markup.text(ctx.t(link["title"])),
            href=ctx.t(link["href"]),
        )


def sidebar_toggle(ctx: ToolbarContext) -> None:
    """Menu toggle button, administrative surface only."""
    if not ctx.is_admin:
        return
    ctx.add_node(
        id="menu-toggle",
        title=markup.join([markup.icon(), markup.screen_reader_text(ctx.t("Menu"))]),
        href="#",
    )


def secondary_groups(ctx: ToolbarContext) -> None:
    """Right-hand top-level group and the logo menu's external-links group."""
    ctx.add_group(id="top-secondary", meta={"class": "ab-top-secondary"})
    ctx.add_group(parent="wp-logo", id="wp-logo-external", meta={"class": "ab-sub-secondary"})
