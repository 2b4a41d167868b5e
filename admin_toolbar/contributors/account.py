from __future__ import annotations

"""Account-related contributors living in the secondary (right) area."""

from admin_toolbar.core import markup
from admin_toolbar.core.context import ToolbarContext
from admin_toolbar.core.visibility import profile_link

__all__ = ["my_account_item", "my_account_menu", "recovery_mode_menu"]

RECOVERY_EXIT_ACTION = "exit_recovery_mode"


def my_account_item(ctx: ToolbarContext) -> None:
    """Greeting with avatar linking to the user's profile."""
    principal = ctx.principal
    if principal is None:
        return

    avatar = ctx.host.avatar(principal, 26)
    howdy = ctx.t("Howdy, {name}", name=markup.span(principal.display_name, "display-name"))

    ctx.add_node(
        id="my-account",
        parent="top-secondary",
        title=howdy + avatar,
        href=profile_link(ctx.host, principal),
        meta={"class": "with-avatar" if avatar else ""},
    )


def my_account_menu(ctx: ToolbarContext) -> None:
    """User info, profile and log-out entries under the account item."""
    principal = ctx.principal
    if principal is None:
        return

    profile_url = profile_link(ctx.host, principal)

    ctx.add_group(parent="my-account", id="user-actions")

    user_info = ctx.host.avatar(principal, 64) + markup.span(principal.display_name, "display-name")
    if principal.display_name != principal.login:
        user_info += markup.span(principal.login, "username")

    ctx.add_node(
        parent="user-actions",
        id="user-info",
        title=user_info,
        href=profile_url,
        meta={"tabindex": -1},
    )

    if profile_url is not None:
        ctx.add_node(
            parent="user-actions",
            id="edit-profile",
            title=markup.text(ctx.t("Edit Profile")),
            href=profile_url,
        )

    ctx.add_node(
        parent="user-actions",
        id="logout",
        title=markup.text(ctx.t("Log Out")),
        href=ctx.url("logout"),
    )


def recovery_mode_menu(ctx: ToolbarContext) -> None:
    """Exit link shown while the site runs in recovery mode."""
    if not ctx.host.is_recovery_mode():
        return

    ctx.add_node(
        parent="top-secondary",
        id="recovery-mode",
        title=markup.text(ctx.t("Exit Recovery Mode")),
        href=ctx.url("login", action=RECOVERY_EXIT_ACTION, nonce=True),
    )
