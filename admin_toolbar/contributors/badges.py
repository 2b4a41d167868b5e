from __future__ import annotations

"""Count badges: comments awaiting moderation and pending updates."""

from admin_toolbar.core import markup
from admin_toolbar.core.context import ToolbarContext

__all__ = ["comments_menu", "updates_menu"]


def _plural(ctx: ToolbarContext, count: int, singular: str, plural: str) -> str:
    return ctx.t(singular if count == 1 else plural, count=f"{count:,}")


def comments_menu(ctx: ToolbarContext) -> None:
    """Comments link with the moderation queue size; needs ``edit_posts``."""
    if not ctx.can("edit_posts"):
        return

    awaiting = int(ctx.host.comment_moderation_count())
    awaiting_text = _plural(ctx, awaiting, "{count} Comment in moderation", "{count} Comments in moderation")

    title = markup.join([
        markup.icon(),
        markup.span(f"{awaiting:,}", f"ab-label awaiting-mod pending-count count-{awaiting}",
                    **{"aria-hidden": "true"}),
        markup.screen_reader_text(awaiting_text, "comments-in-moderation-text"),
    ])

    ctx.add_node(id="comments", title=title, href=ctx.url("admin", path="edit-comments.php"))


def updates_menu(ctx: ToolbarContext) -> None:
    """Updates link, only when something is waiting to be updated."""
    total = int(ctx.host.update_count())
    if not total:
        return

    updates_text = _plural(ctx, total, "{count} update available", "{count} updates available")
    title = markup.join([
        markup.icon(),
        markup.span(f"{total:,}", "ab-label", **{"aria-hidden": "true"}),
        markup.screen_reader_text(updates_text, "updates-available-text"),
    ])

    ctx.add_node(id="updates", title=title, href=ctx.url("network_admin", path="update-core.php"))
