from __future__ import annotations

"""Content shortcuts: edit/view link, "New" menu, shortlink and search."""

from typing import Dict, List, Optional, Tuple

from admin_toolbar.core import markup
from admin_toolbar.core.context import ToolbarContext
from admin_toolbar.core.interfaces import PostType, QueriedObject, Screen

__all__ = ["edit_menu", "new_content_menu", "shortlink_menu", "search_menu", "new_content_actions"]

# Post types with a fixed slot in the "New" menu.
_BUILTIN_TYPES = ("post", "attachment", "page")


def _post_types(ctx: ToolbarContext) -> Dict[str, PostType]:
    return {pt.name: pt for pt in ctx.host.post_types()}


# -------------------------------------------------------------------------
# Edit / view
# -------------------------------------------------------------------------

def edit_menu(ctx: ToolbarContext) -> None:
    """Add "View" links on admin screens and "Edit" links on the public surface."""
    if ctx.is_admin:
        screen = ctx.host.current_screen()
        if screen is not None:
            _admin_view_link(ctx, screen)
        return

    current = ctx.host.queried_object()
    if current is None:
        return
    _public_edit_link(ctx, current)


def _admin_view_link(ctx: ToolbarContext, screen: Screen) -> None:
    types = _post_types(ctx)
    subject = screen.subject
    post_type: Optional[PostType] = None

    if screen.base == "post" and subject is not None:
        post_type = types.get(subject.type_name or "")
    elif screen.base == "edit":
        post_type = types.get(screen.post_type or "")
    elif screen.base == "edit-comments" and subject is not None:
        post_type = types.get(subject.type_name or "")

    if (screen.base in ("post", "edit-comments")
            and screen.action != "add"
            and post_type is not None
            and subject is not None
            and ctx.can("read_post", subject.id)
            and post_type.public
            and post_type.show_in_toolbar):
        if subject.status == "draft":
            ctx.add_node(
                id="preview",
                title=markup.text(post_type.label("view_item")),
                href=subject.preview_url,
                meta={"target": f"wp-preview-{subject.id}"},
            )
        else:
            ctx.add_node(id="view", title=markup.text(post_type.label("view_item")), href=subject.view_url)
    elif (screen.base == "edit"
            and post_type is not None
            and post_type.public
            and post_type.show_in_toolbar
            and post_type.archive_url):
        # Hosts leave archive_url empty when the archive already is the front page.
        ctx.add_node(id="archive", title=markup.text(post_type.label("view_items")),
                     href=post_type.archive_url)
    elif screen.base == "term" and subject is not None and subject.kind == "term":
        if subject.viewable and subject.view_url:
            ctx.add_node(id="view", title=markup.text(subject.labels.get("view_item", ctx.t("View"))),
                         href=subject.view_url)
    elif screen.base == "user-edit" and subject is not None and subject.kind == "user":
        if subject.view_url:
            ctx.add_node(id="view", title=markup.text(ctx.t("View User")), href=subject.view_url)


def _public_edit_link(ctx: ToolbarContext, current: QueriedObject) -> None:
    if current.kind == "post":
        post_type = _post_types(ctx).get(current.type_name or "")
        if (post_type is not None
                and current.edit_url
                and ctx.can(post_type.edit_capability, current.id)
                and post_type.show_in_toolbar):
            ctx.add_node(id="edit", title=markup.text(post_type.label("edit_item")), href=current.edit_url)
    elif current.kind == "term":
        if current.edit_url and ctx.can("edit_term", current.id):
            ctx.add_node(id="edit", title=markup.text(current.labels.get("edit_item", ctx.t("Edit"))),
                         href=current.edit_url)
    elif current.kind == "user":
        if ctx.can("edit_user", current.id) and current.edit_url:
            ctx.add_node(id="edit", title=markup.text(ctx.t("Edit User")), href=current.edit_url)


# -------------------------------------------------------------------------
# New content
# -------------------------------------------------------------------------

def new_content_actions(ctx: ToolbarContext) -> List[Tuple[str, str, str]]:
    """Return ``(admin path, title, node id)`` for every creatable type.

    Order: posts, media, links, pages, other types in host order, users.
    A type named ``content`` would clash with the ``new-content`` parent,
    so its entry gets the id ``add-new-content``.
    """
    types = {name: pt for name, pt in _post_types(ctx).items() if pt.show_in_toolbar}
    actions: Dict[str, Tuple[str, str]] = {}

    post = types.get("post")
    if post is not None and ctx.can(post.create_capability):
        actions["post-new.php"] = (post.label("name_admin_bar"), "new-post")

    attachment = types.get("attachment")
    if attachment is not None and ctx.can("upload_files"):
        actions["media-new.php"] = (attachment.label("name_admin_bar"), "new-media")

    if ctx.can("manage_links"):
        actions["link-add.php"] = (ctx.t("Link"), "new-link")

    page = types.get("page")
    if page is not None and ctx.can(page.create_capability):
        actions["post-new.php?post_type=page"] = (page.label("name_admin_bar"), "new-page")

    for name, post_type in types.items():
        if name in _BUILTIN_TYPES or not ctx.can(post_type.create_capability):
            continue
        actions[f"post-new.php?post_type={name}"] = (post_type.label("name_admin_bar"), f"new-{name}")

    clash = "post-new.php?post_type=content"
    if clash in actions:
        actions[clash] = (actions[clash][0], "add-new-content")

    if ctx.can("create_users") or (ctx.is_multi_tenant and ctx.can("promote_users")):
        actions["user-new.php"] = (ctx.t("User"), "new-user")

    return [(path, title, node_id) for path, (title, node_id) in actions.items()]


def new_content_menu(ctx: ToolbarContext) -> None:
    """The "New" menu with one entry per type the user may create."""
    actions = new_content_actions(ctx)
    if not actions:
        return

    title = markup.join([markup.icon(), markup.span(ctx.t("New"), "ab-label")])
    ctx.add_node(id="new-content", title=title, href=ctx.url("admin", path=actions[0][0]))

    for path, label, node_id in actions:
        ctx.add_node(parent="new-content", id=node_id, title=markup.text(label),
                     href=ctx.url("admin", path=path))


# -------------------------------------------------------------------------
# Shortlink and search
# -------------------------------------------------------------------------

def shortlink_menu(ctx: ToolbarContext) -> None:
    short = ctx.host.shortlink()
    if not short:
        return

    ctx.add_node(
        id="get-shortlink",
        title=markup.text(ctx.t("Shortlink")),
        href=short,
        meta={"html": markup.input_field(short, "shortlink-input")},
    )


def search_menu(ctx: ToolbarContext) -> None:
    """Search box on the public surface."""
    if ctx.is_admin:
        return

    form = markup.search_form(ctx.url("home", path="/") or "/", ctx.t("Search"))
    ctx.add_node(
        parent="top-secondary",
        id="search",
        title=form,
        meta={"class": "admin-bar-search", "tabindex": -1},
    )
