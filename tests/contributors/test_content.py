from admin_toolbar.contributors.content import (
    edit_menu,
    new_content_actions,
    new_content_menu,
    search_menu,
    shortlink_menu,
)
from admin_toolbar.core.interfaces import PostType, QueriedObject, Screen


class TestNewContentMenu:
    """Entries of the "New" menu follow the user's create capabilities."""

    def test_no_creatable_types(self, context):
        new_content_menu(context)
        assert "new-content" not in context.store

    def test_builtin_order(self, host, context):
        host.capabilities |= {"edit_posts", "upload_files", "edit_pages", "manage_links", "create_users"}

        ids = [node_id for _, _, node_id in new_content_actions(context)]

        assert ids == ["new-post", "new-media", "new-link", "new-page", "new-user"]

    def test_parent_links_to_first_action(self, host, context):
        host.capabilities |= {"edit_pages"}

        new_content_menu(context)

        parent = context.store.get_node("new-content")
        assert parent.href == "https://example.org/admin/post-new.php?post_type=page"
        assert '<span class="ab-label">New</span>' in parent.title
        assert [r.id for r in context.store.get_children("new-content")] == ["new-page"]

    def test_content_type_does_not_clash_with_parent(self, host, context):
        host.capabilities.add("edit_posts")
        host.types.append(PostType("content", labels={"name_admin_bar": "Content"}))

        new_content_menu(context)

        assert context.store.get_node("new-content").parent is None
        child = context.store.get_node("add-new-content")
        assert child.parent == "new-content"
        assert child.title == "Content"

    def test_hidden_types_skipped(self, host, context):
        host.capabilities.add("edit_posts")
        host.types.append(PostType("secret", show_in_toolbar=False))

        ids = [node_id for _, _, node_id in new_content_actions(context)]

        assert "new-secret" not in ids

    def test_promote_users_only_counts_on_multi_tenant(self, host, context):
        host.capabilities.add("promote_users")
        assert new_content_actions(context) == []

        host.multi_tenant = True
        assert [a[2] for a in new_content_actions(context)] == ["new-user"]


class TestEditMenuPublic:

    def test_edit_post_link(self, host, context):
        host.capabilities.add("edit_post")
        host.queried = QueriedObject("post", 5, type_name="post", edit_url="https://example.org/edit/5")

        edit_menu(context)

        node = context.store.get_node("edit")
        assert node.title == "Edit Post"
        assert node.href == "https://example.org/edit/5"

    def test_no_permission_no_link(self, host, context):
        host.queried = QueriedObject("post", 5, type_name="post", edit_url="https://example.org/edit/5")
        edit_menu(context)
        assert "edit" not in context.store

    def test_edit_term_uses_taxonomy_label(self, host, context):
        host.capabilities.add("edit_term")
        host.queried = QueriedObject("term", 3, edit_url="https://example.org/term/3",
                                     labels={"edit_item": "Edit Category"})

        edit_menu(context)

        assert context.store.get_node("edit").title == "Edit Category"

    def test_edit_user(self, host, context):
        host.capabilities.add("edit_user")
        host.queried = QueriedObject("user", 2, edit_url="https://example.org/user/2")

        edit_menu(context)

        assert context.store.get_node("edit").title == "Edit User"


class TestEditMenuAdmin:

    def test_view_published_post(self, host, context):
        host.admin = True
        host.capabilities.add("read_post")
        host.screen = Screen("post", post_type="post", subject=QueriedObject(
            "post", 5, type_name="post", view_url="https://example.org/?p=5"))

        edit_menu(context)

        node = context.store.get_node("view")
        assert node.title == "View Post"
        assert node.href == "https://example.org/?p=5"

    def test_preview_draft(self, host, context):
        host.admin = True
        host.capabilities.add("read_post")
        host.screen = Screen("post", subject=QueriedObject(
            "post", 9, type_name="post", status="draft", preview_url="https://example.org/?p=9&preview=true"))

        edit_menu(context)

        node = context.store.get_node("preview")
        assert node.meta["target"] == "wp-preview-9"

    def test_new_post_screen_has_no_link(self, host, context):
        host.admin = True
        host.capabilities.add("read_post")
        host.screen = Screen("post", action="add", subject=QueriedObject("post", 0, type_name="post"))

        edit_menu(context)

        assert len(context.store) == 0

    def test_archive_link_on_list_screen(self, host, context):
        host.admin = True
        host.screen = Screen("edit", post_type="post")

        edit_menu(context)

        node = context.store.get_node("archive")
        assert node.title == "View Posts"
        assert node.href == "https://example.org/blog/"

    def test_view_term(self, host, context):
        host.admin = True
        host.screen = Screen("term", subject=QueriedObject(
            "term", 3, view_url="https://example.org/category/news/", labels={"view_item": "View Category"}))

        edit_menu(context)

        assert context.store.get_node("view").title == "View Category"


class TestShortlinkAndSearch:

    def test_shortlink_input(self, host, context):
        host.short = "https://example.org/?p=5"

        shortlink_menu(context)
        node = context.store.get_node("get-shortlink")

        assert node.href == "https://example.org/?p=5"
        assert 'class="shortlink-input"' in node.meta["html"]
        assert 'readonly' in node.meta["html"]

    def test_no_shortlink(self, context):
        shortlink_menu(context)
        assert len(context.store) == 0

    def test_search_on_public_surface(self, context):
        search_menu(context)
        node = context.store.get_node("search")

        assert node.parent == "top-secondary"
        assert node.href is None
        assert 'id="adminbarsearch"' in node.title
        assert 'action="https://example.org/home"' in node.title
        assert node.meta == {"class": "admin-bar-search", "tabindex": -1}

    def test_no_search_on_admin_surface(self, host, context):
        host.admin = True
        search_menu(context)
        assert "search" not in context.store
