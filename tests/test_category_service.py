import asyncio

import pytest

from junkdraw_app.exceptions import InvalidInputError, NotFoundError


class TestCategoryService:
    """Test category business logic directly"""

    def test_create_returns_generated_fields(self, category_service):
        category = asyncio.run(category_service.create_category("  Reading ", "#40E0D0"))

        assert category.id
        assert category.name == "Reading"
        assert category.color == "#40E0D0"
        assert category.created_at is not None

    @pytest.mark.parametrize("name, color", [
        ("", "#40E0D0"),
        ("Reading", ""),
        (None, None),
        ("   ", "#40E0D0"),
    ])
    def test_create_requires_name_and_color(self, category_service, name, color):
        with pytest.raises(InvalidInputError, match="Name and color are required"):
            asyncio.run(category_service.create_category(name, color))

        assert asyncio.run(category_service.list_categories()) == []

    @pytest.mark.parametrize("color", ["red", "#12345", "40E0D0", "#GGGGGG"])
    def test_create_rejects_non_hex_color(self, category_service, color):
        with pytest.raises(InvalidInputError):
            asyncio.run(category_service.create_category("Reading", color))

    def test_short_hex_is_accepted(self, category_service):
        category = asyncio.run(category_service.create_category("Short", "#fff"))
        assert category.color == "#fff"

    def test_list_ordered_by_name(self, category_service):
        for name in ["Video", "Articles", "Music"]:
            asyncio.run(category_service.create_category(name, "#40E0D0"))

        names = [c.name for c in asyncio.run(category_service.list_categories())]
        assert names == ["Articles", "Music", "Video"]

    def test_update(self, category_service):
        category = asyncio.run(category_service.create_category("Reading", "#40E0D0"))

        updated = asyncio.run(category_service.update_category(category.id, "Books", "#8B5CF6"))

        assert updated.id == category.id
        assert updated.name == "Books"
        assert updated.color == "#8B5CF6"

    def test_update_missing(self, category_service):
        with pytest.raises(NotFoundError):
            asyncio.run(category_service.update_category("missing", "Books", "#8B5CF6"))

    def test_update_validates(self, category_service):
        category = asyncio.run(category_service.create_category("Reading", "#40E0D0"))
        with pytest.raises(InvalidInputError):
            asyncio.run(category_service.update_category(category.id, "", "#8B5CF6"))

    def test_update_refreshes_embedded_category_in_listing(self, category_service, link_service):
        category = asyncio.run(category_service.create_category("Reading", "#40E0D0"))
        asyncio.run(link_service.add_link(url="https://example.com/", category_id=category.id))
        assert asyncio.run(link_service.list_links())[0].category.name == "Reading"

        asyncio.run(category_service.update_category(category.id, "Books", "#40E0D0"))

        assert asyncio.run(link_service.list_links())[0].category.name == "Books"


class TestDeleteCategory:
    """Deleting a category never deletes its links"""

    def test_links_become_uncategorized(self, category_service, link_service):
        category = asyncio.run(category_service.create_category("Junk", "#F59E0B"))
        link = asyncio.run(link_service.add_link(url="https://example.com/", category_id=category.id))

        asyncio.run(category_service.delete_category(category.id))

        assert asyncio.run(category_service.list_categories()) == []
        survivor = asyncio.run(link_service.get_link(link.id))
        assert survivor.category_id is None
        assert survivor.category is None

    def test_other_categories_untouched(self, category_service, link_service):
        doomed = asyncio.run(category_service.create_category("Doomed", "#F87171"))
        kept = asyncio.run(category_service.create_category("Kept", "#10B981"))
        link = asyncio.run(link_service.add_link(url="https://example.com/", category_id=kept.id))

        asyncio.run(category_service.delete_category(doomed.id))

        assert asyncio.run(link_service.get_link(link.id)).category_id == kept.id

    def test_delete_missing(self, category_service):
        with pytest.raises(NotFoundError):
            asyncio.run(category_service.delete_category("missing"))

    def test_foreign_key_sets_null_without_detach(self, category_service, link_service, store):
        """Schema-level ON DELETE SET NULL backs up the explicit detach"""
        category = asyncio.run(category_service.create_category("Junk", "#F59E0B"))
        link = asyncio.run(link_service.add_link(url="https://example.com/", category_id=category.id))

        assert asyncio.run(store.delete_category(category.id)) is True

        assert asyncio.run(store.get_link(link.id)).category_id is None
