"""
Tests for explicitly registered finders.
"""

import pytest

from pagewise.exceptions import InvalidConfigError, UnknownFinderError
from pagewise.pagination.finders import Finder, FinderRegistry


@pytest.fixture
def registry():
    """
    Provides a registry with single- and two-attribute finders.

    Returns:
        FinderRegistry: Registry for row dictionaries
    """
    return FinderRegistry(
        Finder(name="by_status", attributes=("status",)),
        Finder(name="by_status_and_author_id", attributes=("status", "author_id")),
        Finder(
            name="published_by_author_id",
            attributes=("author_id",),
            extra_filters={"status": "published"},
        ),
    )


class TestFinder:
    """Tests for Finder descriptors."""

    def test_build_filters(self):
        """Test values are mapped onto attributes in order."""
        finder = Finder(name="by_a_and_b", attributes=("a", "b"))

        assert finder.build_filters(1, "x") == {"a": 1, "b": "x"}

    def test_wrong_arity_raises(self):
        """Test a value count mismatch raises InvalidConfigError."""
        finder = Finder(name="by_a_and_b", attributes=("a", "b"))

        with pytest.raises(InvalidConfigError) as exc_info:
            finder.build_filters(1)

        assert "by_a_and_b" in str(exc_info.value)

    def test_extra_filters_merged(self):
        """Test fixed filters are included."""
        finder = Finder(
            name="active_by_a", attributes=("a",), extra_filters={"active": True}
        )

        assert finder.build_filters(3) == {"active": True, "a": 3}


class TestFinderRegistry:
    """Tests for FinderRegistry."""

    def test_lookup(self, registry):
        """Test registered finders can be looked up and listed."""
        assert "by_status" in registry
        assert "by_title" not in registry
        assert registry.names() == [
            "by_status",
            "by_status_and_author_id",
            "published_by_author_id",
        ]

    def test_unknown_finder_raises(self, registry):
        """Test unknown names raise UnknownFinderError."""
        with pytest.raises(UnknownFinderError):
            registry.get("paginate_by_title")

    def test_duplicate_registration_raises(self, registry):
        """Test a name can only be registered once."""
        with pytest.raises(ValueError):
            registry.register(Finder(name="by_status", attributes=("status",)))

    def test_build_filters(self, registry):
        """Test filters are built through the registry."""
        assert registry.build_filters(
            "by_status_and_author_id", "draft", 2
        ) == {"status": "draft", "author_id": 2}

    @pytest.mark.asyncio
    async def test_paginate(self, registry, list_adapter, config):
        """Test paginate runs the adapter with the finder's filters."""
        posts = await registry.paginate(
            list_adapter,
            "by_status_and_author_id",
            "draft",
            1,
            request={"page": 1, "per_page": 2},
            config=config,
        )

        assert list_adapter.fetch_calls == [
            ({"status": "draft", "author_id": 1}, 0, 2)
        ]
        assert all(
            row["status"] == "draft" and row["author_id"] == 1 for row in posts
        )
        assert posts.total_entries == 4

    @pytest.mark.asyncio
    async def test_paginate_with_extra_filters(self, registry, list_adapter, config):
        """Test fixed filters apply to fetch and count."""
        posts = await registry.paginate(
            list_adapter,
            "published_by_author_id",
            0,
            request={"page": 1, "per_page": 3},
            config=config,
        )

        assert [row["id"] for row in posts] == [3, 9, 15]
        assert list_adapter.count_calls == [{"status": "published", "author_id": 0}]
        assert posts.total_entries == 4
