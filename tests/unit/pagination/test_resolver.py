"""
Tests for page request resolution.

Tests page coercion, per_page defaulting and the offset/limit window.
"""

import pytest
from pydantic import ValidationError

from pagewise.exceptions import InvalidConfigError
from pagewise.pagination.resolver import resolve_page_request, to_page_request
from pagewise.schemas.request import PageRequest, PageWindow, PaginationConfig
from pagewise.settings import Settings


class TestPageRequest:
    """Tests for PageRequest coercion."""

    @pytest.mark.parametrize("page", [0, -3, None, "abc", "", [1]])
    def test_invalid_page_coerced_to_first(self, page):
        """Test missing, non-numeric and non-positive pages become 1."""
        assert PageRequest(page=page).page == 1

    @pytest.mark.parametrize("page,expected", [("3", 3), (7, 7), (2.0, 2)])
    def test_numeric_page_kept(self, page, expected):
        """Test numeric pages are converted to int."""
        assert PageRequest(page=page).page == expected

    def test_defaults(self):
        """Test default request values."""
        request = PageRequest()

        assert request.page == 1
        assert request.per_page is None
        assert request.total_entries is None


class TestResolvePageRequest:
    """Tests for resolve_page_request."""

    def test_defaults_from_config(self, config):
        """Test page 1 with the configured default page size."""
        window = resolve_page_request(None, config)

        assert window == PageWindow(page=1, per_page=10, offset=0, limit=10)

    @pytest.mark.parametrize(
        "page,per_page,expected_offset",
        [(1, 10, 0), (2, 10, 10), (3, 20, 40), (10, 1, 9)],
    )
    def test_offset_and_limit(self, config, page, per_page, expected_offset):
        """Test offset == (page - 1) * per_page and limit == per_page."""
        window = resolve_page_request(
            PageRequest(page=page, per_page=per_page), config
        )

        assert window.offset == expected_offset
        assert window.limit == per_page
        assert window.per_page == per_page

    def test_accepts_mapping(self, config):
        """Test plain dict requests are accepted."""
        window = resolve_page_request({"page": "4", "per_page": 5}, config)

        assert window.page == 4
        assert window.offset == 15

    def test_page_clamped(self, config):
        """Test a page below 1 resolves to the first page."""
        window = resolve_page_request({"page": -2}, config)

        assert window.page == 1
        assert window.offset == 0

    @pytest.mark.parametrize("per_page", [0, -1, -30])
    def test_non_positive_per_page_raises(self, config, per_page):
        """Test per_page <= 0 raises InvalidConfigError."""
        with pytest.raises(InvalidConfigError):
            resolve_page_request({"per_page": per_page}, config)

    @pytest.mark.parametrize("per_page", ["abc", 2.5, [10]])
    def test_non_integer_per_page_raises(self, config, per_page):
        """Test a non-integer per_page raises InvalidConfigError."""
        with pytest.raises(InvalidConfigError) as exc_info:
            resolve_page_request({"page": 2, "per_page": per_page}, config)

        assert "per_page" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, ValidationError)

    def test_numeric_string_per_page_accepted(self, config):
        """Test a numeric string per_page is converted to int."""
        window = resolve_page_request({"per_page": "20"}, config)

        assert window.per_page == 20

    def test_non_positive_default_raises(self):
        """Test a non-positive configured default raises InvalidConfigError."""
        config = PaginationConfig(default_per_page=0)

        with pytest.raises(InvalidConfigError):
            resolve_page_request({"page": 2}, config)

    def test_invalid_config_is_value_error(self, config):
        """Test InvalidConfigError can be caught as ValueError."""
        with pytest.raises(ValueError):
            resolve_page_request({"per_page": 0}, config)

    def test_per_page_capped_at_max(self, config):
        """Test per_page larger than max_per_page is capped."""
        window = resolve_page_request({"page": 2, "per_page": 500}, config)

        assert window.per_page == 50
        assert window.offset == 50

    def test_default_config_from_settings(self):
        """Test the settings-based config is used when none is passed."""
        window = resolve_page_request({"page": 1})

        assert window.per_page == PaginationConfig.from_settings().default_per_page


class TestToPageRequest:
    """Tests for to_page_request normalization."""

    def test_passthrough(self):
        """Test PageRequest instances are returned unchanged."""
        request = PageRequest(page=2)

        assert to_page_request(request) is request

    def test_none(self):
        """Test None becomes the default request."""
        assert to_page_request(None) == PageRequest()

    def test_mapping_with_total(self):
        """Test total_entries is read from mappings."""
        request = to_page_request({"page": 2, "total_entries": 9})

        assert request.total_entries == 9

    def test_non_integer_total_raises(self):
        """Test a non-integer total_entries raises InvalidConfigError."""
        with pytest.raises(InvalidConfigError) as exc_info:
            to_page_request({"page": 1, "total_entries": "many"})

        assert "total_entries" in str(exc_info.value)


class TestPaginationConfig:
    """Tests for PaginationConfig."""

    def test_from_settings(self):
        """Test config values come from settings."""
        settings = Settings(DEFAULT_PAGE_SIZE=15, MAX_PAGE_SIZE=200)

        config = PaginationConfig.from_settings(settings)

        assert config.default_per_page == 15
        assert config.max_per_page == 200

    def test_config_is_immutable(self, config):
        """Test config cannot be mutated after construction."""
        with pytest.raises(ValidationError):
            config.default_per_page = 99
