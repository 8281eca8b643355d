from __future__ import annotations

import pytest
from livefeed.services._shared.dto import PageMeta
from livefeed.services._shared.pagination import PageWindow, page_window


class TestPageWindow:
    @pytest.mark.parametrize(
        ("page", "expected"),
        [
            (1, PageWindow(page=1, skip=0, limit=2)),
            (2, PageWindow(page=2, skip=2, limit=2)),
            ("3", PageWindow(page=3, skip=4, limit=2)),
        ],
    )
    def test_window_for_page(self, page, expected):
        assert page_window(page, 2) == expected

    @pytest.mark.parametrize("page", [None, "", "abc", "1.5", 0, -3, "-1", True])
    def test_invalid_pages_fall_back_to_first(self, page):
        assert page_window(page, 2) == PageWindow(page=1, skip=0, limit=2)

    def test_rejects_non_positive_page_size(self):
        with pytest.raises(ValueError):
            page_window(1, 0)


class TestPageMeta:
    def test_flags_for_middle_page(self):
        meta = PageMeta.of(page=2, limit=2, total=5)
        assert meta.has_prev is True
        assert meta.has_next is True

    def test_last_page_has_no_next(self):
        meta = PageMeta.of(page=3, limit=2, total=5)
        assert meta.has_next is False

    def test_empty_feed(self):
        meta = PageMeta.of(page=1, limit=2, total=0)
        assert (meta.has_prev, meta.has_next) == (False, False)
