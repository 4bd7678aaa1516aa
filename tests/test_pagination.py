"""페이지네이션 유틸리티 테스트.

Pagination utility tests — Pageable sort parsing, Page arithmetic and the
X-Total-Count / Link headers.
"""

import pytest
from starlette.datastructures import URL

from app.utils.exceptions import InvalidCriteriaError
from app.utils.pagination import Page, Pageable, pagination_headers

BASE = URL("http://test/api/images?title.contains=cov&page=1&size=2")


class TestPageable:
    """페이지 요청 테스트."""

    def test_offset(self):
        assert Pageable(page=3, size=10).offset == 30

    def test_parse_sort(self):
        """방향 생략 시 asc."""
        assert Pageable.parse_sort(["title,desc", "id"]) == (("title", False), ("id", True))

    def test_parse_sort_empty(self):
        assert Pageable.parse_sort(None) == ()

    def test_parse_sort_bad_direction(self):
        with pytest.raises(InvalidCriteriaError):
            Pageable.parse_sort(["title,sideways"])


class TestPage:
    """페이지 결과 계산 테스트."""

    def test_total_pages(self):
        assert Page(content=[], total=5, page=0, size=2).total_pages == 3
        assert Page(content=[], total=0, page=0, size=2).total_pages == 0

    def test_has_next_and_previous(self):
        first = Page(content=[1, 2], total=5, page=0, size=2)
        last = Page(content=[5], total=5, page=2, size=2)
        assert first.has_next and not first.has_previous
        assert last.has_previous and not last.has_next


class TestPaginationHeaders:
    """X-Total-Count / Link 헤더 테스트."""

    def test_middle_page(self):
        headers = pagination_headers(BASE, Page(content=[3, 4], total=5, page=1, size=2))
        links = headers["Link"].split(",")

        assert headers["X-Total-Count"] == "5"
        assert [link.rsplit("rel=", 1)[1] for link in links] == ['"next"', '"prev"', '"last"', '"first"']
        assert "page=2" in links[0]
        assert "page=0" in links[1]
        assert "page=2" in links[2]
        assert "page=0" in links[3]

    def test_filters_are_preserved(self):
        headers = pagination_headers(BASE, Page(content=[3, 4], total=5, page=1, size=2))
        assert all("title.contains=cov" in link for link in headers["Link"].split(","))

    def test_empty_result(self):
        """결과가 없으면 next/prev 없이 last=first=0."""
        headers = pagination_headers(BASE, Page(content=[], total=0, page=0, size=2))
        links = headers["Link"].split(",")

        assert headers["X-Total-Count"] == "0"
        assert len(links) == 2
        assert 'rel="last"' in links[0] and "page=0" in links[0]
        assert 'rel="first"' in links[1]
