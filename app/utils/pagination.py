"""페이지네이션 유틸리티 모듈.

Pagination utility module for SQLAlchemy async queries.
Provides the Pageable request model, the Page result model, a generic
paginate function and the X-Total-Count / Link response headers used by
every list endpoint. Page numbers are 0-based.
"""

import math
from dataclasses import dataclass
from typing import Any, Sequence

from pydantic import BaseModel
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import URL

from app.utils.exceptions import InvalidCriteriaError


@dataclass(frozen=True)
class Pageable:
    """페이지 요청 — 페이지 번호(0부터), 크기, 정렬.

    Page request: 0-based page index, page size, and ordered sort keys as
    (field, ascending) pairs.
    """

    page: int = 0
    size: int = 20
    sort: tuple[tuple[str, bool], ...] = ()

    @property
    def offset(self) -> int:
        return self.page * self.size

    @staticmethod
    def parse_sort(values: Sequence[str] | None) -> tuple[tuple[str, bool], ...]:
        """`sort=field,asc` 형식 파싱 (Parse Spring-style `sort=field[,asc|desc]` values).

        Raises:
            InvalidCriteriaError: 정렬 방향이 asc/desc가 아닐 때
        """
        parsed: list[tuple[str, bool]] = []
        for value in values or []:
            name, _, direction = value.partition(",")
            direction = direction.strip().lower() or "asc"
            if direction not in ("asc", "desc"):
                raise InvalidCriteriaError(f"Invalid sort direction '{direction}'")
            parsed.append((name.strip(), direction == "asc"))
        return tuple(parsed)


class Page(BaseModel):
    """페이지네이션 결과 모델.

    Pagination result model.
    Invariants: 0 <= len(content) <= size, page*size + len(content) <= total.

    Attributes:
        content: 현재 페이지 항목 목록 (Items for the current page)
        total: 전체 항목 수 (Total count across all pages)
        page: 현재 페이지 번호 (Current page number, 0-based)
        size: 페이지당 항목 수 (Requested page size)
    """

    content: list[Any]  # 현재 페이지 항목 목록 (Paginated items)
    total: int  # 전체 항목 수 (Total item count)
    page: int  # 현재 페이지 번호 — 0부터 시작 (Current page, 0-indexed)
    size: int  # 페이지당 항목 수 (Items per page)

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.size) if self.size else 0

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 0


async def paginate(
    db: AsyncSession,
    query: Select[Any],
    pageable: Pageable,
) -> Page:
    """SQLAlchemy 쿼리에 대한 페이지네이션을 수행합니다.

    Execute a paginated SQLAlchemy query.
    Runs two queries: one for the total count (via subquery) and one for
    the actual page of results with OFFSET/LIMIT. The query must already
    carry its ORDER BY.

    Args:
        db: 비동기 DB 세션 (Async database session)
        query: SQLAlchemy Select 쿼리 (Filtered, ordered query to paginate)
        pageable: 페이지 요청 (Page request)

    Returns:
        Page: 항목 목록과 전체 개수 (Page of items with total count)
    """
    # 전체 개수 조회 — 서브쿼리로 감싸서 COUNT 실행 (Count total via subquery)
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    total: int = (await db.execute(count_query)).scalar() or 0

    # 페이지 항목 조회 — OFFSET/LIMIT 적용 (Fetch page items with offset/limit)
    result = await db.execute(query.offset(pageable.offset).limit(pageable.size))
    items: Sequence[Any] = result.scalars().all()

    return Page(content=list(items), total=total, page=pageable.page, size=pageable.size)


def pagination_headers(url: URL, page: Page) -> dict[str, str]:
    """페이지 결과로부터 X-Total-Count 및 Link 헤더를 생성합니다.

    Build X-Total-Count and an RFC 5988 Link header (next, prev, last, first)
    from the current request URL, replacing only its page/size parameters.
    """
    links: list[str] = []

    def _link(page_number: int, rel: str) -> None:
        target: URL = url.include_query_params(page=page_number, size=page.size)
        links.append(f'<{target}>; rel="{rel}"')

    if page.has_next:
        _link(page.page + 1, "next")
    if page.has_previous:
        _link(page.page - 1, "prev")
    _link(max(page.total_pages - 1, 0), "last")
    _link(0, "first")

    return {
        "X-Total-Count": str(page.total),
        "Link": ",".join(links),
    }
