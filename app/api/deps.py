"""FastAPI 의존성 주입 모듈 — 컨텍스트, 페이지 요청, 검색 조건.

FastAPI dependency injection module.
Provides reusable dependencies for reading the AppContext built at
startup, parsing page/size/sort into a Pageable, and parsing criteria
query parameters for a given entity.

Usage:
    image_criteria_dep = criteria_dependency(image_query_service)

    @router.get("")
    async def list_images(
        criteria: Annotated[Criteria, Depends(image_criteria_dep)],
        pageable: Annotated[Pageable, Depends(get_pageable)],
    ): ...
"""

from typing import Annotated, Callable

from fastapi import Depends, Query, Request

from app.context import AppContext
from app.database import INT4_MAX
from app.services.query_service import QueryService
from app.utils.criteria import Criteria
from app.utils.pagination import Pageable


def get_context(request: Request) -> AppContext:
    """시작 시 구성된 애플리케이션 컨텍스트 (AppContext built by create_app)."""
    return request.app.state.context


def get_pageable(
    ctx: Annotated[AppContext, Depends(get_context)],
    page: Annotated[int, Query(ge=0, le=INT4_MAX)] = 0,
    size: Annotated[int | None, Query(ge=1)] = None,
    sort: Annotated[list[str] | None, Query()] = None,
) -> Pageable:
    """page/size/sort 쿼리 파라미터를 Pageable로 변환합니다.

    Build a Pageable from `page` (0-based), `size` and repeated
    `sort=field,asc|desc` parameters. size defaults to DEFAULT_PAGE_SIZE and
    is capped at MAX_PAGE_SIZE.
    """
    settings = ctx.settings
    page_size: int = min(size or settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE)
    return Pageable(page=page, size=page_size, sort=Pageable.parse_sort(sort))


def criteria_dependency(query_service: QueryService) -> Callable[[Request], Criteria]:
    """엔티티별 검색 조건 의존성 생성기.

    Create a dependency that parses the request's query string into a
    Criteria for query_service's entity. Invalid filters fail with 400.
    """

    def _criteria(request: Request) -> Criteria:
        return query_service.parse_criteria(request.query_params.multi_items())

    return _criteria
