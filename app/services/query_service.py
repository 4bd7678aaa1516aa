"""조건 검색 서비스 — Criteria 기반 페이지 조회 및 개수 조회.

Criteria query service — findByCriteria / countByCriteria for one entity.
Each call evaluates the criteria against the live database; nothing is
cached between calls.
"""

from collections.abc import Iterable
from typing import Generic

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.base import BaseRepository, ModelType
from app.utils.criteria import Criteria, CriteriaSpec
from app.utils.pagination import Page, Pageable


class QueryService(Generic[ModelType]):
    """엔티티 하나에 대한 조건 검색.

    Attributes:
        repository: 엔티티 레포지토리 (Entity repository)
        spec: 필터 가능 필드 정의 (Filterable field definition)
    """

    def __init__(self, repository: BaseRepository[ModelType], spec: CriteriaSpec) -> None:
        self.repository: BaseRepository[ModelType] = repository
        self.spec: CriteriaSpec = spec

    def parse_criteria(self, params: Iterable[tuple[str, str]]) -> Criteria:
        """쿼리 파라미터를 Criteria로 변환 (Parse query params; fails fast on bad input)."""
        return self.spec.parse(params)

    async def find_by_criteria(
        self,
        db: AsyncSession,
        criteria: Criteria,
        pageable: Pageable,
    ) -> Page:
        """조건에 맞는 엔티티를 정렬하여 페이지 조회합니다.

        Return one page of entities matching every clause of criteria,
        ordered by pageable.sort.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            criteria: 검색 조건 (Validated criteria)
            pageable: 페이지 요청 (Page request)

        Returns:
            Page: 일치 항목과 전체 개수 (Matches with total count)

        Raises:
            InvalidCriteriaError: 알 수 없는 정렬 필드 (Unknown sort field)
        """
        query: Select = criteria.apply(self.repository.select())
        query = query.order_by(*self.spec.order_by(pageable.sort))
        return await self.repository.get_paginated(db, query, pageable)

    async def count_by_criteria(self, db: AsyncSession, criteria: Criteria) -> int:
        """조건에 맞는 전체 개수 (Total matches, pagination ignored)."""
        return await self.repository.count(db, criteria.apply(self.repository.select()))
