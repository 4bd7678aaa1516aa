"""문항 레포지토리 — 문항 관련 DB 쿼리 담당.

Question Repository — Handles question-related database queries.
Extends BaseRepository with the quiz -> questions lookups that replace an
ORM collection on Quiz.
"""

from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.question import Question
from app.repositories.base import BaseRepository
from app.utils.pagination import Page, Pageable


class QuestionRepository(BaseRepository[Question]):
    """문항 레포지토리.

    Question repository with per-quiz lookups.

    Extends:
        BaseRepository[Question]
    """

    def __init__(self) -> None:
        """레포지토리를 초기화합니다.

        Initialize the question repository with Question model.
        """
        super().__init__(Question)

    def _by_quiz(self, quiz_id: UUID) -> Select:
        return select(Question).where(Question.quiz_id == quiz_id)

    async def get_by_quiz(
        self,
        db: AsyncSession,
        quiz_id: UUID,
        pageable: Pageable,
    ) -> Page:
        """퀴즈에 속한 문항을 순서대로 페이지 조회합니다.

        Retrieve a page of a quiz's questions ordered by position, then
        creation time, then id.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            quiz_id: 퀴즈 UUID (Quiz UUID)
            pageable: 페이지 요청, 0부터 시작 (Page request, 0-based)

        Returns:
            Page: 문항 목록과 전체 개수 (Questions with total count)
        """
        query: Select = self._by_quiz(quiz_id).order_by(
            Question.position.asc(),
            Question.created_at.asc(),
            Question.id.asc(),
        )
        return await self.get_paginated(db, query, pageable)

    async def count_by_quiz(
        self,
        db: AsyncSession,
        quiz_id: UUID,
    ) -> int:
        """퀴즈에 속한 문항 수 (Number of questions in a quiz)."""
        return await self.count(db, self._by_quiz(quiz_id))


# 싱글턴 인스턴스 — Singleton instance
question_repository: QuestionRepository = QuestionRepository()
