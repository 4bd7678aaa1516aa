"""문항 서비스 — 문항 CRUD 및 퀴즈별 목록 비즈니스 로직.

Question Service — Business logic for question CRUD and the per-quiz
question listing used by the legacy /api/getlistquestion route.
"""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.question import Question
from app.repositories.question_repository import question_repository
from app.repositories.quiz_repository import quiz_repository
from app.schemas.question import QuestionResponse
from app.services.base import BaseCrudService
from app.services.query_service import QueryService
from app.utils.criteria import CriteriaSpec, FieldType
from app.utils.exceptions import BadRequestError
from app.utils.pagination import Page, Pageable

# 문항 필터 가능 필드 — Filterable question fields
question_criteria: CriteriaSpec = CriteriaSpec(
    Question,
    {
        "id": FieldType.UUID,
        "quiz_id": FieldType.UUID,
        "content": FieldType.STRING,
        "correct_answer": FieldType.STRING,
        "position": FieldType.INTEGER,
        "created_at": FieldType.DATETIME,
    },
)


class QuestionService(BaseCrudService[Question, QuestionResponse]):
    """문항 관련 비즈니스 로직을 처리하는 서비스.

    Service handling question business logic.
    """

    entity_name = "question"

    async def build_response(self, db: AsyncSession, db_obj: Question) -> QuestionResponse:
        return QuestionResponse(
            id=str(db_obj.id),
            quiz_id=str(db_obj.quiz_id),
            content=db_obj.content,
            options=list(db_obj.options or []),
            correct_answer=db_obj.correct_answer,
            position=db_obj.position,
            created_at=db_obj.created_at,
            updated_at=db_obj.updated_at,
        )

    async def _to_values(self, db: AsyncSession, values: dict[str, Any]) -> dict[str, Any]:
        """소속 퀴즈 존재 여부를 확인합니다.

        Verify the referenced quiz exists.

        Raises:
            BadRequestError: 퀴즈가 없을 때 (Referenced quiz does not exist)
        """
        quiz_id: UUID | None = values.get("quiz_id")
        if quiz_id is not None and not await quiz_repository.exists(db, {"id": quiz_id}):
            raise BadRequestError(f"Quiz {quiz_id} does not exist")
        return values

    async def list_by_quiz(
        self,
        db: AsyncSession,
        quiz_id: UUID,
        index: int,
        page_size: int,
    ) -> Page:
        """퀴즈의 문항을 순서대로 페이지 조회합니다.

        Return page `index` (0-based) of a quiz's questions, ordered by
        position. An unknown quiz yields an empty page.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            quiz_id: 퀴즈 UUID (Quiz UUID)
            index: 페이지 번호, 0부터 시작 (Page index, 0-based)
            page_size: 페이지 크기 (Page size)

        Returns:
            Page: 문항 목록 (Questions of the quiz)
        """
        return await question_repository.get_by_quiz(db, quiz_id, Pageable(page=index, size=page_size))


question_query_service: QueryService[Question] = QueryService(question_repository, question_criteria)

# 싱글턴 인스턴스 — Singleton instance
question_service: QuestionService = QuestionService(question_repository, question_query_service)
