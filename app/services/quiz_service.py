"""퀴즈 서비스 — 퀴즈 CRUD 비즈니스 로직.

Quiz Service — Business logic for quiz CRUD operations.
Quiz responses carry the number of questions, read through the explicit
quiz -> questions lookup on QuestionRepository.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.quiz import Quiz
from app.repositories.question_repository import question_repository
from app.repositories.quiz_repository import quiz_repository
from app.schemas.quiz import QuizResponse
from app.services.base import BaseCrudService
from app.services.query_service import QueryService
from app.utils.criteria import CriteriaSpec, FieldType

# 퀴즈 필터 가능 필드 — Filterable quiz fields
quiz_criteria: CriteriaSpec = CriteriaSpec(
    Quiz,
    {
        "id": FieldType.UUID,
        "title": FieldType.STRING,
        "description": FieldType.STRING,
        "time_limit": FieldType.INTEGER,
        "created_at": FieldType.DATETIME,
    },
)


class QuizService(BaseCrudService[Quiz, QuizResponse]):
    """퀴즈 관련 비즈니스 로직을 처리하는 서비스.

    Service handling quiz business logic.
    """

    entity_name = "quiz"

    async def build_response(self, db: AsyncSession, db_obj: Quiz) -> QuizResponse:
        """퀴즈 모델을 응답 스키마로 변환합니다 (문항 수 포함).

        Convert a Quiz to QuizResponse, counting its questions.
        """
        return QuizResponse(
            id=str(db_obj.id),
            title=db_obj.title,
            description=db_obj.description,
            time_limit=db_obj.time_limit,
            question_count=await question_repository.count_by_quiz(db, db_obj.id),
            created_at=db_obj.created_at,
            updated_at=db_obj.updated_at,
        )


quiz_query_service: QueryService[Quiz] = QueryService(quiz_repository, quiz_criteria)

# 싱글턴 인스턴스 — Singleton instance
quiz_service: QuizService = QuizService(quiz_repository, quiz_query_service)
