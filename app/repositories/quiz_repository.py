"""퀴즈 레포지토리 — 퀴즈 관련 DB 쿼리 담당.

Quiz Repository — Handles quiz-related database queries.
"""

from app.models.quiz import Quiz
from app.repositories.base import BaseRepository


class QuizRepository(BaseRepository[Quiz]):
    """퀴즈 레포지토리.

    Quiz repository; the generic CRUD operations cover every use.

    Extends:
        BaseRepository[Quiz]
    """

    def __init__(self) -> None:
        super().__init__(Quiz)


# 싱글턴 인스턴스 — Singleton instance
quiz_repository: QuizRepository = QuizRepository()
