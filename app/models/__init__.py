"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata before create_all() or foreign-key resolution.

Modules:
    quiz: 퀴즈 (Quiz metadata)
    question: 퀴즈 문항 (Questions, linked to a quiz by quiz_id)
    image: 이미지 (Images, linked to a question by question_id)
"""

from app.models.quiz import Quiz
from app.models.question import Question
from app.models.image import Image

__all__ = [
    "Quiz",
    "Question",
    "Image",
]
