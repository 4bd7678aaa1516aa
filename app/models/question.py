"""문항 SQLAlchemy ORM 모델 정의.

Question SQLAlchemy ORM model definition.

Tables:
    - questions: 퀴즈 문항 (Quiz questions with options and answer marker)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import JSON, String, Text, Integer, DateTime, ForeignKey, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Question(Base):
    """문항 모델 — 보기 목록과 정답 표시를 가진 퀴즈 문항.

    Question model — A quiz question with a list of options and a
    correct-answer marker. The owning quiz is referenced by id only.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        quiz_id: 소속 퀴즈 FK (Parent quiz foreign key)
        content: 문항 본문 (Question text)
        options: 보기 목록 (List of option strings)
        correct_answer: 정답 표시 (Correct answer marker, e.g. "B")
        position: 퀴즈 내 순서 (Order within the quiz, lower = first)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "questions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 소속 퀴즈 FK — Parent quiz (CASCADE: 퀴즈 삭제 시 문항도 삭제)
    quiz_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    # 보기 목록 — JSON array of option strings
    options: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    correct_answer: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # 정렬 순서 — Display order inside the quiz (0-based)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        Index("ix_questions_quiz_position", "quiz_id", "position"),
    )
