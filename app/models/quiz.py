"""퀴즈 SQLAlchemy ORM 모델 정의.

Quiz SQLAlchemy ORM model definition.
A quiz is the top-level grouping of questions. Its questions are not
mapped as an ORM collection; they are looked up by quiz_id through
QuestionRepository.get_by_quiz().

Tables:
    - quizzes: 퀴즈 메타데이터 (Quiz metadata)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, Text, Integer, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Quiz(Base):
    """퀴즈 모델 — 문항 묶음의 메타데이터.

    Quiz model — Metadata for a set of practice questions.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        title: 퀴즈 제목 (Quiz title)
        description: 설명 (Free-text description, optional)
        time_limit: 제한 시간(분) (Time limit in minutes, optional)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "quizzes"

    # 퀴즈 고유 식별자 — Quiz unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 퀴즈 제목 — Quiz display title
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 제한 시간 — Time limit in minutes (None = untimed)
    time_limit: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
