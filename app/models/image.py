"""이미지 SQLAlchemy ORM 모델 정의.

Image SQLAlchemy ORM model definition.

Tables:
    - images: 문항 첨부 이미지 (Images attached to questions)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, LargeBinary, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Image(Base):
    """이미지 모델 — 문항에 첨부되는 바이너리 이미지.

    Image model — Binary image payload, optionally attached to a question.
    A question has many images; the link is the question_id column.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        title: 이미지 제목 (Image title)
        data: 이미지 바이트 (Raw image bytes, optional)
        content_type: MIME 타입 (MIME type of data, e.g. "image/png")
        question_id: 소속 문항 FK (Owning question, optional)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "images"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    data: Mapped[bytes | None] = mapped_column(LargeBinary, nullable=True)
    content_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    # 소속 문항 FK — Owning question (SET NULL: 문항 삭제 시 이미지는 유지)
    question_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("questions.id", ondelete="SET NULL"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
