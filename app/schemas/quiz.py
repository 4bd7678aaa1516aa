"""퀴즈 관련 Pydantic 요청/응답 스키마 정의.

Quiz Pydantic request/response schema definitions.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from app.database import INT4_MAX


class QuizCreate(BaseModel):
    """퀴즈 생성 요청 스키마.

    Quiz creation request schema.

    Attributes:
        id: 생성 시 비어 있어야 함 (Must be empty on create)
        title: 퀴즈 제목 (Quiz title)
        description: 설명 (Description, optional)
        time_limit: 제한 시간(분) (Time limit in minutes, optional)
    """

    id: UUID | None = None
    title: str = Field(..., min_length=1, max_length=255)  # 퀴즈 제목 (Quiz title)
    description: str | None = None  # 설명 (Description)
    time_limit: int | None = Field(None, ge=1, le=INT4_MAX)  # 제한 시간 (Minutes)


class QuizUpdate(QuizCreate):
    """퀴즈 전체 수정 요청 스키마 (PUT)."""


class QuizPatch(BaseModel):
    """퀴즈 부분 수정 요청 스키마 (PATCH)."""

    id: UUID | None = None
    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    time_limit: int | None = Field(None, ge=1, le=INT4_MAX)


class QuizResponse(BaseModel):
    """퀴즈 응답 스키마.

    Quiz response schema with the number of questions it holds.

    Attributes:
        question_count: 문항 수 — 서비스에서 계산 (Question count, computed by service)
    """

    id: str  # 퀴즈 UUID 문자열 (Quiz UUID as string)
    title: str
    description: str | None
    time_limit: int | None
    question_count: int = 0  # 문항 수 (Number of questions)
    created_at: datetime
    updated_at: datetime
