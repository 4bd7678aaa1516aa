"""문항 관련 Pydantic 요청/응답 스키마 정의.

Question Pydantic request/response schema definitions.
Used by both the REST routes (/api/questions) and the legacy routes
(/api/addquestion, /api/editquestion, ...).
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from app.database import INT4_MAX


class QuestionCreate(BaseModel):
    """문항 생성 요청 스키마.

    Question creation request schema.

    Attributes:
        id: 생성 시 비어 있어야 함 (Empty on create; required by /editquestion)
        quiz_id: 소속 퀴즈 UUID (Parent quiz)
        content: 문항 본문 (Question text)
        options: 보기 목록 (Option strings)
        correct_answer: 정답 표시 (Correct answer marker, optional)
        position: 퀴즈 내 순서 (Order within the quiz)
    """

    id: UUID | None = None
    quiz_id: UUID  # 소속 퀴즈 (Parent quiz)
    content: str = Field(..., min_length=1)  # 문항 본문 (Question text)
    options: list[str] = Field(default_factory=list)  # 보기 목록 (Options)
    correct_answer: str | None = Field(None, max_length=255)  # 정답 (Answer marker)
    position: int = Field(0, ge=0, le=INT4_MAX)  # 정렬 순서 (Display order)


class QuestionUpdate(QuestionCreate):
    """문항 전체 수정 요청 스키마 (PUT / editquestion).

    Full replacement of every writable field.
    """


class QuestionPatch(BaseModel):
    """문항 부분 수정 요청 스키마 (PATCH).

    Partial update: only non-null fields are merged.
    """

    id: UUID | None = None
    quiz_id: UUID | None = None
    content: str | None = Field(None, min_length=1)
    options: list[str] | None = None
    correct_answer: str | None = Field(None, max_length=255)
    position: int | None = Field(None, ge=0, le=INT4_MAX)


class QuestionResponse(BaseModel):
    """문항 응답 스키마.

    Question response schema returned from API.
    """

    id: str  # 문항 UUID 문자열 (Question UUID as string)
    quiz_id: str  # 퀴즈 UUID 문자열 (Quiz UUID as string)
    content: str
    options: list[str]
    correct_answer: str | None
    position: int
    created_at: datetime
    updated_at: datetime
