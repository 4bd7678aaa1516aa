"""이미지 관련 Pydantic 요청/응답 스키마 정의.

Image Pydantic request/response schema definitions.
Binary payloads travel as base64 text in JSON; the service decodes them
to bytes before they reach the database.
"""

import base64
import binascii
from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import AfterValidator, BaseModel, Field


def _check_base64(value: str) -> str:
    """base64 형식 검증 (Reject payloads that are not valid base64)."""
    try:
        base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError("data must be base64-encoded") from exc
    return value


# base64 문자열 — Base64 text, validated but kept as str
Base64Text = Annotated[str, AfterValidator(_check_base64)]


class ImageCreate(BaseModel):
    """이미지 생성 요청 스키마.

    Image creation request schema. id must be absent; the store assigns it.

    Attributes:
        id: 반드시 비어 있어야 함 (Must be empty on create)
        title: 이미지 제목 (Image title)
        data: base64 인코딩된 바이트 (Base64-encoded payload, optional)
        content_type: MIME 타입 (MIME type, optional)
        question_id: 소속 문항 UUID (Owning question, optional)
    """

    id: UUID | None = None
    title: str = Field(..., min_length=1, max_length=255)  # 이미지 제목 (Image title)
    data: Base64Text | None = None  # base64 문자열 (Base64 payload)
    content_type: str | None = Field(None, max_length=100)  # MIME 타입 (e.g. "image/png")
    question_id: UUID | None = None  # 소속 문항 (Owning question)


class ImageUpdate(ImageCreate):
    """이미지 전체 수정 요청 스키마 (PUT).

    Full replacement: every writable field is overwritten, omitted optional
    fields become null. id may be omitted or must equal the path id.
    """


class ImagePatch(BaseModel):
    """이미지 부분 수정 요청 스키마 (PATCH, merge-patch).

    Partial update: only non-null fields are merged onto the stored image.
    """

    id: UUID | None = None
    title: str | None = Field(None, min_length=1, max_length=255)
    data: Base64Text | None = None
    content_type: str | None = Field(None, max_length=100)
    question_id: UUID | None = None


class ImageResponse(BaseModel):
    """이미지 응답 스키마.

    Image response schema returned from API.
    """

    id: str  # 이미지 UUID 문자열 (Image UUID as string)
    title: str
    data: str | None  # base64 문자열 (Base64 payload)
    content_type: str | None
    question_id: str | None
    created_at: datetime  # 생성 일시 UTC (Creation timestamp)
    updated_at: datetime
