"""이미지 서비스 — 이미지 CRUD 비즈니스 로직.

Image Service — Business logic for image CRUD operations.
Converts base64 payloads to bytes on the way in and back on the way out.
"""

import base64
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.image import Image
from app.repositories.image_repository import image_repository
from app.repositories.question_repository import question_repository
from app.schemas.image import ImageResponse
from app.services.base import BaseCrudService
from app.services.query_service import QueryService
from app.utils.criteria import CriteriaSpec, FieldType
from app.utils.exceptions import BadRequestError

# 이미지 필터 가능 필드 — Filterable image fields
image_criteria: CriteriaSpec = CriteriaSpec(
    Image,
    {
        "id": FieldType.UUID,
        "title": FieldType.STRING,
        "content_type": FieldType.STRING,
        "question_id": FieldType.UUID,
        "created_at": FieldType.DATETIME,
    },
)


class ImageService(BaseCrudService[Image, ImageResponse]):
    """이미지 관련 비즈니스 로직을 처리하는 서비스.

    Service handling image business logic.
    """

    entity_name = "image"

    async def build_response(self, db: AsyncSession, db_obj: Image) -> ImageResponse:
        """이미지 모델을 응답 스키마로 변환합니다.

        Convert an Image to ImageResponse; bytes are returned as base64 text.
        """
        return ImageResponse(
            id=str(db_obj.id),
            title=db_obj.title,
            data=base64.b64encode(db_obj.data).decode("ascii") if db_obj.data is not None else None,
            content_type=db_obj.content_type,
            question_id=str(db_obj.question_id) if db_obj.question_id else None,
            created_at=db_obj.created_at,
            updated_at=db_obj.updated_at,
        )

    async def _to_values(self, db: AsyncSession, values: dict[str, Any]) -> dict[str, Any]:
        """base64 데이터를 디코딩하고 소속 문항을 확인합니다.

        Decode the base64 payload and verify the referenced question.

        Raises:
            BadRequestError: 문항이 없을 때 (Referenced question does not exist)
        """
        question_id: UUID | None = values.get("question_id")
        if question_id is not None and not await question_repository.exists(db, {"id": question_id}):
            raise BadRequestError(f"Question {question_id} does not exist")

        if values.get("data") is not None:
            values["data"] = base64.b64decode(values["data"])
        return values

    async def list_by_question(self, db: AsyncSession, question_id: UUID) -> Sequence[Image]:
        """문항에 첨부된 이미지 목록 (Images attached to a question)."""
        return await image_repository.get_by_question(db, question_id)


image_query_service: QueryService[Image] = QueryService(image_repository, image_criteria)

# 싱글턴 인스턴스 — Singleton instance
image_service: ImageService = ImageService(image_repository, image_query_service)
