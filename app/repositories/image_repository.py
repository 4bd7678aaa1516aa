"""이미지 레포지토리 — 이미지 관련 DB 쿼리 담당.

Image Repository — Handles image-related database queries.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.image import Image
from app.repositories.base import BaseRepository


class ImageRepository(BaseRepository[Image]):
    """이미지 레포지토리.

    Image repository with the question -> images lookup.

    Extends:
        BaseRepository[Image]
    """

    def __init__(self) -> None:
        super().__init__(Image)

    async def get_by_question(
        self,
        db: AsyncSession,
        question_id: UUID,
    ) -> Sequence[Image]:
        """문항에 첨부된 이미지 목록을 조회합니다.

        Retrieve all images attached to a question, oldest first.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            question_id: 문항 UUID (Question UUID)

        Returns:
            Sequence[Image]: 이미지 목록 (List of images)
        """
        query: Select = (
            select(Image)
            .where(Image.question_id == question_id)
            .order_by(Image.created_at.asc(), Image.id.asc())
        )
        result = await db.execute(query)
        return result.scalars().all()


# 싱글턴 인스턴스 — Singleton instance
image_repository: ImageRepository = ImageRepository()
