"""기본 CRUD 서비스 — 엔티티 서비스의 공통 로직.

Base CRUD Service — save / update / partial update / find / delete shared
by the image, question and quiz services. Subclasses convert request
schemas to column values, check foreign keys and build response schemas.

Merge rules:
    update          every writable field of the request replaces the stored value
    partial_update  only non-null request fields replace stored values
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.base import BaseRepository, ModelType
from app.services.query_service import QueryService
from app.utils.exceptions import NotFoundError
from app.utils.pagination import Page, Pageable

ResponseType = TypeVar("ResponseType", bound=BaseModel)


class BaseCrudService(ABC, Generic[ModelType, ResponseType]):
    """제네릭 CRUD 서비스.

    Generic CRUD service. Stateless: every call receives its session.

    Attributes:
        entity_name: 엔티티 이름 (Entity name used in messages and alert headers)
        repository: 엔티티 레포지토리 (Entity repository)
        query_service: 조건 검색 서비스 (Criteria query service)
    """

    entity_name: str = "entity"

    def __init__(
        self,
        repository: BaseRepository[ModelType],
        query_service: QueryService[ModelType],
    ) -> None:
        self.repository: BaseRepository[ModelType] = repository
        self.query_service: QueryService[ModelType] = query_service

    @abstractmethod
    async def build_response(self, db: AsyncSession, db_obj: ModelType) -> ResponseType:
        """모델을 응답 스키마로 변환합니다 (Convert a model to its response schema)."""

    async def _to_values(self, db: AsyncSession, values: dict[str, Any]) -> dict[str, Any]:
        """요청 값을 컬럼 값으로 변환하고 참조 무결성을 확인합니다.

        Convert request values to column values and verify referenced rows.
        Subclasses raise BadRequestError for a dangling reference.
        """
        return values

    async def save(self, db: AsyncSession, data: BaseModel) -> ModelType:
        """새 엔티티를 저장합니다 (id는 저장소가 부여).

        Save a new entity; the store assigns its id.
        """
        values: dict[str, Any] = await self._to_values(db, data.model_dump(exclude={"id"}))
        return await self.repository.create(db, values)

    async def update(self, db: AsyncSession, entity_id: UUID, data: BaseModel) -> ModelType:
        """기존 엔티티의 모든 필드를 교체합니다.

        Replace every writable field of an existing entity.

        Raises:
            NotFoundError: 대상이 없을 때 (Target does not exist)
        """
        if await self.repository.get_by_id(db, entity_id) is None:
            raise NotFoundError(f"{self.entity_name.capitalize()} not found")

        values: dict[str, Any] = await self._to_values(db, data.model_dump(exclude={"id"}))
        db_obj: ModelType | None = await self.repository.update(db, entity_id, values)
        if db_obj is None:
            raise NotFoundError(f"{self.entity_name.capitalize()} not found")
        return db_obj

    async def partial_update(self, db: AsyncSession, entity_id: UUID, patch: BaseModel) -> ModelType | None:
        """null이 아닌 필드만 기존 엔티티에 병합합니다.

        Merge the non-null fields of patch onto the stored entity, field by
        field. Fields that are null or absent keep their stored value.

        Returns:
            ModelType | None: 병합된 엔티티, 대상이 없으면 None (Merged entity or None)
        """
        if await self.repository.get_by_id(db, entity_id) is None:
            return None

        values: dict[str, Any] = await self._to_values(
            db, patch.model_dump(exclude={"id"}, exclude_none=True)
        )
        return await self.repository.update(db, entity_id, values)

    async def find_all(self, db: AsyncSession, pageable: Pageable) -> Page:
        """전체 엔티티를 페이지 조회합니다 (Page over every entity)."""
        return await self.query_service.find_by_criteria(db, self.query_service.spec.build(), pageable)

    async def find_one(self, db: AsyncSession, entity_id: UUID) -> ModelType | None:
        return await self.repository.get_by_id(db, entity_id)

    async def delete(self, db: AsyncSession, entity_id: UUID) -> None:
        """엔티티를 삭제합니다. 없는 id는 무시합니다 (멱등).

        Delete an entity; deleting a missing id is a no-op.
        """
        await self.repository.delete(db, entity_id)
