"""이미지 REST 라우터 — 이미지 CRUD, 조건 검색, 개수 조회 엔드포인트.

Image REST Router — CRUD, criteria search and count endpoints for images.

Endpoints:
    POST   /images             201 + Location, id must be absent
    PUT    /images/{id}        full update, body id must match or be absent
    PATCH  /images/{id}        merge-patch, 404 if absent
    GET    /images             criteria + page/size/sort, pagination headers
    GET    /images/count       criteria count
    GET    /images/{id}        200 or 404
    DELETE /images/{id}        204, idempotent
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import criteria_dependency, get_context, get_pageable
from app.context import AppContext
from app.database import get_db
from app.models.image import Image
from app.schemas.image import ImageCreate, ImagePatch, ImageResponse, ImageUpdate
from app.services.image_service import image_query_service, image_service
from app.utils.criteria import Criteria
from app.utils.exceptions import BadRequestError, NotFoundError
from app.utils.headers import entity_creation_alert, entity_deletion_alert, entity_update_alert
from app.utils.pagination import Page, Pageable, pagination_headers

router: APIRouter = APIRouter()

ENTITY_NAME = "image"

image_criteria_dep = criteria_dependency(image_query_service)


@router.post("", response_model=ImageResponse, status_code=201)
async def create_image(
    data: ImageCreate,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[AppContext, Depends(get_context)],
) -> ImageResponse:
    """새 이미지를 생성합니다.

    Create a new image. A body carrying an id is rejected with 400.
    """
    ctx.logger.debug("REST request to save Image : %s", data.model_dump(exclude={"data"}))
    if data.id is not None:
        raise BadRequestError("A new image cannot already have an ID")

    image: Image = await image_service.save(db, data)
    await db.commit()

    response.headers["Location"] = f"/api/images/{image.id}"
    response.headers.update(entity_creation_alert(ctx.settings.CLIENT_APP_NAME, ENTITY_NAME, str(image.id)))
    return await image_service.build_response(db, image)


@router.put("/{image_id}", response_model=ImageResponse)
async def update_image(
    image_id: UUID,
    data: ImageUpdate,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[AppContext, Depends(get_context)],
) -> ImageResponse:
    """이미지 전체를 수정합니다.

    Replace an existing image. 400 on id mismatch, 404 if absent.
    """
    ctx.logger.debug("REST request to update Image : %s, %s", image_id, data.model_dump(exclude={"data"}))
    if data.id is not None and data.id != image_id:
        raise BadRequestError("Invalid ID")

    image: Image = await image_service.update(db, image_id, data)
    await db.commit()

    response.headers.update(entity_update_alert(ctx.settings.CLIENT_APP_NAME, ENTITY_NAME, str(image_id)))
    return await image_service.build_response(db, image)


@router.patch("/{image_id}", response_model=ImageResponse)
async def partial_update_image(
    image_id: UUID,
    patch: ImagePatch,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[AppContext, Depends(get_context)],
) -> ImageResponse:
    """이미지 일부 필드를 수정합니다 (null 필드는 무시).

    Merge the non-null fields of the body onto an existing image.
    Accepts application/json and application/merge-patch+json.
    """
    ctx.logger.debug("REST request to partial update Image : %s", image_id)
    if patch.id is not None and patch.id != image_id:
        raise BadRequestError("Invalid ID")

    image: Image | None = await image_service.partial_update(db, image_id, patch)
    if image is None:
        raise NotFoundError("Image not found")
    await db.commit()

    response.headers.update(entity_update_alert(ctx.settings.CLIENT_APP_NAME, ENTITY_NAME, str(image_id)))
    return await image_service.build_response(db, image)


@router.get("", response_model=list[ImageResponse])
async def list_images(
    request: Request,
    response: Response,
    criteria: Annotated[Criteria, Depends(image_criteria_dep)],
    pageable: Annotated[Pageable, Depends(get_pageable)],
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[AppContext, Depends(get_context)],
) -> list[ImageResponse]:
    """조건에 맞는 이미지 목록을 페이지 조회합니다.

    List images matching the criteria, with X-Total-Count and Link headers.
    """
    ctx.logger.debug("REST request to get Images by criteria: %s", criteria.filters)
    page: Page = await image_query_service.find_by_criteria(db, criteria, pageable)
    response.headers.update(pagination_headers(request.url, page))
    return [await image_service.build_response(db, image) for image in page.content]


@router.get("/count", response_model=int)
async def count_images(
    criteria: Annotated[Criteria, Depends(image_criteria_dep)],
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[AppContext, Depends(get_context)],
) -> int:
    """조건에 맞는 이미지 수 (Number of images matching the criteria)."""
    ctx.logger.debug("REST request to count Images by criteria: %s", criteria.filters)
    return await image_query_service.count_by_criteria(db, criteria)


@router.get("/{image_id}", response_model=ImageResponse)
async def get_image(
    image_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[AppContext, Depends(get_context)],
) -> ImageResponse:
    """이미지를 조회합니다. 없으면 404.

    Get one image, or 404.
    """
    ctx.logger.debug("REST request to get Image : %s", image_id)
    image: Image | None = await image_service.find_one(db, image_id)
    if image is None:
        raise NotFoundError("Image not found")
    return await image_service.build_response(db, image)


@router.delete("/{image_id}", status_code=204)
async def delete_image(
    image_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[AppContext, Depends(get_context)],
) -> Response:
    """이미지를 삭제합니다. 없는 id도 204.

    Delete an image; deleting a missing id also returns 204.
    """
    ctx.logger.debug("REST request to delete Image : %s", image_id)
    await image_service.delete(db, image_id)
    await db.commit()
    return Response(
        status_code=204,
        headers=entity_deletion_alert(ctx.settings.CLIENT_APP_NAME, ENTITY_NAME, str(image_id)),
    )
