"""문항 REST 라우터 — 문항 CRUD, 조건 검색, 개수 조회 엔드포인트.

Question REST Router — CRUD, criteria search and count endpoints for
questions, plus the question -> images lookup. The legacy verb-style
question routes live in app.api.legacy.questions.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import criteria_dependency, get_context, get_pageable
from app.context import AppContext
from app.database import get_db
from app.models.question import Question
from app.schemas.image import ImageResponse
from app.schemas.question import QuestionCreate, QuestionPatch, QuestionResponse, QuestionUpdate
from app.services.image_service import image_service
from app.services.question_service import question_query_service, question_service
from app.utils.criteria import Criteria
from app.utils.exceptions import BadRequestError, NotFoundError
from app.utils.headers import entity_creation_alert, entity_deletion_alert, entity_update_alert
from app.utils.pagination import Page, Pageable, pagination_headers

router: APIRouter = APIRouter()

ENTITY_NAME = "question"

question_criteria_dep = criteria_dependency(question_query_service)


@router.post("", response_model=QuestionResponse, status_code=201)
async def create_question(
    data: QuestionCreate,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[AppContext, Depends(get_context)],
) -> QuestionResponse:
    """새 문항을 생성합니다. 소속 퀴즈가 없으면 400.

    Create a new question under an existing quiz.
    """
    ctx.logger.debug("REST request to save Question : %s", data)
    if data.id is not None:
        raise BadRequestError("A new question cannot already have an ID")

    question: Question = await question_service.save(db, data)
    await db.commit()

    response.headers["Location"] = f"/api/questions/{question.id}"
    response.headers.update(entity_creation_alert(ctx.settings.CLIENT_APP_NAME, ENTITY_NAME, str(question.id)))
    return await question_service.build_response(db, question)


@router.put("/{question_id}", response_model=QuestionResponse)
async def update_question(
    question_id: UUID,
    data: QuestionUpdate,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[AppContext, Depends(get_context)],
) -> QuestionResponse:
    """문항 전체를 수정합니다.

    Replace an existing question. 400 on id mismatch, 404 if absent.
    """
    ctx.logger.debug("REST request to update Question : %s, %s", question_id, data)
    if data.id is not None and data.id != question_id:
        raise BadRequestError("Invalid ID")

    question: Question = await question_service.update(db, question_id, data)
    await db.commit()

    response.headers.update(entity_update_alert(ctx.settings.CLIENT_APP_NAME, ENTITY_NAME, str(question_id)))
    return await question_service.build_response(db, question)


@router.patch("/{question_id}", response_model=QuestionResponse)
async def partial_update_question(
    question_id: UUID,
    patch: QuestionPatch,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[AppContext, Depends(get_context)],
) -> QuestionResponse:
    """문항 일부 필드를 수정합니다 (null 필드는 무시).

    Merge the non-null fields of the body onto an existing question.
    """
    ctx.logger.debug("REST request to partial update Question : %s, %s", question_id, patch)
    if patch.id is not None and patch.id != question_id:
        raise BadRequestError("Invalid ID")

    question: Question | None = await question_service.partial_update(db, question_id, patch)
    if question is None:
        raise NotFoundError("Question not found")
    await db.commit()

    response.headers.update(entity_update_alert(ctx.settings.CLIENT_APP_NAME, ENTITY_NAME, str(question_id)))
    return await question_service.build_response(db, question)


@router.get("", response_model=list[QuestionResponse])
async def list_questions(
    request: Request,
    response: Response,
    criteria: Annotated[Criteria, Depends(question_criteria_dep)],
    pageable: Annotated[Pageable, Depends(get_pageable)],
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[AppContext, Depends(get_context)],
) -> list[QuestionResponse]:
    """조건에 맞는 문항 목록을 페이지 조회합니다.

    List questions matching the criteria, with pagination headers.
    """
    ctx.logger.debug("REST request to get Questions by criteria: %s", criteria.filters)
    page: Page = await question_query_service.find_by_criteria(db, criteria, pageable)
    response.headers.update(pagination_headers(request.url, page))
    return [await question_service.build_response(db, question) for question in page.content]


@router.get("/count", response_model=int)
async def count_questions(
    criteria: Annotated[Criteria, Depends(question_criteria_dep)],
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[AppContext, Depends(get_context)],
) -> int:
    ctx.logger.debug("REST request to count Questions by criteria: %s", criteria.filters)
    return await question_query_service.count_by_criteria(db, criteria)


@router.get("/{question_id}", response_model=QuestionResponse)
async def get_question(
    question_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[AppContext, Depends(get_context)],
) -> QuestionResponse:
    ctx.logger.debug("REST request to get Question : %s", question_id)
    question: Question | None = await question_service.find_one(db, question_id)
    if question is None:
        raise NotFoundError("Question not found")
    return await question_service.build_response(db, question)


@router.get("/{question_id}/images", response_model=list[ImageResponse])
async def list_question_images(
    question_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[AppContext, Depends(get_context)],
) -> list[ImageResponse]:
    """문항에 첨부된 이미지 목록을 조회합니다. 문항이 없으면 404.

    List the images attached to a question, or 404 if the question is unknown.
    """
    ctx.logger.debug("REST request to get Images of Question : %s", question_id)
    if await question_service.find_one(db, question_id) is None:
        raise NotFoundError("Question not found")
    images = await image_service.list_by_question(db, question_id)
    return [await image_service.build_response(db, image) for image in images]


@router.delete("/{question_id}", status_code=204)
async def delete_question(
    question_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[AppContext, Depends(get_context)],
) -> Response:
    ctx.logger.debug("REST request to delete Question : %s", question_id)
    await question_service.delete(db, question_id)
    await db.commit()
    return Response(
        status_code=204,
        headers=entity_deletion_alert(ctx.settings.CLIENT_APP_NAME, ENTITY_NAME, str(question_id)),
    )
