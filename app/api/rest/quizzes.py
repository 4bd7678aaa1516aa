"""퀴즈 REST 라우터 — 퀴즈 CRUD, 조건 검색, 개수 조회 엔드포인트.

Quiz REST Router — CRUD, criteria search and count endpoints for quizzes.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import criteria_dependency, get_context, get_pageable
from app.context import AppContext
from app.database import get_db
from app.models.quiz import Quiz
from app.schemas.quiz import QuizCreate, QuizPatch, QuizResponse, QuizUpdate
from app.services.quiz_service import quiz_query_service, quiz_service
from app.utils.criteria import Criteria
from app.utils.exceptions import BadRequestError, NotFoundError
from app.utils.headers import entity_creation_alert, entity_deletion_alert, entity_update_alert
from app.utils.pagination import Page, Pageable, pagination_headers

router: APIRouter = APIRouter()

ENTITY_NAME = "quiz"

quiz_criteria_dep = criteria_dependency(quiz_query_service)


@router.post("", response_model=QuizResponse, status_code=201)
async def create_quiz(
    data: QuizCreate,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[AppContext, Depends(get_context)],
) -> QuizResponse:
    """새 퀴즈를 생성합니다.

    Create a new quiz.
    """
    ctx.logger.debug("REST request to save Quiz : %s", data)
    if data.id is not None:
        raise BadRequestError("A new quiz cannot already have an ID")

    quiz: Quiz = await quiz_service.save(db, data)
    await db.commit()

    response.headers["Location"] = f"/api/quizzes/{quiz.id}"
    response.headers.update(entity_creation_alert(ctx.settings.CLIENT_APP_NAME, ENTITY_NAME, str(quiz.id)))
    return await quiz_service.build_response(db, quiz)


@router.put("/{quiz_id}", response_model=QuizResponse)
async def update_quiz(
    quiz_id: UUID,
    data: QuizUpdate,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[AppContext, Depends(get_context)],
) -> QuizResponse:
    ctx.logger.debug("REST request to update Quiz : %s, %s", quiz_id, data)
    if data.id is not None and data.id != quiz_id:
        raise BadRequestError("Invalid ID")

    quiz: Quiz = await quiz_service.update(db, quiz_id, data)
    await db.commit()

    response.headers.update(entity_update_alert(ctx.settings.CLIENT_APP_NAME, ENTITY_NAME, str(quiz_id)))
    return await quiz_service.build_response(db, quiz)


@router.patch("/{quiz_id}", response_model=QuizResponse)
async def partial_update_quiz(
    quiz_id: UUID,
    patch: QuizPatch,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[AppContext, Depends(get_context)],
) -> QuizResponse:
    ctx.logger.debug("REST request to partial update Quiz : %s, %s", quiz_id, patch)
    if patch.id is not None and patch.id != quiz_id:
        raise BadRequestError("Invalid ID")

    quiz: Quiz | None = await quiz_service.partial_update(db, quiz_id, patch)
    if quiz is None:
        raise NotFoundError("Quiz not found")
    await db.commit()

    response.headers.update(entity_update_alert(ctx.settings.CLIENT_APP_NAME, ENTITY_NAME, str(quiz_id)))
    return await quiz_service.build_response(db, quiz)


@router.get("", response_model=list[QuizResponse])
async def list_quizzes(
    request: Request,
    response: Response,
    criteria: Annotated[Criteria, Depends(quiz_criteria_dep)],
    pageable: Annotated[Pageable, Depends(get_pageable)],
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[AppContext, Depends(get_context)],
) -> list[QuizResponse]:
    """조건에 맞는 퀴즈 목록을 페이지 조회합니다.

    List quizzes matching the criteria, with pagination headers.
    """
    ctx.logger.debug("REST request to get Quizzes by criteria: %s", criteria.filters)
    page: Page = await quiz_query_service.find_by_criteria(db, criteria, pageable)
    response.headers.update(pagination_headers(request.url, page))
    return [await quiz_service.build_response(db, quiz) for quiz in page.content]


@router.get("/count", response_model=int)
async def count_quizzes(
    criteria: Annotated[Criteria, Depends(quiz_criteria_dep)],
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[AppContext, Depends(get_context)],
) -> int:
    ctx.logger.debug("REST request to count Quizzes by criteria: %s", criteria.filters)
    return await quiz_query_service.count_by_criteria(db, criteria)


@router.get("/{quiz_id}", response_model=QuizResponse)
async def get_quiz(
    quiz_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[AppContext, Depends(get_context)],
) -> QuizResponse:
    ctx.logger.debug("REST request to get Quiz : %s", quiz_id)
    quiz: Quiz | None = await quiz_service.find_one(db, quiz_id)
    if quiz is None:
        raise NotFoundError("Quiz not found")
    return await quiz_service.build_response(db, quiz)


@router.delete("/{quiz_id}", status_code=204)
async def delete_quiz(
    quiz_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[AppContext, Depends(get_context)],
) -> Response:
    """퀴즈를 삭제합니다. 소속 문항은 DB에서 CASCADE 삭제.

    Delete a quiz; its questions are removed by the ON DELETE CASCADE key.
    """
    ctx.logger.debug("REST request to delete Quiz : %s", quiz_id)
    await quiz_service.delete(db, quiz_id)
    await db.commit()
    return Response(
        status_code=204,
        headers=entity_deletion_alert(ctx.settings.CLIENT_APP_NAME, ENTITY_NAME, str(quiz_id)),
    )
