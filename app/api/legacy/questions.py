"""레거시 문항 라우터 — 기존 클라이언트용 동사형 경로.

Legacy Question Router — verb-style question paths kept verbatim for the
existing quiz client. They share QuestionService with /api/questions.

Endpoints:
    GET    /getlistquestion?quizId&index&pageSize   page `index` (0-based) of a quiz's questions
    GET    /getquestion/{qid}                      200 or 404
    POST   /addquestion                            200 + created question
    POST   /editquestion                           200 + updated question (body id required)
    DELETE /deletequestion/{qid}                   200, idempotent
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_context
from app.context import AppContext
from app.database import INT4_MAX, get_db
from app.models.question import Question
from app.schemas.question import QuestionCreate, QuestionResponse, QuestionUpdate
from app.services.question_service import question_service
from app.utils.exceptions import BadRequestError, NotFoundError
from app.utils.pagination import Page

router: APIRouter = APIRouter()


@router.get("/getlistquestion", response_model=list[QuestionResponse])
async def get_list_question(
    quiz_id: Annotated[UUID, Query(alias="quizId")],
    index: Annotated[int, Query(ge=0, le=INT4_MAX)],
    page_size: Annotated[int, Query(alias="pageSize", ge=1)],
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[AppContext, Depends(get_context)],
) -> list[QuestionResponse]:
    """퀴즈의 문항 목록을 페이지 단위로 조회합니다.

    List page `index` of a quiz's questions, ordered by position.
    pageSize is capped at MAX_PAGE_SIZE.
    """
    ctx.logger.debug("REST request to get list of Questions : quiz=%s index=%s size=%s", quiz_id, index, page_size)
    page: Page = await question_service.list_by_quiz(
        db,
        quiz_id,
        index,
        min(page_size, ctx.settings.MAX_PAGE_SIZE),
    )
    return [await question_service.build_response(db, q) for q in page.content]


@router.get("/getquestion/{qid}", response_model=QuestionResponse)
async def get_question(
    qid: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[AppContext, Depends(get_context)],
) -> QuestionResponse:
    ctx.logger.debug("REST request to get Question : %s", qid)
    question: Question | None = await question_service.find_one(db, qid)
    if question is None:
        raise NotFoundError("Question not found")
    return await question_service.build_response(db, question)


@router.post("/addquestion", response_model=QuestionResponse)
async def add_question(
    data: QuestionCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[AppContext, Depends(get_context)],
) -> QuestionResponse:
    """문항을 추가합니다 (레거시 경로는 200 반환).

    Add a question. The legacy route answers 200, not 201.
    """
    ctx.logger.debug("REST request to add Question : %s", data)
    if data.id is not None:
        raise BadRequestError("A new question cannot already have an ID")

    question: Question = await question_service.save(db, data)
    await db.commit()
    return await question_service.build_response(db, question)


@router.post("/editquestion", response_model=QuestionResponse)
async def edit_question(
    data: QuestionUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[AppContext, Depends(get_context)],
) -> QuestionResponse:
    """문항을 수정합니다. 본문에 id가 필요합니다.

    Replace a question identified by the body id. 400 without id, 404 if unknown.
    """
    ctx.logger.debug("REST request to edit Question : %s", data)
    if data.id is None:
        raise BadRequestError("Question id is required")

    question: Question = await question_service.update(db, data.id, data)
    await db.commit()
    return await question_service.build_response(db, question)


@router.delete("/deletequestion/{qid}")
async def delete_question(
    qid: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[AppContext, Depends(get_context)],
) -> Response:
    ctx.logger.debug("REST request to delete Question : %s", qid)
    await question_service.delete(db, qid)
    await db.commit()
    return Response(status_code=200)
