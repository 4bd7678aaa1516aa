"""레거시 API 라우터 패키지 — 기존 클라이언트 호환 경로.

Legacy API Router package — Paths kept as-is for the existing client,
mounted under /api next to the REST routers.

Included routers:
    - questions: 동사형 문항 경로 (getlistquestion, getquestion, addquestion, editquestion, deletequestion)
"""

from fastapi import APIRouter

from app.api.legacy.questions import router as questions_router

legacy_router: APIRouter = APIRouter()

legacy_router.include_router(questions_router, tags=["Legacy Questions"])
