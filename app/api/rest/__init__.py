"""REST API 라우터 패키지 — 엔티티별 REST 엔드포인트 통합.

REST API Router package — Aggregates the resource-style endpoints of each
entity into a single router for inclusion under /api.

Included routers:
    - images: 이미지 관리 (Image CRUD, criteria search, count)
    - questions: 문항 관리 (Question CRUD, criteria search, count, images)
    - quizzes: 퀴즈 관리 (Quiz CRUD, criteria search, count)
"""

from fastapi import APIRouter

from app.api.rest.images import router as images_router
from app.api.rest.questions import router as questions_router
from app.api.rest.quizzes import router as quizzes_router

rest_router: APIRouter = APIRouter()

rest_router.include_router(images_router, prefix="/images", tags=["Images"])
rest_router.include_router(questions_router, prefix="/questions", tags=["Questions"])
rest_router.include_router(quizzes_router, prefix="/quizzes", tags=["Quizzes"])
