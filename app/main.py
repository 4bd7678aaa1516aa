"""FastAPI 애플리케이션 팩토리 — 컨텍스트, 미들웨어, 예외 처리, 라우터 등록.

FastAPI application factory — Builds the AppContext, registers middleware,
exception handlers and routers.

Run with:
    uvicorn app.main:create_app --factory
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from app.api.legacy import legacy_router
from app.api.rest import rest_router
from app.config import Settings
from app.context import AppContext
from app.middleware.axiom_logging import AxiomLoggingMiddleware


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """요청 검증 실패를 400으로 변환 — Map request validation failures to 400 (FastAPI default is 422)."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


async def _unexpected_error_handler(request: Request, exc: Exception) -> Response:
    """예상치 못한 오류 — 로그를 남기고 빈 본문의 500을 반환합니다.

    Log unexpected failures with their traceback and answer 500 with an empty body.
    """
    request.app.state.context.logger.error(
        "Unexpected error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def create_app(settings: Settings | None = None) -> FastAPI:
    """애플리케이션을 생성합니다.

    Create the FastAPI application. All process-wide resources live on
    app.state.context; nothing is read from module-level singletons.

    Args:
        settings: 애플리케이션 설정, None이면 환경 변수에서 로드
                  (Settings; loaded from the environment when None)

    Returns:
        FastAPI: 구성된 애플리케이션 (Configured application)
    """
    settings = settings or Settings()
    context: AppContext = AppContext.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if settings.AUTO_CREATE_SCHEMA:
            await context.create_schema()
        context.logger.info("%s started", settings.APP_NAME)
        yield
        # 종료 시 커넥션 풀 정리 — Dispose the connection pool on shutdown
        await context.dispose()

    app: FastAPI = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.context = context

    # Axiom API 로깅 미들웨어 — CORS보다 먼저 등록하여 모든 요청을 캡처
    # Registered before CORS to capture all requests
    app.add_middleware(AxiomLoggingMiddleware, settings=settings, logger=context.logger)

    # CORS 미들웨어 — Cross-Origin Resource Sharing middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[
            "Location",
            "X-Total-Count",
            "Link",
            f"X-{settings.CLIENT_APP_NAME}-alert",
            f"X-{settings.CLIENT_APP_NAME}-params",
        ],
    )

    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """서버 상태 확인 엔드포인트.

        Health check endpoint for load balancers and monitoring.
        """
        return {"status": "ok"}

    # ---------------------------------------------------------------------------
    # 라우터 등록 — REST 엔드포인트와 레거시 문항 경로 모두 /api 하위
    # Router registration — REST resources and legacy question paths under /api
    # ---------------------------------------------------------------------------
    app.include_router(rest_router, prefix="/api")
    app.include_router(legacy_router, prefix="/api")

    return app
