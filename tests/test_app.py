"""애플리케이션 수준 테스트 — 헬스 체크, 예외 매핑, 로깅.

Application-level tests — health check, error mapping and logging.
"""

import base64
import logging
import uuid
from collections.abc import AsyncGenerator

import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.database import get_db
from app.main import create_app
from app.middleware import axiom_logging
from app.services.image_service import image_service
from app.utils.logging import LOGGER_NAME, configure_logging


@pytest_asyncio.fixture
async def lenient_client(app: FastAPI, db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """서버 오류를 예외 대신 응답으로 받는 클라이언트 (500 responses instead of raised errors)."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


class TestHealth:
    """GET /health"""

    async def test_health(self, client: AsyncClient):
        res = await client.get("/health")
        assert res.status_code == 200
        assert res.json() == {"status": "ok"}


class TestErrorMapping:
    """예외 → HTTP 상태 코드 매핑 테스트."""

    async def test_unexpected_error_is_empty_500(self, lenient_client: AsyncClient, image, monkeypatch, caplog):
        """예상치 못한 오류는 빈 본문의 500으로 응답하고 로그를 남김."""
        async def _boom(db, entity_id):
            raise RuntimeError("store unavailable")

        monkeypatch.setattr(image_service, "find_one", _boom)

        with caplog.at_level(logging.ERROR, logger=LOGGER_NAME):
            res = await lenient_client.get(f"/api/images/{image.id}")

        assert res.status_code == 500
        assert res.content == b""
        assert any("Unexpected error" in record.getMessage() for record in caplog.records)

    async def test_validation_error_is_400(self, client: AsyncClient):
        res = await client.post("/api/quizzes", json={})
        assert res.status_code == 400
        assert isinstance(res.json()["detail"], list)

    async def test_unknown_route_is_404(self, client: AsyncClient):
        assert (await client.get("/api/nothing-here")).status_code == 404

    async def test_cors_exposes_headers(self, client: AsyncClient):
        res = await client.get("/api/images", headers={"Origin": "http://localhost:3000"})
        exposed = res.headers["access-control-expose-headers"]
        assert "X-Total-Count" in exposed
        assert "X-quizPracticeApp-alert" in exposed


class TestLogging:
    """로거 구성 테스트."""

    def test_level_from_settings(self):
        logger = configure_logging(Settings(_env_file=None, LOG_LEVEL="warning"))
        assert logger.name == LOGGER_NAME
        assert logger.level == logging.WARNING

    def test_handlers_not_stacked(self):
        settings = Settings(_env_file=None)
        configure_logging(settings)
        logger = configure_logging(settings)
        assert len(logger.handlers) == 1


@pytest_asyncio.fixture
async def axiom_client(settings: Settings, monkeypatch) -> AsyncGenerator[tuple[AsyncClient, list], None]:
    """Axiom 전송을 기록하는 앱과 클라이언트 (App whose Axiom ingests are recorded in a list)."""
    ingested: list[tuple[str, dict]] = []

    class _RecordingAxiomClient:
        def __init__(self, token: str) -> None:
            self.token = token

        def ingest_events(self, dataset: str, events: list[dict]) -> None:
            ingested.extend((dataset, event) for event in events)

    monkeypatch.setattr(axiom_logging, "AxiomClient", _RecordingAxiomClient)
    application = create_app(settings.model_copy(update={"AXIOM_API_TOKEN": "token", "AXIOM_DATASET": "quiz-api"}))
    await application.state.context.create_schema()

    transport = ASGITransport(app=application)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac, ingested

    await application.state.context.dispose()


class TestAxiomEvents:
    """Axiom 요청 로그 이벤트 테스트."""

    async def test_not_found_reason_is_logged(self, axiom_client):
        """404 응답의 detail이 error로 기록되고 응답 본문은 그대로 전달."""
        client, ingested = axiom_client
        missing = uuid.uuid4()

        res = await client.get(f"/api/images/{missing}")
        assert res.status_code == 404
        assert res.json() == {"detail": "Image not found"}

        dataset, event = ingested[-1]
        assert dataset == "quiz-api"
        assert event["method"] == "GET"
        assert event["path"] == f"/api/images/{missing}"
        assert event["status_code"] == 404
        assert event["error"] == "Image not found"

    async def test_validation_reason_is_logged(self, axiom_client):
        client, ingested = axiom_client

        res = await client.post("/api/quizzes", json={"title": "Skeleton", "time_limit": 0})
        assert res.status_code == 400

        _, event = ingested[-1]
        assert event["status_code"] == 400
        assert "time_limit" in event["error"]
        assert event["request_body"] == {"title": "Skeleton", "time_limit": 0}

    async def test_success_has_no_error_and_long_values_truncated(self, axiom_client):
        """성공 응답에는 error 없음, 긴 base64 값은 절단."""
        client, ingested = axiom_client
        payload = base64.b64encode(b"\x00" * 600).decode()

        res = await client.post("/api/images", json={"title": "cover", "data": payload})
        assert res.status_code == 201
        assert res.json()["data"] == payload

        _, event = ingested[-1]
        assert event["status_code"] == 201
        assert "error" not in event
        assert event["request_body"]["data"].endswith("...(truncated)")

    async def test_health_is_not_logged(self, axiom_client):
        client, ingested = axiom_client
        await client.get("/health")
        assert ingested == []
