"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite database, session, and httpx client fixtures.
Every test gets a fresh application and a fresh database (aiosqlite + StaticPool),
so no cleanup between tests is needed.
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.database import get_db
from app.main import create_app
from app.models import Image, Question, Quiz

TEST_DATABASE_URL = "sqlite+aiosqlite://"


# ---------------------------------------------------------------------------
# 애플리케이션, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest.fixture
def settings() -> Settings:
    """테스트 설정 — .env 무시, Axiom 비활성화."""
    return Settings(
        _env_file=None,
        DATABASE_URL=TEST_DATABASE_URL,
        AXIOM_API_TOKEN="",
        AXIOM_DATASET="",
        LOG_LEVEL="DEBUG",
        DEFAULT_PAGE_SIZE=20,
        MAX_PAGE_SIZE=50,
    )


@pytest_asyncio.fixture
async def app(settings: Settings) -> AsyncGenerator[FastAPI, None]:
    """테스트용 애플리케이션. 스키마를 생성하고 종료 시 엔진을 정리합니다."""
    application = create_app(settings)
    await application.state.context.create_schema()
    yield application
    await application.state.context.dispose()


@pytest_asyncio.fixture
async def db(app: FastAPI) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    async with app.state.context.session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(app: FastAPI, db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
async def make_quiz(db: AsyncSession, title: str = "Anatomy basics", **kwargs) -> Quiz:
    quiz = Quiz(title=title, **kwargs)
    db.add(quiz)
    await db.flush()
    await db.refresh(quiz)
    return quiz


async def make_question(db: AsyncSession, quiz: Quiz, content: str = "Which bone?", **kwargs) -> Question:
    kwargs.setdefault("options", ["Femur", "Tibia", "Ulna"])
    question = Question(quiz_id=quiz.id, content=content, **kwargs)
    db.add(question)
    await db.flush()
    await db.refresh(question)
    return question


async def make_image(db: AsyncSession, title: str = "cover", **kwargs) -> Image:
    image = Image(title=title, **kwargs)
    db.add(image)
    await db.flush()
    await db.refresh(image)
    return image


@pytest_asyncio.fixture
async def quiz(db: AsyncSession) -> Quiz:
    """테스트 퀴즈를 생성합니다."""
    return await make_quiz(db, description="Intro to bones", time_limit=30)


@pytest_asyncio.fixture
async def question(db: AsyncSession, quiz: Quiz) -> Question:
    """테스트 문항을 생성합니다."""
    return await make_question(db, quiz, correct_answer="Femur")


@pytest_asyncio.fixture
async def image(db: AsyncSession) -> Image:
    """테스트 이미지를 생성합니다."""
    return await make_image(db, "cover", data=b"\x89PNG", content_type="image/png")
