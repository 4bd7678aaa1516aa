"""데이터베이스 엔진 및 세션 설정 모듈.

Database engine and session configuration module.
Builds the async SQLAlchemy engine and session factory from Settings,
and declares the ORM base class shared by every model.
"""

from collections.abc import AsyncGenerator
from typing import Any

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, AsyncEngine, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from app.config import Settings

# Integer 컬럼(int4)의 최대값 — Largest value an Integer column holds (Postgres int4)
INT4_MAX: int = 2**31 - 1


class Base(DeclarativeBase):
    """SQLAlchemy 선언적 베이스 클래스.

    Declarative base class for all ORM models.
    All models inherit from this class to register with the metadata.
    """

    pass


def build_engine(settings: Settings) -> AsyncEngine:
    """설정으로부터 비동기 엔진을 생성합니다.

    Create the async engine for the configured database.
    SQLite (tests, local dev) shares one connection through StaticPool;
    server databases get a pre-pinged connection pool.

    Args:
        settings: 애플리케이션 설정 (Application settings)

    Returns:
        AsyncEngine: 비동기 엔진 (Async engine)
    """
    options: dict[str, Any] = {"echo": settings.DEBUG}

    if settings.is_sqlite:
        # 인메모리 DB가 연결마다 사라지지 않도록 단일 연결 공유
        # Share a single connection so in-memory databases survive across sessions
        options["poolclass"] = StaticPool
        options["connect_args"] = {"check_same_thread": False}
    else:
        # pool_pre_ping=True: 커넥션 풀에서 꺼낸 연결의 유효성을 사전 확인 (Validates connections before use)
        options["pool_pre_ping"] = True
        options["pool_size"] = 5
        options["max_overflow"] = 10
        if settings.DATABASE_URL.startswith("postgresql+asyncpg"):
            # Supavisor(트랜잭션 모드 풀러)에서 prepared statement 비활성화
            # Disable prepared statement caches for transaction-mode pooling
            options["connect_args"] = {"statement_cache_size": 0}

    engine: AsyncEngine = create_async_engine(settings.DATABASE_URL, **options)

    if settings.is_sqlite:
        # SQLite는 기본적으로 FK 제약을 무시 — 연결마다 활성화 (ON DELETE CASCADE / SET NULL)
        # SQLite ignores foreign keys unless enabled per connection
        @event.listens_for(engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """비동기 세션 팩토리를 생성합니다.

    expire_on_commit=False: 커밋 후에도 객체 속성 접근 가능
    (Allows attribute access after commit without refresh)
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """비동기 데이터베이스 세션을 생성하고 요청 종료 시 닫습니다.

    FastAPI dependency that yields an async database session from the
    application's context. The session is closed after the request completes,
    ensuring no connection leaks.

    Yields:
        AsyncSession: SQLAlchemy 비동기 세션 인스턴스 (Async session instance)
    """
    session_factory = request.app.state.context.session_factory
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.close()
