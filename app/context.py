"""애플리케이션 컨텍스트 — 시작 시 구성되어 주입되는 공용 자원.

Application context — the process-wide resources built once at startup
(settings, logger, engine, session factory) and handed to components
through FastAPI dependencies instead of module-level singletons.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.config import Settings
from app.database import Base, build_engine, build_session_factory
from app.utils.logging import configure_logging


@dataclass
class AppContext:
    """요청 간 공유되는 불변 자원 묶음.

    Attributes:
        settings: 애플리케이션 설정 (Application settings)
        logger: 진단 로거 (Diagnostic logger)
        engine: 비동기 DB 엔진 (Async engine)
        session_factory: 세션 팩토리 (Session factory used by get_db)
    """

    settings: Settings
    logger: logging.Logger
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppContext":
        engine: AsyncEngine = build_engine(settings)
        return cls(
            settings=settings,
            logger=configure_logging(settings),
            engine=engine,
            session_factory=build_session_factory(engine),
        )

    async def create_schema(self) -> None:
        """모든 테이블 생성 (개발용) — Create all tables; dev/test databases only."""
        # 모델 등록을 위한 임포트 — Register all models with the metadata
        import app.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()
