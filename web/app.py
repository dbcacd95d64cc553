"""
FastAPI 애플리케이션

라우터 등록 및 앱 설정.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from core.config.loader import get_settings
from core.logging import setup_logging
from web.routes import health, ledger
from web.routes.health import API_VERSION


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 생명주기 관리"""
    settings = get_settings()

    # 로깅 설정 (콘솔 + 파일)
    setup_logging("web", settings.config.logging)
    logger = logging.getLogger(__name__)

    # 시작 시 - DB 스키마 자동 초기화
    async with SQLiteAdapter(settings.db_path, busy_timeout_ms=settings.busy_timeout_ms) as db:
        await init_schema(db)

    logger.info(f"Web: 문서 저장소 준비 완료 ({settings.db_path})")

    yield

    logger.info("Web: 종료")


def create_app() -> FastAPI:
    """FastAPI 앱 생성"""
    application = FastAPI(
        title="Project Ledger API",
        description="프로젝트별 복식부기 원장 API",
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # =========================================================================
    # API 라우터 등록
    # =========================================================================

    application.include_router(health.router)
    application.include_router(ledger.router)

    return application


app = create_app()
