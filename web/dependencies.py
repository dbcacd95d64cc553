"""
의존성 주입

FastAPI의 Depends를 사용한 의존성 관리.
"""

from core.config.loader import Settings, get_settings
from core.storage.document_store import DocumentStore

# 프로세스 전역 DocumentStore (문서별 잠금을 프로세스 안에서 공유)
_document_store: DocumentStore | None = None


def get_app_settings() -> Settings:
    """애플리케이션 설정 반환"""
    return get_settings()


def get_document_store() -> DocumentStore:
    """DocumentStore 반환

    요청마다 새로 만들면 문서별 asyncio.Lock이 공유되지 않으므로
    프로세스에 하나만 생성.
    """
    global _document_store
    if _document_store is None:
        settings = get_settings()
        _document_store = DocumentStore(
            settings.db_path,
            busy_timeout_ms=settings.busy_timeout_ms,
        )
    return _document_store


def reset_document_store() -> None:
    """DocumentStore 초기화 (테스트용)"""
    global _document_store
    _document_store = None
