"""
스토리지 모듈

프로젝트 문서 저장소 (DocumentStore) 제공
"""

from core.storage.document_store import Document, DocumentStore
from core.storage.errors import StorageError

__all__ = [
    "Document",
    "DocumentStore",
    "StorageError",
]
