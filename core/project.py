"""
프로젝트

프로젝트 ID와 문서 저장소를 묶어 프로젝트 문서 획득 경로 제공.
"""

from contextlib import AbstractAsyncContextManager

from core.storage.document_store import Document, DocumentStore


class Project:
    """프로젝트

    Args:
        pid: 프로젝트 ID (빈 문자열 불가)
        store: 문서 저장소
    """

    def __init__(self, pid: str, store: DocumentStore):
        if not isinstance(pid, str) or not pid.strip():
            raise ValueError(f"Invalid project id: {pid!r}")
        self.pid = pid
        self.store = store

    def acq(self, name: str) -> AbstractAsyncContextManager[Document]:
        """프로젝트 문서 배타적 획득"""
        return self.store.acquire(self.pid, name)

    def __repr__(self) -> str:
        return f"Project({self.pid!r})"
