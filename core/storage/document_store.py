"""
DocumentStore - 프로젝트 문서 저장소

document_store 테이블에 (project_id, doc_name) 당 하나의 JSON 문서 저장.
문서는 acquire()로 배타적으로 획득하고, 블록을 벗어날 때 해제.

잠금 구조:
- 같은 프로세스: (project_id, doc_name) 별 asyncio.Lock
  (사용 중인 잠금만 유지, 획득자와 대기자가 모두 빠지면 맵에서 제거)
- 다른 프로세스: BEGIN IMMEDIATE (SQLite 쓰기 잠금, busy_timeout 동안 대기)

사용 예시:
```python
store = DocumentStore(db_path)

async with store.acquire("proj-1", "ledger") as doc:
    body = doc.read() or {}
    body["key"] = "value"
    doc.write(body)
# 정상 종료 시 커밋, 예외 시 롤백
```
"""

import asyncio
import json
import logging
import weakref
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, AsyncIterator

import aiosqlite

from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from core.constants import Defaults
from core.storage.errors import StorageError

logger = logging.getLogger(__name__)


class Document:
    """획득된 문서 핸들

    블록 안에서만 유효. write()로 바꾼 본문은 해제 시점에 한 번에 기록.

    Args:
        project_id: 프로젝트 ID
        name: 문서 이름
        body: 저장된 본문 (없으면 None)
    """

    def __init__(self, project_id: str, name: str, body: Any | None):
        self.project_id = project_id
        self.name = name
        self._body = body
        self._exists = body is not None
        self._dirty = False

    @property
    def exists(self) -> bool:
        """저장소에 문서가 있었는지 여부"""
        return self._exists

    @property
    def dirty(self) -> bool:
        """write() 호출 여부"""
        return self._dirty

    def read(self) -> Any | None:
        """본문 조회 (없으면 None)"""
        return self._body

    def write(self, body: Any) -> None:
        """본문 교체 (해제 시 저장)"""
        self._body = body
        self._dirty = True


class DocumentStore:
    """문서 저장소

    Args:
        db_path: SQLite DB 파일 경로
        busy_timeout_ms: 다른 프로세스의 쓰기 잠금 대기 시간
    """

    def __init__(
        self,
        db_path: Path | str,
        busy_timeout_ms: int = Defaults.BUSY_TIMEOUT_MS,
    ):
        self.db_path = Path(db_path)
        self.busy_timeout_ms = busy_timeout_ms
        self._locks: weakref.WeakValueDictionary[tuple[str, str], asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )
        self._schema_ready = False

    def _lock(self, project_id: str, name: str) -> asyncio.Lock:
        key = (project_id, name)
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    async def _connect(self) -> SQLiteAdapter:
        adapter = SQLiteAdapter(self.db_path, busy_timeout_ms=self.busy_timeout_ms)
        try:
            await adapter.connect()
            if not self._schema_ready:
                await init_schema(adapter)
                self._schema_ready = True
        except (aiosqlite.Error, OSError) as e:
            await adapter.close()
            raise StorageError(f"Cannot open document storage {self.db_path}: {e}") from e
        return adapter

    @asynccontextmanager
    async def acquire(self, project_id: str, name: str) -> AsyncIterator[Document]:
        """문서 배타적 획득

        블록 전체가 하나의 SQLite 트랜잭션.
        정상 종료 시 변경된 본문 저장 후 커밋, 예외 시 롤백.
        모든 경로에서 연결과 잠금 해제.

        Args:
            project_id: 프로젝트 ID
            name: 문서 이름

        Yields:
            Document 핸들

        Raises:
            StorageError: DB 열기/읽기/쓰기 실패
        """
        async with self._lock(project_id, name):
            adapter = await self._connect()
            try:
                async with self._transaction(adapter, project_id, name):
                    document = Document(
                        project_id,
                        name,
                        await self._load(adapter, project_id, name),
                    )
                    yield document
                    if document.dirty:
                        await self._save(adapter, document)
            finally:
                await adapter.close()

    @asynccontextmanager
    async def _transaction(
        self,
        adapter: SQLiteAdapter,
        project_id: str,
        name: str,
    ) -> AsyncIterator[None]:
        """BEGIN IMMEDIATE 트랜잭션 (SQLite 오류는 StorageError로 변환)"""
        try:
            async with adapter.transaction(immediate=True):
                yield
        except aiosqlite.Error as e:
            raise StorageError(
                f"Document {project_id}/{name} storage failure: {e}"
            ) from e

    async def _load(
        self,
        adapter: SQLiteAdapter,
        project_id: str,
        name: str,
    ) -> Any | None:
        row = await adapter.fetchone(
            """
            SELECT body_json FROM document_store
            WHERE project_id = ? AND doc_name = ?
            """,
            (project_id, name),
        )
        if row is None:
            return None

        try:
            return json.loads(row[0])
        except json.JSONDecodeError as e:
            raise StorageError(f"Document {project_id}/{name} is not valid JSON: {e}") from e

    async def _save(self, adapter: SQLiteAdapter, document: Document) -> None:
        now = datetime.now(timezone.utc).isoformat()
        body_json = json.dumps(document.read(), ensure_ascii=False)

        await adapter.execute(
            """
            INSERT INTO document_store (project_id, doc_name, body_json, version, created_at, updated_at)
            VALUES (?, ?, ?, 1, ?, ?)
            ON CONFLICT(project_id, doc_name) DO UPDATE SET
                body_json = excluded.body_json,
                version = document_store.version + 1,
                updated_at = excluded.updated_at
            """,
            (document.project_id, document.name, body_json, now, now),
        )
        logger.debug(f"Document saved: {document.project_id}/{document.name}")

    async def version(self, project_id: str, name: str) -> int:
        """문서 버전 조회 (없으면 0)

        저장될 때마다 1씩 증가.
        """
        async with self._lock(project_id, name):
            adapter = await self._connect()
            try:
                row = await adapter.fetchone(
                    """
                    SELECT version FROM document_store
                    WHERE project_id = ? AND doc_name = ?
                    """,
                    (project_id, name),
                )
            except aiosqlite.Error as e:
                raise StorageError(f"Document {project_id}/{name} storage failure: {e}") from e
            finally:
                await adapter.close()
        return row[0] if row else 0
