"""
SQLite 어댑터

프로젝트 문서 DB 연결 관리.
WAL 모드 + busy_timeout으로 Web 서버와 관리 스크립트가 같은 파일을 공유한다.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator

import aiosqlite

from core.constants import Defaults

logger = logging.getLogger(__name__)

MEMORY_DB = ":memory:"

# (project_id, doc_name) 당 JSON 문서 한 건
DOCUMENT_STORE_DDL = """
    CREATE TABLE IF NOT EXISTS document_store (
        id               INTEGER PRIMARY KEY AUTOINCREMENT,
        project_id       TEXT NOT NULL,
        doc_name         TEXT NOT NULL,
        body_json        TEXT NOT NULL,
        version          INTEGER NOT NULL DEFAULT 1,

        created_at       TEXT NOT NULL DEFAULT (datetime('now')),
        updated_at       TEXT NOT NULL DEFAULT (datetime('now')),

        UNIQUE(project_id, doc_name)
    )
"""


async def create_connection(
    db_path: Path | str,
    busy_timeout_ms: int = Defaults.BUSY_TIMEOUT_MS,
) -> aiosqlite.Connection:
    """문서 DB 연결 생성

    busy_timeout을 먼저 설정한 뒤 WAL로 전환 (전환도 잠금 대기 대상).
    WAL 모드는 파일에 유지되므로 이미 WAL이면 전환하지 않는다.
    (전환에는 배타 잠금이 필요해 다른 연결이 쓰는 중이면 실패)
    PRAGMA 실패 시 연결을 닫고 예외 전파.

    Args:
        db_path: DB 파일 경로 (":memory:" 허용)
        busy_timeout_ms: 다른 연결의 쓰기 잠금 대기 시간 (밀리초)
    """
    if str(db_path) != MEMORY_DB:
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(str(db_path))
    try:
        await conn.execute(f"PRAGMA busy_timeout={int(busy_timeout_ms)}")
        cursor = await conn.execute("PRAGMA journal_mode")
        row = await cursor.fetchone()
        if row is None or str(row[0]).lower() != "wal":
            await conn.execute("PRAGMA journal_mode=WAL")
    except aiosqlite.Error:
        await conn.close()
        raise

    logger.debug(f"SQLite connection opened: {db_path} (busy_timeout={busy_timeout_ms}ms)")
    return conn


class SQLiteAdapter:
    """SQLite 연결 래퍼

    Args:
        db_path: DB 파일 경로
        busy_timeout_ms: 잠금 대기 시간 (밀리초)

    사용 예시:
    ```python
    async with SQLiteAdapter(db_path) as db:
        async with db.transaction(immediate=True):
            row = await db.fetchone("SELECT body_json FROM document_store WHERE ...")
            await db.execute("UPDATE document_store SET ...")
    ```
    """

    def __init__(
        self,
        db_path: Path | str,
        busy_timeout_ms: int = Defaults.BUSY_TIMEOUT_MS,
    ):
        self.db_path = db_path if str(db_path) == MEMORY_DB else Path(db_path)
        self.busy_timeout_ms = busy_timeout_ms
        self._conn: aiosqlite.Connection | None = None

    @property
    def is_connected(self) -> bool:
        return self._conn is not None

    def _require(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise RuntimeError(f"SQLiteAdapter is not connected: {self.db_path}")
        return self._conn

    async def connect(self) -> None:
        if self._conn is None:
            self._conn = await create_connection(self.db_path, self.busy_timeout_ms)

    async def close(self) -> None:
        if self._conn is not None:
            conn, self._conn = self._conn, None
            await conn.close()

    async def execute(
        self,
        sql: str,
        parameters: tuple[Any, ...] = (),
    ) -> aiosqlite.Cursor:
        return await self._require().execute(sql, parameters)

    async def fetchone(
        self,
        sql: str,
        parameters: tuple[Any, ...] = (),
    ) -> tuple[Any, ...] | None:
        cursor = await self.execute(sql, parameters)
        return await cursor.fetchone()

    async def commit(self) -> None:
        await self._require().commit()

    @asynccontextmanager
    async def transaction(self, immediate: bool = False) -> AsyncIterator[aiosqlite.Connection]:
        """명시적 트랜잭션

        블록이 정상 종료하면 커밋, 예외(취소 포함)면 롤백 후 재전파.
        immediate=True면 시작 시점에 쓰기 잠금을 잡는다. 다른 연결이
        잡고 있으면 busy_timeout 동안 기다린 뒤 OperationalError.
        """
        conn = self._require()
        await conn.execute("BEGIN IMMEDIATE" if immediate else "BEGIN")
        try:
            yield conn
            await conn.commit()
        except BaseException:
            await conn.rollback()
            raise

    async def table_exists(self, table_name: str) -> bool:
        row = await self.fetchone(
            "SELECT name FROM sqlite_master WHERE type='table' AND name=?",
            (table_name,),
        )
        return row is not None

    async def __aenter__(self) -> "SQLiteAdapter":
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


async def init_schema(adapter: SQLiteAdapter) -> None:
    """document_store 테이블 생성 (이미 있으면 그대로)"""
    await adapter.execute(DOCUMENT_STORE_DDL)
    await adapter.commit()
    logger.info(f"Document store schema ready: {adapter.db_path}")
