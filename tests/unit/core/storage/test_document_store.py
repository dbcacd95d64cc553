"""
DocumentStore 테스트

문서 획득/해제, 커밋/롤백, 버전, 잠금
"""

import asyncio
import gc
from pathlib import Path

import pytest

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.storage.document_store import DocumentStore
from core.storage.errors import StorageError


class TestAcquire:
    """acquire 테스트"""

    @pytest.mark.asyncio
    async def test_missing_document(self, document_store: DocumentStore) -> None:
        """없는 문서는 body None"""
        async with document_store.acquire("p1", "ledger") as doc:
            assert not doc.exists
            assert doc.read() is None
            assert not doc.dirty

    @pytest.mark.asyncio
    async def test_write_is_committed(self, document_store: DocumentStore) -> None:
        """정상 종료 시 저장"""
        async with document_store.acquire("p1", "ledger") as doc:
            doc.write({"key": "value"})

        async with document_store.acquire("p1", "ledger") as doc:
            assert doc.exists
            assert doc.read() == {"key": "value"}

    @pytest.mark.asyncio
    async def test_exception_rolls_back(self, document_store: DocumentStore) -> None:
        """예외 시 저장하지 않고 예외 그대로 전파"""
        async with document_store.acquire("p1", "ledger") as doc:
            doc.write({"n": 1})

        with pytest.raises(KeyError):
            async with document_store.acquire("p1", "ledger") as doc:
                doc.write({"n": 2})
                raise KeyError("caller failure")

        async with document_store.acquire("p1", "ledger") as doc:
            assert doc.read() == {"n": 1}
        assert await document_store.version("p1", "ledger") == 1

    @pytest.mark.asyncio
    async def test_documents_are_scoped_by_project(self, document_store: DocumentStore) -> None:
        """프로젝트별로 독립"""
        async with document_store.acquire("p1", "ledger") as doc:
            doc.write({"owner": "p1"})

        async with document_store.acquire("p2", "ledger") as doc:
            assert doc.read() is None

    @pytest.mark.asyncio
    async def test_non_ascii_body(self, document_store: DocumentStore) -> None:
        async with document_store.acquire("p1", "ledger") as doc:
            doc.write({"details": "초기 자본"})

        async with document_store.acquire("p1", "ledger") as doc:
            assert doc.read() == {"details": "초기 자본"}


class TestVersion:
    """version 테스트"""

    @pytest.mark.asyncio
    async def test_absent_is_zero(self, document_store: DocumentStore) -> None:
        assert await document_store.version("p1", "ledger") == 0

    @pytest.mark.asyncio
    async def test_increments_on_write_only(self, document_store: DocumentStore) -> None:
        """읽기만 한 획득은 버전 유지"""
        async with document_store.acquire("p1", "ledger") as doc:
            doc.write({})
        assert await document_store.version("p1", "ledger") == 1

        async with document_store.acquire("p1", "ledger") as doc:
            doc.read()
        assert await document_store.version("p1", "ledger") == 1

        async with document_store.acquire("p1", "ledger") as doc:
            doc.write({"a": 1})
        assert await document_store.version("p1", "ledger") == 2


class TestLocking:
    """잠금 테스트"""

    @pytest.mark.asyncio
    async def test_same_document_is_serialized(self, document_store: DocumentStore) -> None:
        """같은 문서의 read-modify-write가 겹치지 않음"""

        async def increment() -> None:
            async with document_store.acquire("p1", "counter") as doc:
                body = doc.read() or {"n": 0}
                await asyncio.sleep(0)
                doc.write({"n": body["n"] + 1})

        await asyncio.gather(*(increment() for _ in range(20)))

        async with document_store.acquire("p1", "counter") as doc:
            assert doc.read() == {"n": 20}

    @pytest.mark.asyncio
    async def test_two_stores_on_one_file(self, db_path: Path) -> None:
        """같은 파일을 쓰는 두 저장소도 직렬화 (SQLite 쓰기 잠금)"""
        first = DocumentStore(db_path, busy_timeout_ms=10000)
        second = DocumentStore(db_path, busy_timeout_ms=10000)
        async with first.acquire("p1", "counter") as doc:
            doc.write({"n": 0})

        async def increment(store: DocumentStore) -> None:
            async with store.acquire("p1", "counter") as doc:
                body = doc.read() or {"n": 0}
                await asyncio.sleep(0)
                doc.write({"n": body["n"] + 1})

        await asyncio.gather(*(increment(s) for s in [first, second] * 10))

        async with first.acquire("p1", "counter") as doc:
            assert doc.read() == {"n": 20}

    @pytest.mark.asyncio
    async def test_lock_released_after_exception(self, document_store: DocumentStore) -> None:
        """예외 후에도 다시 획득 가능"""
        with pytest.raises(RuntimeError):
            async with document_store.acquire("p1", "ledger"):
                raise RuntimeError("boom")

        async def reacquire() -> None:
            async with document_store.acquire("p1", "ledger") as doc:
                doc.write({"ok": True})

        await asyncio.wait_for(reacquire(), timeout=5)

    @pytest.mark.asyncio
    async def test_idle_locks_are_dropped(self, document_store: DocumentStore) -> None:
        """획득이 끝난 문서의 잠금은 맵에 남지 않음"""
        for idx in range(50):
            async with document_store.acquire(f"p{idx}", "ledger") as doc:
                doc.write({"n": idx})
                assert (f"p{idx}", "ledger") in document_store._locks

        gc.collect()
        assert len(document_store._locks) == 0


class TestStorageErrors:
    """저장소 오류 테스트"""

    @pytest.mark.asyncio
    async def test_invalid_json_is_storage_error(self, db_path: Path) -> None:
        """JSON이 아닌 본문은 StorageError"""
        store = DocumentStore(db_path)
        async with store.acquire("p1", "ledger") as doc:
            doc.write({})

        async with SQLiteAdapter(db_path) as adapter:
            await adapter.execute(
                "UPDATE document_store SET body_json = ? WHERE project_id = ?",
                ("{not json", "p1"),
            )
            await adapter.commit()

        with pytest.raises(StorageError, match="not valid JSON"):
            async with store.acquire("p1", "ledger"):
                pass

    @pytest.mark.asyncio
    async def test_unopenable_database(self, tmp_path: Path) -> None:
        """DB 파일 위치가 디렉토리면 StorageError"""
        target = tmp_path / "documents.db"
        target.mkdir()
        store = DocumentStore(target)

        with pytest.raises(StorageError):
            async with store.acquire("p1", "ledger"):
                pass

    def test_storage_error_is_io_error(self) -> None:
        assert issubclass(StorageError, IOError)
