"""
Project 테스트
"""

import pytest

from core.project import Project
from core.storage.document_store import DocumentStore


class TestProject:
    """Project 테스트"""

    def test_creation(self, document_store: DocumentStore) -> None:
        project = Project("C3T49A9RP", document_store)

        assert project.pid == "C3T49A9RP"
        assert project.store is document_store
        assert repr(project) == "Project('C3T49A9RP')"

    @pytest.mark.parametrize("pid", ["", "   ", None, 42])
    def test_invalid_pid(self, document_store: DocumentStore, pid: object) -> None:
        with pytest.raises(ValueError):
            Project(pid, document_store)  # type: ignore[arg-type]

    @pytest.mark.asyncio
    async def test_acq_scopes_to_project(self, document_store: DocumentStore) -> None:
        """acq는 프로젝트 ID로 문서를 획득"""
        async with Project("P1", document_store).acq("ledger") as doc:
            assert doc.project_id == "P1"
            assert doc.name == "ledger"
            doc.write({"x": 1})

        async with document_store.acquire("P1", "ledger") as doc:
            assert doc.read() == {"x": 1}
