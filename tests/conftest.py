"""
pytest 공통 fixture 정의

문서 저장소, 프로젝트, 원장, 설정 파일 fixture
"""

import tempfile
from pathlib import Path

import pytest
import pytest_asyncio

from core.ledger import Ledger
from core.project import Project
from core.storage.document_store import DocumentStore


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """테스트용 SQLite 파일 경로"""
    return tmp_path / "data" / "documents.db"


@pytest.fixture
def document_store(db_path: Path) -> DocumentStore:
    """테스트용 DocumentStore (짧은 busy_timeout)"""
    return DocumentStore(db_path, busy_timeout_ms=5000)


@pytest.fixture
def project(document_store: DocumentStore) -> Project:
    """테스트용 프로젝트"""
    return Project("C3T49A9RP", document_store)


@pytest.fixture
def ledger(project: Project) -> Ledger:
    """부트스트랩 전 원장"""
    return Ledger(project)


@pytest_asyncio.fixture
async def bootstrapped_ledger(project: Project) -> Ledger:
    """부트스트랩된 빈 원장"""
    return await Ledger(project).bootstrap()


@pytest.fixture
def temp_settings_file(temp_dir: Path) -> Path:
    """테스트용 settings.yaml 파일 생성"""
    settings_content = """# 테스트용 settings.yaml
storage:
  db_path: data/test_documents.db
  busy_timeout_ms: 1500

logging:
  console_level: DEBUG
  file_level: WARNING

web:
  host: 0.0.0.0
  port: 9100
"""
    settings_path = temp_dir / "settings.yaml"
    settings_path.write_text(settings_content, encoding="utf-8")
    return settings_path


@pytest.fixture
def temp_settings_file_invalid(temp_dir: Path) -> Path:
    """잘못된 값의 settings.yaml 파일 생성"""
    settings_content = """storage:
  busy_timeout_ms: -1
"""
    settings_path = temp_dir / "settings_invalid.yaml"
    settings_path.write_text(settings_content, encoding="utf-8")
    return settings_path
