"""
Ledger 서비스

Web 요청을 프로젝트 원장 연산으로 변환
"""

import logging
from typing import Any

from core.ledger import Ledger, Transaction
from core.project import Project
from core.storage.document_store import DocumentStore

logger = logging.getLogger(__name__)


class LedgerService:
    """Ledger 서비스

    프로젝트 원장 조회/기록.
    원장 로직은 없고 Ledger 호출 결과를 응답 형태로 정리한다.

    Args:
        store: 문서 저장소
        project_id: 프로젝트 ID
    """

    def __init__(self, store: DocumentStore, project_id: str):
        self.project = Project(project_id, store)
        self.ledger = Ledger(self.project)

    async def bootstrap(self) -> dict[str, Any]:
        """원장 초기화 (기존 데이터 유지)"""
        await self.ledger.bootstrap()
        return {"project_id": self.project.pid, "bootstrapped": True}

    async def get_cash(self) -> dict[str, Any]:
        """잔여 현금 조회"""
        cash = await self.ledger.cash()
        return {"project_id": self.project.pid, "cash": str(cash)}

    async def get_deficit(self) -> dict[str, Any]:
        """deficit 상태 조회"""
        deficit = await self.ledger.deficit()
        return {"project_id": self.project.pid, "deficit": deficit}

    async def set_deficit(self, flag: bool) -> dict[str, Any]:
        """deficit 상태 설정"""
        changed = await self.ledger.set_deficit(flag)
        return {"project_id": self.project.pid, "deficit": flag, "changed": changed}

    async def add_transactions(self, items: list[dict[str, Any]]) -> dict[str, Any]:
        """거래 배치 추가

        Args:
            items: 거래 필드 딕셔너리 목록 (amount, debit, debitx, credit, creditx, details)

        Raises:
            ValueError/TypeError: 금액이나 필드가 유효하지 않은 경우
        """
        transactions = [Transaction(**item) for item in items]
        first_id = await self.ledger.add(*transactions)
        logger.info(
            f"Web: {len(transactions)} transaction(s) recorded for {self.project.pid} "
            f"(first id {first_id})"
        )
        return {
            "project_id": self.project.pid,
            "first_id": first_id,
            "count": len(transactions),
        }
