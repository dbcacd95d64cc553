"""
Ledger - 프로젝트 복식부기 원장

프로젝트 문서 "ledger"를 읽고 수정하는 유일한 경로.
모든 연산은 호출 한 번에 문서를 한 번 획득하고 해제한다.
잔액은 호출 사이에 캐시하지 않고 매번 문서에서 다시 읽는다.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import TYPE_CHECKING, AsyncIterator

from core.constants import DocumentNames
from core.ledger.cash import Cash
from core.ledger.errors import EmptyBatchError
from core.ledger.schema import LedgerDocument
from core.ledger.transaction import Transaction
from core.types import AccountName, BalanceColumn

if TYPE_CHECKING:
    from core.project import Project
    from core.storage.document_store import Document

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class Ledger:
    """프로젝트 원장

    Args:
        project: 원장이 속한 프로젝트

    사용 예시:
    ```python
    ledger = await Ledger(project).bootstrap()

    first_id = await ledger.add(
        Transaction(
            amount=100,
            debit="assets", debitx="cash",
            credit="liabilities", creditx="capital",
            details="seed",
        ),
    )

    cash = await ledger.cash()          # Cash('100')
    await ledger.set_deficit(cash <= 0)
    ```
    """

    def __init__(self, project: Project):
        self.project = project

    @asynccontextmanager
    async def _item(self) -> AsyncIterator[tuple[Document, LedgerDocument]]:
        """원장 문서 획득 (없으면 빈 원장으로 간주)"""
        async with self.project.acq(DocumentNames.LEDGER) as document:
            body = document.read()
            if body is None:
                ledger_doc = LedgerDocument.empty()
            else:
                ledger_doc = LedgerDocument.parse(body)
            yield document, ledger_doc

    async def deficit(self) -> bool:
        """자금 부족 상태 여부

        Returns:
            deficit 마커가 있으면 True
        """
        async with self._item() as (_, ledger_doc):
            return ledger_doc.deficit is not None

    async def set_deficit(self, flag: bool) -> bool:
        """자금 부족 상태 설정

        멱등: 이미 같은 상태면 문서를 건드리지 않는다
        (기존 마커의 생성 시각 유지).

        Args:
            flag: True면 deficit 마커 추가, False면 제거

        Returns:
            상태가 바뀌었으면 True
        """
        async with self._item() as (document, ledger_doc):
            current = ledger_doc.deficit is not None
            if current == bool(flag):
                logger.debug(
                    f"Deficit already {'set' if current else 'clear'}: {self.project.pid}"
                )
                return False

            if flag:
                ledger_doc.mark_deficit(_now())
            else:
                ledger_doc.clear_deficit()
            document.write(ledger_doc.to_dict())

        logger.info(f"Deficit {'set' if flag else 'cleared'}: {self.project.pid}")
        return True

    async def cash(self) -> Cash:
        """프로젝트 잔여 현금

        assets 순차변 - liabilities 순대변:
            Σassets.dt - Σassets.ct - Σliabilities.ct + Σliabilities.dt

        네 합계 모두 한 번의 문서 획득 안에서 계산.
        """
        async with self._item() as (_, ledger_doc):
            balance = ledger_doc.balance()
            assets = AccountName.ASSETS.value
            liabilities = AccountName.LIABILITIES.value
            return (
                balance.total(assets, BalanceColumn.DT)
                .add(balance.total(assets, BalanceColumn.CT).mul(-1))
                .add(balance.total(liabilities, BalanceColumn.CT).mul(-1))
                .add(balance.total(liabilities, BalanceColumn.DT))
            )

    async def add(self, *transactions: Transaction) -> int:
        """거래 배치 추가

        현재 최대 ID가 before면 i번째 거래는 before + 1 + i.
        첫 거래가 배치의 head이고, 나머지는 parent = head ID.
        배치 전체가 한 번의 문서 획득 안에서 기록되므로
        동시 호출자는 배치 전체를 보거나 전혀 보지 못한다.

        Args:
            *transactions: 추가할 거래 (1개 이상)

        Returns:
            head 거래 ID (before + 1)

        Raises:
            EmptyBatchError: 거래가 없는 경우
            LedgerCorruptedError: 문서가 손상된 경우 (아무것도 기록되지 않음)
            CashPrecisionError: 잔액 누계가 유효 자릿수를 넘는 경우 (아무것도 기록되지 않음)
        """
        if not transactions:
            raise EmptyBatchError("At least one transaction is required")
        for txn in transactions:
            if not isinstance(txn, Transaction):
                raise TypeError(f"Expected Transaction, got {type(txn).__name__}")

        async with self._item() as (document, ledger_doc):
            before = ledger_doc.last_transaction_id()
            head = before + 1
            balance = ledger_doc.balance(create=True)

            for idx, txn in enumerate(transactions):
                ledger_doc.append_transaction(
                    txn.to_record(
                        tid=head + idx,
                        parent=head if idx > 0 else None,
                        created=_now(),
                    )
                )
                txn.apply(balance)

            document.write(ledger_doc.to_dict())

        logger.info(
            f"Ledger {self.project.pid}: appended {len(transactions)} transaction(s) "
            f"#{head}..#{head + len(transactions) - 1}"
        )
        return head

    async def bootstrap(self) -> Ledger:
        """원장 문서 초기화

        문서가 없을 때만 빈 스키마로 생성. 기존 데이터는 유지.
        기존 문서가 손상된 경우 LedgerCorruptedError.

        Returns:
            self
        """
        async with self._item() as (document, ledger_doc):
            if not document.exists:
                document.write(ledger_doc.to_dict())
                logger.info(f"Ledger bootstrapped: {self.project.pid}")
        return self
