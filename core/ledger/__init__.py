"""
복식부기 (Double-Entry Bookkeeping) 원장

프로젝트별 원장 문서에 거래를 기록하고 계정 잔액을 유지.

사용 예시:
```python
from core.ledger import Ledger, Transaction
from core.project import Project
from core.storage import DocumentStore

store = DocumentStore(db_path)
ledger = await Ledger(Project("proj-1", store)).bootstrap()

# 거래 배치 추가
first_id = await ledger.add(
    Transaction(amount=100, debit="assets", debitx="cash",
                credit="liabilities", creditx="capital", details="seed"),
)

# 잔여 현금 조회
cash = await ledger.cash()
```
"""

from core.ledger.balance import BalanceTable
from core.ledger.cash import Cash
from core.ledger.errors import (
    CashFormatError,
    CashPrecisionError,
    EmptyBatchError,
    LedgerCorruptedError,
    LedgerError,
)
from core.ledger.ledger import Ledger
from core.ledger.schema import LedgerDocument
from core.ledger.transaction import Transaction

__all__ = [
    # 핵심 클래스
    "Ledger",
    "Transaction",
    "Cash",
    "LedgerDocument",
    "BalanceTable",
    # 예외
    "LedgerError",
    "LedgerCorruptedError",
    "CashFormatError",
    "CashPrecisionError",
    "EmptyBatchError",
]
