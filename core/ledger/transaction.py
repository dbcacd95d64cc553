"""
거래 (복식부기 분개)

하나의 debit 계정과 하나의 credit 계정 사이의 금액 이동.
Ledger.add에서 거래 레코드로 변환되고 잔액 테이블에 반영된다.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from core.ledger.balance import BalanceTable
from core.ledger.cash import Cash
from core.types import BalanceColumn


@dataclass(frozen=True)
class Transaction:
    """거래 (불변)

    Args:
        amount: 금액 (음수 불가)
        debit: 차변 계정 이름
        debitx: 차변 계정 서브키
        credit: 대변 계정 이름
        creditx: 대변 계정 서브키
        details: 설명

    사용 예시:
    ```python
    seed = Transaction(
        amount=100,
        debit="assets", debitx="cash",
        credit="liabilities", creditx="capital",
        details="seed",
    )
    ```
    """

    amount: Cash
    debit: str
    debitx: str
    credit: str
    creditx: str
    details: str

    def __post_init__(self) -> None:
        if self.amount is None:
            raise TypeError("Transaction amount is required")
        object.__setattr__(self, "amount", Cash.of(self.amount))

        for field_name in ("debit", "debitx", "credit", "creditx", "details"):
            value = getattr(self, field_name)
            if not isinstance(value, str):
                raise TypeError(
                    f"Transaction {field_name} must be str, got {type(value).__name__}"
                )

        if self.amount.is_negative():
            raise ValueError(f"Transaction amount must not be negative: {self.amount}")

    def to_record(
        self,
        tid: int,
        parent: int | None,
        created: str,
    ) -> dict[str, Any]:
        """문서에 기록할 거래 레코드

        parent는 배치의 두 번째 거래부터만 기록.
        """
        record: dict[str, Any] = {"id": tid}
        if parent is not None:
            record["parent"] = parent
        record.update({
            "created": created,
            "amount": str(self.amount),
            "dt": self.debit,
            "dtx": self.debitx,
            "ct": self.credit,
            "ctx": self.creditx,
            "details": self.details,
        })
        return record

    def apply(self, balance: BalanceTable) -> None:
        """잔액 테이블 업데이트

        차변 계정의 dt, 대변 계정의 ct에 금액 누적.
        같은 계정이 양쪽이면 같은 행에 순서대로 두 번 반영.
        """
        balance.add(self.debit, self.debitx, BalanceColumn.DT, self.amount)
        balance.add(self.credit, self.creditx, BalanceColumn.CT, self.amount)
