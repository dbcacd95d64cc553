"""
잔액 테이블

Ledger 문서의 balance 섹션에 대한 타입 접근자.
(계정 이름, 서브키) 쌍마다 한 행이 있고, 행은 ct/dt 누계를 가진다.
"""

from __future__ import annotations

from typing import Any

from core.ledger.cash import Cash
from core.ledger.errors import CashFormatError, LedgerCorruptedError
from core.types import BalanceColumn


class BalanceTable:
    """계정 잔액 테이블

    문서의 행 목록을 직접 수정한다 (복사본 아님).
    행은 처음 참조될 때 생성되고 삭제되지 않는다.

    Args:
        rows: 문서의 balance 행 목록
    """

    def __init__(self, rows: list[dict[str, Any]]):
        self._rows = rows

    def __len__(self) -> int:
        return len(self._rows)

    def rows(self) -> list[dict[str, Any]]:
        """행 목록 (읽기용)"""
        return list(self._rows)

    def find(self, name: str, namex: str) -> dict[str, Any] | None:
        """(name, namex) 정확히 일치하는 행 조회

        Raises:
            LedgerCorruptedError: 같은 키의 행이 2개 이상인 경우
        """
        found = [
            row for row in self._rows
            if row.get("name") == name and row.get("namex") == namex
        ]
        if len(found) > 1:
            raise LedgerCorruptedError(
                f"Duplicate balance rows for account {name!r}/{namex!r}: {len(found)}"
            )
        return found[0] if found else None

    def ensure(self, name: str, namex: str) -> dict[str, Any]:
        """행이 없을 때만 ct = dt = 0 으로 생성"""
        row = self.find(name, namex)
        if row is None:
            row = {
                "name": name,
                "namex": namex,
                BalanceColumn.CT.value: str(Cash.ZERO),
                BalanceColumn.DT.value: str(Cash.ZERO),
            }
            self._rows.append(row)
        return row

    def add(
        self,
        name: str,
        namex: str,
        column: BalanceColumn,
        amount: Cash,
    ) -> Cash:
        """한 컬럼에 금액 누적

        이전 값을 읽은 뒤 더해서 기록.

        Returns:
            누적 후 값
        """
        row = self.ensure(name, namex)
        after = _read_cash(row, column).add(amount)
        row[column.value] = str(after)
        return after

    def value(self, name: str, namex: str, column: BalanceColumn) -> Cash:
        """한 계정의 컬럼 값 (행이 없으면 0)"""
        row = self.find(name, namex)
        if row is None:
            return Cash.ZERO
        return _read_cash(row, column)

    def total(self, name: str, column: BalanceColumn) -> Cash:
        """이름이 일치하는 모든 행(서브키 무관)의 컬럼 합계"""
        total = Cash.ZERO
        for row in self._rows:
            if row.get("name") == name:
                total = total.add(_read_cash(row, column))
        return total


def _read_cash(row: dict[str, Any], column: BalanceColumn) -> Cash:
    """저장된 금액 텍스트 파싱

    Raises:
        LedgerCorruptedError: 값이 없거나 파싱 불가능한 경우
    """
    text = row.get(column.value)
    try:
        return Cash.parse(text)
    except CashFormatError as e:
        raise LedgerCorruptedError(
            f"Malformed {column.value} in balance row "
            f"{row.get('name')!r}/{row.get('namex')!r}: {text!r}"
        ) from e
