"""
Ledger 문서 스키마

프로젝트당 하나의 JSON 문서:

    {
        "deficit": {"created": "2026-10-19T09:00:00+00:00"},   # 선택
        "transactions": [                                      # 선택
            {"id": 1, "created": ..., "amount": "100", "dt": "assets", "dtx": "cash",
             "ct": "liabilities", "ctx": "capital", "details": "seed"},
            {"id": 2, "parent": 1, ...},
        ],
        "balance": [                                           # 선택
            {"name": "assets", "namex": "cash", "ct": "0", "dt": "100"},
        ],
    }

bootstrap 직후 문서는 빈 객체 {} (거래, 잔액, deficit 모두 없음).
"""

from __future__ import annotations

from typing import Any

from core.ledger.balance import BalanceTable
from core.ledger.errors import LedgerCorruptedError

SECTION_DEFICIT = "deficit"
SECTION_TRANSACTIONS = "transactions"
SECTION_BALANCE = "balance"

KNOWN_SECTIONS = frozenset({SECTION_DEFICIT, SECTION_TRANSACTIONS, SECTION_BALANCE})


class LedgerDocument:
    """Ledger 문서 접근자

    deficit 마커, 거래 로그, 잔액 테이블에 대한 타입 접근자.
    transactions / balance 섹션은 처음 추가될 때 생성.

    Args:
        body: 문서 본문 (직접 수정됨)
    """

    def __init__(self, body: dict[str, Any]):
        self._body = body

    @classmethod
    def empty(cls) -> LedgerDocument:
        """bootstrap 직후의 빈 문서"""
        return cls({})

    @classmethod
    def parse(cls, body: Any) -> LedgerDocument:
        """저장된 본문 검증 후 접근자 생성

        Raises:
            LedgerCorruptedError: 섹션 또는 행 구조가 스키마와 다른 경우
        """
        if not isinstance(body, dict):
            raise LedgerCorruptedError(
                f"Ledger document must be an object, got {type(body).__name__}"
            )

        unknown = set(body) - KNOWN_SECTIONS
        if unknown:
            raise LedgerCorruptedError(f"Unknown ledger sections: {sorted(unknown)}")

        if SECTION_DEFICIT in body:
            marker = body[SECTION_DEFICIT]
            if isinstance(marker, list):
                raise LedgerCorruptedError(
                    f"Ledger has {len(marker)} deficit markers, expected at most one"
                )
            if not isinstance(marker, dict) or "created" not in marker:
                raise LedgerCorruptedError(f"Malformed deficit marker: {marker!r}")

        for section in (SECTION_TRANSACTIONS, SECTION_BALANCE):
            if section in body and not isinstance(body[section], list):
                raise LedgerCorruptedError(
                    f"Ledger section '{section}' must be a list, "
                    f"got {type(body[section]).__name__}"
                )
            for idx, entry in enumerate(body.get(section, [])):
                if not isinstance(entry, dict):
                    raise LedgerCorruptedError(
                        f"Ledger {section}[{idx}] must be an object, "
                        f"got {type(entry).__name__}"
                    )

        return cls(body)

    def to_dict(self) -> dict[str, Any]:
        """저장용 본문"""
        return self._body

    # -------------------------------------------------------------------------
    # deficit
    # -------------------------------------------------------------------------

    @property
    def deficit(self) -> dict[str, Any] | None:
        """deficit 마커 (없으면 None)"""
        return self._body.get(SECTION_DEFICIT)

    def mark_deficit(self, created: str) -> None:
        """deficit 마커 추가

        Raises:
            LedgerCorruptedError: 이미 마커가 있는 경우
        """
        if SECTION_DEFICIT in self._body:
            raise LedgerCorruptedError("Deficit marker already present")
        self._body[SECTION_DEFICIT] = {"created": created}

    def clear_deficit(self) -> None:
        """deficit 마커 제거"""
        self._body.pop(SECTION_DEFICIT, None)

    # -------------------------------------------------------------------------
    # transactions
    # -------------------------------------------------------------------------

    @property
    def transactions(self) -> list[dict[str, Any]]:
        """거래 레코드 목록 (읽기용, 없으면 빈 목록)"""
        return list(self._body.get(SECTION_TRANSACTIONS, []))

    def last_transaction_id(self) -> int:
        """현재 최대 거래 ID (없으면 0)

        ID는 1부터 빈틈없이 증가해야 한다.

        Raises:
            LedgerCorruptedError: ID가 1..N 이 아닌 경우
        """
        records = self._body.get(SECTION_TRANSACTIONS, [])
        ids = []
        for record in records:
            tid = record.get("id") if isinstance(record, dict) else None
            if not isinstance(tid, int) or isinstance(tid, bool):
                raise LedgerCorruptedError(f"Malformed transaction id: {tid!r}")
            ids.append(tid)

        if ids != list(range(1, len(ids) + 1)):
            raise LedgerCorruptedError(
                f"Transaction ids are not gapless and increasing: {len(ids)} records, "
                f"max id {max(ids) if ids else 0}"
            )
        return len(ids)

    def append_transaction(self, record: dict[str, Any]) -> None:
        """거래 레코드 추가 (append-only)"""
        self._body.setdefault(SECTION_TRANSACTIONS, []).append(record)

    # -------------------------------------------------------------------------
    # balance
    # -------------------------------------------------------------------------

    def balance(self, create: bool = False) -> BalanceTable:
        """잔액 테이블 접근자

        Args:
            create: True면 balance 섹션이 없을 때 생성 (쓰기용)
        """
        if create:
            rows = self._body.setdefault(SECTION_BALANCE, [])
        else:
            rows = self._body.get(SECTION_BALANCE, [])
        return BalanceTable(rows)
