"""
BalanceTable 테스트
"""

import pytest

from core.ledger.balance import BalanceTable
from core.ledger.cash import Cash
from core.ledger.errors import LedgerCorruptedError
from core.types import BalanceColumn


class TestBalanceFind:
    """find / ensure 테스트"""

    def test_find_missing_returns_none(self) -> None:
        assert BalanceTable([]).find("assets", "cash") is None

    def test_exact_match_on_subkey(self) -> None:
        """서브키가 다르면 다른 계정"""
        rows = [
            {"name": "assets", "namex": "usd", "ct": "0", "dt": "5"},
            {"name": "assets", "namex": "eur", "ct": "0", "dt": "7"},
        ]
        balance = BalanceTable(rows)

        assert balance.find("assets", "eur") is rows[1]
        assert balance.find("assets", "gbp") is None

    def test_duplicate_rows_are_corruption(self) -> None:
        rows = [
            {"name": "assets", "namex": "cash", "ct": "0", "dt": "1"},
            {"name": "assets", "namex": "cash", "ct": "0", "dt": "2"},
        ]

        with pytest.raises(LedgerCorruptedError, match="Duplicate"):
            BalanceTable(rows).find("assets", "cash")

    def test_ensure_creates_zero_row_once(self) -> None:
        rows: list[dict] = []
        balance = BalanceTable(rows)

        first = balance.ensure("assets", "cash")
        second = balance.ensure("assets", "cash")

        assert first is second
        assert rows == [{"name": "assets", "namex": "cash", "ct": "0", "dt": "0"}]


class TestBalanceAdd:
    """add 테스트"""

    def test_add_reads_previous_value(self) -> None:
        rows = [{"name": "assets", "namex": "cash", "ct": "1.50", "dt": "0"}]
        balance = BalanceTable(rows)

        after = balance.add("assets", "cash", BalanceColumn.CT, Cash.of("2.25"))

        assert after == Cash.of("3.75")
        assert rows[0]["ct"] == "3.75"
        assert rows[0]["dt"] == "0"

    def test_add_creates_row_lazily(self) -> None:
        rows: list[dict] = []

        BalanceTable(rows).add("liabilities", "capital", BalanceColumn.CT, Cash.of(9))

        assert rows == [{"name": "liabilities", "namex": "capital", "ct": "9", "dt": "0"}]

    def test_malformed_stored_amount_is_corruption(self) -> None:
        rows = [{"name": "assets", "namex": "cash", "ct": "oops", "dt": "0"}]

        with pytest.raises(LedgerCorruptedError, match="Malformed ct"):
            BalanceTable(rows).add("assets", "cash", BalanceColumn.CT, Cash.of(1))

    def test_missing_stored_column_is_corruption(self) -> None:
        rows = [{"name": "assets", "namex": "cash", "ct": "0"}]

        with pytest.raises(LedgerCorruptedError):
            BalanceTable(rows).value("assets", "cash", BalanceColumn.DT)


class TestBalanceTotal:
    """total 테스트"""

    def test_total_across_subkeys(self) -> None:
        rows = [
            {"name": "assets", "namex": "cash", "ct": "1", "dt": "10"},
            {"name": "assets", "namex": "bank", "ct": "2", "dt": "20.5"},
            {"name": "liabilities", "namex": "capital", "ct": "30", "dt": "0"},
        ]
        balance = BalanceTable(rows)

        assert balance.total("assets", BalanceColumn.DT) == Cash.of("30.5")
        assert balance.total("assets", BalanceColumn.CT) == 3
        assert balance.total("expenses", BalanceColumn.DT) == Cash.ZERO

    def test_value_of_missing_row_is_zero(self) -> None:
        assert BalanceTable([]).value("assets", "cash", BalanceColumn.DT) == Cash.ZERO
