"""
타입 정의 모듈

Ledger 시스템에서 사용하는 Enum 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class BalanceColumn(str, Enum):
    """잔액 테이블 컬럼 (대변/차변 누계)"""

    CT = "ct"  # credit 누계
    DT = "dt"  # debit 누계


class AccountName(str, Enum):
    """현금 계산에 사용하는 계정 이름

    자산은 차변에서 증가, 부채는 대변에서 증가.
    """

    ASSETS = "assets"
    LIABILITIES = "liabilities"
