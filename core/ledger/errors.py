"""
Ledger 예외 정의
"""


class LedgerError(Exception):
    """Ledger 예외 기본 클래스"""

    pass


class LedgerCorruptedError(LedgerError):
    """저장된 Ledger 문서가 스키마 불변식을 위반한 경우

    중복 잔액 행, 복수의 deficit 마커, 파싱 불가능한 금액 등.
    금액 합계를 오염시킬 수 있으므로 복구하지 않고 그대로 전파.
    """

    pass


class CashFormatError(ValueError):
    """금액 텍스트 형식 오류"""

    pass


class EmptyBatchError(LedgerError, ValueError):
    """빈 거래 배치로 add 호출"""

    pass


class CashPrecisionError(LedgerError, ArithmeticError):
    """금액 연산 결과가 유효 자릿수를 넘어 반올림이 필요한 경우"""

    pass
