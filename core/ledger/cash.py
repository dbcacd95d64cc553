"""
Cash 금액 타입

부동소수점 없이 Decimal로만 계산하는 금액 값.
문서에는 지수 표기 없는 decimal 텍스트로 저장.

사용 예시:
```python
total = Cash.ZERO
for text in ("10.50", "$4.50"):
    total = total + Cash.parse(text)

assert total == 15
assert str(total) == "15.00"
```
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import (
    Context,
    Decimal,
    DecimalException,
    DivisionByZero,
    Inexact,
    InvalidOperation,
    Overflow,
)
from functools import total_ordering
from typing import ClassVar

from core.ledger.errors import CashFormatError, CashPrecisionError

# 유효 자릿수. 반올림이 필요하면 CashPrecisionError
PRECISION = 100

_CONTEXT = Context(
    prec=PRECISION,
    traps=[InvalidOperation, DivisionByZero, Overflow, Inexact],
)

_NUMBER = re.compile(r"^(\d+(\.\d*)?|\.\d+)$")


@total_ordering
@dataclass(frozen=True, eq=False)
class Cash:
    """금액 (불변)

    Args:
        value: Decimal 금액
    """

    value: Decimal = Decimal("0")

    ZERO: ClassVar[Cash]

    def __post_init__(self) -> None:
        if not isinstance(self.value, Decimal):
            raise TypeError(f"Cash value must be Decimal, got {type(self.value).__name__}")
        if not self.value.is_finite():
            raise ValueError(f"Cash value must be finite: {self.value}")

    @classmethod
    def of(cls, value: Cash | Decimal | int | str) -> Cash:
        """Cash, Decimal, int, 문자열에서 Cash 생성

        float는 정확한 값이 아니므로 거부.
        """
        if isinstance(value, Cash):
            return value
        if isinstance(value, bool) or isinstance(value, float):
            raise TypeError(f"Unsupported cash value type: {type(value).__name__}")
        if isinstance(value, Decimal):
            return cls(value)
        if isinstance(value, int):
            return cls(Decimal(value))
        if isinstance(value, str):
            return cls.parse(value)
        raise TypeError(f"Unsupported cash value type: {type(value).__name__}")

    @classmethod
    def parse(cls, text: str) -> Cash:
        """텍스트 금액 파싱

        허용 형식: "100", "-5.25", "$19.99", "-$3", " +7.0 "

        Raises:
            CashFormatError: 형식이 잘못되었거나 유효 자릿수를 넘는 경우
        """
        if not isinstance(text, str):
            raise CashFormatError(f"Cash text must be str, got {type(text).__name__}")

        body = text.strip()
        sign = ""
        if body[:1] in ("+", "-"):
            sign, body = body[0], body[1:]
        if body.startswith("$"):
            body = body[1:]
        if not sign and body[:1] in ("+", "-"):
            sign, body = body[0], body[1:]

        if not _NUMBER.match(body):
            raise CashFormatError(f"Malformed cash amount: {text!r}")

        value = Decimal(f"{'-' if sign == '-' else ''}{body}")
        if len(value.as_tuple().digits) > PRECISION:
            raise CashFormatError(
                f"Cash amount has more than {PRECISION} significant digits: {text!r}"
            )
        return cls(value)

    # -------------------------------------------------------------------------
    # 연산
    # -------------------------------------------------------------------------

    def add(self, other: Cash) -> Cash:
        """덧셈

        Raises:
            CashPrecisionError: 결과가 PRECISION 자릿수를 넘는 경우
        """
        operand = Cash.of(other)
        try:
            return Cash(_CONTEXT.add(self.value, operand.value))
        except DecimalException as e:
            raise CashPrecisionError(
                f"Cash sum {self} + {operand} exceeds {PRECISION} significant digits"
            ) from e

    def mul(self, factor: int | Decimal) -> Cash:
        """곱셈 (부호 반전은 mul(-1))"""
        if isinstance(factor, (bool, float)) or not isinstance(factor, (int, Decimal)):
            raise TypeError(f"Unsupported factor type: {type(factor).__name__}")
        try:
            return Cash(_CONTEXT.multiply(self.value, Decimal(factor)))
        except DecimalException as e:
            raise CashPrecisionError(
                f"Cash product {self} * {factor} exceeds {PRECISION} significant digits"
            ) from e

    def __add__(self, other: object) -> Cash:
        if not isinstance(other, (Cash, Decimal, int)) or isinstance(other, bool):
            return NotImplemented
        return self.add(Cash.of(other))

    __radd__ = __add__

    def __sub__(self, other: object) -> Cash:
        if not isinstance(other, (Cash, Decimal, int)) or isinstance(other, bool):
            return NotImplemented
        return self.add(Cash.of(other).mul(-1))

    def __mul__(self, factor: object) -> Cash:
        if not isinstance(factor, (Decimal, int)) or isinstance(factor, bool):
            return NotImplemented
        return self.mul(factor)

    __rmul__ = __mul__

    def __neg__(self) -> Cash:
        return self.mul(-1)

    def __abs__(self) -> Cash:
        return Cash(self.value.copy_abs())

    def is_negative(self) -> bool:
        """음수 여부 (-0은 음수 아님)"""
        return self.value < 0

    # -------------------------------------------------------------------------
    # 비교
    # -------------------------------------------------------------------------

    def _coerce(self, other: object) -> Decimal | None:
        if isinstance(other, Cash):
            return other.value
        if isinstance(other, (Decimal, int)) and not isinstance(other, bool):
            return Decimal(other)
        return None

    def __eq__(self, other: object) -> bool:
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self.value == value

    def __lt__(self, other: object) -> bool:
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self.value < value

    def __hash__(self) -> int:
        return hash(self.value)

    # -------------------------------------------------------------------------
    # 직렬화
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        """문서 저장용 표준 텍스트 (지수 표기 없음)"""
        value = self.value
        if value.is_zero() and value.is_signed():
            value = value.copy_abs()
        return format(value, "f")

    def __repr__(self) -> str:
        return f"Cash('{self}')"


Cash.ZERO = Cash(Decimal("0"))
