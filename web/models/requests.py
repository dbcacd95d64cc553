"""
요청 스키마 (Pydantic)

Web API 요청 데이터 검증
"""

from pydantic import BaseModel, Field

from core.constants import Defaults


class TransactionRequest(BaseModel):
    """거래 한 건

    금액은 정확한 decimal 텍스트 (부동소수점 손실 방지).
    """

    amount: str = Field(..., min_length=1, description="금액 (decimal 텍스트, 예: \"100.50\")")
    debit: str = Field(..., description="차변 계정 이름")
    debitx: str = Field(..., description="차변 계정 서브키")
    credit: str = Field(..., description="대변 계정 이름")
    creditx: str = Field(..., description="대변 계정 서브키")
    details: str = Field(..., description="설명")


class TransactionBatchRequest(BaseModel):
    """거래 배치 추가 요청

    첫 거래가 head가 되고 나머지는 head를 parent로 기록.
    """

    transactions: list[TransactionRequest] = Field(
        ...,
        min_length=1,
        max_length=Defaults.MAX_BATCH_SIZE,
        description="추가할 거래 목록",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "transactions": [
                        {
                            "amount": "100",
                            "debit": "assets",
                            "debitx": "cash",
                            "credit": "liabilities",
                            "creditx": "capital",
                            "details": "seed",
                        },
                    ]
                },
            ]
        }
    }


class DeficitUpdateRequest(BaseModel):
    """deficit 상태 변경 요청"""

    deficit: bool = Field(..., description="자금 부족 상태 여부")
