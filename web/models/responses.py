"""
응답 스키마 (Pydantic)

Web API 응답 데이터 직렬화
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    status: str = Field(default="ok", description="서비스 상태")
    version: str = Field(..., description="API 버전")


class BootstrapResponse(BaseModel):
    """원장 초기화 응답"""

    project_id: str = Field(..., description="프로젝트 ID")
    bootstrapped: bool = Field(default=True, description="원장 문서 준비 여부")


class CashResponse(BaseModel):
    """잔여 현금 응답"""

    project_id: str = Field(..., description="프로젝트 ID")
    cash: str = Field(..., description="잔여 현금 (decimal 텍스트)")


class DeficitResponse(BaseModel):
    """deficit 상태 응답"""

    project_id: str = Field(..., description="프로젝트 ID")
    deficit: bool = Field(..., description="자금 부족 상태 여부")
    changed: bool | None = Field(default=None, description="상태 변경 여부 (변경 요청 시)")


class TransactionBatchResponse(BaseModel):
    """거래 배치 추가 응답"""

    project_id: str = Field(..., description="프로젝트 ID")
    first_id: int = Field(..., description="배치 head 거래 ID")
    count: int = Field(..., description="추가된 거래 수")
