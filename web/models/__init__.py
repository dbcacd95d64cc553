"""
Web 모델 패키지

Pydantic 스키마 정의
"""

from web.models.requests import (
    DeficitUpdateRequest,
    TransactionBatchRequest,
    TransactionRequest,
)
from web.models.responses import (
    BootstrapResponse,
    CashResponse,
    DeficitResponse,
    HealthResponse,
    TransactionBatchResponse,
)

__all__ = [
    # Requests
    "DeficitUpdateRequest",
    "TransactionBatchRequest",
    "TransactionRequest",
    # Responses
    "BootstrapResponse",
    "CashResponse",
    "DeficitResponse",
    "HealthResponse",
    "TransactionBatchResponse",
]
