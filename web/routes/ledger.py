"""
원장 API 라우트

프로젝트별 원장 초기화, 현금/deficit 조회, 거래 기록
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Path

from core.ledger.errors import LedgerCorruptedError, LedgerError
from core.storage.document_store import DocumentStore
from core.storage.errors import StorageError
from web.dependencies import get_document_store
from web.models.requests import DeficitUpdateRequest, TransactionBatchRequest
from web.models.responses import (
    BootstrapResponse,
    CashResponse,
    DeficitResponse,
    TransactionBatchResponse,
)
from web.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects/{project_id}/ledger", tags=["Ledger"])


def _to_http_error(e: Exception) -> HTTPException:
    """원장/저장소 예외를 HTTP 오류로 변환

    - StorageError: 503 (저장소 사용 불가)
    - LedgerCorruptedError: 500 (문서 손상)
    - 그 외 LedgerError: 422
    """
    if isinstance(e, StorageError):
        logger.error(f"Ledger storage unavailable: {e}")
        return HTTPException(status_code=503, detail=f"Ledger storage unavailable: {e}")
    if isinstance(e, LedgerCorruptedError):
        logger.error(f"Ledger document corrupted: {e}")
        return HTTPException(status_code=500, detail=f"Ledger document corrupted: {e}")
    return HTTPException(status_code=422, detail=str(e))


@router.post("/bootstrap", response_model=BootstrapResponse)
async def bootstrap_ledger(
    project_id: str = Path(..., min_length=1, description="프로젝트 ID"),
    store: DocumentStore = Depends(get_document_store),
) -> BootstrapResponse:
    """원장 초기화 (이미 있으면 유지)"""
    try:
        service = LedgerService(store, project_id)
        result = await service.bootstrap()
    except (LedgerError, StorageError) as e:
        raise _to_http_error(e) from e
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return BootstrapResponse(**result)


@router.get("/cash", response_model=CashResponse)
async def get_cash(
    project_id: str = Path(..., min_length=1, description="프로젝트 ID"),
    store: DocumentStore = Depends(get_document_store),
) -> CashResponse:
    """잔여 현금 조회"""
    try:
        service = LedgerService(store, project_id)
        result = await service.get_cash()
    except (LedgerError, StorageError) as e:
        raise _to_http_error(e) from e
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return CashResponse(**result)


@router.get("/deficit", response_model=DeficitResponse, response_model_exclude_none=True)
async def get_deficit(
    project_id: str = Path(..., min_length=1, description="프로젝트 ID"),
    store: DocumentStore = Depends(get_document_store),
) -> DeficitResponse:
    """deficit 상태 조회"""
    try:
        service = LedgerService(store, project_id)
        result = await service.get_deficit()
    except (LedgerError, StorageError) as e:
        raise _to_http_error(e) from e
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return DeficitResponse(**result)


@router.put("/deficit", response_model=DeficitResponse)
async def update_deficit(
    request: DeficitUpdateRequest,
    project_id: str = Path(..., min_length=1, description="프로젝트 ID"),
    store: DocumentStore = Depends(get_document_store),
) -> DeficitResponse:
    """deficit 상태 설정

    이미 같은 상태면 changed=false.
    """
    try:
        service = LedgerService(store, project_id)
        result = await service.set_deficit(request.deficit)
    except (LedgerError, StorageError) as e:
        raise _to_http_error(e) from e
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return DeficitResponse(**result)


@router.post("/transactions", response_model=TransactionBatchResponse, status_code=201)
async def add_transactions(
    request: TransactionBatchRequest,
    project_id: str = Path(..., min_length=1, description="프로젝트 ID"),
    store: DocumentStore = Depends(get_document_store),
) -> TransactionBatchResponse:
    """거래 배치 기록

    배치 전체가 한 번에 기록되고 head 거래 ID를 반환.
    """
    try:
        service = LedgerService(store, project_id)
        result = await service.add_transactions(
            [item.model_dump() for item in request.transactions]
        )
    except (LedgerError, StorageError) as e:
        raise _to_http_error(e) from e
    except (ValueError, TypeError) as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return TransactionBatchResponse(**result)
