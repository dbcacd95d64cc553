"""
Web 서비스 패키지

비즈니스 로직 처리
"""

from web.services.ledger_service import LedgerService

__all__ = [
    "LedgerService",
]
