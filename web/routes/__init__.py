"""
API 라우트 패키지

각 기능별 라우터 모듈:
- health: 헬스 체크
- ledger: 프로젝트 원장 API
"""
