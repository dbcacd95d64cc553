"""
로깅 설정

원장 Web 서버와 관리 스크립트가 공유하는 루트 로거 구성.
settings.yaml의 logging 섹션(LoggingConfig)으로 콘솔/파일 레벨을 정한다.

사용법:
    from core.config.loader import get_settings
    from core.logging import setup_logging

    setup_logging("web", get_settings().config.logging)
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from core.config.loader import LoggingConfig
from core.constants import Paths

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_BACKUP_COUNT = 7  # 일 단위 백업 보관 개수

# WARNING 미만은 버리는 외부 라이브러리 로거
NOISY_LOGGERS = (
    "aiosqlite",       # 쿼리마다 executing/completed
    "httpcore",
    "httpx",
    "asyncio",
    "uvicorn.access",  # 요청마다 한 줄
)


def get_log_file_path(process_name: str, log_dir: Path | None = None) -> Path:
    """프로세스 로그 파일 경로

    Web 서버는 logs/web/, 그 외 프로세스는 logs/ 바로 아래.
    """
    if log_dir is None:
        log_dir = Paths.WEB_LOGS_DIR if process_name == "web" else Paths.LOGS_DIR
    return log_dir / f"{process_name}.log"


def _file_handler(log_file: Path, level: int, formatter: logging.Formatter) -> logging.Handler:
    # 자정마다 web.log.2026-10-19 형태로 넘김
    handler = TimedRotatingFileHandler(
        filename=log_file,
        when="midnight",
        interval=1,
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.suffix = "%Y-%m-%d"
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    process_name: str,
    config: LoggingConfig | None = None,
    log_dir: Path | None = None,
) -> logging.Logger:
    """루트 로거 초기화

    기존 루트 핸들러는 닫고 교체하므로 여러 번 호출해도 핸들러가 쌓이지 않는다.

    Args:
        process_name: 로그 파일 이름 ("web" 등)
        config: 콘솔/파일 레벨 (None이면 둘 다 INFO)
        log_dir: 로그 디렉토리 (None이면 프로세스별 기본 경로)

    Returns:
        루트 Logger
    """
    config = config or LoggingConfig()
    log_file = get_log_file_path(process_name, log_dir)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.setLevel(min(config.console_level, config.file_level))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(config.console_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)
    root_logger.addHandler(_file_handler(log_file, config.file_level, formatter))

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    root_logger.info(
        f"Logging ready for {process_name}: console={logging.getLevelName(config.console_level)}, "
        f"file={log_file} ({logging.getLevelName(config.file_level)})"
    )
    return root_logger
