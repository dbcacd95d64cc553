"""
설정 로더

settings.yaml 로드 및 저장소/로깅/Web 설정 생성
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from core.constants import PROJECT_ROOT, Defaults, Paths


@dataclass(frozen=True)
class StorageConfig:
    """문서 저장소 설정"""

    db_path: Path = Paths.DEFAULT_DB
    busy_timeout_ms: int = Defaults.BUSY_TIMEOUT_MS


@dataclass(frozen=True)
class LoggingConfig:
    """로깅 설정"""

    console_level: int = logging.INFO
    file_level: int = logging.INFO


@dataclass(frozen=True)
class WebConfig:
    """Web 서버 설정"""

    host: str = Defaults.WEB_HOST
    port: int = Defaults.WEB_PORT


@dataclass(frozen=True)
class AppConfig:
    """애플리케이션 설정 (settings.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지
    """

    storage: StorageConfig = field(default_factory=StorageConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    web: WebConfig = field(default_factory=WebConfig)


class SettingsLoadError(Exception):
    """Settings 로드 실패 예외"""

    pass


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise SettingsLoadError(f"settings.yaml의 '{name}' 섹션은 매핑이어야 합니다")
    return section


def _level(value: Any, name: str) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    level = logging.getLevelName(str(value).upper())
    if not isinstance(level, int):
        raise SettingsLoadError(f"유효하지 않은 로그 레벨입니다: {name}={value!r}")
    return level


def _positive_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise SettingsLoadError(f"{name}은(는) 양의 정수여야 합니다: {value!r}")
    return value


def _resolve_path(value: Any) -> Path:
    if not isinstance(value, str) or not value.strip():
        raise SettingsLoadError(f"storage.db_path가 유효하지 않습니다: {value!r}")
    path = Path(value)
    # 상대 경로는 프로젝트 루트 기준
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path


def load_settings(path: Path | None = None) -> AppConfig:
    """settings.yaml 파일 로드

    기본 경로에 파일이 없으면 기본값 사용.

    Args:
        path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        AppConfig 인스턴스

    Raises:
        SettingsLoadError: 지정한 파일이 없거나 형식이 잘못된 경우
    """
    if path is None:
        path = Paths.SETTINGS_FILE
        if not path.exists():
            return AppConfig()
    elif not path.exists():
        raise SettingsLoadError(f"settings.yaml 파일을 찾을 수 없습니다: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SettingsLoadError(f"settings.yaml 파싱 실패: {e}") from e

    if data is None:
        return AppConfig()
    if not isinstance(data, dict):
        raise SettingsLoadError("settings.yaml 최상위는 매핑이어야 합니다")

    storage = _section(data, "storage")
    log = _section(data, "logging")
    web = _section(data, "web")

    return AppConfig(
        storage=StorageConfig(
            db_path=_resolve_path(storage.get("db_path", str(Paths.DEFAULT_DB))),
            busy_timeout_ms=_positive_int(
                storage.get("busy_timeout_ms", Defaults.BUSY_TIMEOUT_MS),
                "storage.busy_timeout_ms",
            ),
        ),
        logging=LoggingConfig(
            console_level=_level(log.get("console_level", Defaults.LOG_LEVEL), "logging.console_level"),
            file_level=_level(log.get("file_level", Defaults.LOG_LEVEL), "logging.file_level"),
        ),
        web=WebConfig(
            host=str(web.get("host", Defaults.WEB_HOST)),
            port=_positive_int(web.get("port", Defaults.WEB_PORT), "web.port"),
        ),
    )


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    settings.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _config: AppConfig | None = None

    def __new__(cls, settings_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, settings_path: Path | None = None) -> None:
        if self._config is None:
            Settings._config = load_settings(settings_path)

    @property
    def config(self) -> AppConfig:
        """전체 설정

        Raises:
            SettingsLoadError: reset 후 다시 로드하지 않은 경우
        """
        if self._config is None:
            raise SettingsLoadError("설정이 로드되지 않았습니다. get_settings()로 다시 로드하세요")
        return self._config

    @property
    def db_path(self) -> Path:
        """문서 저장소 DB 경로"""
        return self.config.storage.db_path

    @property
    def busy_timeout_ms(self) -> int:
        """문서 잠금 대기 시간"""
        return self.config.storage.busy_timeout_ms

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._config = None


def get_settings(settings_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        settings_path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(settings_path)
