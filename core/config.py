"""
core/config.py - 중앙 설정 관리

애플리케이션 전역 설정값과 환경변수 헬퍼, 로깅 설정을 제공합니다.

Usage:
    from core.config import settings, get_default_region, configure_logging

    region = get_default_region()   # AWS_REGION → AWS_DEFAULT_REGION → 기본값
    page_size = settings.PAGE_SIZE

    configure_logging()             # LOG_LEVEL 환경변수 반영

환경변수:
    AWS_REGION / AWS_DEFAULT_REGION   기본 리전
    AWS_PROFILE / AWS_DEFAULT_PROFILE 기본 프로파일
    AWS_BROWSER_REGIONS               멀티 리전 조회 대상 (쉼표 구분)
    AWS_BROWSER_PAGE_SIZE             페이지 크기
    LOG_LEVEL                         로깅 레벨
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from core.exceptions import ConfigError

# =============================================================================
# 설정값
# =============================================================================


@dataclass(frozen=True)
class Settings:
    """애플리케이션 설정 (불변)"""

    # 리전
    DEFAULT_REGION: str = "us-east-1"

    # 조회
    PAGE_SIZE: int = 100
    MULTI_REGION_TIMEOUT: int = 60  # 초
    MULTI_REGION_MAX_WORKERS: int = 8

    # API 클라이언트 (botocore Config)
    API_TIMEOUT: int = 30  # 읽기 타임아웃 (초)
    API_CONNECT_TIMEOUT: int = 10  # 초
    API_RETRY_COUNT: int = 3
    API_RETRY_MODE: str = "standard"
    MAX_POOL_CONNECTIONS: int = 25


settings = Settings()


def get_version() -> str:
    """설치된 패키지 버전 (미설치 시 "0.0.0-dev")"""
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("aws-resource-browser")
    except PackageNotFoundError:
        return "0.0.0-dev"


# =============================================================================
# 환경변수 헬퍼
# =============================================================================


def get_env_int(name: str, default: int) -> int:
    """환경변수를 int로 변환 (변환 실패 시 default)"""
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def get_env_list(name: str) -> list[str]:
    """쉼표로 구분된 환경변수를 리스트로 변환 (빈 항목 제외)"""
    value = os.environ.get(name, "")
    return [item.strip() for item in value.split(",") if item.strip()]


def get_default_region() -> str:
    """기본 리전 (AWS_REGION → AWS_DEFAULT_REGION → settings.DEFAULT_REGION)"""
    return os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION") or settings.DEFAULT_REGION


def get_default_profile() -> str | None:
    """기본 프로파일 (AWS_PROFILE → AWS_DEFAULT_PROFILE, 없으면 None)"""
    return os.environ.get("AWS_PROFILE") or os.environ.get("AWS_DEFAULT_PROFILE") or None


def get_regions() -> list[str]:
    """멀티 리전 조회 대상 리전 목록 (없으면 기본 리전 하나)"""
    return get_env_list("AWS_BROWSER_REGIONS") or [get_default_region()]


def get_page_size() -> int:
    """페이지 크기 (AWS_BROWSER_PAGE_SIZE)

    Raises:
        ConfigError: 1 미만의 값
    """
    size = get_env_int("AWS_BROWSER_PAGE_SIZE", settings.PAGE_SIZE)
    if size < 1:
        raise ConfigError("AWS_BROWSER_PAGE_SIZE", f"1 이상이어야 합니다 (현재: {size})")
    return size


# =============================================================================
# 로깅
# =============================================================================

# botocore 노이즈 로그 제한 대상
_NOISY_LOGGERS = (
    "botocore.httpchecksum",
    "botocore.credentials",
    "botocore.loaders",
    "botocore.session",
    "urllib3.connectionpool",
)


@dataclass
class LogConfig:
    """로깅 설정"""

    level: str = "INFO"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def from_env(cls, default_level: str = "INFO") -> LogConfig:
        """LOG_LEVEL 환경변수에서 로드

        Raises:
            ConfigError: 알 수 없는 로그 레벨
        """
        return cls(level=_check_level(os.environ.get("LOG_LEVEL", default_level)))


def _check_level(level: str) -> str:
    name = level.strip().upper()
    if not isinstance(logging.getLevelName(name), int):
        raise ConfigError("LOG_LEVEL", f"알 수 없는 로그 레벨: {level!r}")
    return name


def configure_logging(config: LogConfig | None = None) -> logging.Logger:
    """루트 로거에 Rich 핸들러 설정

    이미 RichHandler가 붙어 있으면 레벨만 갱신합니다.

    Raises:
        ConfigError: 알 수 없는 로그 레벨

    Returns:
        설정된 루트 로거
    """
    from rich.console import Console
    from rich.logging import RichHandler

    config = config or LogConfig.from_env()
    root = logging.getLogger()
    root.setLevel(_check_level(config.level))

    if not any(isinstance(h, RichHandler) for h in root.handlers):
        handler = RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s", datefmt=config.date_format))
        root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root
