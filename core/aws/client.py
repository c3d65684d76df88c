"""
core/aws/client.py - boto3 session/client 생성 헬퍼

요청 컨텍스트의 리전/프로파일 오버라이드를 반영하여
retry + 타임아웃 + 연결 풀이 설정된 boto3 client를 생성합니다.

리전 결정 순서:
    1. region_name 인자
    2. 컨텍스트의 리전 오버라이드 (with_region_override)
    3. 기본 리전 (core.config.get_default_region)

Example:
    from core.aws.client import get_client

    ec2 = get_client(ctx, "ec2")
    ec2 = get_client(ctx, "ec2", region_name="eu-west-1", max_attempts=10)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Literal, cast

from core.config import get_default_profile, get_default_region, settings
from core.context import get_profile_from_context, get_region_from_context

if TYPE_CHECKING:
    import boto3

    from core.context import RequestContext

logger = logging.getLogger(__name__)

# Retry mode 타입 (botocore TypedDict와 호환)
RetryMode = Literal["legacy", "standard", "adaptive"]

# IAM 등 글로벌 서비스 API 호출 리전
GLOBAL_API_REGION = "us-east-1"


def resolve_region(ctx: RequestContext, region_name: str | None = None) -> str:
    """요청에 사용할 리전 결정"""
    return region_name or get_region_from_context(ctx) or get_default_region()


def new_session(ctx: RequestContext) -> boto3.Session:
    """컨텍스트의 프로파일 오버라이드를 반영한 boto3 Session 생성

    프로파일 설정이 잘못된 경우 botocore 예외(ProfileNotFound 등)가 그대로 전파됩니다.
    """
    import boto3

    profile = get_profile_from_context(ctx) or get_default_profile()
    return boto3.Session(profile_name=profile, region_name=resolve_region(ctx))


def get_client(
    ctx: RequestContext,
    service_name: str,
    region_name: str | None = None,
    session: boto3.Session | None = None,
    max_attempts: int = settings.API_RETRY_COUNT,
    retry_mode: RetryMode = cast(RetryMode, settings.API_RETRY_MODE),
    connect_timeout: int = settings.API_CONNECT_TIMEOUT,
    read_timeout: int = settings.API_TIMEOUT,
    max_pool_connections: int = settings.MAX_POOL_CONNECTIONS,
    **kwargs: Any,
) -> Any:
    """Retry가 적용된 boto3 client 생성

    Args:
        ctx: 요청 컨텍스트
        service_name: AWS 서비스 이름 (ec2, s3, iam 등)
        region_name: 리전 (None이면 컨텍스트 오버라이드 또는 기본 리전)
        session: 사용할 boto3 Session (None이면 new_session(ctx))
        max_attempts: 최대 시도 횟수
        retry_mode: 재시도 모드
        connect_timeout: 연결 타임아웃 (초)
        read_timeout: 읽기 타임아웃 (초)
        max_pool_connections: HTTP 연결 풀 크기
        **kwargs: session.client()에 전달할 추가 인자

    Returns:
        boto3 client
    """
    from botocore.config import Config

    config = Config(
        retries={"max_attempts": max_attempts, "mode": retry_mode},  # pyright: ignore[reportArgumentType]
        connect_timeout=connect_timeout,
        read_timeout=read_timeout,
        max_pool_connections=max_pool_connections,
    )

    # 기존 config가 있으면 병합
    if "config" in kwargs:
        existing = kwargs.pop("config")
        config = config.merge(existing)

    if session is None:
        session = new_session(ctx)

    region = resolve_region(ctx, region_name)
    logger.debug(f"boto3 client 생성: {service_name} ({region})")

    # session.client은 문자열 서비스명을 받지만 boto3-stubs는 Literal 타입 요구
    return session.client(  # pyright: ignore[reportCallIssue]
        cast(Any, service_name),
        region_name=region,
        config=config,
        **kwargs,
    )
