"""
core/context.py - 요청 컨텍스트

모든 List/Get/Delete 호출에 전달되는 요청 단위 컨텍스트입니다.
취소 신호, 데드라인, 키/값(리전 오버라이드, 프로파일, 필터)을 함께 전달합니다.

주요 구성 요소:
- RequestContext: 불변 요청 컨텍스트 (파생 시 새 값 반환)
- background: 루트 컨텍스트 생성
- with_region_override / get_region_from_context: 리전 오버라이드
- with_profile_override / get_profile_from_context: 프로파일 오버라이드
- with_filter / get_filter_from_context: DAO 필터 값

Example:
    from core.context import background, with_region_override

    ctx, cancel = background().with_cancel()
    regional_ctx = with_region_override(ctx, "eu-west-1")

    dao = registry.get_dao(regional_ctx, "ec2", "instances")
    resources = dao.list(regional_ctx)

    cancel()  # regional_ctx도 함께 취소됨
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from core.exceptions import ContextCancelledError, DeadlineExceededError


class _CancelToken:
    """취소 토큰

    부모 토큰이 취소되면 자식 토큰도 취소된 것으로 간주합니다.
    """

    def __init__(self, parent: _CancelToken | None = None):
        self._event = threading.Event()
        self._parent = parent

    def cancel(self) -> None:
        self._event.set()

    def is_set(self) -> bool:
        token: _CancelToken | None = self
        while token is not None:
            if token._event.is_set():
                return True
            token = token._parent
        return False


@dataclass(frozen=True, eq=False)
class RequestContext:
    """불변 요청 컨텍스트

    with_* 메서드는 항상 새 컨텍스트를 반환하며,
    취소 토큰은 파생된 컨텍스트 사이에서 공유됩니다.

    Attributes:
        values: 컨텍스트 값 (읽기 전용)
        deadline: 절대 데드라인 (time.monotonic 기준, None이면 없음)
    """

    values: Mapping[Any, Any] = field(default_factory=lambda: MappingProxyType({}))
    deadline: float | None = None
    _token: _CancelToken = field(default_factory=_CancelToken, repr=False)

    # -------------------------------------------------------------------------
    # 값
    # -------------------------------------------------------------------------

    def with_value(self, key: Any, value: Any) -> RequestContext:
        """키/값이 추가된 새 컨텍스트 반환"""
        values = dict(self.values)
        values[key] = value
        return RequestContext(
            values=MappingProxyType(values),
            deadline=self.deadline,
            _token=self._token,
        )

    def value(self, key: Any, default: Any = None) -> Any:
        return self.values.get(key, default)

    # -------------------------------------------------------------------------
    # 취소 / 데드라인
    # -------------------------------------------------------------------------

    def with_cancel(self) -> tuple[RequestContext, Callable[[], None]]:
        """독립적으로 취소 가능한 자식 컨텍스트와 cancel 함수 반환

        부모가 취소되면 자식도 취소되지만, 자식 취소는 부모에 영향을 주지 않습니다.
        """
        child = RequestContext(
            values=self.values,
            deadline=self.deadline,
            _token=_CancelToken(parent=self._token),
        )
        return child, child.cancel

    def with_timeout(self, seconds: float) -> RequestContext:
        """데드라인이 설정된 새 컨텍스트 반환 (기존 데드라인보다 늦어지지 않음)"""
        deadline = time.monotonic() + seconds
        if self.deadline is not None:
            deadline = min(deadline, self.deadline)
        return RequestContext(values=self.values, deadline=deadline, _token=self._token)

    def cancel(self) -> None:
        self._token.cancel()

    def is_cancelled(self) -> bool:
        return self._token.is_set()

    def remaining(self) -> float | None:
        """데드라인까지 남은 시간 (초). 데드라인이 없으면 None"""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def raise_if_cancelled(self) -> None:
        """취소되었거나 데드라인이 지났으면 예외 발생

        Raises:
            ContextCancelledError: 취소된 경우
            DeadlineExceededError: 데드라인이 지난 경우
        """
        if self._token.is_set():
            raise ContextCancelledError()
        if self.deadline is not None and time.monotonic() >= self.deadline:
            raise DeadlineExceededError()


def background() -> RequestContext:
    """루트 컨텍스트 생성"""
    return RequestContext()


# =============================================================================
# 컨텍스트 키
# =============================================================================


class _RegionOverrideKey:
    pass


class _ProfileOverrideKey:
    pass


_REGION_OVERRIDE_KEY = _RegionOverrideKey()
_PROFILE_OVERRIDE_KEY = _ProfileOverrideKey()
_FILTER_PREFIX = "dao_filter_"


def with_region_override(ctx: RequestContext, region: str) -> RequestContext:
    """리전 오버라이드가 설정된 컨텍스트 반환

    빈 문자열은 오버라이드 없음(기본 리전)과 같습니다.
    """
    return ctx.with_value(_REGION_OVERRIDE_KEY, region)


def get_region_from_context(ctx: RequestContext) -> str:
    """리전 오버라이드 조회 (없으면 빈 문자열)"""
    region = ctx.value(_REGION_OVERRIDE_KEY)
    if isinstance(region, str):
        return region
    return ""


def with_profile_override(ctx: RequestContext, profile: str) -> RequestContext:
    return ctx.with_value(_PROFILE_OVERRIDE_KEY, profile)


def get_profile_from_context(ctx: RequestContext) -> str:
    profile = ctx.value(_PROFILE_OVERRIDE_KEY)
    if isinstance(profile, str):
        return profile
    return ""


def with_filter(ctx: RequestContext, key: str, value: str) -> RequestContext:
    """DAO 필터 값 추가 (예: VpcId=vpc-123)"""
    return ctx.with_value(_FILTER_PREFIX + key, value)


def get_filter_from_context(ctx: RequestContext, key: str) -> str:
    """DAO 필터 값 조회 (없으면 빈 문자열)"""
    value = ctx.value(_FILTER_PREFIX + key)
    if isinstance(value, str):
        return value
    return ""
