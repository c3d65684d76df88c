"""
core/exceptions.py - 통합 예외 계층 구조

리소스 브라우저 전체에서 사용되는 예외 클래스들을 정의합니다.
일관된 예외 처리와 에러 메시지를 제공합니다.

예외 계층 구조:
    BrowserError (베이스)
    ├── OperationError (작업 레이블이 붙은 래핑 에러) - core.errors.wrap()이 생성
    ├── RegistryError (레지스트리 관련)
    │   ├── DuplicateRegistrationError
    │   ├── RegistryFrozenError
    │   └── ResourceTypeNotRegisteredError
    ├── UnsupportedOperationError (DAO가 지원하지 않는 작업)
    ├── ContextError (요청 컨텍스트)
    │   ├── ContextCancelledError
    │   └── DeadlineExceededError
    └── ConfigError (설정 관련)

Usage:
    from core.exceptions import DuplicateRegistrationError

    try:
        registry.register_custom("ec2", "instances", entry)
    except DuplicateRegistrationError as e:
        print(e.descriptor)
"""

from __future__ import annotations

from typing import Any

# =============================================================================
# 베이스 예외
# =============================================================================


class BrowserError(Exception):
    """리소스 브라우저 기본 예외 클래스

    모든 커스텀 예외의 베이스 클래스입니다.

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용, __cause__에도 설정됨)
        details: 추가 상세 정보
    """

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """예외 정보를 딕셔너리로 반환"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
        }


class OperationError(BrowserError):
    """작업 레이블이 붙은 에러

    원본 에러를 cause로 보존하므로 래핑 이후에도
    is_caused_by()로 동일한 원본 에러인지 확인할 수 있습니다.
    """

    def __init__(
        self,
        operation: str,
        cause: BaseException,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(operation, cause=cause, details=details)
        self.operation = operation


# =============================================================================
# 레지스트리 관련 예외
# =============================================================================


class RegistryError(BrowserError):
    """레지스트리 관련 예외"""


class DuplicateRegistrationError(RegistryError):
    """동일한 (service, resource_type) 중복 등록

    시작 시점의 배선(wiring) 결함이므로 즉시 실패 처리합니다.
    """

    def __init__(self, service: str, resource_type: str):
        message = f"중복 등록 [{service}/{resource_type}]: 이미 등록된 리소스 타입입니다"
        super().__init__(message)
        self.service = service
        self.resource_type = resource_type
        self.details.update({"service": service, "resource_type": resource_type})

    @property
    def descriptor(self) -> tuple[str, str]:
        return (self.service, self.resource_type)


class RegistryFrozenError(RegistryError):
    """시작 단계 종료(freeze) 이후 등록 시도"""

    def __init__(self, service: str, resource_type: str):
        message = f"등록 불가 [{service}/{resource_type}]: 레지스트리가 이미 고정되었습니다"
        super().__init__(message)
        self.service = service
        self.resource_type = resource_type


class ResourceTypeNotRegisteredError(RegistryError):
    """등록되지 않은 리소스 타입 조회"""

    def __init__(self, service: str, resource_type: str):
        message = f"등록되지 않은 리소스 타입 [{service}/{resource_type}]"
        super().__init__(message)
        self.service = service
        self.resource_type = resource_type
        self.details.update({"service": service, "resource_type": resource_type})


# =============================================================================
# DAO 관련 예외
# =============================================================================


class UnsupportedOperationError(BrowserError):
    """DAO가 지원하지 않는 작업 호출"""

    def __init__(self, service: str, resource_type: str, operation: str):
        message = f"지원하지 않는 작업 [{service}/{resource_type}]: {operation}"
        super().__init__(message)
        self.service = service
        self.resource_type = resource_type
        self.operation = operation
        self.details.update(
            {
                "service": service,
                "resource_type": resource_type,
                "operation": operation,
            }
        )


# =============================================================================
# 요청 컨텍스트 관련 예외
# =============================================================================


class ContextError(BrowserError):
    """요청 컨텍스트 관련 예외"""


class ContextCancelledError(ContextError):
    """호출자가 요청을 취소한 경우"""

    def __init__(self) -> None:
        super().__init__("context canceled")


class DeadlineExceededError(ContextError):
    """요청 데드라인 초과"""

    def __init__(self) -> None:
        super().__init__("context deadline exceeded")


# =============================================================================
# 설정 관련 예외
# =============================================================================


class ConfigError(BrowserError):
    """설정 관련 예외"""

    def __init__(
        self,
        key: str,
        message: str,
        cause: BaseException | None = None,
    ):
        full_message = f"설정 오류 [{key}]: {message}"
        super().__init__(full_message, cause)
        self.config_key = key
        self.details["config_key"] = key
