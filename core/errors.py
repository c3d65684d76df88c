"""
core/errors.py - AWS API 에러 분류

제각각인 AWS 에러 코드를 소수의 대응 가능한 종류(ErrorKind)로 정규화합니다.

분류 순서:
    1. 구조화된 에러 코드 추출 (botocore ClientError 또는 error_code 속성)
       - __cause__ 체인을 따라 래핑된 원본 에러까지 확인
    2. 코드가 있으면 카테고리별 코드 집합과 비교
    3. 코드가 없거나 어떤 집합과도 일치하지 않으면 에러 메시지에서 문자열 검색
    4. 여러 카테고리가 일치하면 NotFound → Auth → Throttling → InUse → Validation 순서

주요 구성 요소:
- ErrorKind: 에러 종류 (Unknown, Auth, Throttling, NotFound, InUse, Validation)
- classify: 예외를 ErrorKind로 분류
- is_not_found / is_access_denied / is_throttling / is_resource_in_use / is_validation_error
- get_error_code / get_error_message: 에러 코드/메시지 추출
- wrap / wrapf: 작업 레이블을 붙이고 로그를 남긴 OperationError 반환
- is_caused_by: 래핑 이후에도 동일한 원본 에러인지 확인
- format_error_for_user: 종류별 사용자 메시지

Example:
    from core.errors import ErrorKind, classify, wrap

    try:
        dao.delete(ctx, resource_id)
    except Exception as e:
        err = wrap(e, "delete ec2/instances", id=resource_id)
        if classify(err) == ErrorKind.NOT_FOUND:
            pass  # 멱등 삭제
        else:
            raise err from e
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from enum import Enum
from typing import Any

from botocore.exceptions import ClientError

from core.exceptions import OperationError

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """에러 종류

    값은 상위 표시 계층에서 그대로 쓰는 표시 레이블입니다.
    """

    UNKNOWN = "Unknown"
    AUTH = "Auth"
    THROTTLING = "Throttling"
    NOT_FOUND = "NotFound"
    IN_USE = "InUse"
    VALIDATION = "Validation"

    def __str__(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return self.value

    @property
    def retryable(self) -> bool:
        """재시도 후보 여부 (재시도 정책은 호출자가 결정)"""
        return self is ErrorKind.THROTTLING


# =============================================================================
# 카테고리별 에러 코드
# =============================================================================

NOT_FOUND_CODES: tuple[str, ...] = (
    "NotFound",
    "ResourceNotFoundException",
    "NoSuchEntity",
    "404",
    "NoSuchBucket",
    "NoSuchKey",
    "NotFoundException",
    "ResourceNotFoundFault",
)

ACCESS_DENIED_CODES: tuple[str, ...] = (
    "AccessDenied",
    "UnauthorizedAccess",
    "Forbidden",
    "403",
    "AccessDeniedException",
    "AuthorizationError",
    "UnauthorizedException",
)

THROTTLING_CODES: tuple[str, ...] = (
    "Throttling",
    "TooManyRequestsException",
    "RequestLimitExceeded",
    "429",
    "ThrottlingException",
    "ProvisionedThroughputExceededException",
    "SlowDown",
)

IN_USE_CODES: tuple[str, ...] = (
    "ResourceInUseException",
    "DependencyViolation",
    "ResourceInUse",
    "DeleteConflict",
    "HasAttachedResources",
)

VALIDATION_CODES: tuple[str, ...] = (
    "ValidationError",
    "InvalidParameterException",
    "InvalidParameterValue",
    "MalformedInput",
    "InvalidInput",
)

# 분류 우선순위
_PRECEDENCE: tuple[tuple[ErrorKind, tuple[str, ...]], ...] = (
    (ErrorKind.NOT_FOUND, NOT_FOUND_CODES),
    (ErrorKind.AUTH, ACCESS_DENIED_CODES),
    (ErrorKind.THROTTLING, THROTTLING_CODES),
    (ErrorKind.IN_USE, IN_USE_CODES),
    (ErrorKind.VALIDATION, VALIDATION_CODES),
)


# =============================================================================
# 코드 추출
# =============================================================================


def _iter_chain(error: BaseException) -> Iterator[BaseException]:
    """에러와 __cause__ 체인을 순서대로 순회 (순환 방지)"""
    seen: set[int] = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__


def _structured_code(error: BaseException) -> str:
    """단일 에러 객체에서 구조화된 코드 추출"""
    if isinstance(error, ClientError):
        code = error.response.get("Error", {}).get("Code")
        if code:
            return str(code)

    code = getattr(error, "error_code", None)
    if isinstance(code, str) and code:
        return code

    return ""


def get_error_code(error: BaseException | None) -> str:
    """AWS 에러 코드 추출

    래핑된 에러도 __cause__ 체인을 따라 원본 코드를 찾습니다.

    Args:
        error: 예외 (None 가능)

    Returns:
        에러 코드 문자열. 구조화된 코드가 없으면 빈 문자열.
    """
    if error is None:
        return ""
    for err in _iter_chain(error):
        code = _structured_code(err)
        if code:
            return code
    return ""


def get_error_message(error: BaseException | None) -> str:
    """AWS 에러 메시지 추출

    ClientError이면 response의 Message를, 아니면 str(error)를 반환합니다.
    """
    if error is None:
        return ""
    for err in _iter_chain(error):
        if isinstance(err, ClientError):
            message = err.response.get("Error", {}).get("Message")
            if message:
                return str(message)
    return str(error)


def _known_code(code: str) -> bool:
    return any(code in codes for _, codes in _PRECEDENCE)


def _has_error_code(error: BaseException | None, codes: tuple[str, ...]) -> bool:
    """classify와 같은 규칙: 알려진 코드가 있으면 코드만으로 판별"""
    if error is None:
        return False

    code = get_error_code(error)
    if code and _known_code(code):
        return code in codes

    text = str(error)
    return any(c in text for c in codes)


# =============================================================================
# 카테고리 판별
# =============================================================================


def is_not_found(error: BaseException | None) -> bool:
    """리소스를 찾을 수 없는 오류인지 확인"""
    return _has_error_code(error, NOT_FOUND_CODES)


def is_access_denied(error: BaseException | None) -> bool:
    """액세스 거부 오류인지 확인"""
    return _has_error_code(error, ACCESS_DENIED_CODES)


def is_throttling(error: BaseException | None) -> bool:
    """스로틀링 오류인지 확인"""
    return _has_error_code(error, THROTTLING_CODES)


def is_resource_in_use(error: BaseException | None) -> bool:
    """리소스가 사용 중(의존성 존재)인 오류인지 확인"""
    return _has_error_code(error, IN_USE_CODES)


def is_validation_error(error: BaseException | None) -> bool:
    """입력 검증 오류인지 확인"""
    return _has_error_code(error, VALIDATION_CODES)


def classify(error: BaseException | None) -> ErrorKind:
    """예외를 ErrorKind로 분류

    구조화된 코드가 어떤 카테고리와 일치하면 그 결과를 우선 사용하고,
    그렇지 않을 때만 메시지 문자열 검색으로 분류합니다.

    Args:
        error: 분류할 예외 (None이면 UNKNOWN)

    Returns:
        에러 종류
    """
    if error is None:
        return ErrorKind.UNKNOWN

    code = get_error_code(error)
    if code:
        for kind, codes in _PRECEDENCE:
            if code in codes:
                return kind

    text = str(error)
    for kind, codes in _PRECEDENCE:
        if any(c in text for c in codes):
            return kind

    return ErrorKind.UNKNOWN


# =============================================================================
# 래핑
# =============================================================================


def wrap(error: BaseException | None, operation: str, **attrs: Any) -> OperationError | None:
    """작업 레이블을 붙여 에러 래핑

    원본 에러는 cause/__cause__로 보존되어 is_caused_by()로 확인할 수 있습니다.
    None을 래핑하면 None을 반환합니다.

    Args:
        error: 원본 예외
        operation: 작업 레이블 (예: "list ec2/instances")
        **attrs: 로그에 함께 남길 속성

    Returns:
        OperationError (str() == f"{operation}: {error}") 또는 None
    """
    if error is None:
        return None

    extra = " ".join(f"{k}={v}" for k, v in attrs.items())
    kind = classify(error)
    if extra:
        logger.warning(f"{operation} [{kind}] {extra}: {error}")
    else:
        logger.warning(f"{operation} [{kind}]: {error}")

    details = dict(attrs)
    details["kind"] = kind.value
    return OperationError(operation, cause=error, details=details)


def wrapf(error: BaseException | None, fmt: str, *args: Any) -> OperationError | None:
    """포맷 문자열로 작업 레이블을 만들어 래핑"""
    if error is None:
        return None
    return wrap(error, fmt % args if args else fmt)


def is_caused_by(error: BaseException | None, target: BaseException) -> bool:
    """error 또는 그 __cause__ 체인에 target이 있는지 확인 (동일 객체 기준)"""
    if error is None:
        return False
    return any(err is target for err in _iter_chain(error))


# =============================================================================
# 사용자 메시지
# =============================================================================

_KIND_MESSAGES = {
    ErrorKind.AUTH: "권한이 없습니다. IAM 정책을 확인하세요.",
    ErrorKind.THROTTLING: "요청이 너무 많습니다. 잠시 후 다시 시도하세요.",
    ErrorKind.NOT_FOUND: "리소스를 찾을 수 없습니다.",
    ErrorKind.IN_USE: "다른 리소스가 사용 중입니다. 연결된 리소스를 먼저 정리하세요.",
}


def format_error_for_user(error: BaseException) -> str:
    """사용자에게 표시할 에러 메시지 포맷팅

    Validation과 Unknown은 AWS가 돌려준 메시지를 그대로 보여줍니다.

    Args:
        error: 예외

    Returns:
        "[Kind] 메시지" 형태의 문자열
    """
    kind = classify(error)
    message = _KIND_MESSAGES.get(kind)
    if message is None:
        message = get_error_message(error)
    return f"[{kind}] {message}"
