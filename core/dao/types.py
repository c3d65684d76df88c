"""
core/dao/types.py - 리소스 타입 정의

모든 리소스 모듈이 공유하는 리소스 값 타입을 정의합니다.

주요 구성 요소:
- Operation: DAO 작업 종류
- Resource: 리소스 Protocol (id, name, arn, tags, raw)
- BaseResource: 기본 리소스 구현 (불변)
- ExtraFields: 리소스별 추가 필드 capability (선택)

리소스 타입별 필드는 BaseResource를 상속한 dataclass에 프로퍼티로 추가하고,
렌더러는 isinstance로 구체 타입을 확인해 꺼내 씁니다.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Protocol, runtime_checkable


class Operation(str, Enum):
    """DAO 작업 종류"""

    LIST = "list"
    GET = "get"
    CREATE = "create"
    DELETE = "delete"
    UPDATE = "update"


@runtime_checkable
class Resource(Protocol):
    """AWS 리소스 인터페이스

    id는 DAO의 현재 리전 범위 안에서 리소스를 유일하게 식별합니다.
    """

    @property
    def id(self) -> str: ...

    @property
    def name(self) -> str: ...

    @property
    def arn(self) -> str: ...

    @property
    def tags(self) -> Mapping[str, str]: ...

    @property
    def raw(self) -> Any: ...


@runtime_checkable
class ExtraFields(Protocol):
    """리소스 타입별 추가 필드 capability

    구현한 리소스는 상세 보기에서 extra_fields()의 항목이 함께 표시됩니다.
    """

    def extra_fields(self) -> dict[str, str]: ...


@dataclass(frozen=True)
class BaseResource:
    """기본 리소스 구현

    Attributes:
        id: 리소스 ID (현재 리전 범위 내 유일)
        name: 표시 이름
        arn: ARN (없으면 빈 문자열)
        tags: 태그 (Key → Value, 읽기 전용)
        data: 원본 API 응답 (리소스 모듈 전용)
    """

    id: str
    name: str = ""
    arn: str = ""
    tags: Mapping[str, str] = field(default_factory=dict, hash=False)
    data: Any = field(default=None, repr=False, compare=False, hash=False)

    def __post_init__(self) -> None:
        # 생성 시 받은 dict와 분리된 읽기 전용 사본
        object.__setattr__(self, "tags", MappingProxyType(dict(self.tags)))

    @property
    def raw(self) -> Any:
        return self.data


def tags_from_list(tag_list: list[dict[str, Any]] | None, key: str = "Key", value: str = "Value") -> dict[str, str]:
    """AWS 태그 리스트([{"Key": ..., "Value": ...}])를 딕셔너리로 변환"""
    if not tag_list:
        return {}
    return {t[key]: t.get(value, "") for t in tag_list if key in t}
