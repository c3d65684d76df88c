"""
core/dao/regional.py - 리전 메타데이터가 붙은 리소스

멀티 리전 조회 시 리소스에 리전을 붙여 ID를 "region:id" 형태로 구분합니다.

래핑은 항상 한 단계만 유지됩니다. 이미 래핑된 리소스를 다시 래핑하면
중첩하지 않고 리전만 교체한 새 값을 반환합니다.

Example:
    wrapped = wrap_with_region(resource, "eu-west-1")
    wrapped.id                 # "eu-west-1:i-123"
    wrapped.region             # "eu-west-1"
    unwrap_resource(wrapped)   # resource (원본 구체 타입)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from core.dao.types import Resource


@dataclass(frozen=True)
class RegionalResource:
    """리전이 붙은 리소스

    id를 제외한 모든 속성은 원본 리소스에 위임합니다.

    Attributes:
        resource: 원본 리소스
        region: 리전 코드
    """

    resource: Resource
    region: str

    @property
    def id(self) -> str:
        return f"{self.region}:{self.resource.id}"

    @property
    def name(self) -> str:
        return self.resource.name

    @property
    def arn(self) -> str:
        return self.resource.arn

    @property
    def tags(self) -> Mapping[str, str]:
        return self.resource.tags

    @property
    def raw(self) -> Any:
        return self.resource.raw

    def unwrap(self) -> Resource:
        return self.resource


def wrap_with_region(resource: Resource, region: str) -> RegionalResource:
    """리소스에 리전 메타데이터 부착

    이미 RegionalResource이면 원본을 꺼내 리전만 교체합니다.
    """
    if isinstance(resource, RegionalResource):
        return RegionalResource(resource=resource.resource, region=region)
    return RegionalResource(resource=resource, region=region)


def unwrap_resource(resource: Resource) -> Resource:
    """원본 리소스 반환 (래핑되지 않았으면 그대로 반환)"""
    if isinstance(resource, RegionalResource):
        return resource.resource
    return resource


def get_resource_region(resource: Resource) -> str:
    """리소스의 리전 반환 (래핑되지 않았으면 빈 문자열)"""
    if isinstance(resource, RegionalResource):
        return resource.region
    return ""
