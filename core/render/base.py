"""
core/render/base.py - 렌더러 규약

리소스를 표 형식 컬럼, 상세 텍스트, 요약 필드로 변환하는 상태 없는 렌더러입니다.
실제 터미널 출력은 호출 계층(cli)이 담당합니다.

컬럼 getter는 항상 래핑이 풀린 원본 리소스를 받으므로
리전 래핑 여부와 관계없이 구체 타입 확인(isinstance)이 동작합니다.

Example:
    class BucketRenderer(BaseRenderer):
        def __init__(self):
            super().__init__(
                "s3",
                "buckets",
                [
                    Column("NAME", 40, lambda r: r.name),
                    Column("REGION", 15, lambda r: r.location if isinstance(r, BucketResource) else ""),
                ],
            )
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from core.dao import ExtraFields, Resource, get_resource_region, unwrap_resource


@dataclass(frozen=True)
class Column:
    """표 컬럼 정의

    Attributes:
        name: 헤더 이름
        width: 권장 너비
        getter: 리소스 → 셀 문자열
        priority: 좁은 화면에서 낮은 값부터 유지
    """

    name: str
    width: int
    getter: Callable[[Resource], str]
    priority: int = 0


@dataclass(frozen=True)
class SummaryField:
    """요약 필드 (라벨, 값)"""

    label: str
    value: str


class Renderer(ABC):
    """렌더러 인터페이스"""

    @property
    @abstractmethod
    def service(self) -> str: ...

    @property
    @abstractmethod
    def resource(self) -> str: ...

    @abstractmethod
    def columns(self) -> list[Column]: ...

    @abstractmethod
    def row(self, resource: Resource) -> list[str]: ...

    @abstractmethod
    def render_detail(self, resource: Resource) -> str: ...

    @abstractmethod
    def render_summary(self, resource: Resource) -> list[SummaryField]: ...


def truncate(value: str, width: int) -> str:
    """너비를 넘으면 "..."로 자름"""
    if width <= 3 or len(value) <= width:
        return value
    return value[: width - 3] + "..."


class BaseRenderer(Renderer):
    """렌더러 기본 구현"""

    def __init__(self, service: str, resource: str, cols: list[Column]):
        self._service = service
        self._resource = resource
        self._cols = list(cols)

    @property
    def service(self) -> str:
        return self._service

    @property
    def resource(self) -> str:
        return self._resource

    def columns(self) -> list[Column]:
        return list(self._cols)

    def row(self, resource: Resource) -> list[str]:
        inner = unwrap_resource(resource)
        return [col.getter(inner) or "" for col in self._cols]

    def render_detail(self, resource: Resource) -> str:
        lines = [f"{f.label}: {f.value}" for f in self.render_summary(resource)]

        inner = unwrap_resource(resource)
        if isinstance(inner, ExtraFields):
            for key, value in inner.extra_fields().items():
                lines.append(f"{key}: {value}")

        if inner.tags:
            lines.append("Tags:")
            for key in sorted(inner.tags):
                lines.append(f"  {key} = {inner.tags[key]}")
        return "\n".join(lines)

    def render_summary(self, resource: Resource) -> list[SummaryField]:
        inner = unwrap_resource(resource)
        fields = [
            SummaryField("ID", inner.id),
            SummaryField("Name", inner.name),
        ]
        if inner.arn:
            fields.append(SummaryField("ARN", inner.arn))
        region = get_resource_region(resource)
        if region:
            fields.append(SummaryField("Region", region))
        return fields
