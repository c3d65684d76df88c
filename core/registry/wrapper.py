"""
core/registry/wrapper.py - 리전 투명 DAO 데코레이터

리소스 모듈이 리전을 몰라도 다른 리전을 조회할 수 있게 DAO를 감쌉니다.

동작:
    - 컨텍스트에 리전 오버라이드가 없으면(빈 문자열 포함) 원본 DAO를 그대로 반환
    - 있으면 List/Get 결과를 RegionalResource로 래핑 ("region:id")
    - Get/Delete의 ID는 "<데코레이터 리전>:" 접두사와 정확히 일치할 때만 제거
      (다른 리전 접두사, 접두사 없는 ID, 콜론이 포함된 ARN은 그대로 전달)
    - 페이지 토큰은 리전 로직과 무관하게 그대로 전달

Example:
    ctx = with_region_override(background(), "us-west-2")
    dao = new_regional_wrapper(ctx, InstanceDAO(ctx))

    dao.get(ctx, "us-west-2:i-123")   # delegate.get(ctx, "i-123")
    dao.get(ctx, "eu-west-1:i-123")   # delegate.get(ctx, "eu-west-1:i-123")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.context import get_region_from_context
from core.dao import DAO, Operation, PaginatedDAO, Resource, wrap_with_region

if TYPE_CHECKING:
    from core.context import RequestContext


def strip_region_prefix(resource_id: str, region: str) -> str:
    """ID가 "region:"으로 시작하면 접두사 제거 ("region:id" → "id")

    접두사 비교는 문자열 맨 앞에서 정확히 일치하는 경우만 해당합니다.
    """
    if not region:
        return resource_id
    prefix = region + ":"
    if resource_id.startswith(prefix):
        return resource_id[len(prefix) :]
    return resource_id


class RegionalDAOWrapper(DAO):
    """리전 오버라이드를 적용하는 DAO 데코레이터

    Attributes:
        delegate: 원본 DAO
        ctx: 생성 시점의 요청 컨텍스트
        region: 대상 리전 (항상 비어있지 않음)
    """

    def __init__(self, ctx: RequestContext, delegate: DAO, region: str):
        self.delegate = delegate
        self.ctx = ctx
        self.region = region

    @property
    def service_name(self) -> str:
        return self.delegate.service_name

    @property
    def resource_type(self) -> str:
        return self.delegate.resource_type

    def supports(self, op: Operation) -> bool:
        return self.delegate.supports(op)

    def _wrap_all(self, resources: list[Resource]) -> list[Resource]:
        return [wrap_with_region(res, self.region) for res in resources]

    def list(self, ctx: RequestContext) -> list[Resource]:
        return self._wrap_all(self.delegate.list(ctx))

    def get(self, ctx: RequestContext, resource_id: str) -> Resource | None:
        res = self.delegate.get(ctx, strip_region_prefix(resource_id, self.region))
        if res is None:
            return None
        return wrap_with_region(res, self.region)

    def delete(self, ctx: RequestContext, resource_id: str) -> None:
        self.delegate.delete(ctx, strip_region_prefix(resource_id, self.region))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.delegate!r}, region={self.region!r})"


class PaginatedDAOWrapper(RegionalDAOWrapper, PaginatedDAO):
    """페이지네이션 capability를 유지하는 리전 데코레이터"""

    delegate: PaginatedDAO

    def __init__(self, ctx: RequestContext, delegate: PaginatedDAO, region: str):
        super().__init__(ctx, delegate, region)

    def list_page(
        self,
        ctx: RequestContext,
        page_size: int,
        page_token: str = "",
    ) -> tuple[list[Resource], str]:
        resources, next_token = self.delegate.list_page(ctx, page_size, page_token)
        return self._wrap_all(resources), next_token


def new_regional_wrapper(ctx: RequestContext, delegate: DAO) -> DAO:
    """컨텍스트의 리전 오버라이드에 따라 DAO 래핑

    오버라이드가 없으면 delegate 객체를 그대로 반환합니다.
    delegate가 PaginatedDAO이면 페이지네이션을 유지하는 래퍼를 사용합니다.
    """
    region = get_region_from_context(ctx)
    if not region:
        return delegate
    if isinstance(delegate, PaginatedDAO):
        return PaginatedDAOWrapper(ctx, delegate, region)
    return RegionalDAOWrapper(ctx, delegate, region)


def new_paginated_wrapper(ctx: RequestContext, delegate: PaginatedDAO) -> PaginatedDAO:
    """PaginatedDAO 전용 래핑 (오버라이드가 없으면 delegate 그대로 반환)"""
    region = get_region_from_context(ctx)
    if not region:
        return delegate
    return PaginatedDAOWrapper(ctx, delegate, region)
