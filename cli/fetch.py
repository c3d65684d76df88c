"""
cli/fetch.py - 멀티 리전 리소스 조회

리전마다 with_region_override로 파생 컨텍스트를 만들고 DAO를 새로 생성해
ThreadPoolExecutor로 병렬 조회합니다. 리전별 실패는 분류만 하고
다른 리전의 결과에는 영향을 주지 않습니다.

Example:
    results = fetch_regions(ctx, registry, "ec2", "instances", ["us-east-1", "eu-west-1"])
    for result in results:
        if result.error is not None:
            print(result.region, result.kind)
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from core.config import settings
from core.context import with_region_override
from core.dao import Resource, iter_pages, list_page_or_all
from core.errors import ErrorKind, classify

if TYPE_CHECKING:
    from core.context import RequestContext
    from core.registry import Registry

logger = logging.getLogger(__name__)


@dataclass
class RegionResult:
    """리전별 조회 결과

    Attributes:
        region: 대상 리전 (오버라이드 없이 조회했으면 빈 문자열)
        resources: 조회된 리소스
        next_token: 다음 페이지 토큰 (마지막 페이지면 빈 문자열)
        error: 실패 시 예외
    """

    region: str
    resources: list[Resource] = field(default_factory=list)
    next_token: str = ""
    error: BaseException | None = None

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> ErrorKind:
        return classify(self.error)


def fetch_region(
    ctx: RequestContext,
    registry: Registry,
    service: str,
    resource_type: str,
    region: str = "",
    page_size: int | None = None,
    page_token: str = "",
    all_pages: bool = False,
) -> RegionResult:
    """단일 리전 조회

    page_size가 없으면 list()로 전체를 조회합니다.
    page_size가 있으면 한 페이지만, all_pages이면 토큰이 빌 때까지 순회합니다.
    """
    region_ctx = with_region_override(ctx, region) if region else ctx
    try:
        dao = registry.get_dao(region_ctx, service, resource_type)
        if page_size is None:
            return RegionResult(region=region, resources=dao.list(region_ctx))
        if all_pages:
            resources: list[Resource] = []
            for page in iter_pages(dao, region_ctx, page_size, page_token):
                resources.extend(page)
            return RegionResult(region=region, resources=resources)
        resources, next_token = list_page_or_all(dao, region_ctx, page_size, page_token)
        return RegionResult(region=region, resources=resources, next_token=next_token)
    except Exception as e:
        logger.debug(f"리전 조회 실패 [{region or 'default'}] {service}/{resource_type}: {e}")
        return RegionResult(region=region, error=e)


def fetch_regions(
    ctx: RequestContext,
    registry: Registry,
    service: str,
    resource_type: str,
    regions: list[str],
    page_size: int | None = None,
    page_token: str = "",
    all_pages: bool = False,
    max_workers: int = settings.MULTI_REGION_MAX_WORKERS,
    timeout: float = settings.MULTI_REGION_TIMEOUT,
) -> list[RegionResult]:
    """여러 리전 병렬 조회

    Args:
        ctx: 요청 컨텍스트
        registry: 리소스 레지스트리
        service: 서비스 이름
        resource_type: 리소스 타입
        regions: 대상 리전 목록 (비어 있으면 오버라이드 없이 한 번 조회)
        page_size: 페이지 크기 (None이면 전체 조회)
        page_token: 시작 페이지 토큰 (리전별 토큰이므로 단일 리전에서만 의미 있음)
        all_pages: 모든 페이지 순회 여부
        max_workers: 최대 동시 스레드 수
        timeout: 전체 조회 제한 시간 (초)

    Returns:
        regions 순서를 따르는 리전별 결과
    """
    if not regions:
        return [
            fetch_region(
                ctx,
                registry,
                service,
                resource_type,
                page_size=page_size,
                page_token=page_token,
                all_pages=all_pages,
            )
        ]

    regions = list(dict.fromkeys(regions))
    fetch_ctx = ctx.with_timeout(timeout)
    start_time = time.monotonic()
    logger.info(f"멀티 리전 조회 시작: {service}/{resource_type}, {len(regions)}개 리전")

    results: dict[str, RegionResult] = {}
    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(regions)))) as executor:
        futures = {
            executor.submit(
                fetch_region,
                fetch_ctx,
                registry,
                service,
                resource_type,
                region,
                page_size,
                page_token,
                all_pages,
            ): region
            for region in regions
        }
        for future in as_completed(futures):
            region = futures[future]
            try:
                results[region] = future.result()
            except Exception as e:
                # fetch_region은 예외를 결과로 돌려주므로 executor 자체 오류만 해당
                logger.error(f"리전 조회 중 예외 [{region}]: {e}")
                results[region] = RegionResult(region=region, error=e)

    ordered = [results[region] for region in regions]
    failed = sum(1 for r in ordered if not r.success)
    elapsed = (time.monotonic() - start_time) * 1000
    logger.info(f"멀티 리전 조회 완료: 성공 {len(ordered) - failed}, 실패 {failed}, 총 {elapsed:.0f}ms")
    return ordered
