"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 CLI 애플리케이션 진입점입니다.
레지스트리에 등록된 리소스 모듈을 조회/단건 조회/삭제합니다.

명령어 구조:
    aws-browse --version                            # 버전 표시
    aws-browse resources                            # 등록된 리소스 타입 목록
    aws-browse list ec2 instances                   # 기본 리전 조회
    aws-browse list ec2 instances -r us-east-1 -r eu-west-1
    aws-browse list logs log-groups --page-size 50  # 한 페이지 조회
    aws-browse get ec2 instances i-123 -r eu-west-1
    aws-browse delete logs log-groups /app/web --yes

종료 코드:
    0: 성공
    1: 분류된 실패 (권한, 쓰로틀링, 미존재, 사용 중, 검증 실패 등)

Usage:
    $ aws-browse list s3 buckets
    $ python -m cli.app list s3 buckets
"""

from __future__ import annotations

import json
import logging
from typing import Any, NoReturn

import click
from click import Context

from cli.fetch import fetch_regions
from cli.ui import console, print_error, print_info, print_success, print_table, print_warning, resource_table
from core.config import LogConfig, configure_logging, get_page_size, get_regions, get_version
from core.context import RequestContext, background, with_filter, with_profile_override, with_region_override
from core.dao import Operation, Resource, get_resource_region, unwrap_resource
from core.errors import format_error_for_user
from core.exceptions import ConfigError, RegistryError
from core.registry import Registry, get_registry

logger = logging.getLogger(__name__)

VERSION = get_version()

OUTPUT_FORMATS = ["table", "json"]


# =============================================================================
# 헬퍼
# =============================================================================


def _fail(error: BaseException) -> NoReturn:
    """분류된 에러 메시지 출력 후 종료 코드 1로 종료"""
    print_error(format_error_for_user(error))
    raise SystemExit(1)


def _request_context(ctx: Context) -> RequestContext:
    return ctx.obj["request_ctx"]


def _registry() -> Registry:
    try:
        return get_registry()
    except RegistryError as e:
        _fail(e)


def _check_registered(registry: Registry, service: str, resource_type: str) -> None:
    if registry.get(service, resource_type) is None:
        available = ", ".join(str(d) for d in registry.descriptors())
        print_error(f"등록되지 않은 리소스 타입: {service}/{resource_type}")
        print_info(f"사용 가능: {available}")
        raise SystemExit(1)


def _parse_filters(values: tuple[str, ...]) -> list[tuple[str, str]]:
    filters = []
    for value in values:
        key, sep, filter_value = value.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"KEY=VALUE 형식이어야 합니다: {value!r}", param_hint="--filter")
        filters.append((key, filter_value))
    return filters


def _resource_to_dict(resource: Resource) -> dict[str, Any]:
    inner = unwrap_resource(resource)
    return {
        "id": resource.id,
        "name": resource.name,
        "arn": resource.arn,
        "region": get_resource_region(resource),
        "tags": dict(inner.tags),
    }


def _echo_json(payload: Any) -> None:
    click.echo(json.dumps(payload, ensure_ascii=False, indent=2, default=str))


# =============================================================================
# CLI 그룹
# =============================================================================


@click.group()
@click.version_option(VERSION, prog_name="aws-browse")
@click.option("-p", "--profile", "profile", default=None, help="AWS 프로파일 (기본: AWS_PROFILE)")
@click.option("-v", "--verbose", is_flag=True, help="DEBUG 로그 출력")
@click.pass_context
def cli(ctx: Context, profile: str | None, verbose: bool) -> None:
    """AWS 리소스 브라우저"""
    # INFO 로그가 명령 출력에 섞이지 않도록 기본 WARNING
    try:
        config = LogConfig.from_env(default_level="WARNING")
    except ConfigError as e:
        _fail(e)
    if verbose:
        config.level = "DEBUG"
    configure_logging(config)

    request_ctx = background()
    if profile:
        request_ctx = with_profile_override(request_ctx, profile)

    ctx.ensure_object(dict)
    ctx.obj["request_ctx"] = request_ctx


@cli.command("resources")
@click.option("-o", "--output", type=click.Choice(OUTPUT_FORMATS), default="table", help="출력 형식")
def resources_command(output: str) -> None:
    """등록된 리소스 타입 목록"""
    from plugins import get_category

    registry = _registry()
    rows = []
    for descriptor in registry.descriptors():
        category = get_category(descriptor.service) or {}
        rows.append([descriptor.service, descriptor.resource_type, category.get("display_name", "")])

    if output == "json":
        _echo_json([{"service": s, "resource_type": r, "display_name": d} for s, r, d in rows])
        return
    print_table("Resources", ["SERVICE", "RESOURCE TYPE", "DISPLAY NAME"], rows)


@cli.command("list")
@click.argument("service")
@click.argument("resource_type")
@click.option("-r", "--region", "regions", multiple=True, help="리전 (다중 가능, 기본: AWS_BROWSER_REGIONS)")
@click.option("--page-size", type=click.IntRange(min=1), default=None, help="페이지 크기")
@click.option("--page-token", default="", help="다음 페이지 토큰 (단일 리전)")
@click.option("--all-pages", is_flag=True, help="모든 페이지 순회 (기본 페이지 크기: AWS_BROWSER_PAGE_SIZE)")
@click.option("-f", "--filter", "filters", multiple=True, help="리소스 필터 KEY=VALUE (다중 가능)")
@click.option("-o", "--output", type=click.Choice(OUTPUT_FORMATS), default="table", help="출력 형식")
@click.pass_context
def list_command(
    ctx: Context,
    service: str,
    resource_type: str,
    regions: tuple[str, ...],
    page_size: int | None,
    page_token: str,
    all_pages: bool,
    filters: tuple[str, ...],
    output: str,
) -> None:
    """리소스 목록 조회"""
    if all_pages and page_size is None:
        try:
            page_size = get_page_size()
        except ConfigError as e:
            _fail(e)

    target_regions = list(regions)
    if not target_regions:
        env_regions = get_regions()
        # 환경변수로 여러 리전을 지정한 경우에만 멀티 리전 조회
        if len(env_regions) > 1:
            target_regions = env_regions
    if page_token and len(target_regions) > 1:
        raise click.UsageError("--page-token은 단일 리전에서만 사용할 수 있습니다")

    request_ctx = _request_context(ctx)
    for key, value in _parse_filters(filters):
        request_ctx = with_filter(request_ctx, key, value)

    registry = _registry()
    _check_registered(registry, service, resource_type)

    results = fetch_regions(
        request_ctx,
        registry,
        service,
        resource_type,
        target_regions,
        page_size=page_size,
        page_token=page_token,
        all_pages=all_pages,
    )

    resources: list[Resource] = []
    failed = []
    for result in results:
        if result.success:
            resources.extend(result.resources)
        else:
            failed.append(result)

    if output == "json":
        _echo_json(
            {
                "resources": [_resource_to_dict(r) for r in resources],
                "next_tokens": {r.region or "default": r.next_token for r in results if r.next_token},
                "errors": {
                    r.region or "default": {"kind": r.kind.value, "message": format_error_for_user(r.error)}
                    for r in failed
                    if r.error is not None
                },
            }
        )
    else:
        renderer = registry.get_renderer(service, resource_type)
        console.print(resource_table(f"{service}/{resource_type}", renderer, resources))
        print_info(f"{len(resources)}개 리소스")
        for result in results:
            if result.next_token:
                where = f" [{result.region}]" if result.region else ""
                print_info(f"다음 페이지{where}: --page-token {result.next_token}")
        for result in failed:
            if result.error is not None:
                print_warning(f"{result.region or 'default'}: {format_error_for_user(result.error)}")

    if failed:
        raise SystemExit(1)


@cli.command("get")
@click.argument("service")
@click.argument("resource_type")
@click.argument("resource_id")
@click.option("-r", "--region", default=None, help="리전")
@click.option("-o", "--output", type=click.Choice(OUTPUT_FORMATS), default="table", help="출력 형식")
@click.pass_context
def get_command(
    ctx: Context,
    service: str,
    resource_type: str,
    resource_id: str,
    region: str | None,
    output: str,
) -> None:
    """리소스 단건 조회"""
    request_ctx = _request_context(ctx)
    if region:
        request_ctx = with_region_override(request_ctx, region)

    registry = _registry()
    _check_registered(registry, service, resource_type)

    try:
        dao = registry.get_dao(request_ctx, service, resource_type)
        resource = dao.get(request_ctx, resource_id)
    except Exception as e:
        _fail(e)

    if resource is None:
        print_error(f"리소스를 찾을 수 없습니다: {resource_id}")
        raise SystemExit(1)

    if output == "json":
        _echo_json(_resource_to_dict(resource))
        return
    renderer = registry.get_renderer(service, resource_type)
    console.print(renderer.render_detail(resource), markup=False)


@cli.command("delete")
@click.argument("service")
@click.argument("resource_type")
@click.argument("resource_id")
@click.option("-r", "--region", default=None, help="리전")
@click.option("-y", "--yes", is_flag=True, help="확인 없이 삭제")
@click.pass_context
def delete_command(
    ctx: Context,
    service: str,
    resource_type: str,
    resource_id: str,
    region: str | None,
    yes: bool,
) -> None:
    """리소스 삭제"""
    request_ctx = _request_context(ctx)
    if region:
        request_ctx = with_region_override(request_ctx, region)

    registry = _registry()
    _check_registered(registry, service, resource_type)

    try:
        dao = registry.get_dao(request_ctx, service, resource_type)
    except Exception as e:
        _fail(e)

    if not dao.supports(Operation.DELETE):
        print_error(f"삭제를 지원하지 않는 리소스 타입: {service}/{resource_type}")
        raise SystemExit(1)

    if not yes:
        click.confirm(f"{service}/{resource_type} {resource_id} 을(를) 삭제하시겠습니까?", abort=True)

    try:
        dao.delete(request_ctx, resource_id)
    except Exception as e:
        _fail(e)

    logger.info(f"리소스 삭제: {service}/{resource_type} {resource_id}")
    print_success(f"삭제 완료: {resource_id}")


if __name__ == "__main__":
    cli()
