"""
plugins/logs/log_groups.py - CloudWatch Logs 로그 그룹

계정당 수천 개가 될 수 있으므로 페이지 단위 조회(list_page)를 지원합니다.
삭제는 멱등적이며, 이미 없는 로그 그룹 삭제는 성공으로 처리합니다.

필요한 AWS 권한:
    logs:DescribeLogGroups, logs:DeleteLogGroup, logs:ListTagsForResource
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from core.aws import get_client
from core.dao import BaseDAO, BaseResource, PaginatedDAO, Resource
from core.errors import is_not_found, wrap
from core.exceptions import ContextError
from core.registry import Entry
from core.render import BaseRenderer, Column

if TYPE_CHECKING:
    from core.context import RequestContext
    from core.registry import Registry

logger = logging.getLogger(__name__)

SERVICE = "logs"
RESOURCE_TYPE = "log-groups"

REQUIRED_PERMISSIONS = {
    "read": ["logs:DescribeLogGroups", "logs:ListTagsForResource"],
    "write": ["logs:DeleteLogGroup"],
}

# describe_log_groups의 limit 최대값
MAX_PAGE_SIZE = 50


@dataclass(frozen=True)
class LogGroupResource(BaseResource):
    """CloudWatch 로그 그룹"""

    @property
    def retention_days(self) -> int | None:
        """보존 기간 (None = 무기한)"""
        return (self.data or {}).get("retentionInDays")

    @property
    def stored_bytes(self) -> int:
        return (self.data or {}).get("storedBytes", 0)

    @property
    def created(self) -> str:
        ts = (self.data or {}).get("creationTime")
        if not ts:
            return ""
        return datetime.fromtimestamp(ts / 1000, tz=timezone.utc).strftime("%Y-%m-%d")

    def extra_fields(self) -> dict[str, str]:
        return {
            "Retention": f"{self.retention_days}d" if self.retention_days else "Never expire",
            "Stored Bytes": str(self.stored_bytes),
            "Created": self.created,
            "KMS Key": (self.data or {}).get("kmsKeyId", ""),
        }


def _to_resource(group: dict[str, Any], tags: dict[str, str] | None = None) -> LogGroupResource:
    name = group["logGroupName"]
    # describe 응답의 arn은 ":*" 접미사가 붙음
    arn = group.get("arn", "")
    if arn.endswith(":*"):
        arn = arn[:-2]
    return LogGroupResource(id=name, name=name, arn=arn, tags=tags or {}, data=group)


class LogGroupDAO(BaseDAO, PaginatedDAO):
    """CloudWatch 로그 그룹 DAO"""

    def __init__(self, ctx: RequestContext):
        super().__init__(SERVICE, RESOURCE_TYPE, ctx)
        self.client = get_client(ctx, "logs")

    def list(self, ctx: RequestContext) -> list[Resource]:
        resources: list[Resource] = []
        try:
            paginator = self.client.get_paginator("describe_log_groups")
            for page in paginator.paginate():
                ctx.raise_if_cancelled()
                resources.extend(_to_resource(g) for g in page.get("logGroups", []))
        except ContextError:
            raise
        except Exception as e:
            raise wrap(e, "list log groups") from e
        return resources

    def list_page(
        self,
        ctx: RequestContext,
        page_size: int,
        page_token: str = "",
    ) -> tuple[list[Resource], str]:
        ctx.raise_if_cancelled()
        kwargs: dict[str, Any] = {"limit": max(1, min(page_size, MAX_PAGE_SIZE))}
        if page_token:
            kwargs["nextToken"] = page_token

        try:
            response = self.client.describe_log_groups(**kwargs)
        except Exception as e:
            raise wrap(e, "list log groups page") from e

        resources: list[Resource] = [_to_resource(g) for g in response.get("logGroups", [])]
        return resources, response.get("nextToken", "")

    def _tags(self, arn: str) -> dict[str, str]:
        if not arn:
            return {}
        return self.client.list_tags_for_resource(resourceArn=arn).get("tags", {})

    def get(self, ctx: RequestContext, resource_id: str) -> Resource | None:
        ctx.raise_if_cancelled()
        try:
            paginator = self.client.get_paginator("describe_log_groups")
            for page in paginator.paginate(logGroupNamePrefix=resource_id):
                for group in page.get("logGroups", []):
                    # 접두사 검색이므로 이름이 정확히 같은 것만 사용
                    if group["logGroupName"] == resource_id:
                        arn = _to_resource(group).arn
                        return _to_resource(group, tags=self._tags(arn))
        except Exception as e:
            raise wrap(e, f"get log group {resource_id}") from e
        return None

    def delete(self, ctx: RequestContext, resource_id: str) -> None:
        ctx.raise_if_cancelled()
        try:
            self.client.delete_log_group(logGroupName=resource_id)
        except Exception as e:
            if is_not_found(e):
                logger.debug(f"이미 삭제된 로그 그룹: {resource_id}")
                return
            raise wrap(e, f"delete log group {resource_id}") from e


def _retention(r: Resource) -> str:
    if not isinstance(r, LogGroupResource):
        return ""
    return f"{r.retention_days}d" if r.retention_days else "-"


def _size(r: Resource) -> str:
    if not isinstance(r, LogGroupResource):
        return ""
    return f"{r.stored_bytes / (1024**2):.1f} MB"


class LogGroupRenderer(BaseRenderer):
    """CloudWatch 로그 그룹 렌더러"""

    def __init__(self) -> None:
        super().__init__(
            SERVICE,
            RESOURCE_TYPE,
            [
                Column("LOG GROUP", 60, lambda r: r.name, priority=0),
                Column("RETENTION", 10, _retention, priority=1),
                Column("STORED", 12, _size, priority=2),
                Column("CREATED", 12, lambda r: r.created if isinstance(r, LogGroupResource) else "", priority=3),
            ],
        )


def register(registry: Registry) -> None:
    registry.register_custom(
        SERVICE,
        RESOURCE_TYPE,
        Entry(dao_factory=LogGroupDAO, renderer_factory=LogGroupRenderer),
    )
