"""
plugins/iam/roles.py - IAM 역할 (읽기 전용)

IAM은 글로벌 서비스이므로 리전 오버라이드와 관계없이 같은 역할 목록을 반환합니다.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from core.aws import GLOBAL_API_REGION, get_client
from core.dao import BaseDAO, BaseResource, Operation, Resource, tags_from_list
from core.errors import wrap
from core.exceptions import ContextError
from core.registry import Entry
from core.render import BaseRenderer, Column

if TYPE_CHECKING:
    from core.context import RequestContext
    from core.registry import Registry

SERVICE = "iam"
RESOURCE_TYPE = "roles"

REQUIRED_PERMISSIONS = {
    "read": ["iam:ListRoles", "iam:GetRole"],
}


@dataclass(frozen=True)
class RoleResource(BaseResource):
    """IAM 역할"""

    @property
    def path(self) -> str:
        return (self.data or {}).get("Path", "")

    @property
    def created(self) -> str:
        created = (self.data or {}).get("CreateDate")
        if created is None:
            return ""
        if hasattr(created, "strftime"):
            return created.strftime("%Y-%m-%d")
        return str(created)

    @property
    def last_used(self) -> str:
        last_used = (self.data or {}).get("RoleLastUsed", {}).get("LastUsedDate")
        if last_used is None:
            return ""
        if hasattr(last_used, "strftime"):
            return last_used.strftime("%Y-%m-%d")
        return str(last_used)

    def extra_fields(self) -> dict[str, str]:
        data = self.data or {}
        return {
            "Path": self.path,
            "Created": self.created,
            "Last Used": self.last_used or "-",
            "Max Session": str(data.get("MaxSessionDuration", "")),
            "Description": data.get("Description", ""),
        }


def _to_resource(role: dict[str, Any]) -> RoleResource:
    return RoleResource(
        id=role["RoleName"],
        name=role["RoleName"],
        arn=role.get("Arn", ""),
        tags=tags_from_list(role.get("Tags")),
        data=role,
    )


class RoleDAO(BaseDAO):
    """IAM 역할 DAO"""

    SUPPORTED_OPERATIONS: ClassVar[frozenset[Operation]] = frozenset({Operation.LIST, Operation.GET})

    def __init__(self, ctx: RequestContext):
        super().__init__(SERVICE, RESOURCE_TYPE, ctx)
        self.client = get_client(ctx, "iam", region_name=GLOBAL_API_REGION)

    def list(self, ctx: RequestContext) -> list[Resource]:
        resources: list[Resource] = []
        try:
            paginator = self.client.get_paginator("list_roles")
            for page in paginator.paginate():
                ctx.raise_if_cancelled()
                for role in page.get("Roles", []):
                    resources.append(_to_resource(role))
        except ContextError:
            raise
        except Exception as e:
            raise wrap(e, "list iam roles") from e
        return resources

    def get(self, ctx: RequestContext, resource_id: str) -> Resource | None:
        ctx.raise_if_cancelled()
        try:
            response = self.client.get_role(RoleName=resource_id)
        except Exception as e:
            raise wrap(e, f"get iam role {resource_id}") from e
        return _to_resource(response["Role"])


class RoleRenderer(BaseRenderer):
    """IAM 역할 렌더러"""

    def __init__(self) -> None:
        super().__init__(
            SERVICE,
            RESOURCE_TYPE,
            [
                Column("ROLE NAME", 40, lambda r: r.name, priority=0),
                Column("PATH", 20, lambda r: r.path if isinstance(r, RoleResource) else "", priority=2),
                Column("CREATED", 12, lambda r: r.created if isinstance(r, RoleResource) else "", priority=1),
                Column("LAST USED", 12, lambda r: r.last_used if isinstance(r, RoleResource) else "", priority=3),
            ],
        )


def register(registry: Registry) -> None:
    registry.register_custom(
        SERVICE,
        RESOURCE_TYPE,
        Entry(dao_factory=RoleDAO, renderer_factory=RoleRenderer),
    )
