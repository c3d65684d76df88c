"""
plugins/ec2/instances.py - EC2 인스턴스

조회/단건 조회/삭제(terminate)를 지원합니다.
컨텍스트 필터 VpcId, InstanceState를 지원합니다.

필요한 AWS 권한:
    ec2:DescribeInstances, ec2:TerminateInstances
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from core.aws import get_client
from core.context import get_filter_from_context
from core.dao import BaseDAO, BaseResource, Resource, tags_from_list
from core.errors import wrap
from core.exceptions import ContextError
from core.registry import Entry
from core.render import BaseRenderer, Column

if TYPE_CHECKING:
    from core.context import RequestContext
    from core.registry import Registry

SERVICE = "ec2"
RESOURCE_TYPE = "instances"

REQUIRED_PERMISSIONS = {
    "read": ["ec2:DescribeInstances"],
    "write": ["ec2:TerminateInstances"],
}


@dataclass(frozen=True)
class InstanceResource(BaseResource):
    """EC2 인스턴스"""

    @property
    def state(self) -> str:
        return (self.data or {}).get("State", {}).get("Name", "")

    @property
    def instance_type(self) -> str:
        return (self.data or {}).get("InstanceType", "")

    @property
    def availability_zone(self) -> str:
        return (self.data or {}).get("Placement", {}).get("AvailabilityZone", "")

    @property
    def private_ip(self) -> str:
        return (self.data or {}).get("PrivateIpAddress", "")

    @property
    def public_ip(self) -> str:
        return (self.data or {}).get("PublicIpAddress", "")

    def extra_fields(self) -> dict[str, str]:
        data = self.data or {}
        return {
            "Type": self.instance_type,
            "State": self.state,
            "AZ": self.availability_zone,
            "VPC": data.get("VpcId", ""),
            "Subnet": data.get("SubnetId", ""),
            "Private IP": self.private_ip,
            "Public IP": self.public_ip,
            "Image": data.get("ImageId", ""),
        }


def _to_resource(instance: dict[str, Any]) -> InstanceResource:
    tags = tags_from_list(instance.get("Tags"))
    return InstanceResource(
        id=instance["InstanceId"],
        name=tags.get("Name", ""),
        arn="",
        tags=tags,
        data=instance,
    )


class InstanceDAO(BaseDAO):
    """EC2 인스턴스 DAO"""

    def __init__(self, ctx: RequestContext):
        super().__init__(SERVICE, RESOURCE_TYPE, ctx)
        self.client = get_client(ctx, "ec2")

    def _filters(self, ctx: RequestContext) -> list[dict[str, Any]]:
        filters = []
        vpc_id = get_filter_from_context(ctx, "VpcId")
        if vpc_id:
            filters.append({"Name": "vpc-id", "Values": [vpc_id]})
        state = get_filter_from_context(ctx, "InstanceState")
        if state:
            filters.append({"Name": "instance-state-name", "Values": [state]})
        return filters

    def list(self, ctx: RequestContext) -> list[Resource]:
        resources: list[Resource] = []
        kwargs: dict[str, Any] = {}
        filters = self._filters(ctx)
        if filters:
            kwargs["Filters"] = filters

        try:
            paginator = self.client.get_paginator("describe_instances")
            for page in paginator.paginate(**kwargs):
                ctx.raise_if_cancelled()
                for reservation in page.get("Reservations", []):
                    for instance in reservation.get("Instances", []):
                        resources.append(_to_resource(instance))
        except ContextError:
            raise
        except Exception as e:
            raise wrap(e, "list ec2 instances") from e
        return resources

    def get(self, ctx: RequestContext, resource_id: str) -> Resource | None:
        ctx.raise_if_cancelled()
        try:
            response = self.client.describe_instances(InstanceIds=[resource_id])
        except Exception as e:
            raise wrap(e, f"describe instance {resource_id}") from e

        for reservation in response.get("Reservations", []):
            for instance in reservation.get("Instances", []):
                return _to_resource(instance)
        return None

    def delete(self, ctx: RequestContext, resource_id: str) -> None:
        ctx.raise_if_cancelled()
        try:
            self.client.terminate_instances(InstanceIds=[resource_id])
        except Exception as e:
            raise wrap(e, f"terminate instance {resource_id}") from e


def _field(getter: Callable[[InstanceResource], str]) -> Callable[[Resource], str]:
    """InstanceResource 전용 컬럼 getter"""

    def column(r: Resource) -> str:
        if isinstance(r, InstanceResource):
            return getter(r)
        return ""

    return column


class InstanceRenderer(BaseRenderer):
    """EC2 인스턴스 렌더러"""

    def __init__(self) -> None:
        super().__init__(
            SERVICE,
            RESOURCE_TYPE,
            [
                Column("NAME", 30, lambda r: r.name, priority=0),
                Column("INSTANCE ID", 20, lambda r: r.id, priority=1),
                Column("STATE", 12, _field(lambda r: r.state), priority=2),
                Column("TYPE", 12, _field(lambda r: r.instance_type), priority=3),
                Column("AZ", 16, _field(lambda r: r.availability_zone), priority=4),
                Column("PRIVATE IP", 16, _field(lambda r: r.private_ip), priority=5),
            ],
        )


def register(registry: Registry) -> None:
    registry.register_custom(
        SERVICE,
        RESOURCE_TYPE,
        Entry(dao_factory=InstanceDAO, renderer_factory=InstanceRenderer),
    )
