"""
plugins/s3/buckets.py - S3 버킷

S3 버킷은 계정 전역으로 조회되므로 list는 모든 버킷을 반환하고,
각 버킷의 실제 리전은 location 필드로 표시합니다.

필요한 AWS 권한:
    s3:ListAllMyBuckets, s3:GetBucketLocation, s3:GetBucketTagging, s3:DeleteBucket
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from core.aws import get_client
from core.dao import BaseDAO, BaseResource, Resource, tags_from_list
from core.errors import get_error_code, wrap
from core.registry import Entry
from core.render import BaseRenderer, Column

if TYPE_CHECKING:
    from core.context import RequestContext
    from core.registry import Registry

logger = logging.getLogger(__name__)

SERVICE = "s3"
RESOURCE_TYPE = "buckets"

# 태그가 없는 버킷의 get_bucket_tagging 에러 코드
NO_TAG_SET = "NoSuchTagSet"


@dataclass(frozen=True)
class BucketResource(BaseResource):
    """S3 버킷"""

    location: str = ""

    @property
    def creation_date(self) -> str:
        created = (self.data or {}).get("CreationDate")
        if created is None:
            return ""
        if hasattr(created, "strftime"):
            return created.strftime("%Y-%m-%d %H:%M")
        return str(created)


class BucketDAO(BaseDAO):
    """S3 버킷 DAO"""

    def __init__(self, ctx: RequestContext):
        super().__init__(SERVICE, RESOURCE_TYPE, ctx)
        self.client = get_client(ctx, "s3")

    def _location(self, name: str) -> str:
        # us-east-1 버킷은 LocationConstraint가 None
        response = self.client.get_bucket_location(Bucket=name)
        return response.get("LocationConstraint") or "us-east-1"

    def _tags(self, name: str) -> dict[str, str]:
        try:
            response = self.client.get_bucket_tagging(Bucket=name)
        except Exception as e:
            if get_error_code(e) == NO_TAG_SET:
                return {}
            raise
        return tags_from_list(response.get("TagSet"))

    def _to_resource(self, bucket: dict[str, Any], location: str = "", tags: dict[str, str] | None = None) -> BucketResource:
        name = bucket["Name"]
        return BucketResource(
            id=name,
            name=name,
            arn=f"arn:aws:s3:::{name}",
            tags=tags or {},
            data=bucket,
            location=location,
        )

    def list(self, ctx: RequestContext) -> list[Resource]:
        ctx.raise_if_cancelled()
        try:
            response = self.client.list_buckets()
        except Exception as e:
            raise wrap(e, "list s3 buckets") from e
        return [self._to_resource(b) for b in response.get("Buckets", [])]

    def get(self, ctx: RequestContext, resource_id: str) -> Resource | None:
        ctx.raise_if_cancelled()
        try:
            self.client.head_bucket(Bucket=resource_id)
            location = self._location(resource_id)
            tags = self._tags(resource_id)
        except Exception as e:
            raise wrap(e, f"get s3 bucket {resource_id}") from e

        bucket: dict[str, Any] = {"Name": resource_id}
        # head_bucket은 생성일을 주지 않으므로 목록에서 보완
        try:
            for b in self.client.list_buckets().get("Buckets", []):
                if b["Name"] == resource_id:
                    bucket = b
                    break
        except Exception as e:
            logger.debug(f"버킷 생성일 조회 실패 ({resource_id}): {e}")

        return self._to_resource(bucket, location=location, tags=tags)

    def delete(self, ctx: RequestContext, resource_id: str) -> None:
        ctx.raise_if_cancelled()
        try:
            self.client.delete_bucket(Bucket=resource_id)
        except Exception as e:
            raise wrap(e, f"delete s3 bucket {resource_id}") from e


class BucketRenderer(BaseRenderer):
    """S3 버킷 렌더러"""

    def __init__(self) -> None:
        super().__init__(
            SERVICE,
            RESOURCE_TYPE,
            [
                Column("NAME", 45, lambda r: r.name, priority=0),
                Column(
                    "LOCATION",
                    15,
                    lambda r: r.location if isinstance(r, BucketResource) else "",
                    priority=1,
                ),
                Column(
                    "CREATED",
                    17,
                    lambda r: r.creation_date if isinstance(r, BucketResource) else "",
                    priority=2,
                ),
            ],
        )


def register(registry: Registry) -> None:
    registry.register_custom(
        SERVICE,
        RESOURCE_TYPE,
        Entry(dao_factory=BucketDAO, renderer_factory=BucketRenderer),
    )
