"""
tests/plugins/s3/test_plugins_buckets.py - S3 버킷 리소스 모듈 테스트
"""

import boto3
import pytest
from moto import mock_aws

from core.context import background
from core.errors import ErrorKind, classify
from core.exceptions import OperationError
from plugins.s3.buckets import BucketDAO, BucketRenderer, BucketResource


class TestBucketDAO:
    """BucketDAO 테스트"""

    @mock_aws
    def test_list(self):
        """버킷 목록"""
        s3 = boto3.client("s3", region_name="us-east-1")
        s3.create_bucket(Bucket="alpha-bucket")
        s3.create_bucket(Bucket="beta-bucket")
        ctx = background()

        resources = BucketDAO(ctx).list(ctx)

        assert sorted(r.id for r in resources) == ["alpha-bucket", "beta-bucket"]
        assert resources[0].arn.startswith("arn:aws:s3:::")

    @mock_aws
    def test_get_with_location_and_tags(self):
        """단건 조회는 리전과 태그 포함"""
        s3 = boto3.client("s3", region_name="eu-west-1")
        s3.create_bucket(Bucket="eu-bucket", CreateBucketConfiguration={"LocationConstraint": "eu-west-1"})
        s3.put_bucket_tagging(Bucket="eu-bucket", Tagging={"TagSet": [{"Key": "Team", "Value": "core"}]})
        ctx = background()

        res = BucketDAO(ctx).get(ctx, "eu-bucket")

        assert isinstance(res, BucketResource)
        assert res.location == "eu-west-1"
        assert res.tags == {"Team": "core"}

    @mock_aws
    def test_get_without_tags(self):
        """태그 없는 버킷은 빈 태그"""
        boto3.client("s3", region_name="us-east-1").create_bucket(Bucket="plain-bucket")
        ctx = background()

        res = BucketDAO(ctx).get(ctx, "plain-bucket")

        assert res is not None
        assert res.tags == {}
        assert res.location == "us-east-1"

    @mock_aws
    def test_get_missing(self):
        """없는 버킷은 NotFound"""
        ctx = background()
        with pytest.raises(OperationError) as exc_info:
            BucketDAO(ctx).get(ctx, "no-such-bucket-xyz")
        assert classify(exc_info.value) is ErrorKind.NOT_FOUND

    @mock_aws
    def test_delete(self):
        """빈 버킷 삭제"""
        s3 = boto3.client("s3", region_name="us-east-1")
        s3.create_bucket(Bucket="doomed-bucket")
        ctx = background()

        BucketDAO(ctx).delete(ctx, "doomed-bucket")

        assert s3.list_buckets()["Buckets"] == []

    @mock_aws
    def test_delete_not_empty(self):
        """객체가 남은 버킷 삭제 실패는 래핑 에러"""
        s3 = boto3.client("s3", region_name="us-east-1")
        s3.create_bucket(Bucket="full-bucket")
        s3.put_object(Bucket="full-bucket", Key="k", Body=b"v")
        ctx = background()

        with pytest.raises(OperationError) as exc_info:
            BucketDAO(ctx).delete(ctx, "full-bucket")
        assert "BucketNotEmpty" in str(exc_info.value)


class TestBucketRenderer:
    """BucketRenderer 테스트"""

    def test_row(self):
        """렌더러 행"""
        r = BucketResource(id="b", name="b", location="eu-west-1", data={"Name": "b"})
        assert BucketRenderer().row(r) == ["b", "eu-west-1", ""]
