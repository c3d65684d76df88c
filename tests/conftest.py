"""
tests/conftest.py - pytest 공통 픽스처

AWS API 모킹, 테스트용 DAO와 헬퍼를 제공합니다.

Usage:
    def test_something(fake_dao, ctx):
        # fake_dao: 메모리 기반 DAO 팩토리
        # ctx: 빈 RequestContext
        dao = fake_dao([BaseResource(id="i-1")], paginated=True)
"""

import os
import sys
from pathlib import Path
from typing import List, Optional
from unittest.mock import MagicMock

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from core.dao import BaseDAO, PaginatedDAO  # noqa: E402

# =============================================================================
# 환경 설정
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """테스트 환경 설정"""
    # 테스트용 환경 변수 설정
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")

    # 개발자 환경의 설정이 테스트에 섞이지 않도록 제거
    for name in ("AWS_REGION", "AWS_PROFILE", "AWS_DEFAULT_PROFILE", "AWS_BROWSER_REGIONS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    yield

    # 전역 레지스트리 정리
    from core.registry import reset_registry

    reset_registry()


@pytest.fixture
def ctx():
    """빈 요청 컨텍스트"""
    from core.context import background

    return background()


# =============================================================================
# 테스트용 DAO
# =============================================================================


class FakeDAO(BaseDAO):
    """메모리 기반 DAO (호출 기록)"""

    def __init__(self, resources=None, service: str = "test", resource_type: str = "items"):
        super().__init__(service, resource_type)
        self.resources = list(resources or [])
        self.calls: List[tuple] = []
        self.error: Optional[Exception] = None

    def list(self, ctx):
        self.calls.append(("list", None))
        if self.error is not None:
            raise self.error
        return list(self.resources)

    def get(self, ctx, resource_id):
        self.calls.append(("get", resource_id))
        if self.error is not None:
            raise self.error
        for r in self.resources:
            if r.id == resource_id:
                return r
        return None

    def delete(self, ctx, resource_id):
        self.calls.append(("delete", resource_id))
        if self.error is not None:
            raise self.error
        self.resources = [r for r in self.resources if r.id != resource_id]


class FakePaginatedDAO(FakeDAO, PaginatedDAO):
    """페이지 토큰이 오프셋 문자열인 DAO"""

    def list_page(self, ctx, page_size, page_token=""):
        self.calls.append(("list_page", page_token))
        if self.error is not None:
            raise self.error
        start = int(page_token or 0)
        end = start + page_size
        next_token = str(end) if end < len(self.resources) else ""
        return list(self.resources[start:end]), next_token


@pytest.fixture
def base_items():
    """테스트용 리소스 3개"""
    from core.dao import BaseResource

    return [BaseResource(id=i, name=f"item-{i}") for i in ("a", "b", "c")]


@pytest.fixture
def fake_dao():
    """테스트용 DAO 생성 함수"""

    def make(resources=None, paginated: bool = False, service: str = "test", resource_type: str = "items"):
        cls = FakePaginatedDAO if paginated else FakeDAO
        return cls(resources, service=service, resource_type=resource_type)

    return make


# =============================================================================
# AWS 모킹 픽스처
# =============================================================================


@pytest.fixture
def mock_ec2_client():
    """EC2 클라이언트 모킹"""
    mock_client = MagicMock()

    # describe_instances 기본 응답
    mock_client.describe_instances.return_value = {
        "Reservations": [
            {
                "Instances": [
                    {
                        "InstanceId": "i-1234567890abcdef0",
                        "InstanceType": "t3.micro",
                        "State": {"Name": "running"},
                        "Tags": [{"Key": "Name", "Value": "test-instance"}],
                        "Placement": {"AvailabilityZone": "us-east-1a"},
                        "PrivateIpAddress": "10.0.0.1",
                    }
                ]
            }
        ]
    }

    # 페이지네이터 모킹
    mock_paginator = MagicMock()
    mock_paginator.paginate.return_value = [mock_client.describe_instances.return_value]
    mock_client.get_paginator.return_value = mock_paginator

    yield mock_client


# =============================================================================
# 유틸리티 함수
# =============================================================================


def create_mock_client_error(
    error_code: str,
    error_message: str = "Test error",
    operation_name: str = "TestOperation",
) -> Exception:
    """ClientError 생성 헬퍼"""
    from botocore.exceptions import ClientError

    return ClientError(
        {
            "Error": {
                "Code": error_code,
                "Message": error_message,
            }
        },
        operation_name,
    )


@pytest.fixture
def client_error():
    """ClientError 생성 함수"""
    return create_mock_client_error


# =============================================================================
# moto 통합
# =============================================================================


@pytest.fixture
def aws_credentials(monkeypatch):
    """moto 사용 시 AWS 자격 증명 설정"""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture
def moto_aws(aws_credentials):
    """moto를 사용한 AWS 모킹"""
    import moto

    with moto.mock_aws():
        yield
