# tests/core/aws/test_client.py
"""
core/aws/client.py 단위 테스트
"""

from unittest.mock import MagicMock, patch

from core.aws import get_client, new_session, resolve_region
from core.context import with_profile_override, with_region_override


class TestResolveRegion:
    """resolve_region 테스트"""

    def test_default(self, ctx):
        """오버라이드가 없으면 기본 리전"""
        assert resolve_region(ctx) == "us-east-1"

    def test_context_override(self, ctx):
        """컨텍스트 오버라이드 우선"""
        assert resolve_region(with_region_override(ctx, "eu-west-1")) == "eu-west-1"

    def test_explicit_region(self, ctx):
        """인자가 가장 우선"""
        rctx = with_region_override(ctx, "eu-west-1")
        assert resolve_region(rctx, "ap-northeast-2") == "ap-northeast-2"


class TestNewSession:
    """new_session 테스트"""

    @patch("boto3.Session")
    def test_profile_override(self, mock_session_class, ctx):
        """프로파일/리전 오버라이드 반영"""
        rctx = with_region_override(with_profile_override(ctx, "dev"), "eu-west-1")
        new_session(rctx)
        mock_session_class.assert_called_once_with(profile_name="dev", region_name="eu-west-1")

    @patch("boto3.Session")
    def test_default_profile(self, mock_session_class, ctx):
        """프로파일이 없으면 None"""
        new_session(ctx)
        mock_session_class.assert_called_once_with(profile_name=None, region_name="us-east-1")


class TestGetClient:
    """get_client 테스트"""

    def test_client_config(self, ctx):
        """retry/타임아웃 설정과 리전 전달"""
        session = MagicMock()
        get_client(with_region_override(ctx, "eu-west-1"), "ec2", session=session, max_attempts=7)

        args, kwargs = session.client.call_args
        assert args == ("ec2",)
        assert kwargs["region_name"] == "eu-west-1"
        config = kwargs["config"]
        assert config.retries == {"max_attempts": 7, "mode": "standard"}
        assert config.read_timeout == 30

    def test_merge_config(self, ctx):
        """전달한 config와 병합"""
        from botocore.config import Config

        session = MagicMock()
        get_client(ctx, "s3", session=session, config=Config(signature_version="s3v4"))

        config = session.client.call_args.kwargs["config"]
        assert config.signature_version == "s3v4"
        assert config.connect_timeout == 10

    def test_real_client(self, ctx):
        """실제 boto3 client 생성"""
        client = get_client(with_region_override(ctx, "eu-west-1"), "logs")
        assert client.meta.region_name == "eu-west-1"
