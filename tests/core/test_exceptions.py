# tests/core/test_exceptions.py
"""
core/exceptions.py 단위 테스트
"""

from core.exceptions import (
    BrowserError,
    ConfigError,
    DeadlineExceededError,
    DuplicateRegistrationError,
    OperationError,
    RegistryError,
    RegistryFrozenError,
    ResourceTypeNotRegisteredError,
    UnsupportedOperationError,
)


class TestBrowserError:
    """BrowserError 테스트"""

    def test_message_only(self):
        """cause 없는 메시지"""
        err = BrowserError("failed")
        assert str(err) == "failed"
        assert err.__cause__ is None
        assert err.details == {}

    def test_with_cause(self):
        """cause가 있으면 메시지에 포함되고 __cause__ 설정"""
        cause = ValueError("bad")
        err = BrowserError("failed", cause=cause)
        assert str(err) == "failed: bad"
        assert err.__cause__ is cause

    def test_to_dict(self):
        """딕셔너리 변환"""
        err = BrowserError("failed", cause=ValueError("bad"), details={"k": "v"})
        result = err.to_dict()
        assert result["error_type"] == "BrowserError"
        assert result["message"] == "failed"
        assert result["cause"] == "bad"
        assert result["details"] == {"k": "v"}


class TestSubclasses:
    """예외 하위 클래스 테스트"""

    def test_operation_error(self):
        """OperationError"""
        cause = RuntimeError("boom")
        err = OperationError("list ec2/instances", cause)
        assert isinstance(err, BrowserError)
        assert err.operation == "list ec2/instances"
        assert str(err) == "list ec2/instances: boom"

    def test_duplicate_registration(self):
        """DuplicateRegistrationError"""
        err = DuplicateRegistrationError("ec2", "instances")
        assert isinstance(err, RegistryError)
        assert err.descriptor == ("ec2", "instances")
        assert "ec2/instances" in str(err)

    def test_frozen(self):
        """RegistryFrozenError"""
        err = RegistryFrozenError("ec2", "instances")
        assert isinstance(err, RegistryError)
        assert "ec2/instances" in str(err)

    def test_not_registered(self):
        """ResourceTypeNotRegisteredError"""
        err = ResourceTypeNotRegisteredError("foo", "bar")
        assert err.details == {"service": "foo", "resource_type": "bar"}

    def test_unsupported_operation(self):
        """UnsupportedOperationError"""
        err = UnsupportedOperationError("iam", "roles", "delete")
        assert err.operation == "delete"
        assert "iam/roles" in str(err)

    def test_deadline(self):
        """DeadlineExceededError"""
        assert str(DeadlineExceededError()) == "context deadline exceeded"

    def test_config_error(self):
        """ConfigError"""
        err = ConfigError("AWS_BROWSER_PAGE_SIZE", "1 이상이어야 합니다")
        assert err.config_key == "AWS_BROWSER_PAGE_SIZE"
        assert str(err) == "설정 오류 [AWS_BROWSER_PAGE_SIZE]: 1 이상이어야 합니다"
