# tests/core/dao/test_dao_base.py
"""
core/dao/base.py 단위 테스트

DAO 기본 구현, capability 확인, 페이지 순회 헬퍼를 테스트합니다.
"""

import pytest

from core.dao import DAO, BaseDAO, BaseResource, Operation, PaginatedDAO, iter_pages, list_page_or_all
from core.exceptions import ContextCancelledError, UnsupportedOperationError


class ReadOnlyDAO(BaseDAO):
    SUPPORTED_OPERATIONS = frozenset({Operation.LIST, Operation.GET})

    def __init__(self):
        super().__init__("iam", "roles")

    def list(self, ctx):
        return []

    def get(self, ctx, resource_id):
        return None


def _resources(n):
    return [BaseResource(id=f"r-{i}") for i in range(n)]


class TestBaseDAO:
    """BaseDAO 테스트"""

    def test_identity(self, fake_dao):
        """service_name / resource_type"""
        dao = fake_dao(service="ec2", resource_type="instances")
        assert dao.service_name == "ec2"
        assert dao.resource_type == "instances"
        assert repr(dao) == "FakeDAO(ec2/instances)"

    def test_default_supports(self, fake_dao):
        """기본 지원 작업은 list/get/delete"""
        dao = fake_dao()
        assert dao.supports(Operation.LIST)
        assert dao.supports(Operation.GET)
        assert dao.supports(Operation.DELETE)
        assert not dao.supports(Operation.CREATE)
        assert not dao.supports(Operation.UPDATE)

    def test_read_only_delete(self, ctx):
        """읽기 전용 DAO의 delete는 UnsupportedOperationError"""
        dao = ReadOnlyDAO()
        assert not dao.supports(Operation.DELETE)
        with pytest.raises(UnsupportedOperationError) as exc_info:
            dao.delete(ctx, "role")
        assert exc_info.value.operation == "delete"

    def test_abstract(self):
        """DAO는 직접 생성 불가"""
        with pytest.raises(TypeError):
            DAO()  # type: ignore[abstract]


class TestListPageOrAll:
    """list_page_or_all 테스트"""

    def test_paginated(self, fake_dao, ctx):
        """PaginatedDAO는 list_page 사용"""
        dao = fake_dao(_resources(5), paginated=True)
        assert isinstance(dao, PaginatedDAO)

        resources, token = list_page_or_all(dao, ctx, 2)

        assert [r.id for r in resources] == ["r-0", "r-1"]
        assert token == "2"
        assert dao.calls == [("list_page", "")]

    def test_token_passthrough(self, fake_dao, ctx):
        """토큰 전달"""
        dao = fake_dao(_resources(5), paginated=True)
        resources, token = list_page_or_all(dao, ctx, 2, "4")
        assert [r.id for r in resources] == ["r-4"]
        assert token == ""

    def test_plain_falls_back_to_list(self, fake_dao, ctx):
        """페이지네이션이 없으면 list 후 빈 토큰"""
        dao = fake_dao(_resources(3))
        assert not isinstance(dao, PaginatedDAO)

        resources, token = list_page_or_all(dao, ctx, 1)

        assert len(resources) == 3
        assert token == ""
        assert dao.calls == [("list", None)]


class TestIterPages:
    """iter_pages 테스트"""

    def test_all_pages(self, fake_dao, ctx):
        """토큰이 빌 때까지 순회"""
        dao = fake_dao(_resources(5), paginated=True)
        pages = list(iter_pages(dao, ctx, 2))
        assert [len(p) for p in pages] == [2, 2, 1]
        assert [c[1] for c in dao.calls] == ["", "2", "4"]

    def test_single_page_for_plain(self, fake_dao, ctx):
        """일반 DAO는 한 페이지"""
        pages = list(iter_pages(fake_dao(_resources(3)), ctx, 2))
        assert len(pages) == 1

    def test_cancelled(self, fake_dao, ctx):
        """취소된 컨텍스트는 조회 전에 중단"""
        dao = fake_dao(_resources(5), paginated=True)
        ctx.cancel()
        with pytest.raises(ContextCancelledError):
            list(iter_pages(dao, ctx, 2))
        assert dao.calls == []
