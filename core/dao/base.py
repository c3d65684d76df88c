"""
core/dao/base.py - DAO capability 모델

모든 리소스 모듈이 구현하는 list/get/delete 작업 규약입니다.

주요 구성 요소:
- DAO: 리소스 접근 추상 클래스
- BaseDAO: service/resource_type/supports 기본 구현
- PaginatedDAO: 커서 기반 페이지네이션 capability (선택)
- DAOFactory: RequestContext → DAO 팩토리 타입
- list_page_or_all: 페이지네이션 지원 여부에 따라 list_page 또는 list 호출
- iter_pages: 페이지 토큰이 빌 때까지 순차적으로 페이지 순회

Example:
    class InstanceDAO(BaseDAO):
        def __init__(self, ctx):
            super().__init__("ec2", "instances", ctx)
            self.client = get_client(ctx, "ec2")

        def list(self, ctx):
            ...

    resources, next_token = list_page_or_all(dao, ctx, page_size=100)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, ClassVar

from core.dao.types import Operation, Resource
from core.exceptions import UnsupportedOperationError

if TYPE_CHECKING:
    from core.context import RequestContext


class DAO(ABC):
    """리소스 접근 인터페이스

    DAO 인스턴스는 요청 단위로 생성되며, 불변 클라이언트 핸들 외의 상태를 갖지 않습니다.
    """

    @property
    @abstractmethod
    def service_name(self) -> str:
        """AWS 서비스 이름 (예: "ec2", "s3")"""

    @property
    @abstractmethod
    def resource_type(self) -> str:
        """리소스 타입 (예: "instances", "buckets")"""

    @abstractmethod
    def list(self, ctx: RequestContext) -> list[Resource]:
        """현재 리전 범위의 모든 리소스 조회"""

    @abstractmethod
    def get(self, ctx: RequestContext, resource_id: str) -> Resource | None:
        """ID로 단일 리소스 조회"""

    @abstractmethod
    def delete(self, ctx: RequestContext, resource_id: str) -> None:
        """ID로 리소스 삭제 (지원하는 경우)"""

    @abstractmethod
    def supports(self, op: Operation) -> bool:
        """해당 작업 지원 여부"""


class PaginatedDAO(DAO):
    """페이지네이션 capability

    수천 건 이상이 될 수 있는 리소스(로그 그룹, 이벤트 등)가 구현합니다.
    일반 호출자는 isinstance로 확인 후 없으면 list()로 대체해야 합니다.
    """

    @abstractmethod
    def list_page(
        self,
        ctx: RequestContext,
        page_size: int,
        page_token: str = "",
    ) -> tuple[list[Resource], str]:
        """한 페이지 조회

        Args:
            ctx: 요청 컨텍스트
            page_size: 페이지 크기
            page_token: 다음 페이지 토큰 (첫 페이지는 빈 문자열)

        Returns:
            (리소스 목록, 다음 페이지 토큰). 토큰이 빈 문자열이면 마지막 페이지.
        """


class BaseDAO(DAO):
    """DAO 기본 구현

    list/get/delete를 지원한다고 가정합니다. 읽기 전용 리소스는
    SUPPORTED_OPERATIONS를 재정의하고 delete()에서 unsupported()를 호출합니다.
    """

    SUPPORTED_OPERATIONS: ClassVar[frozenset[Operation]] = frozenset(
        {Operation.LIST, Operation.GET, Operation.DELETE}
    )

    def __init__(self, service: str, resource_type: str, ctx: RequestContext | None = None):
        self._service = service
        self._resource_type = resource_type
        self.ctx = ctx

    @property
    def service_name(self) -> str:
        return self._service

    @property
    def resource_type(self) -> str:
        return self._resource_type

    def supports(self, op: Operation) -> bool:
        return op in self.SUPPORTED_OPERATIONS

    def delete(self, ctx: RequestContext, resource_id: str) -> None:
        self.unsupported(Operation.DELETE)

    def unsupported(self, op: Operation) -> None:
        """지원하지 않는 작업 예외 발생"""
        raise UnsupportedOperationError(self._service, self._resource_type, op.value)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._service}/{self._resource_type})"


# RequestContext를 받아 DAO를 생성 (설정 로드 실패 등은 예외로 전파)
DAOFactory = Callable[["RequestContext"], DAO]


def list_page_or_all(
    dao: DAO,
    ctx: RequestContext,
    page_size: int,
    page_token: str = "",
) -> tuple[list[Resource], str]:
    """페이지네이션 지원 여부에 따라 조회

    PaginatedDAO이면 list_page()를, 아니면 list()를 호출하고 빈 토큰을 반환합니다.
    """
    if isinstance(dao, PaginatedDAO):
        return dao.list_page(ctx, page_size, page_token)
    return dao.list(ctx), ""


def iter_pages(
    dao: DAO,
    ctx: RequestContext,
    page_size: int,
    page_token: str = "",
) -> Iterator[list[Resource]]:
    """페이지 토큰이 빌 때까지 순차적으로 페이지 반환

    하나의 페이지 순회는 소유자가 순차적으로 진행해야 합니다.
    """
    token = page_token
    while True:
        ctx.raise_if_cancelled()
        resources, token = list_page_or_all(dao, ctx, page_size, token)
        yield resources
        if not token:
            return
