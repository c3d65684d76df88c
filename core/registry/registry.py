"""
core/registry/registry.py - 리소스 플러그인 레지스트리

(service, resource_type) 디스크립터를 DAO 팩토리/렌더러 팩토리 쌍에 매핑하는
쓰기 1회, 읽기 다회 레지스트리입니다.

수명 주기:
    1. 프로세스 시작 시 plugins.register_all()이 모든 리소스 모듈을 순서대로 등록
    2. freeze()로 시작 단계 종료 → 이후 등록은 RegistryFrozenError
    3. 조회(get/get_dao)는 잠금 없이 수행

중복 등록 정책:
    동일 디스크립터가 두 번 등록되면 DuplicateRegistrationError로 즉시 실패합니다.
    한 모듈이 다른 모듈을 조용히 가리는 일을 막기 위한 시작 시점 검증입니다.

Example:
    registry = Registry()
    registry.register_custom(
        "ec2",
        "instances",
        Entry(dao_factory=InstanceDAO, renderer_factory=InstanceRenderer),
    )
    registry.freeze()

    entry = registry.get("ec2", "instances")
    dao = registry.get_dao(ctx, "ec2", "instances")
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from core.dao import DAO, DAOFactory
from core.errors import wrap
from core.exceptions import (
    DuplicateRegistrationError,
    RegistryError,
    RegistryFrozenError,
    ResourceTypeNotRegisteredError,
)
from core.registry.wrapper import new_regional_wrapper

if TYPE_CHECKING:
    from core.context import RequestContext
    from core.render import Renderer

logger = logging.getLogger(__name__)

RendererFactory = Callable[[], "Renderer"]


@dataclass(frozen=True, order=True)
class Descriptor:
    """리소스 모듈 식별자 (네비게이션 키로도 사용)"""

    service: str
    resource_type: str

    def __str__(self) -> str:
        return f"{self.service}/{self.resource_type}"

    @classmethod
    def parse(cls, value: str) -> Descriptor:
        """ "service/resource_type" 문자열 파싱"""
        service, sep, resource_type = value.partition("/")
        if not sep or not service or not resource_type:
            raise ValueError(f"잘못된 리소스 디스크립터: {value!r} (형식: service/resource_type)")
        return cls(service, resource_type)


@dataclass(frozen=True)
class Entry:
    """레지스트리 엔트리 (등록 후 불변)

    Attributes:
        dao_factory: RequestContext → DAO (생성 실패는 예외로 전파)
        renderer_factory: 인자 없는 렌더러 팩토리
    """

    dao_factory: DAOFactory
    renderer_factory: RendererFactory


class Registry:
    """리소스 레지스트리

    쓰기는 잠금으로 보호하고, 조회는 잠금 없이 dict를 읽습니다.
    """

    def __init__(self) -> None:
        self._entries: dict[Descriptor, Entry] = {}
        self._lock = threading.Lock()
        self._frozen = False

    # -------------------------------------------------------------------------
    # 등록
    # -------------------------------------------------------------------------

    def register_custom(self, service: str, resource_type: str, entry: Entry) -> None:
        """리소스 모듈 등록

        Raises:
            RegistryError: service 또는 resource_type이 비어있는 경우
            DuplicateRegistrationError: 이미 등록된 디스크립터
            RegistryFrozenError: freeze() 이후 등록 시도
        """
        if not service or not resource_type:
            raise RegistryError(f"service와 resource_type은 필수입니다: {service!r}/{resource_type!r}")

        descriptor = Descriptor(service, resource_type)
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError(service, resource_type)
            if descriptor in self._entries:
                raise DuplicateRegistrationError(service, resource_type)
            # 조회 측이 잠금 없이 읽으므로 새 dict로 교체
            entries = dict(self._entries)
            entries[descriptor] = entry
            self._entries = entries

        logger.debug(f"리소스 등록: {descriptor}")

    def freeze(self) -> None:
        """시작 단계 종료 (이후 등록 불가)"""
        with self._lock:
            self._frozen = True
        logger.debug(f"레지스트리 고정: {len(self._entries)}개 리소스 타입")

    @property
    def frozen(self) -> bool:
        return self._frozen

    # -------------------------------------------------------------------------
    # 조회
    # -------------------------------------------------------------------------

    def get(self, service: str, resource_type: str) -> Entry | None:
        """디스크립터로 엔트리 조회 (없으면 None)"""
        return self._entries.get(Descriptor(service, resource_type))

    def get_dao(self, ctx: RequestContext, service: str, resource_type: str) -> DAO:
        """DAO 생성 후 리전 데코레이터 적용

        Raises:
            ResourceTypeNotRegisteredError: 등록되지 않은 디스크립터
            OperationError: DAO 팩토리 실패 (원본 에러는 cause로 보존)
        """
        entry = self.get(service, resource_type)
        if entry is None:
            raise ResourceTypeNotRegisteredError(service, resource_type)

        try:
            dao = entry.dao_factory(ctx)
        except Exception as e:
            raise wrap(e, f"create dao {service}/{resource_type}") from e

        return new_regional_wrapper(ctx, dao)

    def get_renderer(self, service: str, resource_type: str) -> Renderer:
        entry = self.get(service, resource_type)
        if entry is None:
            raise ResourceTypeNotRegisteredError(service, resource_type)
        return entry.renderer_factory()

    def descriptors(self) -> list[Descriptor]:
        """등록된 디스크립터 목록 (정렬됨)"""
        return sorted(self._entries)

    def services(self) -> list[str]:
        return sorted({d.service for d in self._entries})

    def resource_types(self, service: str) -> list[str]:
        return sorted(d.resource_type for d in self._entries if d.service == service)

    def __contains__(self, descriptor: object) -> bool:
        return descriptor in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Descriptor]:
        return iter(self.descriptors())
