"""
plugins - 리소스 모듈 모음

리소스 모듈은 import 부수효과가 아닌 명시적인 register(registry) 호출로 등록됩니다.
등록 순서는 RESOURCE_MODULES 순서를 따르며, 중복 디스크립터는 즉시 실패합니다.

리소스 모듈 규약:
    - SERVICE, RESOURCE_TYPE: 필수. 디스크립터.
    - register(registry): 필수. 레지스트리에 Entry 등록.
    - REQUIRED_PERMISSIONS: 선택. 필요한 IAM 권한 목록.

서비스 패키지(plugins/<service>/__init__.py)는 CATEGORY 메타데이터를 가집니다.
"""

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from core.registry import Registry

logger = logging.getLogger(__name__)

# 등록 순서 = 이 튜플의 순서
RESOURCE_MODULES: tuple[str, ...] = (
    "plugins.ec2.instances",
    "plugins.s3.buckets",
    "plugins.iam.roles",
    "plugins.logs.log_groups",
)


def register_all(registry: Registry, modules: tuple[str, ...] = RESOURCE_MODULES) -> Registry:
    """리소스 모듈을 순서대로 등록

    Raises:
        DuplicateRegistrationError: 두 모듈이 같은 디스크립터를 등록한 경우
        RegistryFrozenError: 이미 고정된 레지스트리
    """
    for module_name in modules:
        module = importlib.import_module(module_name)
        module.register(registry)
        logger.debug(f"리소스 모듈 등록: {module_name}")
    return registry


def bootstrap(registry: Registry) -> Registry:
    """모든 리소스 모듈 등록 후 레지스트리 고정"""
    register_all(registry)
    registry.freeze()
    return registry


def get_category(service: str) -> dict[str, Any] | None:
    """서비스 패키지의 CATEGORY 메타데이터 조회 (없으면 None)"""
    if not service.isidentifier():
        return None
    try:
        module = importlib.import_module(f"{__name__}.{service}")
    except ImportError:
        return None
    return getattr(module, "CATEGORY", None)
