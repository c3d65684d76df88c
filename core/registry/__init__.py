"""
core/registry - 리소스 플러그인 레지스트리 및 리전 데코레이터

프로세스 전역 레지스트리는 get_registry()가 최초 호출 시 한 번만 구성합니다.
구성은 plugins.bootstrap()이 모든 리소스 모듈을 명시적으로 등록한 뒤 고정합니다.

Usage:
    from core.registry import get_registry

    registry = get_registry()
    dao = registry.get_dao(ctx, "ec2", "instances")
"""

from __future__ import annotations

import threading

from .registry import Descriptor, Entry, Registry, RendererFactory
from .wrapper import (
    PaginatedDAOWrapper,
    RegionalDAOWrapper,
    new_paginated_wrapper,
    new_regional_wrapper,
    strip_region_prefix,
)

__all__: list[str] = [
    "Descriptor",
    "Entry",
    "Registry",
    "RendererFactory",
    "RegionalDAOWrapper",
    "PaginatedDAOWrapper",
    "new_regional_wrapper",
    "new_paginated_wrapper",
    "strip_region_prefix",
    "get_registry",
    "reset_registry",
]

_global_registry: Registry | None = None
_init_lock = threading.Lock()


def get_registry() -> Registry:
    """프로세스 전역 레지스트리 반환 (최초 호출 시 구성 후 고정)"""
    global _global_registry

    registry = _global_registry
    if registry is not None:
        return registry

    with _init_lock:
        if _global_registry is None:
            from plugins import bootstrap

            _global_registry = bootstrap(Registry())
        return _global_registry


def reset_registry() -> None:
    """전역 레지스트리 초기화 (테스트용)"""
    global _global_registry
    with _init_lock:
        _global_registry = None
